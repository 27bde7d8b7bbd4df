"""Store: dispatch, subscription and token issuing."""

from storefront.core.cart_state import ItemAdded
from storefront.core.domain_types import OperationKind
from storefront.core.request_lifecycle import RequestStarted
from storefront.core.session_state import LoggedOut
from storefront.schemas.cart import CartItem


def test_dispatch_replaces_state(store):
    before = store.state
    after = store.dispatch(ItemAdded(CartItem(product_id=1)))
    assert after is store.state
    assert after is not before
    assert len(before.cart.items) == 0


def test_subscribers_receive_new_and_previous_state(store):
    seen = []
    store.subscribe(lambda new, old: seen.append((new, old)))
    before = store.state
    store.dispatch(ItemAdded(CartItem(product_id=1)))
    assert seen == [(store.state, before)]


def test_no_op_dispatch_does_not_notify(store):
    seen = []
    store.subscribe(lambda new, old: seen.append(new))
    store.dispatch(LoggedOut())
    assert seen == []


def test_unsubscribe_stops_notifications(store):
    seen = []
    unsubscribe = store.subscribe(lambda new, old: seen.append(new))
    unsubscribe()
    unsubscribe()
    store.dispatch(ItemAdded(CartItem(product_id=1)))
    assert seen == []


def test_failing_subscriber_does_not_block_others(store):
    seen = []

    def broken(new, old):
        raise RuntimeError("listener bug")

    store.subscribe(broken)
    store.subscribe(lambda new, old: seen.append(new))
    store.dispatch(ItemAdded(CartItem(product_id=1)))
    assert len(seen) == 1
    assert len(store.state.cart.items) == 1


def test_tokens_strictly_increase(store):
    tokens = [store.next_token() for _ in range(3)]
    assert tokens == sorted(set(tokens))
    assert tokens[0] >= 1


def test_is_latest_tracks_last_started_token(store):
    first, second = store.next_token(), store.next_token()
    store.dispatch(RequestStarted(OperationKind.FETCH_PRODUCTS, first))
    store.dispatch(RequestStarted(OperationKind.FETCH_PRODUCTS, second))
    assert store.is_latest(OperationKind.FETCH_PRODUCTS, second)
    assert not store.is_latest(OperationKind.FETCH_PRODUCTS, first)
