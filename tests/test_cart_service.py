"""Tests for the cart aggregator."""

import random

import pytest

from petshop_client.domain.cart import CartItem
from petshop_client.services.cart import CART_STORAGE_KEY, CartService
from tests.conftest import (
    InMemoryKeyValueStore,
    ReadOnlyKeyValueStore,
    make_product,
)


def test_totals_for_two_lines(cart_service: CartService) -> None:
    cart_service.add_item(make_product(1, price=50000), quantity=2)
    cart_service.add_item(make_product(2, price=20000), quantity=1)

    assert cart_service.get_total() == 120000
    assert cart_service.get_item_count() == 2
    assert cart_service.get_total_quantity() == 3


def test_adding_same_product_merges_lines(cart_service: CartService) -> None:
    product = make_product(1)

    cart_service.add_item(product, 2)
    cart_service.add_item(product, 3)

    assert len(cart_service.items) == 1
    assert cart_service.items[0].quantity == 5


def test_item_count_counts_lines_not_units(cart_service: CartService) -> None:
    cart_service.add_item(make_product(1), 4)

    assert cart_service.get_item_count() == 1


@pytest.mark.parametrize("quantity", [0, -1])
def test_update_quantity_below_one_is_a_noop(
    cart_service: CartService, quantity: int
) -> None:
    cart_service.add_item(make_product(1), 3)

    cart_service.update_quantity(1, quantity)

    assert cart_service.items == (CartItem(product=make_product(1), quantity=3),)


def test_update_quantity_sets_value(cart_service: CartService) -> None:
    cart_service.add_item(make_product(1), 3)

    cart_service.update_quantity(1, 7)

    assert cart_service.items[0].quantity == 7


def test_update_and_remove_unknown_product_are_noops(
    cart_service: CartService,
) -> None:
    cart_service.add_item(make_product(1))

    cart_service.update_quantity(99, 4)
    cart_service.remove_item(99)

    assert cart_service.get_item_count() == 1
    assert cart_service.items[0].quantity == 1


def test_add_item_rejects_non_positive_quantity(cart_service: CartService) -> None:
    with pytest.raises(ValueError, match="at least 1"):
        cart_service.add_item(make_product(1), 0)

    assert cart_service.items == ()


def test_remove_item_and_clear(cart_service: CartService) -> None:
    cart_service.add_item(make_product(1))
    cart_service.add_item(make_product(2))

    cart_service.remove_item(1)
    assert [item.product.id for item in cart_service.items] == [2]

    cart_service.clear()
    assert cart_service.items == ()
    assert cart_service.get_total() == 0


def test_total_matches_independent_sum_after_random_operations(
    cart_service: CartService,
) -> None:
    rng = random.Random(7)
    products = [make_product(i, price=rng.randint(1, 50) * 1000) for i in range(1, 6)]

    for _ in range(200):
        product = rng.choice(products)
        action = rng.choice(["add", "update", "remove"])
        if action == "add":
            cart_service.add_item(product, rng.randint(1, 3))
        elif action == "update":
            cart_service.update_quantity(product.id, rng.randint(-1, 5))
        else:
            cart_service.remove_item(product.id)

        expected = sum(item.product.price * item.quantity for item in cart_service.items)
        assert cart_service.get_total() == expected
        assert all(item.quantity >= 1 for item in cart_service.items)
        ids = [item.product.id for item in cart_service.items]
        assert len(ids) == len(set(ids))


def test_cart_survives_restart(store: InMemoryKeyValueStore) -> None:
    first = CartService(store=store)
    first.add_item(make_product(1, price=50000), 2)
    first.add_item(make_product(2, price=20000))

    second = CartService(store=store)
    second.hydrate()

    assert second.get_total() == 120000
    assert second.items[0].product.pet_name == "Cat"


def test_hydrate_skips_malformed_entries(store: InMemoryKeyValueStore) -> None:
    store.set(
        CART_STORAGE_KEY,
        {
            "state": {
                "items": [
                    {"product": make_product(1).to_payload(), "quantity": 2},
                    {"product": make_product(2).to_payload(), "quantity": 0},
                    {"product": {"name": "no id"}, "quantity": 1},
                    {"product": make_product(1).to_payload(), "quantity": 1},
                    "garbage",
                ]
            },
            "version": 0,
        },
    )
    cart = CartService(store=store)

    cart.hydrate()

    assert [(item.product.id, item.quantity) for item in cart.items] == [(1, 2)]


def test_subscribers_see_each_mutation(cart_service: CartService) -> None:
    counts: list[int] = []
    cart_service.subscribe(lambda items: counts.append(len(items)))

    cart_service.add_item(make_product(1))
    cart_service.add_item(make_product(2))
    cart_service.update_quantity(1, 0)
    cart_service.remove_item(1)

    assert counts == [1, 2, 1]


def test_cart_changes_apply_when_cache_write_fails() -> None:
    cart = CartService(store=ReadOnlyKeyValueStore())
    counts: list[int] = []
    cart.subscribe(lambda items: counts.append(len(items)))

    cart.add_item(make_product(1, price=50000), 2)

    assert cart.get_total() == 100000
    assert counts == [1]
