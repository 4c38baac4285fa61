"""Local shopping cart with derived totals."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from petshop_client.adapters.json_file_store import KeyValueStore
from petshop_client.domain.cart import CartItem
from petshop_client.domain.catalog import Product

CART_STORAGE_KEY = "cart-storage"
_STORAGE_VERSION = 0

_logger = logging.getLogger(__name__)

CartListener = Callable[[tuple[CartItem, ...]], None]


@dataclass
class CartService:
    """Cart line items keyed by product id; never reconciled with the server."""

    store: KeyValueStore
    _items: list[CartItem] = field(default_factory=list, init=False)
    _listeners: list[CartListener] = field(default_factory=list, init=False)

    @property
    def items(self) -> tuple[CartItem, ...]:
        return tuple(self._items)

    def hydrate(self) -> None:
        """Restore line items persisted by a previous run."""
        cached = self.store.get(CART_STORAGE_KEY)
        if not isinstance(cached, dict) or not isinstance(cached.get("state"), dict):
            return
        raw_items = cached["state"].get("items")
        if not isinstance(raw_items, list):
            return
        restored: list[CartItem] = []
        seen: set[int] = set()
        for raw in raw_items:
            item = _item_from_payload(raw)
            if item is None or item.product.id in seen:
                _logger.warning("Skipping malformed cart entry")
                continue
            seen.add(item.product.id)
            restored.append(item)
        self._items = restored
        self._notify()

    def subscribe(self, listener: CartListener) -> Callable[[], None]:
        """Register a listener for cart changes and return an unsubscriber."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def add_item(self, product: Product, quantity: int = 1) -> None:
        """Add a product, merging into its existing line if present."""
        if quantity < 1:
            raise ValueError("Quantity must be at least 1")
        index = self._index_of(product.id)
        if index is None:
            self._items.append(CartItem(product=product, quantity=quantity))
        else:
            current = self._items[index]
            self._items[index] = CartItem(
                product=current.product, quantity=current.quantity + quantity
            )
        self._commit()

    def update_quantity(self, product_id: int, quantity: int) -> None:
        """Set a line's quantity; values below 1 are ignored, use remove_item."""
        if quantity < 1:
            return
        index = self._index_of(product_id)
        if index is None:
            return
        self._items[index] = CartItem(
            product=self._items[index].product, quantity=quantity
        )
        self._commit()

    def remove_item(self, product_id: int) -> None:
        """Delete a line if present."""
        index = self._index_of(product_id)
        if index is None:
            return
        del self._items[index]
        self._commit()

    def clear(self) -> None:
        """Remove every line."""
        self._items = []
        self._commit()

    def get_item_count(self) -> int:
        """Return the number of distinct lines, not units."""
        return len(self._items)

    def get_total_quantity(self) -> int:
        """Return the number of units across all lines."""
        return sum(item.quantity for item in self._items)

    def get_total(self) -> float:
        """Return the sum of price times quantity, computed fresh."""
        return sum((item.subtotal for item in self._items), 0.0)

    def _index_of(self, product_id: int) -> int | None:
        for index, item in enumerate(self._items):
            if item.product.id == product_id:
                return index
        return None

    def _commit(self) -> None:
        state = {
            "items": [
                {"product": item.product.to_payload(), "quantity": item.quantity}
                for item in self._items
            ]
        }
        try:
            self.store.set(
                CART_STORAGE_KEY, {"state": state, "version": _STORAGE_VERSION}
            )
        except OSError:
            _logger.exception("Could not update the cached cart")
        self._notify()

    def _notify(self) -> None:
        snapshot = self.items
        for listener in list(self._listeners):
            listener(snapshot)


def _item_from_payload(raw: object) -> CartItem | None:
    if not isinstance(raw, dict) or not isinstance(raw.get("product"), dict):
        return None
    quantity = raw.get("quantity")
    if not isinstance(quantity, int) or isinstance(quantity, bool) or quantity < 1:
        return None
    try:
        product = Product.from_payload(raw["product"])
    except (KeyError, TypeError, ValueError):
        return None
    return CartItem(product=product, quantity=quantity)
