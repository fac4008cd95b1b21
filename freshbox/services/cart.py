# freshbox/services/cart.py
"""
Cart accumulator for one box-customization session.

The cart is a plain value: the product page builds it, hands it to the
checkout step through ``to_dict()``/``from_dict()``, and the checkout step
turns it into submission line items with ``to_order_items()``. Nothing here
touches the database.
"""

from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, Iterable, List, Optional

from freshbox.schemas.order import OrderItemCreate

CENT = Decimal("0.01")


def round_money(value: Decimal) -> Decimal:
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def line_total(quantity, unit_price) -> Decimal:
    return Decimal(quantity) * Decimal(unit_price)


def order_total(lines: Iterable) -> Decimal:
    """Sum of quantity x unit price over submission lines, to two places."""
    return round_money(sum((line_total(line.quantity, line.unit_price) for line in lines), Decimal("0")))


@dataclass(frozen=True)
class CartProduct:
    """Catalog fields the cart needs, captured when the item is added."""

    id: int
    name: str
    price: Decimal
    unit: str = ""

    @classmethod
    def from_product(cls, product) -> "CartProduct":
        # Accepts an ORM Product or a ProductOut schema
        return cls(id=product.id, name=product.name, price=Decimal(product.price), unit=product.unit or "")


@dataclass
class CartItem:
    product: CartProduct
    quantity: int

    @property
    def line_total(self) -> Decimal:
        return line_total(self.quantity, self.product.price)


@dataclass
class Cart:
    box_type_id: Optional[int] = None
    items: List[CartItem] = field(default_factory=list)

    def _find(self, product_id: int) -> Optional[CartItem]:
        for item in self.items:
            if item.product.id == product_id:
                return item
        return None

    @staticmethod
    def _check_integer(quantity) -> None:
        if isinstance(quantity, bool) or not isinstance(quantity, int):
            raise ValueError(f"Quantity must be an integer, got: {quantity!r}")

    def add_item(self, product, quantity: int) -> CartItem:
        """Append a product, or grow the quantity of one already in the cart."""
        self._check_integer(quantity)
        if quantity < 1:
            raise ValueError(f"Quantity must be a positive integer, got: {quantity!r}")

        if not isinstance(product, CartProduct):
            product = CartProduct.from_product(product)

        existing = self._find(product.id)
        if existing:
            existing.quantity += quantity
            return existing

        item = CartItem(product=product, quantity=quantity)
        self.items.append(item)
        return item

    def update_quantity(self, product_id: int, quantity: int) -> None:
        """Set a quantity directly; zero or below drops the item."""
        self._check_integer(quantity)
        if quantity <= 0:
            self.remove_item(product_id)
            return
        item = self._find(product_id)
        if item:
            item.quantity = quantity

    def remove_item(self, product_id: int) -> None:
        self.items = [item for item in self.items if item.product.id != product_id]

    def clear(self) -> None:
        self.items = []

    def reset_box(self, box_type_id: Optional[int] = None) -> None:
        """Changing the box starts a new session."""
        self.box_type_id = box_type_id
        self.clear()

    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self.items)

    def is_empty(self) -> bool:
        return not self.items

    def total(self) -> Decimal:
        # The box price is never part of the total
        return round_money(sum((item.line_total for item in self.items), Decimal("0")))

    def to_order_items(self) -> List[OrderItemCreate]:
        return [
            OrderItemCreate(
                product_id=item.product.id,
                quantity=Decimal(item.quantity),
                unit_price=item.product.price,
            )
            for item in self.items
        ]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "boxTypeId": self.box_type_id,
            "items": [
                {
                    "product": {
                        "id": item.product.id,
                        "name": item.product.name,
                        "price": f"{item.product.price:.2f}",
                        "unit": item.product.unit,
                    },
                    "quantity": item.quantity,
                }
                for item in self.items
            ],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Cart":
        cart = cls(box_type_id=data.get("boxTypeId"))
        for entry in data.get("items", []):
            product = entry["product"]
            cart.add_item(
                CartProduct(
                    id=int(product["id"]),
                    name=product["name"],
                    price=Decimal(str(product["price"])),
                    unit=product.get("unit", ""),
                ),
                int(entry["quantity"]),
            )
        return cart
