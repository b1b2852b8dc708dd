"""Data models for receipt text parsing."""

from dataclasses import dataclass, field
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

CENT = Decimal("0.01")


def round_cents(amount: Decimal) -> Decimal:
    """Round a money amount to cents (half-up)."""
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class Line:
    """A trimmed, non-empty receipt line and its position among non-empty lines."""

    text: str
    order: int


@dataclass
class PendingItem:
    """An item name seen without a price yet."""

    item_number: str | None
    name: str
    order: int


@dataclass
class PendingPrice:
    """A standalone price waiting for an item."""

    price: Decimal
    order: int


@dataclass
class PendingDiscount:
    """A discount seen before any price it could modify."""

    amount: Decimal
    order: int


@dataclass
class RawItem:
    """One occurrence of a purchased item, before duplicate merging."""

    item_number: str | None
    name: str
    unit_price: Decimal
    discount: Decimal
    total_price: Decimal
    order: int
    quantity: int = 1

    def apply_discount(self, amount: Decimal) -> None:
        self.discount = round_cents(self.discount + amount)
        self.total_price = round_cents(self.unit_price - self.discount)


@dataclass
class ParsedItem:
    """A line item after merging repeated purchases of the same product."""

    item_number: str | None
    name: str
    unit_price: Decimal
    quantity: int
    discount: Decimal
    total_price: Decimal
    order: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "itemNumber": self.item_number,
            "name": self.name,
            "unitPrice": float(self.unit_price),
            "quantity": self.quantity,
            "discount": float(self.discount),
            "totalPrice": float(self.total_price),
            "itemOrder": self.order,
        }


@dataclass
class StoreAddress:
    """Postal address found in the receipt header."""

    location: str = ""
    city: str = ""
    state: str = ""
    zip_code: str = ""


@dataclass
class ParsedReceiptData:
    """Structured result of parsing one receipt's OCR text."""

    purchase_date: date
    store_name: str = ""
    store_location: str = ""
    store_city: str = ""
    store_state: str = ""
    store_zip: str = ""
    total_amount: Decimal = Decimal("0.00")
    items: list[ParsedItem] = field(default_factory=list)
    # True when no date was found and purchase_date is the parse-time date.
    purchase_date_is_placeholder: bool = False
    raw_text: str = ""  # Original OCR text for reference

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-ready mapping using the upload layer's field names."""
        return {
            "storeName": self.store_name,
            "storeLocation": self.store_location,
            "storeCity": self.store_city,
            "storeState": self.store_state,
            "storeZip": self.store_zip,
            "purchaseDate": self.purchase_date.isoformat(),
            "purchaseDateIsPlaceholder": self.purchase_date_is_placeholder,
            "totalAmount": float(self.total_amount),
            "items": [item.to_dict() for item in self.items],
        }
