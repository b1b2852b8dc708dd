"""Merge repeated purchases of the same product into single line items."""

import re
from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal

from receiptparse.domain.receipt import ParsedItem, RawItem, round_cents


@dataclass
class _MergeGroup:
    first: RawItem
    quantity: int
    discount: Decimal
    total_price: Decimal
    order: int


def merge_key(item: RawItem) -> str:
    """
    Return the identity used to recognise repeat purchases.

    The item number alone when present, so the same product recorded at a
    different price (a discount applied to one unit) still merges. Otherwise
    the normalised name plus the unit price.
    """
    if item.item_number:
        return item.item_number
    normalized_name = re.sub(r"\s+", " ", item.name.strip().lower())
    return f"{normalized_name}|{item.unit_price:.2f}"


def merge_duplicate_items(raw_items: Iterable[RawItem]) -> list[ParsedItem]:
    """
    Collapse repeated raw items into ParsedItems with quantities.

    Items with a non-positive unit price are dropped before grouping. Each
    group keeps the name and item number of its earliest occurrence, sums the
    discounts and totals, and recomputes the unit price from them. The result
    is sorted by first-occurrence order.
    """
    groups: dict[str, _MergeGroup] = {}
    for item in raw_items:
        if not isinstance(item.unit_price, Decimal) or not item.unit_price.is_finite() or item.unit_price <= 0:
            continue
        key = merge_key(item)
        group = groups.get(key)
        if group is None:
            groups[key] = _MergeGroup(
                first=item,
                quantity=1,
                discount=item.discount,
                total_price=item.total_price,
                order=item.order,
            )
            continue
        group.quantity += 1
        group.discount += item.discount
        group.total_price += item.total_price
        if item.order < group.order:
            group.first = item
            group.order = item.order

    merged = [
        ParsedItem(
            item_number=group.first.item_number,
            name=group.first.name,
            unit_price=round_cents((group.total_price + group.discount) / group.quantity),
            quantity=group.quantity,
            discount=round_cents(group.discount),
            total_price=round_cents(group.total_price),
            order=group.order,
        )
        for group in groups.values()
    ]
    merged.sort(key=lambda item: item.order)
    return merged
