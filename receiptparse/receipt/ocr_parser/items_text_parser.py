"""Text-line based receipt item extraction."""

import logging
from collections import deque
from collections.abc import Callable, Iterable
from decimal import Decimal

from receiptparse.domain.receipt import Line, PendingDiscount, PendingItem, PendingPrice, RawItem, round_cents

from .line_classifier import ClassifiedLine, LineKind, classify_line

logger = logging.getLogger(__name__)


class ItemExtractor:
    """
    Pair item lines with price lines in a single pass over a receipt.

    Warehouse receipts flatten a two-column layout into lines, so an item name
    and its price are not always adjacent. Item-only lines and price-only lines
    are queued and paired first-in-first-out when a block ends (a new item after
    prices, a block-clearing line, or end of input). A single pending item with
    a single pending price resolves immediately.

    Discount lines ("8.00-A") modify the first pending price when there is one,
    wait for the next price when only items are pending, and otherwise reduce
    the most recently emitted item.

    A price seen while no item is pending is held as the orphan price. It
    resolves a lone pending item when an item line with an inline price
    arrives, or at end of input.

    One instance parses one receipt; create a new one per call.
    """

    def __init__(self) -> None:
        self._pending_items: deque[PendingItem] = deque()
        self._pending_prices: deque[PendingPrice] = deque()
        self._pending_discounts: deque[PendingDiscount] = deque()
        self._discounts_by_price_order: dict[int, Decimal] = {}
        self._orphan_price: PendingPrice | None = None
        self._raw_items: list[RawItem] = []
        self._handlers: dict[LineKind, Callable[[ClassifiedLine, int], None]] = {
            LineKind.SKIP_RETAIN: self._on_skip_retain,
            LineKind.SKIP_CLEAR: self._on_skip_clear,
            LineKind.DISCOUNT: self._on_discount,
            LineKind.PRICE: self._on_price,
            LineKind.ITEM_WITH_PRICE: self._on_item_with_price,
            LineKind.ITEM: self._on_item,
            LineKind.UNRECOGNIZED: self._on_unrecognized,
        }

    def feed(self, classified: ClassifiedLine, order: int) -> None:
        """Apply one classified line to the extraction state."""
        self._handlers[classified.kind](classified, order)

    def finish(self) -> list[RawItem]:
        """Resolve whatever is still pending and return the raw items in emission order."""
        self._match_pending()
        while self._pending_items and self._orphan_price is not None:
            self._resolve_with_orphan()
        if self._pending_items:
            logger.debug("Dropping %d pending item(s) without a price", len(self._pending_items))
            self._pending_items.clear()
        return self._raw_items

    # --- transitions ---

    def _on_skip_retain(self, classified: ClassifiedLine, order: int) -> None:
        # Pending queues survive barcodes and section markers.
        if classified.discount is not None:
            self._on_discount(classified, order)

    def _on_skip_clear(self, _classified: ClassifiedLine, _order: int) -> None:
        self._match_pending()
        if self._pending_items or self._pending_prices:
            logger.debug(
                "Block boundary dropped %d item(s) and %d price(s)",
                len(self._pending_items),
                len(self._pending_prices),
            )
        # Buffered discounts survive; the next full match applies them.
        self._pending_items.clear()
        self._pending_prices.clear()

    def _on_discount(self, classified: ClassifiedLine, order: int) -> None:
        amount = classified.discount
        assert amount is not None
        if self._pending_prices:
            price_order = self._pending_prices[0].order
            self._discounts_by_price_order[price_order] = (
                self._discounts_by_price_order.get(price_order, Decimal("0")) + amount
            )
        elif self._pending_items:
            self._pending_discounts.append(PendingDiscount(amount=amount, order=order))
        elif self._raw_items:
            self._raw_items[-1].apply_discount(amount)
        else:
            logger.debug("Discount %s on line %d has no item to apply to", amount, order)

    def _on_price(self, classified: ClassifiedLine, order: int) -> None:
        price = classified.price
        assert price is not None
        if not self._pending_items:
            self._orphan_price = PendingPrice(price=price, order=order)
            return
        self._pending_prices.append(PendingPrice(price=price, order=order))
        if len(self._pending_items) == 1 and len(self._pending_prices) == 1:
            self._match_pending()

    def _on_item_with_price(self, classified: ClassifiedLine, order: int) -> None:
        price = classified.price
        assert price is not None
        if len(self._pending_items) == 1 and self._orphan_price is not None:
            self._resolve_with_orphan()
        self._emit(classified.item_number, classified.name, price, Decimal("0"), order)

    def _on_item(self, classified: ClassifiedLine, order: int) -> None:
        if self._pending_items and self._pending_prices:
            self._match_pending()
        self._pending_items.append(PendingItem(item_number=classified.item_number, name=classified.name, order=order))

    def _on_unrecognized(self, _classified: ClassifiedLine, _order: int) -> None:
        pass

    # --- matching ---

    def _match_pending(self) -> None:
        """Pair pending items with pending prices in arrival order."""
        if not self._pending_items or not self._pending_prices:
            return

        if self._pending_discounts:
            price_order = self._pending_prices[0].order
            buffered = sum((d.amount for d in self._pending_discounts), Decimal("0"))
            self._discounts_by_price_order[price_order] = (
                self._discounts_by_price_order.get(price_order, Decimal("0")) + buffered
            )
            self._pending_discounts.clear()

        while self._pending_items and self._pending_prices:
            item = self._pending_items.popleft()
            price = self._pending_prices.popleft()
            discount = self._discounts_by_price_order.pop(price.order, Decimal("0"))
            self._emit(item.item_number, item.name, price.price, discount, item.order)

    def _resolve_with_orphan(self) -> None:
        assert self._orphan_price is not None
        item = self._pending_items.popleft()
        self._emit(item.item_number, item.name, self._orphan_price.price, Decimal("0"), item.order)
        self._orphan_price = None

    def _emit(self, item_number: str | None, name: str, price: Decimal, discount: Decimal, order: int) -> None:
        discount = round_cents(discount)
        raw_item = RawItem(
            item_number=item_number,
            name=name,
            unit_price=price,
            discount=discount,
            total_price=round_cents(price - discount),
            order=order,
        )
        logger.debug("Item %s %r at %s (discount %s)", item_number, name, price, discount)
        self._raw_items.append(raw_item)


def _extract_items(lines: Iterable[Line]) -> list[RawItem]:
    """
    Extract raw (unmerged) line items from receipt lines.

    Args:
        lines: Trimmed, non-empty receipt lines with their receipt order

    Returns:
        One RawItem per purchased unit, in emission order
    """
    extractor = ItemExtractor()
    for line in lines:
        extractor.feed(classify_line(line.text), line.order)
    return extractor.finish()
