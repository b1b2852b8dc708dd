"""Format ParsedReceiptData as a plain-text review summary."""

from decimal import Decimal

from receiptparse.domain.receipt import ParsedReceiptData


def _format_rows_aligned(
    rows: list[tuple[str, str, str | None]],
    indent: str = "  ",
) -> list[str]:
    """
    Format item rows with aligned names, amounts and comments.

    Args:
        rows: List of (name, amount, comment_or_none) tuples
        indent: Indentation prefix for each line

    Returns:
        List of formatted lines
    """
    if not rows:
        return []

    max_name_len = max(len(name) for name, _, _ in rows)
    max_amount_len = max(len(amount) for _, amount, _ in rows)

    lines = []
    for name, amount, comment in rows:
        base = f"{indent}{name.ljust(max_name_len)}  {amount.rjust(max_amount_len)}"
        if comment:
            lines.append(f"{base}  ; {comment}")
        else:
            lines.append(base)
    return lines


def _format_address(receipt: ParsedReceiptData) -> str:
    city_line = " ".join(part for part in (receipt.store_state, receipt.store_zip) if part)
    if receipt.store_city:
        city_line = f"{receipt.store_city}, {city_line}" if city_line else receipt.store_city
    return ", ".join(part for part in (receipt.store_location, city_line) if part)


def format_parsed_receipt(receipt: ParsedReceiptData) -> str:
    """
    Format a parsed receipt for human review.

    Items are listed in receipt order with quantity and discount comments.
    A mismatch between the item sum and the detected total is flagged.
    """
    lines = [f"; @store: {receipt.store_name or 'UNKNOWN'}"]
    address = _format_address(receipt)
    if address:
        lines.append(f"; @address: {address}")
    if receipt.purchase_date_is_placeholder:
        lines.append("; @date: UNKNOWN")
        lines.append(f"; FIXME: unknown date (placeholder used: {receipt.purchase_date.isoformat()})")
    else:
        lines.append(f"; @date: {receipt.purchase_date.isoformat()}")
    lines.append(f"; @total: {receipt.total_amount:.2f}")
    lines.append(f"; @items: {len(receipt.items)}")
    lines.append("")

    rows: list[tuple[str, str, str | None]] = []
    items_total = Decimal("0")
    for item in receipt.items:
        label = f"{item.item_number} {item.name}" if item.item_number else item.name
        notes = []
        if item.quantity > 1:
            notes.append(f"qty {item.quantity} @ {item.unit_price:.2f}")
        if item.discount:
            notes.append(f"discount {item.discount:.2f}")
        rows.append((label, f"{item.total_price:.2f}", ", ".join(notes) or None))
        items_total += item.total_price

    lines.extend(_format_rows_aligned(rows))

    if receipt.items and items_total != receipt.total_amount:
        diff = receipt.total_amount - items_total
        lines.append(f"; FIXME: items sum to {items_total:.2f}, total differs by {diff:.2f}")

    return "\n".join(lines) + "\n"
