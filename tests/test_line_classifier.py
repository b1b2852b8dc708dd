from decimal import Decimal

from receiptparse.receipt.ocr_parser.line_classifier import LineKind, classify_line


def test_item_line_with_inline_price_and_tax_code() -> None:
    classified = classify_line("1234567 KIRKLAND WATER 4.99 A")

    assert classified.kind is LineKind.ITEM_WITH_PRICE
    assert classified.item_number == "1234567"
    assert classified.name == "KIRKLAND WATER"
    assert classified.price == Decimal("4.99")
    assert classified.tax_code == "A"


def test_item_only_line_with_leading_tax_letter() -> None:
    classified = classify_line("E 1268174 PEDIASURE OG")

    assert classified.kind is LineKind.ITEM
    assert classified.item_number == "1268174"
    assert classified.name == "PEDIASURE OG"


def test_item_number_with_trailing_letter() -> None:
    classified = classify_line("10251B WOODFORD RSV")

    assert classified.kind is LineKind.ITEM
    assert classified.item_number == "10251B"


def test_misread_leading_eight_is_restored() -> None:
    assert classify_line("$123456 PAPER TOWEL").item_number == "8123456"
    assert classify_line("S123456 PAPER TOWEL").item_number == "8123456"


def test_hyphenated_size_is_not_a_discount() -> None:
    classified = classify_line("1935001 HUG PU 3T-4T")

    assert classified.kind is LineKind.ITEM
    assert classified.name == "HUG PU 3T-4T"


def test_price_line() -> None:
    classified = classify_line("39.99 A")

    assert classified.kind is LineKind.PRICE
    assert classified.price == Decimal("39.99")
    assert classified.tax_code == "A"


def test_discount_lines() -> None:
    assert classify_line("8.00-A").discount == Decimal("8.00")
    assert classify_line("5.00-").discount == Decimal("5.00")
    assert classify_line("8.00-A").kind is LineKind.DISCOUNT


def test_discount_without_decimal_point_is_read_as_cents() -> None:
    classified = classify_line("800-A")

    assert classified.kind is LineKind.DISCOUNT
    assert classified.discount == Decimal("8.00")


def test_barcode_line_keeps_context_and_carries_glued_discount() -> None:
    plain = classify_line("0000366341 / 1935001")
    glued = classify_line("0000366341 / 1935001 8.00-A")

    assert plain.kind is LineKind.SKIP_RETAIN
    assert plain.discount is None
    assert glued.kind is LineKind.SKIP_RETAIN
    assert glued.discount == Decimal("8.00")


def test_section_markers_and_stray_codes_keep_context() -> None:
    for line in ["SUBTOTAL", "TAX", "**** TOTAL", "E", "H", "XXXXXXXXXXXX5089", "AID: A0000000031010"]:
        assert classify_line(line).kind is LineKind.SKIP_RETAIN, line


def test_block_ending_lines_clear_context() -> None:
    for line in [
        "COSTCO",
        "WHOLESALE",
        "TARGET",
        "KROGER",
        "CHANGE",
        "VISA",
        "4K Member 111855127510",
        "APPROVED",
        "VISA XXXX1234",
        "Thank You!",
        "#388",
        "Bloomingdale #371",
        "1901 West 22nd Street",
        "505 West Army Trail Road",
        "Oak Brook, IL 60523",
        "12/09/2025 13:35 388 11 109 630",
        "A 7.5% Tax",
        "TOTAL NUMBER OF ITEMS SOLD - 11",
        "OP#: 630 Name: Ken S.",
    ]:
        assert classify_line(line).kind is LineKind.SKIP_CLEAR, line


def test_uppercase_item_names_ending_in_street_words_stay_items() -> None:
    assert classify_line("1234567 MILKY WAY").kind is LineKind.ITEM
    assert classify_line("1234567 USB DRIVE 12.99 A").kind is LineKind.ITEM_WITH_PRICE


def test_out_of_range_values_are_unrecognized() -> None:
    assert classify_line("0.00").kind is LineKind.UNRECOGNIZED
    assert classify_line("10000.00").kind is LineKind.UNRECOGNIZED
    assert classify_line("1234567 BIG THING 12000.00 A").kind is LineKind.UNRECOGNIZED


def test_too_short_name_is_unrecognized() -> None:
    assert classify_line("1234567 X").kind is LineKind.UNRECOGNIZED
    assert classify_line("1234567 X 4.99").kind is LineKind.UNRECOGNIZED


def test_free_text_is_unrecognized() -> None:
    assert classify_line("random text without any receipt data").kind is LineKind.UNRECOGNIZED
    assert classify_line("").kind is LineKind.UNRECOGNIZED


def test_lone_tokens_only_keep_context_when_not_a_block_ending_word() -> None:
    assert classify_line("Seq").kind is LineKind.SKIP_RETAIN
    assert classify_line("TAX").kind is LineKind.SKIP_RETAIN
    assert classify_line("COSTCO").kind is LineKind.SKIP_CLEAR
    assert classify_line("Amex").kind is LineKind.SKIP_CLEAR
