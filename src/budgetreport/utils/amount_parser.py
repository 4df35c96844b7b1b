"""Amount parsing utilities."""

import re

from budgetreport.domain.errors import InvalidDecimalFormat, ValidationError
from budgetreport.domain.value import DecimalValue

_DIGITS = re.compile(r"^\d+$")
_GROUPED = {
    ",": re.compile(r"^\d{1,3}(?:,\d{3})+$"),
    ".": re.compile(r"^\d{1,3}(?:\.\d{3})+$"),
}
_DECIMAL_COMMA = re.compile(r"^\d*,\d{1,2}$")


def _split_number(text: str) -> tuple[str, str] | None:
    """Split an unsigned number into integer digits and fraction digits.

    The last separator is the decimal mark when both ``,`` and ``.`` occur;
    the other one must then group the integer part by thousands. A lone
    comma followed by one or two digits is a decimal comma, otherwise commas
    only group thousands. Several dots only group thousands, a single dot is
    the decimal point.

    Returns:
        (integer, fraction) or None if the separators are ambiguous
    """
    has_comma = "," in text
    has_dot = "." in text

    if has_comma and has_dot:
        decimal_mark = "," if text.rfind(",") > text.rfind(".") else "."
        grouping = "." if decimal_mark == "," else ","
        integer, _, fraction = text.rpartition(decimal_mark)
        if decimal_mark in integer or not _GROUPED[grouping].match(integer):
            return None
        return integer.replace(grouping, ""), fraction

    if has_comma:
        if _DECIMAL_COMMA.match(text):
            integer, _, fraction = text.partition(",")
            return integer, fraction
        if _GROUPED[","].match(text):
            return text.replace(",", ""), ""
        return None

    if text.count(".") > 1:
        if _GROUPED["."].match(text):
            return text.replace(".", ""), ""
        return None

    integer, _, fraction = text.partition(".")
    return integer, fraction


def parse_amount(amount_str: str) -> DecimalValue:
    """Parse a user-entered amount into an exact DecimalValue.

    Handles various formats:
    - "123.45", "-123.45"
    - "€123.45", "123.45 €"
    - "1,234.56" (English grouping)
    - "12,50", "1.234,56" (German decimal comma)
    - "(123.45)" (negative in parentheses)

    Args:
        amount_str: Amount string

    Returns:
        DecimalValue amount

    Raises:
        ValidationError: If amount string cannot be parsed or mixes
            separators ambiguously (e.g. "1,2,3" or "1.23,45")
    """
    if not amount_str or not amount_str.strip():
        raise ValidationError("Empty amount string")

    # Remove whitespace
    text = amount_str.strip()

    # Handle parentheses notation (negative)
    is_negative = False
    if text.startswith("(") and text.endswith(")"):
        is_negative = True
        text = text[1:-1]

    # Remove currency symbols and whitespace
    text = re.sub(r"[$€£¥\s]", "", text)

    sign = ""
    if text[:1] in ("+", "-"):
        sign, text = text[0], text[1:]

    parts = _split_number(text)
    if parts is None:
        raise ValidationError(f"Ambiguous amount '{amount_str}'")
    integer, fraction = parts
    if (integer and not _DIGITS.match(integer)) or (fraction and not _DIGITS.match(fraction)):
        raise ValidationError(f"Could not parse amount '{amount_str}'")

    normalized = f"{sign}{integer}.{fraction}" if fraction else f"{sign}{integer}"
    try:
        amount = DecimalValue.from_text(normalized)
    except InvalidDecimalFormat as e:
        raise ValidationError(f"Could not parse amount '{amount_str}'") from e

    return amount.negate() if is_negative else amount
