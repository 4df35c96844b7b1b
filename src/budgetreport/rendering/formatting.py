"""Display formatting for rendered reports."""

from datetime import date
from decimal import Context, Decimal, ROUND_HALF_UP

from budgetreport.domain.value import DecimalValue

CENT = Decimal("0.01")


def format_currency(value: DecimalValue, symbol: str = "€") -> str:
    """Format an amount German style, e.g. ``1.234,56 €``.

    Rounds half up to cents for display only; works on the exact decimal and
    never converts to float.
    """
    if not isinstance(value, DecimalValue):
        value = DecimalValue(value)
    amount = value.decimal
    context = Context(prec=max(28, amount.adjusted() + 4), rounding=ROUND_HALF_UP)
    rounded = amount.quantize(CENT, context=context)
    if rounded.is_zero():
        rounded = rounded.copy_abs()
    text = format(rounded, ",.2f")
    # 1,234.56 -> 1.234,56
    text = text.replace(",", "_").replace(".", ",").replace("_", ".")
    return f"{text} {symbol}" if symbol else text


def format_date(value: date) -> str:
    """Format a date as ``DD.MM.YYYY``."""
    return value.strftime("%d.%m.%Y")
