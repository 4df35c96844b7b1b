"""Exact decimal monetary values.

All monetary arithmetic in budgetreport goes through ``DecimalValue``. It wraps
``decimal.Decimal`` and runs every operation in a context wide enough for the
exact result, with ``Inexact`` trapped, so values are never rounded and never
pass through floating point.
"""

import re
from dataclasses import dataclass
from decimal import Context, Decimal, Inexact, InvalidOperation, Rounded
from functools import total_ordering
from typing import Iterable, Union

from budgetreport.domain.errors import InvalidDecimalFormat

_DECIMAL_TEXT = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)$")
_MIN_PRECISION = 28


def _parse_text(text: str) -> Decimal:
    if not isinstance(text, str):
        raise InvalidDecimalFormat(f"Expected decimal text, got {type(text).__name__}")
    candidate = text.strip()
    if not _DECIMAL_TEXT.match(candidate):
        raise InvalidDecimalFormat(f"Invalid decimal value '{text}'")
    return Decimal(candidate)


def _exact_context(*operands: Decimal) -> Context:
    """Build a context that can hold the exact sum or difference of operands."""
    highest = max(d.adjusted() for d in operands)
    lowest = min(d.as_tuple().exponent for d in operands)
    precision = max(_MIN_PRECISION, highest - lowest + 2)
    return Context(prec=precision, traps=[Inexact, Rounded, InvalidOperation])


@total_ordering
class DecimalValue:
    """Immutable exact decimal amount."""

    __slots__ = ("_value",)

    def __init__(self, value: Union[str, "DecimalValue", Decimal, int] = "0"):
        if isinstance(value, DecimalValue):
            decimal_value = value._value
        elif isinstance(value, str):
            decimal_value = _parse_text(value)
        elif isinstance(value, bool) or isinstance(value, float):
            raise TypeError(
                f"DecimalValue cannot be built from {type(value).__name__}; use decimal text"
            )
        elif isinstance(value, (Decimal, int)):
            decimal_value = Decimal(value)
            if not decimal_value.is_finite():
                raise InvalidDecimalFormat(f"Invalid decimal value '{value}'")
        else:
            raise TypeError(f"Unsupported type for DecimalValue: {type(value).__name__}")
        object.__setattr__(self, "_value", decimal_value)

    def __setattr__(self, name, value):
        raise AttributeError("DecimalValue is immutable")

    @classmethod
    def from_text(cls, text: str) -> "DecimalValue":
        """Parse decimal text such as ``"-12.50"``.

        Raises:
            InvalidDecimalFormat: If the text is empty or not a plain decimal
        """
        return cls(_parse_text(text))

    @classmethod
    def zero(cls) -> "DecimalValue":
        return cls(Decimal("0"))

    @classmethod
    def sum(cls, values: Iterable["DecimalValue"]) -> "DecimalValue":
        """Exact sum of values (zero for an empty iterable)."""
        total = cls.zero()
        for value in values:
            total = total.add(value)
        return total

    @property
    def decimal(self) -> Decimal:
        """Underlying ``Decimal``, for formatting."""
        return self._value

    def to_text(self) -> str:
        """Canonical plain text, e.g. ``"20.00"``. Never uses exponent notation."""
        return format(self._value, "f")

    def add(self, other: "DecimalValue") -> "DecimalValue":
        other = _coerce(other)
        context = _exact_context(self._value, other._value)
        return DecimalValue(context.add(self._value, other._value))

    def subtract(self, other: "DecimalValue") -> "DecimalValue":
        other = _coerce(other)
        context = _exact_context(self._value, other._value)
        return DecimalValue(context.subtract(self._value, other._value))

    def negate(self) -> "DecimalValue":
        return DecimalValue(_exact_context(self._value).minus(self._value))

    def is_zero(self) -> bool:
        return self._value.is_zero()

    def __add__(self, other):
        if not isinstance(other, DecimalValue):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other):
        if not isinstance(other, DecimalValue):
            return NotImplemented
        return self.subtract(other)

    def __neg__(self):
        return self.negate()

    def __eq__(self, other):
        if not isinstance(other, DecimalValue):
            return NotImplemented
        return self._value == other._value

    def __lt__(self, other):
        if not isinstance(other, DecimalValue):
            return NotImplemented
        return self._value < other._value

    def __hash__(self):
        return hash(self._value)

    def __str__(self):
        return self.to_text()

    def __repr__(self):
        return f"DecimalValue('{self.to_text()}')"


def _coerce(value) -> DecimalValue:
    if isinstance(value, DecimalValue):
        return value
    raise TypeError(f"Expected DecimalValue, got {type(value).__name__}")


@dataclass(frozen=True)
class DecimalValueChange:
    """Old/new/diff triple with ``diff == new - old``.

    ``DecimalValueChange.between(old, new)`` is the only entry point for new
    changes and ``deserialize`` the only one for stored ones; both derive or
    check ``diff``. The dataclass constructor is not part of the public API.
    Calling it anyway still goes through ``__post_init__``, which rejects an
    inconsistent ``diff`` with InvalidDecimalFormat.
    """

    old: DecimalValue
    new: DecimalValue
    diff: DecimalValue

    def __post_init__(self):
        if self.diff != self.new.subtract(self.old):
            raise InvalidDecimalFormat(
                f"Inconsistent change: diff {self.diff} != {self.new} - {self.old}"
            )

    @classmethod
    def between(cls, old: DecimalValue, new: DecimalValue) -> "DecimalValueChange":
        """Create the change from ``old`` to ``new``."""
        return cls(old=old, new=new, diff=new.subtract(old))

    def serialize(self) -> dict[str, str]:
        return {
            "old": self.old.to_text(),
            "new": self.new.to_text(),
            "diff": self.diff.to_text(),
        }

    @classmethod
    def deserialize(cls, data: dict[str, str]) -> "DecimalValueChange":
        """Rebuild a change from ``serialize`` output.

        Raises:
            InvalidDecimalFormat: If a member is missing or malformed, or the
                stored diff does not match ``new - old``
        """
        try:
            old_text, new_text, diff_text = data["old"], data["new"], data["diff"]
        except KeyError as e:
            raise InvalidDecimalFormat(f"Missing change member {e}") from e
        return cls(
            old=DecimalValue.from_text(old_text),
            new=DecimalValue.from_text(new_text),
            diff=DecimalValue.from_text(diff_text),
        )
