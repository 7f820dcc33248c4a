"""Numeric value type — every currency, speed and cost goes through Float.

Keeping arithmetic and formatting in one place means the backing type can be
swapped for an arbitrary-precision one without touching callers.
"""

from __future__ import annotations

import math
from functools import total_ordering
from typing import Union

from idlebars.data.balance import BALANCE

Number = Union["Float", int, float]


def _raw(value: Number) -> float:
    if isinstance(value, Float):
        return value.value
    return float(value)


@total_ordering
class Float:
    """A double-precision quantity with arithmetic, powers and ordering."""

    __slots__ = ("value",)

    def __init__(self, value: Number = 0.0) -> None:
        self.value = _raw(value)

    @classmethod
    def from_level(cls, level: int) -> Float:
        return cls(float(level))

    # ── Arithmetic ───────────────────────────────────────

    def __add__(self, other: Number) -> Float:
        return Float(self.value + _raw(other))

    def __radd__(self, other: Number) -> Float:
        return Float(_raw(other) + self.value)

    def __sub__(self, other: Number) -> Float:
        return Float(self.value - _raw(other))

    def __rsub__(self, other: Number) -> Float:
        return Float(_raw(other) - self.value)

    def __mul__(self, other: Number) -> Float:
        return Float(self.value * _raw(other))

    def __rmul__(self, other: Number) -> Float:
        return Float(_raw(other) * self.value)

    def __truediv__(self, other: Number) -> Float:
        return Float(self.value / _raw(other))

    def __neg__(self) -> Float:
        return Float(-self.value)

    def pow(self, exponent: Float) -> Float:
        return Float(self.value ** exponent.value)

    def powf(self, exponent: float) -> Float:
        return Float(self.value ** float(exponent))

    # ── Comparison ───────────────────────────────────────

    def __eq__(self, other: object) -> bool:
        if isinstance(other, (Float, int, float)):
            return self.value == _raw(other)
        return NotImplemented

    def __lt__(self, other: Number) -> bool:
        if isinstance(other, (Float, int, float)):
            return self.value < _raw(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.value)

    # ── Conversion ───────────────────────────────────────

    def __float__(self) -> float:
        return self.value

    def __repr__(self) -> str:
        return f"Float({self.value!r})"

    def __str__(self) -> str:
        return format_number(self.value)


def _three_digits(value: float) -> str:
    for limit, decimals in ((10, 2), (100, 1)):
        if value < limit:
            text = f"{value:.{decimals}f}"
            # 9.999 rounds up to "10.00"; drop a decimal instead
            if float(text) < limit:
                return text
    return f"{value:.0f}"


def format_number(n: float) -> str:
    """Format a number to 3 significant digits with an SI suffix.

    The value is truncated (not rounded) to 2 decimals first, so 1.999 reads
    as "1.99" and 1234.567 as "1.23K".
    """
    scale = 10 ** BALANCE.format.truncate_decimals
    n = math.floor(n * scale) / scale
    if n < 0:
        return f"-{_format_magnitude(-n)}"
    return _format_magnitude(n)


def _format_magnitude(n: float) -> str:
    suffixes = BALANCE.format.suffixes
    top_threshold, _ = suffixes[-1]
    # Pick the suffix by the rounded value so 999.99 reads "1.00K", not "1000"
    shown = float(f"{n:.3g}")
    if shown >= top_threshold * 1000:
        return f"{n:.2e}"

    for threshold, suffix in reversed(suffixes):
        if shown >= threshold:
            return f"{_three_digits(n / threshold)}{suffix}"

    return _three_digits(n)
