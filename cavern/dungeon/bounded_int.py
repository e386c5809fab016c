"""Integers constrained to an inclusive range.

Concrete bounded types subclass :class:`BoundedInt` and declare ``LOW`` and
``HIGH``::

    class Percent(BoundedInt):
        LOW = 0
        HIGH = 100

    Percent(50).as_unbounded()      # 50
    Percent(150)                    # raises TooHigh(150)
    Percent.clamped(150)            # Percent(100)
    Percent(90).saturating_add(20)  # Percent(100)
    Percent(90) + 20                # raises BoundedIntOverflow

Construction never silently truncates; only the explicitly named ``clamped``
and ``saturating_*`` helpers clamp.
"""

from __future__ import annotations

from functools import total_ordering
from typing import Iterator, Type, TypeVar

B = TypeVar("B", bound="BoundedInt")


class BoundedIntError(ValueError):
    """Raised when a raw integer does not fit a bounded type."""

    def __init__(self, value: int, low: int, high: int):
        self.value = value
        self.low = low
        self.high = high
        super().__init__(f"{value} is outside [{low}, {high}]")


class TooLow(BoundedIntError):
    pass


class TooHigh(BoundedIntError):
    pass


class BoundedIntOverflow(ArithmeticError):
    def __init__(self, overflowed_by: int):
        self.overflowed_by = overflowed_by
        super().__init__(f"overflowed upper bound by {overflowed_by}")


class BoundedIntUnderflow(ArithmeticError):
    def __init__(self, underflowed_by: int):
        self.underflowed_by = underflowed_by
        super().__init__(f"underflowed lower bound by {underflowed_by}")


@total_ordering
class BoundedInt:
    LOW: int = 0
    HIGH: int = 0

    __slots__ = ("_value",)

    def __init__(self, value: int):
        assert self.LOW < self.HIGH, f"LOW must be less than HIGH. LOW: {self.LOW}, HIGH: {self.HIGH}"
        value = int(value)
        if value < self.LOW:
            raise TooLow(value, self.LOW, self.HIGH)
        if value > self.HIGH:
            raise TooHigh(value, self.LOW, self.HIGH)
        self._value = value

    @classmethod
    def new(cls: Type[B], value: int) -> B:
        return cls(value)

    @classmethod
    def clamped(cls: Type[B], value: int) -> B:
        return cls(min(cls.HIGH, max(cls.LOW, int(value))))

    @classmethod
    def coerce(cls: Type[B], value: "int | BoundedInt") -> B:
        """Accept a raw int or any bounded int and validate it against ``cls``."""
        if isinstance(value, cls):
            return value
        if isinstance(value, BoundedInt):
            return cls(value.as_unbounded())
        return cls(value)

    def as_unbounded(self) -> int:
        return self._value

    def expand(self, other: Type[B]) -> B:
        """Re-type into ``other``; the target bounds must contain ours."""
        assert other.LOW <= self.LOW and other.HIGH >= self.HIGH, "expand() may only widen bounds"
        return other(self._value)

    def saturating_add(self: B, n: int) -> B:
        return type(self).clamped(self._value + n)

    def saturating_sub(self: B, n: int) -> B:
        return type(self).clamped(self._value - n)

    def _rhs(self, other) -> int:
        if isinstance(other, BoundedInt):
            return other.as_unbounded()
        if isinstance(other, int):
            return other
        return NotImplemented

    def __add__(self: B, other) -> B:
        rhs = self._rhs(other)
        if rhs is NotImplemented:
            return NotImplemented
        total = self._value + rhs
        if total > self.HIGH:
            raise BoundedIntOverflow(total - self.HIGH)
        if total < self.LOW:
            raise BoundedIntUnderflow(self.LOW - total)
        return type(self)(total)

    def __sub__(self: B, other) -> B:
        rhs = self._rhs(other)
        if rhs is NotImplemented:
            return NotImplemented
        total = self._value - rhs
        if total < self.LOW:
            raise BoundedIntUnderflow(self.LOW - total)
        if total > self.HIGH:
            raise BoundedIntOverflow(total - self.HIGH)
        return type(self)(total)

    def range_to(self: B, end: B) -> Iterator[B]:
        """Yield ``self`` up to but excluding ``end``; empty when ``end <= self``."""
        cls = type(self)
        for v in range(self._value, end.as_unbounded()):
            yield cls(v)

    def range_to_inclusive(self: B, end: B) -> Iterator[B]:
        cls = type(self)
        for v in range(self._value, end.as_unbounded() + 1):
            yield cls(v)

    def range_from(self: B, start: B) -> Iterator[B]:
        """Yield ``start`` up to but excluding ``self``."""
        return start.range_to(self)

    def __int__(self) -> int:
        return self._value

    def __index__(self) -> int:
        return self._value

    def __eq__(self, other) -> bool:
        if isinstance(other, BoundedInt):
            return self._value == other.as_unbounded()
        if isinstance(other, int):
            return self._value == other
        return NotImplemented

    def __lt__(self, other) -> bool:
        if isinstance(other, BoundedInt):
            return self._value < other.as_unbounded()
        if isinstance(other, int):
            return self._value < other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._value)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._value})"


__all__ = [
    "BoundedInt",
    "BoundedIntError",
    "TooLow",
    "TooHigh",
    "BoundedIntOverflow",
    "BoundedIntUnderflow",
]
