"""Exact numeric domains for coordinates.

The recognizer never hard-codes a number type: every coordinate goes
through a ScalarDomain, and all hull and width decisions use only the
add / subtract / multiply / compare operators of the domain values.
"""
from dataclasses import dataclass
from fractions import Fraction
from typing import Any, Callable, Dict, Tuple
import numpy as np

Point = Tuple[Any, Any]


@dataclass(frozen=True)
class ScalarDomain:
    name: str
    kind: Callable[[Any], Any]
    integral: bool = True

    def from_int(self, n: int) -> Any:
        return self.kind(int(n))

    @property
    def zero(self) -> Any:
        return self.from_int(0)

    @property
    def one(self) -> Any:
        return self.from_int(1)

    def coerce(self, value: Any) -> Any:
        """Convert `value` into the domain without rounding.

        Floats are accepted only when they hold an exact value of the domain
        (e.g. 3.0 for an integer domain, 0.5 for the rational one).
        """
        q = to_fraction(value)
        if self.integral:
            if q.denominator != 1:
                raise ValueError(f"{value!r} is not an integer, cannot use it in domain '{self.name}'")
            return self.kind(q.numerator)
        return self.kind(q)

    def point(self, p: Any) -> Point:
        x, y = p[0], p[1]
        return (self.coerce(x), self.coerce(y))


def to_fraction(value: Any) -> Fraction:
    if isinstance(value, Fraction):
        return value
    if isinstance(value, (int, np.integer)):
        return Fraction(int(value))
    if isinstance(value, np.floating):
        value = float(value)
    return Fraction(value)


INTEGER = ScalarDomain("int", int)
INT64 = ScalarDomain("int64", np.int64)
RATIONAL = ScalarDomain("fraction", Fraction, integral=False)

DOMAINS: Dict[str, ScalarDomain] = {d.name: d for d in (INTEGER, INT64, RATIONAL)}


def get_domain(name: str) -> ScalarDomain:
    try:
        return DOMAINS[name]
    except KeyError:
        raise ValueError(f"Unknown scalar domain '{name}', expected one of {sorted(DOMAINS)}") from None


def cross(o: Point, a: Point, b: Point) -> Any:
    # > 0: o -> a -> b turns counter-clockwise
    return (a[0] - o[0]) * (b[1] - o[1]) - (a[1] - o[1]) * (b[0] - o[0])


def dot(n: Point, p: Point) -> Any:
    return n[0] * p[0] + n[1] * p[1]
