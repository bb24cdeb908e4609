import numbers
from dataclasses import dataclass
from fractions import Fraction
from math import sqrt
from typing import Any, Dict, Tuple

from .scalar import Point, dot, to_fraction


def _jsonable(v: Any) -> Any:
    q = to_fraction(v)
    return q.numerator if q.denominator == 1 else str(q)


@dataclass(frozen=True)
class WidthBudget:
    numerator: int
    denominator: int

    def __post_init__(self):
        for part in (self.numerator, self.denominator):
            if isinstance(part, bool) or not isinstance(part, numbers.Integral):
                raise ValueError(
                    f"Width budget parts must be integers, got {self.numerator!r}/{self.denominator!r}")
        # numpy integers become Python ints so budget products cannot overflow
        object.__setattr__(self, "numerator", int(self.numerator))
        object.__setattr__(self, "denominator", int(self.denominator))
        if self.numerator <= 0 or self.denominator <= 0:
            raise ValueError(
                f"Width budget must be positive, got {self.numerator}/{self.denominator}")

    @classmethod
    def parse(cls, text: str) -> "WidthBudget":
        """'3/2' -> WidthBudget(3, 2); a bare integer means a denominator of 1."""
        num, _, den = str(text).strip().partition("/")
        try:
            return cls(int(num), int(den) if den else 1)
        except ValueError as e:
            raise ValueError(f"Invalid width budget '{text}': {e}") from None

    def as_fraction(self) -> Fraction:
        return Fraction(self.numerator, self.denominator)

    def __str__(self) -> str:
        return f"{self.numerator}/{self.denominator}"


@dataclass(frozen=True)
class ParallelStrip:
    """Region mu <= N.X <= mu + nu between two parallel digital lines."""
    normal: Tuple[Any, Any]                  # N = (a, b), never (0, 0)
    mu: Any                                  # lower bound
    nu: Any                                  # width along N, in N units

    @property
    def upper(self) -> Any:
        return self.mu + self.nu

    @property
    def axis(self) -> int:
        a, b = self.normal
        return 0 if abs(a) >= abs(b) else 1

    def contains(self, p: Point) -> bool:
        v = dot(self.normal, p)
        return self.mu <= v <= self.mu + self.nu

    def axis_width(self) -> Fraction:
        """Width measured along the main axis (vertical or horizontal thickness)."""
        return to_fraction(self.nu) / to_fraction(abs(self.normal[self.axis]))

    def euclidean_width_squared(self) -> Fraction:
        a, b = (to_fraction(c) for c in self.normal)
        return to_fraction(self.nu) ** 2 / (a * a + b * b)

    @property
    def width(self) -> float:
        return sqrt(float(self.euclidean_width_squared()))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "normal": [_jsonable(c) for c in self.normal],
            "mu": _jsonable(self.mu),
            "nu": _jsonable(self.nu),
            "width": self.width,
            "axis_width": float(self.axis_width()),
        }

    def __str__(self) -> str:
        a, b = self.normal
        return f"[ParallelStrip] {self.mu} <= {a}*x + {b}*y <= {self.upper}"


@dataclass
class Segment:
    first: int                               # contour position of the first point
    last: int                                # contour position of the last point (inclusive)
    strip: ParallelStrip
    size: int = 0                            # distinct points
    closed: bool = False                     # positions wrap around a closed contour

    def positions(self, n: int) -> range:
        """Contour positions covered, unwrapped (values may exceed n - 1 when closed)."""
        last = self.last if self.last >= self.first else self.last + n
        return range(self.first, last + 1)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "first": self.first,
            "last": self.last,
            "size": self.size,
            "strip": self.strip.to_dict(),
        }
