#!/usr/bin/env python3
"""
Closed-Form Polynomial Root Solver

Finds the real roots of polynomials up to degree four:
- Linear and quadratic equations (with cancellation-safe quadratic formula)
- Normalized cubics (trigonometric and Cardano branches)
- Depressed quartics (Ferrari's method via a resolvent cubic)
- General quartics (discriminant classification, then depressed reduction)

Results are Roots values: sorted ascending, free of exact duplicates, and
never longer than four. Degenerate forms the quartic solver does not handle
(zero leading or constant coefficient, or a biquadratic) return no roots and
are logged at debug level.
"""

from __future__ import annotations
import logging
import math
from dataclasses import dataclass
from typing import Iterator, Tuple

logger = logging.getLogger(__name__)


# =============================================================================
# CONSTANTS
# =============================================================================

# Most real roots any supported polynomial can have
MAX_ROOTS = 4

_FRAC_2PI_3 = 2.0 * math.pi / 3.0


# =============================================================================
# ROOTS VALUE
# =============================================================================

@dataclass(frozen=True)
class Roots:
    """
    Real roots of a polynomial.

    Attributes:
        values: Distinct roots in ascending order (0 to 4 entries)
    """
    values: Tuple[float, ...] = ()

    def __post_init__(self):
        """Sort and deduplicate whatever was passed in."""
        values = tuple(sorted(set(self.values)))
        if len(values) > MAX_ROOTS:
            raise ValueError(f"At most {MAX_ROOTS} roots are supported, got {len(values)}")
        object.__setattr__(self, "values", values)

    @classmethod
    def none(cls) -> Roots:
        """Empty root set."""
        return cls(())

    @classmethod
    def of(cls, *values: float) -> Roots:
        """Build a root set from any number of values, sorting and deduplicating."""
        roots = cls.none()
        for value in values:
            roots = roots.add_new_root(value)
        return roots

    def add_new_root(self, root: float) -> Roots:
        """
        Insert a root keeping the set sorted and unique.

        Args:
            root: Candidate root

        Returns:
            New Roots containing root (unchanged if already present)

        Raises:
            ValueError: If the set already holds four distinct roots
        """
        if root in self.values:
            return self
        if len(self.values) >= MAX_ROOTS:
            raise ValueError(f"Cannot add root {root}: already holding {MAX_ROOTS}")
        return Roots(tuple(sorted(self.values + (root,))))

    def as_list(self) -> list:
        """Roots as a plain list."""
        return list(self.values)

    def __len__(self) -> int:
        return len(self.values)

    def __iter__(self) -> Iterator[float]:
        return iter(self.values)

    def __getitem__(self, index: int) -> float:
        return self.values[index]

    def __bool__(self) -> bool:
        return bool(self.values)


# =============================================================================
# LINEAR AND QUADRATIC
# =============================================================================

def solve_linear(a1: float, a0: float) -> Roots:
    """
    Solve a1*x + a0 = 0.

    A zero slope yields the single root 0.0 when a0 is also zero, and no
    roots otherwise.
    """
    if a1 == 0:
        if a0 == 0:
            return Roots((0.0,))
        return Roots.none()
    return Roots((-a0 / a1,))


def solve_quadratic(a2: float, a1: float, a0: float) -> Roots:
    """
    Solve a2*x^2 + a1*x + a0 = 0.

    Uses whichever of the two equivalent root formulas divides by the larger
    magnitude, avoiding catastrophic cancellation when b^2 >> 4ac.

    Args:
        a2: Quadratic coefficient (zero falls back to the linear solver)
        a1: Linear coefficient
        a0: Constant coefficient

    Returns:
        Zero, one or two roots
    """
    if a2 == 0:
        return solve_linear(a1, a0)

    discriminant = a1 * a1 - 4.0 * a2 * a0
    if discriminant < 0:
        return Roots.none()

    a2x2 = 2.0 * a2
    if discriminant == 0:
        return Roots((-a1 / a2x2,))

    sq = math.sqrt(discriminant)
    if a1 < 0:
        same_sign, diff_sign = -a1 + sq, -a1 - sq
    else:
        same_sign, diff_sign = -a1 - sq, -a1 + sq

    if abs(same_sign) > abs(a2x2):
        a0x2 = 2.0 * a0
        if abs(diff_sign) > abs(a2x2):
            x1, x2 = a0x2 / same_sign, a0x2 / diff_sign
        else:
            x1, x2 = a0x2 / same_sign, same_sign / a2x2
    else:
        x1, x2 = diff_sign / a2x2, same_sign / a2x2

    return Roots.of(x1, x2)


# =============================================================================
# CUBIC
# =============================================================================

def _real_cbrt(value: float) -> float:
    """Real cube root preserving sign."""
    if value < 0:
        return -((-value) ** (1.0 / 3.0))
    return value ** (1.0 / 3.0)


def solve_cubic_normalized(a2: float, a1: float, a0: float) -> Roots:
    """
    Solve x^3 + a2*x^2 + a1*x + a0 = 0.

    Three distinct real roots are found trigonometrically; otherwise
    Cardano's formula gives one root, or two when a double root exists.
    """
    q = (3.0 * a1 - a2 * a2) / 9.0
    r = (9.0 * a2 * a1 - 27.0 * a0 - 2.0 * a2 * a2 * a2) / 54.0
    q3 = q * q * q
    d = q3 + r * r
    a2_div_3 = a2 / 3.0

    if d < 0:
        cos_arg = max(-1.0, min(1.0, r / math.sqrt(-q3)))
        phi_3 = math.acos(cos_arg) / 3.0
        sqrt_q_2 = 2.0 * math.sqrt(-q)
        return Roots.of(
            sqrt_q_2 * math.cos(phi_3) - a2_div_3,
            sqrt_q_2 * math.cos(phi_3 - _FRAC_2PI_3) - a2_div_3,
            sqrt_q_2 * math.cos(phi_3 + _FRAC_2PI_3) - a2_div_3,
        )

    sqrt_d = math.sqrt(d)
    s = _real_cbrt(r + sqrt_d)
    t = _real_cbrt(r - sqrt_d)

    if s == t and s + t != 0:
        return Roots.of(s + t - a2_div_3, -(s + t) / 2.0 - a2_div_3)
    return Roots((s + t - a2_div_3,))


# =============================================================================
# QUARTIC
# =============================================================================

def solve_quartic_depressed(a2: float, a1: float, a0: float) -> Roots:
    """
    Solve x^4 + a2*x^2 + a1*x + a0 = 0 with Ferrari's method.

    The largest root y of the resolvent cubic splits the quartic into two
    quadratics x^2 -/+ s*x + (a2 + y +/- a1/(2s)) where s = sqrt(a2 + 2y).

    Args:
        a2: Quadratic coefficient
        a1: Linear coefficient (zero is unhandled)
        a0: Constant coefficient (zero is unhandled)

    Returns:
        Up to four roots; empty for the unhandled forms
    """
    if a1 == 0:
        logger.debug("Unhandled depressed quartic with zero linear term: a2=%g a0=%g", a2, a0)
        return Roots.none()
    if a0 == 0:
        logger.debug("Unhandled depressed quartic with zero constant term: a2=%g a1=%g", a2, a1)
        return Roots.none()

    a1_div_2 = a1 / 2.0
    b2 = a2 * 5.0 / 2.0
    b1 = 2.0 * a2 * a2 - a0
    b0 = (a2 * a2 * a2 - a2 * a0 - a1_div_2 * a1_div_2) / 2.0

    resolvent = solve_cubic_normalized(b2, b1, b0)
    y = resolvent[len(resolvent) - 1]

    shifted = a2 + 2.0 * y
    if shifted <= 0:
        return Roots.none()

    s = math.sqrt(shifted)
    q0a = a2 + y - a1_div_2 / s
    q0b = a2 + y + a1_div_2 / s

    roots = solve_quadratic(1.0, s, q0a)
    for root in solve_quadratic(1.0, -s, q0b):
        roots = roots.add_new_root(root)
    return roots


def quartic_discriminant(a4: float, a3: float, a2: float, a1: float, a0: float) -> float:
    """Discriminant of a4*x^4 + a3*x^3 + a2*x^2 + a1*x + a0."""
    return (
        a4 * a0 * a4 * (256.0 * a4 * a0 * a0 + a1 * (144.0 * a2 * a1 - 192.0 * a3 * a0))
        + a4 * a0 * a2 * a2 * (16.0 * a2 * a2 - 80.0 * a3 * a1 - 128.0 * a4 * a0)
        + a3 * a3 * (
            a4 * a0 * (144.0 * a2 * a0 - 6.0 * a1 * a1)
            + a0 * (18.0 * a3 * a2 * a1 - 27.0 * a3 * a3 * a0 - 4.0 * a2 * a2 * a2)
            + a1 * a1 * (a2 * a2 - 4.0 * a3 * a1)
        )
        + a4 * a1 * a1 * (18.0 * a3 * a2 * a1 - 27.0 * a4 * a1 * a1 - 4.0 * a2 * a2 * a2)
    )


def solve_quartic(a4: float, a3: float, a2: float, a1: float, a0: float) -> Roots:
    """
    Solve a4*x^4 + a3*x^3 + a2*x^2 + a1*x + a0 = 0.

    The discriminant and its companion invariants classify the root
    structure: a quadruple root, a triple root, two complex pairs (no real
    roots), or the general case which is shifted into a depressed quartic.

    Zero a4, zero a0, and biquadratics (a1 == a3 == 0) are not handled and
    return no roots.

    Args:
        a4: Quartic coefficient
        a3: Cubic coefficient
        a2: Quadratic coefficient
        a1: Linear coefficient
        a0: Constant coefficient

    Returns:
        Up to four real roots in ascending order
    """
    if a4 == 0:
        logger.debug("Unhandled quartic with zero leading coefficient")
        return Roots.none()
    if a0 == 0:
        logger.debug("Unhandled quartic with zero constant coefficient")
        return Roots.none()
    if a1 == 0 and a3 == 0:
        logger.debug("Unhandled biquadratic quartic")
        return Roots.none()

    discriminant = quartic_discriminant(a4, a3, a2, a1, a0)
    pp = 8.0 * a4 * a2 - 3.0 * a3 * a3
    rr = a3 * a3 * a3 + 8.0 * a4 * a4 * a1 - 4.0 * a4 * a3 * a2
    delta0 = a2 * a2 - 3.0 * a3 * a1 + 12.0 * a4 * a0
    dd = (64.0 * a4 * a4 * a4 * a0
          - 16.0 * a4 * a4 * a2 * a2
          + 16.0 * a4 * a3 * a3 * a2
          - 16.0 * a4 * a4 * a3 * a1
          - 3.0 * a3 * a3 * a3 * a3)

    if discriminant == 0:
        triple_root = delta0 == 0
        quadruple_root = triple_root and dd == 0
        no_roots = dd == 0 and pp > 0 and rr == 0

        if quadruple_root:
            return Roots((-a3 / (4.0 * a4),))
        if triple_root:
            x0 = ((-72.0 * a4 * a4 * a0 + 10.0 * a4 * a2 * a2 - 3.0 * a3 * a3 * a2)
                  / (9.0 * (8.0 * a4 * a4 * a1 - 4.0 * a4 * a3 * a2 + a3 * a3 * a3)))
            return Roots.of(x0, -(a3 / a4 + 3.0 * x0))
        if no_roots:
            return Roots.none()
        return _solve_via_depressed(a4, a3, a2, a1, a0, pp, rr, dd)

    no_roots = discriminant > 0 and (pp > 0 or dd > 0)
    if no_roots:
        return Roots.none()
    return _solve_via_depressed(a4, a3, a2, a1, a0, pp, rr, dd)


def _solve_via_depressed(
    a4: float, a3: float, a2: float, a1: float, a0: float,
    pp: float, rr: float, dd: float
) -> Roots:
    """Substitute x = y - a3/(4*a4) and solve the depressed quartic in y."""
    a4_sq = a4 * a4
    p = pp / (8.0 * a4_sq)
    q = rr / (8.0 * a4_sq * a4)
    r = (dd + 16.0 * a4_sq * (12.0 * a0 * a4 - 3.0 * a1 * a3 + a2 * a2)) / (256.0 * a4_sq * a4_sq)

    shift = a3 / (4.0 * a4)
    roots = Roots.none()
    for y in solve_quartic_depressed(p, q, r):
        roots = roots.add_new_root(y - shift)
    return roots
