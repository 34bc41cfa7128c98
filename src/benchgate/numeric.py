"""Numerically stable special functions used by the statistics engine."""

from __future__ import annotations

import math

# Chebyshev-fitted coefficients for erfc (Numerical Recipes ``erfcc``),
# highest order last. Fractional error is below 1.2e-7 everywhere.
_ERFC_COEFFS: tuple[float, ...] = (
    1.00002368,
    0.37409196,
    0.09678418,
    -0.18628806,
    0.27886807,
    -1.13520398,
    1.48851587,
    -0.82215223,
    0.17087277,
)
_ERFC_OFFSET = -1.26551223

SQRT2 = math.sqrt(2.0)


def erfc(x: float) -> float:
    """Complementary error function with absolute error around 1e-7.

    Evaluated on ``t = 1 / (1 + |x| / 2)`` and reflected for negative ``x``
    via ``erfc(x) = 2 - erfc(-x)``. Large magnitudes saturate to 0 or 2
    instead of overflowing because the exponent only ever shrinks.
    """
    ax = abs(x)
    t = 1.0 / (1.0 + 0.5 * ax)

    poly = 0.0
    for coeff in reversed(_ERFC_COEFFS):
        poly = coeff + t * poly

    tau = t * math.exp(-ax * ax + _ERFC_OFFSET + t * poly)
    return tau if x >= 0 else 2.0 - tau


def two_sided_p(z: float) -> float:
    return erfc(abs(z) / SQRT2)


def upper_tail_p(z: float) -> float:
    return 0.5 * erfc(z / SQRT2)


def lower_tail_p(z: float) -> float:
    return 0.5 * erfc(-z / SQRT2)
