"""
noise_math.py

Small numeric kernels shared by the noise generators: integer powers,
binomial coefficients, the generalized smoothstep polynomial used to blend
dot products across a grid cell, and a floor-modulo for grid hashing.

smoothstep, lerp and mod accept plain Python numbers as well as numpy arrays.
"""
from functools import lru_cache
from typing import Tuple

import numpy as np


def ipow(base, exp: int):
    """
    Raise base to a non-negative integer power by repeated squaring.
    Returns 1 when exp is 0 (also for a base of 0).
    """
    if exp < 0:
        raise ValueError(f"exponent must be non-negative, got {exp}")

    result = 1
    while exp:
        if exp & 1:
            result = result * base
        exp >>= 1
        if exp:
            base = base * base
    return result


def binomial(n: int, k: int) -> int:
    """
    Number of k-element subsets of an n-element set.

    Uses the multiplicative recurrence on the smaller side, C(n, k) = C(n, n - k),
    in exact integer arithmetic.
    """
    if n < 0 or k < 0:
        raise ValueError(f"binomial is only defined for non-negative n and k, got ({n}, {k})")
    if k > n:
        return 0
    if 2 * k > n:
        k = n - k
    if k == 0:
        return 1

    val = 1
    for i in range(1, k + 1):
        # val * (n - k + i) is always divisible by i
        val = val * (n - k + i) // i
    return val


def mod(k, n):
    """
    k mod n with the result in [0, n), also for negative k.
    Works on integers and integer numpy arrays.
    """
    if np.any(np.asarray(n) <= 0):
        raise ValueError(f"modulus must be positive, got {n}")

    # fmod truncates like a C remainder, so negative k needs one correction
    r = np.fmod(k, n)
    r = np.where(r < 0, r + n, r)
    if r.ndim == 0:
        return r.item()
    return r


def lerp(a, b, t):
    return a + t * (b - a)


@lru_cache(maxsize=None)
def smoothstep_weights(order: int) -> Tuple[int, ...]:
    """
    Bernstein weights of the order-N smoothstep: C(2N + 1, k) for k = N + 1..2N + 1.

    They describe the same polynomial as x^(N + 1) * sum C(N + n, n) * C(2N + 1, N - n) * (-x)^n,
    but every term is non-negative, so high orders evaluate without cancellation.
    """
    if order < 0:
        raise ValueError(f"smoothstep order must be non-negative, got {order}")
    degree = 2 * order + 1
    return tuple(binomial(degree, k) for k in range(order + 1, degree + 1))


def smoothstep(x, order: int = 2):
    """
    Generalized smoothstep of the given order.

    Maps [0, 1] onto [0, 1]; values <= 0 give 0 and values >= 1 give 1. In
    between it is a polynomial of degree 2 * order + 1 whose first `order`
    derivatives vanish at both ends:
      order 0 -> clamp(x, 0, 1)
      order 1 -> 3x^2 - 2x^3
      order 2 -> 6x^5 - 15x^4 + 10x^3
    """
    weights = smoothstep_weights(order)

    scalar = np.ndim(x) == 0
    x = np.asarray(x)
    if not np.issubdtype(x.dtype, np.floating):
        x = x.astype(np.float64)
    t = np.clip(x, 0.0, 1.0)

    if order == 0:
        result = t
    else:
        degree = 2 * order + 1
        u = t.astype(np.float64)
        total = np.zeros_like(u)
        for k, c in zip(range(order + 1, degree + 1), weights):
            total = total + float(c) * ipow(u, k) * ipow(1.0 - u, degree - k)
        # rounding can still leave the sum a few ulps past 1
        result = np.clip(total, 0.0, 1.0)
        result = np.where(x <= 0, 0.0, np.where(x >= 1, 1.0, result)).astype(t.dtype)

    if scalar:
        return float(result)
    return result
