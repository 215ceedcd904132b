"""Spline primitives shared by the media models.

``smoothing_spline`` follows the ``csaps`` smoothing-parameter convention:
``p`` weighs fidelity against roughness as

    p · Σ w_i (y_i − f(x_i))² + (1 − p) · ∫ f''(x)² dx

which is SciPy's penalised form with ``lam = (1 − p) / p``. ``p = 1`` gives the
interpolating natural cubic spline, smaller ``p`` gives smoother curves.
"""
from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from numpy.typing import ArrayLike, NDArray
from scipy.interpolate import Akima1DInterpolator, BSpline, make_smoothing_spline

__all__ = ["SmoothingSpline", "merge_repeated_sites", "smoothing_spline", "ClampedInterpolant"]

_MIN_SITES = 5  # make_smoothing_spline needs at least five distinct abscissae


def merge_repeated_sites(
    x: ArrayLike, y: ArrayLike, w: ArrayLike | None = None
) -> tuple[NDArray[np.float64], NDArray[np.float64], NDArray[np.float64]]:
    """Sort by ``x`` and collapse repeated abscissae.

    Values at a repeated site are replaced by their weighted mean and the
    weights are summed, so the fit sees one site carrying the combined weight.
    """
    xa = np.asarray(x, dtype=float).ravel()
    ya = np.asarray(y, dtype=float).ravel()
    wa = np.ones_like(xa) if w is None else np.asarray(w, dtype=float).ravel()
    if not (xa.size == ya.size == wa.size):
        raise ValueError("x, y and weights must have the same length")
    if (wa <= 0.0).any():
        raise ValueError("weights must be positive")

    xu, inv = np.unique(xa, return_inverse=True)
    inv = inv.ravel()
    wsum = np.bincount(inv, weights=wa, minlength=xu.size)
    ymean = np.bincount(inv, weights=wa * ya, minlength=xu.size) / wsum
    return xu, ymean, wsum


@dataclass(frozen=True)
class SmoothingSpline:
    spline: BSpline
    x_min: float
    x_max: float

    def __call__(self, x: ArrayLike) -> NDArray[np.float64]:
        return np.asarray(self.spline(np.asarray(x, dtype=float)), dtype=float)

    def clamped(self, x: ArrayLike) -> NDArray[np.float64]:
        """Evaluate with abscissae clipped to the fitted site range."""
        return self(np.clip(np.asarray(x, dtype=float), self.x_min, self.x_max))


def smoothing_spline(
    x: ArrayLike, y: ArrayLike, p: float, weights: ArrayLike | None = None
) -> SmoothingSpline:
    """Fit a cubic smoothing spline with smoothing parameter ``p`` ∈ (0, 1]."""
    if not 0.0 < p <= 1.0:
        raise ValueError("smoothing parameter p must be in (0, 1]")
    xs, ys, ws = merge_repeated_sites(x, y, weights)
    if xs.size < _MIN_SITES:
        raise ValueError(f"smoothing spline needs at least {_MIN_SITES} distinct sites, got {xs.size}")
    if not (np.isfinite(xs).all() and np.isfinite(ys).all()):
        raise ValueError("smoothing spline data must be finite")
    lam = (1.0 - p) / p
    spl = make_smoothing_spline(xs, ys, w=ws, lam=lam)
    return SmoothingSpline(spline=spl, x_min=float(xs[0]), x_max=float(xs[-1]))


class ClampedInterpolant:
    """Modified-Akima interpolant with nearest-neighbour extrapolation.

    Queries outside ``[x[0], x[-1]]`` return the boundary value. Output has the
    shape of the query.
    """

    def __init__(self, x: ArrayLike, y: ArrayLike) -> None:
        xa = np.asarray(x, dtype=float)
        ya = np.asarray(y, dtype=float)
        if xa.ndim != 1 or xa.size < 2:
            raise ValueError("interpolant grid must be a 1D array with at least two points")
        if xa.shape != ya.shape:
            raise ValueError("grid and values must have the same shape")
        if not np.all(np.diff(xa) > 0):
            raise ValueError("interpolant grid must be strictly increasing")
        self.grid = xa
        self.values = ya
        self._akima = Akima1DInterpolator(xa, ya, method="makima")

    @property
    def bounds(self) -> tuple[float, float]:
        return float(self.grid[0]), float(self.grid[-1])

    def outside(self, xq: ArrayLike) -> bool:
        """True when any query lies outside the grid (NaN queries excluded)."""
        q = np.asarray(xq, dtype=float)
        lo, hi = self.bounds
        return bool(np.any(q < lo) or np.any(q > hi))

    def __call__(self, xq: ArrayLike) -> NDArray[np.float64]:
        q = np.asarray(xq, dtype=float)
        lo, hi = self.bounds
        out = self._akima(np.clip(q, lo, hi).ravel())
        return np.asarray(out, dtype=float).reshape(q.shape)
