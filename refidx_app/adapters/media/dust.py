from __future__ import annotations

import logging
import threading
from typing import Tuple

import numpy as np
from numpy.typing import ArrayLike

from refidx_app.domain.models import FloatArray, IndexSettings
from refidx_app.domain.ports import DatasetStore
from refidx_app.numerics.splines import SmoothingSpline, smoothing_spline

logger = logging.getLogger(__name__)


class DustModel:
    """Mineral dust: constant n, weighted smoothing-spline fit of k vs λ (μm).

    Queries outside the fitted sites are clamped without a warning.
    """

    def __init__(self, store: DatasetStore, settings: IndexSettings) -> None:
        self.store = store
        self.settings = settings
        self._spline: SmoothingSpline | None = None
        self._lock = threading.Lock()

    @property
    def spline(self) -> SmoothingSpline:
        spl = self._spline
        if spl is not None:
            return spl
        with self._lock:
            if self._spline is None:
                table = self.store.load_dust_table()
                self._spline = smoothing_spline(
                    table.wavelength_um, table.k, self.settings.dust_smoothing, weights=table.weight
                )
                logger.info(
                    "fitted dust spline over %d points, %.2f–%.2f μm",
                    len(table),
                    self._spline.x_min,
                    self._spline.x_max,
                )
            return self._spline

    @property
    def domain_um(self) -> Tuple[float, float]:
        return self.spline.x_min, self.spline.x_max

    def evaluate(self, wavelengths_um: ArrayLike) -> Tuple[FloatArray, FloatArray]:
        lam = np.asarray(wavelengths_um, dtype=float)
        k = self.spline.clamped(lam)
        n = np.full(lam.shape, self.settings.dust_real_index, dtype=float)
        return n, k
