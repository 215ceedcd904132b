"""Lazily built, process-lifetime interpolants for the tabulated media.

Each entry is constructed at most once under a lock and published only when
complete; readers after publication take no lock.
"""
from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Callable, Dict

import numpy as np

from refidx_app.domain.errors import MissingWavelengthError
from refidx_app.domain.models import FloatArray, IndexSettings, Medium, ReconciledCurve
from refidx_app.domain.ports import DatasetStore
from refidx_app.numerics.splines import ClampedInterpolant

from .ice import reconcile_ice
from .water import smooth_water

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CacheEntry:
    real: ClampedInterpolant  # n vs log λ
    log_imag: ClampedInterpolant  # log k vs log λ
    log_wavelength: FloatArray

    @property
    def bounds(self) -> tuple[float, float]:
        return float(self.log_wavelength[0]), float(self.log_wavelength[-1])

    def native_grid_um(self) -> FloatArray:
        return np.exp(self.log_wavelength)


def _build_ice(store: DatasetStore, settings: IndexSettings) -> ReconciledCurve:
    return reconcile_ice(store.load_ice_table(), store.load_picard_table(), settings)


def _build_water(store: DatasetStore, settings: IndexSettings) -> ReconciledCurve:
    return smooth_water(store.load_water_table(), settings)


_BUILDERS: Dict[Medium, Callable[[DatasetStore, IndexSettings], ReconciledCurve]] = {
    Medium.ICE: _build_ice,
    Medium.WATER: _build_water,
}


def build_entry(curve: ReconciledCurve) -> CacheEntry:
    log_wave = np.log(curve.wavelength_um)
    return CacheEntry(
        real=ClampedInterpolant(log_wave, curve.n),
        log_imag=ClampedInterpolant(log_wave, np.log(curve.k)),
        log_wavelength=log_wave,
    )


class InterpolantCache:
    def __init__(self, store: DatasetStore, settings: IndexSettings) -> None:
        self.store = store
        self.settings = settings
        self._entries: Dict[Medium, CacheEntry] = {}
        self._lock = threading.Lock()

    def is_built(self, medium: Medium) -> bool:
        return medium in self._entries

    def get(self, medium: Medium) -> CacheEntry:
        entry = self._entries.get(medium)
        if entry is not None:
            return entry
        builder = _BUILDERS.get(medium)
        if builder is None:
            raise MissingWavelengthError(medium.value)
        with self._lock:
            entry = self._entries.get(medium)
            if entry is None:
                entry = build_entry(builder(self.store, self.settings))
                self._entries[medium] = entry
                lo, hi = entry.bounds
                logger.info(
                    "built %s interpolants: %d points, %.4g–%.4g μm",
                    medium.value,
                    entry.log_wavelength.size,
                    np.exp(lo),
                    np.exp(hi),
                )
        return entry

    def native_grid(self, medium: Medium) -> FloatArray:
        return self.get(medium).native_grid_um()
