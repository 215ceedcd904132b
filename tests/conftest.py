from __future__ import annotations

import threading
import time

import numpy as np
import pytest

from refidx_app.domain.errors import DatasetError
from refidx_app.domain.models import AbsorptionTable, OpticalTable
from refidx_app.domain.ports import DatasetStore
from refidx_app.orchestration.engine import RefractiveIndexEngine


class SyntheticStore(DatasetStore):
    """
    Smooth analytic tables (power laws in λ) with load counters.

    Ice k = 1e-8 λ³ everywhere; the Picard correction is twice that between
    0.3 and 0.6 μm. `delay_s` slows loads down for concurrency tests and
    `fail` makes every load raise DatasetError.
    """

    def __init__(self, delay_s: float = 0.0, fail: bool = False) -> None:
        self.delay_s = delay_s
        self.fail = fail
        self.loads: dict[str, int] = {}
        self._lock = threading.Lock()

    def _count(self, name: str) -> None:
        with self._lock:
            self.loads[name] = self.loads.get(name, 0) + 1
        if self.delay_s:
            time.sleep(self.delay_s)
        if self.fail:
            raise DatasetError(f"{name}: synthetic failure")

    def load_ice_table(self) -> OpticalTable:
        self._count("ice")
        wl = np.geomspace(0.2, 100.0, 60)
        return OpticalTable(wavelength_um=wl, n=1.3 + 0.01 * np.log(wl), k=1e-8 * wl**3)

    def load_water_table(self) -> OpticalTable:
        self._count("water")
        wl = np.geomspace(0.2, 200.0, 50)
        return OpticalTable(wavelength_um=wl, n=1.33 * wl**0.01, k=1e-9 * wl**2)

    def load_picard_table(self) -> AbsorptionTable:
        self._count("picard")
        wl = np.linspace(0.3, 0.6, 13)
        return AbsorptionTable(wavelength_um=wl, k=2e-8 * wl**3)

    def load_dust_table(self) -> AbsorptionTable:
        self._count("dust")
        wl = np.array([0.3, 0.5, 0.5, 0.8, 1.0, 1.5, 2.0, 2.5])
        k = np.array([4e-3, 1e-3, 2e-3, 9e-4, 7e-4, 5e-4, 6e-4, 1e-3])
        w = np.array([0.5, 1.0, 0.5, 0.75, 1.0, 1.0, 1.0, 1.0])
        return AbsorptionTable(wavelength_um=wl, k=k, weight=w)


@pytest.fixture
def make_store() -> type[SyntheticStore]:
    return SyntheticStore


@pytest.fixture
def synthetic_store() -> SyntheticStore:
    return SyntheticStore()


@pytest.fixture(scope="session")
def engine() -> RefractiveIndexEngine:
    """Engine on the bundled datasets; interpolants are built once per test session."""
    return RefractiveIndexEngine()
