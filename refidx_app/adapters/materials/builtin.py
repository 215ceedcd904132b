from __future__ import annotations

from typing import Any

import numpy as np
import xarray as xr

from refidx_app.adapters.registry import SOURCES, describe_method, list_substances
from refidx_app.domain.models import Medium
from refidx_app.domain.ports import MaterialDB
from refidx_app.orchestration.engine import RefractiveIndexEngine, default_engine

# All wavelengths in micrometres (μm).


class BuiltinMaterialDB(MaterialDB):
    def __init__(self, engine: RefractiveIndexEngine | None = None) -> None:
        self._engine = engine

    @property
    def engine(self) -> RefractiveIndexEngine:
        return self._engine or default_engine()

    def list_materials(self) -> list[str]:
        return list_substances()

    def get_nk(self, name: str, lambda_um: Any = None) -> xr.Dataset:
        """n, k on a 1D wavelength grid; empty/None → native grid (ice/water only)."""
        medium = Medium.parse(name)
        lam = None if lambda_um is None else np.atleast_1d(np.asarray(lambda_um, dtype=float))
        if lam is not None and lam.ndim != 1:
            raise ValueError("lambda_um must be a 1D grid")
        N, wave = self.engine.compute(lam, name)
        return xr.Dataset(
            data_vars=dict(
                n=(("lambda_um",), N.real.copy()),
                k=(("lambda_um",), N.imag.copy()),
            ),
            coords=dict(lambda_um=np.asarray(wave, dtype=float)),
            attrs=dict(
                material=medium.value,
                source=SOURCES[medium],
                method=describe_method(medium, self.engine.settings),
            ),
        )
