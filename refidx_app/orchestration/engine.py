from __future__ import annotations

import threading
import warnings
from typing import Any, Callable, Dict, Tuple

import numpy as np
from numpy.typing import ArrayLike

from refidx_app.adapters.datasets.store import CsvDatasetStore
from refidx_app.adapters.media.cache import InterpolantCache
from refidx_app.adapters.media.dust import DustModel
from refidx_app.adapters.media.soot import SootModel
from refidx_app.adapters.units.convert import WavelengthUnitConverter, normalize_unit
from refidx_app.domain.errors import MissingWavelengthError, OutOfDomainWarning
from refidx_app.domain.models import FloatArray, IndexSettings, Medium, default_settings
from refidx_app.domain.ports import DatasetStore, UnitConverter

__all__ = ["RefractiveIndexEngine", "default_engine", "refractive_index"]

ComplexArray = np.ndarray
_Handler = Callable[[Medium, FloatArray, "FloatArray | None"], Tuple[FloatArray, FloatArray]]


def _is_empty(wave: ArrayLike | None) -> bool:
    return wave is None or np.size(wave) == 0


class RefractiveIndexEngine:
    """
    Complex refractive index N = n + i·k of ice/snow, water, dust and soot.

    Wavelengths are handled in μm internally; `units` applies to both the
    input and the returned wavelengths. Ice and water interpolants are built
    on first use and reused for the lifetime of the engine.
    """

    def __init__(
        self,
        store: DatasetStore | None = None,
        converter: UnitConverter | None = None,
        settings: IndexSettings | None = None,
    ) -> None:
        self.settings = settings or default_settings()
        self.store = store or CsvDatasetStore(self.settings.data_dir)
        self.converter = converter or WavelengthUnitConverter()
        self.cache = InterpolantCache(self.store, self.settings)
        self.dust = DustModel(self.store, self.settings)
        self.soot = SootModel(self.settings)
        self._handlers: Dict[Medium, _Handler] = {
            Medium.ICE: self._tabulated,
            Medium.WATER: self._tabulated,
            Medium.DUST: lambda _m, wave_um, _log: self.dust.evaluate(wave_um),
            Medium.SOOT: lambda _m, wave_um, _log: self.soot.evaluate(wave_um),
        }

    # -------------------------
    # Per-medium evaluation
    # -------------------------
    def _tabulated(
        self, medium: Medium, wave_um: FloatArray, log_wave: FloatArray | None
    ) -> Tuple[FloatArray, FloatArray]:
        entry = self.cache.get(medium)
        if log_wave is None:
            log_wave = np.log(wave_um)
            if entry.real.outside(log_wave):
                lo, hi = np.exp(entry.bounds)
                warnings.warn(
                    f"some wavelengths outside range of {medium.value} interpolation "
                    f"({lo:.4g}–{hi:.4g} μm): values outside tabulated range; "
                    "nearest-neighbor values used",
                    OutOfDomainWarning,
                    stacklevel=3,
                )
        n = entry.real(log_wave)
        k = np.exp(entry.log_imag(log_wave))
        return n, k

    # -------------------------
    # Public API
    # -------------------------
    def native_grid(self, substance: str, units: str = "um") -> FloatArray:
        """Wavelengths of the tabulated data (ice/water only), in `units`."""
        medium = Medium.parse(substance)
        if not medium.tabulated:
            raise MissingWavelengthError(str(substance))
        grid = self.cache.native_grid(medium)
        if normalize_unit(units) == "um":
            return grid
        return np.asarray(self.converter.convert(grid, "um", units), dtype=float)

    def compute(
        self, wave: ArrayLike | None, substance: str, units: str = "um"
    ) -> Tuple[ComplexArray, FloatArray]:
        """
        Return (N, wavelengths).

        Empty `wave` selects the native grid for ice/water and is an error for
        dust/soot. N has the shape of `wave` (or of the native grid) and a
        non-negative imaginary part.
        """
        medium = Medium.parse(substance)
        in_um = normalize_unit(units) == "um"

        log_wave: FloatArray | None = None
        if _is_empty(wave):
            if not medium.tabulated:
                raise MissingWavelengthError(str(substance))
            entry = self.cache.get(medium)
            log_wave = entry.log_wavelength
            wave_um = entry.native_grid_um()
        else:
            wave_um = np.array(wave, dtype=float)
            if not in_um:
                wave_um = np.asarray(self.converter.convert(wave_um, units, "um"), dtype=float)
            if not (np.isfinite(wave_um).all() and (wave_um > 0.0).all()):
                raise ValueError("wavelengths must be finite and positive")

        n, k = self._handlers[medium](medium, wave_um, log_wave)
        N = np.asarray(n, dtype=float) + 1j * np.abs(np.asarray(k, dtype=float))
        N = N.astype(np.complex128).reshape(wave_um.shape)

        if in_um:
            return N, wave_um
        return N, np.asarray(self.converter.convert(wave_um, "um", units), dtype=float)


# -------------------------
# Process-wide default engine
# -------------------------
_default: RefractiveIndexEngine | None = None
_default_lock = threading.Lock()


def default_engine() -> RefractiveIndexEngine:
    global _default
    engine = _default
    if engine is not None:
        return engine
    with _default_lock:
        if _default is None:
            _default = RefractiveIndexEngine()
        return _default


def refractive_index(
    wave: ArrayLike | None,
    substance: str,
    units: str = "um",
    *,
    return_wavelengths: bool = False,
) -> Any:
    """N, or (N, wavelengths) when `return_wavelengths` is set; see RefractiveIndexEngine.compute."""
    N, wavelengths = default_engine().compute(wave, substance, units)
    if return_wavelengths:
        return N, wavelengths
    return N
