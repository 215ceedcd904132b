"""Wavelength unit conversion.

Lengths are scaled through micrometres; ``GHz`` is a frequency and converts
through the vacuum relation λ = c / f.
"""

from __future__ import annotations

from typing import Any

import numpy as np
from numpy.typing import ArrayLike

from refidx_app.domain.errors import UnsupportedUnitError
from refidx_app.domain.ports import UnitConverter

__all__ = ["convert_units", "normalize_unit", "WavelengthUnitConverter", "SPEED_OF_LIGHT_M_S"]

SPEED_OF_LIGHT_M_S = 299_792_458.0

# length unit → micrometres per unit
_UM_PER_UNIT: dict[str, float] = {
    "um": 1.0,
    "nm": 1e-3,
    "mm": 1e3,
    "cm": 1e4,
    "m": 1e6,
}
_ALIASES: dict[str, str] = {"mum": "um", "µm": "um", "μm": "um", "micron": "um"}
_FREQUENCY_UNITS = {"ghz"}


def normalize_unit(unit: str) -> str:
    """Canonical unit label (``um``, ``nm``, ``mm``, ``cm``, ``m`` or ``ghz``)."""
    key = str(unit).strip().lower()
    key = _ALIASES.get(key, key)
    if key in _UM_PER_UNIT or key in _FREQUENCY_UNITS:
        return key
    raise UnsupportedUnitError(str(unit))


def _to_um(arr: np.ndarray, unit: str) -> np.ndarray:
    if unit in _FREQUENCY_UNITS:
        with np.errstate(divide="ignore"):
            return SPEED_OF_LIGHT_M_S / (arr * 1e9) * 1e6
    return arr * _UM_PER_UNIT[unit]


def _from_um(arr: np.ndarray, unit: str) -> np.ndarray:
    if unit in _FREQUENCY_UNITS:
        with np.errstate(divide="ignore"):
            return SPEED_OF_LIGHT_M_S / (arr * 1e-6) / 1e9
    return arr / _UM_PER_UNIT[unit]


def convert_units(value: ArrayLike, from_unit: str, to_unit: str) -> Any:
    """Convert wavelength value(s) from ``from_unit`` to ``to_unit``.

    Returns an ndarray with the shape of ``value`` (a NumPy scalar for scalar
    input). Both unit labels are validated even when they are equal.
    """
    src = normalize_unit(from_unit)
    dst = normalize_unit(to_unit)
    arr = np.asarray(value, dtype=np.float64)
    if src == dst:
        return arr.copy()
    return _from_um(_to_um(arr, src), dst)


class WavelengthUnitConverter(UnitConverter):
    def convert(self, value: ArrayLike, from_unit: str, to_unit: str) -> Any:
        return convert_units(value, from_unit, to_unit)
