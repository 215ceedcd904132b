#"""
#Domain models.
#
#Pydantic v2 settings carry the empirically tuned constants; tabulated data and
#fitted curves are frozen dataclasses holding float arrays in micrometres.
#"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

import numpy as np
from numpy.typing import NDArray
from pydantic import BaseModel, ConfigDict, Field

from refidx_app.domain.errors import InvalidSubstanceError

FloatArray = NDArray[np.float64]


# --- Media ---
class Medium(str, Enum):
    ICE = "ice"
    WATER = "water"
    DUST = "dust"
    SOOT = "soot"

    @property
    def tabulated(self) -> bool:
        """Ice and water carry a native wavelength grid; dust and soot do not."""
        return self in (Medium.ICE, Medium.WATER)

    @classmethod
    def parse(cls, name: str) -> Medium:
        """Case-insensitive lookup; ``snow`` is an alias of ``ice``."""
        key = str(name).strip().lower()
        if key == "snow":
            return cls.ICE
        try:
            return cls(key)
        except ValueError:
            raise InvalidSubstanceError(str(name)) from None


SUBSTANCE_NAMES: tuple[str, ...] = ("ice", "snow", "water", "dust", "soot")


# --- Settings ---
class IndexSettings(BaseModel):
    """Empirically chosen constants; preserved as published, not re-derived."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    picard_smoothing: float = Field(0.97, gt=0.0, le=1.0, description="Ice/Picard splice spline")
    final_smoothing: float = Field(0.9999, gt=0.0, le=1.0, description="Final ice and water smoothing")
    dust_smoothing: float = Field(0.97, gt=0.0, le=1.0, description="Dust absorption spline")
    dust_real_index: float = Field(1.55, gt=0.0)
    soot_real_index: float = Field(1.95, gt=0.0)
    soot_imag_index: float = Field(0.79, ge=0.0)
    data_dir: Path | None = None  # None → bundled refidx_app/data


def default_settings() -> IndexSettings:
    return IndexSettings()


# --- Tables and curves (μm) ---
@dataclass(frozen=True)
class OpticalTable:
    wavelength_um: FloatArray
    n: FloatArray
    k: FloatArray

    def __len__(self) -> int:
        return int(self.wavelength_um.size)


@dataclass(frozen=True)
class AbsorptionTable:
    wavelength_um: FloatArray
    k: FloatArray
    weight: FloatArray | None = None

    def __len__(self) -> int:
        return int(self.wavelength_um.size)


@dataclass(frozen=True)
class ReconciledCurve:
    """Smoothed n, k on a consolidated, strictly increasing wavelength axis."""

    wavelength_um: FloatArray
    n: FloatArray
    k: FloatArray
