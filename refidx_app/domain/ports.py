# """
# Ports (interfaces) for adapters. Orchestration and the UI depend ONLY on these.
# """
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from numpy.typing import ArrayLike

from .models import AbsorptionTable, OpticalTable


class DatasetStore(ABC):
    @abstractmethod
    def load_ice_table(self) -> OpticalTable:
        """Warren & Brandt (2008) ice: wavelength (μm), n, k."""

    @abstractmethod
    def load_water_table(self) -> OpticalTable:
        """Hale & Querry (1973) water: wavelength (μm), n, k."""

    @abstractmethod
    def load_picard_table(self) -> AbsorptionTable:
        """Picard et al. (2016) visible/UV ice absorption: wavelength (μm), k."""

    @abstractmethod
    def load_dust_table(self) -> AbsorptionTable:
        """Empirical dust points: wavelength (μm), k, weight."""


class UnitConverter(ABC):
    @abstractmethod
    def convert(self, value: ArrayLike, from_unit: str, to_unit: str) -> Any:
        """Convert wavelength value(s) between units; raises UnsupportedUnitError."""


class MaterialDB(ABC):
    @abstractmethod
    def list_materials(self) -> list[str]:
        """Return available material identifiers."""

    @abstractmethod
    def get_nk(self, name: str, lambda_um: Any) -> Any:
        """Return xarray.Dataset with coords lambda_um and data vars n, k."""


class PlotPresenter(ABC):
    @abstractmethod
    def nk_plot(self, ds: Any) -> Any:
        """Figure: n(λ) and k(λ) of one material on log-wavelength axes."""
