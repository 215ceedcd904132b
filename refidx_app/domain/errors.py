#"""
#Error taxonomy shared by adapters and orchestration.
#"""
from __future__ import annotations


class RefractiveIndexError(Exception):
    """Base class for all fatal refractive-index errors."""


class InvalidSubstanceError(RefractiveIndexError, ValueError):
    def __init__(self, substance: str) -> None:
        self.substance = substance
        super().__init__(
            f"substance {substance!r} not recognized "
            "(expected one of: ice, snow, water, dust, soot)"
        )


class MissingWavelengthError(RefractiveIndexError, ValueError):
    def __init__(self, substance: str) -> None:
        self.substance = substance
        super().__init__(
            f"wavelength cannot be empty for {substance!r}: no native grid is tabulated"
        )


class UnsupportedUnitError(RefractiveIndexError, ValueError):
    def __init__(self, unit: str) -> None:
        self.unit = unit
        super().__init__(
            f"unsupported wavelength unit {unit!r} "
            "(expected one of: um, mum, nm, mm, cm, m, GHz)"
        )


class DatasetError(RefractiveIndexError, ValueError):
    """Raised when a source table is malformed; nothing built from it is published."""


class OutOfDomainWarning(RuntimeWarning):
    """Query wavelengths fell outside the tabulated range and were clamped."""
