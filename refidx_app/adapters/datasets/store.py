from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence

import numpy as np
import pandas as pd

from refidx_app.domain.errors import DatasetError
from refidx_app.domain.models import AbsorptionTable, OpticalTable
from refidx_app.domain.ports import DatasetStore

logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).resolve().parents[2] / "data"

ICE_FILE = "ice_warren_brandt_2008.csv"
WATER_FILE = "water_hale_querry_1973.csv"
PICARD_FILE = "ice_picard_2016.csv"
DUST_FILE = "dust_skiles_zender.csv"


def read_table(path: Path, columns: Sequence[str]) -> pd.DataFrame:
    """Read a ``#``-commented CSV and return the requested float columns.

    Raises DatasetError when the file is missing, a column is absent, or any
    value is non-finite.
    """
    if not path.is_file():
        raise DatasetError(f"dataset file not found: {path}")
    df = pd.read_csv(path, comment="#", skipinitialspace=True)
    missing = [c for c in columns if c not in df.columns]
    if missing:
        raise DatasetError(f"{path.name}: missing column(s) {', '.join(missing)}")
    out = df[list(columns)].astype(float)
    if not np.isfinite(out.to_numpy()).all():
        raise DatasetError(f"{path.name}: non-finite values")
    logger.debug("loaded %s (%d rows)", path.name, len(out))
    return out


def _check_positive(name: str, label: str, values: np.ndarray) -> None:
    if (values <= 0.0).any():
        raise DatasetError(f"{name}: {label} must be strictly positive")


def _check_increasing(name: str, wavelength_um: np.ndarray) -> None:
    if wavelength_um.size < 2 or not np.all(np.diff(wavelength_um) > 0):
        raise DatasetError(f"{name}: wavelengths must be strictly increasing")


class CsvDatasetStore(DatasetStore):
    """Tabulated optical data stored as CSV (wavelengths in μm).

    Files live in ``<base_dir>/`` (the bundled ``refidx_app/data`` by default).
    """

    def __init__(self, base_dir: Path | None = None) -> None:
        self.base_dir = Path(base_dir or DATA_DIR).resolve()

    def _optical(self, filename: str) -> OpticalTable:
        df = read_table(self.base_dir / filename, ("wavelength_um", "n", "k"))
        wl = df["wavelength_um"].to_numpy()
        n = df["n"].to_numpy()
        k = df["k"].to_numpy()
        _check_increasing(filename, wl)
        _check_positive(filename, "wavelength", wl)
        _check_positive(filename, "n", n)
        _check_positive(filename, "k", k)
        return OpticalTable(wavelength_um=wl, n=n, k=k)

    def load_ice_table(self) -> OpticalTable:
        return self._optical(ICE_FILE)

    def load_water_table(self) -> OpticalTable:
        return self._optical(WATER_FILE)

    def load_picard_table(self) -> AbsorptionTable:
        df = read_table(self.base_dir / PICARD_FILE, ("wavelength_um", "k"))
        wl = df["wavelength_um"].to_numpy()
        k = df["k"].to_numpy()
        _check_positive(PICARD_FILE, "wavelength", wl)
        _check_positive(PICARD_FILE, "k", k)
        return AbsorptionTable(wavelength_um=wl, k=k)

    def load_dust_table(self) -> AbsorptionTable:
        # repeated wavelengths are expected: two sources, different confidence
        df = read_table(self.base_dir / DUST_FILE, ("wavelength_um", "k", "weight"))
        wl = df["wavelength_um"].to_numpy()
        w = df["weight"].to_numpy()
        _check_positive(DUST_FILE, "wavelength", wl)
        _check_positive(DUST_FILE, "weight", w)
        return AbsorptionTable(wavelength_um=wl, k=df["k"].to_numpy(), weight=w)
