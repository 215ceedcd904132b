from __future__ import annotations

import io

import pandas as pd
import xarray as xr


def nk_long_table(ds: xr.Dataset) -> pd.DataFrame:
    """Return a tidy table with columns `lambda_um`, `n`, `k` sorted by wavelength."""
    for var in ("n", "k"):
        if var not in ds.data_vars:
            raise KeyError(f"Dataset missing variable {var!r}")
    df = ds[["n", "k"]].to_dataframe().reset_index()
    return df[["lambda_um", "n", "k"]].sort_values("lambda_um").reset_index(drop=True)


def to_csv_bytes(df: pd.DataFrame) -> bytes:
    buf = io.StringIO()
    df.to_csv(buf, index=False)
    return buf.getvalue().encode("utf-8")
