# --- standard library / typing ----------------------------------------------------------
from __future__ import annotations

import warnings

# --- third-party -----------------------------------------------------------------------
import numpy as np
import streamlit as st

# --- first-party: registry & domain ----------------------------------------------------
from refidx_app.adapters.materials.builtin import BuiltinMaterialDB
from refidx_app.adapters.registry import list_substances
from refidx_app.domain.errors import OutOfDomainWarning, RefractiveIndexError

# --- first-party: exporting, plotting and reports ---------------------------------------
from refidx_app.exporting.io import nk_long_table, to_csv_bytes
from refidx_app.orchestration.engine import default_engine
from refidx_app.plotting_plotly.presenter import PlotPresenterPlotly
from refidx_app.reports.methods import sources_markdown

# --------------------------------------------------------------------------------------
# App bootstrap
# --------------------------------------------------------------------------------------
st.set_page_config(page_title="Refractive Index", layout="wide")
st.title("Refractive index N = n + ik: ice/snow, water, dust, soot")

engine = default_engine()
db = BuiltinMaterialDB(engine)
presenter = PlotPresenterPlotly()

# --------------------------------------------------------------------------------------
# Sidebar — substance and wavelength grid
# --------------------------------------------------------------------------------------
st.sidebar.header("Material / Grid")

substance = st.sidebar.selectbox("Substance", list_substances(), index=0)
units = st.sidebar.selectbox("Units", ["um", "nm", "mm", "cm", "m", "GHz"], index=0)
native = st.sidebar.checkbox(
    "Native grid (ice/water)", value=substance in ("ice", "snow", "water")
)

lam_min, lam_max = st.sidebar.columns(2)
with lam_min:
    lo = st.number_input("λ min", value=0.3, min_value=1e-6, format="%.4g")
with lam_max:
    hi = st.number_input("λ max", value=2.5, min_value=1e-6, format="%.4g")
npts = st.sidebar.slider("Points", 10, 2000, 200)

# --------------------------------------------------------------------------------------
# Evaluate
# --------------------------------------------------------------------------------------
try:
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always", OutOfDomainWarning)
        if native:
            ds = db.get_nk(substance, None)
        else:
            grid = np.geomspace(min(lo, hi), max(lo, hi), int(npts))
            grid_um = engine.converter.convert(grid, units, "um")
            ds = db.get_nk(substance, np.sort(np.ravel(grid_um)))
except (RefractiveIndexError, ValueError) as e:
    st.error(str(e), icon="🚫")
    st.stop()

for w in caught:
    st.warning(str(w.message), icon="⚠️")

st.plotly_chart(presenter.nk_plot(ds), use_container_width=True)

df = nk_long_table(ds)
c1, c2 = st.columns(2)
with c1:
    st.download_button(
        "Download n,k (CSV)",
        data=to_csv_bytes(df),
        file_name=f"nk_{substance}.csv",
        mime="text/csv",
        use_container_width=True,
    )
with c2:
    st.download_button(
        "Download sources (Markdown)",
        data=sources_markdown([substance]).encode("utf-8"),
        file_name=f"sources_{substance}.md",
        mime="text/markdown",
        use_container_width=True,
    )

st.dataframe(df, use_container_width=True)
