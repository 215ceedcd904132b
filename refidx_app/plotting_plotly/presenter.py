#"""
#Plotly-based presenter implementing PlotPresenter.
#"""
from __future__ import annotations
import xarray as xr
import plotly.graph_objects as go
from refidx_app.domain.ports import PlotPresenter


class PlotPresenterPlotly(PlotPresenter):
    def nk_plot(self, ds: xr.Dataset) -> go.Figure:
        lam = ds.coords["lambda_um"].values
        name = str(ds.attrs.get("material", ""))
        fig = go.Figure()
        fig.add_trace(go.Scatter(x=lam, y=ds["n"].values, mode="lines", name="n (real)"))
        # k spans many decades; log axis on the right
        fig.add_trace(go.Scatter(x=lam, y=ds["k"].values, mode="lines", name="k (imaginary)",
                                 yaxis="y2"))
        fig.update_layout(
            xaxis=dict(title="Wavelength λ (μm)", type="log"),
            yaxis=dict(title="Real part n"),
            yaxis2=dict(title="Imaginary part k", type="log", overlaying="y", side="right"),
            template="plotly_white",
            title=f"Refractive index N = n + ik ({name})" if name else "Refractive index N = n + ik",
        )
        return fig
