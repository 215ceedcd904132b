from __future__ import annotations

import numpy as np

from refidx_app.domain.models import IndexSettings, OpticalTable, ReconciledCurve
from refidx_app.numerics.splines import smoothing_spline


def smooth_water(water: OpticalTable, settings: IndexSettings) -> ReconciledCurve:
    """Re-smooth Hale & Querry (1973) n and k in log-log space on the original axis."""
    log_wave = np.log(water.wavelength_um)
    f_real = smoothing_spline(log_wave, np.log(water.n), settings.final_smoothing)
    f_imag = smoothing_spline(log_wave, np.log(water.k), settings.final_smoothing)
    return ReconciledCurve(
        wavelength_um=water.wavelength_um.copy(),
        n=np.exp(f_real(log_wave)),
        k=np.exp(f_imag(log_wave)),
    )
