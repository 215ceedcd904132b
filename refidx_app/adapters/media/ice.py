"""Ice: splice the Picard et al. (2016) visible/UV absorption into Warren & Brandt (2008).

The two sources disagree in the visible/UV. The newer measurements are trusted
up to the largest Picard wavelength, the legacy table beyond it, and a final
rigid smoothing pass removes the discontinuity at the splice.
"""
from __future__ import annotations

import numpy as np

from refidx_app.domain.errors import DatasetError
from refidx_app.domain.models import AbsorptionTable, IndexSettings, OpticalTable, ReconciledCurve
from refidx_app.numerics.splines import smoothing_spline


def picard_cutoff(ice_wavelength_um: np.ndarray, picard_max_um: float) -> int:
    """Number of ice rows with wavelength ≤ the largest Picard wavelength."""
    return int(np.searchsorted(ice_wavelength_um, picard_max_um, side="right"))


def reconcile_ice(
    ice: OpticalTable, picard: AbsorptionTable, settings: IndexSettings
) -> ReconciledCurve:
    wv = ice.wavelength_um
    cut = picard_cutoff(wv, float(np.max(picard.wavelength_um)))
    if cut == 0:
        raise DatasetError("Picard table lies entirely below the ice table; nothing to splice")

    # absorption in the corrected region, both sources together
    x = np.concatenate([wv[:cut], picard.wavelength_um])
    y = np.concatenate([ice.k[:cut], picard.k])
    f_splice = smoothing_spline(np.log(x), np.log(y), settings.picard_smoothing)

    x_corr = np.unique(x)
    wave = np.concatenate([x_corr, wv[cut:]])
    log_wave = np.log(wave)

    # real part, independent of the absorption correction
    f_real = smoothing_spline(np.log(wv), np.log(ice.n), settings.final_smoothing)
    n = np.exp(f_real(log_wave))

    log_k = np.concatenate([f_splice(np.log(x_corr)), np.log(ice.k[cut:])])
    f_imag = smoothing_spline(log_wave, log_k, settings.final_smoothing)
    k = np.exp(f_imag(log_wave))

    return ReconciledCurve(wavelength_um=wave, n=n, k=k)
