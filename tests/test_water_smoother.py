from __future__ import annotations

import numpy as np

from refidx_app.adapters.media.water import smooth_water
from refidx_app.domain.models import default_settings


def test_water_keeps_original_axis(synthetic_store) -> None:
    water = synthetic_store.load_water_table()
    curve = smooth_water(water, default_settings())
    assert np.array_equal(curve.wavelength_um, water.wavelength_um)
    assert curve.wavelength_um is not water.wavelength_um


def test_power_laws_survive_log_log_smoothing(synthetic_store) -> None:
    water = synthetic_store.load_water_table()
    curve = smooth_water(water, default_settings())
    # straight lines in log-log space carry no roughness penalty
    assert np.allclose(curve.n, water.n, rtol=1e-8)
    assert np.allclose(curve.k, water.k, rtol=1e-6)


def test_bundled_water_stays_close_to_table(engine) -> None:
    water = engine.store.load_water_table()
    curve = smooth_water(water, engine.settings)
    visible = (water.wavelength_um >= 0.4) & (water.wavelength_um <= 0.7)
    assert np.allclose(curve.n[visible], water.n[visible], atol=5e-3)
    assert np.all(curve.k > 0)
