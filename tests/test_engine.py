from __future__ import annotations

import warnings

import numpy as np
import pytest

from refidx_app.adapters.units.convert import convert_units
from refidx_app.domain.errors import (
    InvalidSubstanceError,
    MissingWavelengthError,
    OutOfDomainWarning,
    UnsupportedUnitError,
)
from refidx_app.orchestration.engine import RefractiveIndexEngine, refractive_index

SUBSTANCES = ("ice", "snow", "water", "dust", "soot")


# -------------------------
# Concrete scenarios
# -------------------------
def test_water_is_nearly_transparent_in_the_visible(engine) -> None:
    N, _ = engine.compute(0.5, "water")
    assert N.shape == ()
    assert 1.32 < N.real < 1.345
    assert 0.0 < N.imag < 1e-7


def test_ice_absorbs_strongly_in_the_thermal_infrared(engine) -> None:
    N_ice, _ = engine.compute(10.0, "ice")
    N_water, _ = engine.compute(0.5, "water")
    assert 1.05 < N_ice.real < 1.3
    assert N_ice.imag > 1e3 * N_water.imag


def test_dust_at_550nm(engine) -> None:
    N, _ = engine.compute(0.55, "dust")
    assert N.real == 1.55
    assert 0.0008 <= N.imag <= 0.0020


def test_soot_is_constant(engine) -> None:
    N, _ = engine.compute([0.4, 0.6, 0.8], "soot")
    assert np.all(N.real == 1.95) and np.all(N.imag == 0.79)


def test_empty_wave_returns_native_grid(engine) -> None:
    N, wave = engine.compute([], "water")
    grid = engine.native_grid("water")
    assert np.array_equal(wave, grid)
    assert N.shape == grid.shape and N.ndim == 1
    assert np.all(np.diff(wave) > 0)


def test_unknown_substance_is_rejected(engine) -> None:
    with pytest.raises(InvalidSubstanceError) as exc:
        engine.compute(0.5, "glass")
    assert exc.value.substance == "glass"
    assert "glass" in str(exc.value)


# -------------------------
# Properties
# -------------------------
@pytest.mark.parametrize("substance", SUBSTANCES)
def test_imaginary_part_is_non_negative(engine, substance: str) -> None:
    wave = np.geomspace(0.3, 2.5, 40)
    N, _ = engine.compute(wave, substance)
    assert np.all(N.imag >= 0.0)
    assert np.all(np.isfinite(N))


@pytest.mark.parametrize("substance", SUBSTANCES)
def test_repeat_calls_are_bit_identical(engine, substance: str) -> None:
    wave = np.array([0.35, 0.7, 1.6])
    first, _ = engine.compute(wave, substance)
    second, _ = engine.compute(wave, substance)
    assert np.array_equal(first, second)


@pytest.mark.parametrize("substance", SUBSTANCES)
@pytest.mark.parametrize("shape", [(4,), (2, 3), (2, 1, 2)])
def test_output_shape_matches_input(engine, substance: str, shape: tuple[int, ...]) -> None:
    wave = np.linspace(0.4, 2.0, int(np.prod(shape))).reshape(shape)
    N, out = engine.compute(wave, substance)
    assert N.shape == shape and out.shape == shape
    assert N.dtype == np.complex128


@pytest.mark.parametrize("substance", SUBSTANCES)
def test_nanometre_input_round_trips(engine, substance: str) -> None:
    wave_nm = np.array([[400.0, 550.0], [800.0, 1600.0]])
    N_nm, out_nm = engine.compute(wave_nm, substance, "nm")
    assert np.allclose(out_nm, wave_nm, rtol=1e-12)
    N_um, _ = engine.compute(convert_units(wave_nm, "nm", "um"), substance)
    assert np.array_equal(N_nm, N_um)


def test_gigahertz_queries(engine) -> None:
    N, out = engine.compute([10.0, 89.0], "ice", "GHz")
    assert np.allclose(out, [10.0, 89.0])
    assert np.all(N.real > 1.7)


def test_native_grid_in_other_units(engine) -> None:
    _, wave_nm = engine.compute(None, "ice", "nm")
    assert np.allclose(wave_nm, engine.native_grid("ice") * 1e3)
    assert np.allclose(engine.native_grid("snow", "nm"), wave_nm)


@pytest.mark.parametrize("substance, far, edge", [("ice", 1e7, "hi"), ("water", 1e-3, "lo"),
                                                 ("water", 5e4, "hi")])
def test_far_outside_clamps_to_boundary_and_warns(engine, substance, far, edge) -> None:
    with pytest.warns(OutOfDomainWarning, match="nearest-neighbor"):
        N_far, _ = engine.compute(far, substance)
    N_native, _ = engine.compute(None, substance)
    N_edge = N_native[0] if edge == "lo" else N_native[-1]
    assert N_far.real == pytest.approx(N_edge.real, rel=1e-12)
    assert N_far.imag == pytest.approx(N_edge.imag, rel=1e-12)


@pytest.mark.parametrize("substance", ["ice", "water"])
def test_no_warning_inside_domain(engine, substance: str) -> None:
    grid = engine.native_grid(substance)
    inside = np.sqrt(grid[:-1] * grid[1:])  # strictly between grid points
    with warnings.catch_warnings():
        warnings.simplefilter("error", OutOfDomainWarning)
        engine.compute(inside, substance)
        engine.compute([], substance)


def test_dust_never_warns(engine) -> None:
    with warnings.catch_warnings():
        warnings.simplefilter("error", OutOfDomainWarning)
        N_far, _ = engine.compute(50.0, "dust")
        N_edge, _ = engine.compute(2.5, "dust")
    assert N_far == N_edge


def test_snow_is_an_alias_of_ice(engine) -> None:
    wave = np.geomspace(0.2, 1e3, 57).reshape(3, 19)
    assert np.array_equal(engine.compute(wave, "ice")[0], engine.compute(wave, "SNOW")[0])
    assert np.array_equal(engine.compute([], "Snow")[1], engine.compute([], "ice")[1])


# -------------------------
# Failures
# -------------------------
@pytest.mark.parametrize("substance", ["dust", "soot"])
@pytest.mark.parametrize("empty", [None, [], np.array([])])
def test_missing_wavelength_for_untabulated_media(engine, substance, empty) -> None:
    with pytest.raises(MissingWavelengthError) as exc:
        engine.compute(empty, substance)
    assert substance in str(exc.value)


def test_unsupported_unit_propagates(engine) -> None:
    with pytest.raises(UnsupportedUnitError) as exc:
        engine.compute(0.5, "water", "parsec")
    assert "parsec" in str(exc.value)


@pytest.mark.parametrize("bad", [0.0, -1.0, np.nan, np.inf])
def test_non_positive_wavelengths_rejected(engine, bad: float) -> None:
    with pytest.raises(ValueError):
        engine.compute([0.5, bad], "ice")


def test_input_array_is_not_aliased(engine) -> None:
    wave = np.array([0.5, 0.6])
    _, out = engine.compute(wave, "water")
    out[0] = -1.0
    assert wave[0] == 0.5


# -------------------------
# Module-level convenience
# -------------------------
def test_refractive_index_function() -> None:
    N = refractive_index([0.4, 0.6, 0.8], "soot")
    assert N.shape == (3,)
    N2, wave = refractive_index(400.0, "water", "nm", return_wavelengths=True)
    assert float(wave) == pytest.approx(400.0)
    assert 1.33 < N2.real < 1.35


def test_custom_settings_flow_through(synthetic_store) -> None:
    from refidx_app.domain.models import IndexSettings

    eng = RefractiveIndexEngine(store=synthetic_store, settings=IndexSettings(dust_real_index=1.6))
    N, _ = eng.compute([0.5, 1.0], "dust")
    assert np.all(N.real == 1.6)
