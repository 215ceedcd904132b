# refidx_app/adapters/registry.py
from __future__ import annotations

from typing import Dict, List

from refidx_app.domain.models import SUBSTANCE_NAMES, IndexSettings, Medium, default_settings

__all__ = ["list_substances", "resolve_substance", "describe_method", "SOURCES", "METHODS"]

# Registry: medium → data source citation
SOURCES: Dict[Medium, str] = {
    Medium.ICE: (
        "Warren, S.G. & Brandt, R.E. (2008), Optical constants of ice from the ultraviolet "
        "to the microwave: A revised compilation, JGR 113, D14220, doi:10.1029/2007JD009744; "
        "visible/UV absorption corrected with Picard, G., Libois, Q. & Arnaud, L. (2016), "
        "The Cryosphere 10, 2655-2672, doi:10.5194/tc-10-2655-2016"
    ),
    Medium.WATER: (
        "Hale, G.M. & Querry, M.R. (1973), Optical constants of water in the 200-nm to "
        "200-μm wavelength region, Applied Optics 12(3), 555-563, doi:10.1364/AO.12.000555"
    ),
    Medium.DUST: (
        "Skiles, S.M. et al. (2016), J. Glaciol., doi:10.1017/jog.2016.126, and Zender, "
        "http://dust.ess.uci.edu/smn/smn_cgd_200610.pdf"
    ),
    Medium.SOOT: (
        "Bond, T.C. & Bergstrom, R.W. (2006), Light absorption by carbonaceous particles: "
        "An investigative review, Aerosol Sci. Technol. 40, 27-67, doi:10.1080/02786820500421521"
    ),
}

# Registry: medium → how the index is evaluated; fields are IndexSettings attributes
METHODS: Dict[Medium, str] = {
    Medium.ICE: (
        "log k spliced with a smoothing spline (p={picard_smoothing:g}), then log n and log k "
        "smoothed (p={final_smoothing:g}) vs log λ; modified-Akima interpolation in log λ, "
        "nearest-neighbour outside the table"
    ),
    Medium.WATER: (
        "log n and log k smoothed (p={final_smoothing:g}) vs log λ; modified-Akima interpolation "
        "in log λ, nearest-neighbour outside the table"
    ),
    Medium.DUST: (
        "n = {dust_real_index:g}; k from a weighted smoothing spline (p={dust_smoothing:g}) vs λ, "
        "clamped to 0.30–2.50 μm"
    ),
    Medium.SOOT: "constant n = {soot_real_index:g}, k = {soot_imag_index:g}",
}


def describe_method(medium: Medium, settings: IndexSettings | None = None) -> str:
    """Method summary for `medium` with the smoothing parameters and constants of `settings`."""
    cfg = settings or default_settings()
    return METHODS[medium].format(**cfg.model_dump())


def list_substances() -> List[str]:
    return list(SUBSTANCE_NAMES)


def resolve_substance(name: str) -> Medium:
    """Map a substance name (case-insensitive, ``snow`` → ice) to its Medium."""
    return Medium.parse(name)
