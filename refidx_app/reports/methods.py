from __future__ import annotations

from datetime import datetime, timezone
from textwrap import dedent
from typing import Iterable

from refidx_app.adapters.registry import SOURCES, describe_method, list_substances
from refidx_app.domain.models import IndexSettings, Medium, default_settings


def sources_markdown(
    substances: Iterable[str] | None = None, *, settings: IndexSettings | None = None
) -> str:
    cfg = settings or default_settings()
    names = list(substances) if substances is not None else list_substances()
    media: list[Medium] = []
    for name in names:
        medium = Medium.parse(name)
        if medium not in media:
            media.append(medium)

    md = f"""
    # Refractive index: data sources and method (Auto-generated)

    **Generated:** {datetime.now(timezone.utc).isoformat()}

    Smoothing parameters: splice p={cfg.picard_smoothing:g}, final p={cfg.final_smoothing:g},
    dust p={cfg.dust_smoothing:g}. Imaginary parts are reported non-negative.
    """
    md = dedent(md)
    for medium in media:
        md += f"\n## {medium.value.capitalize()}\n"
        md += f"- Source: {SOURCES[medium]}\n"
        md += f"- Method: {describe_method(medium, cfg)}\n"
    return md.strip() + "\n"
