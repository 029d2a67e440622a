from __future__ import annotations

import logging
from typing import Mapping

from wallet_state_engine.app.config import settings

logger = logging.getLogger(__name__)

# Theme palettes keyed by colorway, then by color token.
_PALETTES: dict[str, dict[str, str]] = {
    "light": {
        "accent1": "rgb(0, 196, 140)",
        "accent2": "rgb(255, 153, 51)",
        "accent3": "rgb(255, 0, 174)",
        "accent4": "rgb(246, 36, 35)",
        "accent5": "rgb(64, 130, 255)",
        "accent6": "rgb(127, 99, 255)",
        "accent7": "rgb(0, 166, 255)",
        "accent8": "rgb(236, 181, 0)",
        "good": "rgb(0, 172, 116)",
        "bad": "rgb(220, 30, 60)",
        "moon": "rgb(245, 187, 0)",
    },
    "dark": {
        "accent1": "rgb(0, 210, 190)",
        "accent2": "rgb(255, 153, 51)",
        "accent3": "rgb(255, 82, 204)",
        "accent4": "rgb(255, 68, 68)",
        "accent5": "rgb(96, 154, 255)",
        "accent6": "rgb(158, 132, 255)",
        "accent7": "rgb(40, 190, 255)",
        "accent8": "rgb(255, 210, 50)",
        "good": "rgb(0, 210, 140)",
        "bad": "rgb(255, 60, 90)",
        "moon": "rgb(250, 204, 50)",
    },
}


class PaletteColorResolver:
    """
    Resolves theme color tokens to CSS color values.

    Unknown colorways fall back to the configured default colorway; unknown
    tokens resolve to None so the chain is published without a color.
    """

    def __init__(
        self,
        palettes: Mapping[str, Mapping[str, str]] | None = None,
        *,
        default_colorway: str | None = None,
    ) -> None:
        self._palettes = {name: dict(colors) for name, colors in (palettes or _PALETTES).items()}
        self._default_colorway = default_colorway or settings.default_colorway

    @property
    def colorways(self) -> list[str]:
        return sorted(self._palettes)

    def __call__(self, color_token: str, colorway: str) -> str | None:
        palette = self._palettes.get(colorway)
        if palette is None:
            palette = self._palettes.get(self._default_colorway, {})

        color = palette.get(color_token)
        if color is None:
            logger.warning(
                "Unknown color token",
                extra={"color_token": color_token, "colorway": colorway},
            )
        return color
