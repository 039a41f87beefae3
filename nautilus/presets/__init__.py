"""Preset Palettes for the Nautilus dashboard theme.

This module defines the palette record, the closed set of preset
identifiers and the immutable catalog mapping each preset to its colors.
It also carries the small color helpers used by the theme generator.

Example:
    >>> from nautilus.presets import ThemePreset, get_preset_palette
    >>> palette = get_preset_palette(ThemePreset.OCEAN)
    >>> palette.primary
    '#0ea5e9'
"""

from __future__ import annotations

import random
import re
from dataclasses import dataclass, fields, replace
from enum import Enum
from typing import Any, Mapping


class PaletteError(ValueError):
    """Raised when palette data is incomplete or malformed."""


class ThemePreset(str, Enum):
    """Preset identifiers."""
    DEFAULT = "default"
    OCEAN = "ocean"
    SUNSET = "sunset"
    FOREST = "forest"
    MIDNIGHT = "midnight"
    CUSTOM = "custom"  # User-modified palette, not a catalog entry


@dataclass(frozen=True)
class Palette:
    """A complete set of theme colors.

    Every slot must hold a non-empty color string; there is no partial
    palette.

    Attributes:
        primary: Main brand color
        secondary: Secondary brand color
        accent: Highlight color
        background: Page background
        foreground: Default text color
        card: Card background
        card_foreground: Text on cards
        muted: Muted background
        muted_foreground: Muted text
        success: Success state
        warning: Warning state
        error: Error state
        info: Informational state
    """
    primary: str
    secondary: str
    accent: str
    background: str
    foreground: str
    card: str
    card_foreground: str
    muted: str
    muted_foreground: str
    success: str
    warning: str
    error: str
    info: str

    def __post_init__(self) -> None:
        for slot in PALETTE_SLOTS:
            value = getattr(self, slot)
            if not isinstance(value, str) or not value.strip():
                raise PaletteError(f"Palette slot {slot!r} must be a non-empty string")
            if not is_color(value):
                raise PaletteError(f"Palette slot {slot!r} is not a CSS color: {value!r}")

    def to_dict(self) -> dict[str, str]:
        """Convert to dictionary for serialization."""
        return {slot: getattr(self, slot) for slot in PALETTE_SLOTS}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Palette:
        """Create from dictionary.

        Raises:
            PaletteError: If data is not a mapping or any slot is missing
        """
        if not isinstance(data, Mapping):
            raise PaletteError(f"Expected a mapping, got {type(data).__name__}")
        missing = [slot for slot in PALETTE_SLOTS if slot not in data]
        if missing:
            raise PaletteError(f"Palette is missing slots: {', '.join(missing)}")
        return cls(**{slot: data[slot] for slot in PALETTE_SLOTS})

    def with_color(self, slot: str, value: str) -> Palette:
        """Return a copy with a single slot changed."""
        if slot not in PALETTE_SLOTS:
            raise ValueError(f"Unknown color slot: {slot}. Available: {list(PALETTE_SLOTS)}")
        return replace(self, **{slot: value})


PALETTE_SLOTS: tuple[str, ...] = tuple(f.name for f in fields(Palette))

# Hex, a bare keyword, or an rgb/hsl function with numeric arguments
_COLOR_RE = re.compile(
    r"^(?:#(?:[0-9a-f]{3}|[0-9a-f]{4}|[0-9a-f]{6}|[0-9a-f]{8})"
    r"|[a-z]+"
    r"|(?:rgb|rgba|hsl|hsla)\([0-9.,%\s/+-]+\))$",
    re.IGNORECASE,
)


def is_color(value: str) -> bool:
    """Check that a value is a renderable CSS color."""
    return isinstance(value, str) and _COLOR_RE.match(value.strip()) is not None


SLOT_LABELS: dict[str, str] = {
    "primary": "Primary",
    "secondary": "Secondary",
    "accent": "Accent",
    "background": "Background",
    "foreground": "Foreground",
    "card": "Card Background",
    "card_foreground": "Card Text",
    "muted": "Muted Background",
    "muted_foreground": "Muted Text",
    "success": "Success",
    "warning": "Warning",
    "error": "Error",
    "info": "Info",
}


DEFAULT_PALETTE = Palette(
    primary="#6366f1",  # indigo
    secondary="#8b5cf6",  # violet
    accent="#f43f5e",  # rose
    background="#0f172a",  # slate-900
    foreground="#f8fafc",  # slate-50
    card="#1e293b",  # slate-800
    card_foreground="#f1f5f9",  # slate-100
    muted="#334155",  # slate-700
    muted_foreground="#94a3b8",  # slate-400
    success="#10b981",  # emerald
    warning="#f59e0b",  # amber
    error="#ef4444",  # red
    info="#3b82f6",  # blue
)

_PRESET_PALETTES: dict[ThemePreset, Palette] = {
    ThemePreset.DEFAULT: DEFAULT_PALETTE,
    ThemePreset.OCEAN: replace(
        DEFAULT_PALETTE,
        primary="#0ea5e9",
        secondary="#06b6d4",
        accent="#0284c7",
        background="#0c4a6e",
        foreground="#f0f9ff",
        card="#075985",
        card_foreground="#e0f2fe",
        muted="#0369a1",
        muted_foreground="#bae6fd",
    ),
    ThemePreset.SUNSET: replace(
        DEFAULT_PALETTE,
        primary="#f97316",
        secondary="#f43f5e",
        accent="#fbbf24",
        background="#450a0a",
        foreground="#fff7ed",
        card="#7f1d1d",
        card_foreground="#ffedd5",
        muted="#9a3412",
        muted_foreground="#fed7aa",
        warning="#fbbf24",
    ),
    ThemePreset.FOREST: replace(
        DEFAULT_PALETTE,
        primary="#10b981",
        secondary="#059669",
        accent="#84cc16",
        background="#14532d",
        foreground="#f0fdf4",
        card="#166534",
        card_foreground="#dcfce7",
        muted="#15803d",
        muted_foreground="#bbf7d0",
    ),
    ThemePreset.MIDNIGHT: replace(
        DEFAULT_PALETTE,
        primary="#8b5cf6",
        secondary="#a855f7",
        accent="#6366f1",
        background="#020617",
        foreground="#f8fafc",
        card="#0f172a",
        card_foreground="#f1f5f9",
        muted="#1e293b",
        muted_foreground="#94a3b8",
    ),
}

PRESET_LABELS: dict[ThemePreset, str] = {
    ThemePreset.DEFAULT: "Default",
    ThemePreset.OCEAN: "Ocean",
    ThemePreset.SUNSET: "Sunset",
    ThemePreset.FOREST: "Forest",
    ThemePreset.MIDNIGHT: "Midnight",
    ThemePreset.CUSTOM: "Custom",
}


def get_preset_palette(preset: ThemePreset | str) -> Palette:
    """Look up the catalog palette for a preset.

    Args:
        preset: Preset identifier (enum member or its value)

    Returns:
        The preset's palette

    Raises:
        PaletteError: If called with the custom preset, which has no
            catalog entry
        ValueError: If the identifier is unknown
    """
    preset = ThemePreset(preset)
    if preset is ThemePreset.CUSTOM:
        raise PaletteError("The custom preset has no catalog palette")
    return _PRESET_PALETTES[preset]


def catalog_presets() -> list[ThemePreset]:
    """Presets that have a catalog palette, in display order."""
    return list(_PRESET_PALETTES)


def preset_options(current: Palette | None = None) -> list[dict[str, Any]]:
    """Describe every preset for a theme picker.

    The custom option shows swatches from ``current`` (or the default
    palette when nothing is active yet).

    Args:
        current: The palette currently in force

    Returns:
        List of ``{"value", "label", "colors"}`` dictionaries
    """
    options = []
    for preset in ThemePreset:
        if preset is ThemePreset.CUSTOM:
            palette = current or DEFAULT_PALETTE
        else:
            palette = _PRESET_PALETTES[preset]
        options.append({
            "value": preset.value,
            "label": PRESET_LABELS[preset],
            "colors": [palette.primary, palette.secondary, palette.accent],
        })
    return options


# Color generator helpers

_HEX_RE = re.compile(r"^#?([a-f\d]{2})([a-f\d]{2})([a-f\d]{2})$", re.IGNORECASE)


def hex_to_rgb(value: str) -> tuple[int, int, int]:
    """Parse ``#rrggbb`` into an RGB tuple; unparseable input maps to black."""
    match = _HEX_RE.match(value or "")
    if not match:
        return (0, 0, 0)
    return tuple(int(part, 16) for part in match.groups())  # type: ignore[return-value]


def rgb_to_hex(r: float, g: float, b: float) -> str:
    """Format RGB channels as ``#rrggbb``."""
    return "#" + "".join(f"{max(0, min(255, round(c))):02x}" for c in (r, g, b))


def random_color(rng: random.Random | None = None) -> str:
    """Generate a random ``#RRGGBB`` color."""
    rng = rng or random
    return "#" + "".join(rng.choice("0123456789ABCDEF") for _ in range(6))


def complementary_colors(primary: str) -> tuple[str, str]:
    """Derive secondary and accent colors from a primary color.

    Secondary is the RGB inverse of the primary; accent rotates the
    channels to ``(b, r, g)``.

    Returns:
        ``(secondary, accent)`` hex strings
    """
    r, g, b = hex_to_rgb(primary)
    secondary = rgb_to_hex(255 - r, 255 - g, 255 - b)
    accent = rgb_to_hex(b, r, g)
    return secondary, accent


__all__ = [
    # Types
    "Palette",
    "PaletteError",
    "ThemePreset",
    # Catalog
    "DEFAULT_PALETTE",
    "PALETTE_SLOTS",
    "SLOT_LABELS",
    "PRESET_LABELS",
    "is_color",
    "get_preset_palette",
    "catalog_presets",
    "preset_options",
    # Generator helpers
    "hex_to_rgb",
    "rgb_to_hex",
    "random_color",
    "complementary_colors",
]
