"""API models for the dashboard settings and theme endpoints."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field, field_validator
from typing_extensions import TypedDict

from nautilus.presets import is_color

PresetName = Literal["default", "ocean", "sunset", "forest", "midnight", "custom"]
SlotName = Literal[
    "primary",
    "secondary",
    "accent",
    "background",
    "foreground",
    "card",
    "card_foreground",
    "muted",
    "muted_foreground",
    "success",
    "warning",
    "error",
    "info",
]


class AppSettingsData(TypedDict):
    """Stored application settings type."""

    product_name: str
    logo_url: str | None
    logo_svg_code: str | None
    primary_color: str | None
    accent_color: str | None


class PaletteModel(BaseModel):
    """Full palette, one color per slot."""

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


class ThemeResponse(BaseModel):
    """Theme state response."""

    preset: PresetName
    colors: PaletteModel
    has_custom: bool


class PresetUpdate(BaseModel):
    """Preset switch request."""

    preset: PresetName


class ColorUpdate(BaseModel):
    """Single color edit request."""

    slot: SlotName
    value: str = Field(min_length=1, max_length=64)


class SlotRequest(BaseModel):
    """Request naming a single slot."""

    slot: SlotName


class PresetOption(BaseModel):
    """Preset picker entry."""

    value: PresetName
    label: str
    colors: list[str]


class PresetsResponse(BaseModel):
    """Preset catalog response."""

    presets: list[PresetOption]
    slot_labels: dict[str, str]


class AppSettings(BaseModel):
    """Application branding settings."""

    product_name: str
    logo_url: str | None = None
    logo_svg_code: str | None = None
    primary_color: str | None = None
    accent_color: str | None = None


class AppSettingsUpdate(BaseModel):
    """Partial application settings update."""

    product_name: str | None = Field(default=None, min_length=1)
    logo_url: str | None = None
    logo_svg_code: str | None = None
    primary_color: str | None = None
    accent_color: str | None = None

    @field_validator("primary_color", "accent_color")
    @classmethod
    def check_color(cls, value: str | None) -> str | None:
        if value is not None and not is_color(value):
            raise ValueError(f"Not a CSS color: {value!r}")
        return value


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    database: str
    timestamp: datetime
