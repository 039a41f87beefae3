"""Nautilus Dashboard - settings and theming backend.

The FastAPI application lives in ``nautilus.dashboard.api``; run it with
``uvicorn nautilus.dashboard.api:create_app --factory``.
"""

from typing import Any

from nautilus.config import DashboardConfig, load_config
from nautilus.presets import DEFAULT_PALETTE

__all__ = ["get_dashboard_config"]


def get_dashboard_config(config: DashboardConfig | None = None) -> dict[str, Any]:
    """Get the client-facing dashboard configuration."""
    config = config or load_config()
    return {
        "theme": "dark",
        "palette": {
            "primary": "#0ea5e9",  # sky-500, app settings fallback
            "accent": "#6366f1",  # indigo-500, app settings fallback
            "surface": DEFAULT_PALETTE.card,
            "background": DEFAULT_PALETTE.background,
            "text": DEFAULT_PALETTE.foreground,
            "textMuted": DEFAULT_PALETTE.muted_foreground,
        },
        "refreshInterval": config.refresh_interval,  # ms
    }
