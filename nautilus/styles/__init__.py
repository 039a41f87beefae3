"""CSS synchronization for theme palettes.

This module projects a palette into CSS custom properties and keeps a
single identified ``<style>`` element in a document up to date.

Example:
    >>> from nautilus.styles import Document, StyleSynchronizer
    >>> document = Document()
    >>> sync = StyleSynchronizer(document)
    >>> sync.attach(theme_state)
    >>> print(document.render_head())
"""

from __future__ import annotations

import html
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Mapping

from nautilus.presets import PALETTE_SLOTS, Palette

if TYPE_CHECKING:
    from nautilus.theme import ThemeState

logger = logging.getLogger(__name__)

THEME_STYLE_ID = "theme-colors"
DEFAULT_VARIABLE_PREFIX = "color"


def slot_to_css_name(slot: str) -> str:
    """Convert a palette slot name to its dash-separated CSS form."""
    return slot.replace("_", "-").lower()


def palette_to_css(palette: Palette, prefix: str = DEFAULT_VARIABLE_PREFIX) -> str:
    """Serialize a palette as a ``:root`` custom-property block.

    Args:
        palette: Palette to serialize
        prefix: Variable prefix (``--<prefix>-<slot>``); empty for none

    Returns:
        CSS text, one declaration per slot
    """
    lead = f"--{prefix}-" if prefix else "--"
    declarations = "\n".join(
        f"{lead}{slot_to_css_name(slot)}: {getattr(palette, slot)};"
        for slot in PALETTE_SLOTS
    )
    return f":root {{\n{declarations}\n}}"


@dataclass
class StyleElement:
    """A ``<style>`` element in a document head."""
    id: str
    content: str = ""

    def render(self) -> str:
        return f'<style id="{html.escape(self.id)}">\n{self.content}\n</style>'


class Document:
    """Minimal document model: an ordered head of style elements."""

    def __init__(self) -> None:
        self.head: list[StyleElement] = []

    def get_element_by_id(self, element_id: str) -> StyleElement | None:
        for element in self.head:
            if element.id == element_id:
                return element
        return None

    def create_element(self, element_id: str) -> StyleElement:
        return StyleElement(id=element_id)

    def append(self, element: StyleElement) -> None:
        self.head.append(element)

    def style_elements(self, element_id: str | None = None) -> list[StyleElement]:
        """Elements in the head, optionally filtered by id."""
        if element_id is None:
            return list(self.head)
        return [element for element in self.head if element.id == element_id]

    def render_head(self) -> str:
        """Render the head as HTML."""
        return "\n".join(element.render() for element in self.head)


class StyleSynchronizer:
    """Keeps one style element in sync with a palette.

    Repeated application replaces the element's content; the document
    never holds more than one element with ``element_id``.
    """

    def __init__(
        self,
        document: Document,
        element_id: str = THEME_STYLE_ID,
        prefix: str = DEFAULT_VARIABLE_PREFIX,
    ) -> None:
        """Initialize synchronizer.

        Args:
            document: Target document
            element_id: Id of the managed style element
            prefix: CSS variable prefix
        """
        self.document = document
        self.element_id = element_id
        self.prefix = prefix
        self._unsubscribe: Callable[[], None] | None = None

    def apply(self, palette: Palette) -> StyleElement:
        """Create or replace the managed style element.

        Returns:
            The managed element
        """
        element = self.document.get_element_by_id(self.element_id)
        if element is None:
            element = self.document.create_element(self.element_id)
            self.document.append(element)
        element.content = palette_to_css(palette, self.prefix)
        logger.debug("Synchronized %s with palette (primary=%s)", self.element_id, palette.primary)
        return element

    def attach(self, state: ThemeState) -> None:
        """Subscribe to a theme state and apply its current palette."""
        self.detach()
        self._unsubscribe = state.subscribe(self.apply)
        self.apply(state.colors)

    def detach(self) -> None:
        """Stop following the attached theme state."""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    @property
    def stylesheet(self) -> str:
        """Current content of the managed element (empty if never applied)."""
        element = self.document.get_element_by_id(self.element_id)
        return element.content if element is not None else ""


# Initial-paint fallback colors
FALLBACK_PRIMARY = "#0ea5e9"
FALLBACK_ACCENT = "#6366f1"
FALLBACK_SECONDARY = "#8b5cf6"
FALLBACK_FOREGROUND = "#ffffff"


def render_dynamic_styles(
    colors: Palette | Mapping[str, Any] | None,
    app_settings: Mapping[str, Any] | None = None,
) -> str:
    """Render the component-library variable sheet.

    Primary and accent fall back to the app settings colors, then to
    built-in defaults, when no palette is available yet. Other variables
    fall back to the default dark scheme.

    Args:
        colors: Effective palette, a partial mapping, or None
        app_settings: Application settings with ``primary_color`` and
            ``accent_color``

    Returns:
        CSS text
    """
    if isinstance(colors, Palette):
        values: Mapping[str, Any] = colors.to_dict()
    else:
        values = colors or {}
    settings = app_settings or {}

    def pick(slot: str, fallback: str) -> str:
        return values.get(slot) or fallback

    primary = pick("primary", settings.get("primary_color") or FALLBACK_PRIMARY)
    accent = pick("accent", settings.get("accent_color") or FALLBACK_ACCENT)
    secondary = pick("secondary", FALLBACK_SECONDARY)
    on_color = pick("foreground", FALLBACK_FOREGROUND)

    return f"""
:root {{
  --primary: {primary};
  --primary-foreground: {on_color};
  --secondary: {secondary};
  --secondary-foreground: {on_color};
  --accent: {accent};
  --accent-foreground: {on_color};
  --background: {pick("background", "#0f172a")};
  --foreground: {pick("foreground", "#f8fafc")};
  --card: {pick("card", "#1e293b")};
  --card-foreground: {pick("card_foreground", "#f1f5f9")};
  --muted: {pick("muted", "#334155")};
  --muted-foreground: {pick("muted_foreground", "#94a3b8")};
  --destructive: {pick("error", "#ef4444")};
  --destructive-foreground: {on_color};
  --success: {pick("success", "#10b981")};
  --warning: {pick("warning", "#f59e0b")};
  --info: {pick("info", "#3b82f6")};
}}

.text-primary {{ color: {primary} !important; }}
.bg-primary {{ background-color: {primary} !important; }}
.text-accent {{ color: {accent} !important; }}
.bg-accent {{ background-color: {accent} !important; }}
.border-primary {{ border-color: {primary} !important; }}
.border-accent {{ border-color: {accent} !important; }}

.btn-primary,
.btn-primary:hover {{
  background-color: {primary} !important;
  border-color: {primary} !important;
}}

input:focus,
select:focus,
textarea:focus {{
  border-color: {primary} !important;
  box-shadow: 0 0 0 1px {primary}25 !important;
}}
"""


__all__ = [
    # Serialization
    "slot_to_css_name",
    "palette_to_css",
    "render_dynamic_styles",
    # Document
    "StyleElement",
    "Document",
    # Synchronizer
    "StyleSynchronizer",
    # Constants
    "THEME_STYLE_ID",
    "DEFAULT_VARIABLE_PREFIX",
]
