"""Theme State for the Nautilus dashboard.

``ThemeState`` owns the active preset and the effective palette. It is
hydrated from a ``PersistentStore`` on construction, writes every change
through to that store, and notifies subscribers whenever the palette
changes.

Example:
    >>> from nautilus.storage import MemoryStore, PersistentStore
    >>> from nautilus.theme import ThemeState
    >>> state = ThemeState(PersistentStore(MemoryStore()))
    >>> state.set_preset("ocean")
    >>> state.update_color("primary", "#111111")
    >>> state.preset
    <ThemePreset.CUSTOM: 'custom'>
"""

from __future__ import annotations

import logging
import random
from typing import Any, Callable

from nautilus.presets import (
    DEFAULT_PALETTE,
    Palette,
    ThemePreset,
    complementary_colors,
    get_preset_palette,
    random_color,
)
from nautilus.storage import CUSTOM_THEME_KEY, PRESET_KEY, PersistentStore

logger = logging.getLogger(__name__)

PaletteListener = Callable[[Palette], None]


def _palette_for(preset: ThemePreset) -> Palette:
    # custom with nothing stored starts from the default palette
    if preset is ThemePreset.CUSTOM:
        return DEFAULT_PALETTE
    return get_preset_palette(preset)


class ThemeState:
    """Live theme state with write-through persistence.

    Invariants:
        - When the preset is not custom, ``colors`` is the catalog palette.
        - When the preset is custom, ``colors`` is the stored custom palette,
          or the palette that was active right before switching to custom.
        - Editing a color outside custom mode switches to custom.

    Store failures never roll back a transition; the in-memory state is
    the source of truth for the session.
    """

    def __init__(self, store: PersistentStore) -> None:
        """Hydrate the state from storage.

        Args:
            store: Persistent store holding the preset and custom palette
        """
        self.store = store
        self._listeners: list[PaletteListener] = []

        self._preset = self.store.read(PRESET_KEY, ThemePreset.DEFAULT, decode=ThemePreset)
        self._stored_custom: Palette | None = self.store.read(
            CUSTOM_THEME_KEY, None, decode=Palette.from_dict
        )

        if self._preset is ThemePreset.CUSTOM and self._stored_custom is not None:
            self._colors = self._stored_custom
        else:
            self._colors = _palette_for(self._preset)

        logger.debug("Hydrated theme state with preset %s", self._preset.value)

    @property
    def preset(self) -> ThemePreset:
        """Active preset identifier."""
        return self._preset

    @property
    def colors(self) -> Palette:
        """Effective palette."""
        return self._colors

    @property
    def stored_custom(self) -> Palette | None:
        """Last custom palette written to storage, if any."""
        return self._stored_custom

    def subscribe(self, listener: PaletteListener) -> Callable[[], None]:
        """Register a palette-changed listener.

        Args:
            listener: Called with the new palette after every change

        Returns:
            A callable that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def set_preset(self, preset: ThemePreset | str) -> None:
        """Switch to a preset.

        Switching to custom restores the stored custom palette, or keeps the
        current palette as the starting point when none was stored.

        Raises:
            ValueError: If the identifier is unknown
        """
        preset = ThemePreset(preset)
        self._set_preset_value(preset)

        if preset is ThemePreset.CUSTOM:
            self._set_colors(self._stored_custom or self._colors)
        else:
            self._set_colors(get_preset_palette(preset))

    def update_color(self, slot: str, value: str) -> None:
        """Change one color and save the result as the custom palette.

        Editing outside custom mode switches the preset to custom first.

        Raises:
            ValueError: If the slot is unknown or the value is empty
        """
        updated = self._colors.with_color(slot, value)

        if self._preset is not ThemePreset.CUSTOM:
            self._set_preset_value(ThemePreset.CUSTOM)

        self._stored_custom = updated
        self.store.write(CUSTOM_THEME_KEY, updated.to_dict())
        self._set_colors(updated)

    def preview_color(self, slot: str, value: str) -> None:
        """Change one color in memory only.

        The preset and the stored custom palette are left untouched, so
        ``reset_to_preset`` discards the preview.
        """
        self._set_colors(self._colors.with_color(slot, value))

    def reset_to_preset(self) -> None:
        """Revert unsaved changes.

        In custom mode this restores the stored custom palette; otherwise
        (or when nothing custom was stored) the catalog palette of the
        active preset.
        """
        if self._preset is ThemePreset.CUSTOM and self._stored_custom is not None:
            self._set_colors(self._stored_custom)
        else:
            self._set_colors(_palette_for(self._preset))

    def apply_theme(self) -> None:
        """Push the current palette to every listener."""
        self._notify()

    def randomize_color(self, slot: str, rng: random.Random | None = None) -> str:
        """Set a slot to a random color.

        Returns:
            The generated color
        """
        color = random_color(rng)
        self.update_color(slot, color)
        return color

    def generate_palette(self) -> tuple[str, str]:
        """Derive secondary and accent from the current primary color.

        Returns:
            The ``(secondary, accent)`` colors that were applied
        """
        secondary, accent = complementary_colors(self._colors.primary)
        self.update_color("secondary", secondary)
        self.update_color("accent", accent)
        return secondary, accent

    def snapshot(self) -> dict[str, Any]:
        """Serializable view of the state."""
        return {
            "preset": self._preset.value,
            "colors": self._colors.to_dict(),
            "has_custom": self._stored_custom is not None,
        }

    def _set_preset_value(self, preset: ThemePreset) -> None:
        logger.debug("Theme preset %s -> %s", self._preset.value, preset.value)
        self._preset = preset
        self.store.write(PRESET_KEY, preset.value)

    def _set_colors(self, palette: Palette) -> None:
        if palette == self._colors:
            return
        self._colors = palette
        self._notify()

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self._colors)
            except Exception:
                logger.exception("Theme listener %r failed", listener)


__all__ = [
    "ThemeState",
    "PaletteListener",
]
