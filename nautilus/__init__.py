__version__ = "1.0.0"

from typing import Any, TYPE_CHECKING

if TYPE_CHECKING:
    from nautilus.presets import Palette, ThemePreset
    from nautilus.storage import PersistentStore
    from nautilus.styles import StyleSynchronizer
    from nautilus.theme import ThemeState


# Lazy import mapping
_LAZY_IMPORTS = {
    # Presets
    "Palette": ("nautilus.presets", "Palette"),
    "PaletteError": ("nautilus.presets", "PaletteError"),
    "ThemePreset": ("nautilus.presets", "ThemePreset"),
    "DEFAULT_PALETTE": ("nautilus.presets", "DEFAULT_PALETTE"),
    "get_preset_palette": ("nautilus.presets", "get_preset_palette"),
    # Storage
    "TextStore": ("nautilus.storage", "TextStore"),
    "MemoryStore": ("nautilus.storage", "MemoryStore"),
    "JsonFileStore": ("nautilus.storage", "JsonFileStore"),
    "PersistentStore": ("nautilus.storage", "PersistentStore"),
    # Theme
    "ThemeState": ("nautilus.theme", "ThemeState"),
    # Styles
    "Document": ("nautilus.styles", "Document"),
    "StyleSynchronizer": ("nautilus.styles", "StyleSynchronizer"),
    "palette_to_css": ("nautilus.styles", "palette_to_css"),
}
__all__ = list(_LAZY_IMPORTS)


def __getattr__(name: str) -> Any:
    if name in _LAZY_IMPORTS:
        module_path, class_name = _LAZY_IMPORTS[name]
        module = __import__(module_path, fromlist=[class_name])
        return getattr(module, class_name)
    else:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


def __dir__() -> list[str]:
    """Support for dir() and autocomplete."""
    return sorted(__all__ + ["presets", "storage", "theme", "styles", "dashboard", "config", "__version__"])
