"""FastAPI application for dashboard settings and theming."""

from datetime import datetime, timezone

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from nautilus.config import DashboardConfig, load_config
from nautilus.presets import SLOT_LABELS, PaletteError, preset_options
from nautilus.storage import JsonFileStore, MemoryStore, PersistentStore, TextStore
from nautilus.styles import Document, StyleSynchronizer, render_dynamic_styles
from nautilus.theme import ThemeState

from .database import SettingsDatabase
from .logging import configure_logging, get_logger
from .models import (
    AppSettings,
    AppSettingsUpdate,
    ColorUpdate,
    HealthResponse,
    PresetsResponse,
    PresetUpdate,
    SlotRequest,
    ThemeResponse,
)

logger = get_logger("dashboard.api")


def _theme_backend(config: DashboardConfig, db: SettingsDatabase) -> TextStore:
    """Select the text store holding theme preferences."""
    if config.theme_store == "file":
        return JsonFileStore(config.theme_file)
    if config.theme_store == "memory":
        return MemoryStore()
    return db


def create_app(
    config: DashboardConfig | None = None,
    db_instance: SettingsDatabase | None = None,
    store: TextStore | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    This is the single construction point of the theme state and its
    style synchronizer; routes receive them through dependencies.

    Args:
        config: Dashboard configuration (read from the environment if None)
        db_instance: Settings database (opened from ``config.db_path`` if None)
        store: Text store for theme preferences (chosen by
            ``config.theme_store`` if None)
    """
    config = config or load_config()
    configure_logging(config.log_level, config.log_json)

    db = db_instance if db_instance is not None else SettingsDatabase(config.db_path)
    backend = store if store is not None else _theme_backend(config, db)

    theme = ThemeState(PersistentStore(backend))
    document = Document()
    synchronizer = StyleSynchronizer(document)
    synchronizer.attach(theme)
    logger.info(
        "Theme ready: preset=%s store=%s", theme.preset.value, type(backend).__name__
    )

    app = FastAPI(
        title="Nautilus Dashboard API",
        description="Settings and theming backend for the Nautilus dashboard",
        version="1.0.0",
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.config = config
    app.state.db = db
    app.state.theme = theme
    app.state.document = document
    app.state.synchronizer = synchronizer

    def get_db() -> SettingsDatabase:
        """Get database instance."""
        return db

    def get_theme() -> ThemeState:
        """Get theme state."""
        return theme

    @app.exception_handler(PaletteError)
    async def palette_error_handler(request: Request, exc: PaletteError):
        return JSONResponse(status_code=422, content={"detail": str(exc)})

    @app.get("/api/theme", response_model=ThemeResponse)
    async def get_theme_state(state: ThemeState = Depends(get_theme)):
        """Get the active preset and palette."""
        return ThemeResponse(**state.snapshot())

    @app.put("/api/theme/preset", response_model=ThemeResponse)
    async def set_preset(body: PresetUpdate, state: ThemeState = Depends(get_theme)):
        """Switch preset."""
        state.set_preset(body.preset)
        return ThemeResponse(**state.snapshot())

    @app.patch("/api/theme/colors", response_model=ThemeResponse)
    async def update_color(body: ColorUpdate, state: ThemeState = Depends(get_theme)):
        """Edit one color; switches to the custom preset."""
        state.update_color(body.slot, body.value)
        return ThemeResponse(**state.snapshot())

    @app.post("/api/theme/preview", response_model=ThemeResponse)
    async def preview_color(body: ColorUpdate, state: ThemeState = Depends(get_theme)):
        """Edit one color without saving it."""
        state.preview_color(body.slot, body.value)
        return ThemeResponse(**state.snapshot())

    @app.post("/api/theme/reset", response_model=ThemeResponse)
    async def reset_theme(state: ThemeState = Depends(get_theme)):
        """Discard unsaved changes."""
        state.reset_to_preset()
        return ThemeResponse(**state.snapshot())

    @app.post("/api/theme/randomize", response_model=ThemeResponse)
    async def randomize_color(body: SlotRequest, state: ThemeState = Depends(get_theme)):
        """Set one slot to a random color."""
        state.randomize_color(body.slot)
        return ThemeResponse(**state.snapshot())

    @app.post("/api/theme/generate", response_model=ThemeResponse)
    async def generate_palette(state: ThemeState = Depends(get_theme)):
        """Derive secondary and accent from the primary color."""
        state.generate_palette()
        return ThemeResponse(**state.snapshot())

    @app.get("/api/theme/presets", response_model=PresetsResponse)
    async def list_presets(state: ThemeState = Depends(get_theme)):
        """Get preset picker options."""
        return PresetsResponse(
            presets=preset_options(state.colors),
            slot_labels=SLOT_LABELS,
        )

    @app.get("/api/theme.css", response_class=PlainTextResponse)
    async def theme_stylesheet():
        """Get the synchronized theme stylesheet."""
        return PlainTextResponse(synchronizer.stylesheet, media_type="text/css")

    @app.get("/api/theme/dynamic.css", response_class=PlainTextResponse)
    async def dynamic_stylesheet(
        state: ThemeState = Depends(get_theme),
        settings_db: SettingsDatabase = Depends(get_db),
    ):
        """Get the component variable sheet with app settings fallbacks."""
        css = render_dynamic_styles(state.colors, settings_db.get_app_settings())
        return PlainTextResponse(css, media_type="text/css")

    @app.get("/api/settings/app", response_model=AppSettings)
    async def get_app_settings(settings_db: SettingsDatabase = Depends(get_db)):
        """Get application branding settings."""
        return AppSettings(**settings_db.get_app_settings())

    @app.post("/api/settings/app", response_model=AppSettings)
    async def update_app_settings(
        body: AppSettingsUpdate,
        settings_db: SettingsDatabase = Depends(get_db),
    ):
        """Update application branding settings."""
        saved = settings_db.save_app_settings(body.model_dump(exclude_unset=True))
        logger.info("App settings updated: %s", sorted(body.model_dump(exclude_unset=True)))
        return AppSettings(**saved)

    @app.get("/api/health", response_model=HealthResponse)
    async def health_check(settings_db: SettingsDatabase = Depends(get_db)):
        """Service health check."""
        try:
            # Simple query to check DB
            settings_db.keys()
            db_status = "healthy"
        except Exception:
            logger.exception("Settings database health check failed")
            db_status = "unhealthy"

        return HealthResponse(
            status="healthy" if db_status == "healthy" else "degraded",
            database=db_status,
            timestamp=datetime.now(timezone.utc),
        )

    return app
