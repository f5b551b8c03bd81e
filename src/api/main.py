import logging
import sys
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI

from src.adapters.sqlite.migrator import SQLiteMigrator
from src.api.deps import get_settings
from src.app_shell.config import configure_logging, validate_ops_rules
from src.rules.loader import load_rules

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    settings = get_settings()

    # Load rules and validate on startup (fail-fast)
    try:
        rules = load_rules(settings.rules_path)
    except (FileNotFoundError, ValueError) as e:
        configure_logging()
        logger.critical("Rules load failed: %s", e)
        sys.exit(1)

    configure_logging(rules.ops.log_level)
    validate_ops_rules(rules)
    logger.info("Rules loaded from %s", settings.rules_path)

    settings.data_dir.mkdir(parents=True, exist_ok=True)
    applied = SQLiteMigrator(settings.db_path).run_migrations()
    if applied:
        logger.info("Applied migrations: %s", ", ".join(applied))

    yield


app = FastAPI(
    title="Storefront Launch Controls API",
    version="0.1.0",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)


@app.get("/health")
def health_check() -> dict[str, Any]:
    """Health check endpoint."""
    return {"status": "ok", "service": "api"}


# --- Routers ---
from src.api.routes import (  # noqa: E402
    admin_shipping_tour,
    admin_site_visibility,
    auth,
    storefront,
    users,
)

app.include_router(auth.router, prefix="/api/auth", tags=["Auth"])
app.include_router(
    admin_site_visibility.router, prefix="/api/admin/site-visibility", tags=["Site Visibility"]
)
app.include_router(
    admin_shipping_tour.router, prefix="/api/admin/shipping-tour", tags=["Shipping Tour"]
)
app.include_router(users.router, prefix="/api/users", tags=["Users"])
# Catch-all storefront pages go last
app.include_router(storefront.router, prefix="", tags=["Storefront"])
