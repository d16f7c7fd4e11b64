"""FastAPI application factories for the auth and recipe-catalogue services."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from src.api import auth, categories, grocery, ingredients, recipe_ingredients, recipes
from src.api.health import build_health_router
from src.config import get_settings
from src.logging_config import configure_logging
from src.shared.errors import register_exception_handlers
from src.shared.gateway import ExtractUserFromGatewayHeaders, LocalGatewayMiddleware
from src.shared.request_context import RequestContextMiddleware
from src.shared.tokens import require_secret

logger = logging.getLogger(__name__)

AUTH_SERVICE = "auth"
CATALOGUE_SERVICE = "recipe-catalogue"


def _build_app(service_name: str, title: str, description: str) -> FastAPI:
    settings = get_settings()
    configure_logging(service_name)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Handle application startup and shutdown events."""
        logger.info(f"Starting {service_name} service ({settings.environment})")
        yield
        logger.info(f"Stopping {service_name} service")

    app = FastAPI(title=title, description=description, version="0.1.0", lifespan=lifespan)
    register_exception_handlers(app)

    # Middleware added last runs first: request context, then gateway shim, then extraction
    app.add_middleware(ExtractUserFromGatewayHeaders)
    if settings.local_gateway:
        logger.warning("LOCAL_GATEWAY is enabled; bearer tokens are verified in-process")
        app.add_middleware(LocalGatewayMiddleware)
    app.add_middleware(RequestContextMiddleware)

    app.include_router(build_health_router(service_name))
    return app


def create_auth_app() -> FastAPI:
    """Build the auth service. Fails fast when JWT_SECRET is missing."""
    require_secret()
    app = _build_app(
        AUTH_SERVICE,
        title="Meal Prep Auth API",
        description="Registration, login and token issuance",
    )
    app.include_router(auth.router)
    return app


def create_catalogue_app() -> FastAPI:
    """Build the recipe-catalogue service."""
    settings = get_settings()
    if settings.local_gateway:
        require_secret(settings)
    app = _build_app(
        CATALOGUE_SERVICE,
        title="Meal Prep Recipe Catalogue API",
        description="Recipes, ingredients, compositions and grocery lists",
    )
    app.include_router(recipes.router)
    app.include_router(recipe_ingredients.router)
    app.include_router(categories.router)
    app.include_router(ingredients.router)
    app.include_router(grocery.router)
    return app
