"""FastAPI application factory"""

import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.api.error import register_error_handlers
from src.api.routes import plans, subscription

logger = logging.getLogger(__name__)


def create_app(config) -> FastAPI:
    """
    Build the API application

    Args:
        config: ApplicationConfig-like settings object

    Returns:
        Configured FastAPI app
    """
    app = FastAPI(
        title="Clinic Subscription Service",
        description="Subscription lifecycle and entitlement checks for clinic dashboards",
    )

    if config.CORS_ORIGINS:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=config.CORS_ORIGINS,
            allow_credentials=config.CORS_ALLOW_CREDENTIALS,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    register_error_handlers(app)
    app.include_router(subscription.router)
    app.include_router(plans.router)

    @app.get("/health", tags=["Health"])
    async def health():
        return {"status": "ok"}

    logger.info("API application created")
    return app
