"""
FastAPI application entrypoint
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI

from api.dependencies import get_gateway
from api.middleware import RequestIDMiddleware
from api.routes import payments as payments_routes
from core.config import settings
from core.exceptions import register_exception_handlers
from core.logging_config import configure_logging, get_logger
from core.response import success_response
from core.settings import payment_settings


# Configure logging at the entrypoint, not as an import side effect
configure_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(
        "application_startup",
        environment=settings.ENVIRONMENT,
        provider=payment_settings.default_provider,
        test=payment_settings.airwallex.test,
    )
    yield
    # Only close a gateway that was actually built
    if get_gateway.cache_info().currsize:
        get_gateway().close()
        get_gateway.cache_clear()
    logger.info("application_shutdown")


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        debug=settings.DEBUG,
        lifespan=lifespan,
        description="Card payments through the Airwallex payment-intent API",
    )

    app.add_middleware(RequestIDMiddleware)
    register_exception_handlers(app)

    app.include_router(payments_routes.router, prefix="/api/v1")

    @app.get("/", tags=["Root"])
    async def root():
        return success_response(
            data={
                "name": settings.PROJECT_NAME,
                "version": settings.VERSION,
                "docs": "/docs",
            }
        )

    @app.get("/health", tags=["Health"])
    async def health_check():
        return success_response(data={"status": "healthy"})

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
        log_level="debug" if settings.DEBUG else "info"
    )
