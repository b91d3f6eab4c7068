import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from sqlalchemy import text

from stores_api.core.config import configure_logging, settings
from stores_api.core.handlers import register_exception_handlers
from stores_api.core.security import add_security_headers
from stores_api.database import engine
from stores_api.init_db import init_tables
from stores_api.routes import store

logger = logging.getLogger(__name__)

READY_MESSAGE = "Stores API is running. Use /stores endpoint. Accepts JSON and XML."


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Tables are created if missing; there are no migrations
    init_tables()
    logger.info(f"{settings.APP_TITLE} ready, database at {engine.url.render_as_string(hide_password=True)}")
    yield


def create_app() -> FastAPI:
    app = FastAPI(title=settings.APP_TITLE, lifespan=lifespan)

    # Security headers are applied uniformly, no interaction with the routes
    app.middleware("http")(add_security_headers)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)
    app.include_router(store.router)

    @app.get("/", response_class=PlainTextResponse)
    def root():
        return READY_MESSAGE

    @app.get("/health")
    def health():
        """Health check endpoint for Docker health checks"""
        try:
            with engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            return {"status": "healthy", "database": "connected"}
        except Exception as e:
            logger.error(f"Health check failed: {e}")
            return JSONResponse(
                status_code=503,
                content={"status": "unhealthy", "database": "disconnected"},
            )

    return app


configure_logging()
app = create_app()


def run():
    import uvicorn

    logger.info(f"{settings.APP_TITLE} listening on port {settings.PORT}")
    uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_level=settings.LOG_LEVEL.lower())


if __name__ == "__main__":
    run()
