from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from school_admin.core.config import settings
from school_admin.core.database import init_db
from school_admin.core.handlers import register_exception_handlers
from school_admin.core.logging import setup_logging
from school_admin.api.v1.router import api_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger = setup_logging(settings.LOG_LEVEL)
    logger.info("Starting %s v%s", settings.PROJECT_NAME, settings.APP_VERSION)
    init_db()
    yield
    logger.info("Shutting down %s", settings.PROJECT_NAME)


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.APP_VERSION,
        debug=settings.DEBUG,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.BACKEND_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Include API router
    app.include_router(api_router, prefix=settings.API_V1_PREFIX)

    @app.get("/")
    def root():
        """
        Health check endpoint
        """
        return {
            "message": "Welcome to School Admin API",
            "docs": "/docs",
            "version": settings.APP_VERSION
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("school_admin.main:app", host=settings.HOST, port=settings.PORT, reload=settings.DEBUG)
