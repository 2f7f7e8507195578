from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from craft_caravan.config import Settings
from craft_caravan.dependencies import get_settings
from craft_caravan.logging_config import configure_logging
from craft_caravan.routers import cards, catalog, submissions


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.log_level)
    app = FastAPI(title="Craft Caravan Site API", version="0.1.0")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    app.include_router(submissions.router)
    app.include_router(catalog.router)
    app.include_router(cards.router)

    @app.get("/health")
    async def health_check():
        return {"status": "ok"}

    return app


app = create_app()
