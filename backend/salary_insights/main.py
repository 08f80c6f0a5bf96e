from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from salary_insights.api.routes.health import router as health_router
from salary_insights.api.routes.insights import router as insights_router
from salary_insights.config import get_settings
from salary_insights.log import configure_logging


def create_app() -> FastAPI:
    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(title="Salary Insights API", version="0.1.0")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health_router)
    app.include_router(insights_router)
    return app

app = create_app()
