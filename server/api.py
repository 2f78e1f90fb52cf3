"""FastAPI server exposing the recommendation and search pipelines."""

import os
from typing import List

from fastapi import FastAPI
from pydantic import BaseModel, Field

from aurafit_app.app import AuraFitApp
from aurafit_app.config import redacted_summary
from aurafit_app.logging_config import configure_logging

configure_logging()

MAX_IMAGES = 4


class RecommendationRequest(BaseModel):
    """Request payload for a makeup recommendation."""

    prompt: str = Field(..., min_length=1, max_length=2000, description="Free-text makeup request")
    images_base64: List[str] = Field(default_factory=list, max_length=MAX_IMAGES)


class CatalogSearchRequest(BaseModel):
    """Request payload for a catalogue search."""

    query: str = Field(..., min_length=1, max_length=2000)
    images_base64: List[str] = Field(default_factory=list, max_length=MAX_IMAGES)


def create_app(aurafit_app: AuraFitApp | None = None) -> FastAPI:
    """Build the ASGI app around an injected (or default) :class:`AuraFitApp`."""

    service = aurafit_app or AuraFitApp()
    api = FastAPI(title="AURAFIT Recommendations", version="0.1.0")

    @api.get("/healthz")
    async def healthcheck() -> dict:
        """Lightweight readiness probe."""

        return {
            "status": "ok",
            "service": "aurafit-recommender",
            "environment": service.config.environment or "local",
            "provider": service.provider.name,
            "catalog_size": len(service.catalog),
            "config": redacted_summary(service.config),
        }

    @api.post("/recommendations")
    def recommend(request: RecommendationRequest) -> dict:
        """Return filters and matching products; failures degrade to fallback looks."""

        return service.get_recommendation(request.prompt, request.images_base64).to_dict()

    @api.post("/catalog/search")
    def search(request: CatalogSearchRequest) -> dict:
        """Search the catalogue by text, optionally assisted by images."""

        return service.search_catalog(request.query, request.images_base64).to_dict()

    return api


def get_app() -> FastAPI:
    """Expose the FastAPI instance for ASGI servers."""

    return create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("server.api:get_app", factory=True, host="0.0.0.0", port=int(os.getenv("PORT", "8080")), reload=False)
