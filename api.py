"""
Directory Search API
Version: 1.0

JSON surface over the search pipeline.

Endpoints:
- GET /search?q=...   -> SearchResponse bundle
- GET /quick-start    -> canned example queries
- GET /health         -> catalog status

The search context is built once in the lifespan hook. If the catalog
cannot be loaded the app stays up in an error state: /search and /health
answer 503 instead of running on a partial catalog.
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, Dict, Optional

from fastapi import APIRouter, FastAPI, HTTPException, Query, Request

from config import get_settings
from services.catalog_loader import CatalogLoadError, load_catalog
from services.search_pipeline import SearchContext, SearchPipeline

logger = logging.getLogger(__name__)

LOAD_ERROR_DETAIL = "Error loading directory data."

router = APIRouter()


def _get_context(request: Request) -> Optional[SearchContext]:
    return getattr(request.app.state, "search_context", None)


@router.get("/search")
def search(request: Request, q: str = Query(default="")) -> Dict[str, Any]:
    """Run the pipeline for one query."""
    context = _get_context(request)
    if context is None:
        raise HTTPException(status_code=503, detail=LOAD_ERROR_DETAIL)
    return SearchPipeline(context).run(q).to_dict()


@router.get("/quick-start")
def quick_start(request: Request) -> Dict[str, Any]:
    context = _get_context(request)
    if context is None:
        raise HTTPException(status_code=503, detail=LOAD_ERROR_DETAIL)
    return {"terms": list(context.quick_start)}


@router.get("/health")
def health(request: Request) -> Dict[str, Any]:
    context = _get_context(request)
    if context is None:
        raise HTTPException(status_code=503, detail=LOAD_ERROR_DETAIL)
    return {"status": "ok", "entries": len(context.entries)}


# =============================================================================
# LIFESPAN (catalog + index initialization)
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load the catalog and build the immutable search context."""
    settings = get_settings()
    logger.info("=" * 60)
    logger.info(f"{settings.APP_NAME.upper()} STARTING (v{settings.APP_VERSION})")
    logger.info(f"Catalog: {settings.CATALOG_SOURCE}")
    logger.info("=" * 60)

    app.state.search_context = None
    try:
        entries = load_catalog(settings.CATALOG_SOURCE, settings.CATALOG_TIMEOUT_SECONDS)
        app.state.search_context = SearchContext.build(entries, settings)
    except CatalogLoadError as e:
        logger.error(f"Catalog load failed: {e} - serving error state")

    yield

    logger.info("Directory search API shutting down")


# =============================================================================
# APP CONFIGURATION
# =============================================================================

app = FastAPI(
    title="Civic Service Directory API",
    description="Rule-based query understanding and ranking over the civic-service catalog.",
    version="1.0.0",
    lifespan=lifespan,
)
app.include_router(router)


# =============================================================================
# MAIN
# =============================================================================

if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s [DIRECTORY-API] %(levelname)s: %(message)s"
    )

    uvicorn.run(
        "api:app",
        host="0.0.0.0",
        port=8000,
        reload=False,
        log_level=settings.LOG_LEVEL.lower()
    )
