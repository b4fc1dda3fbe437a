"""
Debug server using FastAPI for local development and testing.
Run with: uvicorn fedsearch_server.debug_server:create_app --factory --reload --host 0.0.0.0 --port 3000
"""
import logging
from typing import Any, Dict, List, Optional, Sequence

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from .core.config import SearchConfig, load_config, load_env
from .core.error import EmptyQueryError, log_error
from .core.pipeline import SearchPipeline
from .core.preprocessor import Expander
from .models.schema import record_to_dict
from .retrievers.base import Connector

logger = logging.getLogger(__name__)


class ResultRecordModel(BaseModel):
    """Wire shape of one ranked hit."""

    title: str
    source: str
    link: str
    original_relevance_score: float = Field(ge=0)
    normalized_score: float = Field(ge=0, le=1)


def create_app(
    config: Optional[SearchConfig] = None,
    connectors: Optional[Sequence[Connector]] = None,
    expander: Optional[Expander] = None,
) -> FastAPI:
    """
    Build the debug app.

    Configuration is loaded from the environment when not given, so a
    missing EUROPEANA_API_KEY stops the server at startup.
    """
    if config is None:
        load_env()
        config = load_config()
    pipeline = SearchPipeline(config, connectors, expander)

    app = FastAPI(
        title="Federated Search Debug Server",
        description="Debug interface for synonym-expanded federated search",
        version="1.0.0",
    )

    # Enable CORS for local development
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/")
    async def root():
        """Health check endpoint."""
        return {"status": "ok", "service": "Federated Search Debug Server"}

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "healthy"}

    @app.get("/search", response_model=List[ResultRecordModel])
    async def search(q: Optional[str] = Query(default=None, description="Search query")) -> List[Dict[str, Any]]:
        """
        Federated search endpoint: results from all providers, best first.
        """
        try:
            ranked = await pipeline.handle_search(q)
        except EmptyQueryError as e:
            log_error(e, logger, context={"parameter": "q"}, level="WARNING")
            detail = e.to_dict()
            detail["details"] = {**detail["details"], "parameter": "q"}
            raise HTTPException(status_code=400, detail=detail)
        except Exception as e:
            log_error(e, logger, context={"endpoint": "/search", "q": q})
            raise HTTPException(status_code=500, detail=f"Search failed: {str(e)}")
        return [record_to_dict(r) for r in ranked]

    @app.get("/debug/expand")
    async def debug_expand(query: str):
        """
        Debug endpoint to see how a query is expanded.
        """
        return await pipeline.expand_query(query)

    return app


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "fedsearch_server.debug_server:create_app",
        factory=True,
        host="0.0.0.0",
        port=3000,
        reload=True,
        log_level="info",
    )
