"""
FastAPI application - Main entry point
"""

from dotenv import load_dotenv

load_dotenv()

import logging
from datetime import datetime
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from src.api.catalog_router import router as catalog_router
from src.catalog.dependencies import build_catalog_store
from src.catalog.state import CatalogStore
from src.catalog.validation import FormValidationError
from src.utils.config_loader import load_catalog_config

# Setup logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def create_app(catalog_store: Optional[CatalogStore] = None) -> FastAPI:
    app = FastAPI(
        title="Product Catalogue API",
        description="Products and comments backed by a remote collection API with local fallback",
        version="1.0.0",
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Configure appropriately for production
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    if catalog_store is None:
        cfg = load_catalog_config()
        logging.getLogger().setLevel(cfg.logging.level)
        catalog_store = build_catalog_store(cfg)
    app.state.catalog_store = catalog_store

    app.include_router(catalog_router, prefix="/api/v1", tags=["Catalogue"])

    @app.exception_handler(FormValidationError)
    async def form_validation_error_handler(request: Request, exc: FormValidationError):
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={
                "error": "validation_error",
                "message": exc.message,
                "field_errors": exc.field_errors,
            },
        )

    @app.get("/health", tags=["Health"])
    async def health_check():
        """Health check including the local fallback store."""
        local = app.state.catalog_store.service.local
        store = getattr(local, "store", None)
        local_ok = store.ping() if hasattr(store, "ping") else True
        return {"status": "healthy", "local_storage": local_ok, "timestamp": datetime.now().isoformat()}

    return app


app = create_app()
