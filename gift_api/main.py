import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from gift_api.core.config import settings
from gift_api.core.errors import register_exception_handlers
from gift_api.integrations.products_client import ProductsClient
from gift_api.services.memory_product_service import InMemoryProductService
from gift_api.services.product_service import ProductService
from gift_api.services.remote_product_service import RemoteProductService

from gift_api.api.products import router as products_router


logger = logging.getLogger(__name__)


def build_product_service() -> ProductService:
    """
    Forward to a remote products API when PRODUCTS_API_URL is set,
    otherwise keep products in memory.
    """
    if settings.PRODUCTS_API_URL:
        logger.info("Using remote products API at %s", settings.PRODUCTS_API_URL)
        client = ProductsClient(
            settings.PRODUCTS_API_URL,
            timeout=settings.PRODUCTS_API_TIMEOUT,
        )
        return RemoteProductService(client)

    logger.info("PRODUCTS_API_URL not set, using in-memory store")
    return InMemoryProductService()


def create_app(product_service: Optional[ProductService] = None) -> FastAPI:

    logging.basicConfig(level=settings.LOG_LEVEL)

    # -------------------------------------------------
    # Create FastAPI App
    # -------------------------------------------------

    app = FastAPI(title="Gift Products API")

    if product_service is None:
        product_service = build_product_service()

    app.state.product_service = product_service

    # -------------------------------------------------
    # Middleware & error mapping
    # -------------------------------------------------

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS or ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # -------------------------------------------------
    # Routers
    # -------------------------------------------------

    app.include_router(products_router)

    @app.get("/health")
    def health():
        return {
            "status": "ok",
            "message": "Gift products API is running",
        }

    return app


app = create_app()
