"""
FastAPI application factory.
Creates the app with CORS, lazy service initialization, and router registration.
Portal page at /, JSON API under /api, Swagger UI at /docs.
"""
import sys
from pathlib import Path
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Ensure src/ is on the path
_src_dir = str(Path(__file__).parent.parent)
if _src_dir not in sys.path:
    sys.path.insert(0, _src_dir)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown logic for the FastAPI app."""
    import config
    from utils.logger import get_logger

    logger = get_logger()
    app.state.logger = logger

    # Google Sheets and Gemini clients are opened on first use by the
    # dependencies, so a bad credential does not stop the page from loading
    app.state.customer_source = None
    app.state.summary_generator = None

    logger.info(f"Portal starting on port {config.API_PORT}", component="API")
    logger.info(f"Swagger UI: http://localhost:{config.API_PORT}/docs", component="API")

    yield

    logger.info("Shutting down portal", component="API")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    import config

    app = FastAPI(
        title=f"{config.PORTAL_TITLE} API",
        description=(
            "Customer delivery status portal. Looks up a customer by DNI in the "
            "tracking Google Sheet, classifies the billing, registration and "
            "pre-delivery stages, and adds a Gemini-written summary."
        ),
        version=config.PORTAL_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.API_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from api.routes.portal_routes import router as portal_router
    from api.routes.customer_routes import router as customer_router
    from api.routes.health_routes import router as health_router

    app.include_router(portal_router, tags=["Portal"])
    app.include_router(customer_router, prefix="/api", tags=["Customers"])
    app.include_router(health_router, prefix="/health", tags=["Health"])

    return app
