from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
import httpx
import logging
import os

from config.settings import settings, configure_logging
from core.category import CategoryService
from core.exceptions import NFTServiceError
from core.indexer import IndexerClient
from core.nft import NFTService
from db.session import make_async_engine, make_session_factory, create_tables_async
from utilities.middleware import LoggingMiddleware, ErrorLoggingMiddleware
from utilities.response import error_response

# Import API routers
from api.nft import router as nft_router
from api.user import router as user_router
from api.category import router as category_router

logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager"""
    # Startup
    logger.info("Starting NFT Aggregation API...")

    # Services may be injected beforehand (tests, embedding)
    owned = getattr(app.state, "nft_service", None) is None
    if owned:
        engine = make_async_engine(settings.DATABASE_URL_ASYNC)
        await create_tables_async(engine)
        session_factory = make_session_factory(engine)
        indexer = IndexerClient(
            settings.INDEXER_URL,
            client=httpx.AsyncClient(timeout=settings.INDEXER_TIMEOUT)
        )
        app.state.session_factory = session_factory
        app.state.nft_service = NFTService(indexer, session_factory)
        app.state.category_service = CategoryService(session_factory)
        logger.info(f"Using indexer at {settings.INDEXER_URL}")

    yield

    # Shutdown
    if owned:
        await app.state.nft_service.indexer.aclose()
        await engine.dispose()
    logger.info("Shutting down NFT Aggregation API...")

def create_app() -> FastAPI:
    app = FastAPI(
        title="NFT Aggregation API",
        description="Blockchain indexer NFTs merged with marketplace categories, views and follows",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Add custom middleware
    app.add_middleware(ErrorLoggingMiddleware)
    app.add_middleware(LoggingMiddleware)

    @app.exception_handler(NFTServiceError)
    async def service_exception_handler(request: Request, exc: NFTServiceError):
        """Handle service errors"""
        return JSONResponse(
            status_code=exc.status_code,
            content=error_response(message=exc.message)
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        """Handle HTTP exceptions"""
        return JSONResponse(
            status_code=exc.status_code,
            content=error_response(
                message=exc.detail if isinstance(exc.detail, str) else str(exc.detail)
            )
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Handle general exceptions"""
        logger.error(f"Unhandled exception: {exc}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content=error_response(message="Internal server error")
        )

    # Health check
    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        return {"status": "healthy", "message": "NFT Aggregation API is running"}

    # Root endpoint
    @app.get("/")
    async def root():
        """Root endpoint"""
        return {
            "message": "NFT Aggregation API",
            "version": "1.0.0",
            "docs": "/docs",
            "redoc": "/redoc"
        }

    # Marketplace routes
    app.include_router(user_router, prefix="/api")
    app.include_router(nft_router, prefix="/api")
    app.include_router(category_router, prefix="/api")
    # Wallet app and time machine front-ends share the NFT routes
    app.include_router(nft_router, prefix="/api/app")
    app.include_router(nft_router, prefix="/api/tm")

    return app

configure_logging()
app = create_app()

if __name__ == "__main__":
    import uvicorn
    port = int(os.getenv("PORT", 8000))
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=port,
        reload=True,
        log_level=settings.LOG_LEVEL.lower()
    )
