"""
JetSet Backend - Main Application
FastAPI application entry point
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
import logging
import time

from app.config import settings
from app.logging_config import setup_logging
from app.routes.common import error_response
from app.routes.flights import router as flights_router
from app.routes.hotels import router as hotels_router
from app.routes.payments import router as payments_router
from app.services.errors import TravelServiceError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifecycle"""
    # Startup
    setup_logging(settings.log_level)
    logger.info("JetSet Backend starting...")
    logger.info(f"Debug mode: {settings.debug}")
    logger.info(f"Amadeus API: {'configured' if settings.amadeus_configured else 'not configured'}")
    logger.info(f"Fallback data: {'enabled' if settings.enable_fallback_data else 'disabled'}")

    yield

    # Shutdown
    logger.info("JetSet Backend shutting down...")
    from app.services.amadeus_service import amadeus_service
    await amadeus_service.close()


# Create FastAPI application
app = FastAPI(
    title="JetSet API",
    description="""
    ## JetSet Travel API

    Hotel and flight search on top of Amadeus Self-Service, with
    placeholder data when the upstream is unavailable.

    ### Modules

    - **Hotels**: destinations, search, offers, availability, details, booking
    - **Flights**: search and flight orders
    - **Payments**: mock card payment gateway
    """,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)

# CORS Middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=False,  # Must be False when using wildcard "*" for origins
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["*"],
)


# Request timing middleware
@app.middleware("http")
async def add_process_time_header(request: Request, call_next):
    start_time = time.time()
    response = await call_next(request)
    process_time = time.time() - start_time
    response.headers["X-Process-Time"] = str(round(process_time * 1000, 2))
    return response


# Exception handlers
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.warning(f"Invalid request to {request.url.path}: {exc.errors()}")
    return error_response(400, "Invalid request", error=str(exc.errors()))


@app.exception_handler(TravelServiceError)
async def travel_service_exception_handler(request: Request, exc: TravelServiceError):
    logger.error(f"Unhandled service error on {request.url.path}: {exc}")
    return error_response(exc.status_code, exc.message)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unexpected error on {request.url.path}: {exc}")
    return error_response(
        500,
        "Internal Server Error",
        error=str(exc) if settings.debug else "An unexpected error occurred"
    )


# Include routers
app.include_router(hotels_router)
app.include_router(flights_router)
app.include_router(payments_router)


# Root endpoint
@app.get("/", tags=["Health"])
async def root():
    """API root"""
    return {
        "name": "JetSet API",
        "version": "1.0.0",
        "status": "running",
        "docs": "/docs",
        "health": "/health"
    }


@app.get("/health", tags=["Health"])
async def health_check():
    return {
        "status": "healthy",
        "services": {
            "api": "ok",
            "amadeus": "ok" if settings.amadeus_configured else "not_configured",
            "fallback": "enabled" if settings.enable_fallback_data else "disabled"
        }
    }


# Run with: uvicorn app.main:app --reload
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )
