"""
InvPay Backend - Invoice Generation Service
Main application entry point with FastAPI server
"""

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import uvicorn
from contextlib import asynccontextmanager
import logging
import sys
from datetime import datetime

from config.settings import Settings
from api.routes import agent_router, invoice_router
from services.semantic_kernel_service import SemanticKernelService

settings = Settings()

# Create console handler with UTF-8 encoding for Windows
console_handler = logging.StreamHandler(sys.stdout)
console_handler.setLevel(settings.log_level)

# Create file handler with UTF-8 encoding
file_handler = logging.FileHandler(settings.log_file, encoding='utf-8')
file_handler.setLevel(settings.log_level)

# Create formatter
formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
console_handler.setFormatter(formatter)
file_handler.setFormatter(formatter)

# Configure root logger
logging.basicConfig(
    level=settings.log_level,
    handlers=[console_handler, file_handler]
)

logger = logging.getLogger(__name__)

# Global service instance
sk_service = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifespan events"""
    global sk_service

    # Startup
    logger.info("[STARTUP] Starting InvPay invoice backend...")

    try:
        logger.info("[STARTUP] Initializing invoice plugin...")
        sk_service = SemanticKernelService(settings)
        await sk_service.initialize()

        # Store in app state for access in routes
        app.state.sk_service = sk_service

        logger.info("[STARTUP] InvPay invoice backend is ready to serve requests!")

    except Exception as e:
        logger.error(f"[STARTUP] Failed to initialize services: {str(e)}")
        raise e

    yield

    # Shutdown
    logger.info("[SHUTDOWN] Shutting down InvPay invoice backend...")

    try:
        if sk_service:
            await sk_service.cleanup()
        logger.info("[SHUTDOWN] Shutdown completed successfully!")

    except Exception as e:
        logger.error(f"[SHUTDOWN] Error during shutdown: {str(e)}")


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    description="Rule-based invoice generation from natural language prompts",
    version="1.0.0",
    lifespan=lifespan
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routes
app.include_router(invoice_router, prefix=settings.api_prefix)
app.include_router(agent_router, prefix=settings.api_prefix)


# Error handlers
@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    """Handle HTTP exceptions"""
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "success": False,
            "message": exc.detail,
            "errors": [exc.detail]
        }
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle general exceptions"""
    logger.error(f"Unhandled exception: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "message": "Internal server error",
            "errors": [str(exc)]
        }
    )


@app.get("/")
async def root():
    """Health check endpoint with startup info"""
    return {
        "message": f"{settings.app_name} is running",
        "status": "healthy",
        "version": "1.0.0",
        "services": {
            "invoice_plugin": sk_service is not None and sk_service.is_initialized()
        },
        "startup_time": datetime.now().isoformat()
    }


@app.get("/health")
async def health_check():
    """Detailed health check"""
    health_status = {
        "status": "healthy",
        "timestamp": datetime.now().isoformat(),
        "services": {
            "semantic_kernel": sk_service is not None and sk_service.is_initialized()
        }
    }

    if not all(health_status["services"].values()):
        health_status["status"] = "degraded"

        for service, status in health_status["services"].items():
            if not status:
                logger.warning(f"Service '{service}' is not healthy")

    return health_status


if __name__ == "__main__":
    # Run the application
    uvicorn.run(
        "main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=settings.debug,
        log_level=settings.log_level.lower()
    )
