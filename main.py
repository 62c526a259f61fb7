"""
PDF Research Assistant - Main application entry point
"""
import time
import logging
from contextlib import asynccontextmanager
from typing import Dict, Any

from fastapi import FastAPI, Request, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from config import settings
from api.dependencies import (
    get_credential_store,
    get_workspace,
    get_llm_service,
    get_document_service,
    get_question_service,
    get_analysis_service,
    get_export_service
)

from api.document_controller import router as document_router
from api.question_controller import router as question_router
from api.analysis_controller import router as analysis_router
from api.settings_controller import router as settings_router
from api.export_controller import router as export_router

from utils.error_handlers import ErrorHandlingMiddleware, get_status_code_for_error_code
from utils.logging import setup_logging, log_api_request
from utils.exceptions import AssistantException, ErrorCode

logger = setup_logging()

# Global application state
app_state: Dict[str, Any] = {}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager for startup and shutdown events
    """
    start_time = time.time()
    app_state["start_time"] = start_time

    logger.info(f"Starting {settings.app_name} v{settings.app_version}...")
    logger.info(f"Environment: {settings.environment}")

    try:
        app_state["credential_store"] = get_credential_store()
        app_state["workspace"] = get_workspace()
        app_state["llm_service"] = get_llm_service()
        app_state["document_service"] = get_document_service()
        app_state["question_service"] = get_question_service()
        app_state["analysis_service"] = get_analysis_service()
        app_state["export_service"] = get_export_service()
        logger.info("Services initialized")

        if not app_state["llm_service"].is_available():
            logger.warning("No API key configured yet; set one via PUT /settings/credential")

        startup_time = time.time() - start_time
        logger.info(f"{settings.app_name} startup completed in {startup_time:.2f} seconds")

        yield

    except Exception as e:
        logger.error(f"Failed to start {settings.app_name}: {e}")
        raise

    logger.info(f"Shutting down {settings.app_name}...")
    app_state.clear()


app = FastAPI(
    title=settings.app_name,
    description="Upload a PDF, then translate it, summarize it or ask questions about it "
                "with a hosted text-generation model",
    version=settings.app_version,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)


def configure_middleware():
    """Configure all application middleware"""

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins.split(","),
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
        max_age=3600,
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start_time = time.time()
        client_ip = request.client.host if request.client else "unknown"
        user_agent = request.headers.get("user-agent", "unknown")

        try:
            response = await call_next(request)
        except Exception as e:
            duration_ms = int((time.time() - start_time) * 1000)
            logger.error(f"Request failed: {request.method} {request.url.path} - {str(e)}")
            log_api_request(request.method, str(request.url.path), 500, duration_ms, user_agent, client_ip)
            raise

        duration_ms = int((time.time() - start_time) * 1000)
        log_api_request(
            method=request.method,
            path=str(request.url.path),
            status_code=response.status_code,
            duration_ms=duration_ms,
            user_agent=user_agent,
            client_ip=client_ip
        )
        response.headers["X-Response-Time"] = f"{duration_ms}ms"
        return response

    app.add_middleware(ErrorHandlingMiddleware)


configure_middleware()


@app.exception_handler(AssistantException)
async def assistant_exception_handler(request: Request, exc: AssistantException):
    """
    Handle application exceptions with structured error responses
    """
    logger.warning(f"Assistant exception in {request.method} {request.url}: {exc}")
    return JSONResponse(
        status_code=get_status_code_for_error_code(exc.error_code),
        content=exc.to_dict()
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Handle Pydantic validation errors with field-level details
    """
    logger.warning(f"Validation error in {request.method} {request.url}: {exc}")

    field_errors = []
    for error in exc.errors():
        field_errors.append({
            "field": " -> ".join(str(loc) for loc in error["loc"]),
            "message": error["msg"],
            "type": error["type"]
        })

    return JSONResponse(
        status_code=422,
        content={
            "error": {
                "code": ErrorCode.VALIDATION_ERROR.value,
                "message": "Request validation failed",
                "details": {"field_errors": field_errors},
                "timestamp": time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime())
            }
        }
    )


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    """
    Handle HTTP exceptions with consistent formatting
    """
    if isinstance(exc.detail, dict):
        return JSONResponse(status_code=exc.status_code, content=exc.detail)

    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": {
                "code": "HTTP_ERROR",
                "message": str(exc.detail),
                "timestamp": time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime())
            }
        }
    )


app.include_router(settings_router)
app.include_router(document_router)
app.include_router(question_router)
app.include_router(analysis_router)
app.include_router(export_router)


@app.get("/health")
async def health_check():
    """
    Basic health check endpoint
    """
    return {
        "status": "healthy",
        "message": f"{settings.app_name} is running",
        "version": settings.app_version,
        "timestamp": time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime())
    }


@app.get("/health/ready")
async def readiness_check():
    """
    Ready when an API key can be resolved for the text-generation service
    """
    llm_service = app_state.get("llm_service") or get_llm_service()

    if not llm_service.is_available():
        return JSONResponse(
            status_code=503,
            content={
                "status": "not_ready",
                "message": "No API key configured",
                "timestamp": time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime())
            }
        )

    return {
        "status": "ready",
        "message": "Service is ready to accept requests",
        "model": llm_service.get_model_info(),
        "timestamp": time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime())
    }


@app.get("/")
async def root():
    """
    Root endpoint with API information
    """
    return {
        "message": f"Welcome to the {settings.app_name} API",
        "version": settings.app_version,
        "documentation": "/docs",
        "endpoints": {
            "upload_document": "POST /pages/{page}/document",
            "translate": "POST /translate",
            "ask_question": "POST /qa/",
            "summarize": "POST /summarize",
            "export": "GET /export/{page}?format=txt|docx",
            "credential": "PUT /settings/credential",
            "unlock": "POST /auth/unlock",
            "health_check": "GET /health"
        },
        "timestamp": time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime())
    }


@app.get("/info")
async def application_info():
    """
    Application information endpoint
    """
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "environment": settings.environment,
        "configuration": {
            "max_file_size_mb": settings.max_file_size_mb,
            "llm_model": settings.llm_model,
            "access_code_required": bool(settings.access_code),
            "log_level": settings.log_level
        },
        "timestamp": time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime())
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        access_log=True,
        server_header=False
    )
