# ingres/main.py
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from fastapi.concurrency import run_in_threadpool
import time
import uuid

from ingres.config import GEMINI_API_KEY, LOG_DIR, LOG_LEVEL
from ingres.observability.logger import setup_logging, get_logger

# Initialize logging FIRST
setup_logging(log_level=LOG_LEVEL, log_dir=LOG_DIR)
logger = get_logger(__name__)

from ingres.api.local_routes import router as local_router  # noqa: E402
from ingres.api.routes import router  # noqa: E402
from ingres.observability.metrics import metrics_tracker  # noqa: E402
from ingres.observability.posthog_client import posthog_client  # noqa: E402

VERSION = "1.0.0"

app = FastAPI(
    title="INGRES-AI Edge Functions",
    description="Groundwater assistant chat, search, PDF knowledge and contact APIs",
    version=VERSION,
)

# Browser clients call the functions directly from any origin
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["authorization", "x-client-info", "apikey", "content-type"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Request id, start/finish logs, latency metrics and PostHog identity."""

    request_id = str(uuid.uuid4())
    request.state.request_id = request_id

    posthog_client.identify_request(
        distinct_id=request_id,
        properties={
            "entry_point": request.url.path,
            "method": request.method,
        },
    )

    logger.info(
        "request_started",
        extra={
            "request_id": request_id,
            "method": request.method,
            "path": request.url.path,
            "client_ip": request.client.host if request.client else None
        }
    )

    start_time = time.time()

    try:

        response = await call_next(request)

    except Exception as e:

        latency = time.time() - start_time

        await run_in_threadpool(metrics_tracker.record_failure)

        logger.error(
            "request_failed",
            extra={
                "request_id": request_id,
                "method": request.method,
                "path": request.url.path,
                "latency_seconds": round(latency, 3),
                "error": str(e),
                "error_type": type(e).__name__
            },
            exc_info=True
        )

        raise

    latency = time.time() - start_time

    # File writes stay off the event loop
    if response.status_code >= 500:
        await run_in_threadpool(metrics_tracker.record_failure)
    else:
        await run_in_threadpool(metrics_tracker.record_success, latency)

    logger.info(
        "request_completed",
        extra={
            "request_id": request_id,
            "method": request.method,
            "path": request.url.path,
            "status_code": response.status_code,
            "latency_seconds": round(latency, 3)
        }
    )

    return response


app.include_router(router)
app.include_router(local_router)


@app.on_event("startup")
async def startup_event():

    logger.info("application_startup", extra={"version": VERSION})

    if not GEMINI_API_KEY:

        logger.warning(
            "missing_api_key",
            extra={
                "warning_detail":
                "GEMINI_API_KEY not set. Chat falls back to other providers."
            }
        )


@app.on_event("shutdown")
async def shutdown_event():

    logger.info("application_shutdown")


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):

    request_id = getattr(request.state, "request_id", "unknown")

    logger.error(
        "unhandled_exception",
        extra={
            "request_id": request_id,
            "path": request.url.path,
            "error": str(exc),
            "error_type": type(exc).__name__
        },
        exc_info=True
    )

    posthog_client.track_error(
        distinct_id=request_id,
        error_type=type(exc).__name__,
        error_message=str(exc),
        endpoint=request.url.path,
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": str(exc) or "Internal server error",
            "request_id": request_id,
        }
    )


@app.get("/")
async def root():

    return {
        "message": "INGRES-AI Edge Functions",
        "version": VERSION,
        "docs": "/docs",
        "functions": [
            "POST /gemini-chat",
            "POST /enhanced-ai-chat",
            "POST /google-search",
            "POST /ai-document-search",
            "POST /pdf-fulltext-extract",
            "POST /pdf-knowledge-ingestion",
            "POST /send-contact-email",
            "GET  /research/works",
            "GET  /research/journals",
            "GET  /research/funders",
            "GET  /research/types/{type}/works",
            "GET  /local/{context}/profile",
            "GET  /local/{context}/chats",
            "GET  /local/{context}/budget-history",
            "GET  /local/documents",
        ],
        "health": "/health",
        "metrics": "/metrics",
    }
