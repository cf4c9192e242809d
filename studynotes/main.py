from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
import time
import structlog

from studynotes.db import init_db
from studynotes.routers import ai as ai_router
from studynotes.routers import notes as notes_router
from studynotes.services.logging import configure_logging, log_request
from studynotes.services.monitoring import health_checker, get_metrics, REQUEST_COUNT, REQUEST_DURATION
from studynotes.middleware.rate_limit import limiter

# Configure logging
configure_logging()
logger = structlog.get_logger()


app = FastAPI(
    title="StudyNotes",
    description="Study notes with AI summaries, keywords and quizzes, backed by a local fallback engine",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Add rate limiting
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


# Add middleware for request logging and metrics
@app.middleware("http")
async def add_process_time_header(request: Request, call_next):
    start_time = time.time()

    log_request(request)

    try:
        response = await call_next(request)
    except Exception as e:
        log_request(request, error=e)
        raise

    process_time = time.time() - start_time
    response.headers["X-Process-Time"] = str(process_time)

    REQUEST_COUNT.labels(
        method=request.method,
        endpoint=request.url.path,
        status=response.status_code
    ).inc()

    REQUEST_DURATION.labels(
        method=request.method,
        endpoint=request.url.path
    ).observe(process_time)

    log_request(request, status_code=response.status_code, duration=process_time)

    return response


# ----------------- Health & Monitoring Endpoints -----------------
@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return health_checker.get_health_status()


@app.get("/metrics")
async def metrics():
    """Prometheus metrics endpoint"""
    return get_metrics()


# ----------------- Startup -----------------
@app.on_event("startup")
def on_startup():
    init_db()
    logger.info("startup_complete")


# ----------------- Routers -----------------
app.include_router(notes_router.router)
app.include_router(ai_router.router)
