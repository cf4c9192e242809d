"""
Structured logging for the notes API and the local analysis engine
"""
import functools
import logging
import sys
import time

import structlog

from studynotes.config import LOG_LEVEL


def configure_logging():
    """Route structlog through stdlib logging and render JSON lines"""
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer()
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, LOG_LEVEL, logging.INFO),
    )

    # keep client libraries quiet unless they fail
    for noisy in ("httpx", "openai", "sqlalchemy"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


def _size(value):
    try:
        return len(value)
    except TypeError:
        return None


def log_performance(operation: str):
    """Time a text-analysis call and log how much text went in and came out.

    The first positional argument is taken as the input text.
    """
    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            logger = structlog.get_logger("studynotes.engine")
            text = args[0] if args and isinstance(args[0], str) else ""
            start = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                logger.error(
                    "analysis_failed",
                    operation=operation,
                    input_chars=len(text),
                    duration_ms=round((time.perf_counter() - start) * 1000, 3),
                    error=str(e),
                )
                raise
            logger.info(
                "analysis_completed",
                operation=operation,
                input_chars=len(text),
                result_size=_size(result),
                duration_ms=round((time.perf_counter() - start) * 1000, 3),
            )
            return result
        return wrapper
    return decorator


def log_request(request, status_code=None, duration=None, error=None):
    """One log line per request phase: started, completed or failed"""
    logger = structlog.get_logger("studynotes.api")
    fields = {"method": request.method, "path": request.url.path}
    if error is not None:
        logger.error("api_request_failed", error=str(error), **fields)
    elif status_code is not None:
        logger.info("api_request_completed", status_code=status_code,
                    duration_ms=round(duration * 1000, 3), **fields)
    else:
        logger.debug("api_request_started", **fields)
