"""
Health checks and monitoring with Prometheus metrics
"""
from prometheus_client import Counter, Histogram, Gauge, generate_latest, CONTENT_TYPE_LATEST
from fastapi.responses import Response
from sqlalchemy import func
from sqlmodel import Session, select
import time
import structlog

from studynotes import config
from studynotes.models import Note

logger = structlog.get_logger()

# Prometheus metrics
REQUEST_COUNT = Counter('http_requests_total', 'Total HTTP requests', ['method', 'endpoint', 'status'])
REQUEST_DURATION = Histogram('http_request_duration_seconds', 'HTTP request duration', ['method', 'endpoint'])
AI_GENERATION_REQUESTS = Counter('ai_generation_requests_total', 'Total AI generation requests', ['type', 'status'])
TOTAL_NOTES = Gauge('notes_total', 'Total number of notes in database')


class HealthChecker:
    def __init__(self):
        self.start_time = time.time()

    def check_database(self) -> dict:
        """Check database connectivity and count notes"""
        from studynotes.db import engine
        try:
            with Session(engine) as session:
                notes = session.exec(select(func.count()).select_from(Note)).one()
            TOTAL_NOTES.set(notes)
            return {
                "status": "healthy",
                "message": "Database connection successful",
                "notes_count": notes
            }
        except Exception as e:
            logger.error("database_health_check_failed", error=str(e))
            return {
                "status": "unhealthy",
                "message": f"Database connection failed: {str(e)}"
            }

    def check_ai_provider(self) -> dict:
        """Report whether the remote AI path or the local engine will answer"""
        if config.is_api_available():
            return {"status": "healthy", "mode": "remote", "model": config.OPENAI_MODEL}
        return {"status": "healthy", "mode": "fallback", "message": "Using local text analysis"}

    def get_health_status(self) -> dict:
        """Get overall health status"""
        checks = {
            "database": self.check_database(),
            "ai_provider": self.check_ai_provider(),
        }

        unhealthy_checks = [name for name, check in checks.items() if check["status"] == "unhealthy"]
        overall_status = "healthy" if not unhealthy_checks else "unhealthy"

        return {
            "status": overall_status,
            "timestamp": time.time(),
            "uptime_seconds": time.time() - self.start_time,
            "checks": checks,
            "unhealthy_components": unhealthy_checks
        }


# Global health checker instance
health_checker = HealthChecker()


def get_metrics():
    """Get Prometheus metrics"""
    return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)
