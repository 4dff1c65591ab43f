"""
Correlation ID middleware for request tracing.

Generates a UUID4 correlation ID per request (or accepts X-Correlation-ID from the client)
and stores it in contextvars so every log line of the request carries it.
"""
import uuid
import time
import contextvars
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
from careerquest.utils.logger import logger

correlation_id_var: contextvars.ContextVar[str] = contextvars.ContextVar("correlation_id", default="")
request_user_id_var: contextvars.ContextVar[str] = contextvars.ContextVar("request_user_id", default="")


def get_correlation_id() -> str:
    """Get the current request's correlation ID"""
    return correlation_id_var.get("")


def get_request_user_id() -> str:
    """Get the current request's user ID"""
    return request_user_id_var.get("")


class CorrelationMiddleware(BaseHTTPMiddleware):
    """Tags the request with a correlation ID and logs start, completion and timing."""

    async def dispatch(self, request: Request, call_next) -> Response:
        cid = request.headers.get("x-correlation-id") or str(uuid.uuid4())
        correlation_id_var.set(cid)
        request_user_id_var.set(request.headers.get("x-user-id", ""))

        start = time.monotonic()
        method = request.method
        path = request.url.path

        logger.info(
            "request.started",
            extra={
                "method": method,
                "path": path,
                "client_ip": request.client.host if request.client else "",
            }
        )

        try:
            response = await call_next(request)
        except Exception as exc:
            logger.error(
                "request.failed",
                extra={
                    "method": method,
                    "path": path,
                    "duration_ms": round((time.monotonic() - start) * 1000),
                    "error": str(exc),
                    "error_type": type(exc).__name__,
                }
            )
            raise

        status = response.status_code
        log_fn = logger.warning if status >= 400 else logger.info
        log_fn(
            "request.completed",
            extra={
                "method": method,
                "path": path,
                "status": status,
                "duration_ms": round((time.monotonic() - start) * 1000),
            }
        )

        response.headers["X-Correlation-ID"] = cid
        return response
