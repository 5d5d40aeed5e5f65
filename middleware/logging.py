"""
Recipe Box Logging Middleware
Structured request/response logging with request ids
"""

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
import structlog
import time
import uuid
from typing import Dict, Any

logger = structlog.get_logger()


class LoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs every request with a unique id, timing and status.
    Bodies are never logged since they carry passwords and tokens.
    """

    def __init__(self, app):
        super().__init__(app)

        # Paths to exclude from detailed logging
        self.exclude_paths = {"/api/health", "/favicon.ico"}

        # Sensitive headers to mask in logs
        self.sensitive_headers = {"authorization", "cookie", "x-api-key"}

    async def dispatch(self, request: Request, call_next):
        """Process request with logging"""
        start_time = time.time()
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())

        structlog.contextvars.bind_contextvars(request_id=request_id)

        try:
            if any(request.url.path.startswith(path) for path in self.exclude_paths):
                response = await call_next(request)
                response.headers["X-Request-ID"] = request_id
                return response

            request_info = self._extract_request_info(request)

            logger.info(
                "Request started",
                **request_info,
                event_type="request_start"
            )

            response = await call_next(request)

            process_time = time.time() - start_time

            logger.log(
                self._determine_log_level(response.status_code),
                "Request completed",
                **request_info,
                status_code=response.status_code,
                process_time=round(process_time, 4),
                event_type="request_complete"
            )

            response.headers["X-Request-ID"] = request_id
            return response

        except Exception as e:
            logger.error(
                "Request failed",
                method=request.method,
                path=request.url.path,
                client_ip=self._get_client_ip(request),
                process_time=time.time() - start_time,
                error=str(e),
                error_type=type(e).__name__,
                event_type="request_error"
            )
            raise
        finally:
            structlog.contextvars.unbind_contextvars("request_id")

    def _extract_request_info(self, request: Request) -> Dict[str, Any]:
        """Extract request information"""
        return {
            "method": request.method,
            "path": request.url.path,
            "query_params": self._filter_query(dict(request.query_params)),
            "client_ip": self._get_client_ip(request),
            "user_agent": request.headers.get("user-agent", ""),
            "headers": self._filter_headers(dict(request.headers)),
        }

    def _get_client_ip(self, request: Request) -> str:
        """Extract client IP address"""
        forwarded = request.headers.get("x-forwarded-for")
        if forwarded:
            return forwarded.split(",")[0].strip()

        forwarded = request.headers.get("x-real-ip")
        if forwarded:
            return forwarded

        return request.client.host if request.client else "unknown"

    def _filter_headers(self, headers: Dict[str, str]) -> Dict[str, str]:
        """Filter sensitive headers from logs"""
        filtered = {}
        for key, value in headers.items():
            if key.lower() in self.sensitive_headers:
                filtered[key] = "***MASKED***"
            else:
                filtered[key] = value
        return filtered

    def _filter_query(self, params: Dict[str, str]) -> Dict[str, str]:
        return {k: ("***MASKED***" if k.lower() == "apikey" else v) for k, v in params.items()}

    def _determine_log_level(self, status_code: int) -> int:
        """Determine appropriate log level based on status code"""
        if status_code >= 500:
            return 40  # ERROR
        elif status_code >= 400:
            return 30  # WARNING
        return 20  # INFO
