import time
import logging
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)

def get_client_ip(request: Request):
    """Viewer address, preferring the first hop of X-Forwarded-For"""
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else None

class LoggingMiddleware(BaseHTTPMiddleware):
    """Middleware for logging requests and responses"""

    async def dispatch(self, request: Request, call_next):
        start_time = time.time()

        client_ip = get_client_ip(request) or "unknown"
        logger.info(f"Request: {request.method} {request.url.path} from {client_ip}")

        response = await call_next(request)

        process_time = time.time() - start_time
        logger.info(
            f"Response: {request.method} {request.url.path} "
            f"status={response.status_code} time={process_time:.4f}s"
        )

        response.headers["X-Process-Time"] = str(process_time)
        return response

class ErrorLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware for logging errors"""

    async def dispatch(self, request: Request, call_next):
        try:
            response = await call_next(request)
            return response
        except Exception as e:
            logger.error(
                f"Error processing {request.method} {request.url.path}: {str(e)}",
                exc_info=True
            )
            # Re-raise the exception to be handled by FastAPI
            raise
