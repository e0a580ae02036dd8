"""
Audit Logging Middleware

Logs every request with HTTP method, path, session and duration.
"""

import logging
import time
from fastapi import Request

# Create dedicated audit logger
logger = logging.getLogger("audit")


async def audit_log_middleware(request: Request, call_next):
    """
    Audit logging middleware

    Logs each request with:
    - HTTP method (GET, POST, etc.)
    - Request path
    - Session id prefix (from the session cookie, if any)
    - Status code and duration
    """
    started = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - started) * 1000

    session_id = request.cookies.get("session_id") or "-"
    logger.info(
        f"API Request | "
        f"Session: {session_id[:8]} | "
        f"Method: {request.method} | "
        f"Path: {request.url.path} | "
        f"Status: {response.status_code} | "
        f"Time: {elapsed_ms:.1f}ms"
    )
    return response
