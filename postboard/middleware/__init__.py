# Middleware package init
"""
Postboard Backend — Middleware Package
========================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain:
    Request → [Request ID] → [Logging] → [CORS] → Route Handler

    1. Request ID: accept or generate a correlation ID for logs and errors
    2. Logging: one access log line per request with status and duration
    3. CORS: FastAPI's CORSMiddleware (handles preflight)
"""
