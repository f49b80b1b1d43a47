# Middleware package init
"""
Notes API: Middleware Package
==============================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (outermost first):
    Request → [Request ID] → [Logging] → [Rate Limit] → [GZip] → [CORS] → Route

    - Request ID sets the correlation id used by logging and error bodies
    - Logging records status and duration once the response is produced,
      including 429s from the rate limiter
    - Rate Limit rejects over-limit clients before the route runs
"""
