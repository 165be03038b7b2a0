# Middleware package init
"""
HeroDex Backend — Middleware Package
======================================

Middleware Chain (order matters!):
    Request → [Body Size Limit] → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    1. Body Size Limit FIRST: reject oversized uploads before any processing
    2. Request ID: generate correlation ID for logging and error bodies
    3. Logging: log request details with the generated request ID
    4. GZip / CORS: provided by Starlette (CORS also answers preflight)

The order is reversed for responses, so the request ID header is present on
every response and the logged duration covers the full handler time.
"""
