"""
Storefront Backend: Middleware Package
======================================

Middleware Chain (order matters):
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    The request ID is set first so the access log line and any error
    response carry it.
"""
