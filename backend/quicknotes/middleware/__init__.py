# Middleware package init
"""
QuickNotes Backend — Middleware Package
========================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (order matters!):
    Request → [Request ID] → [Body Size Limit] → [Logging] → Route Handler

    1. Request ID first, so every later log line (including rejections by
       the size limit) carries the correlation id
    2. Body Size Limit rejects oversized uploads before the body is read
    3. Logging records method, path, status and duration of what reached
       the router
"""
