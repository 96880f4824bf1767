# Middleware package init
"""
Blog Backend — Middleware Package
==================================

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [CORS] → Route Handler

    - Request ID first, so every log line of the request can carry it
    - Logging measures the full handler duration and final status code
"""
