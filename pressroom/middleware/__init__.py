"""
Pressroom Backend — Middleware Package
========================================

Cross-cutting concerns applied to every request.

Middleware Chain (order matters!):
    Request → [Request ID] → [Rate Limit] → [Logging] → [GZip] → [CORS] → Route

    1. Request ID first: even a 429 carries the correlation ID
    2. Rate Limit: separate read/write budgets per client IP
    3. Logging: method, path, route template, status, duration, body size
"""
