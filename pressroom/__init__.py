"""
Pressroom Backend — Application Package Initializer
===================================================

What: Marks the `pressroom` directory as a Python package.
Who:  Imported by uvicorn (`uvicorn pressroom.main:app`), pytest, and every module.

Architecture Note:
    The backend keeps the classic layered split:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │   Services (Resource Controllers)   │  ← Orchestration, photo uploads
    ├─────────────────────────────────────┤
    │  Repositories + Blob Store          │  ← Rows and files
    ├─────────────────────────────────────┤
    │  Models & Schemas (Data)            │  ← SQLAlchemy ORM + Pydantic
    └─────────────────────────────────────┘

    Routes never touch the session directly; services never build responses
    with status codes. Each layer is testable on its own.
"""

__version__ = "1.0.0"
