"""
Blog Backend — Application Package Initializer
===============================================

What: Marks the `blog` directory as a Python package.
Why:  Enables module imports like `from blog.config import settings`.
Who:  Used implicitly by Python's import system and explicitly by Alembic, pytest, and uvicorn.

Architecture Note:
    The backend keeps the usual layering of a small FastAPI service:

    ┌─────────────────────────────────────┐
    │         Routes (Request Handlers)   │  ← HTTP status codes, envelopes
    ├─────────────────────────────────────┤
    │      Services (Data Access Layer)   │  ← presence checks, SQL statements
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │   Database & Migrations (SQLite)    │  ← async engine, schema creation
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
