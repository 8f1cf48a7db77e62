"""
Postboard Backend: Application Package Initializer
===================================================

What: Marks the `app` directory as a Python package.
Why:  Enables module imports like `from app.config import settings`.
Who:  Used implicitly by Python's import system and explicitly by Alembic, pytest, and uvicorn.

Architecture Note:
    The backend is a thin layered service around one resource (Post):

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP verbs, status codes, envelopes
    ├─────────────────────────────────────┤
    │       Services (Data Access)        │  ← One call per request, outcome mapping
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    Routes never touch SQL and services never build HTTP responses.
"""

__version__ = "1.0.0"
