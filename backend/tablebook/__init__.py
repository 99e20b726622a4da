"""
TableBook Backend — Application Package Initializer
====================================================

What: Marks the `tablebook` directory as a Python package.
Who:  Imported by uvicorn (`tablebook.main:app`), pytest, and the console entry point.

Architecture Note:
    The backend is a thin layered service for restaurant table bookings:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP verbs, paths, status codes
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← Required-field checks, one statement per call
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Injected async connection pool
    └─────────────────────────────────────┘

    Routes never touch SQL; services never build HTTP responses. Errors cross
    the boundary as exceptions from `tablebook.exceptions`.
"""

__version__ = "1.0.0"
