"""
Postboard Backend — Application Package Initializer
====================================================

What: Marks the `postboard` directory as a Python package.
Why:  Enables module imports like `from postboard.config import Settings`.
Who:  Used implicitly by Python's import system and explicitly by Alembic, pytest, and uvicorn.

Architecture Note:
    The backend follows a layered architecture:

    ┌─────────────────────────────────────┐
    │        Routes (HTTP handlers)       │  ← bind, validate, map status codes
    ├─────────────────────────────────────┤
    │     Services (one statement each)   │  ← users, posts, login
    ├─────────────────────────────────────┤
    │   Models & Schemas / Security       │  ← SQLAlchemy ORM + Pydantic, bcrypt + JWT
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    Every dependency (settings, engine, services) is built by
    `postboard.main.create_app()` and hung off `app.state`; nothing
    configuration-bearing lives at package level.
"""

__version__ = "1.0.0"
