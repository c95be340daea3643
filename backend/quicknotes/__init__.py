"""
QuickNotes Backend — Application Package Initializer
====================================================

What: Marks the `quicknotes` directory as a Python package.
Who:  Used implicitly by Python's import system and explicitly by pytest and uvicorn.

Architecture Note:
    The backend is split into thin layers:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Note Resource)    │  ← one SQL statement per call
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │     Storage Gateway (Persistence)   │  ← Async SQLAlchemy engine
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
