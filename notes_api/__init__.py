"""
Notes API: Application Package
===============================

A small CRUD web service for short text notes, kept in process memory.

Layers:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │   Services + Validators (Logic)     │  ← validate → apply
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← dataclass record + Pydantic
    ├─────────────────────────────────────┤
    │      NoteStore (In-Memory State)    │  ← lock-guarded dict
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
