"""
db - Database layer.

Public API:
    init_db()       → create engine + missing tables
    get_session()   → new Session
    get_engine()    → the shared Engine
    ORM models for the seven imported tables
"""

from db.engine import init_db, get_session, get_engine       # noqa: F401
from db.models import (                                      # noqa: F401
    Base, Client, Collaborator, Project, Task,
    CollaboratorRate, TimesheetEntry, Invoice,
)
