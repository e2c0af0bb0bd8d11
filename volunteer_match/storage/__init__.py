"""Storage module: store contract, snapshot store and SQLite adapter."""

from volunteer_match.storage.database import create_db_engine, init_db, session_scope
from volunteer_match.storage.models import EventRecord, RsvpRecord, VolunteerRecord
from volunteer_match.storage.sql_store import SqlStore
from volunteer_match.storage.store import EventStore, InMemoryStore

__all__ = [
    "create_db_engine",
    "init_db",
    "session_scope",
    "EventRecord",
    "RsvpRecord",
    "VolunteerRecord",
    "SqlStore",
    "EventStore",
    "InMemoryStore",
]
