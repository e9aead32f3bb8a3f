from elite_tournament.core.config import TournamentConfig

from .base import RosterStore, decode_roster, encode_roster
from .db_store import DBRosterStore
from .file_store import FileRosterStore
from .memory_store import MemoryRosterStore


def create_store(config: TournamentConfig) -> RosterStore:
    """Create the roster store selected by config."""
    storage = config.storage
    if storage.backend == "db":
        return DBRosterStore(storage.db_url, key=storage.key)
    if storage.backend == "memory":
        return MemoryRosterStore(key=storage.key)
    return FileRosterStore(storage.path, key=storage.key)


__all__ = [
    "DBRosterStore",
    "FileRosterStore",
    "MemoryRosterStore",
    "RosterStore",
    "create_store",
    "decode_roster",
    "encode_roster",
]
