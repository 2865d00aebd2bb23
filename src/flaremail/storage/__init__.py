# =============================================================================
# Storage Module
# =============================================================================
# Persistent storage for accounts and cached mail records using SQLite.
#
# Provides:
#   - Database initialization and schema versioning
#   - Account CRUD (including the upsert used by bulk import)
#   - Read access to cached mail records, newest first
#   - Async operations via aiosqlite
#
# The database is stored in the XDG data directory
# (~/.local/share/flaremail/).
# =============================================================================

from flaremail.storage.database import Database
from flaremail.storage.repository import Repository

__all__ = ["Database", "Repository"]
