# =============================================================================
# Notification Module
# =============================================================================
# The single-slot toast used for import results, copy confirmations and
# "a new version is available" announcements.
# =============================================================================

from flaremail.notify.scheduler import NotificationScheduler, Toast
from flaremail.notify.updates import (
    UpdateInfo,
    announce_update,
    check_for_update,
    compare_versions,
)

__all__ = [
    "NotificationScheduler",
    "Toast",
    "UpdateInfo",
    "announce_update",
    "check_for_update",
    "compare_versions",
]
