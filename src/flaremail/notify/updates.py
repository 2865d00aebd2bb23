# =============================================================================
# Update Announcements
# =============================================================================
# Decides whether a published release is newer than the running version and
# announces it with a persistent toast carrying the download link.
#
# Fetching the latest release tag is the caller's business; this module only
# compares versions and drives the notification.
# =============================================================================

from dataclasses import dataclass

from flaremail.notify.scheduler import NotificationScheduler, Toast


@dataclass(frozen=True)
class UpdateInfo:
    """A newer release: its tag and where to download it."""
    version: str
    download_url: str


def _version_parts(version: str) -> list[int]:
    """Split "v1.2.3" into [1, 2, 3]; unparseable parts count as 0."""
    parts = []
    for piece in version.strip().removeprefix("v").split("."):
        try:
            parts.append(int(piece))
        except ValueError:
            parts.append(0)
    return parts


def compare_versions(current: str, latest: str) -> int:
    """
    Compare two dotted versions (an optional leading "v" is ignored).

    Missing components count as 0, so "1.2" == "1.2.0".

    Returns:
        1 if latest is newer, -1 if current is newer, 0 if equal.
    """
    curr = _version_parts(current)
    lat = _version_parts(latest)
    for i in range(max(len(curr), len(lat))):
        c = curr[i] if i < len(curr) else 0
        l = lat[i] if i < len(lat) else 0
        if l > c:
            return 1
        if l < c:
            return -1
    return 0


def check_for_update(current: str, latest_tag: str, download_url: str) -> UpdateInfo | None:
    """
    Returns UpdateInfo if latest_tag is newer than current, otherwise None.
    """
    if compare_versions(current, latest_tag) > 0:
        return UpdateInfo(version=latest_tag, download_url=download_url)
    return None


def announce_update(scheduler: NotificationScheduler, info: UpdateInfo) -> Toast:
    """Show a persistent "new version" toast with the download link attached."""
    return scheduler.show(
        f"New version {info.version} is available",
        0,
        payload=info.download_url,
    )
