# =============================================================================
# Clipboard
# =============================================================================
# Copies account fields (address, secret, client id, token) to the system
# clipboard and confirms with a toast.
#
# There is no portable clipboard API, so CommandClipboard pipes the value
# into the first platform tool it finds on $PATH. If none is installed, or
# the tool fails, ClipboardUnavailable is raised and the copy is aborted;
# showing a blocking notice is up to the caller.
# =============================================================================

import asyncio
import logging
import shutil
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from flaremail.core import ClipboardUnavailable

if TYPE_CHECKING:
    from flaremail.notify.scheduler import NotificationScheduler, Toast


logger = logging.getLogger(__name__)

# Tried in order: Wayland, X11 (two flavours), macOS, Windows
CLIPBOARD_COMMANDS: tuple[tuple[str, ...], ...] = (
    ("wl-copy",),
    ("xclip", "-selection", "clipboard"),
    ("xsel", "--clipboard", "--input"),
    ("pbcopy",),
    ("clip",),
)


class ClipboardWriter(ABC):
    """Something that can put text on a clipboard."""

    @abstractmethod
    async def copy_text(self, value: str) -> None:
        """
        Raises:
            ClipboardUnavailable: If the clipboard can't be written.
        """


class CommandClipboard(ClipboardWriter):
    """
    Clipboard backed by a platform command-line tool.

    Usage:
        >>> clipboard = CommandClipboard()
        >>> await clipboard.copy_text("user@outlook.com")
    """

    def __init__(self, commands: tuple[tuple[str, ...], ...] = CLIPBOARD_COMMANDS) -> None:
        self.commands = commands

    def find_command(self) -> tuple[str, ...] | None:
        """The first configured command whose executable is on $PATH."""
        for command in self.commands:
            if shutil.which(command[0]):
                return command
        return None

    async def copy_text(self, value: str) -> None:
        command = self.find_command()
        if command is None:
            raise ClipboardUnavailable("No clipboard tool found")

        try:
            process = await asyncio.create_subprocess_exec(
                *command,
                stdin=asyncio.subprocess.PIPE,
                stdout=asyncio.subprocess.DEVNULL,
                stderr=asyncio.subprocess.PIPE,
            )
            _, stderr = await process.communicate(value.encode("utf-8"))
        except OSError as e:
            raise ClipboardUnavailable(f"Could not run {command[0]}: {e}") from e

        if process.returncode != 0:
            detail = stderr.decode("utf-8", "replace").strip()
            raise ClipboardUnavailable(f"{command[0]} failed: {detail or process.returncode}")


async def copy_value(
    clipboard: ClipboardWriter,
    notifier: "NotificationScheduler",
    value: str,
    display_value: str | None = None,
) -> "Toast":
    """
    Copy a value and confirm with "<display> copied".

    Args:
        clipboard: Where to copy to.
        notifier: Toast scheduler for the confirmation.
        value: The text to copy.
        display_value: What the toast shows instead of the value (e.g. an
                       elided token). Defaults to the value itself.

    Raises:
        ClipboardUnavailable: If copying failed. No toast is shown.
    """
    try:
        await clipboard.copy_text(value)
    except ClipboardUnavailable as e:
        logger.error(f"Copy failed: {e}")
        raise

    return notifier.show(f"{display_value if display_value is not None else value} copied")
