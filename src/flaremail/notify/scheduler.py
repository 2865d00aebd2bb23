# =============================================================================
# Notification Scheduler
# =============================================================================
# A single-slot, self-expiring message ("toast").
#
# Rules:
#   - At most one toast is visible. show() replaces the current one at once:
#     its pending auto-dismiss timer is cancelled and a new one installed.
#     There is no queue.
#   - duration_ms > 0 dismisses automatically after that delay.
#     duration_ms == 0 keeps the toast until dismiss() is called.
#   - Every show() gets the next sequence id, so showing the same text twice
#     still counts as a new toast (renderers key entry animations on it).
#   - Dismissing clears the message and its payload together.
#
# Timers run on the asyncio event loop (loop.call_later), so everything
# happens on the one cooperative thread.
# =============================================================================

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Callable


logger = logging.getLogger(__name__)

# Called with the new toast, or None when the slot is cleared
ToastListener = Callable[["Toast | None"], None]


@dataclass(frozen=True)
class Toast:
    """
    A visible notification.

    Attributes:
        message: Text to show.
        seq: Monotonically increasing id of this show() call.
        duration_ms: Auto-dismiss delay, 0 for persistent toasts.
        payload: Optional contextual data (e.g. a download link).
    """
    message: str
    seq: int
    duration_ms: int
    payload: Any = None

    @property
    def persistent(self) -> bool:
        return self.duration_ms == 0


class NotificationScheduler:
    """
    Owns the toast slot and its auto-dismiss timer.

    Usage:
        >>> toasts = NotificationScheduler(default_duration_ms=2000)
        >>> toasts.subscribe(render)
        >>> toasts.show("user@outlook.com copied")
        >>> toasts.show("Version v1.3.0 is available", 0, payload=url)
        >>> toasts.dismiss()
    """

    def __init__(
        self,
        default_duration_ms: int = 2000,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        """
        Initialize the scheduler.

        Args:
            default_duration_ms: Delay used when show() gets no duration.
            loop: Event loop for timers. Defaults to the running loop at the
                  time a timer is needed.
        """
        if default_duration_ms < 0:
            raise ValueError("default_duration_ms must not be negative")

        self.default_duration_ms = default_duration_ms
        self._loop = loop
        self._current: Toast | None = None
        self._seq = 0
        self._timer: asyncio.TimerHandle | None = None
        self._listeners: list[ToastListener] = []

    @property
    def current(self) -> Toast | None:
        """The visible toast, if any."""
        return self._current

    @property
    def sequence(self) -> int:
        """Sequence id of the most recent show() call (0 before the first)."""
        return self._seq

    @property
    def has_pending_timer(self) -> bool:
        return self._timer is not None

    def subscribe(self, listener: ToastListener) -> Callable[[], None]:
        """
        Register a listener for slot changes.

        Returns:
            A function that unregisters the listener.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def show(
        self,
        message: str,
        duration_ms: int | None = None,
        payload: Any = None,
    ) -> Toast:
        """
        Show a toast, replacing any visible one.

        Args:
            message: Text to show.
            duration_ms: Auto-dismiss delay; 0 keeps it until dismiss().
                         Defaults to default_duration_ms.
            payload: Contextual data cleared together with the message.

        Returns:
            The new toast.

        Raises:
            ValueError: If duration_ms is negative.
            RuntimeError: If an auto-dismissing toast is shown with no event
                          loop running. The slot is left unchanged.
        """
        if duration_ms is None:
            duration_ms = self.default_duration_ms
        if duration_ms < 0:
            raise ValueError("duration_ms must not be negative")

        # Resolved before touching the slot, so a missing loop changes nothing
        loop = None
        if duration_ms > 0:
            loop = self._loop or asyncio.get_running_loop()

        self._cancel_timer()

        self._seq += 1
        toast = Toast(message=message, seq=self._seq, duration_ms=duration_ms, payload=payload)
        self._current = toast

        if loop is not None:
            self._timer = loop.call_later(duration_ms / 1000, self._expire, toast.seq)

        logger.debug(f"Toast #{toast.seq}: {message!r} ({duration_ms} ms)")
        self._emit(toast)
        return toast

    def dismiss(self) -> None:
        """Clear the visible toast and its payload, cancelling any timer."""
        self._cancel_timer()
        if self._current is None:
            return

        self._current = None
        self._emit(None)

    def close(self) -> None:
        """Cancel the pending timer without notifying listeners (shutdown)."""
        self._cancel_timer()

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _expire(self, seq: int) -> None:
        """Timer callback: dismiss only if the toast it was set for is still shown."""
        self._timer = None
        if self._current is not None and self._current.seq == seq:
            self._current = None
            self._emit(None)

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _emit(self, toast: Toast | None) -> None:
        for listener in list(self._listeners):
            try:
                listener(toast)
            except Exception:
                # Logged; the remaining listeners still run
                logger.exception("Toast listener failed")
