"""Keep the display awake while a workout is counting down.

``WakeLockGuard`` holds a ``WakeLock`` exactly while the controller is
running and not paused.  When the application comes back to the
foreground mid-session it re-acquires a lock that the platform dropped.
Missing platform support degrades to ``NullWakeLock``.
"""

from __future__ import annotations

import logging
import shutil
import subprocess

from PyQt6.QtCore import QObject, Qt
from PyQt6.QtGui import QGuiApplication

from .timer.controller import TimerController
from .timer.engine import TimerState

log = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════════════
#  LOCKS
# ═══════════════════════════════════════════════════════════════════════════


class WakeLock:
    """Display wake lock capability."""

    @property
    def supported(self) -> bool:
        return False

    @property
    def active(self) -> bool:
        return False

    def acquire(self) -> bool:
        """Try to hold the lock.  Returns whether it is now held."""
        return False

    def release(self) -> None:
        pass


class NullWakeLock(WakeLock):
    """No platform support: every call is a no-op."""


class CaffeinateWakeLock(WakeLock):
    """macOS ``caffeinate -d`` child process held for the lock's lifetime."""

    def __init__(self, executable: str | None = None) -> None:
        self._executable = executable or shutil.which("caffeinate")
        self._process: subprocess.Popen | None = None

    @property
    def supported(self) -> bool:
        return self._executable is not None

    @property
    def active(self) -> bool:
        return self._process is not None and self._process.poll() is None

    def acquire(self) -> bool:
        if not self.supported:
            return False
        if self.active:
            return True
        try:
            self._process = subprocess.Popen(
                [self._executable, "-d"],
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
        except OSError as exc:
            log.warning("wake lock request failed: %s", exc)
            self._process = None
            return False
        return True

    def release(self) -> None:
        process, self._process = self._process, None
        if process is None or process.poll() is not None:
            return
        process.terminate()
        try:
            process.wait(timeout=2)
        except subprocess.TimeoutExpired:
            log.warning("caffeinate did not exit, killing it")
            process.kill()
            process.wait()


def create_wake_lock() -> WakeLock:
    lock = CaffeinateWakeLock()
    if lock.supported:
        return lock
    log.info("display wake lock not supported on this platform")
    return NullWakeLock()


# ═══════════════════════════════════════════════════════════════════════════
#  LIFECYCLE GUARD
# ═══════════════════════════════════════════════════════════════════════════


class WakeLockGuard(QObject):
    """Ties a ``WakeLock`` to the controller's running state."""

    def __init__(
        self,
        controller: TimerController,
        lock: WakeLock,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._controller = controller
        self._lock = lock
        self._wanted = False

        controller.state_changed.connect(self._on_state_changed)
        app = QGuiApplication.instance()
        if app is not None:
            app.applicationStateChanged.connect(self._on_application_state_changed)

    @property
    def lock(self) -> WakeLock:
        return self._lock

    @property
    def wanted(self) -> bool:
        """Whether the session currently needs the display awake."""
        return self._wanted

    def shutdown(self) -> None:
        """Release on teardown, whatever the session state."""
        self._wanted = False
        self._lock.release()

    # ── slots ─────────────────────────────────────────────────────────────

    def _on_state_changed(self, state: TimerState) -> None:
        wanted = state.is_active
        if wanted == self._wanted:
            return
        self._wanted = wanted
        if wanted:
            self._lock.acquire()
        else:
            self._lock.release()

    def _on_application_state_changed(self, state: Qt.ApplicationState) -> None:
        if state != Qt.ApplicationState.ApplicationActive:
            return
        if self._wanted and not self._lock.active:
            log.debug("re-acquiring wake lock after returning to foreground")
            self._lock.acquire()
