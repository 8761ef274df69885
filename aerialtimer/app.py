"""Main application window for AerialTimer."""

from __future__ import annotations

import logging

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QAction, QKeySequence
from PyQt6.QtWidgets import QMainWindow, QWidget, QVBoxLayout, QDialog

from .config import TimerConfig, apply_preset
from .settings import load_config, save_config
from .timer.controller import TimerController
from .timer.engine import TimerState
from .audio.tones import ToneGenerator, create_tone_generator
from .audio.cues import TimerAudio
from .wakelock import WakeLock, WakeLockGuard, create_wake_lock
from .ui.timer_widget import TimerWidget
from .ui.config_dialog import ConfigDialog

log = logging.getLogger(__name__)


class AerialTimerApp(QMainWindow):
    """Main application window.

    Audio output and the wake lock are injectable so the window can be
    built headless in tests.
    """

    def __init__(
        self,
        *,
        config: TimerConfig | None = None,
        tones: ToneGenerator | None = None,
        wake_lock: WakeLock | None = None,
    ) -> None:
        super().__init__()
        self.setWindowTitle("AerialTimer")
        self.setMinimumSize(480, 720)

        # ── session core ──────────────────────────────────────────────
        self._config = config if config is not None else load_config()
        self._controller = TimerController(self._config, self)
        self._audio = TimerAudio(
            self._controller,
            tones if tones is not None else create_tone_generator(self),
            self,
        )
        self._wake_guard = WakeLockGuard(
            self._controller,
            wake_lock if wake_lock is not None else create_wake_lock(),
            self,
        )

        # ── central widget ────────────────────────────────────────────
        central = QWidget()
        self.setCentralWidget(central)
        layout = QVBoxLayout(central)
        layout.setContentsMargins(16, 12, 16, 12)

        self._timer_widget = TimerWidget(self._controller, central)
        self._timer_widget.preset_selected.connect(self._on_preset_selected)
        layout.addWidget(self._timer_widget)

        self._build_menu_bar()
        self._controller.state_changed.connect(self._on_state_changed)
        self._on_state_changed(self._controller.state)

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC
    # ══════════════════════════════════════════════════════════════════

    @property
    def controller(self) -> TimerController:
        return self._controller

    @property
    def timer_widget(self) -> TimerWidget:
        return self._timer_widget

    def apply_config(self, config: TimerConfig) -> bool:
        """Persist *config* and restart the session with it.

        Refused (returns False) while the countdown is moving.
        """
        if not self._controller.can_edit_config:
            log.info("config change ignored while the timer is running")
            return False
        self._config = config
        save_config(config)
        self._controller.reset(config)
        return True

    # ══════════════════════════════════════════════════════════════════
    #  MENU
    # ══════════════════════════════════════════════════════════════════

    def _build_menu_bar(self) -> None:
        menu_bar = self.menuBar()
        app_menu = menu_bar.addMenu("AerialTimer")

        self._settings_action = QAction("Timer Settings…", self)
        self._settings_action.setMenuRole(QAction.MenuRole.PreferencesRole)
        self._settings_action.setShortcut(QKeySequence("Ctrl+,"))
        self._settings_action.triggered.connect(self._open_settings)
        app_menu.addAction(self._settings_action)

        quit_action = QAction("Quit AerialTimer", self)
        quit_action.setMenuRole(QAction.MenuRole.QuitRole)
        quit_action.setShortcut(QKeySequence("Ctrl+Q"))
        quit_action.triggered.connect(self.close)
        app_menu.addAction(quit_action)

    # ══════════════════════════════════════════════════════════════════
    #  SLOTS
    # ══════════════════════════════════════════════════════════════════

    def _on_state_changed(self, state: TimerState) -> None:
        self._settings_action.setEnabled(self._controller.can_edit_config)

    def _on_preset_selected(self, preset: dict) -> None:
        self.apply_config(apply_preset(preset))

    def _open_settings(self) -> None:
        if not self._controller.can_edit_config:
            return
        dlg = ConfigDialog(self._config, self)
        if dlg.exec() == QDialog.DialogCode.Accepted:
            self.apply_config(dlg.config())

    # ══════════════════════════════════════════════════════════════════
    #  WINDOW EVENTS
    # ══════════════════════════════════════════════════════════════════

    def closeEvent(self, event) -> None:  # type: ignore[override]
        """Stop ticking and release the wake lock on the way out."""
        self._controller.shutdown()
        self._wake_guard.shutdown()
        event.accept()

    def keyPressEvent(self, event) -> None:  # type: ignore[override]
        """Space start/pause/resume, R reset, S skip."""
        key = event.key()
        if event.modifiers() != Qt.KeyboardModifier.NoModifier:
            super().keyPressEvent(event)
            return
        if key == Qt.Key.Key_Space:
            self._timer_widget.toggle_start_pause()
        elif key == Qt.Key.Key_R:
            self._controller.reset()
        elif key == Qt.Key.Key_S:
            self._controller.skip()
        else:
            super().keyPressEvent(event)
            return
        event.accept()
