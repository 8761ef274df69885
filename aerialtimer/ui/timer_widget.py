"""Main workout timer card.

Layout (top → bottom):
    - Phase label + big MM:SS countdown (+ exercise name when enabled)
    - Control row: Reset / Start-Pause-Resume / Skip
    - Progress bar, round/set line, next-phase hint
    - Quick presets (hidden while a session is running)
"""

from __future__ import annotations

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QGridLayout,
    QLabel, QPushButton, QFrame, QProgressBar,
)

from ..config import PRESETS, TimerConfig
from ..timer.controller import TimerController
from ..timer.engine import Phase, TimerState
from ..timer import progress


PHASE_COLORS: dict[Phase, tuple[str, str]] = {
    Phase.PREPARE:  ("#F59E0B", "#F97316"),   # amber
    Phase.WORK:     ("#22C55E", "#10B981"),   # green
    Phase.REST:     ("#3B82F6", "#06B6D4"),   # blue
    Phase.SET_REST: ("#A855F7", "#EC4899"),   # purple
    Phase.FINISHED: ("#374151", "#334155"),   # slate
}

PULSE_THRESHOLD = 3  # seconds


class TimerWidget(QWidget):
    """Countdown display, controls, progress and presets."""

    preset_selected = pyqtSignal(object)

    def __init__(
        self,
        controller: TimerController,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self._controller = controller
        self._build_ui()
        self._connect_signals()
        self._on_state_changed(controller.state)

    # ── build ─────────────────────────────────────────────────────────────

    def _build_ui(self) -> None:
        root = QVBoxLayout(self)
        root.setContentsMargins(0, 0, 0, 0)
        root.setSpacing(16)

        # ── display card ─────────────────────────────────────────────
        self._card = QFrame(self)
        self._card.setObjectName("phaseCard")
        card_layout = QVBoxLayout(self._card)
        card_layout.setContentsMargins(32, 32, 32, 32)
        card_layout.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self._phase_label = QLabel(self._card)
        self._phase_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._phase_label.setStyleSheet("font-size: 28px; font-weight: 700; color: white;")
        card_layout.addWidget(self._phase_label)

        self._time_label = QLabel(self._card)
        self._time_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._time_label.setStyleSheet("font-size: 96px; font-weight: 700; color: white;")
        card_layout.addWidget(self._time_label)

        self._exercise_label = QLabel(self._card)
        self._exercise_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._exercise_label.setStyleSheet("font-size: 20px; color: rgba(255,255,255,0.8);")
        card_layout.addWidget(self._exercise_label)

        root.addWidget(self._card)

        # ── controls ─────────────────────────────────────────────────
        btn_row = QHBoxLayout()
        btn_row.setSpacing(12)
        btn_row.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self._reset_btn = QPushButton("Reset", self)
        self._reset_btn.setObjectName("dangerButton")

        self._start_pause_btn = QPushButton("Start", self)
        self._start_pause_btn.setObjectName("primaryButton")

        self._skip_btn = QPushButton("Skip", self)
        self._skip_btn.setObjectName("secondaryButton")

        btn_row.addWidget(self._reset_btn)
        btn_row.addWidget(self._start_pause_btn)
        btn_row.addWidget(self._skip_btn)
        root.addLayout(btn_row)

        # ── progress ─────────────────────────────────────────────────
        self._progress_bar = QProgressBar(self)
        self._progress_bar.setRange(0, 100)
        self._progress_bar.setTextVisible(False)
        self._progress_bar.setFixedHeight(8)
        root.addWidget(self._progress_bar)

        stats_row = QHBoxLayout()
        self._percent_label = QLabel(self)
        self._rounds_done_label = QLabel(self)
        self._rounds_done_label.setAlignment(Qt.AlignmentFlag.AlignRight)
        stats_row.addWidget(self._percent_label)
        stats_row.addWidget(self._rounds_done_label)
        root.addLayout(stats_row)

        self._round_label = QLabel(self)
        self._round_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._round_label.setStyleSheet("font-size: 16px; font-weight: 600;")
        root.addWidget(self._round_label)

        self._next_label = QLabel(self)
        self._next_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        root.addWidget(self._next_label)

        # ── presets ──────────────────────────────────────────────────
        self._presets_box = QWidget(self)
        presets_layout = QVBoxLayout(self._presets_box)
        presets_layout.setContentsMargins(0, 8, 0, 0)
        title = QLabel("Quick presets", self._presets_box)
        title.setStyleSheet("font-size: 15px; font-weight: 700;")
        presets_layout.addWidget(title)

        grid = QGridLayout()
        grid.setSpacing(8)
        self._preset_buttons: list[QPushButton] = []
        for i, preset in enumerate(PRESETS):
            btn = QPushButton(self._preset_caption(preset), self._presets_box)
            btn.setObjectName("presetButton")
            btn.clicked.connect(lambda _checked=False, p=preset: self.preset_selected.emit(p))
            grid.addWidget(btn, i // 2, i % 2)
            self._preset_buttons.append(btn)
        presets_layout.addLayout(grid)
        root.addWidget(self._presets_box)

        root.addStretch()

    @staticmethod
    def _preset_caption(preset: dict) -> str:
        work = preset.get("work_duration", 0)
        rest = preset.get("rest_duration", 0)
        rounds = preset.get("rounds", 1)
        return f"{preset.get('preset_name', 'Custom')}\n{work}s / {rest}s × {rounds}"

    # ── signals ───────────────────────────────────────────────────────────

    def _connect_signals(self) -> None:
        self._start_pause_btn.clicked.connect(self.toggle_start_pause)
        self._reset_btn.clicked.connect(lambda: self._controller.reset())
        self._skip_btn.clicked.connect(self._controller.skip)
        self._controller.state_changed.connect(self._on_state_changed)

    # ── slots ─────────────────────────────────────────────────────────────

    def toggle_start_pause(self) -> None:
        state = self._controller.state
        if state.is_active:
            self._controller.pause()
        elif state.is_running and state.is_paused:
            self._controller.resume()
        else:
            self._controller.start()

    def _on_state_changed(self, state: TimerState) -> None:
        config = self._controller.config

        # ── button label ──────────────────────────────────────────────
        if state.is_active:
            self._start_pause_btn.setText("Pause")
        elif state.is_running and state.is_paused:
            self._start_pause_btn.setText("Resume")
        else:
            self._start_pause_btn.setText("Start")
        self._start_pause_btn.setEnabled(not state.is_finished)
        self._skip_btn.setEnabled(not state.is_finished)

        # ── display ───────────────────────────────────────────────────
        self._phase_label.setText(progress.phase_label(state.phase))
        self._time_label.setText(progress.format_time(state.time_remaining))
        show_name = config.show_exercise_name and bool(config.exercise_name)
        self._exercise_label.setVisible(show_name)
        self._exercise_label.setText(config.exercise_name or "")
        self._apply_phase_colors(state)

        # ── progress (hidden during prepare) ──────────────────────────
        show_progress = state.phase is not Phase.PREPARE
        for widget in (
            self._progress_bar, self._percent_label, self._rounds_done_label,
            self._round_label, self._next_label,
        ):
            widget.setVisible(show_progress)
        self._refresh_progress(state, config)

        # ── presets only when idle ────────────────────────────────────
        self._presets_box.setVisible(not state.is_running)

    def _refresh_progress(self, state: TimerState, config: TimerConfig) -> None:
        pct = progress.progress_percent(state, config)
        self._progress_bar.setValue(round(pct))
        self._percent_label.setText(f"{round(pct)}% complete")
        self._rounds_done_label.setText(
            f"{progress.completed_rounds(state, config)}/"
            f"{progress.total_rounds(config)} rounds"
        )
        self._round_label.setText(progress.round_text(state, config))
        self._next_label.setText(progress.next_phase_text(state, config) or "")

    def _apply_phase_colors(self, state: TimerState) -> None:
        start, end = PHASE_COLORS[state.phase]
        border = "rgba(255,255,255,0.2)"
        if state.is_active and state.time_remaining <= PULSE_THRESHOLD:
            border = "white"
        self._card.setStyleSheet(
            "QFrame#phaseCard {"
            " background: qlineargradient(x1:0, y1:0, x2:1, y2:1,"
            f" stop:0 {start}, stop:1 {end});"
            f" border: 2px solid {border}; border-radius: 16px; }}"
        )
