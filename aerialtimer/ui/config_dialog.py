"""Workout configuration dialog for AerialTimer.

A modal dialog over a ``TimerConfig``.  It never edits the config it was
given; ``config()`` builds a new one from the widgets when the user
saves.
"""

from __future__ import annotations

from dataclasses import replace

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import (
    QDialog, QVBoxLayout, QHBoxLayout, QFormLayout,
    QLabel, QSpinBox, QSlider, QCheckBox, QPushButton,
    QFrame, QWidget, QLineEdit,
)

from ..config import DEFAULT_CONFIG, TimerConfig, apply_config

# default spin box ranges; widened when a loaded value falls outside
WORK_RANGE = (5, 300)
REST_RANGE = (0, 180)
ROUNDS_RANGE = (1, 99)
SETS_RANGE = (1, 20)
SET_REST_RANGE = (10, 300)
PREPARE_RANGE = (3, 30)
BEEPS_RANGE = (0, 10)


class ConfigDialog(QDialog):
    """Modal dialog for timing, audio and display options."""

    def __init__(
        self,
        config: TimerConfig,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.setWindowTitle("Timer settings")
        self.setMinimumWidth(420)
        self.setModal(True)

        self._base = config

        self._build_ui()
        self._populate(config)

    # ══════════════════════════════════════════════════════════════════
    #  BUILD UI
    # ══════════════════════════════════════════════════════════════════

    def _build_ui(self) -> None:
        root = QVBoxLayout(self)
        root.setContentsMargins(24, 20, 24, 20)
        root.setSpacing(16)

        # ── Timing section ───────────────────────────────────────────
        root.addWidget(self._section_label("Timing"))
        timer_form = QFormLayout()
        timer_form.setContentsMargins(0, 0, 0, 0)
        timer_form.setHorizontalSpacing(20)
        timer_form.setVerticalSpacing(10)

        self._work_spin = self._spin(*WORK_RANGE, " s")
        timer_form.addRow("Work:", self._work_spin)

        self._rest_spin = self._spin(*REST_RANGE, " s")
        timer_form.addRow("Rest:", self._rest_spin)

        self._rounds_spin = self._spin(*ROUNDS_RANGE)
        timer_form.addRow("Rounds:", self._rounds_spin)

        self._sets_spin = self._spin(*SETS_RANGE)
        timer_form.addRow("Sets:", self._sets_spin)

        self._set_rest_spin = self._spin(*SET_REST_RANGE, " s")
        timer_form.addRow("Rest between sets:", self._set_rest_spin)

        self._prepare_spin = self._spin(*PREPARE_RANGE, " s")
        timer_form.addRow("Prepare:", self._prepare_spin)

        root.addLayout(timer_form)
        root.addWidget(self._separator())

        # ── Sound section ────────────────────────────────────────────
        root.addWidget(self._section_label("Sound"))
        snd_form = QFormLayout()
        snd_form.setContentsMargins(0, 0, 0, 0)
        snd_form.setHorizontalSpacing(20)
        snd_form.setVerticalSpacing(10)

        self._sound_cb = QCheckBox("Sound cues")
        self._sound_cb.toggled.connect(self._on_sound_toggled)
        snd_form.addRow("", self._sound_cb)

        self._beeps_spin = self._spin(*BEEPS_RANGE, " s")
        snd_form.addRow("Countdown beeps:", self._beeps_spin)

        vol_row = QHBoxLayout()
        vol_row.setSpacing(10)
        self._vol_slider = QSlider(Qt.Orientation.Horizontal)
        self._vol_slider.setRange(0, 100)
        self._vol_slider.setSingleStep(10)
        self._vol_slider.setPageStep(10)
        self._vol_slider.setTickInterval(10)
        self._vol_label = QLabel("70%")
        self._vol_label.setMinimumWidth(36)
        self._vol_slider.valueChanged.connect(self._on_volume_changed)
        vol_row.addWidget(self._vol_slider)
        vol_row.addWidget(self._vol_label)

        vol_wrapper = QWidget()
        vol_wrapper.setLayout(vol_row)
        snd_form.addRow("Volume:", vol_wrapper)

        root.addLayout(snd_form)
        root.addWidget(self._separator())

        # ── Display section ──────────────────────────────────────────
        root.addWidget(self._section_label("Display"))
        disp_form = QFormLayout()
        disp_form.setContentsMargins(0, 0, 0, 0)

        self._show_name_cb = QCheckBox("Show exercise name")
        self._show_name_cb.toggled.connect(self._on_show_name_toggled)
        disp_form.addRow("", self._show_name_cb)

        self._name_edit = QLineEdit()
        self._name_edit.setMaxLength(100)
        self._name_edit.setPlaceholderText("e.g. Pole climbs")
        disp_form.addRow("Exercise:", self._name_edit)

        root.addLayout(disp_form)

        # ── buttons ──────────────────────────────────────────────────
        root.addStretch()
        btn_row = QHBoxLayout()
        self._defaults_btn = QPushButton("Reset to defaults")
        self._defaults_btn.setObjectName("secondaryButton")
        self._defaults_btn.clicked.connect(self.reset_to_defaults)
        btn_row.addWidget(self._defaults_btn)
        btn_row.addStretch()
        cancel_btn = QPushButton("Cancel")
        cancel_btn.setObjectName("secondaryButton")
        cancel_btn.clicked.connect(self.reject)
        save_btn = QPushButton("Save")
        save_btn.setObjectName("primaryButton")
        save_btn.clicked.connect(self.accept)
        btn_row.addWidget(cancel_btn)
        btn_row.addWidget(save_btn)
        root.addLayout(btn_row)

    # ── helpers ──────────────────────────────────────────────────────

    @staticmethod
    def _spin(low: int, high: int, suffix: str = "") -> QSpinBox:
        spin = QSpinBox()
        spin.setRange(low, high)
        if suffix:
            spin.setSuffix(suffix)
        return spin

    @staticmethod
    def _section_label(text: str) -> QLabel:
        lbl = QLabel(text)
        lbl.setStyleSheet("font-size: 15px; font-weight: 700; margin-top: 4px;")
        return lbl

    @staticmethod
    def _separator() -> QFrame:
        line = QFrame()
        line.setFrameShape(QFrame.Shape.HLine)
        line.setFixedHeight(1)
        line.setStyleSheet("background-color: rgba(255,255,255,0.08);")
        return line

    # ══════════════════════════════════════════════════════════════════
    #  POPULATE FROM CONFIG
    # ══════════════════════════════════════════════════════════════════

    def _populate(self, c: TimerConfig) -> None:
        self._fit(self._work_spin, WORK_RANGE, c.work_duration)
        self._fit(self._rest_spin, REST_RANGE, c.rest_duration)
        self._fit(self._rounds_spin, ROUNDS_RANGE, c.rounds)
        self._fit(self._sets_spin, SETS_RANGE, c.sets)
        self._fit(self._set_rest_spin, SET_REST_RANGE, c.rest_between_sets)
        self._fit(self._prepare_spin, PREPARE_RANGE, c.prepare_time)
        self._sound_cb.setChecked(c.enable_sound)
        self._fit(self._beeps_spin, BEEPS_RANGE, c.countdown_beeps)
        self._vol_slider.setValue(c.beep_volume)
        self._vol_label.setText(f"{c.beep_volume}%")
        self._show_name_cb.setChecked(c.show_exercise_name)
        self._name_edit.setText(c.exercise_name or "")
        self._on_sound_toggled(c.enable_sound)
        self._on_show_name_toggled(c.show_exercise_name)

    @staticmethod
    def _fit(spin: QSpinBox, default_range: tuple[int, int], value: int) -> None:
        """Set *value* without letting Qt clamp it to the UI range."""
        low, high = default_range
        spin.setRange(min(low, value), max(high, value))
        spin.setValue(value)

    # ══════════════════════════════════════════════════════════════════
    #  CHANGE HANDLERS
    # ══════════════════════════════════════════════════════════════════

    def _on_sound_toggled(self, enabled: bool) -> None:
        self._beeps_spin.setEnabled(enabled)
        self._vol_slider.setEnabled(enabled)

    def _on_show_name_toggled(self, enabled: bool) -> None:
        self._name_edit.setEnabled(enabled)

    def _on_volume_changed(self, value: int) -> None:
        self._vol_label.setText(f"{value}%")

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC
    # ══════════════════════════════════════════════════════════════════

    def reset_to_defaults(self) -> None:
        """Refill the form with the default config; nothing is saved yet."""
        self._base = DEFAULT_CONFIG
        self._populate(DEFAULT_CONFIG)

    def config(self) -> TimerConfig:
        """New config built from the widgets, with ``last_used`` stamped."""
        name = self._name_edit.text().strip() or None
        edited = replace(
            self._base,
            work_duration=self._work_spin.value(),
            rest_duration=self._rest_spin.value(),
            rounds=self._rounds_spin.value(),
            sets=self._sets_spin.value(),
            rest_between_sets=self._set_rest_spin.value(),
            prepare_time=self._prepare_spin.value(),
            enable_sound=self._sound_cb.isChecked(),
            countdown_beeps=self._beeps_spin.value(),
            beep_volume=self._vol_slider.value(),
            show_exercise_name=self._show_name_cb.isChecked(),
            exercise_name=name,
        )
        return apply_config(edited)
