"""Workout timer configuration: value object, defaults, and presets.

A ``TimerConfig`` is immutable.  Every edit, preset selection, or load
from storage produces a brand-new object via ``dataclasses.replace``.

Usage::

    config = apply_preset(preset_by_name("Tabata"))
    data = config_to_dict(config)        # JSON-shaped, camelCase keys
    same = config_from_dict(data)
"""

from __future__ import annotations

import math
from dataclasses import dataclass, fields, replace
from datetime import datetime
from typing import Any


# ── field limits ──────────────────────────────────────────────────────────

MIN_DURATION = 0
MIN_COUNT = 1
MIN_VOLUME = 0
MAX_VOLUME = 100


@dataclass(frozen=True)
class TimerConfig:
    """All parameters of one interval workout."""

    # ── timing ────────────────────────────────────────────────────────
    work_duration: int = 45               # seconds
    rest_duration: int = 15
    rounds: int = 8
    sets: int = 1
    rest_between_sets: int = 60
    prepare_time: int = 10

    # ── audio ─────────────────────────────────────────────────────────
    enable_sound: bool = True
    countdown_beeps: int = 3              # seconds before phase end, 0 = off
    beep_volume: int = 70                 # 0-100

    # ── display ───────────────────────────────────────────────────────
    show_exercise_name: bool = False
    exercise_name: str | None = None

    # ── metadata ──────────────────────────────────────────────────────
    preset_name: str | None = None
    last_used: datetime | None = None


DEFAULT_CONFIG = TimerConfig()

# Python field name → JSON key.
_JSON_KEYS: dict[str, str] = {
    "work_duration": "workDuration",
    "rest_duration": "restDuration",
    "rounds": "rounds",
    "sets": "sets",
    "rest_between_sets": "restBetweenSets",
    "prepare_time": "prepareTime",
    "enable_sound": "enableSound",
    "countdown_beeps": "countdownBeeps",
    "beep_volume": "beepVolume",
    "show_exercise_name": "showExerciseName",
    "exercise_name": "exerciseName",
    "preset_name": "presetName",
    "last_used": "lastUsed",
}

_DURATION_FIELDS = (
    "work_duration",
    "rest_duration",
    "rest_between_sets",
    "prepare_time",
    "countdown_beeps",
)
_COUNT_FIELDS = ("rounds", "sets")
_BOOL_FIELDS = ("enable_sound", "show_exercise_name")
_TEXT_FIELDS = ("exercise_name", "preset_name")


# ── presets ───────────────────────────────────────────────────────────────
#    Partial overrides merged onto DEFAULT_CONFIG by ``apply_preset``.

PRESETS: tuple[dict[str, Any], ...] = (
    {
        "preset_name": "Tabata",
        "work_duration": 20,
        "rest_duration": 10,
        "rounds": 8,
        "sets": 1,
        "prepare_time": 10,
    },
    {
        "preset_name": "HIIT Classic",
        "work_duration": 40,
        "rest_duration": 20,
        "rounds": 10,
        "sets": 1,
        "prepare_time": 10,
    },
    {
        "preset_name": "EMOM",
        "work_duration": 60,
        "rest_duration": 0,
        "rounds": 20,
        "sets": 1,
        "prepare_time": 5,
    },
    {
        "preset_name": "Circuit",
        "work_duration": 30,
        "rest_duration": 15,
        "rounds": 12,
        "sets": 3,
        "rest_between_sets": 90,
        "prepare_time": 10,
    },
)


def preset_by_name(name: str) -> dict[str, Any] | None:
    for preset in PRESETS:
        if preset.get("preset_name") == name:
            return preset
    return None


# ═══════════════════════════════════════════════════════════════════════════
#  BUILDERS
# ═══════════════════════════════════════════════════════════════════════════


def apply_preset(
    preset: dict[str, Any],
    now: datetime | None = None,
) -> TimerConfig:
    """Merge *preset* onto the defaults and stamp ``last_used``.

    Keys that are not ``TimerConfig`` fields are ignored.
    """
    valid = {f.name for f in fields(TimerConfig)}
    overrides = {k: v for k, v in preset.items() if k in valid}
    merged = replace(DEFAULT_CONFIG, **overrides)
    return apply_config(merged, now)


def apply_config(config: TimerConfig, now: datetime | None = None) -> TimerConfig:
    """Return a normalised copy of *config* with ``last_used`` refreshed."""
    return replace(normalize_config(config), last_used=now or datetime.now())


def normalize_config(config: TimerConfig) -> TimerConfig:
    """Clamp every numeric field into its domain."""
    changes: dict[str, int] = {}
    for name in _DURATION_FIELDS:
        changes[name] = max(MIN_DURATION, int(getattr(config, name)))
    for name in _COUNT_FIELDS:
        changes[name] = max(MIN_COUNT, int(getattr(config, name)))
    changes["beep_volume"] = max(
        MIN_VOLUME, min(MAX_VOLUME, int(config.beep_volume)),
    )
    return replace(config, **changes)


# ═══════════════════════════════════════════════════════════════════════════
#  SERIALISATION
# ═══════════════════════════════════════════════════════════════════════════


def config_to_dict(config: TimerConfig) -> dict[str, Any]:
    """JSON-ready mapping using camelCase keys."""
    data: dict[str, Any] = {}
    for name, key in _JSON_KEYS.items():
        value = getattr(config, name)
        if name == "last_used":
            value = value.isoformat() if value is not None else None
        data[key] = value
    return data


def config_from_dict(data: dict[str, Any]) -> TimerConfig:
    """Build a config from stored data, falling back per field.

    Unknown keys are ignored, wrongly typed values take the default,
    and out-of-range numbers are clamped.  Never raises.
    """
    if not isinstance(data, dict):
        return DEFAULT_CONFIG

    values: dict[str, Any] = {}
    for name, key in _JSON_KEYS.items():
        if key not in data:
            continue
        raw = data[key]
        if name in _DURATION_FIELDS or name in _COUNT_FIELDS or name == "beep_volume":
            # bool is an int subclass; reject it explicitly
            if isinstance(raw, bool) or not isinstance(raw, (int, float)):
                continue
            if isinstance(raw, float) and not math.isfinite(raw):
                continue
            values[name] = int(raw)
        elif name in _BOOL_FIELDS:
            if isinstance(raw, bool):
                values[name] = raw
        elif name in _TEXT_FIELDS:
            if raw is None or isinstance(raw, str):
                values[name] = raw
        elif name == "last_used":
            values[name] = _parse_timestamp(raw)

    return normalize_config(replace(DEFAULT_CONFIG, **values))


def _parse_timestamp(raw: Any) -> datetime | None:
    if not isinstance(raw, str):
        return None
    try:
        return datetime.fromisoformat(raw)
    except ValueError:
        return None
