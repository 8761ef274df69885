"""Timer configuration persistence on top of the preferences table.

The configuration is stored as one JSON document under
``workout-timer-config``, scoped per device/user.

Usage::

    config = load_config()
    save_config(apply_preset(preset_by_name("Tabata")))
"""

from __future__ import annotations

import json
import logging

from .config import TimerConfig, DEFAULT_CONFIG, config_from_dict, config_to_dict
from .database.db import get_session
from .database.models import Preference

log = logging.getLogger(__name__)

CONFIG_KEY = "workout-timer-config"
DEFAULT_SCOPE = "default"


# ── key-value helpers ─────────────────────────────────────────────────────


def get_value(key: str, scope: str = DEFAULT_SCOPE) -> str | None:
    with get_session() as db:
        record = (
            db.query(Preference)
            .filter(Preference.scope == scope, Preference.key == key)
            .first()
        )
        return record.value if record else None


def set_value(key: str, value: str, scope: str = DEFAULT_SCOPE) -> None:
    with get_session() as db:
        record = (
            db.query(Preference)
            .filter(Preference.scope == scope, Preference.key == key)
            .first()
        )
        if record is None:
            db.add(Preference(scope=scope, key=key, value=value))
        else:
            record.value = value


def delete_value(key: str, scope: str = DEFAULT_SCOPE) -> None:
    with get_session() as db:
        db.query(Preference).filter(
            Preference.scope == scope, Preference.key == key,
        ).delete()


# ── timer config ──────────────────────────────────────────────────────────


def load_config(scope: str = DEFAULT_SCOPE) -> TimerConfig:
    """Load the saved config, falling back to defaults.

    Corrupt or out-of-range data is repaired field by field rather than
    rejected.
    """
    raw = get_value(CONFIG_KEY, scope)
    if raw is None:
        return DEFAULT_CONFIG
    try:
        data = json.loads(raw)
    except ValueError:
        log.warning("stored timer config for scope %r is not valid JSON", scope)
        return DEFAULT_CONFIG
    return config_from_dict(data)


def save_config(config: TimerConfig, scope: str = DEFAULT_SCOPE) -> None:
    """Write *config* as JSON."""
    set_value(CONFIG_KEY, json.dumps(config_to_dict(config)), scope)
    log.debug("saved timer config (preset=%s)", config.preset_name)
