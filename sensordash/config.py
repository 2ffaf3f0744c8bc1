"""
sensordash.config
=================

Tiny helper that loads / saves *sensordash_config.json* and injects sensible
defaults for any missing keys.
"""

from __future__ import annotations
import json
import logging
from sensordash.constants import CFG_PATH

log = logging.getLogger(__name__)

_DEFAULT = {
    # board address typed last time; only pre-fills the input field
    "endpoint": "",

    # display
    "night": False,

    # diagnostics
    "log_level": "INFO",
}


def load() -> dict:
    try:
        with open(CFG_PATH) as fh:
            return {**_DEFAULT, **json.load(fh)}
    except FileNotFoundError:
        save(_DEFAULT)
        return dict(_DEFAULT)
    except (json.JSONDecodeError, TypeError) as exc:
        log.warning("Ignoring unreadable %s: %s", CFG_PATH.name, exc)
        return dict(_DEFAULT)


def save(cfg: dict) -> None:
    CFG_PATH.write_text(json.dumps(cfg, indent=2))
