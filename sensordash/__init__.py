"""
sensordash package
==================

Polling dashboard for the radar / IR / DHT sensor board.
"""

__all__ = [
    "constants",
    "config",
    "logs",
    "readings",
    "window",
    "radar",
    "charts",
    "session",
    "poller",
    "gui",
]

__version__ = "1.2"
