"""
sensordash.poller
=================

Fixed-rate HTTP poller for the sensor board.

Every `POLL_INTERVAL_MS` the background thread calls `poll()`, which GETs
``http://{endpoint}/``, decodes the JSON envelope

    { "radar": {"angle": .., "distance": ..},
      "ir":    ..,
      "dht":   {"temperature": .., "humidity": ..} }

and hands it to `Session.apply()`.

Polls run one at a time on the poller thread.  If a request is still in
flight when the next tick falls due, that tick is skipped (and counted), so
responses are always applied in request order.  Every failure is logged and
dropped; the thread only exits through `stop()`.

Usage
-----
    poller = Poller(session)
    poller.start()     # spawns a background thread
    poller.stop()      # clean shutdown
"""
from __future__ import annotations

import logging
import threading
import time
from typing import Optional

import requests

from sensordash import constants as C
from sensordash.session import Session

log = logging.getLogger(__name__)


class PollError(Exception):
    """Base class for one failed poll."""


class TransportError(PollError):
    def __init__(self, message: str, status: Optional[int] = None) -> None:
        super().__init__(message)
        self.status = status


class DecodeError(PollError):
    pass


class Poller:
    def __init__(self, session: Session,
                 http: Optional[requests.Session] = None,
                 interval: float = C.POLL_INTERVAL_MS / 1000,
                 timeout: float = C.FETCH_TIMEOUT_SEC) -> None:
        self.session  = session
        self.http     = http if http is not None else requests.Session()
        self.interval = interval
        self.timeout  = timeout

        self.skipped  = 0                        # ticks lost to slow requests
        self.last_ok: Optional[float] = None     # monotonic time of last success
        self.last_error: Optional[str] = None

        self._stop    = threading.Event()
        self._thread  = threading.Thread(target=self._loop, name="poller",
                                         daemon=True)

    # ───────────────────────── public API
    def start(self) -> None:
        self._thread.start()

    def stop(self) -> None:
        self._stop.set()
        if self._thread.is_alive():
            self._thread.join(timeout=self.timeout + 1)
        if not self._thread.is_alive():       # else _loop closes it on exit
            self.http.close()

    def poll(self) -> bool:
        """One fetch → decode → dispatch cycle.  Never raises."""
        url = self.session.url
        if url is None:
            return False                         # nothing configured yet
        try:
            payload = self._fetch(url)
            self.session.apply(payload)
        except Exception as exc:                 # any failure only costs this tick
            self.last_error = str(exc)
            log.warning("Error fetching data: %s", exc)
            return False
        self.last_ok = time.monotonic()
        self.last_error = None
        return True

    # ───────────────────────── helpers
    def _fetch(self, url: str) -> dict:
        try:
            resp = self.http.get(url, timeout=self.timeout)
        except requests.RequestException as exc:
            raise TransportError(f"request to {url} failed: {exc}") from exc

        if not resp.ok:
            raise TransportError(f"HTTP error! Status: {resp.status_code}",
                                 resp.status_code)
        try:
            data = resp.json()
        except ValueError as exc:                # requests' JSONDecodeError too
            raise DecodeError(f"invalid JSON from {url}: {exc}") from exc
        if not isinstance(data, dict):
            raise DecodeError(f"expected a JSON object, got {type(data).__name__}")
        return data

    # ───────────────────────── background thread
    def _loop(self) -> None:
        try:
            self._run()
        finally:
            self.http.close()

    def _run(self) -> None:
        next_tick = time.monotonic()
        while not self._stop.is_set():
            self.poll()

            next_tick += self.interval
            now = time.monotonic()
            if now > next_tick:                  # request overran its slot(s)
                missed = int((now - next_tick) // self.interval) + 1
                self.skipped += missed
                next_tick += missed * self.interval
            self._stop.wait(max(0.0, next_tick - time.monotonic()))
