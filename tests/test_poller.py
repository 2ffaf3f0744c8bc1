import json
import logging
import time

import pytest
import requests

from sensordash import charts
from sensordash.poller import Poller
from sensordash.session import Session


class FakeResponse:
    def __init__(self, status=200, body=None, text=None):
        self.status_code = status
        self.ok = 200 <= status < 400
        self._text = text if text is not None else json.dumps(body)

    def json(self):
        return json.loads(self._text)


class FakeHTTP:
    def __init__(self, *responses, delay=0.0):
        self.responses = list(responses)
        self.delay = delay
        self.requests = []
        self.closed = False

    def get(self, url, timeout=None):
        self.requests.append((url, timeout))
        if self.delay:
            time.sleep(self.delay)
        item = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        if isinstance(item, Exception):
            raise item
        return item

    def close(self):
        self.closed = True


PAYLOAD = {"radar": {"angle": 30, "distance": 40},
           "ir": 512,
           "dht": {"temperature": 72.5, "humidity": 41}}


def test_poll_without_endpoint_is_silent(store, caplog):
    caplog.set_level(logging.DEBUG)
    http = FakeHTTP(FakeResponse(body=PAYLOAD))
    p = Poller(Session(store), http=http)
    assert p.poll() is False
    assert http.requests == []
    assert store.calls == []
    assert caplog.records == []


def test_poll_success_updates_all_sensors(store):
    s = Session(store)
    s.set_endpoint("192.168.4.1")
    http = FakeHTTP(FakeResponse(body=PAYLOAD))
    p = Poller(s, http=http)

    assert p.poll() is True
    assert http.requests == [("http://192.168.4.1/", 2.0)]
    assert s.radar.snapshot().angles == (30,)
    assert s.ir.values() == [512]
    assert s.hum.values() == [41]
    assert p.last_ok is not None and p.last_error is None


def test_http_500_is_logged_and_state_untouched(store, caplog):
    s = Session(store)
    s.set_endpoint("board.local")
    p = Poller(s, http=FakeHTTP(FakeResponse(status=500, body=PAYLOAD)))

    caplog.set_level(logging.WARNING, logger="sensordash")
    assert p.poll() is False
    assert "500" in caplog.text
    assert "500" in p.last_error
    assert len(s.radar) == 0 and len(s.ir) == 0 and len(s.temp) == 0
    assert store.calls == []


def test_bad_json_is_logged(store, caplog):
    s = Session(store)
    s.set_endpoint("board.local")
    p = Poller(s, http=FakeHTTP(FakeResponse(text="{not json")))
    caplog.set_level(logging.WARNING, logger="sensordash")
    assert p.poll() is False
    assert "invalid JSON" in caplog.text


def test_non_object_body_is_rejected(store):
    s = Session(store)
    s.set_endpoint("board.local")
    p = Poller(s, http=FakeHTTP(FakeResponse(body=[1, 2, 3])))
    assert p.poll() is False
    assert "JSON object" in p.last_error


def test_network_error_does_not_raise(store, caplog):
    s = Session(store)
    s.set_endpoint("board.local")
    p = Poller(s, http=FakeHTTP(requests.ConnectionError("refused")))
    caplog.set_level(logging.WARNING, logger="sensordash")
    assert p.poll() is False
    assert "refused" in caplog.text


def test_recovers_after_failure(store):
    s = Session(store)
    s.set_endpoint("board.local")
    http = FakeHTTP(requests.Timeout("slow"), FakeResponse(body={"ir": 3}))
    p = Poller(s, http=http)
    assert p.poll() is False
    assert p.poll() is True
    assert s.ir.values() == [3]
    assert p.last_error is None


def test_partial_payload(store):
    s = Session(store)
    s.set_endpoint("board.local")
    p = Poller(s, http=FakeHTTP(FakeResponse(body={"dht": {"temperature": 70}, "ir": 9})))
    assert p.poll() is True
    assert s.ir.values() == [9]
    assert len(s.temp) == 0
    _, layout = store.plot(charts.DHT)
    assert "range" not in layout["yaxis"]


def test_thread_polls_and_stops(store):
    s = Session(store)
    s.set_endpoint("board.local")
    http = FakeHTTP(FakeResponse(body={"ir": 1}))
    p = Poller(s, http=http, interval=0.01)
    p.start()
    deadline = time.monotonic() + 2
    while len(http.requests) < 3 and time.monotonic() < deadline:
        time.sleep(0.01)
    p.stop()
    assert len(http.requests) >= 3
    assert http.closed


def test_slow_requests_skip_ticks_instead_of_overlapping(store):
    s = Session(store)
    s.set_endpoint("board.local")
    http = FakeHTTP(FakeResponse(body={"ir": 1}), delay=0.05)
    p = Poller(s, http=http, interval=0.01)
    p.start()
    time.sleep(0.3)
    p.stop()
    assert p.skipped > 0
    # one request per finished poll, never more than wall-time allows
    assert len(http.requests) <= 0.3 / 0.05 + 2


def test_nan_and_infinity_are_not_stored(store):
    s = Session(store)
    s.set_endpoint("board.local")
    body = ('{"radar": {"angle": NaN, "distance": 5}, "ir": Infinity,'
            ' "dht": {"temperature": 70, "humidity": -Infinity}}')
    p = Poller(s, http=FakeHTTP(FakeResponse(text=body)))
    p.poll()
    assert len(s.radar) == 0
    assert len(s.ir) == 0
    assert len(s.temp) == len(s.hum) == 0
    assert store.calls == []


def test_nan_angles_keep_the_aggregate_sorted(store):
    s = Session(store)
    for angle in ("90", "NaN", "10", "NaN", "50"):
        s.update_radar(json.loads(f'{{"angle": {angle}, "distance": 5}}'))
    assert s.radar.snapshot().angles == (10, 50, 90)


def test_stop_leaves_session_open_while_request_in_flight(store):
    s = Session(store)
    s.set_endpoint("board.local")
    http = FakeHTTP(FakeResponse(body={"ir": 1}), delay=1.5)
    p = Poller(s, http=http, timeout=0.1)     # join gives up after 1.1 s
    p.start()
    time.sleep(0.05)
    p.stop()
    assert not http.closed
    p._thread.join(timeout=3)
    assert http.closed
