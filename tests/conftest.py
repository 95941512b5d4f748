"""Shared pytest setup for flatre.

The matcher backtracks without a step limit, so every test runs under a
wall-clock alarm. Raise it for one test with ``@pytest.mark.timeout(30)``.
"""

import signal

import pytest


DEFAULT_TIMEOUT = 10

HAS_ALARM = hasattr(signal, "SIGALRM")


def pytest_configure(config):
    config.addinivalue_line(
        "markers", "timeout(seconds): fail the test after this many seconds"
    )


def _alarm_seconds(node) -> int:
    marker = node.get_closest_marker("timeout")
    if marker is None or not marker.args:
        return DEFAULT_TIMEOUT
    return int(marker.args[0])


@pytest.fixture(autouse=True)
def backtracking_alarm(request):
    if not HAS_ALARM:
        yield
        return

    seconds = _alarm_seconds(request.node)

    def on_alarm(signum, frame):
        pytest.fail(f"{request.node.name} ran longer than {seconds}s")

    previous = signal.signal(signal.SIGALRM, on_alarm)
    signal.alarm(seconds)
    try:
        yield
    finally:
        signal.alarm(0)
        signal.signal(signal.SIGALRM, previous)
