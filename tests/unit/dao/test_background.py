"""Unit tests for the UsageRecorder in background.py

Test coverage includes:

1. Submitting writes
   - Writes run in the background with their arguments.
   - Failing writes are logged and never raised.

2. Draining and shutdown
   - drain() waits for every submitted write.
   - Writes submitted after shutdown are refused with a warning.
"""

import logging
import threading
from unittest.mock import MagicMock

import pytest

from shortie.dao.background import UsageRecorder


# -------------------------------
# Fixtures
# -------------------------------


@pytest.fixture
def recorder():
    _recorder = UsageRecorder(max_workers=2)
    yield _recorder
    _recorder.shutdown(wait=True)


# -------------------------------
# 1. Submitting writes
# -------------------------------


def test_submit_runs_write_with_arguments(recorder):
    write = MagicMock()

    future = recorder.submit(write, 'record', '1730678400', force=True)
    future.result(timeout=5)

    write.assert_called_once_with('record', '1730678400', force=True)


def test_submit_does_not_block_caller(recorder):
    release = threading.Event()
    started = threading.Event()

    def slow_write():
        started.set()
        release.wait(timeout=5)

    future = recorder.submit(slow_write)

    assert started.wait(timeout=5)
    assert not future.done()
    release.set()
    recorder.drain(timeout=5)
    assert future.done()


def test_failing_write_is_logged_not_raised(recorder, caplog):
    def failing_write():
        raise ConnectionError('store is down')

    with caplog.at_level(logging.ERROR, logger='shortie.dao.background'):
        future = recorder.submit(failing_write)
        recorder.drain(timeout=5)

    assert future.exception() is None
    assert 'Failed to record link usage.' in caplog.text


# -------------------------------
# 2. Draining and shutdown
# -------------------------------


def test_drain_waits_for_pending_writes(recorder):
    results = []
    lock = threading.Lock()

    def write(i):
        with lock:
            results.append(i)

    for i in range(50):
        recorder.submit(write, i)
    recorder.drain(timeout=5)

    assert sorted(results) == list(range(50))


def test_drain_without_pending_writes(recorder):
    recorder.drain(timeout=1)


def test_shutdown_finishes_pending_writes():
    recorder = UsageRecorder(max_workers=1)
    write = MagicMock()

    for _ in range(10):
        recorder.submit(write)
    recorder.shutdown(wait=True)

    assert write.call_count == 10


def test_submit_after_shutdown_is_refused(recorder, caplog):
    recorder.shutdown(wait=True)
    write = MagicMock()

    with caplog.at_level(logging.WARNING, logger='shortie.dao.background'):
        future = recorder.submit(write)

    assert future is None
    write.assert_not_called()
    assert 'Usage recorder refused a write' in caplog.text


def test_uses_given_executor():
    executor = MagicMock()
    recorder = UsageRecorder(executor=executor)

    recorder.submit(print, 'hello')

    executor.submit.assert_called_once()
    assert recorder.executor is executor
