"""Shared test configuration for evaluate."""

import pytest

from evaluate.probes import MemoryProbe

MB = 1024 * 1024


class FakeProbe(MemoryProbe):
    """Deterministic probe: every reading grows by `step` bytes."""

    name = "fake"
    display_name = "Fake probe"

    def __init__(self, step=MB):
        super().__init__()
        self.step = step
        self.usage = 0
        self.peak = 0
        self.started = 0
        self.stopped = 0
        self.resets = 0

    def start(self):
        self.started += 1

    def stop(self):
        self.stopped += 1

    def reset_peak(self):
        self.resets += 1
        self.peak = self.usage

    def current_peak(self):
        value = self.peak
        self.peak += self.step
        return value

    def current_usage(self):
        value = self.usage
        self.usage += self.step
        return value


class FakeProcessProbe:
    def __init__(self, peak=2 * MB, start=0.0):
        self.peak = peak
        self.start = start

    def peak_memory(self):
        return self.peak

    def start_time(self):
        return self.start


@pytest.fixture
def fake_probe():
    return FakeProbe()


@pytest.fixture
def fake_process_probe():
    return FakeProcessProbe()
