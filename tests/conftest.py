# tests/conftest.py
"""Shared fixtures for the test suite."""

import numpy as np
import pytest


@pytest.fixture
def seed():
    """Fixed seed for reproducibility."""
    return 42


@pytest.fixture
def rng(seed):
    """Numpy random generator with fixed seed."""
    return np.random.default_rng(seed)


class Recorder:
    """Reporting callback that keeps every (step, snapshot) it is given."""

    def __init__(self, cancel_at=None):
        self.cancel_at = cancel_at
        self.steps = []
        self.snapshots = []

    def __call__(self, step, snapshot):
        self.steps.append(step)
        self.snapshots.append(snapshot)
        return self.cancel_at is None or len(self.steps) < self.cancel_at


@pytest.fixture
def recorder():
    return Recorder()


@pytest.fixture
def make_recorder():
    return Recorder
