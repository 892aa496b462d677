"""
Shared fixtures for the sweep tests.
"""

import psutil
import pytest

from iox2_cleanup.config import SweepConfig


class FakeProcess:
    """Stand-in for the psutil.Process objects yielded by process_iter."""

    def __init__(self, pid, name):
        self.pid = pid
        self.info = {"name": name}


@pytest.fixture
def running_processes(monkeypatch):
    """
    Replace the process table with a controllable list.

    Tests append FakeProcess entries; nothing on the real system is ever
    inspected or signalled.
    """
    table = []
    monkeypatch.setattr(psutil, "process_iter", lambda attrs=None: list(table))
    return table


@pytest.fixture
def killed(monkeypatch, running_processes):
    """Record kill_tree calls instead of signalling anything."""
    calls = []
    monkeypatch.setattr(
        "iox2_cleanup.process_manager.kill_tree",
        lambda proc, timeout=3.0: calls.append(proc.pid),
    )
    return calls


@pytest.fixture
def temp_root(tmp_path):
    """
    Base directory laid out like the middleware's temp root.

    Contains two state files, an unrelated file and one service file.
    """
    services = tmp_path / "iceoryx2" / "services"
    services.mkdir(parents=True)
    (tmp_path / "iox2_abc.shm_state").write_text("")
    (tmp_path / "iox2_def.shm_state").write_text("")
    (tmp_path / "notes.txt").write_text("keep me")
    (services / "iox2_svc1.service").write_text("")
    return tmp_path


@pytest.fixture
def config(temp_root):
    return SweepConfig(base_dir=temp_root)
