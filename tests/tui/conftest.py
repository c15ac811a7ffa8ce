"""Shared fixtures for TUI tests.

Views are pure functions of state, so most tests drive AppState through
dispatch() and only a few start the real app.
"""

from pathlib import Path

import pytest

from memoria.store.workdir import init_work, load_work_cfg
from memoria.tui.state import AppState, LoadText


@pytest.fixture
def work_dir(tmp_path) -> Path:
    """A fresh Memoria work with default config."""
    workdir = tmp_path / "work"
    init_work(workdir)
    return workdir


@pytest.fixture
def tui_state(work_dir) -> AppState:
    """AppState loaded from the work config, holding 'The cat sat on the mat.'"""
    _, memoria_dir, cfg = load_work_cfg(work_dir)
    state = AppState.from_config(cfg, memoria_dir)
    state.dispatch(LoadText("The cat sat on the mat.", "Cats"))
    return state
