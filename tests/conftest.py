"""Shared fixtures for CPU engine tests."""

import textwrap

import pytest

from stackconquer_cpu.config import HostConfig


@pytest.fixture
def config() -> HostConfig:
    return HostConfig(player_id=2, board_width=5, board_height=5, height_to_win=5)


@pytest.fixture
def write_script(tmp_path):
    """Write dedented script source to a file and return its path."""

    counter = {"n": 0}

    def _write(source: str, name: str = "") -> str:
        counter["n"] += 1
        path = tmp_path / (name or f"cpu_{counter['n']}.py")
        path.write_text(textwrap.dedent(source).lstrip("\n"), encoding="utf-8")
        return str(path)

    return _write
