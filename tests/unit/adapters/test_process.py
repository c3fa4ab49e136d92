"""Unit tests for `stagehand.adapters.process.ExecProcessReplacer`."""

from __future__ import annotations

from pathlib import Path

import pytest

from stagehand.adapters import process as process_module
from stagehand.adapters.process import ExecProcessReplacer


class Execed(Exception):
    """Raised by the fake ``execvp`` so the test process survives."""


@pytest.fixture
def fake_os(monkeypatch):
    """Record chdir/execvp calls instead of performing them."""
    calls: list[tuple] = []

    def _chdir(path):
        calls.append(("chdir", Path(path)))

    def _execvp(file, args):
        calls.append(("execvp", file, args))
        raise Execed()

    monkeypatch.setattr(process_module.os, "chdir", _chdir)
    monkeypatch.setattr(process_module.os, "execvp", _execvp)
    monkeypatch.setattr(process_module.logging, "shutdown", lambda: None)
    return calls


def test_changes_directory_then_execs(fake_os, tmp_path: Path) -> None:
    """The working directory is set before the image is replaced."""
    with pytest.raises(Execed):
        ExecProcessReplacer().replace(("java", "-jar", "server.jar"), tmp_path)

    assert fake_os == [
        ("chdir", tmp_path),
        ("execvp", "java", ["java", "-jar", "server.jar"]),
    ]


def test_logging_is_flushed_first(fake_os, monkeypatch, tmp_path: Path) -> None:
    """Logging is shut down before exec so buffered records are written."""
    order: list[str] = []
    monkeypatch.setattr(
        process_module.logging, "shutdown", lambda: order.append("logging.shutdown")
    )

    with pytest.raises(Execed):
        ExecProcessReplacer().replace(["./run"], tmp_path)

    assert order == ["logging.shutdown"]
    assert fake_os[-1][0] == "execvp"


def test_exec_errors_propagate(monkeypatch, tmp_path: Path) -> None:
    """OSError from exec reaches the caller unchanged."""
    monkeypatch.setattr(process_module.logging, "shutdown", lambda: None)
    monkeypatch.setattr(process_module.os, "chdir", lambda path: None)

    def _missing(file, args):
        raise FileNotFoundError(2, "No such file or directory", file)

    monkeypatch.setattr(process_module.os, "execvp", _missing)

    with pytest.raises(FileNotFoundError):
        ExecProcessReplacer().replace(["java"], tmp_path)
