# tests/5_core/test_discover_system_include_paths.py
"""Tests for probing the compiler, with the compiler itself faked out."""

import os
import shutil
import subprocess
import tempfile
from pathlib import Path
from typing import Any

import pytest

import hdoc.logs as mod_logs
import hdoc.system_includes as mod_includes
from tests.utils import CLANG_OUTPUT, CLANG_PATHS, GCC_OUTPUT, GCC_PATHS


FAKE_COMPILER = "/opt/fake/bin/c++"


class _FakeRun:
    """Replacement for subprocess.run that writes canned stderr."""

    def __init__(self, stderr: str, returncode: int = 0) -> None:
        self.stderr = stderr
        self.returncode = returncode
        self.calls: list[tuple[list[str], dict[str, Any]]] = []
        self.stderr_path: str | None = None

    def __call__(self, cmd: list[str], **kwargs: Any) -> subprocess.CompletedProcess[bytes]:
        self.calls.append((cmd, kwargs))
        stream = kwargs["stderr"]
        self.stderr_path = stream.name
        stream.write(self.stderr.encode("utf-8"))
        stream.flush()
        return subprocess.CompletedProcess(cmd, self.returncode)


@pytest.fixture
def fake_compiler(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(shutil, "which", lambda name: FAKE_COMPILER if name == "c++" else None)


def test_discovers_gcc_paths(
    monkeypatch: pytest.MonkeyPatch,
    fake_compiler: None,  # noqa: ARG001
    direct_logger: mod_logs.HdocLogger,
) -> None:
    # --- setup ---
    fake_run = _FakeRun(GCC_OUTPUT)
    monkeypatch.setattr(subprocess, "run", fake_run)

    # --- execute ---
    result = mod_includes.discover_system_include_paths(logger=direct_logger)

    # --- verify ---
    assert result == GCC_PATHS


def test_invokes_compiler_with_preprocessor_verbose_flags(
    monkeypatch: pytest.MonkeyPatch,
    fake_compiler: None,  # noqa: ARG001
    direct_logger: mod_logs.HdocLogger,
) -> None:
    # --- setup ---
    fake_run = _FakeRun(CLANG_OUTPUT)
    monkeypatch.setattr(subprocess, "run", fake_run)

    # --- execute ---
    result = mod_includes.discover_system_include_paths(
        timeout=3.0, logger=direct_logger
    )

    # --- verify ---
    assert result == CLANG_PATHS
    (cmd, kwargs), = fake_run.calls
    assert cmd == [FAKE_COMPILER, "-E", "-Wp,-v", "-xc++", os.devnull]
    assert kwargs["stdin"] is subprocess.DEVNULL
    assert kwargs["stdout"] is subprocess.DEVNULL
    assert kwargs["timeout"] == 3.0  # noqa: PLR2004


def test_temp_file_removed_after_success(
    monkeypatch: pytest.MonkeyPatch,
    fake_compiler: None,  # noqa: ARG001
    direct_logger: mod_logs.HdocLogger,
) -> None:
    # --- setup ---
    fake_run = _FakeRun(GCC_OUTPUT)
    monkeypatch.setattr(subprocess, "run", fake_run)

    # --- execute ---
    mod_includes.discover_system_include_paths(logger=direct_logger)

    # --- verify ---
    assert fake_run.stderr_path is not None
    assert Path(fake_run.stderr_path).name.startswith(
        "hdoc-system-includes-compiler-output"
    )
    assert not Path(fake_run.stderr_path).exists()


def test_temp_file_removed_after_failure(
    monkeypatch: pytest.MonkeyPatch,
    fake_compiler: None,  # noqa: ARG001
    direct_logger: mod_logs.HdocLogger,
) -> None:
    # --- setup ---
    fake_run = _FakeRun("c++: fatal error: boom\n", returncode=1)
    monkeypatch.setattr(subprocess, "run", fake_run)

    # --- execute ---
    result = mod_includes.discover_system_include_paths(logger=direct_logger)

    # --- verify ---
    assert result is None
    assert fake_run.stderr_path is not None
    assert not Path(fake_run.stderr_path).exists()


def test_nonzero_exit_reports_status_and_output(
    capsys: pytest.CaptureFixture[str],
    monkeypatch: pytest.MonkeyPatch,
    fake_compiler: None,  # noqa: ARG001
    direct_logger: mod_logs.HdocLogger,
) -> None:
    # --- setup ---
    monkeypatch.setattr(subprocess, "run", _FakeRun("c++: fatal error: boom\n", 4))

    # --- execute ---
    result = mod_includes.discover_system_include_paths(logger=direct_logger)

    # --- verify ---
    assert result is None
    err = capsys.readouterr().err
    assert "Failed to determine the system include paths (4, c++: fatal error: boom)" in err


def test_compiler_not_found(
    capsys: pytest.CaptureFixture[str],
    monkeypatch: pytest.MonkeyPatch,
    direct_logger: mod_logs.HdocLogger,
) -> None:
    # --- setup ---
    def must_not_run(*_args: Any, **_kwargs: Any) -> None:
        xmsg = "compiler should not be executed"
        raise AssertionError(xmsg)

    monkeypatch.setattr(shutil, "which", lambda _name: None)
    monkeypatch.setattr(subprocess, "run", must_not_run)

    # --- execute ---
    result = mod_includes.discover_system_include_paths(logger=direct_logger)

    # --- verify ---
    assert result is None
    assert "Unable to find system default C++ compiler" in capsys.readouterr().err


def test_spawn_failure(
    capsys: pytest.CaptureFixture[str],
    monkeypatch: pytest.MonkeyPatch,
    fake_compiler: None,  # noqa: ARG001
    direct_logger: mod_logs.HdocLogger,
) -> None:
    # --- setup ---
    def broken_run(*_args: Any, **_kwargs: Any) -> None:
        xmsg = "Exec format error"
        raise OSError(xmsg)

    monkeypatch.setattr(subprocess, "run", broken_run)

    # --- execute ---
    result = mod_includes.discover_system_include_paths(logger=direct_logger)

    # --- verify ---
    assert result is None
    assert "Exec format error" in capsys.readouterr().err


def test_timeout(
    capsys: pytest.CaptureFixture[str],
    monkeypatch: pytest.MonkeyPatch,
    fake_compiler: None,  # noqa: ARG001
    direct_logger: mod_logs.HdocLogger,
) -> None:
    # --- setup ---
    def slow_run(cmd: list[str], **kwargs: Any) -> None:
        raise subprocess.TimeoutExpired(cmd, kwargs["timeout"])

    monkeypatch.setattr(subprocess, "run", slow_run)

    # --- execute ---
    result = mod_includes.discover_system_include_paths(logger=direct_logger)

    # --- verify ---
    assert result is None
    assert "timed out after 10s" in capsys.readouterr().err


def test_temp_file_creation_failure(
    capsys: pytest.CaptureFixture[str],
    monkeypatch: pytest.MonkeyPatch,
    direct_logger: mod_logs.HdocLogger,
) -> None:
    # --- setup ---
    def no_tempfile(*_args: Any, **_kwargs: Any) -> None:
        xmsg = "No space left on device"
        raise OSError(xmsg)

    monkeypatch.setattr(tempfile, "NamedTemporaryFile", no_tempfile)

    # --- execute ---
    result = mod_includes.discover_system_include_paths(logger=direct_logger)

    # --- verify ---
    assert result is None
    assert "No space left on device" in capsys.readouterr().err


def test_output_without_markers_yields_no_paths(
    capsys: pytest.CaptureFixture[str],
    monkeypatch: pytest.MonkeyPatch,
    fake_compiler: None,  # noqa: ARG001
    direct_logger: mod_logs.HdocLogger,
) -> None:
    # --- setup ---
    monkeypatch.setattr(subprocess, "run", _FakeRun("exotic compiler 1.0\n /opt/inc\n"))

    # --- execute ---
    result = mod_includes.discover_system_include_paths(logger=direct_logger)

    # --- verify ---
    assert result == []
    assert capsys.readouterr().err == ""


def test_find_compiler_uses_path(monkeypatch: pytest.MonkeyPatch) -> None:
    # --- setup ---
    seen: list[str] = []

    def fake_which(name: str) -> str:
        seen.append(name)
        return f"/usr/bin/{name}"

    monkeypatch.setattr(shutil, "which", fake_which)

    # --- execute ---
    result = mod_includes.find_compiler()

    # --- verify ---
    assert result == "/usr/bin/c++"
    assert seen == ["c++"]


@pytest.mark.skipif(shutil.which("c++") is None, reason="no system C++ compiler")
def test_real_compiler_reports_some_paths(direct_logger: mod_logs.HdocLogger) -> None:
    """gcc and clang both print a search list; every entry should exist."""
    # --- execute ---
    result = mod_includes.discover_system_include_paths(logger=direct_logger)

    # --- verify ---
    assert result
    assert any(Path(p).is_dir() for p in result)
