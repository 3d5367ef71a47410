"""Tests for executable detection (infra/tool_detector.py).

All tests mock :func:`shutil.which`: no system dependency.
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest

from tree_publish.exceptions import ToolNotFoundError
from tree_publish.infra.process import exit_status, missing_tool_error
from tree_publish.infra.tool_detector import (
    ToolStatus,
    _platform_install_commands,
    detect_tool,
    install_hint,
    require_tool,
)


# ---------------------------------------------------------------------------
# detect_tool
# ---------------------------------------------------------------------------

class TestDetectTool:
    @patch("tree_publish.infra.tool_detector.shutil.which")
    def test_found(self, mock_which: object) -> None:
        mock_which.return_value = "/usr/bin/git"  # type: ignore[union-attr]
        status = detect_tool("git")

        assert status.name == "git"
        assert status.found is True
        assert isinstance(status.path, Path)
        assert status.install_commands == ()

    @patch("tree_publish.infra.tool_detector.shutil.which")
    def test_not_found(self, mock_which: object) -> None:
        mock_which.return_value = None  # type: ignore[union-attr]
        status = detect_tool("cargo")

        assert status.found is False
        assert status.path is None
        assert len(status.install_commands) > 0


# ---------------------------------------------------------------------------
# require_tool
# ---------------------------------------------------------------------------

class TestRequireTool:
    @patch("tree_publish.infra.tool_detector.shutil.which")
    def test_found_returns_path(self, mock_which: object) -> None:
        mock_which.return_value = "/usr/bin/tar"  # type: ignore[union-attr]
        assert isinstance(require_tool("tar"), Path)

    @patch("tree_publish.infra.tool_detector.shutil.which")
    def test_missing_raises_with_hint(self, mock_which: object) -> None:
        mock_which.return_value = None  # type: ignore[union-attr]
        with pytest.raises(ToolNotFoundError, match="git is not installed") as exc_info:
            require_tool("git")
        assert exc_info.value.exit_code == 127
        assert exc_info.value.hint is not None
        assert "Install git" in exc_info.value.hint


# ---------------------------------------------------------------------------
# Platform install commands
# ---------------------------------------------------------------------------

class TestPlatformInstallCommands:
    @patch("tree_publish.infra.tool_detector.platform.system", return_value="Linux")
    def test_linux_git(self, _mock_sys: object) -> None:
        cmds = _platform_install_commands("git")
        assert any("apt" in c for c in cmds)

    @patch("tree_publish.infra.tool_detector.platform.system", return_value="Darwin")
    def test_darwin_cargo(self, _mock_sys: object) -> None:
        assert _platform_install_commands("cargo") == ("brew install rustup",)

    @patch("tree_publish.infra.tool_detector.platform.system", return_value="Windows")
    def test_windows_git(self, _mock_sys: object) -> None:
        assert _platform_install_commands("git") == ("winget install Git.Git",)

    @patch("tree_publish.infra.tool_detector.platform.system", return_value="Linux")
    def test_unknown_tool_generic(self, _mock_sys: object) -> None:
        cmds = _platform_install_commands("poetry")
        assert cmds == ("Install poetry with your system package manager.",)


class TestInstallHint:
    def test_none_when_no_commands(self) -> None:
        status = ToolStatus(name="git", found=True, path=Path("/usr/bin/git"), install_commands=())
        assert install_hint(status) is None

    def test_lists_commands(self) -> None:
        status = ToolStatus(name="git", found=False, path=None, install_commands=("a", "b"))
        assert install_hint(status) == "Install git using one of:\n  a\n  b"

    def test_frozen(self) -> None:
        status = ToolStatus(name="git", found=False, path=None, install_commands=())
        with pytest.raises(AttributeError):
            status.found = True  # type: ignore[misc]


# ---------------------------------------------------------------------------
# Process helpers
# ---------------------------------------------------------------------------

class TestProcessHelpers:
    @pytest.mark.parametrize(("returncode", "expected"), [(0, 0), (1, 1), (101, 101), (-2, 130), (-15, 143)])
    def test_exit_status(self, returncode: int, expected: int) -> None:
        assert exit_status(returncode) == expected

    @patch("tree_publish.infra.tool_detector.shutil.which", return_value=None)
    def test_missing_tool_error(self, _mock_which: object) -> None:
        err = missing_tool_error("cargo")
        assert isinstance(err, ToolNotFoundError)
        assert "cargo" in str(err)
        assert err.exit_code == 127
