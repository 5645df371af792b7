"""Tests for editor resolution and launching"""
import subprocess
from unittest.mock import MagicMock, patch

import pytest

from sprout.exceptions import EditorError
from sprout.services.editor_service import EditorService, is_terminal_editor, platform_candidates


class TestResolve:
    """Test editor selection order."""

    def test_sprout_editor_wins(self):
        """SPROUT_EDITOR beats EDITOR."""
        service = EditorService({"SPROUT_EDITOR": "code --wait", "EDITOR": "vim"}, "linux")
        assert service.resolve() == ["code", "--wait"]

    def test_editor_fallback(self):
        """EDITOR is used when SPROUT_EDITOR is blank."""
        service = EditorService({"SPROUT_EDITOR": "  ", "EDITOR": "nvim"}, "linux")
        assert service.resolve() == ["nvim"]

    def test_platform_candidates(self):
        """Without variables the first launcher on PATH is used."""
        service = EditorService({}, "linux")
        with patch("sprout.services.editor_service.shutil.which", side_effect=lambda name: name == "code" or None):
            assert service.resolve() == ["code"]

    def test_nothing_found(self):
        """No editor raises EditorError."""
        service = EditorService({}, "linux")
        with patch("sprout.services.editor_service.shutil.which", return_value=None):
            with pytest.raises(EditorError, match="SPROUT_EDITOR"):
                service.resolve()

    def test_candidate_order(self):
        """Linux falls back to xdg-open last."""
        assert platform_candidates("linux")[-1] == ["xdg-open"]
        assert platform_candidates("darwin")[-1] == ["open"]


class TestOpen:
    """Test launching."""

    def test_terminal_editor_waits(self):
        """Terminal editors run in the foreground."""
        service = EditorService({"EDITOR": "vim"}, "linux")
        with patch("sprout.services.editor_service.subprocess.run") as run:
            run.return_value = MagicMock(returncode=0)
            service.open("/wt")
        run.assert_called_once_with(["vim", "/wt"], check=False)

    def test_terminal_editor_failure(self):
        """A failing terminal editor raises EditorError."""
        service = EditorService({"EDITOR": "vim"}, "linux")
        with patch("sprout.services.editor_service.subprocess.run") as run:
            run.return_value = MagicMock(returncode=2)
            with pytest.raises(EditorError, match="code 2"):
                service.open("/wt")

    def test_gui_editor_detaches(self):
        """GUI editors are started without waiting."""
        service = EditorService({"EDITOR": "code"}, "linux")
        with patch("sprout.services.editor_service.subprocess.Popen") as popen:
            service.open("/wt")
        args, kwargs = popen.call_args
        assert args[0] == ["code", "/wt"]
        assert kwargs["stdin"] is subprocess.DEVNULL

    def test_launch_error(self):
        """A missing binary raises EditorError."""
        service = EditorService({"EDITOR": "no-such-editor"}, "linux")
        with patch("sprout.services.editor_service.subprocess.Popen", side_effect=FileNotFoundError("nope")):
            with pytest.raises(EditorError, match="no-such-editor"):
                service.open("/wt")


class TestIsTerminalEditor:
    """Test terminal editor detection."""

    @pytest.mark.parametrize("argv,expected", [
        (["vim"], True),
        (["/usr/bin/nvim"], True),
        (["emacs", "-nw"], True),
        (["code", "--wait"], False),
        ([], False),
    ])
    def test_detection(self, argv, expected):
        """Editors are classified by executable name."""
        assert is_terminal_editor(argv) is expected
