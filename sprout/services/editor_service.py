"""Editor launching service for sprout."""

import os
import shlex
import shutil
import subprocess
import sys
from typing import List, Optional

from sprout.constants import ENV_EDITOR
from sprout.exceptions import EditorError
from sprout.logging_config import get_logger

logger = get_logger(__name__)

# Editors that take over the terminal and must be waited for
TERMINAL_EDITORS = {"vi", "vim", "nvim", "nano", "emacs", "micro", "hx", "helix", "kak", "joe", "ne"}


def is_terminal_editor(argv: List[str]) -> bool:
    """Whether ``argv`` launches an editor that runs inside the terminal."""
    if not argv:
        return False
    name = os.path.basename(argv[0])
    if name == "emacs" and any(arg in ("-nw", "--no-window-system") for arg in argv[1:]):
        return True
    if name == "emacs":
        return not os.environ.get("DISPLAY") and sys.platform != "darwin"
    return name in TERMINAL_EDITORS


def platform_candidates(platform: Optional[str] = None) -> List[List[str]]:
    """Fallback editor commands for a platform, in preference order."""
    platform = platform or sys.platform
    if platform == "darwin":
        return [["open", "-a", "Cursor"], ["cursor"], ["code"], ["open"]]
    if platform.startswith("win"):
        return [["cursor"], ["code"], ["cmd", "/C", "start", ""]]
    return [["cursor"], ["code"], ["xdg-open"]]


class EditorService:
    """Resolve and launch the user's editor."""

    def __init__(self, environ: Optional[dict] = None, platform: Optional[str] = None):
        self.environ = os.environ if environ is None else environ
        self.platform = platform or sys.platform

    def resolve(self) -> List[str]:
        """Editor argv, without the path argument.

        Order: ``SPROUT_EDITOR``, ``EDITOR``, then the first platform launcher on PATH.

        Raises:
            EditorError: If nothing usable is found
        """
        for var in (ENV_EDITOR, "EDITOR"):
            value = (self.environ.get(var) or "").strip()
            if value:
                argv = shlex.split(value)
                if argv:
                    logger.debug(f"Using editor from {var}: {argv}")
                    return argv

        for candidate in platform_candidates(self.platform):
            if shutil.which(candidate[0]):
                if candidate == ["open", "-a", "Cursor"] and not os.path.isdir("/Applications/Cursor.app"):
                    continue
                logger.debug(f"Using platform editor: {candidate}")
                return candidate
        raise EditorError(f"no editor found; set {ENV_EDITOR} or EDITOR")

    def open(self, path: str) -> None:
        """Open ``path`` in the editor.

        Terminal editors block until they exit; GUI editors are started in
        their own session and left running.

        Raises:
            EditorError: If the editor cannot be started or a terminal editor fails
        """
        argv = self.resolve() + [path]
        logger.info(f"Opening {path} with {argv[0]}")
        try:
            if is_terminal_editor(argv):
                result = subprocess.run(argv, check=False)
                if result.returncode != 0:
                    raise EditorError(f"{argv[0]} exited with code {result.returncode}")
                return
            subprocess.Popen(
                argv,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                **_detach_kwargs(),
            )
        except OSError as e:
            raise EditorError(f"failed to launch {argv[0]}: {e}") from e


def _detach_kwargs() -> dict:
    if os.name == "posix":
        return {"start_new_session": True}
    if os.name == "nt":
        creationflags = getattr(subprocess, "CREATE_NEW_PROCESS_GROUP", None)
        if isinstance(creationflags, int):
            return {"creationflags": creationflags}
    return {}
