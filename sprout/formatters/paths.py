"""Path display helpers."""

import os


def shorten_path_with_home(path: str, home: str) -> str:
    """
    Replace a leading home directory with ``~``.

    Only whole path components match, so ``/home/user2`` is left alone when
    home is ``/home/user``.
    """
    if not path or not home:
        return path
    home = home.rstrip(os.sep) or os.sep
    if path == home:
        return "~"
    prefix = home if home.endswith(os.sep) else home + os.sep
    if path.startswith(prefix):
        return "~" + os.sep + path[len(prefix):]
    return path
