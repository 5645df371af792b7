"""Trust store service: which repositories may run hooks."""

import json
import os
import tempfile
from datetime import datetime, timezone
from typing import List, Optional

from sprout.constants import TRUST_STORE_VERSION
from sprout.exceptions import TrustStoreError
from sprout.logging_config import get_logger
from sprout.models.trust import TrustEntry
from sprout.paths import get_trust_file_path

logger = get_logger(__name__)


def normalize_repo_root(repo_root: str) -> str:
    return os.path.abspath(os.path.normpath(repo_root))


class TrustService:
    """JSON-file backed trust store.

    Document format::

        {"version": 1, "trusted": [{"repo_root": "...", "trusted_at": "..."}]}
    """

    def __init__(self, path: Optional[str] = None):
        """Initialize the trust service.

        Args:
            path: Trust file location, defaults to the per-user config directory
        """
        self.path = path or get_trust_file_path()

    def load(self) -> List[TrustEntry]:
        """Read all entries; a missing file is an empty store.

        Raises:
            TrustStoreError: If the file cannot be read or is malformed
        """
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return []
        except (OSError, json.JSONDecodeError) as e:
            raise TrustStoreError(f"failed to read trust store {self.path}: {e}") from e

        if not isinstance(data, dict) or not isinstance(data.get("trusted", []), list):
            raise TrustStoreError(f"malformed trust store {self.path}")
        try:
            return [TrustEntry.from_dict(entry) for entry in data.get("trusted", [])]
        except (ValueError, TypeError, AttributeError) as e:
            raise TrustStoreError(f"malformed trust store {self.path}: {e}") from e

    def save(self, entries: List[TrustEntry]) -> None:
        """Atomically replace the trust file.

        Raises:
            TrustStoreError: If the file cannot be written
        """
        document = {
            "version": TRUST_STORE_VERSION,
            "trusted": [entry.to_dict() for entry in entries],
        }
        directory = os.path.dirname(self.path)
        tmp_path = None
        try:
            os.makedirs(directory, mode=0o755, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(prefix=".trusted-", suffix=".json", dir=directory)
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(document, f, indent=2)
                f.write("\n")
            os.replace(tmp_path, self.path)
            tmp_path = None
        except OSError as e:
            raise TrustStoreError(f"failed to write trust store {self.path}: {e}") from e
        finally:
            if tmp_path and os.path.exists(tmp_path):
                os.unlink(tmp_path)

    def is_trusted(self, repo_root: str) -> bool:
        repo_root = normalize_repo_root(repo_root)
        return any(normalize_repo_root(e.repo_root) == repo_root for e in self.load())

    def trust(self, repo_root: str) -> None:
        """Add ``repo_root`` to the store; trusting twice is a no-op."""
        repo_root = normalize_repo_root(repo_root)
        entries = self.load()
        if any(normalize_repo_root(e.repo_root) == repo_root for e in entries):
            return
        entries.append(TrustEntry(repo_root=repo_root, trusted_at=datetime.now(timezone.utc)))
        self.save(entries)
        logger.info(f"Trusted {repo_root}")

    def untrust(self, repo_root: str) -> None:
        """Remove ``repo_root`` from the store if present."""
        repo_root = normalize_repo_root(repo_root)
        entries = self.load()
        kept = [e for e in entries if normalize_repo_root(e.repo_root) != repo_root]
        if len(kept) == len(entries):
            return
        self.save(kept)
        logger.info(f"Untrusted {repo_root}")
