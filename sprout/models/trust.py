"""Trust store models"""
from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class TrustEntry:
    """A repository the user has allowed to run hooks."""
    repo_root: str
    trusted_at: datetime

    def to_dict(self) -> dict:
        return {"repo_root": self.repo_root, "trusted_at": self.trusted_at.isoformat()}

    @classmethod
    def from_dict(cls, data: dict) -> "TrustEntry":
        """Create an entry from its JSON form.

        Raises:
            ValueError: If ``repo_root`` is missing or ``trusted_at`` is not ISO-8601
        """
        repo_root = data.get("repo_root")
        if not repo_root or not isinstance(repo_root, str):
            raise ValueError("trust entry is missing repo_root")
        return cls(repo_root=repo_root, trusted_at=datetime.fromisoformat(data.get("trusted_at", "")))
