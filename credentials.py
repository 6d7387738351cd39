"""Reader for the agent's local credentials store (auth.json)."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from typing import Any, Dict, Optional

from config import DEFAULT_AUTH_PATH


class CredentialsError(Exception):
    """Raised when the credentials file exists but cannot be read or parsed."""


@dataclass
class AuthRecord:
    """Stored credentials for a single provider."""
    type: str
    access: Optional[str] = None
    refresh: Optional[str] = None
    expires: Optional[float] = None
    project_id: Optional[str] = None

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "AuthRecord":
        def _str(key: str) -> Optional[str]:
            v = data.get(key)
            return v if isinstance(v, str) and v else None

        expires = data.get("expires")
        if isinstance(expires, bool) or not isinstance(expires, (int, float)):
            expires = None

        return cls(
            type=str(data.get("type") or ""),
            access=_str("access"),
            refresh=_str("refresh"),
            expires=expires,
            project_id=_str("projectId"),
        )


class CredentialsReader:
    """Loads provider credentials from a JSON file, fresh on every call."""

    def __init__(self, path: Optional[str] = None) -> None:
        self.path = path or os.environ.get("PI_AUTH_PATH", DEFAULT_AUTH_PATH)

    def load(self) -> Dict[str, AuthRecord]:
        """
        Read the credentials file.

        Returns:
            Mapping of provider key to its record. Empty if the file does not exist.

        Raises:
            CredentialsError: The file is unreadable or is not a JSON object.
        """
        if not os.path.exists(self.path):
            return {}

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            raise CredentialsError(f"cannot read {self.path}: {e}") from e

        if not isinstance(data, dict):
            raise CredentialsError(f"{self.path} does not contain a JSON object")

        return {
            key: AuthRecord.from_json(value)
            for key, value in data.items()
            if isinstance(value, dict)
        }
