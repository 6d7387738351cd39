"""Base probe class for quota reporting."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Dict, List, Optional

import requests

from config import DEFAULT_TIMEOUT
from credentials import AuthRecord
from utils import log


class BaseProbe(ABC):
    """Abstract base class for provider quota probes."""

    #: Provider key in the credentials store.
    key: str = ""
    #: Display name used in report lines.
    label: str = ""

    def __init__(self, timeout: float = DEFAULT_TIMEOUT, verbose: bool = False) -> None:
        """
        Initialize the probe.

        Args:
            timeout: Request timeout in seconds.
            verbose: Enable verbose logging.
        """
        self.timeout = timeout
        self.verbose = verbose
        self.session = requests.Session()

    @staticmethod
    def _auth_headers(token: str) -> Dict[str, str]:
        return {"Authorization": f"Bearer {token}", "Content-Type": "application/json"}

    @abstractmethod
    def token_for(self, record: AuthRecord) -> Optional[str]:
        """Pick the token to authenticate with, or None if the record has none."""

    @abstractmethod
    def fetch(self, token: str) -> Optional[List[str]]:
        """
        Query the provider and format its usage.

        Returns:
            Display lines, a section header first. None adds nothing to the report.
        """

    def error_lines(self) -> List[str]:
        """Lines reported when fetch raises."""
        return [f"{self.label}: Error fetching usage"]

    def _log(self, message: str) -> None:
        """Log a message if verbose mode is enabled."""
        log(message, self.verbose)
