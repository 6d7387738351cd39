"""GitHub Copilot probe for quota reporting."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Optional

import requests

from base import BaseProbe
from config import COPILOT_AUTH_KEY, COPILOT_USER_ENDPOINT
from credentials import AuthRecord
from utils import format_count, format_local_datetime


def _number(v: Any) -> Optional[float]:
    if isinstance(v, bool) or not isinstance(v, (int, float)):
        return None
    return v


@dataclass
class PremiumInteractions:
    """Premium interaction counters from the quota snapshot."""
    entitlement: float
    remaining: float

    @property
    def used(self) -> float:
        return self.entitlement - self.remaining

    @property
    def used_percent(self) -> Optional[float]:
        if self.entitlement <= 0:
            return None
        return self.used / self.entitlement * 100


@dataclass
class CopilotUser:
    """Subset of the copilot_internal/user payload."""
    plan: Optional[str]
    premium: Optional[PremiumInteractions]
    reset_date: Optional[str]

    @classmethod
    def from_json(cls, data: Any) -> "CopilotUser":
        if not isinstance(data, dict):
            return cls(plan=None, premium=None, reset_date=None)

        premium = None
        snapshots = data.get("quota_snapshots")
        if isinstance(snapshots, dict) and isinstance(snapshots.get("premium_interactions"), dict):
            raw = snapshots["premium_interactions"]
            entitlement = _number(raw.get("entitlement"))
            remaining = _number(raw.get("remaining"))
            if entitlement is not None and remaining is not None:
                premium = PremiumInteractions(entitlement=entitlement, remaining=remaining)

        plan = data.get("copilot_plan")
        reset_date = data.get("quota_reset_date_utc")
        return cls(
            plan=plan if isinstance(plan, str) else None,
            premium=premium,
            reset_date=reset_date if isinstance(reset_date, str) and reset_date else None,
        )


class CopilotProbe(BaseProbe):
    """Probes the GitHub Copilot user endpoint for premium interaction quota."""

    key = COPILOT_AUTH_KEY
    label = "GitHub Copilot"

    def token_for(self, record: AuthRecord) -> Optional[str]:
        # The stored refresh token is sent as a bearer token as-is.
        return record.refresh or record.access

    @staticmethod
    def format_premium(premium: PremiumInteractions, reset_date: Optional[str]) -> str:
        line = f"  Premium Interactions: {format_count(premium.used)}/{format_count(premium.entitlement)}"
        percent = premium.used_percent
        if percent is not None:
            line += f" ({percent:.1f}%)"
        if reset_date:
            reset = format_local_datetime(reset_date)
            if reset:
                line += f" (Resets: {reset})"
        return line

    def fetch(self, token: str) -> Optional[List[str]]:
        try:
            self._log("[copilot] calling copilot_internal/user")
            r = self.session.get(COPILOT_USER_ENDPOINT, headers=self._auth_headers(token), timeout=self.timeout)
            if not r.ok:
                self._log(f"[copilot] user endpoint returned {r.status_code}")
                return [f"GitHub Copilot: Auth failed ({r.status_code})"]

            user = CopilotUser.from_json(r.json())
        except (requests.RequestException, ValueError) as e:
            self._log(f"[copilot] request failed: {e}")
            return self.error_lines()

        lines = [f"GitHub Copilot ({user.plan or 'unknown'}):"]
        if user.premium is not None:
            lines.append(self.format_premium(user.premium, user.reset_date))
        else:
            lines.append("  Quota info not available")
        return lines
