"""Gemini Code Assist probe for quota reporting."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from base import BaseProbe
from config import (
    GEMINI_AUTH_KEY,
    GEMINI_LOAD_CODE_ASSIST_ENDPOINT,
    GEMINI_QUOTA_ENDPOINT,
    LOAD_CODE_ASSIST_METADATA,
)
from credentials import AuthRecord
from utils import format_reset_time


@dataclass
class CodeAssistInfo:
    """Project and tier reported by loadCodeAssist."""
    project_id: Optional[str]
    tier: str

    @classmethod
    def from_json(cls, data: Any) -> "CodeAssistInfo":
        if not isinstance(data, dict):
            return cls(project_id=None, tier="unknown")
        project = data.get("cloudaicompanionProject")
        current_tier = data.get("currentTier")
        tier = current_tier.get("name") if isinstance(current_tier, dict) else None
        return cls(
            project_id=project if isinstance(project, str) and project else None,
            tier=tier if isinstance(tier, str) and tier else "unknown",
        )


@dataclass
class QuotaBucket:
    """Represents a single quota bucket for a model."""
    model_id: str
    remaining_fraction: float
    reset_time: Optional[str] = None

    @property
    def used_percent(self) -> float:
        return (1 - self.remaining_fraction) * 100

    @classmethod
    def parse_all(cls, resp: Any) -> List["QuotaBucket"]:
        """Parse the buckets of a retrieveUserQuota response, dropping malformed ones."""
        if not isinstance(resp, dict):
            return []
        buckets: List[QuotaBucket] = []
        for bucket in resp.get("buckets") or []:
            if not isinstance(bucket, dict):
                continue
            model_id = bucket.get("modelId")
            fraction = bucket.get("remainingFraction")
            if not isinstance(model_id, str) or not model_id:
                continue
            # The API omits remainingFraction once a model's quota is exhausted.
            if fraction is None:
                fraction = 0.0
            if isinstance(fraction, bool) or not isinstance(fraction, (int, float)):
                continue
            reset_time = bucket.get("resetTime")
            buckets.append(cls(
                model_id=model_id,
                remaining_fraction=float(fraction),
                reset_time=reset_time if isinstance(reset_time, str) and reset_time else None,
            ))
        return buckets


class GeminiProbe(BaseProbe):
    """Probes the Gemini Code Assist API for per-model quota."""

    key = GEMINI_AUTH_KEY
    label = "Gemini"

    def token_for(self, record: AuthRecord) -> Optional[str]:
        return record.access

    def load_code_assist(self, headers: Dict[str, str]) -> Optional[CodeAssistInfo]:
        """Resolve the Code Assist project and tier. None if the call is rejected."""
        self._log("[gemini] calling loadCodeAssist")
        r = self.session.post(
            GEMINI_LOAD_CODE_ASSIST_ENDPOINT,
            headers=headers,
            json={"metadata": LOAD_CODE_ASSIST_METADATA},
            timeout=self.timeout,
        )
        if not r.ok:
            self._log(f"[gemini] loadCodeAssist returned {r.status_code}")
            return None
        return CodeAssistInfo.from_json(r.json())

    def retrieve_quota(self, headers: Dict[str, str], project_id: str) -> Optional[List[QuotaBucket]]:
        """Fetch quota buckets for a project. None if the call is rejected."""
        self._log(f"[gemini] calling quota API endpoint with project={project_id}")
        r = self.session.post(
            GEMINI_QUOTA_ENDPOINT,
            headers=headers,
            json={"project": project_id},
            timeout=self.timeout,
        )
        if not r.ok:
            self._log(f"[gemini] retrieveUserQuota returned {r.status_code}")
            return None
        return QuotaBucket.parse_all(r.json())

    @staticmethod
    def format_bucket(bucket: QuotaBucket) -> str:
        line = f"  {bucket.model_id:<30} {bucket.used_percent:>5.1f}%"
        if bucket.reset_time:
            line += f" (Resets in {format_reset_time(bucket.reset_time)})"
        return line

    def fetch(self, token: str) -> Optional[List[str]]:
        headers = self._auth_headers(token)

        info = self.load_code_assist(headers)
        if info is None:
            return ["Gemini: Auth failed"]
        if not info.project_id:
            return [f"Gemini: Connected (Tier: {info.tier}), but no project ID"]

        buckets = self.retrieve_quota(headers, info.project_id)
        if buckets is None:
            return [f"Gemini: Connected (Tier: {info.tier}), but failed to fetch quota"]

        lines = [f"Gemini ({info.tier}):"]
        seen = set()
        for bucket in buckets:
            if bucket.model_id in seen:
                continue
            seen.add(bucket.model_id)
            lines.append(self.format_bucket(bucket))
        return lines
