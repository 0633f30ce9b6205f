"""College search and lookup on top of the retrying fetcher."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional
from urllib.parse import quote

from college_scorecard.fetcher import RetryingFetcher
from college_scorecard.quota import QuotaStatus
from college_scorecard.records import API_FIELDS, SEARCH_FIELDS, escape_regex
from college_scorecard.results import Failure
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="scorecard_api")

PLACEHOLDER_API_KEYS = {"your_api_key_here", "DEMO_KEY"}
MIN_API_KEY_LENGTH = 10
LOOKUP_PER_PAGE = 5
QUOTA_ERROR = "API quota limit reached or execution time limit approaching"
_STATE_CODE = re.compile(r"^[A-Z]{2}$")

# Characters encodeURIComponent leaves alone, beyond quote()'s own "_.-~".
_URI_COMPONENT_SAFE = "!*'()"


def build_url(base_url: str, params: Mapping[str, Any]) -> str:
    """Append `params` as a query string, encoding every key and value separately."""
    pairs = [
        f"{quote(str(k), safe=_URI_COMPONENT_SAFE)}={quote(str(v), safe=_URI_COMPONENT_SAFE)}"
        for k, v in params.items()
    ]
    return f"{base_url}?{'&'.join(pairs)}"


def api_key_problem(api_key: str | None) -> Optional[str]:
    """Return why `api_key` cannot be used, or None if it looks valid."""
    key = (api_key or "").strip()
    if not key:
        return "College Scorecard API key is not configured (get one at https://api.data.gov/signup/)"
    if key in PLACEHOLDER_API_KEYS or len(key) < MIN_API_KEY_LENGTH:
        return "Replace the placeholder API key with your College Scorecard API key"
    return None


@dataclass
class SearchResult:
    """Outcome of a multi-strategy name search."""
    ok: bool
    results: List[Dict[str, Any]] = field(default_factory=list)
    notes: str = ""
    quota_used: int = 0
    error: Optional[str] = None


@dataclass
class CollegeLookup:
    """Outcome of fetching the full record for one college."""
    ok: bool
    data: Optional[Dict[str, Any]] = None
    notes: str = ""
    quota_used: int = 0
    error: Optional[str] = None


def _results_of(payload: Any) -> List[Dict[str, Any]]:
    if isinstance(payload, Mapping):
        results = payload.get("results")
        if isinstance(results, list):
            return results
    return []


class ScorecardClient:
    """Caller-facing operations against the College Scorecard schools endpoint."""

    def __init__(self, fetcher: RetryingFetcher, *, base_url: str, api_key: str | None, per_page: int = 25) -> None:
        self.fetcher = fetcher
        self.base_url = base_url
        self.api_key = api_key
        self.per_page = per_page

    def _base_params(self, per_page: int, fields: str) -> Dict[str, Any]:
        return {
            "api_key": (self.api_key or "").strip(),
            "per_page": per_page,
            "fields": fields,
            "school.operating": 1,
        }

    def search_colleges(self, query: str, state: str | None = None) -> SearchResult:
        """Search by name, trying fuzzy search, exact name and regex in turn.

        Stops at the first strategy that returns results, or as soon as the
        quota gate rejects a request.
        """
        problem = api_key_problem(self.api_key)
        if problem:
            return SearchResult(ok=False, error=problem)

        self.fetcher.quota.reset_execution_timer()

        base = self._base_params(self.per_page, SEARCH_FIELDS)
        state = (state or "").strip().upper()
        if _STATE_CODE.match(state):
            base["school.state"] = state

        strategies = [
            ("search", {**base, "school.search": query}),
            ("exact", {**base, "school.name": query}),
            ("regex", {**base, "school.name": f"~.*{escape_regex(query)}.*"}),
        ]

        results: List[Dict[str, Any]] = []
        notes: List[str] = []
        for label, params in strategies:
            outcome = self.fetcher.fetch(build_url(self.base_url, params), use_cache=True)
            found = _results_of(outcome.payload) if outcome.ok else []
            if found:
                results = found
                cached = " (cached)" if outcome.served_from_cache else ""
                notes.append(f"{label}:200({len(found)}){cached}")
                break
            if outcome.ok:
                notes.append(f"{label}:200(0)")
                continue
            notes.append(f"{label}:{outcome.status_code or 'err'}")
            if outcome.reason.is_gate_rejection:
                notes.append("quota_limit")
                break

        logger.info("Search for %r returned %d result(s) [%s]", query, len(results), " | ".join(notes))
        return SearchResult(
            ok=bool(results),
            results=results,
            notes=" | ".join(notes),
            quota_used=self.fetcher.quota.status().daily_usage,
        )

    def fetch_college_data(self, college_name: str) -> CollegeLookup:
        """Fetch the full field set for one college: exact name first, then a regex match."""
        problem = api_key_problem(self.api_key)
        if problem:
            return CollegeLookup(ok=False, error=problem)

        self.fetcher.quota.reset_execution_timer()

        rejected = self.fetcher.quota.gate()
        if rejected is not None:
            return CollegeLookup(ok=False, error=QUOTA_ERROR)

        base = self._base_params(LOOKUP_PER_PAGE, API_FIELDS)
        notes: List[str] = []

        exact = self.fetcher.fetch(build_url(self.base_url, {**base, "school.name": college_name}), use_cache=False)
        results = _results_of(exact.payload) if exact.ok else []
        notes.append(self._note("exact", exact))

        if not results and self.fetcher.quota.check_quota():
            pattern = f"~.*{escape_regex(college_name)}.*"
            regex = self.fetcher.fetch(build_url(self.base_url, {**base, "school.name": pattern}), use_cache=False)
            results = _results_of(regex.payload) if regex.ok else []
            notes.append(self._note("regex", regex))

        joined = " | ".join(notes)
        if not results:
            logger.info("No match for %r (%s)", college_name, joined)
            return CollegeLookup(ok=False, notes=joined, error=f'no match for "{college_name}" ({joined})')

        return CollegeLookup(
            ok=True,
            data=results[0],
            notes=joined,
            quota_used=self.fetcher.quota.status().daily_usage,
        )

    @staticmethod
    def _note(label: str, outcome) -> str:
        if isinstance(outcome, Failure):
            return f"{label}:{outcome.status_code or 'err'}"
        return f"{label}:200"

    def quota_status(self) -> QuotaStatus:
        return self.fetcher.quota.status()

    def clear_cache(self) -> bool:
        """Drop every cached response."""
        cleared = self.fetcher.cache.clear()
        if cleared:
            logger.info("Response cache cleared")
        return cleared
