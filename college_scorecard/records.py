"""Helpers for reading Scorecard result records."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Mapping, Sequence

# Fields requested when filling a full college row.
API_FIELDS = ",".join([
    "id", "school.name", "school.city", "school.state", "school.ownership", "school.school_url",
    "latest.admissions.admission_rate.overall",
    "latest.student.retention_rate.four_year.full_time",
    "latest.completion.rate_suppressed.overall",
    "latest.earnings.10_yrs_after_entry.median",
    "latest.cost.attendance.academic_year",
    "latest.cost.avg_net_price.overall",
    "latest.admissions.sat_scores.25th_percentile.math",
    "latest.admissions.sat_scores.25th_percentile.critical_reading",
    "latest.admissions.sat_scores.75th_percentile.math",
    "latest.admissions.sat_scores.75th_percentile.critical_reading",
    "latest.admissions.sat_scores.average.overall",
    "latest.admissions.act_scores.25th_percentile.cumulative",
    "latest.admissions.act_scores.75th_percentile.cumulative",
    "latest.aid.pell_grant_rate",
    "latest.aid.median_debt.completers.overall",
])

# Fields requested by name searches.
SEARCH_FIELDS = "id,school.name,school.city,school.state,school.ownership,school.school_url"

REGION_MAP = {
    "Northeast": ("CT", "ME", "MA", "NH", "NJ", "NY", "PA", "RI", "VT"),
    "Midwest": ("IL", "IN", "IA", "KS", "MI", "MN", "MO", "NE", "ND", "OH", "SD", "WI"),
    "South": ("AL", "AR", "DE", "DC", "FL", "GA", "KY", "LA", "MD", "MS", "NC", "OK", "SC", "TN", "TX", "VA", "WV"),
    "West": ("AK", "AZ", "CA", "CO", "HI", "ID", "MT", "NM", "NV", "OR", "UT", "WA", "WY"),
}

OWNERSHIP_TYPES = {
    1: "Public",
    2: "Private (nonprofit)",
    3: "Private (for-profit)",
}

_REGEX_SPECIALS = re.compile(r"([.*+?^${}()|\[\]\\])")


def escape_regex(text: str) -> str:
    """Escape characters the API's `~` regex filter would interpret."""
    return _REGEX_SPECIALS.sub(r"\\\1", text)


def get_path(obj: Any, path: Sequence[str]) -> Any:
    """Walk nested mappings, returning None as soon as a segment is missing."""
    cur = obj
    for segment in path:
        if not isinstance(cur, Mapping) or segment not in cur:
            return None
        cur = cur[segment]
    return cur


def get_field(record: Mapping[str, Any], path: Sequence[str], flat_key: str | None = None) -> Any:
    """Read a field from either the nested or the dotted-flat response shape.

    The API returns flat keys ("school.name") when `fields` is given and nested
    objects otherwise.
    """
    flat_key = flat_key or ".".join(path)
    if flat_key in record:
        return record[flat_key]
    return get_path(record, path)


def type_from_ownership(code: Any) -> str:
    """Map the ownership code to a readable institution type ('' if unknown)."""
    return OWNERSHIP_TYPES.get(code, "") if isinstance(code, int) else ""


def region_for_state(state: str | None) -> str:
    """Map a two-letter state code to its census region ('' if unknown)."""
    code = (state or "").strip().upper()
    for region, states in REGION_MAP.items():
        if code in states:
            return region
    return ""


@dataclass(frozen=True)
class CollegeSummary:
    """One row of a name search: enough to pick the official college name."""
    official_name: str
    city: str
    state: str
    type: str
    ipeds_id: Any
    website: str
    region: str

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "CollegeSummary":
        state = get_field(record, ("school", "state")) or ""
        return cls(
            official_name=get_field(record, ("school", "name")) or "",
            city=get_field(record, ("school", "city")) or "",
            state=state,
            type=type_from_ownership(get_field(record, ("school", "ownership"))),
            ipeds_id=record.get("id", ""),
            website=get_field(record, ("school", "school_url")) or "",
            region=region_for_state(state),
        )
