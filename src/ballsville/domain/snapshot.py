"""Snapshot-on-transition decision and backup metadata."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from ballsville.domain.sections import SnapshotPolicy


@dataclass(frozen=True)
class SnapshotDecision:
    should_snapshot: bool
    old_marker: str
    new_marker: str
    reason: str


def get_path(doc: Mapping[str, object] | None, path: str) -> object:
    """Return the value at a dotted ``path`` inside ``doc`` or None."""
    current: object = doc
    for part in path.split("."):
        if not isinstance(current, Mapping):
            return None
        current = current.get(part)
    return current


def _marker_text(value: object) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def decide_snapshot(
    old_doc: Mapping[str, object] | None,
    new_doc: Mapping[str, object],
    marker_path: str,
) -> SnapshotDecision:
    old_marker = _marker_text(get_path(old_doc, marker_path))
    new_marker = _marker_text(get_path(new_doc, marker_path))
    if old_doc is None:
        return SnapshotDecision(False, old_marker, new_marker, "no previous document")
    if not new_marker:
        return SnapshotDecision(False, old_marker, new_marker, "no transition marker")
    if old_marker == new_marker:
        return SnapshotDecision(False, old_marker, new_marker, "marker unchanged")
    return SnapshotDecision(True, old_marker, new_marker, "marker changed")


def marker_field_suffix(marker_path: str) -> str:
    """``eligibility.computedAt`` -> ``EligibilityComputedAt``."""
    return "".join(part[:1].upper() + part[1:] for part in marker_path.split(".") if part)


def build_backup_meta(
    policy: SnapshotPolicy,
    old_doc: Mapping[str, object],
    decision: SnapshotDecision,
    backed_up_at: str,
) -> dict[str, object]:
    suffix = marker_field_suffix(policy.marker_path)
    return {
        "backedUpAt": backed_up_at,
        "fromUpdatedAt": old_doc.get("updatedAt"),
        f"from{suffix}": decision.old_marker,
        f"to{suffix}": decision.new_marker,
        "transition": policy.label,
    }
