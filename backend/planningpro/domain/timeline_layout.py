"""
Timeline layout engine for the day and week calendar views.

Groups the appointments of one calendar day into visual stacks ("clusters")
and computes where each stack sits on the vertical time axis.

Pure business logic: no Flask, no I/O, no module state. The display
configuration is passed in as a DisplayProfile chosen by the caller, and
anomalies are reported through an optional callback instead of raising.

Example:
    >>> profile = get_display_profile("week", "desktop")
    >>> for cluster, position in layout_day(appointments, profile):
    ...     print(len(cluster), position.to_css())
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, List, NamedTuple, Optional, Sequence

logger = logging.getLogger(__name__)

MINUTES_PER_DAY = 24 * 60

_EPOCH_NAIVE = datetime(1970, 1, 1)
_EPOCH_AWARE = datetime(1970, 1, 1, tzinfo=timezone.utc)
_ONE_MS = timedelta(milliseconds=1)


@dataclass(frozen=True)
class DisplayProfile:
    """
    Rendering configuration of a time axis.

    Attributes:
        name: Preset identifier, e.g. "day/desktop"
        granularity_minutes: Size of one display slot
        slot_unit_size: Layout units (rem) per slot
        overlap_threshold_ms: Largest end-to-start gap still merged into a stack
    """

    name: str
    granularity_minutes: int
    slot_unit_size: float
    overlap_threshold_ms: int

    def __post_init__(self):
        if self.granularity_minutes <= 0:
            raise ValueError("granularity_minutes must be positive")
        if self.slot_unit_size <= 0:
            raise ValueError("slot_unit_size must be positive")
        if self.overlap_threshold_ms < 0:
            raise ValueError("overlap_threshold_ms cannot be negative")

    @property
    def slots_per_day(self) -> int:
        return MINUTES_PER_DAY // self.granularity_minutes


# Coarser slots and wider stacking on narrow screens to limit visual collisions
DISPLAY_PROFILES: Dict[str, DisplayProfile] = {
    "day/desktop": DisplayProfile("day/desktop", 15, 1.25, 10 * 60 * 1000),
    "day/mobile": DisplayProfile("day/mobile", 30, 2.0, 20 * 60 * 1000),
    "week/desktop": DisplayProfile("week/desktop", 30, 2.5, 15 * 60 * 1000),
    "week/mobile": DisplayProfile("week/mobile", 60, 3.0, 30 * 60 * 1000),
}

DEVICE_CLASSES = ("desktop", "mobile")


def get_display_profile(view: str, device: str = "desktop") -> DisplayProfile:
    """
    Resolve the preset for a calendar view and device class.

    Raises:
        ValueError: For an unknown view/device combination
    """
    key = f"{view}/{device}"
    try:
        return DISPLAY_PROFILES[key]
    except KeyError:
        raise ValueError(f"Unknown display profile: {key}") from None


@dataclass(frozen=True)
class LayoutPosition:
    """Vertical placement of a cluster, in layout units."""

    offset: float
    extent: float
    fallback: bool = False

    def to_css(self, unit: str = "rem") -> Dict[str, str]:
        return {
            "top": f"{_format_units(self.offset)}{unit}",
            "height": f"{_format_units(self.extent)}{unit}",
        }


@dataclass(frozen=True)
class LayoutDiagnostic:
    """Anomaly reported when a cluster falls back to the default position."""

    reason: str
    event_count: int
    start: Any = None
    end: Any = None


class ClusterLayout(NamedTuple):
    cluster: List[Any]
    position: LayoutPosition


DiagnosticCallback = Callable[[LayoutDiagnostic], None]


def _format_units(value: float) -> str:
    return f"{value:g}"


def _epoch_ms(value: Any) -> Optional[int]:
    """Milliseconds since the epoch, or None when value is not a valid timestamp."""
    if not isinstance(value, datetime):
        return None
    if value.tzinfo is None:
        return (value - _EPOCH_NAIVE) // _ONE_MS
    return (value - _EPOCH_AWARE) // _ONE_MS


def is_valid_timestamp(value: Any) -> bool:
    return _epoch_ms(value) is not None


def group_overlapping(events: Sequence[Any], overlap_threshold_ms: int) -> List[List[Any]]:
    """
    Group same-day events into clusters of temporally close events.

    Events are sorted by start (stable). Events without a valid start keep
    their input order and are placed after every valid event. An event
    joins the running cluster when the gap between the cluster's last end
    and its start is strictly below the threshold.

    Args:
        events: Objects exposing ``start`` and ``end`` attributes
        overlap_threshold_ms: Merge threshold in milliseconds

    Returns:
        Clusters in chronological order; every event appears exactly once
    """
    if not events:
        return []

    dated = [e for e in events if _epoch_ms(getattr(e, "start", None)) is not None]
    undated = [e for e in events if _epoch_ms(getattr(e, "start", None)) is None]
    ordered = sorted(dated, key=lambda e: _epoch_ms(e.start)) + undated

    clusters: List[List[Any]] = []
    current = [ordered[0]]

    for event in ordered[1:]:
        start_ms = _epoch_ms(getattr(event, "start", None))
        last_end_ms = _epoch_ms(getattr(current[-1], "end", None))

        if (
            start_ms is not None
            and last_end_ms is not None
            and start_ms - last_end_ms < overlap_threshold_ms
        ):
            current.append(event)
        else:
            clusters.append(current)
            current = [event]

    clusters.append(current)
    return clusters


def _fallback(
    profile: DisplayProfile,
    diagnostic: LayoutDiagnostic,
    on_diagnostic: Optional[DiagnosticCallback],
) -> LayoutPosition:
    if on_diagnostic is not None:
        on_diagnostic(diagnostic)
    else:
        logger.warning(
            "Timeline layout fallback",
            extra={
                "context": {
                    "reason": diagnostic.reason,
                    "event_count": diagnostic.event_count,
                    "start": repr(diagnostic.start),
                    "end": repr(diagnostic.end),
                    "profile": profile.name,
                }
            },
        )
    return LayoutPosition(offset=0, extent=profile.slot_unit_size, fallback=True)


def compute_layout_position(
    cluster: Sequence[Any],
    profile: DisplayProfile,
    on_diagnostic: Optional[DiagnosticCallback] = None,
) -> LayoutPosition:
    """
    Compute the offset and extent of a cluster on the time axis.

    Malformed timestamps and inverted intervals never raise: they yield a
    one-slot box at the top of the axis and a diagnostic.
    """
    if not cluster:
        return _fallback(profile, LayoutDiagnostic("empty_cluster", 0), on_diagnostic)

    start = getattr(cluster[0], "start", None)
    end = getattr(cluster[-1], "end", None)
    start_ms = _epoch_ms(start)
    end_ms = _epoch_ms(end)

    reason = None
    if start_ms is None:
        reason = "invalid_start"
    elif end_ms is None:
        reason = "invalid_end"
    elif end_ms < start_ms:
        reason = "inverted_interval"

    if reason is not None:
        return _fallback(
            profile,
            LayoutDiagnostic(reason, len(cluster), start=start, end=end),
            on_diagnostic,
        )

    start_minutes = start.hour * 60 + start.minute
    if end.date() > start.date():
        end_minutes = MINUTES_PER_DAY
    else:
        end_minutes = end.hour * 60 + end.minute

    slot_index = start_minutes // profile.granularity_minutes
    end_slot_index = end_minutes // profile.granularity_minutes

    return LayoutPosition(
        offset=slot_index * profile.slot_unit_size,
        extent=max(1, end_slot_index - slot_index) * profile.slot_unit_size,
    )


def layout_day(
    events: Sequence[Any],
    profile: DisplayProfile,
    on_diagnostic: Optional[DiagnosticCallback] = None,
) -> List[ClusterLayout]:
    """
    Group one day's events and position every cluster.

    Returns:
        One (cluster, LayoutPosition) pair per visual block
    """
    return [
        ClusterLayout(cluster, compute_layout_position(cluster, profile, on_diagnostic))
        for cluster in group_overlapping(events, profile.overlap_threshold_ms)
    ]
