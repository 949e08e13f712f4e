"""Default relative effort scorer.

Relative effort is zone-weighted minutes: one point per minute in zone 1,
two in zone 2, and so on. Heart rate samples are used when present;
otherwise the workout's average heart rate (from the raw FIT session or the
summary column) stands in for the whole duration.
"""

import json
from typing import Optional, Sequence

from tempo.core.constants import MAX_SAMPLE_GAP_S, ZONE_WEIGHTS
from tempo.core.logging import get_logger
from tempo.schemas.hr_zones import HeartRateZone

logger = get_logger(__name__)


def zone_index(heart_rate: int, zones: Sequence[HeartRateZone]) -> Optional[int]:
    """Index (0-4) of the zone containing ``heart_rate``, None if outside all.

    Bounds are min inclusive / max exclusive, except zone 5 whose max is inclusive.
    """
    last = len(zones) - 1
    for i, zone in enumerate(zones):
        if zone.min_bpm <= heart_rate < zone.max_bpm:
            return i
        if i == last and heart_rate == zone.max_bpm:
            return i
    return None


def score_time_series(samples, zones: Sequence[HeartRateZone]) -> int:
    """Weighted minutes from per-sample heart rate.

    Each sample lasts until the next one; gaps over MAX_SAMPLE_GAP_S (pauses)
    and the final sample count as one second.
    """
    points = [s for s in samples if s.heart_rate_bpm is not None]
    seconds_in_zone = [0.0] * len(zones)
    for i, point in enumerate(points):
        idx = zone_index(point.heart_rate_bpm, zones)
        if idx is None:
            continue
        dt = 1.0
        if i < len(points) - 1:
            dt = points[i + 1].elapsed_seconds - point.elapsed_seconds
            if dt < 0 or dt > MAX_SAMPLE_GAP_S:
                dt = 1.0
        seconds_in_zone[idx] += dt

    effort = sum(secs / 60.0 * w for secs, w in zip(seconds_in_zone, ZONE_WEIGHTS))
    return int(effort + 0.5)


def score_average_hr(avg_heart_rate: int, duration_s: int, zones: Sequence[HeartRateZone]) -> Optional[int]:
    """Assume the whole workout was spent in the average heart rate's zone."""
    idx = zone_index(avg_heart_rate, zones)
    if idx is None:
        return None
    return int(duration_s / 60.0 * ZONE_WEIGHTS[idx] + 0.5)


def _fit_session_avg_hr(raw_fit_data: Optional[str]) -> Optional[int]:
    if not raw_fit_data:
        return None
    try:
        data = json.loads(raw_fit_data)
    except ValueError:
        logger.debug("raw_fit_data_unreadable")
        return None
    session = data.get("session") if isinstance(data, dict) else None
    if not isinstance(session, dict):
        return None
    avg = session.get("avgHeartRate")
    if isinstance(avg, (int, float)) and not isinstance(avg, bool):
        return int(avg)
    return None


def calculate_relative_effort(workout, zones: Sequence[HeartRateZone]) -> Optional[int]:
    """Score one workout against ``zones``; None when it has no usable heart rate."""
    if zones is None or len(zones) != len(ZONE_WEIGHTS):
        return None

    samples = [s for s in workout.time_series if s.heart_rate_bpm is not None]
    if samples:
        return score_time_series(samples, zones)

    avg_hr = _fit_session_avg_hr(workout.raw_fit_data)
    if avg_hr is None:
        avg_hr = workout.avg_heart_rate_bpm
    if avg_hr is None:
        return None
    return score_average_hr(avg_hr, workout.duration_s or 0, zones)
