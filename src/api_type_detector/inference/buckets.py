"""Group observations by outcome class before aggregation."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from enum import Enum

from .models import Observation


class StatusBucket(str, Enum):
    SUCCESS_2XX = "2xx"
    REDIRECT_3XX = "3xx"
    CLIENT_ERROR_4XX = "4xx"
    SERVER_ERROR_5XX = "5xx"
    OTHER = "other"

    @property
    def suffix(self) -> str:
        return _SUFFIXES[self]


STATUS_BUCKET_ORDER: tuple[StatusBucket, ...] = tuple(StatusBucket)

_SUFFIXES = {
    StatusBucket.SUCCESS_2XX: "Success2xx",
    StatusBucket.REDIRECT_3XX: "Redirect3xx",
    StatusBucket.CLIENT_ERROR_4XX: "ClientError4xx",
    StatusBucket.SERVER_ERROR_5XX: "ServerError5xx",
    StatusBucket.OTHER: "OtherStatus",
}


def status_bucket(status_code: int | None) -> StatusBucket:
    if not status_code or status_code < 100:
        return StatusBucket.OTHER
    if 200 <= status_code < 300:
        return StatusBucket.SUCCESS_2XX
    if 300 <= status_code < 400:
        return StatusBucket.REDIRECT_3XX
    if 400 <= status_code < 500:
        return StatusBucket.CLIENT_ERROR_4XX
    if 500 <= status_code < 600:
        return StatusBucket.SERVER_ERROR_5XX
    return StatusBucket.OTHER


def is_error_status(status_code: int | None) -> bool:
    """Error flag computed from the code itself, not from the bucket."""
    return (status_code or 0) >= 400


@dataclass(slots=True)
class OutcomeGroup:
    """Samples sharing one (bucket, is_error) key, in arrival order."""

    bucket: StatusBucket
    is_error: bool
    samples: list[object] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.samples)

    @property
    def sort_key(self) -> tuple[int, bool]:
        return (STATUS_BUCKET_ORDER.index(self.bucket), self.is_error)


def recent_window(observations: Sequence[Observation], window_size: int) -> list[Observation]:
    """Keep the last `window_size` observations that carry a decoded response."""
    with_body = [obs for obs in observations if obs.has_response]
    if window_size <= 0:
        return []
    return with_body[-window_size:]


def bucket_observations(observations: Iterable[Observation]) -> list[OutcomeGroup]:
    """Group observations by (bucket, is_error) in the fixed bucket order.

    Output order is independent of arrival order: buckets follow
    ``STATUS_BUCKET_ORDER`` and non-error groups come before error groups.
    """
    grouped: dict[tuple[StatusBucket, bool], OutcomeGroup] = {}
    for obs in observations:
        key = (status_bucket(obs.status_code), is_error_status(obs.status_code))
        group = grouped.get(key)
        if group is None:
            group = grouped[key] = OutcomeGroup(bucket=key[0], is_error=key[1])
        group.samples.append(obs.response)
    return sorted(grouped.values(), key=lambda g: g.sort_key)
