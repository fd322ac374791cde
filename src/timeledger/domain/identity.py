"""Content fingerprints for time entries.

A fingerprint is the natural key of a time entry: two entries with the same
start time, end time and comment are the same piece of work no matter which
file or import produced them. It is stored in a unique column so that
concurrent imports cannot insert the same entry twice.
"""

import hashlib
import json
from datetime import datetime

from timeledger.utils.time_utils import to_api_time


def identity_fields(start_time: datetime, end_time: datetime, comment: str) -> tuple[str, str, str]:
    """Return the canonical text form of the identifying fields.

    Times are normalized to UTC at millisecond precision first, so an entry
    read back from the store yields the same fields as the entry that was
    written.
    """
    return (
        to_api_time(start_time).isoformat(timespec="milliseconds"),
        to_api_time(end_time).isoformat(timespec="milliseconds"),
        comment,
    )


def compute_identity_hash(start_time: datetime, end_time: datetime, comment: str) -> str:
    """Compute the SHA-256 fingerprint of an entry's identifying fields.

    Args:
        start_time: Timezone-aware start of the interval
        end_time: Timezone-aware end of the interval
        comment: Free text comment, may be empty

    Returns:
        64 character lowercase hex digest

    Raises:
        ValidationError: If either datetime is naive
    """
    payload = json.dumps(list(identity_fields(start_time, end_time, comment)), ensure_ascii=False)
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()
