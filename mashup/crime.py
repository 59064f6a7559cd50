"""
UK Location Data Mashup — Crime Statistics
===========================================
Street-level crime near a position from data.police.uk, summarised into
incident counts per category.

Data source: https://data.police.uk/docs/method/crime-street/
Licence:     Open Government Licence v3.0
"""

import logging
from collections import Counter
from typing import Iterable, List

from mashup.config import POLICE_API_CRIMES
from mashup.exceptions import UpstreamError
from mashup.models import CrimeEntry, Position
from mashup.upstream import UpstreamClient

logger = logging.getLogger(__name__)


def summarise_crimes(records: Iterable[dict]) -> List[CrimeEntry]:
    """
    Count incidents per category, most frequent first.

    Records without a category are ignored. Categories with equal counts
    keep the order in which they were first seen.
    """
    counts: Counter = Counter()
    for record in records:
        if not isinstance(record, dict):
            continue
        category = (record.get("category") or "").strip()
        if category:
            counts[category] += 1

    ranked = sorted(counts.items(), key=lambda kv: kv[1], reverse=True)
    return [CrimeEntry(crime=k, incidents=v) for k, v in ranked]


class CrimeLookup(UpstreamClient):
    """data.police.uk adapter returning raw street-level crime records."""

    source = "crime"

    def __init__(self, *args, url: str = POLICE_API_CRIMES, **kwargs):
        super().__init__(*args, **kwargs)
        self.url = url

    def get_crimes_near(self, position: Position) -> List[dict]:
        """All street-level crimes within a mile of *position* for the latest month."""
        data = self._get_json(
            self.url,
            params={"lat": position.latitude, "lng": position.longitude},
        )
        if not isinstance(data, list):
            raise UpstreamError(self.source, "crime returned a malformed response")

        logger.info("Fetched %d crime records near %s", len(data), position)
        return data

    def get_summary(self, position: Position) -> List[CrimeEntry]:
        return summarise_crimes(self.get_crimes_near(position))
