"""
CelesTrak GP Client

Fetches element sets in JSON OMM format from the CelesTrak GP endpoint,
either for one object (INTDES) or for a named group (GROUP). All failures
are reported as FetchError (transport, HTTP status) or ParseError
(payload), never as a silently empty list.
"""

from typing import List, Optional

import requests

from config import CELESTRAK_GP_URL, HTTP_TIMEOUT_SECONDS
from logging_config import get_logger
from orbit_tracker.catalog import Source
from orbit_tracker.elements import OrbitalElementSet, parse_element_records
from orbit_tracker.errors import FetchError, ParseError

logger = get_logger(__name__)


class CelestrakClient:
    """Thin requests wrapper around the GP query endpoint."""

    def __init__(self, base_url: str = CELESTRAK_GP_URL,
                 timeout: float = HTTP_TIMEOUT_SECONDS,
                 session: Optional[requests.Session] = None):
        self.base_url = base_url
        self.timeout = timeout
        self.session = session or requests.Session()

    def fetch(self, source: Source) -> List[OrbitalElementSet]:
        return self._get(source.query_params(), source.key)

    def fetch_group(self, group: str) -> List[OrbitalElementSet]:
        return self._get({"GROUP": group}, group)

    def fetch_designator(self, designator: str) -> List[OrbitalElementSet]:
        return self._get({"INTDES": designator}, designator)

    def _get(self, params: dict, label: str) -> List[OrbitalElementSet]:
        query = dict(params, FORMAT="json")
        logger.info(f"Fetching element sets for {label} from {self.base_url}")

        try:
            response = self.session.get(self.base_url, params=query, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise FetchError(f"Request for {label} failed: {e}") from e

        try:
            payload = response.json()
        except ValueError as e:
            # CelesTrak answers unknown groups with a plain text message
            snippet = response.text[:80].strip()
            raise ParseError(f"Response for {label} is not JSON: {snippet!r}") from e

        elements = parse_element_records(payload)
        logger.info(f"Fetched {len(elements)} element sets for {label}")
        return elements
