"""
Orbital Element Records

Element sets are exchanged with CelesTrak, and persisted in the cache, as
JSON OMM records. OrbitalElementSet validates one record and exposes it
under readable attribute names while serializing back under the OMM keys.
"""

from datetime import datetime, timezone
from typing import Any, Iterable, List

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from orbit_tracker.errors import ParseError


class OrbitalElementSet(BaseModel):
    """One mean element set (Kozai mean motion, WGS-72 SGP4 convention)."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = Field(alias="OBJECT_NAME")
    international_designator: str = Field(alias="OBJECT_ID")
    norad_id: int = Field(alias="NORAD_CAT_ID")
    epoch: datetime = Field(alias="EPOCH")
    drag_term: float = Field(alias="BSTAR")
    inclination: float = Field(alias="INCLINATION")
    right_ascension: float = Field(alias="RA_OF_ASC_NODE")
    eccentricity: float = Field(alias="ECCENTRICITY")
    argument_of_perigee: float = Field(alias="ARG_OF_PERICENTER")
    mean_anomaly: float = Field(alias="MEAN_ANOMALY")
    mean_motion: float = Field(alias="MEAN_MOTION")  # rev/day
    revolution_number: int = Field(alias="REV_AT_EPOCH")
    mean_motion_dot: float = Field(default=0.0, alias="MEAN_MOTION_DOT")
    mean_motion_ddot: float = Field(default=0.0, alias="MEAN_MOTION_DDOT")
    classification: str = Field(default="U", alias="CLASSIFICATION_TYPE")
    element_set_number: int = Field(default=999, alias="ELEMENT_SET_NO")

    @field_validator("epoch")
    @classmethod
    def _epoch_in_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    def to_record(self) -> dict:
        """Serialize back to an OMM record with a naive ISO epoch."""
        record = self.model_dump(by_alias=True)
        record["EPOCH"] = self.epoch.replace(tzinfo=None).isoformat(timespec="microseconds")
        return record


def parse_element_records(payload: Any) -> List[OrbitalElementSet]:
    """
    Validate a decoded JSON payload as an array of element records.

    Raises:
        ParseError: payload is not a list, or any record is malformed
    """
    if not isinstance(payload, list):
        raise ParseError(
            f"Expected a JSON array of element records, got {type(payload).__name__}"
        )

    try:
        return [OrbitalElementSet.model_validate(record) for record in payload]
    except ValidationError as e:
        raise ParseError(f"Malformed element record: {e}") from e


def dump_element_records(elements: Iterable[OrbitalElementSet]) -> List[dict]:
    return [element.to_record() for element in elements]
