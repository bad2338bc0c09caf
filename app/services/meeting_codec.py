"""Conversion between MeetingProposal values and the flat meeting columns of a message.

A message either carries a whole proposal or none. The columns are keyed
on ``meeting_date``: time and location are never stored without it.
"""

import datetime as dt
from typing import Any, Dict, Optional, Union

from pydantic import ValidationError

from app.core.exceptions import InvalidArgumentException
from app.models.message import Message
from app.schemas.meeting import Coordinates, MeetingLocation, MeetingProposal


MEETING_COLUMNS = (
    "meeting_date",
    "meeting_time",
    "meeting_location_name",
    "meeting_lat",
    "meeting_lng",
)


def _validation_detail(exc: ValidationError) -> str:
    first = exc.errors()[0]
    location = ".".join(str(part) for part in first.get("loc", ()))
    message = first.get("msg", "invalid value")
    return f"Invalid meeting proposal: {location}: {message}" if location else f"Invalid meeting proposal: {message}"


def coerce(proposal: Union[MeetingProposal, Dict[str, Any], None]) -> Optional[MeetingProposal]:
    """Validate a proposal given as a model or a plain dict."""
    if proposal is None or isinstance(proposal, MeetingProposal):
        return proposal
    try:
        return MeetingProposal.model_validate(proposal)
    except ValidationError as exc:
        raise InvalidArgumentException(_validation_detail(exc)) from exc


def from_wire(
    meeting_date: Optional[dt.date],
    meeting_time: Optional[str],
    meeting_location: Optional[MeetingLocation],
) -> Optional[MeetingProposal]:
    """Build a proposal from the separate request fields.

    No meeting fields at all means no proposal. Any meeting field without
    both a date and a location is a malformed proposal.
    """
    blank_time = meeting_time is None or not meeting_time.strip()
    if meeting_date is None and meeting_location is None and blank_time:
        return None
    if meeting_date is None or meeting_location is None:
        raise InvalidArgumentException("Meeting proposal requires both a date and a location")
    return coerce({
        "date": meeting_date,
        "time_of_day": meeting_time,
        "location": meeting_location.model_dump(),
    })


def encode(proposal: Optional[MeetingProposal]) -> Dict[str, Any]:
    """Message column values for a proposal (all None when there is none)."""
    if proposal is None:
        return {column: None for column in MEETING_COLUMNS}

    coordinates = proposal.location.coordinates
    return {
        "meeting_date": proposal.date,
        "meeting_time": proposal.time_of_day,
        "meeting_location_name": proposal.location.name,
        "meeting_lat": coordinates.lat if coordinates else None,
        "meeting_lng": coordinates.lng if coordinates else None,
    }


def decode(message: Message) -> Optional[MeetingProposal]:
    """Structured proposal stored on a message, or None."""
    if message.meeting_date is None:
        return None

    coordinates = None
    if message.meeting_lat is not None and message.meeting_lng is not None:
        coordinates = Coordinates(lat=message.meeting_lat, lng=message.meeting_lng)

    location = MeetingLocation(name=message.meeting_location_name, coordinates=coordinates)
    return MeetingProposal(
        date=message.meeting_date,
        time_of_day=message.meeting_time,
        location=location,
    )
