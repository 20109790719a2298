"""Closed vocabularies used by submission records."""
import enum

from sqlalchemy import Enum


class SubmissionStatus(str, enum.Enum):
    """Review status of a submission."""
    PENDING = "pending"
    UNDER_REVIEW = "under_review"
    APPROVED = "approved"
    REJECTED = "rejected"
    REQUIRES_CHANGES = "requires_changes"


class AdvertCategory(str, enum.Enum):
    TV = "tv"
    RADIO = "radio"
    BILLBOARD = "billboard"
    DIGITAL = "digital"
    PRINT = "print"
    ONLINE = "online"


class GeographicScope(str, enum.Enum):
    NATIONAL = "national"
    STATE = "state"
    LGA = "lga"
    REGIONAL = "regional"


def enum_column(enum_cls: type[enum.Enum], name: str) -> Enum:
    """Store an enum by value in a VARCHAR column with a check constraint."""
    return Enum(
        enum_cls,
        name=name,
        native_enum=False,
        create_constraint=True,
        length=30,
        validate_strings=True,
        values_callable=lambda members: [m.value for m in members],
    )
