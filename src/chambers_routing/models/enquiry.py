"""Enquiry model for prospective legal matters."""

from typing import Optional
import uuid

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .enums import Complexity, Urgency


class Enquiry(BaseModel):
    """
    An incoming prospective matter awaiting assignment to a barrister.

    Inputs are normalised leniently: routing must always be able to produce
    some ranking for manual review, so unusable field values become None
    and are defaulted later during criteria extraction.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    lex_reference: Optional[str] = None
    practice_area: Optional[str] = None
    matter_type: Optional[str] = None
    description: Optional[str] = None
    estimated_value: Optional[float] = None
    urgency: Optional[Urgency] = None

    # Pre-tagged complexity skips keyword detection
    complexity: Optional[Complexity] = None

    assigned_barrister_id: Optional[str] = None

    @field_validator("practice_area", "matter_type", "description", "lex_reference", mode="before")
    @classmethod
    def blank_to_none(cls, v: object) -> Optional[str]:
        if v is None:
            return None
        v = str(v).strip()
        return v or None

    @field_validator("estimated_value", mode="before")
    @classmethod
    def validate_value(cls, v: object) -> Optional[float]:
        if v is None or v == "":
            return None
        try:
            value = float(v)
        except (TypeError, ValueError):
            return None
        if value < 0 or value != value:  # negative or NaN
            return None
        return value

    @field_validator("urgency", mode="before")
    @classmethod
    def validate_urgency(cls, v: object) -> Optional[Urgency]:
        return Urgency.coerce(v)

    @field_validator("complexity", mode="before")
    @classmethod
    def validate_complexity(cls, v: object) -> Optional[Complexity]:
        return Complexity.coerce(v)
