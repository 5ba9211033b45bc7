"""Barrister and workload models."""

from typing import Optional
import uuid

from pydantic import BaseModel, ConfigDict, Field, field_validator, computed_field

from .enums import Seniority

DEFAULT_MAX_WORKLOAD = 100


class Barrister(BaseModel):
    """A practising barrister who can be assigned enquiries."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    name: str = ""
    email: Optional[str] = None
    year_of_call: Optional[int] = None
    practice_areas: tuple[str, ...] = ()
    seniority: Seniority
    is_active: bool = True
    engagement_score: float = 0.0  # 0-100, maintained elsewhere

    # Raw workload counter, when the record carries one
    current_workload: Optional[int] = None

    @field_validator("practice_areas", mode="before")
    @classmethod
    def validate_practice_areas(cls, v: object) -> tuple[str, ...]:
        if v is None:
            return ()
        if isinstance(v, str):
            v = v.split(",")
        return tuple(str(a).strip() for a in v if a is not None and str(a).strip())

    @field_validator("seniority", mode="before")
    @classmethod
    def validate_seniority(cls, v: object) -> Seniority:
        return Seniority.parse(v)

    @field_validator("engagement_score", mode="before")
    @classmethod
    def clamp_engagement(cls, v: object) -> float:
        if v is None or v == "":
            return 0.0
        return min(100.0, max(0.0, float(v)))

    @field_validator("current_workload", mode="before")
    @classmethod
    def validate_workload(cls, v: object) -> Optional[int]:
        if v is None or v == "":
            return None
        return max(0, int(v))


class BarristerWorkload(BaseModel):
    """Workload metrics derived from a barrister's current load counter."""

    model_config = ConfigDict(frozen=True)

    barrister_id: str
    current_workload: int = Field(default=0, ge=0)
    max_workload: int = Field(default=DEFAULT_MAX_WORKLOAD, gt=0)

    @computed_field
    @property
    def utilization_rate(self) -> float:
        """Share of capacity in use, clamped to [0, 1]."""
        return min(1.0, self.current_workload / self.max_workload)

    @computed_field
    @property
    def available_capacity(self) -> int:
        """Remaining workload points."""
        return max(0, self.max_workload - self.current_workload)

    @computed_field
    @property
    def utilization_percent(self) -> int:
        """Utilisation rounded to a whole percent."""
        return round(self.utilization_rate * 100)
