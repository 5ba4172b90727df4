"""
app/domain/external_factors.py

External factors a user can include in the model, as a tagged union keyed
by ``type``. Every kind carries its own settings shape; unknown kinds and
unknown settings keys are rejected.
"""

from __future__ import annotations

from datetime import date
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, model_validator


class _StrictModel(BaseModel):
    model_config = ConfigDict(extra="forbid")


class SeasonsSettings(_StrictModel):
    granularity: Literal["month", "quarter"] = "quarter"


class WeatherSettings(_StrictModel):
    regions: list[str] = Field(default_factory=list)
    event_kinds: list[str] = Field(default_factory=list)


class HolidaySettings(_StrictModel):
    country_code: str = Field(default="US", min_length=2, max_length=3)
    include_observed: bool = True


class MajorEvent(_StrictModel):
    name: str = Field(..., min_length=1)
    start_date: date
    end_date: date | None = None

    @model_validator(mode="after")
    def _check_range(self) -> "MajorEvent":
        if self.end_date is not None and self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class MajorEventSettings(_StrictModel):
    events: list[MajorEvent] = Field(default_factory=list)


class EconomicIndicatorSettings(_StrictModel):
    indicators: list[str] = Field(default_factory=list)


class CompetitorCampaignSettings(_StrictModel):
    competitors: list[str] = Field(default_factory=list)


class CustomFactorSettings(_StrictModel):
    value_type: Literal["nominal", "numeric", "binary"]


class _FactorBase(_StrictModel):
    name: str = Field(..., min_length=1)
    enabled: bool = True


class SeasonsFactor(_FactorBase):
    type: Literal["seasons"]
    settings: SeasonsSettings = Field(default_factory=SeasonsSettings)


class WeatherFactor(_FactorBase):
    type: Literal["weather"]
    settings: WeatherSettings = Field(default_factory=WeatherSettings)


class HolidaysFactor(_FactorBase):
    type: Literal["holidays"]
    settings: HolidaySettings = Field(default_factory=HolidaySettings)


class MajorEventsFactor(_FactorBase):
    type: Literal["major-events"]
    settings: MajorEventSettings = Field(default_factory=MajorEventSettings)


class EconomicIndicatorsFactor(_FactorBase):
    type: Literal["economic-indicators"]
    settings: EconomicIndicatorSettings = Field(default_factory=EconomicIndicatorSettings)


class CompetitorCampaignsFactor(_FactorBase):
    type: Literal["competitor-campaigns"]
    settings: CompetitorCampaignSettings = Field(default_factory=CompetitorCampaignSettings)


class CustomFactor(_FactorBase):
    type: Literal["custom"]
    settings: CustomFactorSettings


ExternalFactor = Annotated[
    Union[
        SeasonsFactor,
        WeatherFactor,
        HolidaysFactor,
        MajorEventsFactor,
        EconomicIndicatorsFactor,
        CompetitorCampaignsFactor,
        CustomFactor,
    ],
    Field(discriminator="type"),
]

_FACTOR_LIST = TypeAdapter(list[ExternalFactor])


def parse_external_factors(raw: Any) -> list[ExternalFactor]:
    """
    Validate a raw factor list. Raises pydantic.ValidationError on bad input.
    """

    return _FACTOR_LIST.validate_python(raw)


def dump_external_factors(factors: list[ExternalFactor]) -> list[dict[str, Any]]:
    """
    Serialise validated factors into JSON-ready dicts for storage.
    """

    return _FACTOR_LIST.dump_python(factors, mode="json")
