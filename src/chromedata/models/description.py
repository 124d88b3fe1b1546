"""Typed views over sections of an ADS ``describeVehicle`` response.

The service returns many optional sections whose exact shape depends on the
switches sent with the request, so every model keeps unknown fields.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

_ADS_CONFIG = ConfigDict(extra="allow", populate_by_name=True, alias_generator=to_camel)


class StatusMessage(BaseModel):
    model_config = _ADS_CONFIG

    code: str | None = None
    # zeep exposes the text content of an element with attributes as ``_value_1``
    message: str | None = Field(default=None, alias="_value_1")


class ResponseStatus(BaseModel):
    model_config = _ADS_CONFIG

    response_code: str | None = None
    description: str | None = None
    status: list[StatusMessage] = []


class VinDescription(BaseModel):
    model_config = _ADS_CONFIG

    vin: str | None = None
    model_year: int | None = None
    division: str | None = None
    model_name: str | None = None
    style_name: str | None = None
    body_type: str | None = None
    driving_wheels: str | None = None
    builddata: str | None = None


class Style(BaseModel):
    model_config = _ADS_CONFIG

    id: int | None = None
    model_year: int | None = None
    name: str | None = None
    name_wo_trim: str | None = None
    trim: str | None = None
    mfr_model_code: str | None = None
    fleet_only: bool | None = None
    model_fleet: bool | None = None
    pass_doors: int | None = None
    alt_body_type: str | None = None
    drivetrain: str | None = None


class Engine(BaseModel):
    model_config = _ADS_CONFIG

    high_output: bool | None = None
    cylinders: int | None = None
    engine_type: dict[str, Any] | None = None
    fuel_type: dict[str, Any] | None = None
    displacement: dict[str, Any] | None = None
    horsepower: dict[str, Any] | None = None
    net_torque: dict[str, Any] | None = None
