"""Accessor wrapper around a raw ADS ``describeVehicle`` response."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from chromedata.models.description import Engine, ResponseStatus, Style, VinDescription

if TYPE_CHECKING:
    from collections.abc import Mapping

SUCCESS_CODES: frozenset[str] = frozenset({"Successful", "ConditionallySuccessful"})


def _as_list(value: Any) -> list[Any]:
    """Coerce an optional, possibly repeated, response section to a list."""
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]


class ADSResponse:
    """Read-only view over one vehicle description.

    *raw* is the response body as a plain mapping (zeep objects are
    serialized before they get here).  *parameters* are the caller
    overrides that were sent with the request, kept for reference.
    """

    def __init__(
        self,
        raw: Mapping[str, Any] | None,
        parameters: Mapping[str, Any] | None = None,
    ) -> None:
        self._raw: dict[str, Any] = dict(raw or {})
        self._parameters: dict[str, Any] = dict(parameters or {})

    def __repr__(self) -> str:
        return f"ADSResponse(vin={self.vin!r}, status={self.status_code!r})"

    # -- raw access ----------------------------------------------------------

    @property
    def raw(self) -> dict[str, Any]:
        return self._raw

    @property
    def parameters(self) -> dict[str, Any]:
        return self._parameters

    def get(self, key: str, default: Any = None) -> Any:
        """Return a top-level response field, or *default*."""
        value = self._raw.get(key)
        return default if value is None else value

    def to_dict(self) -> dict[str, Any]:
        return {"parameters": self._parameters, "response": self._raw}

    # -- status --------------------------------------------------------------

    @property
    def response_status(self) -> ResponseStatus:
        return ResponseStatus.model_validate(self._raw.get("responseStatus") or {})

    @property
    def status_code(self) -> str | None:
        return self.response_status.response_code

    @property
    def is_successful(self) -> bool:
        return self.status_code in SUCCESS_CODES

    # -- vehicle identity ----------------------------------------------------

    @property
    def vin_description(self) -> VinDescription:
        return VinDescription.model_validate(self._raw.get("vinDescription") or {})

    @property
    def vin(self) -> str | None:
        return self.vin_description.vin or self._raw.get("vin")

    @property
    def model_year(self) -> int | None:
        year = self._raw.get("modelYear")
        if year is not None:
            return int(year)
        return self.vin_description.model_year

    @property
    def make(self) -> str | None:
        return self._raw.get("bestMakeName") or self.vin_description.division

    @property
    def model(self) -> str | None:
        return self._raw.get("bestModelName") or self.vin_description.model_name

    @property
    def style_name(self) -> str | None:
        return self._raw.get("bestStyleName") or self.vin_description.style_name

    @property
    def trim(self) -> str | None:
        return self._raw.get("bestTrimName")

    # -- repeated sections ---------------------------------------------------

    @property
    def styles(self) -> list[Style]:
        return [Style.model_validate(s) for s in _as_list(self._raw.get("style"))]

    @property
    def engines(self) -> list[Engine]:
        return [Engine.model_validate(e) for e in _as_list(self._raw.get("engine"))]

    @property
    def standard_equipment(self) -> list[dict[str, Any]]:
        return _as_list(self._raw.get("standard"))

    @property
    def generic_equipment(self) -> list[dict[str, Any]]:
        return _as_list(self._raw.get("genericEquipment"))

    @property
    def factory_options(self) -> list[dict[str, Any]]:
        return _as_list(self._raw.get("factoryOption"))

    @property
    def exterior_colors(self) -> list[dict[str, Any]]:
        return _as_list(self._raw.get("exteriorColor"))

    @property
    def interior_colors(self) -> list[dict[str, Any]]:
        return _as_list(self._raw.get("interiorColor"))

    @property
    def technical_specifications(self) -> list[dict[str, Any]]:
        return _as_list(self._raw.get("technicalSpecification"))

    @property
    def consumer_information(self) -> list[dict[str, Any]]:
        return _as_list(self._raw.get("consumerInformation"))

    @property
    def media_gallery(self) -> dict[str, Any] | None:
        return self._raw.get("mediaGallery")
