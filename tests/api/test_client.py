"""Tests for chromedata.api.client — ADSClient."""

from __future__ import annotations

import asyncio
from types import SimpleNamespace
from typing import TYPE_CHECKING, Any

import httpx
import pytest

from chromedata.api.client import DEFAULT_SWITCHES, ADSClient
from chromedata.api.errors import ConfigError, InvalidVinError, ServiceError, TransportError
from chromedata.api.response import ADSResponse
from tests.api.conftest import (
    DESCRIBE_RESPONSE,
    FAULT_RESPONSE,
    SERVICE_URL,
    VALID_VIN,
    WSDL_PATH,
)

if TYPE_CHECKING:
    from pytest_httpx import HTTPXMock

    from chromedata.auth.credentials import AccountCredentials


# ---------------------------------------------------------------------------
# Parameter building
# ---------------------------------------------------------------------------


class TestBuildParameters:
    def test_fixed_payload(self, client: ADSClient) -> None:
        params = client.build_parameters(VALID_VIN)
        assert params["vin"] == VALID_VIN
        assert params["accountInfo"] == {
            "number": "123456",
            "secret": "s3cret",
            "country": "US",
            "language": "en",
        }
        assert params["switch"] == list(DEFAULT_SWITCHES)

    def test_caller_overrides_win(self, client: ADSClient) -> None:
        params = client.build_parameters(VALID_VIN, {"trimName": "LX", "vin": "OTHER"})
        assert params["trimName"] == "LX"
        assert params["vin"] == "OTHER"

    def test_caller_switch_replaces_list(self, client: ADSClient) -> None:
        params = client.build_parameters(VALID_VIN, {"switch": ["IncludeDefinitions"]})
        assert params["switch"] == ["IncludeDefinitions"]

    def test_persistent_parameters_lose_to_fixed_payload(self, client: ADSClient) -> None:
        client.parameters["vin"] = "PERSISTENT"
        client.parameters["wheelBase"] = "120"
        params = client.build_parameters(VALID_VIN)
        assert params["vin"] == VALID_VIN
        assert params["wheelBase"] == "120"

    def test_country_and_language(self, credentials: AccountCredentials) -> None:
        client = ADSClient(credentials, country="CA", language="fr")
        info = client.build_parameters(VALID_VIN)["accountInfo"]
        assert info["country"] == "CA"
        assert info["language"] == "fr"

    def test_missing_credentials_raise_config_error(self) -> None:
        client = ADSClient(SimpleNamespace(account_number=None, account_secret=None))
        with pytest.raises(ConfigError):
            client.build_parameters(VALID_VIN)


class TestToggles:
    def test_toggles_are_fluent(self, client: ADSClient) -> None:
        result = (
            client.include_color_matched_photos()
            .include_available_equipment()
            .include_extended_descriptions()
            .exclude_fleet()
        )
        assert result is client

    def test_color_matched_photos(self, client: ADSClient) -> None:
        client.include_color_matched_photos()
        assert client.build_parameters(VALID_VIN)["includeMediaGallery"] == "ColorMatch"

    def test_exclude_fleet(self, client: ADSClient) -> None:
        params = client.exclude_fleet().build_parameters(VALID_VIN)
        assert params["vehicleProcessMode"] == "ExcludeFleetOnly"
        assert params["optionsProcessMode"] == "ExcludeFleetOnly"

    def test_switch_toggles_do_not_duplicate(self, client: ADSClient) -> None:
        client.include_available_equipment().include_available_equipment()
        client.include_extended_descriptions()
        switches = client.build_parameters(VALID_VIN)["switch"]
        assert switches == list(DEFAULT_SWITCHES)
        assert client.parameters["switch"] == [
            "ShowAvailableEquipment",
            "ShowExtendedDescriptions",
        ]

    def test_extra_persistent_switch_is_appended(self, client: ADSClient) -> None:
        client.parameters["switch"] = ["ShowTechnicalSpecificationsOnly"]
        switches = client.build_parameters(VALID_VIN)["switch"]
        assert switches[: len(DEFAULT_SWITCHES)] == list(DEFAULT_SWITCHES)
        assert switches[-1] == "ShowTechnicalSpecificationsOnly"


# ---------------------------------------------------------------------------
# Local VIN validation
# ---------------------------------------------------------------------------


class TestVinValidation:
    @pytest.mark.asyncio
    async def test_bad_check_digit_never_hits_network(self, client: ADSClient) -> None:
        with pytest.raises(InvalidVinError) as exc_info:
            await client.by_vin_async("1M8GDM9AAKP042788")
        assert exc_info.value.reason == "checksum"
        assert client._soap is None

    @pytest.mark.asyncio
    async def test_malformed_vin(self, client: ADSClient) -> None:
        with pytest.raises(InvalidVinError) as exc_info:
            await client.by_vin_async("1M8GDM9AXKP04278Q")
        assert exc_info.value.reason == "format"

    def test_check_vin_accepts_valid(self, client: ADSClient) -> None:
        client.check_vin(VALID_VIN)


# ---------------------------------------------------------------------------
# SOAP round trip
# ---------------------------------------------------------------------------


class TestDescribeVehicle:
    @pytest.mark.asyncio
    async def test_by_vin_async(self, httpx_mock: HTTPXMock, client: ADSClient) -> None:
        httpx_mock.add_response(method="POST", url=SERVICE_URL, text=DESCRIBE_RESPONSE)

        async with client:
            response = await client.by_vin_async(VALID_VIN.lower(), {"trimName": "Crusader II"})

        assert isinstance(response, ADSResponse)
        assert response.is_successful
        assert response.vin == VALID_VIN
        assert response.model_year == 1989
        assert response.make == "MCI"
        assert response.trim == "Crusader II"
        assert response.parameters == {"trimName": "Crusader II"}
        assert response.styles[0].id == 900123
        assert response.styles[0].fleet_only is False

    @pytest.mark.asyncio
    async def test_request_payload(self, httpx_mock: HTTPXMock, client: ADSClient) -> None:
        httpx_mock.add_response(method="POST", url=SERVICE_URL, text=DESCRIBE_RESPONSE)

        async with client:
            await client.exclude_fleet().by_vin_async(VALID_VIN)

        body = httpx_mock.get_requests()[0].content
        assert VALID_VIN.encode() in body
        assert b'number="123456"' in body
        assert b"ShowExtendedTechnicalSpecifications" in body
        assert b"ExcludeFleetOnly" in body

    def test_by_vin_sync(self, httpx_mock: HTTPXMock, client: ADSClient) -> None:
        httpx_mock.add_response(method="POST", url=SERVICE_URL, text=DESCRIBE_RESPONSE)

        response = client.by_vin(VALID_VIN)

        assert response.model == "MC-9"
        assert client._soap is None

    @pytest.mark.asyncio
    async def test_unvalidated_vin_is_sent(
        self, httpx_mock: HTTPXMock, credentials: AccountCredentials
    ) -> None:
        httpx_mock.add_response(method="POST", url=SERVICE_URL, text=DESCRIBE_RESPONSE)
        client = ADSClient(credentials, endpoint=str(WSDL_PATH), validate_vins=False)

        async with client:
            await client.by_vin_async("1M8GDM9A0KP042788")

        assert b"1M8GDM9A0KP042788" in httpx_mock.get_requests()[0].content


class TestErrors:
    @pytest.mark.asyncio
    async def test_soap_fault(self, httpx_mock: HTTPXMock, client: ADSClient) -> None:
        httpx_mock.add_response(
            method="POST", url=SERVICE_URL, status_code=500, text=FAULT_RESPONSE
        )
        async with client:
            with pytest.raises(ServiceError) as exc_info:
                await client.by_vin_async(VALID_VIN)
        assert "Invalid account number" in str(exc_info.value)
        assert exc_info.value.fault_code is not None
        assert "Server" in exc_info.value.fault_code

    @pytest.mark.asyncio
    async def test_http_error_without_body(
        self, httpx_mock: HTTPXMock, client: ADSClient
    ) -> None:
        httpx_mock.add_response(method="POST", url=SERVICE_URL, status_code=503)
        async with client:
            with pytest.raises(TransportError) as exc_info:
                await client.by_vin_async(VALID_VIN)
        assert exc_info.value.status_code == 503

    @pytest.mark.asyncio
    async def test_connection_error(self, httpx_mock: HTTPXMock, client: ADSClient) -> None:
        httpx_mock.add_exception(httpx.ConnectError("Connection refused"))
        async with client:
            with pytest.raises(TransportError) as exc_info:
                await client.by_vin_async(VALID_VIN)
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)

    def test_missing_wsdl(self, credentials: AccountCredentials, tmp_path: Any) -> None:
        client = ADSClient(credentials, endpoint=str(tmp_path / "missing.wsdl"))
        with pytest.raises(TransportError):
            client.service  # noqa: B018


# ---------------------------------------------------------------------------
# Pooling
# ---------------------------------------------------------------------------


async def _resolve(value: Any, delay: float = 0) -> Any:
    await asyncio.sleep(delay)
    return value


async def _fail(exc: Exception) -> Any:
    raise exc


class TestPool:
    @pytest.mark.asyncio
    async def test_routes_results_by_index(self, client: ADSClient) -> None:
        fulfilled: dict[int, ADSResponse] = {}
        rejected: dict[int, BaseException] = {}

        await client.pool_async(
            [
                _resolve({"bestMakeName": "Ford"}),
                _fail(ServiceError("boom")),
                _resolve(ADSResponse({"bestMakeName": "Honda"})),
            ],
            lambda resp, idx: fulfilled.__setitem__(idx, resp),
            lambda exc, idx: rejected.__setitem__(idx, exc),
        )

        assert sorted(fulfilled) == [0, 2]
        assert all(isinstance(r, ADSResponse) for r in fulfilled.values())
        assert fulfilled[0].make == "Ford"
        assert fulfilled[2].make == "Honda"
        assert isinstance(rejected[1], ServiceError)

    @pytest.mark.asyncio
    async def test_respects_concurrency(self, client: ADSClient) -> None:
        in_flight = 0
        peak = 0

        async def _tracked(i: int) -> dict[str, Any]:
            nonlocal in_flight, peak
            in_flight += 1
            peak = max(peak, in_flight)
            await asyncio.sleep(0.01)
            in_flight -= 1
            return {"vin": str(i)}

        seen: list[int] = []
        await client.pool_async(
            (_tracked(i) for i in range(10)),
            lambda resp, idx: seen.append(idx),
            lambda exc, idx: pytest.fail(f"unexpected rejection {exc}"),
            concurrency=3,
        )

        assert peak == 3
        assert sorted(seen) == list(range(10))

    def test_pool_sync(self, client: ADSClient) -> None:
        seen: list[tuple[int, str | None]] = []
        client.pool(
            [_resolve({"bestModelName": "Accord"}, 0.01), _resolve({"bestModelName": "Civic"})],
            lambda resp, idx: seen.append((idx, resp.model)),
            lambda exc, idx: None,
            concurrency=2,
        )
        assert sorted(seen) == [(0, "Accord"), (1, "Civic")]

    @pytest.mark.asyncio
    async def test_pool_of_by_vin_requests(self, client: ADSClient) -> None:
        fulfilled: list[int] = []
        rejected: list[tuple[int, BaseException]] = []

        # Both VINs fail local validation, so no HTTP traffic is needed.
        await client.pool_async(
            (client.by_vin_async(v) for v in ("1M8GDM9AAKP042788", "SHORT")),
            lambda resp, idx: fulfilled.append(idx),
            lambda exc, idx: rejected.append((idx, exc)),
        )

        assert fulfilled == []
        assert [idx for idx, _ in sorted(rejected, key=lambda r: r[0])] == [0, 1]
        assert all(isinstance(exc, InvalidVinError) for _, exc in rejected)
