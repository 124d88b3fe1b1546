"""SOAP client for the ChromeData Automotive Description Service (ADS)."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

import httpx
import zeep
from zeep.cache import InMemoryCache
from zeep.exceptions import Error as ZeepError
from zeep.exceptions import Fault
from zeep.exceptions import TransportError as ZeepTransportError
from zeep.helpers import serialize_object
from zeep.transports import AsyncTransport

from chromedata._internal.async_utils import each_limit, run_async
from chromedata.api.errors import ConfigError, InvalidVinError, ServiceError, TransportError
from chromedata.api.response import ADSResponse
from chromedata.models.config import ADS_ENDPOINT
from chromedata.vin import is_valid_vin, is_well_formed_vin, normalize_vin

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Coroutine, Iterable

    from zeep.proxy import AsyncServiceProxy

    from chromedata.auth.credentials import CredentialProvider

logger = logging.getLogger(__name__)

DEFAULT_SWITCHES: tuple[str, ...] = (
    "ShowExtendedDescriptions",
    "ShowConsumerInformation",
    "ShowExtendedTechnicalSpecifications",
    "IncludeDefinitions",
    "ShowAvailableEquipment",
)

# Optional request fields ADS uses to narrow a VIN down to one style.
DESCRIBE_HINTS: frozenset[str] = frozenset(
    {
        "trimName",
        "manufacturerModelCode",
        "wheelBase",
        "OEMOptionCode",
        "exteriorColorName",
        "interiorColorName",
        "styleName",
        "reducingStyleID",
        "reducingAcode",
    }
)

DEFAULT_CONCURRENCY = 15

_REQUEST_FIELDS: frozenset[str] = DESCRIBE_HINTS | {
    "accountInfo",
    "vin",
    "switch",
    "includeMediaGallery",
    "vehicleProcessMode",
    "optionsProcessMode",
}


def _merge_switches(*groups: Iterable[str]) -> list[str]:
    """Union switch lists, keeping first-seen order."""
    merged: list[str] = []
    for group in groups:
        for switch in group:
            if switch not in merged:
                merged.append(switch)
    return merged


class ADSClient:
    """Async-first client for the ADS ``describeVehicle`` operation.

    *credentials* is anything exposing ``account_number`` and
    ``account_secret`` (see :class:`~chromedata.auth.credentials.CredentialProvider`);
    both are read on every request so a keyring-backed store picks up changes.

    The SOAP client and its HTTP sessions are created lazily on first use and
    released by :meth:`aclose` (or ``async with``).  The synchronous helpers
    :meth:`by_vin` and :meth:`pool` open and close their own sessions.
    """

    def __init__(
        self,
        credentials: CredentialProvider,
        *,
        endpoint: str = ADS_ENDPOINT,
        country: str = "US",
        language: str = "en",
        timeout: float = 30.0,
        validate_vins: bool = True,
    ) -> None:
        self._credentials = credentials
        self._endpoint = endpoint
        self._country = country
        self._language = language
        self._timeout = timeout
        self._validate_vins = validate_vins
        self._parameters: dict[str, Any] = {}
        self._wsdl_cache = InMemoryCache()
        self._transport: AsyncTransport | None = None
        self._soap: zeep.AsyncClient | None = None

    async def __aenter__(self) -> ADSClient:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.aclose()

    @property
    def endpoint(self) -> str:
        return self._endpoint

    @property
    def parameters(self) -> dict[str, Any]:
        """Persistent parameters set through the fluent toggles."""
        return self._parameters

    # ------------------------------------------------------------------
    # Fluent request toggles
    # ------------------------------------------------------------------

    def include_color_matched_photos(self) -> ADSClient:
        """Add color-matched photos to every response."""
        self._parameters["includeMediaGallery"] = "ColorMatch"
        return self

    def include_available_equipment(self) -> ADSClient:
        self._add_switch("ShowAvailableEquipment")
        return self

    def include_extended_descriptions(self) -> ADSClient:
        self._add_switch("ShowExtendedDescriptions")
        return self

    def exclude_fleet(self) -> ADSClient:
        """Leave fleet-only styles and options out of the match."""
        self._parameters["vehicleProcessMode"] = "ExcludeFleetOnly"
        self._parameters["optionsProcessMode"] = "ExcludeFleetOnly"
        return self

    def _add_switch(self, switch: str) -> None:
        switches: list[str] = self._parameters.setdefault("switch", [])
        if switch not in switches:
            switches.append(switch)

    # ------------------------------------------------------------------
    # Request payload
    # ------------------------------------------------------------------

    def build_parameters(
        self, vin: str, parameters: Mapping[str, Any] | None = None
    ) -> dict[str, Any]:
        """Merge persistent parameters, account info, VIN and switches.

        Precedence, lowest first: the client's persistent parameters, the
        fixed payload, then *parameters*.  Switches toggled on the client are
        unioned with :data:`DEFAULT_SWITCHES`; a ``switch`` entry in
        *parameters* replaces the list outright.
        """
        payload = dict(self._parameters)
        persistent_switches = payload.pop("switch", [])
        payload.update(
            {
                "accountInfo": self._account_info(),
                "vin": vin,
                "switch": _merge_switches(DEFAULT_SWITCHES, persistent_switches),
            }
        )
        if parameters:
            payload.update(parameters)
        return payload

    def _account_info(self) -> dict[str, str]:
        number = self._credentials.account_number
        secret = self._credentials.account_secret
        if not number or not secret:
            raise ConfigError(
                "No ChromeData account credentials found. Run 'chromedata auth set' or set"
                " CHROMEDATA_ACCOUNT_NUMBER and CHROMEDATA_ACCOUNT_SECRET."
            )
        return {
            "number": number,
            "secret": secret,
            "country": self._country,
            "language": self._language,
        }

    # ------------------------------------------------------------------
    # SOAP plumbing
    # ------------------------------------------------------------------

    def _get_soap(self) -> zeep.AsyncClient:
        if self._soap is None:
            transport = AsyncTransport(
                client=httpx.AsyncClient(timeout=self._timeout),
                wsdl_client=httpx.Client(timeout=self._timeout),
                cache=self._wsdl_cache,
            )
            logger.debug("Loading ADS WSDL from %s", self._endpoint)
            try:
                self._soap = zeep.AsyncClient(self._endpoint, transport=transport)
            except (ZeepError, httpx.HTTPError, OSError) as exc:
                transport.wsdl_client.close()
                raise TransportError(
                    f"Could not load the ADS service description from {self._endpoint}: {exc}",
                    status_code=getattr(exc, "status_code", None),
                ) from exc
            self._transport = transport
        return self._soap

    @property
    def service(self) -> AsyncServiceProxy:
        """The zeep service proxy; its operations return coroutines."""
        return self._get_soap().service

    async def aclose(self) -> None:
        """Close the HTTP sessions behind the SOAP client."""
        transport, self._transport = self._transport, None
        self._soap = None
        if transport is not None:
            await transport.client.aclose()
            transport.wsdl_client.close()

    async def _describe_vehicle(self, payload: dict[str, Any]) -> dict[str, Any]:
        try:
            result = await self.service.describeVehicle(**payload)
        except Fault as exc:
            raise ServiceError(
                exc.message or "ADS returned a SOAP fault", fault_code=exc.code
            ) from exc
        except ZeepTransportError as exc:
            raise TransportError(
                exc.message or f"ADS request failed with HTTP {exc.status_code}",
                status_code=exc.status_code,
            ) from exc
        except httpx.HTTPError as exc:
            raise TransportError(f"ADS request failed: {exc}") from exc
        except ZeepError as exc:
            raise ServiceError(exc.message or str(exc)) from exc
        return serialize_object(result, dict) or {}

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def check_vin(self, vin: str) -> None:
        """Raise :class:`InvalidVinError` if *vin* fails local validation."""
        if not is_well_formed_vin(vin):
            raise InvalidVinError(vin, "format")
        if not is_valid_vin(vin):
            raise InvalidVinError(vin, "checksum")

    async def by_vin_async(
        self, vin: str, parameters: Mapping[str, Any] | None = None
    ) -> ADSResponse:
        """Describe the vehicle identified by *vin*.

        *parameters* may carry any of :data:`DESCRIBE_HINTS` to raise the
        chance of an exact style match, or override any other request field.
        """
        vin = normalize_vin(vin)
        if self._validate_vins:
            self.check_vin(vin)

        payload = self.build_parameters(vin, parameters)
        unknown = set(parameters or {}) - _REQUEST_FIELDS
        if unknown:
            logger.debug("Non-standard ADS parameters: %s", ", ".join(sorted(unknown)))

        logger.debug("describeVehicle vin=%s switches=%s", vin, payload.get("switch"))
        raw = await self._describe_vehicle(payload)
        response = ADSResponse(raw, parameters)
        logger.debug("describeVehicle vin=%s status=%s", vin, response.status_code)
        return response

    def by_vin(self, vin: str, parameters: Mapping[str, Any] | None = None) -> ADSResponse:
        """Synchronous form of :meth:`by_vin_async`."""
        return run_async(self._closing(self.by_vin_async(vin, parameters)))

    async def pool_async(
        self,
        requests: Iterable[Awaitable[Any]],
        fulfilled: Callable[[ADSResponse, int], Any],
        rejected: Callable[[BaseException, int], Any],
        concurrency: int = DEFAULT_CONCURRENCY,
    ) -> None:
        """Settle every awaitable in *requests*, at most *concurrency* at a time.

        *requests* may be a list or a generator, typically of
        :meth:`by_vin_async` calls.  Raw results (for instance from
        :attr:`service` directly) are wrapped in :class:`ADSResponse` before
        reaching *fulfilled*.  Returns once every request has settled.
        """

        def _on_fulfilled(result: Any, idx: int) -> None:
            if not isinstance(result, ADSResponse):
                if not isinstance(result, Mapping):
                    result = serialize_object(result, dict)
                result = ADSResponse(result)
            fulfilled(result, idx)

        def _on_rejected(exc: BaseException, idx: int) -> None:
            logger.warning("Pooled ADS request #%d failed: %s", idx, exc)
            rejected(exc, idx)

        await each_limit(requests, concurrency, _on_fulfilled, _on_rejected)

    def pool(
        self,
        requests: Iterable[Awaitable[Any]],
        fulfilled: Callable[[ADSResponse, int], Any],
        rejected: Callable[[BaseException, int], Any],
        concurrency: int = DEFAULT_CONCURRENCY,
    ) -> None:
        """Synchronous form of :meth:`pool_async`."""
        run_async(self._closing(self.pool_async(requests, fulfilled, rejected, concurrency)))

    async def _closing(self, coro: Coroutine[Any, Any, Any]) -> Any:
        # The HTTP sessions are bound to the event loop run_async creates.
        try:
            return await coro
        finally:
            await self.aclose()
