"""Exception hierarchy for ChromeData client errors."""

from __future__ import annotations


class ChromeDataError(Exception):
    """Base class for all errors raised by *chromedata*."""

    def __init__(self, message: str = "", *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ConfigError(ChromeDataError):
    """Missing or invalid local configuration (credentials, endpoint, ...)."""


class InvalidVinError(ChromeDataError):
    """A VIN failed local validation and was not sent to the service.

    ``reason`` is ``"format"`` when the VIN is not 17 characters of the VIN
    alphabet, or ``"checksum"`` when it is well formed but the check digit
    does not match.
    """

    def __init__(self, vin: str, reason: str) -> None:
        if reason == "format":
            message = f"Malformed VIN {vin!r}: expected 17 characters excluding I, O and Q."
        else:
            message = f"VIN {vin!r} failed the check-digit test."
        super().__init__(message)
        self.vin = vin
        self.reason = reason


class ServiceError(ChromeDataError):
    """The ADS service answered with a SOAP fault."""

    def __init__(
        self,
        message: str = "",
        *,
        fault_code: str | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message, status_code=status_code)
        self.fault_code = fault_code


class TransportError(ChromeDataError):
    """The request never produced a SOAP response (network, HTTP status, WSDL)."""
