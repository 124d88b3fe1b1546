from __future__ import annotations

from chromedata.models.config import ADS_ENDPOINT, AppSettings
from chromedata.models.description import (
    Engine,
    ResponseStatus,
    StatusMessage,
    Style,
    VinDescription,
)

__all__ = [
    # config
    "ADS_ENDPOINT",
    "AppSettings",
    # description
    "Engine",
    "ResponseStatus",
    "StatusMessage",
    "Style",
    "VinDescription",
]
