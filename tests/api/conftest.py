"""Shared fixtures for ADS client tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from chromedata.api.client import ADSClient
from chromedata.auth.credentials import AccountCredentials

WSDL_PATH = Path(__file__).parent / "data" / "ads.wsdl"
SERVICE_URL = "http://services.chromedata.test/Description/7b"

VALID_VIN = "1M8GDM9AXKP042788"

DESCRIBE_RESPONSE = """<?xml version="1.0" encoding="UTF-8"?>
<S:Envelope xmlns:S="http://schemas.xmlsoap.org/soap/envelope/">
  <S:Body>
    <VehicleDescription xmlns="urn:description7b.services.chrome.com"
        country="US" language="en" modelYear="1989" bestMakeName="MCI"
        bestModelName="MC-9" bestStyleName="Coach" bestTrimName="Crusader II">
      <responseStatus responseCode="Successful" description="Successful">
        <status code="ExactMatch">VIN decoded to a single style</status>
      </responseStatus>
      <vinDescription vin="1M8GDM9AXKP042788" modelYear="1989" division="MCI"
          modelName="MC-9" styleName="Coach" bodyType="Bus"/>
      <style id="900123" modelYear="1989" name="Coach" trim="Crusader II"
          mfrModelCode="MC9" fleetOnly="false"/>
    </VehicleDescription>
  </S:Body>
</S:Envelope>
"""

FAULT_RESPONSE = """<?xml version="1.0" encoding="UTF-8"?>
<S:Envelope xmlns:S="http://schemas.xmlsoap.org/soap/envelope/">
  <S:Body>
    <S:Fault>
      <faultcode>S:Server</faultcode>
      <faultstring>Invalid account number or secret</faultstring>
    </S:Fault>
  </S:Body>
</S:Envelope>
"""


@pytest.fixture
def credentials() -> AccountCredentials:
    return AccountCredentials(account_number="123456", account_secret="s3cret")


@pytest.fixture
def client(credentials: AccountCredentials) -> ADSClient:
    return ADSClient(credentials, endpoint=str(WSDL_PATH))
