"""Timeframe (SOAP): `TimeframeWebService.GetTimeframes`."""

from __future__ import annotations

import httpx

from postnl.adapters.soap.base import SoapRequestBuilder, read_entity
from postnl.core.domain.requests import GetTimeframes
from postnl.core.domain.responses import ResponseTimeframes
from postnl.core.errors import InvalidArgumentError


class TimeframeSoapRequestBuilder(SoapRequestBuilder):
    service = "TimeframeWebService"
    endpoint = "calculate/timeframes"

    def build_get_timeframes_request(self, get_timeframes: GetTimeframes) -> httpx.Request:
        if not get_timeframes.timeframe:
            raise InvalidArgumentError("GetTimeframes needs a Timeframe")
        return self.post("GetTimeframes", get_timeframes)


class TimeframeSoapResponseProcessor:
    def process_get_timeframes_response(self, response: httpx.Response) -> ResponseTimeframes:
        return read_entity(response, "ResponseTimeframes", ResponseTimeframes)
