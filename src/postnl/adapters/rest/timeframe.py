"""Timeframe (REST): `calculate/timeframes`."""

from __future__ import annotations

import httpx

from postnl.adapters.rest.base import RestRequestBuilder, query_bool, read_entity
from postnl.core.domain.requests import GetTimeframes
from postnl.core.domain.responses import ResponseTimeframes
from postnl.core.errors import InvalidArgumentError


class TimeframeRestRequestBuilder(RestRequestBuilder):
    def build_get_timeframes_request(self, get_timeframes: GetTimeframes) -> httpx.Request:
        if not get_timeframes.timeframe:
            raise InvalidArgumentError("GetTimeframes needs a Timeframe")
        timeframe = get_timeframes.timeframe[0]
        params = {
            "AllowSundaySorting": query_bool(bool(timeframe.sunday_sorting)),
            "StartDate": timeframe.start_date,
            "EndDate": timeframe.end_date,
            "PostalCode": timeframe.postal_code,
            "HouseNumber": timeframe.house_nr,
            "HouseNrExt": timeframe.house_nr_ext,
            "Options": list(timeframe.options or []),
            "City": timeframe.city,
            "Street": timeframe.street,
            "CountryCode": timeframe.country_code,
            "Interval": timeframe.interval,
            "TimeframeRange": timeframe.timeframe_range,
        }
        return self.get("calculate/timeframes", params)


class TimeframeRestResponseProcessor:
    def process_get_timeframes_response(self, response: httpx.Response) -> ResponseTimeframes:
        return read_entity(response, ResponseTimeframes, "Timeframes", "ReasonNoTimeframes")
