"""Servicio de franjas de entrega."""

from __future__ import annotations

from postnl.adapters.rest.timeframe import TimeframeRestRequestBuilder, TimeframeRestResponseProcessor
from postnl.adapters.soap.timeframe import TimeframeSoapRequestBuilder, TimeframeSoapResponseProcessor
from postnl.core.domain.api_mode import ApiMode
from postnl.core.domain.requests import GetTimeframes
from postnl.core.domain.responses import ResponseTimeframes
from postnl.core.services.base import BaseService


class TimeframeService(BaseService):
    AREA = "Timeframe"
    DEFAULT_VERSION = "2_1"
    STRATEGIES = {
        ApiMode.REST: (TimeframeRestRequestBuilder, TimeframeRestResponseProcessor),
        ApiMode.LEGACY: (TimeframeSoapRequestBuilder, TimeframeSoapResponseProcessor),
    }

    def get_timeframes(self, get_timeframes: GetTimeframes) -> ResponseTimeframes:
        builder, processor = self.strategy
        return self._send(
            get_timeframes,
            lambda: builder.build_get_timeframes_request(get_timeframes),
            processor.process_get_timeframes_response,
        )
