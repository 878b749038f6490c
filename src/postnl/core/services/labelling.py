"""Servicio de etiquetas."""

from __future__ import annotations

from postnl.adapters.rest.labelling import LabellingRestRequestBuilder, LabellingRestResponseProcessor
from postnl.adapters.soap.labelling import LabellingSoapRequestBuilder, LabellingSoapResponseProcessor
from postnl.core.domain.api_mode import ApiMode
from postnl.core.domain.requests import GenerateLabel
from postnl.core.domain.responses import GenerateLabelResponse
from postnl.core.errors import PostNLError
from postnl.core.services.base import BaseService, Batch


class LabellingService(BaseService):
    AREA = "Labelling"
    DEFAULT_VERSION = "2_2"
    STRATEGIES = {
        ApiMode.REST: (LabellingRestRequestBuilder, LabellingRestResponseProcessor),
        ApiMode.LEGACY: (LabellingSoapRequestBuilder, LabellingSoapResponseProcessor),
    }

    def generate_label(self, generate_label: GenerateLabel, confirm: bool = True) -> GenerateLabelResponse:
        builder, processor = self.strategy
        return self._send(
            generate_label,
            lambda: builder.build_generate_label_request(generate_label, confirm),
            processor.process_generate_label_response,
            cacheable=False,
        )

    def generate_labels(
        self,
        generate_labels: Batch[GenerateLabel],
        confirm: bool = True,
        *,
        strict: bool = False,
    ) -> dict[str, GenerateLabelResponse | PostNLError]:
        builder, processor = self.strategy
        return self._send_many(
            generate_labels,
            lambda entity: builder.build_generate_label_request(entity, confirm),
            processor.process_generate_label_response,
            cacheable=False,
            strict=strict,
        )
