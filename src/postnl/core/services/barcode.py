"""Servicio de barcodes."""

from __future__ import annotations

from postnl.adapters.rest.barcode import BarcodeRestRequestBuilder, BarcodeRestResponseProcessor
from postnl.adapters.soap.barcode import BarcodeSoapRequestBuilder, BarcodeSoapResponseProcessor
from postnl.core.domain.api_mode import ApiMode
from postnl.core.domain.requests import GenerateBarcode
from postnl.core.errors import PostNLError
from postnl.core.services.base import BaseService, Batch


class BarcodeService(BaseService):
    AREA = "Barcode"
    DEFAULT_VERSION = "1_1"
    STRATEGIES = {
        ApiMode.REST: (BarcodeRestRequestBuilder, BarcodeRestResponseProcessor),
        ApiMode.LEGACY: (BarcodeSoapRequestBuilder, BarcodeSoapResponseProcessor),
    }

    def generate_barcode(self, generate_barcode: GenerateBarcode) -> str:
        builder, processor = self.strategy
        return self._send(
            generate_barcode,
            lambda: builder.build_generate_barcode_request(generate_barcode),
            processor.process_generate_barcode_response,
            cacheable=False,
        )

    def generate_barcodes(
        self, generate_barcodes: Batch[GenerateBarcode], *, strict: bool = False
    ) -> dict[str, str | PostNLError]:
        builder, processor = self.strategy
        return self._send_many(
            generate_barcodes,
            builder.build_generate_barcode_request,
            processor.process_generate_barcode_response,
            cacheable=False,
            strict=strict,
        )
