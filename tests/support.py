"""Helpers shared by the test modules (canned PostNL payloads and responses)."""

from __future__ import annotations

import json
from typing import Any, Callable

import httpx

Router = Callable[[httpx.Request], httpx.Response]


class Recorder:
    """MockTransport handler that keeps every request it answers."""

    def __init__(self, router: Router) -> None:
        self.router = router
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.router(request)

    @property
    def paths(self) -> list[str]:
        return [r.url.path for r in self.requests]


def json_response(payload: Any, status: int = 200) -> httpx.Response:
    return httpx.Response(status, json=payload)


def xml_response(text: str, status: int = 200) -> httpx.Response:
    return httpx.Response(status, text=text, headers={"Content-Type": "text/xml; charset=utf-8"})


def request_json(request: httpx.Request) -> Any:
    return json.loads(request.content.decode("utf-8"))


def soap_envelope(body: str) -> str:
    return (
        '<?xml version="1.0" encoding="utf-8"?>'
        '<s:Envelope xmlns:s="http://schemas.xmlsoap.org/soap/envelope/">'
        f"<s:Body>{body}</s:Body>"
        "</s:Envelope>"
    )


BARCODE_PAYLOAD = {"Barcode": "3SDEVC816223392"}

CURRENT_STATUS_PAYLOAD = {
    "CurrentStatus": {
        "Shipment": {
            "Barcode": "3SDEVC201611210",
            "ProductCode": "003052",
            "ProductDescription": "Standaard zending",
            "Reference": "my-order-1",
            "Status": {
                "CurrentPhaseCode": "4",
                "CurrentPhaseDescription": "Afgeleverd",
                "CurrentStatusCode": "11",
                "CurrentStatusDescription": "Zending afgeleverd",
                "CurrentStatusTimeStamp": "06-06-2018 17:52:00",
            },
        }
    }
}

COMPLETE_STATUS_PAYLOAD = {
    "CompleteStatus": {
        "Shipment": [
            {
                "Barcode": "3SDEVC201611210",
                "Event": [
                    {"Code": "01B001", "Description": "Zending is aangemeld", "TimeStamp": "05-06-2018 10:00:00"},
                    {"Code": "11", "Description": "Zending afgeleverd", "TimeStamp": "06-06-2018 17:52:00"},
                ],
                "OldStatus": {"Code": "1", "Description": "Aangemeld", "PhaseCode": "1"},
                "Status": {"CurrentStatusCode": "11", "CurrentStatusDescription": "Zending afgeleverd"},
            }
        ]
    }
}

SIGNATURE_PAYLOAD = {
    "Signature": {
        "Barcode": "3SDEVC201611210",
        "SignatureDate": "06-06-2018 17:52:00",
        "SignatureImage": "iVBORw0KGgo=",
    },
    "Warnings": [],
}

NEAREST_LOCATIONS_PAYLOAD = {
    "GetLocationsResult": {
        "ResponseLocation": [
            {
                "Address": {
                    "City": "Hoofddorp",
                    "Countrycode": "NL",
                    "HouseNr": 22,
                    "Street": "Kruisweg",
                    "Zipcode": "2132CR",
                },
                "DeliveryOptions": {"string": ["DO", "PG", "UL"]},
                "Distance": 244,
                "Latitude": 52.3027,
                "LocationCode": 161457,
                "Longitude": 4.6896,
                "Name": "Primera Hoofddorp",
                "OpeningHours": {
                    "Monday": {"string": "09:00-19:00"},
                    "Tuesday": {"string": ["09:00-12:00", "13:00-19:00"]},
                },
                "PartnerName": "PostNL",
                "RetailNetworkID": "PNPNL-01",
            },
            {
                "Address": {"City": "Hoofddorp", "HouseNr": "5", "Street": "Marktplein", "Zipcode": "2132DA"},
                "DeliveryOptions": ["PG"],
                "Distance": "512",
                "LocationCode": "176227",
                "Name": "Bruna Hoofddorp",
            },
        ]
    }
}

TIMEFRAMES_PAYLOAD = {
    "ReasonNoTimeframes": {
        "ReasonNoTimeframe": [
            {"Code": "05", "Date": "14-11-2016", "Description": "Geen avondlevering", "Options": {"string": "Evening"}},
        ]
    },
    "Timeframes": {
        "Timeframe": [
            {
                "Date": "14-11-2016",
                "Timeframes": {
                    "TimeframeTimeFrame": [
                        {"From": "09:15:00", "Options": {"string": "Daytime"}, "To": "11:45:00"},
                        {"From": "17:30:00", "Options": {"string": "Evening"}, "To": "22:00:00"},
                    ]
                },
            },
            {
                "Date": "15-11-2016",
                "Timeframes": {"TimeframeTimeFrame": {"From": "09:00:00", "Options": ["Daytime"], "To": "12:00:00"}},
            },
        ]
    },
}

DELIVERY_DATE_PAYLOAD = {"DeliveryDate": "30-06-2016", "Options": {"string": "Daytime"}}

LABEL_PAYLOAD = {
    "MergedLabels": [],
    "ResponseShipments": [
        {
            "Barcode": "3SDEVC816223392",
            "Labels": [{"Content": "JVBERi0xLjQK", "Labeltype": "Label", "OutputType": "PDF"}],
            "ProductCodeDelivery": "3085",
            "Warnings": [],
        }
    ],
}

CONFIRM_PAYLOAD = {"ResponseShipments": [{"Barcode": "3SDEVC816223392", "Warnings": []}]}
