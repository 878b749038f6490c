"""Pytest fixtures for postnl tests."""

import httpx
import pytest

from postnl.client import PostNL
from postnl.core.config import PostNLSettings
from postnl.core.domain.api_mode import ApiMode
from postnl.core.domain.entities import Address, Customer
from support import Recorder


@pytest.fixture
def settings():
    """Settings isolated from the developer's .env files."""
    return PostNLSettings(
        _env_file=None,
        api_key="test-api-key",
        sandbox=True,
        api_mode=ApiMode.REST,
        customer_number="11223344",
        customer_code="DEVC",
        collection_location="123456",
        contact_person="Test",
        globalpack_barcode_type="CD",
        globalpack_customer_code="1234",
    )


@pytest.fixture
def customer():
    return Customer(
        customer_number="11223344",
        customer_code="DEVC",
        collection_location="123456",
        contact_person="Test",
        email="test@voorbeeld.nl",
        name="Michael",
        globalpack_barcode_type="CD",
        globalpack_customer_code="1234",
        address=Address(
            address_type="02",
            city="Hoofddorp",
            company_name="PostNL",
            countrycode="NL",
            house_nr="42",
            street="Siriusdreef",
            zipcode="2132WT",
        ),
    )


@pytest.fixture
def make_client(settings, customer):
    """Build a PostNL client whose transport is answered by `router`.

    Returns `(client, recorder)`; the recorder keeps every request sent.
    """
    clients = []

    def factory(router, *, mode=ApiMode.REST, cache=None):
        recorder = Recorder(router)
        client = PostNL(
            customer=customer,
            settings=settings,
            mode=mode,
            cache=cache,
            transport=httpx.MockTransport(recorder),
        )
        clients.append(client)
        return client, recorder

    yield factory

    for client in clients:
        client.close()
