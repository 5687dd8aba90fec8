import pytest
from protean.integrations.pytest import DomainFixture

from storefront.catalogue import reset_catalogue
from storefront.feeds import reset_feed
from storefront.identity import reset_auth_service


@pytest.fixture(scope="session")
def storefront_bed():
    from storefront.domain import storefront

    bed = DomainFixture(storefront)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(storefront_bed):
    with storefront_bed.domain_context():
        yield

        from protean import current_domain

        for _, provider in current_domain.providers.items():
            provider._data_reset()
        current_domain.event_store.store._data_reset()

    reset_feed()
    reset_catalogue()
    reset_auth_service()


@pytest.fixture()
def user_id():
    return "user-001"


@pytest.fixture()
def phone_item():
    return {
        "product_id": "prod-phone",
        "name": "Pixel 8",
        "price": 1000.0,
        "discount_price": 800.0,
        "image": "https://img.example.com/pixel8.png",
        "quantity": 1,
    }


@pytest.fixture()
def case_item():
    return {
        "product_id": "prod-case",
        "name": "Silicone Case",
        "price": 250.0,
        "discount_price": None,
        "image": None,
        "quantity": 2,
    }
