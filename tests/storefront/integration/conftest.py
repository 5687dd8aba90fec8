import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from storefront.api import register_error_handlers, routers
from storefront.catalogue import get_catalogue
from storefront.catalogue.port import ProductRecord
from storefront.identity import get_auth_service


@pytest.fixture()
def client():
    app = FastAPI()
    for router in routers:
        app.include_router(router)
    register_error_handlers(app)
    return TestClient(app)


@pytest.fixture(autouse=True)
def _accounts_and_products():
    auth = get_auth_service()
    auth.register("customer-token", "user-001")
    auth.register("other-token", "user-002")
    auth.register("admin-token", "admin-001")
    auth.register("unverified-token", "user-003", email_verified=False)

    catalogue = get_catalogue()
    catalogue.add(ProductRecord(product_id="prod-phone", name="Pixel 8", price=1000.0, discount_price=800.0))
    catalogue.add(ProductRecord(product_id="prod-case", name="Silicone Case", price=250.0))
    catalogue.add(ProductRecord(product_id="prod-cable", name="USB-C Cable", price=300.0, discount_price=350.0))
