import os
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest
from protean.integrations.pytest import DomainFixture


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Select the config overlay before the domain is imported."""
    os.environ["PROTEAN_ENV"] = session.config.option.env


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = str(Path(item.fspath))

        if "/domain/" in test_path:
            item.add_marker(pytest.mark.domain)
        elif "/application/" in test_path:
            item.add_marker(pytest.mark.application)
        elif "/bdd/" in test_path:
            item.add_marker(pytest.mark.bdd)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


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

        # Clear all databases
        for _, provider in current_domain.providers.items():
            provider._data_reset()

        # Drain event stores
        current_domain.event_store.store._data_reset()

    from storefront.notifications import reset_email_channel
    from storefront.payment.gateway import reset_gateway

    reset_gateway()
    reset_email_channel()


# ---------------------------------------------------------------------------
# Shared builders
# ---------------------------------------------------------------------------
@pytest.fixture
def make_product():
    """Add a product through the catalog command and return its id."""
    from protean import current_domain
    from storefront.catalog.management import AddProduct

    def _make(title="Canvas Tote", sku=None, price=49.99, stock=100, discounted_price=None):
        return current_domain.process(
            AddProduct(
                title=title,
                sku=sku or f"SKU-{title.upper().replace(' ', '-')}",
                price=price,
                discounted_price=discounted_price,
                stock=stock,
            ),
            asynchronous=False,
        )

    return _make


@pytest.fixture
def make_coupon():
    from protean import current_domain
    from storefront.coupon.management import CreateCoupon

    def _make(code="SAVE10", discount=10.0, is_flat=False, min_total=0.0, usage_limit=None, expires_in_days=30):
        return current_domain.process(
            CreateCoupon(
                code=code,
                discount=discount,
                is_flat=is_flat,
                expiry_date=datetime.now(UTC) + timedelta(days=expires_in_days),
                usage_limit=usage_limit,
                min_total=min_total,
            ),
            asynchronous=False,
        )

    return _make


@pytest.fixture
def sign_webhook():
    """Build a ``Stripe-Signature`` header the way Stripe signs webhook deliveries."""
    import hashlib
    import hmac
    import time

    def _sign(payload, secret, timestamp=None):
        timestamp = int(time.time()) if timestamp is None else timestamp
        digest = hmac.new(secret.encode("utf-8"), f"{timestamp}.{payload}".encode("utf-8"), hashlib.sha256)
        return f"t={timestamp},v1={digest.hexdigest()}"

    return _sign
