import pytest
from protean.integrations.pytest import DomainFixture


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


@pytest.fixture(autouse=True)
def fake_sender():
    """Swap in a recording webhook sender for every test."""
    from storefront.webhook.delivery import reset_sender, set_sender
    from storefront.webhook.delivery.fake_adapter import FakeSender

    sender = FakeSender()
    set_sender(sender)
    yield sender
    reset_sender()
