import pytest
from protean.integrations.pytest import DomainFixture


@pytest.fixture(scope="session")
def restaurants_bed():
    from restaurants.domain import restaurants

    bed = DomainFixture(restaurants)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(restaurants_bed):
    with restaurants_bed.domain_context():
        yield

        from protean import current_domain

        # Every test starts from empty storage
        for _, provider in current_domain.providers.items():
            provider._data_reset()
