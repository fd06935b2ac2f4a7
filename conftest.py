import pytest

from elibrary import CatalogService


@pytest.fixture
def service():
    # Empty catalog, empty history
    return CatalogService()


@pytest.fixture
def library():
    # Bootstrap inventory: Mockingbird, 1984, Gatsby (borrowed), Moby Dick
    return CatalogService.with_sample_inventory()
