import pytest

from fakes import FOX, FakeStore


@pytest.fixture
def fox_store():
    return FakeStore([FOX, "completely unrelated text about cooking"])
