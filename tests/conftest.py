import pytest

from mrprime.rng import Generator


@pytest.fixture
def gen():
    g = Generator()
    g.seed_from_bytes(b"mrprime-tests")
    return g
