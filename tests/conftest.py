import pytest

from kudoku.core.matrix import build_matrix


@pytest.fixture(scope="session")
def matrix():
    """One incidence matrix shared by every test, as in production."""
    return build_matrix()
