import pytest


@pytest.fixture
def domain_warnings(recwarn):
    """
    Count the aggregate "NaNs produced" / "NAs produced" warnings raised so far.

    numpy may emit its own RuntimeWarnings; only the batch warnings are counted.
    """
    def count():
        return sum(
            1 for w in recwarn
            if issubclass(w.category, RuntimeWarning) and "produced" in str(w.message)
        )
    return count
