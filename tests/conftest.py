import pytest

from batteries import batteries_config
from batteries.batteries_debug import reset_deprecation_warnings


@pytest.fixture(autouse=True)
def clean_config(monkeypatch):
    """Every test starts from the default switches and an empty warned set."""
    for var in ("BATTERIES_DEBUG", "BATTERIES_ARGCHECK", "BATTERIES_DEPRECATE"):
        monkeypatch.delenv(var, raising=False)
    batteries_config.reset()
    reset_deprecation_warnings()
    yield
    batteries_config.reset()
    reset_deprecation_warnings()
