import pytest

from batteries import batteries_config
from batteries.batteries_config import DebugConfig


def test_defaults():
    config = DebugConfig.from_env({})
    assert config == DebugConfig(debug=False, argcheck=True, deprecate="warn")


@pytest.mark.parametrize("env, expected", [
    ({"BATTERIES_DEBUG": "1"}, DebugConfig(debug=True)),
    ({"BATTERIES_DEBUG": ""}, DebugConfig()),
    ({"BATTERIES_ARGCHECK": "0"}, DebugConfig(argcheck=False)),
    ({"BATTERIES_ARGCHECK": "1"}, DebugConfig(argcheck=True)),
    ({"BATTERIES_DEPRECATE": "off"}, DebugConfig(deprecate="off")),
    ({"BATTERIES_DEPRECATE": "ERROR"}, DebugConfig(deprecate="error")),
])
def test_from_env(env, expected):
    assert DebugConfig.from_env(env) == expected


def test_unknown_deprecate_mode_is_rejected():
    with pytest.raises(ValueError, match="deprecate must be one of"):
        DebugConfig.from_env({"BATTERIES_DEPRECATE": "loud"})
    with pytest.raises(ValueError):
        batteries_config.configure(deprecate="loud")


def test_configure_overrides_and_reset_restores(monkeypatch):
    monkeypatch.setenv("BATTERIES_ARGCHECK", "0")
    batteries_config.reset()
    assert batteries_config.get_config().argcheck is False

    batteries_config.configure(argcheck=True, debug=True)
    assert batteries_config.get_config() == DebugConfig(debug=True, argcheck=True)

    batteries_config.reset()
    assert batteries_config.get_config().argcheck is False


def test_config_is_frozen():
    with pytest.raises(AttributeError):
        batteries_config.get_config().debug = True
