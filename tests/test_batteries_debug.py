import warnings

import pytest

from batteries import batteries_config
from batteries.batteries_datatypes import ContractViolation
from batteries.batteries_debug import (
    argerror, deprecated, deprecation_message, export, trace,
)
from batteries.batteries_signature import Signature


# --- trace ---

def test_trace_is_silent_by_default(capsys):
    trace("hello", 1)
    assert capsys.readouterr().err == ""


def test_trace_writes_to_stderr_when_enabled(capsys):
    batteries_config.configure(debug=True)
    trace("hello", 1)
    captured = capsys.readouterr()
    assert captured.err == "[DBG] hello 1\n"
    assert captured.out == ""


def test_trace_follows_the_environment(monkeypatch, capsys):
    monkeypatch.setenv("BATTERIES_DEBUG", "1")
    batteries_config.reset()
    trace("from env")
    assert "[DBG] from env" in capsys.readouterr().err


# --- argerror ---

def test_argerror_message():
    with pytest.raises(ContractViolation) as excinfo:
        argerror("sub", 2, "int", "string")
    assert str(excinfo.value) == "bad argument #2 to 'sub' (int expected, got string)"


# --- export ---

@export("pair (int, string?)")
def pair(n, s=None):
    """Makes a pair."""
    return (n, s)


def test_export_passes_good_arguments_through():
    assert pair(1, "a") == (1, "a")
    assert pair(1) == (1, None)


def test_export_preserves_the_wrapped_function():
    assert pair.__name__ == "pair"
    assert pair.__doc__ == "Makes a pair."
    assert isinstance(pair.signature, Signature)
    assert str(pair.signature) == "pair (int, string?)"


def test_export_rejects_bad_arguments():
    with pytest.raises(ContractViolation, match=r"bad argument #1 to 'pair' \(int expected, got string\)"):
        pair("1")
    with pytest.raises(ContractViolation, match="too many arguments to 'pair'"):
        pair(1, "a", "b")


def test_export_is_inert_without_argcheck():
    batteries_config.configure(argcheck=False)
    assert pair("1") == ("1", None)


def test_export_traces_failures(capsys):
    batteries_config.configure(debug=True)
    with pytest.raises(ContractViolation):
        pair(None)
    assert "[DBG] argcheck: bad argument #1 to 'pair'" in capsys.readouterr().err


def test_export_rejects_malformed_declarations():
    with pytest.raises(ValueError):
        export("pair int")


# --- deprecation ---

def test_deprecation_message_without_hint():
    assert deprecation_message("41", "'old'") == (
        "'old' was deprecated in release 41, and will be removed entirely in a future release."
    )


def test_deprecation_message_with_hint():
    assert deprecation_message("38", "'old'", "use 'new' instead") == (
        "'old' was deprecated in release 38, and will be removed entirely "
        "in a future release, use 'new' instead."
    )


def test_deprecation_message_does_not_escape():
    assert "<new> & 'friends'" in deprecation_message("1", "x", "use <new> & 'friends'")


def double(x):
    return x * 2


def test_deprecated_forwards_and_keeps_the_signature():
    shim = deprecated("41", "'double_old'", double)
    assert shim.__name__ == "double"
    assert shim.__wrapped__ is double
    assert shim.deprecated_in == "41"
    assert shim.legacy_name == "'double_old'"
    with pytest.warns(DeprecationWarning):
        assert shim(4) == 8


def test_deprecated_warns_once_per_name():
    first = deprecated("41", "'twice'", double)
    second = deprecated("41", "'twice'", double)
    other = deprecated("41", "'other'", double)
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        first(1)
        first(2)
        second(3)
        other(4)
    assert [str(w.message).split()[0] for w in caught] == ["'twice'", "'other'"]


def test_deprecated_traces_the_advisory(capsys):
    batteries_config.configure(debug=True)
    shim = deprecated("41", "'traced'", double)
    with pytest.warns(DeprecationWarning):
        shim(1)
    assert "[DBG] deprecated: 'traced' was deprecated" in capsys.readouterr().err


def test_deprecated_off_is_silent():
    batteries_config.configure(deprecate="off")
    shim = deprecated("41", "'quiet'", double)
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        assert shim(5) == 10


def test_deprecated_error_refuses_the_call():
    batteries_config.configure(deprecate="error")
    calls = []
    shim = deprecated("41", "'gone'", calls.append, "use 'list.append' instead")
    with pytest.raises(ContractViolation, match="'gone' was deprecated in release 41"):
        shim(1)
    assert calls == []


def test_deprecated_error_mode_follows_the_environment(monkeypatch):
    monkeypatch.setenv("BATTERIES_DEPRECATE", "error")
    batteries_config.reset()
    with pytest.raises(ContractViolation):
        deprecated("41", "'gone'", double)(1)
