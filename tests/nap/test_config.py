import os
from unittest import mock

from nap.config import EnvironmentValue, lookup


def test_lookup_first_name():
    v = lookup({"FOO": "bar", "foo": "baz"}, "FOO", "foo")
    assert v == EnvironmentValue("FOO", "bar")
    assert str(v) == "bar"


def test_lookup_fallback():
    v = lookup({"foo": "baz"}, "FOO", "foo")
    assert v.name == "foo"
    assert v.value == "baz"


def test_lookup_skips_empty_values():
    v = lookup({"FOO": "", "foo": "baz"}, "FOO", "foo")
    assert v.name == "foo"


def test_lookup_missing():
    assert lookup({}, "FOO", "foo") is None


@mock.patch.dict(os.environ, {"FOO": "bar"})
def test_lookup_process_environment():
    v = lookup(os.environ, "FOO")
    assert v.name == "FOO"
    assert v.value == "bar"
