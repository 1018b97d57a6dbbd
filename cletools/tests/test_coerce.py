import pytest

from cletools.app.domain.tools.coerce import (
    parse_bool,
    parse_positive_int,
    parse_str,
    parse_str_list,
)


def test_parse_str():
    assert parse_str("http://cle") == "http://cle"
    assert parse_str(12345) == "12345"
    assert parse_str("") == ""
    with pytest.raises(TypeError):
        parse_str({"url": "x"})


@pytest.mark.parametrize("value, expected", [(100, 100), ("  42 ", 42), (640.0, 640)])
def test_parse_positive_int(value, expected):
    assert parse_positive_int(value) == expected


@pytest.mark.parametrize("value", [0, -1, "0", "abc", 10.5, True, None, [100]])
def test_parse_positive_int_rejects(value):
    with pytest.raises((TypeError, ValueError)):
        parse_positive_int(value)


@pytest.mark.parametrize(
    "value, expected",
    [(True, True), (False, False), ("true", True), (" FALSE ", False), ("True", True)],
)
def test_parse_bool(value, expected):
    assert parse_bool(value) is expected


@pytest.mark.parametrize("value", ["yes", "", 0, 1, None])
def test_parse_bool_rejects(value):
    with pytest.raises((TypeError, ValueError)):
        parse_bool(value)


def test_parse_str_list_from_sequence():
    assert parse_str_list(["sakai.chat", None, "sakai.poll"]) == ("sakai.chat", "sakai.poll")
    assert parse_str_list(("sakai.poll",)) == ("sakai.poll",)
    assert parse_str_list([]) == ()


def test_parse_str_list_from_string():
    assert parse_str_list("sakai.chat") == ("sakai.chat",)
    assert parse_str_list(" sakai.chat ,, sakai.poll ") == ("sakai.chat", "sakai.poll")


def test_parse_str_list_rejects():
    with pytest.raises(TypeError):
        parse_str_list(["sakai.chat", 3])
    with pytest.raises(TypeError):
        parse_str_list({"sakai.chat": True})
