import pytest
from tls_config import OptionList


def test_first_occurrence_wins():
    opts = OptionList([("verify", "none"), ("certfile", "/c.pem"), ("verify", "required")])
    assert opts.get("verify") == "none"
    assert opts.get_all("verify") == ["none", "required"]
    assert opts.as_dict() == {"verify": "none", "certfile": "/c.pem"}


def test_missing_key_default():
    opts = OptionList([("A", 1)])
    assert opts.get("B") is None
    assert opts.get("B", 5) == 5
    assert "A" in opts
    assert "B" not in opts


def test_get_first_checks_keys_in_order():
    opts = OptionList([("ca_bundle", "/bundle.pem"), ("cafile", None)])
    # A present key with a None value still counts
    assert opts.get_first("cafile", "ca_bundle") is None
    assert opts.get_first("capath", "ca_bundle") == "/bundle.pem"
    assert opts.get_first("x", "y", default="d") == "d"


def test_concatenation_keeps_duplicates_and_order():
    extra = OptionList([("A", 9)])
    merged = extra + [("A", 1), ("B", 2)]
    assert list(merged) == [("A", 9), ("A", 1), ("B", 2)]
    assert merged.keys() == ["A", "B"]
    assert len(merged) == 3
    # Operands are untouched
    assert list(extra) == [("A", 9)]


def test_pop_removes_every_occurrence():
    opts = OptionList([("enabled", True), ("A", 1), ("enabled", False)])
    value, rest = opts.pop("enabled", False)
    assert value is True
    assert rest == [("A", 1)]


def test_coerce_forms():
    assert OptionList.coerce(None) == OptionList()
    assert OptionList.coerce({"A": 1, "B": 2}) == [("A", 1), ("B", 2)]
    assert OptionList.coerce([["A", 1]]) == [("A", 1)]
    same = OptionList([("A", 1)])
    assert OptionList.coerce(same) is same


@pytest.mark.parametrize("bad", ["A=1", [("A",)], [(1, "x")], [42]])
def test_invalid_entries_rejected(bad):
    with pytest.raises(TypeError):
        OptionList.coerce(bad)


def test_empty_is_falsy():
    assert not OptionList()
    assert OptionList([("A", 1)])
