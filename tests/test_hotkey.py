import pytest

from qpmu.hotkey import Hotkey, Key, Modifiers, hotkey_from_key_event, key_from_name


def test_key_values_fixed_by_wire_format():
    assert key_from_name("0") == 0
    assert key_from_name("A") == 10
    assert key_from_name("F24") == 59
    assert key_from_name("slash") == 72


def test_key_values_are_contiguous():
    decoded = [Hotkey.from_dict({"key": value}).key for value in range(len(Key))]
    assert [int(k) for k in decoded] == list(range(len(Key)))
    assert set(decoded) == set(Key)


@pytest.mark.parametrize("digit", range(10))
def test_digit_names(digit):
    assert key_from_name(str(digit)) is Key[f"DIGIT_{digit}"]


@pytest.mark.parametrize(
    ("name", "key"),
    [
        ("A", Key.A),
        ("Z", Key.Z),
        ("F12", Key.F12),
        ("Return", Key.ENTER),
        ("grave", Key.BACKTICK),
        ("bracketleft", Key.LEFT_BRACKET),
        ("slash", Key.SLASH),
    ],
)
def test_known_names(name, key):
    assert key_from_name(name) is key


def test_unknown_name():
    assert key_from_name("Escape") is None


def test_hotkey_requires_ctrl_alt_or_super():
    assert hotkey_from_key_event("A", False, False, True, False) is None
    assert hotkey_from_key_event("A", False, False, False, False) is None


def test_hotkey_from_event():
    hk = hotkey_from_key_event("A", True, False, True, False)
    assert hk == Hotkey(Key.A, Modifiers(ctrl=True, shift=True))


def test_hotkey_super_alone_is_enough():
    hk = hotkey_from_key_event("Return", False, False, False, True)
    assert hk == Hotkey(Key.ENTER, Modifiers(super_=True))


def test_hotkey_unknown_key():
    assert hotkey_from_key_event("Escape", True, True, False, False) is None


def test_dict_round_trip():
    hk = Hotkey(Key.F5, Modifiers(ctrl=True, alt=True, super_=True))
    assert Hotkey.from_dict(hk.to_dict()) == hk


def test_to_dict_uses_numeric_key():
    data = Hotkey(Key.A, Modifiers(alt=True)).to_dict()
    assert data["key"] == 10
    assert data["modifiers"] == {"ctrl": False, "alt": True, "shift": False, "super": False}


def test_from_dict_missing_modifiers():
    assert Hotkey.from_dict({"key": 72}) == Hotkey(Key.SLASH, Modifiers())


def test_from_dict_bad_key():
    with pytest.raises(ValueError):
        Hotkey.from_dict({"key": 1000})