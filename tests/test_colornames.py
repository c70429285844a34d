import pytest

from cubview.colornames import COLOR_NAMES, lookup_color


@pytest.mark.parametrize(
    "name, expected",
    [
        ("red", 0xFF0000),
        ("snow", 0xFFFAFA),
        ("navy", 0x80),
        ("gray50", 0x7F7F7F),
        ("thistle4", 0x8B7B8B),
        ("lightgreen", 0x90EE90),
    ],
)
def test_known_names(name, expected):
    assert lookup_color(name) == expected


def test_lookup_ignores_case():
    assert lookup_color("RED") == lookup_color("red")
    assert lookup_color("Ghost White") == lookup_color("ghost white")


def test_none_is_transparent():
    assert lookup_color("none") == -1
    assert lookup_color("NONE") == -1


def test_first_duplicate_wins():
    assert lookup_color("dark slate") == 0x2F4F4F
    assert lookup_color("light slate") == 0x778899
    assert lookup_color("light goldenrod") == 0xFAFAD2


def test_spelling_variants_agree():
    assert lookup_color("navy blue") == lookup_color("navyblue") == lookup_color("navy")
    assert lookup_color("dim gray") == lookup_color("dimgrey")


@pytest.mark.parametrize("level", [0, 1, 25, 50, 99, 100])
def test_gray_and_grey_levels_match(level):
    assert lookup_color(f"gray{level}") == lookup_color(f"grey{level}")


def test_grey_levels_are_neutral_and_increasing():
    values = [lookup_color(f"gray{level}") for level in range(101)]
    assert values == sorted(values)
    assert values[0] == lookup_color("black")
    assert values[100] == lookup_color("white")
    for value in values:
        assert value == (value & 0xFF) * 0x010101


def test_all_values_are_rgb_or_transparent():
    for name, value in COLOR_NAMES.items():
        assert name == name.lower()
        assert value == -1 or 0 <= value <= 0xFFFFFF


def test_unknown_name_raises():
    with pytest.raises(KeyError):
        lookup_color("not a colour")


def test_empty_name_raises():
    with pytest.raises(KeyError):
        lookup_color("")