import pytest

from cubview.xpm import (
    XpmError,
    XpmImage,
    extract_strings,
    load_xpm,
    parse_xpm,
    split_words,
    strip_comments,
)

SAMPLE = [
    "2 2 2 1",
    "a c #FF0000",
    "b c blue",
    "ab",
    "ba",
]


def test_split_words_spaces_and_tabs():
    assert split_words("  a  b\tc ") == ["a", "b", "c"]


def test_split_words_keeps_newlines_in_words():
    assert split_words("a\nb c") == ["a\nb", "c"]


def test_strip_comments_keeps_length_and_removes_block():
    text = 'x /* gone */ "kept"'
    result = strip_comments(text)
    assert len(result) == len(text)
    assert "gone" not in result
    assert '"kept"' in result


def test_strip_comments_ignores_markers_inside_quotes():
    text = '"a /* b */ c" "d // e"'
    assert strip_comments(text) == text


def test_strip_comments_line_comment_removes_newline():
    result = strip_comments('"x" // note\n"y"')
    assert "note" not in result
    assert "\n" not in result
    assert extract_strings(result) == ["x", "y"]


def test_extract_strings_in_order():
    assert extract_strings('static char *x[] = {"1 2", "ab",\n"cd"};') == ["1 2", "ab", "cd"]


def test_parse_xpm_basic_image():
    image = parse_xpm(SAMPLE)
    assert (image.width, image.height) == (2, 2)
    assert image.pixel(0, 0) == 0xFF0000
    assert image.pixel(1, 0) == image.pixel(0, 1)
    assert image.pixel(1, 1) == image.pixel(0, 0)
    assert len(image.pixels) == image.width * image.height


def test_parse_xpm_named_colour_of_two_words():
    image = parse_xpm(["1 1 1 1", "x c light blue", "x"])
    assert image.pixel(0, 0) == parse_xpm(["1 1 1 1", "x c lightblue", "x"]).pixel(0, 0)


def test_parse_xpm_none_is_transparent():
    image = parse_xpm(["1 1 1 1", ". c None", "."])
    assert image.pixel(0, 0) == 0xFF000000


def test_parse_xpm_three_chars_per_pixel():
    image = parse_xpm(["2 1 2 3", "aaa c #00FF00", "bbb c #0000FF", "bbbaaa"])
    assert image.pixels == (0x0000FF, 0x00FF00)


def test_parse_xpm_unknown_key_is_black():
    image = parse_xpm(["1 1 1 1", "a c #123456", "z"])
    assert image.pixel(0, 0) == 0


@pytest.mark.parametrize(
    "data",
    [
        ["0 2 1 1", "a c red", "a", "a"],
        ["2 2 1"],
        [],
        ["1 1 1 1", "a red", "a"],
        ["1 1 1 1", "a c", "a"],
        ["1 2 1 1", "a c red", "a"],
        ["2 1 1 1", "a c red", "a"],
    ],
)
def test_parse_xpm_errors(data):
    with pytest.raises(XpmError):
        parse_xpm(data)


def test_pixel_out_of_range():
    image = XpmImage(1, 1, (0,))
    with pytest.raises(IndexError):
        image.pixel(1, 0)


def test_load_xpm_from_file(tmp_path):
    path = tmp_path / "wall.xpm"
    body = ",\n".join(f'"{line}"' for line in SAMPLE)
    path.write_text(
        "/* XPM */\nstatic char *wall[] = {\n/* columns rows colors */\n"
        + body
        + "\n};\n// end\n"
    )
    assert load_xpm(path) == parse_xpm(SAMPLE)


def test_load_xpm_missing_file(tmp_path):
    with pytest.raises(XpmError):
        load_xpm(tmp_path / "missing.xpm")