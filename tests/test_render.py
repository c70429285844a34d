import pytest

from cubview.raycast import TEX_HEIGHT, TEX_WIDTH, Camera, cast_ray
from cubview.render import (
    PLAYER_COLOR,
    WALKABLE_COLOR,
    WALL_COLOR,
    Frame,
    draw_ceiling,
    draw_floor,
    draw_minimap,
    draw_texture_stripe,
    render_scene,
)
from cubview.scene import find_player

ROOM_TEMPLATE = ("11111", "10001", "10{}01", "10001", "11111")


def room(facing):
    return tuple(row.format(facing) for row in ROOM_TEMPLATE)


def camera_in(rows):
    return Camera.from_start(find_player(rows))


def uniform(color):
    return [color] * (TEX_WIDTH * TEX_HEIGHT)


def test_new_frame_is_black():
    frame = Frame(6, 4)
    assert len(frame.pixels) == 24
    assert all(p == 0 for p in frame.pixels)


def test_put_get_round_trip():
    frame = Frame(6, 4)
    frame.put_pixel(5, 3, 0x123456)
    assert frame.get_pixel(5, 3) == 0x123456
    assert frame.get_pixel(4, 3) == 0


@pytest.mark.parametrize("x, y", [(-1, 0), (6, 0), (0, 4), (0, -1)])
def test_out_of_bounds_raises(x, y):
    frame = Frame(6, 4)
    with pytest.raises(IndexError):
        frame.put_pixel(x, y, 1)
    with pytest.raises(IndexError):
        frame.get_pixel(x, y)


def test_invalid_size_raises():
    with pytest.raises(ValueError):
        Frame(0, 10)


def test_floor_and_ceiling_halves():
    frame = Frame(8, 8)
    draw_floor(frame, 0xAA)
    assert all(frame.get_pixel(x, y) == 0xAA for x in range(8) for y in range(4, 8))
    assert all(frame.get_pixel(x, y) == 0 for x in range(8) for y in range(4))
    draw_ceiling(frame, 0xBB)
    assert all(frame.get_pixel(x, y) == 0xBB for x in range(8) for y in range(4))
    assert all(frame.get_pixel(x, y) == 0xAA for x in range(8) for y in range(4, 8))


def test_stripe_on_y_side_is_shaded():
    rows = room("N")
    hit = cast_ray(rows, camera_in(rows), 256, 512, 512)
    assert hit.side == 1
    frame = Frame(512, 512)
    draw_texture_stripe(frame, 256, hit, uniform(0x00FEFEFE))
    for y in range(512):
        expected = 0x007F7F7F if hit.draw_start <= y < hit.draw_end else 0
        assert frame.get_pixel(256, y) == expected


def test_stripe_on_x_side_keeps_colour():
    rows = room("E")
    hit = cast_ray(rows, camera_in(rows), 256, 512, 512)
    assert hit.side == 0
    frame = Frame(512, 512)
    draw_texture_stripe(frame, 10, hit, uniform(0x00123456))
    drawn = [frame.get_pixel(10, y) for y in range(hit.draw_start, hit.draw_end)]
    assert drawn and all(p == 0x00123456 for p in drawn)
    assert frame.get_pixel(11, hit.draw_start) == 0


def test_stripe_walks_down_the_texture():
    rows = room("E")
    hit = cast_ray(rows, camera_in(rows), 256, 512, 512)
    texture = [y for y in range(TEX_HEIGHT) for _ in range(TEX_WIDTH)]
    frame = Frame(512, 512)
    draw_texture_stripe(frame, 0, hit, texture)
    drawn = [frame.get_pixel(0, y) for y in range(hit.draw_start, hit.draw_end)]
    assert drawn == sorted(drawn)
    assert drawn[0] >= 0 and drawn[-1] <= TEX_HEIGHT - 1


def test_stripe_rejects_small_texture():
    rows = room("N")
    hit = cast_ray(rows, camera_in(rows), 256, 512, 512)
    with pytest.raises(ValueError):
        draw_texture_stripe(Frame(512, 512), 0, hit, [0] * 10)


def test_minimap_cells():
    grid = ("111", "1N0 ", "111")
    cam = Camera(1.5, 1.5, 0.0, -1.0, 0.66, 0.0)
    frame = Frame(512, 512)
    draw_ceiling(frame, 0x123456)
    draw_minimap(frame, grid, cam)
    assert frame.get_pixel(0, 0) == WALL_COLOR
    assert frame.get_pixel(5, 5) == PLAYER_COLOR
    assert frame.get_pixel(10, 5) == WALKABLE_COLOR
    assert frame.get_pixel(15, 5) == 0x123456


def test_minimap_clips_wide_maps():
    grid = ("1" * 200,)
    frame = Frame(512, 512)
    draw_minimap(frame, grid, Camera(50.5, 50.5, 0.0, -1.0, 0.66, 0.0))
    assert frame.get_pixel(511, 0) == WALL_COLOR


def test_render_scene_matches_parts():
    rows = room("N")
    cam = camera_in(rows)
    textures = [uniform(c) for c in (0x010101, 0x020202, 0x040404, 0x080808)]
    frame = render_scene(Frame(512, 512), rows, cam, textures, 0x00AA00, 0x0000BB)
    assert frame.get_pixel(256, 0) == 0x0000BB
    assert frame.get_pixel(256, 511) == 0x00AA00
    assert frame.get_pixel(0, 0) == WALL_COLOR
    hit = cast_ray(rows, cam, 256, 512, 512)
    single = Frame(512, 512)
    draw_texture_stripe(single, 256, hit, textures[hit.tex_num])
    for y in range(hit.draw_start, hit.draw_end):
        assert frame.get_pixel(256, y) == single.get_pixel(256, y)


def test_render_scene_needs_four_textures():
    rows = room("N")
    with pytest.raises(ValueError):
        render_scene(Frame(512, 512), rows, camera_in(rows), [uniform(0)], 0, 0)