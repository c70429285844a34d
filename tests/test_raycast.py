import pytest

from cubview.raycast import TEX_WIDTH, Camera, cast_all, cast_ray
from cubview.scene import find_player

ROOM_TEMPLATE = ("11111", "10001", "10{}01", "10001", "11111")
ROOM = tuple(row.format("N") for row in ROOM_TEMPLATE)


def camera_in(rows):
    return Camera.from_start(find_player(rows))


def test_from_start_copies_vectors():
    start = find_player(ROOM)
    cam = Camera.from_start(start)
    assert (cam.pos_x, cam.pos_y, cam.dir_x, cam.dir_y, cam.plane_x, cam.plane_y) == (
        start.pos_x,
        start.pos_y,
        start.dir_x,
        start.dir_y,
        start.plane_x,
        start.plane_y,
    )


def test_centre_ray_facing_north_hits_top_wall():
    cam = camera_in(ROOM)
    hit = cast_ray(ROOM, cam, 256, 512, 512)
    assert hit.side == 1
    assert (hit.map_x, hit.map_y) == (2, 0)
    assert hit.tex_num == 0
    assert hit.perp_wall_dist == pytest.approx(cam.pos_y - (hit.map_y + 1))


@pytest.mark.parametrize("facing, tex_num", [("N", 0), ("E", 1), ("S", 2), ("W", 3)])
def test_texture_follows_facing(facing, tex_num):
    rows = tuple(row.format(facing) for row in ROOM_TEMPLATE)
    hit = cast_ray(rows, camera_in(rows), 256, 512, 512)
    assert hit.tex_num == tex_num


def test_every_column_hits_a_wall_within_bounds():
    cam = camera_in(ROOM)
    hits = cast_all(ROOM, cam, 512, 512)
    assert len(hits) == 512
    for index, hit in enumerate(hits):
        assert hit.column == index
        assert ROOM[hit.map_y][hit.map_x] == "1"
        assert hit.line_height == int(512 / hit.perp_wall_dist)
        assert 0 <= hit.draw_start <= hit.draw_end <= 511
        assert 0 <= hit.tex_x < TEX_WIDTH
        assert 0 <= hit.wall_x < 1


def test_symmetric_room_gives_symmetric_distances():
    cam = camera_in(ROOM)
    hits = cast_all(ROOM, cam, 512, 512)
    for offset in (1, 64, 200):
        assert hits[offset].perp_wall_dist == pytest.approx(hits[512 - offset].perp_wall_dist)


def test_ray_leaving_the_grid_stops_on_first_cell_outside():
    grid = ("000", "000", "000")
    cam = Camera(1.5, 1.5, 0.0, -1.0, 0.66, 0.0)
    hit = cast_ray(grid, cam, 100, 512, 512)
    # The ray heads up and to the left: it steps to row 0, then column 0,
    # then leaves the grid through the top edge.
    assert (hit.map_x, hit.map_y) == (0, -1)
    assert hit.side == 1
    assert hit.column == 100