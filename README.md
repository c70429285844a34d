# cubview

A small first-person maze viewer. It reads a `.cub` scene file that names four
wall textures (XPM images), a floor colour, a ceiling colour and a grid map.
It then opens a 512x512 window titled `cub3D` where you can walk around the
maze. The view is ray-cast and textured, and a minimap is drawn in the
top-left corner.

## Installing

```
pip install .
```

The window is drawn with pygame, which is installed as a dependency.

## Running

```
cubview path/to/scene.cub
```

Exactly one argument is expected. Without it, `Error` and `Map not provided`
are printed and the exit status is 1.

If the scene cannot be used, `Error` and a reason are printed to standard
error and the exit status is 1. The possible reasons are:

* `Invalid extension`: the file name does not end in `.cub`.
* `Cannot open the map`: the file cannot be read.
* `Invalid information`: a texture or colour line is malformed or unknown.
* `Cannot load textures`: a texture entry is missing, or an XPM file cannot be
  read or decoded.
* `Cannot load colors`: a colour is not three values from 0 to 255.
* `Invalid map`: the map is malformed, as described under "Scene files".

### Controls

| Key            | Action                           |
|----------------|----------------------------------|
| W / S          | move forward / backward          |
| A / D          | strafe left / right              |
| Left / Right   | turn                             |
| P              | toggle mouse look (on at start)  |
| Esc            | quit                             |

Closing the window also quits.

While mouse look is on, the pointer is hidden. Moving it to the right of the
window centre turns the view right, and moving it to the left turns it left.
The pointer is then put back at the centre.

Movement checks the x and y axes separately, so you slide along walls instead
of stopping dead against them.

## Scene files

```
NO ./textures/north.xpm
EA ./textures/east.xpm
SO ./textures/south.xpm
WE ./textures/west.xpm
F 220,100,0
C 225,30,0

111111
100101
1000N1
111111
```

* `NO`, `EA`, `SO` and `WE` give the XPM texture for each wall face.
* `F` and `C` give the floor and ceiling colours as `R,G,B`, each from 0 to 255.
* Each of these lines holds exactly two space-separated fields. They may come
  in any order, with empty lines between them.
* The map follows the information lines. Empty lines before it are skipped.
  The map ends at its first empty row, and only empty rows may follow it.
* The map uses `1` for walls, `0` for open floor and spaces for void. It has
  exactly one of `N`, `S`, `E` or `W`, which marks where the player starts and
  which way they face.
* The map needs at least three rows. Every open cell must be enclosed: it must
  not lie on the map's edge or next to a space or the end of a shorter row.

Textures are sampled as 64x64 images.

## Using it as a library

```python
from cubview.scene import parse_scene
from cubview.raycast import Camera, cast_all
from cubview.render import Frame, render_scene
from cubview.textures import load_textures

scene = parse_scene("maze.cub")
camera = Camera.from_start(scene.start)
hits = cast_all(scene.rows, camera, 512, 512)

frame = render_scene(
    Frame(512, 512),
    scene.rows,
    camera,
    load_textures(scene.textures),
    scene.floor,
    scene.ceiling,
)
```

Modules:

* `cubview.scene`: `parse_scene` returns a `Scene` with `textures`, `floor`,
  `ceiling`, `rows` and `start` (a `PlayerStart`). It raises `SceneError` when
  the scene is invalid.
* `cubview.raycast`: the `Camera` class; `cast_ray` and `cast_all` return
  `RayHit` records.
* `cubview.render`: the `Frame` class, a pixel buffer in `0xAARRGGBB` form,
  together with `draw_floor`, `draw_ceiling`, `draw_texture_stripe`,
  `draw_minimap` and `render_scene`.
* `cubview.movement`: `move_forward`, `move_backward`, `strafe_left`,
  `strafe_right` and `rotate`.
* `cubview.xpm`: `load_xpm` and `parse_xpm` decode XPM images into an
  `XpmImage`, and raise `XpmError` on bad data.
* `cubview.textures`: `load_textures` and `texture_from_image` turn images into
  64x64 texture buffers.
* `cubview.colornames`: `lookup_color` maps X11 colour names to `0xRRGGBB`
  values, ignoring case.
* `cubview.app`: the `Game` state and `main`, which is the `cubview` command.

## What it does not do

cubview is only a viewer. It has no sprites, doors, sound, enemies or saved
state. The only image format it reads is XPM.