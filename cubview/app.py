"""The interactive viewer: input state, per-frame update and the window loop."""

from __future__ import annotations

import enum
import sys
from dataclasses import dataclass, field
from typing import Optional, Sequence

from cubview.movement import (
    move_backward,
    move_forward,
    rotate,
    strafe_left,
    strafe_right,
)
from cubview.raycast import SCREEN_HEIGHT, SCREEN_WIDTH, Camera
from cubview.render import Frame, render_scene
from cubview.scene import Scene, SceneError, parse_scene
from cubview.textures import load_textures
from cubview.xpm import XpmError

FRAME_TIME = 16 / 1000.0
MOVE_SPEED = FRAME_TIME * 5.0
ROT_SPEED = FRAME_TIME * 3.0
WINDOW_TITLE = "cub3D"


class Key(enum.IntEnum):
    """Keys the viewer reacts to."""

    A = 0
    S = 1
    D = 2
    W = 13
    P = 35
    ESC = 53
    LEFT = 123
    RIGHT = 124
    DOWN = 125
    UP = 126


_HELD_KEYS = frozenset({Key.W, Key.S, Key.A, Key.D, Key.LEFT, Key.RIGHT})


@dataclass
class Game:
    """Everything the viewer needs to draw and update one frame."""

    grid: Sequence[str]
    camera: Camera
    textures: Sequence[Sequence[int]]
    floor: int = 0
    ceiling: int = 0
    move_speed: float = MOVE_SPEED
    rot_speed: float = ROT_SPEED
    held: set = field(default_factory=set)
    mouse_enabled: bool = True
    running: bool = True

    @classmethod
    def from_scene(cls, scene: Scene) -> "Game":
        """Load a scene's textures and place the camera at its start."""
        return cls(
            grid=scene.rows,
            camera=Camera.from_start(scene.start),
            textures=load_textures(scene.textures),
            floor=scene.floor,
            ceiling=scene.ceiling,
        )

    def key_press(self, key: Key) -> None:
        """Record a key going down; ESC stops the game, P toggles mouse look."""
        if key == Key.ESC:
            self.running = False
        elif key == Key.P:
            self.mouse_enabled = not self.mouse_enabled
        elif key in _HELD_KEYS:
            self.held.add(key)

    def key_release(self, key: Key) -> None:
        """Record a key going up."""
        self.held.discard(key)

    def apply_keys(self) -> None:
        """Move and turn according to the keys held down."""
        if Key.W in self.held:
            move_forward(self.camera, self.grid, self.move_speed)
        if Key.S in self.held:
            move_backward(self.camera, self.grid, self.move_speed)
        if Key.A in self.held:
            strafe_left(self.camera, self.grid, self.move_speed)
        if Key.D in self.held:
            strafe_right(self.camera, self.grid, self.move_speed)
        if Key.LEFT in self.held:
            rotate(self.camera, -self.rot_speed)
        if Key.RIGHT in self.held:
            rotate(self.camera, self.rot_speed)

    def mouse_look(self, mouse_x: int) -> None:
        """Turn towards the side of the screen centre the pointer is on."""
        if not self.mouse_enabled:
            return
        centre = SCREEN_WIDTH // 2
        if mouse_x > centre:
            rotate(self.camera, self.rot_speed)
        if mouse_x < centre:
            rotate(self.camera, -self.rot_speed)

    def render(self) -> Frame:
        """Draw the current view into a new frame."""
        return render_scene(
            Frame(SCREEN_WIDTH, SCREEN_HEIGHT),
            self.grid,
            self.camera,
            self.textures,
            self.floor,
            self.ceiling,
        )


def _fail(message: str) -> int:
    sys.stderr.write(f"Error\n{message}\n")
    return 1


def _frame_bytes(frame: Frame) -> bytes:
    # Pixels are 0xAARRGGBB words; present them as A, R, G, B bytes.
    words = frame.pixels
    if sys.byteorder == "little":
        words = type(words)(words.typecode, words)
        words.byteswap()
    return words.tobytes()


def _run(game: Game) -> None:
    import pygame

    key_map = {
        pygame.K_w: Key.W,
        pygame.K_s: Key.S,
        pygame.K_a: Key.A,
        pygame.K_d: Key.D,
        pygame.K_LEFT: Key.LEFT,
        pygame.K_RIGHT: Key.RIGHT,
        pygame.K_UP: Key.UP,
        pygame.K_DOWN: Key.DOWN,
        pygame.K_p: Key.P,
        pygame.K_ESCAPE: Key.ESC,
    }
    pygame.init()
    try:
        screen = pygame.display.set_mode((SCREEN_WIDTH, SCREEN_HEIGHT))
        pygame.display.set_caption(WINDOW_TITLE)
        clock = pygame.time.Clock()
        while game.running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    game.running = False
                elif event.type == pygame.KEYDOWN and event.key in key_map:
                    game.key_press(key_map[event.key])
                elif event.type == pygame.KEYUP and event.key in key_map:
                    game.key_release(key_map[event.key])
                elif event.type == pygame.MOUSEMOTION:
                    game.mouse_look(event.pos[0])
                    if game.mouse_enabled:
                        pygame.mouse.set_pos(SCREEN_WIDTH // 2, event.pos[1] // 2)
            if not game.running:
                break
            pygame.mouse.set_visible(not game.mouse_enabled)
            frame = game.render()
            surface = pygame.image.frombuffer(
                _frame_bytes(frame), (frame.width, frame.height), "ARGB"
            ).convert()
            screen.blit(surface, (0, 0))
            pygame.display.flip()
            game.apply_keys()
            clock.tick(1000 / 16)
    finally:
        pygame.quit()


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Open the scene named on the command line and run the viewer."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) != 1:
        sys.stdout.write("Error\nMap not provided\n")
        return 1
    try:
        scene = parse_scene(args[0])
    except SceneError as exc:
        return _fail(str(exc))
    try:
        game = Game.from_scene(scene)
    except (XpmError, ValueError):
        return _fail("Cannot load textures")
    _run(game)
    return 0


if __name__ == "__main__":
    sys.exit(main())