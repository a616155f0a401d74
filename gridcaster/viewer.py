from __future__ import annotations
import logging
import pygame
from typing import Optional

from .camera import CameraState, update_camera
from .config import (
    SCREEN_WIDTH,
    SCREEN_HEIGHT,
    FPS,
    FOV,
    CONTROL_MODE,
    KEY_REPEAT_DELAY,
    KEY_REPEAT_INTERVAL,
)
from .grid import Grid, load_grid
from .input_handler import InputHandler
from .projector import Projection, project_scene
from .renderer import Renderer, window_size

logger = logging.getLogger(__name__)


class Viewer:
    """Main viewer class: owns the window and the single update/render loop."""

    def __init__(
        self,
        grid: Optional[Grid] = None,
        control_mode: str = CONTROL_MODE,
        clock: Optional[pygame.time.Clock] = None,
        input_handler: Optional[InputHandler] = None,
    ) -> None:
        # Grid is fixed for the whole session
        self.grid = grid if grid is not None else load_grid()
        self.screen_width = SCREEN_WIDTH
        self.screen_height = SCREEN_HEIGHT
        self.fov = FOV
        self.fps = FPS
        pygame.init()
        # Held keys send repeated key presses, as browser keydown events do
        pygame.key.set_repeat(KEY_REPEAT_DELAY, KEY_REPEAT_INTERVAL)
        # Window holds the view with the minimap to its right
        self.screen = pygame.display.set_mode(
            window_size(self.grid, self.screen_width, self.screen_height),
            pygame.OPENGL | pygame.DOUBLEBUF,
        )
        pygame.display.set_caption("gridcaster")
        # Renderer needs the GL context created by set_mode
        self.renderer = Renderer(
            self.screen_width, self.screen_height, self.grid, fov=self.fov
        )
        # Clock for frame rate (injectable for testing)
        self.clock = clock or pygame.time.Clock()
        self.input = input_handler or InputHandler(control_mode)
        self.camera = CameraState.centered(self.grid)
        self.projection: Optional[Projection] = None
        self.running = True
        logger.info(
            "Viewer started on %r with %s controls", self.grid, self.input.mode
        )

    def update(self, dt: float) -> None:
        """Poll input and advance the camera by one frame."""
        self.input.process_events()
        if self.input.should_quit():
            self.running = False
            return
        self.camera = update_camera(self.camera, self.input.controls(dt))

    def render(self) -> None:
        """Project the current pose and draw it."""
        # CameraState is immutable, so this reference is the frame's snapshot
        camera = self.camera
        self.projection = project_scene(
            self.grid, camera, self.screen_width, self.screen_height, self.fov
        )
        self.renderer.render(self.projection, camera)
        pygame.display.flip()

    def step(self, dt: float) -> None:
        """Run one frame."""
        self.update(dt)
        if self.running:
            self.render()

    def run(self) -> None:
        """Main loop: handle input, update, and render until quit."""
        while self.running:
            # Cap the frame rate and compute delta time in seconds
            dt = self.clock.tick(self.fps) / 1000.0
            self.step(dt)
        logger.info("Viewer stopped")
        self.renderer.shutdown()
        pygame.quit()
