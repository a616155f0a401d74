"""
Input handling abstraction to decouple pygame input from camera motion.
"""

from __future__ import annotations
import pygame
from typing import Callable, List, Sequence

from .camera import ControlState
from .config import (
    CONTROL_MODE,
    MOVE_STEP,
    TURN_STEP,
    MOVE_SPEED,
    ROT_SPEED,
)

CONTROL_MODES = ("pressed", "held")

FORWARD_KEYS = (pygame.K_UP, pygame.K_w)
BACKWARD_KEYS = (pygame.K_DOWN, pygame.K_s)
TURN_LEFT_KEYS = (pygame.K_LEFT, pygame.K_a)
TURN_RIGHT_KEYS = (pygame.K_RIGHT, pygame.K_d)
QUIT_KEYS = (pygame.K_x, pygame.K_ESCAPE)


def _axis(
    active: Callable[[int], bool],
    positive: Sequence[int],
    negative: Sequence[int],
) -> int:
    """+1, -1 or 0 depending on which key group is active."""
    pos = any(active(k) for k in positive)
    neg = any(active(k) for k in negative)
    return int(pos) - int(neg)


class InputHandler:
    """
    Gathers pygame input once per frame and turns it into a ControlState.

    mode "pressed" is edge-triggered: every key press this frame moves the
    camera by a fixed step. mode "held" is level-triggered: keys held down
    move the camera at a fixed speed scaled by the frame time.
    """

    def __init__(self, mode: str = CONTROL_MODE) -> None:
        if mode not in CONTROL_MODES:
            raise ValueError(
                f"unknown control mode {mode!r}, expected one of {CONTROL_MODES}"
            )
        self.mode = mode
        self._quit = False
        # Keys pressed down during the last process_events() call
        self._pressed: List[int] = []
        self._keys: Sequence[bool] = ()

    def process_events(self) -> None:
        """Poll pygame events and capture key presses and held keys."""
        self._quit = False
        self._pressed = []
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._quit = True
            elif event.type == pygame.KEYDOWN:
                if event.key in QUIT_KEYS:
                    self._quit = True
                else:
                    self._pressed.append(event.key)
        self._keys = pygame.key.get_pressed()

    def should_quit(self) -> bool:
        """Return True if a quit command was issued this frame."""
        return self._quit

    def controls(self, dt: float) -> ControlState:
        """Motion requested this frame; dt is only used in "held" mode."""
        if self.mode == "pressed":
            # Count every press so two presses in one frame move twice
            presses = self._pressed
            move = sum(k in FORWARD_KEYS for k in presses) - sum(
                k in BACKWARD_KEYS for k in presses
            )
            turn = sum(k in TURN_RIGHT_KEYS for k in presses) - sum(
                k in TURN_LEFT_KEYS for k in presses
            )
            return ControlState(move=move * MOVE_STEP, turn=turn * TURN_STEP)

        def held(key: int) -> bool:
            return bool(self._keys) and bool(self._keys[key])

        move = _axis(held, FORWARD_KEYS, BACKWARD_KEYS)
        turn = _axis(held, TURN_RIGHT_KEYS, TURN_LEFT_KEYS)
        return ControlState(move=move * MOVE_SPEED * dt, turn=turn * ROT_SPEED * dt)
