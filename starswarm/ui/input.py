"""Keyboard and window input handling."""
from __future__ import annotations
from enum import Enum
from typing import Callable
import pygame


class InputAction(Enum):
    """Input actions that can be triggered."""
    QUIT = "quit"
    PAUSE = "pause"
    TOGGLE_OVERLAY = "toggle_overlay"
    RESIZE = "resize"


class InputHandler:
    """Handles pygame events and converts them to scene actions."""

    def __init__(self) -> None:
        self._callbacks: dict[InputAction, list[Callable]] = {}

    def register_callback(self, action: InputAction, callback: Callable) -> None:
        """Register a callback for an input action."""
        if action not in self._callbacks:
            self._callbacks[action] = []
        self._callbacks[action].append(callback)

    def _fire_action(self, action: InputAction, *args) -> None:
        """Fire callbacks for an action."""
        for callback in self._callbacks.get(action, []):
            callback(*args)

    def process_events(self, events: list[pygame.event.Event]) -> bool:
        """Process pygame events.

        Returns:
            False if quit was requested, True otherwise
        """
        for event in events:
            if event.type == pygame.QUIT:
                self._fire_action(InputAction.QUIT)
                return False

            elif event.type == pygame.VIDEORESIZE:
                self._fire_action(InputAction.RESIZE, event.w, event.h)

            elif event.type == pygame.KEYDOWN:
                if not self._handle_key_down(event):
                    return False

        return True

    def _handle_key_down(self, event: pygame.event.Event) -> bool:
        """Handle key press. Returns False if quit was requested."""
        if event.key in (pygame.K_ESCAPE, pygame.K_q):
            self._fire_action(InputAction.QUIT)
            return False

        elif event.key == pygame.K_SPACE:
            self._fire_action(InputAction.PAUSE)

        elif event.key == pygame.K_TAB:
            self._fire_action(InputAction.TOGGLE_OVERLAY)

        return True
