"""Base scene class for all game scenes."""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Optional

import pygame

if TYPE_CHECKING:
    from pygame_ui.main import Application


class BaseScene(ABC):
    """Abstract base class for all game scenes.

    Lifecycle:
    - on_enter(): Called when scene becomes active
    - on_exit(): Called when scene is replaced

    Main loop methods:
    - handle_event(event): Process input
    - update(dt): Update scene state
    - draw(surface): Render to surface
    """

    def __init__(self):
        """Initialize the base scene."""
        self.app: Optional["Application"] = None
        self._is_active = False

    @property
    def is_active(self) -> bool:
        """Check if this scene is currently active."""
        return self._is_active

    def on_enter(self) -> None:
        """Called when this scene becomes active."""
        self._is_active = True

    def on_exit(self) -> None:
        """Called when this scene is replaced."""
        self._is_active = False

    def change_scene(self, scene_name: str) -> None:
        """Request a scene change.

        Args:
            scene_name: Name of the scene to change to
        """
        if self.app:
            self.app.change_scene(scene_name)

    @abstractmethod
    def handle_event(self, event: pygame.event.Event) -> bool:
        """Handle a pygame event.

        Args:
            event: The pygame event to handle

        Returns:
            True if the event was consumed, False otherwise
        """
        pass

    @abstractmethod
    def update(self, dt: float) -> None:
        """Update scene logic.

        Args:
            dt: Delta time in seconds since last update
        """
        pass

    @abstractmethod
    def draw(self, surface: pygame.Surface) -> None:
        """Draw the scene to a surface.

        Args:
            surface: The pygame surface to draw on
        """
        pass
