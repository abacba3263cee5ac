"""Scene classes for the card table."""

from pygame_ui.scenes.base_scene import BaseScene
from pygame_ui.scenes.menu_scene import MenuScene
from pygame_ui.scenes.table_scene import TableScene

__all__ = ["BaseScene", "MenuScene", "TableScene"]
