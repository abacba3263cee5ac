"""Main entry point for the PyGame card table."""

import asyncio
import logging
from typing import Optional

import pygame

from config import configure_logging
from core.game.sink import GameKind
from core.game.table import TableSession
from pygame_ui.config import DIMENSIONS
from pygame_ui.scenes.base_scene import BaseScene
from pygame_ui.scenes.menu_scene import MenuScene
from pygame_ui.scenes.table_scene import TableScene
from pygame_ui.sink import PygameTableSink

logger = logging.getLogger(__name__)


class Application:
    """Main application class running the render loop and engine commands.

    Rendering and the round engines share one asyncio loop: engine commands
    run as tasks that suspend on every card reveal while frames keep
    being drawn.
    """

    def __init__(self):
        """Initialize the application."""
        pygame.init()
        pygame.display.set_caption("Card Table - Texas Hold'em & Blackjack")

        self.screen = pygame.display.set_mode(
            (DIMENSIONS.SCREEN_WIDTH, DIMENSIONS.SCREEN_HEIGHT)
        )
        self.running = True

        self.sink = PygameTableSink()
        self.session = TableSession(self.sink)
        self._tasks: set[asyncio.Task] = set()

        self.scenes: dict[str, BaseScene] = {
            "menu": MenuScene(),
            "table": TableScene(),
        }
        for scene in self.scenes.values():
            scene.app = self
        self.current_scene: Optional[BaseScene] = None
        self.change_scene("menu")

    @property
    def busy(self) -> bool:
        """Check if an engine command is still running."""
        return bool(self._tasks) or self.session.poker.busy or self.session.blackjack.busy

    def change_scene(self, name: str) -> None:
        if self.current_scene:
            self.current_scene.on_exit()
        self.current_scene = self.scenes[name]
        self.current_scene.on_enter()

    def select_game(self, game: GameKind) -> None:
        if self.session.select(game):
            self.change_scene("table")

    def exit_to_menu(self) -> None:
        if self.busy:
            return
        self.session.exit_to_menu()
        self.change_scene("menu")

    def run_command(self, name: str) -> None:
        """Start an engine command without blocking the render loop."""
        task = asyncio.get_running_loop().create_task(self.session.command(name))
        self._tasks.add(task)
        task.add_done_callback(self._command_done)

    def _command_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            # Engine failures are invariant violations; stop instead of playing on
            logger.error("Table command failed", exc_info=error)
            self.running = False

    def handle_events(self) -> None:
        """Process pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
                continue
            self.current_scene.handle_event(event)

    def update(self, dt: float) -> None:
        self.current_scene.update(dt)

    def draw(self) -> None:
        self.current_scene.draw(self.screen)
        pygame.display.flip()

    async def run(self) -> None:
        """Main application loop."""
        loop = asyncio.get_running_loop()
        frame = 1.0 / DIMENSIONS.TARGET_FPS
        last = loop.time()

        while self.running:
            now = loop.time()
            dt, last = now - last, now

            self.handle_events()
            self.update(dt)
            self.draw()
            await asyncio.sleep(frame)

        for task in list(self._tasks):
            task.cancel()
        pygame.quit()


def main() -> None:
    """Entry point for the pygame UI."""
    configure_logging()
    asyncio.run(Application().run())


if __name__ == "__main__":
    main()
