"""Round engines, state and events."""

from core.game.events import GameEvent, EventType, EventEmitter
from core.game.state import PokerStage, BlackjackState
from core.game.sink import Container, Control, GameKind, PresentationSink
from core.game.poker import PokerGame, ShowdownResult
from core.game.blackjack import BlackjackGame
from core.game.table import TableSession

__all__ = [
    "GameEvent",
    "EventType",
    "EventEmitter",
    "PokerStage",
    "BlackjackState",
    "Container",
    "Control",
    "GameKind",
    "PresentationSink",
    "PokerGame",
    "ShowdownResult",
    "BlackjackGame",
    "TableSession",
]
