"""Round state enumerations for both games."""

from enum import Enum, auto


class PokerStage(Enum):
    """
    Poker round stages.

    Flow: IDLE → PRE_FLOP → FLOP → TURN → RIVER → SHOWDOWN,
    with FOLDED reachable from any betting stage.
    """

    IDLE = auto()
    PRE_FLOP = auto()
    FLOP = auto()
    TURN = auto()
    RIVER = auto()
    SHOWDOWN = auto()
    FOLDED = auto()

    def __str__(self) -> str:
        return self.name.replace("_", "-").lower()

    @property
    def is_active(self) -> bool:
        """Check if a round is being played in this stage."""
        return self in ACTIVE_POKER_STAGES


class BlackjackState(Enum):
    """
    Blackjack round states.

    Flow: IDLE → DEALING → PLAYER_TURN → DEALER_TURN → RESOLVED,
    with BUSTED reachable from PLAYER_TURN.
    """

    IDLE = auto()
    DEALING = auto()
    PLAYER_TURN = auto()
    DEALER_TURN = auto()
    RESOLVED = auto()
    BUSTED = auto()

    def __str__(self) -> str:
        return self.name.replace("_", " ").title()

    @property
    def is_terminal(self) -> bool:
        """Check if the round is over."""
        return self in (BlackjackState.RESOLVED, BlackjackState.BUSTED)


ACTIVE_POKER_STAGES = frozenset(
    {PokerStage.PRE_FLOP, PokerStage.FLOP, PokerStage.TURN, PokerStage.RIVER}
)

# A new round may start from any stage where no round is in progress
ROUND_START_POKER_STAGES = frozenset(
    {PokerStage.IDLE, PokerStage.SHOWDOWN, PokerStage.FOLDED}
)
ROUND_START_BLACKJACK_STATES = frozenset(
    {BlackjackState.IDLE, BlackjackState.RESOLVED, BlackjackState.BUSTED}
)
