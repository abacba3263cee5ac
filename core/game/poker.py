"""Texas Hold'em round engine with state machine."""

import logging
from dataclasses import dataclass
from random import Random

from transitions import Machine

from config import PokerConfig
from core.cards import Card, Deck
from core.game.events import EventEmitter, EventHandler, EventType
from core.game.sink import POKER_ACTIONS, POKER_CONTROLS, Container, Control, GameKind, PresentationSink
from core.game.state import ROUND_START_POKER_STAGES, PokerStage
from core.poker.evaluator import HandResult, evaluate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Street:
    """How one betting stage deals the next community cards."""

    trigger: str
    bet_index: int
    cards: int
    status: str


STREETS: dict[PokerStage, Street] = {
    PokerStage.PRE_FLOP: Street("deal_flop", 0, 3, "Dealing Flop..."),
    PokerStage.FLOP: Street("deal_turn", 1, 1, "Dealing Turn..."),
    PokerStage.TURN: Street("deal_river", 2, 1, "Dealing River..."),
}


@dataclass(frozen=True)
class ShowdownResult:
    """Both evaluated hands and who won."""

    player: HandResult
    opponent: HandResult
    outcome: int  # 1 player wins, -1 opponent wins, 0 push

    @property
    def is_push(self) -> bool:
        return self.outcome == 0


class PokerGame:
    """
    Heads-up Texas Hold'em round engine.

    One human player against a computer opponent who never acts: the
    player advances the round street by street or folds, and the hands
    are compared at showdown. All display goes through the sink; every
    card reveal is awaited so the sink can pace the deal.
    """

    STATES = [s.name.lower() for s in PokerStage]

    TRANSITIONS = [
        {"trigger": "begin_round", "source": ["idle", "showdown", "folded"], "dest": "pre_flop"},
        {"trigger": "deal_flop", "source": "pre_flop", "dest": "flop"},
        {"trigger": "deal_turn", "source": "flop", "dest": "turn"},
        {"trigger": "deal_river", "source": "turn", "dest": "river"},
        {"trigger": "reach_showdown", "source": "river", "dest": "showdown"},
        {"trigger": "fold_hand", "source": ["pre_flop", "flop", "turn", "river"], "dest": "folded"},
        {"trigger": "close_table", "source": "*", "dest": "idle"},
    ]

    def __init__(
        self,
        sink: PresentationSink,
        settings: PokerConfig | None = None,
        rng: Random | None = None,
        deck: Deck | None = None,
    ) -> None:
        """
        Initialize a poker table.

        Args:
            sink: Presentation sink receiving reveals, status and controls
            settings: Ante, street bets and opponent name
            rng: Random number generator for reproducible deals
            deck: Deck to deal from (a fresh one is built if not provided)
        """
        self.sink = sink
        self.settings = settings or PokerConfig()
        self.deck = deck or Deck(rng=rng)

        self.player_hole: list[Card] = []
        self.opponent_hole: list[Card] = []
        self.community: list[Card] = []
        self.pot = 0
        self.result: ShowdownResult | None = None
        self.events = EventEmitter()
        self._busy = False

        self.machine = Machine(
            model=self,
            states=self.STATES,
            transitions=self.TRANSITIONS,
            initial="idle",
            auto_transitions=False,
            model_attribute="_machine_state",
        )

    @property
    def stage(self) -> PokerStage:
        """Get current round stage as enum."""
        return PokerStage[self._machine_state.upper()]  # type: ignore

    @property
    def busy(self) -> bool:
        """Check if a round operation is in flight."""
        return self._busy

    def subscribe(self, handler: EventHandler, event_type: EventType | None = None) -> None:
        """Subscribe to game events."""
        self.events.subscribe(handler, event_type)

    def init(self) -> bool:
        """Open the poker table, discarding any finished or abandoned round."""
        if self._busy:
            return self._reject("init")

        self.close_table()
        self._clear_round()
        self.sink.show_table(GameKind.POKER, self.settings.opponent_name)
        self.sink.clear_table()
        self.sink.set_pot(0)
        self.sink.set_status("Texas Hold'em. Press Deal.")
        self._toggle_controls(False)
        self.events.emit_new(EventType.TABLE_OPENED, game=GameKind.POKER.value)
        return True

    async def start_round(self) -> bool:
        """Reset the deck, post the ante and deal both hole hands."""
        if self._busy or self.stage not in ROUND_START_POKER_STAGES:
            return self._reject("deal")

        self._busy = True
        try:
            self.deck.reset()
            self.sink.clear_table()
            self._clear_round()
            self.events.clear_history()
            self.pot = self.settings.ante
            self.sink.set_pot(self.pot)
            self.begin_round()
            self._lock_controls()
            self.events.emit_new(EventType.ROUND_STARTED, pot=self.pot)
            logger.info("Poker round started, ante %d", self.pot)

            # Deal: player, opponent (down), player, opponent (down)
            for _ in range(2):
                await self._deal_to(self.player_hole, Container.PLAYER)
                await self._deal_to(self.opponent_hole, Container.OPPONENT, face_down=True)

            self.sink.set_status("Your Turn.")
            self._toggle_controls(True)
        except BaseException:
            self._abort("deal")
            raise
        finally:
            self._busy = False
        return True

    async def next_phase(self) -> bool:
        """Advance exactly one stage: flop, turn, river, then showdown."""
        if self._busy or not self.stage.is_active:
            return self._reject("next")

        self._busy = True
        try:
            self._lock_controls()

            if self.stage is PokerStage.RIVER:
                self.reach_showdown()
                self.events.emit_new(EventType.STAGE_ADVANCED, stage=str(self.stage))
                await self._reveal_opponent()
                self._determine_winner()
                return True

            street = STREETS[self.stage]
            getattr(self, street.trigger)()
            self.events.emit_new(EventType.STAGE_ADVANCED, stage=str(self.stage))

            self._add_to_pot(self.settings.street_bets[street.bet_index])
            self.sink.set_status(street.status)

            burned = self.deck.deal()
            self.events.emit_new(EventType.CARD_BURNED)
            logger.debug("Burned %s before the %s", burned, self.stage)

            for _ in range(street.cards):
                await self._deal_to(self.community, Container.COMMUNITY)

            self._toggle_controls(True)
        except BaseException:
            self._abort("next")
            raise
        finally:
            self._busy = False
        return True

    async def fold(self) -> bool:
        """Give up the current round."""
        if self._busy or not self.stage.is_active:
            return self._reject("fold")

        self.fold_hand()
        self.sink.set_status("Folded.")
        self._toggle_controls(False)
        self.events.emit_new(EventType.PLAYER_FOLDS, pot=self.pot)
        self.events.emit_new(EventType.ROUND_ENDED, outcome=-1, pot=self.pot)
        logger.info("Player folded with %d in the pot", self.pot)
        return True

    async def _deal_to(self, cards: list[Card], container: Container, face_down: bool = False) -> Card:
        card = self.deck.deal()
        cards.append(card)
        self.events.emit_new(
            EventType.CARD_DEALT,
            card="??" if face_down else str(card),
            container=container.value,
        )
        await self.sink.reveal_card(container, card, face_down=face_down)
        return card

    async def _reveal_opponent(self) -> None:
        for index, card in enumerate(self.opponent_hole):
            self.events.emit_new(EventType.CARD_REVEALED, card=str(card), container=Container.OPPONENT.value)
            await self.sink.turn_face_up(Container.OPPONENT, index, card)

    def _determine_winner(self) -> None:
        player = evaluate(self.player_hole, self.community)
        opponent = evaluate(self.opponent_hole, self.community)

        if player.score > opponent.score:
            outcome = 1
            message = f"You win with {player.name}"
            self.events.emit_new(EventType.PLAYER_WINS, hand=player.name, score=player.score, pot=self.pot)
        elif opponent.score > player.score:
            outcome = -1
            message = f"{self.settings.opponent_name} wins with {opponent.name}"
            self.events.emit_new(EventType.PLAYER_LOSES, hand=opponent.name, score=opponent.score, pot=self.pot)
        else:
            outcome = 0
            message = f"Push, both had {player.name}"
            self.events.emit_new(EventType.PUSH, hand=player.name, score=player.score)

        self.result = ShowdownResult(player=player, opponent=opponent, outcome=outcome)
        self.sink.set_status(message)
        self._toggle_controls(False)
        self.events.emit_new(EventType.ROUND_ENDED, outcome=outcome, pot=self.pot)
        logger.info("Showdown: %s vs %s -> %s", player, opponent, message)

    def _add_to_pot(self, amount: int) -> None:
        self.pot += amount
        self.sink.set_pot(self.pot)
        self.events.emit_new(EventType.POT_CHANGED, pot=self.pot)

    def _clear_round(self) -> None:
        self.player_hole = []
        self.opponent_hole = []
        self.community = []
        self.pot = 0
        self.result = None

    def _abort(self, action: str) -> None:
        """Drop a round whose deal failed part way; only a new deal may follow."""
        logger.error("Poker %s failed during %s, round abandoned", action, self.stage)
        self.close_table()
        self._clear_round()

    def _lock_controls(self) -> None:
        """Disable every poker control while cards are being dealt."""
        self.sink.set_controls_enabled(POKER_CONTROLS, False)

    def _toggle_controls(self, active: bool) -> None:
        """Enable next/fold while a round is live; otherwise only deal."""
        self.sink.set_controls_enabled(POKER_ACTIONS, active)
        self.sink.set_controls_enabled({Control.POKER_DEAL}, not active)

    def _reject(self, action: str) -> bool:
        reason = "operation in progress" if self._busy else f"not allowed during {self.stage}"
        logger.warning("Rejected poker %s: %s", action, reason)
        self.events.emit_new(EventType.INVALID_ACTION, action=action, message=reason, state=self.stage.name)
        return False
