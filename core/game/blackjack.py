"""Blackjack round engine with state machine."""

import asyncio
import logging
from random import Random
from typing import Iterable

from transitions import Machine

from config import BlackjackConfig
from core.cards import Card, Deck
from core.game.events import EventEmitter, EventHandler, EventType
from core.game.sink import BLACKJACK_ACTIONS, BLACKJACK_CONTROLS, Container, Control, GameKind, PresentationSink
from core.game.state import ROUND_START_BLACKJACK_STATES, BlackjackState
from core.hand import BLACKJACK, Hand, calculate_score, evaluate_hands

logger = logging.getLogger(__name__)

# Index of the dealer's face-down card
HOLE_CARD = 1


class BlackjackGame:
    """
    Blackjack round engine using a state machine.

    Plain rules only: one player hand against the dealer, hit or stand.
    Display and reveal pacing go through the presentation sink.
    """

    STATES = [s.name.lower() for s in BlackjackState]

    TRANSITIONS = [
        {"trigger": "begin_deal", "source": ["idle", "resolved", "busted"], "dest": "dealing"},
        {"trigger": "deal_done", "source": "dealing", "dest": "player_turn"},
        {"trigger": "natural", "source": "dealing", "dest": "resolved"},
        {"trigger": "player_busts", "source": "player_turn", "dest": "busted"},
        {"trigger": "player_done", "source": "player_turn", "dest": "dealer_turn"},
        {"trigger": "dealer_done", "source": "dealer_turn", "dest": "resolved"},
        {"trigger": "close_table", "source": "*", "dest": "idle"},
    ]

    def __init__(
        self,
        sink: PresentationSink,
        settings: BlackjackConfig | None = None,
        rng: Random | None = None,
        deck: Deck | None = None,
    ) -> None:
        """
        Initialize a blackjack table.

        Args:
            sink: Presentation sink receiving reveals, status and controls
            settings: Dealer threshold, dealer pacing and dealer name
            rng: Random number generator for reproducible deals
            deck: Deck to deal from (a fresh one is built if not provided)
        """
        self.sink = sink
        self.settings = settings or BlackjackConfig()
        self.deck = deck or Deck(rng=rng)

        self.player_hand = Hand()
        self.dealer_hand = Hand()
        self.outcome: int | None = None
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
    def state(self) -> BlackjackState:
        """Get current round state as enum."""
        return BlackjackState[self._machine_state.upper()]  # type: ignore

    @property
    def is_over(self) -> bool:
        """Check if the round has reached a terminal state."""
        return self.state.is_terminal

    @property
    def busy(self) -> bool:
        """Check if a round operation is in flight."""
        return self._busy

    @staticmethod
    def calculate_score(hand: Iterable[Card]) -> int:
        """Ace-aware blackjack total of a hand."""
        return calculate_score(hand)

    def subscribe(self, handler: EventHandler, event_type: EventType | None = None) -> None:
        """Subscribe to game events."""
        self.events.subscribe(handler, event_type)

    def init(self) -> bool:
        """Open the blackjack table, discarding any finished or abandoned round."""
        if self._busy:
            return self._reject("init")

        self.close_table()
        self._clear_round()
        self.sink.show_table(GameKind.BLACKJACK, self.settings.opponent_name)
        self.sink.clear_table()
        self.sink.set_pot(0)
        self.sink.set_status("Blackjack. Press New Deal.")
        self._toggle_controls(False)
        self.events.emit_new(EventType.TABLE_OPENED, game=GameKind.BLACKJACK.value)
        return True

    async def start_round(self) -> bool:
        """Reset the deck and deal two cards each, the dealer's second face down."""
        if self._busy or self.state not in ROUND_START_BLACKJACK_STATES:
            return self._reject("deal")

        self._busy = True
        try:
            self.deck.reset()
            self.sink.clear_table()
            self._clear_round()
            self.events.clear_history()
            self.begin_deal()
            self._lock_controls()
            self.events.emit_new(EventType.ROUND_STARTED)
            logger.info("Blackjack round started")

            # Deal: player, dealer, player, dealer (face down)
            await self._deal_to(self.player_hand, Container.PLAYER)
            await self._deal_to(self.dealer_hand, Container.OPPONENT)
            await self._deal_to(self.player_hand, Container.PLAYER)
            await self._deal_to(self.dealer_hand, Container.OPPONENT, face_down=True)

            score = self.player_hand.value
            if score == BLACKJACK:
                self.natural()
                self.outcome = 1
                self.events.emit_new(EventType.PLAYER_BLACKJACK)
                self._end_round("Blackjack! You win!")
            else:
                self.deal_done()
                self.sink.set_status(f"Total: {score}. Hit or Stand?")
                self._toggle_controls(True)
        except BaseException:
            self._abort("deal")
            raise
        finally:
            self._busy = False
        return True

    async def hit(self) -> bool:
        """Player takes another card."""
        if self._busy or self.state is not BlackjackState.PLAYER_TURN:
            return self._reject("hit")

        self._busy = True
        try:
            self._lock_controls()
            await self._deal_to(self.player_hand, Container.PLAYER)

            score = self.player_hand.value
            self.events.emit_new(EventType.PLAYER_HIT, hand_value=score)
            if score > BLACKJACK:
                self.player_busts()
                self.outcome = -1
                self.events.emit_new(EventType.PLAYER_BUSTS, hand_value=score)
                self._end_round("Bust! You went over 21.")
            else:
                self.sink.set_status(f"Total: {score}")
                self._toggle_controls(True)
        except BaseException:
            self._abort("hit")
            raise
        finally:
            self._busy = False
        return True

    async def stand(self) -> bool:
        """Player stands; the dealer reveals and draws to the stand threshold."""
        if self._busy or self.state is not BlackjackState.PLAYER_TURN:
            return self._reject("stand")

        self._busy = True
        try:
            self._lock_controls()
            self.player_done()
            self.events.emit_new(EventType.PLAYER_STAND, hand_value=self.player_hand.value)

            hole = self.dealer_hand[HOLE_CARD]
            self.events.emit_new(EventType.CARD_REVEALED, card=str(hole), container=Container.OPPONENT.value)
            await self.sink.turn_face_up(Container.OPPONENT, HOLE_CARD, hole)

            dealer_score = self.dealer_hand.value
            while dealer_score < self.settings.dealer_stands_on:
                await asyncio.sleep(self.settings.dealer_draw_delay)
                await self._deal_to(self.dealer_hand, Container.OPPONENT)
                dealer_score = self.dealer_hand.value
                self.events.emit_new(EventType.DEALER_HITS, hand_value=dealer_score)

            self.dealer_done()
            self._determine_winner()
        except BaseException:
            self._abort("stand")
            raise
        finally:
            self._busy = False
        return True

    async def _deal_to(self, hand: Hand, container: Container, face_down: bool = False) -> Card:
        card = self.deck.deal()
        hand.add_card(card)
        self.events.emit_new(
            EventType.CARD_DEALT,
            card="??" if face_down else str(card),
            container=container.value,
            hand_value=None if face_down else hand.value,
        )
        await self.sink.reveal_card(container, card, face_down=face_down)
        return card

    def _determine_winner(self) -> None:
        player_score = self.player_hand.value
        dealer_score = self.dealer_hand.value
        self.outcome = evaluate_hands(self.player_hand, self.dealer_hand)

        if self.dealer_hand.is_busted:
            self.events.emit_new(EventType.DEALER_BUSTS, hand_value=dealer_score)
            message = "Dealer busts! You win!"
        else:
            self.events.emit_new(EventType.DEALER_STANDS, hand_value=dealer_score)
            if self.outcome == -1:
                message = f"{self.settings.opponent_name} wins ({dealer_score} vs {player_score})."
            elif self.outcome == 1:
                message = f"You win ({player_score} vs {dealer_score})!"
            else:
                message = "Push."

        if self.outcome == 1:
            self.events.emit_new(EventType.PLAYER_WINS, player=player_score, dealer=dealer_score)
        elif self.outcome == -1:
            self.events.emit_new(EventType.PLAYER_LOSES, player=player_score, dealer=dealer_score)
        else:
            self.events.emit_new(EventType.PUSH, player=player_score, dealer=dealer_score)

        self._end_round(message)

    def _end_round(self, message: str) -> None:
        self.sink.set_status(message)
        self._toggle_controls(False)
        self.events.emit_new(EventType.ROUND_ENDED, outcome=self.outcome)
        logger.info("Blackjack round over: %s (player %s, dealer %s)", message, self.player_hand, self.dealer_hand)

    def _clear_round(self) -> None:
        self.player_hand = Hand()
        self.dealer_hand = Hand()
        self.outcome = None

    def _abort(self, action: str) -> None:
        """Drop a round left half played by a failed reveal."""
        logger.error("Blackjack %s failed in state %s, round abandoned", action, self.state.name)
        self.close_table()
        self._clear_round()

    def _lock_controls(self) -> None:
        """Disable every blackjack control while cards are being dealt."""
        self.sink.set_controls_enabled(BLACKJACK_CONTROLS, False)

    def _toggle_controls(self, active: bool) -> None:
        """Enable hit/stand during the player's turn; otherwise only deal."""
        self.sink.set_controls_enabled(BLACKJACK_ACTIONS, active)
        self.sink.set_controls_enabled({Control.BJ_DEAL}, not active)

    def _reject(self, action: str) -> bool:
        reason = "operation in progress" if self._busy else f"not allowed in state {self.state.name}"
        logger.warning("Rejected blackjack %s: %s", action, reason)
        self.events.emit_new(EventType.INVALID_ACTION, action=action, message=reason, state=self.state.name)
        return False
