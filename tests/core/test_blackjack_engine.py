"""Tests for the blackjack round engine."""

import asyncio
from random import Random

import pytest

from conftest import StackedDeck
from config import BlackjackConfig
from core.cards import parse_cards
from core.game.blackjack import BlackjackGame
from core.game.events import EventType
from core.game.sink import BLACKJACK_CONTROLS, Container, Control, GameKind
from core.game.state import BlackjackState


class TestBlackjackInit:
    """Tests for opening the table."""

    def test_init_shows_table(self, sink):
        """Test that init switches the sink to an empty blackjack table."""
        game = BlackjackGame(sink, settings=BlackjackConfig(dealer_draw_delay=0), rng=Random(1))
        assert game.init()

        assert sink.game is GameKind.BLACKJACK
        assert sink.opponent_name == "Dealer"
        assert sink.status == "Blackjack. Press New Deal."
        assert sink.enabled[Control.BJ_DEAL]
        assert not sink.enabled[Control.BJ_HIT]
        assert not sink.enabled[Control.BJ_STAND]
        assert game.state is BlackjackState.IDLE

    def test_calculate_score(self):
        """Test the ace-aware total exposed on the engine."""
        assert BlackjackGame.calculate_score(parse_cards("AS AH 9C")) == 21
        assert BlackjackGame.calculate_score(parse_cards("AS AH AC 8D")) == 21


class TestBlackjackDeal:
    """Tests for the opening deal."""

    @pytest.mark.asyncio
    async def test_deal_order(self, sink, make_blackjack):
        """Test player, dealer, player, dealer with the dealer's second card hidden."""
        game = make_blackjack("10S 9C 6H 7D")
        assert await game.start_round()

        assert sink.cards_in(Container.PLAYER) == parse_cards("10S 6H")
        assert sink.cards_in(Container.OPPONENT) == parse_cards("9C 7D")
        assert sink.face_down_in(Container.OPPONENT) == [False, True]
        assert game.state is BlackjackState.PLAYER_TURN
        assert sink.status == "Total: 16. Hit or Stand?"
        assert sink.enabled[Control.BJ_HIT]
        assert sink.enabled[Control.BJ_STAND]
        assert not sink.enabled[Control.BJ_DEAL]

    @pytest.mark.asyncio
    async def test_hidden_card_not_in_events(self, sink, make_blackjack):
        """Test that the hole card is not named in the deal events."""
        game = make_blackjack("10S 9C 6H 7D")
        dealt = []
        game.subscribe(dealt.append, EventType.CARD_DEALT)
        await game.start_round()

        assert [e.data["card"] for e in dealt] == ["10♠", "9♣", "6♥", "??"]

    @pytest.mark.asyncio
    async def test_natural(self, sink, make_blackjack):
        """Test a two-card 21 wins immediately."""
        game = make_blackjack("AS 9C KH 7D")
        naturals = []
        game.subscribe(naturals.append, EventType.PLAYER_BLACKJACK)
        await game.start_round()

        assert game.state is BlackjackState.RESOLVED
        assert game.is_over
        assert game.outcome == 1
        assert sink.status == "Blackjack! You win!"
        assert sink.enabled[Control.BJ_DEAL]
        assert not sink.enabled[Control.BJ_HIT]
        assert len(naturals) == 1
        assert await game.hit() is False


class TestBlackjackHit:
    """Tests for drawing player cards."""

    @pytest.mark.asyncio
    async def test_hit_reports_total(self, sink, make_blackjack):
        """Test a hit that stays under 21."""
        game = make_blackjack("10S 9C 2H 7D 5C")
        await game.start_round()
        assert await game.hit()

        assert game.player_hand.value == 17
        assert sink.status == "Total: 17"
        assert game.state is BlackjackState.PLAYER_TURN
        assert sink.enabled[Control.BJ_HIT]

    @pytest.mark.asyncio
    async def test_bust(self, sink, make_blackjack):
        """Test going over 21 ends the round."""
        game = make_blackjack("10S 9C 6H 7D KC")
        await game.start_round()
        await game.hit()

        assert game.state is BlackjackState.BUSTED
        assert game.outcome == -1
        assert sink.status == "Bust! You went over 21."
        assert not sink.enabled[Control.BJ_HIT]
        assert not sink.enabled[Control.BJ_STAND]
        assert sink.enabled[Control.BJ_DEAL]
        assert await game.stand() is False

    @pytest.mark.asyncio
    async def test_soft_hand_does_not_bust(self, sink, make_blackjack):
        """Test an ace dropping to one instead of busting."""
        game = make_blackjack("AS 9C 6H 7D 9H")
        await game.start_round()
        await game.hit()

        assert game.player_hand.value == 16
        assert game.state is BlackjackState.PLAYER_TURN

    @pytest.mark.asyncio
    async def test_hit_before_deal_rejected(self, sink, make_blackjack):
        """Test hitting with no round in progress."""
        game = make_blackjack("10S 9C 6H 7D")
        rejected = []
        game.subscribe(rejected.append, EventType.INVALID_ACTION)

        assert await game.hit() is False
        assert rejected[0].data["action"] == "hit"
        assert sink.cards_in(Container.PLAYER) == []


class TestBlackjackStand:
    """Tests for the dealer's turn."""

    @pytest.mark.asyncio
    async def test_dealer_draws_to_seventeen(self, sink, make_blackjack):
        """Test the hole card reveal and dealer draws."""
        game = make_blackjack("10S 9C 8H 5D 3C")
        await game.start_round()
        assert await game.stand()

        flips = [call for call in sink.calls if call[0] == "turn_face_up"]
        assert flips == [("turn_face_up", Container.OPPONENT, 1, parse_cards("5D")[0])]
        assert sink.cards_in(Container.OPPONENT) == parse_cards("9C 5D 3C")
        assert sink.face_down_in(Container.OPPONENT) == [False, False, False]
        assert game.dealer_hand.value == 17
        assert game.state is BlackjackState.RESOLVED
        assert game.outcome == 1
        assert sink.status == "You win (18 vs 17)!"

    @pytest.mark.asyncio
    async def test_dealer_busts(self, sink, make_blackjack):
        """Test a dealer bust wins for the player."""
        game = make_blackjack("10S 9C 8H 5D KC")
        busts = []
        game.subscribe(busts.append, EventType.DEALER_BUSTS)
        await game.start_round()
        await game.stand()

        assert game.outcome == 1
        assert sink.status == "Dealer busts! You win!"
        assert busts[0].data["hand_value"] == 24

    @pytest.mark.asyncio
    async def test_dealer_wins(self, sink, make_blackjack):
        """Test the dealer standing on a higher total."""
        game = make_blackjack("10S 10C 7H 9D")
        await game.start_round()
        await game.stand()

        assert game.outcome == -1
        assert sink.status == "Dealer wins (19 vs 17)."
        assert len(game.dealer_hand) == 2

    @pytest.mark.asyncio
    async def test_push(self, sink, make_blackjack):
        """Test equal totals push."""
        game = make_blackjack("10S 10C 8H 8D")
        await game.start_round()
        await game.stand()

        assert game.outcome == 0
        assert sink.status == "Push."

    @pytest.mark.asyncio
    async def test_dealer_stands_on_soft_seventeen(self, sink, make_blackjack):
        """Test that A-6 is 17 and the dealer takes no card."""
        game = make_blackjack("10S AC 8H 6D")
        await game.start_round()
        await game.stand()

        assert len(game.dealer_hand) == 2
        assert sink.status == "You win (18 vs 17)!"

    @pytest.mark.asyncio
    async def test_deal_enabled_after_resolution(self, sink, make_blackjack):
        """Test that a resolved round can be dealt again."""
        game = make_blackjack("10S 10C 8H 8D")
        await game.start_round()
        await game.stand()

        assert sink.enabled[Control.BJ_DEAL]
        assert await game.start_round()
        assert game.state is BlackjackState.PLAYER_TURN
        assert game.outcome is None
        assert len(game.deck) == 48

    @pytest.mark.asyncio
    async def test_dealer_pacing(self, sink):
        """Test that each dealer draw waits the configured delay."""
        settings = BlackjackConfig(dealer_draw_delay=0.01)
        game = BlackjackGame(sink, settings=settings, deck=StackedDeck("10S 2C 8H 3D 4C 5H 6S"))
        game.init()
        await game.start_round()

        loop = asyncio.get_running_loop()
        started = loop.time()
        await game.stand()

        assert len(game.dealer_hand) == 5
        assert loop.time() - started >= 0.025


class TestBlackjackConcurrency:
    """Tests for in-flight operation guarding."""

    @pytest.mark.asyncio
    async def test_controls_locked_during_reveals(self, sink, make_blackjack):
        """Test that no blackjack control is enabled while a card is being revealed."""
        game = make_blackjack("10S 9C 2H 5D 3C 4H")
        await game.start_round()
        await game.hit()
        await game.stand()

        assert all(not (enabled & BLACKJACK_CONTROLS) for enabled in sink.enabled_during_reveals)

    @pytest.mark.asyncio
    async def test_reentrant_calls_rejected(self, sink, make_blackjack):
        """Test that hit is rejected while the dealer is playing."""
        game = make_blackjack("10S 9C 8H 5D 3C")
        await game.start_round()

        task = asyncio.create_task(game.stand())
        await asyncio.sleep(0)

        assert game.busy
        assert await game.hit() is False
        assert await game.start_round() is False

        assert await task
        assert not game.busy
        assert game.state is BlackjackState.RESOLVED
        assert len(game.player_hand) == 2


class TestBlackjackFailures:
    """Tests for reveals that fail part way through an operation."""

    @pytest.mark.asyncio
    async def test_failed_deal_abandons_round(self, sink, make_blackjack):
        """Test that a half-dealt round cannot be hit or stood on."""
        game = make_blackjack("10S 9C 6H 7D")
        sink.fail_on("reveal_card", call=2)

        with pytest.raises(RuntimeError):
            await game.start_round()

        assert not game.busy
        assert game.state is BlackjackState.IDLE
        assert len(game.player_hand) == 0
        assert len(game.dealer_hand) == 0
        assert await game.hit() is False
        assert await game.stand() is False

        assert await game.start_round()
        assert game.state is BlackjackState.PLAYER_TURN
        assert len(game.player_hand) == len(game.dealer_hand) == 2

    @pytest.mark.asyncio
    async def test_failed_hit_abandons_round(self, sink, make_blackjack):
        """Test that a hit whose card could not be shown ends the round."""
        game = make_blackjack("10S 9C 2H 7D 5C")
        await game.start_round()
        sink.fail_on("reveal_card")

        with pytest.raises(RuntimeError):
            await game.hit()

        assert game.state is BlackjackState.IDLE
        assert game.outcome is None
        assert await game.stand() is False

    @pytest.mark.asyncio
    async def test_failed_hole_card_reveal_abandons_round(self, sink, make_blackjack):
        """Test that the dealer does not play on after the hole card reveal fails."""
        game = make_blackjack("10S 9C 8H 5D 3C")
        await game.start_round()
        sink.fail_on("turn_face_up")

        with pytest.raises(RuntimeError):
            await game.stand()

        assert game.state is BlackjackState.IDLE
        assert len(game.dealer_hand) == 0
        assert len(game.deck) == 48
        assert await game.hit() is False

    @pytest.mark.asyncio
    async def test_history_covers_current_round(self, sink, make_blackjack):
        """Test that a new deal drops the previous round's events."""
        game = make_blackjack("10S 10C 8H 8D")
        await game.start_round()
        await game.stand()

        await game.start_round()

        history = [e.event_type for e in game.events.history]
        assert history[0] is EventType.ROUND_STARTED
        assert EventType.ROUND_ENDED not in history
