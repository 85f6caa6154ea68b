"""Unit tests for /src/chess/game.py"""

import time
from typing import Callable

import pytest

from src.chess.board import Board
from src.chess.clock import Ticker
from src.chess.game import Game
from src.chess.moves import Move
from src.chess.pieces import Color
from src.chess.square import Square
from src.core.config import Settings
from src.core.models import SelectionOutcome
from src.core.shared_types import Status

CASTLING_POSITION = "r3k2r/8/8/8/8/8/8/R3K2R"
PINNED_BISHOP = "4k3/4r3/8/8/8/8/4B3/4K3"

Play = Callable[..., None]
FromPosition = Callable[[str], Game]


def select(game: Game, name: str) -> SelectionOutcome:
    square = Square.from_algebraic(name)
    return game.handle_square_select(square.row, square.col)


# --- CONCRETE SCENARIOS ---
def test_pawn_double_step_from_start(started_game: Game) -> None:
    assert started_game.commit(Move.from_algebraic("e2e4"))
    rows = started_game.board.rows()
    assert rows[6][4] is None
    assert rows[4][4] == "P"
    assert started_game.turn == Color.BLACK


def test_en_passant_capture(started_game: Game, play: Play) -> None:
    play(started_game, "e2e4", "a7a6", "e4e5", "d7d5", "e5d6")
    rows = started_game.board.rows()
    assert rows[3][3] is None  # black pawn that passed by
    assert rows[2][3] == "P"
    assert rows[3][4] is None


def test_en_passant_only_right_away(started_game: Game, play: Play) -> None:
    play(started_game, "e2e4", "a7a6", "e4e5", "d7d5", "h2h3", "h7h6")
    assert not started_game.commit(Move.from_algebraic("e5d6"))


def test_fools_mate(started_game: Game, play: Play) -> None:
    play(started_game, "f2f3", "e7e5", "g2g4", "d8h4")
    assert started_game.status == Status.CHECKMATE
    assert started_game.winner == Color.BLACK
    assert started_game.game_over


def test_clock_runs_out(settings: Settings) -> None:
    game = Game(settings=settings.model_copy(update={"starting_time_seconds": 3}))
    game.start_game()
    for _ in range(2):
        game.tick()
    assert not game.game_over

    game.tick()
    assert game.status == Status.OUT_OF_TIME
    assert game.winner == Color.BLACK
    assert game.remaining_time(Color.WHITE) == 0
    assert game.remaining_time(Color.BLACK) == 3


# --- STATUS DETECTION ---
def test_back_rank_mate(game_from_position: FromPosition) -> None:
    game = game_from_position("6k1/5ppp/8/8/8/8/8/R5K1")
    assert game.commit(Move.from_algebraic("a1a8"))
    assert game.status == Status.CHECKMATE
    assert game.winner == Color.WHITE


def test_stalemate(game_from_position: FromPosition) -> None:
    game = game_from_position("k7/2Q5/8/1K6/8/8/8/8")
    assert game.commit(Move.from_algebraic("b5b6"))
    assert game.status == Status.STALEMATE
    assert game.winner is None
    assert game.game_over


def test_stalemated_starting_position_ends_on_start(game_from_position: FromPosition) -> None:
    """White to move and no legal move: decided before the first click"""
    game = game_from_position("8/8/8/8/8/1q6/2k5/K7")
    assert game.status == Status.STALEMATE
    assert game.game_over
    assert not game.commit(Move.from_algebraic("a1a2"))


def test_mated_starting_position_ends_on_start(game_from_position: FromPosition) -> None:
    game = game_from_position("6k1/5ppp/8/8/8/8/5PPP/r5K1")
    assert game.status == Status.CHECKMATE
    assert game.winner == Color.BLACK


def test_check_is_not_game_over(started_game: Game, play: Play) -> None:
    play(started_game, "e2e4", "f7f6", "d1h5")
    assert started_game.status == Status.IN_PROGRESS


def test_nothing_happens_after_game_over(started_game: Game, play: Play) -> None:
    play(started_game, "f2f3", "e7e5", "g2g4", "d8h4")
    board = started_game.board

    assert not started_game.commit(Move.from_algebraic("a2a3"))
    assert not started_game.undo()
    assert not started_game.tick()
    assert started_game.suggest_move() is None
    assert started_game.board == board
    assert started_game.remaining_time(Color.WHITE) == 600


# --- COMMIT ---
def test_moves_before_start_are_refused(settings: Settings) -> None:
    game = Game(settings=settings)
    assert not game.commit(Move.from_algebraic("e2e4"))
    assert not game.tick()
    assert game.board == Board.initial()


def test_cannot_move_opponents_piece(started_game: Game) -> None:
    assert not started_game.commit(Move.from_algebraic("e7e5"))
    assert started_game.turn == Color.WHITE


def test_illegal_move_refused(started_game: Game) -> None:
    assert not started_game.commit(Move.from_algebraic("e2e5"))
    assert not started_game.commit(Move.from_algebraic("a1a3"))
    assert started_game.board == Board.initial()


def test_move_off_the_board_refused(started_game: Game) -> None:
    assert not started_game.commit(Move(Square(8, 0), Square(7, 0)))


def test_castling(game_from_position: FromPosition) -> None:
    game = game_from_position(CASTLING_POSITION)
    assert game.commit(Move.from_algebraic("e1g1"))
    assert game.board.rows()[7] == ["R", None, None, None, None, "R", "K", None]
    assert game.commit(Move.from_algebraic("e8c8"))
    assert game.board.rows()[0] == [None, None, "k", "r", None, None, None, "r"]


def test_no_castling_after_king_went_back_home(
    game_from_position: FromPosition, play: Play
) -> None:
    game = game_from_position(CASTLING_POSITION)
    play(game, "e1f1", "e8f8", "f1e1", "f8e8")
    assert not game.commit(Move.from_algebraic("e1g1"))
    assert not game.commit(Move.from_algebraic("e1c1"))


def test_undone_king_move_does_not_count(game_from_position: FromPosition) -> None:
    """The king step only survives on the redo branch"""
    game = game_from_position(CASTLING_POSITION)
    assert game.commit(Move.from_algebraic("e1f1"))
    assert game.undo()
    assert game.commit(Move.from_algebraic("e1g1"))


def test_pinned_piece_moves_by_default(game_from_position: FromPosition) -> None:
    game = game_from_position(PINNED_BISHOP)
    assert game.commit(Move.from_algebraic("e2d3"))


def test_king_safety_enforced_when_configured(settings: Settings) -> None:
    game = Game(
        settings=settings.model_copy(update={"enforce_king_safety": True}),
        starting_board=Board.from_fen(PINNED_BISHOP),
    )
    game.start_game()
    assert not game.commit(Move.from_algebraic("e2d3"))
    assert game.commit(Move.from_algebraic("e1d1"))


def test_promotion_in_game(game_from_position: FromPosition) -> None:
    game = game_from_position("8/P6k/8/8/8/8/8/K7")
    assert game.commit(Move.from_algebraic("a7a8"))
    assert game.board.rows()[0][0] == "Q"


# --- SQUARE SELECTION ---
def test_select_own_piece(started_game: Game) -> None:
    outcome = select(started_game, "e2")
    assert outcome.selection_changed
    assert not outcome.move_committed
    assert outcome.status == "in progress"
    assert started_game.selected == Square.from_algebraic("e2")


@pytest.mark.parametrize("name", ["e7", "e4"])
def test_select_opponent_piece_or_empty_square(started_game: Game, name: str) -> None:
    outcome = select(started_game, name)
    assert not outcome.selection_changed
    assert started_game.selected is None


def test_select_twice_deselects(started_game: Game) -> None:
    select(started_game, "e2")
    outcome = select(started_game, "e2")
    assert outcome.selection_changed
    assert started_game.selected is None


def test_select_destination_commits(started_game: Game) -> None:
    select(started_game, "g1")
    outcome = select(started_game, "f3")
    assert outcome.move_committed
    assert started_game.selected is None
    assert started_game.last_move == Move.from_algebraic("g1f3")
    assert started_game.turn == Color.BLACK


def test_illegal_destination_deselects(started_game: Game) -> None:
    select(started_game, "e2")
    outcome = select(started_game, "e5")
    assert outcome.selection_changed
    assert not outcome.move_committed
    assert started_game.selected is None
    assert started_game.turn == Color.WHITE


def test_own_piece_as_destination_deselects(started_game: Game) -> None:
    """No re-selection: the click is a (refused) move attempt"""
    select(started_game, "e2")
    outcome = select(started_game, "d2")
    assert not outcome.move_committed
    assert started_game.selected is None


def test_selection_ignored_before_start(settings: Settings) -> None:
    game = Game(settings=settings)
    outcome = game.handle_square_select(6, 4)
    assert not outcome.selection_changed
    assert game.selected is None


def test_selection_out_of_bounds_ignored(started_game: Game) -> None:
    outcome = started_game.handle_square_select(8, 3)
    assert not outcome.selection_changed
    assert started_game.selected is None


# --- UNDO / REDO ---
def test_undo_restores_previous_position(started_game: Game, play: Play) -> None:
    play(started_game, "e2e4")
    assert started_game.undo()
    assert started_game.board == Board.initial()
    assert started_game.turn == Color.WHITE
    assert started_game.last_move is None
    assert not started_game.undo()


def test_redo_replays(started_game: Game, play: Play) -> None:
    play(started_game, "e2e4", "e7e5")
    after = started_game.board
    started_game.undo()
    started_game.undo()
    assert started_game.redo()
    assert started_game.redo()
    assert started_game.board == after
    assert started_game.turn == Color.WHITE
    assert started_game.last_move == Move.from_algebraic("e7e5")
    assert not started_game.redo()


def test_new_move_overwrites_redo_branch(started_game: Game, play: Play) -> None:
    play(started_game, "e2e4", "e7e5")
    started_game.undo()
    play(started_game, "c7c5")
    assert not started_game.redo()
    assert not started_game.snapshot().can_redo
    assert started_game.board.rows()[3][2] == "p"


def test_undo_clears_selection_and_suggestion(started_game: Game, play: Play) -> None:
    play(started_game, "e2e4", "e7e5")
    started_game.suggest_move()
    select(started_game, "g1")
    assert started_game.undo()
    assert started_game.selected is None
    assert started_game.suggested is None


def test_undo_before_start_is_noop(settings: Settings) -> None:
    game = Game(settings=settings)
    assert not game.undo()
    assert not game.redo()


# --- RESET ---
def test_reset(started_game: Game, play: Play) -> None:
    play(started_game, "f2f3", "e7e5", "g2g4", "d8h4")
    started_game.reset()

    assert started_game.board == Board.initial()
    assert not started_game.started
    assert started_game.status == Status.IN_PROGRESS
    assert started_game.winner is None
    assert not started_game.snapshot().can_undo
    assert started_game.remaining_time(Color.WHITE) == 600


def test_reset_returns_to_custom_start(game_from_position: FromPosition, play: Play) -> None:
    game = game_from_position(CASTLING_POSITION)
    play(game, "e1g1")
    game.reset()
    assert game.board == Board.from_fen(CASTLING_POSITION)


def test_start_twice(settings: Settings) -> None:
    game = Game(settings=settings)
    assert game.start_game()
    assert not game.start_game()


# --- SUGGESTIONS ---
def test_suggestion(started_game: Game) -> None:
    move = started_game.suggest_move()
    assert move is not None
    assert started_game.snapshot().suggested_move is not None
    assert started_game.commit(move)
    assert started_game.suggested is None


def test_no_suggestion_before_start(settings: Settings) -> None:
    assert Game(settings=settings).suggest_move() is None


# --- CLOCK ---
def test_tick_charges_side_to_move(started_game: Game, play: Play) -> None:
    started_game.tick()
    assert started_game.remaining_time(Color.WHITE) == 599
    play(started_game, "e2e4")
    started_game.tick()
    assert started_game.remaining_time(Color.BLACK) == 599
    assert started_game.remaining_time(Color.WHITE) == 599


def test_black_runs_out(settings: Settings, play: Play) -> None:
    game = Game(settings=settings.model_copy(update={"starting_time_seconds": 1}))
    game.start_game()
    play(game, "e2e4")
    game.tick()
    assert game.status == Status.OUT_OF_TIME
    assert game.winner == Color.WHITE


def test_stale_ticker_is_ignored(started_game: Game) -> None:
    stale = Ticker(60, lambda ticker: True)
    assert not started_game._on_tick(stale)
    assert started_game.remaining_time(Color.WHITE) == 600


def test_background_clock_flags_the_side_to_move() -> None:
    game = Game(
        settings=Settings(starting_time_seconds=3, tick_interval_seconds=0.01)
    )
    game.start_game()
    try:
        deadline = time.monotonic() + 5
        while not game.game_over and time.monotonic() < deadline:
            time.sleep(0.01)
        assert game.status == Status.OUT_OF_TIME
        assert game.winner == Color.BLACK
    finally:
        game.shutdown()


def test_reset_stops_background_clock() -> None:
    game = Game(settings=Settings(starting_time_seconds=600, tick_interval_seconds=0.01))
    game.start_game()
    game.reset()
    time.sleep(0.1)
    assert game.remaining_time(Color.WHITE) == 600
    game.shutdown()


# --- SNAPSHOT ---
def test_snapshot_of_fresh_game(settings: Settings) -> None:
    snapshot = Game(settings=settings).snapshot()
    assert snapshot.turn == "white"
    assert snapshot.status == "in progress"
    assert snapshot.remaining_time == {"white": 600, "black": 600}
    assert snapshot.board[0] == ["r", "n", "b", "q", "k", "b", "n", "r"]
    assert snapshot.selected_square is None
    assert snapshot.last_move is None
    assert not snapshot.started
    assert not snapshot.game_over
    assert snapshot.winner is None


def test_snapshot_after_move(started_game: Game, play: Play) -> None:
    play(started_game, "e2e4")
    snapshot = started_game.snapshot()
    assert snapshot.turn == "black"
    assert snapshot.last_move is not None
    assert snapshot.last_move.from_square == (6, 4)
    assert snapshot.last_move.to_square == (4, 4)
    assert snapshot.can_undo


def test_clock_interval_restarts_on_every_move() -> None:
    """The side coming on move gets a full interval before it is charged"""
    game = Game(settings=Settings(tick_interval_seconds=1.0))
    game.start_game()
    try:
        time.sleep(0.7)
        assert game.commit(Move.from_algebraic("e2e4"))
        time.sleep(0.6)
        assert game.remaining_time(Color.WHITE) == 600
        assert game.remaining_time(Color.BLACK) == 600
    finally:
        game.shutdown()


def test_clock_interval_restarts_on_undo() -> None:
    game = Game(settings=Settings(tick_interval_seconds=1.0))
    game.start_game()
    try:
        assert game.commit(Move.from_algebraic("e2e4"))
        time.sleep(0.7)
        assert game.undo()
        time.sleep(0.6)
        assert game.remaining_time(Color.WHITE) == 600
        assert game.remaining_time(Color.BLACK) == 600
    finally:
        game.shutdown()
