"""
The Game class will be the entrypoint into the domain layer for the service layer.
It is responsible for orchestrating all the business logic required to play a turn of the board game -->
passes this information to the service layer, which can then pass it onwards to the API layer.

One Game owns everything that changes during play: the history (and so the board and whose turn it is), the selected
square, the suggested move, both clocks, and the game status. Every public method holds the same lock, so a clock tick
can never interleave with a move being committed.
"""

import logging
import random
import threading
from typing import Optional

from src.chess.board import Board
from src.chess.check import classify, leaves_king_in_check
from src.chess.clock import ChessClock, Ticker
from src.chess.history import History
from src.chess.moves import Move, is_legal_shape
from src.chess.pieces import Color
from src.chess.resolver import resolve_move
from src.chess.square import Square
from src.chess.suggestion import suggest_move
from src.core.config import Settings
from src.core.models import GameSnapshot, MoveModel, SelectionOutcome
from src.core.shared_types import Status

_log = logging.getLogger(__name__)


class Game:
    def __init__(
        self,
        settings: Optional[Settings] = None,
        starting_board: Optional[Board] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.settings = settings or Settings()
        self._starting_board = starting_board or Board.initial()
        self._rng = rng or random.Random(self.settings.suggestion_seed)
        self._lock = threading.RLock()
        self._ticker: Optional[Ticker] = None

        self.history = History(self._starting_board)
        self.clock = ChessClock(self.settings.starting_time_seconds)
        self.selected: Optional[Square] = None
        self.suggested: Optional[Move] = None
        self.started = False
        self.status = Status.IN_PROGRESS
        self.winner: Optional[Color] = None

    # --- READ-ONLY VIEW ---
    @property
    def board(self) -> Board:
        return self.history.current

    @property
    def turn(self) -> Color:
        return self.history.turn

    @property
    def game_over(self) -> bool:
        return self.status != Status.IN_PROGRESS

    @property
    def last_move(self) -> Optional[Move]:
        return self.history.last_move

    def remaining_time(self, color: Color) -> int:
        return self.clock.remaining[color]

    def snapshot(self) -> GameSnapshot:
        with self._lock:
            return GameSnapshot(
                board=self.board.rows(),
                turn=self.turn.name.lower(),
                selected_square=(
                    (self.selected.row, self.selected.col) if self.selected else None
                ),
                suggested_move=_to_move_model(self.suggested),
                last_move=_to_move_model(self.last_move),
                remaining_time={
                    color.name.lower(): seconds
                    for color, seconds in self.clock.remaining.items()
                },
                started=self.started,
                game_over=self.game_over,
                status=str(self.status),
                winner=self.winner.name.lower() if self.winner else None,
                can_undo=self.history.can_undo(),
                can_redo=self.history.can_redo(),
            )

    # --- EVENTS FROM THE PRESENTATION LAYER ---
    def handle_square_select(self, row: int, col: int) -> SelectionOutcome:
        """
        A click on a square
        ----

        * no square selected yet: select it, if it holds a piece of the side to move
        * clicking the selected square again: deselect
        * any other square: attempt the move from the selected square. Deselects whether or not the move was legal.
        """
        with self._lock:
            square = Square(row, col)
            if not self._is_playable() or not square.is_within_bounds():
                _log.debug("Ignoring selection of (%s, %s)", row, col)
                return self._outcome(selection_changed=False, move_committed=False)

            if self.selected is None:
                piece = self.board.piece(square)
                if piece is None or piece.color != self.turn:
                    return self._outcome(selection_changed=False, move_committed=False)
                self.selected = square
                return self._outcome(selection_changed=True, move_committed=False)

            if square == self.selected:
                self.selected = None
                return self._outcome(selection_changed=True, move_committed=False)

            committed = self.commit(Move(self.selected, square))
            return self._outcome(selection_changed=True, move_committed=committed)

    def commit(self, move: Move) -> bool:
        """
        Attempt to make a move
        -----

        1. game must be started and still in progress
        2. the piece on the starting square must belong to the side to move
        3. the move must be legal (shape + capture rules, and own king safety if configured)
        4. resolve the special moves into the next board, append it to the history (turn passes to the opponent)
        5. update game status, and restart the clock interval for the side now to move

        The selection is cleared in every case.
        """
        with self._lock:
            self.selected = None
            if not self._is_playable():
                return False

            color = self.turn
            if not move.from_square.is_within_bounds():
                return False
            piece = self.board.piece(move.from_square)
            if piece is None or piece.color != color:
                _log.debug("Not %s's piece on %s", color.name.lower(), move.from_square)
                return False

            if not is_legal_shape(self.board, self.history.active_line, move):
                _log.debug("Illegal move %s", move.to_algebraic())
                return False

            if self.settings.enforce_king_safety and leaves_king_in_check(
                self.board, move, color
            ):
                _log.debug("Move %s leaves own king in check", move.to_algebraic())
                return False

            new_board = resolve_move(self.board, move)
            self.history.commit(move, new_board)
            self.suggested = None
            _log.info("%s played %s", color.name.lower(), move.to_algebraic())

            self._update_game_status()
            self._restart_ticker()
            return True

    def undo(self) -> bool:
        with self._lock:
            if not self._is_playable():
                return False
            return self._after_navigation(self.history.undo())

    def redo(self) -> bool:
        with self._lock:
            if not self._is_playable():
                return False
            return self._after_navigation(self.history.redo())

    def reset(self) -> None:
        """Back to the starting position, game not started. Any running clock is stopped first."""
        with self._lock:
            self._stop_ticker()
            self.history.reset(self._starting_board)
            self.clock.reset()
            self.selected = None
            self.suggested = None
            self.started = False
            self.status = Status.IN_PROGRESS
            self.winner = None
            _log.info("Game reset")

    def start_game(self) -> bool:
        with self._lock:
            if self.started:
                return False
            self.started = True
            _log.info("Game started")
            # a custom starting position may already be decided
            self._update_game_status()
            self._restart_ticker()
            return True

    def suggest_move(self) -> Optional[Move]:
        with self._lock:
            if not self._is_playable():
                return None
            self.suggested = suggest_move(
                self.board, self.history.active_line, self.turn, self._rng
            )
            return self.suggested

    def tick(self) -> bool:
        """
        One second passes on the clock of the side to move.

        Returns False (and does nothing) before the start or after the end of the game.
        """
        with self._lock:
            if not self._is_playable():
                return False

            color = self.turn
            if self.clock.tick(color):
                self.status = Status.OUT_OF_TIME
                self.winner = color.opponent
                self._stop_ticker()
                _log.info("%s ran out of time", color.name.lower())
            return True

    def shutdown(self) -> None:
        """Stop the background clock (when the game gets discarded)"""
        with self._lock:
            self._stop_ticker()

    # -- PRIVATE HELPERS ---
    def _is_playable(self) -> bool:
        return self.started and not self.game_over

    def _outcome(self, selection_changed: bool, move_committed: bool) -> SelectionOutcome:
        return SelectionOutcome(
            selection_changed=selection_changed,
            move_committed=move_committed,
            status=str(self.status),
        )

    def _after_navigation(self, moved: bool) -> bool:
        if moved:
            self.selected = None
            self.suggested = None
            self._restart_ticker()
        return moved

    def _update_game_status(self) -> None:
        """Checks whether the side that is to move now can still play.

        NOTE the history has already been updated. At this point the side to move is the opponent of the player who moved.
        """
        side_to_move = self.turn
        status = classify(self.board, self.history.active_line, side_to_move)
        if status == Status.IN_PROGRESS:
            return

        self.status = status
        self.winner = side_to_move.opponent if status == Status.CHECKMATE else None
        self._stop_ticker()
        _log.info("Game over: %s", status)

    def _on_tick(self, ticker: Ticker) -> bool:
        """Callback of the background ticker. Tells it whether to keep going."""
        with self._lock:
            if ticker is not self._ticker:
                # left over from before a reset
                return False
            self.tick()
            return self._is_playable()

    def _restart_ticker(self) -> None:
        """A fresh interval for the side that just came on move"""
        self._stop_ticker()
        if self.settings.run_clock and self._is_playable():
            self._ticker = Ticker(self.settings.tick_interval_seconds, self._on_tick)
            self._ticker.start()

    def _stop_ticker(self) -> None:
        if self._ticker is not None:
            self._ticker.stop()
            self._ticker = None


def _to_move_model(move: Optional[Move]) -> Optional[MoveModel]:
    if move is None:
        return None
    return MoveModel(
        from_square=(move.from_square.row, move.from_square.col),
        to_square=(move.to_square.row, move.to_square.col),
    )
