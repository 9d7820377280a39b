"""
Flipmatch CLI - Command-line interface for the engine.

Usage:
    flipmatch boards                 List board presets
    flipmatch play [--board NAME]    Play in the terminal (real-time timers)
    flipmatch demo [--board NAME]    Watch a scripted game on a simulated clock
"""

import argparse
import asyncio
import logging
import random
import sys

from .engine_core.action import MatchOutcome
from .engine_core.evaluator import HIDE_DELAY_MS
from .engine_core.renderer import Renderer
from .engine_core.scheduler import AsyncioScheduler, ManualScheduler
from .engine_core.state import GameConfigError, Outcome
from .games.boards import BOARDS, Board, get_board
from .session import GameController


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Flipmatch - Card-matching game engine",
        prog="flipmatch",
    )
    parser.add_argument("--log-level", default="WARNING", help="Logging level")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    subparsers.add_parser("boards", help="List board presets")

    play_parser = subparsers.add_parser("play", help="Play in the terminal")
    play_parser.add_argument("--board", default="classic", help="Board preset")
    play_parser.add_argument("--seed", type=int, default=None, help="Shuffle seed")

    demo_parser = subparsers.add_parser("demo", help="Run a scripted game")
    demo_parser.add_argument("--board", default="classic", help="Board preset")
    demo_parser.add_argument("--seed", type=int, default=None, help="Shuffle seed")
    demo_parser.add_argument(
        "--think-ms", type=int, default=500,
        help="Simulated delay between picks",
    )

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    try:
        if args.command == "boards":
            return cmd_boards(args)
        elif args.command == "play":
            return cmd_play(args)
        elif args.command == "demo":
            return cmd_demo(args)
    except GameConfigError as e:
        print(f"Error: {e}")
        return 1

    parser.print_help()
    return 1


class TerminalRenderer(Renderer):
    """Prints engine events as lines of text."""

    def __init__(self, board: Board, out=None):
        self.board = board
        self.out = out or sys.stdout
        self.faces: dict[int, str] = {}

    def render_board_reset(self, slot_count: int) -> None:
        self.faces = {slot: "??" for slot in range(slot_count)}
        self._print(f"New game: {slot_count} cards")
        self._print_grid()

    def render_reveal(self, slot_index: int, face_id: int) -> None:
        self.faces[slot_index] = f"{face_id:>2}"
        self._print(f"Slot {slot_index} shows {face_id}")

    def render_hide(self, slot_index: int) -> None:
        self.faces[slot_index] = "??"

    def render_matched(self, slot_index: int) -> None:
        self.faces[slot_index] = f"{self.faces[slot_index].strip()}*"

    def render_shake(self, slot_index: int) -> None:
        self._print(f"Slot {slot_index}: no match")

    def render_time_left(self, seconds: int) -> None:
        if seconds % 5 == 0 or seconds <= 3:
            self._print(f"Time left: {seconds}s")

    def render_moves(self, count: int) -> None:
        pass

    def render_session_ended(self, outcome: Outcome) -> None:
        self._print_grid()
        if outcome == Outcome.WON:
            self._print("All pairs found!")
        else:
            self._print("Time is up!")

    def _print_grid(self) -> None:
        columns = self.board.columns
        slots = sorted(self.faces)
        for start in range(0, len(slots), columns):
            row = slots[start:start + columns]
            self._print("  ".join(f"[{s:>2}:{self.faces[s]:>3}]" for s in row))

    def _print(self, text: str) -> None:
        print(text, file=self.out)


def cmd_boards(args):
    """List board presets."""
    for board in BOARDS.values():
        config = board.config
        timing = f"{config.max_time_seconds}s" if config.is_timed else "untimed"
        print(f"{board.name:<8} {board.rows}x{board.columns}  {config.pair_count} pairs  {timing}")
    return 0


def cmd_play(args):
    """Play a game in the terminal."""
    board = get_board(args.board)
    return asyncio.run(_play(board, args.seed))


async def _play(board: Board, seed):
    loop = asyncio.get_running_loop()
    renderer = TerminalRenderer(board)
    controller = GameController(
        AsyncioScheduler(loop),
        renderer=renderer,
        rng=random.Random(seed),
    )
    controller.new_game_from_config(board.config)
    print("Enter a slot number to flip it, 'r' to reshuffle, 'q' to quit.")

    while True:
        line = await loop.run_in_executor(None, input, "> ")
        line = line.strip().lower()
        if line in ("q", "quit", "exit"):
            break
        if line in ("r", "reset"):
            controller.reset()
            continue
        if not line.isdigit():
            print("Enter a slot number.")
            continue

        result = controller.pick(int(line))
        if not result.accepted:
            print(f"Ignored ({result.reason.value})")
        elif result.match == MatchOutcome.MATCH:
            renderer._print_grid()

    controller.close()
    return 0


def cmd_demo(args):
    """
    Play a scripted game on a simulated clock.

    The player remembers every face it has seen: it flips a remembered
    pair when it knows one, otherwise the lowest unseen slot.
    """
    board = get_board(args.board)
    config = board.config
    scheduler = ManualScheduler()
    renderer = TerminalRenderer(board)
    controller = GameController(scheduler, renderer=renderer, rng=random.Random(args.seed))

    # No auto reset: the demo stops at the first ending
    controller.new_game(
        pair_count=config.pair_count,
        mode=config.mode,
        max_time_seconds=config.max_time_seconds,
    )

    seen: dict[int, int] = {}
    session = controller.session
    while not session.is_terminal:
        first = _choose_first(controller, seen)
        controller.pick(first)
        seen[first] = controller.deck.card(first).face_id
        scheduler.advance(args.think_ms)
        if session.is_terminal:
            break

        second = _choose_second(controller, seen, first)
        result = controller.pick(second)
        if result.accepted:
            seen[second] = controller.deck.card(second).face_id
        if result.match == MatchOutcome.MISMATCH:
            scheduler.advance(HIDE_DELAY_MS)
        scheduler.advance(args.think_ms)

    print(
        f"Outcome: {session.phase.value} after {session.moves} moves, "
        f"{session.matched_pairs}/{session.total_pairs} pairs, "
        f"{scheduler.now_ms / 1000:.1f}s"
    )
    return 0


def _hidden_slots(controller: GameController) -> list[int]:
    return [card.slot_index for card in controller.deck if card.is_hidden]


def _choose_first(controller: GameController, seen: dict[int, int]) -> int:
    hidden = _hidden_slots(controller)
    by_face: dict[int, list[int]] = {}
    for slot in hidden:
        if slot in seen:
            by_face.setdefault(seen[slot], []).append(slot)
    for slots in by_face.values():
        if len(slots) == 2:
            return slots[0]

    unseen = [slot for slot in hidden if slot not in seen]
    return unseen[0] if unseen else hidden[0]


def _choose_second(controller: GameController, seen: dict[int, int], first: int) -> int:
    hidden = _hidden_slots(controller)
    face = seen[first]
    for slot in hidden:
        if seen.get(slot) == face:
            return slot

    unseen = [slot for slot in hidden if slot not in seen]
    return unseen[0] if unseen else hidden[0]


if __name__ == "__main__":
    sys.exit(main())
