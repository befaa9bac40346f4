"""
Test script for PuzzleEngine state machine

Plays scripted games against the default puzzle to check:
1. Correct guesses shrink the board and reveal groups in order
2. Wrong guesses cost a mistake and keep the selection
3. Repeated guesses cannot be resubmitted
4. Reveal-remaining once mistakes are exhausted
5. Ignored intents leave state untouched
6. Group queries cannot change membership

Usage:
    python tests/test_engine.py
"""

import itertools
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from connections.game_engine import PuzzleEngine, GamePhase, InvariantError
from connections.puzzle import (
    Category,
    Revealer,
    PuzzleDefinition,
    PuzzleDefinitionError,
    ToggleTile,
    Shuffle,
    DeselectAll,
    Submit,
    RevealRemaining,
    Quit,
)


RIVERS = ["Amazon", "Nile", "Yangtze", "Danube"]
FRUITS = ["Plum", "Apple", "Orange", "Kiwi"]
BALLS = ["Basket", "Hand", "Base", "Foot"]
LICENSES = ["MIT", "Apache", "Mozilla", "BSD"]
WRONG = ["Amazon", "Nile", "Plum", "Apple"]
WRONG_AFTER_FRUITS = ["Amazon", "Nile", "Base", "Hand"]


def make_engine(mistakes_allowed: int = 4, clock=None) -> PuzzleEngine:
    """Engine over the default puzzle with an unshuffled board and a ticking clock."""
    if clock is None:
        clock = itertools.count(100).__next__
    return PuzzleEngine(mistakes_allowed=mistakes_allowed, clock=clock, shuffle_on_start=False)


def guess(engine: PuzzleEngine, words) -> None:
    """Select exactly these words and submit."""
    engine.dispatch(DeselectAll())
    for word in words:
        engine.dispatch(ToggleTile(word))
    engine.dispatch(Submit())


def assert_group_order(engine: PuzzleEngine) -> None:
    """Revealed prefix sorted by reveal time, unrevealed suffix sorted by category."""
    groups = engine.groups
    revealed = engine.revealed_groups()
    unrevealed = list(groups[len(revealed):])

    assert all(not g.is_unrevealed() for g in revealed)
    assert all(g.is_unrevealed() for g in unrevealed)
    times = [g.revealed_at for g in revealed]
    assert times == sorted(times), times
    categories = [g.category for g in unrevealed]
    assert categories == sorted(categories), categories


def test_initial_state():
    """Test the starting layout and group ordering."""
    print("\n" + "="*60)
    print("TEST: Initial State")
    print("="*60)

    engine = make_engine()
    print(f"  Board: {engine.board.rows}x{engine.board.cols}")
    print(f"  State: {engine.get_state_string()}")

    assert engine.board.rows == 4 and engine.board.cols == 4
    assert engine.group_size == 4
    assert engine.mistakes_remaining == 4
    assert engine.phase is GamePhase.PLAYING
    assert [g.category for g in engine.groups] == [
        Category.YELLOW, Category.GREEN, Category.BLUE, Category.PURPLE
    ]
    assert engine.selection.size() == 0
    assert not engine.can_submit()
    assert engine.can_shuffle()
    assert not engine.can_deselect_all()
    assert not engine.can_reveal_remaining()

    shuffled = PuzzleEngine()
    assert sorted(shuffled.board.flatten()) == sorted(RIVERS + FRUITS + BALLS + LICENSES)

    print("  [PASS] Initial state tests")


def test_correct_guess_reshapes_board():
    """Test a correct guess on a 4x4 board leaves 3 rows of 4 without the group."""
    print("\n" + "="*60)
    print("TEST: Correct Guess Reshaping")
    print("="*60)

    engine = make_engine()
    engine.dispatch(Shuffle())
    guess(engine, FRUITS)

    board = engine.board
    print(f"  Board after guess: {board.rows}x{board.cols}")
    assert board.rows == 3 and board.cols == 4
    assert not any(board.contains(word) for word in FRUITS)
    assert engine.selection.size() == 0
    assert engine.mistakes_remaining == 4

    first = engine.groups[0]
    assert first.clue == "Fruits."
    assert first.revealer is Revealer.PLAYER
    assert first.revealed_at == 100
    assert len(engine.revealed_groups()) == 1
    assert_group_order(engine)

    print("  [PASS] Correct guess tests")


def test_single_row_terminal_case():
    """Test solving the last group empties the board."""
    print("\n" + "="*60)
    print("TEST: Single Group Terminal Case")
    print("="*60)

    engine = make_engine()
    for words in (RIVERS, BALLS, LICENSES):
        guess(engine, words)
    assert engine.board.rows == 1

    guess(engine, FRUITS)
    print(f"  Board rows: {engine.board.rows}, state: {engine.get_state_string()}")
    assert engine.board.is_empty
    assert engine.is_solved()
    assert engine.phase is GamePhase.SOLVED
    assert not engine.can_submit()
    assert not engine.can_shuffle()
    assert [g.clue for g in engine.groups] == [
        "Rivers of the world.", "___ball", "OSI-approved Open Source licenses", "Fruits."
    ]

    print("  [PASS] Terminal case tests")


def test_wrong_guess_keeps_selection():
    """Test a wrong guess costs one mistake and keeps the selection."""
    print("\n" + "="*60)
    print("TEST: Wrong Guess")
    print("="*60)

    engine = make_engine()
    board_before = engine.board
    guess(engine, WRONG)

    assert engine.mistakes_remaining == 3
    assert engine.selection.size() == 4
    assert all(engine.is_selected(word) for word in WRONG)
    assert engine.board == board_before
    assert all(g.is_unrevealed() for g in engine.groups)

    print("  [PASS] Wrong guess tests")


def test_duplicate_guess_rejected():
    """Test resubmitting an identical selection is ignored."""
    print("\n" + "="*60)
    print("TEST: Duplicate Guess Rejection")
    print("="*60)

    engine = make_engine()
    guess(engine, WRONG)
    assert engine.mistakes_remaining == 3
    print(f"  History: {len(engine.history)} entries, can_submit={engine.can_submit()}")

    # Same tiles still selected: cannot submit although mistakes remain
    assert not engine.can_submit()
    assert engine.selection_already_guessed()
    engine.dispatch(Submit())
    assert engine.mistakes_remaining == 3
    assert len(engine.history) == 1

    # Re-selecting the same tiles in another order does not help
    guess(engine, list(reversed(WRONG)))
    assert engine.mistakes_remaining == 3
    assert len(engine.history) == 1

    # Changing one tile makes the selection submittable again
    engine.dispatch(ToggleTile("Apple"))
    engine.dispatch(ToggleTile("Kiwi"))
    assert engine.can_submit()
    engine.dispatch(Submit())
    assert engine.mistakes_remaining == 2
    assert len(engine.history) == 2

    print("  [PASS] Duplicate guess tests")


def test_mistake_exhaustion_and_reveal():
    """Test running out of mistakes unlocks reveal without clearing anything."""
    print("\n" + "="*60)
    print("TEST: Mistake Exhaustion / Reveal Remaining")
    print("="*60)

    engine = make_engine(mistakes_allowed=1)
    guess(engine, FRUITS)
    fruits = engine.groups[0]
    fruits_time = fruits.revealed_at

    guess(engine, WRONG_AFTER_FRUITS)
    print(f"  State: {engine.get_state_string()}")
    assert engine.mistakes_remaining == 0
    assert engine.phase is GamePhase.OUT_OF_MISTAKES
    assert engine.selection.size() == 4
    assert engine.board.rows == 3

    # Toggle, shuffle and submit are disabled
    board_before = engine.board
    engine.dispatch(ToggleTile("Amazon"))
    engine.dispatch(ToggleTile("MIT"))
    engine.dispatch(Shuffle())
    assert engine.selection.size() == 4
    assert engine.is_selected("Amazon")
    assert engine.board == board_before
    assert not engine.can_shuffle()

    assert engine.can_reveal_remaining()
    engine.dispatch(RevealRemaining())

    assert engine.board.is_empty
    assert engine.phase is GamePhase.REVEALED
    assert not engine.can_reveal_remaining()
    assert engine.groups[0] is fruits
    assert fruits.revealer is Revealer.PLAYER
    assert fruits.revealed_at == fruits_time
    for group in engine.groups[1:]:
        assert group.revealer is Revealer.COMPUTER
        assert group.revealed_at is not None
    assert_group_order(engine)

    # Revealing again changes nothing
    engine.dispatch(RevealRemaining())
    assert [g.revealer for g in engine.groups][1:] == [Revealer.COMPUTER] * 3

    # Deselect-all still works
    engine.dispatch(DeselectAll())
    assert engine.selection.size() == 0

    print("  [PASS] Mistake exhaustion tests")


def test_reveal_ordering_invariant():
    """Test revealed groups stay a time-ordered prefix across mixed guesses."""
    print("\n" + "="*60)
    print("TEST: Reveal Ordering Invariant")
    print("="*60)

    engine = make_engine(mistakes_allowed=3)
    script = [LICENSES, WRONG, BALLS, ["Amazon", "Nile", "Plum", "Kiwi"], RIVERS]
    for words in script:
        guess(engine, words)
        assert_group_order(engine)
        engine.check_invariants()

    order = [g.category for g in engine.groups]
    print(f"  Final order: {[c.name for c in order]}")
    assert order == [Category.PURPLE, Category.YELLOW, Category.GREEN, Category.BLUE]
    assert engine.mistakes_remaining == 1
    assert engine.board.rows == 1

    print("  [PASS] Reveal ordering tests")


def test_clock_never_goes_backwards():
    """Test reveal timestamps stay non-decreasing when the clock steps back."""
    print("\n" + "="*60)
    print("TEST: Monotonic Reveal Timestamps")
    print("="*60)

    times = iter([50.0, 10.0, 60.0])
    engine = make_engine(clock=lambda: next(times))
    guess(engine, BALLS)
    guess(engine, RIVERS)
    guess(engine, FRUITS)

    stamps = [g.revealed_at for g in engine.revealed_groups()]
    print(f"  Timestamps: {stamps}")
    assert stamps == [50.0, 50.0, 60.0]
    assert [g.clue for g in engine.revealed_groups()] == ["___ball", "Rivers of the world.", "Fruits."]

    print("  [PASS] Monotonic timestamp tests")


def test_ignored_intents():
    """Test intents whose preconditions fail leave state untouched."""
    print("\n" + "="*60)
    print("TEST: Ignored Intents")
    print("="*60)

    engine = make_engine()

    # Tile not on the board
    engine.dispatch(ToggleTile("Thames"))
    assert engine.selection.size() == 0

    # Selection is capped at the group size
    for word in ["Amazon", "Nile", "Plum", "Apple", "MIT"]:
        engine.dispatch(ToggleTile(word))
    assert engine.selection.size() == 4
    assert not engine.is_selected("MIT")

    # Partial selection cannot be submitted
    engine.dispatch(ToggleTile("Apple"))
    engine.dispatch(Submit())
    assert engine.mistakes_remaining == 4
    assert len(engine.history) == 0

    # Reveal needs mistakes to be exhausted
    engine.dispatch(RevealRemaining())
    assert all(g.is_unrevealed() for g in engine.groups)

    # Tiles of a solved group can no longer be toggled
    guess(engine, FRUITS)
    engine.dispatch(ToggleTile("Plum"))
    assert not engine.is_selected("Plum")

    try:
        engine.dispatch("submit")
    except TypeError:
        pass
    else:
        raise AssertionError("Unknown intent should raise TypeError")

    print("  [PASS] Ignored intent tests")


def test_quit():
    """Test quit flags the session without touching the puzzle."""
    print("\n" + "="*60)
    print("TEST: Quit")
    print("="*60)

    engine = make_engine()
    engine.dispatch(ToggleTile("Nile"))
    board_before = engine.board

    assert not engine.quit_requested
    engine.dispatch(Quit())
    assert engine.quit_requested
    assert engine.board == board_before
    assert engine.is_selected("Nile")
    assert engine.mistakes_remaining == 4

    print("  [PASS] Quit tests")


def test_group_queries_are_read_only():
    """Test changing a queried group's members leaves the engine intact."""
    print("\n" + "="*60)
    print("TEST: Read-only Group Queries")
    print("="*60)

    engine = make_engine()
    first = engine.groups[0]

    members = first.members
    members.add("Thames")
    members.remove(first.sorted_members()[0])
    assert first.size == 4
    assert not first.has_member("Thames")
    engine.check_invariants()

    try:
        first.words.add("Thames")
    except AttributeError:
        pass
    else:
        raise AssertionError("Group words should not be mutable")
    engine.check_invariants()

    # Game still plays through normally
    guess(engine, RIVERS)
    assert engine.revealed_groups()[0].clue == "Rivers of the world."

    print("  [PASS] Read-only group query tests")


def test_invalid_setup():
    """Test bad puzzles and budgets are rejected at construction."""
    print("\n" + "="*60)
    print("TEST: Invalid Setup")
    print("="*60)

    shared = PuzzleDefinition.from_dicts([
        {"members": ["a", "b"], "clue": "one", "category": "yellow"},
        {"members": ["b", "c"], "clue": "two", "category": "green"},
    ])
    for kwargs in ({"definition": shared}, {"mistakes_allowed": -1}):
        try:
            PuzzleEngine(**kwargs)
        except ValueError:
            pass
        else:
            raise AssertionError(f"PuzzleEngine({kwargs}) should raise")

    assert issubclass(PuzzleDefinitionError, ValueError)

    # Small custom puzzle: groups of two
    pairs = PuzzleDefinition.from_dicts([
        {"members": ["cat", "dog"], "clue": "Pets", "category": "purple"},
        {"members": ["red", "blue"], "clue": "Colours", "category": "yellow"},
    ])
    engine = PuzzleEngine(pairs, mistakes_allowed=2)
    assert engine.group_size == 2
    assert engine.board.rows == 2 and engine.board.cols == 2
    guess(engine, ["cat", "dog"])
    assert engine.board.rows == 1 and engine.board.cols == 2

    # Corrupted state is caught
    engine.state.board = engine.state.board.clear()
    try:
        engine.check_invariants()
    except InvariantError:
        pass
    else:
        raise AssertionError("check_invariants should detect missing tiles")

    print("  [PASS] Invalid setup tests")


def main():
    """Run all tests."""
    print("\n" + "#"*60)
    print("# ENGINE TESTS")
    print("#"*60)

    tests = [
        ("Initial State", test_initial_state),
        ("Correct Guess", test_correct_guess_reshapes_board),
        ("Terminal Case", test_single_row_terminal_case),
        ("Wrong Guess", test_wrong_guess_keeps_selection),
        ("Duplicate Guess", test_duplicate_guess_rejected),
        ("Mistake Exhaustion", test_mistake_exhaustion_and_reveal),
        ("Reveal Ordering", test_reveal_ordering_invariant),
        ("Monotonic Clock", test_clock_never_goes_backwards),
        ("Ignored Intents", test_ignored_intents),
        ("Quit", test_quit),
        ("Read-only Groups", test_group_queries_are_read_only),
        ("Invalid Setup", test_invalid_setup),
    ]

    results = []
    for name, test in tests:
        try:
            test()
            results.append((name, True))
        except AssertionError as e:
            print(f"  [FAIL] {e}")
            results.append((name, False))

    print("\n" + "="*60)
    print("SUMMARY")
    print("="*60)

    all_passed = True
    for name, passed in results:
        status = "PASS" if passed else "FAIL"
        print(f"  {name}: [{status}]")
        if not passed:
            all_passed = False

    print()
    if all_passed:
        print("All tests PASSED!")
        return 0
    else:
        print("Some tests FAILED!")
        return 1


if __name__ == "__main__":
    sys.exit(main())
