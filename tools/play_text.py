"""
Diagnostic script to play a game in the terminal without the Qt window.
Renders the same GameView the window uses, so engine behaviour can be
checked line by line. Exits once every group is revealed.

Commands:
    <word>   toggle a tile
    h        shuffle
    enter    submit (empty line)
    clear    deselect all
    space    reveal remaining
    q        quit
"""

import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from connections.game_engine import PuzzleEngine
from connections.input_map import intent_for_key, intent_for_tile
from connections.presentation import GameView, build_view
from connections.puzzle import DeselectAll


def render_text(view: GameView) -> str:
    """Render a GameView as plain text."""
    lines = [view.header, ""]
    for row in view.revealed_rows:
        lines.append(f"[{row.category.name:<6}] {', '.join(row.words)}  ({row.clue})")
    if view.revealed_rows:
        lines.append("")

    for row in view.board:
        cells = []
        for tile in row:
            marker = "!" if tile.already_guessed else ("*" if tile.selected else " ")
            cells.append(f"{marker}{tile.label:<10}")
        lines.append(" ".join(cells))

    lines.append("")
    lines.append(view.mistakes_text)
    lines.append("  ".join(
        f"[{b.label}]" if b.enabled else f"({b.label})" for b in view.buttons
    ))
    lines.append(view.status)
    return "\n".join(lines)


def main():
    engine = PuzzleEngine()

    while not engine.quit_requested:
        view = build_view(engine)
        print("\n" + render_text(view))
        if view.finished:
            break

        try:
            command = input("> ").strip()
        except EOFError:
            break

        if command == "":
            intent = intent_for_key("enter")
        elif command == "clear":
            intent = DeselectAll()
        elif engine.board.contains(command):
            intent = intent_for_tile(command)
        else:
            intent = intent_for_key(command)

        if intent is None:
            print(f"Unknown command: {command!r}")
            continue
        engine.dispatch(intent)

    print(engine.get_state_string())
    return 0


if __name__ == "__main__":
    sys.exit(main())
