"""
Input Map Module - Translates raw key names and clicked widgets into intents.
"""

from typing import Dict, Optional

from connections.puzzle import (
    Intent, ToggleTile, Shuffle, DeselectAll, Submit, RevealRemaining, Quit,
)
from connections.presentation import (
    SHUFFLE_BUTTON, DESELECT_ALL_BUTTON, SUBMIT_BUTTON, REVEAL_BUTTON,
)


# Key bindings, matched case-sensitively first, then lower-cased
KEY_BINDINGS: Dict[str, Intent] = {
    "q": Quit(),
    "Q": Quit(),
    "ctrl+c": Quit(),
    "h": Shuffle(),
    "H": Shuffle(),
    " ": RevealRemaining(),
    "space": RevealRemaining(),
    "backspace": DeselectAll(),
    "enter": Submit(),
    "return": Submit(),
}

BUTTON_BINDINGS: Dict[str, Intent] = {
    SHUFFLE_BUTTON: Shuffle(),
    DESELECT_ALL_BUTTON: DeselectAll(),
    SUBMIT_BUTTON: Submit(),
    REVEAL_BUTTON: RevealRemaining(),
}


def intent_for_key(key: str) -> Optional[Intent]:
    """
    Map a key name to an intent.

    Args:
        key: Key name such as "h", "enter", "backspace" or "ctrl+c"

    Returns:
        Intent, or None if the key is unbound
    """
    if key in KEY_BINDINGS:
        return KEY_BINDINGS[key]
    return KEY_BINDINGS.get(key.lower())


def intent_for_button(label: str) -> Optional[Intent]:
    """Map an action button label to an intent, or None if unknown."""
    return BUTTON_BINDINGS.get(label)


def intent_for_tile(label: str) -> Intent:
    return ToggleTile(label)
