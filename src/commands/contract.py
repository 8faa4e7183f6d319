"""Canonical command verbs and the aliases accepted for each."""

from __future__ import annotations

VERB_ADD = "add"
VERB_ADD_RIGHT = "add2"
VERB_ADD_REVERSED = "addr"
VERB_ADD_POMODORO = "addp"
VERB_REMOVE = "rm"
VERB_CLEAR = "clear"
VERB_MOVE = "move"
VERB_MOVE_UP = "moveup"
VERB_MOVE_DOWN = "movedown"
VERB_MERGE = "merge"
VERB_PLUS = "plus"
VERB_MINUS = "minus"
VERB_RENAME = "rename"
VERB_REPEAT = "repeat"
VERB_PAUSE = "pause"
VERB_SAVE_SET = "save"
VERB_LOAD_SET = "load"
VERB_DELETE_SET = "delset"
VERB_LIST_SETS = "sets"
VERB_SET = "set"

VERB_ORDER: tuple[str, ...] = (
    VERB_ADD,
    VERB_ADD_RIGHT,
    VERB_ADD_REVERSED,
    VERB_ADD_POMODORO,
    VERB_REMOVE,
    VERB_CLEAR,
    VERB_MOVE,
    VERB_MOVE_UP,
    VERB_MOVE_DOWN,
    VERB_MERGE,
    VERB_PLUS,
    VERB_MINUS,
    VERB_RENAME,
    VERB_REPEAT,
    VERB_PAUSE,
    VERB_SAVE_SET,
    VERB_LOAD_SET,
    VERB_DELETE_SET,
    VERB_LIST_SETS,
    VERB_SET,
)

VERB_ALIASES: dict[str, str] = {
    **{verb: verb for verb in VERB_ORDER},
    "a": VERB_ADD,
    "ar": VERB_ADD_REVERSED,
    "mv": VERB_MOVE,
    "mu": VERB_MOVE_UP,
    "md": VERB_MOVE_DOWN,
    "p": VERB_PLUS,
    "m": VERB_MINUS,
    "rn": VERB_RENAME,
    "rp": VERB_REPEAT,
}

ADD_VERBS: frozenset[str] = frozenset({VERB_ADD, VERB_ADD_RIGHT, VERB_ADD_REVERSED})

# Set-directory verbs that leave the timer list and settings untouched.
SET_STORE_VERBS: frozenset[str] = frozenset({VERB_LIST_SETS, VERB_SAVE_SET, VERB_DELETE_SET})

# Verbs whose result is not written to the state file.
TRANSIENT_VERBS: frozenset[str] = frozenset({VERB_PAUSE}) | SET_STORE_VERBS


def canonical_verb(raw: str) -> str | None:
    return VERB_ALIASES.get(raw)


def verbs_csv() -> str:
    """Return canonical verbs as `a, b, c` for help output."""
    return ", ".join(VERB_ORDER)
