from .contract import VERB_ALIASES, VERB_ORDER, canonical_verb, verbs_csv
from .dispatch import CommandInterpreter, CommandResult
from .parser import Command, InvalidCommand, ParsedDuration, parse_command, parse_duration

__all__ = [
    "Command",
    "CommandInterpreter",
    "CommandResult",
    "InvalidCommand",
    "ParsedDuration",
    "VERB_ALIASES",
    "VERB_ORDER",
    "canonical_verb",
    "parse_command",
    "parse_duration",
    "verbs_csv",
]
