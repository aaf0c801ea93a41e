r"""
Tokenizer: raw argument vector → flag bag + positional list.

Rules (left to right, one token lookahead)
- '--name=value'  → name: 'value' (split at the FIRST '='; the value is kept verbatim,
                    so '--env=NODE_ENV=production' → env: 'NODE_ENV=production').
- '--name value'  → name: 'value' when the next token is non-empty and does not start
                    with '-'; otherwise name: True.
- '-n value'      → same lookahead rule for a single-character short flag.
- '-abc'          → a, b, c: True (clustered short flags never take a value).
- '--'            → end of flags; every later token is positional.
- anything else   → positional (a lone '-' included), in encounter order.
- ''              → skipped.

Repeated keys accumulate: the first occurrence stores the raw value, the second turns
storage into a two-item list and later ones append. List items are always strings,
so a bare flag joining a list is stored as 'true'.
"""
import logging
from typing import NamedTuple

logger = logging.getLogger(__name__)


class Tokens(NamedTuple):
    """
    Result of tokenize().

    - flags: dict[str, True | str | list[str]] keyed by the raw flag name.
    - positionals: list[str] in encounter order.
    - spellings: dict[str, str] with the first spelling seen for each key
      ('--name' or '-n'), used to name flags in faults the way the user typed them.
    """
    flags: dict
    positionals: list
    spellings: dict

    def rekey(self, source, target, /):
        """
        move the value (and spelling) stored under source to target, in place.
        """
        self.flags[target] = self.flags.pop(source)
        self.spellings[target] = self.spellings.pop(source, target)


def _stringify(value):
    return "true" if value is True else str(value)


def _accumulate(tokens, key, value, spelling):
    flags = tokens.flags
    if key not in flags:
        flags[key] = value
        tokens.spellings[key] = spelling
    elif isinstance(existing := flags[key], list):
        existing.append(_stringify(value))
    else:
        flags[key] = [_stringify(existing), _stringify(value)]


def _takes(candidate):
    return bool(candidate) and not candidate.startswith("-")


def tokenize(args, /):
    """
    split an argument vector (program name excluded) into flags and positionals.

    parameters
    - args: Iterable[str]

    returns
    - Tokens(flags, positionals, spellings)

    errors
    - TypeError when an item is not a string.
    """
    args = list(args)
    if not all(isinstance(arg, str) for arg in args):
        raise TypeError("tokenize() argument must be an iterable of strings")
    tokens = Tokens({}, [], {})

    index = 0
    while index < len(args):
        arg = args[index]
        index += 1

        if not arg:
            continue

        if arg == "--":
            tokens.positionals.extend(filter(None, args[index:]))
            break

        if arg.startswith("--"):
            key, assigned, value = arg[2:].partition("=")
            if assigned:
                if key:
                    _accumulate(tokens, key, value, "--" + key)
            elif index < len(args) and _takes(args[index]):
                _accumulate(tokens, key, args[index], "--" + key)
                index += 1
            else:
                _accumulate(tokens, key, True, "--" + key)
        elif arg.startswith("-") and len(arg) > 1:
            key = arg[1:]
            if len(key) == 1:
                if index < len(args) and _takes(args[index]):
                    _accumulate(tokens, key, args[index], arg)
                    index += 1
                else:
                    _accumulate(tokens, key, True, arg)
            else:
                for char in key:
                    _accumulate(tokens, char, True, "-" + char)
        else:
            tokens.positionals.append(arg)

    logger.debug("tokenized %r into flags=%r positionals=%r", args, tokens.flags, tokens.positionals)
    return tokens


__all__ = (
    "Tokens",
    "tokenize",
)
