"""
Flag-bag resolution stages between the tokenizer and the schema validator.

Stages (always in this order)
1. resolve_aliases: alias key → canonical name (the alias value wins).
2. resolve_kebab_case: hyphenated spelling → canonical name, for declared names only.
3. detect_unknown: reject any key that is neither declared nor reserved.
4. normalize_arrays: wrap lone values of array-typed fields into a one-item list.

Each stage returns a new Tokens/dict; inputs are never mutated.
"""
import logging

from .faults import UnknownOptionError
from .tokens import Tokens
from .utils import kebabize

logger = logging.getLogger(__name__)

RESERVED = frozenset({"help", "version"})


def _copy(tokens):
    return Tokens(dict(tokens.flags), list(tokens.positionals), dict(tokens.spellings))


def resolve_aliases(tokens, aliases=None, /):
    """
    replace alias keys with their canonical names.

    aliases are applied in mapping order; when both an alias and its canonical key
    are present, the alias value overrides the canonical one.

    example
    - {v: True, verbose: False} with {v: "verbose"} → {verbose: True}
    """
    if not aliases:
        return tokens
    resolved = _copy(tokens)
    for alias, target in aliases.items():
        if alias in resolved.flags:
            resolved.rekey(alias, target)
    return resolved


def resolve_kebab_case(tokens, names, /):
    """
    move hyphenated spellings onto the canonical names declared by a schema.

    a canonical name already present wins: its hyphenated spelling is left untouched
    (and will normally be reported as unknown afterwards).

    example
    - {"android-max": "10"} with names {"androidMax"} → {androidMax: "10"}
    """
    resolved = _copy(tokens)
    for name in names:
        if name in resolved.flags:
            continue
        if (kebab := kebabize(name)) != name and kebab in resolved.flags:
            resolved.rekey(kebab, name)
    return resolved


def detect_unknown(tokens, names, /, **options):
    """
    raise UnknownOptionError unless every key is declared or reserved.

    parameters
    - tokens: resolved Tokens.
    - names: declared canonical names (empty when the command has no option schema).
    - **options: extra fault context (prog, command).

    the fault names the flag the way it was typed ('--unknown', '-x'); every unknown
    spelling is available under options["unknown"].
    """
    unknown = [
        tokens.spellings.get(key, "--" + key)
        for key in tokens.flags
        if key not in RESERVED and key not in names
    ]
    if not unknown:
        return

    command = options.get("command")
    where = " for command %r" % command if command else ""
    if len(unknown) == 1:
        message = "unknown option %r%s" % (unknown[0], where)
    else:
        message = "unknown options %s%s" % (", ".join(map(repr, unknown)), where)

    route = " ".join(filter(None, (options.get("prog"), command)))
    raise UnknownOptionError(
        message,
        title="unknown option",
        input=unknown[0],
        unknown=tuple(unknown),
        hint="run '%s --help' to see all available options" % route if route else "remove the option and try again",
        **options,
    )


def normalize_arrays(flags, schema, /):
    """
    wrap lone values of array-typed fields into a single-item list.

    fields that are absent, or whose value already is a list, are left as they are.
    """
    normalized = dict(flags)
    for name, field in schema.fields.items():
        if field.array and name in normalized and not isinstance(normalized[name], list):
            normalized[name] = [normalized[name]]
    return normalized


__all__ = (
    "RESERVED",
    "resolve_aliases",
    "resolve_kebab_case",
    "detect_unknown",
    "normalize_arrays",
)
