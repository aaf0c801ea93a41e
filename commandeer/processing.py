"""
Commandeer processing: argument vector → resolved command, options and arguments.

Entry points
- process(config, args) → Outcome
  The embeddable core. Never exits the process: help/version requests come back as
  tagged outcomes (Status.HELP_DISPLAYED / Status.VERSION_DISPLAYED) and failures are
  raised as CommandException subclasses.
- process_config(config, args) → ProcessResult
  Process-level wrapper: help/version outcomes terminate with exit status 0.
- invoke(config, args)
  Runner: process, then call command.action(options, args) (coroutines included),
  surfacing faults through trigger() with the config's shell/fancy/colorful switches.

Command resolution (first positional = candidate command name)
1. none + help        → top-level help, HELP_DISPLAYED.
2. none + version     → version line, VERSION_DISPLAYED (only when a version is configured).
3. none + default     → default command; ALL positionals are its arguments.
4. none               → top-level help, NoCommandError.
5. unregistered name  → top-level help, UnknownCommandError.
6. registered + help  → command help, HELP_DISPLAYED.
7. registered         → that command; the remaining positionals are its arguments.

Routing pipeline
    tokenize → resolve_aliases → resolve_kebab_case → detect_unknown
             → normalize_arrays → validate options → validate positionals
"""
import asyncio
import inspect
import logging
import shlex
import sys
from enum import Enum
from typing import Any, NamedTuple

from .config import Command
from .faults import NoCommandError, UnknownCommandError, ValidationFailedError, CommandException, trigger
from .helper import render_help, render_command_help, render_version
from .resolution import RESERVED, resolve_aliases, resolve_kebab_case, detect_unknown, normalize_arrays
from .tokens import tokenize
from .utils import Unset

logger = logging.getLogger(__name__)


class Status(Enum):
    SUCCESS = "success"
    HELP_DISPLAYED = "help-displayed"
    VERSION_DISPLAYED = "version-displayed"


class ProcessResult(NamedTuple):
    command: Command
    options: Any
    args: Any


class Outcome(NamedTuple):
    """
    Tagged terminal outcome of one run: result is set only for Status.SUCCESS.
    """
    status: Status
    result: ProcessResult | None = None

    @property
    def terminal(self):
        """whether the run ended on a help/version display instead of a command."""
        return self.status is not Status.SUCCESS


def _argv(args):
    if args is Unset:
        return sys.argv[1:]
    if isinstance(args, str):
        return shlex.split(args)
    return list(args)


def _failed(kind, issues, **options):
    return ValidationFailedError(
        "%s validation failed: %s" % (kind, ", ".join(map(str, issues))),
        title="%s validation failed" % kind,
        issues=issues,
        hint="check the values given to the command against its help",
        **options,
    )


def _validate_options(config, name, command, tokens):
    """
    run the flag bag of a routed command through the resolution stages and its schema.
    """
    if not (options := command.options):
        detect_unknown(tokens, (), prog=config.prog, command=name)
        return None

    schema = options.schema
    tokens = resolve_aliases(tokens, options.aliases)
    tokens = resolve_kebab_case(tokens, schema.fields)
    detect_unknown(tokens, schema.fields, prog=config.prog, command=name)

    flags = {key: value for key, value in tokens.flags.items() if key not in RESERVED or key in schema}
    flags = normalize_arrays(flags, schema)
    logger.debug("validating options %r against %r", flags, schema)

    validation = schema.validate(flags)
    if not validation.ok:
        raise _failed("option", validation.issues, prog=config.prog, command=name)
    return validation.value


def _validate_args(config, name, command, positionals):
    if not (schema := command.args):
        return positionals

    logger.debug("validating arguments %r against %r", positionals, schema)
    validation = schema.validate(positionals)
    if not validation.ok:
        raise _failed("argument", validation.issues, prog=config.prog, command=name)
    return validation.value


def _execute(config, name, command, tokens, positionals):
    logger.debug("routing to command %r with arguments %r", name, positionals)
    options = _validate_options(config, name, command, tokens)
    args = _validate_args(config, name, command, positionals)
    return Outcome(Status.SUCCESS, ProcessResult(command, options, args))


def process(config, args=Unset, /, *, console=None):
    """
    process an argument vector against a Config and return an Outcome.

    parameters
    - config: Config registry.
    - args: Unset (sys.argv[1:]), a shell-like string (shlex.split) or an iterable of strings.
    - console: rich Console receiving help/version output (stdout by default).

    returns
    - Outcome(Status.SUCCESS, ProcessResult(command, options, args)) for a routed command;
      options is the validated model (None without an option schema) and args the
      validated positionals (the raw list without a positional schema).
    - Outcome(Status.HELP_DISPLAYED) / Outcome(Status.VERSION_DISPLAYED) after rendering.

    errors
    - NoCommandError, UnknownCommandError (top-level help is rendered first),
      UnknownOptionError, ValidationFailedError.
    """
    tokens = tokenize(_argv(args))
    positionals = tokens.positionals
    requested = tokens.flags.get("help") is True

    if not positionals:
        if requested:
            render_help(config, console=console)
            return Outcome(Status.HELP_DISPLAYED)
        if tokens.flags.get("version") is True and config.meta.version:
            render_version(config, console=console)
            return Outcome(Status.VERSION_DISPLAYED)
        if config.default:
            return _execute(config, None, config.default, tokens, list(positionals))
        render_help(config, console=console)
        raise NoCommandError(
            "no command specified",
            title="no command",
            prog=config.prog,
            hint="run '%s <command>' with one of: %s" % (config.prog, ", ".join(config.commands) or "<none>"),
        )

    name, *remaining = positionals
    if not (command := config.lookup(name)):
        render_help(config, console=console)
        raise UnknownCommandError(
            "unknown command %r" % name,
            title="unknown command",
            prog=config.prog,
            input=name,
            hint="run '%s --help' to see all available commands" % config.prog,
        )

    if requested:
        render_command_help(config, name, command, console=console)
        return Outcome(Status.HELP_DISPLAYED)

    return _execute(config, name, command, tokens, remaining)


def process_config(config, args=Unset, /, *, console=None):
    """
    process an argument vector and return its ProcessResult.

    help/version requests render their output and terminate the process with
    exit status 0; failures are raised as in process().
    """
    outcome = process(config, args, console=console)
    if outcome.terminal:
        sys.exit(0)
    return outcome.result


def invoke(config, args=Unset, /, *, console=None):
    """
    process an argument vector and run the selected command's action.

    behavior
    - help/version outcomes return None without calling any action.
    - the action is called as action(options, args); awaitable results are driven
      to completion with asyncio.run and their value is returned.
    - CommandExceptions go through trigger() with the config's switches: in shell mode
      the fault is printed to stderr and the process exits with status 1, otherwise
      the fault is raised.
    """
    try:
        outcome = process(config, args, console=console)
    except CommandException as fault:
        return trigger(fault, shell=config.shell, fancy=config.fancy, colorful=config.colorful)

    if outcome.terminal:
        return None

    command, options, arguments = outcome.result
    value = command.action(options, arguments)
    if inspect.isawaitable(value):
        value = asyncio.run(_await(value))
    return value


async def _await(awaitable):
    return await awaitable


__all__ = (
    "Status",
    "Outcome",
    "ProcessResult",
    "process",
    "process_config",
    "invoke",
)
