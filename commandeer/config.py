"""
Commandeer definitions: options, commands and the command registry.

Overview
- Options(schema, aliases): option schema (a pydantic model or any Schema) plus an
  alias map (alias key → canonical field name), e.g. {"v": "verbose"}.
- Command(action, descr, options, args): one command; args is a positional schema
  (anything pydantic.TypeAdapter accepts, e.g. tuple[str, int]).
- Meta(name, version, descr): program metadata used by help and faults.
- Config(commands, meta, default, ...): the registry of named commands, an optional
  default command and runtime switches (colorful, fancy, shell).

Factories
- define_options(...), define_command(...), define_config(...) mirror the classes;
  define_command also works as a decorator.

Definitions are sanitized on construction (TypeError/ValueError on bad metadata)
and immutable afterwards: public attributes are read-only properties.

Example
    class Greet(BaseModel):
        name: str = Field(description="Name to greet")
        loud: bool = Field(False, description="Use uppercase")

    @define_command(descr="Greet someone", options=define_options(Greet, {"n": "name"}))
    def greet(options, args):
        print(f"Hello, {options.name}!")

    config = define_config({"greet": greet}, meta=Meta("simple-cli", "1.0.0"))
"""
from collections.abc import Mapping
from types import MappingProxyType
from typing import NamedTuple

from .schemas import TypeSchema, adapt
from .utils import Unset, coalesce, mirror, rename


def _sanitize_descr(descr, owner):
    if descr is Unset:
        return None
    if not isinstance(descr, str):
        raise TypeError(f"{owner}() descr must be a string")
    if not (descr := descr.strip()):
        raise ValueError(f"{owner}() descr must be a non-empty string")
    return descr


class Options:
    """
    Option schema of a command plus its alias map.

    - schema: Schema exposing named fields (pydantic models are adapted automatically).
    - aliases: read-only copy of the alias map, in registration order.
    """

    __slots__ = ("_schema", "_aliases")

    schema = mirror("schema")
    aliases = mirror("aliases")

    def __init__(self, schema, /, aliases=Unset):
        schema = adapt(schema)
        if isinstance(schema, TypeSchema):
            raise TypeError("Options() schema must be a pydantic model or a Schema with named fields")

        aliases = coalesce(aliases, {})
        if not isinstance(aliases, Mapping):
            raise TypeError("Options() aliases must be a mapping")
        for alias, target in aliases.items():
            if not isinstance(alias, str) or not isinstance(target, str):
                raise TypeError("Options() aliases must map strings to strings")
            if not alias or not target:
                raise ValueError("Options() aliases must map non-empty strings")

        self._schema = schema
        self._aliases = MappingProxyType(dict(aliases))

    def alias(self, name, /):
        """
        first alias registered for a canonical field name, or None.
        """
        return next((alias for alias, target in self._aliases.items() if target == name), None)

    def __rich_repr__(self):
        yield "schema", self._schema
        yield "aliases", dict(self._aliases), {}

    def __repr__(self):
        return f"Options({self._schema!r}, aliases={dict(self._aliases)!r})"


class Command:
    """
    A command definition: description, option schema, positional schema and action.

    The action is called by invoke() as action(options, args); it is not part of
    argument processing itself.
    """

    __slots__ = ("_action", "_descr", "_options", "_args")

    action = mirror("action")
    descr = mirror("descr")
    options = mirror("options")
    args = mirror("args")

    def __init__(self, action, /, descr=Unset, options=Unset, args=Unset):
        if not callable(action):
            raise TypeError("Command() action must be callable")

        if options is not Unset and not isinstance(options, Options):
            options = Options(options)

        self._action = action
        self._descr = _sanitize_descr(descr, "Command")
        self._options = coalesce(options)
        self._args = None if args is Unset else adapt(args)

    def __rich_repr__(self):
        yield "action", getattr(self._action, "__qualname__", self._action)
        yield "descr", self._descr, None
        yield "options", self._options, None
        yield "args", self._args, None

    def __repr__(self):
        return f"Command({getattr(self._action, '__qualname__', self._action)!s}, descr={self._descr!r})"


class Meta(NamedTuple):
    name: str | None = None
    version: str | None = None
    descr: str | None = None


class Config:
    """
    Command registry plus program metadata and runtime switches.

    - commands: ordered mapping name → Command (read-only copy).
    - default: Command routed when no command name is given (may also be registered).
    - meta: Meta(name, version, descr).
    - colorful/fancy/shell: rendering and fault-surfacing switches used by invoke().
    """

    __slots__ = ("_commands", "_default", "_meta", "_colorful", "_fancy", "_shell")

    commands = mirror("commands")
    default = mirror("default")
    meta = mirror("meta")
    colorful = mirror("colorful")
    fancy = mirror("fancy")
    shell = mirror("shell")

    def __init__(self, commands, /, meta=Unset, default=Unset, *, colorful=True, fancy=False, shell=True):
        if not isinstance(commands, Mapping):
            raise TypeError("Config() commands must be a mapping")
        for name, command in commands.items():
            if not isinstance(name, str):
                raise TypeError("Config() command names must be strings")
            if not name or name.startswith("-") or name != name.strip():
                raise ValueError(f"Config() command name {name!r} is not a valid command name")
            if not isinstance(command, Command):
                raise TypeError(f"Config() command {name!r} must be a Command")

        if default is not Unset and not isinstance(default, Command):
            raise TypeError("Config() default must be a Command")

        match meta:
            case Meta():
                pass
            case Mapping():
                meta = Meta(**meta)
            case _ if meta is Unset:
                meta = Meta()
            case _:
                raise TypeError("Config() meta must be a Meta or a mapping")

        for switch, value in (("colorful", colorful), ("fancy", fancy), ("shell", shell)):
            if not isinstance(value, bool):
                raise TypeError(f"Config() {switch} must be a boolean")

        self._commands = MappingProxyType(dict(commands))
        self._default = coalesce(default)
        self._meta = meta
        self._colorful = colorful
        self._fancy = fancy
        self._shell = shell

    @property
    def prog(self):
        """program name shown in usage lines (falls back to __main__.__prog__, then 'cli')."""
        return self._meta.name or getattr(__import__("__main__"), "__prog__", None) or "cli"

    def lookup(self, name, /):
        """registered Command for name, or None."""
        return self._commands.get(name)

    def __rich_repr__(self):
        yield "commands", dict(self._commands)
        yield "meta", self._meta, Meta()
        yield "default", self._default, None
        yield "colorful", self._colorful, True
        yield "fancy", self._fancy, False
        yield "shell", self._shell, True

    def __repr__(self):
        return f"Config({list(self._commands)!r}, meta={self._meta!r})"


def define_options(schema, /, aliases=Unset):
    """
    build an Options definition (schema + alias map).
    """
    return Options(schema, aliases)


def define_command(action=Unset, /, descr=Unset, options=Unset, args=Unset):
    """
    build a Command, or return a decorator that builds it from the decorated action.

    Invocation modes
    - define_command(action, descr=..., options=..., args=...) → Command
    - @define_command(descr=..., options=..., args=...) on a function → Command
    """
    @rename("define_command")
    def wrapper(action, /):
        if not callable(action):
            raise TypeError("@define_command() must be applied to a callable")
        return Command(action, descr, options, args)

    return wrapper(action) if action is not Unset else wrapper


def define_config(commands, /, meta=Unset, default=Unset, **switches):
    """
    build a Config (command registry); switches are colorful, fancy and shell.
    """
    return Config(commands, meta, default, **switches)


__all__ = (
    "Options",
    "Command",
    "Meta",
    "Config",
    "define_options",
    "define_command",
    "define_config",
)
