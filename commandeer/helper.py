"""
Help and version rendering (rich-based, color-aware).

Renderers
- render_help(config): program header, "USAGE <prog> a|b|c", a column-aligned COMMANDS
  section and a footer pointing at per-command help.
- render_command_help(config, name, command): header, "USAGE <prog> <name> [OPTIONS] [ARGS]"
  and one OPTIONS row per declared field: --kebab-name, -alias, description and a
  "(default: ...)" suffix (string defaults quoted, None defaults omitted).
- render_version(config): "<prog> v<version>".

Everything is derived from Config/Command metadata and the Schema capability
(fields, defaults, descriptions); nothing here inspects a validation library.

Palette keys
- header, usage-label, program-name, section-label, command-name, command-description,
  option-name, option-description, panel-title

Customization
- Define a mapping named __styles__ in __main__ to override any palette entry.
- When config.colorful is False, styling is suppressed entirely.
- When config.fancy is True, the help is framed in a rich Panel.
"""
from collections import defaultdict

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset, kebabize


def _palette(config):
    styles = defaultdict(str, {
        "header": "#737373",  # dim gray meta line
        "usage-label": "bold",
        "program-name": "#36C5F0",  # sky-blue, same as command names
        "section-label": "bold",
        "command-name": "#36C5F0",
        "command-description": "",
        "option-name": "#36C5F0",
        "option-description": "",
        "panel-title": "bold #FF4D94",  # magenta branding
    } | getattr(__import__("__main__"), "__styles__", {}))

    def styler(style):
        return styles[style] if config.colorful else ""

    return styler


def _render(config, renders, console, title):
    # Trailing newline of the last chunk would print an extra blank line
    renders[-1].rstrip()
    renderable = Group(*renders)
    if config.fancy:
        styler = _palette(config)
        renderable = Panel(
            renderable,
            title=Text.assemble("[", " ", f"{title} HELP".upper(), " ", "]", style=styler("panel-title")),
            title_align="left",
        )
    (console or Console()).print(renderable, highlight=False, soft_wrap=True)


def _header(config, descr=None, name=None):
    """
    "<descr> (<prog> <name> v<version>)" or None when there is nothing to show.
    """
    meta = config.meta
    parts = [descr] if descr else []
    metas = [part for part in (meta.name, name) if part]
    if meta.version:
        metas.append(f"v{meta.version}")
    if metas:
        parts.append("(%s)" % " ".join(metas))
    if not parts:
        return None
    return Text(" ".join(parts) + "\n", _palette(config)("header"))


def format_default(value, /):
    """
    help representation of a declared default: strings are double-quoted, everything
    else uses its natural str() form.
    """
    if isinstance(value, str):
        return f'"{value}"'
    return str(value)


def render_help(config, /, *, console=None):
    """
    write the top-level help (every registered command) to console (stdout by default).
    """
    styler = _palette(config)
    renders = []

    if header := _header(config, config.meta.descr):
        renders.append(header)

    commands = config.commands
    usage = Text()
    usage.append("USAGE", styler("usage-label")).append(" ")
    usage.append(f"{config.prog} {'|'.join(commands)}", styler("program-name"))
    renders.append(usage.append("\n"))

    section = Text()
    section.append("COMMANDS", styler("section-label")).append("\n")
    renders.append(section)

    width = max(map(len, commands), default=0)
    rows = []
    for name, command in commands.items():
        row = Text("  ").append(name, styler("command-name"))
        row.append(" " * max(2, width - len(name) + 4))
        rows.append(row.append(command.descr or "", styler("command-description")))
    if rows:
        renders.append(Text("\n").join(rows))

    if config.meta.name:
        footer = Text("\n")
        footer.append("Use ").append(f"{config.meta.name} <command> --help", styler("program-name"))
        footer.append(" for more information about a command.")
        renders.append(footer)

    _render(config, renders, console, config.prog)


def render_command_help(config, name, command, /, *, console=None):
    """
    write the help of one command (usage and options table) to console.
    """
    styler = _palette(config)
    renders = []

    if header := _header(config, command.descr, name):
        renders.append(header)

    usage = Text()
    usage.append("USAGE", styler("usage-label")).append(" ")
    line = f"{config.prog} {name}"
    if command.options:
        line += " [OPTIONS]"
    if command.args:
        line += " [ARGS]"
    usage.append(line, styler("program-name"))
    renders.append(usage.append("\n"))

    if options := command.options:
        section = Text()
        section.append("OPTIONS", styler("section-label")).append("\n")
        renders.append(section)

        rows = []
        for field in options.schema.fields.values():
            label = Text("  ")
            label.append(f"--{kebabize(field.name)}", styler("option-name"))
            if alias := options.alias(field.name):
                label.append(", ").append(f"-{alias}", styler("option-name"))

            descr = field.descr or ""
            if field.default is not Unset and field.default is not None:
                descr += (" " if descr else "") + f"(default: {format_default(field.default)})"
            rows.append((label, descr))

        width = max((len(label) for label, _ in rows), default=0)
        table = [
            label.append(" " * max(2, width - len(label) + 4)).append(descr, styler("option-description"))
            for label, descr in rows
        ]
        if table:
            renders.append(Text("\n").join(table))

    _render(config, renders, console, f"{config.prog} {name}")


def render_version(config, /, *, console=None):
    """
    write "<prog> v<version>" to console.
    """
    styler = _palette(config)
    version = Text()
    version.append(config.prog, styler("program-name")).append(" ")
    version.append(f"v{config.meta.version}")
    (console or Console()).print(version, highlight=False, soft_wrap=True)


__all__ = (
    "format_default",
    "render_help",
    "render_command_help",
    "render_version",
)
