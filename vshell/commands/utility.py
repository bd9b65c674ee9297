"""Utility builtins: echo, clear, help, man, history, whoami, date, uname, alias, type."""

import re
from datetime import datetime, timezone

from ..result import CLEAR_SCREEN, CommandResult
from .registry import BUILTINS, CATEGORIES, builtin, commands_in, get_builtin

OS_NAME = 'PortfolioOS'
OS_FULL = 'PortfolioOS 1.5.0 portfolio-terminal x86_64 GNU/Linux'

ECHO_FLAGS = re.compile(r'^-[ne]+$')
ECHO_ESCAPES = {'n': '\n', 't': '\t', 'r': '\r', '\\': '\\'}
ALIAS_DEFINITION = re.compile(r'^(\w+)=(.+)$', re.DOTALL)


@builtin('echo', 'utility')
def echo(session, args, stdin=None):
    r"""Print text to output.

    Joins its arguments with single spaces and ends the line with a newline.

    Usage:
        echo [-n] [-e] [STRING...]

    Options:
        -n    Do not output trailing newline
        -e    Enable interpretation of backslash escapes

    Escapes:
        \n    newline
        \t    horizontal tab
        \r    carriage return
        \\    backslash

    Examples:
        echo "Hello World"
        echo -n "No newline"
        echo -e 'Line 1\\nLine 2'
    """
    if not args:
        return CommandResult.ok()

    no_newline = False
    escapes = False
    index = 0
    while index < len(args) and ECHO_FLAGS.match(args[index]):
        no_newline = no_newline or 'n' in args[index]
        escapes = escapes or 'e' in args[index]
        index += 1

    output = ' '.join(args[index:])
    if escapes:
        output = re.sub(r'\\([ntr\\])', lambda m: ECHO_ESCAPES[m.group(1)], output)

    if not no_newline and not output.endswith('\n'):
        output += '\n'
    return CommandResult.ok(output)


@builtin('clear', 'utility')
def clear(session, args, stdin=None):
    """Clear terminal screen.

    Usage:
        clear
    """
    return CommandResult.ok('', CLEAR_SCREEN)


def _help_overview() -> str:
    lines = ['Available commands:', '']
    for category, title in CATEGORIES.items():
        commands = commands_in(category)
        if not commands:
            continue
        lines.append(title)
        for command in commands:
            lines.append(f"  {command.name:<12}{command.summary}")
        lines.append('')

    lines.append("Type 'help <command>' for detailed information about a specific command.")
    lines.append("Type 'man <command>' for full manual pages.")
    return '\n'.join(lines)


@builtin('help', 'utility')
def help(session, args, stdin=None):
    """Show available commands.

    Without arguments, lists all commands by category. With a command
    name, shows detailed help for that command.

    Usage:
        help [COMMAND]

    Examples:
        help
        help grep
    """
    if not args:
        return CommandResult.ok(_help_overview())

    command = get_builtin(args[0])
    if command is None:
        return CommandResult.error(f"help: no help topics match '{args[0]}'")

    doc = command.doc
    lines = [f"{command.name} - {doc.summary}", '', f"Usage: {doc.usage or command.name}"]
    if doc.description:
        lines.extend(['', doc.description])
    if doc.options:
        lines.extend(['', 'Options:'])
        lines.extend(f"  {option}" for option in doc.options)
    return CommandResult.ok('\n'.join(lines))


@builtin('man', 'utility')
def man(session, args, stdin=None):
    """Display manual pages.

    Shows the full manual page for a command, including usage, options
    and examples.

    Usage:
        man COMMAND

    Examples:
        man echo
        man base64
    """
    if not args:
        return CommandResult.error('What manual page do you want?\nFor example, try "man echo"')

    command = get_builtin(args[0])
    if command is None:
        return CommandResult.error(f"No manual entry for {args[0]}")

    doc = command.doc
    sections = [
        ('NAME', [f"{command.name} - {doc.summary}"]),
        ('SYNOPSIS', [doc.usage or command.name]),
        ('DESCRIPTION', [doc.description or f"{doc.summary}."]),
        ('OPTIONS', doc.options),
        ('ESCAPE SEQUENCES', doc.escapes),
        ('EXAMPLES', doc.examples),
    ]

    lines = []
    for heading, body in sections:
        if not body:
            continue
        lines.append(heading)
        lines.extend(f"    {line}" for line in body)
        lines.append('')
    return CommandResult.ok('\n'.join(lines))


@builtin('history', 'utility')
def history(session, args, stdin=None):
    """Show command history.

    Usage:
        history [-c]

    Options:
        -c    Clear command history

    Examples:
        history
        history -c
    """
    if args and args[0] == '-c':
        session.clear_history()
        return CommandResult.ok()

    entries = session.get_history()
    return CommandResult.ok('\n'.join(f"{n:>5}  {line}" for n, line in enumerate(entries, 1)))


@builtin('whoami', 'utility')
def whoami(session, args, stdin=None):
    """Print current user.

    Usage:
        whoami
    """
    return CommandResult.ok(session.config.user)


@builtin('date', 'utility')
def date(session, args, stdin=None):
    """Display current date/time.

    Usage:
        date
    """
    now = datetime.now(timezone.utc)
    return CommandResult.ok(f"{now:%a %b} {now.day} {now:%H:%M:%S} UTC {now.year}")


@builtin('uname', 'utility')
def uname(session, args, stdin=None):
    """Print system information.

    Usage:
        uname [-a]

    Options:
        -a    Print all information
    """
    return CommandResult.ok(OS_FULL if args[:1] == ['-a'] else OS_NAME)


@builtin('alias', 'utility')
def alias(session, args, stdin=None):
    """Manage command aliases.

    Without arguments, lists the current aliases. With NAME=VALUE, defines
    or replaces an alias.

    Usage:
        alias [NAME=VALUE]

    Examples:
        alias
        alias ll='ls -la'
    """
    if not args:
        aliases = session.get_aliases()
        return CommandResult.ok('\n'.join(f"alias {name}='{value}'" for name, value in aliases.items()))

    match = ALIAS_DEFINITION.match(' '.join(args))
    if match is None:
        return CommandResult.error("alias: invalid syntax\nUsage: alias name='command'")

    name, value = match.groups()
    session.set_alias(name, re.sub(r"^['\"]|['\"]$", '', value))
    return CommandResult.ok()


@builtin('type', 'utility')
def type(session, args, stdin=None):
    """Show command type.

    Tells whether each name is an alias, a builtin, or unknown.

    Usage:
        type COMMAND...

    Examples:
        type ls
        type ll
    """
    if not args:
        return CommandResult.error('type: missing operand\nUsage: type COMMAND')

    aliases = session.get_aliases()
    lines = []
    for name in args:
        if name in aliases:
            lines.append(f"{name} is aliased to `{aliases[name]}`")
        elif name in BUILTINS:
            lines.append(f"{name} is a shell builtin")
        else:
            lines.append(f"{name}: not found")
    return CommandResult.ok('\n'.join(lines))
