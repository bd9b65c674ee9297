"""Navigation builtins: pwd, cd, ls."""

import time
from datetime import datetime
from typing import List

from ..result import CommandResult
from ..vfs import Entry, Mode, NodeKind, VFSError, format_mode
from .common import parse_flags
from .registry import builtin


@builtin('pwd', 'navigation')
def pwd(session, args, stdin=None):
    """Print working directory.

    Usage:
        pwd

    Examples:
        pwd                    # Show current directory
    """
    return CommandResult.ok(session.fs.pwd)


@builtin('cd', 'navigation')
def cd(session, args, stdin=None):
    """Change directory.

    Without an argument, returns to the home directory.

    Usage:
        cd [DIRECTORY]

    Examples:
        cd /etc                # Go to /etc
        cd ..                  # Go to the parent directory
        cd ~                   # Go home
    """
    try:
        session.fs.change_directory(args[0] if args else None)
    except VFSError as e:
        return CommandResult.error(f"cd: {e}")
    return CommandResult.ok()


def _format_date(timestamp: float) -> str:
    moment = datetime.fromtimestamp(timestamp)
    return f"{moment:%b} {moment.day:>2} {moment:%H:%M}"


def _format_long(entries: List[Entry]) -> str:
    return '\n'.join(
        f"{entry.permissions}  1  user  user  {entry.size:>6}  "
        f"{_format_date(entry.modified)}  {entry.name}"
        for entry in entries
    )


@builtin('ls', 'navigation')
def ls(session, args, stdin=None):
    """List directory contents.

    Directories are listed before files, each group in name order.

    Usage:
        ls [-l] [-a] [PATH]

    Options:
        -l    Use a long listing format
        -a    Also list the . and .. entries

    Examples:
        ls                     # List current directory
        ls -la ~/cyberops      # Long listing with . and ..
    """
    flags, paths = parse_flags(args)
    long_format = 'l' in flags
    show_all = 'a' in flags
    target = paths[0] if paths else '.'

    try:
        entries = session.fs.list(target)
        is_dir = session.fs.is_dir(target)
    except VFSError as e:
        return CommandResult.error(f"ls: cannot access '{e.path}': {e.reason}")

    if is_dir and show_all:
        now = time.time()
        permissions = format_mode(Mode.DIR_DEFAULT)
        entries = [
            Entry('.', NodeKind.DIRECTORY, len(entries), permissions, now),
            Entry('..', NodeKind.DIRECTORY, 0, permissions, now),
        ] + entries

    if long_format:
        return CommandResult.ok(_format_long(entries))
    return CommandResult.ok('  '.join(entry.name for entry in entries))
