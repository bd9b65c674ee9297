"""File builtins: cat, head, tail, less, file, stat, touch, mkdir, rm, find."""

import json
import re
from datetime import datetime

from ..result import CommandResult
from ..vfs import DirectoryNotEmpty, NodeKind, PathNotFound, VFSError
from .common import parse_flags, split_lines
from .registry import builtin

LESS_FOOTER = "\n\n[Scroll to view more - 'q' or 'Esc' to return to terminal]"

# rm -rf /, rm -r *, rm -rf ~, rm /* -rf ...
DANGEROUS_RM = (
    re.compile(r'(-rf?|-fr|--recursive)\s+(/\*?|\*|~/?)(\s|$)', re.IGNORECASE),
    re.compile(r'(^|\s)/[/*]?\s+(-rf?|-fr|--recursive)', re.IGNORECASE),
)

RM_EXPLOSION = r"""
    CRITICAL ERROR: System deletion initiated!

         ,-^^-,
        /  ##  \
       |  ####  |
       |  ####  |    BOOM!
        \  ##  /
         '-vv-'

    [====================================]

    Deleting: /dev/null
    Deleting: /dev/zero
    Deleting: /etc/shadow
    Deleting: /boot/vmlinuz
    Deleting: Everything important...

    Just kidding! This is a sandboxed portfolio terminal.
    Nothing was actually deleted. Nice try though!

    Pro tip: Never run 'rm -rf /' on a real system.
        """


def _number_lines(text: str) -> str:
    return '\n'.join(f"{n:>6}  {line}" for n, line in enumerate(split_lines(text), 1))


@builtin('cat', 'files')
def cat(session, args, stdin=None):
    """Display file contents.

    Concatenates files, separating them with a blank line. Reads piped
    input instead when there is any.

    Usage:
        cat [-n] [FILE...]

    Options:
        -n    Number all output lines

    Examples:
        cat readme.txt         # Show a file
        cat -n /etc/passwd     # Show with line numbers
    """
    flags, paths = parse_flags(args)
    number = 'n' in flags

    if stdin is not None:
        return CommandResult.ok(_number_lines(stdin) if number else stdin)

    if not paths:
        return CommandResult.error('cat: missing file operand')

    outputs = []
    for path in paths:
        try:
            content = session.fs.read(path)
        except VFSError as e:
            return CommandResult.error(f"cat: {e}")
        outputs.append(_number_lines(content) if number else content)

    return CommandResult.ok('\n\n'.join(outputs))


def _line_count(name, args):
    """Parse -n N / -nN / -N. Returns (count, files) or (None, message)."""
    count = 10
    files = []
    index = 0

    while index < len(args):
        arg = args[index]
        if arg == '-n':
            value = args[index + 1] if index + 1 < len(args) else ''
            index += 1
        elif arg.startswith('-n') or (arg.startswith('-') and arg[1:].isdigit()):
            value = arg[2:] if arg.startswith('-n') else arg[1:]
        else:
            files.append(arg)
            index += 1
            continue

        if not value.isdigit():
            return None, f"{name}: invalid number of lines"
        count = int(value)
        index += 1

    return count, files


def _slice_lines(name, session, args, stdin, take):
    count, files = _line_count(name, args)
    if count is None:
        return CommandResult.error(files)

    if stdin is not None:
        text = stdin
    elif not files:
        return CommandResult.error(f"{name}: missing file operand")
    else:
        try:
            text = session.fs.read(files[0])
        except VFSError as e:
            return CommandResult.error(f"{name}: {e}")

    return CommandResult.ok('\n'.join(take(split_lines(text), count)))


@builtin('head', 'files')
def head(session, args, stdin=None):
    """Display first lines of file.

    Usage:
        head [-n N] [FILE]

    Options:
        -n N  Print the first N lines (default 10); -N is also accepted

    Examples:
        head -n 3 readme.txt   # First three lines
        cat notes.txt | head -5
    """
    return _slice_lines('head', session, args, stdin, lambda lines, n: lines[:n])


@builtin('tail', 'files')
def tail(session, args, stdin=None):
    """Display last lines of file.

    Usage:
        tail [-n N] [FILE]

    Options:
        -n N  Print the last N lines (default 10); -N is also accepted

    Examples:
        tail -n 3 readme.txt   # Last three lines
    """
    return _slice_lines('tail', session, args, stdin, lambda lines, n: lines[-n:] if n else [])


@builtin('less', 'files')
def less(session, args, stdin=None):
    """View file contents.

    Usage:
        less FILE

    Examples:
        less readme.txt
    """
    if not args:
        return CommandResult.error('less: missing file operand')

    try:
        content = session.fs.read(args[0])
    except VFSError as e:
        return CommandResult.error(f"less: {e}")
    return CommandResult.ok(content + LESS_FOOTER)


def detect_type(content: str) -> str:
    """Guess a file type label from content; the first matching rule wins."""
    trimmed = content.strip()

    if content.startswith('PK'):
        return 'Zip archive data'
    if content.startswith('%PDF'):
        return 'PDF document'
    if re.match(r'<!DOCTYPE\s+html', content, re.IGNORECASE) or re.match(r'<html', content, re.IGNORECASE):
        return 'HTML document'
    if content.startswith('<?xml'):
        return 'XML document'
    if (trimmed.startswith('{') and trimmed.endswith('}')) or \
            (trimmed.startswith('[') and trimmed.endswith(']')):
        try:
            json.loads(trimmed)
        except ValueError:
            return 'ASCII text'
        return 'JSON data'
    if content.startswith('#!'):
        first_line = content.split('\n', 1)[0]
        if 'bash' in first_line:
            return 'Bash script'
        if 'python' in first_line:
            return 'Python script'
        if 'sh' in first_line:
            return 'Shell script'
        return 'script'
    if re.search(r'^import\s+|^from\s+.*\s+import', content, re.MULTILINE):
        return 'Python script'
    if re.search(r'[\x00-\x08\x0B\x0C\x0E-\x1F]', content):
        return 'data'
    if not content:
        return 'empty'
    return 'ASCII text'


@builtin('file', 'files')
def file(session, args, stdin=None):
    """Determine file type.

    Inspects file content for known signatures.

    Usage:
        file FILE...

    Examples:
        file readme.txt        # readme.txt: ASCII text
    """
    if not args:
        return CommandResult.error('file: missing file operand')

    results = []
    for path in args:
        node = session.fs.lookup(path)
        if node is None:
            results.append(f"{path}: cannot open (No such file or directory)")
        elif node.kind is NodeKind.DIRECTORY:
            results.append(f"{path}: directory")
        else:
            results.append(f"{path}: {detect_type(node.content)}")

    return CommandResult.ok('\n'.join(results))


def _format_time(timestamp: float) -> str:
    return datetime.fromtimestamp(timestamp).strftime('%Y-%m-%d %H:%M:%S')


@builtin('stat', 'files')
def stat(session, args, stdin=None):
    """Display file status.

    Usage:
        stat FILE...

    Examples:
        stat readme.txt
    """
    if not args:
        return CommandResult.error('stat: missing file operand')

    results = []
    failed = False
    for path in args:
        try:
            info = session.fs.stat(path)
        except VFSError as e:
            results.append(f"stat: cannot stat '{e.path}': {e.reason}")
            failed = True
            continue

        results.append('\n'.join([
            f"  File: {info.name}",
            f"  Type: {info.kind.value}",
            f"  Size: {info.size} bytes",
            f"  Permissions: {info.permissions}",
            f"  Created: {_format_time(info.created)}",
            f"  Modified: {_format_time(info.modified)}",
            f"  Path: {info.path}",
        ]))

    output = '\n\n'.join(results)
    return CommandResult.error(output) if failed else CommandResult.ok(output)


@builtin('touch', 'files')
def touch(session, args, stdin=None):
    """Create empty file.

    Existing files keep their content and get a new modification time.

    Usage:
        touch FILE...

    Examples:
        touch /tmp/notes.txt
    """
    if not args:
        return CommandResult.error('touch: missing file operand')

    for path in args:
        node = session.fs.lookup(path)
        if node is not None:
            node.touch()
            continue
        try:
            session.fs.write(path, '')
        except VFSError as e:
            return CommandResult.error(f"touch: cannot touch '{e.path}': {e.reason}")
    return CommandResult.ok()


@builtin('mkdir', 'files')
def mkdir(session, args, stdin=None):
    """Create directory.

    Usage:
        mkdir [-p] DIRECTORY...

    Options:
        -p    Create parent directories as needed

    Examples:
        mkdir /tmp/work
        mkdir -p /tmp/a/b/c
    """
    flags, paths = parse_flags(args)
    if not paths:
        return CommandResult.error('mkdir: missing operand')

    for path in paths:
        try:
            session.fs.make_directory(path, parents='p' in flags)
        except VFSError as e:
            return CommandResult.error(f"mkdir: cannot create directory '{e.path}': {e.reason}")
    return CommandResult.ok()


@builtin('rm', 'files')
def rm(session, args, stdin=None):
    """Remove files/directories.

    Usage:
        rm [-r] [-f] FILE...

    Options:
        -r    Remove directories and their contents recursively
        -f    Ignore nonexistent files

    Examples:
        rm /tmp/out.txt
        rm -r /tmp/work
    """
    if not args:
        return CommandResult.error('rm: missing operand')

    if any(pattern.search(' '.join(args)) for pattern in DANGEROUS_RM):
        return CommandResult.ok(RM_EXPLOSION)

    options = [arg for arg in args if arg.startswith('-')]
    paths = [arg for arg in args if not arg.startswith('-')]
    recursive = '--recursive' in options or any(
        letter in option for option in options if not option.startswith('--') for letter in 'rR')
    force = '--force' in options or any(
        'f' in option for option in options if not option.startswith('--'))

    if not paths:
        return CommandResult.error('rm: missing operand')

    for path in paths:
        try:
            session.fs.remove(path, recursive=recursive)
        except PathNotFound as e:
            if force:
                continue
            return CommandResult.error(f"rm: cannot remove '{e.path}': {e.reason}")
        except DirectoryNotEmpty as e:
            return CommandResult.error(
                f"rm: cannot remove '{e.path}': {e.reason} (use -r for recursive)")
        except VFSError as e:
            return CommandResult.error(f"rm: cannot remove '{e.path}': {e.reason}")
    return CommandResult.ok()


@builtin('find', 'files')
def find(session, args, stdin=None):
    """Search for files.

    Prints the full path of every matching entry below PATH.

    Usage:
        find [PATH] [-name PATTERN] [-type f|d]

    Options:
        -name PATTERN  Match names against a glob (case-insensitive)
        -type TYPE     Only files (f) or only directories (d)

    Examples:
        find ~ -name "*.txt"
        find /etc -type f
    """
    path = '.'
    pattern = '*'
    kind = None
    index = 0

    while index < len(args):
        arg = args[index]
        if arg in ('-name', '-type'):
            if index + 1 >= len(args):
                return CommandResult.error(f"find: missing argument to '{arg}'")
            value = args[index + 1]
            if arg == '-name':
                pattern = value
            elif value in ('f', 'd'):
                kind = NodeKind.FILE if value == 'f' else NodeKind.DIRECTORY
            else:
                return CommandResult.error(f"find: unknown argument to -type: {value}")
            index += 2
        else:
            path = arg
            index += 1

    try:
        found = session.fs.find(path, pattern)
    except VFSError as e:
        return CommandResult.error(f"find: '{e.path}': {e.reason}")
    except re.error as e:
        return CommandResult.error(f"find: invalid pattern: {e}")

    if kind is not None:
        found = [p for p in found if session.fs.lookup(p).kind is kind]
    return CommandResult.ok('\n'.join(found))
