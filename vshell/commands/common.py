"""Helpers shared by the builtin handlers."""

from typing import List, Optional, Sequence, Set, Tuple


def split_lines(text: str) -> List[str]:
    """Split text into lines, ignoring the empty piece after a trailing newline."""
    if not text:
        return []
    lines = text.split('\n')
    if lines[-1] == '':
        lines.pop()
    return lines


def parse_flags(args: Sequence[str]) -> Tuple[Set[str], List[str]]:
    """
    Separate single-letter flags from positional arguments.

    Combined flags such as -in are split into letters. Long options are
    dropped; a lone '-' counts as positional.
    """
    flags = set()
    positional = []

    for arg in args:
        if arg.startswith('--'):
            continue
        elif arg.startswith('-') and len(arg) > 1:
            flags.update(arg[1:])
        else:
            positional.append(arg)

    return flags, positional


def take_option(args: Sequence[str], flag: str) -> Tuple[Optional[str], List[str]]:
    """
    Pull the value of an option such as ``-f 1,2`` or ``-f1,2`` out of args.

    Returns (value, remaining_args); value is None when the option is absent
    or has no value.
    """
    remaining = []
    value = None
    skip = False

    for index, arg in enumerate(args):
        if skip:
            skip = False
            continue
        if arg == f'-{flag}':
            if index + 1 < len(args):
                value = args[index + 1]
                skip = True
        elif arg.startswith(f'-{flag}') and len(arg) > 2:
            value = arg[2:]
        else:
            remaining.append(arg)

    return value, remaining


def decode_bytes(data: bytes) -> str:
    """Bytes to text; UTF-8 when possible, latin-1 otherwise."""
    try:
        return data.decode('utf-8')
    except UnicodeDecodeError:
        return data.decode('latin-1')
