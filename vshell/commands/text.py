"""Text processing builtins: grep, wc, sort, uniq, cut, tr."""

import itertools
import re

from ..result import CommandResult
from ..vfs import VFSError
from .common import parse_flags, split_lines, take_option
from .registry import builtin

NUMBER_PREFIX = re.compile(r'\s*[-+]?(\d+(\.\d*)?|\.\d+)([eE][-+]?\d+)?')


def _read_input(name, session, paths, stdin):
    """Piped input wins; otherwise the first path. Returns (text, error)."""
    if stdin is not None:
        return stdin, None
    if not paths:
        return None, CommandResult.error(
            f"{name}: no input provided (use pipe or provide filename)")
    try:
        return session.fs.read(paths[0]), None
    except VFSError as e:
        return None, CommandResult.error(f"{name}: {e}")


@builtin('grep', 'text')
def grep(session, args, stdin=None):
    """Search text patterns.

    Prints lines matching a regular expression. Exits with status 1
    and no output when nothing matches.

    Usage:
        grep [-i] [-n] [-v] [-r] PATTERN [FILE...]

    Options:
        -i    Ignore case
        -n    Prefix each line with its line number
        -v    Select non-matching lines
        -r    Search directories recursively

    Examples:
        grep -i flag ~/.flag.txt
        grep -rn Python ~/cyberops
        cat /etc/passwd | grep bash
    """
    flags, positional = parse_flags(args)
    if not positional:
        return CommandResult.error('grep: missing pattern')

    pattern, paths = positional[0], positional[1:]
    try:
        regex = re.compile(pattern, re.IGNORECASE if 'i' in flags else 0)
    except re.error as e:
        return CommandResult.error(f"grep: invalid pattern: {e}")

    invert = 'v' in flags
    numbered = 'n' in flags

    def select(text, prefix=''):
        for number, line in enumerate(split_lines(text), 1):
            if bool(regex.search(line)) != invert:
                yield f"{prefix}{number}:{line}" if numbered else f"{prefix}{line}"

    if stdin is not None:
        results = list(select(stdin))
        if not results:
            return CommandResult.error('', 1)
        return CommandResult.ok('\n'.join(results))

    if not paths:
        return CommandResult.error('grep: no files specified (use pipe or provide filename)')

    targets = []
    for path in paths:
        if 'r' in flags and session.fs.is_dir(path):
            targets.extend(found for found, node in session.fs.walk(path) if node.is_file())
        else:
            targets.append(path)

    results = []
    errors = []
    for target in targets:
        try:
            content = session.fs.read(target)
        except VFSError as e:
            errors.append(f"grep: {e}")
            continue
        prefix = f"{target}:" if len(targets) > 1 else ''
        results.extend(select(content, prefix))

    if errors:
        return CommandResult.error('\n'.join(results + errors), 2)
    if not results:
        return CommandResult.error('', 1)
    return CommandResult.ok('\n'.join(results))


def _counts(text):
    return len(split_lines(text)), len(text.split()), len(text)


@builtin('wc', 'text')
def wc(session, args, stdin=None):
    """Count lines/words/characters.

    Usage:
        wc [-l] [-w] [-c] [FILE...]

    Options:
        -l    Print the line count
        -w    Print the word count
        -c    Print the character count

    Examples:
        wc readme.txt
        cat readme.txt | wc -l
    """
    flags, paths = parse_flags(args)
    selected = [letter in flags for letter in 'lwc']
    if not any(selected):
        selected = [True, True, True]

    def format_counts(counts, name=None):
        parts = [str(count).rjust(7) for count, shown in zip(counts, selected) if shown]
        if name:
            parts.append(name)
        return ' '.join(parts)

    if stdin is not None:
        return CommandResult.ok(format_counts(_counts(stdin)))

    if not paths:
        return CommandResult.error('wc: no files specified (use pipe or provide filename)')

    rows = []
    totals = [0, 0, 0]
    failed = False
    for path in paths:
        try:
            counts = _counts(session.fs.read(path))
        except VFSError as e:
            rows.append(f"wc: {e}")
            failed = True
            continue
        totals = [total + count for total, count in zip(totals, counts)]
        rows.append(format_counts(counts, path))

    if len(paths) > 1:
        rows.append(format_counts(totals, 'total'))

    output = '\n'.join(rows)
    return CommandResult.error(output) if failed else CommandResult.ok(output)


def _numeric_key(line: str) -> float:
    match = NUMBER_PREFIX.match(line)
    return float(match.group(0)) if match else 0.0


@builtin('sort', 'text')
def sort(session, args, stdin=None):
    """Sort lines.

    Usage:
        sort [-r] [-n] [FILE]

    Options:
        -r    Reverse the result
        -n    Compare by leading numeric value

    Examples:
        sort names.txt
        cat scores.txt | sort -rn
    """
    flags, paths = parse_flags(args)
    text, failure = _read_input('sort', session, paths, stdin)
    if failure:
        return failure

    key = _numeric_key if 'n' in flags else None
    lines = sorted(split_lines(text), key=key, reverse='r' in flags)
    return CommandResult.ok('\n'.join(lines))


@builtin('uniq', 'text')
def uniq(session, args, stdin=None):
    """Filter duplicate lines.

    Collapses runs of identical adjacent lines.

    Usage:
        uniq [-c] [-d] [FILE]

    Options:
        -c    Prefix lines with their number of occurrences
        -d    Only print lines that repeat

    Examples:
        sort words.txt | uniq -c
    """
    flags, paths = parse_flags(args)
    text, failure = _read_input('uniq', session, paths, stdin)
    if failure:
        return failure

    results = []
    for line, group in itertools.groupby(split_lines(text)):
        count = len(list(group))
        if 'd' in flags and count < 2:
            continue
        results.append(f"{count:>7} {line}" if 'c' in flags else line)

    return CommandResult.ok('\n'.join(results))


def parse_field_list(spec: str):
    """Parse '1,3' or '2-4' style field lists into sorted unique numbers."""
    fields = set()
    for part in spec.split(','):
        part = part.strip()
        if '-' in part:
            start, _, end = part.partition('-')
            if not (start.isdigit() and end.isdigit()):
                raise ValueError(f"invalid field range '{part}'")
            fields.update(range(int(start), int(end) + 1))
        elif part.isdigit():
            fields.add(int(part))
        else:
            raise ValueError(f"invalid field value '{part}'")
    return sorted(field for field in fields if field > 0)


@builtin('cut', 'text')
def cut(session, args, stdin=None):
    """Extract columns from lines.

    Fields past the end of a line are skipped.

    Usage:
        cut -f LIST [-d DELIM] [FILE]

    Options:
        -f LIST   Fields to print, e.g. 1,3 or 2-4
        -d DELIM  Field delimiter (default TAB)

    Examples:
        cut -d : -f 1,7 /etc/passwd
    """
    field_spec, rest = take_option(args, 'f')
    delimiter, rest = take_option(rest, 'd')
    delimiter = delimiter or '\t'

    if not field_spec:
        return CommandResult.error('cut: you must specify a list of fields with -f')

    try:
        fields = parse_field_list(field_spec)
    except ValueError as e:
        return CommandResult.error(f"cut: {e}")

    _, paths = parse_flags(rest)
    text, failure = _read_input('cut', session, paths, stdin)
    if failure:
        return failure

    results = []
    for line in split_lines(text):
        columns = line.split(delimiter)
        results.append(delimiter.join(columns[f - 1] for f in fields if f <= len(columns)))

    return CommandResult.ok('\n'.join(results))


@builtin('tr', 'text')
def tr(session, args, stdin=None):
    """Translate characters.

    Maps each character of SET1 to the character at the same position in
    SET2; extra characters in the longer set are ignored. Only works on
    piped input.

    Usage:
        tr SET1 SET2
        tr -d SET1

    Options:
        -d    Delete characters in SET1

    Examples:
        echo hello | tr el ip
        echo "a-b-c" | tr -d -
    """
    if stdin is None:
        return CommandResult.error('tr: requires piped input')

    delete = args[:1] == ['-d']
    sets = args[1:] if delete else args

    if delete:
        if not sets:
            return CommandResult.error('tr: missing operand')
        return CommandResult.ok(stdin.translate({ord(char): None for char in sets[0]}))

    if len(sets) < 2:
        return CommandResult.error('tr: missing operand')

    source, target = sets[0], sets[1]
    length = min(len(source), len(target))
    return CommandResult.ok(stdin.translate(str.maketrans(source[:length], target[:length])))
