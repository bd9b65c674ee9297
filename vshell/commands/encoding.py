"""Encoding and CTF helpers: base64, xxd, strings, md5sum, sha256sum, rot13, rev."""

import base64 as b64
import binascii
import codecs
import hashlib
import re

from ..result import CommandResult, PendingResult
from ..vfs import VFSError
from .common import decode_bytes
from .registry import builtin


def _operand_or_file(session, operand):
    """Content of the operand if it names an existing file, else the operand itself."""
    if session.fs.is_file(operand):
        return session.fs.read(operand), operand
    return operand, '-'


def _missing(name, example='<text>'):
    return CommandResult.error(
        f'{name}: missing operand\nTry: {name} {example} or echo "text" | {name}')


@builtin('base64', 'encoding')
def base64(session, args, stdin=None):
    """Base64 encode/decode.

    Reads piped input, else the named file, else the argument text itself.

    Usage:
        base64 [-d] [TEXT|FILE]

    Options:
        -d, --decode   Decode instead of encode

    Examples:
        base64 "hello"              # aGVsbG8=
        echo aGVsbG8= | base64 -d   # hello
    """
    decode = False
    operand = None
    for arg in args:
        if arg in ('-d', '--decode'):
            decode = True
        elif operand is None:
            operand = arg

    if stdin:
        data = stdin.strip()
    elif operand is not None:
        data, _ = _operand_or_file(session, operand)
    else:
        return _missing('base64')

    if not decode:
        return CommandResult.ok(b64.b64encode(data.encode('utf-8')).decode('ascii'))

    try:
        raw = b64.b64decode(''.join(data.split()), validate=True)
    except (binascii.Error, ValueError) as e:
        return CommandResult.error(f"base64: invalid input: {e}")
    return CommandResult.ok(decode_bytes(raw))


def hexdump(data: bytes) -> str:
    """xxd-style dump: offset, 16 bytes in pairs, printable gutter."""
    lines = []
    for offset in range(0, len(data), 16):
        chunk = data[offset:offset + 16]

        hex_part = ''
        for index in range(16):
            hex_part += f"{chunk[index]:02x}" if index < len(chunk) else '  '
            if index % 2 == 1:
                hex_part += ' '

        gutter = ''.join(chr(byte) if 32 <= byte <= 126 else '.' for byte in chunk)
        lines.append(f"{offset:08x}: {hex_part} {gutter}")

    return '\n'.join(lines)


@builtin('xxd', 'encoding')
def xxd(session, args, stdin=None):
    """Make a hex dump or reverse one.

    Usage:
        xxd [-r] [FILE]

    Options:
        -r, --revert   Convert a hex string back to text

    Examples:
        xxd readme.txt
        echo 68656c6c6f | xxd -r    # hello
    """
    reverse = False
    operand = None
    for arg in args:
        if arg in ('-r', '--revert'):
            reverse = True
        elif operand is None:
            operand = arg

    if stdin:
        data = stdin
    elif operand is not None:
        try:
            data = session.fs.read(operand)
        except VFSError:
            return CommandResult.error(f"xxd: {operand}: No such file or directory")
    else:
        return _missing('xxd', '<file>')

    if not reverse:
        return CommandResult.ok(hexdump(data.encode('utf-8')))

    try:
        raw = bytes.fromhex(re.sub(r'[\s:]', '', data))
    except ValueError as e:
        return CommandResult.error(f"xxd: invalid hex input: {e}")
    return CommandResult.ok(decode_bytes(raw))


@builtin('strings', 'encoding')
def strings(session, args, stdin=None):
    """Print printable character runs.

    Usage:
        strings [-n MIN] [FILE]

    Options:
        -n MIN    Minimum run length (default 4)

    Examples:
        strings ~/.flag.txt
        strings -n 8 data.bin
    """
    minimum = 4
    operand = None
    index = 0
    while index < len(args):
        if args[index] == '-n' and index + 1 < len(args):
            if not args[index + 1].isdigit() or int(args[index + 1]) < 1:
                return CommandResult.error('strings: invalid minimum string length')
            minimum = int(args[index + 1])
            index += 2
            continue
        if operand is None:
            operand = args[index]
        index += 1

    if stdin:
        data = stdin
    elif operand is not None:
        try:
            data = session.fs.read(operand)
        except VFSError:
            return CommandResult.error(f"strings: {operand}: No such file or directory")
    else:
        return _missing('strings', '<file>')

    runs = re.findall(r'[\x20-\x7e]{%d,}' % minimum, data)
    return CommandResult.ok('\n'.join(runs))


def _digest_source(session, args, stdin):
    if stdin:
        return stdin, '-'
    if args:
        return _operand_or_file(session, args[0])
    return None, None


@builtin('md5sum', 'encoding')
def md5sum(session, args, stdin=None):
    """Calculate MD5 hash.

    Usage:
        md5sum [FILE|TEXT]

    Examples:
        md5sum readme.txt
        echo -n hello | md5sum
    """
    data, label = _digest_source(session, args, stdin)
    if data is None:
        return _missing('md5sum', '<file>')
    return CommandResult.ok(f"{hashlib.md5(data.encode('utf-8')).hexdigest()}  {label}")


@builtin('sha256sum', 'encoding')
def sha256sum(session, args, stdin=None):
    """Calculate SHA256 hash.

    The digest is computed when the result is resolved.

    Usage:
        sha256sum [FILE|TEXT]

    Examples:
        sha256sum readme.txt
        echo -n hello | sha256sum
    """
    data, label = _digest_source(session, args, stdin)
    if data is None:
        return _missing('sha256sum', '<file>')

    def compute():
        digest = hashlib.sha256(data.encode('utf-8')).hexdigest()
        return CommandResult.ok(f"{digest}  {label}")

    return PendingResult(compute)


@builtin('rot13', 'encoding')
def rot13(session, args, stdin=None):
    """ROT13 cipher.

    Usage:
        rot13 [TEXT...]

    Examples:
        rot13 "Hello"               # Uryyb
        echo Uryyb | rot13          # Hello
    """
    if stdin:
        data = stdin
    elif args:
        data = ' '.join(args)
    else:
        return _missing('rot13')
    return CommandResult.ok(codecs.encode(data, 'rot13'))


@builtin('rev', 'encoding')
def rev(session, args, stdin=None):
    """Reverse characters of each line.

    Usage:
        rev [FILE|TEXT]

    Examples:
        rev "stressed"              # desserts
        cat /etc/hosts | rev
    """
    if stdin:
        data = stdin
    elif args:
        data, _ = _operand_or_file(session, args[0])
    else:
        return _missing('rev')
    return CommandResult.ok('\n'.join(line[::-1] for line in data.split('\n')))
