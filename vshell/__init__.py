"""
vshell - A client-side Unix shell emulator over an in-memory filesystem

This package provides a seeded virtual filesystem, a quote-aware command
parser, a registry of familiar builtins (ls, cat, grep, base64, ...) and a
terminal session that runs pipelines and output redirections.
"""

__version__ = "0.1.0"

from .vfs import (
    VirtualFilesystem,
    FileNode,
    DirNode,
    Node,
    NodeKind,
    Mode,
    Entry,
    StatInfo,
    TextMatch,
    VFSError,
    PathNotFound,
    NotADirectory,
    IsADirectory,
    AlreadyExists,
    DirectoryNotEmpty,
    OperationNotPermitted,
)

from .result import (
    CommandResult,
    PendingResult,
    CLEAR_SCREEN,
    MATRIX,
)

from .command_parser import (
    tokenize,
    split_by_pipe,
    parse_redirect,
    contains_unquoted_pipe,
    contains_unquoted_redirect,
    Redirect,
)

from .terminal import (
    Session,
    TerminalSession,
    TerminalConfig,
    CommandExecutor,
    CommandHistory,
)

__all__ = [
    # Filesystem
    "VirtualFilesystem",
    "FileNode",
    "DirNode",
    "Node",
    "NodeKind",
    "Mode",
    "Entry",
    "StatInfo",
    "TextMatch",

    # Filesystem errors
    "VFSError",
    "PathNotFound",
    "NotADirectory",
    "IsADirectory",
    "AlreadyExists",
    "DirectoryNotEmpty",
    "OperationNotPermitted",

    # Results
    "CommandResult",
    "PendingResult",
    "CLEAR_SCREEN",
    "MATRIX",

    # Parsing
    "tokenize",
    "split_by_pipe",
    "parse_redirect",
    "contains_unquoted_pipe",
    "contains_unquoted_redirect",
    "Redirect",

    # Terminal
    "Session",
    "TerminalSession",
    "TerminalConfig",
    "CommandExecutor",
    "CommandHistory",
]
