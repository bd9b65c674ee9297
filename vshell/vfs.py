#!/usr/bin/env python3
"""
vshell.vfs - An in-memory virtual filesystem for the shell emulator.

Core philosophy:
- The filesystem is a tree: every node is owned by exactly one directory
- One resolve() normalizes every path the shell touches
- Failures are raised as VFSError subclasses and rendered by the caller
"""

import logging
import re
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import ClassVar, Dict, List, Mapping, Optional, Tuple

logger = logging.getLogger(__name__)


class Mode(IntEnum):
    """Unix-style file permissions."""
    # File types
    IFMT = 0o170000   # type mask
    IFREG = 0o100000  # regular file
    IFDIR = 0o040000  # directory

    # Permissions
    IRUSR = 0o400
    IWUSR = 0o200
    IXUSR = 0o100
    IRGRP = 0o040
    IWGRP = 0o020
    IXGRP = 0o010
    IROTH = 0o004
    IWOTH = 0o002
    IXOTH = 0o001

    # Common combinations
    FILE_DEFAULT = IFREG | IRUSR | IWUSR | IRGRP | IROTH  # 0o100644
    DIR_DEFAULT = IFDIR | IRUSR | IWUSR | IXUSR | IRGRP | IXGRP | IROTH | IXOTH  # 0o040755


class NodeKind(Enum):
    """Tag distinguishing the node variants."""
    FILE = 'file'
    DIRECTORY = 'directory'


def format_mode(mode: int) -> str:
    """Format mode bits as an ls-style rwx string."""
    result = 'd' if mode & Mode.IFMT == Mode.IFDIR else '-'

    # Owner
    result += 'r' if mode & Mode.IRUSR else '-'
    result += 'w' if mode & Mode.IWUSR else '-'
    result += 'x' if mode & Mode.IXUSR else '-'

    # Group
    result += 'r' if mode & Mode.IRGRP else '-'
    result += 'w' if mode & Mode.IWGRP else '-'
    result += 'x' if mode & Mode.IXGRP else '-'

    # Other
    result += 'r' if mode & Mode.IROTH else '-'
    result += 'w' if mode & Mode.IWOTH else '-'
    result += 'x' if mode & Mode.IXOTH else '-'

    return result


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class VFSError(Exception):
    """
    Base class for filesystem failures.

    Carries the path exactly as the user typed it, so command handlers
    can render conventional messages such as ``cat: x: Is a directory``.
    """
    reason = 'Input/output error'

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"{path}: {self.reason}")


class PathNotFound(VFSError):
    reason = 'No such file or directory'


class NotADirectory(VFSError):
    reason = 'Not a directory'


class IsADirectory(VFSError):
    reason = 'Is a directory'


class AlreadyExists(VFSError):
    reason = 'File exists'


class DirectoryNotEmpty(VFSError):
    reason = 'Directory not empty'


class OperationNotPermitted(VFSError):
    reason = 'Operation not permitted'


# ---------------------------------------------------------------------------
# Nodes
# ---------------------------------------------------------------------------

@dataclass
class Node(ABC):
    """Base class for all filesystem nodes."""
    name: str
    mode: int = Mode.FILE_DEFAULT
    created: float = field(default_factory=time.time)
    modified: float = field(default_factory=time.time)

    kind: ClassVar[NodeKind]

    def __post_init__(self):
        if '/' in self.name:
            raise ValueError(f"node name may not contain '/': {self.name!r}")

    @property
    def permissions(self) -> str:
        return format_mode(self.mode)

    @property
    @abstractmethod
    def size(self) -> int:
        """Size in bytes."""

    def is_file(self) -> bool:
        """Check if this is a regular file."""
        return self.kind is NodeKind.FILE

    def is_dir(self) -> bool:
        """Check if this is a directory."""
        return self.kind is NodeKind.DIRECTORY

    def touch(self):
        self.modified = time.time()

    def entry(self, name: Optional[str] = None) -> 'Entry':
        """Describe this node as a listing entry."""
        return Entry(
            name=self.name if name is None else name,
            kind=self.kind,
            size=self.size,
            permissions=self.permissions,
            modified=self.modified,
        )


@dataclass
class FileNode(Node):
    """Regular file node holding text content."""
    content: str = ''
    mime_type: str = 'text/plain'

    kind: ClassVar[NodeKind] = NodeKind.FILE

    @property
    def size(self) -> int:
        """Size in bytes of the UTF-8 encoded content."""
        return len(self.content.encode('utf-8'))

    def set_content(self, content: str):
        self.content = content
        self.touch()


@dataclass
class DirNode(Node):
    """Directory node owning its children by name."""
    mode: int = Mode.DIR_DEFAULT
    children: Dict[str, Node] = field(default_factory=dict)

    kind: ClassVar[NodeKind] = NodeKind.DIRECTORY

    @property
    def size(self) -> int:
        """Directories report their child count as their size."""
        return len(self.children)

    def get(self, name: str) -> Optional[Node]:
        return self.children.get(name)

    def add(self, node: Node):
        """Add a child node; names are unique within a directory."""
        if node.name in self.children:
            raise AlreadyExists(node.name)
        self.children[node.name] = node
        self.touch()

    def remove(self, name: str) -> Node:
        node = self.children.pop(name)
        self.touch()
        return node

    def sorted_children(self) -> List[Node]:
        """Children with directories first, each group ordered by name."""
        return sorted(self.children.values(),
                      key=lambda child: (not child.is_dir(), child.name))


@dataclass(frozen=True)
class Entry:
    """A single row of a directory listing."""
    name: str
    kind: NodeKind
    size: int
    permissions: str
    modified: float

    def is_dir(self) -> bool:
        return self.kind is NodeKind.DIRECTORY


@dataclass(frozen=True)
class StatInfo:
    """Metadata reported by stat."""
    name: str
    kind: NodeKind
    size: int
    permissions: str
    created: float
    modified: float
    path: str


@dataclass(frozen=True)
class TextMatch:
    """One line matched by a content search."""
    path: str
    line: int
    text: str


def _join(base: str, name: str) -> str:
    return f"/{name}" if base == '/' else f"{base}/{name}"


def glob_to_regex(pattern: str) -> 're.Pattern':
    """Translate a shell glob into an anchored, case-insensitive regex.

    Only `.`, `*` and `?` are rewritten; every other character keeps its
    regex meaning, so `[ab]` is a character class.
    """
    regex = pattern.replace('.', r'\.').replace('*', '.*').replace('?', '.')
    return re.compile(f'^{regex}$', re.IGNORECASE)


# ---------------------------------------------------------------------------
# Filesystem
# ---------------------------------------------------------------------------

class VirtualFilesystem:
    """
    In-memory directory tree with a current working directory.

    Each shell session owns its own instance; nothing is shared between
    sessions and nothing is persisted.
    """

    def __init__(self, home: str = '/home/user',
                 seed: Optional[Mapping[str, Optional[str]]] = None,
                 initial_dir: Optional[str] = None):
        self.root = DirNode('')
        self.home = home
        self.cwd = '/'

        if seed:
            self.populate(seed)

        start = initial_dir or home
        node = self.lookup(start)
        if node is not None and node.is_dir():
            self.cwd = self.resolve(start)

    def populate(self, tree: Mapping[str, Optional[str]]):
        """
        Load a path -> content mapping into the tree.

        A value of None creates a directory. Missing parent directories
        are created on the way.
        """
        for path, content in tree.items():
            if content is None:
                self.make_directory(path, parents=True)
            else:
                parent = self.resolve(path).rsplit('/', 1)[0] or '/'
                self.make_directory(parent, parents=True)
                self.write(path, content)

    # -----------------------------------------------------------------------
    # Path resolution
    # -----------------------------------------------------------------------

    def resolve(self, path: Optional[str], cwd: Optional[str] = None) -> str:
        """Resolve a path to a normalized absolute path."""
        cwd = self.cwd if cwd is None else cwd

        if not path or not path.strip():
            return cwd

        if path == '~' or path.startswith('~/'):
            path = self.home + path[1:]

        if not path.startswith('/'):
            path = f"{cwd}/{path}"

        normalized = []
        for part in path.split('/'):
            if part == '' or part == '.':
                continue
            elif part == '..':
                if normalized:
                    normalized.pop()
            else:
                normalized.append(part)

        return '/' + '/'.join(normalized)

    def lookup(self, path: Optional[str]) -> Optional[Node]:
        """Walk from the root; None if any segment is missing or a file."""
        current: Node = self.root
        for part in self.resolve(path).split('/'):
            if not part:
                continue
            if not current.is_dir():
                return None
            current = current.get(part)
            if current is None:
                return None
        return current

    def _parent_and_name(self, path: str) -> Tuple[DirNode, str]:
        resolved = self.resolve(path)
        parent_path, _, name = resolved.rpartition('/')
        parent = self.lookup(parent_path or '/')

        if parent is None:
            raise PathNotFound(path)
        if not parent.is_dir():
            raise NotADirectory(path)
        return parent, name

    # -----------------------------------------------------------------------
    # Queries
    # -----------------------------------------------------------------------

    @property
    def pwd(self) -> str:
        return self.cwd

    def exists(self, path: str) -> bool:
        return self.lookup(path) is not None

    def is_dir(self, path: str) -> bool:
        node = self.lookup(path)
        return node is not None and node.is_dir()

    def is_file(self, path: str) -> bool:
        node = self.lookup(path)
        return node is not None and node.is_file()

    def list(self, path: str = '.') -> List[Entry]:
        """List a directory (directories first, then by name) or a single file."""
        node = self.lookup(path)
        if node is None:
            raise PathNotFound(path)

        if node.kind is NodeKind.FILE:
            return [node.entry()]
        elif node.kind is NodeKind.DIRECTORY:
            return [child.entry() for child in node.sorted_children()]
        raise TypeError(f"unknown node kind: {node.kind}")

    def read(self, path: str) -> str:
        node = self.lookup(path)
        if node is None:
            raise PathNotFound(path)

        if node.kind is NodeKind.FILE:
            return node.content
        elif node.kind is NodeKind.DIRECTORY:
            raise IsADirectory(path)
        raise TypeError(f"unknown node kind: {node.kind}")

    def stat(self, path: str) -> StatInfo:
        resolved = self.resolve(path)
        node = self.lookup(resolved)
        if node is None:
            raise PathNotFound(path)

        return StatInfo(
            name=node.name or '/',
            kind=node.kind,
            size=node.size,
            permissions=node.permissions,
            created=node.created,
            modified=node.modified,
            path=resolved,
        )

    # -----------------------------------------------------------------------
    # Mutation
    # -----------------------------------------------------------------------

    def change_directory(self, path: Optional[str] = None) -> str:
        """Change the working directory; no argument means home."""
        target = path if path else '~'
        resolved = self.resolve(target)
        node = self.lookup(resolved)

        if node is None:
            raise PathNotFound(target)
        if node.kind is NodeKind.FILE:
            raise NotADirectory(target)

        self.cwd = resolved
        return resolved

    def write(self, path: str, content: str):
        """Create or overwrite a file."""
        parent, name = self._parent_and_name(path)
        existing = parent.get(name) if name else parent

        if existing is None:
            parent.add(FileNode(name, content=content))
            logger.debug("created %s (%d bytes)", self.resolve(path), len(content))
        elif existing.kind is NodeKind.FILE:
            existing.set_content(content)
            logger.debug("overwrote %s (%d bytes)", self.resolve(path), len(content))
        else:
            raise IsADirectory(path)

    def make_directory(self, path: str, parents: bool = False):
        """Create a directory; with parents, create missing ancestors too."""
        if parents:
            current = self.root
            walked = ''
            for part in self.resolve(path).split('/'):
                if not part:
                    continue
                walked = _join(walked or '/', part)
                child = current.get(part)
                if child is None:
                    child = DirNode(part)
                    current.add(child)
                    logger.debug("created directory %s", walked)
                elif not child.is_dir():
                    raise NotADirectory(path)
                current = child
            return

        parent, name = self._parent_and_name(path)
        if not name or parent.get(name) is not None:
            raise AlreadyExists(path)

        parent.add(DirNode(name))
        logger.debug("created directory %s", self.resolve(path))

    def remove(self, path: str, recursive: bool = False):
        """Remove a file, or a directory (non-empty ones need recursive)."""
        resolved = self.resolve(path)
        if resolved == '/':
            raise OperationNotPermitted(path)

        parent, name = self._parent_and_name(path)
        node = parent.get(name)
        if node is None:
            raise PathNotFound(path)

        if node.kind is NodeKind.DIRECTORY and node.children and not recursive:
            raise DirectoryNotEmpty(path)

        parent.remove(name)
        logger.debug("removed %s", resolved)

    # -----------------------------------------------------------------------
    # Search
    # -----------------------------------------------------------------------

    def walk(self, path: str = '.') -> List[Tuple[str, Node]]:
        """All descendants of a directory as (absolute path, node), depth first."""
        start = self.resolve(path)
        node = self.lookup(start)
        if node is None:
            raise PathNotFound(path)
        if not node.is_dir():
            raise NotADirectory(path)

        found = []

        def descend(directory: DirNode, current: str):
            for name, child in directory.children.items():
                child_path = _join(current, name)
                found.append((child_path, child))
                if child.is_dir():
                    descend(child, child_path)

        descend(node, start)
        return found

    def find(self, path: str = '.', pattern: str = '*') -> List[str]:
        """Absolute paths of every descendant whose name matches a glob."""
        regex = glob_to_regex(pattern)
        return [found for found, node in self.walk(path) if regex.match(node.name)]

    def search_text(self, pattern: str, path: str = '.', recursive: bool = False,
                    ignore_case: bool = True) -> List[TextMatch]:
        """
        Regular-expression search over file contents, line by line.

        A file path searches that file; a directory searches its files,
        and its subdirectories too when recursive is set.
        """
        regex = re.compile(pattern, re.IGNORECASE if ignore_case else 0)
        start = self.resolve(path)
        node = self.lookup(start)
        if node is None:
            raise PathNotFound(path)

        if node.is_file():
            files = [(start, node)]
        elif recursive:
            files = [(p, n) for p, n in self.walk(start) if n.is_file()]
        else:
            files = [(_join(start, n.name), n) for n in node.children.values() if n.is_file()]

        matches = []
        for file_path, file_node in files:
            for number, line in enumerate(file_node.content.split('\n'), 1):
                if regex.search(line):
                    matches.append(TextMatch(file_path, number, line.strip()))
        return matches
