"""
Builtin command registry.

Every builtin is a plain function ``handler(session, args, stdin=None)``
returning a CommandResult (or a PendingResult). Handlers register
themselves with the @builtin decorator; help and man pages are generated
from their structured docstrings.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence

logger = logging.getLogger(__name__)

# Display order and titles used by `help`
CATEGORIES = {
    'navigation': 'NAVIGATION',
    'files': 'FILES',
    'text': 'TEXT PROCESSING',
    'encoding': 'ENCODING',
    'utility': 'UTILITY',
    'fun': 'FUN',
}

SECTION_HEADINGS = {
    'Usage:': 'usage',
    'Options:': 'options',
    'Escapes:': 'escapes',
    'Examples:': 'examples',
}


@dataclass
class DocSections:
    """Structured pieces of a builtin docstring."""
    summary: str = ''
    description: str = ''
    usage: str = ''
    options: List[str] = field(default_factory=list)
    escapes: List[str] = field(default_factory=list)
    examples: List[str] = field(default_factory=list)


def parse_docstring(docstring: Optional[str]) -> DocSections:
    """
    Extract structured sections from a docstring.

    The first line is the one-line summary. Any paragraph before the first
    section heading is the long description. Recognised headings are
    Usage:, Options:, Escapes: and Examples:.
    """
    sections = DocSections()
    if not docstring:
        return sections

    lines = docstring.strip().split('\n')
    sections.summary = lines[0].strip().rstrip('.')

    description = []
    current_section = None

    for line in lines[1:]:
        line = line.strip()
        if line in SECTION_HEADINGS:
            current_section = SECTION_HEADINGS[line]
        elif not line:
            continue
        elif current_section is None:
            description.append(line)
        elif current_section == 'usage':
            if not sections.usage:
                sections.usage = line
        else:
            getattr(sections, current_section).append(line)

    sections.description = ' '.join(description)
    return sections


@dataclass
class Builtin:
    """A registered command."""
    name: str
    func: Callable
    category: str
    hidden: bool = False

    @property
    def doc(self) -> DocSections:
        return parse_docstring(self.func.__doc__)

    @property
    def summary(self) -> str:
        return self.doc.summary

    def __call__(self, session, args: List[str], stdin: Optional[str] = None):
        return self.func(session, args, stdin)


BUILTINS: Dict[str, Builtin] = {}


def builtin(name: str, category: str, aliases: Sequence[str] = ()):
    """
    Register a function as a builtin command.

    Aliases share the handler but are left out of the `help` listing.
    """
    if category not in CATEGORIES:
        raise ValueError(f"unknown command category: {category}")

    def decorator(func: Callable) -> Callable:
        BUILTINS[name] = Builtin(name, func, category)
        for alias in aliases:
            BUILTINS[alias] = Builtin(alias, func, category, hidden=True)
        logger.debug("registered builtin %s (%s)", name, category)
        return func

    return decorator


def get_builtin(name: str) -> Optional[Builtin]:
    return BUILTINS.get(name)


def commands_in(category: str) -> List[Builtin]:
    """Visible builtins of a category, in registration order."""
    return [cmd for cmd in BUILTINS.values()
            if cmd.category == category and not cmd.hidden]
