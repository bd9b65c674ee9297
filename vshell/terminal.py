#!/usr/bin/env python3
"""
Terminal emulator for vshell.

This module executes command lines against a session: it expands aliases,
records history, routes pipelines and redirections, and dispatches each
command to its builtin handler.

Design Principles:
- One Session owns all mutable state (filesystem, history, aliases)
- Clean separation between parsing and execution
- Every result is resolved before it leaves the executor
- Nothing raised by a command escapes execute()
"""

import logging
import random
import sys
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .command_parser import (
    contains_unquoted_pipe, contains_unquoted_redirect,
    parse_redirect, split_by_pipe, tokenize,
)
from .commands import get_builtin
from .result import CLEAR_SCREEN, CommandResult
from .seed import SEED_TREE
from .vfs import VFSError, VirtualFilesystem

logger = logging.getLogger(__name__)

DEFAULT_ALIASES = {
    'll': 'ls -la',
    'la': 'ls -a',
    'l': 'ls -l',
    'cls': 'clear',
    '..': 'cd ..',
    '~': 'cd ~',
}

CLEAR_SEQUENCE = '\033[2J\033[H'


@dataclass
class TerminalConfig:
    """Configuration for terminal session."""
    user: str = 'guest'
    hostname: str = 'portfolio'
    home_dir: str = '/home/user'
    initial_dir: Optional[str] = None  # defaults to home_dir
    prompt_format: str = '{user}@{hostname}:{cwd}$ '
    enable_colors: bool = True
    history_size: int = 1000
    aliases: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_ALIASES))
    seed: Optional[int] = None  # random seed for the easter eggs


class CommandHistory:
    """Bounded command history with consecutive-duplicate coalescing."""

    def __init__(self, max_size: int = 1000):
        """Initialize with maximum history size."""
        self.max_size = max_size
        self.history: List[str] = []

    def add(self, command: str) -> bool:
        """Add a command to history. Returns False if it was not recorded."""
        if not command or not command.strip():
            return False
        if self.history and self.history[-1] == command:
            return False

        self.history.append(command)
        if len(self.history) > self.max_size:
            self.history.pop(0)
        return True

    def entries(self) -> List[str]:
        return list(self.history)

    def clear(self):
        self.history.clear()

    def __len__(self) -> int:
        return len(self.history)


class Session:
    """
    State of one shell: filesystem, history and aliases.

    Builtins receive the session explicitly; two sessions never share
    anything.
    """

    def __init__(self, config: Optional[TerminalConfig] = None,
                 fs: Optional[VirtualFilesystem] = None):
        self.config = config or TerminalConfig()
        self.fs = fs or VirtualFilesystem(
            home=self.config.home_dir,
            seed=SEED_TREE,
            initial_dir=self.config.initial_dir,
        )
        self.history = CommandHistory(self.config.history_size)
        self.aliases: Dict[str, str] = dict(self.config.aliases)
        self.rng = random.Random(self.config.seed)

    def get_history(self) -> List[str]:
        return self.history.entries()

    def clear_history(self):
        self.history.clear()

    def get_aliases(self) -> Dict[str, str]:
        return dict(self.aliases)

    def set_alias(self, name: str, value: str):
        self.aliases[name] = value


class CommandExecutor:
    """
    Executes command lines for a session.

    A line is classified once: a line with an unquoted pipe runs as a
    pipeline, otherwise one with an unquoted redirect writes its output
    to a file, otherwise it runs as a single command.
    """

    def __init__(self, session: Optional[Session] = None):
        """Initialize with a Session (a fresh one by default)."""
        self.session = session or Session()

    def execute(self, line: str) -> CommandResult:
        """Execute a raw command line and return its resolved result."""
        line = line.strip() if line else ''
        if not line:
            return CommandResult.ok()

        self.session.history.add(line)
        expanded = self._expand_alias(line)
        logger.debug("executing %r", expanded)

        if contains_unquoted_pipe(expanded):
            result = self._execute_pipeline(expanded)
        elif contains_unquoted_redirect(expanded):
            result = self._execute_redirect(expanded)
        else:
            result = self._execute_command(tokenize(expanded))

        return result.resolve()

    def _expand_alias(self, line: str) -> str:
        """Replace the first word if it names an alias; never recursive."""
        first = line.split(None, 1)[0]
        expansion = self.session.aliases.get(first)
        if expansion is None:
            return line

        rest = line[len(first):].strip()
        logger.debug("alias %s -> %s", first, expansion)
        return f"{expansion} {rest}" if rest else expansion

    def _execute_command(self, tokens: List[str], stdin: Optional[str] = None) -> CommandResult:
        """Execute a single tokenized command."""
        if not tokens:
            return CommandResult.error('Error: Invalid pipeline syntax')

        name, args = tokens[0], tokens[1:]
        command = get_builtin(name)
        if command is None:
            return CommandResult.error(
                f"Command not found: {name}. Type 'help' for available commands.", 127)

        try:
            return command(self.session, args, stdin).resolve()
        except Exception as e:
            logger.exception("builtin %s raised", name)
            return CommandResult.error(f"Error executing {name}: {e}")

    def _execute_pipeline(self, line: str) -> CommandResult:
        """Execute a pipeline of commands."""
        stages = split_by_pipe(line)
        logger.debug("pipeline with %d stages", len(stages))

        piped: Optional[str] = None
        result = CommandResult.ok()
        for index, stage in enumerate(stages):
            if index == len(stages) - 1 and contains_unquoted_redirect(stage):
                return self._execute_redirect(stage, stdin=piped)

            result = self._execute_command(tokenize(stage), stdin=piped)
            if not result.success:
                return result
            piped = result.output

        return result

    def _execute_redirect(self, line: str, stdin: Optional[str] = None) -> CommandResult:
        """Run a command and write its output to a file instead of returning it."""
        redirect = parse_redirect(line)
        if redirect is None:
            return CommandResult.error('Error: Invalid redirect syntax')

        result = self._execute_command(redirect.command, stdin=stdin)
        if not result.success:
            return result

        content = result.output
        if content.endswith('\n'):
            content = content[:-1]

        fs = self.session.fs
        try:
            if redirect.append and fs.is_file(redirect.target):
                content = fs.read(redirect.target) + '\n' + content
            fs.write(redirect.target, content)
        except VFSError as e:
            return CommandResult.error(f"Error: cannot create file '{e.path}': {e.reason}")

        logger.debug("%s output to %s", 'appended' if redirect.append else 'wrote',
                     redirect.target)
        return CommandResult.ok()


class TerminalSession:
    """
    Interactive terminal session.

    This class provides the REPL loop: prompt display, command execution
    and rendering of results.
    """

    def __init__(self, config: Optional[TerminalConfig] = None):
        """Initialize terminal session."""
        self.config = config or TerminalConfig()
        self.executor = CommandExecutor(Session(self.config))
        self.running = False

    @property
    def session(self) -> Session:
        return self.executor.session

    def get_prompt(self) -> str:
        """Generate the command prompt."""
        cwd = self.session.fs.pwd
        home = self.config.home_dir
        if cwd == home or cwd.startswith(home + '/'):
            display_cwd = '~' + cwd[len(home):]
        else:
            display_cwd = cwd

        if self.config.enable_colors:
            # Green for user@host, blue for path
            return (f'\033[32m{self.config.user}@{self.config.hostname}\033[0m:'
                    f'\033[34m{display_cwd}\033[0m$ ')

        return self.config.prompt_format.format(
            user=self.config.user,
            hostname=self.config.hostname,
            cwd=display_cwd,
        )

    def execute_command(self, command_line: str) -> CommandResult:
        return self.executor.execute(command_line)

    def render(self, result: CommandResult) -> str:
        """Text to show for a result, honouring the clear-screen marker."""
        if result.has_marker(CLEAR_SCREEN):
            return CLEAR_SEQUENCE + result.output
        return result.output

    def run_command(self, command_line: str) -> str:
        """
        Run a single command and return output.

        This method is useful for non-interactive use.
        """
        return self.render(self.execute_command(command_line))

    def run_script(self, script_lines: List[str]) -> List[str]:
        """
        Run a script (list of command lines) and return outputs.
        """
        outputs = []
        for line in script_lines:
            # Skip comments and empty lines
            line = line.strip()
            if not line or line.startswith('#'):
                continue
            outputs.append(self.run_command(line))
        return outputs

    def run_interactive(self):
        """Run the interactive REPL loop."""
        self.running = True

        print(self.session.fs.read('/etc/motd'))

        while self.running:
            try:
                command_line = input(self.get_prompt())
            except KeyboardInterrupt:
                print("^C")
                continue
            except EOFError:
                print()
                break

            output = self.run_command(command_line)
            if output:
                print(output, end='' if output.endswith('\n') else '\n')

        self.running = False


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for terminal emulator."""
    import argparse

    parser = argparse.ArgumentParser(description='vshell - portfolio terminal emulator')
    parser.add_argument('-c', '--command', help='Execute command and exit')
    parser.add_argument('-u', '--user', help='Set username', default='guest')
    parser.add_argument('-d', '--directory', help='Set initial directory', default=None)
    parser.add_argument('--seed', type=int, help='Seed for random output', default=None)
    parser.add_argument('--no-color', action='store_true', help='Plain prompt')
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging')
    args = parser.parse_args(argv)

    log_level = logging.DEBUG if args.verbose else logging.WARNING
    logging.basicConfig(level=log_level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    config = TerminalConfig(
        user=args.user,
        initial_dir=args.directory,
        enable_colors=not args.no_color,
        seed=args.seed,
    )
    session = TerminalSession(config=config)

    if args.command:
        result = session.execute_command(args.command)
        output = session.render(result)
        if output:
            print(output, end='' if output.endswith('\n') else '\n')
        return result.exit_code

    session.run_interactive()
    return 0


if __name__ == '__main__':
    sys.exit(main())
