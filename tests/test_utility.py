#!/usr/bin/env python3
"""
Tests for the utility builtins and the generated help system.
"""

import re

from vshell.commands import BUILTINS, CATEGORIES, commands_in, parse_docstring
from vshell.commands.utility import OS_FULL, OS_NAME
from vshell.result import CLEAR_SCREEN
from vshell.terminal import CommandExecutor


class TestEcho:
    """Test echo."""

    def setup_method(self):
        """Set up an executor over a fresh session."""
        self.executor = CommandExecutor()

    def test_plain(self):
        """Test that output ends with a newline."""
        result = self.executor.execute('echo "Hello World"')
        assert result.output == 'Hello World\n'
        assert result.success
        assert result.exit_code == 0

    def test_no_newline(self):
        """Test -n."""
        assert self.executor.execute('echo -n "no newline"').output == 'no newline'

    def test_no_args(self):
        """Test echo without arguments."""
        assert self.executor.execute('echo').output == ''

    def test_escapes(self):
        """Test -e escape interpretation."""
        assert self.executor.execute(r"echo -e 'a\\tb'").output == 'a\tb\n'
        assert self.executor.execute(r"echo -e 'a\\nb'").output == 'a\nb\n'
        assert self.executor.execute(r"echo 'a\\nb'").output == 'a\\nb\n'

    def test_backslash_consumed_in_single_quotes(self):
        """Test that a lone backslash inside single quotes escapes the next character."""
        assert self.executor.execute(r"echo -e 'a\nb'").output == 'anb\n'
        assert self.executor.execute(r"echo 'it\'s'").output == "it's\n"

    def test_combined_flags(self):
        """Test -ne as one argument."""
        assert self.executor.execute(r"echo -ne 'x\\ty'").output == 'x\ty'

    def test_unknown_flag_is_text(self):
        """Test that other dashed words are printed."""
        assert self.executor.execute('echo -x hi').output == '-x hi\n'


class TestHelp:
    """Test help and man."""

    def setup_method(self):
        """Set up an executor over a fresh session."""
        self.executor = CommandExecutor()

    def test_overview(self):
        """Test the categorised command list."""
        output = self.executor.execute('help').output
        assert output.startswith('Available commands:\n\n')
        for title in CATEGORIES.values():
            assert title in output
        assert '  ls          List directory contents' in output
        assert '  grep        Search text patterns' in output

    def test_overview_hides_aliases(self):
        """Test that alias names are not listed separately."""
        listed = [line.split()[0] for line in self.executor.execute('help').output.split('\n')
                  if line.startswith('  ')]
        assert 'matrix' in listed
        assert 'cmatrix' not in listed
        assert 'quit' not in listed

    def test_command_help(self):
        """Test help for one command."""
        output = self.executor.execute('help grep').output
        lines = output.split('\n')
        assert lines[0] == 'grep - Search text patterns'
        assert 'Usage: grep [-i] [-n] [-v] [-r] PATTERN [FILE...]' in lines
        assert 'Options:' in lines
        assert '  -i    Ignore case' in lines

    def test_unknown_topic(self):
        """Test help for an unknown command."""
        result = self.executor.execute('help nope')
        assert not result.success
        assert result.output == "help: no help topics match 'nope'"

    def test_man(self):
        """Test manual page sections."""
        output = self.executor.execute('man echo').output
        assert output.startswith('NAME\n    echo - Print text to output\n')
        assert 'SYNOPSIS\n    echo [-n] [-e] [STRING...]' in output
        assert 'OPTIONS\n    -n    Do not output trailing newline' in output
        assert 'ESCAPE SEQUENCES' in output
        assert '    \\n    newline' in output
        assert 'EXAMPLES\n    echo "Hello World"' in output

    def test_man_errors(self):
        """Test man without a page and with an unknown one."""
        assert self.executor.execute('man').output.startswith('What manual page do you want?')
        assert self.executor.execute('man nope').output == 'No manual entry for nope'

    def test_every_visible_command_documented(self):
        """Test that each listed builtin has a summary and usage line."""
        for category in CATEGORIES:
            for command in commands_in(category):
                assert command.summary, command.name
                assert command.doc.usage, command.name

    def test_parse_docstring(self):
        """Test docstring section extraction."""
        doc = parse_docstring("""Do a thing.

        Longer text
        continues here.

        Usage:
            thing [-x]

        Options:
            -x    Extra

        Examples:
            thing -x
        """)
        assert doc.summary == 'Do a thing'
        assert doc.description == 'Longer text continues here.'
        assert doc.usage == 'thing [-x]'
        assert doc.options == ['-x    Extra']
        assert doc.examples == ['thing -x']


class TestSessionCommands:
    """Test history, alias, type and the system info commands."""

    def setup_method(self):
        """Set up an executor over a fresh session."""
        self.executor = CommandExecutor()

    def run(self, line):
        return self.executor.execute(line)

    def test_history(self):
        """Test numbered history including the history call itself."""
        self.run('pwd')
        self.run('whoami')
        assert self.run('history').output == '    1  pwd\n    2  whoami\n    3  history'

    def test_history_clear(self):
        """Test history -c."""
        self.run('pwd')
        self.run('history -c')
        assert self.run('history').output == '    1  history'

    def test_whoami(self):
        """Test the configured user."""
        assert self.run('whoami').output == 'guest'

    def test_date(self):
        """Test the date format."""
        output = self.run('date').output
        assert re.match(r'^\w{3} \w{3} \d{1,2} \d{2}:\d{2}:\d{2} UTC \d{4}$', output)

    def test_uname(self):
        """Test uname with and without -a."""
        assert self.run('uname').output == OS_NAME
        assert self.run('uname -a').output == OS_FULL

    def test_clear(self):
        """Test the clear-screen marker."""
        result = self.run('clear')
        assert result.output == ''
        assert result.has_marker(CLEAR_SCREEN)
        assert self.run('cls').has_marker(CLEAR_SCREEN)

    def test_default_aliases(self):
        """Test that ll expands to ls -la."""
        lines = self.run('ll').output.split('\n')
        assert lines[0].endswith('  .')
        assert lines[1].endswith('  ..')

    def test_alias_define_and_use(self):
        """Test defining an alias and passing extra arguments."""
        assert self.run("alias hi='echo hello'").success
        assert self.run('hi').output == 'hello\n'
        assert self.run('hi world').output == 'hello world\n'

    def test_alias_unquoted(self):
        """Test alias t=echo hi followed by t there."""
        self.run('alias t=echo hi')
        assert self.run('t there').output == 'hi there\n'

    def test_alias_list(self):
        """Test listing aliases."""
        assert "alias ll='ls -la'" in self.run('alias').output.split('\n')

    def test_alias_invalid(self):
        """Test bad alias syntax."""
        result = self.run('alias bad')
        assert not result.success
        assert result.output.startswith('alias: invalid syntax')

    def test_type(self):
        """Test type for builtins, aliases and unknown names."""
        assert self.run('type ls').output == 'ls is a shell builtin'
        assert self.run('type ll').output == 'll is aliased to `ls -la`'
        assert self.run('type nope').output == 'nope: not found'
        assert 'type' in BUILTINS
