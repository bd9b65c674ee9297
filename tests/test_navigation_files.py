#!/usr/bin/env python3
"""
Tests for the navigation and file builtins.

Every command runs through a CommandExecutor over a freshly seeded
session, the same way the terminal runs it.
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest

from vshell.commands.files import LESS_FOOTER, RM_EXPLOSION, detect_type
from vshell.seed import README
from vshell.terminal import CommandExecutor

PASSWD_LINES = [
    'root:x:0:0:root:/root:/bin/bash',
    'daemon:x:1:1:daemon:/usr/sbin:/usr/sbin/nologin',
    'user:x:1000:1000:Portfolio User:/home/user:/bin/bash',
]


@pytest.fixture
def executor():
    return CommandExecutor()


@pytest.fixture
def fs(executor):
    return executor.session.fs


class TestNavigation:
    """Test pwd, cd and ls."""

    def test_pwd(self, executor):
        """Test the starting directory."""
        assert executor.execute('pwd').output == '/home/user'

    def test_cd(self, executor):
        """Test moving around and returning home."""
        assert executor.execute('cd /etc').success
        assert executor.execute('pwd').output == '/etc'
        executor.execute('cd')
        assert executor.execute('pwd').output == '/home/user'
        executor.execute('cd intel/ctf-writeups')
        executor.execute('cd ../..')
        assert executor.execute('pwd').output == '/home/user'

    def test_cd_errors(self, executor):
        """Test conventional cd error messages."""
        result = executor.execute('cd nowhere')
        assert not result.success
        assert result.output == 'cd: nowhere: No such file or directory'
        assert executor.execute('cd readme.txt').output == 'cd: readme.txt: Not a directory'
        assert executor.execute('pwd').output == '/home/user'

    def test_ls(self, executor):
        """Test the short listing: directories first, dotfiles included."""
        assert executor.execute('ls').output == 'about  cyberops  intel  research  .flag.txt  readme.txt'

    def test_ls_all(self, executor):
        """Test that -a only prepends . and .."""
        output = executor.execute('ls -a').output
        assert output == '.  ..  about  cyberops  intel  research  .flag.txt  readme.txt'

    def test_ls_long(self, executor):
        """Test the long listing format."""
        lines = executor.execute('ls -l').output.split('\n')
        assert len(lines) == 6
        assert lines[0].startswith('drwxr-xr-x  1  user  user')
        assert lines[0].endswith('  about')
        assert lines[-1].startswith('-rw-r--r--  1  user  user')
        assert lines[-1].endswith('  readme.txt')

    def test_ls_path(self, executor):
        """Test listing another directory and a single file."""
        assert executor.execute('ls /').output == 'etc  home  tmp'
        assert executor.execute('ls readme.txt').output == 'readme.txt'

    def test_ls_missing(self, executor):
        """Test listing a missing path."""
        result = executor.execute('ls missing')
        assert not result.success
        assert result.exit_code == 1
        assert result.output == "ls: cannot access 'missing': No such file or directory"


class TestReading:
    """Test cat, head, tail, less, file and stat."""

    def test_cat(self, executor):
        """Test printing a file."""
        result = executor.execute('cat readme.txt')
        assert result.success
        assert result.output == README

    def test_cat_numbered(self, executor):
        """Test cat -n."""
        lines = executor.execute('cat -n /etc/passwd').output.split('\n')
        assert lines[0] == '     1  root:x:0:0:root:/root:/bin/bash'
        assert len(lines) == 3

    def test_cat_several(self, executor, fs):
        """Test that files are separated by a blank line."""
        expected = fs.read('/etc/hosts') + '\n\n' + fs.read('/etc/passwd')
        assert executor.execute('cat /etc/hosts /etc/passwd').output == expected

    def test_cat_errors(self, executor):
        """Test cat error messages."""
        assert executor.execute('cat missing').output == 'cat: missing: No such file or directory'
        assert executor.execute('cat /etc').output == 'cat: /etc: Is a directory'
        assert executor.execute('cat').output == 'cat: missing file operand'

    def test_head_tail(self, executor):
        """Test line slicing with each count syntax."""
        assert executor.execute('head -n 2 /etc/passwd').output == '\n'.join(PASSWD_LINES[:2])
        assert executor.execute('head -n1 /etc/passwd').output == PASSWD_LINES[0]
        assert executor.execute('tail -1 /etc/passwd').output == PASSWD_LINES[-1]
        assert executor.execute('tail /etc/passwd').output == '\n'.join(PASSWD_LINES)

    def test_head_errors(self, executor):
        """Test head error messages."""
        assert executor.execute('head -n x /etc/passwd').output == 'head: invalid number of lines'
        assert executor.execute('head').output == 'head: missing file operand'

    def test_head_pipe(self, executor):
        """Test head on piped input."""
        assert executor.execute('cat /etc/passwd | head -n 1').output == PASSWD_LINES[0]

    def test_less(self, executor):
        """Test that less appends its footer."""
        assert executor.execute('less readme.txt').output == README + LESS_FOOTER

    def test_file(self, executor):
        """Test file type detection output."""
        assert executor.execute('file readme.txt').output == 'readme.txt: ASCII text'
        assert executor.execute('file /etc').output == '/etc: directory'
        assert executor.execute('file nope').output == 'nope: cannot open (No such file or directory)'

    def test_detect_type(self):
        """Test the signature rules."""
        assert detect_type('{"a": 1}') == 'JSON data'
        assert detect_type('{not json}') == 'ASCII text'
        assert detect_type('#!/bin/bash\necho hi') == 'Bash script'
        assert detect_type('#!/usr/bin/env python3\n') == 'Python script'
        assert detect_type('import os\n') == 'Python script'
        assert detect_type('<!DOCTYPE html><html>') == 'HTML document'
        assert detect_type('%PDF-1.4') == 'PDF document'
        assert detect_type('a\x01b') == 'data'
        assert detect_type('') == 'empty'

    def test_stat(self, executor):
        """Test stat output."""
        output = executor.execute('stat readme.txt').output
        assert '  File: readme.txt' in output
        assert '  Type: file' in output
        assert f"  Size: {len(README.encode('utf-8'))} bytes" in output
        assert '  Path: /home/user/readme.txt' in output

    def test_stat_missing(self, executor):
        """Test stat on a missing path."""
        result = executor.execute('stat missing')
        assert not result.success
        assert result.output == "stat: cannot stat 'missing': No such file or directory"


class TestWriting:
    """Test touch, mkdir, rm and find."""

    def test_touch(self, executor, fs):
        """Test creating a file and touching an existing one."""
        assert executor.execute('touch /tmp/a.txt').success
        assert fs.read('/tmp/a.txt') == ''
        executor.execute('touch readme.txt')
        assert fs.read('readme.txt') == README

    def test_mkdir(self, executor, fs):
        """Test creating directories."""
        assert executor.execute('mkdir /tmp/work').success
        assert fs.is_dir('/tmp/work')
        result = executor.execute('mkdir /tmp/work')
        assert result.output == "mkdir: cannot create directory '/tmp/work': File exists"
        assert executor.execute('mkdir -p /tmp/a/b/c').success
        assert fs.is_dir('/tmp/a/b/c')

    def test_rm_file(self, executor, fs):
        """Test removing a file."""
        fs.write('/tmp/a.txt', 'x')
        assert executor.execute('rm /tmp/a.txt').success
        assert 'a.txt' not in executor.execute('ls /tmp').output

    def test_rm_directory(self, executor, fs):
        """Test that directories need -r."""
        fs.make_directory('/tmp/work')
        fs.write('/tmp/work/a.txt', 'x')
        result = executor.execute('rm /tmp/work')
        assert not result.success
        assert result.output == ("rm: cannot remove '/tmp/work': Directory not empty "
                                 "(use -r for recursive)")
        assert executor.execute('rm -r /tmp/work').success
        assert not fs.exists('/tmp/work')

    def test_rm_missing(self, executor):
        """Test -f on missing paths."""
        result = executor.execute('rm missing')
        assert result.output == "rm: cannot remove 'missing': No such file or directory"
        assert executor.execute('rm -f missing').success
        assert executor.execute('rm').output == 'rm: missing operand'

    @pytest.mark.parametrize('line', ['rm -rf /', 'rm -rf ~', 'rm -r *', 'rm -fr /*', 'rm / -rf'])
    def test_rm_dangerous_is_simulated(self, executor, line):
        """Test that destructive patterns only print a joke."""
        before = executor.execute('ls /').output
        result = executor.execute(line)
        assert result.success
        assert result.output == RM_EXPLOSION
        assert executor.execute('ls /').output == before
        assert executor.execute('cat readme.txt').output == README

    def test_find(self, executor):
        """Test find by name and type."""
        lines = executor.execute('find ~ -name "*.txt"').output.split('\n')
        assert '/home/user/readme.txt' in lines
        assert '/home/user/cyberops/dhm.txt' in lines
        dirs = executor.execute('find /home/user -type d').output.split('\n')
        assert '/home/user/cyberops' in dirs
        assert '/home/user/readme.txt' not in dirs

    def test_find_missing(self, executor):
        """Test find on a missing start path."""
        result = executor.execute('find nowhere')
        assert not result.success
        assert result.output == "find: 'nowhere': No such file or directory"

    def test_find_invalid_pattern(self, executor):
        """Test that a malformed name pattern is reported."""
        result = executor.execute('find ~ -name "["')
        assert not result.success
        assert result.output.startswith('find: invalid pattern:')
