#!/usr/bin/env python3
"""
Tests for the command parser.

Covers tokenizing, quote handling, pipe splitting and redirect extraction.
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import unittest

from vshell.command_parser import (
    QuoteState, CharKind, Redirect,
    tokenize, scan, split_by_pipe, parse_redirect,
    contains_unquoted_pipe, contains_unquoted_redirect,
)


class TestTokenize(unittest.TestCase):
    """Test tokenize()."""

    def test_simple_words(self):
        """Test whitespace splitting."""
        self.assertEqual(tokenize('ls -la /etc'), ['ls', '-la', '/etc'])

    def test_double_quotes_group_words(self):
        """Test that double quotes keep spaces inside one token."""
        self.assertEqual(tokenize('echo "a b" c'), ['echo', 'a b', 'c'])

    def test_backslash_inside_single_quotes(self):
        """Test that a backslash escapes inside single quotes too."""
        self.assertEqual(tokenize(r"echo 'it\'s'"), ['echo', "it's"])
        self.assertEqual(tokenize(r"echo 'a\nb'"), ['echo', 'anb'])
        self.assertEqual(tokenize(r"echo 'a\\nb'"), ['echo', 'a\\nb'])

    def test_escaped_quote_keeps_span_open(self):
        """Test that an escaped quote does not end a quoted span."""
        self.assertEqual(tokenize(r"""echo "say \"hi\"" x"""), ['echo', 'say "hi"', 'x'])
        self.assertFalse(contains_unquoted_pipe(r"echo 'a\'|b'"))

    def test_backslash_escapes_space(self):
        """Test that an escaped space does not split."""
        self.assertEqual(tokenize('cat my\\ file'), ['cat', 'my file'])

    def test_empty_quotes_yield_token(self):
        """Test that "" produces an empty argument."""
        self.assertEqual(tokenize('echo ""'), ['echo', ''])

    def test_pipe_is_separate_token(self):
        """Test pipe without surrounding spaces."""
        self.assertEqual(tokenize('a|b'), ['a', '|', 'b'])

    def test_append_operator(self):
        """Test that >> is one token."""
        self.assertEqual(tokenize('a >> b'), ['a', '>>', 'b'])
        self.assertEqual(tokenize('a>b'), ['a', '>', 'b'])

    def test_quoted_operators_are_text(self):
        """Test that quoting suppresses pipe and redirect."""
        self.assertEqual(tokenize('echo "a|b"'), ['echo', 'a|b'])
        self.assertEqual(tokenize("echo '>'"), ['echo', '>'])

    def test_blank_input(self):
        """Test empty and whitespace-only lines."""
        self.assertEqual(tokenize(''), [])
        self.assertEqual(tokenize('   '), [])

    def test_scan_marks_operators(self):
        """Test that scan() distinguishes quoted text from operators."""
        tokens = scan('echo "|" | wc')
        self.assertFalse(tokens[1].operator)
        self.assertTrue(tokens[2].operator)


class TestQuoteState(unittest.TestCase):
    """Test the quote tracking state machine."""

    def test_feed_sequence(self):
        """Test classification across a quoted span."""
        state = QuoteState()
        kinds = [state.feed(c) for c in '"a |"|']
        self.assertEqual(kinds, [
            CharKind.QUOTE, CharKind.LITERAL, CharKind.LITERAL,
            CharKind.LITERAL, CharKind.QUOTE, CharKind.PIPE,
        ])
        self.assertFalse(state.quoted)

    def test_escape_inside_double_quotes(self):
        """Test that \\" does not close a double-quoted span."""
        state = QuoteState()
        for c in '"a\\"':
            state.feed(c)
        self.assertTrue(state.quoted)


class TestDetection:
    """Test unquoted operator detection."""

    def test_pipe_detection(self):
        """Test contains_unquoted_pipe."""
        assert contains_unquoted_pipe('cat f | wc')
        assert not contains_unquoted_pipe('echo "a|b"')
        assert not contains_unquoted_pipe("echo 'a|b'")
        assert not contains_unquoted_pipe('echo a\\|b')

    def test_redirect_detection(self):
        """Test contains_unquoted_redirect."""
        assert contains_unquoted_redirect('echo hi > f')
        assert contains_unquoted_redirect('echo hi >> f')
        assert not contains_unquoted_redirect('echo "x > y"')


class TestSplitByPipe:
    """Test split_by_pipe()."""

    def test_segments_keep_quotes(self):
        """Test that segments are raw text, stripped."""
        assert split_by_pipe('cat f | grep "x|y" | wc') == ['cat f', 'grep "x|y"', 'wc']

    def test_trailing_pipe_gives_empty_segment(self):
        """Test that an empty last stage is kept."""
        assert split_by_pipe('ls |') == ['ls', '']

    def test_no_pipe(self):
        """Test a line without pipes."""
        assert split_by_pipe('  ls -l  ') == ['ls -l']


class TestParseRedirect:
    """Test parse_redirect()."""

    def test_overwrite(self):
        """Test a plain > redirect."""
        redirect = parse_redirect('echo hi > out.txt')
        assert redirect == Redirect(['echo', 'hi'], 'out.txt', append=False)

    def test_append_with_quotes(self):
        """Test >> with quoted command text and target."""
        redirect = parse_redirect('echo "a b" >> "my file"')
        assert redirect.command == ['echo', 'a b']
        assert redirect.target == 'my file'
        assert redirect.append

    def test_missing_parts(self):
        """Test that a missing command or target is invalid."""
        assert parse_redirect('> out') is None
        assert parse_redirect('echo hi >') is None

    def test_second_redirect_is_invalid(self):
        """Test that operators after the target are rejected."""
        assert parse_redirect('echo a > b > c') is None

    def test_no_redirect(self):
        """Test a line without a redirect."""
        assert parse_redirect('echo hi') is None


if __name__ == '__main__':
    unittest.main()
