"""
Unit Tests for HTML Compressor
==============================
"""

import pytest

from src.core.view.compressor import compress_html

from tests.utils.assertions import assert_compressed


class TestCompressHTML:
    """Test HTML compression steps."""

    def test_removes_control_characters(self):
        """Test that control whitespace is dropped, not replaced."""
        assert compress_html("<p>\r\na\tb\fc\0d\x0be</p>") == "<p>abcde</p>"

    def test_removes_comments(self):
        """Test that HTML comments are removed non-greedily."""
        html = "<p>a</p><!-- one --><p>b</p><!-- two -->"
        assert compress_html(html) == "<p>a</p><p>b</p>"

    def test_multiline_comment_removed_after_line_breaks(self):
        """Test that comments spanning lines are removed once breaks are gone."""
        assert compress_html("<p>a</p><!-- multi\nline --><p>b</p>") == "<p>a</p><p>b</p>"

    def test_collapses_whitespace(self):
        """Test that whitespace runs collapse to a single space."""
        assert compress_html("<div>   <p>a    b</p>   </div>") == "<div> <p>a b</p> </div>"

    def test_keeps_non_breaking_space(self):
        """Test that non-ASCII whitespace is left alone."""
        assert compress_html("<p>a\u00a0\u00a0b</p>") == "<p>a\u00a0\u00a0b</p>"

    def test_space_between_tags_is_kept(self):
        """Test that the anchored tag-gap pattern leaves documents alone."""
        assert compress_html("<p>a</p>   <p>b</p>") == "<p>a</p> <p>b</p>"

    def test_bare_tag_gap_is_removed(self):
        """Test the only input the anchored pattern matches."""
        assert compress_html(">  <") == ""

    def test_empty_document(self):
        assert compress_html("") == ""

    @pytest.mark.parametrize(
        "html",
        [
            "<html>\n  <body>\n    <!-- nav -->\n    <p>Hello   world</p>\n  </body>\n</html>\n",
            "<ul>\n\t<li>one</li>\n\t<li>two</li>\n</ul>",
            "plain   text",
        ],
    )
    def test_idempotent(self, html):
        """Test that compressing compressed output changes nothing."""
        once = compress_html(html)

        assert compress_html(once) == once
        assert_compressed(once)
