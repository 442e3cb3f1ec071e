"""
Test Assertions
===============

Custom assertion helpers for rendered and lazy-loaded markup.
"""

from src.core.view.lazyload import ALT_FALLBACK, PLACEHOLDER_SRC


def assert_lazyloaded_img(markup: str, source: str, css_class: str = "lazyload") -> None:
    """Assert that markup contains an <img> rewritten for lazy loading."""
    assert f'data-src="{source}"' in markup
    assert f'src="{PLACEHOLDER_SRC}"' in markup
    assert f'class="{css_class}"' in markup
    assert 'loading="lazy"' in markup


def assert_alt_fallback(markup: str) -> None:
    """Assert that empty alt texts were replaced."""
    assert 'alt=""' not in markup
    assert f'alt="{ALT_FALLBACK}"' in markup


def assert_compressed(markup: str) -> None:
    """Assert that markup has no control whitespace, comments or whitespace runs."""
    for char in "\r\n\t\f\0\x0b":
        assert char not in markup
    assert "<!--" not in markup
    assert "  " not in markup
