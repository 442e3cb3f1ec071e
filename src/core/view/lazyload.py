"""
Lazy Load Transformer
=====================

Rewrite ``<img>`` and ``<source>`` elements of a rendered document for
client-side lazy loading.

Elements are located with bounded, non-greedy pattern matching over
single-line markup rather than a DOM. Matching sits behind
``BaseElementMatcher`` so the rewrite rules do not depend on how elements
are found.
"""

import asyncio
import re
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Union

from src.config.logging import get_logger
from src.core.view.image_service import BaseImageCompressor
from src.models.schemas import AttributeMatch, ElementKind, ElementMatch, LAZYLOAD_POLICY

logger = get_logger(__name__)

LAZYLOAD_CLASS = "lazyload"
ALT_FALLBACK = "Content Image"
DEFAULT_IMAGE_WIDTH = 600
# 1x1 transparent PNG
PLACEHOLDER_SRC = (
    "data:image/png;base64,iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAQAAAC1HAwCAAAAC0lEQVR42mNkYAAAAAYAAjCB0C8AAAAASUVORK5CYII="
)


def extract_attribute(markup: str, attribute: str) -> Optional[AttributeMatch]:
    """
    Extract the first ``attribute="value"`` occurrence from element markup.

    Args:
        markup: Element source text
        attribute: Attribute name

    Returns:
        The occurrence and its value, or None when the attribute is absent
    """
    match = re.search(rf'{re.escape(attribute)}="(.*?)"', markup)
    if match is None:
        return None
    return AttributeMatch(match.group(0), match.group(1))


def resolve_class(value: Optional[str]) -> str:
    """Append the lazy-load marker class to an existing class list."""
    if value:
        return f"{value} {LAZYLOAD_CLASS}"
    return LAZYLOAD_CLASS


class BaseElementMatcher(ABC):
    """Abstract base class for element matchers."""

    @abstractmethod
    def find(self, document: str, kind: ElementKind) -> List[ElementMatch]:
        """Locate all elements of ``kind`` in a single-line document."""
        pass


class RegexElementMatcher(BaseElementMatcher):
    """Non-greedy pattern matcher, scanning left to right without overlap."""

    def __init__(self) -> None:
        self._patterns: Dict[ElementKind, re.Pattern[str]] = {
            kind: re.compile(rf'<{kind.value}(.*?){re.escape(attribute)}="(.*?)"(.*?)>')
            for kind, attribute in LAZYLOAD_POLICY.items()
        }

    def find(self, document: str, kind: ElementKind) -> List[ElementMatch]:
        matches: List[ElementMatch] = []
        for found in self._patterns[kind].finditer(document):
            markup = found.group(0)
            resource = extract_attribute(markup, LAZYLOAD_POLICY[kind])
            css_class = extract_attribute(markup, "class") if kind == ElementKind.IMG else None
            matches.append(
                ElementMatch(
                    markup=markup,
                    kind=kind,
                    resource=resource.value if resource else None,
                    css_class=css_class.value if css_class else None,
                )
            )
        return matches


class ElementRewriter:
    """Produce replacement markup for a matched element."""

    def __init__(
        self,
        image_compressor: Optional[BaseImageCompressor] = None,
        width: int = DEFAULT_IMAGE_WIDTH,
        timeout: Optional[float] = None,
    ) -> None:
        self.image_compressor = image_compressor
        self.width = width
        self.timeout = timeout
        self.logger: Any = logger.bind(component="element_rewriter")

    async def compress(self, value: str) -> str:
        """
        Ask the compression collaborator for a compressed variant of ``value``.

        Falls back to the original value when no collaborator is configured,
        the call times out or the collaborator fails.
        """
        if self.image_compressor is None:
            return value

        try:
            return await asyncio.wait_for(
                self.image_compressor.get_compressed_image(value, self.width),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError:
            self.logger.warning("Image compression timed out", source=value, timeout=self.timeout)
        except Exception as e:
            self.logger.warning("Image compression failed", source=value, error=str(e))
        return value

    async def rewrite(self, match: ElementMatch) -> str:
        """
        Rewrite one element.

        ``<source>`` elements only get their resource attribute replaced.
        ``<img>`` elements have the resource moved to ``data-src`` with a
        placeholder ``src``, the marker class, ``loading="lazy"`` and a
        non-empty ``alt``. Elements without a resource attribute are returned
        unchanged.
        """
        if match.resource is None:
            return match.markup

        attribute = LAZYLOAD_POLICY[match.kind]
        occurrence = f'{attribute}="{match.resource}"'
        value = await self.compress(match.resource)

        if match.kind == ElementKind.SOURCE:
            return match.markup.replace(occurrence, f'{attribute}="{value}"')

        markup = match.markup
        if match.css_class is not None:
            # The marker class attribute below replaces the original one
            markup = re.sub(
                rf'\s+class="{re.escape(match.css_class)}"', "", markup, count=1
            )

        replacement = (
            f'data-src="{value}" src="{PLACEHOLDER_SRC}" '
            f'class="{resolve_class(match.css_class)}" loading="lazy"'
        )
        markup = markup.replace(occurrence, replacement)
        return markup.replace('alt=""', f'alt="{ALT_FALLBACK}"')


class LazyloadTransformer:
    """Apply the element rewriter to every matching element of a document."""

    def __init__(
        self,
        rewriter: Optional[ElementRewriter] = None,
        matcher: Optional[BaseElementMatcher] = None,
    ) -> None:
        self.rewriter = rewriter or ElementRewriter()
        self.matcher = matcher or RegexElementMatcher()
        self.logger: Any = logger.bind(component="lazyload")

    async def transform(
        self, document: str, kind: Union[ElementKind, str] = ElementKind.IMG
    ) -> str:
        """
        Rewrite all elements of ``kind`` in ``document``.

        Line breaks are stripped first. Each matched element text is replaced
        everywhere it occurs, so identical elements are rewritten identically.

        Args:
            document: Rendered HTML
            kind: ``img`` or ``source``; other kinds leave the document untouched

        Returns:
            Transformed document
        """
        try:
            kind = ElementKind(kind)
        except ValueError:
            self.logger.warning("Unsupported lazyload element", element=kind)
            return document

        document = document.replace("\n", "").replace("\r", "")
        matches = self.matcher.find(document, kind)

        for match in matches:
            document = document.replace(match.markup, await self.rewriter.rewrite(match))

        self.logger.debug("Lazyload applied", element=kind.value, matches=len(matches))
        return document
