"""
Link normalization: turning raw href targets into page identifiers.

Core Purpose:
    Reduce every raw reference found on a page to the bare identifier of the
    page it points at, or drop it. Only links into the site of interest
    survive; everything else is filtered out silently.

Design Pattern:
    Pipeline of small stages, each usable on its own. The patterns are owned by
    the normalizer instance, so several normalizers with different sites can
    coexist (and be tested) in one process.

The normalization algorithm:
    1. matches_domain() - Keep only links matching the site's domain pattern
    2. strip_prefix() - Remove scheme + host (+ optional locale segment)
    3. remove_trailing_slash() - Remove exactly one trailing '/'
    4. is_crawling_leftover() - Drop empty remainders and anything with a ':'

A link that fails a stage is dropped (normalize() returns None), never raised.
"""
import re
from typing import Iterable, List, Optional, Sequence, Tuple, Union
from .protocols import LinkNormalizer


PatternLike = Union[str, re.Pattern]


def compile_pattern(pattern: Optional[PatternLike], name: str) -> Optional[re.Pattern]:
    """
    Compile a pattern given as a string; compiled patterns and None pass through.

    Raises:
        ValueError: If the pattern is not a valid regular expression
    """
    if pattern is None or isinstance(pattern, re.Pattern):
        return pattern
    try:
        return re.compile(pattern)
    except re.error as e:
        raise ValueError(f"Invalid {name}: {pattern!r} ({e})") from e


def site_patterns(host: str, locales: Sequence[str] = ()) -> Tuple[str, str]:
    """
    Build the (domain_pattern, prefix_pattern) pair for a site.

    The prefix accepts http and https, an optional 'www.' and, when locales
    are given, one optional locale segment such as 'en/'.

    Examples:
        >>> site_patterns("example.com", ["en", "nl"])
        ('example\\\\.com', '^https?://(?:www\\\\.)?example\\\\.com/(?:(?:en|nl)/)?')
    """
    if not host:
        raise ValueError("host must be a non-empty string")
    escaped = re.escape(host)
    prefix = rf'^https?://(?:www\.)?{escaped}/'
    if locales:
        alternatives = '|'.join(re.escape(locale) for locale in locales)
        prefix += rf'(?:(?:{alternatives})/)?'
    return escaped, prefix


def filter_regex(items: Iterable[str], pattern: re.Pattern) -> List[str]:
    """Keep only the items matching `pattern` (searched anywhere in the item)."""
    return [item for item in items if pattern.search(item)]


class SiteNormalizer(LinkNormalizer):
    """
    Normalizes raw references into page identifiers for one site.

    Examples:
        >>> normalizer = SiteNormalizer(r'example\\.com', r'^https?://example\\.com/')
        >>> normalizer.normalize("https://example.com/tag/this/")
        'tag/this'
        >>> normalizer.normalize("https://other.org/page") is None
        True
        >>> SiteNormalizer().normalize("mailto:someone@example.com") is None
        True
    """

    def __init__(
        self,
        domain_pattern: Optional[PatternLike] = None,
        prefix_pattern: Optional[PatternLike] = None,
    ):
        """
        Args:
            domain_pattern: Links not matching this are discarded. None keeps all links.
            prefix_pattern: First match is removed from each link. None strips nothing.

        Raises:
            ValueError: If a pattern string is not a valid regular expression
        """
        self.domain_pattern = compile_pattern(domain_pattern, "domain pattern")
        self.prefix_pattern = compile_pattern(prefix_pattern, "prefix pattern")

    def __repr__(self):
        domain = self.domain_pattern.pattern if self.domain_pattern else None
        prefix = self.prefix_pattern.pattern if self.prefix_pattern else None
        return f"SiteNormalizer(domain_pattern={domain!r}, prefix_pattern={prefix!r})"

    def normalize(self, link: str) -> Optional[str]:
        """
        Run all stages on a single raw link.

        Args:
            link: Raw href target

        Returns:
            Page identifier, or None if any stage dropped the link
        """
        if not self.matches_domain(link):
            return None

        text = self.remove_trailing_slash(self.strip_prefix(link))

        if not self.is_crawling_leftover(text):
            return None
        return text

    def normalize_all(self, links: Iterable[str]) -> List[str]:
        """Normalize links in order, dropping the ones filtered out."""
        normalized = (self.normalize(link) for link in links)
        return [identifier for identifier in normalized if identifier is not None]

    def matches_domain(self, link: str) -> bool:
        """True if the link belongs to the site of interest."""
        if self.domain_pattern is None:
            return True
        return self.domain_pattern.search(link) is not None

    def strip_prefix(self, link: str) -> str:
        """Remove the first match of the prefix pattern."""
        if self.prefix_pattern is None:
            return link
        return self.prefix_pattern.sub('', link, count=1)

    @staticmethod
    def remove_trailing_slash(text: str) -> str:
        """Remove one trailing '/', if present. Repeated slashes are not collapsed."""
        if text.endswith('/'):
            return text[:-1]
        return text

    @staticmethod
    def is_crawling_leftover(text: str) -> bool:
        """
        Check that `text` is usable as a page identifier.

        Empty text and text containing ':' (mailto:, tel:, unknown schemes,
        other hosts' URLs) are rejected. Only meaningful after the prefix has
        been stripped and the trailing slash removed.
        """
        if not text:
            return False
        if ':' in text:
            return False
        return True
