"""
Link extraction for HTML pages.

Extracts raw href targets from anchor tags:
- AnchorHrefExtractor: Extracts <a href='target'> / <a href="target"> links
"""
import re
from typing import List
from .protocols import LinkExtractor


class AnchorHrefExtractor(LinkExtractor):
    """
    Extracts quoted href targets from <a> tags, in document order.
    
    Tolerates other attributes before and after href, whitespace around '=',
    and either quote style. Targets starting with '#' (fragments), '/' or '\\'
    (absolute and escaped paths) are skipped, as are anchors whose href is
    unquoted or missing. The input does not need to be well-formed HTML.
    
    Examples:
        >>> AnchorHrefExtractor().extract_links('<a class="x" href = "page-b.html">')
        ['page-b.html']
        >>> AnchorHrefExtractor().extract_links("<a href='#top'> <a href=bare>")
        []
    """
    
    # group(1) is a double-quoted target, group(2) a single-quoted one.
    # A value may contain the other quote character (href="o'brien").
    ANCHOR_PATTERN = re.compile(
        r'''<a\s[^>]*?(?<![\w-])href\s*=\s*(?:"([^#/\\"][^"]*)"|'([^#/\\'][^']*)')[^>]*>''',
        re.IGNORECASE,
    )
    
    def extract_links(self, content: str) -> List[str]:
        """
        Extract href targets.
        
        Args:
            content: Raw page text
        
        Returns:
            List of raw targets in order of appearance (duplicates kept)
        """
        return [
            match.group(1) if match.group(1) is not None else match.group(2)
            for match in self.ANCHOR_PATTERN.finditer(content)
        ]
