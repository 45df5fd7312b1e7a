"""
Audit configuration: which site's links count, where the site starts, and
how saved pages are named on disk.

A config can be built in code, loaded from a JSON file, or assembled from
command-line flags, and always produces the same normalizer and source.
"""
from dataclasses import dataclass, asdict, field, fields
from pathlib import Path
from typing import Any, List, Optional, Tuple
import json

from site_audit.extractors.normalization import SiteNormalizer, compile_pattern, site_patterns
from site_audit.extractors.sources import FileSource


@dataclass
class AuditConfig:
    """
    Configuration for one audit run.

    Attributes:
        site: Host of the audited site (e.g. 'example.com'). Used to derive the
            domain and prefix patterns when those are not given explicitly.
        locales: Optional locale path segments stripped after the host ('en', 'nl')
        domain_pattern: Regex a link must match to be kept (overrides `site`)
        prefix_pattern: Regex whose first match is removed from kept links (overrides `site`)
        root: Identifier of the entry page for reachability
        extension: Only read saved pages with this extension
        recursive: Read saved pages from subdirectories too
        strip_extension: Drop the extension from page identifiers
        _normalizer: Cached normalizer instance (not serialized)
    """

    site: Optional[str] = None
    locales: List[str] = field(default_factory=list)
    domain_pattern: Optional[str] = None
    prefix_pattern: Optional[str] = None
    root: str = "index"
    extension: Optional[str] = None
    recursive: bool = False
    strip_extension: bool = False
    _normalizer: Optional[Any] = field(default=None, init=False, repr=False, compare=False)

    def __post_init__(self):
        """Validate configuration after initialization."""
        if not self.root:
            raise ValueError("root must be a non-empty page identifier")

        if self.site is not None and not self.site:
            raise ValueError("site must be a non-empty host name if specified")

        self.locales = list(self.locales)
        for locale in self.locales:
            if not locale or '/' in locale:
                raise ValueError(f"locales must be non-empty path segments without '/', got {locale!r}")

        # Fail early on bad regexes rather than at the first page
        compile_pattern(self.domain_pattern, "domain_pattern")
        compile_pattern(self.prefix_pattern, "prefix_pattern")

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization (excludes _normalizer)."""
        data = asdict(self)
        data.pop('_normalizer', None)
        return data

    @classmethod
    def from_dict(cls, data: dict) -> 'AuditConfig':
        """Create from dictionary."""
        known = {f.name for f in fields(cls) if f.init}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown config keys: {sorted(unknown)}")
        return cls(**data)

    def save(self, path: Path) -> None:
        """Save configuration to JSON file."""
        with open(path, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def load(cls, path: Path) -> 'AuditConfig':
        """Load configuration from JSON file."""
        with open(path, 'r') as f:
            data = json.load(f)
        return cls.from_dict(data)

    def effective_patterns(self) -> Tuple[Optional[str], Optional[str]]:
        """
        Resolve the (domain_pattern, prefix_pattern) pair actually used.

        Explicit patterns win; missing ones are derived from `site` if set,
        otherwise left as None (keep every link / strip nothing).
        """
        domain, prefix = self.domain_pattern, self.prefix_pattern
        if self.site is not None:
            site_domain, site_prefix = site_patterns(self.site, self.locales)
            domain = domain if domain is not None else site_domain
            prefix = prefix if prefix is not None else site_prefix
        return domain, prefix

    def get_normalizer(self) -> SiteNormalizer:
        """
        Get the SiteNormalizer for this config.

        Caches the normalizer instance so the patterns are compiled once.
        """
        if self._normalizer is None:
            domain, prefix = self.effective_patterns()
            self._normalizer = SiteNormalizer(domain_pattern=domain, prefix_pattern=prefix)
        return self._normalizer

    def get_source(self, input_dir: Path) -> FileSource:
        """Create the FileSource reading saved pages from `input_dir`."""
        return FileSource(
            input_dir,
            extension=self.extension,
            recursive=self.recursive,
            strip_extension=self.strip_extension,
        )
