"""
Unit tests for AuditConfig dataclass.
"""
import json

import pytest

from site_audit.audit_config import AuditConfig
from site_audit.extractors.normalization import SiteNormalizer
from site_audit.extractors.sources import FileSource


class TestAuditConfigDefaults:
    """Test default values and basic instantiation."""
    
    def test_default_instantiation(self):
        config = AuditConfig()
        
        assert config.site is None
        assert config.locales == []
        assert config.domain_pattern is None
        assert config.prefix_pattern is None
        assert config.root == "index"
        assert config.extension is None
        assert config.recursive is False
        assert config.strip_extension is False
    
    def test_default_normalizer_keeps_relative_links(self):
        normalizer = AuditConfig().get_normalizer()
        
        assert normalizer.normalize("page-b.html") == "page-b.html"
        assert normalizer.normalize("mailto:x@example.com") is None


class TestAuditConfigValidation:
    """Test __post_init__ validation."""
    
    def test_empty_root(self):
        with pytest.raises(ValueError, match="root"):
            AuditConfig(root="")
    
    def test_empty_site(self):
        with pytest.raises(ValueError, match="site"):
            AuditConfig(site="")
    
    def test_bad_locale(self):
        with pytest.raises(ValueError, match="locales"):
            AuditConfig(site="example.com", locales=["en/gb"])
    
    def test_bad_pattern(self):
        with pytest.raises(ValueError, match="domain_pattern"):
            AuditConfig(domain_pattern="[")
        with pytest.raises(ValueError, match="prefix_pattern"):
            AuditConfig(prefix_pattern="(")


class TestAuditConfigNormalizer:
    """Test how patterns are resolved."""
    
    def test_site_patterns(self):
        config = AuditConfig(site="example.com", locales=["en", "nl"])
        normalizer = config.get_normalizer()
        
        assert isinstance(normalizer, SiteNormalizer)
        assert normalizer.normalize("https://www.example.com/nl/contact/") == "contact"
        assert normalizer.normalize("https://elsewhere.org/contact") is None
    
    def test_explicit_pattern_overrides_site(self):
        config = AuditConfig(site="example.com", prefix_pattern=r"^https://example\.com/blog/")
        normalizer = config.get_normalizer()
        
        assert normalizer.normalize("https://example.com/blog/post-1") == "post-1"
        # Domain pattern still comes from the site
        assert normalizer.normalize("https://other.org/blog/post-1") is None
    
    def test_effective_patterns(self):
        assert AuditConfig().effective_patterns() == (None, None)
        assert AuditConfig(site="example.com").effective_patterns() == (
            r"example\.com",
            r"^https?://(?:www\.)?example\.com/",
        )
        assert AuditConfig(site="example.com", domain_pattern="ex").effective_patterns()[0] == "ex"
    
    def test_normalizer_is_cached(self):
        config = AuditConfig(site="example.com")
        
        assert config.get_normalizer() is config.get_normalizer()
    
    def test_get_source(self, tmp_path):
        config = AuditConfig(extension="html", recursive=True, strip_extension=True)
        source = config.get_source(tmp_path)
        
        assert isinstance(source, FileSource)
        assert source.extension == ".html"
        assert source.recursive is True
        assert source.strip_extension is True


class TestAuditConfigSerialization:
    """Test dict and JSON round trips."""
    
    def test_to_dict_excludes_cache(self):
        config = AuditConfig(site="example.com")
        config.get_normalizer()
        
        data = config.to_dict()
        assert "_normalizer" not in data
        assert data["site"] == "example.com"
    
    def test_save_and_load(self, tmp_path):
        config = AuditConfig(site="example.com", locales=["en"], root="home", extension=".html")
        path = tmp_path / "audit.json"
        
        config.save(path)
        loaded = AuditConfig.load(path)
        
        assert loaded == config
        assert json.loads(path.read_text())["locales"] == ["en"]
    
    def test_unknown_keys_rejected(self):
        with pytest.raises(ValueError, match="Unknown config keys"):
            AuditConfig.from_dict({"site": "example.com", "colour": "blue"})
