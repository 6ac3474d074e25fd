"""Tests for scan configuration loading."""

from pathlib import Path

import pytest

from scanner.config import ScanConfiguration, load_configuration
from scanner.errors import ConfigurationError
from scanner.patterns import DEFAULT_INCLUDES


class TestScanConfiguration:
    """Tests for ScanConfiguration defaults and validation."""
    
    def test_defaults(self, tmp_path):
        config = ScanConfiguration(base_directory=tmp_path)
        
        assert config.output_directory is None
        assert config.stale_millis == 0
        assert config.namespace_override is None
        assert config.follow_symlinks
        assert config.use_default_excludes
        assert config.output_extension == "java"
        assert config.effective_includes == list(DEFAULT_INCLUDES)
    
    def test_string_paths_converted(self, tmp_path):
        config = ScanConfiguration(base_directory=str(tmp_path), output_directory=str(tmp_path / "out"))
        
        assert config.base_directory == tmp_path
        assert config.output_directory == tmp_path / "out"
    
    def test_custom_includes(self, tmp_path):
        config = ScanConfiguration(base_directory=tmp_path, includes=["*.def"])
        assert config.effective_includes == ["*.def"]
    
    def test_non_integer_tolerance(self, tmp_path):
        with pytest.raises(ConfigurationError):
            ScanConfiguration(base_directory=tmp_path, stale_millis="10")


class TestLoadConfiguration:
    """Tests for reading configuration files."""
    
    def test_yaml(self, tmp_path):
        config_file = tmp_path / "fplscan.yaml"
        config_file.write_text(
            "base-directory: defs\n"
            "output-directory: build/generated\n"
            "stale-millis: 250\n"
            "includes:\n"
            "  - '**/*.fpl'\n"
            "excludes: legacy/**\n"
            "namespace_override: com.example\n"
        )
        
        config = load_configuration(config_file)
        
        assert config.base_directory == tmp_path.resolve() / "defs"
        assert config.output_directory == tmp_path.resolve() / "build" / "generated"
        assert config.stale_millis == 250
        assert config.includes == ["**/*.fpl"]
        assert config.excludes == ["legacy/**"]
        assert config.namespace_override == "com.example"
    
    def test_toml(self, tmp_path):
        config_file = tmp_path / "fplscan.toml"
        config_file.write_text(
            'base_directory = "/abs/defs"\n'
            "follow_symlinks = false\n"
            'output_extension = "kt"\n'
        )
        
        config = load_configuration(config_file)
        
        assert config.base_directory == Path("/abs/defs")
        assert not config.follow_symlinks
        assert config.output_extension == "kt"
    
    def test_overrides_take_precedence(self, tmp_path):
        config_file = tmp_path / "fplscan.yaml"
        config_file.write_text("base_directory: defs\nstale_millis: 5\n")
        
        config = load_configuration(config_file, stale_millis=10, namespace_override=None)
        
        assert config.stale_millis == 10
        assert config.namespace_override is None
    
    def test_override_supplies_base_directory(self, tmp_path):
        config_file = tmp_path / "fplscan.yaml"
        config_file.write_text("stale_millis: 5\n")
        
        config = load_configuration(config_file, base_directory=tmp_path)
        
        assert config.base_directory == tmp_path
    
    def test_missing_base_directory(self, tmp_path):
        config_file = tmp_path / "fplscan.yaml"
        config_file.write_text("stale_millis: 5\n")
        
        with pytest.raises(ConfigurationError):
            load_configuration(config_file)
    
    def test_unknown_key(self, tmp_path):
        config_file = tmp_path / "fplscan.yaml"
        config_file.write_text("base_directory: defs\ncolour: blue\n")
        
        with pytest.raises(ConfigurationError, match="colour"):
            load_configuration(config_file)
    
    def test_malformed_yaml(self, tmp_path):
        config_file = tmp_path / "fplscan.yaml"
        config_file.write_text("base_directory: [unclosed\n")
        
        with pytest.raises(ConfigurationError):
            load_configuration(config_file)
    
    def test_not_a_mapping(self, tmp_path):
        config_file = tmp_path / "fplscan.yaml"
        config_file.write_text("- just\n- a list\n")
        
        with pytest.raises(ConfigurationError):
            load_configuration(config_file)
    
    def test_unsupported_format(self, tmp_path):
        config_file = tmp_path / "fplscan.ini"
        config_file.write_text("[scan]\n")
        
        with pytest.raises(ConfigurationError):
            load_configuration(config_file)
    
    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError):
            load_configuration(tmp_path / "absent.yaml")
    
    def test_invalid_pattern_list(self, tmp_path):
        config_file = tmp_path / "fplscan.yaml"
        config_file.write_text("base_directory: defs\nincludes:\n  key: value\n")
        
        with pytest.raises(ConfigurationError):
            load_configuration(config_file)
