"""Scan configuration and loading it from YAML or TOML files."""

import tomllib
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .errors import ConfigurationError
from .patterns import DEFAULT_INCLUDES
from .resolver import DEFAULT_OUTPUT_EXTENSION


@dataclass
class ScanConfiguration:
    """
    Settings for one scan, assembled by the caller.
    
    Attributes:
        base_directory: Absolute directory to scan for definition files.
        includes: Glob patterns of files to consider. Empty means DEFAULT_INCLUDES.
        excludes: Glob patterns of files to leave out.
        output_directory: Absolute directory holding generated artifacts.
                          If None, every matched file is stale.
        stale_millis: Tolerance in milliseconds added to an artifact's
                      modification time before comparing it with the source.
        namespace_override: Replaces every declared namespace when set.
        use_default_excludes: Add the conventional VCS/system exclusions.
        follow_symlinks: Descend into and report symbolic links.
        output_extension: Extension of generated artifacts, without dot.
        encoding: Text encoding for definition files, None for the platform default.
    """
    
    base_directory: Path
    includes: List[str] = field(default_factory=list)
    excludes: List[str] = field(default_factory=list)
    output_directory: Optional[Path] = None
    stale_millis: int = 0
    namespace_override: Optional[str] = None
    use_default_excludes: bool = True
    follow_symlinks: bool = True
    output_extension: str = DEFAULT_OUTPUT_EXTENSION
    encoding: Optional[str] = None
    
    def __post_init__(self):
        self.base_directory = Path(self.base_directory)
        if self.output_directory is not None:
            self.output_directory = Path(self.output_directory)
        self.validate()
    
    @property
    def effective_includes(self) -> List[str]:
        return list(self.includes) if self.includes else list(DEFAULT_INCLUDES)
    
    def validate(self) -> None:
        """
        Check the settings without touching the filesystem.
        
        Raises:
            ConfigurationError: If a directory is not absolute or the
                tolerance is negative.
        """
        if not Path(self.base_directory).is_absolute():
            raise ConfigurationError(f"source directory is not absolute: {self.base_directory}")
        if self.output_directory is not None and not Path(self.output_directory).is_absolute():
            raise ConfigurationError(f"output directory is not absolute: {self.output_directory}")
        if not isinstance(self.stale_millis, int) or isinstance(self.stale_millis, bool):
            raise ConfigurationError(f"stale tolerance must be an integer: {self.stale_millis!r}")
        if self.stale_millis < 0:
            raise ConfigurationError(f"stale tolerance must not be negative: {self.stale_millis}")


_PATH_KEYS = {"base_directory", "output_directory"}
_LIST_KEYS = {"includes", "excludes"}


def _read_document(config_path: Path) -> Any:
    suffix = config_path.suffix.lower()
    
    try:
        content = config_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigurationError(f"cannot read configuration file {config_path}: {e}") from e
    
    try:
        if suffix in {".yaml", ".yml"}:
            return yaml.safe_load(content)
        elif suffix == ".toml":
            return tomllib.loads(content)
    except (yaml.YAMLError, tomllib.TOMLDecodeError) as e:
        raise ConfigurationError(f"malformed configuration file {config_path}: {e}") from e
    
    raise ConfigurationError(f"unsupported configuration format: {config_path.name}")


def _normalize_settings(data: Any, config_path: Path) -> Dict[str, Any]:
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"configuration must be a mapping: {config_path}")
    
    known = {f.name for f in fields(ScanConfiguration)}
    settings: Dict[str, Any] = {}
    for key, value in data.items():
        name = str(key).replace("-", "_")
        if name not in known:
            raise ConfigurationError(f"unknown configuration key '{key}' in {config_path}")
        if name in _PATH_KEYS and value is not None:
            path = Path(str(value)).expanduser()
            if not path.is_absolute():
                path = config_path.parent / path
            value = path
        elif name in _LIST_KEYS:
            if isinstance(value, str):
                value = [value]
            elif not isinstance(value, list):
                raise ConfigurationError(f"'{key}' must be a list of patterns in {config_path}")
            value = [str(item) for item in value]
        settings[name] = value
    return settings


def load_configuration(config_path: Path, **overrides: Any) -> ScanConfiguration:
    """
    Build a ScanConfiguration from a YAML or TOML file.
    
    Keys may be written in snake_case or kebab-case. Relative directories are
    taken relative to the configuration file. Keyword arguments that are not
    None take precedence over the file.
    
    Args:
        config_path: Path to a ``.yaml``, ``.yml`` or ``.toml`` file.
        **overrides: Field values that replace those from the file.
    
    Returns:
        The validated configuration.
    
    Raises:
        ConfigurationError: If the file cannot be read or parsed, contains
            unknown keys, or yields invalid settings.
    """
    config_path = config_path.resolve()
    settings = _normalize_settings(_read_document(config_path), config_path)
    settings.update({key: value for key, value in overrides.items() if value is not None})
    
    if "base_directory" not in settings:
        raise ConfigurationError(f"no base directory configured in {config_path}")
    
    try:
        return ScanConfiguration(**settings)
    except TypeError as e:
        raise ConfigurationError(f"invalid configuration in {config_path}: {e}") from e
