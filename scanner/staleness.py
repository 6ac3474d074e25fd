"""Scanner that finds definition files whose generated artifacts are out of date."""

from pathlib import Path
from typing import List, Optional

from units.model import ResolvedUnit, StaleSet
from .config import ScanConfiguration
from .discovery import iter_files
from .errors import ConfigurationError, ScanError
from .resolver import resolve_unit


def modification_millis(path: Path) -> int:
    """Return the last-modified time of ``path`` in whole milliseconds."""
    return path.stat().st_mtime_ns // 1_000_000


def is_target_stale(source_millis: int, target: Path, stale_millis: int = 0) -> bool:
    """
    Check whether a generated file needs to be rebuilt from its source.
    
    Args:
        source_millis: Modification time of the source file in milliseconds.
        target: Generated file.
        stale_millis: Tolerance added to the target's modification time.
    
    Returns:
        True if the target is missing or older than the source by more than
        the tolerance.
    """
    try:
        target_millis = modification_millis(target)
    except (FileNotFoundError, NotADirectoryError):
        return True
    return target_millis + stale_millis < source_millis


class Scanner:
    """
    Finds the stale definition files under a base directory.
    
    Each ``scan`` returns a new StaleSet, also kept as ``stale_units`` until
    the next scan starts. A failed scan leaves ``stale_units`` empty. A
    single instance must not be scanned from several threads at once.
    """
    
    def __init__(self, config: Optional[ScanConfiguration] = None):
        if config is not None:
            config.validate()
        self.config = config
        self._stale = StaleSet()
    
    @property
    def stale_units(self) -> StaleSet:
        """Units found stale by the last scan."""
        return self._stale
    
    def scan(self, config: Optional[ScanConfiguration] = None) -> StaleSet:
        """
        Enumerate matching definition files and collect the stale ones.
        
        Args:
            config: Settings for this scan. Defaults to the configuration the
                scanner was created with, and replaces it when given.
        
        Returns:
            The stale units, in enumeration order.
        
        Raises:
            ConfigurationError: If the configuration is missing or invalid.
            ScanError: If listing a directory or reading a file fails.
        """
        self._stale = StaleSet()
        
        if config is not None:
            self.config = config
        if self.config is None:
            raise ConfigurationError("no scan configuration given")
        config = self.config
        config.validate()
        
        base = config.base_directory
        found = StaleSet()
        for relative_path in iter_files(
            root=base,
            includes=config.effective_includes,
            excludes=config.excludes,
            use_default_excludes=config.use_default_excludes,
            follow_symlinks=config.follow_symlinks,
        ):
            source = base / relative_path
            try:
                content = source.read_text(encoding=config.encoding)
            except (OSError, UnicodeDecodeError) as e:
                raise ScanError(f"failed to read definition file {source}", e) from e
            
            unit = resolve_unit(
                base,
                relative_path,
                config.namespace_override,
                content,
                output_extension=config.output_extension,
            )
            
            if self._is_stale(unit, config):
                found.add(unit)
        
        self._stale = found
        return found
    
    def _is_stale(self, unit: ResolvedUnit, config: ScanConfiguration) -> bool:
        if config.output_directory is None:
            return True
        
        try:
            source_millis = modification_millis(unit.input_file)
        except OSError as e:
            raise ScanError(f"failed to stat definition file {unit.input_file}", e) from e
        
        for target in self.get_target_files(config.output_directory, unit):
            try:
                if is_target_stale(source_millis, target, config.stale_millis):
                    return True
            except OSError as e:
                raise ScanError(f"failed to stat generated file {target}", e) from e
        return False
    
    def get_target_files(self, output_directory: Path, unit: ResolvedUnit) -> List[Path]:
        """
        Return the generated files that must be fresh for ``unit`` to be skipped.
        
        Subclasses generating several artifacts per definition file return
        all of them here.
        """
        return [unit.output_file(output_directory)]


def find_stale_units(config: ScanConfiguration) -> StaleSet:
    """
    Scan once with a fresh Scanner.
    
    Args:
        config: Scan settings.
    
    Returns:
        The stale units, in enumeration order.
    """
    return Scanner(config).scan()
