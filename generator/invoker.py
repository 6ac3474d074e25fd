"""Runs the external generator command once per stale unit."""

import logging
import subprocess
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

from units.model import ResolvedUnit


logger = logging.getLogger(__name__)


class GenerationError(RuntimeError):
    """The generator could not be started or reported a failure."""
    
    def __init__(self, message: str, unit: ResolvedUnit, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.unit = unit
        self.cause = cause


def build_generator_args(
    unit: ResolvedUnit,
    output_directory: Optional[Path] = None,
    namespace_override: Optional[str] = None,
) -> List[str]:
    """
    Build the generator arguments for one unit.
    
    Args:
        unit: The unit to generate.
        output_directory: Where the generator writes, omitted if None.
        namespace_override: Namespace forced onto the artifact, omitted if None.
    
    Returns:
        Arguments in the order ``--outputdir``, ``--package``, input file.
    """
    args: List[str] = []
    if output_directory is not None:
        args.append(f"--outputdir={Path(output_directory).absolute()}")
    if namespace_override is not None:
        args.append(f"--package={namespace_override}")
    args.append(str(unit.input_file.absolute()))
    return args


def run_generator(
    command: Sequence[str],
    unit: ResolvedUnit,
    output_directory: Optional[Path] = None,
    namespace_override: Optional[str] = None,
) -> None:
    """
    Run ``command`` with the unit's arguments appended.
    
    Raises:
        GenerationError: If the command cannot be started or exits non-zero.
    """
    argv = list(command) + build_generator_args(unit, output_directory, namespace_override)
    logger.info("Processing: %s", unit.input_file)
    logger.debug("Running generator: %s", argv)
    
    try:
        subprocess.run(argv, check=True)
    except subprocess.CalledProcessError as e:
        raise GenerationError(
            f"generator exited with status {e.returncode} for {unit.input_file}", unit, e
        ) from e
    except OSError as e:
        raise GenerationError(f"failed to start generator {command[0]!r}: {e}", unit, e) from e


def generate_all(
    command: Sequence[str],
    units: Iterable[ResolvedUnit],
    output_directory: Optional[Path] = None,
    namespace_override: Optional[str] = None,
) -> int:
    """
    Generate every unit in order, stopping at the first failure.
    
    Returns:
        Number of units processed.
    """
    count = 0
    for unit in units:
        run_generator(command, unit, output_directory, namespace_override)
        count += 1
    return count
