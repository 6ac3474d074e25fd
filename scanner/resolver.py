"""Derivation of namespace, artifact name and output path for definition files."""

import os
import re
from pathlib import Path, PurePath
from typing import Optional, Union

from units.model import ResolvedUnit, resolve_namespace_reference
from .errors import ConfigurationError


DEFAULT_OUTPUT_EXTENSION = "java"

# "package a.b.c;" anywhere in the text, segments free of whitespace, dots and semicolons
PACKAGE_DECLARATION = re.compile(r"package\s+([^\s.;]+(?:\.[^\s.;]+)*)\s*;")

# "program Name {" anywhere in the text
PROGRAM_DECLARATION = re.compile(r"program\s+([^\s.{]+(?:\.[^\s.{]+)*)\s*\{")


def find_namespace(content: str) -> str:
    """
    Return the dotted identifier of the first package declaration.
    
    Args:
        content: Text of a definition file.
    
    Returns:
        The declared namespace, or an empty string for the root namespace.
    """
    match = PACKAGE_DECLARATION.search(content)
    if match:
        return match.group(1)
    return ""


def find_artifact_name(content: str) -> str:
    """
    Return the identifier of the first program declaration.
    
    Args:
        content: Text of a definition file.
    
    Returns:
        The declared program name, or an empty string if there is none.
    """
    match = PROGRAM_DECLARATION.search(content)
    if match:
        return match.group(1)
    return ""


def namespace_to_directory(namespace: str) -> str:
    """Map a dotted namespace onto a relative directory path."""
    return namespace.replace(".", os.sep)


def build_output_path(namespace_directory: str, artifact_name: str, extension: str) -> str:
    """Return ``namespace_directory/artifact_name.extension``."""
    file_name = f"{artifact_name}.{extension}"
    if namespace_directory:
        return os.path.join(namespace_directory, file_name)
    return file_name


def strip_extension(file_name: str) -> str:
    """Remove the final extension from a file name."""
    stem, _ = os.path.splitext(file_name)
    return stem


def normalize_input_path(base_directory: Path, input_path: Union[str, PurePath]) -> str:
    """
    Express ``input_path`` relative to ``base_directory``.
    
    Args:
        base_directory: Absolute directory the definition file lives under.
        input_path: Relative path, or absolute path inside ``base_directory``.
    
    Returns:
        The relative path as a string with platform separators.
    
    Raises:
        ConfigurationError: If an absolute ``input_path`` lies outside
            ``base_directory``.
    """
    path = Path(input_path)
    if not path.is_absolute():
        return str(path)
    try:
        return str(path.relative_to(base_directory))
    except ValueError:
        raise ConfigurationError(
            f"input file is not relative to source directory: {input_path}"
        ) from None


def resolve_unit(
    base_directory: Union[str, PurePath],
    input_path: Union[str, PurePath],
    namespace_override: Optional[str],
    content: str,
    output_extension: str = DEFAULT_OUTPUT_EXTENSION,
) -> ResolvedUnit:
    """
    Resolve a definition file into its namespace and artifact location.
    
    No filesystem access happens here; the caller supplies the content.
    
    Args:
        base_directory: Absolute directory the file was found under.
        input_path: Path of the file, relative to ``base_directory`` or
            absolute inside it.
        namespace_override: Replaces the declared namespace when not None.
        content: Full text of the definition file.
        output_extension: Extension of the generated artifact, without dot.
    
    Returns:
        The resolved unit.
    
    Raises:
        ConfigurationError: If ``base_directory`` is not absolute or
            ``input_path`` is outside it.
    """
    base = Path(base_directory)
    if not base.is_absolute():
        raise ConfigurationError(f"source directory is not absolute: {base_directory}")
    
    relative_input = normalize_input_path(base, input_path)
    
    if namespace_override is not None:
        namespace = namespace_override
    else:
        namespace = find_namespace(content)
    namespace_directory = namespace_to_directory(namespace)
    
    artifact_name = find_artifact_name(content)
    if not artifact_name:
        artifact_name = strip_extension(os.path.basename(relative_input))
    
    return ResolvedUnit(
        base_directory=base,
        relative_input_path=relative_input,
        namespace=namespace,
        namespace_directory=namespace_directory,
        artifact_name=artifact_name,
        output_relative_path=build_output_path(
            namespace_directory, artifact_name, output_extension
        ),
    )
