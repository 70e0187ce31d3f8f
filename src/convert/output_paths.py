"""Output path helpers shared by the encoder and the fallback dumper."""

from __future__ import annotations

from pathlib import Path

from core.constants import FORBIDDEN_IDENTIFIER_CHARACTERS, RESERVED_IDENTIFIERS
from core.errors import InvalidIdentifierError, OutputIOError


def validate_identifier(identifier: str) -> str:
    """Ensure an identifier can be used as a single file name component.

    Args:
        identifier: Record identifier from the input row.

    Returns:
        The unchanged identifier.

    Raises:
        InvalidIdentifierError: If the identifier is empty, a relative
            directory name, or contains a path separator.
    """
    if identifier in RESERVED_IDENTIFIERS:
        raise InvalidIdentifierError(
            f"Invalid record identifier '{identifier}': "
            "expected a non-empty file name."
        )
    for character in FORBIDDEN_IDENTIFIER_CHARACTERS:
        if character in identifier:
            raise InvalidIdentifierError(
                f"Invalid record identifier {identifier!r}: "
                f"must not contain {character!r}."
            )
    return identifier


def prepare_output_path(output_dir: Path, identifier: str, extension: str) -> Path:
    """Create the output directory and return ``<output_dir>/<identifier><extension>``.

    Args:
        output_dir: Output directory, created with missing parents.
        identifier: Record identifier used as file stem.
        extension: File extension including the leading dot.

    Returns:
        Target file path. The file itself is not created.

    Raises:
        InvalidIdentifierError: If the identifier is unsafe.
        OutputIOError: If the directory cannot be created.
    """
    validate_identifier(identifier)
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as error:
        raise OutputIOError(
            f"Failed to create output directory {output_dir}: {error}."
        ) from error
    return output_dir / f"{identifier}{extension}"
