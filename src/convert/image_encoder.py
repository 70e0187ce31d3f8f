"""Image re-encoding with a closed format routing table.

A routing table maps detected formats to output formats and falls back
to a default. The ``auto`` policy keeps JPEG as JPEG and normalizes every
other format to PNG.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

from PIL import Image

from convert.output_paths import prepare_output_path
from core.constants import (
    DEFAULT_ROUTING_POLICY,
    JPEG_ENCODABLE_MODES,
    JPEG_EXTENSION,
    JPEG_FORMAT,
    JPEG_QUALITY,
    PNG_ENCODABLE_MODES,
    PNG_EXTENSION,
    PNG_FORMAT,
    SUPPORTED_ROUTING_POLICIES,
)
from core.errors import CsvImageConfigError, EncodeError, OutputIOError
from core.types import DecodedImage


@dataclass(frozen=True)
class OutputFormat:
    """Pillow encoder settings for one output format.

    Attributes:
        name: Lowercase format name.
        extension: Output file extension including the dot.
        pil_format: Pillow save format identifier.
        encodable_modes: Pixel modes the encoder accepts directly.
        fallback_mode: Mode other images are converted to before saving.
        save_options: Extra keyword arguments for ``Image.save``.
    """

    name: str
    extension: str
    pil_format: str
    encodable_modes: tuple[str, ...]
    fallback_mode: str
    save_options: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class RoutingTable:
    """Detected-format to output-format mapping with a default route."""

    routes: Mapping[str, OutputFormat]
    default: OutputFormat

    def select(self, detected_format: str) -> OutputFormat:
        """Return the output format for a detected input format."""
        return self.routes.get(detected_format, self.default)


JPEG_OUTPUT = OutputFormat(
    name=JPEG_FORMAT,
    extension=JPEG_EXTENSION,
    pil_format="JPEG",
    encodable_modes=JPEG_ENCODABLE_MODES,
    fallback_mode="RGB",
    save_options={"quality": JPEG_QUALITY},
)
PNG_OUTPUT = OutputFormat(
    name=PNG_FORMAT,
    extension=PNG_EXTENSION,
    pil_format="PNG",
    encodable_modes=PNG_ENCODABLE_MODES,
    fallback_mode="RGBA",
)
_ROUTING_POLICIES: dict[str, RoutingTable] = {
    "auto": RoutingTable(routes={JPEG_FORMAT: JPEG_OUTPUT}, default=PNG_OUTPUT),
    "jpeg": RoutingTable(routes={}, default=JPEG_OUTPUT),
    "png": RoutingTable(routes={}, default=PNG_OUTPUT),
}


def supported_routing_policies() -> tuple[str, ...]:
    """Return routing policy names accepted by the CLI."""
    return SUPPORTED_ROUTING_POLICIES


def resolve_routing_table(policy: str) -> RoutingTable:
    """Look up a routing table by policy name.

    Raises:
        CsvImageConfigError: If the policy is unknown.
    """
    try:
        return _ROUTING_POLICIES[policy]
    except KeyError as error:
        raise CsvImageConfigError(
            f"Unsupported routing policy '{policy}'. "
            f"Supported policies: {', '.join(SUPPORTED_ROUTING_POLICIES)}."
        ) from error


def encode_image(
    image: DecodedImage,
    output_dir: Path,
    identifier: str,
    routing: RoutingTable | None = None,
) -> Path:
    """Encode an image and write it to ``<output_dir>/<identifier><ext>``.

    Existing files are truncated, so re-runs overwrite previous output.
    A failed save may leave a partially written file behind.

    Args:
        image: Decoded image and detected format.
        output_dir: Output directory, created if missing.
        identifier: Output file stem.
        routing: Routing table, the ``auto`` policy if omitted.

    Returns:
        Written image path.

    Raises:
        EncodeError: If pixel conversion or encoding fails.
        OutputIOError: If the directory or file cannot be created.
        InvalidIdentifierError: If the identifier is unsafe.
    """
    table = routing or resolve_routing_table(DEFAULT_ROUTING_POLICY)
    output_format = table.select(image.detected_format)
    output_path = prepare_output_path(output_dir, identifier, output_format.extension)
    pixels = _prepare_pixels(image.pixels, output_format)
    try:
        _write_pixels(pixels, output_path, output_format)
    finally:
        if pixels is not image.pixels:
            pixels.close()
    return output_path


def _write_pixels(pixels: Image.Image, output_path: Path, output_format: OutputFormat) -> None:
    """Truncate the target file and save pixels into it."""
    try:
        handle = output_path.open("wb")
    except OSError as error:
        raise OutputIOError(f"Failed to write file {output_path}: {error}.") from error
    with handle:
        try:
            pixels.save(handle, format=output_format.pil_format, **output_format.save_options)
        except (OSError, ValueError) as error:
            raise EncodeError(
                f"Failed to encode {output_format.name} image {output_path}: {error}."
            ) from error


def _prepare_pixels(pixels: Image.Image, output_format: OutputFormat) -> Image.Image:
    """Convert pixels to a mode the target encoder accepts."""
    if pixels.mode in output_format.encodable_modes:
        return pixels
    try:
        return pixels.convert(output_format.fallback_mode)
    except ValueError as error:
        raise EncodeError(
            f"Failed to convert {pixels.mode} pixels to {output_format.fallback_mode} "
            f"for {output_format.name} output: {error}."
        ) from error
