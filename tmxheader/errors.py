"""
Exceptions raised while converting a map to a header.

Every error aborts only the conversion it belongs to. ``path`` is filled
in by the converter once the failing file is known.
"""

from typing import Optional


class ConversionError(Exception):
    """Base class for all tmxheader conversion failures."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.path = path

    def __str__(self) -> str:
        if self.path:
            return f"{self.path}: {self.message}"
        return self.message


class InputReadError(ConversionError):
    """The map file or the template could not be read."""


class UnsupportedFormatError(InputReadError):
    """No reader is registered for the file extension."""


class StructuralParseError(ConversionError):
    """A required field is missing or has an unexpected shape."""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        index: Optional[int] = None,
        kind: Optional[str] = None,
        path: Optional[str] = None
    ):
        if index is not None and kind:
            message = f"{message} ({kind} {index})"
        super().__init__(message, path)
        self.field = field
        self.index = index
        self.kind = kind


class TileDataDecodeError(ConversionError):
    """A layer's tile payload could not be decoded."""

    def __init__(self, message: str, layer_index: Optional[int] = None, path: Optional[str] = None):
        if layer_index is not None:
            message = f"{message} (layer {layer_index})"
        super().__init__(message, path)
        self.layer_index = layer_index


class TemplateWriteError(ConversionError):
    """The generated header could not be written."""
