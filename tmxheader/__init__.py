"""
tmxheader - Tiled map to C header converter

Reads Tiled maps in XML (.tmx) or JSON (.json / .tmj) form and generates a
C header declaring the map's layers and object groups as static data.
"""

__version__ = "0.1.0"

from .errors import (
    ConversionError,
    InputReadError,
    UnsupportedFormatError,
    StructuralParseError,
    TileDataDecodeError,
    TemplateWriteError,
)
from .map_model import MapModel, Layer, ObjectGroup, MapObject, one_or_many
from .tile_data import TileEncoding, decode
from .map_reader import XmlMapReader, JsonMapReader, get_reader
from .header_renderer import HeaderRenderer, TemplateBuilder, render
from .converter import MapConverter, ConversionResult
