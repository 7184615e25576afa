"""
Map readers - parse Tiled map documents into a MapModel.

Two serializations are supported: the XML form (.tmx) and the JSON form
(.json / .tmj). Both readers expose ``parse(text, name)``; callers pick one
with ``get_reader`` based on the file extension.
"""

import json
import math
from pathlib import Path
from typing import Any, Dict, List, Optional
from xml.parsers.expat import ExpatError

import xmltodict

from .constants import JSON_EXTENSIONS, XML_EXTENSIONS
from .errors import StructuralParseError, TileDataDecodeError, UnsupportedFormatError
from .logging_config import get_logger
from .map_model import Layer, MapModel, MapObject, Number, ObjectGroup, one_or_many
from .tile_data import TileEncoding, decode

logger = get_logger('map_reader')

_MISSING = object()


def _as_mapping(node: Any, field: str, index: Optional[int] = None, kind: Optional[str] = None) -> Dict[str, Any]:
    """Return ``node`` as a dict; empty XML elements come back as None."""
    if node is None:
        return {}
    if not isinstance(node, dict):
        raise StructuralParseError(f"unexpected content for '{field}'", field, index, kind)
    return node


def _to_int(value: Any, field: str, index: Optional[int] = None, kind: Optional[str] = None) -> int:
    if isinstance(value, bool):
        raise StructuralParseError(f"invalid integer {value!r} for '{field}'", field, index, kind)
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    raise StructuralParseError(f"invalid integer {value!r} for '{field}'", field, index, kind)


def _to_number(value: Any, field: str, index: Optional[int] = None, kind: Optional[str] = None) -> Number:
    """Parse an int or float, keeping integral values as int."""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        number = value
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            raise StructuralParseError(
                f"invalid number {value!r} for '{field}'", field, index, kind
            ) from None
    else:
        raise StructuralParseError(f"invalid number {value!r} for '{field}'", field, index, kind)

    if not math.isfinite(number):
        raise StructuralParseError(f"non-finite number {value!r} for '{field}'", field, index, kind)
    if isinstance(number, float) and number.is_integer():
        return int(number)
    return number


def _dimension(value: Any, field: str) -> int:
    result = _to_int(value, field)
    if result < 0:
        raise StructuralParseError(f"'{field}' must be non-negative, got {result}", field)
    return result


def _strip_namespace(path, key: str, value: Any):
    """xmltodict postprocessor: drop namespace prefixes and xmlns declarations."""
    prefix = '@' if key.startswith('@') else ''
    local = key[len(prefix):]
    if local == 'xmlns' or local.startswith('xmlns:'):
        return None
    return prefix + local.rsplit(':', 1)[-1], value


class XmlMapReader:
    """Reads Tiled XML (.tmx) documents."""

    format_name = "xml"

    def parse(self, text: str, name: str) -> MapModel:
        """
        Parse a TMX document.

        Args:
            text: Raw XML text
            name: Map name (the source file's base name)

        Returns:
            Populated MapModel

        Raises:
            StructuralParseError: On malformed XML or missing/invalid fields
            TileDataDecodeError: On undecodable layer data
        """
        try:
            document = xmltodict.parse(text, postprocessor=_strip_namespace)
        except ExpatError as e:
            raise StructuralParseError(f"malformed XML: {e}") from e

        root = document.get('map') if isinstance(document, dict) else None
        if not isinstance(root, dict):
            raise StructuralParseError("missing <map> root element", 'map')
        if str(root.get('@infinite', '0')).strip() == '1':
            raise StructuralParseError("infinite maps are not supported", 'infinite')

        layers = [
            self._read_layer(node, index)
            for index, node in enumerate(one_or_many(root.get('layer')))
        ]
        groups = [
            self._read_object_group(node, index)
            for index, node in enumerate(one_or_many(root.get('objectgroup')))
        ]

        model = MapModel(
            name=name,
            width=_dimension(self._attr(root, 'width'), 'width'),
            height=_dimension(self._attr(root, 'height'), 'height'),
            tile_width=_dimension(self._attr(root, 'tilewidth'), 'tilewidth'),
            tile_height=_dimension(self._attr(root, 'tileheight'), 'tileheight'),
            layers=tuple(layers),
            object_groups=tuple(groups),
        )
        logger.debug(f"Parsed XML map '{name}': {model.num_layers} layers, {model.num_object_groups} object groups")
        return model

    @staticmethod
    def _attr(node: Dict[str, Any], field: str, index: Optional[int] = None,
              kind: Optional[str] = None, default: Any = _MISSING) -> Any:
        value = node.get('@' + field, _MISSING)
        if value is _MISSING:
            if default is not _MISSING:
                return default
            raise StructuralParseError(f"missing attribute '{field}'", field, index, kind)
        return value

    def _read_layer(self, node: Any, index: int) -> Layer:
        node = _as_mapping(node, 'layer', index, 'layer')
        layer_id = _to_int(self._attr(node, 'id', index, 'layer'), 'id', index, 'layer')
        layer_name = self._attr(node, 'name', index, 'layer')

        if 'data' not in node:
            raise StructuralParseError("missing element 'data'", 'data', index, 'layer')
        data = _as_mapping(node['data'], 'data', index, 'layer')

        if 'chunk' in data:
            raise StructuralParseError("chunked (infinite) layer data is not supported", 'data', index, 'layer')
        if data.get('@compression'):
            raise TileDataDecodeError(f"compressed data ({data['@compression']}) is not supported", index)

        encoding = TileEncoding.from_attribute(data.get('@encoding'), index)
        if encoding is TileEncoding.NONE:
            tiles = self._read_tile_elements(data, index)
        else:
            tiles = decode(encoding, data.get('#text', ''), index)

        return Layer(id=layer_id, name=layer_name, tiles=tuple(tiles))

    def _read_tile_elements(self, data: Dict[str, Any], index: int) -> List[int]:
        """Plain XML data: one <tile gid=".."/> per cell, gid omitted for empty cells."""
        tiles = []
        for tile in one_or_many(data.get('tile')):
            tile = _as_mapping(tile, 'tile', index, 'layer')
            gid = _to_int(tile.get('@gid', 0), 'gid', index, 'layer')
            tiles.append(gid)
        return decode(TileEncoding.NONE, tiles, index)

    def _read_object_group(self, node: Any, index: int) -> ObjectGroup:
        kind = 'objectgroup'
        node = _as_mapping(node, kind, index, kind)
        group_id = _to_int(self._attr(node, 'id', index, kind), 'id', index, kind)
        group_name = self._attr(node, 'name', index, kind)

        objects = []
        for obj in one_or_many(node.get('object')):
            obj = _as_mapping(obj, 'object', index, kind)
            objects.append(MapObject(
                id=_to_int(self._attr(obj, 'id', index, kind), 'id', index, kind),
                x=_to_number(self._attr(obj, 'x', index, kind), 'x', index, kind),
                y=_to_number(self._attr(obj, 'y', index, kind), 'y', index, kind),
                width=_to_number(self._attr(obj, 'width', index, kind, default=0), 'width', index, kind),
                height=_to_number(self._attr(obj, 'height', index, kind, default=0), 'height', index, kind),
            ))

        if not objects:
            raise StructuralParseError("object group has no object", 'object', index, kind)

        return ObjectGroup(id=group_id, name=group_name, objects=tuple(objects))


class JsonMapReader:
    """Reads Tiled JSON (.json / .tmj) documents."""

    format_name = "json"

    def parse(self, text: str, name: str) -> MapModel:
        """
        Parse a JSON map document.

        Layers are always an array here. Object groups are not read: the
        resulting model never has any.
        """
        try:
            document = json.loads(text)
        except json.JSONDecodeError as e:
            raise StructuralParseError(f"malformed JSON: {e}") from e

        if not isinstance(document, dict):
            raise StructuralParseError("map document must be a JSON object", 'map')

        raw_layers = document.get('layers', [])
        if raw_layers is None:
            raw_layers = []
        if not isinstance(raw_layers, list):
            raise StructuralParseError("'layers' must be an array", 'layers')

        layers = [self._read_layer(node, index) for index, node in enumerate(raw_layers)]

        model = MapModel(
            name=name,
            width=_dimension(self._field(document, 'width'), 'width'),
            height=_dimension(self._field(document, 'height'), 'height'),
            tile_width=_dimension(self._field(document, 'tilewidth'), 'tilewidth'),
            tile_height=_dimension(self._field(document, 'tileheight'), 'tileheight'),
            layers=tuple(layers),
        )
        logger.debug(f"Parsed JSON map '{name}': {model.num_layers} layers")
        return model

    @staticmethod
    def _field(node: Dict[str, Any], field: str, index: Optional[int] = None) -> Any:
        if field not in node or node[field] is None:
            raise StructuralParseError(f"missing field '{field}'", field, index, 'layer' if index is not None else None)
        return node[field]

    def _read_layer(self, node: Any, index: int) -> Layer:
        if not isinstance(node, dict):
            raise StructuralParseError("layer must be a JSON object", 'layers', index, 'layer')

        layer_id = _to_int(self._field(node, 'id', index), 'id', index, 'layer')
        layer_name = str(self._field(node, 'name', index))

        if 'chunks' in node:
            raise StructuralParseError("chunked (infinite) layer data is not supported", 'chunks', index, 'layer')

        tiles: List[int] = []
        if 'data' in node:
            if node.get('compression'):
                raise TileDataDecodeError(f"compressed data ({node['compression']}) is not supported", index)
            encoding = TileEncoding.from_attribute(node.get('encoding'), index)
            tiles = decode(encoding, node['data'], index)

        return Layer(id=layer_id, name=layer_name, tiles=tuple(tiles))


READERS = {}
for _ext in XML_EXTENSIONS:
    READERS[_ext] = XmlMapReader
for _ext in JSON_EXTENSIONS:
    READERS[_ext] = JsonMapReader


def get_reader(path):
    """
    Pick the reader for a map file by its extension.

    Raises:
        UnsupportedFormatError: If no reader handles the extension
    """
    suffix = Path(path).suffix.lower()
    reader_class = READERS.get(suffix)
    if reader_class is None:
        raise UnsupportedFormatError(f"unsupported map format '{suffix or path}'", str(path))
    return reader_class()
