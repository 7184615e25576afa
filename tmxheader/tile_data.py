"""
Tile data codec - turns a layer's raw payload into tile identifiers.

Tiled stores layer data either as a comma separated list of GIDs or as a
base64 string of little-endian unsigned 32-bit integers. JSON maps may
also carry the GIDs as a plain array.
"""

import base64
import binascii
import struct
from enum import Enum
from typing import List, Optional, Sequence, Union

from .constants import UINT32_MAX, UINT32_SIZE
from .errors import TileDataDecodeError
from .logging_config import get_logger

logger = get_logger('tile_data')


class TileEncoding(Enum):
    """Encodings a layer's <data> payload may use."""
    CSV = "csv"
    BASE64 = "base64"
    NONE = None

    @classmethod
    def from_attribute(cls, value: Optional[str], layer_index: Optional[int] = None) -> "TileEncoding":
        """
        Resolve an ``encoding`` attribute.

        Args:
            value: Attribute value as found in the map (None when absent)
            layer_index: Layer position, used in error messages

        Raises:
            TileDataDecodeError: If the encoding is not csv or base64
        """
        if value is None or value == "":
            return cls.NONE
        for member in cls:
            if member.value == value:
                return member
        raise TileDataDecodeError(f"unsupported encoding '{value}'", layer_index)


def _check_gid(value: int, layer_index: Optional[int]) -> int:
    if value < 0 or value > UINT32_MAX:
        raise TileDataDecodeError(f"tile id {value} out of unsigned 32-bit range", layer_index)
    return value


def decode_csv(payload: str, layer_index: Optional[int] = None) -> List[int]:
    """Decode ``1,2,3`` style data. A blank payload has no tiles."""
    if not payload.strip():
        return []

    tiles = []
    for token in payload.split(","):
        token = token.strip()
        try:
            value = int(token)
        except ValueError:
            raise TileDataDecodeError(f"invalid tile id '{token}' in csv data", layer_index) from None
        tiles.append(_check_gid(value, layer_index))
    return tiles


def decode_base64(payload: str, layer_index: Optional[int] = None) -> List[int]:
    """
    Decode base64 data into little-endian uint32 values.

    Line breaks and indentation inside the payload are ignored. If the
    decoded length is not a multiple of 4 the incomplete last chunk is
    dropped.
    """
    compact = "".join(payload.split())
    try:
        data = base64.b64decode(compact, validate=True)
    except (binascii.Error, ValueError) as e:
        raise TileDataDecodeError(f"invalid base64 data: {e}", layer_index) from e

    remainder = len(data) % UINT32_SIZE
    if remainder:
        logger.debug(f"Dropping {remainder} trailing byte(s) of base64 data (layer {layer_index})")

    tiles = []
    for i in range(0, len(data) - remainder, UINT32_SIZE):
        tiles.append(struct.unpack('<I', data[i:i + UINT32_SIZE])[0])
    return tiles


def decode(
    encoding: TileEncoding,
    payload: Union[str, Sequence[int], None],
    layer_index: Optional[int] = None
) -> List[int]:
    """
    Decode a layer payload into an ordered list of tile identifiers.

    Args:
        encoding: How the payload is encoded
        payload: Raw text, or an already decoded sequence of ints (JSON
            arrays with no encoding); None counts as empty
        layer_index: Layer position, used in error messages

    Returns:
        List of unsigned 32-bit tile ids in map order

    Raises:
        TileDataDecodeError: On malformed payloads
    """
    if payload is None:
        return []

    if encoding is TileEncoding.CSV:
        if not isinstance(payload, str):
            # JSON maps with encoding "csv" still store an array
            return decode(TileEncoding.NONE, payload, layer_index)
        return decode_csv(payload, layer_index)

    if encoding is TileEncoding.BASE64:
        if not isinstance(payload, str):
            raise TileDataDecodeError("base64 data must be a string", layer_index)
        return decode_base64(payload, layer_index)

    if isinstance(payload, str):
        return decode_csv(payload, layer_index)

    tiles = []
    for value in payload:
        # bool is an int subclass but never a tile id
        if isinstance(value, bool) or not isinstance(value, int):
            raise TileDataDecodeError(f"invalid tile id {value!r} in data array", layer_index)
        tiles.append(_check_gid(value, layer_index))
    return tiles
