"""
In-memory map model shared by both readers and the header renderer.

The model is format agnostic: whatever the source serialization, a map is
its dimensions, its tile layers and its object groups. Instances are
frozen and live only for a single conversion.
"""

from dataclasses import dataclass, field
from typing import Any, List, Tuple, Union

Number = Union[int, float]


def one_or_many(value: Any) -> List[Any]:
    """
    Normalize an XML child that may be absent, single or repeated.

    xmltodict yields a mapping for a lone child element and a list when the
    tag repeats; downstream code only ever wants a list.
    """
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]


@dataclass(frozen=True)
class MapObject:
    """A freeform object placed inside an object group."""
    id: int
    x: Number
    y: Number
    width: Number = 0
    height: Number = 0


@dataclass(frozen=True)
class ObjectGroup:
    """Named collection of objects overlaid on the map."""
    id: int
    name: str
    objects: Tuple[MapObject, ...] = ()


@dataclass(frozen=True)
class Layer:
    """A grid of tile ids sharing the map's dimensions."""
    id: int
    name: str
    tiles: Tuple[int, ...] = ()

    @property
    def num_data(self) -> int:
        """Number of tile ids recovered from the layer payload."""
        return len(self.tiles)


@dataclass(frozen=True)
class MapModel:
    """A parsed tile map."""
    name: str
    width: int
    height: int
    tile_width: int
    tile_height: int
    layers: Tuple[Layer, ...] = field(default_factory=tuple)
    object_groups: Tuple[ObjectGroup, ...] = field(default_factory=tuple)

    def __post_init__(self):
        for attr in ('width', 'height', 'tile_width', 'tile_height'):
            if getattr(self, attr) < 0:
                raise ValueError(f"{attr} must be non-negative, got {getattr(self, attr)}")

    @property
    def num_layers(self) -> int:
        return len(self.layers)

    @property
    def num_object_groups(self) -> int:
        return len(self.object_groups)
