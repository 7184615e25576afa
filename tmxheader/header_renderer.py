"""
Header renderer - fills a header template from a MapModel.

Templates use ``{{name}}`` tokens. Substitution happens level by level:
map scalars, then one fragment per layer, then one fragment per object
group (each followed by its object). Each level collects its values in a
TemplateBuilder and applies them in a single pass, so text inserted for one
token is never scanned for further tokens.
"""

import re
from typing import Dict, Union

from .logging_config import get_logger
from .map_model import Layer, MapModel, ObjectGroup

logger = get_logger('header_renderer')

TOKEN_PATTERN = re.compile(r'\{\{(\w+)\}\}')

LAYER_TEMPLATE = (
    'Layer mylayer{{index}};\n'
    'mylayer{{index}}.id = {{layerid}};\n'
    'mylayer{{index}}.name = "{{name}}";\n'
    'u16 mapdata{{index}}[{{numData}}]={{data}};\n'
    'mylayer{{index}}.data = mapdata{{index}};\n'
    'mylayer{{index}}.numData = {{numData}};\n'
    'layers[{{index}}] = mylayer{{index}};\n'
)

OBJECT_GROUP_TEMPLATE = (
    'ObjectGroup myobjectgroup{{index}};\n'
    'myobjectgroup{{index}}.id={{objectgroupid}};\n'
    'myobjectgroup{{index}}.name="{{objectgroupname}}";\n'
    'myobjectgroup{{index}}.numObjects={{nobjs}};\n'
    'objectgroups[{{index}}]=myobjectgroup{{index}};\n'
    'Object myobjects{{index}}[{{nobjs}}];\n'
)

OBJECT_TEMPLATE = (
    'Object myobject{{index}};\n'
    'myobject{{index}}.id={{objid}};\n'
    'myobject{{index}}.x={{objx}};\n'
    'myobject{{index}}.y={{objy}};\n'
    'myobject{{index}}.width={{objwidth}};\n'
    'myobject{{index}}.height={{objheight}};\n'
)

# Existing runtimes expect the group's array wired by object index
OBJECT_WIRING_TEMPLATE = 'myobjectgroup{{index}}.objects=myobjects{{objindex}};\n'

OBJECT_GROUPS_DECLARATION = 'ObjectGroup objectgroups[{{numobjectgroups}}];\n'
OBJECT_GROUPS_ASSIGNMENT = 'mapstruct->objectgroups=objectgroups;\n'

# Objects emitted per group
OBJECTS_PER_GROUP = 1


def format_value(value: Union[int, float, str]) -> str:
    """Render a scalar; integral floats print without a fractional part."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


class TemplateBuilder:
    """Collects named substitutions and applies them in one pass."""

    def __init__(self):
        self.values: Dict[str, str] = {}

    def set(self, name: str, value: Union[int, float, str]) -> "TemplateBuilder":
        self.values[name] = format_value(value)
        return self

    def apply(self, template: str) -> str:
        """Replace every known ``{{name}}``; unknown tokens stay as they are."""
        def replace(match):
            return self.values.get(match.group(1), match.group(0))

        return TOKEN_PATTERN.sub(replace, template)


class HeaderRenderer:
    """Renders a MapModel into header text."""

    def render(self, template_text: str, model: MapModel, file_base_name: str, date: str = "") -> str:
        """
        Fill ``template_text`` for one map.

        Args:
            template_text: Header template containing the map-level tokens
            model: Parsed map
            file_base_name: Base name used for {{file}} / {{fileMap}}
            date: Preformatted generation date for {{date}}

        Returns:
            The generated header text
        """
        builder = TemplateBuilder()
        builder.set('date', date)
        builder.set('file', file_base_name)
        builder.set('fileMap', file_base_name.upper())
        builder.set('width', model.width)
        builder.set('height', model.height)
        builder.set('tilewidth', model.tile_width)
        builder.set('tileheight', model.tile_height)
        builder.set('numLayers', model.num_layers)
        builder.set('LayerInfo', self.render_layers(model, file_base_name))
        builder.set('numobjectgroups', model.num_object_groups)
        builder.set('ObjectInfo', self.render_object_groups(model))

        logger.debug(f"Rendering '{file_base_name}': {model.num_layers} layers, "
                     f"{model.num_object_groups} object groups")
        return builder.apply(template_text)

    def render_layers(self, model: MapModel, file_base_name: str) -> str:
        return ''.join(
            self.render_layer(layer, index, file_base_name)
            for index, layer in enumerate(model.layers)
        )

    @staticmethod
    def render_layer(layer: Layer, index: int, file_base_name: str = "") -> str:
        builder = TemplateBuilder()
        builder.set('index', index)
        builder.set('file', file_base_name)
        builder.set('layerid', layer.id)
        builder.set('name', layer.name)
        builder.set('data', '{' + ','.join(str(tile) for tile in layer.tiles) + '}')
        builder.set('numData', layer.num_data)
        return builder.apply(LAYER_TEMPLATE)

    def render_object_groups(self, model: MapModel) -> str:
        """Object group block, or an empty string when the map has none."""
        if not model.object_groups:
            return ''

        parts = [TemplateBuilder().set('numobjectgroups', model.num_object_groups).apply(OBJECT_GROUPS_DECLARATION)]
        for index, group in enumerate(model.object_groups):
            parts.append(self.render_object_group(group, index))
        parts.append(OBJECT_GROUPS_ASSIGNMENT)
        return ''.join(parts)

    @staticmethod
    def render_object_group(group: ObjectGroup, index: int) -> str:
        if len(group.objects) > OBJECTS_PER_GROUP:
            logger.warning(f"Object group '{group.name}' has {len(group.objects)} objects, "
                           f"only the first {OBJECTS_PER_GROUP} will be emitted")

        builder = TemplateBuilder()
        builder.set('index', index)
        builder.set('objectgroupid', group.id)
        builder.set('objectgroupname', group.name)
        builder.set('nobjs', OBJECTS_PER_GROUP)
        parts = [builder.apply(OBJECT_GROUP_TEMPLATE)]

        for obj_index, obj in enumerate(group.objects[:OBJECTS_PER_GROUP]):
            obj_builder = TemplateBuilder()
            obj_builder.set('index', index)
            obj_builder.set('objindex', obj_index)
            obj_builder.set('objid', obj.id)
            obj_builder.set('objx', obj.x)
            obj_builder.set('objy', obj.y)
            obj_builder.set('objwidth', obj.width)
            obj_builder.set('objheight', obj.height)
            parts.append(obj_builder.apply(OBJECT_TEMPLATE))
            parts.append(obj_builder.apply(OBJECT_WIRING_TEMPLATE))

        return ''.join(parts)


def render(template_text: str, model: MapModel, file_base_name: str, date: str = "") -> str:
    """Module-level shortcut for ``HeaderRenderer().render``."""
    return HeaderRenderer().render(template_text, model, file_base_name, date)
