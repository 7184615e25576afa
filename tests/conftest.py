"""Shared fixtures: small Tiled maps in both serializations and a template."""

import json

import pytest

TEMPLATE = (
    "// {{file}} generated {{date}}\n"
    "#ifndef _{{fileMap}}_H\n"
    "#define _{{fileMap}}_H\n"
    "size={{width}}x{{height}} tiles={{tilewidth}}x{{tileheight}}\n"
    "layers={{numLayers}}\n"
    "{{LayerInfo}}"
    "groups={{numobjectgroups}}\n"
    "{{ObjectInfo}}"
    "#endif // _{{fileMap}}_H\n"
)

GROUND_TMX = """<?xml version="1.0" encoding="UTF-8"?>
<map version="1.10" orientation="orthogonal" width="10" height="8" tilewidth="16" tileheight="16">
 <layer id="1" name="ground" width="10" height="8">
  <data encoding="csv">1,2,3,4</data>
 </layer>
</map>
"""

TWO_LAYER_TMX = """<?xml version="1.0" encoding="UTF-8"?>
<map version="1.10" width="2" height="2" tilewidth="8" tileheight="8">
 <layer id="1" name="ground" width="2" height="2">
  <data encoding="csv">
1,2,
3,4
</data>
 </layer>
 <layer id="2" name="top" width="2" height="2">
  <data encoding="csv">0,0,5,0</data>
 </layer>
</map>
"""

OBJECT_GROUP_TMX = """<?xml version="1.0" encoding="UTF-8"?>
<map version="1.10" width="10" height="8" tilewidth="16" tileheight="16">
 <layer id="1" name="ground" width="10" height="8">
  <data encoding="csv">1,2,3,4</data>
 </layer>
 <objectgroup id="5" name="enemies">
  <object id="9" x="10" y="20" width="4" height="4"/>
 </objectgroup>
</map>
"""


@pytest.fixture
def template_text():
    return TEMPLATE


@pytest.fixture
def template_file(tmp_path):
    path = tmp_path / "map.h.template"
    path.write_text(TEMPLATE, encoding="utf-8")
    return path


@pytest.fixture
def ground_tmx():
    return GROUND_TMX


@pytest.fixture
def two_layer_tmx():
    return TWO_LAYER_TMX


@pytest.fixture
def object_group_tmx():
    return OBJECT_GROUP_TMX


@pytest.fixture
def bg_json():
    return json.dumps({
        "width": 2,
        "height": 2,
        "tilewidth": 16,
        "tileheight": 16,
        "layers": [
            {"id": 1, "name": "bg", "data": [0, 0, 1, 1], "type": "tilelayer"},
        ],
    })


@pytest.fixture
def maps_dir(tmp_path, ground_tmx, bg_json):
    """Directory with one map of each format."""
    directory = tmp_path / "maps"
    directory.mkdir()
    (directory / "level1.tmx").write_text(ground_tmx, encoding="utf-8")
    (directory / "level2.json").write_text(bg_json, encoding="utf-8")
    return directory
