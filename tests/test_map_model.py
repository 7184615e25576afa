import dataclasses

import pytest

from tmxheader.map_model import Layer, MapModel, MapObject, ObjectGroup, one_or_many


@pytest.mark.parametrize("value, expected", [
    (None, []),
    ({"@id": "1"}, [{"@id": "1"}]),
    ([{"@id": "1"}, {"@id": "2"}], [{"@id": "1"}, {"@id": "2"}]),
    ([], []),
    ("text", ["text"]),
])
def test_one_or_many(value, expected):
    assert one_or_many(value) == expected


def test_layer_num_data():
    assert Layer(id=1, name="ground", tiles=(1, 2, 3)).num_data == 3
    assert Layer(id=2, name="empty").num_data == 0


def test_counts():
    model = MapModel(
        name="level",
        width=2, height=2, tile_width=8, tile_height=8,
        layers=(Layer(1, "a"), Layer(2, "b")),
        object_groups=(ObjectGroup(3, "g", (MapObject(1, 0, 0),)),),
    )
    assert model.num_layers == 2
    assert model.num_object_groups == 1


def test_defaults_to_no_layers_or_groups():
    model = MapModel(name="level", width=0, height=0, tile_width=0, tile_height=0)
    assert model.layers == ()
    assert model.object_groups == ()


def test_negative_dimension_rejected():
    with pytest.raises(ValueError):
        MapModel(name="level", width=-1, height=2, tile_width=8, tile_height=8)


def test_model_is_immutable():
    layer = Layer(id=1, name="ground", tiles=(1,))
    with pytest.raises(dataclasses.FrozenInstanceError):
        layer.name = "other"
