import pytest

from fractalnet.desc import (
    PixelData,
    PixelIntensity,
    Point,
    Range,
    Resolution,
    U8Data,
)


@pytest.mark.parametrize(
    "value",
    [
        U8Data(offset=0, count=16),
        Point(x=-1.2, y=1.0),
        Range(min=Point(-1.2, -1.0), max=Point(1.2, 1.2)),
        Resolution(nx=400, ny=400),
        PixelData(offset=16, count=160000),
        PixelIntensity(zn=0.5, count=0.25),
    ],
)
def test_dict_round_trip(value):
    assert type(value).from_dict(value.to_dict()) == value


def test_u8data_field_names():
    assert U8Data(offset=0, count=16).to_dict() == {"offset": 0, "count": 16}


def test_range_nests_points():
    rng = Range(min=Point(-1.2, -1.0), max=Point(1.2, 1.2))
    assert rng.to_dict() == {"min": {"x": -1.2, "y": -1.0}, "max": {"x": 1.2, "y": 1.2}}


def test_integer_coordinates_become_floats():
    point = Point.from_dict({"x": 1, "y": -2})
    assert point == Point(1.0, -2.0)
    assert isinstance(point.x, float)


def test_unknown_fields_are_ignored():
    assert Point.from_dict({"x": 1.5, "y": 2.5, "z": 3.0}) == Point(1.5, 2.5)


def test_resolution_is_sixteen_bit():
    with pytest.raises(ValueError):
        Resolution.from_dict({"nx": 65536, "ny": 1})


def test_negative_count_rejected():
    with pytest.raises(ValueError):
        U8Data.from_dict({"offset": 0, "count": -1})


def test_float_for_integer_rejected():
    with pytest.raises(ValueError):
        PixelData.from_dict({"offset": 0, "count": 1.5})


def test_bool_rejected_as_number():
    with pytest.raises(ValueError):
        Point.from_dict({"x": True, "y": 0.0})


def test_missing_field_rejected():
    with pytest.raises(ValueError, match="count"):
        U8Data.from_dict({"offset": 3})


def test_non_object_rejected():
    with pytest.raises(ValueError):
        Range.from_dict([1, 2])