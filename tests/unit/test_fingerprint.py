"""Tests for geometry fingerprinting.

Covers:
- Stable output regardless of key order, whitespace and number spelling
- Idempotence through decode/encode
- Order sensitivity (ring rotation, reversed winding)
- Precision handling and negative zero
"""

from __future__ import annotations

import json

import pytest

from campus_geo.geometry import decode, encode, fingerprint, format_number
from campus_geo.models.geometry import LineString, MultiPolygon, Point, Polygon


class TestFingerprintFormat:
    """Canonical serialized form."""

    def test_point_form(self) -> None:
        fp = fingerprint(Point(lng=-1.2577, lat=51.752))
        assert fp == '{"type":"Point","coordinates":[-1.2577,51.752]}'

    def test_linestring_form(self) -> None:
        fp = fingerprint(LineString(points=((0.0, 0.0), (1.5, 2.0))))
        assert fp == '{"type":"LineString","coordinates":[[0,0],[1.5,2]]}'

    def test_multipolygon_form(self) -> None:
        ring = ((0.0, 0.0), (0.0, 1.0), (1.0, 1.0), (0.0, 0.0))
        geom = MultiPolygon(polygons=(Polygon(rings=(ring,)),))
        assert fingerprint(geom) == (
            '{"type":"MultiPolygon","coordinates":[[[[0,0],[0,1],[1,1],[0,0]]]]}'
        )

    def test_is_valid_json(self, square_polygon: dict[str, object]) -> None:
        parsed = json.loads(fingerprint(decode(square_polygon)))
        assert parsed["type"] == "Polygon"
        assert parsed["coordinates"][0][2] == [1, 1]


class TestFingerprintStability:
    """Same geometry, same fingerprint."""

    def test_whitespace_and_key_order_ignored(self) -> None:
        a = decode('{"type": "Point", "coordinates": [1.0, 2.0]}')
        b = decode('{"coordinates":[1,2],"type":"Point"}')
        assert fingerprint(a) == fingerprint(b)

    def test_number_spelling_ignored(self) -> None:
        a = decode({"type": "Point", "coordinates": [1e0, 0.50]})
        b = decode({"type": "Point", "coordinates": [1, 0.5]})
        assert fingerprint(a) == fingerprint(b)

    def test_idempotent_through_encode_decode(self, square_polygon: dict[str, object]) -> None:
        geom = decode(square_polygon)
        assert fingerprint(decode(encode(geom))) == fingerprint(geom)

    def test_idempotent_through_json_text(self) -> None:
        ring = ((10.123456789, -3.5), (10.2, -3.5), (10.2, -3.4), (10.123456789, -3.5))
        geom = Polygon(rings=(ring,))
        text = json.dumps(encode(geom))
        assert fingerprint(decode(text)) == fingerprint(geom)

    def test_altitude_does_not_change_fingerprint(self) -> None:
        a = decode({"type": "Point", "coordinates": [1, 2, 100]})
        b = decode({"type": "Point", "coordinates": [1, 2]})
        assert fingerprint(a) == fingerprint(b)


class TestFingerprintOrderSensitivity:
    """Vertex order is part of the identity."""

    RING = [[0, 0], [0, 1], [1, 1], [1, 0], [0, 0]]

    def test_rotated_ring_differs(self) -> None:
        rotated = [[0, 1], [1, 1], [1, 0], [0, 0], [0, 1]]
        a = decode({"type": "Polygon", "coordinates": [self.RING]})
        b = decode({"type": "Polygon", "coordinates": [rotated]})
        assert fingerprint(a) != fingerprint(b)

    def test_reversed_winding_differs(self) -> None:
        a = decode({"type": "Polygon", "coordinates": [self.RING]})
        b = decode({"type": "Polygon", "coordinates": [list(reversed(self.RING))]})
        assert fingerprint(a) != fingerprint(b)

    def test_type_is_part_of_identity(self) -> None:
        line = LineString(points=((0.0, 0.0), (1.0, 1.0)))
        ring = Polygon(rings=(((0.0, 0.0), (1.0, 1.0)),))
        assert fingerprint(line) != fingerprint(ring)


class TestPrecision:
    """Rounding to the configured number of decimals."""

    def test_default_precision_rounds_beyond_seven_places(self) -> None:
        a = Point(lng=1.000000001, lat=2.0)
        b = Point(lng=1.0, lat=2.0)
        assert fingerprint(a) == fingerprint(b)

    def test_differences_within_precision_are_kept(self) -> None:
        a = Point(lng=1.00001, lat=2.0)
        b = Point(lng=1.0, lat=2.0)
        assert fingerprint(a) != fingerprint(b)

    def test_custom_precision(self) -> None:
        fp = fingerprint(Point(lng=1.23456, lat=2.0), precision=2)
        assert fp == '{"type":"Point","coordinates":[1.23,2]}'

    @pytest.mark.parametrize(
        ("value", "precision", "expected"),
        [
            (0.0, 7, "0"),
            (-0.0, 7, "0"),
            (-0.00000001, 7, "0"),
            (12.5, 7, "12.5"),
            (-1.2577, 7, "-1.2577"),
            (100.0, 0, "100"),
            (1.6, 0, "2"),
        ],
    )
    def test_format_number(self, value: float, precision: int, expected: str) -> None:
        assert format_number(value, precision) == expected
