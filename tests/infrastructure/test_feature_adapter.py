"""Tests for the renderer feature adapter (FeatureCollectionAdapter)."""

from __future__ import annotations

import pytest

from src.infrastructure.rendering import FeatureCollectionAdapter

# Meters per degree of longitude at the equator in Web Mercator
MERCATOR_M_PER_DEG = 6378137.0 * 3.141592653589793 / 180.0


def _layer(collection, name):
    return [f for f in collection["features"] if f["properties"]["layer"] == name]


def test_feature_collection_layers(session, west_half_barrier):
    session.add_barrier(west_half_barrier)
    session.auto_place_beacons(step_m=50)
    session.place_antenna_manually((75.0, 75.0))

    collection = FeatureCollectionAdapter().to_feature_collection(session)

    assert collection["type"] == "FeatureCollection"
    assert collection["crs"] == "EPSG:3857"
    assert len(_layer(collection, "beacons")) == 2
    assert len(_layer(collection, "antennas")) == 1
    assert len(_layer(collection, "barriers")) == 1


def test_beacon_feature(session):
    beacon = session.place_beacon_manually((12.5, 7.0), rssi_dbm=-55)

    feature = FeatureCollectionAdapter().beacon_feature(beacon)

    assert feature["id"] == beacon.id
    assert feature["geometry"] == {"type": "Point", "coordinates": [12.5, 7.0]}
    assert feature["properties"]["rssi_dbm"] == -55


def test_antenna_feature_carries_coverage_radius(session):
    antenna = session.place_antenna_manually((30.0, 40.0), height_m=10, angle_deg=0)

    feature = FeatureCollectionAdapter().antenna_feature(antenna)

    assert feature["geometry"]["coordinates"] == [30.0, 40.0]
    assert feature["properties"]["range_m"] == 25.0
    assert feature["properties"]["height_m"] == 10.0
    assert feature["properties"]["angle_deg"] == 0.0


def test_barrier_ring_is_closed(session):
    barrier = session.add_barrier([(0, 0), (10, 0), (10, 10)])

    feature = FeatureCollectionAdapter().barrier_feature(barrier, 0)

    ring = feature["geometry"]["coordinates"][0]
    assert feature["geometry"]["type"] == "Polygon"
    assert ring[0] == ring[-1]
    assert len(ring) == 4


def test_already_closed_barrier_not_closed_twice(session):
    barrier = session.add_barrier([(0, 0), (10, 0), (10, 10), (0, 0)])

    feature = FeatureCollectionAdapter().barrier_feature(barrier, 0)

    assert len(feature["geometry"]["coordinates"][0]) == 4


def test_empty_barrier_skipped(session):
    session.add_barrier([])

    collection = FeatureCollectionAdapter().to_feature_collection(session)

    assert _layer(collection, "barriers") == []


def test_hidden_layers_are_omitted(session, west_half_barrier):
    session.add_barrier(west_half_barrier)
    session.auto_place_beacons(step_m=50)
    session.auto_place_antennas()

    adapter = FeatureCollectionAdapter(layers=["antennas"])
    collection = adapter.to_feature_collection(session)

    assert collection["features"]
    assert {f["properties"]["layer"] for f in collection["features"]} == {"antennas"}


def test_unknown_layer_rejected():
    with pytest.raises(ValueError, match="Unknown layers"):
        FeatureCollectionAdapter(layers=["beacons", "heatmap"])


def test_geographic_projection(session):
    session.place_beacon_manually((0.0, 0.0))
    session.place_beacon_manually((1000.0, 0.0))

    adapter = FeatureCollectionAdapter(geographic=True)
    collection = adapter.to_feature_collection(session)

    origin, east = (f["geometry"]["coordinates"] for f in collection["features"])
    assert collection["crs"] == "EPSG:4326"
    assert origin == pytest.approx([0.0, 0.0], abs=1e-9)
    assert east[0] == pytest.approx(1000.0 / MERCATOR_M_PER_DEG, rel=1e-9)
    assert east[1] == pytest.approx(0.0, abs=1e-9)
