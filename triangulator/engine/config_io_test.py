"""Tests for config dataclasses and JSON load/save."""

import json

import pytest

from .config_io import load_config, save_config
from .types import GridConfig, OverlayConfig, TargetingParams


def test_empty_object_gives_reference_config(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{}")
    config = load_config(path)
    assert config == OverlayConfig()
    assert config.grid.cell_width == 30.0
    assert config.targeting.reference_distance == 4.5
    assert config.targeting.tolerance == 0.5
    assert config.targeting.sample_step == 2


def test_save_and_load_roundtrip(tmp_path):
    config = OverlayConfig(
        grid=GridConfig(640, 480, 32, 24),
        targeting=TargetingParams(reference_distance=3.0, tolerance=0.25),
        probe_radius_cells=2.5,
    )
    path = tmp_path / "nested" / "config.json"
    save_config(config, path)
    assert load_config(path) == config
    assert load_config(str(path)) == config


def test_partial_file_fills_defaults(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"grid": {"cells_x": 12}}))
    config = load_config(path)
    assert config.grid == GridConfig(720, 720, 12, 24)
    assert config.grid.cell_width == 60.0
    assert config.targeting == TargetingParams()


def test_saved_keys_carry_units(tmp_path):
    path = tmp_path / "config.json"
    save_config(OverlayConfig(), path)
    data = json.loads(path.read_text())
    assert data["grid"]["canvas_width_px"] == 720
    assert data["targeting"]["reference_distance_cells"] == 4.5
    assert data["targeting"]["sample_step_px"] == 2


@pytest.mark.parametrize(
    "data, field",
    [
        ({"grid": {"canvas_width_px": 0}}, "canvas_width_px"),
        ({"grid": {"cells_y": -3}}, "cells_y"),
        ({"targeting": {"sample_step_px": 0}}, "sample_step_px"),
        ({"targeting": {"tolerance_cells": -0.1}}, "tolerance_cells"),
        (
            {"targeting": {"reference_distance_cells": -1}},
            "reference_distance_cells",
        ),
        ({"probe_radius_cells": -2}, "probe_radius_cells"),
        ({"grid": {"cells_x": "24"}}, "cells_x"),
        ({"grid": {"cells_x": 24.5}}, "cells_x"),
        ({"grid": {"canvas_height_px": 720.0}}, "canvas_height_px"),
        ({"grid": {"cells_y": True}}, "cells_y"),
        ({"targeting": {"tolerance_cells": "0.5"}}, "tolerance_cells"),
        ({"targeting": {"sample_step_px": None}}, "sample_step_px"),
        ({"targeting": {"peak_score": float("nan")}}, "peak_score"),
        ({"probe_radius_cells": [4]}, "probe_radius_cells"),
        ({"grid": [720, 720]}, "grid"),
        ({"targeting": "defaults"}, "targeting"),
    ],
)
def test_invalid_values_rejected(tmp_path, data, field):
    path = tmp_path / "config.json"
    path.write_text(json.dumps(data))
    with pytest.raises(ValueError, match=field):
        load_config(path)


def test_non_object_rejected(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("[1, 2, 3]")
    with pytest.raises(ValueError, match="JSON object"):
        load_config(path)


def test_malformed_json_propagates(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{not json")
    with pytest.raises(json.JSONDecodeError):
        load_config(path)


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "missing.json")
