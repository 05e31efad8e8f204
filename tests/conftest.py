"""Pytest fixtures for clover-fab tests."""

import json
from pathlib import Path

import pytest

from clover_fab.schema import BoardSpecs, Component, Design, Point, Trace

# A small two-layer board as emitted by the design parser
SAMPLE_DESIGN = {
    "name": "LED Blinker",
    "description": "555 timer driving an LED",
    "specs": {
        "layers": 2,
        "width": 50,
        "height": 40,
        "quantity": 5,
        "color": "green",
        "finish": "hasl",
        "thickness": 1.6,
        "copperWeight": "1oz",
        "castellatedHoles": False,
        "impedanceControl": False,
        "stencil": False,
    },
    "components": [
        {"designator": "U1", "package": "SOIC-8", "value": "NE555", "x": 20, "y": 20},
        {"designator": "R1", "package": "0805", "value": "10k", "x": 30.5, "y": 15.25},
        {"designator": "LED1", "package": "0805", "value": "red", "x": 40, "y": 20},
        {"designator": "C1", "package": "0805", "value": "100n", "x": 12, "y": 8, "layer": "bottom"},
    ],
    "traces": [
        {"net": "VCC", "width": 0.3, "points": [{"x": 20, "y": 20}, {"x": 30.5, "y": 15.25}]},
        {
            "net": "OUT",
            "width": 0.25,
            "points": [{"x": 30.5, "y": 15.25}, {"x": 35, "y": 15.25}, {"x": 40, "y": 20}],
        },
        {"net": "GND", "width": 0.5, "points": [{"x": 12, "y": 8}, {"x": 5, "y": 8}], "layer": "bottom"},
    ],
    "boardOutline": [],
    "drillHoles": [{"x": 10, "y": 10, "diameter": 0.8}, {"x": 15.5, "y": 10, "diameter": 0.8}],
    "mountingHoles": [
        {"x": 3, "y": 3, "diameter": 3.2},
        {"x": 47, "y": 37, "diameter": 3.2},
    ],
}


@pytest.fixture
def default_specs() -> BoardSpecs:
    """Default board specs: 2 layers, 100x100 mm, 5 boards."""
    return BoardSpecs()


@pytest.fixture
def sample_design_dict() -> dict:
    """Sample design in the upstream camelCase JSON form."""
    return json.loads(json.dumps(SAMPLE_DESIGN))


@pytest.fixture
def sample_design(sample_design_dict) -> Design:
    """Sample design parsed into the data model."""
    return Design.from_dict(sample_design_dict)


@pytest.fixture
def simple_design() -> Design:
    """One component, one trace, no holes, implicit outline."""
    return Design(
        name="Simple",
        specs=BoardSpecs(width=10, height=5),
        components=[Component("R1", x=1, y=2)],
        traces=[Trace("N1", 0.25, points=[Point(1, 2), Point(4, 2)])],
    )


@pytest.fixture
def design_file(tmp_path: Path, sample_design_dict) -> Path:
    """Sample design written to a JSON file."""
    path = tmp_path / "design.json"
    path.write_text(json.dumps(sample_design_dict))
    return path


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch) -> Path:
    """Run with no user config and a project root at tmp_path."""
    (tmp_path / ".git").mkdir(exist_ok=True)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("clover_fab.config.USER_CONFIG_PATH", tmp_path / "no-exist.toml")
    return tmp_path
