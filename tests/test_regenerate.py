"""Tests for fixture regeneration (tokml regenerate)."""

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from tokml.cli import app
from tokml.commands.regenerate_cmd import fixture_options, regenerate_fixtures
from tokml.core.writers import tokml
from tokml.io.geojson_reader import read_geojson


runner = CliRunner()

STYLED_POINT = {
    "type": "Feature",
    "geometry": {"type": "Point", "coordinates": [0, 0]},
    "properties": {"name": "p", "marker-color": "#f00"},
}


@pytest.fixture
def fixture_dir(tmp_path: Path) -> Path:
    data = tmp_path / "data"
    data.mkdir()
    (data / "point.geojson").write_text(json.dumps(STYLED_POINT), encoding="utf-8")
    (data / "simplestyle_point.geojson").write_text(json.dumps(STYLED_POINT), encoding="utf-8")
    (data / "named.geojson").write_text(json.dumps(STYLED_POINT), encoding="utf-8")
    (data / "named.options.json").write_text(
        json.dumps({"documentName": "Named", "name": None}), encoding="utf-8"
    )
    return data


def test_fixture_options(fixture_dir: Path):
    assert fixture_options(fixture_dir / "point.geojson") is None
    assert fixture_options(fixture_dir / "simplestyle_point.geojson") == {"simplestyle": True}
    assert fixture_options(fixture_dir / "named.geojson") == {"documentName": "Named", "name": None}


def test_regenerate_fixtures_writes_kml(fixture_dir: Path):
    written = regenerate_fixtures(fixture_dir)
    assert [p.name for p in written] == ["named.kml", "point.kml", "simplestyle_point.kml"]

    plain = (fixture_dir / "point.kml").read_text(encoding="utf-8")
    styled = (fixture_dir / "simplestyle_point.kml").read_text(encoding="utf-8")
    named = (fixture_dir / "named.kml").read_text(encoding="utf-8")

    assert plain == tokml(STYLED_POINT)
    assert styled == tokml(STYLED_POINT, {"simplestyle": True})
    assert "<Style " in styled and "<Style " not in plain
    assert "<Document><name>Named</name>" in named
    assert "<name>p</name>" not in named


def test_malformed_options_file(fixture_dir: Path):
    (fixture_dir / "point.options.json").write_text("{bad", encoding="utf-8")
    with pytest.raises(ValueError, match="point.options.json"):
        regenerate_fixtures(fixture_dir)


def test_regenerate_command(fixture_dir: Path):
    result = runner.invoke(app, ["regenerate", str(fixture_dir)])
    assert result.exit_code == 0
    assert (fixture_dir / "point.kml").exists()
    assert "point.kml" in result.stdout


def test_regenerate_command_missing_dir(tmp_path: Path):
    result = runner.invoke(app, ["regenerate", str(tmp_path / "missing")])
    assert result.exit_code == 1


def test_regenerate_command_empty_dir(tmp_path: Path):
    result = runner.invoke(app, ["regenerate", str(tmp_path)])
    assert result.exit_code == 0
    assert "No .geojson fixtures" in result.stdout


DATA_DIR = Path(__file__).parent / "data"


@pytest.mark.parametrize(
    "geojson_path", sorted(DATA_DIR.glob("*.geojson")), ids=lambda p: p.stem
)
def test_checked_in_fixtures_match_converter(geojson_path: Path):
    expected = geojson_path.with_suffix(".kml").read_text(encoding="utf-8")
    assert tokml(read_geojson(geojson_path), fixture_options(geojson_path)) == expected


def test_checked_in_fixture_set():
    stems = {p.stem for p in DATA_DIR.glob("*.geojson")}
    assert {"point", "polygon_holes", "geometry_collection"} <= stems
    assert any(s.startswith("simplestyle_") for s in stems)


def test_regenerate_defaults_to_tests_data(tmp_path: Path, monkeypatch):
    data = tmp_path / "tests" / "data"
    data.mkdir(parents=True)
    (data / "point.geojson").write_text(json.dumps(STYLED_POINT), encoding="utf-8")
    monkeypatch.chdir(tmp_path)

    result = runner.invoke(app, ["regenerate"])
    assert result.exit_code == 0
    assert (data / "point.kml").read_text(encoding="utf-8") == tokml(STYLED_POINT)
