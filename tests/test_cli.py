"""Command-line interface."""
import json

import pytest
import yaml
from click.testing import CliRunner

from rcdesign.cli import main

WIND_ONLY_JOINT = """\
project:
  name: UPLIFT
footings:
  allowable_bearing_capacity: 20
  joint_reactions:
    - {unique_name: "1", output_case: "DL", fz: 45.0}
    - {unique_name: "1", output_case: "LL", fz: 15.0}
    - {unique_name: "9", output_case: "WIND", fz: 3.0}
    - {unique_name: "10", output_case: "DL", fz: -4.0}
  point_locations:
    - {unique_name: "1", x: 0.0, y: 0.0}
    - {unique_name: "9", x: 6.0, y: 0.0}
    - {unique_name: "10", x: 12.0, y: 0.0}
"""


@pytest.fixture
def runner():
    return CliRunner()


class TestTemplate:

    def test_prints_valid_yaml(self, runner):
        """The template parses as YAML with every section."""
        result = runner.invoke(main, ["template"])
        assert result.exit_code == 0
        data = yaml.safe_load(result.output)
        assert {"project", "beams", "double_beams", "footings"} <= set(data)


class TestValidate:

    def test_sample_is_valid(self, runner, sample_input_path):
        """The bundled sample input validates."""
        result = runner.invoke(main, ["validate", str(sample_input_path)])
        assert result.exit_code == 0
        assert "Input file is valid." in result.output

    def test_invalid_file_exits_with_error(self, runner, tmp_path):
        """Invalid input exits with status 1."""
        path = tmp_path / "bad.yaml"
        path.write_text("project: {}\nbeams: []\n", encoding="utf-8")
        result = runner.invoke(main, ["validate", str(path)])
        assert result.exit_code == 1


class TestRun:

    def test_writes_results_json(self, runner, sample_input_path, tmp_path):
        """run designs every section and writes results.json."""
        out_dir = tmp_path / "out"
        result = runner.invoke(main, ["run", str(sample_input_path), "-o", str(out_dir)])
        assert result.exit_code == 0, result.output
        assert "SINGLY REINFORCED BEAM B1" in result.output
        assert "FOOTING SIZING" in result.output

        data = json.loads((out_dir / "results.json").read_text(encoding="utf-8"))
        assert data["project"]["name"] == "PROJECT_NAME"
        assert data["beams"]["B1"]["sdm"]["design_moment"] > 0
        assert data["double_beams"]["DB1"]["status"] in ("pass", "warning")
        assert [f["dimension"] for f in data["footings"]["critical"]] == [1.8, 2.2]
        assert len(data["footings"]["sized"]) == 3
        assert data["footings"]["critical"][0]["rn_x"] > 0
        assert data["footings"]["critical"][0]["steps"]

    def test_joints_without_bearing_load(self, runner, tmp_path):
        """Wind-only and uplift joints are sized as 0 m and not designed."""
        path = tmp_path / "uplift.yaml"
        path.write_text(WIND_ONLY_JOINT, encoding="utf-8")
        out_dir = tmp_path / "out"
        result = runner.invoke(main, ["run", str(path), "-o", str(out_dir)])
        assert result.exit_code == 0, result.output

        data = json.loads((out_dir / "results.json").read_text(encoding="utf-8"))
        sized = {f["unique_name"]: f["dimension"] for f in data["footings"]["sized"]}
        assert sized == {"1": 1.8, "9": 0.0, "10": 0.0}
        assert [f["unique_name"] for f in data["footings"]["critical"]] == ["1"]


class TestBeamCommands:

    def test_beam_single_method(self, runner, sample_input_path):
        """--method limits the summary to one design method."""
        result = runner.invoke(main, ["beam", str(sample_input_path), "--method", "sdm"])
        assert result.exit_code == 0
        assert "STRENGTH DESIGN" in result.output
        assert "WORKING STRESS DESIGN" not in result.output

    def test_beam_steps(self, runner, sample_input_path):
        """--steps prints the equation trace."""
        result = runner.invoke(main, ["beam", str(sample_input_path), "--id", "B1", "--steps"])
        assert result.exit_code == 0
        assert "Balanced steel ratio" in result.output

    def test_unknown_beam_id(self, runner, sample_input_path):
        """An unknown --id exits with status 1."""
        result = runner.invoke(main, ["beam", str(sample_input_path), "--id", "NOPE"])
        assert result.exit_code == 1

    def test_double_beam(self, runner, sample_input_path):
        """double-beam summarises the doubly reinforced beams."""
        result = runner.invoke(main, ["double-beam", str(sample_input_path)])
        assert result.exit_code == 0
        assert "DOUBLY REINFORCED BEAM DB1" in result.output


class TestFootingCommand:

    def test_thickness_override(self, runner, sample_input_path):
        """--thickness replaces the punching-shear search."""
        result = runner.invoke(main, ["footing", str(sample_input_path), "--thickness", "0.8"])
        assert result.exit_code == 0
        assert "0.80 m" in result.output

    def test_steps(self, runner, sample_input_path):
        """--steps prints the footing equation trace."""
        result = runner.invoke(main, ["footing", str(sample_input_path), "--steps"])
        assert result.exit_code == 0
        assert "CALCULATION STEPS" in result.output
        assert "Strength coefficient Rn (x)" in result.output
