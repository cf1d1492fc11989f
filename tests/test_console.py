"""
Tests for the terminal collaborator and the project_points script
Run with: pytest tests/test_console.py -v
"""

import importlib.util
import json
import os
import sys
from pathlib import Path

import pytest

from backend.core.projection_config import ProjectionConfig
from backend.core.projection_engine import project
from backend.services.console import (
    InputError,
    collect_inputs,
    format_report,
    parse_flag,
    parse_float,
)

SCRIPT_PATH = Path(__file__).resolve().parent.parent / "scripts" / "project_points.py"

SCENARIO_A = [
    "LeBron James",  # name
    "25.0",          # line
    "23.0",          # season avg
    "1",             # home
    "229",           # game total
    "114.5",         # team total
    "23",            # def vs pos
    "23",            # recent avg
    "32",            # season minutes
    "32",            # expected minutes
    "99.5",          # pace
    "0",             # b2b
]


def _reader(answers):
    """Fake ``input`` that replays answers, then signals end of input."""
    it = iter(answers)
    prompts = []

    def read(prompt):
        prompts.append(prompt)
        try:
            return next(it)
        except StopIteration:
            raise EOFError

    read.prompts = prompts
    return read


def _load_script():
    spec = importlib.util.spec_from_file_location("project_points", SCRIPT_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------

class TestParsing:

    def test_parse_float(self):
        assert parse_float(" 24.5\n", "x") == 24.5
        assert parse_float("-3", "x") == -3.0

    def test_parse_float_rejects_text(self):
        with pytest.raises(InputError, match="player_line"):
            parse_float("twenty", "player_line")

    @pytest.mark.parametrize("raw,expected", [
        ("1", True), ("0", False), ("2", True), ("-1", True),
        ("y", True), ("YES", True), ("n", False), ("false", False),
    ])
    def test_parse_flag(self, raw, expected):
        assert parse_flag(raw, "is_home") is expected

    def test_parse_flag_rejects_text(self):
        with pytest.raises(InputError):
            parse_flag("maybe", "is_home")


# ---------------------------------------------------------------------------
# collect_inputs
# ---------------------------------------------------------------------------

class TestCollectInputs:

    def test_full_scenario(self):
        read = _reader(SCENARIO_A)
        inputs = collect_inputs(read)

        assert inputs.player_name == "LeBron James"
        assert inputs.player_line == 25.0
        assert inputs.is_home is True
        assert inputs.is_back_to_back is False
        assert inputs.recent_avg == 23.0
        assert inputs.matchup_pace == 99.5
        assert len(read.prompts) == 12
        assert read.prompts[0] == "Player name: "

    def test_eof_on_name_returns_none(self):
        read = _reader([])
        assert collect_inputs(read) is None
        assert len(read.prompts) == 1

    def test_eof_mid_way_raises(self):
        with pytest.raises(InputError, match="input ended"):
            collect_inputs(_reader(SCENARIO_A[:5]))

    def test_garbage_number_raises(self):
        answers = list(SCENARIO_A)
        answers[2] = "abc"
        with pytest.raises(InputError, match="season_avg"):
            collect_inputs(_reader(answers))

    def test_no_range_validation(self):
        answers = list(SCENARIO_A)
        answers[8] = "-10"   # negative season minutes accepted
        inputs = collect_inputs(_reader(answers))
        assert inputs.season_avg_minutes == -10.0

    def test_name_kept_verbatim(self):
        answers = list(SCENARIO_A)
        answers[0] = "  Nikola Jokic \n"
        inputs = collect_inputs(_reader(answers))
        assert inputs.player_name == "  Nikola Jokic "

    def test_empty_name_accepted(self):
        answers = list(SCENARIO_A)
        answers[0] = ""
        assert collect_inputs(_reader(answers)).player_name == ""


# ---------------------------------------------------------------------------
# Report
# ---------------------------------------------------------------------------

class TestReport:

    def test_report_contents(self):
        cfg = ProjectionConfig.default()
        inputs = collect_inputs(_reader(SCENARIO_A))
        report = format_report(inputs, project(cfg, inputs), cfg)

        assert "Projection for LeBron James" in report
        assert "Base points (blend): 24.20" in report
        assert "  Home/Away         : 1.0400" in report
        assert "  Back-to-Back      : 1.0000" in report
        assert "Uncapped Multiplier : 1.0400" in report
        assert "Final Multiplier    : 1.0400  (capped to [0.70, 1.40])" in report
        assert "Projected Points    : 25.17" in report

    def test_report_lists_eight_multipliers(self):
        cfg = ProjectionConfig.default()
        inputs = collect_inputs(_reader(SCENARIO_A))
        report = format_report(inputs, project(cfg, inputs), cfg)
        factor_lines = [line for line in report.splitlines() if line.startswith("  ")]
        assert len(factor_lines) == 8


# ---------------------------------------------------------------------------
# Script entry point
# ---------------------------------------------------------------------------

class TestScript:

    @pytest.fixture(autouse=True)
    def _clean_env(self, monkeypatch):
        # Keep stray PROJ_* overrides and any local .env out of the run.
        monkeypatch.setattr("backend.services.projection_profiles.load_dotenv", lambda: None)
        for key in list(os.environ):
            if key.startswith("PROJ_"):
                monkeypatch.delenv(key)

    def test_text_report(self, monkeypatch, capsys):
        monkeypatch.setattr(sys, "argv", ["project_points.py"])
        monkeypatch.setattr("builtins.input", _reader(SCENARIO_A))

        assert _load_script().main() == 0
        assert "Projected Points    : 25.17" in capsys.readouterr().out

    def test_json_output(self, monkeypatch, capsys):
        monkeypatch.setattr(sys, "argv", ["project_points.py", "--json", "--profile", "lines_only"])
        monkeypatch.setattr("builtins.input", _reader(SCENARIO_A))

        assert _load_script().main() == 0
        payload = json.loads(capsys.readouterr().out)
        assert payload["profile"] == "lines_only"
        assert payload["projection"] == pytest.approx(24.2)

    def test_eof_exits_cleanly(self, monkeypatch, capsys):
        monkeypatch.setattr(sys, "argv", ["project_points.py"])
        monkeypatch.setattr("builtins.input", _reader([]))

        assert _load_script().main() == 0
        assert "Projection for" not in capsys.readouterr().out

    def test_bad_input_exits_nonzero(self, monkeypatch):
        answers = list(SCENARIO_A)
        answers[1] = "n/a"
        monkeypatch.setattr(sys, "argv", ["project_points.py"])
        monkeypatch.setattr("builtins.input", _reader(answers))

        assert _load_script().main() == 1

    def test_bad_calibration_ignored_when_no_name(self, monkeypatch):
        monkeypatch.setenv("PROJ_MULT_MIN", "2.0")
        monkeypatch.setattr(sys, "argv", ["project_points.py"])
        monkeypatch.setattr("builtins.input", _reader([]))

        assert _load_script().main() == 0

    def test_bad_calibration_exits_nonzero(self, monkeypatch, capsys):
        monkeypatch.setenv("PROJ_MULT_MIN", "2.0")
        monkeypatch.setattr(sys, "argv", ["project_points.py"])
        monkeypatch.setattr("builtins.input", _reader(SCENARIO_A))

        assert _load_script().main() == 1
        assert "Projection for" not in capsys.readouterr().out
