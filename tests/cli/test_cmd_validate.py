"""Tests for the gtfs-validator command line."""

from __future__ import annotations

import argparse
import logging

import pytest

from gtfs_validator.interfaces.cli import main as cli
from gtfs_validator.interfaces.cli.main import build_parser, cmd_validate, main, resolve_config


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path, monkeypatch):
    """Run every test away from the repository's config/validator.yaml."""
    monkeypatch.chdir(tmp_path)
    yield
    # setup_logging replaces root handlers; drop them so later tests start clean
    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
    root.setLevel(logging.WARNING)


@pytest.fixture
def patched_backend(fake_backend, monkeypatch):
    """Make every backend spec resolve to the fake backend."""
    specs = []

    def fake_load_backend(spec):
        specs.append(spec)
        return fake_backend

    monkeypatch.setattr(cli, "load_backend", fake_load_backend)
    return specs


def _args(**overrides) -> argparse.Namespace:
    return build_parser().parse_args(
        [overrides.pop("feed", "metro.zip")] + [a for k, v in overrides.items() for a in (k, v)]
    )


class TestCmdValidate:
    """Tests for cmd_validate function."""

    def test_success_writes_report(self, patched_backend, capsys):
        exit_code = main(["metro.zip", "--backend", "tests.fake:Backend"])

        assert exit_code == 0
        assert patched_backend == ["tests.fake:Backend"]
        out = capsys.readouterr().out
        assert out.startswith("# Validation report for Metro and Valley Transit\n")
        assert "- Stops: 3 errors/warnings" in out

    def test_zero_trip_feed_is_fatal(self, patched_backend, capsys):
        exit_code = main(["empty.zip", "--backend", "tests.fake:Backend"])

        assert exit_code != 0
        assert capsys.readouterr().out == ""

    def test_unreadable_feed_is_fatal(self, patched_backend, capsys):
        exit_code = main(["missing.zip", "--backend", "tests.fake:Backend"])

        assert exit_code == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Could not read file missing.zip" in captured.err

    def test_silent_suppresses_all_output(self, patched_backend, capsys):
        exit_code = main(["metro.zip", "--backend", "tests.fake:Backend", "--silent"])

        assert exit_code == 0
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == ""

    def test_output_file(self, patched_backend, tmp_path):
        report_path = tmp_path / "out" / "report.md"
        exit_code = main(
            ["metro.zip", "--backend", "tests.fake:Backend", "--output", str(report_path)]
        )

        assert exit_code == 0
        assert "### Stops" in report_path.read_text(encoding="utf-8")

    def test_unwritable_output_path(self, patched_backend, tmp_path, capsys):
        report_dir = tmp_path / "reports"
        report_dir.mkdir()
        exit_code = main(
            ["metro.zip", "--backend", "tests.fake:Backend", "--output", str(report_dir)]
        )

        assert exit_code == 1
        assert "Failed to write report" in capsys.readouterr().err

    def test_json_format(self, patched_backend, capsys):
        exit_code = main(["metro.zip", "--backend", "tests.fake:Backend", "--format", "JSON"])

        assert exit_code == 0
        assert '"section": "Stops"' in capsys.readouterr().out

    def test_missing_backend(self, capsys):
        exit_code = main(["metro.zip"])

        assert exit_code == 2
        assert "No feed backend configured" in capsys.readouterr().err

    def test_unloadable_backend(self):
        exit_code = main(["metro.zip", "--backend", "no_such_gtfs_backend_pkg:Backend"])
        assert exit_code == 2

    def test_invalid_config_file(self, tmp_path):
        config_path = tmp_path / "bad.yaml"
        config_path.write_text("max_findings_per_section: 0\n", encoding="utf-8")
        assert main(["metro.zip", "--config", str(config_path)]) == 2

    def test_missing_config_file(self, tmp_path):
        assert main(["metro.zip", "--config", str(tmp_path / "nope.yaml")]) == 2

    def test_wrong_argument_count(self):
        with pytest.raises(SystemExit) as excinfo:
            main([])
        assert excinfo.value.code != 0

        with pytest.raises(SystemExit) as excinfo:
            main(["a.zip", "b.zip"])
        assert excinfo.value.code != 0

    def test_cmd_validate_namespace(self, patched_backend, capsys):
        args = argparse.Namespace(feed="metro.zip", backend="tests.fake:Backend", output=None)
        assert cmd_validate(args) == 0
        assert "# Validation report for" in capsys.readouterr().out


class TestResolveConfig:
    def test_default_config_file_is_used(self, tmp_path):
        (tmp_path / "config").mkdir()
        (tmp_path / "config" / "validator.yaml").write_text(
            "backend: from_file:Backend\nmax_findings_per_section: 12\n", encoding="utf-8"
        )
        config = resolve_config(_args())
        assert config.backend == "from_file:Backend"
        assert config.max_findings_per_section == 12

    def test_command_line_overrides_file(self, tmp_path):
        config_path = tmp_path / "validator.yaml"
        config_path.write_text(
            "backend: from_file:Backend\nshape_distance_threshold: 90\nsilent: false\n",
            encoding="utf-8",
        )
        args = build_parser().parse_args(
            [
                "metro.zip",
                "--config",
                str(config_path),
                "--backend",
                "from_cli:Backend",
                "--shape-distance-threshold",
                "250",
                "--max-findings",
                "7",
                "--active-calendar-days",
                "0",
                "--silent",
            ]
        )
        config = resolve_config(args)
        assert config.backend == "from_cli:Backend"
        assert config.shape_distance_threshold == 250.0
        assert config.max_findings_per_section == 7
        assert config.active_calendar_days == 0
        assert config.silent is True

    def test_silent_from_config_file(self, tmp_path, patched_backend, capsys):
        config_path = tmp_path / "validator.yaml"
        config_path.write_text("backend: x:Backend\nsilent: true\n", encoding="utf-8")

        assert main(["metro.zip", "--config", str(config_path)]) == 0
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == ""

    def test_no_silent_overrides_config_file(self, tmp_path):
        config_path = tmp_path / "validator.yaml"
        config_path.write_text("backend: x:Backend\nsilent: true\n", encoding="utf-8")
        args = build_parser().parse_args(["metro.zip", "--config", str(config_path), "--no-silent"])

        assert resolve_config(args).silent is False

    def test_silent_flag_absent_keeps_config_value(self, tmp_path):
        config_path = tmp_path / "validator.yaml"
        config_path.write_text("silent: true\n", encoding="utf-8")
        args = build_parser().parse_args(["metro.zip", "--config", str(config_path)])

        assert args.silent is None
        assert resolve_config(args).silent is True
