"""
Tests for the Typer command line interface.
"""

import json

import pytest
from typer.testing import CliRunner

from inspectoravail.cli.app import app

runner = CliRunner()

SCHEDULE_DATA = {
    "companies": [
        {"_id": "acme", "availabilityViewMode": "openSchedule"},
        {"_id": "bolt", "availabilityViewMode": "timeSlots"},
    ],
    "inspectors": [
        {"_id": "insp-1", "company": "acme", "firstName": "Ada", "lastName": "Moreno"},
        {"_id": "insp-2", "company": "acme", "firstName": "Ben", "lastName": "Okafor"},
    ],
    "availability": [
        {
            "company": "acme",
            "inspector": "insp-1",
            "days": [
                {
                    "day": "monday",
                    "timeSlots": ["08:00"],
                    "openSchedule": [{"start": "09:00", "end": "10:45"}],
                }
            ],
            "dateSpecific": [{"date": "2025-03-10", "start": "10:00", "end": "10:30"}],
        },
        {
            "company": "bolt",
            "inspector": "insp-7",
            "days": [{"day": "monday", "timeSlots": ["14:00", "09:00"]}],
        },
    ],
}


@pytest.fixture
def data_file(tmp_path, monkeypatch):
    monkeypatch.setattr(
        "inspectoravail.config.get_default_config_path",
        lambda: tmp_path / "config.yaml",
    )
    path = tmp_path / "schedules.json"
    path.write_text(json.dumps(SCHEDULE_DATA), encoding="utf-8")
    return path


def test_times_lists_bookable_times(data_file):
    """Open schedule minus the exclusion, including the block's end time."""
    result = runner.invoke(app, ["times", "acme", "insp-1", "2025-03-10", "--data", str(data_file)])

    assert result.exit_code == 0
    assert "09:00" in result.output
    assert "09:30" in result.output
    assert "10:30" in result.output
    assert "10:45" in result.output
    assert "10:00" not in result.output


def test_times_with_view_mode_override(data_file):
    """The --view-mode option replaces the company setting."""
    result = runner.invoke(
        app,
        ["times", "acme", "insp-1", "2025-03-10", "--data", str(data_file), "--view-mode", "timeSlots"],
    )

    assert result.exit_code == 0
    assert "08:00" in result.output
    assert "09:30" not in result.output


def test_times_without_availability(data_file):
    """A day without weekly definition prints a notice."""
    result = runner.invoke(app, ["times", "acme", "insp-1", "2025-03-11", "--data", str(data_file)])

    assert result.exit_code == 0
    assert "No bookable times" in result.output


def test_times_rejects_bad_date(data_file):
    """An unparseable date exits with status 1."""
    result = runner.invoke(app, ["times", "acme", "insp-1", "10/03/2025", "--data", str(data_file)])

    assert result.exit_code == 1
    assert "Error" in result.output


def test_missing_data_file(tmp_path, monkeypatch):
    """A missing data file exits with status 1."""
    monkeypatch.setattr(
        "inspectoravail.config.get_default_config_path",
        lambda: tmp_path / "config.yaml",
    )

    result = runner.invoke(
        app, ["times", "acme", "insp-1", "2025-03-10", "--data", str(tmp_path / "none.json")]
    )

    assert result.exit_code == 1
    assert "not found" in result.output


def test_data_file_from_config(data_file, tmp_path):
    """The data file can come from the config file."""
    config_path = tmp_path / "custom.yaml"
    config_path.write_text(f"data_file: {data_file}\n", encoding="utf-8")

    result = runner.invoke(app, ["times", "bolt", "insp-7", "2025-03-10", "--config", str(config_path)])

    assert result.exit_code == 0
    assert "09:00" in result.output
    assert "14:00" in result.output


def test_no_data_file_configured(tmp_path, monkeypatch):
    """Without --data and without a configured file the command fails."""
    monkeypatch.setattr(
        "inspectoravail.config.get_default_config_path",
        lambda: tmp_path / "config.yaml",
    )

    result = runner.invoke(app, ["times", "acme", "insp-1", "2025-03-10"])

    assert result.exit_code == 1
    assert "No schedule data file" in result.output


def test_check_available_time(data_file):
    """A time inside the open block and outside the exclusion is available."""
    result = runner.invoke(
        app, ["check", "acme", "insp-1", "2025-03-10", "09:15", "--data", str(data_file)]
    )

    assert result.exit_code == 0
    assert "is available" in result.output


def test_check_block_end_is_not_available(data_file):
    """The block's end time is listed but not bookable as a point query."""
    result = runner.invoke(
        app, ["check", "acme", "insp-1", "2025-03-10", "10:45", "--data", str(data_file)]
    )

    assert result.exit_code == 2
    assert "is not available" in result.output
    assert "10:45" in result.output


def test_month_view(data_file):
    """The month command counts the bookable Mondays of March 2025."""
    result = runner.invoke(app, ["month", "acme", "insp-1", "2025-03", "--data", str(data_file)])

    assert result.exit_code == 0
    assert "5 bookable day(s)" in result.output


def test_month_rejects_bad_month(data_file):
    """An unparseable month exits with status 1."""
    result = runner.invoke(app, ["month", "acme", "insp-1", "March", "--data", str(data_file)])

    assert result.exit_code == 1
    assert "YYYY-MM" in result.output


def test_inspectors_on_date(data_file):
    """Only inspectors with times on the date are listed."""
    result = runner.invoke(app, ["inspectors", "acme", "2025-03-10", "--data", str(data_file)])

    assert result.exit_code == 0
    assert "Ada Moreno" in result.output
    assert "Ben Okafor" not in result.output


def test_version():
    """The version command prints the package version."""
    from inspectoravail import __version__

    result = runner.invoke(app, ["version"])

    assert result.exit_code == 0
    assert __version__ in result.output
