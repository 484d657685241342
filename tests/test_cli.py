"""Tests for the command-line interface."""

import json
import logging

import pytest
from pathlib import Path
from typer.testing import CliRunner

# Add project root to path for imports
import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from pitch_converter.cli import (
    EXIT_CONFIG_ERROR,
    EXIT_CONVERSION_ERROR,
    REFERENCE_ENVVAR,
    app,
)
from pitch_converter.logging_config import LOGGER_NAME, configure_logging


@pytest.fixture
def runner():
    return CliRunner()


class TestConvertCommand:
    """Tests for `pitch-converter convert`."""

    def test_default_outputs(self, runner):
        result = runner.invoke(app, ["convert", "A4"])
        assert result.exit_code == 0, result.output
        assert result.output.splitlines() == ["440.00 Hz", "69", "A4", "A4+0.00c"]

    def test_selected_outputs_in_order(self, runner):
        result = runner.invoke(app, ["convert", "C4", "--to", "midi,freq"])
        assert result.exit_code == 0, result.output
        assert result.output.splitlines() == ["60", "261.63 Hz"]

    def test_repeated_to_option(self, runner):
        result = runner.invoke(app, ["convert", "440", "-t", "note", "-t", "alt"])
        assert result.output.splitlines() == ["A4", "hiA"]

    def test_midi_hint(self, runner):
        result = runner.invoke(app, ["convert", "61", "--from", "midi", "--to", "note", "--flats"])
        assert result.exit_code == 0, result.output
        assert result.output.strip() == "Db4"

    def test_reference_option(self, runner):
        result = runner.invoke(app, ["convert", "A4", "-r", "432", "--to", "freq,midi,note"])
        assert result.output.splitlines() == ["432.00 Hz", "69", "A4"]

    def test_reference_from_environment(self, runner):
        result = runner.invoke(app, ["convert", "A4", "--to", "freq"], env={REFERENCE_ENVVAR: "415"})
        assert result.output.strip() == "415.00 Hz"

    def test_decimals_and_helmholtz(self, runner):
        result = runner.invoke(app, ["convert", "C4", "-d", "3", "--helmholtz", "--to", "freq,note"])
        assert result.output.splitlines() == ["261.626 Hz", "c'"]

    def test_labels(self, runner):
        result = runner.invoke(app, ["convert", "A4", "--labels", "--to", "midi"])
        assert result.output.strip() == "midi: 69"

    def test_json_output(self, runner):
        result = runner.invoke(app, ["convert", "445", "--json", "--to", "midi,cents"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["notation"] == "freq"
        assert [o["text"] for o in data["outputs"]] == ["69", "A4+19.56c"]

    def test_parse_error_exit_code(self, runner):
        result = runner.invoke(app, ["convert", "H4"])
        assert result.exit_code == EXIT_CONVERSION_ERROR
        assert "InvalidLetter" in result.output

    def test_negative_frequency(self, runner):
        result = runner.invoke(app, ["convert", "--", "-5.0"])
        assert result.exit_code == EXIT_CONVERSION_ERROR
        assert "OutOfDomain" in result.output

    def test_help_shows_negative_value_usage(self, runner):
        result = runner.invoke(app, ["convert", "--help"])
        assert result.exit_code == 0
        assert "-5.0" in result.output

    def test_bad_output_does_not_block_others(self, runner):
        result = runner.invoke(app, ["convert", "A4", "--to", "midi,solfege,note"])
        assert result.exit_code == EXIT_CONVERSION_ERROR
        assert "69" in result.output
        assert "A4" in result.output
        assert "UnknownNotation" in result.output

    def test_invalid_reference(self, runner):
        result = runner.invoke(app, ["convert", "A4", "-r", "0"])
        assert result.exit_code == EXIT_CONFIG_ERROR
        assert "ReferenceInvalid" in result.output

    def test_invalid_decimals(self, runner):
        result = runner.invoke(app, ["convert", "A4", "-d", "20"])
        assert result.exit_code == EXIT_CONFIG_ERROR
        assert "PrecisionOutOfRange" in result.output

    def test_unknown_input_format(self, runner):
        result = runner.invoke(app, ["convert", "A4", "--from", "solfege"])
        assert result.exit_code == EXIT_CONFIG_ERROR

    def test_strict_cents(self, runner):
        assert runner.invoke(app, ["convert", "A4+60c", "--to", "cents"]).exit_code == 0
        result = runner.invoke(app, ["convert", "A4+60c", "--strict-cents"])
        assert result.exit_code == EXIT_CONVERSION_ERROR


class TestTableCommand:
    """Tests for `pitch-converter table`."""

    def test_octave(self, runner):
        result = runner.invoke(app, ["table", "C4", "C5"])
        assert result.exit_code == 0, result.output
        assert "261.63 Hz" in result.output
        assert "523.25 Hz" in result.output
        assert "mid2C" in result.output
        assert "hiC" in result.output

    def test_mixed_notations_and_flats(self, runner):
        result = runner.invoke(app, ["table", "midi:70", "466.16", "--flats"])
        assert result.exit_code == 0, result.output
        assert "Bb4" in result.output

    def test_invalid_bound(self, runner):
        result = runner.invoke(app, ["table", "C4", "H4"])
        assert result.exit_code == EXIT_CONVERSION_ERROR


class TestInfoCommand:
    """Tests for `pitch-converter info`."""

    def test_measured(self, runner):
        result = runner.invoke(app, ["info", "445"])
        assert result.exit_code == 0, result.output
        assert "Notation: freq" in result.output
        assert "no (measured)" in result.output
        assert "A4+19.5623c" in result.output

    def test_exact_non_standard(self, runner):
        result = runner.invoke(app, ["info", "midi:200"])
        assert result.exit_code == 0, result.output
        assert "Exact: yes" in result.output
        assert "outside the standard 0-127 range" in result.output

    def test_error(self, runner):
        assert runner.invoke(app, ["info", "C###4"]).exit_code == EXIT_CONVERSION_ERROR


class TestLoggingConfig:
    """Tests for configure_logging."""

    def test_single_handler(self):
        logger = configure_logging(False)
        count = len(logger.handlers)
        configure_logging(True)
        assert len(logger.handlers) == count
        assert logger.name == LOGGER_NAME

    def test_levels(self):
        assert configure_logging(True).level == logging.DEBUG
        assert configure_logging(False).level == logging.WARNING
