"""Tests for the conversion engine and batch conversion.

Tests cover:
- Known fixed points (A4, C4, A3)
- Reference override
- Round-trip exactness, monotonicity, reference scaling, cents bounds
- Per-output error isolation and request ordering
- Vectorised batch helpers agreeing with the scalar engine
"""

import logging
import math
from fractions import Fraction

import numpy as np
import pytest
from pathlib import Path

# Add project root to path for imports
import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from pitch_converter.core import (
    CanonicalPitch,
    ConfigError,
    ConfigErrorKind,
    ParseError,
    ParseErrorKind,
    PrecisionConfig,
    Spelling,
    TuningReference,
)
from pitch_converter.engine import (
    ConversionEngine,
    ConversionRequest,
    OutputRequest,
    convert,
    frequencies_to_offsets,
    midi_to_frequencies,
    nearest_midi_and_cents,
    offsets_to_frequencies,
)
from pitch_converter.notation import (
    CentsValue,
    FrequencyValue,
    MidiValue,
    NotationKind,
    NotationParser,
)

ALL_OUTPUTS = ["freq", "midi", "note", "cents", "alt"]


@pytest.fixture
def engine():
    return ConversionEngine()


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


class TestFixedPoints:
    """Known pitches at the default 440 Hz reference."""

    def test_a4(self):
        result = convert("A4", ALL_OUTPUTS)
        assert result.ok
        assert result.lines == ["440.00 Hz", "69", "A4", "A4+0.00c", "hiA"]

    def test_c4(self):
        assert convert("C4", ["freq", "midi"]).lines == ["261.63 Hz", "60"]

    def test_a3(self):
        assert convert("A3", ["freq", "midi"]).lines == ["220.00 Hz", "57"]

    def test_frequency_to_note(self):
        assert convert("440", ["midi", "note", "cents"]).lines == ["69", "A4", "A4+0.00c"]

    def test_detuned_frequency(self):
        assert convert("445", ["note", "cents"]).lines == ["A4", "A4+19.56c"]

    def test_midi_to_note(self):
        assert convert("midi:60", ["note", "freq"]).lines == ["C4", "261.63 Hz"]

    def test_hinted_midi(self):
        assert convert("61", ["note"], hint="midi", precision=PrecisionConfig(spelling=Spelling.FLAT)).lines == ["Db4"]

    def test_alternative_input(self):
        assert convert("mid2C", ["note", "midi"]).lines == ["C4", "60"]

    def test_cents_qualified_input(self):
        assert convert("A4+15c", ["cents", "midi"]).lines == ["A4+15.00c", "69"]

    def test_wide_cents_renormalized(self):
        assert convert("A4+60c", ["cents", "note"]).lines == ["A#4-40.00c", "A#4"]

    def test_half_semitone_prefers_higher_pitch(self):
        assert convert("A4+50c", ["cents", "midi"]).lines == ["A#4-50.00c", "70"]
        assert convert("A4-50c", ["cents", "midi"]).lines == ["A4-50.00c", "69"]

    def test_default_outputs(self):
        assert convert("A4").lines == ["440.00 Hz", "69", "A4", "A4+0.00c"]


class TestReferenceOverride:
    """Exact notations follow the reference; measured frequencies do not."""

    def test_a4_at_432(self):
        result = convert("A4", ["freq", "midi", "note"], reference=432.0)
        assert result.lines == ["432.00 Hz", "69", "A4"]

    def test_exact_frequency_at_432(self, engine):
        pitch = NotationParser(TuningReference(432.0)).parse("A4")
        value = engine.convert(pitch, TuningReference(432.0), NotationKind.FREQ)
        assert value.frequency_hz == 432.0
        assert value.exact

    def test_frequency_input_under_other_reference(self):
        result = convert("440", ["freq", "note", "cents"], reference=432.0)
        assert result.lines == ["440.00 Hz", "A4", "A4+31.77c"]

    def test_reference_object_accepted(self):
        assert convert("A4", ["freq"], reference=TuningReference(415.0)).lines == ["415.00 Hz"]

    @pytest.mark.parametrize("value", [0.0, -440.0, math.inf, math.nan])
    def test_invalid_reference(self, value):
        result = convert("A4", ["freq"], reference=value)
        assert not result.ok
        assert isinstance(result.error, ConfigError)
        assert result.error.kind is ConfigErrorKind.REFERENCE_INVALID
        assert result.outputs == []

    def test_engine_revalidates_reference(self, engine):
        reference = TuningReference()
        object.__setattr__(reference, "reference_frequency_hz", -1.0)
        pitch = CanonicalPitch.from_frequency(440.0)
        with pytest.raises(ConfigError) as exc_info:
            engine.convert(pitch, reference, NotationKind.MIDI)
        assert exc_info.value.kind is ConfigErrorKind.REFERENCE_INVALID


class TestProperties:
    """Sampled checks of the conversion invariants."""

    def test_note_midi_round_trip(self, rng):
        parser = NotationParser()
        for midi in rng.integers(-120, 300, size=200).tolist():
            for spelling in Spelling:
                first = convert(f"midi:{midi}", ["note"], precision=PrecisionConfig(spelling=spelling))
                note_text = first.lines[0]
                second = convert(note_text, ["midi"])
                assert second.lines == [str(midi)]
                # Exact offsets survive any number of hops
                assert parser.parse(note_text).exact_semitone_offset == midi - 69

    def test_repeated_hops_are_lossless(self):
        text = "Ebb2"
        for _ in range(20):
            midi = convert(text, ["midi"]).lines[0]
            text = convert(f"midi:{midi}", ["note"], precision=PrecisionConfig(spelling=Spelling.FLAT)).lines[0]
        assert convert(text, ["midi"]).lines == ["38"]

    def test_frequency_monotonic(self, rng):
        for reference_hz in [415.0, 440.0, 1.0, 12345.6]:
            reference = TuningReference(reference_hz)
            offsets = np.sort(rng.uniform(-300, 300, size=500))
            offsets = offsets[np.concatenate([[True], np.diff(offsets) > 1e-6])]
            frequencies = [reference.frequency_for_offset(o) for o in offsets.tolist()]
            assert all(a < b for a, b in zip(frequencies, frequencies[1:]))

    def test_reference_scaling(self, rng):
        reference = TuningReference(440.0)
        for offset, k in zip(rng.uniform(-60, 60, size=100).tolist(), rng.uniform(0.1, 10, size=100).tolist()):
            scaled = reference.scaled(k)
            assert scaled.frequency_for_offset(offset) == pytest.approx(
                k * reference.frequency_for_offset(offset), rel=1e-12
            )

    def test_cents_bounded_for_frequencies(self, engine, rng):
        reference = TuningReference()
        for frequency in np.exp(rng.uniform(np.log(1.0), np.log(20000.0), size=1000)).tolist():
            pitch = CanonicalPitch.from_frequency(frequency)
            value = engine.convert(pitch, reference, NotationKind.CENTS)
            assert -50.0 <= value.cents < 50.0

    def test_cents_bounded_for_exact_offsets(self, engine, rng):
        reference = TuningReference()
        for numerator in rng.integers(-10000, 10000, size=500).tolist():
            pitch = CanonicalPitch.from_exact_offset(Fraction(numerator, 100), reference)
            value = engine.convert(pitch, reference, NotationKind.CENTS)
            assert -50.0 <= value.cents < 50.0
            assert value.midi + value.cents / 100 == pytest.approx(69 + numerator / 100)

    def test_midi_and_cents_share_one_offset(self, engine):
        reference = TuningReference()
        pitch = CanonicalPitch.from_frequency(445.0)
        midi = engine.convert(pitch, reference, NotationKind.MIDI)
        cents = engine.convert(pitch, reference, NotationKind.CENTS)
        assert midi.number == cents.midi == 69
        assert float(midi.offset) * 100 == pytest.approx(cents.cents)

    def test_accidental_equivalence(self):
        sharp = convert("C#4", ["freq", "midi"])
        flat = convert("Db4", ["freq", "midi"])
        assert sharp.lines == flat.lines
        assert sharp.parsed.pitch == flat.parsed.pitch


class TestConvertValues:
    """Values returned by ConversionEngine.convert."""

    def test_value_types(self, engine):
        reference = TuningReference()
        pitch = CanonicalPitch.from_exact_offset(0, reference)
        assert isinstance(engine.convert(pitch, reference, NotationKind.FREQ), FrequencyValue)
        assert isinstance(engine.convert(pitch, reference, NotationKind.MIDI), MidiValue)
        assert isinstance(engine.convert(pitch, reference, NotationKind.CENTS), CentsValue)

    def test_midi_keeps_exact_offset(self, engine):
        reference = TuningReference()
        pitch = CanonicalPitch.from_exact_offset(Fraction(3, 20), reference)
        value = engine.convert(pitch, reference, NotationKind.MIDI)
        assert value.number == 69
        assert value.offset.is_exact
        assert value.offset.value == Fraction(3, 20)

    def test_non_standard_midi_is_flagged(self, engine, caplog):
        reference = TuningReference()
        pitch = CanonicalPitch.from_exact_offset(131, reference)
        with caplog.at_level(logging.WARNING, logger="pitch_converter"):
            value = engine.convert(pitch, reference, NotationKind.MIDI)
        assert value.number == 200
        assert value.non_standard
        assert "outside the standard range" in caplog.text

    def test_non_standard_midi_still_converts(self):
        result = convert("midi:200", ["midi", "note"])
        assert result.ok
        assert result.lines == ["200", "G#15"]
        assert result.outputs[0].to_dict()["non_standard"] is True


class TestRequestHandling:
    """Ordering and error isolation in ConversionEngine.run."""

    def test_output_order_mirrors_request(self):
        result = convert("A4", ["note", "freq", "midi", "note"])
        assert [o.name for o in result.outputs] == ["note", "freq", "midi", "note"]
        assert result.lines == ["A4", "440.00 Hz", "69", "A4"]

    def test_unknown_output_fails_alone(self):
        result = convert("A4", ["midi", "solfege", "note"])
        assert not result.ok
        assert result.outputs[0].text == "69"
        assert result.outputs[1].error.kind is ConfigErrorKind.UNKNOWN_NOTATION
        assert result.outputs[2].text == "A4"
        assert result.lines == ["69", "A4"]

    def test_per_output_precision(self, engine):
        request = ConversionRequest(
            text="C4",
            outputs=[
                OutputRequest(NotationKind.FREQ, PrecisionConfig(decimal_places=4)),
                OutputRequest("freq", PrecisionConfig(decimal_places=16)),
                OutputRequest("note", PrecisionConfig(spelling=Spelling.FLAT)),
            ],
        )
        result = engine.run(request)
        assert result.outputs[0].text == "261.6256 Hz"
        assert result.outputs[1].error.kind is ConfigErrorKind.PRECISION_OUT_OF_RANGE
        assert result.outputs[2].text == "C4"

    def test_input_error_reported_once(self):
        result = convert("H4", ALL_OUTPUTS)
        assert isinstance(result.error, ParseError)
        assert result.error.kind is ParseErrorKind.INVALID_LETTER
        assert result.error.span == "H"
        assert result.outputs == []
        assert result.lines == []

    def test_negative_frequency(self):
        result = convert("-5.0")
        assert result.error.kind is ParseErrorKind.OUT_OF_DOMAIN

    def test_unknown_hint(self):
        result = convert("A4", hint="solfege")
        assert result.error.kind is ConfigErrorKind.UNKNOWN_NOTATION

    def test_strict_cents(self, engine):
        result = engine.run(ConversionRequest(text="A4+60c", strict_cents=True))
        assert result.error.kind is ParseErrorKind.OUT_OF_DOMAIN

    @pytest.mark.parametrize(
        "text,reference_hz",
        [
            ("5e-324", 440.0),
            ("1e308", 0.001),
            ("1.7976931348623157e308", 440.0),
            ("1e-300", 1e300),
        ],
    )
    def test_float_range_frequencies(self, engine, text, reference_hz):
        result = engine.run(ConversionRequest(text=text, outputs=ALL_OUTPUTS, reference=reference_hz))
        assert result.ok, result.to_dict()
        offset = 12 * (math.log2(float(text)) - math.log2(reference_hz))
        assert result.outputs[1].value.number == 69 + math.floor(offset + 0.5)
        assert -50.0 <= result.outputs[3].value.cents < 50.0

    @pytest.mark.parametrize("text", ["C" + "9" * 5000, "midi:" + "9" * 5000, "A4+1e-99999999c"])
    def test_oversized_literals_reported(self, engine, text):
        result = engine.run(ConversionRequest(text=text))
        assert result.error.kind is ParseErrorKind.OUT_OF_DOMAIN
        assert result.outputs == []

    def test_to_dict(self):
        data = convert("445", ["midi", "bogus"]).to_dict()
        assert data["input"] == "445"
        assert data["ok"] is False
        assert data["notation"] == "freq"
        assert data["exact"] is False
        assert data["outputs"][0] == {"format": "midi", "text": "69", "non_standard": False}
        assert data["outputs"][1]["kind"] == "UnknownNotation"

    def test_to_dict_input_error(self):
        data = convert("C###4").to_dict()
        assert data["error"]["kind"] == "InvalidAccidental"
        assert data["error"]["span"] == "###"
        assert "outputs" not in data


class TestBatch:
    """Vectorised helpers agree with the scalar engine."""

    def test_offsets_to_frequencies(self):
        reference = TuningReference()
        frequencies = offsets_to_frequencies(np.array([0, 12, -12, -9]), reference)
        np.testing.assert_allclose(frequencies, [440.0, 880.0, 220.0, 261.6255653005986])

    def test_midi_to_frequencies(self):
        frequencies = midi_to_frequencies(np.array([69, 60, 57]), TuningReference(432.0))
        np.testing.assert_allclose(frequencies, [432.0, 432.0 * 2 ** (-9 / 12), 216.0])

    def test_frequencies_to_offsets_invalid_is_nan(self):
        offsets = frequencies_to_offsets(np.array([440.0, 0.0, -1.0, np.inf]), TuningReference())
        assert offsets[0] == 0.0
        assert np.isnan(offsets[1:]).all()

    def test_frequencies_to_offsets_float_range(self):
        offsets = frequencies_to_offsets(np.array([5e-324, 1e308]), TuningReference(0.001))
        assert np.isfinite(offsets).all()
        assert offsets[0] < 0 < offsets[1]

    def test_nearest_midi_and_cents(self):
        midi, cents = nearest_midi_and_cents(np.array([440.0, 261.6255653005986, 445.0]), TuningReference())
        np.testing.assert_array_equal(midi, [69, 60, 69])
        np.testing.assert_allclose(cents, [0.0, 0.0, 19.5623], atol=1e-3)

    def test_matches_scalar_engine(self, engine, rng):
        reference = TuningReference(442.0)
        frequencies = np.exp(rng.uniform(np.log(20.0), np.log(15000.0), size=300))
        midi, cents = nearest_midi_and_cents(frequencies, reference)
        assert ((cents >= -50.0) & (cents < 50.0)).all()
        for frequency, m, c in zip(frequencies.tolist(), midi.tolist(), cents.tolist()):
            value = engine.convert(CanonicalPitch.from_frequency(frequency), reference, NotationKind.CENTS)
            assert value.midi == m
            assert value.cents == pytest.approx(c, abs=1e-9)
