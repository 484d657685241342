"""Conversion engine - parse once, convert and format every requested output.

Conversion math follows equal temperament anchored at A4 = MIDI 69:

    frequency = reference * 2 ** (offset / 12)
    offset    = 12 * log2(frequency / reference)

The nearest MIDI number and the cents deviation are both derived from the
same offset, so they never disagree through double rounding.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Union

from ..core.config import PrecisionConfig
from ..core.constants import A4_MIDI, MIDI_MAX, MIDI_MIN
from ..core.errors import ConfigError, ParseError, PitchConverterError
from ..core.pitch import CanonicalPitch, SemitoneOffset
from ..core.tuning import TuningReference, validate_reference
from ..notation.formatter import NotationFormatter
from ..notation.kinds import DEFAULT_OUTPUTS, NotationKind
from ..notation.parser import NotationParser, ParsedPitch
from ..notation.values import (
    AlternativeValue,
    CentsValue,
    FormattedValue,
    FrequencyValue,
    MidiValue,
    NoteValue,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OutputRequest:
    """One requested output notation with optional per-output precision."""

    notation: Union[NotationKind, str]
    precision: Optional[PrecisionConfig] = None

    @property
    def name(self) -> str:
        if isinstance(self.notation, NotationKind):
            return self.notation.value
        return str(self.notation)


@dataclass(frozen=True)
class ConversionRequest:
    """Everything needed for one conversion run.

    Attributes:
        text: Input pitch string
        hint: Optional input notation (freq, midi, note, cents, alt)
        outputs: Requested outputs in order (default: freq, midi, note, cents)
        reference: Tuning reference, or the A4 frequency in Hz
        precision: Precision used for outputs without their own
        strict_cents: Reject cents qualifiers outside [-50, 50]
    """

    text: str
    hint: Union[NotationKind, str, None] = None
    outputs: Sequence[Union[OutputRequest, NotationKind, str]] = DEFAULT_OUTPUTS
    reference: Union[TuningReference, float] = field(default_factory=TuningReference)
    precision: PrecisionConfig = field(default_factory=PrecisionConfig)
    strict_cents: bool = False


@dataclass
class OutputResult:
    """Result for one requested output: text on success, error otherwise."""

    name: str
    value: Optional[FormattedValue] = None
    text: Optional[str] = None
    error: Optional[PitchConverterError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON output."""
        if self.error is not None:
            return {"format": self.name, **self.error.to_dict()}
        result: Dict[str, Any] = {"format": self.name, "text": self.text}
        if isinstance(self.value, MidiValue):
            result["non_standard"] = self.value.non_standard
        return result


@dataclass
class ConversionResult:
    """Outcome of a conversion run.

    When the input itself fails, `error` is set and `outputs` is empty.
    Otherwise each output succeeds or fails on its own.
    """

    text: str
    parsed: Optional[ParsedPitch] = None
    outputs: List[OutputResult] = field(default_factory=list)
    error: Optional[PitchConverterError] = None

    @property
    def ok(self) -> bool:
        return self.error is None and all(output.ok for output in self.outputs)

    @property
    def lines(self) -> List[str]:
        """Formatted text of the successful outputs, in request order."""
        return [output.text for output in self.outputs if output.ok]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON output."""
        result: Dict[str, Any] = {"input": self.text, "ok": self.ok}
        if self.error is not None:
            result["error"] = self.error.to_dict()
            return result
        if self.parsed is not None:
            result["notation"] = self.parsed.notation.value
            result["exact"] = self.parsed.pitch.is_exact
        result["outputs"] = [output.to_dict() for output in self.outputs]
        return result


class ConversionEngine:
    """Convert canonical pitches to each supported notation."""

    def __init__(self, formatter: Optional[NotationFormatter] = None):
        self.formatter = formatter or NotationFormatter()

    def convert(
        self,
        pitch: CanonicalPitch,
        reference: TuningReference,
        target: NotationKind,
    ) -> FormattedValue:
        """
        Convert a pitch to one notation.

        Args:
            pitch: Canonical pitch to convert
            reference: Tuning reference (A4)
            target: Notation to produce

        Returns:
            FormattedValue for the target notation

        Raises:
            ConfigError: If the reference is not positive and finite
        """
        validate_reference(reference.reference_frequency_hz)
        offset = pitch.semitone_offset(reference)
        return self._convert_offset(pitch, offset, reference, target)

    def _convert_offset(
        self,
        pitch: CanonicalPitch,
        offset: SemitoneOffset,
        reference: TuningReference,
        target: NotationKind,
    ) -> FormattedValue:
        if target is NotationKind.FREQ:
            return FrequencyValue(pitch.frequency(reference), exact=offset.is_exact)

        midi = A4_MIDI + offset.nearest_semitone()
        if target is NotationKind.MIDI:
            value = MidiValue(midi, offset)
            if value.non_standard:
                logger.warning(
                    "MIDI number %d is outside the standard range %d-%d",
                    midi, MIDI_MIN, MIDI_MAX,
                )
            return value
        if target is NotationKind.NOTE:
            return NoteValue(midi, offset)
        if target is NotationKind.CENTS:
            return CentsValue(midi, offset.cents_deviation(), offset)
        if target is NotationKind.ALT:
            return AlternativeValue(midi, offset)
        raise ValueError(f"Unsupported notation: {target!r}")

    def run(self, request: ConversionRequest) -> ConversionResult:
        """
        Parse the request's input and produce every requested output.

        Args:
            request: Input text, hint, outputs and configuration

        Returns:
            ConversionResult; errors are reported in it, never raised
        """
        result = ConversionResult(text=request.text)

        try:
            reference = request.reference
            if not isinstance(reference, TuningReference):
                reference = TuningReference(reference)
            validate_reference(reference.reference_frequency_hz)
            parser = NotationParser(reference, strict_cents=request.strict_cents)
            result.parsed = parser.parse_with_notation(request.text, request.hint)
        except (ParseError, ConfigError) as e:
            logger.debug("Input %r rejected: %s", request.text, e)
            result.error = e
            return result

        pitch = result.parsed.pitch
        offset = pitch.semitone_offset(reference)

        for item in request.outputs:
            if not isinstance(item, OutputRequest):
                item = OutputRequest(item)
            output = OutputResult(name=item.name)
            try:
                target = item.notation
                if not isinstance(target, NotationKind):
                    target = NotationKind.from_name(target)
                output.value = self._convert_offset(pitch, offset, reference, target)
                output.text = self.formatter.format(output.value, item.precision or request.precision)
            except ConfigError as e:
                logger.debug("Output %r rejected: %s", item.name, e)
                output.value = None
                output.error = e
            result.outputs.append(output)

        return result


def convert(
    text: str,
    outputs: Sequence[Union[OutputRequest, NotationKind, str]] = DEFAULT_OUTPUTS,
    hint: Union[NotationKind, str, None] = None,
    reference: Union[TuningReference, float] = 440.0,
    precision: Optional[PrecisionConfig] = None,
) -> ConversionResult:
    """Convenience wrapper: convert text to the given outputs with a fresh engine."""
    request = ConversionRequest(
        text=text,
        hint=hint,
        outputs=outputs,
        reference=reference,
        precision=precision or PrecisionConfig(),
    )
    return ConversionEngine().run(request)
