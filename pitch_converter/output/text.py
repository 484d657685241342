"""Text rendering of conversion results."""

from typing import List, Tuple

from ..core.errors import ConfigError, ParseError, PitchConverterError
from ..engine.conversion import ConversionResult


def describe_error(error: PitchConverterError) -> str:
    """Human-readable error naming the rejected input and the reason."""
    if isinstance(error, ParseError):
        return f"{error.kind.value} at {error.span!r}: {error.message}"
    if isinstance(error, ConfigError):
        return f"{error.kind.value} ({error.value!r}): {error.message}"
    return str(error)


class TextRenderer:
    """Render a ConversionResult as one line per requested output."""

    def __init__(self, labels: bool = False):
        """
        Initialize TextRenderer.

        Args:
            labels: Prefix each line with its output format, e.g. 'midi: 69'
        """
        self.labels = labels

    def render(self, result: ConversionResult) -> List[Tuple[str, bool]]:
        """
        Render a result.

        Args:
            result: Result from ConversionEngine.run

        Returns:
            List of (line, ok) in request order. A failed input yields a
            single error line.
        """
        if result.error is not None:
            return [(f"error: {describe_error(result.error)}", False)]

        lines = []
        for output in result.outputs:
            if output.ok:
                text = output.text
                if self.labels:
                    text = f"{output.name}: {text}"
                lines.append((text, True))
            else:
                lines.append((f"error: {output.name}: {describe_error(output.error)}", False))
        return lines
