"""Conversion of ANSI-colored jj output into plain text plus style spans."""

from rich.text import Text

from jjflow.core.jj.types import ColoredOutput, StyleSpan


def decode_ansi(raw: str, exit_status: int = 0) -> ColoredOutput:
    """Strip ANSI escapes from ``raw`` into structured style spans.

    Args:
        raw: Text as emitted by jj with ``--color=always``
        exit_status: Exit status of the producing process

    Returns:
        ColoredOutput whose span offsets index into ``plain``
    """
    text = Text.from_ansi(raw)
    spans = tuple(
        StyleSpan(start=span.start, end=span.end, style=str(span.style))
        for span in text.spans
        if span.end > span.start
    )
    return ColoredOutput(plain=text.plain, spans=spans, exit_status=exit_status)


def to_rich_text(output: ColoredOutput, end: int | None = None) -> Text:
    """Rebuild a rich Text from decoded output, optionally truncated at ``end``."""
    limit = len(output.plain) if end is None else end
    text = Text(output.plain[:limit])
    for span in output.spans_within(limit):
        text.stylize(span.style, span.start, span.end)
    return text
