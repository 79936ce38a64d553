"""Instruction text sent alongside each audio segment."""

_TRANSCRIPTION_PROMPT = """
TASK: Transcribe this audio segment verbatim into {language}.
CONTEXT: This is part {position} of {total} of a longer recording.

INSTRUCTIONS:
1. Transcribe EXACTLY what is heard. Do not summarize.
2. If a sentence is cut off at the start or end, transcribe the partial words as best as possible.
3. Identify speakers (e.g., **Спикер 1:**, **Спикер 2:**) if possible, but prioritize continuous text flow if context is unclear.
4. Do NOT add "End of part" or "Part {position}" markers in the output. Just the transcript.
5. Formatting: Use Markdown. New line for new speaker.
"""


def build_transcription_prompt(
    position: int, total: int, language: str = "Russian"
) -> str:
    """Builds the instruction for the segment at 1-based ``position``."""
    return _TRANSCRIPTION_PROMPT.format(
        language=language, position=position, total=total
    ).strip()
