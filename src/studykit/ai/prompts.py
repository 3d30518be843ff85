"""Prompt template for study kit generation."""

from __future__ import annotations

from studykit.core.languages import language_name
from studykit.core.models import ProcessingOptions

STUDY_KIT_PROMPT = """\
Task: Create a bilingual study kit from the media file.
{language_instruction}

CRITICAL INSTRUCTIONS FOR COMPLETENESS:
1. **VERBATIM TRANSCRIPTION**: You MUST transcribe EVERY sentence spoken, from start to \
finish. Do not summarize the subtitles. Do not skip fillers if they contribute to flow.
2. **NO GAPS**: The 'subs' array must cover the ENTIRE duration of the media.
3. **PRIORITY**: If the media is long, prioritize the 'subs' array quality and \
completeness. Reduce the number of flashcards or notes if necessary to fit the \
response limit.

OUTPUT MAPPING (JSON):
- 'subs': Subtitles.
  - i: integer index (1, 2, 3...)
  - s: Start Time (HH:MM:SS)
  - e: End Time (HH:MM:SS)
  - en: Original text (Verbatim)
  - vi: {target_name} translation (Accurate & Natural)

- 'nts': Study Notes ({notes_instruction}).
  - Key concepts and summary of sections.

- 'cards': Flashcards ({cards_instruction}).
  - Important vocabulary found in the media.
"""

NOTES_REQUIRED = "Required, approx 1 note every 2-3 mins"
CARDS_REQUIRED = "Required, max 10 key terms"
EMPTY_ARRAY = "Return empty array"


def language_instruction(options: ProcessingOptions) -> str:
    if options.auto_detect:
        return "Detect language automatically."
    return f"Original language is {language_name(options.source_language).title()}."


def build_prompt(options: ProcessingOptions) -> str:
    """Render the generation prompt for the selected options."""
    return STUDY_KIT_PROMPT.format(
        language_instruction=language_instruction(options),
        target_name=language_name(options.target_language).title(),
        notes_instruction=NOTES_REQUIRED if options.generate_notes else EMPTY_ARRAY,
        cards_instruction=CARDS_REQUIRED if options.generate_flashcards else EMPTY_ARRAY,
    )
