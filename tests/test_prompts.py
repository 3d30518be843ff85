"""Tests for the study kit prompt."""

from studykit.ai.prompts import (
    CARDS_REQUIRED,
    EMPTY_ARRAY,
    NOTES_REQUIRED,
    build_prompt,
    language_instruction,
)
from studykit.core.models import ProcessingOptions


class TestLanguageInstruction:
    def test_auto_detect(self):
        assert language_instruction(ProcessingOptions()) == "Detect language automatically."

    def test_explicit_source(self):
        options = ProcessingOptions(source_language="ja")
        assert language_instruction(options) == "Original language is Japanese."


class TestBuildPrompt:
    def test_all_extras_requested(self):
        prompt = build_prompt(ProcessingOptions())
        assert NOTES_REQUIRED in prompt
        assert CARDS_REQUIRED in prompt
        assert EMPTY_ARRAY not in prompt

    def test_notes_disabled(self):
        prompt = build_prompt(ProcessingOptions(generate_notes=False))
        assert f"Study Notes ({EMPTY_ARRAY})" in prompt
        assert CARDS_REQUIRED in prompt

    def test_flashcards_disabled(self):
        prompt = build_prompt(ProcessingOptions(generate_flashcards=False))
        assert f"Flashcards ({EMPTY_ARRAY})" in prompt
        assert NOTES_REQUIRED in prompt

    def test_target_language_named(self):
        prompt = build_prompt(ProcessingOptions(target_language="fr"))
        assert "vi: French translation" in prompt

    def test_default_target_is_vietnamese(self):
        assert "vi: Vietnamese translation" in build_prompt(ProcessingOptions())

    def test_completeness_rules_present(self):
        prompt = build_prompt(ProcessingOptions())
        assert "VERBATIM TRANSCRIPTION" in prompt
        assert "NO GAPS" in prompt
        assert "PRIORITY" in prompt

    def test_compact_keys_described(self):
        prompt = build_prompt(ProcessingOptions())
        for key in ("'subs'", "'nts'", "'cards'", "i:", "s:", "e:", "en:"):
            assert key in prompt
