"""Tests for affirmations and breathing prompts."""

from __future__ import annotations

from neomama import encouragement


class TestAffirmations:
    def test_loaded_from_markdown(self) -> None:
        assert "You are already a wonderful mother." in encouragement._AFFIRMATIONS
        assert not any(a.startswith("#") for a in encouragement._AFFIRMATIONS)

    def test_get_affirmation(self) -> None:
        assert encouragement.get_affirmation() in encouragement._AFFIRMATIONS

    def test_breathing_prompt(self) -> None:
        assert encouragement.get_breathing_prompt()
