"""
Unit tests for prompt normalization and noise rejection.
"""

import pytest
from ccql.utils.text_normalization import (
    DISCARD,
    NOISE_SIGNATURES,
    NoiseMatch,
    is_noise,
    match_noise,
    normalize_prompt,
    with_signatures,
)


class TestNormalizePrompt:
    """Tests for normalize_prompt()."""

    def test_trims_and_lowercases(self):
        """Leading/trailing whitespace is removed and text is lower-cased."""
        assert normalize_prompt("  Continue\n") == "continue"

    def test_keeps_punctuation_and_inner_whitespace(self):
        """Only case and outer whitespace change."""
        assert normalize_prompt("Fix  it, please!") == "fix  it, please!"

    def test_empty_and_blank_are_discarded(self):
        """Empty and whitespace-only input map to the sentinel."""
        assert normalize_prompt("") == DISCARD
        assert normalize_prompt("   \t ") == DISCARD

    @pytest.mark.parametrize("raw", [
        "import foo from 'bar'",
        "// a comment",
        "```code block```",
        "<div>html</div>",
        "[1,2,3]",
        "{\"a\": 1}",
        "/* block comment */",
        "export default App",
        "const x = 1",
        "async function load() {}",
        "interface Props { id: string }",
        "at render (main.js:12:5)",
        "Error in app.ts:40",
        "Button.tsx:10 warning",
        "GET /assets/chunk-ABC123.js 404",
        "window.requestAnimationFrame(step)",
        "installHook.js:1 Warning: something",
    ])
    def test_noise_is_discarded(self, raw):
        """Code fragments, log lines and markup are rejected."""
        assert normalize_prompt(raw) == DISCARD

    def test_noise_check_runs_after_lowercasing(self):
        """Markers match regardless of the original case."""
        assert normalize_prompt("IMPORT Numpy") == DISCARD
        assert normalize_prompt("Call requestAnimationFrame here") == DISCARD

    def test_prefix_markers_only_match_at_start(self):
        """Prefix markers inside prose do not discard the prompt."""
        assert normalize_prompt("look at [this] file") == "look at [this] file"
        assert normalize_prompt("is a < b here") == "is a < b here"
        assert normalize_prompt("see http://example.com") == "see http://example.com"

    def test_prefix_checked_after_trim(self):
        """Leading whitespace does not hide a prefix marker."""
        assert normalize_prompt("   // comment") == DISCARD

    def test_substring_markers_need_trailing_space(self):
        """'import' without a following space is plain prose."""
        assert normalize_prompt("important change") == "important change"
        assert normalize_prompt("the export is broken") == DISCARD


class TestNoiseSignatures:
    """Tests for the noise marker table."""

    def test_table_contents(self):
        """Table holds the substring and prefix markers with their kinds."""
        substrings = {m for m, k in NOISE_SIGNATURES.items() if k == NoiseMatch.SUBSTRING}
        prefixes = {m for m, k in NOISE_SIGNATURES.items() if k == NoiseMatch.PREFIX}

        assert substrings == {
            "import ", "export ", "const ", "function ", "interface ",
            ".js:", ".ts:", ".tsx:", "chunk-", "requestanimationframe", "installhook",
        }
        assert prefixes == {"//", "/*", "```", "[", "{", "<"}

    def test_markers_are_lowercase(self):
        """Markers are compared against lower-cased text."""
        assert all(marker == marker.lower() for marker in NOISE_SIGNATURES)

    def test_match_noise_reports_marker(self):
        """match_noise returns the marker that fired."""
        assert match_noise("import os") == "import "
        assert match_noise("<p>") == "<"
        assert match_noise("continue") is None

    def test_is_noise(self):
        assert is_noise("{}")
        assert not is_noise("fix the tests")

    def test_with_signatures_extends_without_mutating(self):
        """Extra markers apply to the new table only."""
        table = with_signatures({"TODO:": "prefix", "traceback": NoiseMatch.SUBSTRING})

        assert normalize_prompt("todo: clean up", table) == DISCARD
        assert normalize_prompt("Traceback (most recent call last)", table) == DISCARD
        assert normalize_prompt("import os", table) == DISCARD
        assert normalize_prompt("todo: clean up") == "todo: clean up"
        assert "todo:" not in NOISE_SIGNATURES

    def test_custom_table_replaces_defaults(self):
        """A custom table passed explicitly is used instead of the defaults."""
        table = {"!": NoiseMatch.PREFIX}
        assert normalize_prompt("import os", table) == "import os"
        assert normalize_prompt("!reload", table) == DISCARD
