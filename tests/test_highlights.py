import sys
import unittest
from pathlib import Path
from unittest.mock import AsyncMock, patch

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from catresume.services.highlights import (  # noqa: E402
    PLACEHOLDER_HIGHLIGHT,
    coerce_highlights,
    extract_highlights_from_text,
    extract_relevant_keywords,
    get_resume_highlights,
    parse_json_items,
)
from catresume.services.llm import LLMError  # noqa: E402


class CoerceHighlightsTests(unittest.TestCase):
    def assertFiveNonEmpty(self, items):
        self.assertEqual(len(items), 5)
        for item in items:
            self.assertIsInstance(item, str)
            self.assertTrue(item.strip())

    def test_plain_json_array_is_used_as_is(self):
        raw = '["10 years Python", "MSc CS", "Led 15 engineers", "AWS certified", "Grew revenue 30%"]'
        self.assertEqual(
            coerce_highlights(raw),
            ["10 years Python", "MSc CS", "Led 15 engineers", "AWS certified", "Grew revenue 30%"],
        )

    def test_long_array_keeps_first_five_in_order(self):
        raw = '["a1", "a2", "a3", "a4", "a5", "a6", "a7"]'
        self.assertEqual(coerce_highlights(raw), ["a1", "a2", "a3", "a4", "a5"])

    def test_short_array_is_padded_with_placeholder(self):
        self.assertEqual(
            coerce_highlights('["Python", "SQL"]'),
            ["Python", "SQL", PLACEHOLDER_HIGHLIGHT, PLACEHOLDER_HIGHLIGHT, PLACEHOLDER_HIGHLIGHT],
        )

    def test_highlights_property_wins_inside_object(self):
        raw = '{"notes": ["ignored"], "highlights": ["h1", "h2", "h3", "h4", "h5"]}'
        self.assertEqual(coerce_highlights(raw), ["h1", "h2", "h3", "h4", "h5"])

    def test_array_valued_properties_are_flattened(self):
        raw = '{"skills": ["Python", "Go"], "experience": ["8 years backend", "Team lead"], "education": ["MSc"]}'
        self.assertEqual(coerce_highlights(raw), ["Python", "Go", "8 years backend", "Team lead", "MSc"])

    def test_numeric_keys_are_sorted_numerically(self):
        raw = '{"10": "tenth", "2": "second", "1": "first", "3": "third", "4": "fourth"}'
        self.assertEqual(coerce_highlights(raw), ["first", "second", "third", "fourth", "tenth"])

    def test_phrase_keys_are_used_as_highlights(self):
        raw = (
            '{"Led cloud migration": true, "Built data platform": true, "Mentored junior devs": true, '
            '"Shipped mobile app": true, "Won hackathon twice": true}'
        )
        self.assertEqual(
            coerce_highlights(raw),
            [
                "Led cloud migration",
                "Built data platform",
                "Mentored junior devs",
                "Shipped mobile app",
                "Won hackathon twice",
            ],
        )

    def test_single_word_keys_fall_back_to_values(self):
        raw = '{"skill": "Python", "role": "Engineer", "school": "MIT", "award": "Dean list", "years": "8"}'
        self.assertEqual(coerce_highlights(raw), ["Python", "Engineer", "MIT", "Dean list", "8"])

    def test_array_embedded_in_prose_is_recovered(self):
        raw = 'Sure! Here are the highlights:\n```json\n["one", "two", "three", "four", "five"]\n```'
        self.assertEqual(coerce_highlights(raw), ["one", "two", "three", "four", "five"])

    def test_array_shape_beats_numbered_list_heuristic(self):
        raw = '1. numbered one\n2. numbered two\n3. numbered three\n["array one", "array two"]'
        self.assertEqual(coerce_highlights(raw)[:2], ["array one", "array two"])

    def test_numbered_list_fallback(self):
        raw = "Here are the top 5:\n1. Python expert\n2. Led a team\n3. MSc graduate\n4. AWS certified\n5. Public speaker"
        self.assertEqual(
            coerce_highlights(raw),
            ["Python expert", "Led a team", "MSc graduate", "AWS certified", "Public speaker"],
        )

    def test_bullet_list_fallback(self):
        raw = "• Python expert\n• Led a team\n• MSc graduate"
        self.assertEqual(
            coerce_highlights(raw),
            ["Python expert", "Led a team", "MSc graduate", PLACEHOLDER_HIGHLIGHT, PLACEHOLDER_HIGHLIGHT],
        )

    def test_plain_lines_skip_preamble_and_short_lines(self):
        raw = (
            "Here is what stands out about this person\n"
            "short\n"
            "Eight years of backend development\n"
            "Built a payments platform from scratch\n"
            "Speaks at regional Python conferences\n"
        )
        self.assertEqual(
            coerce_highlights(raw)[:3],
            [
                "Eight years of backend development",
                "Built a payments platform from scratch",
                "Speaks at regional Python conferences",
            ],
        )

    def test_unstructured_text_is_sliced_into_word_chunks(self):
        raw = "alpha beta gamma delta epsilon zeta eta theta iota kappa lambda"
        self.assertEqual(
            coerce_highlights(raw),
            [
                "alpha beta gamma delta epsilon...",
                "zeta eta theta iota kappa...",
                "lambda...",
                PLACEHOLDER_HIGHLIGHT,
                PLACEHOLDER_HIGHLIGHT,
            ],
        )

    def test_no_idea_returns_padded_chunks(self):
        self.assertEqual(
            coerce_highlights("no idea"),
            ["no idea...", PLACEHOLDER_HIGHLIGHT, PLACEHOLDER_HIGHLIGHT, PLACEHOLDER_HIGHLIGHT, PLACEHOLDER_HIGHLIGHT],
        )

    def test_always_five_non_empty_strings(self):
        samples = [
            None,
            "",
            "   ",
            "[]",
            "{}",
            '"just a string"',
            "42",
            '[null, "", "  ", 7, {"text": "nested"}]',
            '{"highlights": "not a list"}',
            "[broken json",
            "\n\n\n",
        ]
        for raw in samples:
            with self.subTest(raw=raw):
                self.assertFiveNonEmpty(coerce_highlights(raw))

    def test_non_string_items_are_stringified(self):
        items = coerce_highlights('[7, {"text": "nested"}, null, "ok"]')
        self.assertEqual(items[:3], ["7", "nested", "ok"])

    def test_nested_arrays_are_flattened_and_booleans_skipped(self):
        self.assertEqual(
            coerce_highlights('[["a", "b"], ["c"], true, false]'),
            ["a", "b", "c", PLACEHOLDER_HIGHLIGHT, PLACEHOLDER_HIGHLIGHT],
        )

    def test_parse_json_items_returns_none_for_prose(self):
        self.assertIsNone(parse_json_items("nothing to see here"))

    def test_extract_from_text_requires_three_numbered_items(self):
        chunks = extract_highlights_from_text("1. only one numbered item")
        self.assertTrue(chunks[0].endswith("..."))


class HighlightStageTests(unittest.IsolatedAsyncioTestCase):
    async def test_highlights_use_llm_output(self):
        reply = '["Python", "SQL", "AWS", "Docker", "Kubernetes"]'
        with patch("catresume.services.highlights.text_completion", AsyncMock(return_value=reply)):
            result = await get_resume_highlights("resume text")
        self.assertEqual(result, ["Python", "SQL", "AWS", "Docker", "Kubernetes"])

    async def test_highlights_fall_back_to_defaults_on_llm_error(self):
        failing = AsyncMock(side_effect=LLMError("boom", code="llm_exception"))
        with patch("catresume.services.highlights.text_completion", failing):
            result = await get_resume_highlights("resume text", defaults=("A", "B", "C", "D", "E"))
        self.assertEqual(result, ["A", "B", "C", "D", "E"])

    async def test_keywords_prompt_includes_job_description(self):
        completion = AsyncMock(return_value='["Python", "REST", "SQL", "AWS", "CI/CD"]')
        with patch("catresume.services.highlights.text_completion", completion):
            result = await extract_relevant_keywords("resume text", "Needs Rust and Kafka")
        self.assertEqual(result, ["Python", "REST", "SQL", "AWS", "CI/CD"])
        self.assertIn("Needs Rust and Kafka", completion.await_args.kwargs["user_prompt"])

    async def test_keywords_fall_back_to_defaults(self):
        with patch("catresume.services.highlights.text_completion", AsyncMock(side_effect=RuntimeError("down"))):
            result = await extract_relevant_keywords("resume text", "jd")
        self.assertEqual(
            result,
            ["Key Experience", "Technical Skills", "Education", "Achievements", "Core Competencies"],
        )


if __name__ == "__main__":
    unittest.main()
