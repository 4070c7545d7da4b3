import unittest
from unittest.mock import patch

from services import ai_service
from services.llm_service import LLMGenerationError, LLMNotConfigured


class TestAIService(unittest.TestCase):

    def setUp(self):
        ai_service.clear_cache()

    @patch("services.ai_service.generate_response")
    def test_summary_is_memoized(self, mock_generate):
        mock_generate.return_value = "A tidy summary."
        content = {"title": "Story", "description": "Details"}

        self.assertEqual(ai_service.generate_summary(content), "A tidy summary.")
        self.assertEqual(ai_service.generate_summary(content), "A tidy summary.")
        self.assertEqual(mock_generate.call_count, 1)

    @patch("services.ai_service.generate_response")
    def test_summary_fallbacks(self, mock_generate):
        mock_generate.side_effect = LLMNotConfigured("no key")
        self.assertEqual(ai_service.generate_summary({"title": "A"}), ai_service.SUMMARY_NOT_CONFIGURED)

        mock_generate.side_effect = LLMGenerationError("down")
        self.assertEqual(ai_service.generate_summary({"title": "B"}), ai_service.SUMMARY_UNAVAILABLE)

    @patch("services.ai_service.generate_response")
    def test_topics_are_capped(self, mock_generate):
        mock_generate.return_value = "ai, chips, policy, markets, energy, space, health"
        self.assertEqual(ai_service.extract_topics("T"), ["ai", "chips", "policy", "markets", "energy"])

    @patch("services.ai_service.generate_response")
    def test_topics_failure_is_empty(self, mock_generate):
        mock_generate.side_effect = LLMGenerationError("down")
        self.assertEqual(ai_service.extract_topics("T"), [])

    @patch("services.ai_service.generate_response")
    def test_daily_brief(self, mock_generate):
        self.assertEqual(ai_service.generate_daily_brief([]), ai_service.BRIEF_EMPTY)
        mock_generate.assert_not_called()

        mock_generate.side_effect = LLMGenerationError("down")
        brief = ai_service.generate_daily_brief([{"title": "A", "source": "Wire"}])
        self.assertEqual(brief, ai_service.BRIEF_UNAVAILABLE)

    @patch("services.ai_service.generate_response")
    def test_suggest_categories(self, mock_generate):
        mock_generate.return_value = "science, space , climate"
        self.assertEqual(
            ai_service.suggest_categories({"categories": ["tech"]}, ["Rockets"]),
            ["science", "space", "climate"],
        )

        mock_generate.side_effect = LLMNotConfigured("no key")
        self.assertIsNone(ai_service.suggest_categories(None, ["Other"]))

    @patch("services.ai_service.generate_response")
    def test_translate_fallback(self, mock_generate):
        mock_generate.side_effect = LLMNotConfigured("no key")
        self.assertEqual(ai_service.translate_text("Hello", "es"), "[Translated to es]: Hello...")

    @patch("services.ai_service.generate_response")
    def test_summarize_empty_text(self, mock_generate):
        self.assertEqual(ai_service.summarize_text("  "), ai_service.TEXT_SUMMARY_PLACEHOLDER)
        mock_generate.assert_not_called()


if __name__ == "__main__":
    unittest.main()
