"""
Tests for script metrics: counts, keyword density, syllables, readability.
"""
import pytest

from optimizer import analyze_script, calculate_readability, count_syllables, readability_level


class TestCounts:

    def test_words_sentences_paragraphs(self):
        metrics = analyze_script("One. Two!\n\nThree?", [])

        assert metrics["word_count"] == 3
        assert metrics["sentence_count"] == 3
        assert metrics["paragraph_count"] == 2

    def test_blank_line_runs_count_as_one_break(self):
        metrics = analyze_script("First part.\n\n\n\nSecond part.\n\n", [])

        assert metrics["paragraph_count"] == 2

    def test_average_sentence_length_rounds_half_up(self):
        metrics = analyze_script("One two. Three four five.", [])

        assert metrics["average_sentence_length"] == 3

    def test_duration_rounds_up_at_150_wpm(self):
        metrics = analyze_script(" ".join(["word"] * 151), [])

        assert metrics["estimated_duration_minutes"] == 2
        assert metrics["estimated_duration"] == "2 minutes"


class TestKeywords:

    def test_density_of_all_keyword_script_is_100(self):
        metrics = analyze_script("x x x x", ["x"])

        assert metrics["word_count"] == 4
        assert metrics["total_keyword_mentions"] == 4
        assert metrics["keyword_density"] == "100.00"

    def test_unmatched_keywords_are_left_out(self):
        metrics = analyze_script("Compost feeds the soil.", ["compost", "mulch", "SOIL"])

        assert metrics["keyword_occurrences"] == {"compost": 1, "SOIL": 1}
        assert metrics["keywords_found"] == 2
        assert metrics["total_keyword_mentions"] == 2
        assert metrics["keyword_density"] == "50.00"

    def test_regex_metacharacters_match_literally(self):
        metrics = analyze_script("I write c++ and C++ daily. Also cxx.", ["c++", "c.x"])

        assert metrics["keyword_occurrences"] == {"c++": 2}

    def test_metrics_are_repeatable(self):
        script = "Gardening tips for everyone. Grow more with less effort!"
        keywords = ["gardening tips", "grow"]

        assert analyze_script(script, keywords) == analyze_script(script, keywords)


class TestEngagementElements:

    def test_question_and_share_detected(self):
        elements = analyze_script("Please share this. Why? How?", [])["engagement_elements"]

        assert elements["has_question"] is True
        assert elements["has_call_to_action"] is True
        assert elements["has_hook"] is True
        assert elements["question_count"] == 2

    def test_long_first_sentence_is_not_a_hook(self):
        elements = analyze_script("a" * 100 + ". Short.", [])["engagement_elements"]

        assert elements["has_hook"] is False

    def test_plain_statement_has_no_engagement(self):
        elements = analyze_script("We plant seeds in spring.", [])["engagement_elements"]

        assert elements["has_question"] is False
        assert elements["has_call_to_action"] is False
        assert elements["question_count"] == 0


class TestSyllables:

    @pytest.mark.parametrize("word,expected", [
        ("cat", 1),
        ("banana", 3),
        ("simple", 2),
        ("table", 2),
        ("make", 1),
        ("Hello!", 2),
        ("rhythm", 1),
        ("...", 1),
    ])
    def test_count_syllables(self, word, expected):
        assert count_syllables(word) == expected


class TestReadability:

    def test_level_boundaries_are_inclusive(self):
        assert readability_level(80) == "very easy"
        assert readability_level(79) == "easy"
        assert readability_level(60) == "easy"
        assert readability_level(40) == "moderate"
        assert readability_level(20) == "difficult"
        assert readability_level(19.99) == "very difficult"

    def test_short_words_score_very_easy(self):
        # 206.835 - 1.015 * 3 - 84.6 * 1 = 119.19
        assert calculate_readability("The cat sat.") == {"score": 119, "level": "very easy"}

    def test_readability_is_part_of_metrics(self):
        metrics = analyze_script("The cat sat.", [])

        assert metrics["readability_score"] == calculate_readability("The cat sat.")


class TestDegenerateScripts:

    def test_empty_script_yields_zeroes(self):
        metrics = analyze_script("", ["x"])

        assert metrics["word_count"] == 0
        assert metrics["sentence_count"] == 0
        assert metrics["average_sentence_length"] == 0
        assert metrics["keyword_density"] == "0.00"
        assert metrics["estimated_duration"] == "0 minutes"
        assert metrics["engagement_elements"]["has_hook"] is False
        assert metrics["readability_score"] == {"score": 0, "level": "very difficult"}

    def test_punctuation_only_script_is_one_sentence(self):
        metrics = analyze_script("...", [])

        assert metrics["word_count"] == 1
        assert metrics["sentence_count"] == 0
        assert metrics["average_sentence_length"] == 1
        # 206.835 - 1.015 * 1 - 84.6 * 1 = 121.22
        assert metrics["readability_score"] == {"score": 121, "level": "very easy"}
