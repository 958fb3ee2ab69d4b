"""
optimizer.py — Script analysis and rewrite engine.

Deterministic text heuristics for YouTube scripts. No LLM, no NLP model.

Pipeline (one call per request, nothing shared between calls):
    1. analyze_script        : word/sentence/paragraph counts, keyword density, readability
    2. plan_optimizations    : ordered list of suggested changes, text untouched
    3. rewrite_script        : hook, opening keyword, question and CTA insertion
    4. optimize_script       : re-analyzes the rewrite and assembles the report
"""

import logging
import math
import random
import re
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from typing import Callable, Optional

import phrases

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Errors and records
# ---------------------------------------------------------------------------

class ValidationError(ValueError):
    """Raised when a request is missing required input."""


@dataclass(frozen=True)
class KeywordSet:
    """Caller-ranked keyword tiers for one request."""
    primary: tuple
    secondary: tuple = ()
    long_tail: tuple = ()

    @classmethod
    def from_request(cls, keywords: Optional[dict], concept: str) -> "KeywordSet":
        """
        Build tiers from analyzer output shaped like
        {"recommended": {"primary": [{"keyword": ...}], "secondary": [...], "longTail": [...]}}.

        A missing primary tier falls back to the concept itself.
        """
        recommended = keywords.get("recommended") if isinstance(keywords, dict) else None
        if not isinstance(recommended, dict):
            recommended = {}

        primary = _keyword_list(recommended.get("primary"))
        secondary = _keyword_list(recommended.get("secondary"))
        long_tail = _keyword_list(recommended.get("longTail") or recommended.get("long_tail"))

        return cls(
            primary=primary if primary is not None else (concept,),
            secondary=secondary or (),
            long_tail=long_tail or (),
        )

    def all(self) -> list:
        return [*self.primary, *self.secondary, *self.long_tail]


@dataclass(frozen=True)
class OptimizationChange:
    type: str
    location: str
    suggestion: str
    priority: str


@dataclass(frozen=True)
class OptimizationResult:
    changes: tuple
    engagement_points: tuple


def _keyword_list(entries) -> Optional[tuple]:
    """Pull the keyword strings out of a tier; None when the tier is absent or not a list."""
    if not isinstance(entries, (list, tuple)):
        return None
    return tuple(
        entry["keyword"]
        for entry in entries
        if isinstance(entry, dict) and isinstance(entry.get("keyword"), str) and entry["keyword"].strip()
    )


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

SPEAKING_RATE_WPM = 150

_CTA_WORDS = re.compile(r"subscribe|like|comment|share", re.IGNORECASE)
_CTA_WORDS_STRICT = re.compile(r"subscribe|like|comment", re.IGNORECASE)
_STEP_MARKERS = re.compile(r"step|first|next|then|finally", re.IGNORECASE)
_SENTENCE_BREAK = re.compile(r"(?<=[.!?])\s+")

INTENSITY = {"light": 1, "moderate": 2, "aggressive": 3}


def _round_half_up(value: float) -> int:
    """Round halves toward +inf rather than to even."""
    return math.floor(value + 0.5)


def _words(text: str) -> list:
    return [w for w in re.split(r"\s+", text) if w]


def _sentences(text: str) -> list:
    return [s for s in re.split(r"[.!?]+", text) if s.strip()]


def _paragraphs(text: str) -> list:
    return [p for p in re.split(r"\n\n+", text) if p.strip()]


def _raw_word_count(text: str) -> int:
    """Whitespace split that keeps empty edge tokens, as the planner counts words."""
    return len(re.split(r"\s+", text))


def _count_matches(keyword: str, text: str) -> int:
    """Case-insensitive literal occurrence count."""
    return len(re.findall(re.escape(keyword), text, re.IGNORECASE))


def _contains(text: str, keyword: str) -> bool:
    return keyword.lower() in text.lower()


# ===========================================================================
# TOKENIZER / METRICS
# ===========================================================================

def count_syllables(word: str) -> int:
    """
    Rough syllable count: vowel groups over "aeiouy", minus a silent trailing e.
    A consonant + "le" ending ("simple", "table") keeps its final syllable.
    """
    word = re.sub(r"[^a-z]", "", word.lower())
    if len(word) <= 3:
        return 1

    count = 0
    prev_was_vowel = False
    for char in word:
        is_vowel = char in "aeiouy"
        if is_vowel and not prev_was_vowel:
            count += 1
        prev_was_vowel = is_vowel

    if word.endswith("e") and not (word.endswith("le") and word[-3] not in "aeiouy"):
        count -= 1
    return max(1, count)


def readability_level(score: float) -> str:
    if score >= 80:
        return "very easy"
    if score >= 60:
        return "easy"
    if score >= 40:
        return "moderate"
    if score >= 20:
        return "difficult"
    return "very difficult"


def calculate_readability(script: str) -> dict:
    """
    Simplified Flesch reading ease.

    An empty script scores 0 ("very difficult"). Punctuation-only text, which
    has words but no sentence, is scored as a single sentence.
    """
    words = _words(script)
    if not words:
        return {"score": 0, "level": readability_level(0)}

    sentence_count = max(len(_sentences(script)), 1)
    avg_words_per_sentence = len(words) / sentence_count
    avg_syllables = sum(count_syllables(w) for w in words) / len(words)

    score = 206.835 - (1.015 * avg_words_per_sentence) - (84.6 * avg_syllables)

    return {"score": _round_half_up(score), "level": readability_level(score)}


def analyze_script(script: str, keywords: list) -> dict:
    """
    Compute metrics for a script against a flat keyword list.

    Only keywords that actually occur appear in keyword_occurrences and count
    toward keywords_found. keyword_density is a fixed 2-decimal string.
    """
    words = _words(script)
    sentences = _sentences(script)
    paragraphs = _paragraphs(script)
    word_count = len(words)

    keyword_occurrences = {}
    total_mentions = 0
    for keyword in keywords:
        count = _count_matches(keyword, script)
        if count > 0:
            keyword_occurrences[keyword] = count
            total_mentions += count

    density = total_mentions / word_count * 100 if word_count else 0.0
    avg_sentence_length = (
        _round_half_up(word_count / max(len(sentences), 1)) if word_count else 0
    )
    duration_minutes = math.ceil(word_count / SPEAKING_RATE_WPM)

    return {
        "word_count": word_count,
        "sentence_count": len(sentences),
        "paragraph_count": len(paragraphs),
        "average_sentence_length": avg_sentence_length,
        "estimated_duration_minutes": duration_minutes,
        "estimated_duration": f"{duration_minutes} minutes",
        "keywords_found": len(keyword_occurrences),
        "keyword_occurrences": keyword_occurrences,
        "total_keyword_mentions": total_mentions,
        "keyword_density": f"{density:.2f}",
        "engagement_elements": {
            "has_question": "?" in script,
            "has_call_to_action": bool(_CTA_WORDS.search(script)),
            "has_hook": bool(sentences) and len(sentences[0]) < 100,
            "question_count": script.count("?"),
        },
        "readability_score": calculate_readability(script),
    }


# ===========================================================================
# OPTIMIZATION PLANNER
# ===========================================================================

def planner_keyword_density(script: str, keywords: list) -> float:
    """
    Density as the planner sees it: every keyword's matches summed over a raw
    word count that includes empty edge tokens. Not interchangeable with
    analyze_script's keyword_density; the two differ on scripts with leading
    or trailing whitespace.
    """
    mentions = sum(_count_matches(kw, script) for kw in keywords)
    return mentions / _raw_word_count(script) * 100


def plan_optimizations(script: str, keywords: list, content_style: str, level: str) -> OptimizationResult:
    """Inspect a script and return suggested changes in detection order."""
    changes = []
    engagement_points = []

    intensity = INTENSITY.get(level, 2)

    # Opening keyword
    first_paragraph = script.split("\n\n")[0]
    primary_keyword = keywords[0] if keywords else None

    if primary_keyword and not _contains(first_paragraph, primary_keyword):
        changes.append(OptimizationChange(
            type="keyword_insertion",
            location="opening",
            suggestion=f'Add "{primary_keyword}" to your opening to improve SEO',
            priority="high",
        ))

    # Questions
    if "?" not in script:
        changes.append(OptimizationChange(
            type="engagement",
            location="throughout",
            suggestion="Add questions to increase viewer engagement",
            priority="medium",
        ))
        engagement_points.append({"type": "question", "suggested": True})

    # Call to action
    if not _CTA_WORDS_STRICT.search(script):
        changes.append(OptimizationChange(
            type="cta",
            location="middle and end",
            suggestion="Add calls to action (subscribe, like, comment)",
            priority="high",
        ))

    # Keyword density
    density = planner_keyword_density(script, keywords)
    if density < 1 and intensity >= 2:
        changes.append(OptimizationChange(
            type="keyword_density",
            location="throughout",
            suggestion=f"Keyword density is {density:.2f}%. Aim for 1-2%",
            priority="medium",
        ))

    # Hook length
    first_sentence = re.split(r"[.!?]", script)[0]
    if len(first_sentence) > 150:
        changes.append(OptimizationChange(
            type="hook",
            location="opening",
            suggestion="Shorten your opening hook - aim for under 150 characters",
            priority="high",
        ))

    # Style-specific
    if content_style == "tutorial" and not _STEP_MARKERS.search(script):
        changes.append(OptimizationChange(
            type="structure",
            location="throughout",
            suggestion="Add step markers (First, Next, Then, Finally) for tutorials",
            priority="medium",
        ))

    return OptimizationResult(changes=tuple(changes), engagement_points=tuple(engagement_points))


# ===========================================================================
# REWRITER
# ===========================================================================

def rewrite_script(
    script: str,
    optimizations: OptimizationResult,
    primary_keywords: list,
    content_style: str,
    choose: Callable = random.choice,
) -> str:
    """
    Apply the rule-based rewrites in fixed order, each against the text the
    previous step produced. Returns a new string; the input is untouched.

    `choose` picks the hook phrase from phrases.HOOK_PHRASES.
    """
    logger.debug(f"Rewriting {content_style} script ({len(optimizations.changes)} planned changes)")
    optimized = script
    primary_keyword = primary_keywords[0] if primary_keywords else None

    # 1. Hook
    sentences = _SENTENCE_BREAK.split(script)
    if len(sentences[0]) > 150 and primary_keyword:
        optimized = f"{choose(phrases.HOOK_PHRASES)} {primary_keyword}. " + optimized
        logger.debug("Prepended hook")

    # 2. Primary keyword in the opening paragraph
    paragraphs = optimized.split("\n\n")
    if primary_keyword and paragraphs[0] and not _contains(paragraphs[0], primary_keyword):
        opening = _SENTENCE_BREAK.split(paragraphs[0])
        if len(opening) > 1:
            second = opening[1]
            opening[1] = phrases.KEYWORD_LEAD_IN.format(keyword=primary_keyword) + second[:1].lower() + second[1:]
            paragraphs[0] = " ".join(opening)
            optimized = "\n\n".join(paragraphs)
            logger.debug("Injected primary keyword into opening paragraph")

    # 3. Question at the first period past the midpoint
    if "?" not in optimized:
        insert_at = optimized.find(".", len(optimized) // 2)
        if insert_at != -1:
            question = phrases.QUESTION_BLOCK.format(keyword=primary_keyword or "this")
            optimized = optimized[:insert_at + 1] + question + optimized[insert_at + 1:]
            logger.debug(f"Inserted question after offset {insert_at}")

    # 4. Closing call to action
    if not _CTA_WORDS_STRICT.search(optimized):
        optimized += phrases.CLOSING_CTA
        logger.debug("Appended closing CTA")

    return optimized


# ===========================================================================
# REPORT ASSEMBLER
# ===========================================================================

def build_structure_recommendations(script: str, target_duration: float, content_style: str) -> list:
    """Duration check against the target, then the section outline for the style."""
    estimated_minutes = math.ceil(_raw_word_count(script) / SPEAKING_RATE_WPM)
    recommendations = []

    if estimated_minutes < target_duration * 0.8:
        recommendations.append({
            "section": "overall",
            "issue": f"Script is short ({estimated_minutes} min) for {target_duration:g} min target",
            "suggestion": "Add more detail, examples, or sections to reach target duration",
        })
    elif estimated_minutes > target_duration * 1.2:
        recommendations.append({
            "section": "overall",
            "issue": f"Script is long ({estimated_minutes} min) for {target_duration:g} min target",
            "suggestion": "Trim unnecessary content or split into multiple videos",
        })

    sections = phrases.STRUCTURE_GUIDE.get(content_style, phrases.STRUCTURE_GUIDE["tutorial"])
    recommendations.append({
        "section": "structure",
        "suggestion": f"Recommended structure for {content_style}:",
        "sections": list(sections),
    })

    return recommendations


def build_engagement_suggestions() -> list:
    return [
        {
            "type": "retention",
            "timing": "30 seconds in",
            "suggestion": "Add a pattern interrupt or tease what's coming (\"Stay until the end for...\")",
            "examples": list(phrases.RETENTION_PHRASES[:2]),
        },
        {
            "type": "engagement",
            "timing": "middle of video",
            "suggestion": "Ask a question or request interaction",
            "examples": list(phrases.ENGAGEMENT_PHRASES[:2]),
        },
        {
            "type": "transitions",
            "timing": "between sections",
            "suggestion": "Use clear transition phrases to maintain flow",
            "examples": list(phrases.TRANSITION_PHRASES[:2]),
        },
        {
            "type": "hook",
            "timing": "first 15 seconds",
            "suggestion": "Start with a strong hook that creates curiosity",
            "examples": list(phrases.HOOK_PHRASES[:2]),
        },
    ]


def suggest_keyword_insertions(script: str, primary_keywords: list, secondary_keywords: list) -> list:
    """Primary keywords under 3 mentions, and any of the first 3 secondary keywords never mentioned."""
    suggestions = []

    for keyword in primary_keywords:
        count = _count_matches(keyword, script)
        if count < 3:
            suggestions.append({
                "keyword": keyword,
                "current_count": count,
                "recommended_count": "3-5",
                "locations": ["Opening sentence", "Middle of content", "Conclusion"],
            })

    for keyword in secondary_keywords[:3]:
        count = _count_matches(keyword, script)
        if count < 1:
            suggestions.append({
                "keyword": keyword,
                "current_count": count,
                "recommended_count": "1-2",
                "locations": ["Body content"],
            })

    return suggestions


def script_tips(content_style: str) -> list:
    return [*phrases.COMMON_TIPS, *phrases.STYLE_TIPS.get(content_style, ())]


def build_warnings(analysis: dict) -> list:
    warnings = []

    if float(analysis["keyword_density"]) > 3:
        warnings.append({
            "type": "keyword_stuffing",
            "message": f"Keyword density ({analysis['keyword_density']}%) is too high - may sound unnatural",
        })

    if analysis["average_sentence_length"] > 25:
        warnings.append({
            "type": "readability",
            "message": "Average sentence length is high - consider breaking up long sentences",
        })

    if not analysis["engagement_elements"]["has_call_to_action"]:
        warnings.append({
            "type": "missing_cta",
            "message": "No clear call to action found - add subscribe/like reminders",
        })

    return warnings


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def _validate(script, concept, target_duration) -> None:
    if not isinstance(script, str) or not isinstance(concept, str) or not script.strip() or not concept.strip():
        raise ValidationError("Script and concept are required")
    if isinstance(target_duration, bool) or not isinstance(target_duration, (int, float)) or target_duration <= 0:
        raise ValidationError(f"target_duration must be a positive number of minutes, got: {target_duration!r}")


def optimize_script(
    script: str,
    concept: str,
    keywords: Optional[dict] = None,
    target_duration: float = 10,
    content_style: str = "tutorial",
    optimization_level: str = "moderate",
    choose: Callable = random.choice,
) -> dict:
    """
    Optimize a video script for keyword coverage and engagement.

    Returns the original and rewritten scripts with their metrics, the
    planned changes, and structure/engagement/keyword suggestions.
    Raises ValidationError when script or concept is missing.
    """
    _validate(script, concept, target_duration)
    content_style = content_style or "tutorial"
    optimization_level = optimization_level or "moderate"

    logger.info(f"Optimizing script for: \"{concept}\"")

    keyword_set = KeywordSet.from_request(keywords, concept)
    all_keywords = keyword_set.all()

    original_analysis = analyze_script(script, all_keywords)
    optimizations = plan_optimizations(script, all_keywords, content_style, optimization_level)
    optimized_script = rewrite_script(script, optimizations, list(keyword_set.primary), content_style, choose=choose)
    optimized_analysis = analyze_script(optimized_script, all_keywords)

    logger.info(f"Planned {len(optimizations.changes)} changes, script grew "
                f"{original_analysis['word_count']} -> {optimized_analysis['word_count']} words")

    density_change = float(optimized_analysis["keyword_density"]) - float(original_analysis["keyword_density"])

    return {
        "concept": concept,
        "content_style": content_style,
        "target_duration": target_duration,
        "optimization_level": optimization_level,
        "generated_at": datetime.now(timezone.utc).isoformat(),
        "original": {
            "script": script,
            "analysis": original_analysis,
        },
        "optimized": {
            "script": optimized_script,
            "analysis": optimized_analysis,
        },
        "improvements": {
            "keyword_density_change": f"{round(density_change, 2) + 0.0:.2f}",
            "keywords_added": optimized_analysis["keywords_found"] - original_analysis["keywords_found"],
            "engagement_points_added": len(optimizations.engagement_points),
        },
        "optimizations": [asdict(change) for change in optimizations.changes],
        "structure_recommendations": build_structure_recommendations(script, target_duration, content_style),
        "engagement_suggestions": build_engagement_suggestions(),
        "keyword_insertions": suggest_keyword_insertions(script, list(keyword_set.primary), list(keyword_set.secondary)),
        "tips": script_tips(content_style),
        "warnings": build_warnings(optimized_analysis),
    }
