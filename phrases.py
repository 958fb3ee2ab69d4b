"""
phrases.py — Static template tables for the script optimizer.

Everything here is read-only. Pools are tuples and lookup tables are wrapped
in MappingProxyType so no request can alter them for the next one.
"""

from types import MappingProxyType

# ---------------------------------------------------------------------------
# Engagement phrase pools
# ---------------------------------------------------------------------------

HOOK_PHRASES = (
    "In this video, you'll learn",
    "Have you ever wondered",
    "What if I told you",
    "The biggest mistake people make is",
    "Here's something most people don't know about",
)

TRANSITION_PHRASES = (
    "Now let's talk about",
    "Moving on to",
    "Here's where it gets interesting",
    "The next important point is",
    "Let me show you",
)

ENGAGEMENT_PHRASES = (
    "Let me know in the comments",
    "Drop a like if you agree",
    "Subscribe for more",
    "What do you think about",
    "Share this with someone who needs it",
)

RETENTION_PHRASES = (
    "Stay until the end for",
    "I'll reveal the secret at",
    "Keep watching to discover",
    "The best tip is coming up",
    "Don't miss what's next",
)

# ---------------------------------------------------------------------------
# Script structure
# ---------------------------------------------------------------------------

# Unknown styles fall back to the tutorial outline.
STRUCTURE_GUIDE = MappingProxyType({
    "tutorial": ("Introduction", "Prerequisites/Setup", "Step-by-step instructions", "Tips & Tricks", "Conclusion"),
    "review": ("Introduction", "Overview/Unboxing", "Features", "Pros & Cons", "Verdict"),
    "educational": ("Hook", "Context", "Main concepts", "Examples", "Summary"),
    "entertainment": ("Hook", "Setup", "Main content", "Payoff", "Outro"),
    "vlog": ("Intro", "Main activities", "Highlights", "Reflection", "Outro"),
})

# ---------------------------------------------------------------------------
# Tips
# ---------------------------------------------------------------------------

COMMON_TIPS = (
    "Speak naturally - keyword stuffing sounds robotic",
    "Use keywords in questions to sound more natural",
    "Mention your primary keyword in the first 30 seconds for YouTube SEO",
    "Repeat key points for retention",
    'Use "you" language to connect with viewers',
)

STYLE_TIPS = MappingProxyType({
    "tutorial": (
        "Number your steps clearly",
        "Pause after important points",
        "Acknowledge common mistakes",
    ),
    "review": (
        "Be honest about drawbacks",
        "Compare to alternatives",
        "Give a clear recommendation",
    ),
    "educational": (
        "Start with why it matters",
        "Use analogies and examples",
        "Summarize key takeaways",
    ),
})

# ---------------------------------------------------------------------------
# Rewrite templates
# ---------------------------------------------------------------------------

KEYWORD_LEAD_IN = "When it comes to {keyword}, "

QUESTION_BLOCK = "\n\nWhat do you think about {keyword}? Let me know in the comments.\n\n"

CLOSING_CTA = (
    "\n\nIf you found this helpful, don't forget to like this video "
    "and subscribe for more content like this!"
)
