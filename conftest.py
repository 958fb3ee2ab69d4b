import pytest


@pytest.fixture
def basic_script():
    """Two short sentences: no question, no call to action, no step markers."""
    return "This is a basic video. It has no questions or calls to action."


@pytest.fixture
def keywords_payload():
    """Keyword analyzer output with all three tiers populated."""
    return {
        "recommended": {
            "primary": [{"keyword": "gardening tips"}, {"keyword": "garden"}],
            "secondary": [{"keyword": "compost"}, {"keyword": "mulch"}, {"keyword": "soil"}, {"keyword": "seeds"}],
            "longTail": [{"keyword": "gardening tips for beginners"}],
        }
    }


@pytest.fixture
def first_phrase():
    """Deterministic hook selector."""
    return lambda pool: pool[0]
