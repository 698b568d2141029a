from dataclasses import dataclass
from typing import Optional, Sequence

FAMILY_PHRASES = {
    "fresh": "crisp and invigorating notes",
    "floral": "soft, romantic florals",
    "woody": "grounding, earthy woods",
    "amber": "warm, resinous depth",
    "gourmand": "comforting, delicious warmth",
    "musky": "subtle, skin-like sensuality",
}
DEFAULT_FAMILY_PHRASE = "beautifully balanced notes"

OCCASION_PHRASES = {
    "work": "professional yet memorable",
    "date": "captivating and intimate",
    "casual": "effortlessly chic",
    "event": "statement-making",
    "home": "comforting and personal",
}
DEFAULT_OCCASION_PHRASE = "perfect for the moment"

MOOD_PHRASES = {
    "confident": "projects assured presence",
    "soft": "wraps you in gentle warmth",
    "playful": "sparks joy and spontaneity",
    "mysterious": "leaves an intriguing trail",
}
DEFAULT_MOOD_PHRASE = "matches your energy beautifully"

WEATHER_CLAUSES = {
    "hot": ", and performs wonderfully in the heat",
    "warm": ", enhanced by the warm weather",
    "mild": ", perfect for today's comfortable weather",
    "cool": ", adding warmth to the cool air",
    "cold": ", providing cozy comfort against the cold",
}

AFFIRMATIONS = {
    "confident": "You carry your own warmth today.",
    "soft": "Your gentleness is your strength.",
    "playful": "Joy radiates from you effortlessly.",
    "mysterious": "Let them wonder what your secret is.",
}
DEFAULT_AFFIRMATION = "You are exactly where you need to be."

MOOD_AURA_WORDS = {
    "confident": ["Grounded", "Bold", "Assured"],
    "soft": ["Gentle", "Approachable", "Serene"],
    "playful": ["Spirited", "Light", "Joyful"],
    "mysterious": ["Intriguing", "Subtle", "Deep"],
}
DEFAULT_AURA_WORDS = ["Balanced", "Present", "Authentic"]

# longer pools used when blending with a perfume's own aura words
_MOOD_AURA_POOL = {
    "confident": ["Grounded", "Bold", "Assured", "Present", "Centered"],
    "soft": ["Gentle", "Approachable", "Serene", "Calm", "Tender"],
    "playful": ["Spirited", "Light", "Joyful", "Free", "Radiant"],
    "mysterious": ["Intriguing", "Subtle", "Deep", "Enigmatic", "Alluring"],
}


@dataclass(frozen=True)
class EditorialCopy:
    explanation: str
    affirmation: str


def affirmation_for(mood: str) -> str:
    return AFFIRMATIONS.get(mood, DEFAULT_AFFIRMATION)


def mood_aura_words(mood: str) -> list[str]:
    return list(MOOD_AURA_WORDS.get(mood, DEFAULT_AURA_WORDS))


def aura_words(perfume_aura_words: Sequence[str], mood: str) -> list[str]:
    """Up to two of the perfume's own words, topped up from the mood pool."""
    pool = _MOOD_AURA_POOL.get(mood, _MOOD_AURA_POOL["confident"])
    combined: list[str] = []
    for w in list(perfume_aura_words)[:2] + pool:
        if w not in combined:
            combined.append(w)
    return combined[:3]


def compose(
    name: str,
    scent_family: str,
    mood: str,
    occasion: str,
    weather_bucket: Optional[str] = None,
) -> EditorialCopy:
    family_phrase = FAMILY_PHRASES.get(scent_family, DEFAULT_FAMILY_PHRASE)
    occasion_phrase = OCCASION_PHRASES.get((occasion or "").lower(), DEFAULT_OCCASION_PHRASE)
    mood_phrase = MOOD_PHRASES.get(mood, DEFAULT_MOOD_PHRASE)

    explanation = f"{name}'s {family_phrase} feel {occasion_phrase} today. This scent {mood_phrase}"
    if weather_bucket:
        explanation += WEATHER_CLAUSES.get(weather_bucket, "")
    explanation += "."
    return EditorialCopy(explanation=explanation, affirmation=affirmation_for(mood))
