"""English language profile."""

import re
from types import MappingProxyType

from cagchat.domain.languages.profile import LanguageProfile, freeze_corpus

_SUFFIXES = ("s", "es", "ed", "ing", "ly", "er", "est")

# consonant-vowel-consonant ending doubles its last letter before -ed/-ing
_CVC = re.compile(r"[bcdfghjklmnpqrstvwxz][aeiou][bcdfghjklmnpqrstvwxz]$")


def derive_forms(word: str) -> list[str]:
    """Plural, tense, adverb and comparison forms of an English word."""
    forms = [word + suffix for suffix in _SUFFIXES]
    forms.append(re.sub(r"y$", "ies", word))
    if _CVC.search(word):
        last = word[-1]
        forms.extend([word + last + "ed", word + last + "ing"])
    return forms


TOPIC_CORPUS = freeze_corpus(
    {
        "technology": [
            "technology", "programming", "artificial intelligence", "data",
            "web", "software", "hardware", "network", "internet", "app",
            "application", "mobile", "computer", "robot", "automation", "code",
            "algorithm", "computing", "cybersecurity", "cloud", "server",
            "device", "blockchain",
        ],
        "science": [
            "science", "mathematics", "physics", "chemistry", "biology",
            "astronomy", "laboratory", "experiment", "theory", "research",
            "molecule", "atom", "cell", "genetics", "evolution",
        ],
        "health": [
            "medicine", "health", "disease", "treatment", "diagnosis",
            "symptom", "therapy", "anatomy", "physiology", "nutrition",
            "patient", "hospital", "doctor", "pharmacy", "surgery",
            "psychology", "psychiatry",
        ],
        "humanities": [
            "history", "geography", "politics", "economy", "finance", "art",
            "music", "literature", "cinema", "education", "philosophy",
            "society", "culture", "religion", "language", "anthropology",
            "archaeology", "sociology", "linguistics", "grammar",
        ],
        "lifestyle": [
            "sport", "travel", "cooking", "gastronomy", "fashion", "decoration",
            "gardening", "pets", "animals", "nature", "environment", "tourism",
            "recipe", "home", "exercise", "diet", "lifestyle", "wellness",
            "beauty", "cosmetics",
        ],
        "business": [
            "legal", "law", "business", "entrepreneurship", "marketing",
            "company", "corporation", "startup", "management", "administration",
            "sales", "commerce", "import", "export", "accounting", "investment",
            "market", "advertising", "human resources",
        ],
    }
)

DOCUMENT_FREQUENCY = MappingProxyType(
    {
        # very common
        "information": 850, "time": 830, "person": 780, "problem": 750,
        "work": 730, "thing": 700, "part": 680, "life": 650, "way": 620,
        "example": 580, "case": 560, "system": 550, "process": 540,
        # common, topic independent
        "important": 500, "different": 480, "good": 470, "general": 450,
        "large": 440, "main": 420, "necessary": 400, "possible": 380,
        "small": 360, "easy": 340, "difficult": 320, "simple": 300,
        "last": 280, "new": 270, "old": 260,
        # less common, topic specific
        "technology": 250, "program": 240, "data": 230, "development": 220,
        "internet": 210, "science": 200, "art": 190, "politics": 180,
        "economy": 170, "history": 160, "medicine": 150, "education": 140,
        "computer": 130, "application": 120, "network": 110,
        # specialized
        "algorithm": 90, "intelligence": 85, "artificial": 80, "robotics": 75,
        "blockchain": 70, "cybersecurity": 65, "neurology": 60, "quantum": 55,
        "nanotechnology": 50, "genomics": 45,
    }
)

ENGLISH = LanguageProfile(
    code="en",
    name="English",
    common_words=frozenset(
        {
            "the", "a", "an", "and", "or", "but", "is", "are", "was", "were",
            "be", "have", "had", "do", "does", "did", "will", "would",
            "should", "can", "could", "may", "might", "must", "to", "in", "on",
            "at", "by", "for", "with", "about", "against", "between", "into",
            "through", "during", "before", "after", "above", "below", "from",
            "up", "down",
        }
    ),
    interrogatives=(
        "what", "which", "who", "how", "where", "when", "why", "how much",
        "how many",
    ),
    default_title="New conversation",
    generic_titles=("New conversation", "Untitled"),
    topic_prefix="Conversation about",
    other_topics_text="and other topics",
    conjunction="and",
    default_system_prompt=(
        "You are a friendly, helpful assistant who answers clearly and in an "
        "organized way."
    ),
    markers=(
        "the", "of", "and", "to", "in", "is", "it", "you", "that", "was",
        "for", "on", "are", "with", "what", "how",
    ),
    derive_forms=derive_forms,
    topic_corpus=TOPIC_CORPUS,
    document_frequency=DOCUMENT_FREQUENCY,
    technical_suffixes=("tion", "ment", "ology", "istics", "nomy"),
    common_prefixes=("over", "sub", "re", "pre", "con", "dis"),
)
