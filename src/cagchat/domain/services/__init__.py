"""Domain services."""

from cagchat.domain.services.context_normalizer import ContextNormalizer
from cagchat.domain.services.conversation_search import (
    SearchResult,
    find_snippet,
    search_conversations,
)
from cagchat.domain.services.language_detector import LanguageDetector
from cagchat.domain.services.template_store import TemplateStore
from cagchat.domain.services.text_analysis import TextAnalysis
from cagchat.domain.services.title_composer import TitleComposer
from cagchat.domain.services.title_generator import TitleGenerator
from cagchat.domain.services.title_policy import TitleUpdatePolicy
from cagchat.domain.services.topic_matcher import TopicMatcher
from cagchat.domain.services.word_ranker import SignificantWordRanker

__all__ = [
    "ContextNormalizer",
    "LanguageDetector",
    "SearchResult",
    "SignificantWordRanker",
    "TemplateStore",
    "TextAnalysis",
    "TitleComposer",
    "TitleGenerator",
    "TitleUpdatePolicy",
    "TopicMatcher",
    "find_snippet",
    "search_conversations",
]
