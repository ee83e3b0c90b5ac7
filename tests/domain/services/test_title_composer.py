"""Tests for TitleComposer."""

import pytest

from cagchat.config import TitleConfig
from cagchat.domain.entities import Message, Role
from cagchat.domain.languages import ENGLISH, SPANISH
from cagchat.domain.services import TextAnalysis, TitleComposer
from cagchat.domain.services.title_composer import (
    capitalize_first,
    fit_length,
    fold_accents,
    join_items,
)

LONG_MESSAGE = (
    "Ayer por la tarde caminamos junto al río con mis primos y luego nos "
    "sentamos bajo un árbol enorme para contar anécdotas divertidas del verano "
    "pasado mientras el sol se escondía lentamente detrás de las montañas lejanas"
)


@pytest.fixture
def composer(analysis: TextAnalysis) -> TitleComposer:
    """Composer with default limits."""
    return TitleComposer(analysis)


def user(content: str) -> Message:
    return Message(role=Role.USER, content=content)


def assistant(content: str) -> Message:
    return Message(role=Role.ASSISTANT, content=content)


class TestHelpers:
    """Helper function tests."""

    def test_capitalize_first(self) -> None:
        """Test that only the first character changes."""
        assert capitalize_first("música y cine") == "Música y cine"
        assert capitalize_first("¿qué?") == "¿qué?"
        assert capitalize_first("") == ""

    def test_fold_accents(self) -> None:
        """Test that diacritics are removed."""
        assert fold_accents("qué cómo pingüino") == "que como pinguino"

    def test_fit_length_short_text(self) -> None:
        """Test that short text is unchanged."""
        assert fit_length("hola", 10) == "hola"

    def test_fit_length_cuts_at_word_boundary(self) -> None:
        """Test cutting at the last space with an ellipsis."""
        assert fit_length("uno dos tres cuatro", 12) == "uno dos..."

    def test_fit_length_single_long_word(self) -> None:
        """Test cutting a text without spaces."""
        assert fit_length("a" * 20, 10) == "aaaaaaa..."

    def test_join_items(self) -> None:
        """Test list joining with a conjunction."""
        assert join_items(["a"], "y") == "a"
        assert join_items(["a", "b"], "y") == "a y b"
        assert join_items(["a", "b", "c"], "and") == "a, b and c"


class TestCompose:
    """compose decision order tests."""

    def test_no_messages(self, composer: TitleComposer) -> None:
        """Test the default title without messages."""
        assert composer.compose([]) == "Nueva conversación"

    def test_no_messages_english(self, composer: TitleComposer) -> None:
        """Test the default title of another language."""
        assert composer.compose([], language="en") == "New conversation"

    def test_no_user_messages(self, composer: TitleComposer) -> None:
        """Test that assistant messages alone give the default title."""
        assert composer.compose([assistant("¡Hola! ¿En qué puedo ayudarte?")]) == (
            "Nueva conversación"
        )

    def test_short_question_verbatim(self, composer: TitleComposer) -> None:
        """Test a short question used as is."""
        title = composer.compose([user("¿Qué es la fotosíntesis?")])

        assert title == "¿Qué es la fotosíntesis?"

    def test_question_wins_over_topics(self, composer: TitleComposer) -> None:
        """Test that questions are checked before topics."""
        title = composer.compose([user("¿Qué opinas de la música clásica?")])

        assert title == "¿Qué opinas de la música clásica?"

    def test_long_question_truncated(self, composer: TitleComposer) -> None:
        """Test a long question cut at a word boundary."""
        question = (
            "¿Cómo puedo configurar un servidor web con balanceo de carga y "
            "certificados para mi empresa pequeña?"
        )

        title = composer.compose([user(question)])

        assert len(title) <= 70
        assert title.endswith("...?")
        assert question.startswith(title[: -len("...?")])

    def test_question_uses_first_user_message(self, composer: TitleComposer) -> None:
        """Test that only the first user message matters."""
        messages = [
            assistant("Hola"),
            user("¿Qué es Docker?"),
            assistant("Docker es..."),
            user("Háblame de música"),
        ]

        assert composer.compose(messages) == "¿Qué es Docker?"

    def test_two_topics(self, composer: TitleComposer) -> None:
        """Test a two-topic title."""
        title = composer.compose([user("Me interesa la programación y la música")])

        assert title == "Programación y música"

    def test_english_topics(self, composer: TitleComposer) -> None:
        """Test a topic title in a detected language."""
        title = composer.compose([user("Tell me about programming and music")])

        assert title == "Programming and music"

    def test_long_message_fallback(self, composer: TitleComposer) -> None:
        """Test that a long plain message is trimmed to a short title."""
        assert len(LONG_MESSAGE) >= 200

        title = composer.compose([user(LONG_MESSAGE)])

        assert len(title) <= 60
        assert title.endswith("...")
        assert LONG_MESSAGE.startswith(title.split(" junto")[0])
        assert title.startswith("Ayer por la tarde caminamos junto")

    def test_message_title_respects_max_title_length(
        self, analysis: TextAnalysis
    ) -> None:
        """Test that a smaller title limit also caps message titles."""
        composer = TitleComposer(analysis, TitleConfig(max_title_length=40))

        title = composer.compose([user(LONG_MESSAGE)])

        assert len(title) <= 40
        assert title.endswith("...")
        assert title.startswith("Ayer por la tarde caminamos")

    def test_short_message_over_max_title_length(self, analysis: TextAnalysis) -> None:
        """Test that a message under 60 chars is still cut to max_title_length."""
        composer = TitleComposer(analysis, TitleConfig(max_title_length=20))
        message = "hola a todos los vecinos del barrio de siempre"

        title = composer.compose([user(message)])

        assert len(title) <= 20
        assert title.endswith("...")

    def test_accepts_plain_dicts(self, composer: TitleComposer) -> None:
        """Test role/content dicts as messages."""
        messages = [
            {"role": "assistant", "content": "Hola, ¿en qué te ayudo?"},
            {"role": "user", "content": "¿Qué es la fotosíntesis?"},
        ]

        assert composer.compose(messages) == "¿Qué es la fotosíntesis?"

    def test_short_message_verbatim(self, composer: TitleComposer) -> None:
        """Test that a short plain message is used as is."""
        assert composer.compose([user("hola a todos")]) == "Hola a todos"

    def test_forced_language(self, composer: TitleComposer) -> None:
        """Test that a forced language overrides detection."""
        assert composer.compose([user("música")], language="es") == (
            "Conversación sobre música"
        )


class TestIsQuestion:
    """is_question tests."""

    @pytest.mark.parametrize(
        "text",
        [
            "¿Dónde queda Lisboa",
            "Como se hace una tortilla",
            "cuál es mejor",
            "por qué llueve",
            "Esto funciona?",
        ],
    )
    def test_spanish_questions(self, composer: TitleComposer, text: str) -> None:
        """Test interrogatives, accent-insensitive, and trailing marks."""
        assert composer.is_question(text, SPANISH) is True

    @pytest.mark.parametrize("text", ["Dime algo", "Cualquier cosa", ""])
    def test_not_questions(self, composer: TitleComposer, text: str) -> None:
        """Test that interrogatives must be whole words."""
        assert composer.is_question(text, SPANISH) is False

    def test_english_question(self, composer: TitleComposer) -> None:
        """Test English interrogatives."""
        assert composer.is_question("how does this work", ENGLISH) is True


class TestFromTopics:
    """from_topics tests."""

    def test_one_topic(self, composer: TitleComposer) -> None:
        """Test the prefixed single-topic form."""
        assert composer.from_topics(["música"], SPANISH) == "Conversación sobre música"

    def test_three_topics(self, composer: TitleComposer) -> None:
        """Test the three-topic form."""
        assert composer.from_topics(["arte", "música", "cine"], SPANISH) == (
            "Arte, música y cine"
        )

    def test_more_topics_keeps_first_three(self, composer: TitleComposer) -> None:
        """Test that only the first three topics are named."""
        assert composer.from_topics(["arte", "música", "cine", "moda"], SPANISH) == (
            "Arte, música y cine"
        )

    def test_english_more_topics_keeps_first_three(
        self, composer: TitleComposer
    ) -> None:
        """Test the English three-topic form with extra topics."""
        assert composer.from_topics(["art", "music", "cinema", "law"], ENGLISH) == (
            "Art, music and cinema"
        )

    def test_respects_max_length(self, analysis: TextAnalysis) -> None:
        """Test that topic titles never exceed the configured length."""
        composer = TitleComposer(analysis, TitleConfig(max_title_length=20))

        title = composer.from_topics(["inteligencia artificial", "ciberseguridad"], SPANISH)

        assert len(title) <= 20
        assert title.endswith("...")


class TestFromEntitiesAndWords:
    """from_entities and from_words tests."""

    def test_entities(self, composer: TitleComposer) -> None:
        """Test a title naming two entities."""
        assert composer.from_entities(["María", "Acme"], SPANISH) == (
            "Conversación sobre María y Acme"
        )

    def test_single_word(self, composer: TitleComposer) -> None:
        """Test the prefixed single-word form."""
        assert composer.from_words(["docker"], SPANISH) == "Conversación sobre docker"

    def test_several_words(self, composer: TitleComposer) -> None:
        """Test comma-joined words."""
        assert composer.from_words(["docker", "kubernetes"], SPANISH) == (
            "Docker, kubernetes"
        )
