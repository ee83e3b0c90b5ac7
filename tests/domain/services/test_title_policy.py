"""Tests for TitleUpdatePolicy."""

import pytest

from cagchat.config import TitleConfig
from cagchat.domain.entities import Conversation, Message, Role
from cagchat.domain.services import TextAnalysis, TitleUpdatePolicy


@pytest.fixture
def policy(analysis: TextAnalysis) -> TitleUpdatePolicy:
    """Policy with default limits."""
    return TitleUpdatePolicy(analysis)


def make_messages(*contents: str) -> list[Message]:
    roles = [Role.USER, Role.ASSISTANT]
    return [
        Message(role=roles[i % 2], content=content)
        for i, content in enumerate(contents)
    ]


class TestTitleUpdatePolicy:
    """needs_update tests."""

    def test_missing_title(self, policy: TitleUpdatePolicy) -> None:
        """Test that an untitled conversation needs a title."""
        assert policy.needs_update(Conversation(messages=make_messages("Hola"))) is True

    @pytest.mark.parametrize(
        "title", ["Nueva conversación", "Sin título", "Untitled", "New conversation"]
    )
    def test_generic_title(self, policy: TitleUpdatePolicy, title: str) -> None:
        """Test that placeholder titles of any language need an update."""
        assert policy.needs_update(Conversation(title=title)) is True

    def test_edited_title_never_updates(self, policy: TitleUpdatePolicy) -> None:
        """Test that hand-edited titles are never updated automatically."""
        conversation = Conversation(
            title="Nueva conversación",
            title_edited=True,
            title_generated_at=1,
            messages=make_messages(*["mensaje"] * 20),
        )

        assert policy.needs_update(conversation) is False

    def test_untitled_edited_never_updates(self, policy: TitleUpdatePolicy) -> None:
        """Test that title_edited wins even without a title."""
        assert policy.needs_update(Conversation(title_edited=True)) is False

    def test_enough_new_messages(self, policy: TitleUpdatePolicy) -> None:
        """Test that enough messages since generation trigger an update."""
        conversation = Conversation(
            title="Python",
            title_generated_at=2,
            messages=make_messages("a", "b", "c", "d", "e"),
        )

        assert policy.needs_update(conversation) is True

    def test_not_enough_new_messages(self, policy: TitleUpdatePolicy) -> None:
        """Test that a few new messages do not trigger an update."""
        conversation = Conversation(
            title="Python",
            title_generated_at=2,
            messages=make_messages("a", "b", "c", "d"),
        )

        assert policy.needs_update(conversation) is False

    def test_configured_minimum(self, analysis: TextAnalysis) -> None:
        """Test the configurable number of new messages."""
        policy = TitleUpdatePolicy(analysis, TitleConfig(min_update_messages=2))
        conversation = Conversation(
            title="Python",
            title_generated_at=2,
            messages=make_messages("a", "b", "c", "d"),
        )

        assert policy.needs_update(conversation) is True

    def test_never_generated(self, policy: TitleUpdatePolicy) -> None:
        """Test that titles without a generation count are left alone."""
        conversation = Conversation(
            title="Python", messages=make_messages("a", "b", "c", "d", "e", "f")
        )

        assert policy.needs_update(conversation) is False

    def test_topic_drift(self, policy: TitleUpdatePolicy) -> None:
        """Test that a change of topics triggers an update."""
        conversation = Conversation(
            title="Música y cine",
            title_generated_at=4,
            last_topics=["música", "cine"],
            language="es",
            messages=make_messages(
                "Quiero aprender programación", "Claro", "También redes", "Bien"
            ),
        )

        assert policy.needs_update(conversation) is True

    def test_no_topic_drift(self, policy: TitleUpdatePolicy) -> None:
        """Test that overlapping topics keep the title."""
        conversation = Conversation(
            title="Programación",
            title_generated_at=4,
            last_topics=["programación"],
            language="es",
            messages=make_messages(
                "Quiero aprender programación", "Claro", "También redes", "Bien"
            ),
        )

        assert policy.needs_update(conversation) is False
