"""TemplateRepository Protocol."""

from typing import Protocol

from cagchat.domain.entities.template import Template


class TemplateRepository(Protocol):
    """プロンプトテンプレートのリポジトリ"""

    def find_by_name(self, name: str) -> Template | None:
        """名前でテンプレートを検索

        Args:
            name: テンプレート名

        Returns:
            見つかったテンプレート、または None
        """
        ...

    def find_all(self) -> list[Template]:
        """読み込める全テンプレートを取得

        Returns:
            テンプレートのリスト（名前順）
        """
        ...

    def save(self, name: str, content: str) -> bool:
        """テンプレートを保存（upsert）

        Args:
            name: テンプレート名（保存時にサニタイズされる）
            content: テンプレート本文

        Returns:
            保存できた場合 True
        """
        ...
