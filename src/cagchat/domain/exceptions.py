"""Domain exceptions."""


class CagChatError(Exception):
    """Base exception for the chat core."""


class TemplateNotFoundError(CagChatError):
    """テンプレートが見つからない場合に発生する例外"""

    def __init__(self, name: str, message: str = "") -> None:
        """初期化

        Args:
            name: 見つからなかったテンプレート名
            message: エラーメッセージ（オプション）
        """
        self.name = name
        super().__init__(message or f"Template '{name}' not found")


class MalformedContextError(CagChatError):
    """The raw context map is not a mapping."""


class InvalidTitleTransitionError(CagChatError):
    """A title state change that the state machine does not allow."""
