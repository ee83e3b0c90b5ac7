"""設定データクラス"""

from dataclasses import dataclass, field


@dataclass
class LLMConfig:
    """LLM設定（LiteLLMのcompletionに渡すdict）"""

    model: str
    temperature: float = 0.7
    max_tokens: int = 1000


@dataclass
class PersonaConfig:
    """ペルソナ設定"""

    name: str
    system_prompt: str


@dataclass
class LanguageConfig:
    """言語設定

    Attributes:
        default: 既定の言語コード（未知の言語はこの言語にフォールバック）
    """

    default: str = "es"


@dataclass
class TemplateConfig:
    """プロンプトテンプレート設定

    Attributes:
        directory: テンプレートJSONを保存するディレクトリ
        seed_defaults: ディレクトリが存在しない場合に既定テンプレートを作成する
    """

    directory: str = "./data/templates"
    seed_defaults: bool = True


@dataclass
class ContextLimits:
    """コンテキスト正規化の閾値と上限

    Attributes:
        entity_confidence: エンティティの最小 confidence
        max_entities: エンティティの最大数（グローバル記憶を含む）
        topic_confidence: ローカルトピックの最小 confidence
        max_local_topics: ローカルトピックの最大数
        max_global_topics: グローバル記憶から追加するトピックの最大数
        max_topics: 結合後のトピックの最大数
        short_term_relevance: 短期記憶の最小 relevance
        max_short_term: 短期記憶の最大数
        long_term_relevance: 長期記憶の最小 relevance
        max_long_term: 長期記憶の最大数
        max_document_items: ドキュメントごとのキーコンセプト・エンティティ最大数
        max_history_messages: プロンプトに含める履歴メッセージの最大数
        memory_preview_length: 記憶プレビューの最大文字数
        max_memory_entities: 記憶1件あたりに表示するエンティティの最大数
    """

    entity_confidence: float = 0.6
    max_entities: int = 8
    topic_confidence: float = 0.7
    max_local_topics: int = 5
    max_global_topics: int = 3
    max_topics: int = 5
    short_term_relevance: float = 0.7
    max_short_term: int = 3
    long_term_relevance: float = 0.8
    max_long_term: int = 2
    max_document_items: int = 5
    max_history_messages: int = 10
    memory_preview_length: int = 100
    max_memory_entities: int = 3


@dataclass
class TitleConfig:
    """会話タイトル設定

    Attributes:
        max_title_length: タイトルの最大文字数（質問タイトルを含む）
        max_message_title_length: メッセージから抽出するタイトルの最大文字数
        max_message_title_words: メッセージから抽出するタイトルの最大単語数
        max_question_words: 質問タイトルの最大単語数
        min_update_messages: 自動更新までに必要な新規メッセージ数
        max_significant_words: TF-IDF で抽出する単語の最大数
    """

    max_title_length: int = 70
    max_message_title_length: int = 60
    max_message_title_words: int = 10
    max_question_words: int = 12
    min_update_messages: int = 3
    max_significant_words: int = 5


@dataclass
class LoggingConfig:
    """ログ設定"""

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    loggers: dict[str, str] | None = None
    debug_llm_messages: bool = False


@dataclass
class Config:
    """アプリケーション設定"""

    llm: dict[str, LLMConfig]
    persona: PersonaConfig
    language: LanguageConfig = field(default_factory=LanguageConfig)
    templates: TemplateConfig = field(default_factory=TemplateConfig)
    context: ContextLimits = field(default_factory=ContextLimits)
    title: TitleConfig = field(default_factory=TitleConfig)
    logging: LoggingConfig | None = None
