"""アプリケーションのエントリポイント

Usage:
    python -m cagchat prompt context.json
    python -m cagchat title conversation.json
    python -m cagchat reply context.json --conversation conversation.json
    python -m cagchat search "python" conv1.json conv2.json
    python -m cagchat templates
"""

import argparse
import json
import logging
import sys
from typing import Any

from cagchat.application.use_cases import GenerateReplyUseCase, MaintainTitleUseCase
from cagchat.config import Config, ConfigError, LoggingConfig, load_config
from cagchat.domain.entities import Conversation
from cagchat.domain.languages import build_default_registry
from cagchat.domain.services import (
    TemplateStore,
    TextAnalysis,
    TitleGenerator,
    search_conversations,
)
from cagchat.infrastructure.llm import (
    ContextualResponseGenerator,
    LLMClient,
    LLMError,
    PromptAssembler,
)
from cagchat.infrastructure.persistence import (
    FileTemplateRepository,
    PersistenceError,
)

# Default logging for early startup
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def configure_logging(config: LoggingConfig | None) -> None:
    """Configure logging based on config.

    Args:
        config: Logging configuration. If None, uses defaults.
    """
    if config is None:
        return

    root_logger = logging.getLogger()

    level = getattr(logging, config.level.upper(), logging.INFO)
    root_logger.setLevel(level)

    if root_logger.handlers:
        formatter = logging.Formatter(config.format)
        for handler in root_logger.handlers:
            handler.setFormatter(formatter)

    if config.loggers:
        for logger_name, logger_level in config.loggers.items():
            individual_logger = logging.getLogger(logger_name)
            individual_level = getattr(logging, logger_level.upper(), logging.INFO)
            individual_logger.setLevel(individual_level)
            logger.debug(
                "Set logger '%s' to level %s", logger_name, logger_level.upper()
            )


class Application:
    """Services wired from a loaded config."""

    def __init__(self, config: Config) -> None:
        self.config = config
        registry = build_default_registry(config.language.default)

        self.template_repository = FileTemplateRepository(config.templates.directory)
        if config.templates.seed_defaults:
            self.template_repository.seed_defaults()
        self.template_store = TemplateStore.load(self.template_repository)

        self.assembler = PromptAssembler(
            self.template_store,
            registry,
            persona=config.persona,
            limits=config.context,
        )
        self.title_generator = TitleGenerator(TextAnalysis(registry), config.title)
        self.maintain_title = MaintainTitleUseCase(self.title_generator)

    def response_generator(self) -> ContextualResponseGenerator:
        debug_llm_messages = (
            self.config.logging.debug_llm_messages if self.config.logging else False
        )
        return ContextualResponseGenerator(
            LLMClient(self.config.llm["default"]),
            self.assembler,
            debug_llm_messages=debug_llm_messages,
        )


def read_json(path: str) -> Any:
    """JSON ファイルを読み込む"""
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def print_json(data: Any) -> None:
    print(json.dumps(data, ensure_ascii=False, indent=2))


def run_prompt(app: Application, args: argparse.Namespace) -> int:
    messages = app.assembler.build_prompt(read_json(args.context), _user_config(args))
    print_json(messages)
    return 0


def run_title(app: Application, args: argparse.Namespace) -> int:
    conversation = Conversation.from_dict(read_json(args.conversation))
    context = read_json(args.context) if args.context else None

    needs_update = app.title_generator.needs_title_update(conversation)
    changed = app.maintain_title.execute(conversation, context)
    print_json(
        {
            "title": conversation.title,
            "state": conversation.title_state.value,
            "needsUpdate": needs_update,
            "changed": changed,
        }
    )
    return 0


def run_reply(app: Application, args: argparse.Namespace) -> int:
    context_map = read_json(args.context)
    if args.conversation:
        conversation = Conversation.from_dict(read_json(args.conversation))
    else:
        conversation = Conversation()

    use_case = GenerateReplyUseCase(app.response_generator(), app.maintain_title)
    reply = use_case.execute(conversation, context_map, _user_config(args))
    print(reply.content)
    if conversation.title:
        print(f"\n[{conversation.title}]", file=sys.stderr)
    return 0


def run_search(app: Application, args: argparse.Namespace) -> int:
    conversations = [Conversation.from_dict(read_json(p)) for p in args.files]
    print_json(
        [
            {
                "id": result.id,
                "title": result.title,
                "messageCount": result.message_count,
                "snippet": result.snippet,
            }
            for result in search_conversations(conversations, args.term)
        ]
    )
    return 0


def run_templates(app: Application, args: argparse.Namespace) -> int:
    print(f"Templates in {app.template_repository.directory}:")
    for name in app.template_store.names:
        print(f"  - {name}")
    return 0


def _user_config(args: argparse.Namespace) -> dict[str, Any] | None:
    user_config: dict[str, Any] = {}
    if getattr(args, "system_prompt", None):
        user_config["system_prompt"] = args.system_prompt
    if getattr(args, "temperature", None) is not None:
        user_config["temperature"] = args.temperature
    return user_config or None


COMMANDS = {
    "prompt": run_prompt,
    "title": run_title,
    "reply": run_reply,
    "search": run_search,
    "templates": run_templates,
}


def create_parser() -> argparse.ArgumentParser:
    """CLIパーサーを作成"""
    parser = argparse.ArgumentParser(
        prog="cagchat",
        description="Context-augmented chat: prompt assembly and conversation titles",
    )
    parser.add_argument(
        "--config",
        default="config.yaml",
        help="config.yaml のパス (default: config.yaml)",
    )

    subparsers = parser.add_subparsers(dest="command", help="コマンド")

    prompt_parser = subparsers.add_parser(
        "prompt", help="組み立てたプロンプトを表示 (LLM呼び出しなし)"
    )
    prompt_parser.add_argument("context", help="コンテキストマップの JSON")
    prompt_parser.add_argument("--system-prompt", default=None)

    title_parser = subparsers.add_parser("title", help="会話タイトルを生成・改善")
    title_parser.add_argument("conversation", help="会話の JSON")
    title_parser.add_argument("--context", default=None, help="コンテキストマップの JSON")

    reply_parser = subparsers.add_parser("reply", help="LLM で応答を生成")
    reply_parser.add_argument("context", help="コンテキストマップの JSON")
    reply_parser.add_argument("--conversation", default=None, help="会話の JSON")
    reply_parser.add_argument("--system-prompt", default=None)
    reply_parser.add_argument("--temperature", type=float, default=None)

    search_parser = subparsers.add_parser("search", help="会話を全文検索")
    search_parser.add_argument("term", help="検索語")
    search_parser.add_argument("files", nargs="+", help="会話の JSON")

    subparsers.add_parser("templates", help="保存済みテンプレートを一覧表示")

    return parser


def main(argv: list[str] | None = None) -> int:
    """メインエントリポイント"""
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    try:
        config = load_config(args.config)
    except FileNotFoundError as e:
        logger.error("%s", e)
        return 1
    except ConfigError as e:
        logger.error("Failed to load config: %s", e)
        return 1

    configure_logging(config.logging)

    try:
        app = Application(config)
        return COMMANDS[args.command](app, args)
    except PersistenceError as e:
        logger.error("Template storage error: %s", e)
        return 1
    except LLMError as e:
        logger.error("LLM error: %s", e)
        return 1
    except (OSError, ValueError, KeyError) as e:
        logger.error("Cannot read input: %s", e)
        return 1


def run() -> None:
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    run()
