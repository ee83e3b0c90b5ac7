"""設定管理モジュール"""

from cagchat.config.loader import (
    ConfigError,
    ConfigValidationError,
    EnvironmentVariableError,
    expand_env_vars,
    load_config,
)
from cagchat.config.models import (
    Config,
    ContextLimits,
    LanguageConfig,
    LLMConfig,
    LoggingConfig,
    PersonaConfig,
    TemplateConfig,
    TitleConfig,
)

__all__ = [
    "Config",
    "ConfigError",
    "ConfigValidationError",
    "ContextLimits",
    "EnvironmentVariableError",
    "LLMConfig",
    "LanguageConfig",
    "LoggingConfig",
    "PersonaConfig",
    "TemplateConfig",
    "TitleConfig",
    "expand_env_vars",
    "load_config",
]
