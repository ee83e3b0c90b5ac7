"""Use cases."""

from cagchat.application.use_cases.generate_reply import GenerateReplyUseCase
from cagchat.application.use_cases.maintain_title import MaintainTitleUseCase

__all__ = [
    "GenerateReplyUseCase",
    "MaintainTitleUseCase",
]
