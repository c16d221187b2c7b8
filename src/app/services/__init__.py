"""
App Services: 프롬프트 구성, 스트림 중계.
"""

from .prompt import SYSTEM_PROMPT, build_prompt
from .relay import format_event, relay_stream

__all__ = [
    "SYSTEM_PROMPT",
    "build_prompt",
    "format_event",
    "relay_stream",
]
