"""
Content — Prompt text sent to the classifier
"""

from .prompts import SYSTEM_PROMPT, build_user_prompt

__all__ = ['SYSTEM_PROMPT', 'build_user_prompt']
