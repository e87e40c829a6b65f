"""
LLM providers module
Gemini and DeepSeek clients used for free-text sales strategy
"""

from .providers import GeminiProvider, DeepSeekProvider

__all__ = ['GeminiProvider', 'DeepSeekProvider']
