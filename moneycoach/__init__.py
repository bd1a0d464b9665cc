"""Money Coach API - LLM money coach with caller-executed tool calls."""

__version__ = "0.2.0"
