"""Providers package for PydanticAI integration."""

from agent.providers.groq import GroqCompletionService, get_groq_model

__all__ = ["GroqCompletionService", "get_groq_model"]
