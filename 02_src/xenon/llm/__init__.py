"""LLM module."""

from .decision import AnthropicDecisionCapability, IDecisionCapability, StepCallback

__all__ = ["AnthropicDecisionCapability", "IDecisionCapability", "StepCallback"]
