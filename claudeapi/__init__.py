"""Typed content, messages, responses, streaming events, tools and retries for the Claude Messages API."""

__version__ = "0.1.0"