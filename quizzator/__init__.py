"""Quizzator - quiz answer evaluation with deterministic scoring and LLM judges."""

__version__ = "0.1.0"
