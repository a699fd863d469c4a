"""Textual surfaces for prompts."""
