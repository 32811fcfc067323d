"""Scrape WOL publications and generate study commentary with an LLM."""

__version__ = "0.3.0"
