"""Explanation rendering."""

from keyroute.explain.formatter import ExplanationFormatter
from keyroute.explain.messages import DEFAULT_LOCALE, Locale

__all__ = ["DEFAULT_LOCALE", "ExplanationFormatter", "Locale"]
