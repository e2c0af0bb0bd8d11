"""Processing module for text and date normalization."""

from volunteer_match.processing.normalizer import Normalizer, clean_text, comparison_key

__all__ = ["Normalizer", "clean_text", "comparison_key"]
