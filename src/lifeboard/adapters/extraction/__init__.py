"""Extraction adapter: JSON output of the screenshot extraction step."""

from __future__ import annotations

from .loader import JsonFileCandidateSource, parse_batch

__all__ = ["JsonFileCandidateSource", "parse_batch"]
