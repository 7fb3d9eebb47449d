"""Shared console and logger for the apply-edits CLI."""

import logging

from rich.console import Console

# Human-readable output goes to stderr; stdout carries JSON only
console = Console(stderr=True)
logger = logging.getLogger(__name__)
