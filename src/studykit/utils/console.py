"""Shared rich console for all StudyKit output."""

from rich.console import Console

console = Console()
