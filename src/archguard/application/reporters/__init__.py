"""Reporters: violations -> human-readable output."""

from archguard.application.reporters.console import ConsoleConfig, ConsoleReporter

__all__ = ["ConsoleConfig", "ConsoleReporter"]
