"""Triage Wizard backend: local proxy between the triage frontend and the Claude CLI."""

__version__ = "0.1.0"
