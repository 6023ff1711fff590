"""Roadmap Pulse: weighted voting, trending and panel quota health for roadmap feedback."""

__version__ = "0.1.0"
