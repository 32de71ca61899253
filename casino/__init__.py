"""Core rules engine package for Casino."""

__all__ = [
    "cards",
    "errors",
    "deck",
    "state",
    "actions",
    "capture",
    "builds",
    "strategy",
    "mechanics",
    "scoring",
    "events",
    "game",
    "config",
    "service",
    "logging_utils",
]
