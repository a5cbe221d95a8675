"""Core rule engine package for 28."""

__all__ = [
    "actions",
    "bidding",
    "cards",
    "deck",
    "errors",
    "events",
    "game",
    "mechanics",
    "projection",
    "rules",
    "scoring",
    "state",
    "table",
    "trick",
    "trump",
]
