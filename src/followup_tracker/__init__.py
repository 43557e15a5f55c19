"""Track messages awaiting follow-up and rank them by learned urgency."""

__version__ = "0.1.0"
