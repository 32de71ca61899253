"""Bot strategies for Casino."""

from .priority_bot import PriorityBot
from .random_bot import RandomBot

__all__ = ["PriorityBot", "RandomBot"]
