"""Pure logic engines for Corn Cat.

Engines hold no Home Assistant state; the coordinator owns persistence and
notifications and calls into these.
"""

from .click_limiter import ClickDecision, ClickRateLimiter, ClickStatus
from .gamification_engine import GamificationEngine
from .statistics_engine import StatisticsEngine
from .task_engine import TaskEngine, TransitionResult

__all__ = [
    "ClickDecision",
    "ClickRateLimiter",
    "ClickStatus",
    "GamificationEngine",
    "StatisticsEngine",
    "TaskEngine",
    "TransitionResult",
]
