# Application Package
from .analytics import LearningAnalyzer, analyze, due_cards, is_mastered
from .scheduler import Sm2Scheduler, schedule

__all__ = ["Sm2Scheduler", "schedule", "LearningAnalyzer", "analyze", "due_cards", "is_mastered"]
