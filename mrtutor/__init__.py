"""Measuring-resistance tutor: activity log, log parser, grader and feedback tree.

The grading core consumes one recorded attempt (a ``Session``) and returns a
``Feedback`` tree that presentation layers can render and persistence layers
can serialize.
"""

from __future__ import annotations

__version__ = "0.1.0"

from .log.activity_log import ActivityLog, Event, Question, Section, Session
from .log.log_parser import LogParser
from .grading.feedback import Feedback, FeedbackItem
from .grading.grader import Grader, grade

__all__ = [
    "__version__",
    "ActivityLog",
    "Event",
    "Question",
    "Section",
    "Session",
    "LogParser",
    "Feedback",
    "FeedbackItem",
    "Grader",
    "grade",
]
