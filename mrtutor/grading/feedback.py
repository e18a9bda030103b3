from __future__ import annotations

"""Feedback tree populated by the grader and read by reporters.

A ``FeedbackItem`` is one node: leaves are rubric items holding their own
points and tier, interior nodes are categories whose totals are the fold of
their children. ``Feedback`` builds the fixed rubric shape.
"""

import itertools
import re
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterator, List, Optional, Sequence, Tuple

from .messages import MESSAGES, MessageTemplate, Slot

_PLACEHOLDER = re.compile(r"\$\{[^}]*\}")

# Correctness tiers: wrong, mostly wrong, partial, near correct, correct.
TIERS = (0, 1, 2, 3, 4)
TIER_NAMES = {0: "wrong", 1: "mostly wrong", 2: "partial", 3: "near correct", 4: "correct"}

Decorate = Callable[[str, str], str]


def fill_template(body: str, slots: Sequence[Slot], subs: Sequence[Any], decorate: Optional[Decorate] = None) -> str:
    """Replace the n-th ``${...}`` placeholder with subs[slots[n][0]].

    ``decorate(text, colour)`` may wrap each inserted value; by default the
    plain text is inserted. Placeholders without a slot, or whose
    substitution is missing, are left as they are.
    """
    counter = itertools.count()

    def _sub(match: "re.Match[str]") -> str:
        n = next(counter)
        if n >= len(slots):
            return match.group(0)
        index, colour = slots[n]
        if index >= len(subs):
            return match.group(0)
        text = str(subs[index])
        return decorate(text, colour) if decorate else text

    return _PLACEHOLDER.sub(_sub, body)


@dataclass(frozen=True)
class FeedbackMessage:
    key: str
    title: str
    text: str

    def to_json(self) -> Dict[str, Any]:
        return {"key": self.key, "title": self.title, "text": self.text}


class FeedbackItem:
    def __init__(self, name: str, max_points: float = 0, messages: Optional[Dict[str, MessageTemplate]] = None) -> None:
        self.name = name
        self.correct = 0
        self.points: float = 0
        self.max_points: float = max_points or 0
        self.desc: Optional[str] = None
        self.feedbacks: List[FeedbackMessage] = []
        self.feedback_space: Dict[str, MessageTemplate] = dict(messages or {})
        self.children: Dict[str, FeedbackItem] = {}

    def add_child(self, child: "FeedbackItem") -> "FeedbackItem":
        self.children[child.name] = child
        return child

    def __getitem__(self, name: str) -> "FeedbackItem":
        return self.children[name]

    @property
    def is_leaf(self) -> bool:
        return not self.children

    def walk(self) -> Iterator[Tuple[str, "FeedbackItem"]]:
        """Depth-first (path, node) pairs below this node, in schema order."""
        for name, child in self.children.items():
            yield name, child
            for sub, node in child.walk():
                yield f"{name}.{sub}", node

    def leaves(self) -> Iterator[Tuple[str, "FeedbackItem"]]:
        for path, node in self.walk():
            if node.is_leaf:
                yield path, node

    def get_points(self) -> float:
        return self.points + sum(child.get_points() for child in self.children.values())

    def get_max_points(self) -> float:
        return self.max_points + sum(child.get_max_points() for child in self.children.values())

    def set_result(self, correct: int, points: float, desc: Optional[str] = None) -> None:
        assert correct in TIERS, f"tier out of range: {correct}"
        self.correct = correct
        self.points = points
        if desc is not None:
            self.desc = desc

    def add_feedback(self, key: str, *subs: Any, decorate: Optional[Decorate] = None) -> FeedbackMessage:
        template = self.feedback_space[key]
        message = FeedbackMessage(key=key, title=template.title, text=fill_template(template.body, template.slots, subs, decorate))
        self.feedbacks.append(message)
        return message

    def to_json(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "points": self.get_points(),
            "max_points": self.get_max_points(),
        }
        if self.is_leaf:
            data["correct"] = self.correct
            data["feedbacks"] = [f.to_json() for f in self.feedbacks]
            if self.desc is not None:
                data["desc"] = self.desc
        else:
            data["children"] = {name: child.to_json() for name, child in self.children.items()}
        return data

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FeedbackItem):
            return NotImplemented
        return self.name == other.name and self.to_json() == other.to_json()

    def __repr__(self) -> str:
        return f"FeedbackItem({self.name!r}, points={self.get_points()}, max_points={self.get_max_points()})"


# category -> [(rubric item, max points)]
SCHEMA: Tuple[Tuple[str, Tuple[Tuple[str, int], ...]], ...] = (
    ("reading", (("rated_r_value", 20), ("rated_t_value", 5))),
    (
        "measuring",
        (
            ("plug_connection", 5),
            ("probe_connection", 2),
            ("knob_setting", 20),
            ("power_switch", 2),
            ("measured_r_value", 10),
            ("task_order", 6),
        ),
    ),
    ("t_range", (("t_range_value", 15), ("within_tolerance", 5))),
    ("time", (("reading_time", 5), ("measuring_time", 5))),
)


@dataclass
class Feedback:
    """Graded result of one session."""

    root: FeedbackItem = field(default_factory=lambda: _build_tree())
    initial_dial_setting: Optional[str] = None
    submit_dial_setting: Optional[str] = None
    optimal_dial_setting: Optional[str] = None
    correct_answers: Dict[str, Any] = field(default_factory=dict)

    def item(self, path: str) -> FeedbackItem:
        node = self.root
        for part in path.split("."):
            node = node[part]
        return node

    def get_points(self) -> float:
        return self.root.get_points()

    def get_max_points(self) -> float:
        return self.root.get_max_points()

    def to_json(self) -> Dict[str, Any]:
        return {
            "root": self.root.to_json(),
            "initial_dial_setting": self.initial_dial_setting,
            "submit_dial_setting": self.submit_dial_setting,
            "optimal_dial_setting": self.optimal_dial_setting,
            "correct_answers": {k: list(v) if isinstance(v, tuple) else v for k, v in self.correct_answers.items()},
        }


def _build_tree() -> FeedbackItem:
    root = FeedbackItem("root")
    for category, items in SCHEMA:
        node = root.add_child(FeedbackItem(category))
        for name, max_points in items:
            node.add_child(FeedbackItem(name, max_points, MESSAGES[name]))
    return root
