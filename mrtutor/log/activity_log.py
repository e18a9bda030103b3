from __future__ import annotations

"""Activity log: sessions, sections, questions and timestamped events.

Log object structure (a session is the unit of upload to the result store):

    SESSION
      start_time, end_time
      sections:
        - SECTION
            start_time, end_time
            resistor facts (num bands, nominal, tolerance, real, displayed)
            events:    [EVENT {name, value, time}, ...]
            questions: [QUESTION {id, correct_answer, answer, unit,
                                  start_time, end_time}, ...]

Times are integer milliseconds since the epoch.
"""

import time as _time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from ..app.explain import trace as xtrace, warn

EVENT_NAMES = frozenset(
    {
        "start_session",
        "end_session",
        "start_section",
        "end_section",
        "start_question",
        "end_question",
        "connect",
        "disconnect",
        "make_circuit",
        "break_circuit",
        "multimeter_dial",
        "multimeter_power",
        "resistor_nominal_value",
        "resistor_real_value",
        "resistor_display_value",
    }
)

VALUE_NAMES = frozenset(
    {
        "resistor_num_bands",
        "nominal_resistance",
        "tolerance",
        "real_resistance",
        "displayed_resistance",
    }
)

UNREGISTERED_NAME = "UNREGISTERED_NAME"

QUESTION_IDS = (
    "rated_resistance",
    "rated_tolerance",
    "measured_resistance",
    "measured_tolerance",
    "within_tolerance",
)


def now_ms() -> int:
    return int(_time.time() * 1000)


@dataclass(frozen=True)
class Event:
    name: str
    value: Any
    time: int

    def to_json(self) -> Dict[str, Any]:
        return {"name": self.name, "value": self.value, "time": self.time}

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "Event":
        return cls(name=str(data.get("name", "")), value=data.get("value"), time=int(data.get("time", 0)))


@dataclass
class Question:
    id: str
    prompt: str = ""
    correct_answer: Any = None
    answer: Any = None
    unit: Any = None
    start_time: Optional[int] = None
    end_time: Optional[int] = None

    def to_json(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "prompt": self.prompt,
            "correct_answer": self.correct_answer,
            "answer": self.answer,
            "unit": self.unit,
            "start_time": self.start_time,
            "end_time": self.end_time,
        }

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "Question":
        return cls(
            id=str(data.get("id", "")),
            prompt=data.get("prompt", "") or "",
            correct_answer=data.get("correct_answer"),
            answer=data.get("answer"),
            unit=data.get("unit"),
            start_time=data.get("start_time"),
            end_time=data.get("end_time"),
        )


@dataclass
class Section:
    events: List[Event] = field(default_factory=list)
    questions: List[Question] = field(default_factory=list)
    start_time: Optional[int] = None
    end_time: Optional[int] = None
    resistor_num_bands: Optional[int] = None
    nominal_resistance: Optional[float] = None
    tolerance: Optional[float] = None
    real_resistance: Optional[float] = None
    displayed_resistance: Optional[float] = None
    unregistered_name: Optional[str] = None

    def to_json(self) -> Dict[str, Any]:
        return {
            "start_time": self.start_time,
            "end_time": self.end_time,
            "resistor_num_bands": self.resistor_num_bands,
            "nominal_resistance": self.nominal_resistance,
            "tolerance": self.tolerance,
            "real_resistance": self.real_resistance,
            "displayed_resistance": self.displayed_resistance,
            "unregistered_name": self.unregistered_name,
            "events": [e.to_json() for e in self.events],
            "questions": [q.to_json() for q in self.questions],
        }

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "Section":
        return cls(
            events=[Event.from_json(e) for e in data.get("events", [])],
            questions=[Question.from_json(q) for q in data.get("questions", [])],
            start_time=data.get("start_time"),
            end_time=data.get("end_time"),
            resistor_num_bands=data.get("resistor_num_bands"),
            nominal_resistance=data.get("nominal_resistance"),
            tolerance=data.get("tolerance"),
            real_resistance=data.get("real_resistance"),
            displayed_resistance=data.get("displayed_resistance"),
            unregistered_name=data.get("unregistered_name"),
        )


@dataclass
class Session:
    sections: List[Section] = field(default_factory=list)
    start_time: Optional[int] = None
    end_time: Optional[int] = None

    @property
    def section(self) -> Section:
        """The one section an attempt is made of."""
        assert self.sections, "session has no section"
        return self.sections[0]

    def to_json(self) -> Dict[str, Any]:
        return {
            "start_time": self.start_time,
            "end_time": self.end_time,
            "sections": [s.to_json() for s in self.sections],
        }

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "Session":
        return cls(
            sections=[Section.from_json(s) for s in data.get("sections", [])],
            start_time=data.get("start_time"),
            end_time=data.get("end_time"),
        )


def new_session() -> Session:
    """A session with its single section and the five activity questions."""
    section = Section(questions=[Question(qid) for qid in QUESTION_IDS])
    return Session(sections=[section])


class ActivityLog:
    """Append-only log of every try; only the most recent session is active."""

    def __init__(self, clock: Optional[Callable[[], int]] = None) -> None:
        self.sessions: List[Session] = []
        self._clock = clock or now_ms

    @property
    def num_sessions(self) -> int:
        return len(self.sessions)

    def begin_next_session(self) -> Session:
        session = new_session()
        self.sessions.append(session)
        xtrace("session_begun", {"index": self.num_sessions})
        return session

    def current_session(self) -> Session:
        assert self.sessions, "no session has been started"
        return self.sessions[-1]

    def set_value(self, name: str, value: Any) -> None:
        """Record a resistor fact on the current section."""
        section = self.current_session().section
        if name in VALUE_NAMES:
            setattr(section, name, value)
        else:
            warn(f"set_value: unknown value name {name!r}")
            section.unregistered_name = name

    def _stamp(self, section: Section, explicit: Optional[int]) -> int:
        t = int(explicit) if explicit is not None else int(self._clock())
        if section.events and t < section.events[-1].time:
            # events must stay in non-decreasing time order
            t = section.events[-1].time
        return t

    def add(self, name: str, *, time: Optional[int] = None, **params: Any) -> None:
        session = self.current_session()
        section = session.section
        now = self._stamp(section, time)

        if name not in EVENT_NAMES:
            warn(f"add: unknown log event name {name!r}")
            section.events.append(Event(UNREGISTERED_NAME, name, now))
            return

        if name in ("connect", "disconnect"):
            xtrace(name, {"conn1": params.get("conn1"), "conn2": params.get("conn2")})
            section.events.append(Event(name, f"{params.get('conn1')}|{params.get('conn2')}", now))
        elif name in ("make_circuit", "break_circuit"):
            section.events.append(Event(name, "", now))
        elif name == "start_section":
            section.start_time = now
        elif name == "end_section":
            section.end_time = now
        elif name == "start_question":
            section.questions[int(params["question"]) - 1].start_time = now
        elif name == "end_question":
            section.questions[int(params["question"]) - 1].end_time = now
        elif name == "start_session":
            session.start_time = now
        elif name == "end_session":
            session.end_time = now
        else:
            section.events.append(Event(name, params.get("value"), now))

    def to_json(self) -> Dict[str, Any]:
        return {"sessions": [s.to_json() for s in self.sessions]}

    @classmethod
    def from_json(cls, data: Dict[str, Any], clock: Optional[Callable[[], int]] = None) -> "ActivityLog":
        log = cls(clock=clock)
        log.sessions = [Session.from_json(s) for s in data.get("sessions", [])]
        return log
