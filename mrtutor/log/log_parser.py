from __future__ import annotations

"""Reconstruct the multimeter state from a session's event log.

The parser replays the events once, in order. Every field has a live copy,
updated by every event, and a submit copy, updated only by events strictly
before the measured-resistance submission (the cut time). The task-order
check runs against the live copy after every connect and power event,
including those after the cut time, so re-wiring after submitting is still
noticed.
"""

import math
from typing import Any, Optional

from ..app.explain import trace as xtrace
from ..circuit.multimeter import DEFAULT_DIAL, is_resistance_dial
from .activity_log import Event, Session

# Index of the measured-resistance question; its end time is the cut time.
MEASURE_QUESTION_INDEX = 2


def as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1", "on", "yes")
    return bool(value)


class LogParser:
    def __init__(self, session: Session) -> None:
        assert session.sections, "session has no section"
        self.session = session
        self.section = session.sections[0]
        self.events = self.section.events
        self.questions = self.section.questions
        assert len(self.questions) > MEASURE_QUESTION_INDEX, "measured-resistance question missing"

        self.measure_submit_time: Optional[int] = self.questions[MEASURE_QUESTION_INDEX].end_time

        self.submit_red_probe_conn: Optional[str] = None
        self.submit_black_probe_conn: Optional[str] = None
        self.submit_red_plug_conn: Optional[str] = None
        self.submit_black_plug_conn: Optional[str] = None
        # dial setting when the power switch is first turned on
        self.initial_dial_setting: str = DEFAULT_DIAL
        # dial setting when the measured resistance is submitted
        self.submit_dial_setting: str = DEFAULT_DIAL
        self.power_on = False
        self.correct_order = True

        self.live_power_on = False
        self.live_red_probe_conn: Optional[str] = None
        self.live_black_probe_conn: Optional[str] = None
        self.live_red_plug_conn: Optional[str] = None
        self.live_black_plug_conn: Optional[str] = None
        self.live_dial_setting: Optional[str] = None

        self._initial_dial_setting_set = False

        self.parse_events()

    def _before_cut(self, t: int) -> bool:
        return self.measure_submit_time is not None and t < self.measure_submit_time

    def parse_events(self) -> None:
        for event in self.events:
            xtrace("parse_event", {"name": event.name, "value": event.value, "time": event.time})
            if event.name == "connect":
                self.parse_connect(event)
            elif event.name == "multimeter_power":
                self.parse_multimeter_power(event)
            elif event.name == "multimeter_dial":
                self.parse_multimeter_dial(event)
            # disconnect, circuit and resistor events do not change derived state
        xtrace(
            "parsed",
            {
                "red_probe": self.submit_red_probe_conn,
                "black_probe": self.submit_black_probe_conn,
                "red_plug": self.submit_red_plug_conn,
                "black_plug": self.submit_black_plug_conn,
                "dial": self.submit_dial_setting,
                "initial_dial": self.initial_dial_setting,
                "power": self.power_on,
                "correct_order": self.correct_order,
            },
        )

    def parse_connect(self, event: Event) -> None:
        endpoint, _, node = str(event.value).partition("|")
        before = self._before_cut(event.time)
        if endpoint == "red_probe":
            self.live_red_probe_conn = node
            if before:
                self.submit_red_probe_conn = node
        elif endpoint == "black_probe":
            self.live_black_probe_conn = node
            if before:
                self.submit_black_probe_conn = node
        elif endpoint == "red_plug":
            self.live_red_plug_conn = node
            if before:
                self.submit_red_plug_conn = node
        elif endpoint == "black_plug":
            self.live_black_plug_conn = node
            if before:
                self.submit_black_plug_conn = node
        self._check_order()

    def parse_multimeter_power(self, event: Event) -> None:
        on = as_bool(event.value)
        self.live_power_on = on
        if self._before_cut(event.time):
            self.power_on = on
            if on and not self._initial_dial_setting_set:
                self.initial_dial_setting = self.submit_dial_setting
                self._initial_dial_setting_set = True
        self._check_order()

    def parse_multimeter_dial(self, event: Event) -> None:
        self.live_dial_setting = event.value
        if self._before_cut(event.time):
            self.submit_dial_setting = event.value

    def _check_order(self) -> None:
        if self.correct_order and self.all_conn_with_non_res_dial():
            xtrace("task_order_broken", {"dial": self.live_dial_setting})
            self.correct_order = False

    def all_conn_with_non_res_dial(self) -> bool:
        """Meter fully wired and powered while the dial is off the resistance scales."""
        return bool(
            self.live_red_probe_conn
            and self.live_black_probe_conn
            and self.live_red_plug_conn
            and self.live_black_plug_conn
            and not is_resistance_dial(self.live_dial_setting)
            and self.live_power_on
        )

    def get_last_connection(self, endpoint: str) -> Optional[str]:
        """Node the endpoint was last connected to, over the whole log."""
        node = None
        for event in self.events:
            if event.name == "connect":
                end, _, target = str(event.value).partition("|")
                if end == endpoint:
                    node = target
        return node

    def get_last_circuit_make_time(self) -> float:
        """Last make_circuit before the cut time; +inf if there is none."""
        make_time = math.inf
        for event in self.events:
            if not self._before_cut(event.time):
                break
            if event.name == "make_circuit":
                make_time = event.time
        return make_time

    def get_last_circuit_break_time(self) -> float:
        """Last break_circuit before the cut time; -inf if there is none."""
        break_time = -math.inf
        for event in self.events:
            if not self._before_cut(event.time):
                break
            if event.name == "break_circuit":
                break_time = event.time
        return break_time
