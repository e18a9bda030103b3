"""Shared builders for recorded tries with explicit timestamps."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence, Tuple

from mrtutor.log.activity_log import ActivityLog, Session
from mrtutor.util.units import OHMS

# question number -> (start, end) in ms
DEFAULT_TIMES: Dict[int, Tuple[int, int]] = {
    1: (0, 5000),
    2: (5000, 8000),
    3: (8000, 20000),
    4: (20000, 30000),
    5: (30000, 35000),
}

# submit time of the measured resistance
CUT = DEFAULT_TIMES[3][1]

GOOD_ACTIONS: List[Tuple[int, str, Dict[str, Any]]] = [
    (9000, "connect", {"conn1": "red_probe", "conn2": "resistor_lead1"}),
    (10000, "connect", {"conn1": "black_probe", "conn2": "resistor_lead2"}),
    (11000, "multimeter_dial", {"value": "r_2000"}),
    (12000, "multimeter_power", {"value": True}),
]


def build_log(
    *,
    nominal: float = 1000.0,
    tolerance: float = 0.05,
    displayed: float = 987.0,
    real: Optional[float] = None,
    bands: int = 4,
    actions: Sequence[Tuple[int, str, Dict[str, Any]]] = GOOD_ACTIONS,
    times: Optional[Dict[int, Tuple[int, int]]] = None,
    rated: Tuple[Any, Any] = (1000.0, OHMS),
    tolerance_pct: Any = 5.0,
    measured: Tuple[Any, Any] = (987.0, OHMS),
    t_range: Tuple[Any, Any, Any, Any] = (950.0, OHMS, 1050.0, OHMS),
    within: Any = "yes",
) -> ActivityLog:
    """A finished try: resistor facts, plug wiring, the given actions and five answered questions."""
    times = times or DEFAULT_TIMES
    log = ActivityLog(clock=lambda: 0)
    session = log.begin_next_session()

    log.set_value("resistor_num_bands", bands)
    log.set_value("nominal_resistance", nominal)
    log.set_value("tolerance", tolerance)
    log.set_value("real_resistance", displayed if real is None else real)
    log.set_value("displayed_resistance", displayed)

    log.add("start_session", time=0)
    log.add("connect", conn1="red_plug", conn2="voma_port", time=0)
    log.add("connect", conn1="black_plug", conn2="common_port", time=0)
    log.add("start_section", time=0)

    for t, name, params in sorted(actions, key=lambda a: a[0]):
        log.add(name, time=t, **params)

    for n, (start, end) in times.items():
        session.section.questions[n - 1].start_time = start
        session.section.questions[n - 1].end_time = end

    q = session.section.questions
    q[0].answer, q[0].unit = rated
    q[1].answer, q[1].unit = tolerance_pct, "%"
    q[2].answer, q[2].unit = measured
    q[3].answer = [t_range[0], t_range[2]]
    q[3].unit = [t_range[1], t_range[3]]
    q[4].answer = within

    log.add("end_section", time=times[5][1])
    log.add("end_session", time=times[5][1])
    return log


def build_session(**kwargs: Any) -> Session:
    return build_log(**kwargs).current_session()
