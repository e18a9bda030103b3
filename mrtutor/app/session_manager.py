from __future__ import annotations

"""Session Manager: orchestrates tries, grading, and persistence.

One try is one activity-log session: a fresh resistor, the multimeter reset
to its default state, five questions answered in order, then grading and
persistence. The manager is front-end agnostic; a UI forwards learner
actions to ``log`` and answers to ``submit_question``.
"""

import random
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional
from uuid import uuid4

from storage.schema import SessionMeta
from storage.store import (
    append_grade_rows as storage_append,
    init_store as storage_init_store,
    rows_from_feedback,
    session_start_from_ms,
    upsert_session_meta as storage_upsert_meta,
    validate_records as storage_validate_records,
)

from .. import __version__
from ..circuit.multimeter import Multimeter, make_display_text, optimal_dial
from ..circuit.resistor import Resistor, make_resistor
from ..grading.assessment import Assessment
from ..grading.feedback import Feedback
from ..log.activity_log import QUESTION_IDS, ActivityLog, Session
from ..log.log_parser import as_bool
from ..results.persist import save_session
from ..stats.stats import summarize_feedback, write_stats
from ..util.randomness import make_rng
from .explain import trace as xtrace

# Question whose start enables the circuit.
MEASURE_QUESTION = 3


@dataclass
class TryState:
    index: int = 0
    current_question: int = 1
    completed: bool = False
    session_id: Optional[str] = None


class SessionManager:
    def __init__(
        self,
        cfg: Dict[str, Any],
        *,
        rng: Optional[random.Random] = None,
        log: Optional[ActivityLog] = None,
    ) -> None:
        self.cfg = cfg
        self.rng = rng or make_rng()
        self.log_book = log or ActivityLog()
        self.assessment = Assessment()
        self.multimeter = Multimeter()
        self.resistor: Optional[Resistor] = None
        self.state = TryState()
        self.feedback: Optional[Feedback] = None
        self.circuit_enabled = False

    @property
    def session(self) -> Session:
        return self.log_book.current_session()

    def choose_resistor(self) -> Resistor:
        activity = self.cfg.get("activity", {})
        nbands = activity.get("debug_nbands")
        if nbands is None:
            nbands = 4 if self.rng.random() < float(activity.get("four_band_probability", 0.75)) else 5
        resistor = make_resistor(int(nbands))
        resistor.randomize(self.rng)

        rvalue = activity.get("debug_rvalue")
        mvalue = activity.get("debug_mvalue")
        tvalue = activity.get("debug_tvalue")
        if rvalue is not None or mvalue is not None or tvalue is not None:
            nominal = resistor.nominal_value if rvalue is None else float(rvalue)
            tolerance = resistor.tolerance if tvalue is None else float(tvalue)
            real = resistor.real_value if mvalue is None else float(mvalue)
            resistor.set_values(nominal, tolerance, real)
            xtrace("resistor_pinned", {"nominal": nominal, "tolerance": tolerance, "real": real})
        return resistor

    def _log_resistor_state(self) -> None:
        r = self.resistor
        assert r is not None
        self.log_book.set_value("resistor_num_bands", r.num_bands)
        self.log_book.set_value("nominal_resistance", r.nominal_value)
        self.log_book.set_value("tolerance", r.tolerance)
        self.log_book.set_value("real_resistance", r.real_value)
        self.log_book.set_value("displayed_resistance", make_display_text(r.real_value))

    def start_try(self) -> Session:
        """Begin a new session with a new resistor and a reset meter."""
        self.state = TryState(index=self.state.index + 1, session_id=str(uuid4()))
        self.feedback = None
        self.circuit_enabled = False
        session = self.log_book.begin_next_session()

        self.resistor = self.choose_resistor()
        self.multimeter = Multimeter()
        self._log_resistor_state()

        self.log_book.add("start_session")
        if self.multimeter.red_plug_connection:
            self.log_book.add("connect", conn1="red_plug", conn2=self.multimeter.red_plug_connection)
        if self.multimeter.black_plug_connection:
            self.log_book.add("connect", conn1="black_plug", conn2=self.multimeter.black_plug_connection)
        self.log_book.add("start_section")
        self.log_book.add("start_question", question=1)
        xtrace(
            "try_started",
            {
                "index": self.state.index,
                "bands": self.resistor.num_bands,
                "nominal": self.resistor.nominal_value,
                "tolerance": self.resistor.tolerance,
                "colors": self.resistor.colors,
            },
        )
        return session

    def log(self, name: str, **params: Any) -> None:
        """Record a learner action and mirror it on the live meter."""
        if name == "connect":
            self.multimeter.connect(str(params.get("conn1")), params.get("conn2"))
        elif name == "disconnect":
            self.multimeter.connect(str(params.get("conn1")), None)
        elif name == "multimeter_dial":
            self.multimeter.set_dial(str(params.get("value")))
        elif name == "multimeter_power":
            self.multimeter.power_on = as_bool(params.get("value"))
        self.log_book.add(name, **params)

    def meter_reading(self) -> Optional[float]:
        """Value on the display when fully wired on the optimal scale, else None."""
        if self.resistor is None or not self.multimeter.all_connected():
            return None
        if self.multimeter.dial_setting != optimal_dial(self.resistor.real_value):
            return None
        return make_display_text(self.resistor.real_value)

    def submit_question(self, answer: Any) -> Optional[str]:
        """Close the current question if its answer is usable.

        Returns the validation message when it is not; the question then
        stays open. After the last question the try is ready for
        ``completed_try``.
        """
        assert not self.state.completed, "try already completed"
        n = self.state.current_question
        message = self.assessment.validate_answer(n, answer)
        if message is not None:
            xtrace("answer_rejected", {"question": n, "message": message})
            return message
        self.log_book.add("end_question", question=n)
        if n < len(QUESTION_IDS):
            self.state.current_question = n + 1
            self.log_book.add("start_question", question=n + 1)
            if self.state.current_question == MEASURE_QUESTION:
                self.circuit_enabled = True
        return None

    def completed_try(self, form: Mapping[str, Any]) -> Feedback:
        """Fill answers from the form, grade once, close the session and persist."""
        assert not self.state.completed, "try already completed"
        session = self.session
        self.assessment.receive_result(session.section, form)
        feedback = self.assessment.grade(session)
        self.feedback = feedback
        self.state.completed = True

        self.log_book.add("end_section")
        self.log_book.add("end_session")
        xtrace("try_completed", {"points": feedback.get_points(), "max_points": feedback.get_max_points()})

        if bool(self.cfg.get("results", {}).get("persist", False)):
            self.persist(session, feedback)
        return feedback

    def persist(self, session: Session, feedback: Feedback) -> None:
        results = self.cfg.get("results", {})
        learner_id = str(self.cfg.get("learner", {}).get("id", "anonymous"))

        save_session(str(results.get("output_path", "./mr_results.json")), learner_id, session, feedback)

        stats_path = results.get("stats_path")
        if stats_path:
            write_stats(summarize_feedback(feedback), str(stats_path))

        store_dir = Path(str(results.get("store_dir", "./storage/data")))
        sid = self.state.session_id or str(uuid4())
        started = session_start_from_ms(session.start_time)
        rows = rows_from_feedback(feedback, session_id=sid, session_start=started, learner_id=learner_id)
        storage_init_store(store_dir)
        storage_append(storage_validate_records(rows), store_dir)
        section = session.section
        storage_upsert_meta(
            SessionMeta(
                session_id=sid,
                session_start=started,
                learner_id=learner_id,
                app_version=__version__,
                resistor_num_bands=section.resistor_num_bands,
                nominal_resistance=section.nominal_resistance,
                tolerance=section.tolerance,
                total_points=feedback.get_points(),
            ),
            store_dir,
        )
        xtrace("try_persisted", {"session_id": sid, "rows": len(rows), "store": str(store_dir)})
