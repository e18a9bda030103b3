from __future__ import annotations

"""Bridge between raw form input and the graded session.

``receive_result`` copies what the learner typed into the session's
questions, ``grade`` runs the grader, and ``send_result`` maps the tiers back
to the question forms so a front end can mark each one.
"""

from typing import Any, Dict, Mapping, Optional

from ..log.activity_log import QUESTION_IDS, Section, Session
from ..util.units import parse_number
from .feedback import Feedback
from .grader import grade as grade_session

# form field -> meaning
FORM_FIELDS = (
    "rated_resistance_value",
    "rated_resistance_unit",
    "rated_tolerance",
    "measured_r_value",
    "measured_r_unit",
    "t_range_min_value",
    "t_range_min_unit",
    "t_range_max_value",
    "t_range_max_unit",
    "within_tolerance",
)

UNIT_PLACEHOLDER = "Units..."
SELECT_PLACEHOLDER = "Select one"

# question id -> rubric item carrying its tier
QUESTION_ITEMS = {
    "rated_resistance": "reading.rated_r_value",
    "rated_tolerance": "reading.rated_t_value",
    "measured_resistance": "measuring.measured_r_value",
    "measured_tolerance": "t_range.t_range_value",
    "within_tolerance": "t_range.within_tolerance",
}


def field_is_empty(value: Any) -> bool:
    return value is None or (isinstance(value, str) and len(value.strip()) < 1)


def _number_or_none(value: Any) -> Optional[float]:
    if field_is_empty(value):
        return None
    return parse_number(value)


def _unit_or_none(value: Any) -> Optional[str]:
    if field_is_empty(value) or value == UNIT_PLACEHOLDER:
        return None
    return str(value)


def _is_number_string(value: Any) -> bool:
    return not field_is_empty(value) and parse_number(value) is not None


class Assessment:
    def receive_result(self, section: Section, form: Mapping[str, Any]) -> None:
        """Fill question answers, units and static correct answers from form values.

        Answers that are blank become None; numeric fields that do not parse
        are kept as None as well so the grader scores them as wrong.
        """
        questions = section.questions

        questions[0].answer = _number_or_none(form.get("rated_resistance_value"))
        questions[0].unit = _unit_or_none(form.get("rated_resistance_unit"))
        questions[0].correct_answer = section.nominal_resistance

        tolerance = form.get("rated_tolerance")
        if isinstance(tolerance, str):
            tolerance = tolerance.strip()
            if tolerance.endswith("%"):
                tolerance = tolerance[:-1].strip()
            if tolerance == SELECT_PLACEHOLDER:
                tolerance = None
        questions[1].answer = _number_or_none(tolerance)
        questions[1].unit = "%"
        questions[1].correct_answer = section.tolerance

        questions[2].answer = _number_or_none(form.get("measured_r_value"))
        questions[2].unit = _unit_or_none(form.get("measured_r_unit"))
        questions[2].correct_answer = section.displayed_resistance

        questions[3].answer = [
            _number_or_none(form.get("t_range_min_value")),
            _number_or_none(form.get("t_range_max_value")),
        ]
        questions[3].unit = [
            _unit_or_none(form.get("t_range_min_unit")),
            _unit_or_none(form.get("t_range_max_unit")),
        ]

        within = form.get("within_tolerance")
        questions[4].answer = None if field_is_empty(within) else str(within).strip().lower()

    def grade(self, session: Session) -> Feedback:
        return grade_session(session)

    def send_result(self, feedback: Feedback) -> Dict[str, int]:
        return {qid: feedback.item(path).correct for qid, path in QUESTION_ITEMS.items()}

    @staticmethod
    def validate_answer(question_num: int, answer: Any) -> Optional[str]:
        """Learner-facing message if the answer cannot be submitted yet, else None.

        Question 1 and 3 take (value, unit), question 2 the selected
        tolerance, question 4 (min, min unit, max, max unit), question 5 the
        yes/no choice.
        """
        if question_num in (1, 3):
            value, unit = answer
            if not _is_number_string(value):
                return "I can't recognize the value you entered. Please enter a number."
            if _unit_or_none(unit) is None:
                return "Please select a unit before submitting your answer."
            return None
        if question_num == 2:
            if field_is_empty(answer) or answer == SELECT_PLACEHOLDER:
                return "Please select a tolerance value before submitting your answer."
            return None
        if question_num == 4:
            min_value, min_unit, max_value, max_unit = answer
            if not _is_number_string(min_value) or not _is_number_string(max_value):
                return "I can't recognize the values you entered. Please enter numbers."
            if _unit_or_none(min_unit) is None or _unit_or_none(max_unit) is None:
                return "Please select a unit for each value before submitting your answer."
            return None
        if question_num == 5:
            if field_is_empty(answer):
                return "Please check yes or no before submitting your answer."
            return None
        raise ValueError(f"wrong question number {question_num}; expected 1..{len(QUESTION_IDS)}")
