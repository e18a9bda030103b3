from __future__ import annotations

"""Rubric grader for one measuring-resistance try.

Questions, in log order:
  0 rated_resistance     resistance read from the color bands
  1 rated_tolerance      tolerance read from the tolerance band (percent)
  2 measured_resistance  value read off the multimeter display
  3 measured_tolerance   tolerance range [min, max]
  4 within_tolerance     "yes" / "no"

Later questions are graded against what the learner answered earlier (the
range uses the learner's own rated resistance and tolerance), so one early
slip is not punished again downstream. Malformed answers only ever cost
points; they never raise.
"""

import math
from typing import Any, Optional, Sequence, Tuple

from ..app.explain import trace as xtrace
from ..circuit.multimeter import (
    BLACK_PLUG_PORT,
    RED_PLUG_PORT,
    RESISTOR_LEADS,
    dial_label,
    is_resistance_dial,
    optimal_dial,
)
from ..log.activity_log import Session
from ..log.log_parser import LogParser
from ..util import mathutil
from ..util.mathutil import round_half_up
from ..util.units import normalize_to_ohms, ohm_compatible, parse_number, pct_str, res_str, res_unit_str
from .feedback import Feedback, FeedbackItem

RANGE_TOLERANCE = 1e-5
EFFICIENT_SECONDS = 20
SEMI_SECONDS = 40


def one_off(x: Any, y: Any) -> bool:
    """True when x and y differ in at most one digit (same digit count)."""
    sx = mathutil.num_str(x)
    sy = mathutil.num_str(y)
    if "." not in sx:
        sx += "."
    if "." not in sy:
        sy += "."
    sx = mathutil.strip_zeros(sx)
    sy = mathutil.strip_zeros(sy)
    if len(sx) != len(sy):
        return False
    return sum(1 for a, b in zip(sx, sy) if a != b) <= 1


def rounded_match(x: float, y: float, num_sig: int) -> bool:
    return mathutil.round_to_sig_digits(x, num_sig) == y


def _digits_close(x: float, y: float, n: int, slack: int = 2) -> bool:
    dx = mathutil.get_rounded_sig_digits(x, n)
    dy = mathutil.get_rounded_sig_digits(y, n)
    return dx is not None and dy is not None and abs(dx - dy) <= slack


def _pair(value: Any) -> Tuple[Any, Any]:
    if isinstance(value, (list, tuple)):
        padded = list(value) + [None, None]
        return padded[0], padded[1]
    return None, None


def _fmt_raw(value: Any) -> str:
    return "None" if value is None else str(value)


class Grader:
    def __init__(self, session: Session) -> None:
        assert session.sections, "session has no section"
        self.session = session
        self.section = session.sections[0]
        self.questions = self.section.questions
        assert len(self.questions) >= 5, "session is missing questions"

        self.feedback = Feedback()
        self.parser = LogParser(session)

        self.resistance_answer: Optional[float] = None
        self.tolerance_answer: Optional[float] = None
        self.measured_resistance_answer: Optional[float] = None
        self.range_min_answer: Optional[float] = None
        self.range_max_answer: Optional[float] = None

    @property
    def _sig_digits(self) -> int:
        return int(self.section.resistor_num_bands or 4) - 2

    def grade(self) -> Feedback:
        self.grade_reading_color_bands()
        self.grade_tolerance()
        self.grade_resistance()
        self.grade_tolerance_range()
        self.grade_within_tolerance()
        self.grade_time()
        self.grade_settings()
        xtrace(
            "graded",
            {
                "points": self.feedback.get_points(),
                "max_points": self.feedback.get_max_points(),
                "tiers": {path: node.correct for path, node in self.feedback.root.leaves()},
            },
        )
        return self.feedback

    def _item(self, path: str) -> FeedbackItem:
        return self.feedback.item(path)

    def grade_reading_color_bands(self) -> None:
        question = self.questions[0]
        fb = self._item("reading.rated_r_value")
        fb.set_result(0, 0)

        if not ohm_compatible(question.unit):
            self.resistance_answer = None
            fb.add_feedback("unit", _fmt_raw(question.unit))
            return

        parsed = normalize_to_ohms(question.answer, question.unit)
        if parsed is None:
            self.resistance_answer = None
            fb.add_feedback("incorrect")
            return
        self.resistance_answer = parsed
        expected = self.section.nominal_resistance if question.correct_answer is None else question.correct_answer
        xtrace("rated_resistance", {"parsed": parsed, "expected": expected})

        if expected == parsed:
            fb.set_result(4, 20)
            fb.add_feedback("correct")
            return
        if expected is not None and mathutil.equal_except_power_of_ten(expected, parsed):
            num_bands = int(self.section.resistor_num_bands or 4)
            fb.set_result(2, 10)
            fb.add_feedback("power_ten", num_bands - 1, num_bands - 2)
            return
        if expected is not None and one_off(expected, parsed):
            fb.set_result(1, 2)
            fb.add_feedback("difficulty")
            return
        fb.add_feedback("incorrect")

    def grade_tolerance(self) -> None:
        question = self.questions[1]
        fb = self._item("reading.rated_t_value")
        fb.set_result(0, 0)

        expected = self.section.tolerance if question.correct_answer is None else question.correct_answer
        correct_str = pct_str(expected)
        answer_str = f"{_fmt_raw(question.answer)} %"

        value = parse_number(question.answer)
        if value is None:
            self.tolerance_answer = None
            fb.add_feedback("incorrect", correct_str, answer_str)
            return
        self.tolerance_answer = value / 100.0
        if expected != self.tolerance_answer:
            fb.add_feedback("incorrect", correct_str, answer_str)
            return
        fb.set_result(4, 5)
        fb.add_feedback("correct")

    def grade_resistance(self) -> None:
        question = self.questions[2]
        fb = self._item("measuring.measured_r_value")
        fb.set_result(0, 0)

        if not ohm_compatible(question.unit):
            fb.add_feedback("unit", _fmt_raw(question.unit))
            return

        parsed = normalize_to_ohms(question.answer, question.unit)
        if parsed is None:
            fb.add_feedback("incorrect")
            return
        self.measured_resistance_answer = parsed
        expected = self.section.displayed_resistance if question.correct_answer is None else question.correct_answer
        xtrace("measured_resistance", {"parsed": parsed, "expected": expected})

        if expected == parsed:
            fb.set_result(4, 10)
            fb.add_feedback("correct")
            return
        if expected is None or not math.isfinite(expected):
            fb.add_feedback("incorrect")
            return
        if rounded_match(expected, parsed, self._sig_digits):
            fb.set_result(3, 5)
            fb.add_feedback("incomplete", res_str(expected), res_str(parsed))
            return
        if mathutil.equal_except_power_of_ten(expected, parsed):
            fb.set_result(2, 3)
            fb.add_feedback(
                "power_ten",
                _fmt_raw(question.answer),
                _fmt_raw(question.unit),
                res_unit_str(expected),
                res_unit_str(expected, "k"),
                res_unit_str(expected, "M"),
            )
            return
        fb.add_feedback("incorrect")

    def _learner_nominal(self) -> float:
        if self.resistance_answer:
            return self.resistance_answer
        return float(self.section.nominal_resistance or 0.0)

    def grade_tolerance_range(self) -> None:
        question = self.questions[3]
        fb = self._item("t_range.t_range_value")
        fb.set_result(0, 0)

        nominal = self._learner_nominal()
        # a missing tolerance answer collapses the range onto the nominal value
        tolerance = self.tolerance_answer if self.tolerance_answer is not None else 0.0

        correct_min = nominal * (1 - tolerance)
        correct_max = nominal * (1 + tolerance)
        self.feedback.correct_answers["measured_tolerance"] = (correct_min, correct_max)

        raw_min, raw_max = _pair(question.answer)
        unit_min, unit_max = _pair(question.unit)
        correct_str = f"[{res_str(correct_min)}, {res_str(correct_max)}]"
        answer_str = f"[{_fmt_raw(raw_min)} {_fmt_raw(unit_min)}, {_fmt_raw(raw_max)} {_fmt_raw(unit_max)}]"

        if parse_number(raw_min) is None or parse_number(raw_max) is None:
            fb.add_feedback("wrong", correct_str, answer_str)
            return
        if not ohm_compatible(unit_min) or not ohm_compatible(unit_max):
            fb.add_feedback("wrong", correct_str, answer_str)
            return

        parsed_min = normalize_to_ohms(raw_min, unit_min)
        parsed_max = normalize_to_ohms(raw_max, unit_max)
        if parsed_min is None or parsed_max is None:
            fb.add_feedback("wrong", correct_str, answer_str)
            return
        self.range_min_answer = parsed_min
        self.range_max_answer = parsed_max

        if parsed_min > parsed_max:
            parsed_min, parsed_max = parsed_max, parsed_min

        if mathutil.equal_with_tolerance(parsed_min, correct_min, RANGE_TOLERANCE) and mathutil.equal_with_tolerance(
            parsed_max, correct_max, RANGE_TOLERANCE
        ):
            fb.set_result(4, 15)
            fb.add_feedback("correct", res_str(nominal), pct_str(tolerance))
            return

        n = self._sig_digits
        if mathutil.round_to_sig_digits(correct_min, n) == mathutil.round_to_sig_digits(
            parsed_min, n
        ) and mathutil.round_to_sig_digits(correct_max, n) == mathutil.round_to_sig_digits(parsed_max, n):
            fb.set_result(3, 10)
            fb.add_feedback("rounded", res_str(nominal), pct_str(tolerance))
            return

        if _digits_close(correct_min, parsed_min, n) and _digits_close(correct_max, parsed_max, n):
            fb.set_result(2, 3)
            fb.add_feedback("inaccurate", correct_str, answer_str)
            return
        fb.add_feedback("wrong", correct_str, answer_str)

    def grade_within_tolerance(self) -> None:
        fb = self._item("t_range.within_tolerance")
        fb.set_result(0, 0)

        # an upstream error voids this question
        if self._item("measuring.measured_r_value").correct < 4 or self._item("t_range.t_range_value").correct < 4:
            fb.add_feedback("undef")
            return

        question = self.questions[4]
        nominal = self._learner_nominal()
        tolerance = self.tolerance_answer if self.tolerance_answer is not None else float(self.section.tolerance or 0.0)
        if self.measured_resistance_answer:
            display_value = self.measured_resistance_answer
        else:
            display_value = float(self.section.displayed_resistance or 0.0)
        allowance = nominal * tolerance

        if display_value < nominal - allowance or display_value > nominal + allowance:
            correct_answer = "no"
        else:
            correct_answer = "yes"
        self.feedback.correct_answers["within_tolerance"] = correct_answer

        did = "did not" if correct_answer == "no" else "did"
        is_ = "is not" if correct_answer == "no" else "is"
        subs: Sequence[Any] = (
            res_str(self.measured_resistance_answer),
            res_str(self.range_min_answer),
            res_str(self.range_max_answer),
            did,
            is_,
        )

        answer = str(question.answer).strip().lower() if question.answer is not None else None
        if answer != correct_answer:
            fb.add_feedback("incorrect", *subs)
            return
        fb.set_result(4, 5)
        fb.add_feedback("correct", *subs)

    def _grade_elapsed(self, path: str, start: Optional[int], end: Optional[int]) -> None:
        assert start is not None and end is not None, f"{path}: question times missing"
        seconds = (end - start) / 1000
        fb = self._item(path)
        if seconds <= EFFICIENT_SECONDS:
            fb.set_result(4, 5)
            fb.add_feedback("efficient")
        elif seconds <= SEMI_SECONDS:
            fb.set_result(2, 2)
            fb.add_feedback("semi")
        else:
            fb.set_result(0, 0)
            fb.add_feedback("slow", round_half_up(seconds))

    def grade_time(self) -> None:
        self._grade_elapsed("time.reading_time", self.questions[0].start_time, self.questions[1].end_time)
        self._grade_elapsed("time.measuring_time", self.questions[2].start_time, self.questions[2].end_time)

    def grade_settings(self) -> None:
        parser = self.parser
        red_probe = parser.submit_red_probe_conn
        black_probe = parser.submit_black_probe_conn
        red_plug = parser.submit_red_plug_conn
        black_plug = parser.submit_black_plug_conn

        fb = self._item("measuring.probe_connection")
        if red_probe in RESISTOR_LEADS and black_probe in RESISTOR_LEADS and red_probe != black_probe:
            fb.set_result(4, 2, "Correct")
            fb.add_feedback("correct")
        else:
            fb.set_result(0, 0, "Incorrect")
            fb.add_feedback("incorrect")

        fb = self._item("measuring.plug_connection")
        if red_plug == RED_PLUG_PORT and black_plug == BLACK_PLUG_PORT:
            fb.set_result(4, 5, "Correct")
            fb.add_feedback("correct")
        elif red_plug == BLACK_PLUG_PORT and black_plug == RED_PLUG_PORT:
            fb.set_result(3, 3, "Reversed")
            fb.add_feedback("reverse")
        else:
            fb.set_result(0, 0, "Incorrect")
            fb.add_feedback("incorrect")

        i_knob = parser.initial_dial_setting
        f_knob = parser.submit_dial_setting
        o_knob = optimal_dial(float(self.section.displayed_resistance or 0.0))
        self.feedback.initial_dial_setting = i_knob
        self.feedback.submit_dial_setting = f_knob
        self.feedback.optimal_dial_setting = o_knob

        fb = self._item("measuring.knob_setting")
        if f_knob == o_knob:
            fb.set_result(4, 20)
            fb.add_feedback("correct")
        elif is_resistance_dial(f_knob):
            fb.set_result(2, 10)
            fb.add_feedback("suboptimal", dial_label(o_knob), dial_label(f_knob))
        else:
            fb.set_result(0, 0)
            fb.add_feedback("incorrect")

        fb = self._item("measuring.power_switch")
        if parser.power_on:
            fb.set_result(4, 2)
            fb.add_feedback("correct")
        else:
            fb.set_result(0, 0)
            fb.add_feedback("incorrect")

        fb = self._item("measuring.task_order")
        if parser.correct_order:
            fb.set_result(4, 6)
            fb.add_feedback("correct")
        else:
            fb.set_result(0, 0)
            fb.add_feedback("incorrect")


def grade(session: Session) -> Feedback:
    """Grade one session and return its feedback tree."""
    return Grader(session).grade()
