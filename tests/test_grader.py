import math
import unittest

from mrtutor.grading.feedback import Feedback
from mrtutor.grading.grader import grade, one_off
from mrtutor.circuit.multimeter import make_display_text
from mrtutor.util.units import KILO_OHMS, MEGA_OHMS, OHMS

from tests.builders import CUT, DEFAULT_TIMES, GOOD_ACTIONS, build_session

ANSWER_ITEMS = (
    "reading.rated_r_value",
    "reading.rated_t_value",
    "measuring.measured_r_value",
    "t_range.t_range_value",
    "t_range.within_tolerance",
)


def _answer_points(feedback: Feedback) -> float:
    return sum(feedback.item(path).points for path in ANSWER_ITEMS)


class GraderScenarioTests(unittest.TestCase):
    def test_full_marks(self) -> None:
        feedback = grade(build_session())
        self.assertEqual(_answer_points(feedback), 55)
        self.assertEqual(feedback.get_points(), 100)
        self.assertEqual(feedback.get_max_points(), 100)
        for path, node in feedback.root.leaves():
            self.assertEqual(node.correct, 4, path)
        self.assertEqual(feedback.correct_answers["within_tolerance"], "yes")
        self.assertEqual(feedback.optimal_dial_setting, "r_2000")

    def test_kilo_ohm_answer_matches_ohms(self) -> None:
        session = build_session(
            nominal=4700.0,
            displayed=4680.0,
            rated=(4.7, KILO_OHMS),
            measured=(4.68, KILO_OHMS),
            t_range=(4.465, KILO_OHMS, 4935.0, OHMS),
            actions=[a if a[1] != "multimeter_dial" else (a[0], a[1], {"value": "r_20k"}) for a in GOOD_ACTIONS],
        )
        feedback = grade(session)
        self.assertEqual(feedback.item("reading.rated_r_value").correct, 4)
        self.assertEqual(feedback.item("measuring.measured_r_value").correct, 4)
        self.assertEqual(feedback.item("t_range.t_range_value").correct, 4)
        self.assertEqual(feedback.item("measuring.knob_setting").correct, 4)
        self.assertEqual(feedback.get_points(), 100)

    def test_both_probes_on_one_lead(self) -> None:
        actions = [
            (9000, "connect", {"conn1": "red_probe", "conn2": "resistor_lead1"}),
            (10000, "connect", {"conn1": "black_probe", "conn2": "resistor_lead1"}),
            (11000, "multimeter_dial", {"value": "r_2000"}),
            (12000, "multimeter_power", {"value": True}),
        ]
        item = grade(build_session(actions=actions)).item("measuring.probe_connection")
        self.assertEqual((item.correct, item.points, item.desc), (0, 0, "Incorrect"))

    def test_dial_set_after_power_on(self) -> None:
        actions = [
            (9000, "connect", {"conn1": "red_probe", "conn2": "resistor_lead1"}),
            (10000, "connect", {"conn1": "black_probe", "conn2": "resistor_lead2"}),
            (11000, "multimeter_power", {"value": True}),
            (12000, "multimeter_dial", {"value": "r_2000"}),
        ]
        feedback = grade(build_session(actions=actions))
        self.assertEqual(feedback.item("measuring.knob_setting").correct, 4)
        self.assertEqual(feedback.item("measuring.task_order").correct, 0)
        self.assertEqual(feedback.initial_dial_setting, "acv_750")
        self.assertEqual(feedback.submit_dial_setting, "r_2000")

    def test_rewiring_after_submit_breaks_order_only(self) -> None:
        actions = GOOD_ACTIONS + [
            (CUT + 1000, "multimeter_dial", {"value": "acv_200"}),
            (CUT + 2000, "connect", {"conn1": "black_probe", "conn2": "resistor_lead2"}),
        ]
        feedback = grade(build_session(actions=actions))
        self.assertEqual(feedback.item("measuring.task_order").correct, 0)
        self.assertEqual(feedback.item("measuring.knob_setting").correct, 4)
        self.assertEqual(feedback.get_points(), 94)

    def test_reversed_plugs(self) -> None:
        actions = GOOD_ACTIONS + [
            (9500, "connect", {"conn1": "red_plug", "conn2": "common_port"}),
            (9600, "connect", {"conn1": "black_plug", "conn2": "voma_port"}),
        ]
        item = grade(build_session(actions=actions)).item("measuring.plug_connection")
        self.assertEqual((item.correct, item.points, item.desc), (3, 3, "Reversed"))

    def test_suboptimal_dial_and_no_power(self) -> None:
        actions = [
            (9000, "connect", {"conn1": "red_probe", "conn2": "resistor_lead1"}),
            (10000, "connect", {"conn1": "black_probe", "conn2": "resistor_lead2"}),
            (11000, "multimeter_dial", {"value": "r_200k"}),
        ]
        feedback = grade(build_session(actions=actions))
        knob = feedback.item("measuring.knob_setting")
        self.assertEqual((knob.correct, knob.points), (2, 10))
        self.assertIn("200k", knob.feedbacks[0].text)
        self.assertEqual(feedback.item("measuring.power_switch").correct, 0)
        self.assertEqual(feedback.item("measuring.task_order").correct, 4)


class GraderAnswerTests(unittest.TestCase):
    def test_rated_resistance_tiers(self) -> None:
        item = grade(build_session(rated=(100.0, OHMS))).item("reading.rated_r_value")
        self.assertEqual((item.correct, item.points), (2, 10))
        self.assertEqual(item.feedbacks[0].key, "power_ten")
        self.assertIn("first 3 bands", item.feedbacks[0].text)

        item = grade(build_session(nominal=4700.0, rated=(4800.0, OHMS))).item("reading.rated_r_value")
        self.assertEqual((item.correct, item.points), (1, 2))

        item = grade(build_session(rated=(3300.0, OHMS))).item("reading.rated_r_value")
        self.assertEqual((item.correct, item.points), (0, 0))

        item = grade(build_session(rated=(1000.0, "V"))).item("reading.rated_r_value")
        self.assertEqual(item.feedbacks[0].key, "unit")

    def test_wrong_tolerance(self) -> None:
        item = grade(build_session(tolerance_pct=10)).item("reading.rated_t_value")
        self.assertEqual((item.correct, item.points), (0, 0))
        self.assertIn("5 %", item.feedbacks[0].text)

    def test_measured_resistance_tiers(self) -> None:
        item = grade(build_session(measured=(990.0, OHMS))).item("measuring.measured_r_value")
        self.assertEqual((item.correct, item.points), (3, 5))

        item = grade(build_session(measured=(98.7, OHMS))).item("measuring.measured_r_value")
        self.assertEqual((item.correct, item.points), (2, 3))

        item = grade(build_session(measured=(500.0, OHMS))).item("measuring.measured_r_value")
        self.assertEqual((item.correct, item.points), (0, 0))

    def test_tolerance_range_tiers(self) -> None:
        item = grade(build_session(t_range=(1050.0, OHMS, 950.0, OHMS))).item("t_range.t_range_value")
        self.assertEqual(item.correct, 4)

        item = grade(build_session(t_range=(950.0, OHMS, 1100.0, OHMS))).item("t_range.t_range_value")
        self.assertEqual((item.correct, item.points), (3, 10))

        item = grade(build_session(t_range=(960.0, OHMS, 1050.0, OHMS))).item("t_range.t_range_value")
        self.assertEqual((item.correct, item.points), (2, 3))

        item = grade(build_session(t_range=(500.0, OHMS, 1500.0, OHMS))).item("t_range.t_range_value")
        self.assertEqual((item.correct, item.points), (0, 0))

    def test_range_follows_learners_own_reading(self) -> None:
        # wrong rated value, but the range is consistent with it
        feedback = grade(build_session(rated=(1200.0, OHMS), t_range=(1140.0, OHMS, 1260.0, OHMS), within="no"))
        self.assertEqual(feedback.item("reading.rated_r_value").correct, 0)
        self.assertEqual(feedback.item("t_range.t_range_value").correct, 4)
        self.assertEqual(feedback.item("t_range.within_tolerance").correct, 4)
        lo, hi = feedback.correct_answers["measured_tolerance"]
        self.assertAlmostEqual(lo, 1140.0)
        self.assertAlmostEqual(hi, 1260.0)

    def test_within_tolerance(self) -> None:
        item = grade(build_session(within="No")).item("t_range.within_tolerance")
        self.assertEqual(item.correct, 0)

        feedback = grade(build_session(displayed=1070.0, measured=(1070.0, OHMS), within=" no "))
        self.assertEqual(feedback.item("t_range.within_tolerance").correct, 4)
        self.assertEqual(feedback.correct_answers["within_tolerance"], "no")

    def test_within_tolerance_undefined_after_upstream_error(self) -> None:
        item = grade(build_session(measured=(990.0, OHMS))).item("t_range.within_tolerance")
        self.assertEqual((item.correct, item.points), (0, 0))
        self.assertEqual(item.feedbacks[0].key, "undef")

    def test_malformed_answers_never_raise(self) -> None:
        session = build_session(
            rated=("lots", OHMS),
            tolerance_pct=None,
            measured=(None, "volts"),
            t_range=("abc", None, None, OHMS),
            within=None,
        )
        feedback = grade(session)
        for path in ANSWER_ITEMS:
            self.assertEqual(feedback.item(path).points, 0, path)
        self.assertEqual(feedback.get_points(), 45)

    def test_timing(self) -> None:
        times = dict(DEFAULT_TIMES)
        times[2] = (5000, 25000)
        times[3] = (25000, 77400)
        actions = [(t + 17000, name, params) for t, name, params in GOOD_ACTIONS]
        feedback = grade(build_session(times=times, actions=actions))
        reading = feedback.item("time.reading_time")
        measuring = feedback.item("time.measuring_time")
        self.assertEqual((reading.correct, reading.points), (2, 2))
        self.assertEqual((measuring.correct, measuring.points), (0, 0))
        self.assertIn("52", measuring.feedbacks[0].text)

    def test_timing_boundaries_are_inclusive(self) -> None:
        times = {1: (0, 5000), 2: (5000, 20000), 3: (20000, 60000), 4: (60000, 61000), 5: (61000, 62000)}
        feedback = grade(build_session(times=times))
        self.assertEqual(feedback.item("time.reading_time").correct, 4)
        self.assertEqual(feedback.item("time.measuring_time").correct, 2)

        times = {1: (0, 5000), 2: (5000, 20001), 3: (20001, 60002), 4: (60002, 61000), 5: (61000, 62000)}
        feedback = grade(build_session(times=times))
        self.assertEqual(feedback.item("time.reading_time").correct, 2)
        self.assertEqual(feedback.item("time.measuring_time").correct, 0)

    def test_grading_is_repeatable_and_leaves_session_alone(self) -> None:
        session = build_session(rated=(100.0, OHMS))
        before = session.to_json()
        first = grade(session)
        second = grade(session)
        self.assertEqual(first.to_json(), second.to_json())
        self.assertEqual(session.to_json(), before)

    def test_points_are_sum_of_leaves(self) -> None:
        feedback = grade(build_session(measured=(98.7, OHMS), tolerance_pct=10))
        total = sum(node.points for _, node in feedback.root.leaves())
        self.assertEqual(feedback.get_points(), total)
        for _, category in feedback.root.children.items():
            self.assertEqual(category.get_points(), sum(c.points for c in category.children.values()))


class GraderExtremeInputTests(unittest.TestCase):
    def test_reading_past_the_top_range(self) -> None:
        displayed = make_display_text(1.8e6 * 1.12)
        self.assertTrue(math.isnan(displayed))
        session = build_session(
            nominal=1.8e6,
            tolerance=0.1,
            displayed=displayed,
            rated=(1.8, MEGA_OHMS),
            tolerance_pct=10,
            measured=(2.0e6, OHMS),
            t_range=(1.62, MEGA_OHMS, 1.98, MEGA_OHMS),
        )
        feedback = grade(session)
        measured = feedback.item("measuring.measured_r_value")
        self.assertEqual((measured.correct, measured.points), (0, 0))
        self.assertEqual(measured.feedbacks[0].key, "incorrect")
        self.assertEqual(feedback.item("t_range.t_range_value").correct, 4)
        self.assertEqual(feedback.item("t_range.within_tolerance").feedbacks[0].key, "undef")
        self.assertEqual(feedback.optimal_dial_setting, "r_2000k")

    def test_overflowing_answers_grade_as_wrong(self) -> None:
        feedback = grade(build_session(t_range=("950", OHMS, "1e308", KILO_OHMS), measured=("1e308", KILO_OHMS)))
        self.assertEqual(feedback.item("t_range.t_range_value").points, 0)
        self.assertEqual(feedback.item("t_range.t_range_value").feedbacks[0].key, "wrong")
        self.assertEqual(feedback.item("measuring.measured_r_value").points, 0)

        item = grade(build_session(rated=("1e308", KILO_OHMS))).item("reading.rated_r_value")
        self.assertEqual((item.correct, item.points), (0, 0))

    def test_subnormal_range_bound(self) -> None:
        item = grade(build_session(t_range=("5e-324", OHMS, "1050", OHMS))).item("t_range.t_range_value")
        self.assertEqual((item.correct, item.points), (0, 0))

    def test_huge_tolerance_answer(self) -> None:
        feedback = grade(build_session(tolerance_pct="1e307"))
        self.assertEqual(feedback.item("reading.rated_t_value").points, 0)
        self.assertEqual(feedback.item("t_range.t_range_value").points, 0)


class OneOffTests(unittest.TestCase):
    def test_one_off(self) -> None:
        self.assertTrue(one_off(4700, 4800))
        self.assertTrue(one_off(4700, 4700))
        self.assertFalse(one_off(4700, 5800))
        self.assertFalse(one_off(1000, 1100))


if __name__ == "__main__":
    unittest.main()
