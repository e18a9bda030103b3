import io
import json
import random
import tempfile
import unittest
from contextlib import redirect_stdout
from pathlib import Path

from mrtutor.app.session_manager import SessionManager
from mrtutor.config.config import load_config, validate_config
from mrtutor.log.activity_log import ActivityLog
from mrtutor.main import load_session_file, simulate_try, stepping_clock
from mrtutor.results.persist import load_sessions, save_session
from mrtutor.grading.grader import grade
from mrtutor.util.units import OHMS

from tests.builders import build_log, build_session


def _pinned_cfg(**results):
    cfg = validate_config(
        {
            "activity": {"debug_nbands": 4, "debug_rvalue": 1000, "debug_mvalue": 990, "debug_tvalue": 0.05},
            "results": {"persist": False, **results},
        }
    )
    return cfg


class ConfigTests(unittest.TestCase):
    def test_package_defaults(self) -> None:
        cfg = validate_config(load_config())
        self.assertEqual(cfg["activity"]["four_band_probability"], 0.75)
        self.assertIsNone(cfg["activity"]["debug_nbands"])
        self.assertEqual(cfg["learner"]["id"], "anonymous")
        self.assertFalse(cfg["explain"])

    def test_bad_values_fall_back(self) -> None:
        out = io.StringIO()
        with redirect_stdout(out):
            cfg = validate_config(
                {"activity": {"four_band_probability": 3, "debug_nbands": 6, "debug_rvalue": "abc"}}
            )
        self.assertEqual(cfg["activity"]["four_band_probability"], 0.75)
        self.assertIsNone(cfg["activity"]["debug_nbands"])
        self.assertIsNone(cfg["activity"]["debug_rvalue"])
        self.assertEqual(out.getvalue().count("WARNING"), 3)

    def test_user_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "cfg.yml"
            path.write_text("learner:\n  id: ada\nresults:\n  persist: false\n", encoding="utf-8")
            cfg = validate_config(load_config(str(path)))
        self.assertEqual(cfg["learner"]["id"], "ada")
        self.assertFalse(cfg["results"]["persist"])
        self.assertEqual(cfg["results"]["output_path"], "./mr_results.json")

    def test_missing_file_exits(self) -> None:
        with self.assertRaises(SystemExit):
            load_config("/nonexistent/mrtutor.yml")


class SessionManagerTests(unittest.TestCase):
    def _manager(self, cfg=None) -> SessionManager:
        return SessionManager(
            cfg or _pinned_cfg(), rng=random.Random(3), log=ActivityLog(clock=stepping_clock(1000))
        )

    def test_start_try_logs_resistor_and_plugs(self) -> None:
        manager = self._manager()
        session = manager.start_try()
        section = session.section
        self.assertEqual(section.nominal_resistance, 1000.0)
        self.assertEqual(section.real_resistance, 990.0)
        self.assertEqual(section.displayed_resistance, 990.0)
        self.assertEqual(section.resistor_num_bands, 4)
        self.assertEqual([e.value for e in section.events], ["red_plug|voma_port", "black_plug|common_port"])
        self.assertIsNotNone(section.questions[0].start_time)

    def test_rejected_answer_keeps_question_open(self) -> None:
        manager = self._manager()
        manager.start_try()
        message = manager.submit_question(("abc", OHMS))
        self.assertIsNotNone(message)
        self.assertEqual(manager.state.current_question, 1)
        self.assertIsNone(manager.session.section.questions[0].end_time)
        self.assertIsNone(manager.submit_question(("1000", OHMS)))
        self.assertEqual(manager.state.current_question, 2)

    def test_circuit_enabled_at_measuring_question(self) -> None:
        manager = self._manager()
        manager.start_try()
        manager.submit_question(("1000", OHMS))
        self.assertFalse(manager.circuit_enabled)
        manager.submit_question("5")
        self.assertTrue(manager.circuit_enabled)

    def test_meter_reading_needs_power_and_optimal_scale(self) -> None:
        manager = self._manager()
        manager.start_try()
        manager.log("connect", conn1="red_probe", conn2="resistor_lead1")
        manager.log("connect", conn1="black_probe", conn2="resistor_lead2")
        manager.log("multimeter_dial", value="r_200k")
        manager.log("multimeter_power", value="true")
        self.assertTrue(manager.multimeter.power_on)
        self.assertIsNone(manager.meter_reading())
        manager.log("multimeter_dial", value="r_2000")
        self.assertEqual(manager.meter_reading(), 990.0)
        manager.log("multimeter_power", value="false")
        self.assertFalse(manager.multimeter.power_on)
        self.assertIsNone(manager.meter_reading())

    def test_simulated_try_scores_full_marks(self) -> None:
        manager = self._manager()
        feedback = simulate_try(manager)
        self.assertEqual(feedback.get_points(), 100)
        self.assertTrue(manager.state.completed)
        self.assertIsNotNone(manager.session.end_time)
        with self.assertRaises(AssertionError):
            manager.completed_try({})

    def test_random_resistor_choice(self) -> None:
        manager = self._manager(validate_config({"activity": {"four_band_probability": 1.0}}))
        for _ in range(5):
            self.assertEqual(manager.choose_resistor().num_bands, 4)
        manager.cfg["activity"]["four_band_probability"] = 0.0
        self.assertEqual(manager.choose_resistor().num_bands, 5)

    def test_persisted_try(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            cfg = _pinned_cfg(
                output_path=str(Path(tmp) / "results.json"),
                stats_path=str(Path(tmp) / "stats.json"),
                store_dir=str(Path(tmp) / "store"),
            )
            cfg["results"]["persist"] = True
            cfg["learner"]["id"] = "ada"
            manager = self._manager(cfg)
            simulate_try(manager)

            sessions = load_sessions(cfg["results"]["output_path"], "ada")
            self.assertEqual(len(sessions), 1)
            self.assertEqual(grade(sessions[0]).get_points(), 100)
            stats = json.loads(Path(cfg["results"]["stats_path"]).read_text(encoding="utf-8"))
            self.assertEqual(stats["points"], 100)
            self.assertTrue((Path(tmp) / "store" / "grade_rows.parquet").exists())
            self.assertTrue((Path(tmp) / "store" / "sessions.parquet").exists())


class PersistTests(unittest.TestCase):
    def test_newest_first_per_learner(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = str(Path(tmp) / "r.json")
            first = build_session(rated=(100.0, OHMS))
            second = build_session()
            save_session(path, "ada", first, grade(first))
            save_session(path, "ada", second, grade(second))
            save_session(path, "bob", first, grade(first))

            sessions = load_sessions(path, "ada")
            self.assertEqual(len(sessions), 2)
            self.assertEqual(sessions[0].to_json(), second.to_json())
            self.assertEqual(len(load_sessions(path, "bob")), 1)
            self.assertEqual(load_sessions(path, "eve"), [])

    def test_unreadable_file_is_backed_up(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "r.json"
            path.write_text("not json", encoding="utf-8")
            session = build_session()
            with redirect_stdout(io.StringIO()):
                save_session(str(path), "ada", session, grade(session))
            backups = list(Path(tmp).glob("r.backup-*.json"))
            self.assertEqual(len(backups), 1)
            self.assertEqual(backups[0].read_text(encoding="utf-8"), "not json")
            self.assertEqual(len(load_sessions(str(path), "ada")), 1)

    def test_load_session_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            log_path = Path(tmp) / "log.json"
            log_path.write_text(json.dumps(build_log().to_json()), encoding="utf-8")
            self.assertEqual(grade(load_session_file(str(log_path))).get_points(), 100)

            one_path = Path(tmp) / "one.json"
            one_path.write_text(json.dumps(build_session().to_json()), encoding="utf-8")
            self.assertEqual(grade(load_session_file(str(one_path))).get_points(), 100)


if __name__ == "__main__":
    unittest.main()
