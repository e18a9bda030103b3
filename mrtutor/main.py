from __future__ import annotations

"""CLI entry point for the measuring-resistance tutor."""

import argparse
import itertools
import json
import sys
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from . import __version__
from .app import explain
from .app.session_manager import SessionManager
from .circuit.multimeter import RESISTOR_LEADS, optimal_dial
from .config.config import load_config, validate_config
from .grading.feedback import Feedback
from .grading.grader import grade
from .log.activity_log import ActivityLog, Session, now_ms
from .stats.stats import format_summary, summarize_feedback, write_stats
from .util.mathutil import num_str
from .util.units import OHMS
from .util.randomness import make_rng, seed_if_needed


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Measuring-resistance tutor CLI")
    p.add_argument("--config", type=str, default=None, help="Path to YAML config")
    p.add_argument("--version", action="store_true", help="Print version and exit")
    p.add_argument("--explain", action="store_true", help="Trace logging, parsing and grading steps")
    p.add_argument("--session", type=str, default=None, help="Grade a saved activity log or session JSON file")
    p.add_argument("--learner", type=str, default=None, help="Learner id used when persisting results")
    p.add_argument("--simulate", action="store_true", help="Run one scripted try and grade it")
    p.add_argument("--seed", type=int, default=None, help="Seed for the simulated try")
    p.add_argument("--out", type=str, default=None, help="Write the feedback tree as JSON to this path")
    p.add_argument("--report", action="store_true", help="Print the learner's score trend from the store")
    return p.parse_args(argv)


def load_session_file(path: str) -> Session:
    """Read a session from JSON: either a whole activity log (last session wins) or one session."""
    p = Path(path)
    try:
        with p.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        print(f"ERROR: Session file not found: {p}", file=sys.stderr)
        sys.exit(1)
    except json.JSONDecodeError as e:
        print(f"ERROR: Session file is not valid JSON: {p}: {e}", file=sys.stderr)
        sys.exit(1)
    if isinstance(data, list):
        data = {"sessions": data}
    if not isinstance(data, dict):
        print(f"ERROR: Unrecognized session file layout: {p}", file=sys.stderr)
        sys.exit(1)
    if "sessions" in data:
        log = ActivityLog.from_json(data)
        if not log.sessions:
            print(f"ERROR: No sessions in {p}", file=sys.stderr)
            sys.exit(1)
        return log.current_session()
    return Session.from_json(data)


def stepping_clock(step_ms: int = 1500) -> Callable[[], int]:
    """Clock that advances step_ms per reading, so scripted actions get distinct times."""
    ticks = itertools.count(now_ms(), step_ms)
    return lambda: next(ticks)


def simulate_try(manager: SessionManager) -> Feedback:
    """Script one careful learner: read the bands, wire the meter, measure, compute the range."""
    manager.start_try()
    resistor = manager.resistor
    assert resistor is not None
    nominal = resistor.nominal_value
    pct = resistor.tolerance * 100

    manager.submit_question((num_str(nominal), OHMS))
    manager.submit_question(num_str(pct))

    manager.log("connect", conn1="red_probe", conn2=RESISTOR_LEADS[0])
    manager.log("connect", conn1="black_probe", conn2=RESISTOR_LEADS[1])
    manager.log("multimeter_dial", value=optimal_dial(resistor.real_value))
    manager.log("multimeter_power", value=True)
    reading = manager.meter_reading()
    manager.submit_question((num_str(reading), OHMS))

    lo = nominal * (1 - resistor.tolerance)
    hi = nominal * (1 + resistor.tolerance)
    manager.submit_question((num_str(lo), OHMS, num_str(hi), OHMS))
    within = "yes" if reading is not None and lo <= reading <= hi else "no"
    manager.submit_question(within)

    form: Dict[str, Any] = {
        "rated_resistance_value": num_str(nominal),
        "rated_resistance_unit": OHMS,
        "rated_tolerance": f"{num_str(pct)}%",
        "measured_r_value": num_str(reading),
        "measured_r_unit": OHMS,
        "t_range_min_value": num_str(lo),
        "t_range_min_unit": OHMS,
        "t_range_max_value": num_str(hi),
        "t_range_max_unit": OHMS,
        "within_tolerance": within,
    }
    return manager.completed_try(form)


def _print_report(cfg: Dict[str, Any]) -> None:
    from analytics import AnalyticsConfig, ewma_by_session, load_and_prepare, session_totals
    from storage.store import DATA_FILE

    store = Path(str(cfg["results"]["store_dir"])) / DATA_FILE
    if not store.exists():
        print(f"No stored results at {store}.")
        return
    acfg = AnalyticsConfig()
    df = load_and_prepare(store, acfg, learner_id=cfg["learner"]["id"])
    if df.empty:
        print(f"No stored results for learner {cfg['learner']['id']}.")
        return
    totals = session_totals(df)
    totals["session_idx"] = range(len(totals))
    totals = ewma_by_session(totals, "percent", span=acfg.smoothing_span)
    print(f"Learner {cfg['learner']['id']}: {len(totals)} tries")
    for _, row in totals.iterrows():
        print(f"  {row['session_start']:%Y-%m-%d %H:%M}  {row['percent']:5.1f}%  (trend {row['percent_smooth']:5.1f}%)")
    mastery = df.groupby("item", observed=True)["mastered"].mean().sort_values()
    print("Mastery by item:")
    for item, share in mastery.items():
        print(f"  {item}: {share:.0%}")


def cli(argv: Optional[List[str]] = None) -> None:
    args = _parse_args(argv)
    if args.version:
        print(f"mrtutor {__version__}")
        sys.exit(0)

    seed_if_needed()

    cfg = validate_config(load_config(args.config))
    if args.learner:
        cfg["learner"]["id"] = args.learner
    explain.enable(args.explain or cfg["explain"])

    if args.report:
        _print_report(cfg)
        return

    if args.session:
        session = load_session_file(args.session)
        feedback = grade(session)
    elif args.simulate:
        manager = SessionManager(cfg, rng=make_rng(args.seed), log=ActivityLog(clock=stepping_clock()))
        feedback = simulate_try(manager)
    else:
        print("Nothing to do: pass --session FILE, --simulate or --report.", file=sys.stderr)
        sys.exit(2)

    summary = summarize_feedback(feedback)
    if args.out:
        Path(args.out).parent.mkdir(parents=True, exist_ok=True)
        write_stats(feedback.to_json(), args.out)

    print("\nTry Summary:")
    print(format_summary(summary))


if __name__ == "__main__":
    cli()
