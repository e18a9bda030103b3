from __future__ import annotations

"""Digital multimeter model: dial positions, display text and wiring state."""

from dataclasses import dataclass
from typing import Dict, Optional

from ..util.mathutil import round_half_up

RESISTANCE_DIALS = ("r_200", "r_2000", "r_20k", "r_200k", "r_2000k")

DIAL_LABELS: Dict[str, str] = {
    "r_2000k": "Ω - 2000k",
    "r_200k": "Ω - 200k",
    "r_20k": "Ω - 20k",
    "r_2000": "Ω - 2000",
    "r_200": "Ω - 200",
    "dcv_1000": "DCV - 1000",
    "dcv_200": "DCV - 200",
    "dcv_20": "DCV - 20",
    "dcv_2000m": "DCV - 2000m",
    "dcv_200m": "DCV - 200m",
    "acv_750": "ACV - 750",
    "acv_200": "ACV - 200",
    "p_9v": "1.5V 9V",
    "dca_200mc": "DCA - 200μ",
    "dca_2000mc": "DCA - 2000μ",
    "dca_20m": "DCA - 20m",
    "dca_200m": "DCA - 200m",
    "c_10a": "10A",
    "hfe": "hFE",
    "diode": "Diode",
}

DIAL_POSITIONS = frozenset(DIAL_LABELS)

# Dial position of a freshly reset meter.
DEFAULT_DIAL = "acv_750"

RED_PLUG_PORT = "voma_port"
BLACK_PLUG_PORT = "common_port"
RESISTOR_LEADS = ("resistor_lead1", "resistor_lead2")


def is_resistance_dial(setting: Optional[str]) -> bool:
    return setting in RESISTANCE_DIALS


def optimal_dial(r: float) -> str:
    """Resistance scale giving the most precise reading for r ohms."""
    if r < 200:
        return "r_200"
    if r < 2000:
        return "r_2000"
    if r < 20e3:
        return "r_20k"
    if r < 200e3:
        return "r_200k"
    return "r_2000k"


def dial_label(setting: Optional[str]) -> str:
    if setting is None:
        return "None"
    return DIAL_LABELS.get(setting, setting)


def make_display_text(value: float) -> float:
    """Value shown on the display under the optimal scale.

    Three significant digits, four when the leading digit is 1; NaN past
    the 2000k range. This is what a measured-resistance answer is graded
    against.
    """
    if value < 199.95:
        return round_half_up(value * 10) / 10
    if value < 1999.5:
        return float(round_half_up(value))
    if value < 19995:
        return float(round_half_up(value / 10) * 10)
    if value < 199950:
        return float(round_half_up(value / 100) * 100)
    if value < 1999500:
        return float(round_half_up(value / 1000) * 1000)
    return float("nan")


@dataclass
class Multimeter:
    """Live wiring state of the simulated meter."""

    red_probe_connection: Optional[str] = None
    black_probe_connection: Optional[str] = None
    red_plug_connection: Optional[str] = RED_PLUG_PORT
    black_plug_connection: Optional[str] = BLACK_PLUG_PORT
    dial_setting: str = DEFAULT_DIAL
    power_on: bool = False

    def connect(self, endpoint: str, node: Optional[str]) -> None:
        attr = {
            "red_probe": "red_probe_connection",
            "black_probe": "black_probe_connection",
            "red_plug": "red_plug_connection",
            "black_plug": "black_plug_connection",
        }.get(endpoint)
        if attr is None:
            raise ValueError(f"Unknown endpoint: {endpoint}")
        setattr(self, attr, node)

    def set_dial(self, setting: str) -> None:
        if setting not in DIAL_POSITIONS:
            raise ValueError(f"Unknown dial position: {setting}")
        self.dial_setting = setting

    def all_connected(self) -> bool:
        plugs_ok = (
            self.red_plug_connection == RED_PLUG_PORT and self.black_plug_connection == BLACK_PLUG_PORT
        ) or (self.red_plug_connection == BLACK_PLUG_PORT and self.black_plug_connection == RED_PLUG_PORT)
        return (
            self.red_probe_connection is not None
            and self.black_probe_connection is not None
            and self.red_probe_connection != self.black_probe_connection
            and plugs_ok
            and self.power_on
        )
