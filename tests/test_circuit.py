import math
import random
import unittest

from mrtutor.circuit.multimeter import (
    Multimeter,
    dial_label,
    is_resistance_dial,
    make_display_text,
    optimal_dial,
)
from mrtutor.circuit.r_values import E12, E24, E48, E96
from mrtutor.circuit.resistor import Resistor4band, Resistor5band, filter_values, make_resistor


class MultimeterTests(unittest.TestCase):
    def test_optimal_dial(self) -> None:
        self.assertEqual(optimal_dial(150), "r_200")
        self.assertEqual(optimal_dial(987), "r_2000")
        self.assertEqual(optimal_dial(4700), "r_20k")
        self.assertEqual(optimal_dial(150e3), "r_200k")
        self.assertEqual(optimal_dial(1.5e6), "r_2000k")

    def test_resistance_dials(self) -> None:
        self.assertTrue(is_resistance_dial("r_2000k"))
        self.assertFalse(is_resistance_dial("acv_750"))
        self.assertFalse(is_resistance_dial(None))
        self.assertEqual(dial_label("dcv_20"), "DCV - 20")

    def test_display_text(self) -> None:
        self.assertEqual(make_display_text(150.04), 150.0)
        self.assertEqual(make_display_text(987.4), 987.0)
        self.assertEqual(make_display_text(4712), 4710.0)
        self.assertEqual(make_display_text(151234), 151200.0)
        self.assertTrue(math.isnan(make_display_text(2.5e6)))

    def test_display_scale_edges(self) -> None:
        self.assertEqual(make_display_text(199.9), 199.9)
        self.assertEqual(make_display_text(199.95), 200.0)
        self.assertEqual(make_display_text(1999.4), 1999.0)
        self.assertEqual(make_display_text(1999.5), 2000.0)
        self.assertEqual(make_display_text(1999499.0), 1999000.0)
        self.assertTrue(math.isnan(make_display_text(1999500.0)))

    def test_wiring(self) -> None:
        meter = Multimeter()
        self.assertFalse(meter.all_connected())
        meter.connect("red_probe", "resistor_lead1")
        meter.connect("black_probe", "resistor_lead2")
        meter.power_on = True
        self.assertTrue(meter.all_connected())
        meter.connect("black_probe", "resistor_lead1")
        self.assertFalse(meter.all_connected())
        with self.assertRaises(ValueError):
            meter.connect("green_probe", "resistor_lead1")
        with self.assertRaises(ValueError):
            meter.set_dial("r_9000")


class ResistorTests(unittest.TestCase):
    def test_tables(self) -> None:
        self.assertEqual(len(E12), 96)
        self.assertIn(4.7e3, E24)
        self.assertIn(1.21e3, E48)
        self.assertIn(48.7, E96)

    def test_filter(self) -> None:
        values = filter_values([1.0, 10.0, 4700.0, 2e6, 1.96e6])
        self.assertEqual(values, [10.0, 4700.0, 1.96e6])

    def test_colors(self) -> None:
        self.assertEqual(Resistor4band().get_colors(4700.0, 0.05), ["yellow", "violet", "red", "gold"])
        self.assertEqual(Resistor4band().get_colors(10.0, 0.1), ["brown", "black", "black", "silver"])
        self.assertEqual(Resistor5band().get_colors(12.1, 0.01), ["brown", "red", "brown", "gold", "brown"])
        self.assertEqual(Resistor5band().get_colors(100e3, 0.02), ["brown", "black", "black", "orange", "red"])

    def test_randomize(self) -> None:
        rng = random.Random(7)
        for num_bands in (4, 5):
            resistor = make_resistor(num_bands)
            for _ in range(50):
                resistor.randomize(rng)
                self.assertIn(resistor.tolerance, resistor.tolerance_values)
                self.assertIn(resistor.nominal_value, resistor.values[resistor.tolerance])
                self.assertTrue(10.0 <= resistor.nominal_value < 2e6)
                # never further out than twice the tolerance
                self.assertLessEqual(
                    abs(resistor.real_value - resistor.nominal_value),
                    2 * resistor.tolerance * resistor.nominal_value + 1e-9,
                )
                self.assertEqual(len(resistor.colors), num_bands)

    def test_pinned_values(self) -> None:
        resistor = make_resistor(4)
        resistor.set_values(1000.0, 0.05, 1020.0)
        self.assertEqual((resistor.nominal_value, resistor.real_value), (1000.0, 1020.0))
        self.assertEqual(resistor.colors[:3], ["brown", "black", "red"])

    def test_unsupported_bands(self) -> None:
        with self.assertRaises(ValueError):
            make_resistor(3)


if __name__ == "__main__":
    unittest.main()
