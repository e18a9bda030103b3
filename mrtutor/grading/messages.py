from __future__ import annotations

"""Feedback message table.

Keyed by (rubric item, outcome). Each template carries a title, a body with
``${...}`` placeholders and a slot list: for the n-th placeholder in the
body, the index of the substitution that fills it and the colour used to
highlight it. Placeholders without a slot are left untouched.
"""

from dataclasses import dataclass
from typing import Dict, Tuple

BLUE = "blue"
RED = "red"
ORANGE = "orange"
GREEN = "green"

Slot = Tuple[int, str]


@dataclass(frozen=True)
class MessageTemplate:
    title: str
    body: str
    slots: Tuple[Slot, ...] = ()


def _t(title: str, body: str, *slots: Slot) -> MessageTemplate:
    return MessageTemplate(title=title, body=body, slots=tuple(slots))


MESSAGES: Dict[str, Dict[str, MessageTemplate]] = {
    "rated_r_value": {
        "correct": _t(
            "Correct interpretation of color bands",
            "Good work! You correctly interpreted the color bands used to label this resistor's rated resistance value.",
        ),
        "power_ten": _t(
            "Power-of-ten error",
            "Although you got the digits correct, based on the first ${number of bands} bands, you seemed to have "
            "trouble interpreting the power-of-ten band. This band determines the power of ten to multiply the "
            "digits from the first ${number of bands - 1} bands. See the Color Band tutorial for additional help.",
            (0, BLUE),
            (1, BLUE),
        ),
        "difficulty": _t(
            "Apparent difficulty interpreting color bands",
            "One of the digits that you reported from the color bands was incorrect. Roll over each band to expand "
            "the color and double-check your interpretation of each color band before submitting your answer. See "
            "the Color Band tutorial for additional help.",
        ),
        "incorrect": _t(
            "Incorrect interpretation of color bands",
            "The resistance value you submitted indicates that you misinterpreted more than one color band. You seem "
            "to be having difficulty using the color bands to determine the rated resistor value. See the Color Band "
            "tutorial for a table of band colors and the numbers they signify.",
        ),
        "unit": _t(
            "Incorrect units (not resistance units)",
            "You mistakenly specified ${selected unit} in your answer. That is not a unit of resistance. The base "
            "unit for resistance is the ohm.",
            (0, RED),
        ),
    },
    "rated_t_value": {
        "correct": _t(
            "Correct interpretation of tolerance color band",
            "Good work! You correctly interpreted the color band used to label this resistor's rated tolerance.",
        ),
        "incorrect": _t(
            "Incorrect tolerance value",
            "You specified ${your tolerance-value}, rather than the correct tolerance value of ${tolerance value}. "
            "Next time, refer to the color code for the tolerance band. See the Color Band tutorial for additional "
            "help.",
            (1, RED),
            (0, BLUE),
        ),
    },
    "measured_r_value": {
        "correct": _t(
            "Correct measured R value",
            "You correctly reported the value of this resistor as measured with the digital multimeter.",
        ),
        "incomplete": _t(
            "Did not record complete value from DMM display.",
            "You should record all the digits displayed by the digital multimeter; don't round the results. While "
            "the DMM displayed ${dmm-display}, your answer was ${your answer-value}.",
            (0, BLUE),
            (1, RED),
        ),
        "power_ten": _t(
            "Power-of-ten error.",
            "While the digits you submitted from the digital multimeter display appear to be correct, the power of "
            "ten implied by the units you chose were incorrect. Your answer was ${your answer-value} "
            "${your answer-units}, but the correct answer was ${answer-ohms}, ${answer-k-ohms}, or "
            "${answer meg-ohms}.",
            (0, ORANGE),
            (1, ORANGE),
            (2, BLUE),
            (3, BLUE),
            (4, BLUE),
        ),
        "incorrect": _t(
            "Not a measured value.",
            "Submitted value does not match a value measured with the digital multimeter. The tutorial on this "
            "subject may help clarify this topic for you.",
        ),
        "unit": _t(
            "Incorrect type of units.",
            "The result of a resistance measurement should be a resistance unit, such as Ω, kΩ, or MΩ, not "
            "${your answer-unit}.",
            (0, RED),
        ),
    },
    "plug_connection": {
        "correct": _t(
            "Correct connections to the DMM",
            "Good work. The probes were correctly connected to the digital multimeter for this measurement.",
        ),
        "reverse": _t(
            "Connections to DMM are reversed",
            "While the meter will still read resistance measurements correctly, it is good practice to always "
            "connect the red lead to the VΩmA jack, and the black lead to the COM jack of the DMM. This will be "
            "essential when making correct measurements of voltage and current in later modules. See the Using the "
            "DMM tutorial for additional help.",
        ),
        "incorrect": _t(
            "Connections to the DMM are incorrect",
            "The digital multimeter will not measure resistance unless the leads are plugged in correctly: red lead "
            "to VΩmA jack, black lead to COM jack. While there is no risk in this case, any time you connect the "
            "leads to incorrect DMM jacks and to a circuit, you may damage the meter and/or your circuit. See the "
            "Using the DMM tutorial for additional help.",
        ),
    },
    "probe_connection": {
        "correct": _t(
            "Correct connections to the resistor",
            "Good work. You correctly connected the probes to each end of the resistor to make your resistance "
            "measurement.",
        ),
        "incorrect": _t(
            "Incorrect connections to the resistor",
            "You must connect one of the digital multimeter probes to each end of the resistor to make a resistance "
            "measurement. See the Using the DMM tutorial for additional help.",
        ),
    },
    "knob_setting": {
        "correct": _t(
            "Correct DMM knob setting.",
            "Good work. You set the digital multimeter knob to the correct resistance scale for this resistance "
            "measurement.",
        ),
        "suboptimal": _t(
            "DMM knob set to incorrect resistance scale",
            "While the digital multimeter knob was set to measure resistance, it was not set to display the optimal "
            "scale for this resistance measurement. You chose ${your-knob-setting}, but the best scale setting for "
            "your resistor would have been ${optimum-knob-setting}. See the Using the DMM tutorial for additional "
            "help.",
            (1, ORANGE),
            (0, BLUE),
        ),
        "incorrect": _t(
            "DMM knob not set to a resistance scale",
            "While there is no risk in this case, the digital multimeter knob should always be set to the proper "
            "type of measurement. Here you are measuring resistance, and so the DMM knob should be set to a "
            "resistance scale, such as 2000Ω, 20kΩ, and so forth. Any other knob-type setting may damage either the "
            "meter and/or your circuit. See the Using the DMM tutorial for additional help.",
        ),
    },
    "power_switch": {
        "correct": _t(
            "DMM turned ON",
            "Good work. You correctly turned on the digital multimeter to make this resistance measurement.",
        ),
        "incorrect": _t(
            "DMM was not turned ON",
            "The digital multimeter was off. A digital multimeter can only function with power supplied to the "
            "electronics within and the display. In addition, when making resistance measurements, a DMM must "
            "supply a small amount of test current through the probes. See the Using the DMM tutorial for "
            "additional help.",
        ),
    },
    "task_order": {
        "correct": _t(
            "Order of tasks is acceptable.",
            "When measuring resistance, it is always a good practice to have the DMM knob set to a resistance "
            "function prior to turning ON the digital multimeter and connecting the probes to the circuit, just as "
            "you did. Good job!",
        ),
        "incorrect": _t(
            "Incorrect order of tasks",
            "When measuring resistance, it is not good practice to have the digital multimeter knob set to a "
            "non-resistance function when it is turned on and connected to a circuit. At some point during this "
            "session, we noted that this condition occurred. Next time, turn the DMM knob to a resistance function "
            "before connecting the leads to the resistor. See the Using the DMM tutorial for additional help.",
        ),
    },
    "t_range_value": {
        "correct": _t(
            "Correct calculation",
            "You correctly applied the ${tolerance-band-number} tolerance band to the ${resistor-value} resistor "
            "value to calculate the tolerance range for this resistor, and included all the digits in your answer. "
            "Good work.",
            (1, BLUE),
            (0, BLUE),
        ),
        "rounded": _t(
            "Rounded result",
            "You appeared to correctly apply the ${tolerance-band-number} tolerance band to the ${resistor-value} "
            "resistor value to calculate the tolerance range for this resistor, but you seem to have rounded your "
            "answer. For this activity, we recommend you report as many digits as the rated value of the resistance "
            "has. For instance, if the rated resistance is 12,300 ohms, based on a reading of a five color band "
            "resistor, you should report the minimum and maximum values of the tolerance range to three significant "
            "digits.",
            (1, BLUE),
            (0, BLUE),
        ),
        "inaccurate": _t(
            "Inaccurate tolerance",
            "The tolerance range that you specified is close but incorrect. You reported "
            "${student's-tolerance-range} but the correct answer was ${correct-tolerance-range}. See the "
            "Calculating Tolerance tutorial for additional help.",
            (1, RED),
            (0, BLUE),
        ),
        "wrong": _t(
            "Wrong tolerance",
            "The tolerance range that you specified is incorrect. You reported ${student's-tolerance-range} but the "
            "correct answer was ${correct-tolerance-range}. See the Calculating Tolerance tutorial for additional "
            "help.",
            (1, RED),
            (0, BLUE),
        ),
    },
    "within_tolerance": {
        "correct": _t(
            "Measurement recognized as in/out of tolerance",
            "Good work. The measured value, ${your answer-value}, should fall within the tolerance range, that is "
            "between the minimum ${min-resistance-value} and the maximum ${max resistance value} that you calculated "
            "based on the tolerance percentage. Since the measured value of this resistor ${did|did not} fall "
            "within this range, this resistor ${is|is not} within tolerance.",
            (0, GREEN),
            (1, BLUE),
            (2, BLUE),
            (3, GREEN),
            (4, GREEN),
        ),
        "incorrect": _t(
            "Measurement not recognized as in/out of tolerance",
            "The measured value, ${your answer-value}, should fall within the tolerance range, that is between the "
            "minimum ${min-resistance-value} and the maximum ${max resistance value} that you calculated based on "
            "the tolerance percentage. Since the measured value ${did|did not} fall within this range, this "
            "resistor ${is|is not} within tolerance.",
            (0, GREEN),
            (1, BLUE),
            (2, BLUE),
            (3, GREEN),
            (4, GREEN),
        ),
        "undef": _t(
            "Previous question(s) incorrect",
            "Your answer to either the measuring resistance question or the tolerance range question was incorrect, "
            "so you didn't have enough information to answer this question.",
        ),
    },
    "reading_time": {
        "efficient": _t(
            "Very efficient!",
            "For this assessment, remembering and quickly interpreting the color bands on a resistor is the key to "
            "entering your answer in less than 20 seconds. You did this! Good work!",
        ),
        "semi": _t(
            "Can you speed it up?",
            "For this assessment, you should be able to remember and interpret the color bands on a resistor, and "
            "then enter your answer in less than 20 seconds. Are you still looking up each color? Try memorizing the "
            "color code and get familiar with the key strokes to enter the values. See the Color Band tutorial for "
            "additional help and try again.",
        ),
        "slow": _t(
            "Too slow",
            "For this assessment, you should be able to remember and interpret the color bands on a resistor, and "
            "then enter your answer in less than 20 seconds. You took ${your-time} seconds. That's too long! Are you "
            "still having to look up each color? Try memorizing the color code and get familiar with the key strokes "
            "to enter the values. See the Color Band tutorial for additional help, then try again and see if you "
            "can go faster.",
            (0, RED),
        ),
    },
    "measuring_time": {
        "efficient": _t(
            "Very efficient!",
            "For this assessment, setting up the digital multimeter and correctly connecting it to the circuit is "
            "the key to entering your answer in less than 20 seconds. You did this! Good work!",
        ),
        "semi": _t(
            "Efficient",
            "For this assessment, you should be familiar with the digital multimeter so you know where to set the "
            "knob, where to connect the leads, and how to turn on the meter to obtain a reading in less than 20 "
            "seconds. See the Using the DMM tutorial for additional help.",
        ),
        "slow": _t(
            "Too slow",
            "Your goal is to use the digital multimeter quickly and effectively. You should be familiar with the "
            "DMM so that you know where to set the knob, where to connect the leads, and how to turn it on in order "
            "to obtain a reading in less than 20 seconds. You took ${your-time} seconds. That's too long! See the "
            "Using the DMM tutorial for additional help.",
            (0, RED),
        ),
    },
}
