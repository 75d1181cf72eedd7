"""Department code extraction from French postal addresses."""

from __future__ import annotations

import re

UNKNOWN_REGION = "Unknown"

_POSTAL_CODE_RE = re.compile(r"\b(\d{5})\b")

# Approximate position (percent of width, percent of height) of each
# metropolitan department on a reference map of France.
DEPARTMENT_COORDS: dict[str, tuple[int, int]] = {
    "01": (73, 55), "02": (62, 18), "03": (58, 50), "04": (85, 78), "05": (86, 70),
    "06": (92, 80), "07": (70, 68), "08": (68, 15), "09": (45, 90), "10": (68, 30),
    "11": (55, 88), "12": (55, 75), "13": (78, 85), "14": (35, 20), "15": (55, 65),
    "16": (38, 58), "17": (30, 55), "18": (55, 45), "19": (50, 60), "21": (70, 42),
    "22": (18, 30), "23": (50, 55), "24": (40, 65), "25": (85, 45), "26": (72, 70),
    "27": (45, 22), "28": (48, 30), "29": (10, 32), "30": (70, 80), "31": (42, 88),
    "32": (40, 82), "33": (30, 68), "34": (60, 85), "35": (28, 32), "36": (48, 50),
    "37": (40, 42), "38": (78, 62), "39": (78, 48), "40": (30, 80), "41": (48, 40),
    "42": (68, 58), "43": (65, 65), "44": (25, 45), "45": (52, 35), "46": (50, 72),
    "47": (38, 75), "48": (62, 75), "49": (32, 42), "50": (28, 22), "51": (65, 25),
    "52": (75, 32), "53": (32, 35), "54": (82, 25), "55": (75, 22), "56": (18, 40),
    "57": (85, 20), "58": (60, 45), "59": (58, 8), "60": (52, 18), "61": (38, 28),
    "62": (52, 10), "63": (60, 60), "64": (28, 88), "65": (38, 90), "66": (58, 92),
    "67": (92, 22), "68": (90, 35), "69": (70, 58), "70": (80, 40), "71": (70, 50),
    "72": (40, 35), "73": (85, 62), "74": (85, 55), "75": (54, 26), "76": (45, 15),
    "77": (58, 28), "78": (50, 26), "79": (32, 52), "80": (55, 15), "81": (52, 82),
    "82": (45, 78), "83": (82, 85), "84": (75, 80), "85": (25, 52), "86": (40, 50),
    "87": (45, 58), "88": (82, 32), "89": (62, 35), "90": (88, 42), "91": (52, 28),
    "92": (53, 26), "93": (55, 25), "94": (55, 27), "95": (52, 24),
}


def extract_region(address: object) -> str:
    if address is None:
        return UNKNOWN_REGION
    match = _POSTAL_CODE_RE.search(str(address))
    if not match:
        return UNKNOWN_REGION
    return match.group(1)[:2]


def department_coordinates(code: str) -> tuple[int, int] | None:
    return DEPARTMENT_COORDS.get(code)
