"""Raw .TES records shared by the tests."""

from __future__ import annotations

# One fix recorded 2017-11-06 12:11:35 UTC near 30.18N, 82.69W.
BASIC_RECORD = bytes.fromhex("00 00 E3 C2 CC 46 20 01 FD 11 C0 54 B6 CE 25 00")
MARKER_RECORD = bytes.fromhex("02 00 E3 C2 CC 46 20 01 FD 11 C0 54 B6 CE 25 00")

THREE_RECORDS = bytes.fromhex(
    "00 00 E3 C2 CC 46 20 01 FD 11 C0 54 B6 CE 25 00 "
    "00 00 E4 C2 CC 46 00 01 FD 11 C0 54 B6 CE 25 00 "
    "00 00 E5 C2 CC 46 E0 00 FD 11 C0 54 B6 CE 25 00"
)
