#!/usr/bin/env python3
"""
Fail commits that add direct swisseph/pyswisseph imports outside approved modules.

Approved locations:
- src/astrocache/engine/swe_backend.py (provider)
- src/astrocache/engine/time_utils.py (Julian day)
- src/astrocache/engine/constants.py (body IDs)

Everything else goes through the EphemerisProvider protocol.
"""
from __future__ import annotations

import sys
from pathlib import Path

APPROVED_PATHS = {
    "src/astrocache/engine/swe_backend.py",
    "src/astrocache/engine/time_utils.py",
    "src/astrocache/engine/constants.py",
}


def is_approved(path: Path) -> bool:
    p = path.as_posix()
    return any(p.endswith(approved) for approved in APPROVED_PATHS)


def find_violations(paths: list[Path]) -> list[str]:
    bad: list[str] = []
    for p in paths:
        if not p.exists() or p.is_dir() or p.suffix != ".py":
            continue
        if is_approved(p):
            continue
        text = p.read_text(encoding="utf-8", errors="ignore")
        if "import swisseph" in text or "import pyswisseph" in text:
            bad.append(str(p))
    return bad


def main(argv: list[str]) -> int:
    bad = find_violations([Path(arg) for arg in argv])
    if bad:
        print(
            "::error::Direct swisseph/pyswisseph imports are restricted. Use the EphemerisProvider.\n"
            + "\n".join(f" - {b}" for b in bad)
        )
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
