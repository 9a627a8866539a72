from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

# Make `src/` importable (matches DirectVerifier / UI entrypoints).
_REPO_ROOT = Path(__file__).resolve().parents[1]
_SRC_DIR = _REPO_ROOT / "src"
if str(_SRC_DIR) not in sys.path:
    sys.path.insert(0, str(_SRC_DIR))

from verify_pipeline import SOURCE_SUFFIX, verify_file  # noqa: E402


def _default_expected_file() -> Path:
    return _REPO_ROOT / "examples" / "incorrect_examples" / "expected_errors.json"


def main(argv: list[str]) -> int:
    parser = argparse.ArgumentParser(
        description=(
            f"Verify all examples/incorrect_examples/*{SOURCE_SUFFIX} and record the exact "
            "error message and kind each one fails with."
        )
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=_default_expected_file(),
        help="Where to write the expected error message JSON.",
    )
    args = parser.parse_args(argv[1:])

    files = sorted((_REPO_ROOT / "examples" / "incorrect_examples").glob(f"*{SOURCE_SUFFIX}"))
    if not files:
        print(f"No files found under examples/incorrect_examples/*{SOURCE_SUFFIX}")
        return 2

    cases: dict[str, dict[str, object]] = {}
    unexpected_passes: list[str] = []

    for path in files:
        key = path.relative_to(_REPO_ROOT).as_posix()
        outcome = verify_file(path)
        if outcome.ok:
            print(f"UNEXPECTED PASS {key}")
            unexpected_passes.append(key)
            cases[key] = {"expected_ok": False, "kind": None, "message": None}
        else:
            print(f"CAPTURED FAIL  {key}: {outcome.message}")
            cases[key] = {
                "expected_ok": False,
                "kind": outcome.kind.value if outcome.kind else None,
                "message": outcome.message,
            }

    payload = {"schema_version": 1, "cases": cases}
    args.output.parent.mkdir(parents=True, exist_ok=True)
    args.output.write_text(
        json.dumps(payload, indent=2, sort_keys=True, ensure_ascii=False) + "\n",
        encoding="utf-8",
    )

    print(f"\nWROTE {args.output}")
    print(f"TOTAL {len(files)}  UNEXPECTED_PASSES {len(unexpected_passes)}")
    return 1 if unexpected_passes else 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv))
