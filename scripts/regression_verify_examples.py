from __future__ import annotations

import json
import sys
from pathlib import Path

# Make `src/` importable (matches DirectVerifier / UI entrypoints).
_REPO_ROOT = Path(__file__).resolve().parents[1]
_SRC_DIR = _REPO_ROOT / "src"
if str(_SRC_DIR) not in sys.path:
    sys.path.insert(0, str(_SRC_DIR))

from verify_pipeline import SOURCE_SUFFIX, verify_file  # noqa: E402


def _collect_examples(kind: str) -> list[Path]:
    return sorted((_REPO_ROOT / "examples" / kind).glob(f"*{SOURCE_SUFFIX}"))


def _expected_errors_path() -> Path:
    return _REPO_ROOT / "examples" / "incorrect_examples" / "expected_errors.json"


def _load_expected_cases(*, expected_file: Path) -> dict[str, dict[str, object]]:
    data = json.loads(expected_file.read_text(encoding="utf-8"))
    cases = data.get("cases")
    if not isinstance(cases, dict):
        raise ValueError(
            f"Invalid expected errors file format (missing/invalid 'cases'): {expected_file}"
        )
    return cases


def _check_correct(files: list[Path]) -> list[Path]:
    failures: list[Path] = []
    for path in files:
        rel = path.relative_to(_REPO_ROOT)
        outcome = verify_file(path)
        if outcome.ok:
            print(f"OK PASS        {rel}")
        else:
            print(f"UNEXPECTED FAIL {rel}: {outcome.message}")
            failures.append(path)
    return failures


def main(argv: list[str]) -> int:
    expected_file = _expected_errors_path()
    if not expected_file.exists():
        rel = expected_file.relative_to(_REPO_ROOT)
        print(f"Missing expected errors file: {rel}")
        print("Generate it with: python scripts/capture_incorrect_expected_errors.py")
        return 2

    expected_cases = _load_expected_cases(expected_file=expected_file)

    correct_files = _collect_examples("correct_examples")
    incorrect_files = _collect_examples("incorrect_examples")
    if not correct_files and not incorrect_files:
        print(f"No files found under examples/*/*{SOURCE_SUFFIX}")
        return 2

    unexpected_failures = _check_correct(correct_files)

    # These must fail with an exact, stable message.
    unexpected_passes: list[Path] = []
    missing_expected: list[Path] = []
    message_mismatches: list[tuple[Path, object, str]] = []
    observed_keys: set[str] = set()

    for path in incorrect_files:
        rel = path.relative_to(_REPO_ROOT)
        key = rel.as_posix()
        observed_keys.add(key)

        expected = expected_cases.get(key)
        if expected is None:
            print(f"MISSING EXPECTED {rel}")
            missing_expected.append(path)
            continue

        outcome = verify_file(path)
        if outcome.ok:
            print(f"UNEXPECTED PASS {rel}")
            unexpected_passes.append(path)
            continue

        expected_message = expected.get("message")
        expected_kind = expected.get("kind")
        actual_kind = outcome.kind.value if outcome.kind else None
        if outcome.message == expected_message and (
            expected_kind is None or expected_kind == actual_kind
        ):
            print(f"OK FAIL        {rel}: {outcome.message}")
        else:
            print(f"BAD MESSAGE    {rel}")
            print(f"  expected: [{expected_kind}] {expected_message}")
            print(f"  actual:   [{actual_kind}] {outcome.message}")
            message_mismatches.append((path, expected_message, outcome.message))

    stale_expected = sorted(set(expected_cases.keys()) - observed_keys)
    for key in stale_expected:
        print(f"STALE EXPECTED {key}")

    print(
        f"\nCORRECT {len(correct_files)}  UNEXPECTED_FAILURES {len(unexpected_failures)}"
        f"\nINCORRECT {len(incorrect_files)}  UNEXPECTED_PASSES {len(unexpected_passes)}"
        f"  MISSING_EXPECTED {len(missing_expected)}"
        f"  MESSAGE_MISMATCHES {len(message_mismatches)}"
        f"  STALE_EXPECTED {len(stale_expected)}"
    )

    failed = (
        unexpected_failures
        or unexpected_passes
        or missing_expected
        or message_mismatches
        or stale_expected
    )
    return 1 if failed else 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv))
