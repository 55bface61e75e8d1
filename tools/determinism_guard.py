"""
Determinism guard (static check).

Purpose:
- Keep the simulation core reproducible from its seed: the same seed and the same
  input-intent sequence must always produce the same island and the same run.

What we flag (in core code):
- Wall-clock-ish time: pygame.time.get_ticks(), time.time(), time.monotonic(), datetime.now(), etc.
- Unseeded / global RNG: random.random/randint/choice/shuffle/..., secrets.*, os.urandom()
- Python's hash() (process-randomized by default)
- Any pygame import (the core must stay headless)

We intentionally DO NOT scan:
- castaway/ui/**, castaway/graphics/**, castaway/engine.py (front-end may use wall-clock time)
- castaway/sim/determinism.py (the seed boundary is allowed to draw fresh entropy)

Usage:
  python tools/determinism_guard.py
  python tools/determinism_guard.py --json
"""

from __future__ import annotations

import argparse
import ast
import json
from pathlib import Path
from typing import Iterable


PROJECT_ROOT = Path(__file__).resolve().parents[1]
PACKAGE_ROOT = PROJECT_ROOT / "castaway"


DEFAULT_SCAN_PATHS = [
    PACKAGE_ROOT / "entities",
    PACKAGE_ROOT / "systems",
    PACKAGE_ROOT / "sim",
    PACKAGE_ROOT / "simulation.py",
    PACKAGE_ROOT / "world.py",
    PACKAGE_ROOT / "worldgen.py",
]

DEFAULT_EXCLUDES = [
    PACKAGE_ROOT / "ui",
    PACKAGE_ROOT / "graphics",
    PACKAGE_ROOT / "sim" / "determinism.py",
]


_GLOBAL_RNG_CALLS = frozenset(
    ("random", "randint", "uniform", "choice", "choices", "sample", "shuffle", "seed", "randrange", "gauss")
)

_CLOCK_CALLS = frozenset(("time", "monotonic", "perf_counter"))

_DATETIME_CALLS = frozenset(("now", "utcnow", "today"))


def _is_under(path: Path, parent: Path) -> bool:
    return path.resolve().is_relative_to(parent.resolve())


def _iter_py_files(roots: Iterable[Path], *, excludes: list[Path]) -> list[Path]:
    out: list[Path] = []
    for root in roots:
        if not root.exists():
            continue
        candidates = [root] if root.is_file() else list(root.rglob("*.py"))
        for p in candidates:
            if p.suffix.lower() != ".py":
                continue
            if any(_is_under(p, ex) for ex in excludes):
                continue
            out.append(p)
    return sorted(set(out))


def _attr_chain(node: ast.AST) -> list[str] | None:
    """Dotted call target as parts: `pygame.time.get_ticks` -> ["pygame", "time", "get_ticks"]."""
    parts: list[str] = []
    while isinstance(node, ast.Attribute):
        parts.append(node.attr)
        node = node.value
    if not isinstance(node, ast.Name):
        return None
    parts.append(node.id)
    return parts[::-1]


def _display_path(file: Path) -> str:
    try:
        return str(file.resolve().relative_to(PROJECT_ROOT))
    except ValueError:
        return str(file)


def _violation(kind: str, file: Path, node: ast.AST, detail: str) -> dict:
    return {
        "kind": kind,
        "file": _display_path(file),
        "line": int(getattr(node, "lineno", 0) or 0),
        "col": int(getattr(node, "col_offset", 0) or 0),
        "detail": detail,
    }


def _check_import(file_path: Path, node: ast.AST) -> list[dict]:
    names: list[str] = []
    if isinstance(node, ast.Import):
        names = [a.name for a in node.names]
    elif isinstance(node, ast.ImportFrom) and node.module:
        names = [node.module]
    if any(n == "pygame" or n.startswith("pygame.") for n in names):
        return [_violation("frontend_import", file_path, node, "Core modules must not import pygame; render from snapshots instead.")]
    return []


def _check_call(file_path: Path, node: ast.Call) -> list[dict]:
    chain = _attr_chain(node.func)
    if not chain:
        return []

    if chain == ["pygame", "time", "get_ticks"]:
        return [_violation("wall_clock_time", file_path, node, "Use the simulation clock (dt accumulation) instead of pygame.time.get_ticks().")]

    if len(chain) == 2 and chain[0] == "time" and chain[1] in _CLOCK_CALLS:
        return [_violation("wall_clock_time", file_path, node, f"Avoid time.{chain[1]}() in simulation logic; accumulate dt instead.")]

    if chain[-1] in _DATETIME_CALLS and ("datetime" in chain or "date" in chain):
        return [_violation("wall_clock_time", file_path, node, "Avoid datetime.now()/utcnow()/today() in simulation logic.")]

    if len(chain) == 2 and chain[0] == "random" and chain[1] in _GLOBAL_RNG_CALLS:
        return [_violation("global_rng", file_path, node, "Use castaway.sim.determinism.Mulberry32 (seeded) instead of random.*.")]

    if chain[0] == "secrets" or chain == ["os", "urandom"]:
        return [_violation("global_rng", file_path, node, "Fresh entropy belongs at the seed boundary (resolve_seed) only.")]

    if chain == ["hash"]:
        return [_violation("unstable_hash", file_path, node, "Avoid Python hash(); use castaway.sim.determinism.hash_noise or explicit IDs.")]

    return []


def scan_source(src: str, file_path: Path) -> list[dict]:
    try:
        tree = ast.parse(src, filename=str(file_path))
    except SyntaxError as e:
        return [
            {
                "kind": "parse_error",
                "file": _display_path(file_path),
                "line": int(getattr(e, "lineno", 0) or 0),
                "col": int(getattr(e, "offset", 0) or 0),
                "detail": f"SyntaxError: {e}",
            }
        ]

    findings: list[dict] = []
    for node in ast.walk(tree):
        if isinstance(node, (ast.Import, ast.ImportFrom)):
            findings.extend(_check_import(file_path, node))
        elif isinstance(node, ast.Call):
            findings.extend(_check_call(file_path, node))
    return findings


def scan_file(file_path: Path) -> list[dict]:
    return scan_source(file_path.read_text(encoding="utf-8", errors="replace"), file_path)


def scan_paths(paths: Iterable[Path] | None = None) -> list[dict]:
    roots = list(paths) if paths else list(DEFAULT_SCAN_PATHS)
    findings: list[dict] = []
    for f in _iter_py_files(roots, excludes=list(DEFAULT_EXCLUDES)):
        findings.extend(scan_file(f))
    return findings


def main() -> int:
    ap = argparse.ArgumentParser(description="Static determinism guard (simulation core)")
    ap.add_argument(
        "--paths",
        nargs="*",
        default=[],
        help="Optional paths to scan (files or dirs). Default scans the castaway core modules.",
    )
    ap.add_argument("--json", action="store_true", help="Emit machine-readable JSON")
    ns = ap.parse_args()

    all_findings = scan_paths([Path(p) for p in ns.paths])

    if ns.json:
        print(json.dumps({"findings": all_findings}, indent=2))
    else:
        if not all_findings:
            print("[determinism_guard] PASS: no violations found")
        else:
            print(f"[determinism_guard] FAIL: {len(all_findings)} violation(s)")
            for v in all_findings:
                print(f"- {v['file']}:{v['line']}:{v['col']} [{v['kind']}] {v['detail']}")

    return 0 if not all_findings else 1


if __name__ == "__main__":
    raise SystemExit(main())
