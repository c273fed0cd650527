#!/usr/bin/env python3
"""
Run the CI checks locally using the ACTIVE virtual environment.

Order:
  1) uv sync --all-extras [--frozen if uv.lock exists]  (ACTIVE venv)
  2) black --check on namesort, tests and scripts
  3) mypy on namesort
  4) pytest tests/ with coverage and PYTHONPATH=.

All commands run from the repo root (the directory holding pyproject.toml).
"""

import os
import sys
import shutil
import subprocess
from pathlib import Path


def uv_exe() -> list[str]:
    uv_path = shutil.which("uv")
    if uv_path:
        return [uv_path]
    print("ERROR: 'uv' not found. Install uv first.", file=sys.stderr)
    sys.exit(2)


def repo_root() -> Path:
    here = Path(__file__).resolve().parent
    for d in [here] + list(here.parents):
        if (d / "pyproject.toml").exists():
            return d
    return here


REPO = repo_root()


def run(cmd: list[str], *, env: dict[str, str] | None = None) -> None:
    print(">>>", " ".join(cmd))
    subprocess.run(cmd, check=True, cwd=str(REPO), env=env)


def main() -> None:
    sync_args = ["sync", "--active", "--all-extras"]
    if (REPO / "uv.lock").exists():
        sync_args.append("--frozen")
    run(uv_exe() + sync_args)

    # black reads line-length from pyproject.toml
    run(uv_exe() + ["run", "--active", "black", "namesort", "tests", "scripts", "--check"])

    run(uv_exe() + ["run", "--active", "mypy", "namesort", "--ignore-missing-imports"])

    env = os.environ.copy()
    env["PYTHONPATH"] = str(REPO)
    run(
        uv_exe()
        + [
            "run",
            "--active",
            "pytest",
            "tests/",
            "--cov=namesort",
            "--cov-report=term-missing",
            "--cov-fail-under=80",
        ],
        env=env,
    )

    print("\nALL CHECKS PASSED")


if __name__ == "__main__":
    try:
        main()
    except subprocess.CalledProcessError as e:
        print(f"\nCommand failed with exit code {e.returncode}", file=sys.stderr)
        sys.exit(e.returncode)
