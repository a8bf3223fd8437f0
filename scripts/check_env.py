"""
Check Required Environment Variables

Verifies that the database connection strings are set before a build or
deploy. Exits with status 1 when any is missing.

Usage:
    python scripts/check_env.py
"""
import os
import sys
from typing import Iterable, Mapping, Optional

REQUIRED_ENV_VARS = ("DATABASE_URL", "DIRECT_DATABASE_URL")


def check_env(keys: Iterable[str] = REQUIRED_ENV_VARS, environ: Optional[Mapping[str, str]] = None) -> bool:
    """
    Report presence of each variable.

    Args:
        keys: Variable names to check
        environ: Environment mapping (defaults to os.environ)

    Returns:
        True if every variable is set and non-empty
    """
    environ = os.environ if environ is None else environ
    ok = True
    for key in keys:
        present = bool(environ.get(key))
        print(f"[env] {key}: {'present' if present else 'MISSING'}")
        if not present:
            ok = False
    return ok


def main() -> int:
    if not check_env():
        print("Missing env(s). Ensure they are set for both build and runtime.", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
