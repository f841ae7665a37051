# src/pgsb_docker/cli.py
from __future__ import annotations
import os
import sys
from typing import Optional, Sequence

from .args import USAGE, HelpRequested, parse_args, peek_config_path, wants_help
from .config import load_config
from .errors import ArgumentError, SubprocessError
from .mounts import build_mount_plan
from .paths import abspath, common_directory
from .runner import build_invocation, describe, run_invocation


def main(argv: Optional[Sequence[str]] = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)

    try:
        # help wins over a broken or missing config file
        if wants_help(argv):
            raise HelpRequested("")
        cfg = load_config(peek_config_path(argv))
        spec = parse_args(argv, cfg)
    except HelpRequested as e:
        if str(e):
            print(e)
        print(USAGE)
        return 1
    except ArgumentError as e:
        print(e, file=sys.stderr)
        return 1

    # The output dir must exist before it can be resolved and mounted
    try:
        os.makedirs(spec.outdir, exist_ok=True)
    except OSError as e:
        print(f"Error: cannot create output directory {spec.outdir}: {e}", file=sys.stderr)
        return 1

    inputs = [abspath(spec.genotype_path), abspath(spec.pgs_model)]
    common_dir = common_directory(inputs)
    plan = build_mount_plan(common_dir, abspath(spec.outdir), cfg)

    inv = build_invocation(spec, plan, cfg)
    describe(inv, plan)
    if spec.dry_run:
        print("[OK] dry run; container not started")
        return 0

    try:
        return run_invocation(inv)
    except SubprocessError as e:
        print(e, file=sys.stderr)
        return e.returncode
    except FileNotFoundError as e:
        print(f"Error: cannot execute '{inv.runtime}': {e}", file=sys.stderr)
        return 127
    except KeyboardInterrupt:
        print("Interrupted.", file=sys.stderr)
        return 130


def entrypoint() -> None:
    sys.exit(main())


if __name__ == "__main__":
    entrypoint()
