# src/pgsb_docker/args.py
from __future__ import annotations
import argparse
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from .config import WrapperConfig
from .errors import ArgumentError, PgsbDockerError

USAGE = """
  This Docker wrapper runs the PGS Browser CLI by automatically:
   1) Determining a common directory for all input files
      (VCF/PLINK + PGS model).
   2) Mounting that common directory as /app/data in the container (read-only).
   3) Mounting the output directory as /app/outputs (read-write).
   4) Rewriting your paths so the tool sees them under /app/data or /app/outputs.

  Required flags:
    --vcf <path>       or
    --bfile <prefix>   (exactly one of these two must be provided)
    --pgs_model <path>
    [--outdir <dir>]   (default: outputs)
    [--min_overlap <float>] (default: 0.7)
    [--help]

  Wrapper options (not passed to the container):
    [--docker_config <yaml>]  runtime/image settings (or $PGSB_DOCKER_CONFIG)
    [--docker_dry_run]        print the docker command without running it

  Any other flags are passed through to the PGS Browser CLI unchanged.

  Example:
    run-pgsb-docker \\
      --vcf /home/myuser/somefolder/my.vcf.gz \\
      --pgs_model /home/myuser/models/model.pgsc.tsv.gz \\
      --outdir ./results
"""


class HelpRequested(PgsbDockerError):
    """Raised for -h/--help or an empty command line; the caller prints USAGE."""


@dataclass
class InputSpec:
    pgs_model: str
    vcf: Optional[str] = None
    bfile: Optional[str] = None
    outdir: str = "outputs"
    min_overlap: str = "0.7"
    extra_args: List[str] = field(default_factory=list)
    dry_run: bool = False

    @property
    def genotype_flag(self) -> str:
        return "--vcf" if self.vcf else "--bfile"

    @property
    def genotype_path(self) -> str:
        return self.vcf if self.vcf else self.bfile


class _Parser(argparse.ArgumentParser):
    def error(self, message):
        raise ArgumentError(f"Error: {message}")


def _build_parser() -> argparse.ArgumentParser:
    ap = _Parser(prog="run-pgsb-docker", add_help=False, allow_abbrev=False)
    ap.add_argument("--vcf")
    ap.add_argument("--bfile")
    ap.add_argument("--pgs_model")
    ap.add_argument("--outdir")
    ap.add_argument("--min_overlap")
    ap.add_argument("-h", "--help", action="store_true")
    ap.add_argument("--docker_config")
    ap.add_argument("--docker_dry_run", action="store_true")
    return ap


def parse_args(argv: Sequence[str], cfg: WrapperConfig = WrapperConfig()) -> InputSpec:
    """
    Parse wrapper flags. Unrecognized tokens are kept, in order, in `extra_args`.
    Raises HelpRequested or ArgumentError; nothing is launched on either.
    """
    argv = list(argv)
    if not argv:
        raise HelpRequested("No arguments provided. Showing help...")

    ns, extra = _build_parser().parse_known_args(argv)
    if ns.help:
        raise HelpRequested("")

    if not ns.pgs_model:
        raise ArgumentError("Error: Missing required --pgs_model")
    if ns.vcf and ns.bfile:
        raise ArgumentError("Error: Provide only ONE of --vcf or --bfile, not both.")
    if not ns.vcf and not ns.bfile:
        raise ArgumentError("Error: Provide at least one of --vcf or --bfile.")

    return InputSpec(
        pgs_model=ns.pgs_model,
        vcf=ns.vcf or None,
        bfile=ns.bfile or None,
        outdir=ns.outdir or cfg.default_outdir,
        min_overlap=ns.min_overlap if ns.min_overlap is not None else cfg.default_min_overlap,
        extra_args=extra,
        dry_run=ns.docker_dry_run,
    )


def peek_config_path(argv: Sequence[str]) -> Optional[str]:
    """Find --docker_config before full parsing, so defaults can come from the config."""
    argv = list(argv)
    for i, tok in enumerate(argv):
        if tok == "--docker_config" and i + 1 < len(argv):
            return argv[i + 1]
        if tok.startswith("--docker_config="):
            return tok.split("=", 1)[1]
    return None


def wants_help(argv: Sequence[str]) -> bool:
    return any(tok in ("-h", "--help") for tok in argv)
