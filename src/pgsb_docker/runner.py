# src/pgsb_docker/runner.py
from __future__ import annotations
import shlex
import shutil
import subprocess
import sys
from dataclasses import dataclass, field
from typing import List

from .args import InputSpec
from .config import WrapperConfig
from .errors import SubprocessError
from .mounts import MountPlan, to_container_outdir, to_container_path


@dataclass
class ContainerInvocation:
    runtime: str
    run_args: List[str]
    image: str
    cli_args: List[str] = field(default_factory=list)

    def argv(self) -> List[str]:
        return [self.runtime, "run", *self.run_args, self.image, *self.cli_args]

    def command_line(self) -> str:
        return shlex.join(self.argv())


def _tty_flags(cfg: WrapperConfig) -> List[str]:
    # -it is only valid when we actually sit on a terminal
    if not cfg.interactive:
        return []
    flags = []
    if sys.stdin.isatty():
        flags.append("-i")
    if sys.stdout.isatty():
        flags.append("-t")
    return flags


def build_cli_args(spec: InputSpec, plan: MountPlan) -> List[str]:
    args = [spec.genotype_flag, to_container_path(spec.genotype_path, plan)]
    args += ["--pgs_model", to_container_path(spec.pgs_model, plan)]
    args += ["--outdir", to_container_outdir(spec.outdir, plan)]
    args += ["--min_overlap", spec.min_overlap]
    args += spec.extra_args
    return args


def build_invocation(spec: InputSpec, plan: MountPlan, cfg: WrapperConfig = WrapperConfig()) -> ContainerInvocation:
    run_args = ["--rm", *_tty_flags(cfg)]
    if cfg.memory:
        run_args += ["-m", cfg.memory]
    run_args += list(cfg.extra_run_args)
    run_args += plan.volume_args()
    return ContainerInvocation(
        runtime=cfg.runtime,
        run_args=run_args,
        image=cfg.image,
        cli_args=build_cli_args(spec, plan),
    )


def runtime_available(runtime: str) -> bool:
    return shutil.which(runtime) is not None


def describe(inv: ContainerInvocation, plan: MountPlan) -> None:
    print(f"==> Mounting input dir: {plan.data.host} -> {plan.data.container}")
    print(f"==> Mounting output dir: {plan.outputs.host} -> {plan.outputs.container}")
    print()
    print("Running:")
    print(f"  {inv.command_line()}")
    print()


def run_invocation(inv: ContainerInvocation) -> int:
    """
    Run the container with the parent's stdin/stdout/stderr attached.

    Returns 0 on success; a non-zero exit raises SubprocessError carrying
    the child's status (128+N when it died from signal N). On Ctrl-C the
    child is waited for, then KeyboardInterrupt is re-raised.
    """
    if not runtime_available(inv.runtime):
        print(f"Warning: '{inv.runtime}' not found on PATH; trying anyway.", file=sys.stderr)

    sys.stdout.flush()
    p = subprocess.Popen(inv.argv())
    interrupted = False
    while True:
        try:
            returncode = p.wait()
            break
        except KeyboardInterrupt:
            # the child got the same SIGINT; let it shut the container down
            interrupted = True
    if interrupted:
        raise KeyboardInterrupt

    if returncode < 0:
        # killed by signal N: report it the way a shell would, 128+N
        returncode = 128 - returncode
    if returncode != 0:
        raise SubprocessError(returncode, runtime=inv.runtime)
    return 0
