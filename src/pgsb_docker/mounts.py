# src/pgsb_docker/mounts.py
from __future__ import annotations
import sys
from dataclasses import dataclass
from typing import List

from .config import WrapperConfig
from .errors import PathOutsideMountError
from .paths import abspath, is_under, join_segments, relative_segments, split_segments


@dataclass(frozen=True)
class Mount:
    host: str
    container: str
    read_only: bool

    def volume_arg(self) -> str:
        return f"{self.host}:{self.container}:{'ro' if self.read_only else 'rw'}"


@dataclass(frozen=True)
class MountPlan:
    data: Mount
    outputs: Mount

    @property
    def common_dir(self) -> str:
        return self.data.host

    @property
    def abs_outdir(self) -> str:
        return self.outputs.host

    def volume_args(self) -> List[str]:
        out: List[str] = []
        for m in (self.data, self.outputs):
            out += ["-v", m.volume_arg()]
        return out


def build_mount_plan(common_dir: str, abs_outdir: str, cfg: WrapperConfig = WrapperConfig()) -> MountPlan:
    return MountPlan(
        data=Mount(common_dir, cfg.data_mount, read_only=True),
        outputs=Mount(abs_outdir, cfg.outputs_mount, read_only=False),
    )


def _under_mount(mount_point: str, rel: List[str]) -> str:
    return join_segments(split_segments(mount_point) + rel)


def to_container_path(host_path: str, plan: MountPlan) -> str:
    """
    Map an input file onto the read-only data mount.

    Paths outside the common directory are warned about on stderr and
    returned as absolute host paths, so the container fails visibly on them.
    """
    host_path = abspath(host_path)
    if not is_under(host_path, plan.common_dir):
        print(PathOutsideMountError(host_path, plan.common_dir), file=sys.stderr)
        return host_path
    return _under_mount(plan.data.container, relative_segments(host_path, plan.common_dir))


def to_container_outdir(outdir: str, plan: MountPlan) -> str:
    od = abspath(outdir)
    if od == plan.abs_outdir:
        return plan.outputs.container
    if is_under(od, plan.abs_outdir):
        return _under_mount(plan.outputs.container, relative_segments(od, plan.abs_outdir))
    # Nothing to strip; the whole host path is nested under the mount
    return _under_mount(plan.outputs.container, split_segments(od))


def to_host_path(container_path: str, plan: MountPlan) -> str:
    """Inverse of to_container_path / to_container_outdir for mounted paths."""
    for m in (plan.data, plan.outputs):
        if is_under(container_path, m.container):
            return join_segments(split_segments(m.host) + relative_segments(container_path, m.container))
    raise ValueError(f"{container_path} is not under any mount")
