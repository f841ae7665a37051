"""Shared fixtures: a fake host layout and a stubbed container runtime."""

import subprocess
from pathlib import Path
from typing import Dict, List

import pytest

from pgsb_docker import runner


@pytest.fixture(autouse=True)
def _no_env_config(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("PGSB_DOCKER_CONFIG", raising=False)


@pytest.fixture
def home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Dict[str, Path]:
    """
    <tmp>/home/u/data/a.vcf.gz
    <tmp>/home/u/models/m.tsv.gz
    <tmp>/home/u/proj            (cwd)
    """
    u = tmp_path / "home" / "u"
    (u / "data").mkdir(parents=True)
    (u / "models").mkdir()
    (u / "proj").mkdir()
    vcf = u / "data" / "a.vcf.gz"
    model = u / "models" / "m.tsv.gz"
    vcf.write_bytes(b"")
    model.write_bytes(b"")
    monkeypatch.chdir(u / "proj")
    return {"u": u, "vcf": vcf, "model": model, "proj": u / "proj"}


class FakeProcess:
    def __init__(self, runtime: "FakeRuntime") -> None:
        self.runtime = runtime
        self.returncode = None

    def wait(self, timeout=None) -> int:
        if self.runtime.interrupts > 0:
            self.runtime.interrupts -= 1
            raise KeyboardInterrupt
        self.returncode = self.runtime.returncode
        return self.returncode


class FakeRuntime:
    """Stands in for subprocess.Popen; records every command it is given."""

    def __init__(self) -> None:
        self.calls: List[List[str]] = []
        self.returncode = 0
        self.interrupts = 0
        self.raise_exc = None
        self.processes: List[FakeProcess] = []

    def __call__(self, cmd, *args, **kwargs) -> FakeProcess:
        self.calls.append(list(cmd))
        if self.raise_exc is not None:
            raise self.raise_exc
        proc = FakeProcess(self)
        self.processes.append(proc)
        return proc


@pytest.fixture
def fake_docker(monkeypatch: pytest.MonkeyPatch) -> FakeRuntime:
    fake = FakeRuntime()
    monkeypatch.setattr(subprocess, "Popen", fake)
    monkeypatch.setattr(runner.shutil, "which", lambda name: f"/usr/bin/{name}")
    return fake
