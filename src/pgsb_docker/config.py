# src/pgsb_docker/config.py
from __future__ import annotations
import os
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml

from .errors import ArgumentError

CONFIG_ENV_VAR = "PGSB_DOCKER_CONFIG"


@dataclass(frozen=True)
class WrapperConfig:
    image: str = "docker.io/nationwidechildrens/pgsb-cli:latest"
    runtime: str = "docker"

    # Fixed mount points inside the container
    data_mount: str = "/app/data"
    outputs_mount: str = "/app/outputs"

    default_outdir: str = "outputs"
    # Kept as a string, handed to the container verbatim
    default_min_overlap: str = "0.7"

    interactive: bool = True
    memory: Optional[str] = None
    extra_run_args: Tuple[str, ...] = field(default_factory=tuple)


def _coerce(cfg: Dict[str, Any]) -> Dict[str, Any]:
    out = dict(cfg)
    if "extra_run_args" in out:
        extra = out["extra_run_args"] or []
        if isinstance(extra, str):
            extra = extra.split()
        out["extra_run_args"] = tuple(str(a) for a in extra)
    if "default_min_overlap" in out:
        out["default_min_overlap"] = str(out["default_min_overlap"])
    if "memory" in out and out["memory"] is not None:
        out["memory"] = str(out["memory"])
    if "interactive" in out:
        out["interactive"] = bool(out["interactive"])
    return out


def config_from_dict(cfg: Dict[str, Any], base: WrapperConfig = WrapperConfig()) -> WrapperConfig:
    known = {f.name for f in fields(WrapperConfig)}
    unknown = sorted(set(cfg) - known)
    if unknown:
        raise ArgumentError(f"Error: unknown config key(s): {', '.join(unknown)}")
    try:
        values = _coerce(cfg)
    except (TypeError, ValueError) as e:
        raise ArgumentError(f"Error: bad config value: {e}") from e
    return replace(base, **values)


def load_config(path: str | Path | None = None) -> WrapperConfig:
    """
    Build the wrapper configuration.

    Lookup order: explicit path, then $PGSB_DOCKER_CONFIG, then built-in defaults.
    The YAML may either hold the keys at top level or under a `docker:` mapping.
    """
    if path is None:
        path = os.environ.get(CONFIG_ENV_VAR) or None
    if path is None:
        return WrapperConfig()

    path = Path(path)
    if not path.is_file():
        raise ArgumentError(f"Error: config file not found: {path}")

    with open(path, "r") as f:
        try:
            cfg = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ArgumentError(f"Error: cannot parse config file {path}: {e}") from e
    if not isinstance(cfg, dict):
        raise ArgumentError(f"Error: config file {path} must contain a mapping")

    if isinstance(cfg.get("docker"), dict):
        cfg = cfg["docker"]
    return config_from_dict(cfg)
