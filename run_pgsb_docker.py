# run_pgsb_docker.py
from __future__ import annotations
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent / "src"))

from pgsb_docker.cli import entrypoint

if __name__ == "__main__":
    entrypoint()
