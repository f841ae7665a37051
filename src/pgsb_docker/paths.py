# src/pgsb_docker/paths.py
from __future__ import annotations
import os
import posixpath
from typing import Iterable, List


def abspath(path: str) -> str:
    """
    Absolute form of `path` against the current working directory.

    Directories are normalized as a whole; anything else becomes
    <normalized parent>/<basename>. Symlinks are left alone and the path
    does not have to exist.
    """
    if os.path.isdir(path):
        return os.path.abspath(path)
    parent, base = os.path.split(path)
    parent = os.path.abspath(parent or os.curdir)
    if base in ("", os.curdir, os.pardir):
        return os.path.abspath(path)
    return os.path.join(parent, base)


def split_segments(path: str) -> List[str]:
    # "/home/u/x" -> ["home", "u", "x"]; "/" -> []
    return [s for s in path.split("/") if s]


def join_segments(segments: Iterable[str]) -> str:
    return "/" + "/".join(segments)


def common_prefix(paths: Iterable[str]) -> str:
    """Longest segment-wise prefix shared by all absolute `paths`."""
    paths = list(paths)
    if not paths:
        raise ValueError("common_prefix needs at least one path")

    common = split_segments(paths[0])
    for p in paths[1:]:
        segs = split_segments(p)
        k = 0
        while k < len(common) and k < len(segs) and common[k] == segs[k]:
            k += 1
        common = common[:k]
    return join_segments(common)


def common_directory(paths: Iterable[str]) -> str:
    """
    Deepest directory that contains every path.

    If the shared prefix is not an existing directory (e.g. it is a full
    filename, or something that does not exist yet) the nearest existing
    ancestor is used instead.
    """
    prefix = common_prefix(paths)
    while not os.path.isdir(prefix):
        prefix = posixpath.dirname(prefix)
    return prefix


def is_under(path: str, directory: str) -> bool:
    """Segment-wise containment: /home/user10/x is not under /home/user1."""
    d = split_segments(directory)
    return split_segments(path)[: len(d)] == d


def relative_segments(path: str, directory: str) -> List[str]:
    if not is_under(path, directory):
        raise ValueError(f"{path} is not under {directory}")
    return split_segments(path)[len(split_segments(directory)):]
