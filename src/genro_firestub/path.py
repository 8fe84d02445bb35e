# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Slash-separated path handling.

A path is kept as a tuple of non-empty segments. Leading, trailing and
repeated slashes are ignored, so ``'/users//u1/'`` and ``'users/u1'``
address the same node.

Example:
    >>> split_path('/resumes/r1')
    ('resumes', 'r1')
    >>> normalize_path('resumes//r1/')
    'resumes/r1'
"""

from __future__ import annotations

from typing import Any

from .exceptions import InvalidPathError

SEPARATOR = '/'


def split_path(path: Any) -> tuple[str, ...]:
    """Split a path string into its segments.

    Raises:
        InvalidPathError: If path is not a string.
    """
    if not isinstance(path, str):
        raise InvalidPathError(
            f"path must be a string, not {type(path).__name__}"
        )
    return tuple(segment for segment in path.split(SEPARATOR) if segment)


def normalize_path(path: Any) -> str:
    """Return the canonical string form of path."""
    return SEPARATOR.join(split_path(path))


def join_path(*parts: str) -> str:
    """Join path fragments, normalizing the result."""
    segments: list[str] = []
    for part in parts:
        segments.extend(split_path(part))
    return SEPARATOR.join(segments)


def is_related(first: tuple[str, ...], second: tuple[str, ...]) -> bool:
    """True if one segment tuple is a prefix of (or equal to) the other.

    A change at either path can alter the data observed at the other.
    """
    depth = min(len(first), len(second))
    return first[:depth] == second[:depth]
