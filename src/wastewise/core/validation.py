#!/usr/bin/env python3
# Copyright (C) 2026 Alex Stoyanov
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License along with this program.
# If not, see <https://www.gnu.org/licenses/>.

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from .errors import InvalidInputError


def require_list(value: object, *, label: str) -> list[Any] | tuple[Any, ...]:
    """Validate that value is a list/tuple."""
    if not isinstance(value, (list, tuple)):
        raise InvalidInputError(f"{label} must be a list")
    return value


def require_dict(value: object, *, label: str) -> dict[Any, Any]:
    """Validate that value is a dict."""
    if not isinstance(value, dict):
        raise InvalidInputError(f"{label} must be a dict")
    return value


def require_keys(mapping: dict[Any, Any], keys: Iterable[str], *, label: str) -> None:
    """Validate that all keys are present in mapping."""
    for key in keys:
        if key not in mapping:
            raise InvalidInputError(f"{label} {key} is required")


def require_str(value: object, *, label: str) -> str:
    """Validate that value is a non-empty string and strip it."""
    if not isinstance(value, str) or not value.strip():
        raise InvalidInputError(f"{label} must be a non-empty string")
    return value.strip()


def require_positive_int(value: object, *, label: str) -> int:
    """Validate that value is a positive integer (> 0)."""
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise InvalidInputError(f"{label} must be a positive int")
    return value


def require_non_negative_int(value: object, *, label: str) -> int:
    """Validate that value is a non-negative integer (>= 0)."""
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise InvalidInputError(f"{label} must be a non-negative int")
    return value


def require_positive_number(value: object, *, label: str) -> float:
    """Validate that value is a positive int or float (> 0)."""
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
        raise InvalidInputError(f"{label} must be a positive number")
    return float(value)


def require_fraction(value: object, *, label: str) -> float:
    """Validate that value is a number strictly between 0 and 1."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidInputError(f"{label} must be a number")
    if not 0 < value < 1:
        raise InvalidInputError(f"{label} must be between 0 and 1 (exclusive)")
    return float(value)
