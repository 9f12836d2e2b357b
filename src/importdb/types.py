"""Shared types for the importdb package."""

from typing import Any, Mapping

Row = dict[str, Any]
Params = tuple | list | Mapping[str, Any]
ParamsList = list[tuple] | list[list] | list[Mapping[str, Any]]
