"""Formation parameters.

Typed configuration objects plus loaders for the parameter formats an RPG
Maker style project produces. In those projects every plugin parameter is a
string: numbers arrive as ``"-1"``, booleans as ``"true"`` and structs or
arrays as JSON text whose elements are JSON-encoded strings again (a
``positions`` array is a JSON list of JSON objects, each stored as a string).

:func:`decode_parameter_value` peels those layers off; :func:`parse_parameters`
turns the decoded mapping into a :class:`FormationParams`. Parameters are
explicit objects handed to whoever needs them; nothing here is global.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Tuple

from party_formation.components import PositionRecord
from party_formation.state import Formation, make_formation
from party_formation.types import FrameCount, Number
from party_formation.utils.chain import find_cycles, has_valid_parent

logger = logging.getLogger(__name__)

DEFAULT_PLUGIN_NAME = "PartyFormation"

# Vanilla side-view layout of a fresh project: a diagonal line of four members.
DEFAULT_POSITIONS: Tuple[PositionRecord, ...] = (
    PositionRecord(parent_index=-1, x=600, y=280),
    PositionRecord(parent_index=0, x=32, y=48),
    PositionRecord(parent_index=1, x=32, y=48),
    PositionRecord(parent_index=2, x=32, y=48),
)


@dataclass(frozen=True)
class RetreatParams:
    """Escape movement override.

    Attributes:
        enabled: Replace the host's retreat movement when True. Leave it off
            when another component already customizes the escape movement.
        x: Horizontal movement while retreating.
        y: Vertical movement while retreating.
        duration: Frames the retreat movement runs for.
    """

    enabled: bool = False
    x: Number = 300
    y: Number = 0
    duration: FrameCount = 30


@dataclass(frozen=True)
class FormationParams:
    """Top level parameters."""

    positions: Tuple[PositionRecord, ...] = DEFAULT_POSITIONS
    retreat: RetreatParams = RetreatParams()


def decode_parameter_value(value: Any) -> Any:
    """Recursively decode JSON-encoded parameter strings.

    Strings holding valid JSON are parsed and decoded again; other strings
    are returned unchanged. Lists and mappings are decoded element-wise.
    """
    if isinstance(value, str):
        try:
            parsed = json.loads(value)
        except ValueError:
            return value
        return decode_parameter_value(parsed)
    if isinstance(value, list):
        return [decode_parameter_value(item) for item in value]
    if isinstance(value, dict):
        return {key: decode_parameter_value(item) for key, item in value.items()}
    return value


def _as_number(value: Any, name: str) -> Number:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"Parameter {name} must be a number, got {value!r}")
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def _as_bool(value: Any, name: str) -> bool:
    if not isinstance(value, bool):
        raise ValueError(f"Parameter {name} must be true or false, got {value!r}")
    return value


def _parse_position(entry: Any, index: int) -> PositionRecord:
    if not isinstance(entry, Mapping):
        raise ValueError(f"Position {index} must be an object, got {entry!r}")
    parent_index = _as_number(entry.get("parentIndex", -1), f"positions[{index}].parentIndex")
    if not isinstance(parent_index, int):
        raise ValueError(
            f"Parameter positions[{index}].parentIndex must be an integer, got {parent_index!r}"
        )
    return PositionRecord(
        parent_index=parent_index,
        x=_as_number(entry.get("x", 0), f"positions[{index}].x"),
        y=_as_number(entry.get("y", 0), f"positions[{index}].y"),
    )


def _parse_positions(value: Any) -> Tuple[PositionRecord, ...]:
    if value in ("", None):
        return ()
    if not isinstance(value, list):
        raise ValueError(f"Parameter positions must be a list, got {value!r}")
    return tuple(_parse_position(entry, i) for i, entry in enumerate(value))


def _parse_retreat(data: Mapping[str, Any]) -> RetreatParams:
    defaults = RetreatParams()
    duration = _as_number(data.get("retreatDuration", defaults.duration), "retreatDuration")
    if not isinstance(duration, int) or duration < 0:
        raise ValueError(
            f"Parameter retreatDuration must be a non-negative integer, got {duration!r}"
        )
    return RetreatParams(
        enabled=_as_bool(data.get("retreat", defaults.enabled), "retreat"),
        x=_as_number(data.get("retreatX", defaults.x), "retreatX"),
        y=_as_number(data.get("retreatY", defaults.y), "retreatY"),
        duration=duration,
    )


def _log_diagnostics(positions: Tuple[PositionRecord, ...]) -> None:
    for index, record in enumerate(positions):
        if record.parent_index >= 0 and not has_valid_parent(
            record.parent_index, len(positions)
        ):
            logger.debug(
                "Position %d refers to missing parent %d; it is placed from the origin",
                index,
                record.parent_index,
            )
    # find_cycles lists each cycle from the member resolution anchors first
    for cycle in find_cycles(positions):
        logger.warning(
            "Positions %s form a parent cycle; position %d is placed from the origin",
            sorted(cycle),
            cycle[0],
        )


def parse_parameters(raw: Mapping[str, Any]) -> FormationParams:
    """Build :class:`FormationParams` from raw plugin parameters.

    Args:
        raw: Parameter mapping, either already decoded or in the all-strings
            plugin format. Missing keys take their defaults; a missing
            ``positions`` key means :data:`DEFAULT_POSITIONS`.

    Returns:
        FormationParams: Parsed parameters.

    Raises:
        ValueError: If a value has the wrong type or is out of range.
    """
    data = decode_parameter_value(dict(raw))
    if "positions" in data:
        positions = _parse_positions(data["positions"])
    else:
        positions = DEFAULT_POSITIONS
    _log_diagnostics(positions)
    params = FormationParams(positions=positions, retreat=_parse_retreat(data))
    logger.debug(
        "Loaded %d positions (retreat override %s)",
        len(params.positions),
        "on" if params.retreat.enabled else "off",
    )
    return params


def load_parameters(path: Path | str) -> FormationParams:
    """Parse a JSON file holding a single parameter object."""
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"{path} must contain a JSON object of parameters")
    return parse_parameters(data)


def load_plugin_parameters(
    path: Path | str, plugin_name: str = DEFAULT_PLUGIN_NAME
) -> FormationParams:
    """Parse the parameters of ``plugin_name`` from a ``plugins.js`` file.

    The file is the project's plugin list, ``var $plugins = [...];`` with one
    ``{"name", "status", "description", "parameters"}`` entry per plugin.

    Raises:
        ValueError: If the file has no plugin list or no entry named
            ``plugin_name``.
    """
    text = Path(path).read_text(encoding="utf-8")
    start, end = text.find("["), text.rfind("]")
    if start < 0 or end < start:
        raise ValueError(f"{path} does not contain a plugin list")
    plugins = json.loads(text[start : end + 1])
    for plugin in plugins:
        if isinstance(plugin, dict) and plugin.get("name") == plugin_name:
            if not plugin.get("status", True):
                logger.warning("Plugin %s is disabled in %s", plugin_name, path)
            return parse_parameters(plugin.get("parameters") or {})
    raise ValueError(f"Plugin {plugin_name} not found in {path}")


def formation_from_params(params: FormationParams) -> Formation:
    """Unresolved :class:`Formation` holding the configured positions."""
    return make_formation(params.positions)
