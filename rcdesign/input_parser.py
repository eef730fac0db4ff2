"""Parse and validate YAML input for RC beam and footing design.

Reads a project YAML file, checks that every required section and field is
present, applies defaults for optional fields, validates value ranges against
the Thai bar, steel and concrete tables, and builds the design models.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import ValidationError

from rcdesign.core.footing import process_footings
from rcdesign.models.footing import (
    JointReaction,
    PointLocation,
    ProcessedFooting,
    ReinforcementInputs,
)
from rcdesign.models.inputs import BeamInputs, DoubleBeamInputs
from rcdesign.utils.constants import (
    CONCRETE_GRADES,
    DEFORMED_BARS,
    ROUND_BARS,
    STEEL_GRADES,
)


# ---------------------------------------------------------------------------
# Schema definitions
# ---------------------------------------------------------------------------
# Each leaf entry is a tuple:
#   (type, required, default, validator_or_None)
# A validator is a callable (value) -> bool; True means OK.

_positive = lambda v: v > 0  # noqa: E731
_non_negative = lambda v: v >= 0  # noqa: E731


def _in_set(valid) -> Any:
    """Return a validator that checks membership in *valid*."""
    return lambda v: v in valid


PROJECT_SCHEMA: dict[str, tuple] = {
    "name":     (str, True,  None, None),
    "designer": (str, False, "",   None),
    "checker":  (str, False, "",   None),
    "date":     (str, False, "",   None),
}

_BEAM_COMMON: dict[str, tuple] = {
    "id":              (str,   True,  None,   None),
    "concrete_grade":  (int,   False, 240,    _in_set(CONCRETE_GRADES)),
    "steel_grade":     (str,   False, "SD40", _in_set(STEEL_GRADES)),
    "width":           (float, True,  None,   _positive),
    "height":          (float, True,  None,   _positive),
    "cover":           (float, False, 4.0,    _non_negative),
    "stirrup_size":    (str,   False, "RB9",  _in_set(ROUND_BARS)),
    "stirrup_spacing": (float, False, 20.0,   _positive),
}

BEAM_SCHEMA: dict[str, tuple] = {
    **_BEAM_COMMON,
    "layers": (list, False, [], None),
}

DOUBLE_BEAM_SCHEMA: dict[str, tuple] = {
    **_BEAM_COMMON,
    "cover_top":          (float, False, 4.0, _non_negative),
    "tension_layers":     (list,  False, [],  None),
    "compression_layers": (list,  False, [],  None),
}

LAYER_SCHEMA: dict[str, tuple] = {
    "bar_size": (str, True, None, _in_set(DEFORMED_BARS)),
    "count":    (int, True, None, _positive),
}

FOOTING_SCHEMA: dict[str, tuple] = {
    "allowable_bearing_capacity": (float, True,  None, _positive),
    "thickness":                  (float, False, 0.0,  _non_negative),
    "records":                    (list,  False, [],   None),
    "joint_reactions":            (list,  False, [],   None),
    "point_locations":            (list,  False, [],   None),
}

REINFORCEMENT_SCHEMA: dict[str, tuple] = {
    "fc":           (float, False, 240.0,  _positive),
    "fy":           (float, False, 4000.0, _positive),
    "bar_size":     (float, False, 16.0,   _positive),
    "cover":        (float, False, 75.0,   _non_negative),
    "column_width": (float, False, 0.4,    _positive),
    "column_depth": (float, False, 0.4,    _positive),
}

RECORD_SCHEMA: dict[str, tuple] = {
    "unique_name": (str,   True,  None, None),
    "x":           (float, False, 0.0,  None),
    "y":           (float, False, 0.0,  None),
    "dl_sdl":      (float, True,  None, _non_negative),
    "ll":          (float, False, 0.0,  _non_negative),
}

REACTION_SCHEMA: dict[str, tuple] = {
    "unique_name": (str,   True, None, None),
    "output_case": (str,   True, None, None),
    "fz":          (float, True, None, None),
}

LOCATION_SCHEMA: dict[str, tuple] = {
    "unique_name": (str,   True, None, None),
    "x":           (float, True, None, None),
    "y":           (float, True, None, None),
}


# ---------------------------------------------------------------------------
# Parsed configuration
# ---------------------------------------------------------------------------

@dataclass
class FootingConfig:
    """Footing section of a project file."""

    allowable_bearing_capacity: float
    reinforcement: ReinforcementInputs
    footings: list[ProcessedFooting]
    thickness: Optional[float] = None


@dataclass
class ProjectConfig:
    """Validated project file with design models built."""

    project: dict[str, Any]
    beams: dict[str, BeamInputs] = field(default_factory=dict)
    double_beams: dict[str, DoubleBeamInputs] = field(default_factory=dict)
    footings: Optional[FootingConfig] = None


# ---------------------------------------------------------------------------
# Validation helpers
# ---------------------------------------------------------------------------

class InputError(Exception):
    """Raised when the YAML input is invalid or incomplete."""


def _coerce(value: Any, expected_type: type) -> Any:
    """Attempt to coerce *value* to *expected_type*.

    YAML often reads ``2`` as ``int`` where a ``float`` is expected.  This
    silently promotes ints to floats when the schema says ``float``.
    """
    if isinstance(value, bool):
        raise InputError(f"Expected type {expected_type.__name__}, got bool")
    if expected_type is float and isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, expected_type):
        return value
    raise InputError(
        f"Expected type {expected_type.__name__}, got "
        f"{type(value).__name__} for value {value!r}"
    )


def _validate_section(
    data: dict[str, Any],
    schema: dict[str, tuple],
    section_path: str,
    errors: list[str],
) -> dict[str, Any]:
    """Validate *data* against a flat field *schema*.

    Returns a new dict with defaults filled and types coerced.  Appends
    human-readable messages to *errors* for every problem found.
    """
    validated: dict[str, Any] = {}
    for name, (ftype, required, default, validator) in schema.items():
        path_str = f"{section_path}.{name}"
        if name not in data or data[name] is None:
            if required and default is None:
                errors.append(f"Missing required field: {path_str}")
                continue
            validated[name] = list(default) if isinstance(default, list) else default
            continue

        raw = data[name]
        try:
            coerced = _coerce(raw, ftype)
        except InputError:
            errors.append(
                f"{path_str}: expected {ftype.__name__}, "
                f"got {type(raw).__name__} ({raw!r})"
            )
            continue

        if validator is not None and not validator(coerced):
            errors.append(f"{path_str}: value {coerced!r} is out of range")
            continue

        validated[name] = coerced

    return validated


def _validate_list(
    items: list,
    schema: dict[str, tuple],
    list_path: str,
    errors: list[str],
) -> list[dict[str, Any]]:
    """Validate every mapping of *items* against *schema*."""
    validated: list[dict[str, Any]] = []
    for i, item in enumerate(items):
        item_path = f"{list_path}[{i}]"
        if not isinstance(item, dict):
            errors.append(f"{item_path}: must be a mapping, got {item!r}")
            continue
        validated.append(_validate_section(item, schema, item_path, errors))
    return validated


def _complete(
    items: list,
    schema: dict[str, tuple],
    list_path: str,
    errors: list[str],
) -> list[dict[str, Any]]:
    """Validated entries of *items* that passed every field check."""
    return [
        entry for entry in _validate_list(items, schema, list_path, errors)
        if len(entry) == len(schema)
    ]


def _build_model(model_cls, data: dict[str, Any], path: str, errors: list[str]):
    """Instantiate a pydantic model, turning validation errors into messages."""
    try:
        return model_cls(**data)
    except ValidationError as exc:
        for err in exc.errors():
            loc = ".".join(str(part) for part in err["loc"])
            errors.append(f"{path}.{loc}: {err['msg']}")
        return None


def _parse_beams(
    raw_beams: Any,
    schema: dict[str, tuple],
    layer_keys: tuple[str, ...],
    model_cls,
    section_name: str,
    errors: list[str],
) -> dict[str, Any]:
    """Validate a list of beam mappings and build one model per beam id."""
    if not isinstance(raw_beams, list):
        errors.append(f"Section '{section_name}' must be a list")
        return {}

    beams: dict[str, Any] = {}
    for i, item in enumerate(raw_beams):
        path = f"{section_name}[{i}]"
        if not isinstance(item, dict):
            errors.append(f"{path}: must be a mapping, got {item!r}")
            continue
        n_errors = len(errors)
        data = _validate_section(item, schema, path, errors)
        for key in layer_keys:
            if key in data:
                data[key] = _validate_list(data[key], LAYER_SCHEMA, f"{path}.{key}", errors)

        if len(errors) > n_errors:
            continue
        beam_id = data.pop("id")
        if beam_id in beams:
            errors.append(f"{path}.id: duplicate beam id {beam_id!r}")
            continue

        model = _build_model(model_cls, data, path, errors)
        if model is not None:
            beams[beam_id] = model
    return beams


def _parse_footings(raw: Any, errors: list[str]) -> Optional[FootingConfig]:
    if not isinstance(raw, dict):
        errors.append("Section 'footings' must be a mapping")
        return None

    data = _validate_section(raw, FOOTING_SCHEMA, "footings", errors)

    reinf_raw = raw.get("reinforcement", {}) or {}
    if not isinstance(reinf_raw, dict):
        errors.append("footings.reinforcement: must be a mapping")
        reinf_raw = {}
    reinf_data = _validate_section(
        reinf_raw, REINFORCEMENT_SCHEMA, "footings.reinforcement", errors
    )
    reinforcement = _build_model(
        ReinforcementInputs, reinf_data, "footings.reinforcement", errors
    )

    records = data.get("records") or []
    reactions = data.get("joint_reactions") or []
    locations = data.get("point_locations") or []

    footings: list[ProcessedFooting] = []
    if records and (reactions or locations):
        errors.append(
            "footings: give either 'records' or 'joint_reactions' + "
            "'point_locations', not both"
        )
    elif records:
        footings = [
            ProcessedFooting(**rec, total_load=rec["dl_sdl"] + rec["ll"])
            for rec in _complete(records, RECORD_SCHEMA, "footings.records", errors)
        ]
    elif reactions or locations:
        if not reactions or not locations:
            errors.append(
                "footings: 'joint_reactions' and 'point_locations' must be given together"
            )
        else:
            footings = process_footings(
                [JointReaction(**r) for r in _complete(
                    reactions, REACTION_SCHEMA, "footings.joint_reactions", errors)],
                [PointLocation(**p) for p in _complete(
                    locations, LOCATION_SCHEMA, "footings.point_locations", errors)],
            )
    else:
        errors.append("footings: no 'records' or 'joint_reactions' given")

    if reinforcement is None or "allowable_bearing_capacity" not in data:
        return None

    thickness = data.get("thickness")
    return FootingConfig(
        allowable_bearing_capacity=data["allowable_bearing_capacity"],
        reinforcement=reinforcement,
        footings=footings,
        thickness=thickness if thickness else None,
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def parse_input(yaml_path: str) -> ProjectConfig:
    """Read and validate a project YAML file.

    Parameters
    ----------
    yaml_path:
        Filesystem path to the YAML input file.

    Returns
    -------
    ProjectConfig
        Project metadata and the design models of every section present.

    Raises
    ------
    FileNotFoundError
        If *yaml_path* does not exist.
    InputError
        If validation fails (the message lists every problem found).
    """
    path = Path(yaml_path)
    if not path.is_file():
        raise FileNotFoundError(f"Input file not found: {yaml_path}")

    with open(path, "r", encoding="utf-8") as fh:
        raw: dict[str, Any] = yaml.safe_load(fh)

    if not isinstance(raw, dict):
        raise InputError("YAML root must be a mapping (dict)")

    errors: list[str] = []

    # ------------------------------------------------------------------
    # 1. Project metadata
    # ------------------------------------------------------------------
    project_raw = raw.get("project")
    if project_raw is None:
        errors.append("Missing required section: project")
        project: dict[str, Any] = {}
    elif not isinstance(project_raw, dict):
        errors.append("Section 'project' must be a mapping")
        project = {}
    else:
        project = _validate_section(project_raw, PROJECT_SCHEMA, "project", errors)

    # ------------------------------------------------------------------
    # 2. Design sections (at least one required)
    # ------------------------------------------------------------------
    if not any(key in raw for key in ("beams", "double_beams", "footings")):
        errors.append("Input must contain at least one of: beams, double_beams, footings")

    beams = _parse_beams(
        raw.get("beams", []), BEAM_SCHEMA, ("layers",),
        BeamInputs, "beams", errors,
    )
    double_beams = _parse_beams(
        raw.get("double_beams", []), DOUBLE_BEAM_SCHEMA,
        ("tension_layers", "compression_layers"),
        DoubleBeamInputs, "double_beams", errors,
    )
    footings = _parse_footings(raw["footings"], errors) if "footings" in raw else None

    # ------------------------------------------------------------------
    # Report
    # ------------------------------------------------------------------
    if errors:
        bullet_list = "\n  - ".join(errors)
        raise InputError(
            f"Input validation failed with {len(errors)} error(s):\n"
            f"  - {bullet_list}"
        )

    return ProjectConfig(
        project=project,
        beams=beams,
        double_beams=double_beams,
        footings=footings,
    )


# ---------------------------------------------------------------------------
# Template generator
# ---------------------------------------------------------------------------

_TEMPLATE_YAML = """\
# RC Beam & Footing Design Input File
# ====================================
# Units: beams in cm and kg/cm², footings in m and Tonf.
# Any of the beams / double_beams / footings sections may be omitted.

project:
  name: "PROJECT_NAME"
  designer: "Designer Name"
  checker: "Checker Name"
  date: "2024-01-01"

beams:
  - id: "B1"
    concrete_grade: 240         # f'c kg/cm² - 180 | 210 | 240 | 280 | 320 | 350
    steel_grade: "SD40"         # SD30 | SD40 | SD50
    width: 30                   # cm
    height: 60                  # cm
    cover: 4                    # cm - clear cover to stirrup
    stirrup_size: "RB9"         # RB6 | RB9 | RB12
    stirrup_spacing: 20         # cm
    layers:                     # from the tension face inward
      - {bar_size: "DB20", count: 3}
      - {bar_size: "DB20", count: 2}

double_beams:
  - id: "DB1"
    concrete_grade: 240
    steel_grade: "SD40"
    width: 30                   # cm
    height: 60                  # cm
    cover: 4                    # cm - bottom clear cover
    cover_top: 4                # cm - top clear cover
    stirrup_size: "RB9"
    stirrup_spacing: 15         # cm
    tension_layers:             # bottom to top
      - {bar_size: "DB25", count: 4}
    compression_layers:         # top to bottom
      - {bar_size: "DB20", count: 2}

footings:
  allowable_bearing_capacity: 20   # Tonf/m²
  thickness: 0                     # m - 0 to size from punching shear
  reinforcement:
    fc: 240                     # kg/cm²
    fy: 4000                    # kg/cm²
    bar_size: 16                # mm
    cover: 75                   # mm
    column_width: 0.4           # m - c1
    column_depth: 0.4           # m - c2
  # Either processed records ...
  # records:
  #   - {unique_name: "F1", x: 0.0, y: 0.0, dl_sdl: 45.0, ll: 15.0}
  # ... or support reactions and joint locations.
  joint_reactions:              # Tonf
    - {unique_name: "1", output_case: "DL", fz: 40.0}
    - {unique_name: "1", output_case: "SDL", fz: 5.0}
    - {unique_name: "1", output_case: "LL", fz: 15.0}
    - {unique_name: "2", output_case: "DL", fz: 60.0}
    - {unique_name: "2", output_case: "SDL", fz: 8.0}
    - {unique_name: "2", output_case: "LL", fz: 22.0}
    - {unique_name: "3", output_case: "DL", fz: 62.0}
    - {unique_name: "3", output_case: "LL", fz: 20.0}
  point_locations:              # m
    - {unique_name: "1", x: 0.0, y: 0.0}
    - {unique_name: "2", x: 6.0, y: 0.0}
    - {unique_name: "3", x: 12.0, y: 0.0}
"""


def generate_template() -> str:
    """Return a complete sample YAML input template as a string.

    The returned text is ready to be written to a file and edited by the
    user.
    """
    return _TEMPLATE_YAML
