"""Validators - Equipment catalog validation.

Validators return a list of problem descriptions:
- An empty list if the entry is valid
- One message per problem otherwise

Invalid entries are not an exceptional condition: the compatibility engine
reports them as unevaluated results and keeps evaluating the rest of the catalog.
"""

from firebreak_planner.constants import TerrainConfig, VegetationConfig
from firebreak_planner.model.equipment import Aircraft, EquipmentSpec, HandCrew, Machinery


def validate_common_fields(spec: EquipmentSpec) -> list[str]:
    """Validate the fields shared by every equipment variant.

    Returns:
        Problems with id, name, allowed terrain, allowed vegetation and cost.
    """
    errors: list[str] = []
    if not spec.id.strip():
        errors.append("id is empty")
    if not spec.name.strip():
        errors.append("name is empty")

    if not spec.allowed_terrain:
        errors.append("allowed_terrain is empty")
    unknown_terrain = sorted(set(spec.allowed_terrain) - set(TerrainConfig.LEVELS))
    if unknown_terrain:
        errors.append(f"unknown terrain levels: {', '.join(unknown_terrain)}")

    if not spec.allowed_vegetation:
        errors.append("allowed_vegetation is empty")
    unknown_vegetation = sorted(set(spec.allowed_vegetation) - set(VegetationConfig.TYPES))
    if unknown_vegetation:
        errors.append(f"unknown vegetation types: {', '.join(unknown_vegetation)}")

    if spec.cost_per_hour is not None and spec.cost_per_hour < 0:
        errors.append(f"cost_per_hour must not be negative, got {spec.cost_per_hour}")
    return errors


def validate_machinery(spec: Machinery) -> list[str]:
    """Validate clearing rate, slope ceiling and performance rows."""
    errors: list[str] = []
    if spec.clearing_rate_m_per_h <= 0 and not spec.performances:
        errors.append("clearing_rate_m_per_h must be positive")
    if spec.max_slope_deg is not None and spec.max_slope_deg <= 0:
        errors.append(f"max_slope_deg must be positive, got {spec.max_slope_deg}")
    for row in spec.performances:
        if row.meters_per_hour <= 0:
            errors.append(f"performance row for {row.vegetation_type} has non-positive meters_per_hour")
        if row.vegetation_type not in VegetationConfig.TYPES:
            errors.append(f"performance row has unknown vegetation type: {row.vegetation_type}")
        if row.cost_per_hour is not None and row.cost_per_hour < 0:
            errors.append(f"performance row for {row.vegetation_type} has negative cost_per_hour, got {row.cost_per_hour}")
    return errors


def validate_aircraft(spec: Aircraft) -> list[str]:
    """Validate drop length and turnaround time."""
    errors: list[str] = []
    if spec.drop_length_m <= 0:
        errors.append("drop_length_m must be positive")
    if spec.turnaround_minutes <= 0:
        errors.append("turnaround_minutes must be positive")
    return errors


def validate_hand_crew(spec: HandCrew) -> list[str]:
    """Validate crew size and per-person rate."""
    errors: list[str] = []
    if spec.crew_size <= 0:
        errors.append("crew_size must be positive")
    if spec.clearing_rate_per_person_m_per_h <= 0:
        errors.append("clearing_rate_per_person_m_per_h must be positive")
    return errors


def validate_equipment(spec: EquipmentSpec) -> list[str]:
    """Validate one catalog entry.

    Returns:
        Empty list if valid, otherwise every problem found.
    """
    errors = validate_common_fields(spec=spec)
    if isinstance(spec, Machinery):
        errors.extend(validate_machinery(spec=spec))
    elif isinstance(spec, Aircraft):
        errors.extend(validate_aircraft(spec=spec))
    elif isinstance(spec, HandCrew):
        errors.extend(validate_hand_crew(spec=spec))
    return errors
