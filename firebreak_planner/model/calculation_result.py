"""CalculationResult - Time, cost and compatibility of one equipment item on one route.

Results are recomputed on every route, vegetation or catalog change and
never mutated; a new result list replaces the old one.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class CalculationResult:
    """Evaluation of one equipment item against a route.

    Attributes:
        equipment_id: EquipmentSpec.id
        name: EquipmentSpec.name
        equipment_type: "machinery", "aircraft" or "hand_crew"
        time_hours: Clearing time (0 when not compatible)
        cost: time_hours x cost per hour (0 when unset or not compatible)
        compatibility_level: "full", "partial", "incompatible", or None if unevaluated
        over_limit_fraction: Share of route above the machine's rated terrain
        drops_count: Number of drops (aircraft only)
        note: Human-readable explanation
        slope_compatible: Whether the machine's slope ceiling holds (machinery only)
        max_slope_exceeded_deg: Route max slope when it breaks the ceiling
        validation_errors: Configuration problems that prevented evaluation
    """

    equipment_id: str
    name: str
    equipment_type: str
    time_hours: float
    cost: float
    compatibility_level: Optional[str]
    over_limit_fraction: Optional[float] = None
    drops_count: Optional[int] = None
    note: Optional[str] = None
    slope_compatible: Optional[bool] = None
    max_slope_exceeded_deg: Optional[float] = None
    validation_errors: tuple[str, ...] = ()

    @property
    def evaluated(self) -> bool:
        """False when the equipment configuration was invalid."""
        return self.compatibility_level is not None

    @property
    def compatible(self) -> bool:
        """True when fully or partially compatible."""
        return self.compatibility_level in ("full", "partial")

    def __repr__(self) -> str:
        level = self.compatibility_level or "unevaluated"
        return f"CalculationResult({self.equipment_id}, {level}, {self.time_hours:.2f}h, {self.cost:.0f})"
