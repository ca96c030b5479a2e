"""Equipment - Clearing resources that can be evaluated against a route.

Three variants share a common specification:
- Machinery: dozers and graders with a clearing rate and optional per-condition rates
- Aircraft: retardant drops of fixed length with a turnaround time
- HandCrew: crews clearing at a per-person rate

Catalogs are owned by the surrounding application and passed in whole on
every evaluation; the engine never stores them.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional

from firebreak_planner.constants import EquipmentConfig, TerrainConfig


@dataclass(frozen=True)
class EquipmentSpec(ABC):
    """Abstract base class for equipment specifications.

    Attributes:
        id: Unique identifier (e.g., "dozer-d6")
        name: Display name
        allowed_terrain: Terrain levels the equipment is rated for
        allowed_vegetation: Vegetation types the equipment can clear
        cost_per_hour: Operating cost per hour (None if unknown)
        description: Free-text description
    """

    id: str
    name: str
    allowed_terrain: frozenset[str]
    allowed_vegetation: frozenset[str]
    cost_per_hour: Optional[float] = None
    description: str = ""

    @property
    @abstractmethod
    def equipment_type(self) -> str:
        """Type identifier from EquipmentConfig.TYPES."""

    @property
    def highest_terrain_rank(self) -> int:
        """Rank of the most difficult allowed terrain (-1 if none allowed)."""
        ranks = [TerrainConfig.RANKS[t] for t in self.allowed_terrain if t in TerrainConfig.RANKS]
        return max(ranks, default=-1)

    @staticmethod
    def _common_kwargs(data: dict[str, Any]) -> dict[str, Any]:
        cost = data.get("cost_per_hour")
        return {
            "id": data.get("id", ""),
            "name": data.get("name", ""),
            "allowed_terrain": frozenset(data.get("allowed_terrain", ())),
            "allowed_vegetation": frozenset(data.get("allowed_vegetation", ())),
            "cost_per_hour": float(cost) if cost is not None else None,
            "description": data.get("description", ""),
        }


@dataclass(frozen=True)
class MachineryPerformance:
    """Measured clearing rate of a machine for one slope band and vegetation type.

    Attributes:
        slope_max_deg: Upper slope bound (degrees) this rate applies to
        vegetation_type: Vegetation type this rate applies to
        meters_per_hour: Clearing rate in meters per hour
        cost_per_hour: Operating cost under these conditions (None = machine default)
    """

    slope_max_deg: float
    vegetation_type: str
    meters_per_hour: float
    cost_per_hour: Optional[float] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MachineryPerformance":
        """Create MachineryPerformance from dictionary."""
        cost = data.get("cost_per_hour")
        return cls(
            slope_max_deg=float(data["slope_max_deg"]),
            vegetation_type=data["vegetation_type"],
            meters_per_hour=float(data["meters_per_hour"]),
            cost_per_hour=float(cost) if cost is not None else None,
        )


@dataclass(frozen=True)
class Machinery(EquipmentSpec):
    """Heavy machinery (dozers, graders).

    Attributes:
        clearing_rate_m_per_h: Nominal clearing rate on easy terrain and grassland
        max_slope_deg: Hard slope ceiling (None = no ceiling)
        performances: Per-condition clearing rates, preferred over the nominal rate
    """

    clearing_rate_m_per_h: float = 0.0
    max_slope_deg: Optional[float] = None
    performances: tuple[MachineryPerformance, ...] = ()

    @property
    def equipment_type(self) -> str:
        return EquipmentConfig.MACHINERY

    def performances_for(self, vegetation_type: str) -> list[MachineryPerformance]:
        """Performance rows for a vegetation type, ordered by slope_max_deg."""
        rows = [p for p in self.performances if p.vegetation_type == vegetation_type]
        return sorted(rows, key=lambda p: p.slope_max_deg)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Machinery":
        """Create Machinery from dictionary."""
        max_slope = data.get("max_slope_deg")
        return cls(
            **cls._common_kwargs(data),
            clearing_rate_m_per_h=float(data.get("clearing_rate_m_per_h", 0.0)),
            max_slope_deg=float(max_slope) if max_slope is not None else None,
            performances=tuple(MachineryPerformance.from_dict(p) for p in data.get("performances", ())),
        )


@dataclass(frozen=True)
class Aircraft(EquipmentSpec):
    """Fixed-wing or rotary aircraft laying retardant lines.

    Attributes:
        drop_length_m: Length of line covered by one drop
        turnaround_minutes: Time between consecutive drops
    """

    drop_length_m: float = 0.0
    turnaround_minutes: float = 0.0

    @property
    def equipment_type(self) -> str:
        return EquipmentConfig.AIRCRAFT

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Aircraft":
        """Create Aircraft from dictionary."""
        return cls(
            **cls._common_kwargs(data),
            drop_length_m=float(data.get("drop_length_m", 0.0)),
            turnaround_minutes=float(data.get("turnaround_minutes", 0.0)),
        )


@dataclass(frozen=True)
class HandCrew(EquipmentSpec):
    """Hand crew clearing with tools and chainsaws.

    Attributes:
        crew_size: Number of crew members
        clearing_rate_per_person_m_per_h: Clearing rate of one member on easy grassland
    """

    crew_size: int = 0
    clearing_rate_per_person_m_per_h: float = 0.0

    @property
    def equipment_type(self) -> str:
        return EquipmentConfig.HAND_CREW

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "HandCrew":
        """Create HandCrew from dictionary."""
        return cls(
            **cls._common_kwargs(data),
            crew_size=int(data.get("crew_size", 0)),
            clearing_rate_per_person_m_per_h=float(data.get("clearing_rate_per_person_m_per_h", 0.0)),
        )


_TYPE_ALIASES = {
    "machinery": Machinery,
    "aircraft": Aircraft,
    "hand_crew": HandCrew,
    "handcrew": HandCrew,
}


def equipment_from_dict(data: dict[str, Any]) -> EquipmentSpec:
    """Create the matching EquipmentSpec variant from a dictionary.

    The "type" key selects the variant ("machinery", "aircraft", "hand_crew";
    case-insensitive, "HandCrew" accepted).

    Raises:
        ValueError: If the type is missing or unknown.
    """
    raw_type = str(data.get("type", "")).lower()
    spec_cls = _TYPE_ALIASES.get(raw_type)
    if spec_cls is None:
        raise ValueError(f"Unknown equipment type: {data.get('type')!r}")
    return spec_cls.from_dict(data)
