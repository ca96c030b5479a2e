"""OverlapMatrix - Route distance per (slope category, vegetation type) pair."""

from dataclasses import dataclass

from firebreak_planner.constants import SlopeConfig, VegetationConfig


@dataclass(frozen=True)
class OverlapMatrix:
    """Slope category x vegetation type distance matrix.

    Every category and type is present; cells that never co-occur hold 0.
    Since both segmentations describe the same route, the cells sum to the
    route's total distance.

    Attributes:
        cells: Slope category -> vegetation type -> meters
    """

    cells: dict[str, dict[str, float]]

    def get(self, category: str, vegetation_type: str) -> float:
        """Meters of route that are both `category` and `vegetation_type`."""
        return self.cells.get(category, {}).get(vegetation_type, 0.0)

    @property
    def total_distance_m(self) -> float:
        """Sum over all cells."""
        return sum(sum(row.values()) for row in self.cells.values())

    def category_totals(self) -> dict[str, float]:
        """Meters per slope category (summed over vegetation types)."""
        return {cat: sum(self.cells.get(cat, {}).values()) for cat in SlopeConfig.CATEGORIES}

    def vegetation_totals(self) -> dict[str, float]:
        """Meters per vegetation type (summed over slope categories)."""
        return {veg: sum(row.get(veg, 0.0) for row in self.cells.values()) for veg in VegetationConfig.TYPES}

    def fraction(self, category: str, vegetation_type: str) -> float:
        """Share of the route (0-1) in one cell."""
        total = self.total_distance_m
        if total <= 0:
            return 0.0
        return self.get(category=category, vegetation_type=vegetation_type) / total
