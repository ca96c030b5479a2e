"""VegetationSegment - A contiguous piece of route sharing one vegetation type."""

from dataclasses import dataclass

from firebreak_planner.model.base_segment import BaseRouteSegment


@dataclass(frozen=True)
class VegetationSegment(BaseRouteSegment):
    """A route segment classified by vegetation.

    Inherits start, end, distance_m and coords from BaseRouteSegment.

    Attributes:
        vegetation_type: "grassland", "lightshrub", "mediumscrub" or "heavyforest"
        confidence: Classification confidence in [0, 1] (distance-weighted if merged)
        landcover_class: Raw provider label of the first sample in the segment
    """

    vegetation_type: str
    confidence: float
    landcover_class: str

    def merged_with(self, other: "VegetationSegment") -> "VegetationSegment":
        """Merge a following segment of the same vegetation type into a new segment."""
        if other.vegetation_type != self.vegetation_type:
            raise ValueError(f"Cannot merge {self.vegetation_type} segment with {other.vegetation_type} segment")
        combined_m = self.distance_m + other.distance_m
        return VegetationSegment(
            start=self.start,
            end=other.end,
            distance_m=combined_m,
            coords=self._joined_coords(other),
            vegetation_type=self.vegetation_type,
            confidence=(self.confidence * self.distance_m + other.confidence * other.distance_m) / combined_m,
            landcover_class=self.landcover_class,
        )

    def __repr__(self) -> str:
        return f"VegetationSegment({self.vegetation_type}, {self.confidence:.2f}, {self.distance_m:.0f}m)"
