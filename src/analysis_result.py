"""
Validated PCA analysis result.

The remote API answers with a JSON object:

    {
      "points": [{"x": 0.1, "y": -0.2, "label": "frame_000.xyz"}, ...],
      "explained_variance_ratio_all": [0.6, 0.25, ...],
      "cumulative_variance_ratio_all": [0.6, 0.85, ...]
    }

``AnalysisResult.from_payload`` checks that shape at the boundary and raises
``ValueError`` with a readable message when it does not hold.
"""
import math
from dataclasses import dataclass
from typing import Any, Dict, List, Tuple

POINTS_KEY = "points"
EXPLAINED_KEY = "explained_variance_ratio_all"
CUMULATIVE_KEY = "cumulative_variance_ratio_all"


@dataclass(frozen=True)
class LabeledPoint:
    """One sample projected onto the first two principal components."""
    x: float
    y: float
    label: str


@dataclass(frozen=True)
class AnalysisResult:
    """Parsed response of the PCA endpoint.

    Index 0 of each ratio sequence is PC1, index 1 is PC2, and so on.
    """
    points: Tuple[LabeledPoint, ...]
    explained_variance_ratio: Tuple[float, ...]
    cumulative_variance_ratio: Tuple[float, ...]

    @property
    def n_points(self) -> int:
        return len(self.points)

    @property
    def n_components(self) -> int:
        return len(self.explained_variance_ratio)

    @property
    def component_labels(self) -> List[str]:
        return [f"PC{i + 1}" for i in range(self.n_components)]

    def explained(self, index: int) -> float:
        """Explained variance ratio of component *index*, 0.0 if absent."""
        if 0 <= index < self.n_components:
            return self.explained_variance_ratio[index]
        return 0.0

    @classmethod
    def from_payload(cls, payload: Any) -> "AnalysisResult":
        if not isinstance(payload, dict):
            raise ValueError(
                f"Expected a JSON object, got {type(payload).__name__}"
            )
        for key in (POINTS_KEY, EXPLAINED_KEY, CUMULATIVE_KEY):
            if key not in payload:
                raise ValueError(f"Missing field '{key}'")

        raw_points = payload[POINTS_KEY]
        if not isinstance(raw_points, list):
            raise ValueError(f"'{POINTS_KEY}' must be a list")
        points = tuple(
            _parse_point(raw, idx) for idx, raw in enumerate(raw_points)
        )

        explained = _parse_ratios(payload[EXPLAINED_KEY], EXPLAINED_KEY)
        cumulative = _parse_ratios(payload[CUMULATIVE_KEY], CUMULATIVE_KEY)
        if not explained:
            raise ValueError(f"'{EXPLAINED_KEY}' must not be empty")
        if len(explained) != len(cumulative):
            raise ValueError(
                f"'{EXPLAINED_KEY}' has {len(explained)} components but "
                f"'{CUMULATIVE_KEY}' has {len(cumulative)}"
            )

        return cls(
            points=points,
            explained_variance_ratio=explained,
            cumulative_variance_ratio=cumulative,
        )

    def to_payload(self) -> Dict[str, Any]:
        """Inverse of ``from_payload``, in the API's own field names."""
        return {
            POINTS_KEY: [
                {"x": p.x, "y": p.y, "label": p.label} for p in self.points
            ],
            EXPLAINED_KEY: list(self.explained_variance_ratio),
            CUMULATIVE_KEY: list(self.cumulative_variance_ratio),
        }


def _is_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def _parse_point(raw: Any, idx: int) -> LabeledPoint:
    if not isinstance(raw, dict):
        raise ValueError(f"Point {idx} must be an object")
    for axis in ("x", "y"):
        if not _is_number(raw.get(axis)):
            raise ValueError(f"Point {idx} has no numeric '{axis}'")
    if "label" not in raw or raw["label"] is None:
        raise ValueError(f"Point {idx} has no 'label'")
    return LabeledPoint(x=float(raw["x"]), y=float(raw["y"]), label=str(raw["label"]))


def _parse_ratios(raw: Any, key: str) -> Tuple[float, ...]:
    if not isinstance(raw, list):
        raise ValueError(f"'{key}' must be a list")
    for idx, value in enumerate(raw):
        if not _is_number(value):
            raise ValueError(f"'{key}'[{idx}] is not a number: {value!r}")
    return tuple(float(v) for v in raw)
