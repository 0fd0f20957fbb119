"""Tests for response validation at the API boundary."""
import pytest

from analysis_result import AnalysisResult, LabeledPoint


def test_parses_valid_payload(sample_payload):
    result = AnalysisResult.from_payload(sample_payload)
    assert result.n_points == 5
    assert result.n_components == 3
    assert result.points[1] == LabeledPoint(x=1.0, y=-0.5, label="frame_001.xyz")
    assert result.explained_variance_ratio == (0.6, 0.25, 0.15)
    assert result.cumulative_variance_ratio == (0.6, 0.85, 1.0)
    assert result.component_labels == ["PC1", "PC2", "PC3"]


def test_integer_values_become_floats():
    result = AnalysisResult.from_payload({
        "points": [{"x": 1, "y": 2, "label": 7}],
        "explained_variance_ratio_all": [1],
        "cumulative_variance_ratio_all": [1],
    })
    assert result.points[0] == LabeledPoint(x=1.0, y=2.0, label="7")
    assert isinstance(result.explained_variance_ratio[0], float)


def test_empty_points_allowed():
    result = AnalysisResult.from_payload({
        "points": [],
        "explained_variance_ratio_all": [0.7, 0.3],
        "cumulative_variance_ratio_all": [0.7, 1.0],
    })
    assert result.n_points == 0


def test_explained_out_of_range_is_zero(sample_result):
    assert sample_result.explained(0) == 0.6
    assert sample_result.explained(5) == 0.0


def test_round_trips_through_payload(sample_payload, sample_result):
    assert sample_result.to_payload() == sample_payload


@pytest.mark.parametrize(
    "mutate, message",
    [
        (lambda p: p.pop("points"), "Missing field 'points'"),
        (lambda p: p.pop("cumulative_variance_ratio_all"), "cumulative_variance_ratio_all"),
        (lambda p: p.update(points={"x": 1}), "must be a list"),
        (lambda p: p["points"][0].pop("x"), "Point 0 has no numeric 'x'"),
        (lambda p: p["points"][2].update(y="1.0"), "Point 2 has no numeric 'y'"),
        (lambda p: p["points"][3].pop("label"), "Point 3 has no 'label'"),
        (lambda p: p["points"].__setitem__(1, [1, 2]), "Point 1 must be an object"),
        (lambda p: p.update(explained_variance_ratio_all=[]), "must not be empty"),
        (lambda p: p.update(explained_variance_ratio_all=[0.5, None, 0.1]), "is not a number"),
        (lambda p: p.update(explained_variance_ratio_all=[True, 0.2, 0.1]), "is not a number"),
        (lambda p: p.update(cumulative_variance_ratio_all=[0.6, 0.85]), "has 3 components"),
    ],
)
def test_rejects_malformed_payload(sample_payload, mutate, message):
    mutate(sample_payload)
    with pytest.raises(ValueError, match=message):
        AnalysisResult.from_payload(sample_payload)


def test_rejects_non_object():
    with pytest.raises(ValueError, match="Expected a JSON object, got list"):
        AnalysisResult.from_payload([1, 2, 3])


def test_rejects_nan():
    with pytest.raises(ValueError):
        AnalysisResult.from_payload({
            "points": [{"x": float("nan"), "y": 0.0, "label": "a"}],
            "explained_variance_ratio_all": [1.0],
            "cumulative_variance_ratio_all": [1.0],
        })
