import pytest

from witness_estimator.config import NetworkBudget, ScenarioConfig, default_study
from witness_estimator.estimator import run_study
from witness_estimator.errors import InvalidConfig


def test_default_study_reproduces_canned_scenarios() -> None:
    report = run_study(default_study())
    payload = report.model_dump(mode="json")

    assert payload["baseline_shape"]["name"] == "Merkle Patricia Tree"
    assert payload["candidate_shape"]["name"] == "Verkle Tree"
    assert payload["max_witness_bytes"] == pytest.approx(15_000_000)
    assert payload["paths"] is None
    assert len(payload["scenarios"]) == 4

    ratios = [s["comparison"]["improvement_ratio"] for s in payload["scenarios"]]
    assert ratios == pytest.approx([15.0, 15.0, 180_200 / 10_600, 15.0])

    full = report.scenarios[3]
    assert full.comparison.baseline.total_bytes == pytest.approx(15_000_000)
    assert full.comparison.candidate.total_bytes == pytest.approx(1_000_000)
    assert full.large is True
    assert full.baseline_fits_budget is True
    assert full.candidate_fits_budget is True
    assert not any(s.large for s in report.scenarios[:3])


def test_tighter_budget_rejects_mpt_full_block() -> None:
    study = default_study().model_copy(update={"network": NetworkBudget(bandwidth_bits_per_sec=5_000_000)})
    full = run_study(study).scenarios[3]
    assert full.baseline_fits_budget is False
    assert full.candidate_fits_budget is True


def test_scenario_names_and_json_keys() -> None:
    study = default_study().model_copy(
        update={"scenarios": [ScenarioConfig(name="reads", counts={"storage_slot": 3})]}
    )
    payload = run_study(study, paths={"config": "study.yaml"}).model_dump(mode="json")
    scenario = payload["scenarios"][0]
    assert scenario["scenario"] == "reads"
    assert scenario["access_count"] == 3
    assert scenario["comparison"]["baseline"]["bytes_by_kind"]["storage_slot"] == pytest.approx(9_000)
    assert payload["paths"] == {"config": "study.yaml", "patterns": []}


def test_invalid_shape_in_study_fails() -> None:
    study = default_study()
    shapes = dict(study.shapes)
    shapes["verkle"] = shapes["verkle"].model_copy(update={"depth": 0})
    with pytest.raises(InvalidConfig):
        run_study(study.model_copy(update={"shapes": shapes}))


def test_empty_scenario_is_reported_without_ratio() -> None:
    study = default_study()
    study = study.model_copy(
        update={"scenarios": study.scenarios + [ScenarioConfig(name="noop", counts={})]}
    )
    report = run_study(study)

    assert len(report.scenarios) == 5
    noop = report.scenarios[-1]
    assert noop.comparison is None
    assert noop.access_count == 0
    assert noop.baseline.total_bytes == 0.0
    assert noop.candidate.total_bytes == 0.0
    assert noop.candidate_fits_budget is True
    assert any("noop" in note for note in report.notes)
    # other scenarios still carry their ratio
    assert report.scenarios[0].comparison is not None
    assert report.scenarios[0].comparison.improvement_ratio == pytest.approx(15.0)
