from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from .config import InputPaths, NetworkBudget, TreeShape
from .errors import DivisionByZero
from .patterns import AccessKind


class ScenarioResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    tree_shape_name: str
    total_bytes: float = Field(..., ge=0.0)
    per_access_bytes: float = Field(..., ge=0.0)
    access_count: int = Field(0, ge=0)
    bytes_by_kind: dict[AccessKind, float] = Field(default_factory=dict)


class ComparisonResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    baseline: ScenarioResult
    candidate: ScenarioResult
    improvement_ratio: float

    @classmethod
    def from_results(cls, baseline: ScenarioResult, candidate: ScenarioResult) -> "ComparisonResult":
        if candidate.total_bytes == 0:
            raise DivisionByZero(
                f"cannot compare against {candidate.tree_shape_name!r}: candidate witness is 0 bytes"
            )
        return cls(
            baseline=baseline,
            candidate=candidate,
            improvement_ratio=baseline.total_bytes / candidate.total_bytes,
        )


class ScenarioComparison(BaseModel):
    scenario: str
    access_count: int = Field(..., ge=0)
    baseline: ScenarioResult
    candidate: ScenarioResult
    # None when the candidate witness is empty
    comparison: ComparisonResult | None = None
    baseline_fits_budget: bool
    candidate_fits_budget: bool
    # either witness above 1 MB
    large: bool = False


class Report(BaseModel):
    generated_at: str
    baseline_shape: TreeShape
    candidate_shape: TreeShape
    network: NetworkBudget
    max_witness_bytes: float = Field(..., ge=0.0)
    paths: InputPaths | None = None
    scenarios: list[ScenarioComparison]
    notes: list[str] = Field(default_factory=list)
