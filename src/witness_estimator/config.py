from __future__ import annotations

from pathlib import Path
from typing import Annotated, Any

import yaml
from pydantic import ValidationError
from pydantic import BaseModel, ConfigDict, Field, model_validator

from .errors import InvalidConfig
from .patterns import DEFAULT_CODE_BYTES_PER_ACCESS, AccessKind, AccessPattern, default_patterns, pattern_from_counts


class TreeShape(BaseModel):
    """Shape of an authenticated state tree, reduced to what drives witness size.

    ``depth`` and ``branching_factor`` are not bounded here so that a malformed
    shape can still be described; :meth:`check` (called by ``estimate``) rejects it.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    branching_factor: int
    depth: int
    per_level_proof_bytes: float = Field(..., ge=0.0)
    per_access_overhead_bytes: float = Field(0.0, ge=0.0)
    code_chunk_size: int = Field(31, ge=1)
    code_chunk_bytes: float = Field(..., ge=0.0)

    def check(self) -> "TreeShape":
        # field bounds are not re-validated after model_copy(update=...)
        if self.depth < 1:
            raise InvalidConfig(f"tree shape {self.name!r}: depth must be >= 1 (got {self.depth})")
        if self.branching_factor < 2:
            raise InvalidConfig(
                f"tree shape {self.name!r}: branching_factor must be >= 2 (got {self.branching_factor})"
            )
        for field in ("per_level_proof_bytes", "per_access_overhead_bytes", "code_chunk_bytes"):
            value = getattr(self, field)
            if value < 0:
                raise InvalidConfig(f"tree shape {self.name!r}: {field} must be >= 0 (got {value})")
        if self.code_chunk_size < 1:
            raise InvalidConfig(
                f"tree shape {self.name!r}: code_chunk_size must be >= 1 (got {self.code_chunk_size})"
            )
        return self

    @property
    def capacity(self) -> int:
        return self.branching_factor**self.depth


# Per-access figures match commonly quoted estimates: ~3 kB per account or slot
# proof in the hexary MPT (whole contract code for a code access), ~200 B per
# leaf in a 256-ary Verkle tree with 31-byte code chunks.
MERKLE_PATRICIA = TreeShape(
    name="Merkle Patricia Tree",
    branching_factor=16,
    depth=8,
    per_level_proof_bytes=360.0,
    per_access_overhead_bytes=120.0,
    code_chunk_size=24_576,
    code_chunk_bytes=24_200.0,
)

VERKLE = TreeShape(
    name="Verkle Tree",
    branching_factor=256,
    depth=3,
    per_level_proof_bytes=32.0,
    per_access_overhead_bytes=104.0,
    code_chunk_size=31,
    code_chunk_bytes=200.0,
)


class NetworkBudget(BaseModel):
    bandwidth_bits_per_sec: float = Field(10_000_000.0, gt=0.0)
    time_budget_sec: float = Field(12.0, gt=0.0)


class ScenarioConfig(BaseModel):
    name: str
    pattern: AccessPattern | None = None
    counts: dict[AccessKind, Annotated[int, Field(ge=0)]] | None = None
    code_bytes_per_access: int = Field(DEFAULT_CODE_BYTES_PER_ACCESS, ge=1)

    @model_validator(mode="after")
    def _exactly_one_source(self) -> "ScenarioConfig":
        if (self.pattern is None) == (self.counts is None):
            raise ValueError(f"scenario {self.name!r} needs exactly one of 'pattern' or 'counts'")
        return self

    def to_pattern(self) -> AccessPattern:
        if self.pattern is not None:
            return self.pattern.model_copy(update={"name": self.pattern.name or self.name})
        assert self.counts is not None
        return pattern_from_counts(self.counts, name=self.name, code_bytes_per_access=self.code_bytes_per_access)


class StudyConfig(BaseModel):
    shapes: dict[str, TreeShape]
    baseline: str
    candidate: str
    network: NetworkBudget = Field(default_factory=NetworkBudget)
    scenarios: list[ScenarioConfig] = Field(default_factory=list)

    @model_validator(mode="after")
    def _validate_shape_refs(self) -> "StudyConfig":
        for role in ("baseline", "candidate"):
            key = getattr(self, role)
            if key not in self.shapes:
                raise ValueError(f"{role} refers to unknown shape: {key!r} (known: {sorted(self.shapes)})")
        return self

    @property
    def baseline_shape(self) -> TreeShape:
        return self.shapes[self.baseline]

    @property
    def candidate_shape(self) -> TreeShape:
        return self.shapes[self.candidate]

    def patterns(self) -> list[AccessPattern]:
        return [s.to_pattern() for s in self.scenarios]

    @classmethod
    def from_yaml(cls, path: str | Path) -> "StudyConfig":
        data = _load_yaml(path)
        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            raise ValueError(f"Invalid study config: {path}\n{exc}") from exc


def default_study() -> StudyConfig:
    return StudyConfig(
        shapes={"mpt": MERKLE_PATRICIA, "verkle": VERKLE},
        baseline="mpt",
        candidate="verkle",
        scenarios=[
            ScenarioConfig(name=p.name or f"Scenario {i}", pattern=p) for i, p in enumerate(default_patterns(), start=1)
        ],
    )


def _load_yaml(path: str | Path) -> dict[str, Any]:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(str(path))
    try:
        return yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:  # pragma: no cover
        raise ValueError(f"Failed to parse YAML: {p}") from exc


class InputPaths(BaseModel):
    config: str | None = None
    patterns: list[str] = Field(default_factory=list)
