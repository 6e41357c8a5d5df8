from __future__ import annotations

import logging
from datetime import datetime, timezone
from math import ceil

from .config import InputPaths, StudyConfig, TreeShape
from .errors import DivisionByZero
from .patterns import AccessKind, AccessPattern
from .report import ComparisonResult, Report, ScenarioComparison, ScenarioResult

logger = logging.getLogger(__name__)

LARGE_WITNESS_BYTES = 1_000_000


def code_chunk_count(code_bytes: int, chunk_size: int) -> int:
    if chunk_size < 1:
        raise ValueError(f"chunk_size must be >= 1 (got {chunk_size})")
    return ceil(code_bytes / chunk_size)


def access_cost(shape: TreeShape, kind: AccessKind, code_bytes_per_access: int) -> float:
    if kind == AccessKind.code_chunk:
        return code_chunk_count(code_bytes_per_access, shape.code_chunk_size) * shape.code_chunk_bytes
    return shape.per_level_proof_bytes * shape.depth + shape.per_access_overhead_bytes


def estimate(shape: TreeShape, pattern: AccessPattern) -> ScenarioResult:
    shape.check()

    costs = {kind: access_cost(shape, kind, pattern.code_bytes_per_access) for kind in AccessKind}
    bytes_by_kind = {kind: 0.0 for kind in AccessKind}
    for kind in pattern.accesses:
        bytes_by_kind[kind] += costs[kind]

    total = sum(bytes_by_kind.values())
    n = len(pattern.accesses)
    logger.debug("estimate %s: %d accesses -> %.0f bytes", shape.name, n, total)
    return ScenarioResult(
        tree_shape_name=shape.name,
        total_bytes=total,
        per_access_bytes=0.0 if n == 0 else total / n,
        access_count=n,
        bytes_by_kind=bytes_by_kind,
    )


def compare(baseline: ScenarioResult, candidate: ScenarioResult) -> ComparisonResult:
    return ComparisonResult.from_results(baseline, candidate)


def max_witness_bytes(bandwidth_bits_per_sec: float, time_budget_sec: float) -> float:
    return bandwidth_bits_per_sec * time_budget_sec / 8


def fits_in_budget(result: ScenarioResult, bandwidth_bits_per_sec: float, time_budget_sec: float) -> bool:
    return result.total_bytes * 8 <= bandwidth_bits_per_sec * time_budget_sec


def run_study(config: StudyConfig, paths: dict[str, object] | None = None) -> Report:
    paths_obj = None
    if paths is not None:
        paths_obj = InputPaths.model_validate(paths)

    baseline_shape = config.baseline_shape.check()
    candidate_shape = config.candidate_shape.check()
    network = config.network

    notes = [
        "Analytical estimate (closed-form per-access costs, no tree construction or cryptography).",
        "Byte constants are illustrative defaults, not measured proof sizes.",
    ]
    scenarios: list[ScenarioComparison] = []
    for pattern in config.patterns():
        name = pattern.name or f"Scenario {len(scenarios) + 1}"
        logger.info("Estimating scenario %r (%d accesses)", name, len(pattern))
        baseline = estimate(baseline_shape, pattern)
        candidate = estimate(candidate_shape, pattern)
        try:
            comparison = compare(baseline, candidate)
        except DivisionByZero as exc:
            logger.warning("Scenario %r has no improvement ratio: %s", name, exc)
            notes.append(f"Scenario {name!r}: candidate witness is 0 bytes, improvement ratio omitted.")
            comparison = None
        scenarios.append(
            ScenarioComparison(
                scenario=name,
                access_count=len(pattern),
                baseline=baseline,
                candidate=candidate,
                comparison=comparison,
                baseline_fits_budget=fits_in_budget(baseline, network.bandwidth_bits_per_sec, network.time_budget_sec),
                candidate_fits_budget=fits_in_budget(candidate, network.bandwidth_bits_per_sec, network.time_budget_sec),
                large=max(baseline.total_bytes, candidate.total_bytes) > LARGE_WITNESS_BYTES,
            )
        )

    return Report(
        generated_at=datetime.now(timezone.utc).isoformat(),
        baseline_shape=baseline_shape,
        candidate_shape=candidate_shape,
        network=network,
        max_witness_bytes=max_witness_bytes(network.bandwidth_bits_per_sec, network.time_budget_sec),
        paths=paths_obj,
        scenarios=scenarios,
        notes=notes,
    )
