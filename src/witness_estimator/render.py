from __future__ import annotations

from .report import Report, ScenarioComparison

RULE_WIDTH = 70


def format_bytes(n: float) -> str:
    if n >= 1_000_000:
        return f"{n / 1_000_000:.1f} MB"
    if n >= 1_000:
        return f"{n / 1_000:.1f} KB"
    return f"{round(n)} bytes"


def _header(report: Report) -> list[str]:
    net = report.network
    return [
        "=" * RULE_WIDTH,
        "    Witness Size Comparison",
        "=" * RULE_WIDTH,
        "",
        "Network assumptions:",
        f"  - Time budget: {net.time_budget_sec:g} seconds",
        f"  - Available bandwidth: {net.bandwidth_bits_per_sec / 1_000_000:g} Mbps",
        f"  - Max witness size: {format_bytes(report.max_witness_bytes)}",
        "=" * RULE_WIDTH,
    ]


def _scenario(report: Report, index: int, sc: ScenarioComparison) -> list[str]:
    base_label = f"{report.baseline_shape.name}:"
    cand_label = f"{report.candidate_shape.name}:"
    width = max(len(base_label), len(cand_label), len("Improvement:")) + 2
    if sc.comparison is None:
        improvement = f"{'n/a':>15}"
    else:
        improvement = f"{sc.comparison.improvement_ratio:>14.1f}x smaller"
    lines = [
        "",
        f">>> Scenario {index}: {sc.scenario}",
        "-" * RULE_WIDTH,
        f"  {base_label:<{width}}{format_bytes(sc.baseline.total_bytes):>15}",
        f"  {cand_label:<{width}}{format_bytes(sc.candidate.total_bytes):>15}",
        f"  {'Improvement:':<{width}}{improvement}",
    ]
    if sc.large:
        lines += [
            "",
            f"  Can propagate in {report.network.time_budget_sec:g}-second budget:",
            f"    {base_label:<{width}}{'yes' if sc.baseline_fits_budget else 'no (too large)'}",
            f"    {cand_label:<{width}}{'yes' if sc.candidate_fits_budget else 'no (too large)'}",
        ]
    return lines


def render_text(report: Report) -> str:
    lines = _header(report)
    for i, sc in enumerate(report.scenarios, start=1):
        lines += _scenario(report, i, sc)
    lines += ["", "=" * RULE_WIDTH]
    return "\n".join(lines)
