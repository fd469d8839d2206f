"""Plain-text summary of batch run telemetry."""

from __future__ import annotations

from collections import Counter

from witch_rogue.sim.telemetry import RunTelemetry


def summarize(results: list[RunTelemetry]) -> dict[str, float]:
    """Aggregate a batch into headline numbers."""
    if not results:
        return {"runs": 0}

    n = len(results)
    outcomes = Counter(r.final_result for r in results)
    levels = [lvl for r in results for lvl in r.levels]
    return {
        "runs": n,
        "victory_rate": outcomes["victory"] / n,
        "defeat_rate": outcomes["defeat"] / n,
        "timeout_rate": outcomes["timeout"] / n,
        "avg_levels_reached": sum(r.levels_reached for r in results) / n,
        "max_levels_reached": max(r.levels_reached for r in results),
        "avg_total_gold": sum(r.total_gold for r in results) / n,
        "avg_turns_per_level": (
            sum(lvl.turns for lvl in levels) / len(levels) if levels else 0.0
        ),
    }


def generate_text_report(results: list[RunTelemetry]) -> str:
    """Render a batch summary plus a per-level death table."""
    stats = summarize(results)
    lines = ["=" * 50, "WITCH! BATCH REPORT", "=" * 50]
    if not results:
        lines.append("No runs.")
        return "\n".join(lines)

    lines.append(f"Runs:               {stats['runs']}")
    lines.append(f"Victory rate:       {stats['victory_rate']:.1%}")
    lines.append(f"Defeat rate:        {stats['defeat_rate']:.1%}")
    lines.append(f"Timeout rate:       {stats['timeout_rate']:.1%}")
    lines.append(f"Avg level reached:  {stats['avg_levels_reached']:.1f}")
    lines.append(f"Max level reached:  {stats['max_levels_reached']}")
    lines.append(f"Avg total gold:     {stats['avg_total_gold']:.1f}")
    lines.append(f"Avg turns / level:  {stats['avg_turns_per_level']:.1f}")

    deaths = Counter(
        r.levels_reached for r in results if r.final_result == "defeat"
    )
    if deaths:
        lines.append("")
        lines.append("Defeats by level:")
        for level in sorted(deaths):
            lines.append(f"  {level:>2}: {deaths[level]}")
    return "\n".join(lines)
