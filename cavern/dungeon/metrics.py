from typing import Any, Dict, List


def init_metrics() -> Dict[str, Any]:
    return {
        'attempts': 0,
        'borders_initial': 0,
        'connections_built': 0,
        'connections_pruned': 0,
        'paths_traced': 0,
        'secret_passage_rounds': 0,
        'secret_doors': 0,
        'treasure_chests': 0,
        'runtime_ms': 0,
        'phase_ms': {},
    }


def merge_metrics(per_floor: List[Dict[str, Any]]) -> Dict[str, Any]:
    """Sum per-floor counters into dungeon totals; per-floor dicts are kept under 'floors'."""
    total = init_metrics()
    for m in per_floor:
        for key, value in m.items():
            if key == 'phase_ms':
                for phase, ms in value.items():
                    total['phase_ms'][phase] = total['phase_ms'].get(phase, 0) + ms
            elif isinstance(value, (int, float)) and key in total:
                total[key] += value
    total['floors'] = list(per_floor)
    return total
