"""
Price Schedule Builder - Tabulates quotes across a range of contact volumes.

Produces:
- price_schedule.csv with one row per sampled volume
- build_report.json with row counts, per-level coverage and tier-boundary drops
"""
import json
import logging
from datetime import datetime
from typing import Iterable, Optional

import pandas as pd

from ..config.settings import get_settings, Settings
from ..engine.pricing_engine import PricingEngine, get_engine

logger = logging.getLogger(__name__)

SCHEDULE_COLUMNS = [
    'volume', 'outcome', 'level', 'included_volume', 'base_fee',
    'overage_unit_cost', 'overage_volume', 'overage_blocks', 'overage_cost', 'total',
]

# Counts stay integers even when absent or consultation rows leave them empty
INTEGER_COLUMNS = ['level', 'included_volume', 'overage_volume', 'overage_blocks']


def default_volumes(engine: PricingEngine, step: int, max_volume: int) -> list[int]:
    """Sample every `step` contacts plus each tier's first and last volume."""
    if step <= 0:
        raise ValueError(f"Schedule step must be positive, got {step}")
    volumes = set(range(step, max_volume + 1, step))
    for plan in engine.plans:
        volumes.update(v for v in (plan.min_volume, plan.max_volume) if v > 0)
    volumes.add(engine.plans[-1].max_volume + 1)
    return sorted(volumes)


def price_schedule(volumes: Optional[Iterable[int]] = None, engine: Optional[PricingEngine] = None) -> pd.DataFrame:
    """
    Build a DataFrame of quotes, one row per volume.

    Volumes with no quote are kept with outcome "absent" and empty price columns.
    """
    engine = engine or get_engine()
    if volumes is None:
        settings = get_settings()
        volumes = default_volumes(engine, settings.schedule_step, settings.schedule_max_volume)

    rows = []
    for volume in volumes:
        quote = engine.calculate(volume)
        if quote is None:
            rows.append({'volume': volume, 'outcome': 'absent'})
        elif quote.consultation:
            rows.append({'volume': volume, 'outcome': quote.kind, 'level': quote.level})
        else:
            row = quote.to_dict()
            row['outcome'] = row.pop('kind')
            row.pop('consultation')
            for col in ('base_fee', 'overage_unit_cost', 'overage_cost', 'total'):
                row[col] = float(row[col])
            rows.append(row)

    schedule = pd.DataFrame(rows, columns=SCHEDULE_COLUMNS)
    schedule[INTEGER_COLUMNS] = schedule[INTEGER_COLUMNS].astype('Int64')
    return schedule


def boundary_drops(schedule: pd.DataFrame) -> list[dict]:
    """Find consecutive priced rows where moving up a tier lowers the total."""
    priced = schedule[schedule['outcome'] == 'priced'].sort_values('volume')
    drops = []
    previous = None
    for row in priced.itertuples(index=False):
        if previous is not None and row.level != previous.level and row.total < previous.total:
            drops.append({
                "from_volume": int(previous.volume),
                "to_volume": int(row.volume),
                "from_total": previous.total,
                "to_total": row.total,
            })
        previous = row
    return drops


def build_price_schedule(settings: Optional[Settings] = None, verbose: bool = True) -> dict:
    """
    Build the price schedule CSV and its build report.

    Args:
        settings: Optional settings override
        verbose: Print progress messages

    Returns:
        Build report dictionary
    """
    settings = settings or get_settings()

    report = {
        "timestamp": datetime.now().isoformat(),
        "status": "pending",
        "metrics": {},
        "warnings": [],
        "errors": []
    }

    if settings.schedule_step <= 0:
        msg = f"ERROR: schedule step must be positive, got {settings.schedule_step}"
        report["errors"].append(msg)
        report["status"] = "failed"
        logger.error(msg)
        if verbose:
            print(msg)
        return report

    engine = get_engine()
    volumes = default_volumes(engine, settings.schedule_step, settings.schedule_max_volume)
    schedule = price_schedule(volumes, engine)

    outcome_counts = schedule['outcome'].value_counts()
    level_counts = schedule[schedule['outcome'] == 'priced']['level'].value_counts().sort_index()

    report["metrics"]["row_count"] = len(schedule)
    report["metrics"]["priced_rows"] = int(outcome_counts.get('priced', 0))
    report["metrics"]["consultation_rows"] = int(outcome_counts.get('consultation', 0))
    report["metrics"]["level_coverage"] = {str(int(k)): int(v) for k, v in level_counts.items()}
    report["metrics"]["boundary_drops"] = boundary_drops(schedule)

    missing_levels = [p.level for p in engine.plans if str(p.level) not in report["metrics"]["level_coverage"]]
    for level in missing_levels:
        report["warnings"].append(f"WARNING: no sampled volume falls in tier {level}")

    if verbose:
        print(f"Priced {report['metrics']['priced_rows']} volumes, "
              f"{report['metrics']['consultation_rows']} above the plan table")
        for drop in report["metrics"]["boundary_drops"]:
            print(f"Total drops from {drop['from_total']:.2f} at {drop['from_volume']} "
                  f"to {drop['to_total']:.2f} at {drop['to_volume']}")

    output_path = settings.price_schedule
    output_path.parent.mkdir(parents=True, exist_ok=True)
    schedule.to_csv(output_path, index=False)
    report["output_file"] = str(output_path)
    report["status"] = "success"
    logger.info("Price schedule written to %s (%d rows)", output_path, len(schedule))

    if verbose:
        print(f"\nPROCESS COMPLETE: {output_path} generated with {len(schedule)} rows.")

    # Save build report
    report_path = settings.build_report
    report_path.parent.mkdir(parents=True, exist_ok=True)
    with open(report_path, 'w') as f:
        json.dump(report, f, indent=2)

    if verbose:
        print(f"Build report saved to: {report_path}")

    return report


if __name__ == "__main__":
    build_price_schedule()
