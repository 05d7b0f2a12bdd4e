import csv
import json
import pytest
import sys
import os

import pandas as pd
from pydantic import ValidationError

# Add src to path for internal imports
src_path = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'src')
if src_path not in sys.path:
    sys.path.insert(0, src_path)

from contact_pricing.config.settings import Settings, reset_settings
from contact_pricing.data.build_schedule import (
    boundary_drops, build_price_schedule, default_volumes, price_schedule,
)
from contact_pricing.engine import PricingEngine


@pytest.fixture
def settings(tmp_path):
    return Settings(
        project_root=tmp_path,
        price_schedule=tmp_path / 'outputs' / 'price_schedule.csv',
        build_report=tmp_path / 'outputs' / 'build_report.json',
    )


def test_default_volumes_include_tier_edges():
    volumes = default_volumes(PricingEngine(), step=100, max_volume=10500)
    assert volumes == sorted(set(volumes))
    for v in (999, 1000, 2499, 2500, 9999, 10000, 10001):
        assert v in volumes
    assert 0 not in volumes
    assert len(volumes) == 111


def test_price_schedule_outcomes():
    df = price_schedule([0, 600, 20000])
    assert list(df['outcome']) == ['absent', 'priced', 'consultation']

    priced = df[df['volume'] == 600].iloc[0]
    assert priced['level'] == 1
    assert priced['overage_blocks'] == 1
    assert priced['total'] == pytest.approx(238.80)

    consult = df[df['volume'] == 20000].iloc[0]
    assert consult['level'] == 7
    assert pd.isna(consult['total'])


def test_boundary_drops():
    df = price_schedule([998, 999, 1000, 1001, 9999, 10000])
    drops = boundary_drops(df)
    assert [(d['from_volume'], d['to_volume']) for d in drops] == [(999, 1000), (9999, 10000)]
    assert drops[0]['from_total'] == pytest.approx(398.00)
    assert drops[0]['to_total'] == pytest.approx(299.00)


def test_build_price_schedule(settings):
    report = build_price_schedule(settings, verbose=False)

    assert report['status'] == 'success'
    assert report['errors'] == []
    assert report['metrics']['row_count'] == 111
    assert report['metrics']['priced_rows'] == 105
    assert report['metrics']['consultation_rows'] == 6
    assert report['metrics']['level_coverage']['1'] == 10
    assert report['metrics']['level_coverage']['6'] == 1
    assert len(report['metrics']['boundary_drops']) == 5

    schedule = pd.read_csv(settings.price_schedule)
    assert len(schedule) == 111

    with open(settings.build_report) as f:
        saved = json.load(f)
    assert saved['status'] == 'success'


def test_build_fails_on_bad_step(settings):
    settings.schedule_step = 0
    report = build_price_schedule(settings, verbose=False)
    assert report['status'] == 'failed'
    assert report['errors']
    assert not settings.price_schedule.exists()


@pytest.mark.parametrize("step", [0, -100])
def test_default_volumes_rejects_non_positive_step(step):
    with pytest.raises(ValueError, match="must be positive"):
        default_volumes(PricingEngine(), step=step, max_volume=10500)


def test_price_schedule_uses_env_step(monkeypatch):
    monkeypatch.setenv("CONTACT_PRICING_SCHEDULE_STEP", "2500")
    reset_settings()
    try:
        df = price_schedule()
    finally:
        reset_settings()
    assert 2500 in set(df['volume'])
    assert 100 not in set(df['volume'])


def test_price_schedule_rejects_zero_env_step(monkeypatch):
    monkeypatch.setenv("CONTACT_PRICING_SCHEDULE_STEP", "0")
    reset_settings()
    try:
        with pytest.raises(ValidationError):
            price_schedule()
    finally:
        reset_settings()


def test_count_columns_stay_integers():
    df = price_schedule([0, 600, 20000])
    for col in ('level', 'included_volume', 'overage_volume', 'overage_blocks'):
        assert str(df[col].dtype) == 'Int64'
    assert pd.isna(df.loc[0, 'level'])
    assert df.loc[2, 'level'] == 7


def test_schedule_csv_writes_integer_counts(settings):
    build_price_schedule(settings, verbose=False)

    with open(settings.price_schedule, newline='') as f:
        rows = {int(r['volume']): r for r in csv.DictReader(f)}

    row = rows[600]
    assert row['level'] == '1'
    assert row['included_volume'] == '500'
    assert row['overage_volume'] == '100'
    assert row['overage_blocks'] == '1'

    consult = rows[10001]
    assert consult['level'] == '7'
    assert consult['overage_blocks'] == ''
