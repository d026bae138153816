import csv
import json

import pytest

from flocksim.config import FlockParameters, NeighborStrategy, SimulationConfig
from flocksim.headless import run_headless


def _read_csv(path):
    with path.open(newline="") as handle:
        return list(csv.reader(handle))


def _small_config(**overrides) -> SimulationConfig:
    return SimulationConfig(flock=FlockParameters(swarm_size=20), **overrides)


def test_headless_log_header_and_rows(tmp_path):
    log_path = tmp_path / "run.csv"
    run_headless(steps=3, seed=1, log_path=log_path, deterministic_log=True, config=_small_config())
    rows = _read_csv(log_path)
    assert len(rows) == 4
    assert rows[0] == [
        "tick",
        "population",
        "neighbor_checks",
        "neighbor_checks_per_agent",
        "avg_speed",
        "max_speed",
        "tick_ms",
    ]

    header = rows[0]
    idx = {name: i for i, name in enumerate(header)}
    first_row = rows[1]
    assert int(first_row[idx["tick"]]) == 0
    assert int(first_row[idx["population"]]) == 20
    population = int(first_row[idx["population"]])
    neighbor_checks = int(first_row[idx["neighbor_checks"]])
    assert float(first_row[idx["neighbor_checks_per_agent"]]) == pytest.approx(neighbor_checks / population, abs=1e-4)
    assert float(first_row[idx["tick_ms"]]) == 0.0


def test_deterministic_logs_match_for_same_seed(tmp_path):
    first = tmp_path / "a.csv"
    second = tmp_path / "b.csv"
    run_headless(steps=5, seed=7, log_path=first, deterministic_log=True, config=_small_config())
    run_headless(steps=5, seed=7, log_path=second, deterministic_log=True, config=_small_config())
    assert first.read_text() == second.read_text()


def test_headless_summary_output(tmp_path):
    summary_path = tmp_path / "summary.json"
    simulation = run_headless(
        steps=4,
        seed=3,
        deterministic_log=True,
        summary_path=summary_path,
        config=_small_config(neighbor_strategy=NeighborStrategy.BRUTE_FORCE),
    )
    payload = json.loads(summary_path.read_text())
    assert payload["steps"] == 4
    assert payload["seed"] == 3
    assert payload["population"] == 20
    assert payload["neighbor_strategy"] == "brute_force"
    assert payload["tick_ms"]["max"] == 0.0
    for key in ["min", "max", "avg", "p50", "p90", "p99"]:
        assert key in payload["neighbor_checks"]
    assert simulation.tick_count == 4


def test_seed_override_leaves_caller_config_untouched():
    config = _small_config(seed=11)
    simulation = run_headless(steps=1, seed=5, config=config)
    assert config.seed == 11
    assert simulation.config.seed == 5
