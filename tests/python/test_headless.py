import csv
import json

import pytest

from quorum.headless import run_headless


def _read_csv(path):
    with path.open(newline="") as handle:
        return list(csv.reader(handle))


def test_headless_basic_log_appends_cycle_and_population(tmp_path):
    log_path = tmp_path / "basic.csv"
    run_headless(steps=3, seed=1, log_path=log_path)
    rows = _read_csv(log_path)

    assert rows[0] == ["cycle", "population"]
    assert [row[0] for row in rows[1:]] == ["1", "2", "3"]
    assert all(int(row[1]) >= 0 for row in rows[1:])

    run_headless(steps=2, seed=1, log_path=log_path)
    rows = _read_csv(log_path)
    assert len(rows) == 6
    assert rows.count(["cycle", "population"]) == 1


def test_headless_detailed_log_header_and_counts(tmp_path):
    log_path = tmp_path / "detailed.csv"
    history = run_headless(
        steps=4,
        seed=2,
        log_path=log_path,
        profile="clustered",
        log_format="detailed",
        deterministic_log=True,
    )
    rows = _read_csv(log_path)
    header = rows[0]
    assert header == [
        "cycle",
        "population",
        "luminescent",
        "dark",
        "cluster_population",
        "food",
        "hormones",
        "births",
        "deaths",
        "absorptions",
        "emissions",
        "faults",
        "tick_ms",
    ]
    assert len(rows) == 5
    idx = {name: i for i, name in enumerate(header)}
    for row, metrics in zip(rows[1:], history):
        assert int(row[idx["population"]]) == metrics.population
        assert int(row[idx["luminescent"]]) + int(row[idx["dark"]]) == metrics.population
        assert int(row[idx["cluster_population"]]) <= metrics.population
        assert float(row[idx["tick_ms"]]) == 0.0


def test_identical_seeds_write_identical_logs(tmp_path):
    first = tmp_path / "first.csv"
    second = tmp_path / "second.csv"

    run_headless(steps=50, seed=9, log_path=first, log_format="detailed", deterministic_log=True)
    run_headless(steps=50, seed=9, log_path=second, log_format="detailed", deterministic_log=True)

    assert first.read_text() == second.read_text()


def test_headless_reads_yaml_config(tmp_path):
    config_path = tmp_path / "run.yaml"
    config_path.write_text("profile: clustered\nncell: 7\nseed: 4\n")

    history = run_headless(steps=1, seed=None, log_path=None, config_path=config_path)

    assert history[0].cycle == 1
    assert history[0].population <= 7


def test_headless_summary_output(tmp_path):
    summary_path = tmp_path / "summary.json"
    run_headless(steps=4, seed=3, log_path=None, summary_path=summary_path)

    payload = json.loads(summary_path.read_text())
    assert payload["steps"] == 4
    assert payload["seed"] == 3
    assert payload["profile"] == "reproducing"
    assert payload["final"]["cycle"] == 4
    assert "population" in payload
    assert "luminescent" in payload


def test_unknown_log_format_is_rejected(tmp_path):
    with pytest.raises(ValueError):
        run_headless(steps=1, seed=1, log_path=tmp_path / "x.csv", log_format="xml")
