"""
Test the command line runner
"""

import json

import pytest

import logger_config
from run_and_view import load_points, main


@pytest.fixture(autouse=True)
def isolated_logs(tmp_path, monkeypatch):
    monkeypatch.setenv("BUS_LOG_DIR", str(tmp_path / "logs"))
    monkeypatch.setattr(logger_config, "grouping_logger", None)
    yield
    logger_config.reset_logger()


def write_points(path, points):
    path.write_text(json.dumps(points))
    return str(path)


def test_load_points_formats(tmp_path):
    coords, ids = load_points(write_points(tmp_path / "pairs.json", [[0, 1], [2, 3]]))
    assert coords == [(0, 1), (2, 3)]
    assert ids is None

    coords, ids = load_points(write_points(tmp_path / "objects.json",
                                           [{"x": 0, "y": 1, "visitor_id": "a"}, {"x": 2, "y": 3}]))
    assert coords == [(0, 1), (2, 3)]
    assert ids == ["a", None]


def test_load_points_rejects_non_list(tmp_path):
    with pytest.raises(ValueError):
        load_points(write_points(tmp_path / "bad.json", {"x": 1}))


def test_cli_reports_unreadable_points(tmp_path, capsys):
    points_file = write_points(tmp_path / "scalars.json", [1, 2, 3])

    assert main([points_file]) == 1
    assert "Could not read points" in capsys.readouterr().out

    assert main([str(tmp_path / "missing.json")]) == 1


def test_cli_writes_output(tmp_path, two_triples, capsys):
    points_file = write_points(tmp_path / "points.json", two_triples.tolist())
    output_file = tmp_path / "groups.json"

    exit_code = main([points_file, "--max-size", "3", "--min-size", "3", "--output", str(output_file)])

    assert exit_code == 0
    assert "BUS GROUPING SUMMARY" in capsys.readouterr().out
    result = json.loads(output_file.read_text())
    assert [g['members'] for g in result['data']] == [[0, 1, 2], [3, 4, 5]]


def test_cli_reports_infeasible_band(tmp_path, groups_4_4_3, capsys):
    points_file = write_points(tmp_path / "points.json", groups_4_4_3.tolist())

    exit_code = main([points_file, "--max-size", "5", "--min-size", "5"])

    assert exit_code == 1
    assert "NoProgressError" in capsys.readouterr().out
