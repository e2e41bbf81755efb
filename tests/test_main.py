import csv
import json

from pointexplorer.main import main, parse_filter
from pointexplorer.model.io import IOManager


def test_parse_filter():
    assert parse_filter("2:greater:0") == (2, {"condition": "greater", "value": 0.0})
    assert parse_filter("0:equal:5:0.5") == (0, {"condition": "equal", "value": 5.0, "tolerance": 0.5})


def test_cli_writes_exports(tmp_path):
    json_path = tmp_path / "batch.json"
    csv_path = tmp_path / "batch.csv"
    h5_path = tmp_path / "batch.h5"
    plot_path = tmp_path / "plot.png"
    code = main([
        "--dims", "3", "--points", "40", "--seed", "5",
        "--filter", "2:greater:0",
        "--json", str(json_path), "--csv", str(csv_path),
        "--h5", str(h5_path), "--plot", str(plot_path),
        "--log-level", "WARNING",
    ])
    assert code == 0
    assert json.loads(json_path.read_text())["metadata"]["pointCount"] == 40
    with open(csv_path, newline="") as f:
        rows = list(csv.reader(f))
    assert rows[0] == ["X", "Y", "Z", "value"]
    assert len(rows) == 41
    assert len(IOManager.load_batch(str(h5_path))) == 40
    assert plot_path.stat().st_size > 0


def test_cli_patterned_summary(capsys):
    code = main(["--pattern", "sphere", "--dims", "2", "--grid-size", "3", "--summary", "--log-level", "ERROR"])
    assert code == 0
    summary = json.loads(capsys.readouterr().out)
    assert summary["totalPoints"] == 9


def test_cli_invalid_dimension_returns_error():
    assert main(["--dims", "2", "--x", "0", "--y", "5", "--log-level", "CRITICAL"]) == 2
