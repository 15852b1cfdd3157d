import pandas as pd

from structviz.config import WorkbenchConfig
from structviz.runner import parse_args, run_script


def _config():
    return WorkbenchConfig(use_tqdm=False)


def test_parse_args_splits_ints_and_words():
    assert parse_args("1, 3") == (1, 3)
    assert parse_args("dfs 0") == ("dfs", 0)
    assert parse_args("-4") == (-4,)
    assert parse_args("") == ()


def test_run_script_annotates_each_command(tmp_path):
    source = tmp_path / "commands.csv"
    target = tmp_path / "results.csv"
    pd.DataFrame(
        {
            "engine": ["segment", "dsu", "graph", "heap"],
            "operation": ["query", "find", "bfs", "extract_root"],
            "args": ["1 3", "9", "0", ""],
        }
    ).to_csv(source, index=False)

    run = run_script(source, target, _config())

    assert run is not None
    output = pd.read_csv(target, dtype=str).fillna("")
    assert list(output["success"]) == ["True", "False", "True", "False"]
    assert list(output["kind"]) == ["ok", "index_out_of_range", "ok", "empty_structure"]
    assert output.loc[0, "value"] == "15"
    assert output.loc[2, "trace"] == "0 1 2 3 4 5"


def test_run_script_reports_missing_file(tmp_path, capsys):
    assert run_script(tmp_path / "missing.csv", tmp_path / "out.csv", _config()) is None
    assert "ERROR: Input file not found" in capsys.readouterr().out


def test_run_script_reports_missing_columns(tmp_path, capsys):
    source = tmp_path / "commands.csv"
    pd.DataFrame({"engine": ["heap"]}).to_csv(source, index=False)
    assert run_script(source, tmp_path / "out.csv", _config()) is None
    assert "operation" in capsys.readouterr().out


def test_run_script_rejects_unknown_format(tmp_path, capsys):
    source = tmp_path / "commands.json"
    source.write_text("{}")
    assert run_script(source, tmp_path / "out.csv", _config()) is None
    assert "Unsupported file format" in capsys.readouterr().out
