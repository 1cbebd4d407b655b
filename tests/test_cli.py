import json

import pytest

from sortga.cli import main, parse_args


def test_sorted_input_prints_generation_one(capsys):
    assert main(["--input", "1,2,3,4,5", "--seed", "1"]) == 0
    assert capsys.readouterr().out.strip() == "{ x: 1, y: 1},"


def test_population_size_sweep_prints_one_point_per_trial(capsys):
    argv = ["--input", "3,1,2", "--trials", "3", "--vary", "population_size", "--seed", "2", "--max-generations", "5000"]
    assert main(argv) == 0
    lines = capsys.readouterr().out.strip().splitlines()
    assert len(lines) == 3
    assert [line.split(",")[0] for line in lines] == ["{ x: 1", "{ x: 2", "{ x: 3"]


def test_json_output_and_record_file(tmp_path, capsys):
    out_file = tmp_path / "trials.csv"
    argv = ["--input", "2,1", "--seed", "0", "--format", "json", "--output", str(out_file), "--max-generations", "1000"]
    assert main(argv) == 0
    records = json.loads(capsys.readouterr().out)
    assert records[0]["converged"] is True
    assert out_file.read_text(encoding="utf-8").startswith("trial,population_size")


def test_csv_output(capsys):
    assert main(["--input", "1,2", "--format", "csv", "--trials", "2", "--seed", "3"]) == 0
    lines = capsys.readouterr().out.strip().splitlines()
    assert lines[0].startswith("trial,")
    assert len(lines) == 3


def test_config_file_values_are_overridden_by_flags(tmp_path):
    spec = tmp_path / "run.json"
    spec.write_text(json.dumps({"input": [4, 3, 2, 1], "population_size": 12, "mutation_rate": 0.2, "trials": 2}))
    args = parse_args(["--config", str(spec), "--population-size", "7"])
    assert args.input == "4,3,2,1"
    assert args.population_size == 7
    assert args.mutation_rate == 0.2
    assert args.trials == 2
    assert args.max_generations is None


def test_malformed_input_exits_with_usage_error(capsys):
    assert main(["--input", "1,x,3"]) == 2
    assert "Cannot parse gene value 'x'" in capsys.readouterr().err


def test_missing_config_file_is_reported(tmp_path, capsys):
    assert main(["--config", str(tmp_path / "nope.json")]) == 2
    assert "does not exist" in capsys.readouterr().err


def test_generation_cap_exit_code(capsys):
    argv = ["--input", ",".join(str(v) for v in range(30, 0, -1)), "--population-size", "3", "--mutation-rate", "0", "--max-generations", "2", "--seed", "4"]
    assert main(argv) == 1
    assert "No sorted individual" in capsys.readouterr().err


@pytest.mark.parametrize(
    "argv",
    [
        ["--mutation-rate", "1.5"],
        ["--mutation-rate", "abc"],
        ["--population-size", "0"],
        ["--trials", "zero"],
        ["--vary", "seed"],
    ],
)
def test_invalid_flags_exit_via_argparse(argv):
    with pytest.raises(SystemExit) as excinfo:
        parse_args(argv)
    assert excinfo.value.code == 2
