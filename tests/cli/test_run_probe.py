from __future__ import annotations

import json
from contextlib import redirect_stdout
from io import StringIO
from pathlib import Path

import pytest

from leakprobe.cli.cli import parse_probe_args
from leakprobe.config.probe_config import MB
from leakprobe.consts.RssSource import RssSource
from leakprobe.consts.WorkloadVariant import WorkloadVariant
from leakprobe.run_probe import build_workload, load_config, main
from leakprobe.service.workload.read_workload import ReadWorkload
from leakprobe.service.workload.write_workload import WriteWorkload


def _write_config(tmp_path: Path, variant: str = "read") -> Path:
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    (config_dir / "config.yaml").write_text(
        "\n".join(
            [
                f"variant: {variant}",
                "iterations: 50",
                "buffer_size_mb: 0.25",
                "fixture_size_mb: 0.5",
                "sleep_interval: 0",
                f"fixture_path: {tmp_path / 'fixture.bin'}",
                f"scratch_path: {tmp_path / 'scratch.bin'}",
                "base_port: 45000",
            ]
        ),
        encoding="utf-8",
    )
    return config_dir


def _iteration_lines(output: str) -> list[str]:
    return [line for line in output.splitlines() if line.startswith("Iteration ")]


def test_read_run_prints_every_iteration_and_removes_fixture(tmp_path: Path) -> None:
    config_dir = _write_config(tmp_path)

    stdout = StringIO()
    with redirect_stdout(stdout):
        main(["--config-dir", str(config_dir), "--iterations", "3"])

    output = stdout.getvalue()
    lines = output.splitlines()
    assert lines[0].startswith("PID: ")
    assert lines[1].startswith("Initial RSS: ")
    assert [line.split(":")[0] for line in _iteration_lines(output)] == [
        "Iteration 1/3",
        "Iteration 2/3",
        "Iteration 3/3",
    ]
    assert not (tmp_path / "fixture.bin").exists()


def test_write_run_leaves_last_scratch_file(tmp_path: Path) -> None:
    config_dir = _write_config(tmp_path)

    stdout = StringIO()
    with redirect_stdout(stdout):
        main(["--config-dir", str(config_dir), "--variant", "write", "--iterations", "2"])

    assert len(_iteration_lines(stdout.getvalue())) == 2
    assert (tmp_path / "scratch.bin").stat().st_size == MB // 4


def test_summary_and_json_output(tmp_path: Path) -> None:
    config_dir = _write_config(tmp_path)
    out_path = tmp_path / "probe.json"

    stdout = StringIO()
    with redirect_stdout(stdout):
        main([
            "--config-dir", str(config_dir),
            "--iterations", "2",
            "--rss-source", "psutil",
            "--summary",
            "--out", str(out_path),
        ])

    assert "=== Summary ===" in stdout.getvalue()
    data = json.loads(out_path.read_text(encoding="utf-8"))
    assert data["variant"] == "read"
    assert data["iterations"] == 2
    assert [s["iteration"] for s in data["samples"]] == [1, 2]


def test_cli_overrides_config_values(tmp_path: Path) -> None:
    config_dir = _write_config(tmp_path)
    args = parse_probe_args([
        "--config-dir", str(config_dir),
        "--variant", "write",
        "--iterations", "7",
        "--interval", "0.5",
        "--rss-source", "psutil",
    ])

    config = load_config(args)

    assert config.variant == WorkloadVariant.WRITE
    assert config.iterations == 7
    assert config.sleep_interval == 0.5
    assert config.rss_source == RssSource.PSUTIL
    assert config.base_port == 45000


def test_build_workload_follows_variant(tmp_path: Path) -> None:
    config = load_config(parse_probe_args(["--config-dir", str(_write_config(tmp_path))]))

    read = build_workload(config)
    assert isinstance(read, ReadWorkload)
    assert read.file_path == tmp_path / "fixture.bin"

    config.variant = WorkloadVariant.WRITE
    write = build_workload(config)
    assert isinstance(write, WriteWorkload)
    assert write.file_path == tmp_path / "scratch.bin"


@pytest.mark.parametrize(
    "extra",
    [
        ["--iterations", "0"],
        ["--interval", "-1"],
    ],
)
def test_invalid_arguments_exit_with_error(tmp_path: Path, extra: list[str]) -> None:
    config_dir = _write_config(tmp_path)

    with pytest.raises(SystemExit) as exc:
        main(["--config-dir", str(config_dir), *extra])

    assert exc.value.code == 1


def test_missing_config_dir_exits_with_error(tmp_path: Path) -> None:
    with pytest.raises(SystemExit) as exc:
        main(["--config-dir", str(tmp_path / "nope")])

    assert exc.value.code == 1


def test_bad_config_file_exits_with_error(tmp_path: Path) -> None:
    (tmp_path / "config.yaml").write_text("variant: mmap\n", encoding="utf-8")

    with pytest.raises(SystemExit) as exc:
        main(["--config-dir", str(tmp_path)])

    assert exc.value.code == 1


@pytest.mark.parametrize(
    "line",
    [
        "iterations:",
        "base_port: [1]",
        "fixture_path:",
        "channel_host: {name: localhost}",
        "sleep_interval: soon",
    ],
)
def test_malformed_config_value_exits_with_error(tmp_path: Path, line: str, capsys) -> None:
    (tmp_path / "config.yaml").write_text(line + "\n", encoding="utf-8")

    with pytest.raises(SystemExit) as exc:
        main(["--config-dir", str(tmp_path)])

    assert exc.value.code == 1
    key = line.split(":")[0]
    assert f"'{key}'" in capsys.readouterr().err


def test_log_file_collects_diagnostics(tmp_path: Path, restore_package_loggers) -> None:
    config_dir = _write_config(tmp_path)
    log_file = tmp_path / "run.log"

    with redirect_stdout(StringIO()):
        main(["--config-dir", str(config_dir), "--iterations", "1", "--log-file", str(log_file)])

    text = log_file.read_text(encoding="utf-8")
    assert "Mock file created at:" in text
    # Debug records reach the file even without --verbose
    assert "[DEBUG] leakprobe.run_probe" in text
