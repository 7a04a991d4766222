"""
These tests check the command line reports the same volumes as the library.
"""

import pytest

from click.testing import CliRunner

from lebesgue import cli, logger


def run(*args: str):
    runner = CliRunner()
    return runner.invoke(cli.cli, list(args))


@pytest.mark.parametrize(
    "args, expected",
    [
        (("interval", "Icc", "0", "2"), "2"),
        (("interval", "Ioo", "--", "-1", "1"), "2"),
        (("interval", "Ico", "0", "inf"), "∞"),
        (("interval", "Ioc", "3", "1"), "0"),
        (("ball", "2", "1"), "4"),
        (("ball", "--closed", "3", "0.5"), "1"),
        (("box", "-a", "Icc", "0", "1", "-a", "Ioo", "0", "3"), "3"),
        (("scaling", "2,0", "0,4"), "0.125"),
        (("between", "0", "2"), "2"),
        (("between", "-g", "0,2", "0", "1"), "1"),
    ],
)
def test_volumes(args, expected):
    result = run(*args)
    assert result.exit_code == 0, result.output
    assert result.output.splitlines()[0] == expected


def test_scaling_chain():
    result = run("scaling", "--chain", "0,1", "1,0")
    assert result.exit_code == 0, result.output
    lines = result.output.splitlines()
    assert lines[0] == "1"
    assert any(line.startswith("diag(") for line in lines[1:])


def test_singular_matrix():
    result = run("scaling", "1,2", "2,4")
    assert result.exit_code == 1
    assert "singular" in result.output


def test_ragged_rows():
    result = run("scaling", "1,2", "3")
    assert result.exit_code == 2


def test_config(tmp_path):
    good = tmp_path / "good.yaml"
    good.write_text("quad_limit: 100\n")
    assert run("--config", str(good), "ball", "1", "1").exit_code == 0

    bad = tmp_path / "bad.yaml"
    bad.write_text("quad_limits: 100\n")
    result = run("--config", str(bad), "ball", "1", "1")
    assert result.exit_code == 2
    assert "quad_limits" in result.output


def test_verbosity_is_clamped():
    result = run("-vvvvvv", "ball", "1", "1")
    assert result.exit_code == 0, result.output
    assert "2" in result.output.splitlines()


def test_logger_rejects_unknown_verbosity():
    with pytest.raises(ValueError):
        logger.initialize(logger.MAX_VERBOSITY + 1)
    logger.initialize(0)
