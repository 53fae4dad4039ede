"""Tests for the rawbatch command-line entry point."""

import pytest

from rawbatch.cli import run_batch
from rawbatch.cli.run_batch import build_parser, load_user_config_dict, main, run_rawbatch
from rawbatch.contracts import ContractViolation
from rawbatch.core.models import BatchReport, RunMode

pytestmark = pytest.mark.unit


class RecordingOrchestrator:
    """Stands in for BatchOrchestrator; keeps the resolved config."""

    instances = []

    def __init__(self, config):
        self.config = config
        self.inputs = None
        RecordingOrchestrator.instances.append(self)

    def run(self, inputs):
        self.inputs = list(inputs)
        return BatchReport(mode=RunMode.SINGLE_SCAN, exit_code=0)


@pytest.fixture(autouse=True)
def _reset_instances():
    RecordingOrchestrator.instances = []


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "user_config.py"
    path.write_text(
        'CONFIG = {\n'
        '    "FBIN": 2,\n'
        '    "TBIN": 8,\n'
        '    "NJOBS": 4,\n'
        '    "DUAL": False,\n'
        '    "UNUSED_LEGACY_KEY": 1,\n'
        '}\n'
    )
    return path


# =============================================================================
# Config file loading
# =============================================================================

def test_load_user_config_dict(config_file):
    cfg = load_user_config_dict(str(config_file))

    assert cfg["FBIN"] == 2
    assert cfg["DUAL"] is False


def test_load_user_config_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_user_config_dict(str(tmp_path / "nope.py"))


def test_load_user_config_without_dict(tmp_path):
    path = tmp_path / "empty_config.py"
    path.write_text("VALUE = 1\n")

    with pytest.raises(ValueError, match="No CONFIG dict"):
        load_user_config_dict(str(path))


# =============================================================================
# run_rawbatch
# =============================================================================

def test_run_rawbatch_defaults():
    report = run_rawbatch(["/data/OBS1/raw"], orchestrator_cls=RecordingOrchestrator)

    orch = RecordingOrchestrator.instances[0]
    assert report.exit_code == 0
    assert orch.inputs == ["/data/OBS1/raw"]
    assert orch.config.dual is True
    assert orch.config.logging.level == "INFO"


def test_run_rawbatch_config_file_and_cli(config_file):
    run_rawbatch(
        ["/data/OBS1/raw"],
        user_config_path=str(config_file),
        cli_args={"fbin": 16, "tbin": None, "dual": "true"},
        orchestrator_cls=RecordingOrchestrator,
    )

    config = RecordingOrchestrator.instances[0].config
    assert config.fbin == 16   # CLI
    assert config.tbin == 8    # config file, CLI None ignored
    assert config.njobs == 4
    assert config.dual is True


def test_run_rawbatch_verbose_sets_debug(capsys):
    run_rawbatch(["/x"], verbose=True, orchestrator_cls=RecordingOrchestrator)

    assert RecordingOrchestrator.instances[0].config.logging.level == "DEBUG"
    assert "Full Internal Configuration" in capsys.readouterr().out


# =============================================================================
# main
# =============================================================================

def test_main_without_inputs_prints_usage(capsys):
    assert main([]) == 1

    out = capsys.readouterr().out
    assert "no input files or directories" in out
    assert "usage: rawbatch" in out


def test_parser_flags():
    args = build_parser().parse_args(
        ["-f", "4", "-t", "10", "-j", "8", "-n", "20", "-x", "3", "-d", "false",
         "-o", "/out", "-s", "scan", "a.raw.0", "a.raw.1"]
    )

    assert (args.fbin, args.tbin, args.njobs, args.nbeams, args.offset) == (4, 10, 8, 20, 3)
    assert args.dual == "false"
    assert args.output_dir == "/out"
    assert args.scan == "scan"
    assert args.inputs == ["a.raw.0", "a.raw.1"]


def test_main_passes_cli_args(monkeypatch):
    captured = {}

    def fake_run(inputs, config_path, cli_args, verbose=False):
        captured.update(inputs=inputs, config_path=config_path, cli_args=cli_args, verbose=verbose)
        return BatchReport(mode=RunMode.SINGLE_SCAN, exit_code=2)

    monkeypatch.setattr(run_batch, "run_rawbatch", fake_run)

    code = main(["-d", "false", "--converter", "/opt/xtract2fil", "s.raw.0"])

    assert code == 2
    assert captured["inputs"] == ["s.raw.0"]
    assert captured["cli_args"]["dual"] == "false"
    assert captured["cli_args"]["converter"] == "/opt/xtract2fil"
    assert captured["cli_args"]["fbin"] is None


def test_main_reports_invalid_dual(capsys):
    assert main(["-d", "maybe", "/tmp/s.raw.0"]) == 1
    assert "Error" in capsys.readouterr().out


def test_main_handles_contract_violation(monkeypatch):
    def broken(*args, **kwargs):
        raise ContractViolation("Scan contract violated")

    monkeypatch.setattr(run_batch, "run_rawbatch", broken)

    assert main(["/tmp/s.raw.0"]) == 1
