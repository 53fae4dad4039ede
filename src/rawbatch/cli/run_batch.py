"""Command-line entry point for the xtract2fil launcher.

Argument parsing lives here; the real work happens in
``BatchOrchestrator``. The default behaviour targets the directory layout
of the SPOTLIGHT ParamRudra server.
"""

import argparse
import importlib.util
import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Sequence

from pydantic import ValidationError

from rawbatch.contracts import ContractViolation
from rawbatch.core.models import BatchReport
from rawbatch.pipeline.orchestrator import BatchOrchestrator
from rawbatch.schemas import CLIConfig, ParamConfig, UserConfig, resolve_config

__all__ = ['load_user_config_dict', 'run_rawbatch', 'build_parser', 'main']

logger = logging.getLogger(__name__)

EPILOG = """\
Positional arguments:
      FNAME.raw.{0..15}           Input raw files
OR
      OBS_DIR1 [ ... ]            Input directories containing raw files

In dual mode with FBIN = TBIN = 1, binning is derived from the AHDR header.
"""


def load_user_config_dict(config_path: str) -> dict:
    """Load user config dict from Python file.

    Returns the raw dict before Pydantic validation.

    Raises
    ------
    FileNotFoundError
        If config file does not exist.
    ValueError
        If no CONFIG dict found in file.
    """
    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Config not found: {path}")

    spec = importlib.util.spec_from_file_location("config_module", path)
    if spec is None or spec.loader is None:
        raise ImportError(f"Could not load config module from {path}")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)

    for name in dir(module):
        if name.startswith('CONFIG'):
            obj = getattr(module, name)
            if isinstance(obj, dict):
                return obj

    raise ValueError(f"No CONFIG dict found in {path}")


def run_rawbatch(
    inputs: Sequence[str],
    user_config_path: Optional[str] = None,
    cli_args: Optional[Dict[str, Any]] = None,
    verbose: bool = False,
    orchestrator_cls=BatchOrchestrator,
) -> BatchReport:
    """Resolve configuration and run the launcher.

    Parameters
    ----------
    inputs : sequence of str
        Raw files of one scan, or observation directories.
    user_config_path : str, optional
        Python file with a CONFIG dict.
    cli_args : dict, optional
        CLI overrides (keys of ``CLIConfig``). None values are ignored.
    verbose : bool
        Enable DEBUG logging and print the resolved config.

    Returns
    -------
    BatchReport
    """
    user_cfg = UserConfig()
    if user_config_path:
        user_cfg = UserConfig.model_validate(load_user_config_dict(user_config_path))

    cli_args = dict(cli_args or {})
    if verbose and "log_level" not in cli_args:
        cli_args["log_level"] = "DEBUG"
    cli_dict = {k: v for k, v in cli_args.items() if v is not None}
    cli_cfg = CLIConfig.model_validate(cli_dict) if cli_dict else CLIConfig()

    config = resolve_config(ParamConfig(), user_cfg, cli_cfg)

    if verbose:
        print("\nFull Internal Configuration:")
        print(json.dumps(config.model_dump(), indent=2))
        print('=' * 60)

    return orchestrator_cls(config).run(inputs)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rawbatch",
        description="Launch xtract2fil on given raw files or directories containing raw files.",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("inputs", nargs="*", help="Raw files of one scan, or observation directories")
    parser.add_argument("-f", "--fbin", type=int, help="Frequency binning factor (default: 1)")
    parser.add_argument("-t", "--tbin", type=int, help="Time binning factor (default: 1)")
    parser.add_argument("-j", "--njobs", type=int, help="Number of parallel jobs (default: 16)")
    parser.add_argument("-n", "--nbeams", type=int, help="Number of beams (default: from AHDR header)")
    parser.add_argument("-x", "--offset", type=int, help="Offset value (default: 0)")
    parser.add_argument("-d", "--dual", metavar="DUAL", help="Dual mode of xtract2fil (true/false, default: true)")
    parser.add_argument("-o", "--output", dest="output_dir", help="Output directory (default: grand parent of inputs)")
    parser.add_argument("-s", "--scan", help="Scan name (default: derived from raw files)")
    parser.add_argument("-c", "--config", help="User config file (Python file with CONFIG dict)")
    parser.add_argument("--converter", help="Converter executable (default: xtract2fil)")
    parser.add_argument("--env-script", help="Shell profile sourced before running the converter")
    parser.add_argument("--summary-csv", help="Write the per-scan summary to this CSV file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose (DEBUG) logging")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Console entry point. Returns the process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.inputs:
        print("Error: no input files or directories provided as positional arguments")
        parser.print_help()
        return 1

    cli_args = {
        "fbin": args.fbin,
        "tbin": args.tbin,
        "njobs": args.njobs,
        "nbeams": args.nbeams,
        "offset": args.offset,
        "dual": args.dual,
        "output_dir": args.output_dir,
        "scan": args.scan,
        "converter": args.converter,
        "env_script": args.env_script,
        "summary_csv": args.summary_csv,
    }

    try:
        report = run_rawbatch(args.inputs, args.config, cli_args, verbose=args.verbose)
    except (ValidationError, FileNotFoundError, ValueError) as e:
        print(f"Error: {e}")
        return 1
    except ContractViolation as e:
        logger.critical("CRITICAL: Pipeline contract violated: %s", e)
        logger.critical("This indicates a bug in pipeline logic. Stopping.")
        return 1

    return report.exit_code
