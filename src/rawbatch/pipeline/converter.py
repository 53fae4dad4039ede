"""External converter invocation.

Runs ``xtract2fil`` once per scan as a blocking subprocess and reports its
exit status. This module never touches the filesystem itself; the
converter writes its own output.

The converter toolchain usually needs a site environment (the SPOTLIGHT
servers source ``/lustre_archive/apps/tdsoft/env.sh``). That happens once
per run in ``build_environment()``, before any conversion.
"""

import logging
import os
import subprocess
from pathlib import Path
from typing import Mapping, Optional, Sequence

from rawbatch.core.errors import EnvironmentBootstrapError
from rawbatch.core.models import ProcessingParams, RawBatchRecord

__all__ = ['ConversionResult', 'ConverterInvoker', 'build_command', 'build_environment']

logger = logging.getLogger(__name__)

# Shell conventions: "command not found", and 128 + N for death by signal N
EXIT_COMMAND_NOT_FOUND = 127
EXIT_SIGNAL_BASE = 128


class ConversionResult(RawBatchRecord):
    """Exit status of one converter run."""
    scan_name: str
    exit_code: int
    command: tuple[str, ...] = ()

    @property
    def succeeded(self) -> bool:
        return self.exit_code == 0


def build_command(
    executable: str,
    segment_files: Sequence[Path],
    params: ProcessingParams,
    output_dir: Path,
    scan_name: str,
) -> list[str]:
    """Converter command line for one scan.

    Examples
    --------
    >>> build_command("xtract2fil", [Path("/d/s.raw.0")], params, Path("/out"), "s")
    ['xtract2fil', '--fbin', '2', '--tbin', '327', '--njobs', '16', '--nbeams', '10',
     '--offset', '0', '--dual', '--output', '/out', '--scan', 's', '/d/s.raw.0']
    """
    return [
        executable,
        "--fbin", str(params.fbin),
        "--tbin", str(params.tbin),
        "--njobs", str(params.njobs),
        "--nbeams", str(params.nbeams),
        "--offset", str(params.offset),
        "--dual" if params.dual else "--no-dual",
        "--output", str(output_dir),
        "--scan", scan_name,
        *[str(f) for f in segment_files],
    ]


def _parse_env_dump(dump: bytes) -> dict[str, str]:
    env = {}
    for entry in dump.split(b"\0"):
        if not entry or b"=" not in entry:
            continue
        key, value = entry.split(b"=", 1)
        env[key.decode(errors="replace")] = value.decode(errors="replace")
    return env


def build_environment(
    env_script: Optional[str] = None,
    extra_path: Sequence[str] = (),
    base_env: Optional[Mapping[str, str]] = None,
) -> dict[str, str]:
    """Environment the converter runs in.

    Starts from ``base_env`` (default: the inherited environment). When
    ``env_script`` is given it is sourced by bash and the resulting
    environment is used. ``extra_path`` entries are prepended to PATH.

    Raises
    ------
    EnvironmentBootstrapError
        If the script does not exist or sourcing it fails.
    """
    env = dict(os.environ if base_env is None else base_env)

    if env_script:
        script = Path(env_script).expanduser()
        if not script.is_file():
            raise EnvironmentBootstrapError(f"environment script not found: {script}")
        logger.info("Sourcing converter environment: %s", script)
        try:
            proc = subprocess.run(
                ["bash", "-c", 'source "$1" >/dev/null && env -0', "bash", str(script)],
                env=env,
                capture_output=True,
                check=False,
            )
        except OSError as e:
            raise EnvironmentBootstrapError(f"cannot run bash to source {script}: {e}") from e
        if proc.returncode != 0:
            stderr = proc.stderr.decode(errors="replace").strip()
            raise EnvironmentBootstrapError(
                f"sourcing {script} failed with exit code {proc.returncode}: {stderr}"
            )
        env = _parse_env_dump(proc.stdout)

    if extra_path:
        parts = [str(Path(p).expanduser()) for p in extra_path]
        if env.get("PATH"):
            parts.append(env["PATH"])
        env["PATH"] = os.pathsep.join(parts)

    return env


class ConverterInvoker:
    """Runs the converter for one scan group at a time.

    Example usage::

        invoker = ConverterInvoker("xtract2fil", env=build_environment())
        result = invoker.run(group.segment_files, params, destination, group.scan_name)
        if not result.succeeded:
            ...
    """

    def __init__(self, executable: str = "xtract2fil", env: Optional[Mapping[str, str]] = None):
        self.executable = executable
        self.env = dict(env) if env is not None else None

    def run(
        self,
        segment_files: Sequence[Path],
        params: ProcessingParams,
        output_dir: Path,
        scan_name: str,
    ) -> ConversionResult:
        """Run the converter and wait for it to finish.

        There is no timeout: a hung converter blocks the run.
        """
        cmd = build_command(self.executable, segment_files, params, output_dir, scan_name)

        logger.info("Starting xtract2fil for scan: %s", scan_name)
        logger.info("Output directory: %s", output_dir)
        logger.info("Frequency binning factor: %d", params.fbin)
        logger.info("Time binning factor: %d", params.tbin)
        logger.debug("Command: %s", " ".join(cmd))

        try:
            proc = subprocess.run(cmd, env=self.env, check=False)
            exit_code = proc.returncode
            if exit_code < 0:
                logger.error("xtract2fil killed by signal %d", -exit_code)
                exit_code = EXIT_SIGNAL_BASE - exit_code
        except FileNotFoundError:
            logger.error("Converter executable not found: %s", self.executable)
            exit_code = EXIT_COMMAND_NOT_FOUND

        if exit_code == 0:
            logger.info("xtract2fil completed successfully")
        else:
            logger.error("xtract2fil failed with exit code: %d", exit_code)

        return ConversionResult(scan_name=scan_name, exit_code=exit_code, command=tuple(cmd))
