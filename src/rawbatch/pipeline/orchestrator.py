"""Batch orchestration.

Resolves the run mode from the positional inputs, then drives every scan
through discovery -> header parsing -> parameter derivation -> output
planning -> conversion -> cleanup, strictly one scan at a time.
"""

import logging
from pathlib import Path
from typing import Optional, Sequence, Union

from rawbatch.contracts import FailurePolicy, assert_processing_params, assert_scan_group
from rawbatch.core.errors import (
    ConversionFailed,
    EnvironmentBootstrapError,
    MetadataError,
    PostProcessFailed,
)
from rawbatch.core.models import (
    BatchReport,
    RunMode,
    ScanGroup,
    ScanOutcome,
    ScanStatus,
)
from rawbatch.pipeline.converter import ConverterInvoker, build_environment
from rawbatch.pipeline.postprocess import PostProcessor
from rawbatch.scan.discovery import (
    discover_scans,
    filter_existing_files,
    filter_observation_dirs,
    group_from_files,
)
from rawbatch.scan.layout import (
    default_root,
    metadata_destinations,
    observation_name,
    plan_output,
)
from rawbatch.scan.metadata import parse_scan_metadata
from rawbatch.scan.params import derive_parameters, needs_binning_derivation
from rawbatch.schemas import InternalConfig

__all__ = ['BatchOrchestrator', 'resolve_inputs', 'resolve_mode']

logger = logging.getLogger(__name__)

SEPARATOR = "-" * 32
EXIT_FAILURE = 1


def resolve_inputs(inputs: Sequence[Union[str, Path]]) -> tuple[Path, ...]:
    """Absolute, normalized input paths (like ``realpath``)."""
    return tuple(Path(p).expanduser().resolve() for p in inputs)


def resolve_mode(inputs: Sequence[Path]) -> RunMode:
    """Directory batch if the first input is a directory, else single scan.

    Raises
    ------
    ValueError
        If there are no inputs.
    """
    if not inputs:
        raise ValueError("no input files or directories provided")
    if Path(inputs[0]).is_dir():
        return RunMode.DIRECTORY_BATCH
    return RunMode.SINGLE_SCAN


class BatchOrchestrator:
    """Runs the launcher pipeline over raw files or observation directories.

    This is the main entry point of ``rawbatch``. Processing is sequential;
    parallelism only happens inside the converter (``njobs``).

    **Modes:**

    - **Directory batch**: every positional input is an observation
      directory (``<data>/<obs>/<raw dir>``). Each scan found in it is
      converted. A scan with a bad header or a failed conversion is
      recorded and skipped; the batch always finishes with exit code 0.

    - **Single scan**: the positional inputs are the raw segments of one
      scan. Any header or conversion failure aborts the run with a
      non-zero exit code (the converter's own code when it failed).

    **Per-scan order:**

    header -> parameters -> destination -> converter -> (success only)
    delete segments -> copy headers.

    Example usage::

        config = resolve_config(ParamConfig(), None, CLIConfig(dual="false"))
        report = BatchOrchestrator(config).run(["/data/OBS1/raw"])
        sys.exit(report.exit_code)
    """

    def __init__(
        self,
        config: InternalConfig,
        invoker: Optional[ConverterInvoker] = None,
        post_processor: Optional[PostProcessor] = None,
        configure_logging: bool = True,
    ):
        """Initialize orchestrator.

        Parameters
        ----------
        config : InternalConfig
            Fully validated runtime configuration.
        invoker : ConverterInvoker, optional
            Converter runner. Created (with the bootstrapped environment)
            on first use if not provided.
        post_processor : PostProcessor, optional
            Cleanup stage. Default: ``PostProcessor()``.
        configure_logging : bool
            If True, ``run()`` configures the root logger from config.
        """
        self.config = config
        self.invoker = invoker
        self.post_processor = post_processor or PostProcessor()
        self.configure_logging = configure_logging

    def _setup_logging(self):
        """Configure root logger with console and optional file handler."""
        log_level = getattr(logging, self.config.logging.level, logging.INFO)

        formatter = logging.Formatter(
            fmt='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )

        root = logging.getLogger()
        root.setLevel(log_level)
        for handler in root.handlers[:]:
            root.removeHandler(handler)

        ch = logging.StreamHandler()
        ch.setLevel(log_level)
        ch.setFormatter(formatter)
        root.addHandler(ch)

        if self.config.logging.log_file:
            log_path = Path(self.config.logging.log_file).expanduser()
            log_path.parent.mkdir(parents=True, exist_ok=True)
            fh = logging.FileHandler(log_path)
            fh.setLevel(log_level)
            fh.setFormatter(formatter)
            root.addHandler(fh)
            logger.info("Logging: level=%s, file=%s", self.config.logging.level, log_path)

    def _ensure_invoker(self) -> ConverterInvoker:
        """Bootstrap the converter environment once, before any conversion."""
        if self.invoker is None:
            env = build_environment(
                self.config.converter.env_script,
                self.config.converter.extra_path,
            )
            self.invoker = ConverterInvoker(self.config.converter.executable, env=env)
        return self.invoker

    def run(self, inputs: Sequence[Union[str, Path]]) -> BatchReport:
        """Process all inputs and return the per-scan report.

        Parameters
        ----------
        inputs : sequence of str or Path
            Raw segment files of one scan, or observation directories.

        Returns
        -------
        BatchReport
            Outcomes in processing order and the process exit code.

        Raises
        ------
        ValueError
            If ``inputs`` is empty.
        ContractViolation
            If a stage breaks its invariants (pipeline bug).
        """
        if self.configure_logging:
            self._setup_logging()

        paths = resolve_inputs(inputs)
        mode = resolve_mode(paths)

        logger.info("=" * 60)
        logger.info("Starting xtract2fil launcher (%s, %d input(s))", mode.value, len(paths))
        logger.info("=" * 60)

        if mode is RunMode.DIRECTORY_BATCH:
            report = self._run_batch(paths)
        else:
            report = self._run_single(paths)

        self._finish(report)
        return report

    # ------------------------------------------------------------------
    # Modes
    # ------------------------------------------------------------------

    def _run_batch(self, directories: Sequence[Path]) -> BatchReport:
        cfg = self.config
        if cfg.scan:
            logger.warning("Scan name override '%s' ignored for directory inputs", cfg.scan)

        # Root from the first input directory, even if it is dropped below.
        root = Path(cfg.output_dir).expanduser().resolve() if cfg.output_dir else default_root(directories[0])

        kept, dropped = filter_observation_dirs(directories)
        outcomes = [
            ScanOutcome(
                source_dir=reason.path,
                status=ScanStatus.SKIPPED_DISCOVERY_EMPTY,
                message=str(reason),
            )
            for reason in dropped
        ]

        if not kept:
            logger.warning("No usable input directories")
            return BatchReport(mode=RunMode.DIRECTORY_BATCH, outcomes=tuple(outcomes), exit_code=0)

        try:
            self._ensure_invoker()
        except EnvironmentBootstrapError as e:
            logger.error("Error: %s", e)
            return BatchReport(mode=RunMode.DIRECTORY_BATCH, outcomes=tuple(outcomes), exit_code=EXIT_FAILURE)

        for directory in kept:
            obs_name = observation_name(directory)
            logger.info("Observation %s: %s", obs_name, directory)
            groups = discover_scans(directory)
            for group in groups:
                assert_scan_group(group)
            scan_outcomes, _ = self._run_groups(
                groups, RunMode.DIRECTORY_BATCH, root, obs_name, FailurePolicy.SKIP_SCAN
            )
            outcomes.extend(scan_outcomes)

        return BatchReport(mode=RunMode.DIRECTORY_BATCH, outcomes=tuple(outcomes), exit_code=0)

    def _run_single(self, files: Sequence[Path]) -> BatchReport:
        cfg = self.config
        root = Path(cfg.output_dir).expanduser().resolve() if cfg.output_dir else default_root(files[0])

        existing = filter_existing_files(files)
        group = group_from_files(existing, cfg.scan) if existing else None
        if group is None or not group.segment_files:
            logger.error("Error: no raw files to process")
            outcome = ScanOutcome(
                scan_name=cfg.scan,
                source_dir=files[0].parent,
                status=ScanStatus.SKIPPED_DISCOVERY_EMPTY,
                message="no existing raw segment files",
            )
            return BatchReport(mode=RunMode.SINGLE_SCAN, outcomes=(outcome,), exit_code=EXIT_FAILURE)

        try:
            self._ensure_invoker()
        except EnvironmentBootstrapError as e:
            logger.error("Error: %s", e)
            return BatchReport(mode=RunMode.SINGLE_SCAN, exit_code=EXIT_FAILURE)

        outcomes, exit_code = self._run_groups(
            (group,), RunMode.SINGLE_SCAN, root, None, FailurePolicy.ABORT_RUN
        )
        return BatchReport(mode=RunMode.SINGLE_SCAN, outcomes=tuple(outcomes), exit_code=exit_code)

    def _run_groups(
        self,
        groups: Sequence[ScanGroup],
        mode: RunMode,
        root: Path,
        obs_name: Optional[str],
        policy: FailurePolicy,
    ) -> tuple[list[ScanOutcome], int]:
        """Run scans in order, applying ``policy`` on failure.

        Returns
        -------
        (outcomes, exit_code)
            ``exit_code`` is non-zero only when the policy aborted the run.
        """
        outcomes = []
        for group in groups:
            try:
                outcomes.append(self.process_scan(group, mode, root, obs_name))
                logger.info("%s xtract2fil for scan %s done %s", SEPARATOR, group.scan_name, SEPARATOR)
            except MetadataError as e:
                logger.error("Error: %s", e)
                outcomes.append(ScanOutcome(
                    scan_name=group.scan_name,
                    source_dir=group.source_dir,
                    status=ScanStatus.SKIPPED_INVALID_METADATA,
                    message=str(e),
                ))
                if policy is FailurePolicy.ABORT_RUN:
                    logger.error("Cannot process %s due to AHDR file error(s).", group.scan_name)
                    return outcomes, EXIT_FAILURE
                logger.warning("Skipping scan %s due to AHDR file error(s).", group.scan_name)
                logger.info("%s Invalid data for scan %s %s", SEPARATOR, group.scan_name, SEPARATOR)
            except ConversionFailed as e:
                outcomes.append(ScanOutcome(
                    scan_name=group.scan_name,
                    source_dir=group.source_dir,
                    status=ScanStatus.CONVERSION_FAILED,
                    exit_code=e.exit_code,
                    message=str(e),
                ))
                if policy is FailurePolicy.ABORT_RUN:
                    return outcomes, e.exit_code
                logger.warning("Skipping scan %s, raw files kept", group.scan_name)
            except PostProcessFailed as e:
                logger.error("Error: %s", e)
                outcomes.append(ScanOutcome(
                    scan_name=group.scan_name,
                    source_dir=group.source_dir,
                    status=ScanStatus.POSTPROCESS_FAILED,
                    exit_code=EXIT_FAILURE,
                    message=str(e),
                ))
                if policy is FailurePolicy.ABORT_RUN:
                    return outcomes, EXIT_FAILURE
                logger.warning("Cleanup of scan %s incomplete, check %s", group.scan_name, group.source_dir)
        return outcomes, 0

    # ------------------------------------------------------------------
    # Per-scan pipeline
    # ------------------------------------------------------------------

    def process_scan(
        self,
        group: ScanGroup,
        mode: RunMode,
        root: Path,
        obs_name: Optional[str] = None,
    ) -> ScanOutcome:
        """Run the full pipeline for one scan.

        Raises
        ------
        MetadataError
            Header missing or invalid. Nothing was converted or deleted.
        ConversionFailed
            Converter exited non-zero. Nothing was deleted or copied.
        PostProcessFailed
            Conversion succeeded but cleanup did not finish.
        """
        cfg = self.config
        logger.info("Processing scan %s (%d segment(s))", group.scan_name, len(group.segment_files))

        metadata = parse_scan_metadata(
            group,
            require_binning_fields=needs_binning_derivation(cfg.fbin, cfg.tbin, cfg.dual),
        )

        params = derive_parameters(
            metadata,
            fbin=cfg.fbin,
            tbin=cfg.tbin,
            dual=cfg.dual,
            njobs=cfg.njobs,
            offset=cfg.offset,
            nbeams=cfg.nbeams,
            target_channels=cfg.binning.target_channels,
            target_tsamp_usec=cfg.binning.target_tsamp_usec,
        )
        assert_processing_params(params, cfg.fbin, cfg.tbin)

        plan = plan_output(mode, params.dual, params.fbin, params.tbin, root, group.scan_name, obs_name)
        destination = plan.destination

        result = self._ensure_invoker().run(group.segment_files, params, destination, group.scan_name)
        if not result.succeeded:
            raise ConversionFailed(group.scan_name, result.exit_code)

        self.post_processor.run(
            group, result, metadata_destinations(plan, group.scan_name, params.dual)
        )

        return ScanOutcome(
            scan_name=group.scan_name,
            source_dir=group.source_dir,
            status=ScanStatus.SUCCESS,
            exit_code=0,
            destination=destination,
        )

    def _finish(self, report: BatchReport) -> None:
        """Log the per-scan summary and optionally write it to CSV."""
        df = report.to_frame()

        logger.info("=" * 60)
        if not df.empty:
            logger.info("Summary:\n%s", df[["scan_name", "status", "exit_code"]].to_string(index=False))
        counts = report.counts()
        logger.info("Statistics: total=%d, success=%d, invalid=%d, empty=%d, failed=%d, cleanup_failed=%d",
                    len(report.outcomes),
                    counts[ScanStatus.SUCCESS.value],
                    counts[ScanStatus.SKIPPED_INVALID_METADATA.value],
                    counts[ScanStatus.SKIPPED_DISCOVERY_EMPTY.value],
                    counts[ScanStatus.CONVERSION_FAILED.value],
                    counts[ScanStatus.POSTPROCESS_FAILED.value])

        if self.config.report.summary_csv:
            csv_path = Path(self.config.report.summary_csv).expanduser()
            csv_path.parent.mkdir(parents=True, exist_ok=True)
            df.to_csv(csv_path, index=False)
            logger.info("Summary written: %s", csv_path)

        logger.info("Run finished with exit code %d", report.exit_code)
        logger.info("=" * 60)
