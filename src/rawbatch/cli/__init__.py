"""Command-line interface for the launcher.

``scripts/`` only holds thin wrappers; the entry point lives here.
"""

from rawbatch.cli.run_batch import main, run_rawbatch

__all__ = ['main', 'run_rawbatch']
