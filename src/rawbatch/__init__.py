"""`rawbatch` - batch preparation of raw beam data for ``xtract2fil``.

Subpackages:
- scan: Discovery, header parsing, parameter derivation, output layout
- pipeline: Converter invocation, post-processing, orchestrator
- schemas: Layered configuration (param < user < CLI)
- cli: Command-line entry point
"""

__version__ = "0.1.0"
