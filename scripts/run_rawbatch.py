#!/usr/bin/env python3
"""xtract2fil launcher runner.

Usage:
    python scripts/run_rawbatch.py /data/OBS1/raw /data/OBS2/raw
    python scripts/run_rawbatch.py -d false -f 4 -t 10 /data/OBS1/raw/scan.raw.{0..15}
    python scripts/run_rawbatch.py -c scripts/user_config.py /data/OBS1/raw

Note: User config in scripts/user_config.py, expert defaults in rawbatch.schemas.param
"""

import sys
from pathlib import Path

# Add src to path
project_root = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(project_root / "src"))

from rawbatch.cli.run_batch import main


if __name__ == "__main__":
    sys.exit(main())
