"""rawbatch user configuration.

Modify settings here to customize the launcher. Command-line flags
override anything set here; expert defaults are in rawbatch.schemas.param.

Usage:
    python scripts/run_rawbatch.py -c scripts/user_config.py /data/OBS1/raw
"""

CONFIG = {
    # ========================================================================
    # CONVERSION PARAMETERS
    # ========================================================================
    "FBIN": 1,                # 1 with DUAL=True: derive from AHDR header
    "TBIN": 1,
    "NJOBS": 16,              # Parallel jobs inside xtract2fil
    "OFFSET": 0,
    "DUAL": True,             # Write both FilData and FilData_dwnsmp

    # ========================================================================
    # OUTPUT
    # ========================================================================
    "OUTPUT_DIR": None,       # None: grand parent of the inputs

    # ========================================================================
    # TOOLCHAIN
    # ========================================================================
    "CONVERTER": "xtract2fil",
    "ENV_SCRIPT": "/lustre_archive/apps/tdsoft/env.sh",

    # ========================================================================
    # LOGGING
    # ========================================================================
    "LOG_LEVEL": "INFO",
    "LOG_FILE": None,
    "SUMMARY_CSV": None,
}
