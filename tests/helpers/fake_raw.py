from pathlib import Path


DEFAULT_HEADER = {
    "Date": "05/03/2025",
    "IST Time": "15:04:31.250",
    "Total No. of Beams/host": "10",
    "Channels": "2048",
    "Sampling time (uSec)": "40.0",
}


def write_fake_header(path: Path, fields=None, drop=(), extra_lines=()):
    """Write an AHDR header with ``Key = Value`` lines.

    ``fields`` overrides DEFAULT_HEADER entries; keys in ``drop`` are left out.
    """
    values = dict(DEFAULT_HEADER)
    values.update(fields or {})
    lines = ["# GMRT beam header", "Observatory      = GMRT"]
    lines += [f"{key:<25}= {value}" for key, value in values.items() if key not in drop]
    lines += list(extra_lines)

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("\n".join(lines) + "\n")
    return path


def write_fake_scan(directory: Path, scan: str, n_segments: int = 2,
                    with_header: bool = True, header_fields=None, header_drop=()):
    """Create ``<scan>.raw.<i>`` segments and (optionally) ``<scan>.raw.0.ahdr``.

    Returns (segments, headers).
    """
    directory.mkdir(parents=True, exist_ok=True)
    segments = []
    for i in range(n_segments):
        seg = directory / f"{scan}.raw.{i}"
        seg.write_bytes(b"\x00" * 16)
        segments.append(seg)

    headers = []
    if with_header:
        headers.append(write_fake_header(directory / f"{scan}.raw.0.ahdr", header_fields, header_drop))

    return segments, headers


def make_observation(data_dir: Path, obs: str = "OBS1", raw_dir: str = "BeamData"):
    """Create ``<data_dir>/<obs>/<raw_dir>`` and return it."""
    directory = data_dir / obs / raw_dir
    directory.mkdir(parents=True, exist_ok=True)
    return directory
