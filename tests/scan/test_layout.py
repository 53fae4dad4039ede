from pathlib import Path

import pytest

from rawbatch.core.models import RunMode
from rawbatch.scan.layout import (
    default_root,
    metadata_destinations,
    observation_name,
    plan_output,
)

pytestmark = pytest.mark.unit

ROOT = Path("/data")


@pytest.mark.parametrize(
    "dual, fbin, tbin, expected",
    [
        (True, 1, 1, "/data/OBS1"),
        (True, 4, 10, "/data/OBS1"),
        (False, 1, 1, "/data/OBS1/FilData"),
        (False, 2, 1, "/data/OBS1/FilData_dwnsmp"),
        (False, 1, 3, "/data/OBS1/FilData_dwnsmp"),
    ],
)
def test_batch_layout(dual, fbin, tbin, expected):
    plan = plan_output(RunMode.DIRECTORY_BATCH, dual, fbin, tbin, ROOT, "scan", "OBS1")

    assert plan.destination == Path(expected)


@pytest.mark.parametrize(
    "dual, fbin, tbin, expected",
    [
        (True, 1, 1, "/data"),
        (False, 1, 1, "/data/FilData/scan"),
        (False, 4, 10, "/data/FilData_dwnsmp/scan"),
    ],
)
def test_single_layout(dual, fbin, tbin, expected):
    plan = plan_output(RunMode.SINGLE_SCAN, dual, fbin, tbin, ROOT, "scan")

    assert plan.destination == Path(expected)
    assert plan.root_dir == ROOT


def test_batch_layout_requires_observation_name():
    with pytest.raises(ValueError, match="observation name"):
        plan_output(RunMode.DIRECTORY_BATCH, True, 1, 1, ROOT, "scan")


def test_default_root_and_observation_name():
    assert default_root(Path("/data/OBS1/BeamData")) == Path("/data")
    assert default_root(Path("/data/OBS1/scan.raw.0")) == Path("/data")
    assert observation_name(Path("/data/OBS1/BeamData")) == "OBS1"


def test_metadata_destinations_dual():
    plan = plan_output(RunMode.DIRECTORY_BATCH, True, 2, 327, ROOT, "scan", "OBS1")

    assert metadata_destinations(plan, "scan", dual=True) == (
        Path("/data/OBS1/FilData/scan"),
        Path("/data/OBS1/FilData_dwnsmp/scan"),
    )


def test_metadata_destinations_single_tree():
    plan = plan_output(RunMode.DIRECTORY_BATCH, False, 1, 1, ROOT, "scan", "OBS1")

    assert metadata_destinations(plan, "scan", dual=False) == (Path("/data/OBS1/FilData"),)
