import pytest
from pydantic import ValidationError

from rawbatch.core.models import ScanMetadata
from rawbatch.scan.params import derive_binning, derive_parameters, needs_binning_derivation

pytestmark = pytest.mark.unit


@pytest.fixture
def metadata():
    return ScanMetadata(
        date="05/03/2025",
        ist_time="15:04:31.250",
        beams_per_host=10,
        channels=2048,
        sampling_time_usec=40.0,
    )


def test_dual_defaults_derive_binning(metadata):
    params = derive_parameters(metadata, fbin=1, tbin=1, dual=True)

    assert params.fbin == 2
    assert params.tbin == 327


def test_explicit_binning_wins(metadata):
    params = derive_parameters(metadata, fbin=4, tbin=10, dual=True)

    assert (params.fbin, params.tbin) == (4, 10)


def test_one_explicit_factor_skips_derivation(metadata):
    params = derive_parameters(metadata, fbin=1, tbin=5, dual=True)

    assert (params.fbin, params.tbin) == (1, 5)


def test_no_derivation_without_dual(metadata):
    params = derive_parameters(metadata, fbin=1, tbin=1, dual=False)

    assert (params.fbin, params.tbin) == (1, 1)
    assert params.dual is False


@pytest.mark.parametrize(
    "channels, tsamp, expected",
    [
        (1024, 13107.2, (1, 1)),   # already at target
        (512, 20000.0, (1, 1)),    # coarser than target
        (4096, 1300.0, (4, 10)),
        (3000, 80.0, (2, 163)),    # floor on both
        (1025, 13107.1, (1, 1)),   # floor of ratio just above 1
    ],
)
def test_derive_binning_table(channels, tsamp, expected):
    assert derive_binning(channels, tsamp) == expected


def test_derive_binning_custom_targets():
    assert derive_binning(4096, 100.0, target_channels=512, target_tsamp_usec=1000.0) == (8, 10)


def test_derivation_requires_binning_fields():
    bare = ScanMetadata(date="d", ist_time="t", beams_per_host=10)

    with pytest.raises(ValueError, match="required to derive binning"):
        derive_parameters(bare, fbin=1, tbin=1, dual=True)


def test_nbeams_from_header_unless_overridden(metadata):
    assert derive_parameters(metadata, dual=False).nbeams == 10
    assert derive_parameters(metadata, dual=False, nbeams=4).nbeams == 4


def test_pass_through_fields(metadata):
    params = derive_parameters(metadata, fbin=2, tbin=3, dual=False, njobs=8, offset=100)

    assert params.njobs == 8
    assert params.offset == 100
    assert (params.fbin, params.tbin) == (2, 3)


def test_needs_binning_derivation():
    assert needs_binning_derivation(1, 1, True) is True
    assert needs_binning_derivation(1, 1, False) is False
    assert needs_binning_derivation(2, 1, True) is False


def test_params_are_immutable(metadata):
    params = derive_parameters(metadata)

    with pytest.raises(ValidationError):
        params.fbin = 8
