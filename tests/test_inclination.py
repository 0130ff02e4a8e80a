import copy

import numpy as np
import pytest

from legendrelab import HarmonicAnalysisEngine
from legendrelab.fourier import resolve_transform, sample_count

# Re(i^(l-m) F_lmp) at I = 109.9 deg, m = 15
FLMP_109_9 = [
    (15, 7, 0.163727788669698),
    (17, 8, 0.487417791777481),
    (19, 9, 0.039444885080361),
    (21, 10, -0.334234993689438),
    (23, 11, 0.238101170358486),
    (25, 12, 0.035197122324998),
    (27, 13, -0.238961053270882),
    (29, 14, 0.250820102027528),
    (31, 15, -0.098284229213865),
    (33, 16, -0.099812590952652),
    (35, 17, 0.220401483107786),
    (37, 18, -0.203459255803049),
    (39, 19, 0.072853902584608),
    (41, 20, 0.089117362850045),
    (43, 21, -0.192487848426302),
    (45, 22, 0.186917527873700),
    (47, 23, -0.083106948025162),
    (49, 24, -0.058636531371390),
    (51, 25, 0.163214940273027),
    (53, 26, -0.179533365185972),
    (55, 27, 0.104101730627469),
    (57, 28, 0.020582796611666),
    (59, 29, -0.129982540091162),
]

# |dF_lmp| at I = 25 deg, m = 15
DFLMP_25 = [
    (15, 7, 0.000193588834461),
    (17, 8, 0.002962643282053),
    (19, 9, 0.019210738800719),
    (21, 10, 0.080996204022307),
    (23, 11, 0.254529309868877),
    (25, 12, 0.635791817300206),
    (27, 13, 1.304718954007593),
    (29, 14, 2.229338572015512),
    (31, 15, 3.154511340102659),
    (33, 16, 3.561310705132132),
    (35, 17, 2.797301141098675),
    (59, 29, 7.135563481217891),
    (61, 30, 13.533758345144610),
    (63, 31, 12.842455780020720),
    (65, 32, 4.896633828451622),
    (67, 33, 6.247154772263426),
    (69, 34, 14.285109814165770),
    (71, 35, 14.262965486747120),
    (73, 36, 5.729761501008049),
]

@pytest.fixture(scope='module')
def flmp_109_9() -> HarmonicAnalysisEngine:
    return HarmonicAnalysisEngine(100, np.radians(109.9))

@pytest.fixture(scope='module')
def flmp_25() -> HarmonicAnalysisEngine:
    return HarmonicAnalysisEngine(100, np.radians(25), derivatives=True)

@pytest.mark.parametrize('l, p, expected', FLMP_109_9)
def test_reference_values(flmp_109_9, l, p, expected) -> None:
    assert abs(flmp_109_9.get_complex_Flmp(l, 15, p).real - expected) < 1e-10

@pytest.mark.parametrize('l, p, expected', DFLMP_25)
def test_reference_derivatives(flmp_25, l, p, expected) -> None:
    assert abs(abs(flmp_25.get_dFlmp(l, 15, p)) - expected) < 1e-10

@pytest.mark.parametrize('I', np.radians([0., 25., 63.4, 98.7, 150.]))
def test_low_degree_closed_form(I) -> None:
    # Along the great circle P_10 = sqrt(3) sin(I) sin(u) and
    # P_11 (cos(lambda) + sin(lambda)) = sqrt(3) (cos(u) + cos(I) sin(u))
    F = HarmonicAnalysisEngine(3, I)
    s3 = np.sqrt(3)
    assert F.get_Flmp(0, 0, 0) == pytest.approx(1.0, abs=1e-13)
    assert F.get_Flmp(1, 0, 0) == pytest.approx(s3 / 2 * np.sin(I), abs=1e-13)
    assert F.get_Flmp(1, 0, 1) == pytest.approx(-s3 / 2 * np.sin(I), abs=1e-13)
    assert F.get_Flmp(1, 1, 0) == pytest.approx(s3 / 2 * (1 + np.cos(I)), abs=1e-13)
    assert F.get_Flmp(1, 1, 1) == pytest.approx(s3 / 2 * (1 - np.cos(I)), abs=1e-13)

@pytest.mark.parametrize('I', np.radians([25., 63.4, 98.7, 150.]))
def test_low_degree_derivatives(I) -> None:
    F = HarmonicAnalysisEngine(3, I, derivatives=True)
    s3 = np.sqrt(3)
    assert F.get_dFlmp(0, 0, 0) == pytest.approx(0.0, abs=1e-13)
    assert F.get_dFlmp(1, 0, 0) == pytest.approx(s3 / 2 * np.cos(I), abs=1e-12)
    assert F.get_dFlmp(1, 0, 1) == pytest.approx(-s3 / 2 * np.cos(I), abs=1e-12)
    assert F.get_dFlmp(1, 1, 0) == pytest.approx(-s3 / 2 * np.sin(I), abs=1e-12)
    assert F.get_dFlmp(1, 1, 1) == pytest.approx(s3 / 2 * np.sin(I), abs=1e-12)

def test_derivatives_against_finite_differences() -> None:
    I, dI = np.radians(52.), np.radians(1e-4)
    F  = HarmonicAnalysisEngine(30, I, derivatives=True)
    Fa = HarmonicAnalysisEngine(30, I + dI)
    Fb = HarmonicAnalysisEngine(30, I - dI)
    dF_num = (Fa.values - Fb.values) / (2 * dI)
    scale  = np.max(np.abs(F.derivatives))
    np.testing.assert_allclose(F.derivatives, dF_num, rtol=0, atol=1e-6 * scale)

def test_boundary_policy(flmp_25) -> None:
    for l in range(0, 40):
        for m in range(l + 1):
            for k in (l + 1, l + 2, l + 5, -l - 1, -l - 2, -l - 5):
                assert flmp_25.get_Flmk(l, m, k) == 0
                assert flmp_25.get_dFlmk(l, m, k) == 0

def test_flmk_matches_flmp(flmp_25) -> None:
    for l in range(0, 30):
        for m in range(l + 1):
            for p in range(l + 1):
                assert flmp_25.get_Flmk(l, m, l - 2 * p) == flmp_25.get_Flmp(l, m, p)
                assert flmp_25.get_dFlmk(l, m, l - 2 * p) == flmp_25.get_dFlmp(l, m, p)

def test_flmk_star(flmp_25) -> None:
    I = np.radians(25)
    for l, m, k in [(15, 15, 1), (20, 3, -4), (7, 7, 7), (7, 2, -7), (10, 0, 0)]:
        expected = 0.5 * (
            ((k - 1) * np.cos(I) - m) / np.sin(I) * flmp_25.get_Flmk(l, m, k - 1)
            + ((k + 1) * np.cos(I) - m) / np.sin(I) * flmp_25.get_Flmk(l, m, k + 1)
            - flmp_25.get_dFlmk(l, m, k - 1)
            + flmp_25.get_dFlmk(l, m, k + 1)
        )
        assert flmp_25.get_Flmk_star(l, m, k) == pytest.approx(expected, rel=1e-14, abs=1e-300)
        assert np.isfinite(flmp_25.get_Flmk_star(l, m, k))

@pytest.mark.parametrize('I', np.radians([25., 63.4, 98.7, 150.]))
def test_flmk_star_closed_form(I) -> None:
    # From the degree 1 closed forms: F*_10,0 = sqrt(3) cos(I), F*_11,0 = -sqrt(3) sin(I)
    # and every k = +-2 term cancels
    F  = HarmonicAnalysisEngine(3, I, derivatives=True)
    s3 = np.sqrt(3)
    assert F.get_Flmk_star(1, 0, 0) == pytest.approx(s3 * np.cos(I), abs=1e-12)
    assert F.get_Flmk_star(1, 1, 0) == pytest.approx(-s3 * np.sin(I), abs=1e-12)
    for m in (0, 1):
        for k in (-2, 2):
            assert F.get_Flmk_star(1, m, k) == pytest.approx(0.0, abs=1e-12)

def test_missing_derivatives_raise(flmp_109_9) -> None:
    assert flmp_109_9.derivatives is None
    with pytest.raises(ValueError):
        flmp_109_9.get_dFlmp(15, 15, 7)
    with pytest.raises(ValueError):
        flmp_109_9.get_dFlmk(15, 15, 1)
    with pytest.raises(ValueError):
        flmp_109_9.get_Flmk_star(15, 15, 1)

def test_complex_phase(flmp_109_9) -> None:
    # i^(l - m): real for even l - m, imaginary for odd l - m
    assert flmp_109_9.get_complex_Flmp(16, 14, 3) == -flmp_109_9.get_Flmp(16, 14, 3)
    assert flmp_109_9.get_complex_Flmp(17, 13, 3) == flmp_109_9.get_Flmp(17, 13, 3)
    assert flmp_109_9.get_complex_Flmp(16, 15, 3) == 1j * flmp_109_9.get_Flmp(16, 15, 3)
    assert flmp_109_9.get_complex_Flmp(18, 15, 3) == -1j * flmp_109_9.get_Flmp(18, 15, 3)

@pytest.mark.parametrize('transform', [
    'numpy',
    'scipy',
    lambda signal, axis=0: np.fft.rfft(signal, axis=axis),
])
def test_transform_is_interchangeable(transform) -> None:
    I = np.radians(72.)
    reference = HarmonicAnalysisEngine(20, I, derivatives=True)
    F = HarmonicAnalysisEngine(20, I, derivatives=True, transform=transform)
    np.testing.assert_allclose(F.values, reference.values, rtol=0, atol=1e-13)
    np.testing.assert_allclose(F.derivatives, reference.derivatives, rtol=0, atol=1e-12)

def test_unknown_transform() -> None:
    with pytest.raises(ValueError):
        resolve_transform('fftw')

def test_sample_count() -> None:
    assert sample_count(0) == 1
    assert sample_count(1) == 4
    assert sample_count(3) == 8
    assert sample_count(4) == 16
    assert sample_count(100) == 256

def test_accessors_and_size(flmp_109_9) -> None:
    assert flmp_109_9.get_max_degree() == 100
    assert flmp_109_9.get_inclination() == np.radians(109.9)
    assert flmp_109_9.values.shape == (101 * 102 * 203 // 6,)
    with pytest.raises(AssertionError):
        flmp_109_9.get_Flmp(101, 0, 0)

def test_zero_degree_engine() -> None:
    F = HarmonicAnalysisEngine(0, np.radians(40.), derivatives=True)
    assert F.get_Flmp(0, 0, 0) == pytest.approx(1.0)
    assert F.get_dFlmp(0, 0, 0) == pytest.approx(0.0, abs=1e-13)

def test_progress_bar() -> None:
    F = HarmonicAnalysisEngine(4, np.radians(40.), progress=True)
    assert F.get_Flmp(0, 0, 0) == pytest.approx(1.0)

def test_copy_is_independent(flmp_25) -> None:
    for other in (flmp_25.copy(), copy.copy(flmp_25), copy.deepcopy(flmp_25)):
        assert other.inclination == flmp_25.inclination
        assert other.has_derivatives
        assert not np.shares_memory(other.values, flmp_25.values)
        assert not np.shares_memory(other.derivatives, flmp_25.derivatives)
        np.testing.assert_array_equal(other.values, flmp_25.values)
        np.testing.assert_array_equal(other.derivatives, flmp_25.derivatives)
    with pytest.raises(ValueError):
        flmp_25.values[0] = 0.0
