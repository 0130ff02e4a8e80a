############################################################
# Utilities for inclination functions                      #
# Copyright (c) 2025, Caleb Kelly                          #
# Author: Caleb Kelly  (2025)                              #
############################################################
from typing import Callable, Optional, Union

import numpy as np
from tqdm import tqdm

from legendrelab.constants import DerivativeOrder
from legendrelab.fourier import resolve_transform, sample_count
from legendrelab.indexing import l_idx, lm_idx, lm_size, lmk_idx, lmp_idx
from legendrelab.legendre import LegendreEngine
from legendrelab.normalization import validate_max_degree
from legendrelab.utils.numba.inclination import map_degree


class HarmonicAnalysisEngine:
    '''
    Fully normalized inclination functions and their derivatives with respect
    to the inclination

    The inclination functions are the Fourier coefficients of a unit
    disturbing potential P̄_lm(theta) (cos(m lambda) + sin(m lambda)) sampled
    along a great circle of inclination I. With u the argument of latitude,

        lambda = atan2(cos(I) sin(u), cos(u))
        theta  = acos(sin(I) sin(u))

    The potential is sampled at N equally spaced values of u, where N is the
    smallest power of two not below 2*l_max + 1, so the analysis is exact
    (Wagner, 1983). Derivatives follow from the same analysis applied to the
    derivative of the potential with respect to the inclination.

    Both F̄_lmp (Kaula, 1966) and F̄_lmk with k = l - 2p are available; the
    latter is handier for gravity field spectral analysis.

    Parameters
    ----------
    l_max       : maximum degree
    inclination : inclination (radians)
    derivatives : compute the derivatives with respect to the inclination
    transform   : real-to-complex FFT, as a callable f(signal, axis=0) or a
                  backend name ('scipy', 'numpy'). Defaults to scipy.fft.rfft
    progress    : show a progress bar over the great circle samples

    References
    ----------
    (1) Kaula (1966): Theory of Satellite Geodesy
    (2) Wagner (1983): Direct determination of gravitational harmonics from
        low-low GRAVSAT data
    '''
    def __init__(
        self,
        l_max: int,
        inclination: float,
        derivatives: bool = False,
        transform: Union[str, Callable, None] = None,
        progress: bool = False
    ) -> None:
        self.l_max           = validate_max_degree(l_max)
        self.inclination     = float(inclination)
        self.has_derivatives = bool(derivatives)

        self._Flmp  = None
        self._dFlmp = None
        self._compute(resolve_transform(transform), progress)
        self._lock()

    def _compute(self, transform: Callable, progress: bool) -> None:
        l_max = self.l_max
        N     = sample_count(l_max)
        du    = 2 * np.pi / N

        # Great circle geometry
        u     = du * np.arange(N)
        sin_u = np.sin(u)
        cos_u = np.cos(u)
        cos_I = np.cos(self.inclination)
        sin_I = np.sin(self.inclination)
        lam   = np.arctan2(cos_I * sin_u, cos_u)
        theta = np.arccos(sin_I * sin_u)

        # ALFs at every sample. Each engine lives only long enough to copy its tables
        order = DerivativeOrder.FIRST if self.has_derivatives else DerivativeOrder.NONE
        Pnm   = np.empty((N, lm_size(l_max)))
        dPnm  = np.empty((N, lm_size(l_max))) if self.has_derivatives else None
        with tqdm(total=N, desc='Computing Legendre Functions', disable=not progress) as pbar:
            for i in range(N):
                alf = LegendreEngine(l_max, theta[i], order)
                Pnm[i] = alf.values
                if dPnm is not None:
                    dPnm[i] = alf.first_derivatives
                pbar.update(1)

        m        = np.arange(l_max + 1)
        cos_mlam = np.cos(np.outer(lam, m))
        sin_mlam = np.sin(np.outer(lam, m))

        def potential(l, block) -> np.ndarray:
            return Pnm[:, block] * (cos_mlam[:, :l + 1] + sin_mlam[:, :l + 1])

        self._Flmp = self._analyse(potential, transform, N)

        if self.has_derivatives:
            tan_u     = sin_u / cos_u
            dtheta_dI = -sin_u * cos_I / np.sqrt(1 - sin_I**2 * sin_u**2)
            dlam_dI   = -sin_I * tan_u / (1 + cos_I**2 * tan_u**2)

            def potential_derivative(l, block) -> np.ndarray:
                ml = m[:l + 1]
                return (
                    dPnm[:, block] * dtheta_dI[:, None] * (cos_mlam[:, :l + 1] + sin_mlam[:, :l + 1])
                    + Pnm[:, block] * ml * (cos_mlam[:, :l + 1] - sin_mlam[:, :l + 1]) * dlam_dI[:, None]
                )

            self._dFlmp = self._analyse(potential_derivative, transform, N)

    def _analyse(self, signal: Callable, transform: Callable, N: int) -> np.ndarray:
        '''
        Fourier analyse the great circle signal of every (l, m) and map the
        coefficients to packed (l, m, p) storage

        Parameters
        ----------
        signal    : function (l, block) -> (N, l + 1) array of samples for orders 0..l
        transform : real-to-complex FFT
        N         : number of samples

        Returns
        -------
        Flmp      : packed inclination function array
        '''
        Flmp = np.zeros(l_idx(self.l_max + 1))
        for l in range(self.l_max + 1):
            block = slice(lm_idx(l, 0), lm_idx(l, l) + 1)
            y = transform(signal(l, block), axis=0)
            C = np.ascontiguousarray(2 * y[:l + 1].real / N)
            S = np.ascontiguousarray(-2 * y[:l + 1].imag / N)
            map_degree(C, S, l, Flmp, l_idx(l))
        return Flmp

    def _lock(self) -> None:
        for arr in (self._Flmp, self._dFlmp):
            if arr is not None:
                arr.flags.writeable = False

    def _require_derivatives(self) -> None:
        if not self.has_derivatives:
            raise ValueError('Inclination function derivatives were not computed; construct with derivatives=True')

    @property
    def values(self) -> np.ndarray:
        '''Read-only packed array of inclination functions'''
        return self._Flmp

    @property
    def derivatives(self) -> Optional[np.ndarray]:
        '''Read-only packed array of inclination function derivatives, or None'''
        return self._dFlmp

    def get_max_degree(self) -> int:
        return self.l_max

    def get_inclination(self) -> float:
        return self.inclination

    def get_Flmp(self, l: int, m: int, p: int) -> float:
        assert l <= self.l_max, f'Degree {l} exceeds l_max={self.l_max}'
        return float(self._Flmp[lmp_idx(l, m, p)])

    def get_Flmk(self, l: int, m: int, k: int) -> float:
        '''
        Inclination function indexed by k = l - 2p. Zero for |k| > l.
        '''
        if abs(k) > l:
            return 0.0
        assert l <= self.l_max, f'Degree {l} exceeds l_max={self.l_max}'
        return float(self._Flmp[lmk_idx(l, m, k)])

    def get_dFlmp(self, l: int, m: int, p: int) -> float:
        self._require_derivatives()
        assert l <= self.l_max, f'Degree {l} exceeds l_max={self.l_max}'
        return float(self._dFlmp[lmp_idx(l, m, p)])

    def get_dFlmk(self, l: int, m: int, k: int) -> float:
        self._require_derivatives()
        if abs(k) > l:
            return 0.0
        assert l <= self.l_max, f'Degree {l} exceeds l_max={self.l_max}'
        return float(self._dFlmp[lmk_idx(l, m, k)])

    def get_Flmk_star(self, l: int, m: int, k: int) -> float:
        '''
        Cross-track inclination function

        F*_lmk = 1/2 [ ((k-1)cos(I) - m)/sin(I) F_lm,k-1 + ((k+1)cos(I) - m)/sin(I) F_lm,k+1
                       - dF_lm,k-1 + dF_lm,k+1 ]

        Requires derivatives. Singular for equatorial orbits (sin(I) = 0).
        '''
        cos_I = np.cos(self.inclination)
        sin_I = np.sin(self.inclination)
        return 0.5 * (
            ((k - 1) * cos_I - m) / sin_I * self.get_Flmk(l, m, k - 1)
            + ((k + 1) * cos_I - m) / sin_I * self.get_Flmk(l, m, k + 1)
            - self.get_dFlmk(l, m, k - 1)
            + self.get_dFlmk(l, m, k + 1)
        )

    def get_complex_Flmp(self, l: int, m: int, p: int) -> complex:
        '''
        Inclination function with the phase factor i^(l - m) applied. Its real
        part follows the sign convention of tabulated Kaula inclination functions.
        '''
        return (1j ** ((l - m) % 4)) * self.get_Flmp(l, m, p)

    def copy(self) -> 'HarmonicAnalysisEngine':
        '''
        Independent copy of the engine and its tables
        '''
        new = object.__new__(type(self))
        new.l_max           = self.l_max
        new.inclination     = self.inclination
        new.has_derivatives = self.has_derivatives
        new._Flmp  = self._Flmp.copy()
        new._dFlmp = None if self._dFlmp is None else self._dFlmp.copy()
        new._lock()
        return new

    __copy__ = copy

    def __deepcopy__(self, memo) -> 'HarmonicAnalysisEngine':
        return self.copy()

    def __repr__(self) -> str:
        return (
            f'HarmonicAnalysisEngine(l_max={self.l_max}, inclination={self.inclination}, '
            f'derivatives={self.has_derivatives})'
        )
