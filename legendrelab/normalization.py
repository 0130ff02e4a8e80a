############################################################
# Normalization constants for spherical harmonics          #
# Copyright (c) 2025, Caleb Kelly                          #
# Author: Caleb Kelly  (2025)                              #
############################################################
import numpy as np

from legendrelab.indexing import lm_idx
from legendrelab.utils.numba.legendre import compute_normalization


def validate_max_degree(l_max) -> int:
    '''
    Check that the maximum degree is a non-negative integer

    Returns
    -------
    l_max     : maximum degree as a Python int

    Raises
    ------
    ValueError: If l_max is negative or not an integer
    '''
    if isinstance(l_max, bool) or not isinstance(l_max, (int, np.integer)):
        raise ValueError(f'l_max must be an integer, got {l_max!r}')
    if l_max < 0:
        raise ValueError('l_max must be greater than or equal to 0')
    return int(l_max)


class NormalizationTable:
    '''
    Normalization constants of fully normalized spherical harmonics

    The constant N_lm converts a fully normalized Legendre function into
    its unnormalized counterpart, P_lm = P̄_lm / N_lm, with

        N_lm = sqrt((2 - δ_0m)(2l + 1)(l - m)! / (l + m)!)

    The constants are built recursively in m to avoid the factorial overflow.

    Parameters
    ----------
    l_max     : maximum degree

    References
    ----------
    (1) Heiskanen and Moritz (1967): Physical Geodesy (Eq. 1-91)
    '''
    def __init__(self, l_max: int) -> None:
        self.l_max = validate_max_degree(l_max)
        self._Nlm  = compute_normalization(self.l_max)
        self._Nlm.flags.writeable = False

    @property
    def values(self) -> np.ndarray:
        '''Read-only packed array of constants'''
        return self._Nlm

    def get(self, l: int, m: int) -> float:
        assert l <= self.l_max, f'Degree {l} exceeds l_max={self.l_max}'
        return float(self._Nlm[lm_idx(l, m)])

    def copy(self) -> 'NormalizationTable':
        new = object.__new__(type(self))
        new.l_max = self.l_max
        new._Nlm  = self._Nlm.copy()
        new._Nlm.flags.writeable = False
        return new

    __copy__ = copy

    def __deepcopy__(self, memo) -> 'NormalizationTable':
        return self.copy()

    def __repr__(self) -> str:
        return f'NormalizationTable(l_max={self.l_max})'
