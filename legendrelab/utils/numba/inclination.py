############################################################
# Utilities for numba optimized inclination functions      #
# Copyright (c) 2025, Caleb Kelly                          #
# Author: Caleb Kelly  (2025)                              #
############################################################

import numpy as np
from numba import njit

@njit
def map_degree(C, S, l, Flmp, offset) -> np.ndarray:
    '''
    Map cosine and sine Fourier coefficients of the great circle signal to
    the inclination functions of a single degree

    Parameters
    ----------
    C         : cosine coefficients, C[i, m] for frequency i and order m
    S         : sine coefficients, same layout as C
    l         : degree
    Flmp      : packed inclination function array (updated in place)
    offset    : storage index of (l, 0, 0)

    Returns
    -------
    Updated Flmp array

    Notes
    -----
    Only harmonics i with the parity of l carry the (l, m, p) terms. The sign
    convention depends on whether l and m share parity.
    '''
    for m in range(0, l + 1):
        lm = offset + m * (l + 1)
        if l % 2 == 0:
            Flmp[lm + l // 2] = C[0, m] if m % 2 == 0 else -C[0, m]

        if l % 2 == m % 2:
            for i in range(l % 2, l + 1, 2):
                Flmp[lm + (l - i) // 2] = (C[i, m] + S[i, m]) / 2
                Flmp[lm + (l + i) // 2] = (C[i, m] - S[i, m]) / 2
        else:
            for i in range(l % 2, l + 1, 2):
                Flmp[lm + (l + i) // 2] = -(C[i, m] + S[i, m]) / 2
                Flmp[lm + (l - i) // 2] = -(C[i, m] - S[i, m]) / 2

    return Flmp
