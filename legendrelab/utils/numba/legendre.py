############################################################
# Utilities for numba optimized legendre functions         #
# Copyright (c) 2025, Caleb Kelly                          #
# Author: Caleb Kelly  (2025)                              #
############################################################

import numpy as np
from numba import njit

# error_model='numpy': division by zero at the poles yields inf/nan instead of raising

@njit
def _lm(l, m) -> int:
    return (l * (l + 1)) // 2 + m

@njit(error_model='numpy')
def compute_normalization(nmax) -> np.ndarray:
    '''
    Compute normalization constants relating fully normalized and
    unnormalized Legendre functions

    Parameters
    ----------
    nmax      : maximum degree

    Returns
    -------
    Nlm       : packed array of normalization constants

    References
    ----------
    (1) Heiskanen and Moritz (1967): Physical Geodesy (Eq. 1-91)
    '''
    Nlm = np.zeros((nmax + 1) * (nmax + 2) // 2)
    for n in range(0, nmax + 1):
        Nlm[_lm(n, 0)] = np.sqrt(2. * n + 1.)

    for m in range(1, nmax + 1):
        for n in range(m, nmax + 1):
            Nlm[_lm(n, m)] = Nlm[_lm(n, m - 1)] * np.sqrt(1. / ((n - m + 1.) * (n + m)))

    # Factor 2 for m > 0 applied once, after the recursion
    for m in range(1, nmax + 1):
        for n in range(m, nmax + 1):
            Nlm[_lm(n, m)] *= np.sqrt(2.)

    return Nlm

@njit(error_model='numpy')
def foid_coefficients(nmax):
    '''
    Coupling coefficients a_nm and b_nm of the Fixed-Order-Increase-Degree
    recursion, stored in packed (n, m) order for 0 <= m < n <= nmax
    '''
    size = (nmax + 1) * (nmax + 2) // 2
    a = np.zeros(size)
    b = np.zeros(size)
    for n in range(1, nmax + 1):
        for m in range(0, n):
            a[_lm(n, m)] = np.sqrt((2. * n - 1.) * (2. * n + 1.) / ((n - m) * (n + m)))
            if n - m != 1:
                b[_lm(n, m)] = np.sqrt(
                    (2. * n + 1.) * (n + m - 1.) * (n - m - 1.) / ((n - m) * (n + m) * (2. * n - 3.))
                )
    return a, b

@njit(error_model='numpy')
def compute_alf(vartheta, nmax) -> np.ndarray:
    '''
    Compute fully normalized associated Legendre functions with the standard
    forward column method

    Parameters
    ----------
    vartheta  : colatitude (radians)
    nmax      : maximum degree

    Returns
    -------
    Pnm       : packed array of fully normalized ALFs

    References
    ----------
    (1) Holmes and Featherstone (2002): A unified approach to the Clenshaw
    summation and the recursive computation of very high degree and order
    normalised associated Legendre functions (Eqs. 11 and 12)
    '''
    a, b = foid_coefficients(nmax)

    # sine (u) and cosine (t) terms
    t = np.cos(vartheta)
    u = np.sin(vartheta)

    Pnm = np.zeros((nmax + 1) * (nmax + 2) // 2)
    Pnm[0] = 1.0
    if nmax >= 1:
        Pnm[_lm(1, 1)] = np.sqrt(3.0) * u

    # Sectoral harmonics (n = m)
    for n in range(2, nmax + 1):
        Pnm[_lm(n, n)] = np.sqrt((2. * n + 1.) / (2. * n)) * u * Pnm[_lm(n - 1, n - 1)]

    # Fix the order, increase the degree
    for m in range(0, nmax):
        n = m + 1
        Pnm[_lm(n, m)] = a[_lm(n, m)] * t * Pnm[_lm(n - 1, m)]
        for n in range(m + 2, nmax + 1):
            Pnm[_lm(n, m)] = a[_lm(n, m)] * t * Pnm[_lm(n - 1, m)] - b[_lm(n, m)] * Pnm[_lm(n - 2, m)]

    return Pnm

@njit(error_model='numpy')
def derivative_coefficients(nmax) -> np.ndarray:
    '''
    Coefficients f_nm = sqrt((n^2 - m^2)(2n + 1)/(2n - 1)) in packed order
    '''
    f = np.zeros((nmax + 1) * (nmax + 2) // 2)
    for n in range(1, nmax + 1):
        for m in range(0, n + 1):
            f[_lm(n, m)] = np.sqrt((n * n - m * m) * (2. * n + 1.) / (2. * n - 1.))
    return f

@njit(error_model='numpy')
def compute_alf_derivative(vartheta, nmax, Pnm) -> np.ndarray:
    '''
    Compute first colatitude derivatives of fully normalized ALFs

    Parameters
    ----------
    vartheta  : colatitude (radians)
    nmax      : maximum degree
    Pnm       : packed fully normalized ALFs at vartheta

    Returns
    -------
    dPnm      : packed array of first derivatives

    Notes
    -----
    Singular at the poles (sin(vartheta) = 0)
    '''
    f = derivative_coefficients(nmax)
    t = np.cos(vartheta)
    u = np.sin(vartheta)

    dPnm = np.zeros_like(Pnm)
    for m in range(0, nmax + 1):
        dPnm[_lm(m, m)] = m * t / u * Pnm[_lm(m, m)]

    for n in range(1, nmax + 1):
        for m in range(0, n):
            dPnm[_lm(n, m)] = 1.0 / u * (n * t * Pnm[_lm(n, m)] - f[_lm(n, m)] * Pnm[_lm(n - 1, m)])

    return dPnm

@njit(error_model='numpy')
def compute_alf_second_derivative(vartheta, nmax, Pnm, dPnm) -> np.ndarray:
    '''
    Compute second colatitude derivatives of fully normalized ALFs from the
    functions and their first derivatives
    '''
    f = derivative_coefficients(nmax)
    t = np.cos(vartheta)
    u = np.sin(vartheta)

    ddPnm = np.zeros_like(Pnm)
    for m in range(0, nmax + 1):
        ddPnm[_lm(m, m)] = (m - 1.) * t / u * dPnm[_lm(m, m)] - m * Pnm[_lm(m, m)]

    for n in range(1, nmax + 1):
        for m in range(0, n):
            ddPnm[_lm(n, m)] = (
                1.0 / u * ((n - 1.) * t * dPnm[_lm(n, m)] - f[_lm(n, m)] * dPnm[_lm(n - 1, m)])
                - n * Pnm[_lm(n, m)]
            )

    return ddPnm
