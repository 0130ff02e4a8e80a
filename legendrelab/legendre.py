############################################################
# Utilities for legendre functions                         #
# Copyright (c) 2025, Caleb Kelly                          #
# Author: Caleb Kelly  (2025)                              #
############################################################
import warnings

import numpy as np

from legendrelab.constants import DerivativeOrder
from legendrelab.indexing import lm_idx
from legendrelab.normalization import NormalizationTable, validate_max_degree
from legendrelab.utils.numba.legendre import (
    compute_alf,
    compute_alf_derivative,
    compute_alf_second_derivative
)


class LegendreEngine:
    '''
    Fully normalized associated Legendre functions (ALFs) and their
    co-latitude derivatives at a single co-latitude

    The ALFs are computed with the standard forward column method, also
    known as Fixed-Order-Increase-Degree (FOID). With t = cos(theta) and
    u = sin(theta), the recursion is seeded with P̄_00 = 1 and P̄_11 = sqrt(3)u,
    the sectorial terms follow from

        P̄_ll = sqrt((2l + 1)/(2l)) u P̄_l-1,l-1

    and, fixing m and increasing l,

        P̄_lm = a_lm t P̄_l-1,m - b_lm P̄_l-2,m

    Derivatives are obtained from the functions themselves:

        dP̄_mm = m t/u P̄_mm
        dP̄_lm = 1/u (l t P̄_lm - f_lm P̄_l-1,m)

    Parameters
    ----------
    l_max       : maximum degree
    theta       : co-latitude (radians)
    derivatives : DerivativeOrder (or 0, 1, 2) of the highest derivative to
                  compute, or the first-derivative flag when combined with
                  want_second_derivatives
    want_second_derivatives : compute second derivatives (flag form)
    want_derivatives        : compute first derivatives (flag form, keyword only)

    Notes
    -----
    1. Derivatives are singular at the poles (sin(theta) = 0). The
       computation still completes and yields non-finite values.
    2. When either flag is given the order is built with
       DerivativeOrder.from_flags(), so LegendreEngine(l_max, theta, True, True)
       and LegendreEngine(l_max, theta, DerivativeOrder.SECOND) agree.

    References
    ----------
    (1) Holmes and Featherstone (2002): A unified approach to the Clenshaw
    summation and the recursive computation of very high degree and order
    normalised associated Legendre functions (Sec. 2.1)
    '''
    def __init__(
        self,
        l_max: int,
        theta: float,
        derivatives=DerivativeOrder.NONE,
        want_second_derivatives: bool = None,
        *,
        want_derivatives: bool = None
    ) -> None:
        self.l_max         = validate_max_degree(l_max)
        self.theta         = float(theta)
        if want_derivatives is None and want_second_derivatives is None:
            self.derivatives = DerivativeOrder.coerce(derivatives)
        else:
            if want_derivatives is None:
                want_derivatives = bool(derivatives)
            self.derivatives = DerivativeOrder.from_flags(want_derivatives, bool(want_second_derivatives))
        self.normalization = NormalizationTable(self.l_max)

        self._Pnm   = compute_alf(self.theta, self.l_max)
        self._dPnm  = None
        self._ddPnm = None

        if self.derivatives >= DerivativeOrder.FIRST:
            if np.sin(self.theta) == 0:
                warnings.warn(
                    f'Co-latitude {self.theta} rad is polar; ALF derivatives are singular there '
                    'and will be non-finite.',
                    RuntimeWarning,
                    stacklevel=2
                )
            self._dPnm = compute_alf_derivative(self.theta, self.l_max, self._Pnm)

            if self.derivatives >= DerivativeOrder.SECOND:
                self._ddPnm = compute_alf_second_derivative(self.theta, self.l_max, self._Pnm, self._dPnm)

        self._lock()

    def _lock(self) -> None:
        for arr in (self._Pnm, self._dPnm, self._ddPnm):
            if arr is not None:
                arr.flags.writeable = False

    def _index(self, l, m) -> int:
        assert l <= self.l_max, f'Degree {l} exceeds l_max={self.l_max}'
        return lm_idx(l, m)

    def _require(self, order: DerivativeOrder) -> None:
        if self.derivatives < order:
            raise ValueError(
                f'{order.name.lower()} derivatives were not computed; '
                f'construct with derivatives=DerivativeOrder.{order.name}'
            )

    @property
    def values(self) -> np.ndarray:
        '''Read-only packed array of fully normalized ALFs'''
        return self._Pnm

    @property
    def first_derivatives(self):
        return self._dPnm

    @property
    def second_derivatives(self):
        return self._ddPnm

    def get_theta(self) -> float:
        return self.theta

    def get_normalized(self, l: int, m: int) -> float:
        '''
        Fully normalized ALF of degree l and order m
        '''
        return float(self._Pnm[self._index(l, m)])

    def get_unnormalized(self, l: int, m: int) -> float:
        '''
        Unnormalized ALF of degree l and order m
        '''
        return self.get_normalized(l, m) / self.normalization.get(l, m)

    def get_normalized_derivative(self, l: int, m: int) -> float:
        self._require(DerivativeOrder.FIRST)
        return float(self._dPnm[self._index(l, m)])

    def get_unnormalized_derivative(self, l: int, m: int) -> float:
        return self.get_normalized_derivative(l, m) / self.normalization.get(l, m)

    def get_normalized_second_derivative(self, l: int, m: int) -> float:
        self._require(DerivativeOrder.SECOND)
        return float(self._ddPnm[self._index(l, m)])

    def get_unnormalized_second_derivative(self, l: int, m: int) -> float:
        return self.get_normalized_second_derivative(l, m) / self.normalization.get(l, m)

    def copy(self) -> 'LegendreEngine':
        '''
        Independent copy of the engine and all of its tables
        '''
        new = object.__new__(type(self))
        new.l_max         = self.l_max
        new.theta         = self.theta
        new.derivatives   = self.derivatives
        new.normalization = self.normalization.copy()
        new._Pnm   = self._Pnm.copy()
        new._dPnm  = None if self._dPnm is None else self._dPnm.copy()
        new._ddPnm = None if self._ddPnm is None else self._ddPnm.copy()
        new._lock()
        return new

    __copy__ = copy

    def __deepcopy__(self, memo) -> 'LegendreEngine':
        return self.copy()

    def __repr__(self) -> str:
        return f'LegendreEngine(l_max={self.l_max}, theta={self.theta}, derivatives={self.derivatives.name})'
