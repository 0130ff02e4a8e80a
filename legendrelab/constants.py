############################################################
# Constants and defaults for legendrelab                   #
# Copyright (c) 2025, Caleb Kelly                          #
# Author: Caleb Kelly  (2025)                              #
############################################################
from enum import IntEnum
from numbers import Integral


class DerivativeOrder(IntEnum):
    '''
    Highest co-latitude derivative computed alongside the Legendre functions

    NONE      : functions only
    FIRST     : functions and first derivatives
    SECOND    : functions, first and second derivatives
    '''
    NONE   = 0
    FIRST  = 1
    SECOND = 2

    @classmethod
    def from_flags(cls, want_derivatives: bool = False, want_second_derivatives: bool = False) -> 'DerivativeOrder':
        '''
        Build a derivative order from a pair of flags

        Parameters
        ----------
        want_derivatives        : compute first derivatives
        want_second_derivatives : compute second derivatives

        Returns
        -------
        order                   : DerivativeOrder

        Raises
        ------
        ValueError              : second derivatives requested without first derivatives
        '''
        if want_second_derivatives and not want_derivatives:
            raise ValueError('Second derivatives require first derivatives')
        if want_second_derivatives:
            return cls.SECOND
        return cls.FIRST if want_derivatives else cls.NONE

    @classmethod
    def coerce(cls, value) -> 'DerivativeOrder':
        '''
        Accept a DerivativeOrder, an integer 0-2 or a boolean
        '''
        if isinstance(value, Integral) and 0 <= value <= 2:
            return cls(int(value))
        raise ValueError(f'Invalid derivative order: {value!r}. Must be one of {[o.name for o in cls]} or 0, 1, 2')


def fft_backends() -> dict:
    '''
    Real-to-complex FFT backends known to work with the harmonic analysis

    Returns
    -------
    backends  : dictionary of backend name to import path
    '''
    return {
        'scipy': 'scipy.fft.rfft',
        'numpy': 'numpy.fft.rfft',
    }

DEFAULT_FFT_BACKEND = 'scipy'
