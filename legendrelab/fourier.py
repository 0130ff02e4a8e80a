############################################################
# Real-to-complex Fourier transform for harmonic analysis  #
# Copyright (c) 2025, Caleb Kelly                          #
# Author: Caleb Kelly  (2025)                              #
############################################################
'''
The harmonic analysis needs a real-to-complex DFT f(signal, axis=0) taking
length-N real sequences along axis and returning N//2 + 1 complex bins in
standard order (bin 0 = DC). scipy.fft.rfft and numpy.fft.rfft both qualify.
'''
from importlib import import_module
from typing import Callable, Union

import numpy as np

from legendrelab.constants import DEFAULT_FFT_BACKEND, fft_backends


def sample_count(l_max: int) -> int:
    '''
    Number of great circle samples needed to resolve harmonics up to degree l_max

    Returns
    -------
    N         : smallest power of two greater than or equal to 2*l_max + 1
    '''
    return int(2 ** np.ceil(np.log2(2 * l_max + 1)))

def resolve_transform(transform: Union[str, Callable, None] = None) -> Callable:
    '''
    Resolve a transform given by backend name or as a callable

    Parameters
    ----------
    transform : None (default backend), backend name ('scipy' or 'numpy'),
                or a callable with the signature f(signal, axis=0)

    Returns
    -------
    transform : callable

    Raises
    ------
    ValueError: If the backend name is unknown
    '''
    if transform is None:
        transform = DEFAULT_FFT_BACKEND
    if callable(transform):
        return transform

    backends = fft_backends()
    if transform not in backends:
        raise ValueError(f'Unsupported FFT backend: {transform}. Must be one of {list(backends)}')
    module_name, func_name = backends[transform].rsplit('.', 1)
    return getattr(import_module(module_name), func_name)
