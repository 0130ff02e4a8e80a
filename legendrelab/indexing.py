############################################################
# Packed storage indices for spherical harmonic tables     #
# Copyright (c) 2025, Caleb Kelly                          #
# Author: Caleb Kelly  (2025)                              #
############################################################
'''
Closed-form index maps into packed one-dimensional tables.

Legendre functions are stored in a lower-triangular layout, one entry per
(l, m) with 0 <= m <= l. Inclination functions use a pyramidal layout, one
entry per (l, m, p) with 0 <= m <= l and 0 <= p <= l, so that degree l
occupies (l + 1)^2 consecutive slots.

Bounds are checked with assert only; run with ``python -O`` to drop them.
'''

def lm_idx(l: int, m: int) -> int:
    '''
    Storage index of (l, m) in a triangular table
    '''
    assert 0 <= m <= l, f'Invalid degree/order: l={l}, m={m}'
    return (l * (l + 1)) // 2 + m

def lm_size(l_max: int) -> int:
    '''
    Number of (l, m) pairs up to degree l_max
    '''
    return ((l_max + 1) * (l_max + 2)) // 2

def l_idx(l: int) -> int:
    '''
    Storage index at which degree l begins in a pyramidal table. l_idx(l_max + 1)
    is the size of a table up to degree l_max.
    '''
    assert l >= 0, f'Invalid degree: l={l}'
    return (l * (l + 1) * (2 * l + 1)) // 6

def lmp_idx(l: int, m: int, p: int) -> int:
    '''
    Storage index of (l, m, p) in a pyramidal table
    '''
    assert 0 <= m <= l, f'Invalid degree/order: l={l}, m={m}'
    assert 0 <= p <= l, f'Invalid p-index: l={l}, p={p}'
    return ((l + 1) * (l * (2 * l + 1))) // 6 + m * (l + 1) + p

def lmk_idx(l: int, m: int, k: int) -> int:
    '''
    Storage index of (l, m, k) with k = l - 2p
    '''
    return lmp_idx(l, m, (l - k) // 2)
