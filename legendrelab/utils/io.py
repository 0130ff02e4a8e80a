############################################################
# Utilities for exporting packed tables                    #
# Copyright (c) 2025, Caleb Kelly                          #
# Author: Caleb Kelly  (2025)                              #
############################################################

import xarray as xr
import numpy as np
from datetime import datetime

from legendrelab.indexing import l_idx, lm_size
from legendrelab.inclination import HarmonicAnalysisEngine
from legendrelab.legendre import LegendreEngine
from legendrelab.normalization import NormalizationTable

DATASET_CONFIG = {
    'Nlm': {
        'source'     : 'values',
        'owner'      : NormalizationTable,
        'layout'     : 'triangular',
        'units'      : '-',
        'description': 'Normalization constants relating fully normalized and unnormalized Legendre functions',
        'long_name'  : 'Normalization constant',
    },
    'Pnm': {
        'source'     : 'values',
        'owner'      : LegendreEngine,
        'layout'     : 'triangular',
        'units'      : '-',
        'description': 'Fully normalized associated Legendre functions',
        'long_name'  : 'Associated Legendre function',
    },
    'dPnm': {
        'source'     : 'first_derivatives',
        'owner'      : LegendreEngine,
        'layout'     : 'triangular',
        'units'      : '1/rad',
        'description': 'First co-latitude derivative of fully normalized associated Legendre functions',
        'long_name'  : 'ALF first derivative',
    },
    'ddPnm': {
        'source'     : 'second_derivatives',
        'owner'      : LegendreEngine,
        'layout'     : 'triangular',
        'units'      : '1/rad^2',
        'description': 'Second co-latitude derivative of fully normalized associated Legendre functions',
        'long_name'  : 'ALF second derivative',
    },
    'Flmp': {
        'source'     : 'values',
        'owner'      : HarmonicAnalysisEngine,
        'layout'     : 'pyramidal',
        'units'      : '-',
        'description': 'Fully normalized inclination functions',
        'long_name'  : 'Inclination function',
    },
    'dFlmp': {
        'source'     : 'derivatives',
        'owner'      : HarmonicAnalysisEngine,
        'layout'     : 'pyramidal',
        'units'      : '1/rad',
        'description': 'Derivative of fully normalized inclination functions with respect to inclination',
        'long_name'  : 'Inclination function derivative',
    },
}

def unpack_triangular(packed: np.ndarray, l_max: int) -> np.ndarray:
    '''
    Expand a packed (l, m) table to a square array, NaN above the diagonal
    '''
    full = np.full((l_max + 1, l_max + 1), np.nan)
    rows, cols = np.tril_indices(l_max + 1)
    full[rows, cols] = packed
    return full

def unpack_pyramidal(packed: np.ndarray, l_max: int) -> np.ndarray:
    '''
    Expand a packed (l, m, p) table to a cube, NaN outside m <= l, p <= l
    '''
    full = np.full((l_max + 1, l_max + 1, l_max + 1), np.nan)
    for l in range(l_max + 1):
        full[l, :l + 1, :l + 1] = packed[l_idx(l):l_idx(l + 1)].reshape(l + 1, l + 1)
    return full

def to_dataarray(engine, dataset_key: str) -> xr.DataArray:
    '''
    Convert one table of an engine to a labelled DataArray

    Parameters
    ----------
    engine      : NormalizationTable, LegendreEngine or HarmonicAnalysisEngine
    dataset_key : key of DATASET_CONFIG ('Nlm', 'Pnm', 'dPnm', 'ddPnm', 'Flmp', 'dFlmp')

    Returns
    -------
    da          : DataArray on dims (l, m) or (l, m, p)

    Raises
    ------
    ValueError  : unknown key, or table not held by the engine
    '''
    if dataset_key not in DATASET_CONFIG:
        raise ValueError(f'Unknown dataset: {dataset_key}. Must be one of {list(DATASET_CONFIG)}')
    config = DATASET_CONFIG[dataset_key]

    # Legendre engines carry their normalization table
    if dataset_key == 'Nlm' and isinstance(engine, LegendreEngine):
        engine = engine.normalization
    if not isinstance(engine, config['owner']):
        raise ValueError(
            f'{type(engine).__name__} does not hold {dataset_key}; '
            f'expected {config["owner"].__name__}'
        )

    packed = getattr(engine, config['source'], None)
    if not isinstance(packed, np.ndarray):
        raise ValueError(f'{type(engine).__name__} does not hold {dataset_key}')

    l_max    = engine.l_max
    expected = lm_size(l_max) if config['layout'] == 'triangular' else l_idx(l_max + 1)
    if packed.size != expected:
        raise ValueError(f'{type(engine).__name__} does not hold {dataset_key}')

    degree = np.arange(l_max + 1)
    attrs  = {
        'units'      : config['units'],
        'long_name'  : config['long_name'],
        'description': config['description'],
    }

    if config['layout'] == 'triangular':
        return xr.DataArray(
            unpack_triangular(packed, l_max),
            dims=['l', 'm'],
            coords={'l': degree, 'm': degree},
            name=dataset_key,
            attrs=attrs
        )
    return xr.DataArray(
        unpack_pyramidal(packed, l_max),
        dims=['l', 'm', 'p'],
        coords={'l': degree, 'm': degree, 'p': degree},
        name=dataset_key,
        attrs=attrs
    )

def to_dataset(engine) -> xr.Dataset:
    '''
    Collect every table held by an engine in a Dataset

    Parameters
    ----------
    engine    : NormalizationTable, LegendreEngine or HarmonicAnalysisEngine

    Returns
    -------
    ds        : Dataset with one variable per table and the defining angle in attrs

    Raises
    ------
    ValueError: If engine is none of the supported types
    '''
    if isinstance(engine, HarmonicAnalysisEngine):
        keys  = ['Flmp', 'dFlmp'] if engine.has_derivatives else ['Flmp']
        attrs = {'inclination': engine.inclination}
    elif isinstance(engine, LegendreEngine):
        keys  = ['Pnm', 'dPnm', 'ddPnm'][:int(engine.derivatives) + 1] + ['Nlm']
        attrs = {'theta': engine.theta}
    elif isinstance(engine, NormalizationTable):
        keys  = ['Nlm']
        attrs = {}
    else:
        raise ValueError(f'Cannot build a dataset from {type(engine).__name__}')

    data_vars = {key: to_dataarray(engine, key) for key in keys}

    attrs.update({
        'l_max'       : engine.l_max,
        'date_created': datetime.now().strftime('%Y-%m-%d %H:%M:%S'),
        'created_by'  : 'legendrelab',
    })
    return xr.Dataset(data_vars=data_vars, attrs=attrs)
