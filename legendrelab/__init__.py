'''
LegendreLab - Associated Legendre functions, inclination functions and
normalization constants for spherical harmonic gravity field analysis.
'''
from legendrelab.__version__ import __version__
from legendrelab.constants import DerivativeOrder
from legendrelab.indexing import l_idx, lm_idx, lm_size, lmk_idx, lmp_idx
from legendrelab.normalization import NormalizationTable
from legendrelab.legendre import LegendreEngine
from legendrelab.inclination import HarmonicAnalysisEngine

__author__ = 'Caleb Kelly'
__email__ = 'geo.calebkelly@gmail.com'

__all__ = [
    'DerivativeOrder',
    'HarmonicAnalysisEngine',
    'LegendreEngine',
    'NormalizationTable',
    'l_idx',
    'lm_idx',
    'lm_size',
    'lmk_idx',
    'lmp_idx',
]
