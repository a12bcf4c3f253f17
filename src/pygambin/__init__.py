"""
pygambin: the GamBin species-abundance distribution and its mixtures.
"""

from ._version import version as __version__
from .math.functions.gambin import gambin
from .math.functions.gambin_mixture import (
    expected_species,
    mixture_cdf,
    mixture_pmf,
    mixture_ppf,
    mixture_rvs,
    mixture_rvs_like,
)

__all__ = [
    "__version__",
    "gambin",
    "expected_species",
    "mixture_cdf",
    "mixture_pmf",
    "mixture_ppf",
    "mixture_rvs",
    "mixture_rvs_like",
]
