r"""
Contains a list of distribution functions, with the single-component kernels
implemented using Numba's :func:`numba.jit` to take advantage of the
just-in-time speed boost.
"""

# nopycln: file

from pygambin.math.functions.gambin import gambin  # noqa: F401
from pygambin.math.functions.gambin import (  # noqa: F401
    gambin_fitness,
    gambin_single_pmf,
    nb_gambin_cdf,
    nb_gambin_pmf,
    nb_gambin_scaled_cdf,
    nb_gambin_scaled_pmf,
)
from pygambin.math.functions.gambin_mixture import (  # noqa: F401
    expected_species,
    mixture_cdf,
    mixture_pmf,
    mixture_ppf,
    mixture_rvs,
    mixture_rvs_like,
    mixture_support,
)
