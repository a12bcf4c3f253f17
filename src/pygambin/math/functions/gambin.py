"""
GamBin distribution for pygambin

The GamBin model draws the "fitness" of each species from a gamma
distribution truncated at its 99th percentile, and then places the species in
an abundance octave through a binomial trial over ``maxoctave`` octaves. The
gamma integral is discretised on a grid of 100 intervals.
"""

import logging
from functools import lru_cache
from math import lgamma

import numba as nb
import numpy as np
from scipy.stats import gamma, rv_discrete

from pygambin.utils import numba_math_defaults as nb_defaults
from pygambin.utils import numba_math_defaults_kwargs as nb_kwargs

log = logging.getLogger(__name__)

GRID_SIZE = 100
TRUNCATION = 0.99


@lru_cache(maxsize=256)
def _fitness(alpha: float) -> np.ndarray:
    log.debug(f"computing fitness weights for alpha={alpha}")
    grid = np.arange(GRID_SIZE + 1) / GRID_SIZE
    edges = gamma.ppf(TRUNCATION, alpha) * grid
    return np.diff(gamma.cdf(edges, alpha)) / TRUNCATION


def gambin_fitness(alpha: float) -> np.ndarray:
    r"""
    Probability of a species' fitness falling in each of the intervals of the
    discretisation grid, for a gamma distribution of shape `alpha` and unit
    scale truncated at its 99th percentile :math:`q_{99}`.

    .. math::
        W_j = \frac{G(q_{99} t_j; \alpha) - G(q_{99} t_{j-1}; \alpha)}{0.99}, \quad t_j = j/100

    Parameters
    ----------
    alpha
        The shape of the gamma distribution

    Returns
    -------
    weights
        Array of length 100, summing to one. A fresh copy is returned on each
        call, the underlying computation is memoized on `alpha`.
    """

    return _fitness(float(alpha)).copy()


@nb.njit(**nb_kwargs)
def nb_gambin_pmf(x: np.ndarray, maxoctave: int, fitness: np.ndarray) -> np.ndarray:
    r"""
    Normalised GamBin probability mass function, w/ args: maxoctave, fitness.
    The range of support is :math:`k \in \{0, \dots, maxoctave\}`.
    As a Numba JIT function, it runs slightly faster than
    'out of the box' functions.

    .. math::
        pmf(k, n) = \sum_{j=1}^{100} \binom{n}{k} t_j^k (1-t_j)^{n-k} W_j

    Parameters
    ----------
    x : array-like
        The octaves to evaluate
    maxoctave
        The highest octave with non-zero probability
    fitness
        The interval weights :math:`W_j` from :func:`gambin_fitness`
    """

    n = float(maxoctave)
    n_grid = fitness.shape[0]
    y = np.empty_like(x, dtype=np.float64)
    for i in nb.prange(x.shape[0]):
        k = float(x[i])
        if k < 0 or k > n:
            y[i] = 0
        else:
            log_coef = lgamma(n + 1) - lgamma(k + 1) - lgamma(n - k + 1)
            total = 0.0
            for j in range(n_grid):
                t = (j + 1) / n_grid
                log_term = log_coef
                if k > 0:
                    log_term += k * np.log(t)
                if n - k > 0:
                    if t == 1:
                        continue
                    log_term += (n - k) * np.log1p(-t)
                total += np.exp(log_term) * fitness[j]
            y[i] = total
    return y


@nb.njit(**nb_kwargs)
def nb_gambin_cdf(x: np.ndarray, maxoctave: int, fitness: np.ndarray) -> np.ndarray:
    r"""
    Normalised GamBin cumulative distribution, w/ args: maxoctave, fitness.
    As a Numba JIT function, it runs slightly faster than
    'out of the box' functions.

    .. math::
        cdf(x, n) = \sum_{k=0}^{\lfloor x \rfloor} pmf(k, n)

    Parameters
    ----------
    x : array-like
        The input data
    maxoctave
        The highest octave with non-zero probability
    fitness
        The interval weights :math:`W_j` from :func:`gambin_fitness`
    """

    n = float(maxoctave)
    support = np.arange(int(maxoctave) + 1).astype(np.float64)
    cum_probs = np.cumsum(nb_gambin_pmf(support, maxoctave, fitness))
    y = np.empty_like(x, dtype=np.float64)
    for i in nb.prange(x.shape[0]):
        k = np.floor(x[i])
        if k < 0:
            y[i] = 0
        elif k >= n:
            y[i] = 1
        else:
            y[i] = cum_probs[int(k)]
    return y


@nb.njit(**nb_defaults(parallel=False))
def nb_gambin_scaled_pmf(
    x: np.ndarray, area: float, maxoctave: int, fitness: np.ndarray
) -> np.ndarray:
    r"""
    Scaled GamBin probability mass, w/ args: area, maxoctave, fitness. With
    `area` the total number of species this is the expected number of species
    in each octave.
    As a Numba JIT function, it runs slightly faster than
    'out of the box' functions.

    Parameters
    ----------
    x : array-like
        The octaves to evaluate
    area
        The number of species in the signal
    maxoctave
        The highest octave with non-zero probability
    fitness
        The interval weights :math:`W_j` from :func:`gambin_fitness`
    """

    return area * nb_gambin_pmf(x, maxoctave, fitness)


@nb.njit(**nb_defaults(parallel=False))
def nb_gambin_scaled_cdf(
    x: np.ndarray, area: float, maxoctave: int, fitness: np.ndarray
) -> np.ndarray:
    r"""
    GamBin cdf scaled by the number of species.
    As a Numba JIT function, it runs slightly faster than
    'out of the box' functions.

    Parameters
    ----------
    x : array-like
        The input data
    area
        The number of species in the signal
    maxoctave
        The highest octave with non-zero probability
    fitness
        The interval weights :math:`W_j` from :func:`gambin_fitness`
    """

    return area * nb_gambin_cdf(x, maxoctave, fitness)


def gambin_single_pmf(x, alpha: float, maxoctave: int, log: bool = False):
    """
    Mass function of a single GamBin component.

    Parameters
    ----------
    x
        Octave(s) to evaluate. Octaves outside ``0..maxoctave`` get zero mass.
    alpha
        The shape parameter of the fitness distribution
    maxoctave
        The highest octave with non-zero probability
    log
        If true, return the natural log of the probabilities

    Returns
    -------
    probabilities with the shape of `x`
    """

    x = np.asarray(x, dtype=np.float64)
    res = nb_gambin_pmf(x.ravel(), maxoctave, gambin_fitness(alpha))
    if log:
        with np.errstate(divide="ignore"):
            res = np.log(res)
    return res.reshape(x.shape)[()]


def _per_component(kernel, x, alpha, maxoctave) -> np.ndarray:
    # scipy hands over broadcast parameter arrays, evaluate once per distinct pair
    x, alpha, maxoctave = np.broadcast_arrays(x, alpha, maxoctave)
    y = np.empty(x.shape, dtype=np.float64)
    for a, m in set(zip(alpha.flat, maxoctave.flat)):
        mask = (alpha == a) & (maxoctave == m)
        y[mask] = kernel(x[mask].astype(np.float64), m, gambin_fitness(a))
    return y


class GambinGen(rv_discrete):
    r"""
    GamBin distribution as a scipy :class:`rv_discrete`, with shape
    parameters `alpha` and `maxoctave`. The support is ``0..maxoctave``.

    Examples
    --------
    >>> from pygambin.math.functions.gambin import gambin
    >>> gambin.pmf([0, 1, 2], 2, 7)
    >>> gambin.get_pmf(np.arange(8), 2, 7) # direct call to the numba kernel
    >>> gambin(2, 7).rvs(100) # frozen distributions get every scipy method
    """

    def _argcheck(self, alpha, maxoctave):
        return (alpha > 0) & (maxoctave >= 0) & (maxoctave == np.floor(maxoctave))

    def _get_support(self, alpha, maxoctave):
        return self.a, maxoctave

    def _pmf(self, x: np.array, alpha: float, maxoctave: int) -> np.array:
        return _per_component(nb_gambin_pmf, x, alpha, maxoctave)

    def _cdf(self, x: np.array, alpha: float, maxoctave: int) -> np.array:
        return _per_component(nb_gambin_cdf, x, alpha, maxoctave)

    def get_pmf(self, x: np.array, alpha: float, maxoctave: int) -> np.array:
        return nb_gambin_pmf(
            np.asarray(x, dtype=np.float64), maxoctave, gambin_fitness(alpha)
        )

    def get_cdf(self, x: np.array, alpha: float, maxoctave: int) -> np.array:
        return nb_gambin_cdf(
            np.asarray(x, dtype=np.float64), maxoctave, gambin_fitness(alpha)
        )

    def pmf_ext(
        self,
        x: np.array,
        x_lo: float,
        x_hi: float,
        area: float,
        alpha: float,
        maxoctave: int,
    ) -> tuple[float, np.array]:
        fitness = gambin_fitness(alpha)
        window = nb_gambin_scaled_cdf(
            np.array([x_lo - 1, x_hi], dtype=np.float64), area, maxoctave, fitness
        )
        return np.diff(window)[0], nb_gambin_scaled_pmf(
            np.asarray(x, dtype=np.float64), area, maxoctave, fitness
        )

    def cdf_ext(
        self, x: np.array, area: float, alpha: float, maxoctave: int
    ) -> np.array:
        return nb_gambin_scaled_cdf(
            np.asarray(x, dtype=np.float64), area, maxoctave, gambin_fitness(alpha)
        )

    def required_args(self) -> tuple[str, str]:
        return "alpha", "maxoctave"


gambin = GambinGen(a=0, name="gambin")
