r"""
Mixtures of GamBin distributions: mass function, cumulative distribution,
quantile function and random variates.

A mixture is given by parallel sequences of shape parameters `alpha` and
maximum octaves `maxoctave`, one entry per component, and a weight vector `w`.
Every function recomputes the mixture mass over the full support
``0..max(maxoctave)`` and derives its result from it.

.. code-block:: python

    x = np.arange(6)
    mixture_pmf(x, alpha=[1, 2], maxoctave=[4, 4]) # equal weights
    mixture_pmf(x, alpha=[1, 2], maxoctave=[4, 4], w=[1, 0]) # first component only
    mixture_rvs(1000, alpha=2, maxoctave=7, random_state=42)
"""

import logging
from typing import Optional, Union

import numpy as np

from pygambin.math.functions.gambin import gambin_fitness, nb_gambin_pmf

log = logging.getLogger(__name__)


def get_components(
    alpha: Union[float, np.ndarray],
    maxoctave: Union[int, np.ndarray],
    w: Optional[Union[float, np.ndarray]] = None,
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    r"""
    Check the mixture parameters and normalise the weights.

    Parameters
    ----------
    alpha
        Shape parameter of each component
    maxoctave
        Highest octave of each component
    w
        Component weights. `None` or a single value gives every component the
        weight :math:`1/C`, otherwise the weights are rescaled to sum to one.

    Returns
    -------
    alpha, maxoctave, w
        One dimensional arrays of equal length
    """
    alpha = np.atleast_1d(np.asarray(alpha, dtype=np.float64))
    maxoctave = np.atleast_1d(np.asarray(maxoctave))
    w = np.atleast_1d(np.asarray(1.0 if w is None else w, dtype=np.float64))

    if np.any(w < 0):
        raise ValueError("w must be non-negative")
    if len(maxoctave) != len(alpha):
        raise ValueError("alpha and maxoctave should be the same length")

    if len(w) == 1:
        w = np.full(len(alpha), 1 / len(alpha))
    elif len(w) != len(alpha):
        raise ValueError(f"w needs one weight per component, got {len(w)} weights")
    else:
        total = np.sum(w)
        if total == 0:
            raise ValueError("w must contain at least one positive weight")
        w = w / total

    log.debug(f"mixture of {len(alpha)} components with weights {w}")
    return alpha, maxoctave, w


def mixture_support(maxoctave: Union[int, np.ndarray]) -> np.ndarray:
    """The octaves ``0..max(maxoctave)`` on which a mixture is defined."""
    return np.arange(int(np.max(maxoctave)) + 1)


def _mixture_mass(x: np.ndarray, alpha, maxoctave, w) -> np.ndarray:
    res = np.zeros(x.shape, dtype=np.float64)
    for alpha_i, maxoctave_i, w_i in zip(alpha, maxoctave, w):
        res += w_i * nb_gambin_pmf(x, maxoctave_i, gambin_fitness(alpha_i))
    return res


def mixture_pmf(
    x: Union[int, np.ndarray],
    alpha: Union[float, np.ndarray],
    maxoctave: Union[int, np.ndarray],
    w: Optional[Union[float, np.ndarray]] = None,
    log: bool = False,
) -> Union[float, np.ndarray]:
    r"""
    Probability mass function of a GamBin mixture, summing to one over all
    octaves.

    .. math::
        pmf(k) = \sum_{i=1}^{C} w_i \, pmf_{GamBin}(k; \alpha_i, n_i)

    Parameters
    ----------
    x
        The octave(s) to evaluate
    alpha
        Shape parameter of each component
    maxoctave
        Highest octave of each component
    w
        Component weights, see :func:`get_components`
    log
        If true, return the log of the mixed probabilities

    Returns
    -------
    probabilities with the shape of `x`

    Raises
    ------
    ValueError
        If a weight is negative or `alpha` and `maxoctave` differ in length
    """
    alpha, maxoctave, w = get_components(alpha, maxoctave, w)

    x = np.asarray(x, dtype=np.float64)
    res = _mixture_mass(x.ravel(), alpha, maxoctave, w)

    if log:
        with np.errstate(divide="ignore"):
            res = np.log(res)
    return res.reshape(x.shape)[()]


def mixture_cdf(
    q: Union[float, np.ndarray],
    alpha: Union[float, np.ndarray],
    maxoctave: Union[int, np.ndarray],
    w: Optional[Union[float, np.ndarray]] = None,
    lower_tail: bool = True,
    log_p: bool = False,
) -> Union[float, np.ndarray]:
    r"""
    Cumulative distribution function of a GamBin mixture.

    The mass over the full support is complemented first if `lower_tail` is
    false, then cumulatively summed and optionally logged. Each `q` is
    truncated to an octave and looked up in the cumulative array; octaves
    outside ``0..max(maxoctave)`` give NaN.

    Parameters
    ----------
    q
        The quantile(s) to evaluate
    alpha
        Shape parameter of each component
    maxoctave
        Highest octave of each component
    w
        Component weights, see :func:`get_components`
    lower_tail
        If false, the masses are replaced by :math:`1 - pmf` before summing
    log_p
        If true, return the log of the cumulative probabilities
    """
    alpha, maxoctave, w = get_components(alpha, maxoctave, w)
    support = mixture_support(maxoctave)

    probs = _mixture_mass(support.astype(np.float64), alpha, maxoctave, w)
    if not lower_tail:
        probs = 1 - probs

    cum_probs = np.cumsum(probs)
    if log_p:
        with np.errstate(divide="ignore"):
            cum_probs = np.log(cum_probs)

    q = np.asarray(q, dtype=np.float64)
    idx = np.floor(q.ravel())
    in_range = (idx >= 0) & (idx <= support[-1])

    res = np.full(idx.shape, np.nan)
    res[in_range] = cum_probs[idx[in_range].astype(np.int64)]
    return res.reshape(q.shape)[()]


def mixture_ppf(
    p: Union[float, np.ndarray],
    alpha: Union[float, np.ndarray],
    maxoctave: Union[int, np.ndarray],
    w: Optional[Union[float, np.ndarray]] = None,
    lower_tail: bool = True,
    log_p: bool = False,
) -> Union[float, np.ndarray]:
    r"""
    Quantile function of a GamBin mixture.

    The cumulative masses, led by a zero, split :math:`[0, 1]` into the
    half-open buckets :math:`(b_k, b_{k+1}]`, one per octave. The octave
    returned for `p` is the bucket containing it, i.e. the smallest octave
    whose cumulative probability is at least `p`. Probabilities outside every
    bucket, such as ``p = 0``, give NaN.

    Parameters
    ----------
    p
        The probabilities to invert
    alpha
        Shape parameter of each component
    maxoctave
        Highest octave of each component
    w
        Component weights, see :func:`get_components`
    lower_tail
        If false, the masses are replaced by :math:`1 - pmf` before summing
    log_p
        If true, the bucket boundaries are built from log masses

    Returns
    -------
    octaves
        Float array with the shape of `p`, as for scipy's discrete ``ppf``
    """
    alpha, maxoctave, w = get_components(alpha, maxoctave, w)
    support = mixture_support(maxoctave)

    probs = np.concatenate(
        ([0.0], _mixture_mass(support.astype(np.float64), alpha, maxoctave, w))
    )
    if not lower_tail:
        probs = 1 - probs
    if log_p:
        with np.errstate(divide="ignore"):
            probs = np.log(probs)

    boundaries = np.sort(np.cumsum(probs))

    p = np.asarray(p, dtype=np.float64)
    flat_p = p.ravel()
    if lower_tail and not log_p:
        # the cumulative sum may stop just short of 1, p = 1 still belongs to
        # the last octave with positive mass
        flat_p = np.where(flat_p <= 1, np.minimum(flat_p, boundaries[-1]), flat_p)

    bucket = np.searchsorted(boundaries, flat_p, side="left")
    in_range = (bucket > 0) & (bucket < len(boundaries))

    res = np.full(bucket.shape, np.nan)
    res[in_range] = bucket[in_range] - 1
    return res.reshape(p.shape)[()]


def mixture_rvs(
    n: int,
    alpha: Union[float, np.ndarray],
    maxoctave: Union[int, np.ndarray],
    w: Optional[Union[float, np.ndarray]] = None,
    random_state: Optional[Union[int, np.random.Generator]] = None,
) -> np.ndarray:
    """
    Draw `n` octaves, with replacement, from a GamBin mixture.

    Parameters
    ----------
    n
        Number of draws
    alpha
        Shape parameter of each component
    maxoctave
        Highest octave of each component
    w
        Component weights, see :func:`get_components`
    random_state
        Seed or :class:`numpy.random.Generator` passed to
        :func:`numpy.random.default_rng`
    """
    alpha, maxoctave, w = get_components(alpha, maxoctave, w)
    support = mixture_support(maxoctave)

    probs = _mixture_mass(support.astype(np.float64), alpha, maxoctave, w)
    rng = np.random.default_rng(random_state)
    return rng.choice(support, size=int(n), replace=True, p=probs / np.sum(probs))


def mixture_rvs_like(
    data: np.ndarray,
    alpha: Union[float, np.ndarray],
    maxoctave: Union[int, np.ndarray],
    w: Optional[Union[float, np.ndarray]] = None,
    random_state: Optional[Union[int, np.random.Generator]] = None,
) -> np.ndarray:
    """
    Draw as many octaves as there are entries in `data`. See
    :func:`mixture_rvs`.
    """
    return mixture_rvs(len(data), alpha, maxoctave, w=w, random_state=random_state)


def expected_species(
    alpha: Union[float, np.ndarray],
    maxoctave: Union[int, np.ndarray],
    total_species: float,
    w: Optional[Union[float, np.ndarray]] = None,
) -> np.ndarray:
    """
    Expected number of species in each octave ``0..max(maxoctave)`` for a
    community of `total_species` species, for comparison with an empirical
    octave table.
    """
    alpha, maxoctave, w = get_components(alpha, maxoctave, w)
    support = mixture_support(maxoctave)
    return total_species * _mixture_mass(
        support.astype(np.float64), alpha, maxoctave, w
    )
