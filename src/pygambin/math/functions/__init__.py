r"""
GamBin distribution functions for the pygambin package.

The single-component distribution is implemented by vectorized numbafied
functions that take an array of octaves as an input:

1. :func:`nb_gambin_pmf(x, maxoctave, fitness)`
Returns the mass function, normalized on the support ``0..maxoctave``

2. :func:`nb_gambin_cdf(x, maxoctave, fitness)`
Returns the CDF derived from the mass function

3. :func:`nb_gambin_scaled_pmf(x, area, maxoctave, fitness)`
Returns area*nb_gambin_pmf, the expected number of species per octave

4. :func:`nb_gambin_scaled_cdf(x, area, maxoctave, fitness)`
Returns area*nb_gambin_cdf

NOTE: the `fitness` argument is the array of gamma interval weights from :func:`gambin_fitness(alpha)`.
It is computed with scipy outside of the jitted code, so the numba functions never see `alpha` directly.

These functions are packaged into :class:`GambinGen`, a subclass of scipy's rv_discrete, so that the
distribution also has access to scipy methods such as random sampling, ppf and moments. The class adds
the fast :func:`get_pmf`, :func:`get_cdf`, :func:`pmf_ext`, :func:`cdf_ext` and :func:`required_args`.

Mixtures of several components are handled in :mod:`.gambin_mixture`, which provides the mass
function, the cumulative distribution, the quantile function and random draws for weighted sums
of GamBin distributions with possibly different maximum octaves.
"""
