import numpy as np
import pytest

from pygambin.math.functions.gambin import gambin_single_pmf
from pygambin.math.functions.gambin_mixture import (
    expected_species,
    get_components,
    mixture_cdf,
    mixture_pmf,
    mixture_ppf,
    mixture_rvs,
    mixture_rvs_like,
    mixture_support,
)


def test_get_components():
    alpha, maxoctave, w = get_components(2, 7)
    assert np.array_equal(alpha, [2])
    assert np.array_equal(maxoctave, [7])
    assert np.array_equal(w, [1])

    _, _, w = get_components([1, 2], [4, 4])
    assert np.allclose(w, [0.5, 0.5])

    _, _, w = get_components([1, 2, 3], [4, 4, 5], w=7)
    assert np.allclose(w, [1 / 3, 1 / 3, 1 / 3])

    _, _, w = get_components([1, 2], [4, 4], w=[3, 1])
    assert np.allclose(w, [0.75, 0.25])


def test_negative_weight():
    with pytest.raises(ValueError, match="non-negative"):
        mixture_pmf([0, 1], alpha=[1, 2], maxoctave=[4, 4], w=[1, -0.5])
    with pytest.raises(ValueError, match="non-negative"):
        mixture_cdf([0, 1], alpha=[1, 2], maxoctave=[4, 4], w=[-1, 2])


def test_length_mismatch():
    with pytest.raises(ValueError, match="same length"):
        mixture_pmf([0, 1], alpha=[1, 2], maxoctave=[4])
    with pytest.raises(ValueError, match="same length"):
        mixture_rvs(10, alpha=[1, 2, 3], maxoctave=[4, 4])


def test_bad_weight_vector():
    with pytest.raises(ValueError):
        mixture_pmf([0, 1], alpha=[1, 2], maxoctave=[4, 4], w=[1, 1, 1])
    with pytest.raises(ValueError):
        mixture_pmf([0, 1], alpha=[1, 2], maxoctave=[4, 4], w=[0, 0])


def test_pmf_sums_to_one(mixture_pars):
    support = mixture_support(mixture_pars["maxoctave"])
    assert np.array_equal(support, np.arange(11))

    y = mixture_pmf(support, **mixture_pars)
    assert np.all(y >= 0)
    assert np.isclose(np.sum(y), 1, rtol=1e-9)


def test_pmf_single_component():
    y = mixture_pmf(np.arange(0, 6), alpha=1, maxoctave=4)
    assert y[5] == 0
    assert np.allclose(y, gambin_single_pmf(np.arange(0, 6), 1, 4))


def test_pmf_zero_weight_component():
    x = np.arange(0, 6)
    y = mixture_pmf(x, alpha=[1, 2], maxoctave=[4, 4], w=[1, 0])
    assert np.allclose(y, gambin_single_pmf(x, 1, 4), rtol=1e-12)


def test_pmf_equal_weights():
    x = np.arange(0, 6)
    y = mixture_pmf(x, alpha=[1, 2], maxoctave=[4, 4])
    expected = 0.5 * gambin_single_pmf(x, 1, 4) + 0.5 * gambin_single_pmf(x, 2, 4)
    assert np.allclose(y, expected, rtol=1e-12)


def test_pmf_different_maxoctaves():
    x = np.arange(0, 9)
    y = mixture_pmf(x, alpha=[1, 2], maxoctave=[3, 8], w=[0.4, 0.6])
    assert np.allclose(y[4:], 0.6 * gambin_single_pmf(x[4:], 2, 8))
    assert np.isclose(np.sum(y), 1)


def test_pmf_log():
    x = np.arange(0, 6)
    y = mixture_pmf(x, alpha=[1, 2], maxoctave=[4, 4])
    log_y = mixture_pmf(x, alpha=[1, 2], maxoctave=[4, 4], log=True)
    assert np.allclose(log_y[:5], np.log(y[:5]))
    assert log_y[5] == -np.inf


def test_pmf_shape():
    assert np.ndim(mixture_pmf(3, alpha=2, maxoctave=7)) == 0
    y = mixture_pmf(np.arange(8).reshape(2, 4), alpha=2, maxoctave=7)
    assert y.shape == (2, 4)


def test_cdf(mixture_pars):
    support = mixture_support(mixture_pars["maxoctave"])
    y = mixture_cdf(support, **mixture_pars)

    assert np.all(np.diff(y) >= 0)
    assert np.isclose(y[-1], 1)
    assert np.allclose(y, np.cumsum(mixture_pmf(support, **mixture_pars)))

    # fractional quantiles are truncated to the octave below
    assert mixture_cdf(2.7, **mixture_pars) == y[2]


def test_cdf_out_of_range():
    y = mixture_cdf([-1, 0, 4, 5], alpha=1, maxoctave=4)
    assert np.isnan(y[0])
    assert np.isnan(y[3])
    assert np.isclose(y[2], 1)


def test_cdf_upper_tail_and_log():
    x = np.arange(0, 5)
    probs = mixture_pmf(x, alpha=1, maxoctave=4)

    y = mixture_cdf(x, alpha=1, maxoctave=4, lower_tail=False)
    assert np.allclose(y, np.cumsum(1 - probs))

    log_y = mixture_cdf(x, alpha=1, maxoctave=4, log_p=True)
    assert np.allclose(log_y, np.log(np.cumsum(probs)))


def test_ppf_round_trip(mixture_pars):
    support = mixture_support(mixture_pars["maxoctave"])
    p = mixture_cdf(support, **mixture_pars)
    assert np.array_equal(mixture_ppf(p, **mixture_pars), support)


def test_ppf_buckets():
    pars = {"alpha": 2, "maxoctave": 7}
    cum_probs = mixture_cdf(np.arange(8), **pars)

    # buckets are open on the left and closed on the right
    assert mixture_ppf(cum_probs[2], **pars) == 2
    assert mixture_ppf(np.nextafter(cum_probs[2], 1), **pars) == 3
    assert mixture_ppf(cum_probs[0] / 2, **pars) == 0

    assert np.isnan(mixture_ppf(0, **pars))
    assert mixture_ppf(1, **pars) == 7
    assert np.isnan(mixture_ppf(1.5, **pars))


def test_ppf_top_octave_with_zero_mass_tail():
    # the cumulative total stops short of 1 and trailing octaves carry no mass
    pars = {"alpha": [1, 2], "maxoctave": [2, 9], "w": [1, 0]}
    assert mixture_ppf(1, **pars) == 2
    assert mixture_pmf(2, **pars) > 0

    for alpha in [0.3, 1, 2.5, 5]:
        for maxoctave in [3, 6, 9, 14]:
            y = mixture_ppf(
                1, alpha=[alpha, 2], maxoctave=[maxoctave, maxoctave + 5], w=[1, 0]
            )
            assert y == maxoctave


def test_ppf_upper_tail():
    pars = {"alpha": 2, "maxoctave": 7}
    probs = mixture_pmf(np.arange(8), **pars)
    boundaries = np.cumsum(1 - np.concatenate(([0.0], probs)))
    assert boundaries[0] == 1

    # every boundary is at least 1, no probability in [0, 1] falls in a bucket
    y = mixture_ppf([0, 0.3, 0.9, 1], lower_tail=False, **pars)
    assert np.all(np.isnan(y))

    assert mixture_ppf(boundaries[3], lower_tail=False, **pars) == 2
    assert mixture_ppf(np.nextafter(boundaries[3], 10), lower_tail=False, **pars) == 3
    assert np.isnan(mixture_ppf(boundaries[-1] + 1, lower_tail=False, **pars))


def test_ppf_log():
    pars = {"alpha": 2, "maxoctave": 7}
    probs = mixture_pmf(np.arange(8), **pars)
    with np.errstate(divide="ignore"):
        boundaries = np.cumsum(np.log(np.concatenate(([0.0], probs))))
    assert np.all(np.isneginf(boundaries))

    y = mixture_ppf([-np.inf, np.log(0.5), 0, 0.5, 1], log_p=True, **pars)
    assert np.all(np.isnan(y))


def test_ppf_shape():
    assert np.ndim(mixture_ppf(0.5, alpha=2, maxoctave=7)) == 0
    y = mixture_ppf([[0.1, 0.5], [0.9, 1.0]], alpha=2, maxoctave=7)
    assert y.shape == (2, 2)
    assert np.all(np.diff(y.ravel()) >= 0)


def test_rvs_frequencies(rng):
    n = 1_000_000
    draws = mixture_rvs(n, alpha=2, maxoctave=7, random_state=rng)
    assert len(draws) == n
    assert np.all((draws >= 0) & (draws <= 7))

    freq = np.bincount(draws, minlength=8) / n
    assert np.allclose(freq, mixture_pmf(np.arange(8), alpha=2, maxoctave=7), atol=3e-3)


def test_rvs_reproducible(mixture_pars):
    first = mixture_rvs(50, random_state=7, **mixture_pars)
    second = mixture_rvs(50, random_state=7, **mixture_pars)
    assert np.array_equal(first, second)


def test_rvs_like(rng):
    data = np.array([3, 1, 4, 1, 5])
    draws = mixture_rvs_like(data, alpha=[1, 2], maxoctave=[4, 6], random_state=rng)
    assert len(draws) == len(data)
    assert np.all((draws >= 0) & (draws <= 6))


def test_rvs_zero_weight(rng):
    draws = mixture_rvs(1000, alpha=[1, 2], maxoctave=[2, 9], w=[1, 0], random_state=rng)
    assert np.max(draws) <= 2


def test_expected_species(mixture_pars):
    total = 200
    expected = expected_species(total_species=total, **mixture_pars)
    support = mixture_support(mixture_pars["maxoctave"])

    assert len(expected) == len(support)
    assert np.isclose(np.sum(expected), total)
    assert np.allclose(expected, total * mixture_pmf(support, **mixture_pars))
