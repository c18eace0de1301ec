"""Unit tests for Little's law measurements."""

import math

import pytest

from usl.errors import InvalidArgumentError
from usl.measurement import Measurement


def test_concurrency_and_throughput_derives_latency():
    m = Measurement.of_concurrency_and_throughput(3, 5)
    assert math.isclose(m.concurrency, 3)
    assert math.isclose(m.throughput, 5)
    assert math.isclose(m.latency, 0.6)


def test_concurrency_and_latency_derives_throughput():
    assert math.isclose(Measurement.of_concurrency_and_latency(3, 0.6).throughput, 5)
    assert math.isclose(Measurement.of_concurrency_and_latency([3, 0.6]).throughput, 5)


def test_throughput_and_latency_derives_concurrency():
    assert math.isclose(Measurement.of_throughput_and_latency(5, 0.6).concurrency, 3)
    assert math.isclose(Measurement.of_throughput_and_latency((5, 0.6)).concurrency, 3)


def test_throughput_and_concurrency_derives_latency():
    assert math.isclose(Measurement.of_throughput_and_concurrency(5, 3).latency, 0.6)


def test_entry_points_agree():
    a = Measurement.of_concurrency_and_throughput(7, 123.4)
    b = Measurement.of_concurrency_and_latency(7, a.latency)
    c = Measurement.of_throughput_and_latency(123.4, a.latency)
    for other in (b, c):
        assert math.isclose(a.concurrency, other.concurrency, rel_tol=1e-12)
        assert math.isclose(a.throughput, other.throughput, rel_tol=1e-12)
        assert math.isclose(a.latency, other.latency, rel_tol=1e-12)


def test_little_law_holds():
    for n, x in [(1, 955.16), (12, 8646.7), (0.5, 3.0)]:
        m = Measurement.of_concurrency_and_throughput(n, x)
        assert m.latency == n / x
        assert math.isclose(m.concurrency, m.throughput * m.latency)


@pytest.mark.parametrize(
    "factory",
    [
        Measurement.of_concurrency_and_throughput,
        Measurement.of_concurrency_and_latency,
        Measurement.of_throughput_and_latency,
        Measurement.of_throughput_and_concurrency,
    ],
)
def test_bad_points_raise(factory):
    with pytest.raises(InvalidArgumentError):
        factory([0.0, 0.0, 0.0])
    with pytest.raises(InvalidArgumentError):
        factory([1.0])
    with pytest.raises(InvalidArgumentError):
        factory(1.0)
    with pytest.raises(InvalidArgumentError):
        factory([1, 2], 3)


def test_measurement_is_immutable_value():
    m = Measurement.of_concurrency_and_throughput(3, 5)
    assert m == Measurement.of_concurrency_and_throughput((3, 5))
    assert m.as_dict() == {"concurrency": 3.0, "throughput": 5.0, "latency": 0.6}
    with pytest.raises(AttributeError):
        m.concurrency = 4  # type: ignore[misc]
