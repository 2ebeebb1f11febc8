"""Tests for normdiffkit.scan."""

import logging

import numpy as np
import pytest
from numpy.testing import assert_allclose

import normdiffkit.scan as scan_module
from normdiffkit.scan import (
    ScanConfig,
    ScanRecord,
    best_approximations,
    format_record,
    make_scaled_buffer,
    problem_sizes,
    scaled_difference,
    scan_difference_quotients,
    step_sizes,
)


def test_make_scaled_buffer_values(float_dtype):
    """Tests that the buffer holds (i + 1) / gamma in the requested dtype."""
    x = make_scaled_buffer(5, 100.0, float_dtype)
    assert x.dtype == np.dtype(float_dtype)
    assert x.shape == (5,)
    assert_allclose(x, np.array([1, 2, 3, 4, 5]) / 100.0, rtol=1e-6)


def test_problem_sizes_stop_at_capacity():
    """Tests that problem sizes are powers of ten within the capacity."""
    assert list(problem_sizes(1024)) == [1, 10, 100, 1000]
    assert list(problem_sizes(1000)) == [1, 10, 100, 1000]
    assert list(problem_sizes(1)) == [1]


@pytest.mark.parametrize(
    "dtype, last_k",
    [(np.float64, 324), (np.float32, 46)],
)
def test_step_sizes_end_at_first_zero(dtype, last_k):
    """Tests that steps shrink geometrically until 10**-k rounds to zero."""
    steps = list(step_sizes(dtype))
    ks = [k for k, _ in steps]
    hs = [h for _, h in steps]
    assert ks == list(range(len(steps)))
    assert ks[-1] == last_k
    assert hs[0] == 1.0
    assert hs[-1] == 0.0
    assert all(h > 0.0 for h in hs[:-1])
    assert all(h.dtype == np.dtype(dtype) for h in hs)


def test_scaled_difference_unit_step_and_reset():
    """Tests the hand-computed difference for gamma = 100, n = 1, h = 1."""
    x = make_scaled_buffer(4, 100.0)
    delta = scaled_difference(x, 1, np.float64(1.0), 100.0)
    # (0.02**2 - 0.01**2) * 100**2
    assert_allclose(delta, 3.0, rtol=1e-12)
    assert x[0] == np.float64(1.0) / np.float64(100.0)


def test_scaled_difference_independent_of_n_at_unit_step():
    """Tests that only the first component contributes to the difference."""
    x = make_scaled_buffer(1024, 100.0)
    for n in (1, 10, 100, 1000):
        assert_allclose(scaled_difference(x, n, np.float64(1.0), 100.0), 3.0, rtol=1e-8)


def test_first_record_matches_hand_computation():
    """Tests that the scan starts with 'k: 0 n: 1 err 1.000000'."""
    first = next(scan_difference_quotients(ScanConfig(gamma=100.0)))
    assert first.kind == "error"
    assert (first.k, first.n) == (0, 1)
    assert_allclose(first.err, 1.0, atol=1e-9)
    assert format_record(first) == "k: 0 n: 1 err 1.000000"


def test_scan_defaults_to_double_precision():
    """Tests that scanning without a config uses the documented defaults."""
    records = list(scan_difference_quotients())
    assert records == list(scan_difference_quotients(ScanConfig()))
    assert [r.n for r in records if r.k == 0] == [1, 10, 100, 1000]


@pytest.mark.parametrize("dtype", [np.float64, np.float32])
def test_scan_terminates_with_difference_underflow_at_n_one(dtype):
    """Tests that the scan halts within bounded k on a difference underflow."""
    records = list(scan_difference_quotients(ScanConfig(dtype=dtype)))
    last = records[-1]
    assert last.kind == "difference_underflow"
    assert last.n == 1
    assert last.k <= 400
    assert format_record(last) == f"difference underflown for k: {last.k} n: 1"
    # no record follows the final underflow and none precedes it at n=1
    assert all(r.kind == "error" or r.n > 1 for r in records[:-1])


def test_scan_double_precision_underflows_near_machine_epsilon():
    """Tests that the n = 1 difference vanishes once 1 + h rounds to 1."""
    last = list(scan_difference_quotients())[-1]
    assert last.k == 16


def test_scan_continues_after_underflow_at_larger_n():
    """Tests that an underflow for n > 1 only ends the sweep over n."""
    records = list(scan_difference_quotients())
    partial = [r for r in records[:-1] if r.kind == "difference_underflow"]
    assert partial, "expected an underflow at n > 1 before the final one"
    first = partial[0]
    assert first.n > 1
    assert any(r.k == first.k + 1 and r.n == 1 for r in records)
    # nothing larger than the underflowing n is evaluated for that k
    assert all(r.n < first.n for r in records if r.k == first.k and r is not first)


def test_scan_error_grows_when_step_is_tiny():
    """Tests that cancellation degrades the quotient as h shrinks."""
    records = [r for r in scan_difference_quotients() if r.kind == "error" and r.n == 1]
    errs = {r.k: abs(r.err) for r in records}
    best = min(errs.values())
    assert best < 1e-6
    assert errs[max(errs)] > best


def test_scan_without_prescaling_starts_at_same_error():
    """Tests that gamma = 1 gives the same first error."""
    first = next(scan_difference_quotients(ScanConfig(gamma=1.0)))
    assert_allclose(first.err, 1.0, atol=1e-12)


def test_scan_with_reverse_summation():
    """Tests that the summation order is passed through the scan."""
    records = list(scan_difference_quotients(ScanConfig(summation="reverse")))
    assert_allclose(records[0].err, 1.0, atol=1e-9)
    assert records[-1].n == 1


def test_scan_reports_step_underflow(monkeypatch, caplog):
    """Tests that the scan ends with a step underflow when h reaches zero."""
    monkeypatch.setattr(
        scan_module,
        "scaled_difference",
        lambda x, n, h, gamma, summation: h,
    )
    with caplog.at_level(logging.INFO, logger="normdiffkit"):
        records = list(scan_difference_quotients(ScanConfig(capacity=1)))
    last = records[-1]
    assert last == ScanRecord("step_underflow", 324)
    assert format_record(last) == "underflow for 10^-324"
    assert len(records) == 325
    assert all(r.err == -1.0 for r in records[:-1])
    assert any("underflows" in r.message for r in caplog.records)


def test_scan_logs_stop_reason(caplog):
    """Tests that the final difference underflow is logged at INFO level."""
    with caplog.at_level(logging.INFO, logger="normdiffkit"):
        list(scan_difference_quotients())
    assert any("stopping scan" in r.message for r in caplog.records)


def test_scan_config_warns_on_small_capacity(caplog):
    """Tests that a capacity below ten logs a warning."""
    with caplog.at_level(logging.WARNING, logger="normdiffkit"):
        ScanConfig(capacity=5)
    assert any(r.levelname == "WARNING" for r in caplog.records)
    assert any("n=1" in r.message for r in caplog.records)


@pytest.mark.parametrize(
    "kwargs, exc",
    [
        ({"capacity": 0}, ValueError),
        ({"gamma": 0.0}, ValueError),
        ({"gamma": float("inf")}, ValueError),
        ({"dtype": np.int32}, TypeError),
        ({"summation": "sideways"}, ValueError),
    ],
)
def test_scan_config_rejects_invalid_settings(kwargs, exc):
    """Tests that invalid scan settings raise on construction."""
    with pytest.raises(exc):
        ScanConfig(**kwargs)


def test_format_record_variants():
    """Tests the three printed line formats."""
    assert format_record(ScanRecord("error", 3, 100, -0.25)) == "k: 3 n: 100 err -0.250000"
    assert format_record(ScanRecord("difference_underflow", 9, 1000)) == (
        "difference underflown for k: 9 n: 1000"
    )
    assert format_record(ScanRecord("step_underflow", 324)) == "underflow for 10^-324"


def test_format_record_rejects_unknown_kind():
    """Tests that an unknown record kind raises ValueError."""
    with pytest.raises(ValueError):
        format_record(ScanRecord("overflow", 0))


def test_best_approximations_picks_smallest_error_per_n():
    """Tests that the best step is selected independently for each n."""
    records = [
        ScanRecord("error", 0, 1, 1.0),
        ScanRecord("error", 0, 10, 1.0),
        ScanRecord("error", 1, 1, 0.1),
        ScanRecord("error", 1, 10, -0.5),
        ScanRecord("difference_underflow", 2, 10),
        ScanRecord("error", 2, 1, -0.1),
        ScanRecord("difference_underflow", 3, 1),
    ]
    best = best_approximations(records)
    assert set(best) == {1, 10}
    assert best[1] == ScanRecord("error", 1, 1, 0.1)
    assert best[10].k == 1


def test_best_approximations_on_real_scan():
    """Tests that the best double-precision step for n = 1 is far below 1e-6."""
    best = best_approximations(scan_difference_quotients())
    assert set(best) <= {1, 10, 100, 1000}
    assert abs(best[1].err) < 1e-6
    assert 5 <= best[1].k <= 10
