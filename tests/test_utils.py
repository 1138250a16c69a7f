import logging
import sys

import pytest
from lazyseq import LazyCollection, core
from lazyseq.utils import (
    setup_logging,
    measure_performance,
    get_performance_summary,
    clear_performance_metrics,
)


class TestPerformanceHelpers:
    """Test performance measurement of lazy operations"""

    def test_measure_successful_operation(self, clean_metrics):
        """Test that a successful call is timed and recorded"""
        info = measure_performance("concat", lambda: list(core.concat([1, 2], [3])))

        assert info["success"] is True
        assert info["operation"] == "concat"
        assert info["result"] == [1, 2, 3]
        assert info["result_size"] == 3
        assert info["execution_time_ms"] >= 0
        assert get_performance_summary()["runs"] == 1
        assert get_performance_summary("concat")["runs"] == 1

    def test_measure_failing_operation(self, clean_metrics):
        """Test that a failing call is recorded and re-raised"""
        with pytest.raises(ZeroDivisionError):
            measure_performance("bad_map", lambda: list(core.map([0], lambda i, v: 1 / v)))

        summary = get_performance_summary("bad_map")
        assert summary["runs"] == 1
        assert summary["failures"] == 1

    def test_metrics_are_grouped_by_operation(self, clean_metrics):
        """Test the per-operation breakdown and selective clearing"""
        measure_performance("reverse", lambda: list(core.reverse([1, 2, 3])))
        measure_performance("reverse", lambda: list(core.reverse([4, 5])))
        measure_performance("filter", lambda: list(core.filter([1, 2], lambda v: v > 1)))

        summary = get_performance_summary()
        assert summary["runs"] == 3
        assert summary["by_operation"]["reverse"]["runs"] == 2
        assert summary["by_operation"]["filter"]["runs"] == 1

        clear_performance_metrics("reverse")
        assert get_performance_summary("reverse")["runs"] == 0
        assert get_performance_summary()["runs"] == 1

    def test_memory_scales_with_output(self, clean_metrics):
        """Test that taking a few items from a huge range stays small"""
        info = measure_performance(
            "take_from_large",
            lambda: LazyCollection(range(10_000_000)).map(lambda i, x: x * 2).take(10).to_list(),
        )
        assert info["result"] == [0, 2, 4, 6, 8, 10, 12, 14, 16, 18]
        assert info["memory_usage_mb"] < 5, f"Used {info['memory_usage_mb']:.2f} MB"

    def test_empty_summary(self, clean_metrics):
        """Test the summary with nothing recorded"""
        summary = get_performance_summary()
        assert summary["runs"] == 0
        assert summary["avg_time_ms"] == 0.0
        assert summary["by_operation"] == {}


class TestLogging:
    """Test logging setup and debug output"""

    def test_setup_logging_is_idempotent(self):
        """Test that repeated setup does not stack handlers"""
        logger = setup_logging(logging.DEBUG)
        try:
            count = len(logger.handlers)
            setup_logging("INFO")
            assert logger.name == "lazyseq"
            assert len(logger.handlers) == count
            assert logger.level == logging.INFO
            stdout_handlers = [h for h in logger.handlers if isinstance(h, logging.StreamHandler) and h.stream is sys.stdout]
            assert len(stdout_handlers) == 1
        finally:
            for handler in list(logger.handlers):
                logger.removeHandler(handler)
            logger.setLevel(logging.NOTSET)

    def test_shuffle_logs_debug(self, caplog):
        """Test that shuffling reports its size at debug level"""
        caplog.set_level(logging.DEBUG, logger="lazyseq")
        list(core.shuffle([1, 2, 3]))
        assert "Shuffling 3 elements in place" in caplog.text
