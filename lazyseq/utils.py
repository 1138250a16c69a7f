"""
Logging setup and performance helpers for lazyseq.

The measurement helpers time a call and track its peak memory so the demo and
the tests can show that lazy pipelines only do the work their consumer asks for.
"""

import gc
import logging
import sys
import time
import tracemalloc
from typing import Any, Dict, List, Optional, Union

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - [%(funcName)s:%(lineno)d] - %(message)s'

_handler: Optional[logging.Handler] = None


def setup_logging(level: Union[int, str] = logging.INFO) -> logging.Logger:
    """Attach a stdout handler to the lazyseq logger."""
    global _handler
    root = logging.getLogger('lazyseq')
    root.setLevel(level)
    if _handler is None or _handler not in root.handlers:
        _handler = logging.StreamHandler(sys.stdout)
        _handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(_handler)
    return root


# Measurements grouped by operation name
_performance_metrics: Dict[str, List[Dict[str, Any]]] = {}


def measure_performance(operation_name: str, func, *args, **kwargs) -> Dict[str, Any]:
    """Run func under a timer and tracemalloc, recording the result under operation_name."""
    tracemalloc.start()
    gc.collect()
    start_time = time.perf_counter()
    performance_info: Dict[str, Any] = {"operation": operation_name}

    try:
        result = func(*args, **kwargs)
    except Exception as e:
        performance_info.update(success=False, error=str(e))
        raise
    else:
        performance_info.update(
            success=True,
            result=result,
            result_size=len(result) if hasattr(result, "__len__") else None,
        )
        return performance_info
    finally:
        _, peak = tracemalloc.get_traced_memory()
        tracemalloc.stop()
        performance_info["execution_time_ms"] = (time.perf_counter() - start_time) * 1000
        performance_info["memory_usage_mb"] = peak / 1024 / 1024
        performance_info["timestamp"] = time.time()
        _performance_metrics.setdefault(operation_name, []).append(performance_info)


def _summarize(runs: List[Dict[str, Any]]) -> Dict[str, Any]:
    total_time = sum(r["execution_time_ms"] for r in runs)
    peak_memory = max((r["memory_usage_mb"] for r in runs), default=0.0)
    return {
        "runs": len(runs),
        "failures": sum(1 for r in runs if not r["success"]),
        "total_time_ms": total_time,
        "avg_time_ms": total_time / len(runs) if runs else 0.0,
        "peak_memory_mb": peak_memory,
    }


def get_performance_summary(operation_name: Optional[str] = None) -> Dict[str, Any]:
    """
    Summarize recorded measurements.

    With an operation name, returns that operation's summary. Otherwise returns
    the overall summary plus a per-operation breakdown under "by_operation".
    """
    if operation_name is not None:
        return _summarize(_performance_metrics.get(operation_name, []))

    all_runs = [r for runs in _performance_metrics.values() for r in runs]
    summary = _summarize(all_runs)
    summary["by_operation"] = {name: _summarize(runs) for name, runs in _performance_metrics.items()}
    return summary


def clear_performance_metrics(operation_name: Optional[str] = None) -> None:
    """Drop recorded measurements, for one operation or all of them."""
    if operation_name is None:
        _performance_metrics.clear()
    else:
        _performance_metrics.pop(operation_name, None)
