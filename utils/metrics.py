"""utils/metrics.py"""
import numpy as np
import pandas as pd


def is_well_defined(value):
    """有限值（非NaN、非inf）"""
    return bool(np.isfinite(value))


def _well_defined(series):
    values = np.asarray(series.values, dtype=float)
    return np.isfinite(values)


def calculate_data_range(series):
    """
    计算采样函数的数据范围
    Args:
        series: f(x)的Series，index为x
    Returns:
        (min_x, max_x, min_y, max_y)，只统计f(x)有限的点；没有这样的点时全为0
    """
    if not isinstance(series, pd.Series):
        series = pd.Series(series)

    mask = _well_defined(series)
    if not mask.any():
        return 0.0, 0.0, 0.0, 0.0

    xs = np.asarray(series.index, dtype=float)[mask]
    ys = np.asarray(series.values, dtype=float)[mask]
    return float(xs.min()), float(xs.max()), float(ys.min()), float(ys.max())


def count_undefined(series):
    """NaN或inf的点数"""
    if len(series) == 0:
        return 0
    return int((~_well_defined(series)).sum())
