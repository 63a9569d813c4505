import logging
from collections import OrderedDict
from typing import Optional, Tuple, Union

import numpy as np
import pandas as pd

from config.config import SAMPLING_CONFIG
from core import CompiledFunction, FunctionParser
from utils.metrics import calculate_data_range, is_well_defined

logger = logging.getLogger(__name__)


def get_data_size(compiled: CompiledFunction, x0: float, x1: float, dx: float) -> int:
    """
    Number of points at which ``compiled`` is evaluated over [x0..x1] with step dx.

    0 for an invalid function. 1 when dx is zero or points away from x1, so
    only x0 is evaluated.

    Raises:
        ValueError: the step count (x1 - x0) / dx overflows
    """
    if not compiled.is_valid:
        return 0
    n = 1
    if dx != 0 and ((x0 < x1 and dx > 0) or (x0 > x1 and dx < 0)):
        steps = (x1 - x0) / dx
        if not is_well_defined(steps):
            raise ValueError(f"Sampling [{x0}, {x1}] with dx={dx} needs too many points")
        n += int(np.rint(steps))
    return n


def sample_points(x0: float, dx: float, n: int) -> np.ndarray:
    """x(i) = x0 + i*dx for i in [0, n)"""
    return x0 + np.arange(n, dtype=np.float64) * dx


class FunctionSampler:
    """Compiles definitions through a bounded LRU cache and samples them over a range."""

    def __init__(self, cache_size=None, max_points=None):
        self.cache_size = SAMPLING_CONFIG["cache_size"] if cache_size is None else cache_size
        self.max_points = SAMPLING_CONFIG["max_points"] if max_points is None else max_points
        if self.cache_size < 1:
            raise ValueError(f"cache_size must be positive, got {self.cache_size}")
        if self.max_points < 1:
            raise ValueError(f"max_points must be at least 1, got {self.max_points}")
        self._compiled_cache = OrderedDict()
        self._cache_hits = 0
        self._cache_misses = 0

    def _manage_cache(self):
        """管理缓存大小"""
        while len(self._compiled_cache) > self.cache_size:
            # 删除最旧的条目
            self._compiled_cache.popitem(last=False)

    def clear_cache(self):
        """清空缓存（供外部调用）"""
        self._compiled_cache.clear()
        logger.info(f"Cache cleared. Hits: {self._cache_hits}, Misses: {self._cache_misses}")
        self._cache_hits = 0
        self._cache_misses = 0

    def compile(self, definition: str) -> CompiledFunction:
        if definition in self._compiled_cache:
            self._compiled_cache.move_to_end(definition)
            self._cache_hits += 1
            return self._compiled_cache[definition]

        self._cache_misses += 1
        compiled = FunctionParser.compile(definition)
        if not compiled.is_valid:
            logger.warning(f"Invalid function '{definition[:50]}': {compiled.describe_error()}")
        self._compiled_cache[definition] = compiled
        self._manage_cache()
        return compiled

    def _resolve(self, function: Union[str, CompiledFunction]) -> CompiledFunction:
        if isinstance(function, CompiledFunction):
            return function
        return self.compile(function)

    def _resolve_range(self, x0, x1, dx):
        x0 = SAMPLING_CONFIG["x0"] if x0 is None else float(x0)
        x1 = SAMPLING_CONFIG["x1"] if x1 is None else float(x1)
        dx = SAMPLING_CONFIG["dx"] if dx is None else float(dx)
        for name, value in (("x0", x0), ("x1", x1), ("dx", dx)):
            if not is_well_defined(value):
                raise ValueError(f"{name} must be finite, got {value}")
        return x0, x1, dx

    def sample(self, function: Union[str, CompiledFunction], x0: Optional[float] = None,
               x1: Optional[float] = None, dx: Optional[float] = None) -> pd.Series:
        """
        Evaluate f at x0, x0+dx, ..., x1.

        Args:
            function: definition string or an already compiled function
            x0, x1, dx: range and step; defaults from SAMPLING_CONFIG
        Returns:
            Series of f(x) indexed by x (values may be NaN or +/-inf);
            empty when the definition is invalid
        Raises:
            ValueError: non-finite range or step, or too many points
        """
        compiled = self._resolve(function)
        x0, x1, dx = self._resolve_range(x0, x1, dx)

        n = get_data_size(compiled, x0, x1, dx)
        if n > self.max_points:
            raise ValueError(f"Sampling [{x0}, {x1}] with dx={dx} needs {n} points, limit is {self.max_points}")

        xs = sample_points(x0, dx, n)
        ys = np.fromiter((FunctionParser.evaluate(compiled, x) for x in xs), dtype=np.float64, count=n)
        logger.debug(f"Sampled '{compiled.definition[:50]}' at {n} points")
        return pd.Series(ys, index=pd.Index(xs, name='x'), name=compiled.definition, dtype=np.float64)

    def data_range(self, function: Union[str, CompiledFunction], x0: Optional[float] = None,
                   x1: Optional[float] = None, dx: Optional[float] = None) -> Tuple[float, float, float, float]:
        """(min_x, max_x, min_y, max_y) over the well-defined sampled points"""
        return calculate_data_range(self.sample(function, x0, x1, dx))
