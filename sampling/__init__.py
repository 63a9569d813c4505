"""采样模块 - 在区间上批量评估函数"""
from .sampler import FunctionSampler, get_data_size, sample_points

__all__ = ['FunctionSampler', 'get_data_size', 'sample_points']
