"""工具模块"""
from .metrics import calculate_data_range, count_undefined, is_well_defined

__all__ = ['calculate_data_range', 'count_undefined', 'is_well_defined']
