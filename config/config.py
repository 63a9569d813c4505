"""配置文件"""

# 解析器参数
PARSER_CONFIG = {
    "error_format": "Parse failed at index {position}: {reason}",
}

# 采样参数 (evaluate f(x) at x0, x0+dx, ..., x1)
SAMPLING_CONFIG = {
    "x0": 0.0,
    "x1": 10.0,
    "dx": 1.0,
    "cache_size": 256,  # 编译结果缓存
    "max_points": 1_000_000,  # 单次采样点数上限
}

# 日志
LOGGING_CONFIG = {
    "level": "INFO",
    "format": '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
}


# 验证配置
def validate_config():
    """验证配置的合理性"""
    assert "{position}" in PARSER_CONFIG["error_format"], "error_format needs {position}"
    assert "{reason}" in PARSER_CONFIG["error_format"], "error_format needs {reason}"
    assert SAMPLING_CONFIG["cache_size"] > 0, "cache_size must be positive"
    assert SAMPLING_CONFIG["max_points"] >= 1, "max_points must be at least 1"
    assert LOGGING_CONFIG["level"] in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
    return True
