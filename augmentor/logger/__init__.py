"""
日志系统模块

提供日志配置、格式化以及单次流程运行的执行日志。

使用示例:
```python
from augmentor.logger import LogConfig, setup_logging, FlowRunLogger

setup_logging(LogConfig.development())

run_log = FlowRunLogger()
run_log.info("开始执行流程")
```
"""

from .config import (
    ROOT_LOGGER_NAME,
    LogLevel,
    LogFormat,
    LogConfig,
    setup_logging,
)

from .formatters import (
    SimpleFormatter,
    DetailedFormatter,
    JSONFormatter,
    FormatterFactory,
    get_formatter,
)

from .execution import (
    FLOW_LOGGER_NAME,
    ExecutionLogEntry,
    FlowRunLogger,
)

__all__ = [
    # Config
    "ROOT_LOGGER_NAME",
    "LogLevel",
    "LogFormat",
    "LogConfig",
    "setup_logging",
    # Formatters
    "SimpleFormatter",
    "DetailedFormatter",
    "JSONFormatter",
    "FormatterFactory",
    "get_formatter",
    # Execution Logger
    "FLOW_LOGGER_NAME",
    "ExecutionLogEntry",
    "FlowRunLogger",
]
