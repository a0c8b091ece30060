"""
执行日志模块

记录单次动作流运行的结构化日志。
"""

import json
import logging
import time
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

FLOW_LOGGER_NAME = "augmentor.flow"


@dataclass
class ExecutionLogEntry:
    """执行日志条目"""
    timestamp: str
    level: str
    run_id: str
    message: str
    step: Optional[str] = None
    depth: Optional[int] = None
    duration_ms: Optional[int] = None
    details: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "timestamp": self.timestamp,
            "level": self.level,
            "run_id": self.run_id,
            "message": self.message,
            "step": self.step,
            "depth": self.depth,
            "duration_ms": self.duration_ms,
            "details": self.details,
        }


class FlowRunLogger:
    """
    流程运行日志记录器

    每次运行一个实例，同时写入 ``augmentor.flow`` 日志记录器。
    debug 级别只写入日志记录器，其余级别在内存中最多保留 max_entries 条。

    Attributes:
        run_id: 运行 ID
        entries: 日志条目列表
        dropped: 超出上限而丢弃的条目数
    """

    def __init__(self, run_id: str = None, logger: logging.Logger = None, max_entries: int = 500):
        self.run_id = run_id or uuid.uuid4().hex[:12]
        self.entries: List[ExecutionLogEntry] = []
        self.max_entries = max_entries
        self.dropped = 0
        self.logger = logger or logging.getLogger(FLOW_LOGGER_NAME)
        self._step_started: Dict[int, float] = {}

    def log(
        self,
        level: str,
        message: str,
        step: str = None,
        depth: int = None,
        duration_ms: int = None,
        **details,
    ) -> ExecutionLogEntry:
        """
        记录日志

        Args:
            level: 日志级别 (debug/info/warning/error)
            message: 日志消息
            step: 步骤类型
            depth: 嵌套深度
            duration_ms: 持续时间（毫秒）
            **details: 额外上下文

        Returns:
            日志条目
        """
        entry = ExecutionLogEntry(
            timestamp=datetime.now(timezone.utc).isoformat(),
            level=level,
            run_id=self.run_id,
            message=message,
            step=step,
            depth=depth,
            duration_ms=duration_ms,
            details=details,
        )
        if level != "debug":
            if len(self.entries) < self.max_entries:
                self.entries.append(entry)
            else:
                self.dropped += 1

        self.logger.log(
            getattr(logging, level.upper()),
            f"[{self.run_id}][{step or 'flow'}] {message}",
            extra={
                "run_id": self.run_id,
                "step": step,
                "depth": depth,
                "duration_ms": duration_ms,
                "details": details,
            },
        )
        return entry

    def debug(self, message: str, **context) -> ExecutionLogEntry:
        return self.log("debug", message, **context)

    def info(self, message: str, **context) -> ExecutionLogEntry:
        return self.log("info", message, **context)

    def warning(self, message: str, **context) -> ExecutionLogEntry:
        return self.log("warning", message, **context)

    def error(self, message: str, **context) -> ExecutionLogEntry:
        return self.log("error", message, **context)

    def step_start(self, step: str, depth: int) -> None:
        """步骤开始"""
        self._step_started[depth] = time.monotonic()
        self.debug("started", step=step, depth=depth)

    def step_end(self, step: str, depth: int, performed: bool = False) -> None:
        """步骤结束"""
        started = self._step_started.pop(depth, None)
        duration_ms = int((time.monotonic() - started) * 1000) if started is not None else None
        self.debug("finished", step=step, depth=depth, duration_ms=duration_ms, performed=performed)

    def get_entries_by_level(self, level: str) -> List[ExecutionLogEntry]:
        """按级别获取日志条目"""
        return [e for e in self.entries if e.level == level]

    def get_warnings(self) -> List[ExecutionLogEntry]:
        return self.get_entries_by_level("warning")

    def to_dict(self) -> Dict[str, Any]:
        """转换为字典"""
        return {
            "run_id": self.run_id,
            "entries": [e.to_dict() for e in self.entries],
            "entry_count": len(self.entries),
            "dropped": self.dropped,
            "warning_count": len(self.get_warnings()),
            "error_count": len(self.get_entries_by_level("error")),
        }

    def to_json(self, indent: int = 2) -> str:
        """转换为 JSON 字符串"""
        return json.dumps(self.to_dict(), ensure_ascii=False, indent=indent)


__all__ = [
    "FLOW_LOGGER_NAME",
    "ExecutionLogEntry",
    "FlowRunLogger",
]
