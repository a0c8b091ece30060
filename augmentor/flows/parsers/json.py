"""
流程解析器模块

将作者提交的文本（JSON 或 YAML）解析为规范化的 FlowDefinition。

空文本表示“未配置流程”，与“流程无效”是两种不同状态。
"""

import json
import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional

import yaml

from augmentor.config import DEFAULT_LIMITS, FlowLimits
from augmentor.core.errors import FlowDefinitionError
from augmentor.flows.definition import FlowDefinition

from .normalize import FlowNormalizer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ParseResult:
    """解析结果：definition 与 error 至多一个非空"""
    definition: Optional[FlowDefinition] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict:
        return {
            "definition": self.definition.model_dump(mode="json") if self.definition else None,
            "error": self.error,
        }


@dataclass(frozen=True)
class ValidationSummary:
    """编辑器实时校验结果"""
    step_count: int = 0
    error: Optional[str] = None
    definition: Optional[FlowDefinition] = None


class FlowParser:
    """
    流程解析器

    Attributes:
        limits: 流程预算
        normalizer: 规范化器
    """

    def __init__(self, limits: FlowLimits = None):
        self.limits = limits or DEFAULT_LIMITS
        self.normalizer = FlowNormalizer(self.limits)

    def parse(self, source: str) -> ParseResult:
        """
        解析 JSON 流程定义

        Args:
            source: 原始文本

        Returns:
            ParseResult: (definition, None) / (None, error) / (None, None)
        """
        return self._parse(source, _load_json, "JSON", (ValueError,))

    def parse_yaml(self, source: str) -> ParseResult:
        """解析 YAML 流程定义（不允许锚点和别名）"""
        # 时间戳等标量在构造时可能抛出普通 ValueError
        return self._parse(source, _load_yaml, "YAML", (yaml.YAMLError, ValueError))

    def _parse(
        self,
        source: Any,
        loader: Callable[[str], Any],
        label: str,
        decode_errors: tuple,
    ) -> ParseResult:
        trimmed = source.strip() if isinstance(source, str) else ""
        if not trimmed:
            return ParseResult()

        if len(trimmed) > self.limits.max_source_length:
            return ParseResult(
                error=f"Flow {label} exceeds the maximum length of {self.limits.max_source_length} characters."
            )

        try:
            raw = loader(trimmed)
        except RecursionError:
            return ParseResult(error="Flow definition is nested too deeply.")
        except decode_errors as e:
            logger.debug(f"流程文本解码失败: {e}")
            return ParseResult(error=f"Flow {label} is invalid.")

        try:
            definition = self.normalizer.normalize(raw)
        except FlowDefinitionError as e:
            return ParseResult(error=e.message)
        except RecursionError:
            return ParseResult(error="Flow definition is nested too deeply.")

        logger.debug(f"流程解析完成: {definition.step_count} 个步骤")
        return ParseResult(definition=definition)


def _reject_constant(token: str) -> Any:
    raise ValueError(f"non-standard JSON constant: {token}")


def _load_json(source: str) -> Any:
    """严格 JSON：拒绝 NaN / Infinity"""
    return json.loads(source, parse_constant=_reject_constant)


def _load_yaml(source: str) -> Any:
    for event in yaml.parse(source, Loader=yaml.SafeLoader):
        if isinstance(event, yaml.AliasEvent):
            raise yaml.YAMLError("anchors and aliases are not supported")
    return yaml.safe_load(source)


class FlowValidator:
    """流程验证器"""

    def __init__(self, parser: FlowParser = None):
        self.parser = parser or FlowParser()

    def validate_source(self, source: str) -> ValidationSummary:
        """
        校验流程文本

        Returns:
            ValidationSummary: 空文本或无效时 step_count 为 0
        """
        result = self.parser.parse(source)
        if result.error:
            return ValidationSummary(error=result.error)
        if result.definition is None:
            return ValidationSummary()
        return ValidationSummary(step_count=result.definition.step_count, definition=result.definition)


# ========== 便捷函数 ==========

def parse_action_flow(source: str, limits: FlowLimits = None) -> ParseResult:
    """解析 JSON 流程定义（便捷函数）"""
    return FlowParser(limits).parse(source)


__all__ = [
    "ParseResult",
    "ValidationSummary",
    "FlowParser",
    "FlowValidator",
    "parse_action_flow",
]
