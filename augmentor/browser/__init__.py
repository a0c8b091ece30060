"""
浏览器模块

提供执行引擎使用的 DOM 适配器接口及实现。

- DomAdapter: DOM 访问抽象基类
- PlaywrightDom: 基于 Playwright 的实现
- sanitize_url: 导航地址净化
"""

from .base import DomAdapter, DomSelectorError, ElementKind, Node
from .playwright_dom import PlaywrightDom
from .url import ALLOWED_SCHEMES, sanitize_url

__all__ = [
    "DomAdapter",
    "DomSelectorError",
    "ElementKind",
    "Node",
    "PlaywrightDom",
    "ALLOWED_SCHEMES",
    "sanitize_url",
]
