"""
DOM 适配器抽象基类

定义执行引擎访问页面 DOM 的统一接口。引擎本身不直接操作 DOM，
所有读写都经由适配器完成，便于用假 DOM 进行单元测试。
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, List, Optional

# 适配器返回的节点句柄，对引擎而言是不透明的
Node = Any


class DomSelectorError(Exception):
    """选择器语法无效"""

    def __init__(self, selector: str, reason: str = None):
        super().__init__(f"Invalid selector {selector!r}: {reason}" if reason else f"Invalid selector {selector!r}")
        self.selector = selector


class ElementKind(str, Enum):
    """输入步骤关心的元素类别"""
    TEXT_FIELD = "text_field"  # <input> / <textarea>
    CONTENT_EDITABLE = "content_editable"
    OTHER = "other"


class DomAdapter(ABC):
    """
    DOM 适配器抽象基类

    一个实例对应一个文档（宿主页面）。
    """

    @property
    @abstractmethod
    def base_url(self) -> Optional[str]:
        """当前页面地址，用于解析相对 URL"""
        pass

    # ========== 查询 ==========

    @abstractmethod
    async def query_all(self, selector: str) -> List[Node]:
        """
        查询所有匹配节点

        Args:
            selector: CSS 选择器

        Returns:
            按文档顺序排列的节点列表

        Raises:
            DomSelectorError: 选择器语法无效
        """
        pass

    @abstractmethod
    async def text_content(self, node: Node) -> str:
        """节点文本内容"""
        pass

    @abstractmethod
    async def get_attribute(self, node: Node, name: str) -> Optional[str]:
        """节点属性值，不存在时返回 None"""
        pass

    @abstractmethod
    async def element_kind(self, node: Node) -> ElementKind:
        """判断节点是否可输入"""
        pass

    # ========== 操作 ==========

    @abstractmethod
    async def forward_click(self, node: Node) -> bool:
        """
        合成指针/鼠标事件转发点击

        Returns:
            bool: 页面自身的处理逻辑是否接管了点击
        """
        pass

    @abstractmethod
    async def native_click(self, node: Node) -> None:
        """调用 DOM 原生 click()"""
        pass

    @abstractmethod
    async def focus(self, node: Node) -> None:
        """聚焦节点（不滚动）"""
        pass

    @abstractmethod
    async def set_value(self, node: Node, value: str) -> None:
        """设置输入框的值"""
        pass

    @abstractmethod
    async def set_text_content(self, node: Node, value: str) -> None:
        """设置 contenteditable 元素的文本"""
        pass

    @abstractmethod
    async def dispatch_event(self, node: Node, event_type: str) -> None:
        """派发冒泡事件（input / change）"""
        pass

    @abstractmethod
    async def open_url(self, url: str, target: str = "_blank", features: str = "noopener") -> None:
        """
        打开 URL

        Args:
            url: 已净化的绝对地址
            target: 窗口目标 (_blank/_self/...)
            features: window.open 的特性字符串
        """
        pass


__all__ = [
    "Node",
    "DomSelectorError",
    "ElementKind",
    "DomAdapter",
]
