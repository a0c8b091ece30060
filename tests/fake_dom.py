"""
内存 DOM 适配器

支持 ``#id``、``.class``、标签名三种选择器，足以驱动引擎测试。
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple

from augmentor.browser import DomAdapter, DomSelectorError, ElementKind


@dataclass(eq=False)
class FakeNode:
    id: str = ""
    tag: str = "div"
    classes: Tuple[str, ...] = ()
    text: str = ""
    value: str = ""
    attrs: Dict[str, str] = field(default_factory=dict)
    kind: ElementKind = ElementKind.OTHER
    # 页面脚本是否接管了转发的合成点击
    handles_forward: bool = True
    on_click: Optional[Callable[["FakeDom", "FakeNode"], None]] = None

    def matches(self, selector: str) -> bool:
        if selector.startswith("#"):
            return self.id == selector[1:]
        if selector.startswith("."):
            return selector[1:] in self.classes
        return self.tag == selector


class FakeDom(DomAdapter):
    """记录所有副作用的内存 DOM"""

    def __init__(self, nodes: List[FakeNode] = None, base_url: str = "https://host.example/page"):
        self.nodes: List[FakeNode] = list(nodes or [])
        self._base_url = base_url
        self.clicks: List[Tuple[str, str]] = []
        self.events: List[Tuple[str, str]] = []
        self.focused: List[str] = []
        self.opened: List[Tuple[str, str, str]] = []
        self.queries = 0

    @property
    def base_url(self) -> Optional[str]:
        return self._base_url

    def add(self, node: FakeNode) -> FakeNode:
        self.nodes.append(node)
        return node

    def remove(self, node: FakeNode) -> None:
        self.nodes.remove(node)

    async def query_all(self, selector: str) -> List[FakeNode]:
        self.queries += 1
        if not selector or selector[0] in "[>~+" or selector.endswith(("[", "(")):
            raise DomSelectorError(selector, "not a valid selector")
        return [node for node in self.nodes if node.matches(selector)]

    async def text_content(self, node: FakeNode) -> str:
        return node.text

    async def get_attribute(self, node: FakeNode, name: str) -> Optional[str]:
        return node.attrs.get(name)

    async def element_kind(self, node: FakeNode) -> ElementKind:
        return node.kind

    async def forward_click(self, node: FakeNode) -> bool:
        if not node.handles_forward:
            return False
        self._click("forward", node)
        return True

    async def native_click(self, node: FakeNode) -> None:
        self._click("native", node)

    def _click(self, mode: str, node: FakeNode) -> None:
        self.clicks.append((mode, node.id))
        if node.on_click is not None:
            node.on_click(self, node)

    async def focus(self, node: FakeNode) -> None:
        self.focused.append(node.id)

    async def set_value(self, node: FakeNode, value: str) -> None:
        node.value = value

    async def set_text_content(self, node: FakeNode, value: str) -> None:
        node.text = value

    async def dispatch_event(self, node: FakeNode, event_type: str) -> None:
        self.events.append((node.id, event_type))

    async def open_url(self, url: str, target: str = "_blank", features: str = "noopener") -> None:
        self.opened.append((url, target, features))


class FakeClock:
    """手动推进的单调时钟"""

    def __init__(self, start: float = 100.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds
