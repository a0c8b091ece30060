"""
Playwright DOM 适配器

通过 Playwright 的异步 Page 对象访问宿主页面，节点为 ElementHandle。
"""

import logging
from typing import List, Optional

from playwright.async_api import ElementHandle, Error as PlaywrightError, Page

from .base import DomAdapter, DomSelectorError, ElementKind

logger = logging.getLogger(__name__)

# 模拟真实用户点击：指针事件 + 鼠标事件，坐标取元素中心
_FORWARD_CLICK_JS = """
(el) => {
    const rect = el.getBoundingClientRect();
    const base = {
        bubbles: true,
        cancelable: true,
        view: window,
        button: 0,
        clientX: rect.left + rect.width / 2,
        clientY: rect.top + rect.height / 2,
    };
    let triggered = false;
    const dispatch = (factory) => {
        try {
            el.dispatchEvent(factory());
            triggered = true;
        } catch (_error) {}
    };
    if (typeof PointerEvent === 'function') {
        dispatch(() => new PointerEvent('pointerdown', { ...base, pointerType: 'mouse', isPrimary: true }));
    }
    dispatch(() => new MouseEvent('mousedown', base));
    if (typeof PointerEvent === 'function') {
        dispatch(() => new PointerEvent('pointerup', { ...base, pointerType: 'mouse', isPrimary: true }));
    }
    dispatch(() => new MouseEvent('mouseup', base));
    dispatch(() => new MouseEvent('click', base));
    return triggered;
}
"""

_ELEMENT_KIND_JS = """
(el) => {
    if (el instanceof HTMLInputElement || el instanceof HTMLTextAreaElement) {
        return 'text_field';
    }
    if (el instanceof HTMLElement && el.isContentEditable) {
        return 'content_editable';
    }
    return 'other';
}
"""


class PlaywrightDom(DomAdapter):
    """
    Playwright DOM 适配器

    Attributes:
        page: Playwright 异步页面对象
    """

    def __init__(self, page: Page):
        self.page = page

    @property
    def base_url(self) -> Optional[str]:
        return self.page.url

    async def query_all(self, selector: str) -> List[ElementHandle]:
        try:
            return await self.page.query_selector_all(selector)
        except PlaywrightError as e:
            raise DomSelectorError(selector, e.message) from e

    async def text_content(self, node: ElementHandle) -> str:
        return await node.text_content() or ""

    async def get_attribute(self, node: ElementHandle, name: str) -> Optional[str]:
        return await node.get_attribute(name)

    async def element_kind(self, node: ElementHandle) -> ElementKind:
        return ElementKind(await node.evaluate(_ELEMENT_KIND_JS))

    async def forward_click(self, node: ElementHandle) -> bool:
        try:
            return bool(await node.evaluate(_FORWARD_CLICK_JS))
        except PlaywrightError as e:
            logger.debug(f"转发点击失败: {e.message}")
            return False

    async def native_click(self, node: ElementHandle) -> None:
        # 不使用 ElementHandle.click()，它会等待可操作性检查
        await node.evaluate("(el) => el.click()")

    async def focus(self, node: ElementHandle) -> None:
        await node.evaluate("(el) => el.focus({ preventScroll: true })")

    async def set_value(self, node: ElementHandle, value: str) -> None:
        await node.evaluate("(el, value) => { el.value = value; }", value)

    async def set_text_content(self, node: ElementHandle, value: str) -> None:
        await node.evaluate("(el, value) => { el.textContent = value; }", value)

    async def dispatch_event(self, node: ElementHandle, event_type: str) -> None:
        await node.dispatch_event(event_type)

    async def open_url(self, url: str, target: str = "_blank", features: str = "noopener") -> None:
        await self.page.evaluate(
            "([url, target, features]) => { window.open(url, target, features); }",
            [url, target, features],
        )


__all__ = [
    "PlaywrightDom",
]
