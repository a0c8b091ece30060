"""
URL 净化工具
"""

from typing import Optional
from urllib.parse import urljoin, urlsplit

ALLOWED_SCHEMES = ("http", "https")


def sanitize_url(raw: str, base: str = None) -> Optional[str]:
    """
    净化导航地址

    相对地址基于 ``base`` 解析；只允许 http/https，其余协议或无法解析的地址返回 None。

    Args:
        raw: 原始地址
        base: 当前页面地址

    Returns:
        绝对地址或 None
    """
    if not isinstance(raw, str) or not raw.strip():
        return None
    candidate = raw.strip()
    try:
        if base:
            candidate = urljoin(base, candidate)
        parts = urlsplit(candidate)
        # 访问 port 会校验端口是否合法
        parts.port
    except ValueError:
        return None
    if parts.scheme.lower() not in ALLOWED_SCHEMES or not parts.hostname:
        return None
    return parts.geturl()


__all__ = [
    "ALLOWED_SCHEMES",
    "sanitize_url",
]
