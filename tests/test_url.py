import pytest

from augmentor.browser import sanitize_url


@pytest.mark.parametrize(
    "raw, base, expected",
    [
        ("https://example.com/a?b=1#c", None, "https://example.com/a?b=1#c"),
        ("  http://example.com  ", None, "http://example.com"),
        ("/next", "https://host.example/app/page", "https://host.example/next"),
        ("other", "https://host.example/app/page", "https://host.example/app/other"),
        ("//cdn.example/x", "https://host.example/", "https://cdn.example/x"),
        ("HTTPS://Example.com/", None, "https://Example.com/"),
    ],
)
def test_allowed_urls(raw, base, expected) -> None:
    assert sanitize_url(raw, base) == expected


@pytest.mark.parametrize(
    "raw, base",
    [
        ("javascript:alert(1)", "https://host.example/"),
        ("data:text/html,<script>", None),
        ("ftp://example.com/file", None),
        ("mailto:someone@example.com", None),
        ("/relative", None),
        ("https://example.com:99999/", None),
        ("https://", None),
        ("", "https://host.example/"),
        ("   ", None),
        (None, None),
    ],
)
def test_rejected_urls(raw, base) -> None:
    assert sanitize_url(raw, base) is None
