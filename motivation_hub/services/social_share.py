"""Share-link construction for supported social platforms."""

from urllib.parse import quote

from motivation_hub.services.chat_provider_models import is_blank
from motivation_hub.services.errors import ValidationError


MISSING_PLATFORM_ERROR = "Missing platform"

# Same unreserved set as JavaScript's encodeURIComponent.
_URI_COMPONENT_SAFE = "-_.!~*'()"

_SHARE_TEMPLATES = {
    "facebook": "https://www.facebook.com/sharer/sharer.php?u={url}&quote={text}",
    "twitter": "https://twitter.com/intent/tweet?text={text}&url={url}",
    "instagram": "https://www.instagram.com/",
    "tiktok": "https://www.tiktok.com/search?q={text}",
}


def encode_uri_component(value: str) -> str:
    return quote(value, safe=_URI_COMPONENT_SAFE)


def build_share_url(
    platform: str | None,
    text: str | None = None,
    url: str | None = None,
) -> str:
    """Build the share URL for ``platform``.

    Unknown platforms echo ``url`` back unchanged (or ``""``). Instagram has no
    parameterized share endpoint, so its landing page is returned as-is.
    """
    if is_blank(platform):
        raise ValidationError(MISSING_PLATFORM_ERROR)
    template = _SHARE_TEMPLATES.get(platform.strip().lower())
    if template is None:
        return url or ""
    return template.format(
        text=encode_uri_component(text or ""),
        url=encode_uri_component(url or ""),
    )
