# =============================================================================
# Image Admission
# =============================================================================
# Decides which images are worth fetching and converting.
#
# Two gates:
#   - is_admissible(): purely lexical check on the src attribute, before any
#     network access. Drops data URIs, icons, trackers, logos and other
#     decorative assets, plus vector and animated formats.
#   - is_admissible_response(): check on the response metadata once the
#     image has been fetched (content type and body size).
#
# Also resolves image/link references against the page URL.
# =============================================================================

from urllib.parse import urljoin, urlparse

# Substrings that mark decorative or tracking images
DENYLIST_TOKENS = (
    "icon",
    "avatar",
    "sprite",
    "tracking",
    "pixel",
    "1x1",
    "badge",
    "button",
    "arrow",
    "spacer",
    "widget",
    "logo",
    "spinner",
    "loading",
    "/static/",
)

# File extensions never converted (vector or usually animated)
REJECTED_EXTENSIONS = (".svg", ".gif")

# Bodies smaller than this are almost always tracking pixels
MIN_IMAGE_BYTES = 1000


def is_admissible(src: str) -> bool:
    """
    Lexical pre-check on an image reference. Case-insensitive.

    Example:
        >>> is_admissible("https://x.com/photo.jpg")
        True
        >>> is_admissible("https://x.com/icon-small.png")
        False
    """
    src_lower = src.strip().lower()
    if not src_lower or src_lower.startswith("data:"):
        return False

    if any(token in src_lower for token in DENYLIST_TOKENS):
        return False

    # Check both the raw reference and its path, so "a.svg?v=2" is caught
    path = urlparse(src_lower).path
    return not (
        src_lower.endswith(REJECTED_EXTENSIONS) or path.endswith(REJECTED_EXTENSIONS)
    )


def is_admissible_response(
    content_type: str,
    size: int,
    min_bytes: int = MIN_IMAGE_BYTES,
) -> bool:
    """
    Check a fetched image's metadata.

    Args:
        content_type: Value of the Content-Type header.
        size: Body length in bytes.
        min_bytes: Smallest body accepted.
    """
    content_type = content_type.lower()
    if not content_type.startswith("image/"):
        return False
    if "svg" in content_type or "gif" in content_type:
        return False
    return size >= min_bytes


def resolve_url(src: str, base_url: str | None) -> str | None:
    """
    Turn an image reference into an absolute http(s) URL.

    Protocol-relative references get https. Relative references need a
    base URL; without one they can't be resolved and None is returned.
    """
    src = src.strip()
    if not src:
        return None

    if src.startswith("//"):
        return f"https:{src}"

    scheme = urlparse(src).scheme.lower()
    if scheme in ("http", "https"):
        return src
    if scheme:
        # mailto:, javascript:, cid: and friends
        return None

    if not base_url:
        return None
    resolved = urljoin(base_url, src)
    if urlparse(resolved).scheme.lower() not in ("http", "https"):
        return None
    return resolved


def is_external_link(href: str) -> bool:
    """True for absolute http(s) links (no script or fragment links)."""
    return urlparse(href.strip()).scheme.lower() in ("http", "https")
