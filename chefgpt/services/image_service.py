"""
Food photo handling - download, re-encode, base64.
"""
import io
import base64
import binascii
import httpx
from PIL import Image, UnidentifiedImageError

from chefgpt.core.config import settings
from chefgpt.core.logger import logger


async def download_image(url: str, transport: httpx.AsyncBaseTransport = None) -> bytes:
    """
    Download an image from URL with safety guards (async).

    Rejects non-image content types and anything over MAX_IMAGE_BYTES,
    checked both from headers and while streaming.

    Args:
        url: URL to download from
        transport: Optional httpx transport (tests pass a MockTransport)

    Returns:
        Image content as bytes

    Raises:
        ValueError: If the file is too large or not an image
        httpx.HTTPError: If download fails
    """
    max_bytes = settings.MAX_IMAGE_BYTES

    async with httpx.AsyncClient(timeout=settings.IMAGE_DOWNLOAD_TIMEOUT, transport=transport) as client:
        logger.info(f"Downloading image from: {url[:50]}...")

        chunks = []
        total = 0
        async with client.stream("GET", url, follow_redirects=True) as response:
            response.raise_for_status()

            content_type = response.headers.get("content-type", "")
            if content_type and not content_type.lower().startswith(("image/", "application/octet-stream")):
                raise ValueError(f"Invalid file type: expected image, got '{content_type}'.")

            content_length = response.headers.get("content-length")
            if content_length and int(content_length) > max_bytes:
                raise ValueError(f"File too large: exceeds {max_bytes // (1024 * 1024)}MB limit.")

            async for chunk in response.aiter_bytes(chunk_size=65536):
                total += len(chunk)
                if total > max_bytes:
                    raise ValueError(f"File too large: exceeds {max_bytes // (1024 * 1024)}MB limit.")
                chunks.append(chunk)

    content = b"".join(chunks)
    logger.info(f"Downloaded {len(content)} bytes")
    return content


def decode_base64_image(data: str) -> bytes:
    """Decode a base64 payload, tolerating a data: URL prefix."""
    if data.startswith("data:") and "," in data:
        data = data.split(",", 1)[1]
    try:
        return base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ValueError("Image payload is not valid base64") from e


def prepare_image(image_bytes: bytes, max_edge: int = None) -> bytes:
    """
    Re-encode an uploaded photo as an RGB JPEG no larger than max_edge.

    Args:
        image_bytes: Any format Pillow can open
        max_edge: Longest side in pixels (default: settings.IMAGE_MAX_EDGE)

    Returns:
        JPEG bytes

    Raises:
        ValueError: If the bytes are not a readable image
    """
    max_edge = max_edge or settings.IMAGE_MAX_EDGE
    try:
        img = Image.open(io.BytesIO(image_bytes))
        img.load()
    except (UnidentifiedImageError, OSError) as e:
        raise ValueError("Could not read image") from e

    if img.mode != "RGB":
        img = img.convert("RGB")
    img.thumbnail((max_edge, max_edge))

    buf = io.BytesIO()
    img.save(buf, format="JPEG", quality=85)
    jpeg = buf.getvalue()
    buf.close()
    return jpeg


def image_to_base64(image_bytes: bytes) -> str:
    """
    Convert single image bytes to base64 string.

    Args:
        image_bytes: Image content

    Returns:
        Base64 encoded string
    """
    return base64.b64encode(image_bytes).decode()
