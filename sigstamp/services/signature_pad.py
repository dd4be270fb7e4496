"""Service turning pad strokes and uploaded pictures into signature images."""

import io
from typing import Sequence, Tuple

from PIL import Image, ImageDraw

from ..middleware.exceptions import InvalidGeometryError
from ..models.domain import SignatureImage
from ..pdf_processor.compose import decode_image

type Stroke = Sequence[Tuple[float, float]]

# share of the pad an uploaded picture may cover
UPLOAD_FIT_RATIO = 0.9


def _to_png(img: Image.Image) -> bytes:
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


def load_signature_image(data: bytes) -> SignatureImage:
    """Decode image bytes far enough to learn their pixel size.

    Raises:
        ImageDecodeError: If the bytes are not a readable image
        InvalidGeometryError: If the image has no pixels
    """
    img = decode_image(data)
    if img.width <= 0 or img.height <= 0:
        raise InvalidGeometryError(
            "Signature image has no pixels",
            details={"width": img.width, "height": img.height},
        )
    return SignatureImage(data=data, width=img.width, height=img.height)


def render_strokes_png(
    strokes: Sequence[Stroke], size: Tuple[int, int], stroke_width: int
) -> bytes:
    """
    Convert freehand strokes into a transparent PNG the size of the pad.

    Args:
        strokes: Polylines in pad pixel coordinates
        size: Pad width and height in pixels
        stroke_width: Line width in pixels

    Returns:
        PNG encoded bytes
    """
    w, h = size
    img = Image.new("RGBA", (w, h), (0, 0, 0, 0))
    drw = ImageDraw.Draw(img)
    for poly in strokes:
        points = [(float(x), float(y)) for x, y in poly]
        if len(points) >= 2:
            drw.line(points, fill=(0, 0, 0, 255), width=stroke_width, joint="curve")
        elif points:
            # a single tap still leaves a dot
            x, y = points[0]
            r = stroke_width / 2
            drw.ellipse((x - r, y - r, x + r, y + r), fill=(0, 0, 0, 255))
    return _to_png(img)


def fit_image_to_pad(data: bytes, size: Tuple[int, int]) -> bytes:
    """
    Load an uploaded picture into the pad.

    The picture is scaled down to fit 90% of the pad, never scaled up, and
    centered on a transparent background.

    Args:
        data: Uploaded image bytes in any format Pillow reads
        size: Pad width and height in pixels

    Returns:
        PNG encoded bytes the size of the pad

    Raises:
        ImageDecodeError: If the upload is not a readable image
    """
    pad_w, pad_h = size
    src = decode_image(data)

    ratio = min(pad_w * UPLOAD_FIT_RATIO / src.width, pad_h * UPLOAD_FIT_RATIO / src.height, 1)
    w = max(1, round(src.width * ratio))
    h = max(1, round(src.height * ratio))
    if (w, h) != src.size:
        src = src.resize((w, h), Image.LANCZOS)

    pad = Image.new("RGBA", (pad_w, pad_h), (0, 0, 0, 0))
    pad.alpha_composite(src, ((pad_w - w) // 2, (pad_h - h) // 2))
    return _to_png(pad)
