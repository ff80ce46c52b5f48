import io

from PIL import Image, ImageOps, UnidentifiedImageError

from .errors import TransformFailure

_DECODE_ERRORS = (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError)


def _open_rgb(data: bytes) -> Image.Image:
    try:
        img = Image.open(io.BytesIO(data))
        img.load()
    except _DECODE_ERRORS as e:
        raise TransformFailure(f"Cannot decode image: {e}") from e

    # JPEG has no alpha; flatten onto white instead of letting convert() go black
    if img.mode in ("RGBA", "LA") or (img.mode == "P" and "transparency" in img.info):
        rgba = img.convert("RGBA")
        background = Image.new("RGB", rgba.size, (255, 255, 255))
        background.paste(rgba, mask=rgba.getchannel("A"))
        return background
    return img.convert("RGB")


def _encode_jpeg(img: Image.Image, quality: int, progressive: bool = False) -> bytes:
    buf = io.BytesIO()
    try:
        img.save(buf, format="JPEG", quality=quality, progressive=progressive, optimize=progressive)
    except (OSError, ValueError) as e:
        raise TransformFailure(f"Cannot encode JPEG: {e}") from e
    return buf.getvalue()


def fit_inside(data: bytes, size: tuple[int, int], quality: int = 85) -> bytes:
    """
    Shrink to fit within ``size`` keeping the aspect ratio. Never enlarges,
    never crops. Encoded as a progressive JPEG.
    """
    img = _open_rgb(data)
    img.thumbnail(size, Image.Resampling.LANCZOS)
    return _encode_jpeg(img, quality, progressive=True)


def cover_crop(data: bytes, size: tuple[int, int], quality: int = 85) -> bytes:
    """Scale and center-crop to exactly ``size``, discarding overflow."""
    img = _open_rgb(data)
    img = ImageOps.fit(img, size, Image.Resampling.LANCZOS, centering=(0.5, 0.5))
    return _encode_jpeg(img, quality)
