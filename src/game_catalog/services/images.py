"""Cover image processing."""

from io import BytesIO

from PIL import Image, UnidentifiedImageError

from game_catalog.errors import InvalidInputError

COVER_SIZE = (600, 400)


def resize_image(data: bytes, size: tuple[int, int] = COVER_SIZE, quality: int = 85) -> bytes:
    """Resize an uploaded image to a fixed-size JPEG.

    The image is stretched to exactly ``size``; alpha and palette images are
    flattened to RGB first.

    Raises:
        InvalidInputError: If the data is not a decodable image.
    """
    try:
        with Image.open(BytesIO(data)) as img:
            img.load()
            resized = img.convert("RGB").resize(size, Image.Resampling.LANCZOS)
    except (UnidentifiedImageError, OSError, Image.DecompressionBombError) as e:
        raise InvalidInputError("Invalid image file") from e

    output = BytesIO()
    resized.save(output, format="JPEG", quality=quality)
    return output.getvalue()
