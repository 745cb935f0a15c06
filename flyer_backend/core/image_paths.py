# flyer_backend/core/image_paths.py
from collections.abc import Sequence
from typing import Protocol

# Directory the flyer renderer resolves product pictures from.
PRODUCT_IMAGE_DIR = "imagens_produtos"


class HasCode(Protocol):
    code: str


def product_image_path(code: str) -> str:
    """
    Deterministic image path for a product code.

    Path pattern:
        imagens_produtos/<code>.png
    """
    return f"{PRODUCT_IMAGE_DIR}/{code}.png"


def derive_group_image(products: Sequence[HasCode]) -> str | None:
    """
    Display image of a group: the picture of its first product.

    Returns None for an empty product list.
    """
    if not products:
        return None
    return product_image_path(products[0].code)
