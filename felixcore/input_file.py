"""Recognition of an input file as cartridge or BS93 program."""

from __future__ import annotations

import os
from enum import Enum
from pathlib import Path

from .image_bs93 import ImageBS93
from .image_cart import ImageCart
from .image_properties import ImageProperties
from .utility import read_file


class FileType(Enum):
    UNKNOWN = 0
    BS93 = 1
    CART = 2


class InputFile:
    """A loaded input file.

    ``image_properties`` holds the properties to use afterwards: the ones
    given if they belong to this path, otherwise fresh ones, populated from
    a cartridge header when the file is a cartridge.
    """

    def __init__(
        self,
        path: str | os.PathLike[str],
        image_properties: ImageProperties | None,
    ) -> None:
        self.type = FileType.UNKNOWN
        self.bs93: ImageBS93 | None = None
        self.cart: ImageCart | None = None
        self.image_properties = image_properties

        path = Path(path)
        data = read_file(path)
        if not data:
            return

        props_reset = False
        if self.image_properties is not None and self.image_properties.path != path:
            self.image_properties = None
        if self.image_properties is None:
            self.image_properties = ImageProperties(path)
            props_reset = True

        cart = ImageCart.from_bytes(data)
        if cart is not None:
            if props_reset:
                cart.populate(self.image_properties)
            self.type = FileType.CART
            self.cart = cart
            return

        bs93 = ImageBS93.from_bytes(data)
        if bs93 is not None:
            self.type = FileType.BS93
            self.bs93 = bs93

    @property
    def valid(self) -> bool:
        return self.type is not FileType.UNKNOWN