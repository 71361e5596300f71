"""I/O adapters feeding the engine.

``synapsenet.data.config`` depends on the network class and is imported on
demand rather than from here.
"""

from .dataset import IMAGE_FORMATS, index_dataset
from .images import decode_image, encode_image

__all__ = ["IMAGE_FORMATS", "decode_image", "encode_image", "index_dataset"]
