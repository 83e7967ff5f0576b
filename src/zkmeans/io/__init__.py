"""Reading clustering requests and writing results."""

from .json_codec import (
    parse_dataset,
    load_dataset,
    encode_clustering,
    format_result,
    DEFAULT_DATA_PATH
)

__all__ = [
    'parse_dataset',
    'load_dataset',
    'encode_clustering',
    'format_result',
    'DEFAULT_DATA_PATH'
]
