from .hex import build_hex_space_from_tokens
from .square import build_square_space_from_tokens

__all__ = [
    "build_hex_space_from_tokens",
    "build_square_space_from_tokens",
]
