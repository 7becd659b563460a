from __future__ import annotations

import base64


def encode(data: bytes | bytearray | memoryview) -> str:
    """Padded standard-alphabet base64 of ``data``; ``b""`` encodes to ``""``."""
    return base64.b64encode(bytes(data)).decode("ascii")


def to_data_uri(data: bytes, mime: str) -> str:
    return f"data:{mime};base64,{encode(data)}"
