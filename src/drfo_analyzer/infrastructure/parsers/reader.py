"""Reading and decoding statement files."""

import asyncio
from pathlib import Path
from typing import Optional

from drfo_analyzer.shared.config import get_settings
from drfo_analyzer.shared.exceptions import MalformedContentError, ReadError


def read_statement(file_path: Path) -> bytes:
    """
    Read the raw bytes of a statement file.

    Raises:
        ReadError: If the file cannot be read or is empty
    """
    try:
        data = file_path.read_bytes()
    except OSError as e:
        raise ReadError(f"Помилка читання файлу: {e}") from e
    if not data:
        raise ReadError(f"Файл порожній: {file_path.name}")
    return data


async def read_statement_async(file_path: Path) -> bytes:
    """Read a statement file without blocking the event loop."""
    return await asyncio.to_thread(read_statement, file_path)


def decode_statement(data: bytes, encoding: Optional[str] = None) -> str:
    """
    Decode statement bytes with the tax office's legacy encoding.

    Args:
        data: Raw file content
        encoding: Override for the configured source encoding

    Raises:
        ReadError: If there is no content
        MalformedContentError: If the bytes are not valid in the encoding
    """
    if not data:
        raise ReadError("Файл не містить даних.")
    encoding = encoding or get_settings().source_encoding
    try:
        return data.decode(encoding)
    except UnicodeDecodeError as e:
        raise MalformedContentError(
            f"Не вдалося прочитати файл у кодуванні {encoding}: {e}"
        ) from e
