"""
Raw DEFLATE compression (RFC 1951, no zlib or gzip framing).

ZIP entries carry raw DEFLATE streams, so the zlib wrapper is suppressed
with negative window bits. There is no fallback to stored entries: a
compression failure is a GenerationError.
"""

from __future__ import annotations

import logging
import zlib
from concurrent.futures import ThreadPoolExecutor
from typing import Optional, Sequence

from clover_fab.exceptions import GenerationError

logger = logging.getLogger(__name__)

# Negative wbits -> raw stream, 32 KiB window
RAW_WBITS = -15


def deflate_raw(data: bytes, level: int = -1) -> bytes:
    """
    Compress bytes to a raw DEFLATE stream.

    Args:
        data: Bytes to compress
        level: zlib compression level, -1 (default) or 0-9

    Raises:
        GenerationError: If compression fails
    """
    try:
        compressor = zlib.compressobj(level, zlib.DEFLATED, RAW_WBITS)
        return compressor.compress(data) + compressor.flush()
    except (zlib.error, ValueError, TypeError) as e:
        raise GenerationError(
            f"Compression failed: {e}",
            operation="archive:deflate",
            context={"size": len(data) if isinstance(data, (bytes, bytearray)) else "n/a"},
        ) from e


def compress_all(
    buffers: Sequence[bytes],
    level: int = -1,
    workers: Optional[int] = None,
) -> list[bytes]:
    """
    Compress several buffers, optionally on a thread pool.

    zlib releases the GIL while compressing, so threads give real
    parallelism. Results are always returned in input order.

    Args:
        buffers: Buffers to compress
        level: zlib compression level
        workers: Thread count; None or <= 1 compresses serially

    Raises:
        GenerationError: If any buffer fails to compress
    """
    if not workers or workers <= 1 or len(buffers) <= 1:
        return [deflate_raw(b, level) for b in buffers]

    logger.debug(f"Compressing {len(buffers)} buffers on {workers} threads")
    with ThreadPoolExecutor(max_workers=min(workers, len(buffers))) as executor:
        futures = [executor.submit(deflate_raw, b, level) for b in buffers]
        return [future.result() for future in futures]
