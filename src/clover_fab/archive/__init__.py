"""
ZIP archive construction.

CRC-32 and raw DEFLATE primitives plus a byte-level ZIP writer for flat,
ordered file bundles.

Usage:
    from clover_fab.archive import ZipEntry, build_zip, read_central_directory

    data = build_zip([ZipEntry("board.drl", drill.encode())])
    for record in read_central_directory(data):
        print(record.name, record.compressed_size)
"""

from .crc32 import crc32, crc32_update
from .deflate import compress_all, deflate_raw
from .writer import (
    CENTRAL_DIRECTORY_SIGNATURE,
    CENTRAL_RECORD_SIZE,
    END_OF_CENTRAL_DIRECTORY_SIGNATURE,
    END_RECORD_SIZE,
    LOCAL_HEADER_SIGNATURE,
    LOCAL_HEADER_SIZE,
    CentralDirectoryRecord,
    ZipEntry,
    build_zip,
    read_central_directory,
    write_zip,
)

__all__ = [
    # Checksum / compression
    "crc32",
    "crc32_update",
    "deflate_raw",
    "compress_all",
    # Writer
    "ZipEntry",
    "CentralDirectoryRecord",
    "build_zip",
    "write_zip",
    "read_central_directory",
    # Format constants
    "LOCAL_HEADER_SIGNATURE",
    "CENTRAL_DIRECTORY_SIGNATURE",
    "END_OF_CENTRAL_DIRECTORY_SIGNATURE",
    "LOCAL_HEADER_SIZE",
    "CENTRAL_RECORD_SIZE",
    "END_RECORD_SIZE",
]
