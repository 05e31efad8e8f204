"""
ZIP archive writer.

Builds a ZIP file byte-by-byte from an ordered list of named buffers:
one local header + DEFLATE payload per entry, then the central directory,
then the End Of Central Directory record. Entries appear in exactly the
order given, so the same manifest always yields the same bytes.

Supported subset: flat file names, DEFLATE only, no encryption, no ZIP64
(all sizes, offsets and counts must fit the 16/32-bit fields).

Example::

    from clover_fab.archive import ZipEntry, build_zip

    data = build_zip([
        ZipEntry("board-Edge_Cuts.gbr", edge_text.encode()),
        ZipEntry("board.drl", drill_text.encode()),
    ])
    Path("board.zip").write_bytes(data)
"""

from __future__ import annotations

import struct
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional

from clover_fab.exceptions import ArchiveError, CloverFabError

from .crc32 import crc32
from .deflate import compress_all

LOCAL_HEADER_SIGNATURE = 0x04034B50
CENTRAL_DIRECTORY_SIGNATURE = 0x02014B50
END_OF_CENTRAL_DIRECTORY_SIGNATURE = 0x06054B50

VERSION = 20  # 2.0: deflate
METHOD_DEFLATE = 8

# signature, version needed, flags, method, mod time, mod date,
# crc32, compressed size, uncompressed size, name length, extra length
_LOCAL_HEADER = struct.Struct("<IHHHHHIIIHH")
# signature, version made by, version needed, flags, method, mod time,
# mod date, crc32, compressed size, uncompressed size, name length,
# extra length, comment length, disk start, internal attrs,
# external attrs, local header offset
_CENTRAL_RECORD = struct.Struct("<IHHHHHHIIIHHHHHII")
# signature, this disk, central directory disk, entries on this disk,
# total entries, central directory size, central directory offset,
# comment length
_END_RECORD = struct.Struct("<IHHHHIIH")

LOCAL_HEADER_SIZE = _LOCAL_HEADER.size  # 30
CENTRAL_RECORD_SIZE = _CENTRAL_RECORD.size  # 46
END_RECORD_SIZE = _END_RECORD.size  # 22

MAX_UINT16 = 0xFFFF
MAX_UINT32 = 0xFFFFFFFF


@dataclass(frozen=True)
class ZipEntry:
    """A named file to store in the archive."""

    name: str
    data: bytes


@dataclass(frozen=True)
class CentralDirectoryRecord:
    """One parsed central directory record."""

    name: str
    method: int
    crc32: int
    compressed_size: int
    uncompressed_size: int
    local_header_offset: int

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "method": self.method,
            "crc32": f"{self.crc32:08x}",
            "compressed_size": self.compressed_size,
            "uncompressed_size": self.uncompressed_size,
            "local_header_offset": self.local_header_offset,
        }


def _check_entries(entries: List[ZipEntry]) -> List[bytes]:
    """Validate entry names and return them UTF-8 encoded."""
    if len(entries) > MAX_UINT16:
        raise ArchiveError(
            "Too many archive entries (ZIP64 is not supported)",
            context={"entries": len(entries), "limit": MAX_UINT16},
        )

    seen: set[str] = set()
    names: List[bytes] = []
    for entry in entries:
        if not entry.name or "/" in entry.name or "\\" in entry.name:
            raise ArchiveError(
                "Archive entry names must be plain file names",
                context={"name": entry.name},
                suggestions=["Nested directories are not supported"],
            )
        if entry.name in seen:
            raise ArchiveError("Duplicate archive entry", context={"name": entry.name})
        seen.add(entry.name)

        encoded = entry.name.encode("utf-8")
        if len(encoded) > MAX_UINT16:
            raise ArchiveError("Archive entry name too long", context={"name": entry.name[:64]})
        if len(entry.data) > MAX_UINT32:
            raise ArchiveError(
                "Archive entry too large (ZIP64 is not supported)",
                context={"name": entry.name, "size": len(entry.data)},
            )
        names.append(encoded)
    return names


def build_zip(
    entries: Iterable[ZipEntry],
    *,
    level: int = -1,
    workers: Optional[int] = None,
) -> bytes:
    """
    Assemble a ZIP archive from an ordered list of entries.

    Compression may run on a thread pool (``workers``); the archive is
    always assembled in input order.

    Args:
        entries: Files to store, in archive order
        level: zlib compression level
        workers: Compression threads (None = serial)

    Returns:
        Complete archive bytes

    Raises:
        ArchiveError: If an entry cannot be represented or packaging fails
        GenerationError: If compression fails
    """
    entries = list(entries)
    names = _check_entries(entries)
    compressed = compress_all([e.data for e in entries], level=level, workers=workers)

    local_parts: List[bytes] = []
    central_parts: List[bytes] = []
    offset = 0

    for entry, name, payload in zip(entries, names, compressed):
        checksum = crc32(entry.data)

        local_parts.append(
            _LOCAL_HEADER.pack(
                LOCAL_HEADER_SIGNATURE,
                VERSION,
                0,
                METHOD_DEFLATE,
                0,
                0,
                checksum,
                len(payload),
                len(entry.data),
                len(name),
                0,
            )
        )
        local_parts.append(name)
        local_parts.append(payload)

        central_parts.append(
            _CENTRAL_RECORD.pack(
                CENTRAL_DIRECTORY_SIGNATURE,
                VERSION,
                VERSION,
                0,
                METHOD_DEFLATE,
                0,
                0,
                checksum,
                len(payload),
                len(entry.data),
                len(name),
                0,
                0,
                0,
                0,
                0,
                offset,
            )
        )
        central_parts.append(name)

        offset += LOCAL_HEADER_SIZE + len(name) + len(payload)
        if offset > MAX_UINT32:
            raise ArchiveError(
                "Archive too large (ZIP64 is not supported)",
                context={"entry": entry.name, "offset": offset},
            )

    central_directory = b"".join(central_parts)
    if offset + len(central_directory) > MAX_UINT32:
        raise ArchiveError(
            "Archive too large (ZIP64 is not supported)",
            context={"size": offset + len(central_directory)},
        )

    end_record = _END_RECORD.pack(
        END_OF_CENTRAL_DIRECTORY_SIGNATURE,
        0,
        0,
        len(entries),
        len(entries),
        len(central_directory),
        offset,
        0,
    )
    return b"".join(local_parts) + central_directory + end_record


def write_zip(path: str | Path, entries: Iterable[ZipEntry], **kwargs) -> Path:
    """
    Build an archive and write it to ``path``.

    Raises:
        ArchiveError: If packaging or writing fails
    """
    path = Path(path)
    try:
        data = build_zip(entries, **kwargs)
        path.write_bytes(data)
    except CloverFabError:
        raise
    except OSError as e:
        raise ArchiveError(
            f"Cannot write archive: {e}", operation="archive:write", context={"file": str(path)}
        ) from e
    return path


def read_central_directory(data: bytes) -> List[CentralDirectoryRecord]:
    """
    Parse the central directory of an archive without a comment.

    Raises:
        ArchiveError: If the EOCD record or a central record is malformed
    """
    if len(data) < END_RECORD_SIZE:
        raise ArchiveError("Data too short to be a ZIP archive", context={"size": len(data)})

    eocd_start = data.rfind(struct.pack("<I", END_OF_CENTRAL_DIRECTORY_SIGNATURE))
    if eocd_start < 0 or eocd_start + END_RECORD_SIZE > len(data):
        raise ArchiveError("End of central directory record not found")

    (_, _, _, _, total, cd_size, cd_offset, _) = _END_RECORD.unpack_from(data, eocd_start)
    if cd_offset + cd_size > eocd_start:
        raise ArchiveError(
            "Central directory overlaps end record",
            context={"offset": cd_offset, "size": cd_size},
        )

    records: List[CentralDirectoryRecord] = []
    pos = cd_offset
    for _ in range(total):
        try:
            fields = _CENTRAL_RECORD.unpack_from(data, pos)
        except struct.error as e:
            raise ArchiveError("Truncated central directory", context={"offset": pos}) from e
        if fields[0] != CENTRAL_DIRECTORY_SIGNATURE:
            raise ArchiveError("Bad central directory signature", context={"offset": pos})
        name_len, extra_len, comment_len = fields[10], fields[11], fields[12]
        name_start = pos + CENTRAL_RECORD_SIZE
        records.append(
            CentralDirectoryRecord(
                name=data[name_start : name_start + name_len].decode("utf-8"),
                method=fields[4],
                crc32=fields[7],
                compressed_size=fields[8],
                uncompressed_size=fields[9],
                local_header_offset=fields[16],
            )
        )
        pos = name_start + name_len + extra_len + comment_len

    return records
