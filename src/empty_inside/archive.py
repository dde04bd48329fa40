"""
Tar entry construction and gzip tar framing.

Every entry is owned by root with fixed permission bits, so the only
header field that varies between builds is the modification time. The
gzip layer carries no timestamp and no file name.

Copyright 2025 Ben Mensi
Licensed under the Apache License, Version 2.0
"""

import gzip
import io
import logging
import tarfile
import time
import zlib
from contextlib import contextmanager
from dataclasses import dataclass
from typing import BinaryIO, Iterator, List, Optional, Tuple

from empty_inside.errors import ArchiveError


logger = logging.getLogger(__name__)

FILE_MODE = 0o644
DIR_MODE = 0o755
OWNER = "root"
GROUP = "root"

# Failures the tar/gzip layer raises when a header, payload or trailer
# cannot be written.
FRAMING_ERRORS = (tarfile.TarError, OSError, zlib.error, ValueError)


def _now() -> int:
    """Return current wall-clock time in whole seconds."""
    return int(time.time())


def new_header(
    path: str,
    size: int,
    is_dir: bool = False,
    mtime: Optional[int] = None,
) -> tarfile.TarInfo:
    """
    Build a normalized tar header.

    Args:
        path: Member path inside the archive
        size: Payload length in bytes (ignored for directories)
        is_dir: Produce a directory entry instead of a regular file
        mtime: Modification time in epoch seconds (default: now)

    Returns:
        TarInfo owned by root:root with mode 0755 (dir) or 0644 (file)
    """
    info = tarfile.TarInfo(name=path)
    info.type = tarfile.DIRTYPE if is_dir else tarfile.REGTYPE
    info.mode = DIR_MODE if is_dir else FILE_MODE
    info.size = 0 if is_dir else size
    info.uid = 0
    info.gid = 0
    info.uname = OWNER
    info.gname = GROUP
    info.mtime = _now() if mtime is None else mtime
    return info


@dataclass
class ArchiveMember:
    """A file or directory to be written into a tar stream."""
    path: str
    payload: bytes = b""
    is_dir: bool = False

    @classmethod
    def file(cls, path: str, payload: bytes) -> "ArchiveMember":
        return cls(path=path, payload=payload)

    @classmethod
    def directory(cls, path: str) -> "ArchiveMember":
        if not path.endswith("/"):
            path += "/"
        return cls(path=path, is_dir=True)

    @property
    def size(self) -> int:
        return len(self.payload)

    @property
    def mode(self) -> int:
        return DIR_MODE if self.is_dir else FILE_MODE

    def header(self, mtime: Optional[int] = None) -> tarfile.TarInfo:
        return new_header(self.path, self.size, is_dir=self.is_dir, mtime=mtime)


def write_member(
    tar: tarfile.TarFile,
    member: ArchiveMember,
    mtime: Optional[int] = None,
) -> tarfile.TarInfo:
    """Write a member's header followed by its payload.

    Raises:
        ArchiveError: If the tar/gzip layer rejects the header or payload.
    """
    info = member.header(mtime)
    try:
        if member.is_dir:
            tar.addfile(info)
        else:
            tar.addfile(info, io.BytesIO(member.payload))
    except FRAMING_ERRORS as e:
        raise ArchiveError(f"failed to write {member.path}: {e}") from e
    logger.debug(f"Wrote {member.path} ({info.size} bytes, mode {info.mode:o})")
    return info


@contextmanager
def open_tgz(sink: BinaryIO) -> Iterator[tarfile.TarFile]:
    """
    Open a tar writer layered on a gzip writer over ``sink``.

    The tar trailer and the gzip trailer are both written when the block
    exits normally. ``sink`` itself is left open. If the block raises, the
    bytes already handed to ``sink`` are not a valid archive.

    Raises:
        ArchiveError: If the archive cannot be opened or finalized.
    """
    try:
        with gzip.GzipFile(filename="", mode="wb", fileobj=sink, mtime=0) as gz:
            with tarfile.open(fileobj=gz, mode="w", format=tarfile.PAX_FORMAT) as tar:
                yield tar
    except FRAMING_ERRORS as e:
        raise ArchiveError(f"archive write failed: {e}") from e


def read_members(data: bytes) -> List[Tuple[tarfile.TarInfo, bytes]]:
    """Read every member of a .tgz byte string, in archive order.

    Directories and other non-regular members are returned with empty
    content. Note that tarfile strips the trailing slash from directory
    names on read.

    Raises:
        ArchiveError: If ``data`` is not a readable gzip tar stream.
    """
    members = []
    try:
        with tarfile.open(fileobj=io.BytesIO(data), mode="r:gz") as tar:
            for info in tar:
                content = b""
                if info.isfile():
                    handle = tar.extractfile(info)
                    if handle is not None:
                        content = handle.read()
                members.append((info, content))
    except (tarfile.TarError, OSError, EOFError, zlib.error) as e:
        raise ArchiveError(f"cannot read archive: {e}") from e
    return members
