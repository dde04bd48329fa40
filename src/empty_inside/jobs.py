# Copyright 2025 Ben Mensi
# SPDX-License-Identifier: Apache-2.0

"""
Job archive builder.

A job archive is a gzip tar holding exactly two members, always in this
order: the monit stub (``./monit``) and the job manifest (``./job.MF``).
The fingerprint is computed over those same members in the same order.
"""

import io
import logging
from dataclasses import dataclass
from typing import BinaryIO, Callable, Dict, List, Optional, Tuple

from empty_inside.archive import ArchiveMember, open_tgz, write_member
from empty_inside.fingerprint import (
    MONIT_TAG,
    SPEC_TAG,
    FingerprintEntry,
    compute_fingerprint,
)
from empty_inside.manifests import generate_job_manifest, generate_monit_file


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class JobMember:
    """A fixed member of every job archive and its fingerprint tag."""
    path: str
    tag: str


MONIT = JobMember(path="./monit", tag=MONIT_TAG)
JOB_MANIFEST = JobMember(path="./job.MF", tag=SPEC_TAG)

# Write order of job archive members.
JOB_MEMBERS = (MONIT, JOB_MANIFEST)


def generate_job_archive(
    writer: BinaryIO,
    name: str,
    mtime: Optional[int] = None,
) -> str:
    """
    Write a job archive for ``name`` to ``writer``.

    Args:
        writer: Binary sink receiving the gzip tar stream
        name: Job name, written verbatim into ``job.MF``
        mtime: Entry modification time in epoch seconds (default: now)

    Returns:
        The job fingerprint (40 lower-case hex characters)

    Raises:
        ArchiveError: If the tar/gzip layer rejects a write
        ManifestEncodingError: If the job manifest cannot be encoded
    """
    encoders: Dict[JobMember, Callable[[BinaryIO], Tuple[int, str]]] = {
        MONIT: generate_monit_file,
        JOB_MANIFEST: lambda buffer: generate_job_manifest(buffer, name),
    }

    entries: List[FingerprintEntry] = []
    with open_tgz(writer) as tar:
        for job_member in JOB_MEMBERS:
            buffer = io.BytesIO()
            _, digest = encoders[job_member](buffer)
            member = ArchiveMember.file(job_member.path, buffer.getvalue())
            write_member(tar, member, mtime)
            entries.append(FingerprintEntry(tag=job_member.tag, digest=digest, mode=member.mode))

    fingerprint = compute_fingerprint(entries)
    logger.debug(f"Job {name} fingerprint {fingerprint}")
    return fingerprint
