# Copyright 2025 Ben Mensi
# SPDX-License-Identifier: Apache-2.0

"""
Release archive builder.

Layout, in write order:
- ``./jobs/`` directory
- ``./jobs/<job>.tgz`` for each job, in the order given
- ``./release.MF``

Each job's ``sha1`` in the manifest is taken over its compressed archive
bytes, while its fingerprint is taken over the uncompressed member digests.
Release consumers expect both values in that form.
"""

import io
import logging
from typing import BinaryIO, Iterable, Optional

from empty_inside.archive import ArchiveMember, open_tgz, write_member
from empty_inside.fingerprint import sha1_hex
from empty_inside.jobs import generate_job_archive
from empty_inside.manifests import generate_release_manifest
from empty_inside.schemas import ReleaseManifest, ReleaseManifestJob


logger = logging.getLogger(__name__)

JOBS_DIR = "./jobs/"
RELEASE_MANIFEST_PATH = "./release.MF"

DEFAULT_VERSION = "stub-version"
DEFAULT_COMMIT_HASH = "deadbeef"


def job_archive_path(job_name: str) -> str:
    """Path of a job's archive inside the release archive."""
    return f"{JOBS_DIR}{job_name}.tgz"


def generate_release_archive(
    writer: BinaryIO,
    name: str,
    jobs: Iterable[str],
    version: str = DEFAULT_VERSION,
    commit_hash: str = DEFAULT_COMMIT_HASH,
    uncommitted_changes: bool = False,
    mtime: Optional[int] = None,
) -> ReleaseManifest:
    """
    Write a release archive for ``name`` packaging ``jobs`` to ``writer``.

    Jobs are archived one after another in the order given; callers pass an
    already deduplicated list. If any job fails the whole build fails, and
    whatever reached ``writer`` must be discarded.

    Args:
        writer: Binary sink receiving the gzip tar stream
        name: Release name
        jobs: Ordered job names
        version: Release version recorded in ``release.MF``
        commit_hash: Commit recorded in ``release.MF``
        uncommitted_changes: Dirty-tree flag recorded in ``release.MF``
        mtime: Entry modification time in epoch seconds (default: now)

    Returns:
        The ReleaseManifest written as ``release.MF``
    """
    manifest = ReleaseManifest(
        name=name,
        version=version,
        commit_hash=commit_hash,
        uncommitted_changes=uncommitted_changes,
    )

    with open_tgz(writer) as tar:
        write_member(tar, ArchiveMember.directory(JOBS_DIR), mtime)

        for job_name in jobs:
            job_buffer = io.BytesIO()
            fingerprint = generate_job_archive(job_buffer, job_name, mtime=mtime)
            job_bytes = job_buffer.getvalue()

            write_member(tar, ArchiveMember.file(job_archive_path(job_name), job_bytes), mtime)
            manifest.jobs.append(ReleaseManifestJob(
                name=job_name,
                version=fingerprint,
                fingerprint=fingerprint,
                sha1=sha1_hex(job_bytes),
            ))
            logger.info(f"Packaged job {job_name} into release {name} ({len(job_bytes)} bytes)")

        manifest_buffer = io.BytesIO()
        generate_release_manifest(manifest_buffer, manifest)
        write_member(tar, ArchiveMember.file(RELEASE_MANIFEST_PATH, manifest_buffer.getvalue()), mtime)

    logger.info(f"Built release {name} with {len(manifest.jobs)} jobs")
    return manifest
