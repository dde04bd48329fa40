# Copyright 2025 Ben Mensi
# SPDX-License-Identifier: Apache-2.0

"""
Manifest encoders.

Each encoder writes a YAML document, prefixed with a document-start marker,
to a binary writer and reports how many bytes went out. Writers must report
the full length; anything less is a short write.
"""

from typing import Any, BinaryIO, Dict, Tuple

import yaml

from empty_inside.errors import ManifestEncodingError, ShortWriteError
from empty_inside.fingerprint import EMPTY_SHA1, sha1_hex
from empty_inside.schemas import JobManifest, ReleaseManifest


DOCUMENT_START = b"---\n"


def encode_document(data: Dict[str, Any]) -> bytes:
    """Encode a mapping as a YAML document, keys in insertion order."""
    try:
        body = yaml.safe_dump(
            data,
            default_flow_style=False,
            sort_keys=False,
            allow_unicode=True,
        )
    except yaml.YAMLError as e:
        raise ManifestEncodingError(f"cannot encode manifest: {e}") from e
    return DOCUMENT_START + body.encode("utf-8")


def write_all(writer: BinaryIO, data: bytes) -> int:
    """Write ``data`` and check the writer took all of it.

    Raises:
        ShortWriteError: If the writer reports fewer bytes than ``len(data)``.
    """
    written = writer.write(data)
    if written is None:
        written = 0
    if written != len(data):
        raise ShortWriteError(expected=len(data), written=written)
    return written


def generate_job_manifest(writer: BinaryIO, name: str) -> Tuple[int, str]:
    """
    Write a job's ``job.MF`` document.

    Only the name is populated, so the document is ``---\\nname: <name>\\n``.

    Returns:
        Tuple of (bytes written, SHA-1 of the written bytes)
    """
    data = encode_document(JobManifest(name=name).to_dict())
    written = write_all(writer, data)
    return written, sha1_hex(data)


def generate_monit_file(writer: BinaryIO) -> Tuple[int, str]:
    """Monit stub: writes nothing and returns the SHA-1 of empty input."""
    return 0, EMPTY_SHA1


def generate_release_manifest(writer: BinaryIO, manifest: ReleaseManifest) -> int:
    """Write a release's ``release.MF`` document. Returns bytes written."""
    return write_all(writer, encode_document(manifest.to_dict()))
