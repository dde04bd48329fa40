# Copyright 2025 Ben Mensi
# SPDX-License-Identifier: Apache-2.0

"""Content fingerprints for job archives.

A job fingerprint is the SHA-1 of the version marker followed by, for each
member in write order, its tag, its content SHA-1 and its file mode, all
concatenated without separators. Wall-clock time and ownership never enter
the fingerprint.

The job manifest is tagged ``spec`` even though the file is ``job.MF``.
Changing a tag changes every fingerprint.
"""

import hashlib
from dataclasses import dataclass
from typing import Iterable


FINGERPRINT_VERSION = "v2"

MONIT_TAG = "monit"
SPEC_TAG = "spec"


def sha1_hex(data: bytes) -> str:
    """Return the SHA-1 hex digest of raw bytes."""
    return hashlib.sha1(data).hexdigest()


EMPTY_SHA1 = sha1_hex(b"")


def file_mode_string(mode: int) -> str:
    """Spell a regular file's permission bits the way release tooling does.

    >>> file_mode_string(0o644)
    '100644'
    """
    return f"100{mode:o}"


@dataclass(frozen=True)
class FingerprintEntry:
    """One member's contribution to a job fingerprint."""
    tag: str
    digest: str
    mode: int

    def encode(self) -> str:
        return f"{self.tag}{self.digest}{file_mode_string(self.mode)}"


def compute_fingerprint(entries: Iterable[FingerprintEntry]) -> str:
    """SHA-1 of the version marker plus every entry, in the order given."""
    parts = [FINGERPRINT_VERSION]
    parts.extend(entry.encode() for entry in entries)
    return sha1_hex("".join(parts).encode("utf-8"))
