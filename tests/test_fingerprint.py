# Copyright 2025 Ben Mensi
# SPDX-License-Identifier: Apache-2.0

"""Tests for fingerprint.py module."""

import hashlib

from empty_inside.fingerprint import (
    EMPTY_SHA1,
    FINGERPRINT_VERSION,
    MONIT_TAG,
    SPEC_TAG,
    FingerprintEntry,
    compute_fingerprint,
    file_mode_string,
    sha1_hex,
)


MANIFEST_SHA1 = "3b4346b4c483e8cae92e019acdae42243a8bee11"


def test_empty_sha1_constant():
    assert EMPTY_SHA1 == "da39a3ee5e6b4b0d3255bfef95601890afd80709"
    assert sha1_hex(b"") == EMPTY_SHA1


def test_file_mode_string():
    assert file_mode_string(0o644) == "100644"
    assert file_mode_string(0o755) == "100755"


def test_reference_vector():
    """Fingerprint of the random-job-name job members."""
    entries = [
        FingerprintEntry(tag=MONIT_TAG, digest=EMPTY_SHA1, mode=0o644),
        FingerprintEntry(tag=SPEC_TAG, digest=MANIFEST_SHA1, mode=0o644),
    ]
    assert compute_fingerprint(entries) == "a5aee13168a3aac83734f8bbb1d292fe704aef2f"


def test_concatenation_has_no_separators():
    entry = FingerprintEntry(tag="spec", digest="abc", mode=0o644)
    expected = hashlib.sha1(f"{FINGERPRINT_VERSION}specabc100644".encode()).hexdigest()
    assert compute_fingerprint([entry]) == expected


def test_no_entries_hashes_version_marker():
    assert compute_fingerprint([]) == sha1_hex(b"v2")


def test_order_matters():
    monit = FingerprintEntry(tag=MONIT_TAG, digest=EMPTY_SHA1, mode=0o644)
    spec = FingerprintEntry(tag=SPEC_TAG, digest=MANIFEST_SHA1, mode=0o644)
    assert compute_fingerprint([monit, spec]) != compute_fingerprint([spec, monit])


def test_tag_matters():
    """Renaming the spec tag changes the fingerprint."""
    spec = FingerprintEntry(tag=SPEC_TAG, digest=MANIFEST_SHA1, mode=0o644)
    renamed = FingerprintEntry(tag="job.MF", digest=MANIFEST_SHA1, mode=0o644)
    assert compute_fingerprint([spec]) != compute_fingerprint([renamed])


def test_fingerprint_format():
    fingerprint = compute_fingerprint([FingerprintEntry("monit", EMPTY_SHA1, 0o644)])
    assert len(fingerprint) == 40
    assert fingerprint == fingerprint.lower()
    int(fingerprint, 16)
