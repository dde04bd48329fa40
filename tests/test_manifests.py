# Copyright 2025 Ben Mensi
# SPDX-License-Identifier: Apache-2.0

"""Tests for manifest encoders."""

import io

import pytest
import yaml

from empty_inside.errors import ManifestEncodingError, ShortWriteError
from empty_inside.manifests import (
    encode_document,
    generate_job_manifest,
    generate_monit_file,
    generate_release_manifest,
    write_all,
)
from empty_inside.schemas import (
    JobManifest,
    ReleaseManifest,
    ReleaseManifestJob,
)


class ShortWriter:
    """Writer that always drops the last byte."""

    def __init__(self):
        self.data = b""

    def write(self, data):
        self.data += data[:-1]
        return len(data) - 1


class TestGenerateJobManifest:
    """Tests for generate_job_manifest."""

    def test_exact_content(self):
        buffer = io.BytesIO()
        generate_job_manifest(buffer, "random-job-name")
        assert buffer.getvalue() == b"---\nname: random-job-name\n"

    def test_size_and_sha1(self):
        buffer = io.BytesIO()
        size, sha1 = generate_job_manifest(buffer, "random-job-name")
        assert size == 26
        assert sha1 == "3b4346b4c483e8cae92e019acdae42243a8bee11"

    def test_does_not_contain_other_fields(self):
        buffer = io.BytesIO()
        generate_job_manifest(buffer, "random-job-name")
        content = buffer.getvalue().decode()
        assert "packages" not in content
        assert "templates" not in content
        assert "properties" not in content

    def test_short_write(self):
        with pytest.raises(ShortWriteError) as exc_info:
            generate_job_manifest(ShortWriter(), "random-job-name")
        assert exc_info.value.expected == 26
        assert exc_info.value.written == 25


class TestGenerateMonitFile:
    """Tests for generate_monit_file."""

    def test_does_nothing(self):
        buffer = io.BytesIO()
        size, sha1 = generate_monit_file(buffer)
        assert buffer.getvalue() == b""
        assert size == 0
        assert sha1 == "da39a3ee5e6b4b0d3255bfef95601890afd80709"


class TestGenerateReleaseManifest:
    """Tests for generate_release_manifest."""

    def test_contains_document_start_and_name(self):
        buffer = io.BytesIO()
        written = generate_release_manifest(buffer, ReleaseManifest(name="random-release"))
        content = buffer.getvalue().decode()
        assert content.startswith("---\n")
        assert "name: random-release" in content
        assert written == len(buffer.getvalue())

    def test_key_order_and_values(self):
        manifest = ReleaseManifest(
            name="release-name",
            version="stub-version",
            commit_hash="deadbeef",
            jobs=[ReleaseManifestJob(name="job", version="f" * 40, fingerprint="f" * 40, sha1="a" * 40)],
        )
        buffer = io.BytesIO()
        generate_release_manifest(buffer, manifest)

        document = yaml.safe_load(buffer.getvalue())
        assert list(document) == [
            "name", "version", "commit_hash", "uncommitted_changes", "jobs", "packages",
        ]
        assert document["uncommitted_changes"] is False
        assert document["jobs"] == [
            {"name": "job", "version": "f" * 40, "fingerprint": "f" * 40, "sha1": "a" * 40},
        ]
        assert document["packages"] == []

    def test_unencodable_manifest(self):
        """Values YAML cannot represent surface as ManifestEncodingError."""
        manifest = ReleaseManifest(name=object())
        with pytest.raises(ManifestEncodingError) as exc_info:
            generate_release_manifest(io.BytesIO(), manifest)
        assert isinstance(exc_info.value.__cause__, yaml.YAMLError)

    def test_short_write(self):
        with pytest.raises(ShortWriteError):
            generate_release_manifest(ShortWriter(), ReleaseManifest(name="r"))


class TestEncoding:
    """Tests for encode_document, write_all and JobManifest.to_dict."""

    def test_optional_fields_emitted_when_set(self):
        manifest = JobManifest(
            name="web",
            packages=["nginx"],
            templates={"ctl.erb": "bin/ctl"},
            properties={"port": 80},
        )
        document = yaml.safe_load(encode_document(manifest.to_dict()))
        assert document == {
            "name": "web",
            "packages": ["nginx"],
            "templates": {"ctl.erb": "bin/ctl"},
            "properties": {"port": 80},
        }

    def test_unicode_is_kept_literal(self):
        assert encode_document({"name": "jöb"}) == "---\nname: jöb\n".encode("utf-8")

    def test_write_all_treats_none_as_nothing_written(self):
        class NoneWriter:
            def write(self, data):
                return None

        with pytest.raises(ShortWriteError):
            write_all(NoneWriter(), b"abc")
