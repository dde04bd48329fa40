# Copyright 2025 Ben Mensi
# SPDX-License-Identifier: Apache-2.0

"""Manifest schemas written into job and release archives.

Field order in each ``to_dict`` is the order keys appear in the encoded
YAML document, and it is part of the archive format.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass
class JobManifest:
    """Contents of a job's ``job.MF``.

    Optional fields are dropped from the encoded document when empty, so a
    manifest built from a bare name encodes to ``name: <name>`` only.
    """
    name: str
    packages: List[str] = field(default_factory=list)
    templates: Dict[str, str] = field(default_factory=dict)
    properties: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"name": self.name}
        if self.packages:
            data["packages"] = list(self.packages)
        if self.templates:
            data["templates"] = dict(self.templates)
        if self.properties:
            data["properties"] = dict(self.properties)
        return data


@dataclass
class ReleaseManifestJob:
    """One packaged job as listed in ``release.MF``."""
    name: str
    version: str
    fingerprint: str
    sha1: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "version": self.version,
            "fingerprint": self.fingerprint,
            "sha1": self.sha1,
        }


@dataclass
class ReleaseManifestPackage:
    """One packaged package as listed in ``release.MF``.

    Packages are never resolved, so releases always carry an empty list.
    """
    name: str
    version: str
    fingerprint: str
    sha1: str
    dependencies: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "version": self.version,
            "fingerprint": self.fingerprint,
            "sha1": self.sha1,
            "dependencies": list(self.dependencies),
        }


@dataclass
class ReleaseManifest:
    """Contents of a release's ``release.MF``."""
    name: str
    version: str = ""
    commit_hash: str = ""
    uncommitted_changes: bool = False
    jobs: List[ReleaseManifestJob] = field(default_factory=list)
    packages: List[ReleaseManifestPackage] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "version": self.version,
            "commit_hash": self.commit_hash,
            "uncommitted_changes": self.uncommitted_changes,
            "jobs": [job.to_dict() for job in self.jobs],
            "packages": [package.to_dict() for package in self.packages],
        }
