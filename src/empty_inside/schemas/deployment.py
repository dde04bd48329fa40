# Copyright 2025 Ben Mensi
# SPDX-License-Identifier: Apache-2.0

"""Deployment and handcraft schemas.

A deployment lists instance groups whose jobs each point at an owning
release. Grouping those references by release yields a ``Deployment``:
releases in first-seen order, each with its job names deduplicated in
first-seen order.
"""

from dataclasses import dataclass, field
from typing import Dict, List


@dataclass
class JobReference:
    """A job used by an instance group, with the release that ships it."""
    name: str
    release: str


@dataclass
class InstanceGroup:
    name: str
    jobs: List[JobReference] = field(default_factory=list)


@dataclass
class DeploymentManifest:
    """Parsed deployment description (``instance_groups`` document)."""
    instance_groups: List[InstanceGroup] = field(default_factory=list)


@dataclass
class Template:
    """A job template referenced by a handcraft job type."""
    name: str
    release: str


@dataclass
class JobType:
    name: str
    label: str = ""
    resource_label: str = ""
    description: str = ""
    errand: bool = False
    templates: List[Template] = field(default_factory=list)


@dataclass
class Handcraft:
    """Parsed product handcraft description (``job_types`` document)."""
    job_types: List[JobType] = field(default_factory=list)


@dataclass
class Release:
    """A release and the ordered, deduplicated job names it must package.

    ``_index`` maps each job name to its position in ``jobs`` and is the
    ordered-set membership check, so adding n jobs is O(n) rather than the
    O(n^2) of scanning ``jobs`` on every insert.
    """
    name: str
    jobs: List[str] = field(default_factory=list)
    _index: Dict[str, int] = field(default_factory=dict, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        initial, self.jobs = self.jobs, []
        for job_name in initial:
            self.add_job(job_name)

    def add_job(self, job_name: str) -> bool:
        """Append ``job_name`` unless already present. Returns True if added."""
        if job_name in self._index:
            return False
        self._index[job_name] = len(self.jobs)
        self.jobs.append(job_name)
        return True


@dataclass
class Deployment:
    """Releases in the order their names were first referenced."""
    releases: List[Release] = field(default_factory=list)
    _index: Dict[str, int] = field(default_factory=dict, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        for position, release in enumerate(self.releases):
            self._index.setdefault(release.name, position)

    def get_or_create_release(self, release_name: str) -> Release:
        position = self._index.get(release_name)
        if position is not None:
            return self.releases[position]
        release = Release(name=release_name)
        self._index[release_name] = len(self.releases)
        self.releases.append(release)
        return release
