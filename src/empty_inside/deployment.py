"""
Deployment parsing and release grouping.

Turns a deployment description (instance groups -> job references) or a
product handcraft file (job types -> templates) into the releases that have
to be built, each with the jobs it must package.

Copyright 2025 Ben Mensi
Licensed under the Apache License, Version 2.0
"""

from pathlib import Path
from typing import Any, Dict, Iterable, List, Tuple, Union

import yaml

from empty_inside.errors import DeploymentError
from empty_inside.schemas import (
    Deployment,
    DeploymentManifest,
    Handcraft,
    InstanceGroup,
    JobReference,
    JobType,
    Release,
    Template,
)


def _load_mapping(data: Union[str, bytes], what: str) -> Dict[str, Any]:
    """Parse a YAML document that must be a mapping (or empty)."""
    try:
        loaded = yaml.safe_load(data)
    except yaml.YAMLError as e:
        raise DeploymentError(f"invalid YAML in {what}: {e}") from e
    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise DeploymentError(f"{what} must contain a YAML mapping")
    return loaded


def _items(data: Dict[str, Any], key: str, what: str) -> List[Dict[str, Any]]:
    """Get a list of mappings under ``key``; missing or null means empty."""
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(item, dict) for item in value):
        raise DeploymentError(f"'{key}' in {what} must be a list of mappings")
    return value


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def load_deployment_manifest(data: Union[str, bytes]) -> DeploymentManifest:
    """Parse a deployment description.

    Expected shape::

        instance_groups:
        - name: group-1
          jobs:
          - name: job-1
            release: release-1

    Raises:
        DeploymentError: If the document is not valid YAML or has the wrong shape.
    """
    document = _load_mapping(data, "deployment manifest")
    groups = []
    for group in _items(document, "instance_groups", "deployment manifest"):
        group_name = _text(group.get("name"))
        jobs = [
            JobReference(name=_text(job.get("name")), release=_text(job.get("release")))
            for job in _items(group, "jobs", f"instance group '{group_name}'")
        ]
        groups.append(InstanceGroup(name=group_name, jobs=jobs))
    return DeploymentManifest(instance_groups=groups)


def load_handcraft(data: Union[str, bytes]) -> Handcraft:
    """Parse a product handcraft description (``job_types`` with templates).

    Raises:
        DeploymentError: If the document is not valid YAML or has the wrong shape.
    """
    document = _load_mapping(data, "handcraft")
    job_types = []
    for job_type in _items(document, "job_types", "handcraft"):
        type_name = _text(job_type.get("name"))
        templates = [
            Template(name=_text(template.get("name")), release=_text(template.get("release")))
            for template in _items(job_type, "templates", f"job type '{type_name}'")
        ]
        job_types.append(JobType(
            name=type_name,
            label=_text(job_type.get("label")),
            resource_label=_text(job_type.get("resource_label")),
            description=_text(job_type.get("description")),
            errand=bool(job_type.get("errand", False)),
            templates=templates,
        ))
    return Handcraft(job_types=job_types)


def read_deployment_manifest(path: Path) -> DeploymentManifest:
    """Load a deployment description from a file."""
    return load_deployment_manifest(Path(path).expanduser().read_text())


def read_handcraft(path: Path) -> Handcraft:
    """Load a handcraft description from a file."""
    return load_handcraft(Path(path).expanduser().read_text())


def group_job_references(references: Iterable[Tuple[str, str]]) -> List[Release]:
    """
    Group ``(job_name, release_name)`` pairs by release.

    Releases come out in the order their names are first seen; each release
    lists its job names deduplicated, in first-seen order. Names are passed
    through unchanged, empty ones included.

    Example:
        >>> group_job_references([("a", "r1"), ("b", "r2"), ("a", "r1")])
        [Release(name='r1', jobs=['a']), Release(name='r2', jobs=['b'])]
    """
    deployment = Deployment()
    for job_name, release_name in references:
        deployment.get_or_create_release(release_name).add_job(job_name)
    return deployment.releases


def create_deployment(manifest: DeploymentManifest) -> Deployment:
    """Group every job of every instance group by its owning release."""
    references = (
        (job.name, job.release)
        for group in manifest.instance_groups
        for job in group.jobs
    )
    return Deployment(releases=group_job_references(references))


def create_release_graph(handcraft: Handcraft) -> Deployment:
    """Group every template of every job type by its owning release."""
    references = (
        (template.name, template.release)
        for job_type in handcraft.job_types
        for template in job_type.templates
    )
    return Deployment(releases=group_job_references(references))


def format_release(release: Release) -> str:
    """Render a release as ``name -> [job, job]``."""
    return f"{release.name} -> [{', '.join(release.jobs)}]"
