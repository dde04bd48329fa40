# Copyright 2025 Ben Mensi
# SPDX-License-Identifier: Apache-2.0

"""Empty-inside schemas."""

from empty_inside.schemas.deployment import (
    Deployment,
    DeploymentManifest,
    Handcraft,
    InstanceGroup,
    JobReference,
    JobType,
    Release,
    Template,
)
from empty_inside.schemas.manifests import (
    JobManifest,
    ReleaseManifest,
    ReleaseManifestJob,
    ReleaseManifestPackage,
)

__all__ = [
    "Deployment",
    "DeploymentManifest",
    "Handcraft",
    "InstanceGroup",
    "JobReference",
    "JobType",
    "Release",
    "Template",
    "JobManifest",
    "ReleaseManifest",
    "ReleaseManifestJob",
    "ReleaseManifestPackage",
]
