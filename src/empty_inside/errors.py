# Copyright 2025 Ben Mensi
# SPDX-License-Identifier: Apache-2.0

"""Exceptions raised while building release and job archives."""


class BuildError(Exception):
    """Base class for failures that abort a build."""
    pass


class ManifestEncodingError(BuildError):
    """Raised when a manifest cannot be encoded as YAML."""
    pass


class ShortWriteError(BuildError):
    """Raised when a sink accepts fewer bytes than were handed to it."""

    def __init__(self, expected: int, written: int):
        self.expected = expected
        self.written = written
        super().__init__(f"short write: wrote {written} of {expected} bytes")


class ArchiveError(BuildError):
    """Raised when the tar/gzip layer rejects a header or payload."""
    pass


class DeploymentError(BuildError):
    """Raised when a deployment or handcraft document cannot be parsed."""
    pass


class ConfigError(BuildError):
    """Raised when the configuration file is malformed."""
    pass
