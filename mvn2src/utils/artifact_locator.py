"""
Artifact locator for mvn2src.

Finds binary and source jars of a dependency in the local Maven repository,
laid out as ``<repo>/<group/path>/<artifactId>/<version>/<artifactId>-<version>[-sources].<ext>``.
"""

import logging
from pathlib import Path

from mvn2src.utils.models import ArtifactLocation


class ArtifactLocator:
    """
    Looks up artifacts in a local Maven repository. Nothing is cached.
    """

    def __init__(self, repo_path, logger=None):
        """
        Initialize the locator.

        Args:
            repo_path (Path): Root of the local repository (usually ~/.m2/repository).
            logger (logging.Logger, optional): Logger instance. If None, a new logger is created.
        """
        self.repo_path = Path(repo_path)
        self.logger = logger or logging.getLogger(__name__)

    def artifact_dir(self, dependency):
        """Directory holding every file of one artifact version."""
        group_path = Path(*dependency.group_id.split('.'))
        return self.repo_path / group_path / dependency.artifact_id / dependency.version

    def find_artifacts(self, dependency, extension='jar'):
        """
        Find the binary and source archives for a dependency.

        Args:
            dependency (Dependency): The dependency to look up.
            extension (str): Packaging extension of the archives.

        Returns:
            ArtifactLocation: Paths of the archives that exist.
        """
        base_dir = self.artifact_dir(dependency)
        base_name = f"{dependency.artifact_id}-{dependency.version}"

        binary_jar = base_dir / f"{base_name}.{extension}"
        source_jar = base_dir / f"{base_name}-sources.{extension}"

        binary_exists = binary_jar.exists()
        source_exists = source_jar.exists()
        self.logger.debug(
            f"Lookup {dependency.key}: binary={binary_exists} source={source_exists} in {base_dir}"
        )

        if binary_exists and source_exists:
            return ArtifactLocation.both(binary_jar, source_jar)
        if source_exists:
            return ArtifactLocation.source_only(source_jar)
        if binary_exists:
            return ArtifactLocation.binary_only(binary_jar)
        return ArtifactLocation.not_found()

    def find_source_jar(self, dependency):
        return self.find_artifacts(dependency).source_path

    def find_binary_jar(self, dependency):
        return self.find_artifacts(dependency).binary_path
