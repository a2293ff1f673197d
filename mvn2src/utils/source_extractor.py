"""
Source extractor for mvn2src.

This module drives a whole run:
1. List the project's dependencies with ``mvn dependency:tree``
2. Ask Maven to download source jars
3. For each dependency, unpack its source jar, or decompile its binary jar
4. Report how many dependencies ended up in each outcome
"""

import logging
from pathlib import Path

from tqdm import tqdm

from mvn2src.utils.archive_extractor import copy_directory, delete_directory, extract_archive
from mvn2src.utils.artifact_locator import ArtifactLocator
from mvn2src.utils.config import ExtractorConfig
from mvn2src.utils.decompiler import DecompilerWrapper
from mvn2src.utils.models import ExtractionStats
from mvn2src.utils.tree_parser import DependencyTreeParser


SEPARATOR = "=" * 60


class MavenSourceExtractor:
    """
    Extracts the sources of a Maven project's dependencies into one directory.
    """

    def __init__(self, project_dir, maven_command, output_dir, decompiler_path=None,
                 direct_only=False, config=None, logger=None, show_progress=False):
        """
        Initialize the extractor.

        Args:
            project_dir (Path): Maven project directory (containing pom.xml).
            maven_command (str): Maven executable.
            output_dir (Path): Directory receiving one sub-directory per dependency.
            decompiler_path (Path, optional): java-decompiler.jar; without it binary-only
                dependencies are skipped.
            direct_only (bool): Process only direct dependencies.
            config (ExtractorConfig, optional): Repository location, timeouts, etc.
            logger (logging.Logger, optional): Logger instance. If None, a new logger is created.
            show_progress (bool): Show a progress bar while processing dependencies.
        """
        self.config = config or ExtractorConfig()
        self.project_dir = Path(project_dir)
        self.maven_command = maven_command
        self.output_dir = Path(output_dir)
        self.direct_only = direct_only
        self.show_progress = show_progress
        self.logger = logger or logging.getLogger(__name__)

        self.decompiler = None
        if decompiler_path is not None:
            self.decompiler = DecompilerWrapper(
                decompiler_path,
                java_command=self.config.java_command,
                timeout=self.config.decompile_timeout,
                logger=self.logger
            )

        self.parser = DependencyTreeParser(
            maven_command,
            self.project_dir,
            direct_only=direct_only,
            tree_file_name=self.config.tree_file_name,
            tree_timeout=self.config.tree_timeout,
            sources_timeout=self.config.sources_timeout,
            logger=self.logger
        )
        self.locator = ArtifactLocator(self.config.repo_path, logger=self.logger)

    def decompiler_available(self):
        return self.decompiler is not None and self.decompiler.is_available()

    def run(self):
        """
        Run the extraction.

        Returns:
            ExtractionStats: Counts per outcome.

        Raises:
            DependencyTreeError: If the dependency list cannot be obtained.
        """
        self.logger.info(SEPARATOR)
        self.logger.info("Maven Dependency Source Extractor")
        self.logger.info(SEPARATOR)
        self.logger.info(f"Project Directory: {self.project_dir}")
        self.logger.info(f"Output Directory: {self.output_dir}")
        self.logger.info(f"Maven Command: {self.maven_command}")
        self.logger.info(f"Local Repository: {self.config.repo_path}")
        self.logger.info(f"Direct Dependencies Only: {self.direct_only}")
        self.logger.info(f"Decompiler: {'Available' if self.decompiler_available() else 'Not available'}")
        self.logger.info(SEPARATOR)

        dependencies = self.parser.get_dependency_tree()
        if not dependencies:
            self.logger.warning("No dependencies found")
            return ExtractionStats(total=0)

        self.parser.download_sources()

        self.logger.info("Processing dependencies...")
        self.output_dir.mkdir(parents=True, exist_ok=True)

        stats = ExtractionStats(total=len(dependencies))

        items = enumerate(dependencies, start=1)
        if self.show_progress:
            items = tqdm(items, total=len(dependencies), desc="Extracting sources", unit="dep")

        for index, dep in items:
            self.logger.info(f"\n[{index}/{stats.total}] Processing: {dep.key}")
            try:
                self.process_dependency(dep, stats)
            except Exception as e:
                self.logger.error(f"  ✗ Unexpected error while processing {dep.key}: {e}")
                stats.increment_failed()

        self.print_statistics(stats)
        return stats

    def process_dependency(self, dep, stats):
        """
        Extract or decompile one dependency and record the outcome in ``stats``.
        """
        location = self.locator.find_artifacts(dep)
        artifact_dir = self.output_dir / dep.artifact_id

        if location.has_source():
            self.logger.info(f"  ✓ Found source JAR: {location.source_path.name}")

            if extract_archive(location.source_path, artifact_dir):
                self.logger.info(f"  ✓ Source extracted to: {artifact_dir}")
                stats.increment_source_extracted()
            else:
                stats.increment_failed()
            return

        if not location.has_binary():
            self.logger.info("  ✗ Artifact not found (binary and source JARs not available)")
            stats.increment_failed()
            return

        self.logger.info("  ⚠ Source JAR not found, using binary JAR")

        if not self.decompiler_available():
            self.logger.info("  ⚠ Skipped (decompiler not configured)")
            stats.increment_skipped()
            return

        self.logger.info(f"  → Decompiling: {location.binary_path.name}")
        temp_dir = artifact_dir.with_name(f"{artifact_dir.name}_temp")

        if self.decompiler.decompile(location.binary_path, temp_dir) and self._relocate(temp_dir, artifact_dir):
            self.logger.info(f"  ✓ Decompilation completed: {artifact_dir}")
            stats.increment_decompiled()
        else:
            stats.increment_failed()

    def _relocate(self, temp_dir, artifact_dir):
        """
        Move decompiler output from its scratch directory to ``artifact_dir``.

        The decompiler writes one entry into the scratch directory: a directory
        of sources, or a jar of sources when given a jar.
        """
        try:
            entries = sorted(temp_dir.iterdir()) if temp_dir.exists() else []
            if not entries:
                self.logger.error(f"Decompiler produced no output in {temp_dir}")
                return False

            first = entries[0]
            if first.is_dir():
                moved = copy_directory(first, artifact_dir)
            else:
                if artifact_dir.exists():
                    delete_directory(artifact_dir)
                moved = extract_archive(first, artifact_dir)

            if moved:
                delete_directory(temp_dir)
            return moved
        except Exception as e:
            self.logger.error(f"Failed to organize decompiled output: {e}")
            return False

    def print_statistics(self, stats):
        self.logger.info(SEPARATOR)
        self.logger.info("Extraction Complete!")
        self.logger.info(SEPARATOR)
        self.logger.info(f"Total Dependencies: {stats.total}")
        self.logger.info(f"Sources Extracted: {stats.source_extracted}")
        self.logger.info(f"Decompiled: {stats.decompiled}")
        self.logger.info(f"Skipped: {stats.skipped}")
        self.logger.info(f"Failed: {stats.failed}")
        self.logger.info(f"Output Directory: {self.output_dir.resolve()}")
        self.logger.info(SEPARATOR)
