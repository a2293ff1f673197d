"""
Dependency tree parser for mvn2src.

This module runs ``mvn dependency:tree`` for a project and turns its output
into a flat list of dependencies. Maven prints the tree like this::

    com.example:project:jar:1.0
    +- org.json:json:jar:20230618:compile
    |  \\- com.other:lib:jar:2.1:runtime
    \\- junit:junit:jar:4.13.2:test
       \\- org.hamcrest:hamcrest-core:jar:1.3:test

Each ``|  `` (or ``   `` under a last child) prefix is one level of nesting.
"""

import logging
import re
from pathlib import Path

from mvn2src.utils.models import DEFAULT_SCOPE, Dependency
from mvn2src.utils.process_runner import ProcessTimeoutError, execute


DEFAULT_TREE_FILE = "dependency-tree.txt"
TREE_TIMEOUT = 5 * 60
SOURCES_TIMEOUT = 10 * 60

CONTINUATION_MARKERS = ("|  ", "   ")
BRANCH_MARKERS = ("+- ", "\\- ")

# groupId:artifactId:type followed by [classifier:]version[:scope]
DEPENDENCY_PATTERN = re.compile(
    r'([\w.-]+):([\w.-]+):(jar|war|ear|pom|aar)((?::[\w.-]+){1,3})(?![\w.:-])'
)

logger = logging.getLogger(__name__)


class DependencyTreeError(RuntimeError):
    """Raised when the dependency tree cannot be produced."""


def strip_tree_markers(line):
    """
    Remove the ASCII tree decoration from one line.

    Returns:
        tuple: (depth, remainder) where depth counts continuation markers.
    """
    depth = 0
    while line.startswith(CONTINUATION_MARKERS):
        depth += 1
        line = line[3:]

    if line.startswith(BRANCH_MARKERS):
        line = line[3:]
    elif line.startswith("|"):
        line = line[1:].strip()

    return depth, line


def parse_coordinate(text):
    """
    Find a Maven coordinate in ``text``.

    Returns:
        tuple or None: (group_id, artifact_id, version, scope) or None if nothing matches.
    """
    match = DEPENDENCY_PATTERN.search(text)
    if not match:
        return None

    group_id, artifact_id, _packaging, tail = match.groups()
    fields = tail[1:].split(':')
    if len(fields) == 3:
        _classifier, version, scope = fields
    elif len(fields) == 2:
        version, scope = fields
    else:
        version, scope = fields[0], None

    return group_id, artifact_id, version, scope or DEFAULT_SCOPE


def parse_tree(lines, direct_only=False):
    """
    Parse ``dependency:tree`` output into dependencies.

    The first coordinate is the project itself and is dropped. Duplicates
    (same groupId:artifactId:version) keep their first occurrence.

    Args:
        lines (iterable): Lines of the tree output.
        direct_only (bool): Keep only the top-level (direct) dependencies.

    Returns:
        list: Dependency objects in the order they first appear.
    """
    dependencies = []
    seen = set()
    project_skipped = False

    for raw_line in lines:
        depth, remainder = strip_tree_markers(raw_line.rstrip('\r\n'))

        coordinate = parse_coordinate(remainder)
        if coordinate is None:
            continue

        group_id, artifact_id, version, scope = coordinate
        key = f"{group_id}:{artifact_id}:{version}"

        if not project_skipped:
            project_skipped = True
            logger.debug(f"Skipping project itself: {key}")
            continue

        if direct_only and depth > 0:
            logger.debug(f"Skipping transitive dependency (level {depth}): {key}")
            continue

        if key in seen:
            continue
        seen.add(key)
        dependencies.append(Dependency(group_id, artifact_id, version, scope))

    return dependencies


class DependencyTreeParser:
    """
    Runs Maven in a project directory to list and download dependencies.
    """

    def __init__(self, maven_command, project_dir, direct_only=False,
                 tree_file_name=DEFAULT_TREE_FILE, tree_timeout=TREE_TIMEOUT,
                 sources_timeout=SOURCES_TIMEOUT, logger=None):
        """
        Initialize the parser.

        Args:
            maven_command (str): Maven executable to run.
            project_dir (Path): Directory containing pom.xml.
            direct_only (bool): Keep only direct dependencies.
            tree_file_name (str): Scratch file Maven writes the tree to.
            tree_timeout (float): Timeout for dependency:tree, in seconds.
            sources_timeout (float): Timeout for dependency:sources, in seconds.
            logger (logging.Logger, optional): Logger instance. If None, a new logger is created.
        """
        self.maven_command = maven_command
        self.project_dir = Path(project_dir)
        self.direct_only = direct_only
        self.tree_file_name = tree_file_name
        self.tree_timeout = tree_timeout
        self.sources_timeout = sources_timeout
        self.logger = logger or logging.getLogger(__name__)

    def get_dependency_tree(self):
        """
        Run ``mvn dependency:tree`` and parse the result.

        Returns:
            list: Dependency objects.

        Raises:
            DependencyTreeError: If pom.xml is missing, Maven fails or the tree file is not written.
        """
        pom_file = self.project_dir / "pom.xml"
        if not pom_file.exists():
            raise DependencyTreeError(f"pom.xml not found: {pom_file}")

        self.logger.info(f"Parsing dependency tree: {pom_file}")

        cmd = [
            self.maven_command,
            'dependency:tree',
            f'-DoutputFile={self.tree_file_name}',
            '-DappendOutput=false'
        ]

        try:
            result = execute(cmd, working_dir=self.project_dir, timeout=self.tree_timeout)
        except ProcessTimeoutError as e:
            raise DependencyTreeError("Maven command timed out") from e
        except OSError as e:
            raise DependencyTreeError(f"Failed to run Maven: {e}") from e

        if result.exit_code != 0:
            raise DependencyTreeError(f"Maven command failed: {result.stderr or result.stdout}")

        tree_file = self.project_dir / self.tree_file_name
        if not tree_file.exists():
            raise DependencyTreeError(f"Dependency tree file not found: {tree_file}")

        try:
            with open(tree_file, 'r', encoding='utf-8') as f:
                lines = f.read().splitlines()
        finally:
            tree_file.unlink(missing_ok=True)

        dependencies = parse_tree(lines, direct_only=self.direct_only)
        self.logger.info(f"Found {len(dependencies)} dependencies (direct only: {self.direct_only})")
        return dependencies

    def download_sources(self):
        """
        Run ``mvn dependency:sources`` once for the whole project.

        Failures are logged and ignored; fewer source jars will be found later.

        Returns:
            bool: True if Maven reported success.
        """
        self.logger.info("Downloading source JARs...")

        cmd = [self.maven_command, 'dependency:sources']

        try:
            result = execute(cmd, working_dir=self.project_dir, timeout=self.sources_timeout)
        except (OSError, ProcessTimeoutError) as e:
            self.logger.warning(f"Failed to download sources: {e}")
            return False

        if result.exit_code == 0:
            self.logger.info("Source JARs download completed")
            return True

        self.logger.warning(f"Source JARs download failed: {result.stderr or result.stdout}")
        return False
