"""
Configuration for mvn2src.

Settings are read once at start-up and passed to the components that need
them. Precedence, lowest first: built-in defaults, a YAML config file,
environment variables, command-line flags.
"""

import os
from dataclasses import dataclass, fields, replace
from pathlib import Path

import yaml

from mvn2src.utils.decompiler import DECOMPILE_TIMEOUT
from mvn2src.utils.tree_parser import DEFAULT_TREE_FILE, SOURCES_TIMEOUT, TREE_TIMEOUT


def default_repo_path():
    return Path.home() / '.m2' / 'repository'


ENV_VARS = {
    'THIRD_DIR': 'output_dir_name',
    'MAVEN_HOME': 'maven_home',
    'MAVEN_REPO': 'repo_path',
    'JAVA_CMD': 'java_command',
}


@dataclass(frozen=True)
class ExtractorConfig:
    repo_path: Path = None
    output_dir_name: str = 'third'
    tree_file_name: str = DEFAULT_TREE_FILE
    java_command: str = 'java'
    maven_home: str = None
    tree_timeout: float = TREE_TIMEOUT
    sources_timeout: float = SOURCES_TIMEOUT
    decompile_timeout: float = DECOMPILE_TIMEOUT

    def __post_init__(self):
        # frozen dataclass, so normalise through object.__setattr__
        repo_path = self.repo_path if self.repo_path is not None else default_repo_path()
        object.__setattr__(self, 'repo_path', Path(repo_path).expanduser())
        for name in ('tree_timeout', 'sources_timeout', 'decompile_timeout'):
            value = float(getattr(self, name))
            if value <= 0:
                raise ValueError(f"{name} must be positive, got {value}")
            object.__setattr__(self, name, value)

    def resolve_output_dir(self, project_dir, override=None):
        """
        Work out where extracted sources go.

        Args:
            project_dir (Path): The Maven project directory.
            override (str, optional): Explicit output directory from the command line.

        Returns:
            Path: ``override`` if given, else ``project_dir / output_dir_name``.
        """
        if override:
            return Path(override)
        return Path(project_dir) / self.output_dir_name


def load_yaml_config(config_path):
    """
    Read settings from a YAML file.

    Returns:
        dict: Setting names to values.

    Raises:
        ValueError: If the file is not a mapping or has unknown keys.
    """
    with open(config_path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f)

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file {config_path} must contain a mapping")

    known = {f.name for f in fields(ExtractorConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValueError(f"Unknown config keys in {config_path}: {', '.join(unknown)}")
    return data


def load_config(config_path=None, env=None, **overrides):
    """
    Build the configuration from defaults, a config file, the environment and overrides.

    Args:
        config_path (str, optional): YAML config file.
        env (dict, optional): Environment to read. Defaults to os.environ.
        **overrides: Explicit settings; None values are ignored.

    Returns:
        ExtractorConfig: The merged configuration.
    """
    env = os.environ if env is None else env

    settings = {}
    if config_path:
        settings.update(load_yaml_config(config_path))

    for var, name in ENV_VARS.items():
        value = env.get(var)
        if value:
            settings[name] = value

    settings.update({k: v for k, v in overrides.items() if v is not None})

    return replace(ExtractorConfig(), **settings)
