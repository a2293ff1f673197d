"""
Archive extractor for mvn2src.

This module unpacks source archives and moves decompiler output around:
- ZIP family (zip, jar, war, ear, aar)
- gzip-compressed TAR (tar.gz, tgz)

Entries that would land outside the output directory are skipped.
"""

import logging
import shutil
import tarfile
import zipfile
import zlib
from pathlib import Path


ZIP_SUFFIXES = ('.zip', '.jar', '.war', '.ear', '.aar')
TAR_GZ_SUFFIXES = ('.tar.gz', '.tgz')

logger = logging.getLogger(__name__)


def is_supported_archive(path):
    name = Path(path).name.lower()
    return name.endswith(ZIP_SUFFIXES) or name.endswith(TAR_GZ_SUFFIXES)


def _resolve_entry(output_dir, entry_name):
    """
    Map an archive entry name to a path under ``output_dir``.

    Returns:
        Path or None: The target path, or None if it escapes ``output_dir``.
    """
    target = (output_dir / entry_name).resolve()
    if not target.is_relative_to(output_dir.resolve()):
        logger.warning(f"Skipping entry outside of output directory: {entry_name}")
        return None
    return target


def extract_archive(archive_path, output_dir):
    """
    Extract an archive into a directory, overwriting existing files.

    Args:
        archive_path (Path): Archive to extract.
        output_dir (Path): Directory to extract into; created if needed.

    Returns:
        bool: True if extraction succeeded, False otherwise.
    """
    archive_path = Path(archive_path)
    output_dir = Path(output_dir)
    name = archive_path.name.lower()

    try:
        output_dir.mkdir(parents=True, exist_ok=True)

        if name.endswith(ZIP_SUFFIXES):
            _extract_zip(archive_path, output_dir)
        elif name.endswith(TAR_GZ_SUFFIXES):
            _extract_tar_gz(archive_path, output_dir)
        else:
            logger.error(f"Unsupported file format: {archive_path}")
            return False
    except (OSError, EOFError, zlib.error, zipfile.BadZipFile, tarfile.TarError) as e:
        logger.error(f"Failed to extract archive {archive_path}: {e}")
        return False

    return True


def _extract_zip(zip_path, output_dir):
    logger.debug(f"Extracting ZIP archive: {zip_path}")

    with zipfile.ZipFile(zip_path) as zf:
        for info in zf.infolist():
            target = _resolve_entry(output_dir, info.filename)
            if target is None:
                continue

            if info.is_dir():
                target.mkdir(parents=True, exist_ok=True)
                continue

            target.parent.mkdir(parents=True, exist_ok=True)
            with zf.open(info) as src, open(target, 'wb') as dst:
                shutil.copyfileobj(src, dst)


def _extract_tar_gz(tar_path, output_dir):
    logger.debug(f"Extracting TAR.GZ archive: {tar_path}")

    with tarfile.open(tar_path, mode='r:gz') as tf:
        for member in tf:
            # Directories only come into being as parents of files
            if member.isdir():
                continue
            if not member.isfile():
                logger.debug(f"Skipping non-regular entry: {member.name}")
                continue

            target = _resolve_entry(output_dir, member.name)
            if target is None:
                continue

            target.parent.mkdir(parents=True, exist_ok=True)
            src = tf.extractfile(member)
            if src is None:
                continue
            with src, open(target, 'wb') as dst:
                shutil.copyfileobj(src, dst)


def _copy_file(src, dst):
    """Copy one file for copytree, logging instead of raising on failure."""
    try:
        return shutil.copy2(src, dst)
    except OSError as e:
        logger.error(f"Failed to copy file {src}: {e}")
        return dst


def copy_directory(source, target):
    """
    Copy a directory tree, replacing ``target`` if it already exists.

    Individual files that fail to copy are logged and skipped.

    Args:
        source (Path): Directory to copy.
        target (Path): Destination directory.

    Returns:
        bool: False only if the copy could not be carried out at all.
    """
    source = Path(source)
    target = Path(target)

    if not source.is_dir():
        logger.error(f"Failed to copy directory: {source} is not a directory")
        return False

    if target.exists() or target.is_symlink():
        delete_directory(target)

    try:
        shutil.copytree(source, target, copy_function=_copy_file, dirs_exist_ok=True)
    except shutil.Error as e:
        # Per-entry failures (e.g. directory permissions) collected by copytree
        for src, _, reason in e.args[0]:
            logger.error(f"Failed to copy {src}: {reason}")
    except OSError as e:
        logger.error(f"Failed to copy directory {source} -> {target}: {e}")
        return False

    return True


def delete_directory(directory):
    """
    Delete a directory tree.

    Missing entries are ignored; anything left behind is logged.

    Args:
        directory (Path): Directory to delete.
    """
    directory = Path(directory)
    if not directory.exists() and not directory.is_symlink():
        return

    if directory.is_symlink() or not directory.is_dir():
        directory.unlink(missing_ok=True)
        return

    shutil.rmtree(directory, ignore_errors=True)
    if directory.exists():
        logger.error(f"Failed to delete {directory} completely")
