"""
Tests for the archive extractor.
"""

import io
import tarfile
import zipfile
from pathlib import Path

from mvn2src.utils.archive_extractor import (
    copy_directory,
    delete_directory,
    extract_archive,
    is_supported_archive,
)


def _make_jar(path, entries):
    with zipfile.ZipFile(path, "w") as zf:
        for name, content in entries.items():
            if content is None:
                zf.writestr(zipfile.ZipInfo(name), "")
            else:
                zf.writestr(name, content)
    return path


def _make_tar_gz(path, entries, directories=()):
    with tarfile.open(path, "w:gz") as tf:
        for name in directories:
            info = tarfile.TarInfo(name)
            info.type = tarfile.DIRTYPE
            tf.addfile(info)
        for name, content in entries.items():
            data = content.encode("utf-8")
            info = tarfile.TarInfo(name)
            info.size = len(data)
            tf.addfile(info, io.BytesIO(data))
    return path


def _tree(root):
    return sorted(
        (str(p.relative_to(root)), p.read_text() if p.is_file() else None)
        for p in root.rglob("*")
    )


def test_extract_jar(tmp_path):
    """Test extracting a jar with directory and file entries."""
    jar = _make_jar(tmp_path / "lib-1.0-sources.jar", {
        "META-INF/": None,
        "META-INF/MANIFEST.MF": "Manifest-Version: 1.0\n",
        "com/acme/Lib.java": "class Lib {}\n",
        "empty/": None,
    })
    out = tmp_path / "out"

    assert extract_archive(jar, out) is True
    assert (out / "com" / "acme" / "Lib.java").read_text() == "class Lib {}\n"
    assert (out / "META-INF" / "MANIFEST.MF").exists()
    assert (out / "empty").is_dir()


def test_extract_zip_twice_is_idempotent(tmp_path):
    """Test that extracting the same archive twice yields the same tree."""
    archive = _make_jar(tmp_path / "src.zip", {"a/b.txt": "one", "c.txt": "two"})
    out = tmp_path / "out"

    assert extract_archive(archive, out)
    first = _tree(out)
    assert extract_archive(archive, out)

    assert _tree(out) == first


def test_extract_overwrites_existing_files(tmp_path):
    """Test that files already present are replaced."""
    archive = _make_jar(tmp_path / "src.jar", {"a.txt": "new"})
    out = tmp_path / "out"
    out.mkdir()
    (out / "a.txt").write_text("old")

    assert extract_archive(archive, out)
    assert (out / "a.txt").read_text() == "new"


def test_extract_tar_gz(tmp_path):
    """Test extracting a tar.gz; empty directory entries are dropped."""
    archive = _make_tar_gz(
        tmp_path / "src.tar.gz",
        {"pkg/Main.java": "class Main {}"},
        directories=("pkg", "empty")
    )
    out = tmp_path / "out"

    assert extract_archive(archive, out) is True
    assert (out / "pkg" / "Main.java").read_text() == "class Main {}"
    assert not (out / "empty").exists()


def test_extract_tgz_suffix(tmp_path):
    """Test that the .tgz suffix is recognised."""
    archive = _make_tar_gz(tmp_path / "src.tgz", {"x.txt": "x"})

    assert extract_archive(archive, tmp_path / "out")
    assert (tmp_path / "out" / "x.txt").read_text() == "x"


def test_extract_unsupported_format(tmp_path):
    """Test that unknown suffixes fail without raising."""
    archive = tmp_path / "src.rar"
    archive.write_bytes(b"not an archive")

    assert extract_archive(archive, tmp_path / "out") is False
    assert not is_supported_archive(archive)


def test_extract_corrupt_archive(tmp_path):
    """Test that a corrupt jar fails without raising."""
    archive = tmp_path / "broken.jar"
    archive.write_bytes(b"definitely not a zip")

    assert extract_archive(archive, tmp_path / "out") is False


def test_extract_truncated_tar_gz(tmp_path):
    """Test that a tar.gz cut off mid-stream fails without raising."""
    archive = _make_tar_gz(tmp_path / "sources.tar.gz", {f"pkg/F{i}.java": "x" * 4096 + str(i) for i in range(20)})
    data = archive.read_bytes()
    archive.write_bytes(data[: len(data) // 2])

    assert extract_archive(archive, tmp_path / "out") is False


def test_extract_missing_archive(tmp_path):
    """Test that a missing archive fails without raising."""
    assert extract_archive(tmp_path / "missing.jar", tmp_path / "out") is False


def test_extract_skips_entries_outside_output(tmp_path):
    """Test that path traversal entries are not written."""
    archive = _make_jar(tmp_path / "evil.jar", {"../escaped.txt": "x", "ok.txt": "ok"})
    out = tmp_path / "nested" / "out"

    assert extract_archive(archive, out) is True
    assert (out / "ok.txt").exists()
    assert not (tmp_path / "nested" / "escaped.txt").exists()


def test_is_supported_archive():
    """Test suffix detection, ignoring case."""
    assert is_supported_archive(Path("a.JAR"))
    assert is_supported_archive(Path("a.tar.gz"))
    assert is_supported_archive(Path("a.aar"))
    assert not is_supported_archive(Path("a.tar"))


def test_copy_directory_replaces_target(tmp_path):
    """Test that the target is cleared and the source tree copied."""
    source = tmp_path / "source"
    (source / "com" / "acme").mkdir(parents=True)
    (source / "com" / "acme" / "A.java").write_text("A")
    (source / "top.txt").write_text("top")
    target = tmp_path / "target"
    target.mkdir()
    (target / "stale.txt").write_text("stale")

    assert copy_directory(source, target) is True
    assert _tree(target) == _tree(source)
    assert not (target / "stale.txt").exists()


def test_copy_directory_skips_files_that_fail(tmp_path):
    """Test that a file which cannot be copied is skipped and the rest still copied."""
    source = tmp_path / "source"
    (source / "sub").mkdir(parents=True)
    (source / "a.txt").write_text("a")
    (source / "sub" / "b.txt").write_text("b")
    (source / "dangling").symlink_to(tmp_path / "nowhere")
    target = tmp_path / "target"

    assert copy_directory(source, target) is True
    assert (target / "a.txt").read_text() == "a"
    assert (target / "sub" / "b.txt").read_text() == "b"
    assert not (target / "dangling").exists()


def test_copy_directory_missing_source(tmp_path):
    """Test that copying a non-directory reports failure."""
    assert copy_directory(tmp_path / "nope", tmp_path / "target") is False


def test_delete_directory(tmp_path):
    """Test deleting a nested tree."""
    root = tmp_path / "root"
    (root / "a" / "b" / "c").mkdir(parents=True)
    (root / "a" / "b" / "c" / "f.txt").write_text("f")
    (root / "a" / "g.txt").write_text("g")

    delete_directory(root)

    assert not root.exists()


def test_delete_directory_missing_is_noop(tmp_path):
    """Test that deleting a missing directory does nothing."""
    delete_directory(tmp_path / "missing")

    assert tmp_path.exists()
