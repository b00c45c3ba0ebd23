# tests/test_aggregator.py
import io
import os
import sys

import pytest

from contextpack.config import (
    new_config,
    with_exclude_names,
    with_format,
    with_git_client,
    with_include,
)
from contextpack.core.aggregator import (
    discover_files,
    format_segment,
    process_paths,
    process_project,
    wrap_in_context,
)
from contextpack.core.git import ScriptedGitClient
from contextpack.exceptions import GitError, NoFilesProcessedError, NoPathsError
from contextpack.output import write_to_file
from contextpack.utils.logger import Logger


def no_git(*options):
    return new_config(with_git_client(ScriptedGitClient(available=False)), *options)


@pytest.fixture
def quiet_logger():
    return Logger(verbose=False, stream=io.StringIO())


@pytest.fixture
def proj(tmp_path):
    """a.go (text, 10 bytes), b.png (binary), .hidden (text)."""
    proj = tmp_path / "proj"
    proj.mkdir()
    (proj / "a.go").write_bytes(b"package a\n")
    (proj / "b.png").write_bytes(b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR")
    (proj / ".hidden").write_text("hidden content", encoding="utf-8")
    return proj


# --- Test 1: Helpers ---

def test_format_segment_substitutes_all_placeholders():
    out = format_segment("<{path}>{content}</{path}>", "a.go", b"x := 1")
    assert out == "<a.go>x := 1</a.go>"


def test_format_segment_leaves_placeholders_in_content_alone():
    out = format_segment("{path}:{content}", "a.txt", b"literal {path}")
    assert out == "a.txt:literal {path}"


def test_format_segment_replaces_invalid_utf8():
    out = format_segment("{content}", "a.txt", b"caf\xe9")
    assert out == "caf\ufffd"


def test_wrap_in_context():
    assert wrap_in_context("body") == "<context>\nbody</context>"
    assert wrap_in_context("") == "<context>\n</context>"


# --- Test 2: Discovery across inputs ---

def test_discover_files_expands_directories_once(proj, monkeypatch, quiet_logger):
    import contextpack.core.aggregator as aggregator

    calls = []
    original = aggregator.get_files_from_dir

    def tracking(directory, config):
        calls.append(directory)
        return original(directory, config)

    monkeypatch.setattr(aggregator, "get_files_from_dir", tracking)

    single = str(proj / "a.go")
    files = discover_files([str(proj), single], no_git(), quiet_logger)

    assert calls == [str(proj)]
    assert files == [str(proj / "a.go"), str(proj / "b.png"), single]


def test_discover_files_skips_missing_inputs(proj, tmp_path):
    stream = io.StringIO()
    files = discover_files([str(tmp_path / "nope"), str(proj)], no_git(), Logger(stream=stream))
    assert files == [str(proj / "a.go"), str(proj / "b.png")]
    assert stream.getvalue().startswith("warning:")


class BrokenGitClient(ScriptedGitClient):
    def get_git_files(self, directory):
        raise GitError("error running git ls-files: boom")


def test_directory_listing_failure_does_not_abort_run(proj, tmp_path):
    standalone = tmp_path / "notes.txt"
    standalone.write_text("keep going", encoding="utf-8")
    stream = io.StringIO()
    config = new_config(with_git_client(BrokenGitClient(ignored={str(standalone): False})))

    document, stats = process_project([str(proj), str(standalone)], config, Logger(stream=stream))

    assert "keep going" in document
    assert stats.files_total == 1
    assert stats.files_processed == 1
    assert "boom" in stream.getvalue()


# --- Test 3: End-to-end runs ---

def test_mixed_project_without_git(proj, quiet_logger):
    document, stats = process_project([str(proj)], no_git(), quiet_logger)

    assert stats.files_processed == 1
    assert stats.files_total == 2
    assert "package a" in document
    assert "PNG" not in document
    assert "hidden content" not in document
    assert document.startswith("<context>\n")
    assert document.endswith("</context>")


def test_include_with_excluded_name(tmp_path, quiet_logger):
    (tmp_path / "main.go").write_text("package main", encoding="utf-8")
    (tmp_path / "util.go").write_text("package util", encoding="utf-8")
    (tmp_path / "README.md").write_text("# readme", encoding="utf-8")
    config = no_git(with_include(".go"), with_exclude_names("main.go"), with_format("{path}\n"))

    document, stats = process_project([str(tmp_path)], config, quiet_logger)

    assert document == "<context>\n" + str(tmp_path / "util.go") + "\n</context>"
    assert stats.files_processed == 1
    assert stats.files_total == 3


def test_statistics_describe_the_wrapped_document(tmp_path, quiet_logger):
    (tmp_path / "a.txt").write_text("hello world", encoding="utf-8")
    config = no_git(with_format("{content}"))

    document, stats = process_project([str(tmp_path / "a.txt")], config, quiet_logger)

    assert document == "<context>\nhello world</context>"
    assert stats.chars == len(document)
    assert stats.lines == 2
    assert stats.tokens == 3


def test_process_paths_is_unwrapped(tmp_path, quiet_logger):
    (tmp_path / "a.txt").write_text("hello world", encoding="utf-8")
    config = no_git(with_format("{content}"))

    content, stats = process_paths([str(tmp_path / "a.txt")], config, quiet_logger)

    assert content == "hello world"
    assert (stats.chars, stats.lines, stats.tokens) == (11, 1, 2)


def test_segments_keep_discovery_order(tmp_path, quiet_logger):
    for name in ("c.txt", "a.txt", "b.txt"):
        (tmp_path / name).write_text(name, encoding="utf-8")
    config = no_git(with_format("{content};"))

    document, _ = process_project(
        [str(tmp_path / "c.txt"), str(tmp_path / "a.txt"), str(tmp_path / "b.txt")],
        config,
        quiet_logger,
    )
    assert document == "<context>\nc.txt;a.txt;b.txt;</context>"


def test_repeated_runs_are_identical(proj, quiet_logger):
    (proj / "sub").mkdir()
    (proj / "sub" / "z.py").write_text("print('z')\n", encoding="utf-8")
    (proj / "m.md").write_text("# m\n", encoding="utf-8")
    config = no_git()

    first = process_project([str(proj)], config, quiet_logger)
    second = process_project([str(proj)], config, quiet_logger)
    assert first == second


def test_git_listing_governs_candidates(proj, quiet_logger):
    directory = str(proj)
    hidden = os.path.join(directory, ".hidden")
    client = ScriptedGitClient(
        files_in_dir={directory: [hidden, os.path.join(directory, "a.go")]},
        ignored={hidden: False},
    )

    document, stats = process_project([directory], new_config(with_git_client(client)), quiet_logger)

    assert stats.files_total == 2
    assert stats.files_processed == 2
    assert "hidden content" in document


# --- Test 4: Hard failures ---

def test_no_paths_fails_immediately(monkeypatch, quiet_logger):
    import contextpack.core.aggregator as aggregator

    def fail(*args, **kwargs):
        raise AssertionError("discovery must not run")

    monkeypatch.setattr(aggregator, "discover_files", fail)

    with pytest.raises(NoPathsError):
        process_project([], no_git(), quiet_logger)


def test_everything_filtered_out(proj, quiet_logger):
    config = no_git(with_include(".rs"))

    with pytest.raises(NoFilesProcessedError) as excinfo:
        process_project([str(proj)], config, quiet_logger)

    assert excinfo.value.stats.files_total == 2
    assert excinfo.value.stats.files_processed == 0


def test_empty_directory_is_not_an_error(tmp_path, quiet_logger):
    empty = tmp_path / "empty"
    empty.mkdir()

    document, stats = process_project([str(empty)], no_git(), quiet_logger)

    assert document == "<context>\n</context>"
    assert stats.files_total == 0
    assert stats.files_processed == 0


def test_process_paths_reports_nothing_processed(proj, quiet_logger):
    with pytest.raises(NoFilesProcessedError):
        process_paths([str(proj)], no_git(with_include(".rs")), quiet_logger)


def test_processed_never_exceeds_total(proj, quiet_logger):
    _, stats = process_project([str(proj), str(proj / "a.go")], no_git(), quiet_logger)
    assert stats.files_processed <= stats.files_total
    assert (stats.files_processed, stats.files_total) == (2, 3)


# --- Test 5: Undecodable file names ---

def test_format_segment_renders_undecodable_path():
    path = b"caf\xe9.txt".decode("utf-8", errors="surrogateescape")
    out = format_segment("<{path}>", path, b"")
    assert out == "<caf\ufffd.txt>"
    out.encode("utf-8")


@pytest.mark.skipif(sys.platform != "linux", reason="needs a filesystem that accepts non-UTF-8 names")
def test_undecodable_file_name_can_be_written(tmp_path, quiet_logger):
    proj = tmp_path / "proj"
    proj.mkdir()
    with open(os.path.join(os.fsencode(proj), b"caf\xe9.txt"), "wb") as f:
        f.write(b"latin-1 name")

    document, stats = process_project([str(proj)], no_git(), quiet_logger)

    assert stats.files_processed == 1
    assert "caf\ufffd.txt" in document
    target = tmp_path / "out.md"
    write_to_file(document, target)
    assert "latin-1 name" in target.read_text(encoding="utf-8")


# --- Test 6: Walk failures ---

def test_walk_failure_skips_only_that_directory(proj, tmp_path, monkeypatch):
    import contextpack.core.scanner as scanner

    broken = tmp_path / "broken"
    broken.mkdir()
    real_walk = scanner.walk_directory

    def walk(directory):
        if directory == str(broken):
            raise PermissionError(13, "Permission denied", directory)
        return real_walk(directory)

    monkeypatch.setattr(scanner, "walk_directory", walk)
    stream = io.StringIO()

    document, stats = process_project([str(broken), str(proj)], no_git(), Logger(stream=stream))

    assert "package a" in document
    assert (stats.files_processed, stats.files_total) == (1, 2)
    assert "warning: Error getting files from directory" in stream.getvalue()
    assert "Permission denied" in stream.getvalue()
