"""
Tests for the file input and output modules.
"""

import pytest

from docpipe.components.files import ReadFiles, WriteFiles
from docpipe.components.front_matter import FrontMatter
from docpipe.components.metadata import Yaml
from docpipe.core.context import ExecutionContext
from docpipe.core.data_models import Document
from docpipe.core.exceptions import ConfigurationError
from docpipe.core.metadata import Metadata
from docpipe.core.pipeline import Pipeline


@pytest.fixture
def input_dir(tmp_path):
    root = tmp_path / "input"
    (root / "posts").mkdir(parents=True)
    (root / "b.md").write_text("B", encoding="utf-8")
    (root / "posts" / "a.md").write_text("A", encoding="utf-8")
    (root / "notes.txt").write_text("N", encoding="utf-8")
    return root


def test_read_files_loads_matching_files(input_dir):
    context = ExecutionContext(global_metadata=Metadata({"site": "test"}))
    existing = Document("already here")
    documents = ReadFiles(path=str(input_dir), glob_pattern="**/*.md").execute(
        [existing], context
    )
    assert documents[0] is existing
    assert [doc.content for doc in documents[1:]] == ["B", "A"]
    post = documents[2]
    assert post.get("relative_path") == "posts/a.md"
    assert post.get("file_name") == "a.md"
    assert post.get("file_stem") == "a"
    assert post.get("site") == "test"
    assert post.source == str(input_dir / "posts" / "a.md")


def test_read_files_uses_input_path_setting(input_dir):
    context = ExecutionContext(settings={"input_path": str(input_dir)})
    documents = ReadFiles(glob_pattern="*.txt").execute([], context)
    assert [doc.content for doc in documents] == ["N"]


def test_read_files_missing_directory_returns_inputs(tmp_path):
    context = ExecutionContext()
    assert ReadFiles(path=str(tmp_path / "nope")).execute([], context) == []


def test_read_files_without_any_path_is_configuration_error():
    with pytest.raises(ConfigurationError):
        ReadFiles().execute([], ExecutionContext())


def test_write_files_writes_content(tmp_path):
    context = ExecutionContext(settings={"output_path": str(tmp_path / "out")})
    doc = Document("hello", metadata={"relative_path": "posts/a.md"})
    [written] = WriteFiles(extension="txt").execute([doc], context)
    destination = tmp_path / "out" / "posts" / "a.txt"
    assert destination.read_text(encoding="utf-8") == "hello"
    assert written.get("destination_path") == str(destination)
    assert written.source == doc.source


def test_write_files_skips_documents_without_relative_path(tmp_path):
    original = Document("x")
    context = ExecutionContext()
    assert WriteFiles(path=str(tmp_path)).execute([original], context) == [original]


def test_read_files_skips_undecodable_files(input_dir):
    (input_dir / "broken.md").write_bytes(b"\xff\xfe\xfa invalid utf-8")
    context = ExecutionContext()
    documents = ReadFiles(path=str(input_dir), glob_pattern="*.md").execute([], context)
    assert [doc.get("file_name") for doc in documents] == ["b.md"]


def test_write_files_passes_document_through_on_os_error(tmp_path):
    """A write failure leaves the document unchanged."""
    blocker = tmp_path / "out"
    blocker.write_text("not a directory")
    original = Document("hello", metadata={"relative_path": "a.md"})
    context = ExecutionContext(settings={"output_path": str(blocker)})
    [result] = WriteFiles().execute([original], context)
    assert result is original
    assert blocker.read_text() == "not a directory"


@pytest.mark.parametrize("relative_path", ["../escaped.md", "posts/../../escaped.md"])
def test_write_files_refuses_destinations_outside_output(tmp_path, relative_path):
    original = Document("body", metadata={"relative_path": relative_path})
    context = ExecutionContext(settings={"output_path": str(tmp_path / "out")})
    [result] = WriteFiles().execute([original], context)
    assert result is original
    assert not (tmp_path / "escaped.md").exists()


def test_write_files_refuses_absolute_relative_path(tmp_path):
    target = tmp_path / "elsewhere" / "abs.md"
    original = Document("body", metadata={"relative_path": str(target)})
    context = ExecutionContext(settings={"output_path": str(tmp_path / "out")})
    [result] = WriteFiles().execute([original], context)
    assert result is original
    assert not target.exists()


def test_front_matter_cannot_redirect_writes_outside_output(tmp_path):
    """Front matter overriding relative_path stays confined to the output."""
    context = ExecutionContext(settings={"output_path": str(tmp_path / "out")})
    document = Document(
        "relative_path: ../escaped.md\n---\nbody",
        metadata={"relative_path": "page.md"},
    )
    pipeline = Pipeline("pages", [FrontMatter(Yaml()), WriteFiles()])
    [result] = pipeline.execute([document], context)
    assert not (tmp_path / "escaped.md").exists()
    assert result.get("destination_path") is None
    assert result.content == "body"
