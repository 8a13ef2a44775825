import pytest

from docpipe.components.metadata import Meta, Yaml
from docpipe.core.data_models import Document
from docpipe.core.exceptions import ConfigurationError


@pytest.fixture
def sample_document():
    return Document(content="title: Hello\ntags: [a, b]\n", metadata={"source": "a.md"})


def test_yaml_merges_mapping_into_metadata(sample_document, context):
    """Parsed keys are layered over the existing metadata."""
    [doc] = Yaml().execute([sample_document], context)
    assert doc.get("title") == "Hello"
    assert doc.get("tags") == ["a", "b"]
    assert doc.get("source") == "a.md"
    assert doc.content == sample_document.content


def test_yaml_stores_value_under_key(context):
    [doc] = Yaml(key="items").execute([Document("- 1\n- 2\n")], context)
    assert doc.get("items") == [1, 2]


def test_yaml_non_mapping_passes_through(context):
    original = Document("- just\n- a list\n")
    [doc] = Yaml().execute([original], context)
    assert doc is original


def test_yaml_invalid_content_passes_through(context):
    original = Document("key: [unclosed")
    [doc] = Yaml().execute([original], context)
    assert doc is original


def test_yaml_empty_content_is_unchanged(context):
    original = Document("   \n")
    assert Yaml().execute([original], context) == [original]


def test_meta_sets_static_and_computed_values(context):
    meta = Meta(items={"layout": "post", "length": lambda doc, ctx: len(doc.content)})
    [doc] = meta.execute([Document("abcd")], context)
    assert doc.get("layout") == "post"
    assert doc.get("length") == 4


def test_meta_single_key(context):
    [doc] = Meta("draft", None).execute([Document("x")], context)
    assert "draft" in doc.metadata
    assert doc.get("draft") is None


def test_meta_requires_entries():
    with pytest.raises(ConfigurationError):
        Meta()
