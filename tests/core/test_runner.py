"""
End-to-end tests for running configured pipelines.
"""

import pytest

from docpipe.core.data_models import Document
from docpipe.core.exceptions import ConfigurationError
from docpipe.core.factory import MODULE_REGISTRY
from docpipe.core.module import BaseModule
from docpipe.core.runner import run_pipeline, run_pipelines


@pytest.fixture
def project(tmp_path):
    input_dir = tmp_path / "input"
    input_dir.mkdir()
    (input_dir / "hello.md").write_text(
        "title: Hello\n---\nHello body\n", encoding="utf-8"
    )
    (input_dir / "plain.md").write_text("No front matter\n", encoding="utf-8")
    config = tmp_path / "pipeline.yaml"
    config.write_text(
        f"""
settings:
  input_path: {input_dir.as_posix()}
  output_path: {(tmp_path / 'output').as_posix()}
metadata:
  site_title: Example
pipelines:
  - name: pages
    modules:
      - type: read_files
        config:
          glob_pattern: "*.md"
      - type: front_matter
        modules:
          - type: yaml
      - type: write_files
        config:
          extension: ".txt"
  - name: copies
    modules:
      - type: read_files
        config:
          glob_pattern: "hello.md"
""",
        encoding="utf-8",
    )
    return tmp_path


def test_run_pipeline_end_to_end(project):
    outputs = run_pipeline(str(project / "pipeline.yaml"))
    hello, plain = outputs["pages"]
    assert hello.get("title") == "Hello"
    assert hello.get("site_title") == "Example"
    assert hello.content == "Hello body\n"
    assert plain.content == "No front matter\n"
    assert (project / "output" / "hello.txt").read_text(encoding="utf-8") == "Hello body\n"
    assert len(outputs["copies"]) == 1


def test_later_pipelines_see_earlier_outputs(monkeypatch):
    """Each pipeline context exposes the outputs of the pipelines before it."""
    seen = []

    class RecordOutputs(BaseModule):
        def execute(self, documents, context):
            seen.append({name: len(docs) for name, docs in context.outputs.items()})
            return list(documents) + [Document(context.pipeline_name)]

    monkeypatch.setitem(MODULE_REGISTRY, "record_outputs", RecordOutputs)
    config = {
        "pipelines": [
            {"name": "first", "modules": [{"type": "record_outputs"}]},
            {"name": "second", "modules": [{"type": "record_outputs"}]},
        ],
    }
    outputs = run_pipelines(config)
    assert seen == [{}, {"first": 1}]
    assert [doc.content for doc in outputs["second"]] == ["second"]


def test_run_pipeline_missing_config(tmp_path):
    with pytest.raises(ConfigurationError):
        run_pipeline(str(tmp_path / "missing.yaml"))
