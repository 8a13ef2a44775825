"""
Command-Line Interface for DocPipe.
"""

import typer
import logging
from pathlib import Path
import shutil

from .core.exceptions import DocPipeError
from .core.runner import run_pipeline
from .core.factory import MODULE_REGISTRY
from .core.module import CompositeModule
from .utils.config import load_config


logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

app = typer.Typer(help="A document transformation pipeline driven by YAML.")

DEFAULT_YAML_CONTENT = """# Default DocPipe Pipeline Configuration
settings:
  input_path: ./input
  output_path: ./output

metadata:
  site_title: My Site

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
"""


@app.command()
def run(
    config_path: str = typer.Option(
        "pipeline.yaml",
        "-c",
        help="Path to the pipeline's YAML configuration file.",
    )
):
    """Runs the configured DocPipe pipelines."""
    try:
        outputs = run_pipeline(config_path=config_path)
    except DocPipeError as e:
        logger.error(f"Run aborted: {e}")
        raise typer.Exit(code=1)
    for name, documents in outputs.items():
        print(f"  - {name}: {len(documents)} documents")


@app.command()
def init():
    """Initializes a new DocPipe project."""
    logger.info("Initializing new DocPipe project...")
    Path("input").mkdir(exist_ok=True)
    logger.info("Created 'input' directory.")

    config_file = Path("pipeline.yaml")
    if config_file.exists():
        logger.warning("'pipeline.yaml' already exists.")
    else:
        config_file.write_text(DEFAULT_YAML_CONTENT.strip() + "\n")
        logger.info("Created default 'pipeline.yaml'.")

    logger.info("Project initialized.")


@app.command(name="list-modules")
def list_modules():
    """Lists all available modules."""
    print("\n--- Modules ---")
    for name in sorted(MODULE_REGISTRY.keys()):
        module_class = MODULE_REGISTRY[name]
        suffix = " (accepts nested modules)" if issubclass(module_class, CompositeModule) else ""
        print(f"  - {name}{suffix}")


@app.command()
def clean(
    config_path: str = typer.Option("pipeline.yaml", "-c", help="Config file."),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation."),
):
    """Removes the configured output directory."""
    try:
        config = load_config(config_path)
    except DocPipeError as e:
        logger.error(f"Cannot clean: {e}")
        raise typer.Exit(code=1)

    output_path = config.get("settings", {}).get("output_path")
    if not output_path:
        logger.info("No 'output_path' setting configured. Nothing to clean.")
        return

    output_dir = Path(output_path)
    if not output_dir.is_dir():
        logger.info(f"Output directory '{output_dir}' does not exist.")
        return

    if not yes and not typer.confirm(f"Delete '{output_dir}'?"):
        logger.info("Aborting cleanup.")
        return

    shutil.rmtree(output_dir)
    logger.info(f"Deleted output directory: {output_dir}")
