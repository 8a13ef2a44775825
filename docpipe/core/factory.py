"""
Module factory for the DocPipe pipeline.

This module implements the factory pattern for creating pipeline modules.
A registry maps configuration strings (e.g., 'front_matter') to module
classes, so that pipelines can be assembled entirely from configuration.
Composite modules receive their nested chain built recursively from the
'modules' key of their configuration.
"""

import logging
from typing import List

from ..components.content import Append, Prepend, Replace
from ..components.control import Branch, Concat
from ..components.files import ReadFiles, WriteFiles
from ..components.front_matter import FrontMatter
from ..components.metadata import Meta, Yaml
from .exceptions import ConfigurationError
from .module import BaseModule, CompositeModule
from .pipeline import Pipeline

logger = logging.getLogger(__name__)

# A registry mapping 'type' strings to their corresponding Module classes.
MODULE_REGISTRY = {
    "read_files": ReadFiles,
    "write_files": WriteFiles,
    "front_matter": FrontMatter,
    "meta": Meta,
    "yaml": Yaml,
    "replace": Replace,
    "append": Append,
    "prepend": Prepend,
    "concat": Concat,
    "branch": Branch,
}


def build_component(component_config: dict, registry: dict = MODULE_REGISTRY) -> BaseModule:
    """
    Builds a module instance from a configuration dictionary and a registry.

    Args:
        component_config (dict): The module's configuration dictionary, with a
            'type' key and optional 'config' and 'modules' keys.
        registry (dict): The registry to look up the module class in.

    Returns:
        An instance of the module class.

    Raises:
        ConfigurationError: If the 'type' is missing or unknown, if nested
            modules are given to a non-composite module, or if the module
            rejects its configuration.
    """
    component_type = component_config.get("type", "")
    config = component_config.get("config") or {}
    nested = component_config.get("modules") or []

    if not component_type:
        raise ConfigurationError("Module 'type' not specified in configuration.")

    component_class = registry.get(component_type)
    if not component_class:
        raise ConfigurationError(f"'{component_type}' is not a valid module type.")

    is_composite = issubclass(component_class, CompositeModule)
    if nested and not is_composite:
        raise ConfigurationError(
            f"'{component_type}' does not accept nested modules.",
            module=component_class.__name__,
        )

    logger.debug(f"Building module '{component_class.__name__}' with config: {config}")
    try:
        if is_composite:
            return component_class(*build_modules(nested, registry), **config)
        return component_class(**config)
    except TypeError as e:
        raise ConfigurationError(
            f"Invalid configuration for '{component_type}': {e}",
            module=component_class.__name__,
        ) from e


def build_modules(module_configs: list, registry: dict = MODULE_REGISTRY) -> List[BaseModule]:
    """Builds an ordered module chain from a list of module configurations."""
    return [build_component(module_config, registry) for module_config in module_configs]


def build_pipelines(config: dict, registry: dict = MODULE_REGISTRY) -> List[Pipeline]:
    """Builds every pipeline declared in a validated project configuration."""
    pipelines = []
    for pipeline_config in config.get("pipelines", []):
        name = pipeline_config["name"]
        try:
            modules = build_modules(pipeline_config.get("modules", []), registry)
        except ConfigurationError as e:
            raise ConfigurationError(e.message, module=e.module, pipeline=name) from e
        pipelines.append(Pipeline(name, modules))
        logger.info(f"Built pipeline '{name}' with {len(modules)} modules.")
    return pipelines
