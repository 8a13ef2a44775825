from pydantic import BaseModel, field_validator
from typing import Dict, Any, List


class ModuleConfig(BaseModel):
    """A model for a single module's configuration, including nested modules."""

    type: str
    config: Dict[str, Any] = {}
    modules: List["ModuleConfig"] = []


class PipelineConfig(BaseModel):
    """A named, ordered chain of modules."""

    name: str
    modules: List[ModuleConfig]


class ProjectConfig(BaseModel):
    """The top-level model for the entire pipeline.yaml configuration."""

    settings: Dict[str, Any] = {}
    metadata: Dict[str, Any] = {}
    pipelines: List[PipelineConfig]

    @field_validator("pipelines")
    @classmethod
    def pipeline_names_are_unique(cls, pipelines):
        names = [pipeline.name for pipeline in pipelines]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise ValueError(f"Duplicate pipeline names: {', '.join(duplicates)}")
        return pipelines


ModuleConfig.model_rebuild()
