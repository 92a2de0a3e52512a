"""Project scaffolding: feature modules, templates and the orchestrator."""

from .context import FeatureContext, FeatureGenerator
from .generator import ProjectGenerator, ScaffoldError, ScaffoldResult
from .templates import TemplateRenderer

__all__ = [
    "FeatureContext",
    "FeatureGenerator",
    "ProjectGenerator",
    "ScaffoldError",
    "ScaffoldResult",
    "TemplateRenderer",
]
