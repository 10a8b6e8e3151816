"""flx scaffolder -- renders and writes Clean Architecture feature files.

Quick usage::

    import asyncio

    from flx.config import Config
    from flx.scaffolder import FeatureGenerator

    generator = FeatureGenerator(Config.load(), base_dir="./my_app")
    written = asyncio.run(generator.generate_feature("user_profile"))
"""

from flx.scaffolder.generator import (
    FeatureGenerator,
    GenerationPlan,
    Operation,
    validate_entity_name,
)
from flx.scaffolder.naming import to_camel, to_pascal, to_snake
from flx.scaffolder.templates import ModelStyle, RenderContext, TemplateRenderer, build_context

__all__ = [
    "FeatureGenerator",
    "GenerationPlan",
    "ModelStyle",
    "Operation",
    "RenderContext",
    "TemplateRenderer",
    "build_context",
    "to_camel",
    "to_pascal",
    "to_snake",
    "validate_entity_name",
]
