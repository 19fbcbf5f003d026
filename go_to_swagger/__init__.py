"""Go to Swagger Generator

A Python package for generating Swagger 2.0 documents from annotated Go
source. Referenced types are resolved across packages, flattened and
described as schema definitions.
"""

__version__ = "1.0.0"

from .pipeline import (
    AtomicWriter,
    GeneratorConfig,
    GoToSwaggerError,
    NamingScheme,
    OutputConfig,
    OutputMode,
    SwaggerGenerator,
)

__all__ = [
    "SwaggerGenerator",
    "GeneratorConfig",
    "GoToSwaggerError",
    "NamingScheme",
    "OutputConfig",
    "OutputMode",
    "AtomicWriter",
]
