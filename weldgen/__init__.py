"""Building blocks for model-driven code generation: model source loading, shape and template helpers, and a code generator base class."""

__version__ = "0.1.0"