"""autotestgen: synthesize test functions with a hosted code-generation model."""

__version__ = "0.1.0"
