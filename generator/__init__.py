"""Hand-off of stale units to the external generator."""

from .invoker import GenerationError, build_generator_args, generate_all, run_generator

__all__ = ["GenerationError", "build_generator_args", "generate_all", "run_generator"]
