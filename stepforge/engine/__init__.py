from stepforge.engine.assembler import assemble, generate_step_definitions
from stepforge.engine.patterns import DEFAULT_REGISTRY, PatternRegistry, load_registry

__all__ = ["DEFAULT_REGISTRY", "PatternRegistry", "assemble", "generate_step_definitions", "load_registry"]
