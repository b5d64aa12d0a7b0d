"""stepforge — synthesize cucumber-js step definitions from scenario analyses."""
from stepforge.compiler import format_errors, parse_analysis, parse_analysis_yaml, validate_analysis
from stepforge.engine import DEFAULT_REGISTRY, PatternRegistry, assemble, generate_step_definitions
from stepforge.engine.patterns import given, then, when
from stepforge.engine.render import step_definition

__all__ = [
    "DEFAULT_REGISTRY",
    "PatternRegistry",
    "assemble",
    "format_errors",
    "generate_step_definitions",
    "given",
    "parse_analysis",
    "parse_analysis_yaml",
    "step_definition",
    "then",
    "validate_analysis",
    "when",
]
