from stepforge.compiler.parser import check_analysis, parse_analysis, parse_analysis_yaml, parse_config_yaml
from stepforge.compiler.validator import format_errors, has_errors, validate_analysis

__all__ = [
    "check_analysis",
    "format_errors",
    "has_errors",
    "parse_analysis",
    "parse_analysis_yaml",
    "parse_config_yaml",
    "validate_analysis",
]
