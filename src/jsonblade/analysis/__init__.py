"""Shape analysis of sample data for completion and path validation."""

from jsonblade.analysis.analyzer import (
    DataStructure,
    analyze_data_structure,
    get_properties_for_path,
    json_type,
    validate_path,
)

__all__ = [
    "DataStructure",
    "analyze_data_structure",
    "get_properties_for_path",
    "json_type",
    "validate_path",
]
