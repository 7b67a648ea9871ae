"""Field-mapping strategies and section mapping."""

from docgen.mapping._custom import (
    CustomMappingStrategy,
    is_literal,
    split_arguments,
)
from docgen.mapping._direct import DirectMappingStrategy, get_nested_value
from docgen.mapping._jsonata import JsonataMappingStrategy
from docgen.mapping._jsonpath import (
    JsonPathMappingStrategy,
    is_definite,
    normalize_path,
    split_comparison,
)
from docgen.mapping._mapper import SectionMapper
from docgen.mapping._registry import StrategyRegistry, create_strategy_registry
from docgen.mapping._repeating import build_field_name, expand_repeating_group
from docgen.mapping._strategy import MappingStrategy
from docgen.mapping._transforms import (
    TransformRegistry,
    create_transform_registry,
    java_string_hash,
)
from docgen.mapping._values import format_java_date, is_sequence, stringify

__all__ = [
    "CustomMappingStrategy",
    "DirectMappingStrategy",
    "JsonPathMappingStrategy",
    "JsonataMappingStrategy",
    "MappingStrategy",
    "SectionMapper",
    "StrategyRegistry",
    "TransformRegistry",
    "build_field_name",
    "create_strategy_registry",
    "create_transform_registry",
    "expand_repeating_group",
    "format_java_date",
    "get_nested_value",
    "is_definite",
    "is_literal",
    "is_sequence",
    "java_string_hash",
    "normalize_path",
    "split_arguments",
    "split_comparison",
    "stringify",
]
