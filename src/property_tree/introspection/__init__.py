"""Introspection subpackage: builds property trees from live objects.

Re-exports the public API for the introspection module:
- ObjectIntrospector: walks an object's schema and produces a PropertyGroup
- BuildOptions: frozen configuration (exclusions, nesting, default ranges)
- Range / Header / Tooltip / SerializeField: per-field metadata markers
- FieldSpec / FieldMetadata: explicit schema rows
- register_schema / schema_for: schema registry and lookup
"""

from property_tree.introspection.builder import DEFAULT_GROUP_NAME, ObjectIntrospector
from property_tree.introspection.metadata import (
    METADATA_KEY,
    FieldMetadata,
    FieldSpec,
    Header,
    Range,
    SerializeField,
    Tooltip,
)
from property_tree.introspection.options import DEFAULT_EXCLUDED_TYPES, BuildOptions
from property_tree.introspection.schema import (
    clear_schema_cache,
    derive_schema,
    register_schema,
    registered_schema,
    schema_for,
    unregister_schema,
)

__all__ = [
    "DEFAULT_EXCLUDED_TYPES",
    "DEFAULT_GROUP_NAME",
    "METADATA_KEY",
    "BuildOptions",
    "FieldMetadata",
    "FieldSpec",
    "Header",
    "ObjectIntrospector",
    "Range",
    "SerializeField",
    "Tooltip",
    "clear_schema_cache",
    "derive_schema",
    "register_schema",
    "registered_schema",
    "schema_for",
    "unregister_schema",
]
