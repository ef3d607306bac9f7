"""Tests for metadata markers, FieldSpec, and schema derivation/registration.

Covers:
- Range validation and marker folding into FieldMetadata
- FieldSpec display-name precedence and default accessors
- unwrap_annotation for Annotated / Optional / PEP 604 unions
- derive_schema: dataclass field order, markers, ClassVar skipping, caching
- register_schema precedence and base-class inheritance
- schema_for appends unannotated instance attributes
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Annotated, ClassVar, Optional

import pytest

from property_tree.introspection.metadata import (
    METADATA_KEY,
    FieldMetadata,
    FieldSpec,
    Header,
    Range,
    SerializeField,
    Tooltip,
)
from property_tree.introspection.schema import (
    clear_schema_cache,
    derive_schema,
    register_schema,
    registered_schema,
    schema_for,
    unregister_schema,
    unwrap_annotation,
)


@dataclass
class Light:
    intensity: float = field(default=1.0, metadata={METADATA_KEY: Range(0, 8)})
    label: Annotated[str, Header("Name"), "unrelated extra"] = "lamp"
    _seed: Annotated[int, SerializeField()] = 0
    kind: ClassVar[str] = "light"
    both: float = field(
        default=0.0, metadata={METADATA_KEY: (Tooltip("Blend"), Range(-1, 1))}
    )


class Base:
    a: int = 0


class Derived(Base):
    b: float = 0.0


class Unresolvable:
    ok: int = 1
    broken: "DoesNotExist"  # noqa: F821


# ---------------------------------------------------------------------------
# Markers and FieldMetadata
# ---------------------------------------------------------------------------


class TestMarkers:
    def test_range_rejects_inverted_bounds(self) -> None:
        with pytest.raises(ValueError, match="min must be <= max"):
            Range(5, 1)

    def test_range_allows_equal_bounds(self) -> None:
        assert Range(2, 2).min == 2

    def test_from_markers_ignores_unrelated(self) -> None:
        meta = FieldMetadata.from_markers(["doc", 42, Header("H")])
        assert meta == FieldMetadata(header="H")

    def test_from_markers_collects_all(self) -> None:
        meta = FieldMetadata.from_markers(
            [Range(0, 1), Header("H"), Tooltip("T"), SerializeField()]
        )
        assert meta.range == Range(0, 1)
        assert meta.header == "H"
        assert meta.tooltip == "T"
        assert meta.serialized is True

    def test_later_marker_wins(self) -> None:
        meta = FieldMetadata.from_markers([Range(0, 1), Range(0, 5)])
        assert meta.range == Range(0, 5)

    def test_merged_prefers_other(self) -> None:
        base = FieldMetadata(range=Range(0, 1), header="A")
        merged = base.merged(FieldMetadata(header="B"))
        assert merged.header == "B"
        assert merged.range == Range(0, 1)

    def test_merged_serialized_is_sticky(self) -> None:
        assert FieldMetadata(serialized=True).merged(FieldMetadata()).serialized


class TestFieldSpec:
    def test_display_name_header_first(self) -> None:
        spec = FieldSpec("x", float, FieldMetadata(header="H", tooltip="T"))
        assert spec.display_name == "H"

    def test_display_name_tooltip_second(self) -> None:
        assert FieldSpec("x", float, FieldMetadata(tooltip="T")).display_name == "T"

    def test_display_name_falls_back_to_name(self) -> None:
        assert FieldSpec("x", float).display_name == "x"

    def test_is_public(self) -> None:
        assert FieldSpec("x", float).is_public
        assert not FieldSpec("_x", float).is_public

    def test_default_accessors_use_attributes(self) -> None:
        obj = Base()
        spec = FieldSpec("a", int)
        spec.write(obj, 5)
        assert spec.read(obj) == 5
        assert obj.a == 5

    def test_custom_accessors(self) -> None:
        store: dict[str, int] = {"v": 1}
        spec = FieldSpec(
            "v",
            int,
            getter=lambda target: target["v"],
            setter=lambda target, value: target.__setitem__("v", value),
        )
        spec.write(store, 3)
        assert spec.read(store) == 3


# ---------------------------------------------------------------------------
# unwrap_annotation
# ---------------------------------------------------------------------------


class TestUnwrapAnnotation:
    def test_plain_type_unchanged(self) -> None:
        assert unwrap_annotation(float) == (float, [])

    def test_annotated(self) -> None:
        base, extras = unwrap_annotation(Annotated[float, Range(0, 1)])
        assert base is float
        assert extras == [Range(0, 1)]

    def test_optional(self) -> None:
        assert unwrap_annotation(Optional[int]) == (int, [])  # noqa: UP007

    def test_pep604_union_with_none(self) -> None:
        assert unwrap_annotation(int | None) == (int, [])

    def test_annotated_inside_optional(self) -> None:
        base, extras = unwrap_annotation(Annotated[float, Header("H")] | None)
        assert base is float
        assert extras == [Header("H")]

    def test_real_union_left_alone(self) -> None:
        base, _ = unwrap_annotation(int | str)
        assert base == int | str


# ---------------------------------------------------------------------------
# derive_schema
# ---------------------------------------------------------------------------


class TestDeriveSchema:
    def test_dataclass_field_order_without_classvar(self) -> None:
        assert [spec.name for spec in derive_schema(Light)] == [
            "intensity",
            "label",
            "_seed",
            "both",
        ]

    def test_field_metadata_markers(self) -> None:
        intensity = derive_schema(Light)[0]
        assert intensity.annotation is float
        assert intensity.metadata.range == Range(0, 8)

    def test_annotated_markers_and_base_type(self) -> None:
        label = derive_schema(Light)[1]
        assert label.annotation is str
        assert label.display_name == "Name"

    def test_serialize_field_marker(self) -> None:
        assert derive_schema(Light)[2].metadata.serialized

    def test_marker_tuple_in_field_metadata(self) -> None:
        both = derive_schema(Light)[3]
        assert both.display_name == "Blend"
        assert both.metadata.range == Range(-1, 1)

    def test_inherited_annotations_base_first(self) -> None:
        assert [spec.name for spec in derive_schema(Derived)] == ["a", "b"]

    def test_result_cached_per_class(self) -> None:
        assert derive_schema(Light) is derive_schema(Light)

    def test_clear_cache_rebuilds(self) -> None:
        first = derive_schema(Light)
        clear_schema_cache()
        second = derive_schema(Light)
        assert first is not second
        assert first == second

    def test_unresolvable_hints_fall_back_to_raw(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        clear_schema_cache()
        with caplog.at_level(logging.WARNING, logger="property_tree"):
            specs = derive_schema(Unresolvable)
        assert [spec.name for spec in specs] == ["ok", "broken"]
        assert any("Unresolvable" in r.getMessage() for r in caplog.records)


# ---------------------------------------------------------------------------
# Registration and schema_for
# ---------------------------------------------------------------------------


class TestRegistration:
    @pytest.fixture(autouse=True)
    def _cleanup(self) -> object:
        yield
        unregister_schema(Base)
        unregister_schema(Derived)

    def test_registered_overrides_derived(self) -> None:
        register_schema(Base, [FieldSpec("custom", int)])
        assert [spec.name for spec in schema_for(Base())] == ["custom"]

    def test_registration_inherited_by_subclass(self) -> None:
        register_schema(Base, [FieldSpec("custom", int)])
        assert registered_schema(Derived) == (FieldSpec("custom", int),)

    def test_nearest_registration_wins(self) -> None:
        register_schema(Base, [FieldSpec("base", int)])
        register_schema(Derived, [FieldSpec("derived", int)])
        assert [spec.name for spec in schema_for(Derived())] == ["derived"]

    def test_unregister(self) -> None:
        register_schema(Base, [FieldSpec("custom", int)])
        unregister_schema(Base)
        assert registered_schema(Base) is None

    def test_unregister_unknown_is_noop(self) -> None:
        unregister_schema(Light)

    def test_registered_schema_ignores_instance_attributes(self) -> None:
        register_schema(Base, [FieldSpec("a", int)])
        obj = Base()
        obj.extra = 1  # type: ignore[attr-defined]
        assert [spec.name for spec in schema_for(obj)] == ["a"]


class TestSchemaFor:
    def test_instance_attributes_appended(self) -> None:
        obj = Derived()
        obj.extra = "x"  # type: ignore[attr-defined]
        specs = schema_for(obj)
        assert [spec.name for spec in specs] == ["a", "b", "extra"]
        assert specs[-1].annotation is str

    def test_annotated_instance_attribute_not_duplicated(self) -> None:
        obj = Derived()
        obj.a = 3
        assert [spec.name for spec in schema_for(obj)] == ["a", "b"]

    def test_slotted_object_without_dict(self) -> None:
        class Slotted:
            __slots__ = ("v",)

            def __init__(self) -> None:
                self.v = 1

        assert schema_for(Slotted()) == []
