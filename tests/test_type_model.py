"""Tests for ofcov.model: type references, declarations and the type model."""

from __future__ import annotations

import pytest

from ofcov.model import (
    FieldDecl,
    FieldRead,
    FieldRef,
    InMemoryTypeModel,
    Invocation,
    Marker,
    MethodDecl,
    Parameter,
    Return,
    ThisAccess,
    TypeDecl,
    TypeRef,
    VariableRead,
    Visibility,
)


def _ref(simple: str) -> TypeRef:
    return TypeRef(f"com.example.{simple}")


# ── TypeRef ───────────────────────────────────────────────────────


class TestTypeRef:
    def test_of_parses_array_dimensions(self) -> None:
        ref = TypeRef.of("int[][]")
        assert ref.qualified_name == "int"
        assert ref.array_dimensions == 2
        assert ref.is_array
        assert not ref.is_primitive

    def test_component_of_array(self) -> None:
        assert TypeRef.of("int[][]").component() == TypeRef.of("int[]")

    def test_component_of_non_array_raises(self) -> None:
        with pytest.raises(ValueError, match="not an array"):
            TypeRef("int").component()

    def test_erasure_drops_arguments(self) -> None:
        ref = TypeRef.of("java.util.List", TypeRef("java.lang.String"))
        assert ref.erasure() == TypeRef("java.util.List")
        assert str(ref) == "java.util.List<java.lang.String>"

    def test_primitive_and_wrapper(self) -> None:
        assert TypeRef("int").is_primitive
        assert TypeRef("java.lang.Integer").is_wrapper
        assert not TypeRef("java.lang.Integer").is_primitive

    def test_is_boolean(self) -> None:
        assert TypeRef("boolean").is_boolean
        assert TypeRef("java.lang.Boolean").is_boolean
        assert not TypeRef("int").is_boolean

    def test_simple_name(self) -> None:
        assert TypeRef.of("com.example.Point[]").simple_name == "Point[]"


class TestVisibilityParse:
    def test_parses_names_case_insensitively(self) -> None:
        assert Visibility.parse("public") is Visibility.PUBLIC
        assert Visibility.parse("Protected") is Visibility.PROTECTED

    def test_package_aliases(self) -> None:
        assert Visibility.parse("PACKAGE_PRIVATE") is Visibility.PACKAGE
        assert Visibility.parse("default") is Visibility.PACKAGE

    def test_unknown_raises(self) -> None:
        with pytest.raises(ValueError, match="Unknown visibility"):
            Visibility.parse("friend")

    def test_ordering_from_most_strict(self) -> None:
        assert Visibility.PRIVATE < Visibility.PACKAGE < Visibility.PROTECTED < Visibility.PUBLIC


class TestMarker:
    def test_get_param(self) -> None:
        marker = Marker.of("lombok.EqualsAndHashCode", callSuper=True, exclude=["a", "b"])
        assert marker.get("callSuper") is True
        assert marker.get("exclude") == ("a", "b")
        assert marker.get("missing", "fallback") == "fallback"


# ── Declarations ──────────────────────────────────────────────────


class TestDeclarations:
    def test_field_equality_by_declaring_type_and_name(self, model: InMemoryTypeModel) -> None:
        address = model.find_type("com.example.Address")
        assert address is not None
        street = address.field("street")
        assert street is not None
        twin = FieldDecl(name="street", type=TypeRef("int"), declaring_type=street.declaring_type)
        assert twin == street
        assert hash(twin) == hash(street)

    def test_field_read_targets_this(self, model: InMemoryTypeModel) -> None:
        address = model.find_type("com.example.Address")
        assert address is not None
        street = address.field("street")
        assert street is not None
        read = street.read(ThisAccess())
        assert isinstance(read, FieldRead)
        assert read.reads_this
        assert not street.read(VariableRead("other")).reads_this

    def test_method_lookup_by_erased_parameters(self, model: InMemoryTypeModel) -> None:
        address = model.find_type("com.example.Address")
        assert address is not None
        assert address.method("equals", TypeRef("java.lang.Object")) is not None
        assert address.method("equals") is None

    def test_method_call_builds_invocation(self) -> None:
        method = MethodDecl(
            name="size",
            declaring_type="com.example.Bag",
            return_type=TypeRef("int"),
            parameters=(Parameter("x", TypeRef.of("java.util.List", TypeRef("int"))),),
        )
        call = method.call(ThisAccess())
        assert isinstance(call, Invocation)
        assert call.invokes_on_this
        assert call.method.parameter_types == (TypeRef("java.util.List"),)
        assert call.type == TypeRef("int")

    def test_static_call_does_not_invoke_on_this(self) -> None:
        method = MethodDecl(
            name="now", declaring_type="com.example.Clock", return_type=TypeRef("long"), static=True
        )
        call = method.call()
        assert call.method.static
        assert not call.invokes_on_this
        assert call.method == MethodDecl(name="now", declaring_type="com.example.Clock").ref

    def test_nested_type_names(self, model: InMemoryTypeModel) -> None:
        inner = model.find_type("com.example.Secret$Inner")
        assert inner is not None
        assert inner.is_nested
        assert inner.package_name == "com.example"
        assert inner.simple_name == "Inner"

    def test_walk_visits_nested_expressions(self) -> None:
        read = FieldRead(FieldRef("com.example.A", "a"), TypeRef("int"), ThisAccess())
        statement = Return(read)
        assert list(statement.walk()) == [statement, read, read.target]


# ── TypeModel ─────────────────────────────────────────────────────


class TestTypeModel:
    def test_resolve_skips_arrays_and_primitives(self, model: InMemoryTypeModel) -> None:
        assert model.resolve(TypeRef("int")) is None
        assert model.resolve(TypeRef.of("com.example.Address[]")) is None
        assert model.resolve(_ref("Address")) is not None

    def test_superclass_chain(self, model: InMemoryTypeModel) -> None:
        sports_car = model.find_type("com.example.SportsCar")
        assert sports_car is not None
        chain = [decl.simple_name for decl in model.superclass_chain(sports_car)]
        assert chain == ["SportsCar", "Car", "Vehicle"]

    def test_supertype_names_include_unresolved_supertypes(self, model: InMemoryTypeModel) -> None:
        names = model.supertype_names(_ref("ValidationException"))
        assert names == {"com.example.ValidationException", "java.lang.RuntimeException"}

    def test_is_real_subclass(self, model: InMemoryTypeModel) -> None:
        car = model.find_type("com.example.Car")
        vehicle = model.find_type("com.example.Vehicle")
        assert car is not None and vehicle is not None
        assert model.is_real_subclass(car, vehicle)
        assert not model.is_real_subclass(vehicle, vehicle)

    def test_all_fields_include_inherited(self, model: InMemoryTypeModel) -> None:
        names = [field.name for field in model.all_fields(_ref("SportsCar"))]
        assert names == ["topSpeed", "brand", "wheels", "color"]

    def test_all_fields_of_unknown_type_is_empty(self, model: InMemoryTypeModel) -> None:
        assert model.all_fields(TypeRef("com.vendor.Unknown")) == []

    def test_all_methods_overriding_first(self, model: InMemoryTypeModel) -> None:
        car = model.find_type("com.example.Car")
        assert car is not None
        equals = [method for method in model.all_methods(car) if method.name == "equals"]
        assert len(equals) == 1
        assert equals[0].declaring_type == "com.example.Car"

    def test_enclosing_and_top_level(self, model: InMemoryTypeModel) -> None:
        inner = model.find_type("com.example.Secret$Inner")
        assert inner is not None
        assert model.top_level(inner).qualified_name == "com.example.Secret"
        assert [t.simple_name for t in model.enclosing_types(inner)] == ["Inner", "Secret"]

    def test_markers(self, model: InMemoryTypeModel) -> None:
        point = model.find_type("com.example.Point")
        assert point is not None
        assert model.has_marker(point, "lombok.Data")
        assert not model.has_marker(point, "lombok.Getter")

    def test_add_replaces_declaration(self) -> None:
        model = InMemoryTypeModel([TypeDecl("com.example.A")])
        model.add(TypeDecl("com.example.A", visibility=Visibility.PRIVATE))
        assert len(model) == 1
        assert "com.example.A" in model
        found = model.find_type("com.example.A")
        assert found is not None
        assert found.visibility is Visibility.PRIVATE
