"""Shared fixtures: a small in-memory type model used across the test suite."""

from __future__ import annotations

from functools import reduce

import pytest

from ofcov.config import OfcovConfig
from ofcov.equals.iterative import IterativeEqualsAnalyzer
from ofcov.evaluation.builder import EvaluationBuilder
from ofcov.finders.base import FieldFinderChain
from ofcov.model import (
    BinaryOperator,
    Cast,
    CodeElement,
    FieldDecl,
    InMemoryTypeModel,
    Invocation,
    LocalVariable,
    Marker,
    MethodDecl,
    MethodRef,
    Parameter,
    Return,
    SuperAccess,
    ThisAccess,
    TypeDecl,
    TypeRef,
    VariableRead,
    Visibility,
)
from ofcov.pseudo import PseudoFieldGenerator
from ofcov.registry import create_analyzers, create_field_finder

STRING = TypeRef("java.lang.String")
INT = TypeRef("int")
LONG = TypeRef("long")
BOOLEAN = TypeRef("boolean")
OBJECT = TypeRef("java.lang.Object")

PUBLIC = Visibility.PUBLIC
PRIVATE = Visibility.PRIVATE

OBJECTS_EQUALS = MethodRef("java.util.Objects", "equals", (OBJECT, OBJECT), BOOLEAN, static=True)


# ── Declaration helpers ──────────────────────────────────────────


def _name(simple: str) -> str:
    return f"com.example.{simple}"


def _field(
    owner: str, name: str, type_ref: TypeRef, visibility: Visibility = PUBLIC, **kwargs: object
) -> FieldDecl:
    return FieldDecl(
        name=name, type=type_ref, declaring_type=owner, visibility=visibility, **kwargs
    )


def _getter(field: FieldDecl, name: str | None = None, visibility: Visibility = PUBLIC) -> MethodDecl:
    return MethodDecl(
        name=name or "get" + field.name[:1].upper() + field.name[1:],
        declaring_type=field.declaring_type,
        return_type=field.type,
        visibility=visibility,
        body=(Return(field.read(ThisAccess())),),
    )


def _equals(owner: str, *body: CodeElement) -> MethodDecl:
    return MethodDecl(
        name="equals",
        declaring_type=owner,
        return_type=BOOLEAN,
        parameters=(Parameter("o", OBJECT),),
        visibility=PUBLIC,
        body=body,
    )


def _other(owner: str) -> VariableRead:
    return VariableRead("other", TypeRef(owner))


def _objects_equals(first: CodeElement, second: CodeElement) -> Invocation:
    return Invocation(OBJECTS_EQUALS, None, (first, second))


def _same(field: FieldDecl, other: CodeElement) -> BinaryOperator:
    return BinaryOperator("==", field.read(), field.read(other))


def _super_equals(superclass: str) -> Invocation:
    method = MethodRef(superclass, "equals", (OBJECT,), BOOLEAN)
    return Invocation(method, SuperAccess(), (VariableRead("o", OBJECT),))


def _all(*conditions: CodeElement) -> CodeElement:
    return reduce(lambda left, right: BinaryOperator("&&", left, right), conditions)


# ── Model ────────────────────────────────────────────────────────


def _address_types() -> list[TypeDecl]:
    city = _name("City")
    city_name = _field(city, "name", STRING, PRIVATE)
    get_city_name = _getter(city_name)
    city_decl = TypeDecl(
        city,
        fields=(city_name,),
        methods=(
            get_city_name,
            _equals(
                city,
                Return(_objects_equals(get_city_name.call(), get_city_name.call(_other(city)))),
            ),
        ),
    )

    address = _name("Address")
    house_number = _field(address, "houseNumber", INT, PRIVATE)
    street = _field(address, "street", STRING, PRIVATE)
    postal_code = _field(address, "postalCode", STRING, PRIVATE)
    address_city = _field(address, "city", TypeRef(city), PRIVATE)
    address_decl = TypeDecl(
        address,
        fields=(house_number, street, postal_code, address_city),
        methods=(
            _getter(house_number),
            _getter(street),
            _getter(postal_code),
            _getter(address_city),
            _equals(
                address,
                Return(
                    _all(
                        _same(house_number, _other(address)),
                        _objects_equals(street.read(), street.read(_other(address))),
                        _objects_equals(address_city.read(), address_city.read(_other(address))),
                    )
                ),
            ),
        ),
    )

    person = _name("Person")
    person_decl = TypeDecl(
        person,
        fields=(
            _field(person, "name", STRING),
            _field(person, "sibling", TypeRef(person)),
            _field(person, "homeAddress", TypeRef(address)),
        ),
    )
    return [city_decl, address_decl, person_decl]


def _vehicle_types() -> list[TypeDecl]:
    vehicle = _name("Vehicle")
    wheels = _field(vehicle, "wheels", INT)
    vehicle_decl = TypeDecl(
        vehicle,
        fields=(wheels, _field(vehicle, "color", STRING)),
        methods=(
            _equals(
                vehicle,
                Return(_same(wheels, Cast(TypeRef(vehicle), VariableRead("o", OBJECT)))),
            ),
        ),
    )

    car = _name("Car")
    brand = _field(car, "brand", STRING)
    car_decl = TypeDecl(
        car,
        superclass=TypeRef(vehicle),
        fields=(brand,),
        methods=(
            _equals(
                car,
                Return(
                    _all(
                        _super_equals(vehicle),
                        _objects_equals(brand.read(), brand.read(_other(car))),
                    )
                ),
            ),
        ),
    )

    sports_car = _name("SportsCar")
    sports_car_decl = TypeDecl(
        sports_car, superclass=TypeRef(car), fields=(_field(sports_car, "topSpeed", INT),)
    )

    truck = _name("Truck")
    load = _field(truck, "load", INT)
    truck_decl = TypeDecl(
        truck,
        superclass=TypeRef(vehicle),
        fields=(load,),
        methods=(_equals(truck, Return(_same(load, _other(truck)))),),
    )

    bike = _name("Bike")
    gears = _field(bike, "gears", INT)
    bike_decl = TypeDecl(
        bike,
        superclass=TypeRef(vehicle),
        fields=(gears,),
        methods=(
            _equals(
                bike,
                LocalVariable("same", BOOLEAN, _super_equals(vehicle)),
                Return(_all(VariableRead("same", BOOLEAN), _same(gears, _other(bike)))),
            ),
        ),
    )
    return [vehicle_decl, car_decl, sports_car_decl, truck_decl, bike_decl]


def _marker_types() -> list[TypeDecl]:
    point = _name("Point")
    point_decl = TypeDecl(
        point,
        markers=(
            Marker.of("lombok.Data"),
            Marker.of("lombok.EqualsAndHashCode", exclude=["label"]),
        ),
        fields=(
            _field(point, "x", INT, PRIVATE),
            _field(point, "y", INT, PRIVATE),
            _field(point, "label", STRING, PRIVATE),
        ),
    )

    colored_point = _name("ColoredPoint")
    colored_point_decl = TypeDecl(
        colored_point,
        superclass=TypeRef(point),
        markers=(Marker.of("lombok.EqualsAndHashCode", callSuper=True),),
        fields=(_field(colored_point, "shade", STRING, PRIVATE),),
    )

    pixel = _name("Pixel")
    pixel_decl = TypeDecl(
        pixel,
        markers=(Marker.of("lombok.EqualsAndHashCode", onlyExplicitlyIncluded=True),),
        fields=(
            _field(
                pixel, "r", INT, PRIVATE, markers=(Marker.of("lombok.EqualsAndHashCode.Include"),)
            ),
            _field(pixel, "g", INT, PRIVATE),
        ),
    )

    token = _name("Token")
    token_decl = TypeDecl(
        token,
        markers=(Marker.of("lombok.Getter"),),
        fields=(
            _field(token, "id", STRING, PRIVATE),
            _field(token, "secret", STRING, PRIVATE, markers=(Marker.of("lombok.Getter", access="NONE"),)),
            _field(token, "code", STRING, PRIVATE, markers=(Marker.of("lombok.Getter", access="PACKAGE"),)),
            _field(token, "enabled", BOOLEAN, PRIVATE),
        ),
    )
    return [point_decl, colored_point_decl, pixel_decl, token_decl]


def _accessor_types() -> list[TypeDecl]:
    account = _name("Account")
    balance = _field(account, "balance", LONG, PRIVATE)
    active = _field(account, "active", BOOLEAN, PRIVATE)
    get_balance = _getter(balance)
    amount = MethodDecl(
        name="amount",
        declaring_type=account,
        return_type=LONG,
        visibility=PUBLIC,
        body=(Return(get_balance.call(ThisAccess())),),
    )
    account_decl = TypeDecl(
        account,
        fields=(balance, active),
        methods=(
            get_balance,
            _getter(balance, name="currentBalance"),
            amount,
            _getter(balance, name="secretBalance", visibility=PRIVATE),
            _getter(active, name="isActive"),
        ),
    )
    return [account_decl]


def _value_types() -> list[TypeDecl]:
    exception = _name("ValidationException")
    exception_decl = TypeDecl(
        exception,
        superclass=TypeRef("java.lang.RuntimeException"),
        fields=(_field(exception, "code", INT),),
    )

    order = _name("Order")
    order_decl = TypeDecl(
        order,
        fields=(
            _field(order, "items", TypeRef("java.util.List", (STRING,))),
            _field(order, "tags", TypeRef("java.util.Set", (STRING,))),
            _field(order, "scores", TypeRef.of("int[]")),
            _field(order, "error", TypeRef(exception)),
        ),
    )

    wrapper = _name("Wrapper")
    wrapper_decl = TypeDecl(wrapper, fields=(_field(wrapper, "payload", TypeRef("com.vendor.Unknown")),))
    return [exception_decl, order_decl, wrapper_decl, TypeDecl(_name("Empty"))]


def _visibility_types() -> list[TypeDecl]:
    secret = _name("Secret")
    secret_decl = TypeDecl(
        secret,
        fields=(
            _field(secret, "hidden", STRING, PRIVATE),
            _field(secret, "shared", STRING, Visibility.PACKAGE),
            _field(secret, "guarded", STRING, Visibility.PROTECTED),
            _field(secret, "open", STRING),
            _field(secret, "LIMIT", INT, static=True, final=True),
            _field(secret, "cache", STRING, transient=True),
        ),
    )
    inner = f"{secret}$Inner"
    inner_decl = TypeDecl(
        inner,
        visibility=PRIVATE,
        declaring_type=secret,
        fields=(_field(inner, "value", STRING),),
    )
    child = "org.other.SecretChild"
    return [
        secret_decl,
        inner_decl,
        TypeDecl(child, superclass=TypeRef(secret)),
        TypeDecl(f"{child}$Helper", declaring_type=child),
        TypeDecl(_name("ModelTest")),
        TypeDecl("org.other.OtherTest"),
    ]


def _scenario_types() -> list[TypeDecl]:
    resident = _name("Resident")
    resident_decl = TypeDecl(
        resident,
        fields=(
            _field(resident, "name", STRING),
            _field(resident, "sibling", TypeRef(resident)),
            _field(resident, "homeAddress", TypeRef(_name("Address"))),
            _field(resident, "favouriteCity", TypeRef(_name("City"))),
        ),
    )

    country = _name("Country")
    code = _field(country, "code", STRING)
    country_name = _field(country, "name", STRING)
    country_decl = TypeDecl(
        country,
        fields=(code, country_name),
        methods=(
            _equals(
                country,
                Return(
                    _all(
                        _objects_equals(code.read(), code.read(_other(country))),
                        _objects_equals(country_name.read(), country_name.read(_other(country))),
                    )
                ),
            ),
        ),
    )

    box = _name("Box")
    label = _field(box, "label", STRING)
    get_label = _getter(label, visibility=Visibility.PACKAGE)
    box_decl = TypeDecl(
        box,
        fields=(label,),
        methods=(
            get_label,
            _equals(box, Return(_objects_equals(get_label.call(), get_label.call(_other(box))))),
        ),
    )

    gauge = _name("Gauge")
    level = _field(gauge, "level", INT)
    current_level = MethodDecl(
        name="getLevel", declaring_type=gauge, return_type=INT, visibility=PUBLIC, static=True
    )
    gauge_decl = TypeDecl(
        gauge,
        fields=(level,),
        methods=(
            current_level,
            _equals(
                gauge, Return(BinaryOperator("==", current_level.call(), level.read(_other(gauge))))
            ),
        ),
    )
    return [resident_decl, country_decl, box_decl, gauge_decl]


def build_model() -> InMemoryTypeModel:
    return InMemoryTypeModel(
        [
            *_address_types(),
            *_vehicle_types(),
            *_marker_types(),
            *_accessor_types(),
            *_value_types(),
            *_visibility_types(),
            *_scenario_types(),
        ]
    )


# ── Fixtures ─────────────────────────────────────────────────────


@pytest.fixture()
def model() -> InMemoryTypeModel:
    return build_model()


@pytest.fixture()
def model_test(model: InMemoryTypeModel) -> TypeDecl:
    """A test type in the same package as the model types."""
    found = model.find_type("com.example.ModelTest")
    assert found is not None
    return found


@pytest.fixture()
def other_test(model: InMemoryTypeModel) -> TypeDecl:
    """A test type in an unrelated package."""
    found = model.find_type("org.other.OtherTest")
    assert found is not None
    return found


@pytest.fixture()
def generator(model: InMemoryTypeModel) -> PseudoFieldGenerator:
    return PseudoFieldGenerator(model)


@pytest.fixture()
def finder(model: InMemoryTypeModel, generator: PseudoFieldGenerator) -> FieldFinderChain:
    return create_field_finder(OfcovConfig(), model, generator)


@pytest.fixture()
def analyzer(model: InMemoryTypeModel, generator: PseudoFieldGenerator) -> IterativeEqualsAnalyzer:
    return IterativeEqualsAnalyzer(create_analyzers(OfcovConfig(), model, generator), model)


@pytest.fixture()
def evaluation_builder(
    finder: FieldFinderChain, analyzer: IterativeEqualsAnalyzer, model: InMemoryTypeModel
) -> EvaluationBuilder:
    return EvaluationBuilder(finder, analyzer, model)
