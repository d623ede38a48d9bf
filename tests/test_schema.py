"""
Tests for schemas, nesting and the top-level validation entry points.
"""

from dataclasses import dataclass, field

import pytest

from dataknobs_common.exceptions import ValidationError

from dataknobs_validating import (
    Error,
    Errors,
    F,
    FieldValidationError,
    Gte,
    Len,
    Nested,
    NestedMulti,
    Nonzero,
    Schema,
    attr,
    item,
    validate,
    validate_or_raise,
)


@dataclass
class Address:
    country: str = ""
    province: str = ""
    city: str = ""


@dataclass
class Person:
    name: str = ""
    age: int = 0
    address: Address = field(default_factory=Address)


def person_schema(p: Person) -> Schema:
    return Schema({
        F("name", attr(p, "name")): Len(1, 5),
        F("age", attr(p, "age")): Gte(10),
        F("address", attr(p, "address")): Nested(Schema({
            F("country", attr(p.address, "country")): Nonzero(),
            F("province", attr(p.address, "country")): Nonzero(),
            F("city", attr(p.address, "city")): Nonzero(),
        })),
    })


class TestValidate:
    """Test the schema-level entry point."""

    def test_valid(self):
        """A fully valid schema returns None."""
        p = Person("ann", 30, Address("NL", "NH", "Amsterdam"))
        assert validate(person_schema(p)) is None

    def test_reports_every_field(self):
        """Failures of independent fields are all reported, in schema order."""
        errors = validate(person_schema(Person()))

        assert errors == [
            Error("name", "with an invalid length"),
            Error("age", "is lower than the given value"),
            Error("address.country", "is zero valued"),
            Error("address.province", "is zero valued"),
            Error("address.city", "is zero valued"),
        ]

    def test_empty_schema(self):
        """Nothing to validate is success."""
        assert validate(Schema()) is None

    def test_reads_values_at_validation_time(self):
        """References see changes made after the schema was built."""
        p = Person()
        schema = person_schema(p)
        p.name = "bob"
        p.age = 42
        p.address.country = "US"
        p.address.city = "Austin"
        assert validate(schema) is None

    def test_plain_dict(self):
        """Any mapping of fields to validators can be validated."""
        assert validate({F("n", 0): Nonzero()}) == [Error("n", "is zero valued")]

    def test_same_ref_different_names(self):
        """Fields sharing a reference stay distinct keys when names differ."""
        p = Person()
        schema = Schema({
            F("a", attr(p, "name")): Nonzero(),
            F("b", attr(p, "name")): Nonzero(),
        })
        assert len(schema) == 2
        assert validate(schema).fields() == ["a", "b"]

    def test_same_field_collides(self):
        """The same name and reference identify the same key."""
        p = Person()
        schema = Schema()
        schema[F("name", attr(p, "name"))] = Nonzero()
        schema[F("name", attr(p, "name"))] = Len(0, 10)
        assert len(schema) == 1
        assert validate(schema) is None


class TestSchemaOf:
    """Test building schemas from attribute names."""

    def test_object_attributes(self):
        """Keyword names become attribute references."""
        p = Person(name="toolongname")
        schema = Schema.of(p, name=Len(1, 5), age=Nonzero())

        assert schema.names() == ["name", "age"]
        assert validate(schema) == [
            Error("name", "with an invalid length"),
            Error("age", "is zero valued"),
        ]

    def test_mapping_keys(self):
        """Mappings are referenced by key; missing keys read as absent."""
        data = {"name": "amy"}
        schema = Schema.of(data, name=Len(1, 5), email=Nonzero())
        assert validate(schema) == [Error("email", "is zero valued")]

        data["email"] = "amy@example.com"
        assert validate(schema) is None

    def test_item_helper(self):
        """item() references a mapping entry."""
        data = {"tags": []}
        assert validate({F("tags", item(data, "tags")): Nonzero()}) is not None


class TestNested:
    """Test delegation to nested schemas."""

    def test_dotted_names(self):
        """Inner failures are reported under the full path."""
        address = Address()
        validator = Nested(Schema({F("city", attr(address, "city")): Nonzero()}))

        assert validator.validate(F("address", address)) == [
            Error("address.city", "is zero valued")
        ]

    def test_deep_nesting(self):
        """Paths compose across several levels."""
        address = Address()
        inner = Nested(Schema({F("city", attr(address, "city")): Nonzero()}))
        outer = Nested(Schema({F("address", address): inner}))

        assert outer.validate(F("person", None)) == [
            Error("person.address.city", "is zero valued")
        ]

    def test_inner_schema_unchanged(self):
        """Validating does not rename the fields of the inner schema."""
        address = Address()
        schema = Schema({F("city", attr(address, "city")): Nonzero()})
        Nested(schema).validate(F("address", address))
        assert schema.names() == ["city"]


class TestNestedMulti:
    """Test validation against several nested schemas."""

    def test_factory_called_once(self):
        """Schemas are produced when the validator is built."""
        address = Address()
        calls = []

        def schemas():
            calls.append(1)
            return [
                Schema({F("country", attr(address, "country")): Nonzero()}),
                Schema({F("city", attr(address, "city")): Nonzero()}),
            ]

        validator = NestedMulti(schemas)
        assert len(calls) == 1

        validator.validate(F("address", address))
        validator.validate(F("address", address))
        assert len(calls) == 1

    def test_collects_all(self):
        """Every schema is evaluated and all errors are concatenated."""
        address = Address(province="x")
        validator = NestedMulti(lambda: [
            Schema({F("country", attr(address, "country")): Nonzero()}),
            Schema({F("province", attr(address, "province")): Nonzero()}),
            Schema({F("city", attr(address, "city")): Len(2, 10)}),
        ])

        assert validator.validate(F("addr", address)) == [
            Error("addr.country", "is zero valued"),
            Error("addr.city", "with an invalid length"),
        ]

    def test_all_valid(self):
        """No failing schema means success."""
        address = Address("NL", "NH", "Amsterdam")
        validator = NestedMulti(lambda: [
            Schema({F("country", attr(address, "country")): Nonzero()}),
            Schema({F("city", attr(address, "city")): Nonzero()}),
        ])
        assert validator.validate(F("addr", address)) is None

    def test_no_schemas(self):
        """An empty list of schemas always succeeds."""
        assert NestedMulti(list).validate(F("x", None)) is None


class TestValidateOrRaise:
    """Test the raising entry point."""

    def test_valid_does_not_raise(self):
        """A valid schema returns None."""
        assert validate_or_raise({F("n", 1): Nonzero()}) is None

    def test_raises_with_errors(self):
        """Invalid schemas raise a ValidationError carrying the errors."""
        with pytest.raises(FieldValidationError) as exc_info:
            validate_or_raise(person_schema(Person(name="al", age=12)))

        error = exc_info.value
        assert isinstance(error, ValidationError)
        assert isinstance(error.errors, Errors)
        assert error.context["fields"] == ["address.country", "address.province", "address.city"]
        assert str(error).startswith("address.country: is zero valued")
