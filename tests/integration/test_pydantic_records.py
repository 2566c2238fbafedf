"""Integration tests: Pydantic models as sources and destinations.

Critical Invariants:
- Pydantic models and dataclasses map into each other the same way
- Frozen model instances passed in and frozen fields are never written
"""

from dataclasses import dataclass, field

import pytest
from pydantic import BaseModel, ConfigDict, Field

from automapper import Mapper, NotAReferenceError, Strategy, get_mapper


class AddressModel(BaseModel):
    street: str
    city: str = ""


class UserModel(BaseModel):
    id: int
    name: str = ""
    address: AddressModel | None = None


@dataclass
class Address:
    street: str = ""
    city: str = ""


@dataclass
class User:
    user_id: int = field(default=0, metadata={"mapper": "id"})
    name: str = ""
    address: Address | None = None


class UserRecord(BaseModel):
    key: int = Field(default=0, json_schema_extra={"mapper": "id"})
    name: str = ""
    created_by: str = Field(default="system", frozen=True)


class UserSnapshot(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = ""


@dataclass
class Audit:
    name: str = ""
    created_by: str = ""


def test_model_into_dataclass(mapper):
    source = UserModel(id=7, name="Ada", address=AddressModel(street="Main St", city="Oslo"))
    destination = User()

    mapper.map(source, destination)

    assert destination == User(user_id=7, name="Ada", address=Address("Main St", "Oslo"))
    plan = mapper.plan_for(UserModel, User)
    assert [step.strategy for step in plan.steps] == [
        Strategy.IDENTICAL,
        Strategy.IDENTICAL,
        Strategy.NESTED_RECORD,
    ]


def test_dataclass_into_model_uses_json_schema_extra_alias(mapper):
    destination = UserRecord()

    mapper.map(User(user_id=3, name="Bob"), destination)

    assert destination.key == 3
    assert destination.name == "Bob"


def test_create_model_with_required_fields(mapper):
    """create() builds models without validation, so required fields may stay zero."""
    created = mapper.create(Address(city="Oslo"), AddressModel)

    assert isinstance(created, AddressModel)
    assert created.street == ""
    assert created.city == "Oslo"


def test_nested_optional_model_created_fresh(mapper):
    source = User(user_id=1, address=Address(street="High St"))

    created = mapper.create(source, UserModel)

    assert created.id == 1
    assert isinstance(created.address, AddressModel)
    assert created.address.street == "High St"


def test_frozen_field_left_untouched(mapper):
    destination = UserRecord()

    mapper.map(Audit(name="Eve", created_by="admin"), destination)

    assert destination.name == "Eve"
    assert destination.created_by == "system"
    assert [step.destination_name for step in mapper.plan_for(Audit, UserRecord).steps] == ["name"]


def test_frozen_model_destination_rejected(mapper):
    with pytest.raises(NotAReferenceError, match="frozen"):
        mapper.map(Audit(name="Eve"), UserSnapshot())


def test_frozen_model_source_allowed(mapper):
    destination = Audit()

    mapper.map(UserSnapshot(name="Eve"), destination)

    assert destination.name == "Eve"


def test_get_mapper_is_shared():
    assert get_mapper() is get_mapper()
    assert isinstance(get_mapper(), Mapper)


class AuditLog(BaseModel):
    snapshot: UserSnapshot = Field(default_factory=UserSnapshot)


@dataclass
class AuditEntry:
    snapshot: Audit = field(default_factory=Audit)


def test_frozen_nested_model_is_filled(mapper):
    """Frozen models allocated by the mapper are filled before anyone sees them."""
    destination = AuditLog()
    prior = destination.snapshot

    mapper.map(AuditEntry(snapshot=Audit(name="Eve")), destination)

    assert destination.snapshot.name == "Eve"
    assert destination.snapshot is not prior
    assert prior.name == ""
