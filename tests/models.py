"""Document classes shared by the test modules."""

from docpersist import (
    AUTO,
    Document,
    EmbeddedDocument,
    Field,
    ValidationError,
    after_create,
    after_save,
    before_create,
    before_save,
    embeds_many,
    embeds_one,
    references_many,
    references_one,
)


def non_negative(value: int) -> None:
    if value < 0:
        raise ValidationError("must not be negative")


class Location(EmbeddedDocument):
    __type_id__ = AUTO
    name: str = Field(required=True)


class Address(EmbeddedDocument):
    __type_id__ = AUTO
    street: str = Field(required=True)
    city: str | None = None
    locations = embeds_many("Location")


class Passport(EmbeddedDocument):
    __type_id__ = AUTO
    number: str = Field(required=True)


class Company(Document):
    __type_id__ = AUTO
    __collection_name__ = "companies"
    name: str = Field(required=True)


class Person(Document):
    __type_id__ = AUTO
    __collection_name__ = "people"
    name: str = Field(required=True)
    age: int = Field(default=0, validation_func=non_negative)
    addresses = embeds_many(Address)
    passport = embeds_one(Passport)
    employer = references_one(Company)
    clients = references_many("Company")


class Journal(Document):
    """Records the order in which its callbacks run."""
    __type_id__ = AUTO
    __collection_name__ = "journals"
    title: str = Field(required=True)
    entries = embeds_many("Entry")

    def __post_init__(self) -> None:
        self._events = []

    @before_create
    def record_before_create(self) -> None:
        self._events.append("before_create")

    @before_save
    def record_before_save(self) -> None:
        self._events.append("before_save")

    @after_create
    def record_after_create(self) -> None:
        self._events.append("after_create")

    @after_save
    def record_after_save(self) -> None:
        self._events.append("after_save")


class Entry(EmbeddedDocument):
    __type_id__ = AUTO
    body: str = Field(required=True)

    def __post_init__(self) -> None:
        self._events = []

    @before_create
    def record_before_create(self) -> None:
        self._events.append("before_create")

    @after_save
    def record_after_save(self) -> None:
        self._events.append("after_save")
