"""Tests for the Insert command."""

from unittest.mock import Mock

import pytest
from pymongo.collection import Collection
from pymongo.errors import DuplicateKeyError

from docpersist import CommandContext, Insert, persist
from tests.conftest import SpyCollection
from tests.models import Address, Company, Entry, Journal, Location, Passport, Person


class TestValidationGate:
    """An invalid document is returned untouched when validation is requested."""

    def test_invalid_document_is_not_written(self, collection: SpyCollection) -> None:
        person = Person(age=-1)

        result = Insert(person, validate=True, collection=collection).persist()

        assert result is person
        assert person.new_record is True
        assert collection.calls == []
        assert {e.field_name for e in person.errors} == {"name", "age"}

    def test_invalid_document_runs_no_callbacks(self, collection: SpyCollection) -> None:
        journal = Journal()

        persist(journal, validate=True, collection=collection)

        assert journal._events == []
        assert collection.calls == []

    def test_invalid_document_keeps_pending_changes(self, collection: SpyCollection) -> None:
        person = Person(age=3)

        persist(person, validate=True, collection=collection)

        assert person.changes == {"age": (None, 3)}
        assert person.previous_changes == {}

    def test_validation_can_be_skipped(self, collection: SpyCollection) -> None:
        person = Person(age=-1)

        persist(person, validate=False, collection=collection)

        assert person.new_record is False
        assert len(collection.inserted) == 1

    def test_invalid_embedded_child_blocks_the_parent(self, collection: SpyCollection) -> None:
        person = Person(name="Ada", addresses=[Address(street="1 Main St"), Address()])

        persist(person, collection=collection)

        assert person.new_record is True
        assert collection.calls == []
        assert [e.field_name for e in person.errors] == ["addresses"]


class TestTopLevelInsert:
    def test_marks_document_persisted(self, collection: SpyCollection) -> None:
        person = Person(name="Ada")

        result = persist(person, collection=collection)

        assert result is person
        assert person.new_record is False
        assert person.is_persisted()

    def test_callbacks_run_once_each_in_order(self, collection: SpyCollection) -> None:
        journal = Journal(title="Field notes")

        persist(journal, collection=collection)

        assert journal._events == ["before_create", "before_save", "after_create", "after_save"]

    def test_writes_raw_attributes(self, collection: SpyCollection) -> None:
        person = Person(name="Ada", age=36)

        persist(person, collection=collection)

        assert collection.inserted == [person.raw_attributes()]
        assert collection.inserted[0]["name"] == "Ada"
        assert collection.inserted[0]["_type"] == "Person"

    def test_options_are_passed_through_verbatim(self, collection: SpyCollection) -> None:
        person = Person(name="Ada")
        options = {"bypass_document_validation": True, "comment": "import"}

        persist(person, collection=collection, options=options)

        assert collection.calls[0][2] == options

    def test_moves_changes(self, collection: SpyCollection) -> None:
        person = Person(name="Ada")
        person.age = 36

        persist(person, collection=collection)

        assert person.changed is False
        assert person.previous_changes == {"name": (None, "Ada"), "age": (0, 36)}

    def test_works_against_a_pymongo_collection(self) -> None:
        collection = Mock(spec=Collection)
        person = Person(name="Ada")

        persist(person, collection=collection, options={"comment": "test"})

        collection.insert_one.assert_called_once_with(person.raw_attributes(), comment="test")


class TestPreparedContext:
    def test_context_supplies_collection_and_options(self, collection: SpyCollection) -> None:
        person = Person(name="Ada")
        context = CommandContext(collection=collection, options={"comment": "import"})

        Insert(person, context=context).persist()

        assert collection.calls == [("insert_one", person.raw_attributes(), {"comment": "import"})]
        assert person.new_record is False

    def test_context_decides_whether_to_validate(self, collection: SpyCollection) -> None:
        person = Person(age=-1)

        persist(person, validate=True, context=CommandContext(collection=collection, validate=False))

        assert len(collection.inserted) == 1
        assert person.new_record is False

    def test_context_reaches_embedded_inserts(self, collection: SpyCollection) -> None:
        person = Person(name="Ada")
        persist(person, collection=collection)
        address = Address(street="1 Main St")
        person.addresses.append(address)

        persist(address, context=CommandContext(collection=collection, options={"comment": "x"}))

        _, _, options = collection.updates[0]
        assert options == {"comment": "x"}
        assert address.new_record is False


class TestCascade:
    def test_embedded_children_are_marked_persisted(self, collection: SpyCollection) -> None:
        addresses = [Address(street=f"{n} Main St") for n in range(3)]
        passport = Passport(number="X123")
        person = Person(name="Ada", addresses=addresses, passport=passport)

        command = Insert(person, collection=collection)
        command.persist()

        children = command.children()
        assert len(children) == 4
        assert all(not child.new_record for child in children)
        assert set(map(id, children)) == set(map(id, addresses + [passport]))

    def test_whole_tree_is_written_once(self, collection: SpyCollection) -> None:
        person = Person(name="Ada", addresses=[Address(street="1 Main St")], passport=Passport(number="X1"))

        persist(person, collection=collection)

        assert len(collection.calls) == 1
        written = collection.inserted[0]
        assert written["addresses"][0]["street"] == "1 Main St"
        assert written["passport"]["number"] == "X1"

    def test_referenced_documents_are_not_cascaded(self, collection: SpyCollection) -> None:
        employer = Company(name="Analytical Engines")
        clients = [Company(name="Babbage & Co"), Company(name="Lovelace Ltd")]
        person = Person(name="Ada", employer=employer, clients=clients)

        command = Insert(person, collection=collection)
        command.persist()

        assert command.children() == []
        assert employer.new_record is True
        assert all(client.new_record for client in clients)
        assert collection.inserted[0]["employer_id"] == str(employer._id)
        assert collection.inserted[0]["clients_ids"] == [str(client._id) for client in clients]

    def test_nested_embedded_documents_are_marked_persisted(self, collection: SpyCollection) -> None:
        location = Location(name="Front door")
        address = Address(street="1 Main St", locations=[location])
        person = Person(name="Ada", addresses=[address])

        command = Insert(person, collection=collection)
        command.persist()

        assert command.children() == [address]
        assert address.new_record is False
        assert location.new_record is False

    def test_children_callbacks_do_not_run(self, collection: SpyCollection) -> None:
        entry = Entry(body="Day one")
        journal = Journal(title="Field notes", entries=[entry])

        persist(journal, collection=collection)

        assert entry.new_record is False
        assert entry._events == []


class TestFailures:
    def test_write_error_propagates_and_leaves_document_new(self) -> None:
        collection = SpyCollection(fail_with=DuplicateKeyError("E11000 duplicate key error"))
        journal = Journal(title="Field notes", entries=[Entry(body="Day one")])

        with pytest.raises(DuplicateKeyError):
            persist(journal, collection=collection)

        assert journal.new_record is True
        assert journal.entries[0].new_record is True
        assert journal._events == ["before_create", "before_save"]
        assert journal.changed is True

    def test_callback_error_aborts_before_the_write(self, collection: SpyCollection) -> None:
        class FailingJournal(Journal):
            __type_id__ = "FailingJournal"

            def before_save(self) -> None:
                raise RuntimeError("refusing to save")

        journal = FailingJournal(title="Field notes")

        with pytest.raises(RuntimeError, match="refusing to save"):
            persist(journal, collection=collection)

        assert journal.new_record is True
        assert collection.calls == []
        assert journal._events == ["before_create"]


class TestRepeatedInsert:
    """Document.insert() guards against inserting the same document twice."""

    def test_second_insert_is_a_no_op(self, spy_db) -> None:
        person = Person(name="Ada")

        person.insert()
        person.insert()

        assert len(spy_db["people"].inserted) == 1
        assert person.new_record is False

    def test_create_inserts_immediately(self, spy_db) -> None:
        person = Person.create(name="Ada")

        assert person.new_record is False
        assert spy_db["people"].inserted[0]["_id"] == str(person._id)

    def test_save_inserts_new_records_only(self, spy_db) -> None:
        person = Person(name="Ada")

        assert person.save() is True
        with pytest.raises(NotImplementedError):
            person.save()

    def test_save_reports_validation_failure(self, spy_db) -> None:
        person = Person()

        assert person.save() is False
        assert person.new_record is True
        assert "people" not in spy_db.collections
