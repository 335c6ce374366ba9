"""Tests for the document registry."""

import pytest

from docpersist import ABSTRACT, AUTO, Document, SetupError, document_registry, embeds_one
from tests.models import Address, Company, Person


class TestLookups:
    def test_type_ids(self) -> None:
        assert document_registry.lookup_type_by_type_id("Person") is Person
        assert document_registry.type_to_type_id(Address) == "Address"
        assert document_registry.lookup_type_by_type_id("Nope") is None

    def test_collection_names(self) -> None:
        assert document_registry.collection_name_to_cls("companies") is Company
        with pytest.raises(ValueError):
            document_registry.collection_name_to_cls("nope")

    def test_forward_refs(self) -> None:
        assert document_registry.resolve_forward_ref("Person") is Person
        with pytest.raises(SetupError):
            document_registry.resolve_forward_ref("Missing")

    def test_abstract_documents_have_no_type_id(self) -> None:
        assert document_registry.type_to_type_id(Document) is None


class TestSetupErrors:
    def test_duplicate_collection_name(self) -> None:
        with pytest.raises(SetupError):
            class Staff(Document):
                __type_id__ = AUTO
                __collection_name__ = "people"

        document_registry.unregister(document_registry.resolve_forward_ref("Staff"))

    def test_abstract_collection_cannot_be_written(self) -> None:
        class Draft(Document):
            __type_id__ = AUTO

        with pytest.raises(SetupError):
            Draft.get_collection_name()
        assert Draft.__collection_name__ == ABSTRACT

    def test_embedding_a_top_level_document_is_rejected(self) -> None:
        class Badge(Document):
            __type_id__ = AUTO
            __collection_name__ = "badges"
            owner = embeds_one("Company")

        with pytest.raises(SetupError):
            Badge.get_associations()["owner"].document_cls
