"""
Unit tests for record/document conversion.
"""
import pytest
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional

from utils.documents import (
    DynamoDBRecord,
    dynamodb_field,
    from_attribute_map,
    from_document,
    to_attribute_map,
    to_document,
)
from utils.exceptions import UnsupportedAttributeTypeError


@dataclass(kw_only=True)
class Customer(DynamoDBRecord):
    sk: str = dynamodb_field(name='SK')
    name: str
    balance: float = 0.0
    created: Optional[datetime] = None


def make_customer() -> Customer:
    return Customer(
        pk='customer#1',
        sk='profile',
        name='Ada',
        balance=12.5,
        created=datetime(2024, 1, 1, 10, 0),
    )


class TestToDocument:
    """Tests for to_document."""

    def test_record_uses_storage_names(self):
        document = to_document(make_customer())
        assert document == {
            'PK': 'customer#1',
            'SK': 'profile',
            'name': 'Ada',
            'balance': Decimal('12.5'),
            'created': '2024-01-01T10:00:00',
        }

    def test_ignored_field_is_not_stored(self):
        customer = make_customer()
        customer.mark_as_latest()
        assert customer.is_latest is True
        assert 'is_latest' not in to_document(customer)

    def test_mapping(self):
        document = to_document({'PK': 'a', 'tags': ('x', 'y'), 'score': 0.5})
        assert document == {'PK': 'a', 'tags': ['x', 'y'], 'score': Decimal('0.5')}

    def test_unsupported_value(self):
        with pytest.raises(UnsupportedAttributeTypeError):
            to_document({'PK': 'a', 'handle': object()})

    def test_unsupported_item(self):
        with pytest.raises(UnsupportedAttributeTypeError):
            to_document('not a record')


class TestAttributeMaps:
    """Tests for attribute map conversion."""

    def test_to_attribute_map(self):
        item = to_attribute_map({'PK': 'a', 'count': 3, 'active': True})
        assert item == {'PK': {'S': 'a'}, 'count': {'N': '3'}, 'active': {'BOOL': True}}

    def test_from_attribute_map_restores_numbers(self):
        document = from_attribute_map({
            'PK': {'S': 'a'},
            'count': {'N': '3'},
            'ratio': {'N': '0.25'},
            'nested': {'M': {'n': {'N': '1'}}},
        })
        assert document == {'PK': 'a', 'count': 3, 'ratio': 0.25, 'nested': {'n': 1}}
        assert isinstance(document['count'], int)

    def test_record_survives_storage(self):
        customer = make_customer()
        restored = from_document(from_attribute_map(to_attribute_map(customer)), Customer)
        assert restored == customer
        assert restored.created == datetime(2024, 1, 1, 10, 0)


class TestFromDocument:
    """Tests for from_document."""

    def test_without_type_returns_document(self):
        document = {'PK': 'a'}
        assert from_document(document) is document

    def test_missing_optional_fields_use_defaults(self):
        customer = from_document({'PK': 'customer#2', 'SK': 'profile', 'name': 'Bo'}, Customer)
        assert customer.balance == 0.0
        assert customer.created is None
        assert customer.is_latest is False

    def test_plain_class(self):
        class Point:
            def __init__(self, x, y):
                self.x = x
                self.y = y

        point = from_document({'x': 1, 'y': 2}, Point)
        assert (point.x, point.y) == (1, 2)
