"""
Tests for seller CRUD, the validation gate and cascade delete.
"""

from datetime import datetime

import pytest

from app.exceptions import SellerNotFoundError, ValidationFailedError
from app.models import Seller, SellerRequest
from app.sellers import (
    create_seller,
    delete_seller,
    get_all_sellers,
    get_seller,
    get_seller_transactions,
    update_seller,
)
from app.validation import EntityValidator, Violation


class TestEntityValidator:
    def test_valid_seller_has_no_violations(self):
        seller = Seller.model_construct(name="Jo", contact_info="jo@example.com")
        assert EntityValidator().validate(seller) == []

    def test_collects_every_violation(self):
        seller = Seller.model_construct(name="J", contact_info="   ")
        violations = EntityValidator().validate(seller)
        assert {v.field for v in violations} == {"name", "contact_info"}
        assert all(isinstance(v, Violation) for v in violations)

    def test_check_raises_with_all_fields(self):
        seller = Seller.model_construct(name=None, contact_info="x" * 256)
        with pytest.raises(ValidationFailedError) as exc_info:
            EntityValidator().check(seller)
        err = exc_info.value
        assert err.entity == "seller"
        assert {v.field for v in err.violations} == {"name", "contact_info"}
        assert {d["field"] for d in err.details["violations"]} == {"name", "contact_info"}


class TestCreateSeller:
    def test_assigns_id_and_registration_date(self, store, validator, clock):
        clock.now = datetime(2024, 1, 10, 8, 30)
        seller = create_seller(store, validator, SellerRequest(name="John", contact_info="john17@gmail.com"))
        assert seller.id == 1
        assert seller.registration_date == datetime(2024, 1, 10, 8, 30)
        assert store.get_seller(seller.id).name == "John"

    def test_ids_are_sequential(self, make_seller):
        assert [make_seller(f"Seller {n}").id for n in range(3)] == [1, 2, 3]

    @pytest.mark.parametrize("name", [None, "", "J", "   ", "x" * 256])
    def test_invalid_name_rejected(self, store, validator, name):
        with pytest.raises(ValidationFailedError) as exc_info:
            create_seller(store, validator, SellerRequest(name=name, contact_info="a@b.c"))
        assert [v.field for v in exc_info.value.violations] == ["name"]
        assert store.list_sellers() == []

    @pytest.mark.parametrize("contact_info", [None, "", " ", "x" * 256])
    def test_invalid_contact_info_rejected(self, store, validator, contact_info):
        with pytest.raises(ValidationFailedError) as exc_info:
            create_seller(store, validator, SellerRequest(name="John", contact_info=contact_info))
        assert [v.field for v in exc_info.value.violations] == ["contact_info"]

    def test_boundary_lengths_accepted(self, store, validator):
        seller = create_seller(store, validator, SellerRequest(name="x" * 255, contact_info="y" * 255))
        assert len(seller.name) == 255


class TestUpdateSeller:
    def test_unset_fields_keep_their_values(self, store, validator, make_seller):
        s = make_seller("Old Name", "old@example.com")
        updated = update_seller(store, validator, s.id, SellerRequest(name="New Name"))
        assert updated.name == "New Name"
        assert updated.contact_info == "old@example.com"

    def test_registration_date_never_changes(self, store, validator, clock, make_seller):
        s = make_seller()
        clock.now = datetime(2030, 1, 1)
        updated = update_seller(store, validator, s.id, SellerRequest(name="Renamed", contact_info="new"))
        assert updated.registration_date == s.registration_date

    def test_explicit_null_is_applied_and_rejected(self, store, validator, make_seller):
        s = make_seller("Keep Me", "keep@example.com")
        with pytest.raises(ValidationFailedError):
            update_seller(store, validator, s.id, SellerRequest(contact_info=None))
        assert store.get_seller(s.id).contact_info == "keep@example.com"

    def test_invalid_update_leaves_seller_untouched(self, store, validator, make_seller):
        s = make_seller("Keep Me", "keep@example.com")
        with pytest.raises(ValidationFailedError):
            update_seller(store, validator, s.id, SellerRequest(name="K", contact_info="changed"))
        stored = store.get_seller(s.id)
        assert (stored.name, stored.contact_info) == ("Keep Me", "keep@example.com")

    def test_unknown_seller(self, store, validator):
        with pytest.raises(SellerNotFoundError) as exc_info:
            update_seller(store, validator, 42, SellerRequest(name="Nobody"))
        assert exc_info.value.seller_id == 42


class TestReadSellers:
    def test_get_all(self, store, make_seller):
        make_seller("Alpha")
        make_seller("Beta")
        assert [s.name for s in get_all_sellers(store)] == ["Alpha", "Beta"]

    def test_get_one(self, store, make_seller):
        s = make_seller("Alpha")
        assert get_seller(store, s.id) == s

    def test_get_missing(self, store):
        with pytest.raises(SellerNotFoundError):
            get_seller(store, 1)

    def test_transactions_in_link_order(self, store, make_seller, add_txn):
        s = make_seller()
        first = add_txn(s.id, 1, datetime(2024, 3, 2))
        second = add_txn(s.id, 2, datetime(2024, 3, 1))
        assert [t.id for t in get_seller_transactions(store, s.id)] == [first.id, second.id]

    def test_transactions_of_missing_seller(self, store):
        with pytest.raises(SellerNotFoundError):
            get_seller_transactions(store, 7)


class TestDeleteSeller:
    def test_cascades_to_all_transactions(self, store, make_seller, add_txn):
        doomed = make_seller("Doomed")
        kept = make_seller("Kept")
        for day in (1, 2, 3):
            add_txn(doomed.id, 10, datetime(2024, 3, day))
        survivor = add_txn(kept.id, 10, datetime(2024, 3, 4))

        delete_seller(store, doomed.id)

        assert store.get_seller(doomed.id) is None
        assert [t.id for t in store.list_transactions()] == [survivor.id]
        assert store.get_seller(kept.id).transaction_ids == [survivor.id]

    def test_delete_seller_without_transactions(self, store, make_seller):
        s = make_seller()
        delete_seller(store, s.id)
        assert store.list_sellers() == []

    def test_delete_missing(self, store):
        with pytest.raises(SellerNotFoundError):
            delete_seller(store, 3)

    def test_ids_not_reused_after_delete(self, store, make_seller):
        s = make_seller()
        delete_seller(store, s.id)
        assert make_seller().id != s.id
