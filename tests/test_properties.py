"""Tests for PropertyService: CRUD, ownership checks and transfer."""
from __future__ import annotations

import pytest
from sqlalchemy import select

from conftest import property_data
from core.exceptions import NotFoundError, PermissionDeniedError, ValidationError
from core.models import Activity, Property
from domain.properties import PropertyService
from services.activity_log import ActivityType


def _activity_types(db_session, user_id):
    return [
        a.type
        for a in db_session.scalars(
            select(Activity).where(Activity.user_id == user_id).order_by(Activity.id)
        )
    ]


class TestCreateProperty:

    def test_create_applies_defaults_and_logs_listing(self, db_session, realtor):
        prop = PropertyService(db_session).create_property(realtor.id, property_data())

        assert prop.id is not None
        assert prop.listed_by_id == realtor.id
        assert prop.year_built == 0
        assert prop.lot_size == 0
        assert prop.parking_spaces == ""
        assert prop.images == []
        assert prop.features == []
        assert prop.main_image == ""
        assert _activity_types(db_session, realtor.id) == [ActivityType.LISTING]

    def test_create_reconciles_cover_image(self, db_session, realtor):
        prop = PropertyService(db_session).create_property(
            realtor.id, property_data(main_image="cover.jpg", images=["a.jpg", "b.jpg"])
        )

        assert prop.main_image == "cover.jpg"
        assert prop.images == ["cover.jpg", "a.jpg", "b.jpg"]

    def test_create_ignores_owner_in_payload(self, db_session, realtor, other_realtor):
        prop = PropertyService(db_session).create_property(
            realtor.id, property_data(listed_by_id=other_realtor.id)
        )

        assert prop.listed_by_id == realtor.id

    def test_create_rejects_missing_required_fields(self, db_session, realtor):
        data = property_data()
        del data["price"]

        with pytest.raises(ValidationError) as exc_info:
            PropertyService(db_session).create_property(realtor.id, data)

        assert exc_info.value.errors == [{"field": "price", "message": "is required"}]
        assert db_session.scalars(select(Property)).all() == []

    def test_list_is_scoped_to_owner_in_insertion_order(self, db_session, realtor, other_realtor):
        service = PropertyService(db_session)
        first = service.create_property(realtor.id, property_data(title="First"))
        service.create_property(other_realtor.id, property_data(title="Theirs"))
        second = service.create_property(realtor.id, property_data(title="Second"))

        assert [p.id for p in service.list_properties(realtor.id)] == [first.id, second.id]


class TestUpdateProperty:

    def test_partial_update_keeps_absent_fields(self, db_session, realtor, sample_property):
        prop = PropertyService(db_session).update_property(
            sample_property.id, realtor.id, {"price": 550000}
        )

        assert prop.price == 550000
        assert prop.year_built == 1990
        assert prop.images == ["a.jpg"]
        assert prop.features == ["Pool"]
        assert prop.lot_size == 0
        assert prop.parking_spaces == ""
        assert ActivityType.PROPERTY_UPDATE in _activity_types(db_session, realtor.id)

    def test_update_cannot_change_owner(self, db_session, realtor, other_realtor, sample_property):
        prop = PropertyService(db_session).update_property(
            sample_property.id, realtor.id, {"listed_by_id": other_realtor.id, "title": "Renamed"}
        )

        assert prop.listed_by_id == realtor.id
        assert prop.title == "Renamed"

    def test_null_required_field_is_rejected_without_writing(self, db_session, realtor, sample_property):
        with pytest.raises(ValidationError):
            PropertyService(db_session).update_property(
                sample_property.id, realtor.id, {"title": None, "price": 1}
            )

        db_session.refresh(sample_property)
        assert sample_property.title == "Luxury Villa"
        assert sample_property.price == 500000
        assert _activity_types(db_session, realtor.id) == []

    def test_gallery_only_update_sets_cover_from_gallery(self, db_session, realtor, sample_property):
        prop = PropertyService(db_session).update_property(
            sample_property.id, realtor.id, {"images": ["b.jpg", "c.jpg"]}
        )

        assert prop.images == ["b.jpg", "c.jpg"]
        assert prop.main_image == "b.jpg"

    def test_cover_update_moves_image_to_front(self, db_session, realtor, sample_property):
        service = PropertyService(db_session)
        service.update_property(sample_property.id, realtor.id, {"images": ["a.jpg", "b.jpg"]})
        prop = service.update_property(sample_property.id, realtor.id, {"main_image": "b.jpg"})

        assert prop.images == ["b.jpg", "a.jpg"]
        assert prop.main_image == "b.jpg"

    def test_update_of_unknown_property(self, db_session, realtor):
        with pytest.raises(NotFoundError):
            PropertyService(db_session).update_property(9999, realtor.id, {"price": 1})

    def test_update_by_non_owner_is_denied(self, db_session, other_realtor, sample_property):
        with pytest.raises(PermissionDeniedError):
            PropertyService(db_session).update_property(
                sample_property.id, other_realtor.id, {"price": 1}
            )

        db_session.refresh(sample_property)
        assert sample_property.price == 500000


class TestDeleteAndTransfer:

    def test_delete_is_final(self, db_session, realtor, sample_property):
        service = PropertyService(db_session)
        property_id = sample_property.id

        assert service.delete_property(property_id, realtor.id) is True

        with pytest.raises(NotFoundError):
            service.get_property(property_id)
        assert service.list_properties(realtor.id) == []

        deleted = db_session.scalars(
            select(Activity).where(Activity.type == ActivityType.PROPERTY_DELETE)
        ).one()
        assert deleted.property_id is None
        assert deleted.description == "Luxury Villa"

    def test_delete_by_non_owner_is_denied(self, db_session, other_realtor, sample_property):
        with pytest.raises(PermissionDeniedError):
            PropertyService(db_session).delete_property(sample_property.id, other_realtor.id)

    def test_transfer_moves_ownership(self, db_session, realtor, other_realtor, sample_property):
        service = PropertyService(db_session)
        prop = service.transfer_property(sample_property.id, realtor.id, other_realtor.id)

        assert prop.listed_by_id == other_realtor.id
        assert service.list_properties(realtor.id) == []
        assert [p.id for p in service.list_properties(other_realtor.id)] == [sample_property.id]
        assert ActivityType.PROPERTY_TRANSFER in _activity_types(db_session, realtor.id)

    def test_transfer_requires_current_owner(self, db_session, other_realtor, sample_property):
        with pytest.raises(PermissionDeniedError):
            PropertyService(db_session).transfer_property(
                sample_property.id, other_realtor.id, other_realtor.id
            )

    def test_transfer_to_unknown_user(self, db_session, realtor, sample_property):
        with pytest.raises(NotFoundError):
            PropertyService(db_session).transfer_property(sample_property.id, realtor.id, 9999)
