"""Property domain service - listing CRUD and the partial-update merge policy.

Listing edits arrive from several independent forms, each sending a
different subset of fields. Updates are therefore merged into the stored
record rather than replacing it:

- a field present in the payload replaces the stored value;
- a field absent from the payload keeps the stored value;
- media and optional facts that are still unset after merging fall back
  to a zero value (see NULLABLE_DEFAULTS).

Ownership (``listed_by_id``) never changes through an update; use
``PropertyService.transfer_property``.
"""
from __future__ import annotations

import copy
from typing import Any, Dict, Iterable, List, Optional, Tuple

from sqlalchemy import select
from sqlalchemy.orm import Session

from core.exceptions import NotFoundError, PermissionDeniedError, ValidationError
from core.logging_config import get_context_logger, get_logger
from core.models import Property, User
from services.activity_log import ActivityService

LOGGER = get_logger(__name__)

# Fields that resolve to a zero value instead of staying unset
NULLABLE_DEFAULTS: Dict[str, Any] = {
    "year_built": 0,
    "lot_size": 0,
    "parking_spaces": "",
    "main_image": "",
    "features": [],
    "images": [],
}

# Never taken from an update payload
IMMUTABLE_FIELDS = frozenset({"id", "listed_by_id", "created_at"})

# Columns that may not be cleared
REQUIRED_FIELDS = frozenset({
    "title",
    "address",
    "city",
    "state",
    "zip_code",
    "price",
    "bedrooms",
    "bathrooms",
    "square_feet",
    "type",
    "status",
})

EDITABLE_FIELDS = frozenset({
    *REQUIRED_FIELDS,
    *NULLABLE_DEFAULTS,
    "description",
})


def merge_property_update(existing: Dict[str, Any], update: Dict[str, Any]) -> Dict[str, Any]:
    """
    Merge a partial update into a stored property.

    Args:
        existing: Current field values.
        update: Fields sent by the caller. Presence of a key, not its
            truthiness, decides whether it replaces the stored value.

    Returns:
        The next field values. Neither input is modified.
    """
    merged = copy.deepcopy(existing)

    for key, value in update.items():
        if key in IMMUTABLE_FIELDS:
            continue
        merged[key] = copy.deepcopy(value)

    for key, default in NULLABLE_DEFAULTS.items():
        if merged.get(key) is None:
            merged[key] = copy.copy(default)

    return merged


def reconcile_images(
    main_image: Optional[str],
    images: Optional[Iterable[str]],
    prefer_main_image: bool = True,
) -> Tuple[str, List[str]]:
    """
    Collapse the cover image and gallery into one ordered sequence.

    The gallery is canonical and the cover is always its first element.
    Duplicate URLs keep their first position.

    Args:
        main_image: Cover image URL, possibly empty.
        images: Gallery URLs.
        prefer_main_image: When True a non-empty ``main_image`` is moved
            (or prepended) to the front. When False the gallery order wins.

    Returns:
        (main_image, images) after reconciliation.
    """
    candidates: List[str] = []
    if prefer_main_image and main_image:
        candidates.append(main_image)
    candidates.extend(images or [])

    ordered: List[str] = []
    for url in candidates:
        if url and url not in ordered:
            ordered.append(url)

    return (ordered[0] if ordered else ""), ordered


def property_to_dict(prop: Property) -> Dict[str, Any]:
    """Column values of a property as a plain dict."""
    return {
        column.key: copy.deepcopy(getattr(prop, column.key))
        for column in Property.__table__.columns
    }


def _check_required(data: Dict[str, Any], require_all: bool) -> None:
    """Reject payloads that clear (or, on create, omit) required fields."""
    errors = []
    for field in sorted(REQUIRED_FIELDS):
        if field in data:
            if data[field] is None:
                errors.append({"field": field, "message": "may not be null"})
        elif require_all:
            errors.append({"field": field, "message": "is required"})
    if errors:
        raise ValidationError("Invalid property data", errors=errors)


class PropertyService:
    """Service for listing operations. Every mutation is scoped to an acting user."""

    def __init__(self, session: Session, activities: Optional[ActivityService] = None) -> None:
        self.session = session
        self.activities = activities or ActivityService(session)

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def list_properties(self, owner_id: int) -> List[Property]:
        """All listings of an owner in insertion order."""
        stmt = select(Property).where(Property.listed_by_id == owner_id).order_by(Property.id)
        return list(self.session.scalars(stmt))

    def get_property(self, property_id: int) -> Property:
        prop = self.session.get(Property, property_id)
        if prop is None:
            raise NotFoundError("Property", property_id)
        return prop

    def _get_owned(self, property_id: int, principal_id: int) -> Property:
        prop = self.get_property(property_id)
        if prop.listed_by_id != principal_id:
            raise PermissionDeniedError("You don't have permission to modify this property")
        return prop

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def create_property(self, owner_id: int, data: Dict[str, Any]) -> Property:
        """
        Create a listing owned by ``owner_id`` and log a listing activity.

        ``listed_by_id`` in ``data`` is ignored.
        """
        fields = {k: v for k, v in data.items() if k in EDITABLE_FIELDS}
        _check_required(fields, require_all=True)

        values = merge_property_update({}, fields)
        values["main_image"], values["images"] = reconcile_images(
            values["main_image"], values["images"]
        )

        prop = Property(listed_by_id=owner_id, **values)
        self.session.add(prop)
        self.session.flush()

        get_context_logger(__name__, user_id=owner_id, property_id=prop.id).info(
            f"Created listing '{prop.title}'"
        )
        self.activities.log_listing_created(owner_id, prop)
        return prop

    def update_property(
        self,
        property_id: int,
        principal_id: int,
        update: Dict[str, Any],
    ) -> Property:
        """
        Apply a partial update through the merge policy.

        Raises:
            ValidationError: A required field is being cleared.
            NotFoundError: Unknown property.
            PermissionDeniedError: The principal does not own the listing.
        """
        ignored = sorted(k for k in update if k in IMMUTABLE_FIELDS)
        if ignored:
            LOGGER.warning(
                f"Ignoring immutable fields {ignored} in update of property {property_id}",
                extra={"user_id": principal_id, "property_id": property_id},
            )
        fields = {k: v for k, v in update.items() if k in EDITABLE_FIELDS}
        _check_required(fields, require_all=False)

        prop = self._get_owned(property_id, principal_id)
        merged = merge_property_update(property_to_dict(prop), fields)

        prefer_main = "main_image" in fields or "images" not in fields
        merged["main_image"], merged["images"] = reconcile_images(
            merged["main_image"], merged["images"], prefer_main_image=prefer_main
        )

        for key in EDITABLE_FIELDS:
            if getattr(prop, key) != merged[key]:
                setattr(prop, key, merged[key])
        self.session.flush()

        get_context_logger(__name__, user_id=principal_id, property_id=prop.id).info(
            f"Updated listing fields {sorted(fields)}"
        )
        self.activities.log_listing_updated(principal_id, prop)
        return prop

    def delete_property(self, property_id: int, principal_id: int) -> bool:
        """Delete a listing. Returns True once the row is gone."""
        prop = self._get_owned(property_id, principal_id)
        title = prop.title

        self.session.delete(prop)
        self.session.flush()

        get_context_logger(__name__, user_id=principal_id, property_id=property_id).info(
            f"Deleted listing '{title}'"
        )
        self.activities.log_listing_deleted(principal_id, title)
        return True

    def transfer_property(
        self,
        property_id: int,
        principal_id: int,
        new_owner_id: int,
    ) -> Property:
        """
        Reassign a listing to another user.

        Only the current owner may transfer. The activity entry goes to the
        previous owner's feed.
        """
        prop = self._get_owned(property_id, principal_id)
        new_owner = self.session.get(User, new_owner_id)
        if new_owner is None:
            raise NotFoundError("User", new_owner_id)

        prop.listed_by_id = new_owner.id
        self.session.flush()

        LOGGER.info(
            f"Transferred property {property_id} from user {principal_id} to user {new_owner_id}",
            extra={"user_id": principal_id, "property_id": property_id},
        )
        self.activities.log_listing_transferred(principal_id, prop, new_owner.name)
        return prop
