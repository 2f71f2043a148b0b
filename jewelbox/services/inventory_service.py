"""
Inventory Service - lifecycle of tagged inventory units

States: available (initial) -> sold (terminal).
- create: assigns the next tag number, status available, derived fields recomputed.
- update: only while available; never touches status or tag_number.
- reserve_for_sale: the only way to reach sold. One transaction checks every
  unit is available, marks them all sold and writes the sale; any failed check
  rolls the whole thing back.
"""
import logging
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple
from uuid import UUID

from sqlalchemy import or_, update
from sqlalchemy.orm import Session, joinedload

from jewelbox.exceptions import (
    ConflictError, InvalidState, NotFoundError, ValidationError,
)
from jewelbox.models import (
    InventoryUnit, Item, Sale, SaleLineItem, STATUS_AVAILABLE, STATUS_SOLD, INVENTORY_STATUSES,
)
from jewelbox.schemas.inventory import InventoryInput, normalize_images
from jewelbox.services.document_service import DocumentService
from jewelbox.services.storage_service import BlobStore, validate_image_upload
from jewelbox.services.transaction import read_guard, write_transaction
from jewelbox.services import valuation
from jewelbox.utils.numbers import parse_decimal, round_money, round_weight

logger = logging.getLogger(__name__)

# Editable through create/update. status, tag_number and the derived fields are not.
EDITABLE_FIELDS = (
    "item_id",
    "description",
    "no_of_pieces",
    "karat",
    "net_weight",
    "wasteage_percentage",
    "polish_weight",
    "stone_weight",
    "ratti",
    "images",
)
DERIVED_FIELDS = ("total_weight", "pure_gold")

DEFAULTS = {
    "description": None,
    "no_of_pieces": 1,
    "karat": 22,
    "wasteage_percentage": Decimal("0"),
    "polish_weight": Decimal("0"),
    "stone_weight": Decimal("0"),
    "ratti": Decimal("0"),
    "images": [],
}


def _reject_derived(data: InventoryInput) -> None:
    for name in DERIVED_FIELDS:
        if getattr(data, name, None) is not None:
            raise ValidationError(f"{name} is calculated automatically and cannot be set", field=name)


def _validate_physical(values: Dict[str, Any]) -> Dict[str, Any]:
    """
    Check a complete set of editable values and return them normalized.
    Raises ValidationError on the first problem.
    """
    if not values.get("item_id"):
        raise ValidationError("Please select an item", field="item_id")

    net = parse_decimal(values.get("net_weight"))
    if net is not None:
        net = round_weight(net)
    if net is None or net <= 0:
        raise ValidationError("Net weight must be greater than 0", field="net_weight")

    out = dict(values)
    out["net_weight"] = net
    for name in ("wasteage_percentage", "polish_weight", "stone_weight", "ratti"):
        raw = values.get(name)
        d = parse_decimal(raw) if raw is not None else DEFAULTS[name]
        if d is None:
            raise ValidationError(f"{name} must be a number", field=name)
        d = round_weight(d)
        if d < 0:
            raise ValidationError(f"{name} cannot be negative", field=name)
        out[name] = d
    # wasteage_percentage above 100 is allowed; the formula has no ceiling
    if out["ratti"] > valuation.PURITY_DIVISOR:
        raise ValidationError(f"ratti cannot exceed {valuation.PURITY_DIVISOR}", field="ratti")

    karat = values.get("karat")
    karat = DEFAULTS["karat"] if karat is None else karat
    if isinstance(karat, bool) or not isinstance(karat, int) or not 1 <= karat <= valuation.KARAT_BASE:
        raise ValidationError("Karat must be a whole number from 1 to 24", field="karat")
    out["karat"] = karat

    pieces = values.get("no_of_pieces")
    pieces = DEFAULTS["no_of_pieces"] if pieces is None else pieces
    if isinstance(pieces, bool) or not isinstance(pieces, int) or pieces < 1:
        raise ValidationError("Number of pieces must be at least 1", field="no_of_pieces")
    out["no_of_pieces"] = pieces

    out["images"] = normalize_images(values.get("images"))
    return out


@read_guard("Check item")
def _require_item(db: Session, item_id: UUID) -> Item:
    item = db.query(Item).filter(Item.id == item_id).first()
    if not item:
        raise ValidationError(f"Item {item_id} not found", field="item_id")
    return item


class InventoryService:
    """Inventory lifecycle and lookups"""

    @staticmethod
    def create_inventory(db: Session, data: InventoryInput, user_id: Optional[UUID] = None) -> InventoryUnit:
        """
        Create an available inventory unit with a fresh tag number.

        Raises ValidationError (before any write) for: missing item, unknown
        item, net_weight <= 0, negative inputs, karat outside 1..24, pieces < 1,
        client-supplied total_weight / pure_gold.
        """
        _reject_derived(data)
        values = {name: getattr(data, name) for name in EDITABLE_FIELDS}
        values = _validate_physical(values)
        _require_item(db, values["item_id"])

        with write_transaction(db, "Create inventory", "Tag number already in use; retry"):
            unit = InventoryUnit(
                tag_number=DocumentService.get_tag_number(db),
                status=STATUS_AVAILABLE,
                user_id=user_id,
                **values,
                **valuation.compute_derived(values),
            )
            db.add(unit)
            db.flush()
        db.refresh(unit)
        logger.info(
            "Inventory %s created: item=%s net=%s total=%s pure=%s",
            unit.tag_number, unit.item_id, unit.net_weight, unit.total_weight, unit.pure_gold,
        )
        return unit

    @staticmethod
    def update_inventory(db: Session, inventory_id: UUID, data: InventoryInput) -> InventoryUnit:
        """
        Replace the editable fields present in data and recompute derived fields.

        Raises NotFoundError if missing, InvalidState if the unit is sold
        (the record is left untouched). status and tag_number never change here.
        """
        _reject_derived(data)
        with write_transaction(db, "Update inventory"):
            unit = (
                db.query(InventoryUnit)
                .filter(InventoryUnit.id == inventory_id)
                .with_for_update()
                .first()
            )
            if not unit:
                raise NotFoundError(f"Inventory {inventory_id} not found")
            if unit.status == STATUS_SOLD:
                logger.warning("Rejected edit of sold inventory %s", unit.tag_number)
                raise InvalidState(f"Inventory {unit.tag_number} is sold and can no longer be edited")

            current = {name: getattr(unit, name) for name in EDITABLE_FIELDS}
            if current["no_of_pieces"] is None:
                current["no_of_pieces"] = unit.pieces
            changes = {name: getattr(data, name) for name in data.model_fields_set if name in EDITABLE_FIELDS}
            values = _validate_physical({**current, **changes})
            if values["item_id"] != unit.item_id:
                _require_item(db, values["item_id"])

            for name, value in values.items():
                setattr(unit, name, value)
            for name, value in valuation.compute_derived(values).items():
                setattr(unit, name, value)
            db.flush()
        db.refresh(unit)
        logger.info("Inventory %s updated", unit.tag_number)
        return unit

    @staticmethod
    def reserve_for_sale(
        db: Session,
        inventory_ids: Iterable[UUID],
        prices: Mapping[UUID, Any],
        sale_payload: Mapping[str, Any],
        user_id: Optional[UUID] = None,
    ) -> Sale:
        """
        Atomically mark every listed unit sold and record the sale.

        Within one transaction:
        1. lock the rows (SELECT ... FOR UPDATE),
        2. require each id to exist and be available,
        3. UPDATE ... WHERE status = 'available' and require the row count to
           match (catches a concurrent sale that slipped past the check),
        4. insert Sale + SaleLineItems (inventory_id is unique table-wide).
        Any failure rolls back: no unit changes state and no sale exists.

        Returns the committed Sale with invoice_number and total_amount.
        Raises ValidationError for bad input, ConflictError when a unit is
        missing or no longer available, BackendError for database failures.
        """
        ids = list(inventory_ids)
        if not ids:
            raise ValidationError("Please select at least one item to sell", field="items")
        if len(set(ids)) != len(ids):
            raise ValidationError("Each inventory item can only appear once per sale", field="items")
        line_prices: List[Tuple[UUID, Decimal]] = []
        for inv_id in ids:
            price = parse_decimal(prices.get(inv_id))
            if price is not None:
                price = round_money(price)
            if price is None or price <= 0:
                raise ValidationError("All items must have a price greater than zero", field="items")
            line_prices.append((inv_id, price))
        customer_name = (sale_payload.get("customer_name") or "").strip()
        if not customer_name:
            raise ValidationError("Customer name is required", field="customer_name")

        with write_transaction(db, "Create sale", "One or more items were sold by another sale"):
            units = (
                db.query(InventoryUnit)
                .filter(InventoryUnit.id.in_(ids))
                .with_for_update()
                .all()
            )
            by_id = {u.id: u for u in units}
            missing = [str(i) for i in ids if i not in by_id]
            if missing:
                raise ConflictError(f"Inventory not found: {', '.join(missing)}")
            unavailable = [by_id[i].tag_number for i in ids if by_id[i].status != STATUS_AVAILABLE]
            if unavailable:
                logger.warning("Sale rejected; not available: %s", unavailable)
                raise ConflictError(f"Inventory no longer available: {', '.join(unavailable)}")

            result = db.execute(
                update(InventoryUnit)
                .where(InventoryUnit.id.in_(ids), InventoryUnit.status == STATUS_AVAILABLE)
                .values(status=STATUS_SOLD, sold_at=datetime.now(timezone.utc))
                .execution_options(synchronize_session=False)
            )
            if result.rowcount != len(ids):
                logger.warning("Sale rejected; %d of %d units claimed concurrently", len(ids) - result.rowcount, len(ids))
                raise ConflictError("One or more items were sold by another sale")

            sale = Sale(
                invoice_number=DocumentService.get_invoice_number(db),
                customer_name=customer_name,
                customer_phone=(sale_payload.get("customer_phone") or "").strip() or None,
                notes=(sale_payload.get("notes") or "").strip() or None,
                total_amount=valuation.sale_total(p for _, p in line_prices),
                user_id=user_id,
            )
            sale.line_items = [
                SaleLineItem(inventory_id=inv_id, price=price, position=pos)
                for pos, (inv_id, price) in enumerate(line_prices)
            ]
            db.add(sale)
            db.flush()
        db.refresh(sale)
        logger.info(
            "Sale %s committed: %d item(s), total %s", sale.invoice_number, len(line_prices), sale.total_amount,
        )
        return sale

    @staticmethod
    @read_guard("Get inventory")
    def get_inventory(db: Session, inventory_id: UUID) -> InventoryUnit:
        unit = (
            db.query(InventoryUnit)
            .options(joinedload(InventoryUnit.item))
            .filter(InventoryUnit.id == inventory_id)
            .first()
        )
        if not unit:
            raise NotFoundError(f"Inventory {inventory_id} not found")
        return unit

    @staticmethod
    @read_guard("Get inventory by tag")
    def get_by_tag_number(db: Session, tag_number: str) -> InventoryUnit:
        unit = (
            db.query(InventoryUnit)
            .options(joinedload(InventoryUnit.item))
            .filter(InventoryUnit.tag_number == (tag_number or "").strip())
            .first()
        )
        if not unit:
            raise NotFoundError(f"Tag {tag_number} not found")
        return unit

    @staticmethod
    @read_guard("List inventory")
    def list_inventory(
        db: Session,
        search: Optional[str] = None,
        status: Optional[str] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> Tuple[List[InventoryUnit], int]:
        """
        Newest first. search matches tag number, description, item name and
        item abbreviation (case-insensitive). status: available | sold | all/None.
        Returns (page, total matching).
        """
        q = db.query(InventoryUnit).outerjoin(Item, InventoryUnit.item_id == Item.id)
        status = (status or "").strip().lower()
        if status and status != "all":
            if status not in INVENTORY_STATUSES:
                raise ValidationError(f"Unknown status: {status}", field="status")
            q = q.filter(InventoryUnit.status == status)
        term = (search or "").strip()
        if term:
            pattern = f"%{term}%"
            q = q.filter(
                or_(
                    InventoryUnit.tag_number.ilike(pattern),
                    InventoryUnit.description.ilike(pattern),
                    Item.name.ilike(pattern),
                    Item.abbreviation.ilike(pattern),
                )
            )
        total = q.count()
        rows = (
            q.options(joinedload(InventoryUnit.item))
            .order_by(InventoryUnit.created_at.desc(), InventoryUnit.tag_number.desc())
            .offset(max(0, offset))
            .limit(max(1, limit))
            .all()
        )
        return rows, total

    @staticmethod
    @read_guard("List available inventory")
    def list_available(db: Session) -> List[InventoryUnit]:
        """Units that can be added to a sale."""
        return (
            db.query(InventoryUnit)
            .options(joinedload(InventoryUnit.item))
            .filter(InventoryUnit.status == STATUS_AVAILABLE)
            .order_by(InventoryUnit.tag_number.asc())
            .all()
        )

    @staticmethod
    def upload_image(store: BlobStore, content: bytes, content_type: str, filename: Optional[str] = None) -> Dict[str, Any]:
        """
        Validate and upload one photo; returns the image descriptor the client
        appends to the unit's images list on its next create/update.
        """
        validate_image_upload(content, content_type)
        url = store.upload(content, content_type, filename)
        logger.info("Uploaded inventory image %s (%d bytes)", filename or "", len(content))
        return {
            "url": url,
            "name": filename or "Unnamed image",
            "type": content_type,
            "size": len(content),
        }
