"""
models.py: entity records, document mapping and form-to-entity rules.

Remote rows carry the fields below plus bookkeeping columns (user_id,
updated_at, ...), which are dropped on the way in. Dates travel as ISO
strings and live here as ``datetime.date``.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from datetime import date, datetime
from typing import Any, Optional

# ── Vocabulary ──────────────────────────────────────────────────────────────
KIND_FOR_SALE = "for-sale"
KIND_CONSUMPTION = "consumption"
KINDS = (KIND_FOR_SALE, KIND_CONSUMPTION)

STATUS_IN_STOCK = "in-stock"
STATUS_IN_TRANSIT = "in-transit"
STATUS_SOLD = "sold"
STATUS_NOT_APPLICABLE = "not-applicable"
FOR_SALE_STATUSES = (STATUS_IN_STOCK, STATUS_IN_TRANSIT, STATUS_SOLD)

PAYMENT_METHODS = ("Pix", "Cartão", "Dinheiro", "Outro")

SALE_FIELDS = ("sale_value", "sale_date", "sale_method", "quantity_sold")


# ── Parsing helpers ─────────────────────────────────────────────────────────

def parse_number(val, default=0.0):
    if val is None or val == "" or val == "--":
        return default
    if isinstance(val, (int, float)):
        return float(val)
    val = str(val).replace("R$", "").replace(" ", "").strip()
    # "1.234,56" (pt-BR) and "1234.56" are both accepted
    if "," in val:
        val = val.replace(".", "").replace(",", ".")
    try:
        return float(val)
    except ValueError:
        return default


def parse_int(val, default=1):
    num = parse_number(val, None)
    if num is None:
        return default
    return int(num)


def parse_date(val) -> Optional[date]:
    if val is None or val == "":
        return None
    if isinstance(val, datetime):
        return val.date()
    if isinstance(val, date):
        return val
    try:
        return date.fromisoformat(str(val)[:10])
    except ValueError:
        return None


def _iso(val):
    return val.isoformat() if isinstance(val, date) else val


# ── Entities ────────────────────────────────────────────────────────────────

@dataclass
class Product:
    id: str = ""
    name: str = ""
    kind: str = KIND_FOR_SALE
    cost: float = 0.0
    quantity: int = 1
    suggested_price: Optional[float] = None
    purchase_date: Optional[date] = None
    purchase_method: str = ""
    status: str = STATUS_IN_STOCK
    sale_value: Optional[float] = None
    sale_date: Optional[date] = None
    sale_method: Optional[str] = None
    quantity_sold: Optional[int] = None
    description: str = ""

    @property
    def is_for_sale(self) -> bool:
        return self.kind == KIND_FOR_SALE

    @property
    def is_sold(self) -> bool:
        return self.status == STATUS_SOLD

    @property
    def unit_cost(self) -> float:
        return (self.cost or 0.0) / (self.quantity or 1)

    @property
    def profit(self) -> float:
        return (self.sale_value or 0.0) - (self.cost or 0.0)


@dataclass
class Service:
    id: str = ""
    name: str = ""
    price: float = 0.0
    description: str = ""


@dataclass
class Component:
    id: str = ""
    name: str = ""
    cost: float = 0.0


@dataclass
class Sale:
    id: str = ""
    product_id: str = ""
    product_name: str = ""
    quantity: int = 1
    unit_price: float = 0.0
    total: float = 0.0
    cost: float = 0.0
    method: str = ""
    date: Optional[date] = None

    @property
    def profit(self) -> float:
        return self.total - self.cost


ENTITY_TYPES = {
    "products": Product,
    "services": Service,
    "components": Component,
    "sales": Sale,
}

_DATE_FIELDS = {"purchase_date", "sale_date", "date"}
_FLOAT_FIELDS = {"cost", "price", "unit_price", "total"}
_NULLABLE_FLOAT_FIELDS = {"suggested_price", "sale_value"}
_INT_FIELDS = {"quantity"}
_NULLABLE_INT_FIELDS = {"quantity_sold"}


def from_document(collection: str, doc: dict[str, Any]):
    """Raw remote row → entity record (id + known fields)."""
    cls = ENTITY_TYPES[collection]
    values = {}
    for f in fields(cls):
        if f.name not in doc:
            continue
        raw = doc[f.name]
        if f.name == "id":
            values["id"] = str(raw)
        elif f.name in _DATE_FIELDS:
            values[f.name] = parse_date(raw)
        elif f.name in _FLOAT_FIELDS:
            values[f.name] = parse_number(raw)
        elif f.name in _NULLABLE_FLOAT_FIELDS:
            values[f.name] = parse_number(raw, None)
        elif f.name in _INT_FIELDS:
            values[f.name] = parse_int(raw)
        elif f.name in _NULLABLE_INT_FIELDS:
            values[f.name] = parse_int(raw, None)
        else:
            values[f.name] = raw if raw is not None else f.default
    return cls(**values)


def to_document(entity) -> dict[str, Any]:
    """Entity record → JSON-safe document without the id."""
    doc = {k: _iso(v) for k, v in asdict(entity).items()}
    doc.pop("id", None)
    return doc


# ── Form → entity ───────────────────────────────────────────────────────────

def product_from_form(form: dict[str, Any]) -> dict[str, Any]:
    """Build the product document to save from raw form values.

    Consumption items always get status not-applicable, no suggested price and
    no sale fields. For-sale items only carry sale fields when sold.
    """
    kind = form.get("kind") if form.get("kind") in KINDS else KIND_FOR_SALE
    quantity = max(parse_int(form.get("quantity"), 1), 1)
    doc = {
        "name": (form.get("name") or "").strip(),
        "kind": kind,
        "cost": parse_number(form.get("cost")),
        "quantity": quantity,
        "purchase_date": _iso(parse_date(form.get("purchase_date"))),
        "purchase_method": form.get("purchase_method") or "",
        "description": form.get("description") or "",
    }

    if kind == KIND_CONSUMPTION:
        doc["status"] = STATUS_NOT_APPLICABLE
        doc["suggested_price"] = None
    else:
        status = form.get("status")
        doc["status"] = status if status in FOR_SALE_STATUSES else STATUS_IN_STOCK
        doc["suggested_price"] = parse_number(form.get("suggested_price"))

    if doc["status"] == STATUS_SOLD:
        doc["sale_value"] = parse_number(form.get("sale_value"))
        doc["sale_date"] = _iso(parse_date(form.get("sale_date")) or date.today())
        doc["sale_method"] = form.get("sale_method") or PAYMENT_METHODS[0]
        doc["quantity_sold"] = parse_int(form.get("quantity_sold"), quantity)
    else:
        for name in SALE_FIELDS:
            doc[name] = None
    return doc


def service_from_form(form: dict[str, Any]) -> dict[str, Any]:
    return {
        "name": (form.get("name") or "").strip(),
        "price": parse_number(form.get("price")),
        "description": form.get("description") or "",
    }


def component_from_form(form: dict[str, Any]) -> dict[str, Any]:
    return {
        "name": (form.get("name") or "").strip(),
        "cost": parse_number(form.get("cost")),
    }


# ── Sale registration ───────────────────────────────────────────────────────

def build_sale(product: Product, quantity, unit_price, method, today=None):
    """Return ``(sale_document, product_update)`` for selling part or all of a lot."""
    today = today or date.today()
    quantity = parse_int(quantity, 0)
    unit_price = parse_number(unit_price)
    if not product.is_for_sale or product.status != STATUS_IN_STOCK:
        raise ValueError(f"{product.name!r} is not an in-stock item for sale")
    if quantity < 1:
        raise ValueError("Sale quantity must be at least 1")
    if quantity > (product.quantity or 0):
        raise ValueError(
            f"Cannot sell {quantity} of {product.name!r}: only {product.quantity} in stock"
        )
    if unit_price <= 0:
        raise ValueError(f"Sale of {product.name!r} needs a unit price above zero")

    total = round(quantity * unit_price, 2)
    cost_share = round(product.unit_cost * quantity, 2)
    method = method or PAYMENT_METHODS[0]

    sale = Sale(
        product_id=product.id,
        product_name=product.name,
        quantity=quantity,
        unit_price=unit_price,
        total=total,
        cost=cost_share,
        method=method,
        date=today,
    )

    if quantity == product.quantity:
        update = {
            "status": STATUS_SOLD,
            "sale_value": total,
            "sale_date": today.isoformat(),
            "sale_method": method,
            "quantity_sold": quantity,
        }
    else:
        update = {
            "quantity": product.quantity - quantity,
            "cost": round(product.cost - cost_share, 2),
        }
    return to_document(sale), update
