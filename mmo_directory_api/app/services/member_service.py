"""
Service layer for directory members.

``MemberService`` owns every read and write of the member collection:
listing, lookup by id or slug, create/update/delete, and the search
and filter helpers used by the frontend.  It keeps no cache; each
call reads the whole collection from the injected store, and each
write replaces it.

Not‑found is reported as ``None`` rather than an exception, and an
id that is not a number simply matches nothing.  Decode errors from
the store are not caught here.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Dict, List, Optional

from mmo_directory_api.app.core.store import Record, RecordStore
from mmo_directory_api.app.schemas.member import Role, Status
from mmo_directory_api.app.services.seo import autofill

logger = logging.getLogger(__name__)


def parse_id(value: Any) -> Optional[int]:
    """Parse a record id, returning ``None`` for anything non‑numeric."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        return None


def balance(record: Record) -> float:
    """Numeric ``SoTien`` of a record; missing, non‑numeric or non‑finite counts as 0."""
    value = record.get("SoTien")
    if isinstance(value, bool) or value is None:
        return 0
    try:
        result = float(value)
    except (TypeError, ValueError):
        return 0
    # NaN compares false both ways and would break the ordering.
    return result if math.isfinite(result) else 0


def _text(value: Any) -> str:
    return value.lower() if isinstance(value, str) else ""


def zalo_contact(record: Record) -> Optional[Dict[str, Optional[str]]]:
    """Resolve the Zalo phone number and chat link of a record.

    ``Zalo`` is either a bare phone number or an object with
    ``SoDienThoai``/``Url``.  Without an explicit ``Url`` the link is
    built from the phone number.
    """
    zalo = record.get("Zalo")
    if isinstance(zalo, str):
        phone = zalo or None
        url = None
    elif isinstance(zalo, dict):
        phone = zalo.get("SoDienThoai") or None
        url = zalo.get("Url") or None
    else:
        return None
    if not url and phone:
        url = f"https://zalo.me/{phone}"
    if not phone and not url:
        return None
    return {"phone": phone, "url": url}


def insurance_fund(record: Record) -> Optional[Dict[str, Any]]:
    """Return the insurance fund block shown on the detail page.

    Only members with both a registration date and a non‑zero balance
    have one.
    """
    if record.get("NgayDangKy") and record.get("SoTien"):
        return {"NgayDangKy": record["NgayDangKy"], "SoTien": record["SoTien"]}
    return None


class MemberService:
    """Business operations over the member collection."""

    def __init__(self, store: RecordStore) -> None:
        self.store = store

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------
    def list_all(self) -> List[Record]:
        """Return every record ordered by ``SoTien`` descending.

        Records without a balance sort as 0.  The sort is stable, so
        ties keep their insertion order.
        """
        return sorted(self.store.load_all(), key=balance, reverse=True)

    def get_by_id(self, record_id: Any) -> Optional[Record]:
        wanted = parse_id(record_id)
        if wanted is None:
            return None
        for record in self.store.load_all():
            if parse_id(record.get("Id")) == wanted:
                return record
        logger.debug("Member %s not found", record_id)
        return None

    def get_by_slug(self, slug: str) -> Optional[Record]:
        for record in self.store.load_all():
            if slug and record.get("Slug") == slug:
                return record
        logger.debug("Member with slug %r not found", slug)
        return None

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------
    def create(self, payload: Record) -> Record:
        """Assign the next id, autofill SEO fields, append and save.

        The id is ``max(existing ids) + 1`` (``1`` for an empty
        collection); gaps left by deletions are never reused.  A client
        supplied ``Id`` is ignored.
        """
        records = self.store.load_all()
        ids = [i for i in (parse_id(r.get("Id")) for r in records) if i is not None]
        record = autofill(payload)
        record["Id"] = max(ids) + 1 if ids else 1
        records.append(record)
        self.store.save_all(records)
        logger.info("Created member %s (%s)", record["Id"], record.get("HoTen"))
        return record

    def update(self, record_id: Any, payload: Record) -> Optional[Record]:
        """Merge ``payload`` over the stored record.

        The payload is autofilled first, then its top‑level keys replace
        the stored ones (a shallow merge: a nested block in the payload
        replaces the stored block as a whole).  ``Id`` cannot be changed.
        Returns ``None`` if the id does not exist.
        """
        wanted = parse_id(record_id)
        if wanted is None:
            return None
        records = self.store.load_all()
        for index, current in enumerate(records):
            if parse_id(current.get("Id")) == wanted:
                break
        else:
            logger.debug("Member %s not found for update", record_id)
            return None
        merged = {**current, **autofill(payload, stored=current)}
        merged["Id"] = current.get("Id")
        records[index] = merged
        self.store.save_all(records)
        logger.info("Updated member %s: %s", wanted, ", ".join(sorted(payload)) or "-")
        return merged

    def delete(self, record_id: Any) -> bool:
        """Remove the record with ``record_id``.

        Always returns ``True``; deleting an unknown id is not an error
        and still rewrites the collection.
        """
        wanted = parse_id(record_id)
        records = self.store.load_all()
        remaining = [r for r in records if wanted is None or parse_id(r.get("Id")) != wanted]
        self.store.save_all(remaining)
        if len(remaining) != len(records):
            logger.info("Deleted member %s", wanted)
        return True

    # ------------------------------------------------------------------
    # Search and filters
    # ------------------------------------------------------------------
    def search_by_name(self, keyword: Optional[str] = "") -> List[Record]:
        """Case‑insensitive substring match on ``HoTen``.

        The comparison is on the raw name, so ``"nguyen"`` does not
        match ``"Nguyễn"``.  An empty keyword matches everything.
        """
        needle = (keyword or "").lower()
        return [r for r in self.store.load_all() if needle in _text(r.get("HoTen"))]

    def filter_by_main_service(self, service: Optional[str] = "") -> List[Record]:
        """Records with a primary service whose ``ten`` contains ``service``."""
        needle = (service or "").lower()
        matches = []
        for record in self.store.load_all():
            services = record.get("DichVu")
            main = services.get("chinh") if isinstance(services, dict) else None
            if not isinstance(main, list):
                continue
            if any(isinstance(dv, dict) and needle in _text(dv.get("ten")) for dv in main):
                matches.append(record)
        return matches

    def filter_by_status(self, status: Any) -> List[Record]:
        wanted = Status.parse(status)
        if wanted is None:
            return []
        return [r for r in self.store.load_all() if Status.parse(r.get("TrangThai")) is wanted]

    def filter_by_role(self, role: Any) -> List[Record]:
        wanted = Role.parse(role)
        if wanted is None:
            return []
        return [r for r in self.store.load_all() if Role.parse(r.get("VaiTro")) is wanted]

    # ------------------------------------------------------------------
    # Views used by the frontend pages
    # ------------------------------------------------------------------
    def directory(self, query: Optional[str] = "") -> Dict[str, List[Record]]:
        """Home page listing: active members split into Admins and KDVs.

        ``query`` is matched case‑insensitively against the name, the
        primary account number, a phone‑number ``Zalo``, the website and
        the slug.  Both lists are ordered by ``SoTien`` descending.
        """
        needle = (query or "").strip().lower()
        active = [r for r in self.list_all() if Status.parse(r.get("TrangThai")) is Status.ACTIVE]
        if needle:
            active = [r for r in active if needle in self._haystack(r)]
        return {
            "admins": [r for r in active if Role.parse(r.get("VaiTro")) is Role.ADMIN],
            "moderators": [r for r in active if Role.parse(r.get("VaiTro")) is Role.MODERATOR],
        }

    def profile(self, slug: str) -> Optional[Dict[str, Any]]:
        """Detail page view of a member with its derived contact blocks."""
        record = self.get_by_slug(slug)
        if record is None:
            return None
        return {
            "member": record,
            "zalo": zalo_contact(record),
            "insurance_fund": insurance_fund(record),
        }

    @staticmethod
    def _haystack(record: Record) -> str:
        accounts = record.get("Stk")
        main_account = accounts.get("chinh") if isinstance(accounts, dict) else None
        account_no = main_account.get("soTaiKhoan") if isinstance(main_account, dict) else None
        fields = [
            record.get("HoTen"),
            account_no,
            record.get("Zalo"),
            record.get("LinkWeb"),
            record.get("Slug"),
        ]
        return "\n".join(_text(f) for f in fields)
