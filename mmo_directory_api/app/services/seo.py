"""
SEO autofill for member records.

Every write fills in the descriptive fields the frontend renders into
meta tags and image captions: the slug, avatar/cover captions, the
primary Facebook page caption, the Zalo contact caption and the
descriptions of services and bank accounts.  Values are built from
fixed Vietnamese templates and the member's name.  A field that is
already present (non‑empty) is never overwritten.

``autofill`` is pure: it works on a deep copy and returns it, so the
caller's payload and the stored collection are never aliased.
"""

from __future__ import annotations

import copy
from typing import Any, Dict, Optional

from .slug import normalize

DEFAULT_NAME = "Người dùng"

MEDIA_TEMPLATES = {
    "Avt": {
        "Alt": "Ảnh đại diện của {name}",
        "Title": "Ảnh đại diện hồ sơ {name}",
        "Description": "Ảnh đại diện chính thức của {name}",
    },
    "Bia": {
        "Alt": "Ảnh bìa của {name}",
        "Title": "Ảnh bìa nổi bật của {name}",
        "Description": "Ảnh bìa thể hiện phong cách của {name}",
    },
}

FACEBOOK_TEMPLATES = {
    "title": "{name} - Trang Facebook chính thức",
    "description": "Theo dõi {name} trên Facebook để cập nhật thông tin và hỗ trợ.",
    "type": "Trang chính thức",
}

ZALO_TEMPLATES = {
    "Title": "Liên hệ {name} qua Zalo",
    "Description": "Kết nối với {name} qua Zalo để được hỗ trợ nhanh nhất.",
}

SERVICE_TEMPLATE = "Dịch vụ {service} do {name} cung cấp."
MAIN_ACCOUNT_TEMPLATE = "Tài khoản chính dùng cho giao dịch chính thức."
EXTRA_ACCOUNT_TEMPLATE = "Tài khoản phụ phục vụ giao dịch phụ."


def _container(parent: Dict[str, Any], key: str) -> Optional[Dict[str, Any]]:
    """Return ``parent[key]``, creating an empty dict when it is missing.

    Returns ``None`` when the existing value is not a dict (for example
    a plain string), in which case there is nothing to fill.
    """
    if not parent.get(key):
        parent[key] = {}
    value = parent[key]
    return value if isinstance(value, dict) else None


def _fill(target: Dict[str, Any], templates: Dict[str, str], **values: str) -> None:
    for field, template in templates.items():
        if not target.get(field):
            target[field] = template.format(**values)


def autofill(record: Dict[str, Any], stored: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Return a copy of ``record`` with missing SEO fields filled in.

    Parameters
    ----------
    record : dict
        The incoming payload (a full record on create, a partial one on
        update).
    stored : dict, optional
        The record the payload will be merged over.  When given, its
        ``HoTen`` is used if the payload has none, and a top‑level block
        (``Slug``, ``Media``, ``FaceBook``, ``Zalo``) the payload does not
        mention is only synthesised when the stored record lacks it too.
        That way a partial update never replaces what is already stored.
    """
    result = copy.deepcopy(record)
    stored = stored or {}
    name = result.get("HoTen") or stored.get("HoTen") or DEFAULT_NAME

    def wanted(key: str) -> bool:
        return key in result or not stored.get(key)

    if wanted("Slug") and not result.get("Slug"):
        result["Slug"] = normalize(name)

    if wanted("Media"):
        media = _container(result, "Media")
        if media is not None:
            for slot, templates in MEDIA_TEMPLATES.items():
                info = _container(media, slot)
                if info is not None:
                    _fill(info, templates, name=name)

    # Chỉ trang chính được tự điền, các trang phụ giữ nguyên.
    if wanted("FaceBook"):
        facebook = _container(result, "FaceBook")
        if facebook is not None:
            main_page = _container(facebook, "Chinh")
            if main_page is not None:
                _fill(main_page, FACEBOOK_TEMPLATES, name=name)

    # Zalo may be a bare phone number; strings are left as they are.
    if wanted("Zalo"):
        zalo = _container(result, "Zalo")
        if zalo is not None:
            _fill(zalo, ZALO_TEMPLATES, name=name)

    services = result.get("DichVu")
    if isinstance(services, dict):
        for kind in ("chinh", "phu"):
            for offer in services.get(kind) or []:
                if isinstance(offer, dict) and not offer.get("moTa"):
                    offer["moTa"] = SERVICE_TEMPLATE.format(service=offer.get("ten") or "", name=name)

    accounts = result.get("Stk")
    if isinstance(accounts, dict):
        main_account = accounts.get("chinh")
        if isinstance(main_account, dict) and not main_account.get("moTa"):
            main_account["moTa"] = MAIN_ACCOUNT_TEMPLATE
        for account in accounts.get("phu") or []:
            if isinstance(account, dict) and not account.get("moTa"):
                account["moTa"] = EXTRA_ACCOUNT_TEMPLATE

    return result
