"""
Pydantic schemas for directory members (Admin and KDV profiles).

A member record is a loosely structured JSON document: only ``Id``,
``HoTen``, ``VaiTro`` and ``TrangThai`` are expected on every record
and every nested block is optional.  The schemas below describe the
known shape for request validation and API docs while still allowing
unknown keys (``extra="allow"``) so fields added by the frontend, such
as ``TenPhu``, pass through untouched.

Role and status are kept as the literal strings ``"1"``/``"2"`` and
``"1"``/``"0"`` on the wire because the frontend compares against
those values directly.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class _CodeEnum(str, Enum):
    """String enum parsed once from loosely typed input."""

    @classmethod
    def parse(cls, value: Any):
        """Return the member matching ``value`` or ``None``.

        Integers are accepted and compared by their string form, so
        ``1`` and ``"1"`` are the same code.  Anything else that does not
        match a member (``None``, ``"abc"``, ``"01"``) yields ``None``.
        """
        if value is None or isinstance(value, bool):
            return None
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip())
        except ValueError:
            return None


class Role(_CodeEnum):
    """VaiTro: 1 = Admin, 2 = KDV (kiểm duyệt viên)."""

    ADMIN = "1"
    MODERATOR = "2"


class Status(_CodeEnum):
    """TrangThai: 1 = hoạt động, 0 = bị khoá."""

    ACTIVE = "1"
    LOCKED = "0"


class _Open(BaseModel):
    model_config = ConfigDict(extra="allow")


class MediaInfo(_Open):
    Src: Optional[str] = None
    Alt: Optional[str] = None
    Title: Optional[str] = None
    Description: Optional[str] = None


class MediaSet(_Open):
    Avt: Optional[MediaInfo] = None
    Bia: Optional[MediaInfo] = None


class FacebookInfo(_Open):
    id: Optional[str] = None
    url: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    type: Optional[str] = None


class FacebookSet(_Open):
    Chinh: Optional[FacebookInfo] = None
    Phu: Optional[List[FacebookInfo]] = None


class ZaloInfo(_Open):
    SoDienThoai: Optional[str] = None
    Url: Optional[str] = None
    Title: Optional[str] = None
    Description: Optional[str] = None


class ServiceOffer(_Open):
    ten: Optional[str] = None
    moTa: Optional[str] = None
    link: Optional[str] = None


class ServiceSet(_Open):
    chinh: Optional[List[ServiceOffer]] = None
    phu: Optional[List[ServiceOffer]] = None


class BankAccount(_Open):
    nganHang: Optional[str] = None
    soTaiKhoan: Optional[str] = None
    chuTaiKhoan: Optional[str] = None
    moTa: Optional[str] = None


class BankAccountSet(_Open):
    chinh: Optional[BankAccount] = None
    phu: Optional[List[BankAccount]] = None


class MemberPayload(_Open):
    """Body for creating or updating a member.

    Every field is optional so the same schema serves ``POST`` and
    partial ``PUT`` requests.  ``as_record`` dumps only the keys the
    client actually sent, which is what the merge in
    ``MemberService.update`` relies on.
    """

    HoTen: Optional[str] = Field(None, examples=["Nguyễn Văn A"])
    VaiTro: Optional[Role] = Field(None, examples=["1"])
    TrangThai: Optional[Status] = Field(None, examples=["1"])
    SoTien: Optional[Union[int, float]] = Field(None, examples=[5000000])
    Slug: Optional[str] = None
    GioiThieu: Optional[str] = None
    LinkWeb: Optional[str] = None
    NgayDangKy: Optional[str] = Field(None, examples=["2024-01-15"])
    Media: Optional[MediaSet] = None
    FaceBook: Optional[FacebookSet] = None
    Zalo: Optional[Union[str, ZaloInfo]] = None
    DichVu: Optional[ServiceSet] = None
    Stk: Optional[BankAccountSet] = None

    @field_validator("VaiTro", "TrangThai", mode="before")
    @classmethod
    def coerce_code(cls, v):
        # Clients sometimes send the codes as numbers.
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v

    def as_record(self) -> dict:
        return self.model_dump(mode="json", exclude_unset=True)
