import pytest
from fastapi.testclient import TestClient

from mmo_directory_api.app.api.deps import get_member_service
from mmo_directory_api.app.core.store import InMemoryRecordStore
from mmo_directory_api.app.main import app
from mmo_directory_api.app.services.member_service import MemberService


def sample_records():
    return [
        {
            "Id": 1,
            "HoTen": "Nguyễn Văn A",
            "VaiTro": "1",
            "TrangThai": "1",
            "SoTien": 500,
            "NgayDangKy": "2024-01-15",
            "Slug": "nguyen-van-a",
            "Zalo": "0901234567",
            "DichVu": {"chinh": [{"ten": "Cày thuê", "link": ""}]},
            "Stk": {"chinh": {"nganHang": "Vietcombank", "soTaiKhoan": "0123456789"}},
        },
        {
            "Id": 2,
            "HoTen": "Trần Thị B",
            "VaiTro": "2",
            "TrangThai": "0",
            "SoTien": 2000,
            "Slug": "tran-thi-b",
        },
        {
            "Id": 5,
            "HoTen": "Lê Văn C",
            "VaiTro": "2",
            "TrangThai": "1",
            "Slug": "le-van-c",
            "LinkWeb": "https://levanc.vn",
            "Zalo": {"SoDienThoai": "0911222333"},
            "DichVu": {"phu": [{"ten": "Cày thuê"}]},
        },
    ]


@pytest.fixture
def store():
    return InMemoryRecordStore(sample_records())


@pytest.fixture
def service(store):
    return MemberService(store)


@pytest.fixture
def client(service):
    app.dependency_overrides[get_member_service] = lambda: service
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
