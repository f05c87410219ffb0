from mmo_directory_api.app.api.deps import get_member_service
from mmo_directory_api.app.core.store import JsonRecordStore
from mmo_directory_api.app.main import app
from mmo_directory_api.app.services.member_service import MemberService

BASE = "/api/v1/users"
NOT_FOUND = "Không tìm thấy người dùng"


def ids(response):
    return [r["Id"] for r in response.json()]


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_list_users(client):
    response = client.get(f"{BASE}/")

    assert response.status_code == 200
    assert ids(response) == [2, 1, 5]


def test_get_user(client):
    response = client.get(f"{BASE}/1")

    assert response.status_code == 200
    assert response.json()["HoTen"] == "Nguyễn Văn A"


def test_get_user_not_found(client):
    for user_id in ("99", "abc"):
        response = client.get(f"{BASE}/{user_id}")
        assert response.status_code == 404
        assert response.json()["detail"] == NOT_FOUND


def test_create_user(client):
    response = client.post(f"{BASE}/", json={
        "HoTen": "Đặng Văn Hoàng",
        "VaiTro": 1,
        "TrangThai": "1",
        "SoTien": 1500,
        "TenPhu": "Hoàng MMO",
    })

    assert response.status_code == 201
    body = response.json()
    assert body["Id"] == 6
    assert body["VaiTro"] == "1"
    assert body["SoTien"] == 1500
    assert body["TenPhu"] == "Hoàng MMO"
    assert body["Slug"] == "dang-van-hoang"
    assert body["Media"]["Bia"]["Alt"] == "Ảnh bìa của Đặng Văn Hoàng"
    assert client.get(f"{BASE}/6").json() == body


def test_create_rejects_unknown_role(client):
    response = client.post(f"{BASE}/", json={"HoTen": "X", "VaiTro": "9"})

    assert response.status_code == 422


def test_update_user(client):
    response = client.put(f"{BASE}/1", json={"GioiThieu": "Uy tín"})

    assert response.status_code == 200
    body = response.json()
    assert body["GioiThieu"] == "Uy tín"
    assert body["HoTen"] == "Nguyễn Văn A"
    assert body["Slug"] == "nguyen-van-a"
    assert body["Zalo"] == "0901234567"


def test_update_nested_block_is_partial_payload(client):
    response = client.put(f"{BASE}/5", json={"Media": {"Avt": {"Src": "c.png"}}})

    avatar = response.json()["Media"]["Avt"]
    assert avatar["Src"] == "c.png"
    assert avatar["Alt"] == "Ảnh đại diện của Lê Văn C"


def test_update_user_not_found(client):
    response = client.put(f"{BASE}/99", json={"HoTen": "X"})

    assert response.status_code == 404
    assert response.json()["detail"] == NOT_FOUND


def test_delete_user(client):
    response = client.delete(f"{BASE}/1")

    assert response.status_code == 200
    assert response.json() == {"message": "Đã xóa thành công"}
    assert client.get(f"{BASE}/1").status_code == 404
    assert client.delete(f"{BASE}/1").status_code == 200


def test_search_and_filters(client):
    assert ids(client.get(f"{BASE}/search", params={"keyword": "trần"})) == [2]
    assert ids(client.get(f"{BASE}/search")) == [1, 2, 5]
    assert ids(client.get(f"{BASE}/filter-service", params={"service": "CÀY"})) == [1]
    assert ids(client.get(f"{BASE}/filter-status", params={"status": "0"})) == [2]
    assert ids(client.get(f"{BASE}/filter-role", params={"role": "1"})) == [1]
    assert client.get(f"{BASE}/filter-status").json() == []
    assert client.get(f"{BASE}/filter-role", params={"role": "admin"}).json() == []


def test_directory(client):
    body = client.get(f"{BASE}/directory").json()
    assert [r["Id"] for r in body["admins"]] == [1]
    assert [r["Id"] for r in body["moderators"]] == [5]

    body = client.get(f"{BASE}/directory", params={"q": "levanc"}).json()
    assert body == {"admins": [], "moderators": [client.get(f"{BASE}/5").json()]}


def test_get_by_slug_and_profile(client):
    assert client.get(f"{BASE}/slug/tran-thi-b").json()["Id"] == 2
    assert client.get(f"{BASE}/slug/khong-co").status_code == 404

    profile = client.get(f"{BASE}/profile/nguyen-van-a").json()
    assert profile["zalo"]["url"] == "https://zalo.me/0901234567"
    assert profile["insurance_fund"]["SoTien"] == 500
    assert client.get(f"{BASE}/profile/khong-co").status_code == 404


def test_malformed_collection_returns_500(client, tmp_path):
    path = tmp_path / "users.json"
    path.write_text("not json", encoding="utf-8")
    app.dependency_overrides[get_member_service] = lambda: MemberService(JsonRecordStore(path))

    response = client.get(f"{BASE}/")

    assert response.status_code == 500
    assert response.json() == {"message": "Không thể kết nối đến kho dữ liệu"}
    # The service keeps answering other requests.
    assert client.get("/health").status_code == 200


def test_undecodable_collection_returns_500(client, tmp_path):
    path = tmp_path / "users.json"
    path.write_bytes(b'[{"HoTen": "\xff\xfe"}]')
    app.dependency_overrides[get_member_service] = lambda: MemberService(JsonRecordStore(path))

    response = client.get(f"{BASE}/")

    assert response.status_code == 500
    assert response.json() == {"message": "Không thể kết nối đến kho dữ liệu"}
