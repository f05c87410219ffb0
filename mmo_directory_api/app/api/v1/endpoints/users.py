"""
Member endpoints for API v1.

CRUD over the Admin/KDV directory plus the search and filter routes
used by the frontend.  Handlers are thin: they hand the request to
``MemberService`` and turn a ``None`` result into HTTP 404.

The static routes (``/search``, ``/filter-*``, ``/directory``, ...)
are declared before ``/{user_id}`` so they are not captured by it.
``user_id`` is taken as a string: a non‑numeric id is simply not
found rather than a validation error.
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from mmo_directory_api.app.api.deps import get_member_service
from mmo_directory_api.app.schemas.member import MemberPayload
from mmo_directory_api.app.services.member_service import MemberService

router = APIRouter()

NOT_FOUND = "Không tìm thấy người dùng"


@router.get("/", response_model=List[Dict[str, Any]])
def list_users(service: MemberService = Depends(get_member_service)) -> List[Dict[str, Any]]:
    """Return every member ordered by ``SoTien`` descending."""
    return service.list_all()


@router.get("/search", response_model=List[Dict[str, Any]])
def search_users(
    keyword: str = Query("", description="Substring of HoTen, case insensitive"),
    service: MemberService = Depends(get_member_service),
) -> List[Dict[str, Any]]:
    return service.search_by_name(keyword)


@router.get("/filter-service", response_model=List[Dict[str, Any]])
def filter_by_main_service(
    service_name: str = Query("", alias="service"),
    service: MemberService = Depends(get_member_service),
) -> List[Dict[str, Any]]:
    """Members offering a primary service whose name contains ``service``."""
    return service.filter_by_main_service(service_name)


@router.get("/filter-status", response_model=List[Dict[str, Any]])
def filter_by_status(
    status_code: Optional[str] = Query(None, alias="status", description="1 = hoạt động, 0 = khoá"),
    service: MemberService = Depends(get_member_service),
) -> List[Dict[str, Any]]:
    return service.filter_by_status(status_code)


@router.get("/filter-role", response_model=List[Dict[str, Any]])
def filter_by_role(
    role: Optional[str] = Query(None, description="1 = Admin, 2 = KDV"),
    service: MemberService = Depends(get_member_service),
) -> List[Dict[str, Any]]:
    return service.filter_by_role(role)


@router.get("/directory", response_model=Dict[str, List[Dict[str, Any]]])
def directory(
    q: str = Query("", description="Name, account number, Zalo, website or slug"),
    service: MemberService = Depends(get_member_service),
) -> Dict[str, List[Dict[str, Any]]]:
    """Active members for the home page, split into ``admins`` and ``moderators``."""
    return service.directory(q)


@router.get("/slug/{slug}", response_model=Dict[str, Any])
def get_user_by_slug(slug: str, service: MemberService = Depends(get_member_service)) -> Dict[str, Any]:
    record = service.get_by_slug(slug)
    if record is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
    return record


@router.get("/profile/{slug}", response_model=Dict[str, Any])
def get_profile(slug: str, service: MemberService = Depends(get_member_service)) -> Dict[str, Any]:
    """Detail page data: the member, its Zalo contact and insurance fund."""
    profile = service.profile(slug)
    if profile is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
    return profile


@router.get("/{user_id}", response_model=Dict[str, Any])
def get_user(user_id: str, service: MemberService = Depends(get_member_service)) -> Dict[str, Any]:
    record = service.get_by_id(user_id)
    if record is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
    return record


@router.post("/", response_model=Dict[str, Any], status_code=status.HTTP_201_CREATED)
def create_user(payload: MemberPayload, service: MemberService = Depends(get_member_service)) -> Dict[str, Any]:
    """Create a member; the id and missing SEO fields are generated."""
    return service.create(payload.as_record())


@router.put("/{user_id}", response_model=Dict[str, Any])
def update_user(
    user_id: str,
    payload: MemberPayload,
    service: MemberService = Depends(get_member_service),
) -> Dict[str, Any]:
    """Merge the given fields into an existing member."""
    record = service.update(user_id, payload.as_record())
    if record is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
    return record


@router.delete("/{user_id}")
def delete_user(user_id: str, service: MemberService = Depends(get_member_service)) -> Dict[str, str]:
    # Xoá id không tồn tại vẫn trả về thành công.
    service.delete(user_id)
    return {"message": "Đã xóa thành công"}
