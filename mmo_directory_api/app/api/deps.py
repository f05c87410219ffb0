"""FastAPI dependencies shared by the endpoint modules."""

from mmo_directory_api.app.core.config import get_data_path
from mmo_directory_api.app.core.store import JsonRecordStore
from mmo_directory_api.app.services.member_service import MemberService


def get_member_service() -> MemberService:
    """Return a member service bound to the configured JSON collection.

    Tests override this dependency with a service over an in‑memory
    store.
    """
    return MemberService(JsonRecordStore(get_data_path()))
