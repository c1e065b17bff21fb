from __future__ import annotations

from typing import Dict, Optional, Protocol, Sequence

from .model import Staff, StaffData, StaffSearchParams


class StaffRepository(Protocol):
    """Repository interface for staff records.

    Note (DIP): the service layer depends on this interface, not on a concrete database.
    """

    def create(self, *, staff_id: str, data: StaffData, created_at: str) -> None:
        raise NotImplementedError

    def get_by_id(self, staff_id: str) -> Optional[Staff]:
        raise NotImplementedError

    def get_by_nic(self, nic: str) -> Optional[Staff]:
        raise NotImplementedError

    def get_by_appointment_number(self, appointment_number: str) -> Optional[Staff]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Staff]:
        raise NotImplementedError

    def list_by_ids(self, staff_ids: Sequence[str]) -> Sequence[Staff]:
        raise NotImplementedError

    def search(self, params: StaffSearchParams) -> Sequence[Staff]:
        raise NotImplementedError

    def update(self, *, staff_id: str, data: StaffData, updated_at: str) -> bool:
        raise NotImplementedError

    def delete_by_id(self, staff_id: str) -> bool:
        raise NotImplementedError

    def count_by(self, column: str) -> Dict[str, int]:
        raise NotImplementedError
