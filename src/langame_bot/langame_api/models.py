from __future__ import annotations

"""Request and response models for the Langame public API."""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

REBOOT_COMMAND = "reboot"


@dataclass(frozen=True)
class ManageRequest:
    """Body of ``POST /public_api/pc/manage``."""

    club_id: int
    pc_type: str
    command: str = REBOOT_COMMAND
    uuids: Optional[List[str]] = None

    def to_payload(self) -> Dict[str, Any]:
        return {
            "club_id": self.club_id,
            "command": self.command,
            "type": self.pc_type,
            "uuids": self.uuids,
        }


@dataclass(frozen=True)
class ManageResponse:
    """Per-device outcome arrays keyed by device UUID."""

    status: bool
    data: Dict[str, Tuple[bool, ...]] = field(default_factory=dict)

    @property
    def has_results(self) -> bool:
        return self.status and bool(self.data)


@dataclass(frozen=True)
class LinkedPc:
    """One entry of the linked-PC listing."""

    id: int = 0
    name: Optional[str] = None
    pc_number: Optional[str] = None
    packets_type_pc: int = 0
    fiscal_name: Optional[str] = None
    uuid: Optional[str] = None
    club_id: int = 0
    date: Optional[str] = None
    is_ps: int = 0
    rele_type: Optional[str] = None
    color: Optional[str] = None


class DeviceDirectory(Mapping[str, str]):
    """Case-insensitive UUID to display-name lookup."""

    def __init__(self, names: Optional[Mapping[str, str]] = None):
        self._names: Dict[str, str] = {}
        self._original_keys: Dict[str, str] = {}
        for device_id, name in (names or {}).items():
            self._store(device_id, name)

    @classmethod
    def from_linked_pcs(cls, pcs: Iterable[LinkedPc]) -> "DeviceDirectory":
        directory = cls()
        for pc in pcs:
            if not pc.uuid or not pc.uuid.strip():
                continue
            display_name = pc.name if pc.name and pc.name.strip() else pc.uuid
            directory._store(pc.uuid, display_name)
        return directory

    def _store(self, device_id: str, name: str) -> None:
        key = device_id.casefold()
        self._names[key] = name
        self._original_keys[key] = device_id

    def resolve(self, device_id: str) -> str:
        """Return the display name for ``device_id``, or the id itself when unknown."""
        return self._names.get(device_id.casefold(), device_id)

    def __getitem__(self, device_id: str) -> str:
        return self._names[device_id.casefold()]

    def __contains__(self, device_id: object) -> bool:
        return isinstance(device_id, str) and device_id.casefold() in self._names

    def __iter__(self):
        return iter(self._original_keys.values())

    def __len__(self) -> int:
        return len(self._names)
