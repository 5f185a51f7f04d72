"""Identity of a bulb group."""

from dataclasses import dataclass
from typing import Dict, List, Union

from milighthub.group_state_field import GroupStateField
from milighthub.remote_type import RemoteType, remote_type_to_string


@dataclass(frozen=True)
class BulbId:
    """A group on a remote: device id, group number and remote type."""

    device_id: int = 0
    group_id: int = 0
    device_type: RemoteType = RemoteType.UNKNOWN

    def compact_id(self) -> int:
        """All three parts packed into one 32-bit integer."""
        return (
            (self.device_id << 24) | (int(self.device_type) << 8) | self.group_id
        ) & 0xFFFFFFFF

    def hex_device_id(self) -> str:
        """Device id as ``0x`` followed by upper-case hex."""
        return f"0x{self.device_id:X}"

    def to_dict(self) -> Dict[str, Union[int, str]]:
        """JSON object form."""
        return {
            GroupStateField.DEVICE_ID.value: self.device_id,
            GroupStateField.GROUP_ID.value: self.group_id,
            GroupStateField.DEVICE_TYPE.value: remote_type_to_string(self.device_type),
        }

    def to_list(self) -> List[Union[int, str]]:
        """JSON array form: device id, type name, group id."""
        return [self.device_id, remote_type_to_string(self.device_type), self.group_id]