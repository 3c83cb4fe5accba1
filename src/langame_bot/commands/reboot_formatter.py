from __future__ import annotations

"""Turn a reboot result into ``name:true|false`` lines."""

from typing import List, Mapping, Sequence

from ..langame_api import DeviceDirectory, ManageResponse


def device_succeeded(outcomes: Sequence[bool]) -> bool:
    """Only the first outcome counts; an empty array is a failure."""
    return bool(outcomes[0]) if outcomes else False


def format_reboot_lines(response: ManageResponse, directory: Mapping[str, str]) -> List[str]:
    """
    Build one line per device, sorted case-insensitively.

    Returns an empty list when the response reports failure or no devices.
    """
    if not response.has_results:
        return []

    if not isinstance(directory, DeviceDirectory):
        directory = DeviceDirectory(directory)

    lines = [
        f"{directory.resolve(device_id)}:{'true' if device_succeeded(outcomes) else 'false'}"
        for device_id, outcomes in response.data.items()
    ]
    return sorted(lines, key=lambda line: (line.casefold(), line))
