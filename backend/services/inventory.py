from typing import Dict


class InventoryAggregator:
    """Donor counts per blood group, recomputed on every call."""

    def __init__(self, donors):
        self.donors = donors

    async def aggregate_inventory(self) -> Dict[str, int]:
        return await self.donors.count_by("blood_group")
