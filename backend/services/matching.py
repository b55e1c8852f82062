import logging
import re
from typing import List

from models import Donor, BloodGroup

logger = logging.getLogger(__name__)

DEFAULT_MATCH_LIMIT = 5


class MatchingEngine:
    """Finds candidate donors for a blood request.

    A donor matches when the blood group is identical and the request's city
    appears anywhere in the donor's free-text location, ignoring case.
    """

    def __init__(self, donors, limit: int = DEFAULT_MATCH_LIMIT):
        self.donors = donors
        self.limit = limit

    async def find_matching_donors(self, blood_group: BloodGroup, city: str, limit: int = None) -> List[Donor]:
        limit = self.limit if limit is None else limit
        city = (city or "").strip()
        if not city or limit <= 0:
            return []
        query = {
            "blood_group": BloodGroup(blood_group).value,
            "location": {"$regex": re.escape(city), "$options": "i"},
        }
        matches = await self.donors.find(query, limit)
        logger.debug("Matched %d donor(s) for %s in %r", len(matches), query["blood_group"], city)
        return matches
