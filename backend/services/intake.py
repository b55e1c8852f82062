import logging
from dataclasses import dataclass

from models import BloodRequest, BloodRequestCreate

logger = logging.getLogger(__name__)


@dataclass
class IntakeResult:
    request: BloodRequest
    matching_donors: int


class RequestIntake:
    """Validate, persist, match and notify for a new blood request.

    Validation happens at the HTTP boundary (BloodRequestCreate), so by the
    time submit() runs the payload is known to be complete. A storage failure
    aborts before matching; notification is scheduled and never awaited.
    """

    def __init__(self, requests, matcher, dispatcher):
        self.requests = requests
        self.matcher = matcher
        self.dispatcher = dispatcher

    async def submit(self, data: BloodRequestCreate) -> IntakeResult:
        request = await self.requests.create(data)
        matches = await self.matcher.find_matching_donors(request.blood_group, request.city)
        self.dispatcher.dispatch(request)
        logger.info("Blood request %s submitted with %d matching donor(s)", request.id, len(matches))
        return IntakeResult(request=request, matching_donors=len(matches))
