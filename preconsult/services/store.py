# preconsult/services/store.py
from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import List

from preconsult.intake.schema import ConsultationPayload

logger = logging.getLogger(__name__)


class ConsultationStore(ABC):
    """
    Persistence boundary for finished consultations.

    Implementations receive the payload as an opaque write; the flow has no
    failure path, so ``write`` is expected to succeed.
    """

    @abstractmethod
    async def write(self, payload: ConsultationPayload) -> None:
        ...


class MockConsultationStore(ConsultationStore):
    """
    Keeps payloads in a list after a fixed simulated latency.
    """

    def __init__(self, delay_seconds: float = 2.0):
        self.delay_seconds = delay_seconds
        self.saved: List[ConsultationPayload] = []

    async def write(self, payload: ConsultationPayload) -> None:
        logger.info(
            "Saving consultation with %d responses (simulated delay %.2fs)",
            len(payload.user_responses),
            self.delay_seconds,
        )
        await asyncio.sleep(self.delay_seconds)
        self.saved.append(payload)
        logger.debug("Stored payload #%d", len(self.saved))
