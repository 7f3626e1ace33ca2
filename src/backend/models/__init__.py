"""Database models module."""

from models.app_setting import AppSetting
from models.nomination import Nomination, NominationSource, NominationStatus
from models.nominator import Nominator
from models.nominee import Nominee, NomineeType
from models.outbox import HubSpotOutboxEvent, OutboxEventType, OutboxStatus
from models.vote import Vote
from models.voter import Voter

__all__ = [
    "AppSetting",
    "Nomination",
    "NominationSource",
    "NominationStatus",
    "Nominator",
    "Nominee",
    "NomineeType",
    "HubSpotOutboxEvent",
    "OutboxEventType",
    "OutboxStatus",
    "Vote",
    "Voter",
]
