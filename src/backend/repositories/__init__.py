"""Repository modules for database access."""

from repositories.nomination_repository import NominationRepository
from repositories.nominator_repository import NominatorRepository
from repositories.outbox_repository import OutboxRepository
from repositories.settings_repository import SettingsRepository
from repositories.vote_repository import VoteRepository
from repositories.voter_repository import VoterRepository

__all__ = [
    "NominationRepository",
    "NominatorRepository",
    "OutboxRepository",
    "SettingsRepository",
    "VoteRepository",
    "VoterRepository",
]
