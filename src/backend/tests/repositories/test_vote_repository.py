"""
Tests for vote repository.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest


@pytest.fixture
def mock_session():
    """Create a mock database session."""
    session = AsyncMock()
    session.execute = AsyncMock()
    session.commit = AsyncMock()
    session.flush = AsyncMock()
    session.refresh = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.mark.unit
class TestVoteRepository:
    """Test VoteRepository operations."""

    def test_repository_instantiation(self, mock_session) -> None:
        """Test that repository can be instantiated."""
        from repositories.vote_repository import VoteRepository

        repo = VoteRepository(mock_session)
        assert repo.db == mock_session

    async def test_exists_for_voter_true(self, mock_session) -> None:
        """Test exists_for_voter returns True when a vote exists in the subcategory."""
        from repositories.vote_repository import VoteRepository

        mock_result = MagicMock()
        mock_result.scalar = MagicMock(return_value=1)
        mock_session.execute = AsyncMock(return_value=mock_result)

        repo = VoteRepository(mock_session)
        assert await repo.exists_for_voter("voter-1", "top-recruiter") is True

    async def test_exists_for_voter_false(self, mock_session) -> None:
        """Test exists_for_voter returns False for a first vote."""
        from repositories.vote_repository import VoteRepository

        mock_result = MagicMock()
        mock_result.scalar = MagicMock(return_value=0)
        mock_session.execute = AsyncMock(return_value=mock_result)

        repo = VoteRepository(mock_session)
        assert await repo.exists_for_voter("voter-1", "top-recruiter") is False

    async def test_create_vote(self, mock_session) -> None:
        """Test that create adds, flushes and truncates long user agents."""
        from repositories.vote_repository import VoteRepository

        repo = VoteRepository(mock_session)
        vote = await repo.create(
            voter_id="voter-1",
            nomination_id="nom-1",
            subcategory_id="top-recruiter",
            ip_address="203.0.113.7",
            user_agent="x" * 800,
        )

        mock_session.add.assert_called_once_with(vote)
        mock_session.flush.assert_awaited_once()
        assert vote.voter_id == "voter-1"
        assert vote.subcategory_id == "top-recruiter"
        assert len(vote.user_agent) == 500

    async def test_count_unique_voters_handles_none(self, mock_session) -> None:
        from repositories.vote_repository import VoteRepository

        mock_result = MagicMock()
        mock_result.scalar = MagicMock(return_value=None)
        mock_session.execute = AsyncMock(return_value=mock_result)

        assert await VoteRepository(mock_session).count_unique_voters() == 0


@pytest.mark.unit
class TestVoteUniqueness:
    """The database rejects a second vote in the same subcategory."""

    async def test_unique_constraint(self, db_session) -> None:
        from sqlalchemy.exc import IntegrityError

        from models import Voter
        from repositories.vote_repository import VoteRepository

        voter = Voter(email="sam@hiringpartners.com", firstname="Sam", lastname="Lee")
        db_session.add(voter)
        await db_session.flush()

        repo = VoteRepository(db_session)
        await repo.create(voter_id=voter.id, nomination_id="nom-1", subcategory_id="top-recruiter")
        with pytest.raises(IntegrityError):
            await repo.create(voter_id=voter.id, nomination_id="nom-2", subcategory_id="top-recruiter")
