from democracy.models.bill import (
    CHAMBER_VOTE_MODELS,
    Bill,
    BillStage,
    BillStatus,
    BillVoteHouse,
    BillVotePresidential,
    BillVoteSenate,
)
from democracy.models.company import Company, SharePriceHistory, Stock, UserShare
from democracy.models.election import (
    Candidate,
    CandidateSnapshot,
    Election,
    ElectionKind,
    ElectionStatus,
    Vote,
)
from democracy.models.feed import FeedItem, TransactionHistory
from democracy.models.game import AdvanceLock, GameState, GameTracker
from democracy.models.party import Party, PartyStance
from democracy.models.user import User

__all__ = [
    "User",
    "Party",
    "PartyStance",
    "Election",
    "ElectionKind",
    "ElectionStatus",
    "Candidate",
    "CandidateSnapshot",
    "Vote",
    "Bill",
    "BillStage",
    "BillStatus",
    "BillVoteHouse",
    "BillVoteSenate",
    "BillVotePresidential",
    "CHAMBER_VOTE_MODELS",
    "GameTracker",
    "GameState",
    "AdvanceLock",
    "Company",
    "Stock",
    "UserShare",
    "SharePriceHistory",
    "FeedItem",
    "TransactionHistory",
]
