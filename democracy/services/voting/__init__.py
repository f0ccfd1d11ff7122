from democracy.services.voting.candidate import select_president, select_senators
from democracy.services.voting.yes_no import tally_chamber_votes

__all__ = [
    "select_president",
    "select_senators",
    "tally_chamber_votes",
]
