from democracy.services.advance.bills import run_bill_tick
from democracy.services.advance.economy import run_economy_tick
from democracy.services.advance.elections import advance_election, run_election_tick

__all__ = [
    "advance_election",
    "run_bill_tick",
    "run_economy_tick",
    "run_election_tick",
]
