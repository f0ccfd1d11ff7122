def _rank(candidates):
    return sorted(candidates, key=lambda candidate: (-(candidate.votes or 0), candidate.id))


def select_president(candidates, rng):
    ranked = _rank(candidates)
    if not ranked:
        return {
            "winner": None,
            "tied": [],
            "is_tie": False,
            "top_vote_count": 0,
        }

    top_vote_count = ranked[0].votes or 0
    tied = [candidate for candidate in ranked if (candidate.votes or 0) == top_vote_count]
    winner = rng.choice(tied) if len(tied) > 1 else tied[0]

    return {
        "winner": winner,
        "tied": tied,
        "is_tie": len(tied) > 1,
        "top_vote_count": top_vote_count,
    }


def select_senators(candidates, seats, rng):
    """Fill ``seats`` from the highest vote totals.

    Candidates sharing the vote total of the last provisional seat form the
    tie set; they are shuffled and only as many as there are seats left are
    taken.
    """
    seats = seats or 1
    ranked = _rank(candidates)
    provisional = ranked[:seats]

    if not provisional:
        return {
            "winners": [],
            "tied": [],
            "is_tie": False,
            "threshold": None,
            "open_seats": seats,
        }

    threshold = provisional[-1].votes or 0
    tied = [candidate for candidate in ranked if (candidate.votes or 0) == threshold]

    if len(tied) > 1:
        above = [candidate for candidate in ranked if (candidate.votes or 0) > threshold]
        tied_seats = seats - len(above)
        shuffled = list(tied)
        rng.shuffle(shuffled)
        winners = above + shuffled[:tied_seats]
    else:
        winners = provisional

    return {
        "winners": winners,
        "tied": tied,
        "is_tie": len(tied) > 1,
        "threshold": threshold,
        "open_seats": max(0, seats - len(winners)),
    }
