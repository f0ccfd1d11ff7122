import pytest

from democracy.errors import StaleStateError
from democracy.extensions import db
from democracy.models import Candidate, Election, FeedItem, Party, User, Vote
from democracy.services.advance import advance_election, run_election_tick
from democracy.services.advance.elections import senate_seats_for


def stand(db_session, user, election, votes=0, **fields):
    candidate = Candidate(user_id=user.id, election=election, votes=votes, **fields)
    db_session.add(candidate)
    db_session.flush()
    return candidate


def test_countdown_only_decrements_days(world, db_session):
    run_election_tick()

    assert db_session.get(Election, "President").status == "Candidate"
    assert db_session.get(Election, "President").days_left == 4
    # Senate started with 2 days, so it only counts down as well.
    assert db_session.get(Election, "Senate").days_left == 1


@pytest.mark.parametrize(
    ("candidate_count", "expected_seats"),
    [(0, 3), (2, 3), (6, 3), (7, 4), (10, 5), (11, 6)],
)
def test_senate_seat_formula(candidate_count, expected_seats):
    assert senate_seats_for(candidate_count) == expected_seats


def test_senate_opening_recomputes_seats(world, db_session, make_user):
    world["Senate"].days_left = 1
    for _ in range(9):
        stand(db_session, make_user(), "Senate")
    db_session.commit()

    result = advance_election("Senate")
    db_session.commit()

    senate = db_session.get(Election, "Senate")
    assert result["action"] == "opened_voting"
    assert senate.status == "Voting"
    assert senate.days_left == 2
    assert senate.seats == 5


def test_president_opening_resets_days(world, db_session):
    world["President"].days_left = 1
    db_session.commit()

    advance_election("President")
    db_session.commit()

    president = db_session.get(Election, "President")
    assert (president.status, president.days_left) == ("Voting", 5)


def test_president_conclusion_replaces_previous_president(
    world, db_session, make_user, scripted_random
):
    scripted_random([1])
    world["President"].status = "Voting"
    world["President"].days_left = 1
    old = make_user(role="President")
    a, b, c = make_user(), make_user(), make_user()
    stand(db_session, a, "President", votes=10)
    stand(db_session, b, "President", votes=10)
    stand(db_session, c, "President", votes=5)
    db_session.commit()

    run_election_tick()

    assert db_session.get(User, old.id).role == "Representative"
    # The scripted draw picked the second of the tied pair.
    assert db_session.get(User, b.id).role == "President"
    assert db_session.get(User, a.id).role == "Representative"
    president = db_session.get(Election, "President")
    assert (president.status, president.days_left) == ("Concluded", 4)
    feed = FeedItem.query.filter_by(user_id=b.id).one()
    assert feed.content == "has been elected as the President!"


def test_president_conclusion_without_candidates_is_quiet(world, db_session):
    world["President"].status = "Voting"
    world["President"].days_left = 1
    db_session.commit()

    outcome = run_election_tick()

    assert outcome["failed"] == []
    assert db_session.get(Election, "President").status == "Concluded"
    assert FeedItem.query.count() == 0


def test_senate_conclusion_fills_seats_from_candidates(
    world, db_session, make_user, scripted_random
):
    scripted_random()
    world["Senate"].status = "Voting"
    world["Senate"].days_left = 1
    world["Senate"].seats = 3
    sitting = make_user(role="Senator")
    winner = make_user()
    loser_a, loser_b = make_user(), make_user()
    stand(db_session, winner, "Senate", votes=8)
    stand(db_session, loser_a, "Senate", votes=0)
    stand(db_session, loser_b, "Senate", votes=0)
    president_hopeful = make_user()
    stand(db_session, president_hopeful, "President", votes=1)
    make_user(username="Banned User 12")
    make_user(is_active=False)
    bystander = make_user()
    db_session.commit()

    outcome = run_election_tick()

    senators = {user.id for user in User.query.filter_by(role="Senator").all()}
    elected = outcome["results"]["Senate"]["elected"]
    assert winner.id in elected
    assert len(elected) == 3
    assert senators == set(elected)
    assert sitting.id not in senators
    assert president_hopeful.id not in senators
    assert outcome["results"]["Senate"]["appointed"] == []
    assert bystander.id not in senators


def test_senate_appoints_uninvolved_users_for_empty_seats(
    world, db_session, make_user, scripted_random
):
    scripted_random()
    world["Senate"].status = "Voting"
    world["Senate"].days_left = 1
    world["Senate"].seats = 3
    winner = make_user()
    stand(db_session, winner, "Senate", votes=4)
    president = make_user(role="President")
    banned = make_user(username="Banned User 7")
    inactive = make_user(is_active=False)
    eligible = [make_user(), make_user(), make_user()]
    db_session.commit()

    outcome = run_election_tick()

    appointed = outcome["results"]["Senate"]["appointed"]
    assert appointed == [eligible[0].id, eligible[1].id]
    for user_id in appointed:
        assert db_session.get(User, user_id).role == "Senator"
        assert (
            FeedItem.query.filter_by(user_id=user_id).one().content
            == "has been appointed as a Senator!"
        )
    assert db_session.get(User, president.id).role == "President"
    assert db_session.get(User, banned.id).role == "Representative"
    assert db_session.get(User, inactive.id).role == "Representative"
    senate = db_session.get(Election, "Senate")
    assert (senate.status, senate.days_left) == ("Concluded", 3)


def test_cycle_reset_only_clears_its_own_election(world, db_session, make_user):
    world["Senate"].status = "Concluded"
    world["Senate"].days_left = 1
    world["President"].days_left = 3
    senate_hopeful = stand(db_session, make_user(), "Senate", votes=2)
    president_hopeful = stand(db_session, make_user(), "President", votes=2)
    voter = make_user()
    db_session.add_all(
        [
            Vote(user_id=voter.id, election="Senate", candidate_id=senate_hopeful.id),
            Vote(user_id=voter.id, election="President", candidate_id=president_hopeful.id),
        ]
    )
    db_session.commit()

    run_election_tick()

    assert Candidate.query.filter_by(election="Senate").count() == 0
    assert Vote.query.filter_by(election="Senate").count() == 0
    assert Candidate.query.filter_by(election="President").count() == 1
    assert Vote.query.filter_by(election="President").count() == 1
    senate = db_session.get(Election, "Senate")
    assert (senate.status, senate.days_left) == ("Candidate", 2)


def test_phases_cycle_in_order_and_days_never_go_negative(world, db_session):
    seen = []
    for _ in range(40):
        run_election_tick()
        president = db_session.get(Election, "President")
        assert president.days_left >= 1
        if not seen or seen[-1] != president.status:
            seen.append(president.status)

    expected = ["Candidate", "Voting", "Concluded"]
    for index, status in enumerate(seen):
        assert status == expected[index % 3]
    assert len(seen) >= 4


def test_stale_election_row_is_rejected(world, db_session):
    election = db_session.get(Election, "President")
    db.session.execute(
        Election.__table__.update()
        .where(Election.election == "President")
        .values(days_left=9)
    )

    # The in-memory row still says 5 days.
    assert election.days_left == 5
    with pytest.raises(StaleStateError):
        advance_election("President")
    db_session.rollback()


def test_failed_half_does_not_block_the_other(world, db_session, monkeypatch):
    from democracy.services.advance import elections

    original = elections.advance_election

    def flaky(kind, rng=None):
        if kind.value == "President":
            raise StaleStateError("lost the race")
        return original(kind, rng)

    monkeypatch.setattr(elections, "advance_election", flaky)

    outcome = run_election_tick()

    assert outcome["failed"] == ["President"]
    assert db_session.get(Election, "President").days_left == 5
    assert db_session.get(Election, "Senate").days_left == 1


def test_second_tick_inside_interval_is_skipped(app, world, db_session):
    app.config["TICK_MIN_INTERVAL_SECONDS"] = 3600

    run_election_tick()
    outcome = run_election_tick()

    assert outcome["results"]["President"] == {"action": "skipped"}
    assert db_session.get(Election, "President").days_left == 4


def test_idle_users_leave_their_parties(world, db_session, make_user):
    party = Party(name="Lonely Party")
    busy_party = Party(name="Busy Party")
    db_session.add_all([party, busy_party])
    db_session.flush()
    idle = make_user(party_id=party.id, last_activity=6)
    party.leader_id = idle.id
    busy = make_user(party_id=busy_party.id, last_activity=0)
    db_session.commit()
    party_id = party.id

    run_election_tick()

    idle = db_session.get(User, idle.id)
    assert idle.is_active is False
    assert idle.party_id is None
    assert db_session.get(Party, party_id) is None
    assert db_session.get(User, busy.id).party_id == busy_party.id
    assert db_session.get(User, busy.id).last_activity == 1
