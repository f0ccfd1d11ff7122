from decimal import Decimal

from flask import current_app
from sqlalchemy import delete, exists, select, update

from democracy.extensions import db
from democracy.models import (
    Candidate,
    CandidateSnapshot,
    Company,
    Election,
    ElectionStatus,
    GameState,
    SharePriceHistory,
    Stock,
    TransactionHistory,
    User,
    UserShare,
)
from democracy.models.game import SINGLETON_ID
from democracy.services.economy import hourly_dividend, market_cap, reprice
from democracy.services.feed import post_feed_item
from democracy.services.tick_guard import claim_tick

MINTED_SHARES_PER_TICK = 1


def _advance_game_hour():
    state = db.session.get(GameState, SINGLETON_ID)
    if state is None:
        state = GameState(id=SINGLETON_ID, current_game_hour=0)
        db.session.add(state)
    state.current_game_hour = (state.current_game_hour or 0) + 1
    db.session.flush()
    return state.current_game_hour


def _has_shareholders(company_id):
    return db.session.scalar(
        select(
            exists().where(UserShare.company_id == company_id, UserShare.quantity > 0)
        )
    )


def _dissolve(stock, company):
    name, symbol = company.name, company.symbol
    db.session.execute(delete(SharePriceHistory).where(SharePriceHistory.stock_id == stock.id))
    db.session.execute(delete(UserShare).where(UserShare.company_id == company.id))
    db.session.delete(stock)
    db.session.flush()
    db.session.delete(company)
    db.session.flush()

    post_feed_item(
        f"{name} ({symbol}) has been dissolved due to having no shareholders."
    )
    current_app.logger.info("%s: Dissolved, no shareholders remaining", symbol)


def _reprice_stock(stock, company):
    result = reprice(stock.price, stock.bought_today, stock.sold_today)

    # Recorded even when unchanged so price charts have no gaps.
    db.session.add(SharePriceHistory(stock_id=stock.id, price=result["new_price"]))
    stock.price = result["new_price"]
    stock.bought_today = 0
    stock.sold_today = 0

    if result["change"]:
        current_app.logger.info(
            "%s: $%s -> $%s (%+d)%s",
            company.symbol,
            result["old_price"],
            result["new_price"],
            result["change"],
            " [DECAY]" if result["decayed"] else "",
        )
    return result


def _update_ceo(company):
    """Hand the company to its largest holder; lowest user id wins a tie."""
    top = (
        UserShare.query.filter(UserShare.company_id == company.id, UserShare.quantity > 0)
        .order_by(UserShare.quantity.desc(), UserShare.user_id)
        .first()
    )
    if top is None or top.user_id == company.creator_id:
        return None

    company.creator_id = top.user_id
    current_app.logger.info(
        "Updated CEO of %s to user %s with %s shares", company.name, top.user_id, top.quantity
    )
    return top.user_id


def _pay_dividends(company, price, issued_shares):
    if issued_shares <= 0:
        return Decimal("0.00")

    cap = market_cap(price, issued_shares)
    holdings = (
        UserShare.query.filter(UserShare.company_id == company.id, UserShare.quantity > 0)
        .order_by(UserShare.user_id)
        .all()
    )

    paid = Decimal("0.00")
    for holding in holdings:
        dividend = hourly_dividend(holding.quantity, issued_shares, cap)
        if dividend <= 0:
            continue

        ownership_pct = holding.quantity / issued_shares * 100
        db.session.execute(
            update(User)
            .where(User.id == holding.user_id)
            .values(money=User.money + dividend)
            .execution_options(synchronize_session=False)
        )
        db.session.add(
            TransactionHistory(
                user_id=holding.user_id,
                description=(
                    f"Dividend from {company.symbol}: ${dividend:,.2f} "
                    f"({ownership_pct:.1f}% ownership, Market Cap: ${cap:,})"
                ),
            )
        )
        paid += dividend

    current_app.logger.info(
        "%s: Paid dividends to %s shareholders (Market Cap: $%s)",
        company.symbol,
        len(holdings),
        cap,
    )
    return paid


def _accrue_campaigns():
    voting = [
        election.election
        for election in Election.query.filter_by(status=ElectionStatus.VOTING.value).all()
    ]
    processed = 0
    for kind in voting:
        for candidate in Candidate.query.filter_by(election=kind).order_by(Candidate.id).all():
            votes_per_hour = candidate.votes_per_hour or 0
            donations_per_hour = Decimal(candidate.donations_per_hour or 0)
            candidate.votes = (candidate.votes or 0) + votes_per_hour
            candidate.donations = Decimal(candidate.donations or 0) + donations_per_hour

            db.session.add(
                CandidateSnapshot(
                    candidate_id=candidate.id,
                    election=kind,
                    votes=candidate.votes,
                    donations=candidate.donations,
                )
            )
            processed += 1

    current_app.logger.info(
        "Processed %s candidates across %s voting elections", processed, len(voting)
    )
    return processed


def run_economy_tick():
    """One game hour for the market and the campaigns.

    Dividends use the price and share count as they stood at the start of
    the tick. The whole tick is committed at once; the caller rolls back on
    error.
    """
    if not claim_tick("economy"):
        db.session.commit()
        return {"skipped": True, "message": "Economy already advanced this interval"}

    game_hour = _advance_game_hour()
    listings = db.session.execute(
        select(Stock, Company).join(Company, Stock.company_id == Company.id).order_by(Stock.id)
    ).all()
    current_app.logger.info("Processing %s stocks for price updates", len(listings))

    active = []
    dissolved = []
    for stock, company in listings:
        if _has_shareholders(company.id):
            active.append((stock, company, stock.price, company.issued_shares or 0))
        else:
            dissolved.append(company.symbol)
            _dissolve(stock, company)

    for stock, company, _, _ in active:
        _reprice_stock(stock, company)

    for _, company, _, issued_shares in active:
        company.issued_shares = issued_shares + MINTED_SHARES_PER_TICK
    issued = MINTED_SHARES_PER_TICK * len(active)

    ceo_changes = 0
    for _, company, _, _ in active:
        if _update_ceo(company) is not None:
            ceo_changes += 1

    dividends_paid = Decimal("0.00")
    for _, company, price, issued_shares in active:
        dividends_paid += _pay_dividends(company, price, issued_shares)

    candidates_processed = _accrue_campaigns()
    db.session.commit()

    message = (
        f"Game hour {game_hour}: updated {len(active)} stock prices, "
        f"dissolved {len(dissolved)} companies, issued {issued} shares, "
        f"changed {ceo_changes} CEOs, paid ${dividends_paid:,.2f} in dividends, "
        f"processed {candidates_processed} candidates"
    )
    current_app.logger.info(message)
    return {
        "skipped": False,
        "game_hour": game_hour,
        "repriced": len(active),
        "dissolved": dissolved,
        "issued_shares": issued,
        "ceo_changes": ceo_changes,
        "dividends_paid": dividends_paid,
        "candidates_processed": candidates_processed,
        "message": message,
    }
