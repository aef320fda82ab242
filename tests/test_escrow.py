import pytest

from stakefour.escrow import (cancel_plan, draw_plan, escrow_account, payout_plan, plan_total,
                              win_plan)
from stakefour.game import rules
from stakefour.game.record import GameRecord, Payout
from stakefour.utils import MoveOutcome, OutcomeKind, Phase


def _finished(phase: Phase, stake: int = 200) -> GameRecord:
    winner = {Phase.PLAYER0_WON: "alice", Phase.PLAYER1_WON: "bob"}.get(phase)
    return GameRecord(reference="g1", player0="alice", player1="bob", stake=stake,
                      phase=phase, winner=winner)


def test_escrow_account_cannot_be_a_player_id() -> None:
    assert escrow_account("g1") == ("escrow", "g1")
    assert escrow_account("g1") != "escrow:g1"
    assert escrow_account("g1") != escrow_account("g2")


@pytest.mark.parametrize("phase,winner", [(Phase.PLAYER0_WON, "alice"),
                                          (Phase.PLAYER1_WON, "bob")])
def test_winner_takes_the_stake(phase: Phase, winner: str) -> None:
    assert win_plan(_finished(phase)) == [Payout(winner, 200)]


def test_draw_splits_evenly() -> None:
    assert draw_plan(_finished(Phase.DRAW)) == [Payout("alice", 100), Payout("bob", 100)]


def test_odd_draw_remainder_goes_to_creator_by_default() -> None:
    plan = draw_plan(_finished(Phase.DRAW, stake=201))

    assert plan == [Payout("alice", 101), Payout("bob", 100)]


def test_odd_draw_remainder_can_go_to_joiner() -> None:
    plan = draw_plan(_finished(Phase.DRAW, stake=201), remainder_to=1)

    assert plan == [Payout("alice", 100), Payout("bob", 101)]


@pytest.mark.parametrize("stake", [2, 200, 201, 999])
@pytest.mark.parametrize("phase", [Phase.PLAYER0_WON, Phase.PLAYER1_WON, Phase.DRAW])
def test_plans_pay_out_exactly_the_stake(phase: Phase, stake: int) -> None:
    record = _finished(phase, stake)
    kind = OutcomeKind.DRAW if phase == Phase.DRAW else OutcomeKind.WIN
    outcome = MoveOutcome(kind, 0, 0, 1 if phase == Phase.PLAYER1_WON else 0)

    assert plan_total(payout_plan(outcome, record)) == stake


def test_cancel_refunds_the_commitment() -> None:
    record = rules.create_game("alice", "g1", 100)

    assert cancel_plan(record) == [Payout("alice", 100)]


def test_continue_pays_nothing(started: GameRecord) -> None:
    outcome = rules.play("alice", "bob", started, 3)

    assert payout_plan(outcome, started) == []


def test_plans_refuse_the_wrong_phase(started: GameRecord) -> None:
    with pytest.raises(ValueError):
        win_plan(started)
    with pytest.raises(ValueError):
        draw_plan(started)
    with pytest.raises(ValueError):
        cancel_plan(started)
