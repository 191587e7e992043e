import pytest

from kids_ledger.modules.ledgers.services.errors import LedgerValidationError, NeighborNotFoundError
from kids_ledger.modules.ledgers.services.ordering_service import ComputeSortOrder
from kids_ledger.modules.ledgers.services.query_service import GetFullLedger
from kids_ledger.modules.ledgers.services.store_service import (
    CreateAccount,
    CreateKid,
    CreateLedger,
    ListAccounts,
    ListKids,
    RenumberAccounts,
    RenumberKids,
    ReorderAccount,
    ReorderKid,
)


def _KidIds(db, ledger_id) -> list[int]:
    return [kid.Id for kid in ListKids(db, ledger_id)]


def test_compute_sort_order_cases():
    assert ComputeSortOrder(None, None) == 0
    assert ComputeSortOrder(None, 4.0) == 2.0
    assert ComputeSortOrder(None, 0.0) == 0.0
    assert ComputeSortOrder(3.0, None) == 4.0
    assert ComputeSortOrder(1.0, 2.0) == 1.5


def test_move_to_front_assigns_zero_and_ties_break_by_id(db):
    ledger = CreateLedger(db, "Smith")
    first = CreateKid(db, ledger.Id, "Emma", "👧")
    second = CreateKid(db, ledger.Id, "Noah", "👦")
    third = CreateKid(db, ledger.Id, "Ava", "🧒")

    moved = ReorderKid(db, third.Id)
    assert moved.SortOrder == 0
    moved = ReorderKid(db, second.Id)
    assert moved.SortOrder == 0

    assert _KidIds(db, ledger.Id) == [second.Id, third.Id, first.Id]


def test_move_between_neighbors_uses_midpoint(db):
    ledger = CreateLedger(db, "Smith")
    a = CreateKid(db, ledger.Id, "A", "🅰")
    b = CreateKid(db, ledger.Id, "B", "🅱")
    x = CreateKid(db, ledger.Id, "X", "❌")

    moved = ReorderKid(db, x.Id, before_id=a.Id, after_id=b.Id)
    assert a.SortOrder < moved.SortOrder < b.SortOrder
    assert _KidIds(db, ledger.Id) == [a.Id, x.Id, b.Id]


def test_move_after_only_appends_past_neighbor(db):
    ledger = CreateLedger(db, "Smith")
    a = CreateKid(db, ledger.Id, "A", "🅰")
    b = CreateKid(db, ledger.Id, "B", "🅱")

    moved = ReorderKid(db, a.Id, before_id=b.Id)
    assert moved.SortOrder == b.SortOrder + 1
    assert _KidIds(db, ledger.Id) == [b.Id, a.Id]


def test_move_before_only_halves_neighbor_key(db):
    ledger = CreateLedger(db, "Smith")
    a = CreateKid(db, ledger.Id, "A", "🅰")
    b = CreateKid(db, ledger.Id, "B", "🅱")

    moved = ReorderKid(db, b.Id, after_id=a.Id)
    assert moved.SortOrder == 0.5
    assert _KidIds(db, ledger.Id) == [b.Id, a.Id]


def test_move_before_zero_key_ties(db):
    ledger = CreateLedger(db, "Smith")
    a = CreateKid(db, ledger.Id, "A", "🅰")
    b = CreateKid(db, ledger.Id, "B", "🅱")
    ReorderKid(db, a.Id)

    moved = ReorderKid(db, b.Id, after_id=a.Id)
    assert moved.SortOrder == 0
    assert _KidIds(db, ledger.Id) == [a.Id, b.Id]


def test_reorder_only_writes_the_moved_row(db):
    ledger = CreateLedger(db, "Smith")
    kids = [CreateKid(db, ledger.Id, f"Kid {index}", "🙂") for index in range(4)]
    keys_before = {kid.Id: kid.SortOrder for kid in kids}

    ReorderKid(db, kids[3].Id, before_id=kids[0].Id, after_id=kids[1].Id)

    for kid in ListKids(db, ledger.Id):
        if kid.Id != kids[3].Id:
            assert kid.SortOrder == keys_before[kid.Id]


def test_missing_target_returns_none(db):
    assert ReorderKid(db, 999) is None
    assert ReorderAccount(db, 999) is None


def test_unknown_neighbor_fails(db):
    ledger = CreateLedger(db, "Smith")
    kid = CreateKid(db, ledger.Id, "Emma", "👧")
    with pytest.raises(NeighborNotFoundError):
        ReorderKid(db, kid.Id, before_id=999)


def test_neighbor_from_another_parent_fails(db):
    smith = CreateLedger(db, "Smith")
    jones = CreateLedger(db, "Jones")
    emma = CreateKid(db, smith.Id, "Emma", "👧")
    liam = CreateKid(db, jones.Id, "Liam", "👦")
    with pytest.raises(NeighborNotFoundError):
        ReorderKid(db, emma.Id, after_id=liam.Id)


def test_item_cannot_be_its_own_neighbor(db):
    ledger = CreateLedger(db, "Smith")
    kid = CreateKid(db, ledger.Id, "Emma", "👧")
    with pytest.raises(NeighborNotFoundError):
        ReorderKid(db, kid.Id, before_id=kid.Id)


def test_neighbor_ids_are_validated(db):
    with pytest.raises(LedgerValidationError):
        ReorderKid(db, 1, before_id="abc")


def test_repeated_insertion_between_same_pair_stays_ordered(db):
    ledger = CreateLedger(db, "Smith")
    left = CreateKid(db, ledger.Id, "Left", "⬅")
    right = CreateKid(db, ledger.Id, "Right", "➡")
    inserted = []
    after_id = right.Id
    for index in range(200):
        kid = CreateKid(db, ledger.Id, f"Kid {index}", "🙂")
        ReorderKid(db, kid.Id, before_id=left.Id, after_id=after_id)
        inserted.append(kid.Id)
        after_id = kid.Id

    ordered = ListKids(db, ledger.Id)
    assert [kid.Id for kid in ordered] == [left.Id] + list(reversed(inserted)) + [right.Id]
    keys = [kid.SortOrder for kid in ordered]
    assert all(low < high for low, high in zip(keys, keys[1:]))


def test_renumber_preserves_order(db):
    ledger = CreateLedger(db, "Smith")
    a = CreateKid(db, ledger.Id, "A", "🅰")
    b = CreateKid(db, ledger.Id, "B", "🅱")
    c = CreateKid(db, ledger.Id, "C", "©")
    ReorderKid(db, c.Id)
    ReorderKid(db, b.Id, before_id=c.Id, after_id=a.Id)

    assert RenumberKids(db, ledger.Id) == 3
    ordered = ListKids(db, ledger.Id)
    assert [kid.Id for kid in ordered] == [c.Id, b.Id, a.Id]
    assert [kid.SortOrder for kid in ordered] == [1, 2, 3]


def test_accounts_reorder_within_kid(db):
    ledger = CreateLedger(db, "Smith")
    kid = CreateKid(db, ledger.Id, "Emma", "👧")
    other = CreateKid(db, ledger.Id, "Noah", "👦")
    savings = CreateAccount(db, kid.Id, "Savings")
    spending = CreateAccount(db, kid.Id, "Spending")
    foreign = CreateAccount(db, other.Id, "Elsewhere")

    with pytest.raises(NeighborNotFoundError):
        ReorderAccount(db, spending.Id, after_id=foreign.Id)

    ReorderAccount(db, spending.Id, after_id=savings.Id)
    assert [account.Id for account in ListAccounts(db, kid.Id)] == [spending.Id, savings.Id]
    assert RenumberAccounts(db, kid.Id) == 2


def test_smith_family_scenario(db):
    ledger = CreateLedger(db, "Smith")
    emma = CreateKid(db, ledger.Id, "Emma", "👧")
    savings = CreateAccount(db, emma.Id, "Savings", 0)
    spending = CreateAccount(db, emma.Id, "Spending", 0)

    ReorderAccount(db, spending.Id, after_id=savings.Id)

    full = GetFullLedger(db, ledger.Id)
    assert [entry.Kid.Name for entry in full.Kids] == ["Emma"]
    assert [account.Name for account in full.Kids[0].Accounts] == ["Spending", "Savings"]

    # before_id names the left neighbour, so the move lands after Savings.
    ReorderAccount(db, spending.Id, before_id=savings.Id)
    assert [account.Name for account in ListAccounts(db, emma.Id)] == ["Savings", "Spending"]
