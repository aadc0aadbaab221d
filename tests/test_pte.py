import pytest

from oslab.pte import (
    PTE_A,
    PTE_D,
    PTE_G,
    PTE_R,
    PTE_U,
    PTE_V,
    PTE_W,
    PTE_X,
    check_permission,
    extract_flags,
    extract_ppn,
    is_leaf,
    is_valid,
    make_pte,
)


def test_make_pte_basic():
    pte = make_pte(0x12345, PTE_V | PTE_R | PTE_W)
    assert extract_ppn(pte) == 0x12345
    assert extract_flags(pte) == PTE_V | PTE_R | PTE_W


def test_make_pte_zero():
    pte = make_pte(0, 0)
    assert pte == 0
    assert extract_ppn(pte) == 0
    assert extract_flags(pte) == 0


def test_make_pte_all_flags():
    all_flags = PTE_V | PTE_R | PTE_W | PTE_X | PTE_U | PTE_G | PTE_A | PTE_D
    pte = make_pte(0xABC, all_flags)
    assert extract_ppn(pte) == 0xABC
    assert extract_flags(pte) == all_flags


def test_make_pte_large_ppn():
    ppn = (1 << 44) - 1
    pte = make_pte(ppn, PTE_V)
    assert extract_ppn(pte) == ppn


def test_make_pte_truncates_oversized_fields():
    pte = make_pte(1 << 44, 0x1FF)
    assert extract_ppn(pte) == 0
    assert extract_flags(pte) == 0xFF


def test_is_valid():
    assert is_valid(make_pte(1, PTE_V))
    assert not is_valid(make_pte(1, PTE_R))
    assert not is_valid(0)


def test_is_leaf():
    assert is_leaf(make_pte(1, PTE_V | PTE_R))
    assert is_leaf(make_pte(1, PTE_V | PTE_X))
    assert is_leaf(make_pte(1, PTE_V | PTE_R | PTE_W | PTE_X))
    assert not is_leaf(make_pte(1, PTE_V))
    assert not is_leaf(make_pte(1, PTE_V | PTE_A | PTE_D))


def test_check_permission_read():
    pte = make_pte(1, PTE_V | PTE_R)
    assert check_permission(pte, True, False, False)
    assert not check_permission(pte, False, True, False)
    assert not check_permission(pte, False, False, True)


def test_check_permission_rw():
    pte = make_pte(1, PTE_V | PTE_R | PTE_W)
    assert check_permission(pte, True, True, False)
    assert not check_permission(pte, True, True, True)


def test_check_permission_all():
    pte = make_pte(1, PTE_V | PTE_R | PTE_W | PTE_X)
    assert check_permission(pte, True, True, True)
    assert check_permission(pte, True, False, False)
    assert check_permission(pte, False, False, False)


def test_check_permission_invalid():
    pte = make_pte(1, PTE_R | PTE_W | PTE_X)
    assert not check_permission(pte, True, False, False)


@pytest.mark.parametrize("ppn", [0, 1, 0x80000, (1 << 44) - 1])
@pytest.mark.parametrize("flags", [0, PTE_V, PTE_V | PTE_R | PTE_D, 0xFF])
def test_round_trip(ppn, flags):
    pte = make_pte(ppn, flags)
    assert extract_ppn(pte) == ppn
    assert extract_flags(pte) == flags