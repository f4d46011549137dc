import numpy as np
import pytest

from games.coinflip import CoinFlip, CoinSide

def test_flip_returns_a_side_and_remembers_it():
    coin = CoinFlip()
    assert coin.result is None
    side = coin.flip()
    assert side in (CoinSide.HEADS, CoinSide.TAILS)
    assert coin.result is side

def test_seeded_coins_repeat_their_sequence():
    a = CoinFlip(seed=2024)
    b = CoinFlip(seed=2024)
    assert [a.flip() for _ in range(50)] == [b.flip() for _ in range(50)]

def test_back_to_back_flips_are_not_stuck():
    # A generator reseeded from the clock on every call tends to repeat itself
    coin = CoinFlip()
    flips = {coin.flip() for _ in range(200)}
    assert flips == {CoinSide.HEADS, CoinSide.TAILS}

def test_flips_are_roughly_fair():
    coin = CoinFlip(seed=12345)
    draws = np.array([coin.flip() is CoinSide.HEADS for _ in range(2000)], dtype=int)
    heads = int(np.bincount(draws, minlength=2)[1])
    assert 850 <= heads <= 1150

@pytest.mark.parametrize("side,label", [(CoinSide.HEADS, "HEADS"), (CoinSide.TAILS, "TAILS")])
def test_side_labels(side, label):
    assert side.value == label
