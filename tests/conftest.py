import pytest

from grid import Grid, Pool
from helpers import flat


@pytest.fixture
def pool_a():
    pool = Pool(1)
    pool.push(Grid.from_flat(1, flat(mon=("19:00", "20:30"), wed=("19:00", "20:30")), "%H:%M", 1))
    pool.push(Grid.from_flat(1, flat(tue=("10:00", "11:30"), thu=("10:00", "11:30")), "%H:%M", 2))
    return pool


@pytest.fixture
def pool_b():
    pool = Pool(2)
    pool.push(Grid.from_flat(2, flat(mon=("13:00", "15:00"), wed=("13:00", "15:00")), "%H:%M", 1))
    pool.push(Grid.from_flat(2, flat(thu=("18:00", "20:00"), sat=("9:00", "11:00")), "%H:%M", 2))
    pool.push(Grid.from_flat(2, flat(mon=("7:00", "9:00"), wed=("7:00", "9:00")), "%H:%M", 3))
    return pool
