import random

from cavern.dungeon.noise_map import U16_MAX, Billow, build_noise_map, shape_noise_value


def test_shape_saturates_high_values():
    assert shape_noise_value(1.0) == U16_MAX
    assert shape_noise_value(0.5) == U16_MAX


def test_shape_halves_valley_values():
    # (-0.5 * 8 + 16) ** 4 == 20736, below the 65535 / 2.5 cutoff
    assert shape_noise_value(-0.5) == 20736 // 2


def test_noise_map_in_u16_range_and_seeded():
    a = build_noise_map(20, 15, random.Random(3))
    b = build_noise_map(20, 15, random.Random(3))
    assert a == b
    assert len(a) == 20 * 15
    assert all(0 <= v <= U16_MAX for v in a)


def test_billow_from_rng_uses_rng():
    rng = random.Random(11)
    billow = Billow.from_rng(rng)
    assert billow.octaves == 1
    assert billow.frequency == 5.0
    assert 0 <= billow.base < 256
