import pytest

from abp_sim.channel import ChannelModel
from abp_sim.errors import InvalidConfiguration
from abp_sim.events import Ack, Nil


@pytest.mark.parametrize("frame_bits", [0, 1, 432, 12432])
@pytest.mark.parametrize("sn", [0, 1])
def test_perfect_channel_always_delivers_clean(rng, frame_bits, sn):
    ch = ChannelModel(0.01, 0.0, 0.0, rng)
    for t in [0.0, 0.5, 12.25]:
        ev = ch.transmit_frame(t, sn, frame_bits)
        assert isinstance(ev, Ack)
        assert ev.time == pytest.approx(t + 0.01)
        assert ev.sequence_number == sn
        assert ev.error_flag is False


def test_loss_one_always_loses(rng):
    ch = ChannelModel(0.5, 1.0, 0.0, rng)
    for i in range(200):
        ev = ch.transmit_frame(i * 0.1, i % 2, 12432)
        assert isinstance(ev, Nil)
        assert ev.time == pytest.approx(i * 0.1 + 0.5)


def test_few_bit_errors_corrupt_the_frame(rng):
    ch = ChannelModel(0.01, 0.0, 1.0, rng)
    ev = ch.transmit_frame(0.0, 1, 4)
    assert ev == Ack(0.01, 1, True)


def test_five_bit_errors_count_as_loss(rng):
    ch = ChannelModel(0.01, 0.0, 1.0, rng)
    assert isinstance(ch.transmit_frame(0.0, 0, 5), Nil)
    assert isinstance(ch.transmit_frame(0.0, 0, 432), Nil)


def test_loss_rate_matches_probability(rng):
    ch = ChannelModel(0.0, 0.3, 0.0, rng)
    lost = sum(isinstance(ch.transmit_frame(0.0, 0, 100), Nil) for _ in range(5000))
    assert 0.27 < lost / 5000 < 0.33


def test_same_seed_same_outcomes():
    import numpy as np

    a = ChannelModel(0.01, 0.1, 1e-4, np.random.default_rng(7))
    b = ChannelModel(0.01, 0.1, 1e-4, np.random.default_rng(7))
    outs_a = [a.transmit_frame(0.0, 0, 12432) for _ in range(50)]
    outs_b = [b.transmit_frame(0.0, 0, 12432) for _ in range(50)]
    assert outs_a == outs_b


@pytest.mark.parametrize("kwargs", [
    dict(tau=0.01, loss_prob=1.5, ber=0.0),
    dict(tau=0.01, loss_prob=0.1, ber=-0.1),
    dict(tau=-1.0, loss_prob=0.1, ber=0.0),
])
def test_invalid_parameters(kwargs):
    with pytest.raises(InvalidConfiguration):
        ChannelModel(**kwargs)
