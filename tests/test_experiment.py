import pandas as pd
import pytest

from abp_sim.config import BER_VALUES, DELTA_TAU_VALUES, TAU_VALUES_MS
from abp_sim.experiment import compare, main, print_report, run_sweep, sweep_configs


def test_compare():
    assert compare(1.0, 1.0) == "COMPARABLE"
    assert compare(2.0, 1.0) == "FIRST GREATER"
    assert compare(1.0, 2.0) == "SECOND GREATER"


def test_sweep_covers_every_combination():
    configs = list(sweep_configs(n_packets=10))
    assert len(configs) == len(DELTA_TAU_VALUES) * len(TAU_VALUES_MS) * len(BER_VALUES)

    delta_tau, cfg = configs[0]
    assert delta_tau == 2.5
    assert cfg.tau == pytest.approx(0.01)
    assert cfg.delta == pytest.approx(0.025)
    assert cfg.target_packets == 10


def test_clean_sweep_runs_are_comparable(capsys):
    configs = sweep_configs(n_packets=20, loss=0.0, delta_tau_values=[2.5, 5.0],
                            tau_values_ms=[10], ber_values=[0.0])
    df = run_sweep(configs, seed=0)

    assert len(df) == 2
    assert (df["verdict"] == "COMPARABLE").all()
    assert df["throughput1"].tolist() == pytest.approx(df["clean_throughput"].tolist())
    assert "Running delta/tau=2.5" in capsys.readouterr().out


def test_print_report(capsys):
    df = pd.DataFrame([{
        "delta_tau": 2.5, "tau_ms": 10.0, "BER": 0.0, "N": 5,
        "throughput1": 2.0, "throughput2": 1.0, "clean_throughput": 3.0, "verdict": "FIRST GREATER",
    }])
    print_report(df)
    out = capsys.readouterr().out
    assert "Delta/Tau: 2.5, Propagation Delay: 10 ms, Bit Error Rate: 0" in out
    assert "Throughput for 1st 5 packets is GREATER" in out


def test_main_writes_csv_and_plot(tmp_path, capsys):
    csv_path = tmp_path / "results.csv"
    png_path = tmp_path / "throughput.png"
    df = main(["--packets", "3", "--seed", "1", "--csv", str(csv_path), "--plot", str(png_path)])

    assert len(df) == 30
    assert (df["throughput1"] > 0).all()
    assert len(pd.read_csv(csv_path)) == 30
    assert png_path.exists()


def test_main_rejects_bad_loss():
    with pytest.raises(SystemExit):
        main(["--loss", "1.0", "--packets", "3"])
