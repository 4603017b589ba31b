import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import pandas as pd


def load_results(path):
    df = pd.read_csv(path)
    return df[df["throughput1"] > 0]


def plot_throughput(df, out_path=None):
    """Throughput vs delta/tau, one panel per propagation delay, one line per BER."""
    if isinstance(df, str):
        df = load_results(df)

    taus = sorted(df["tau_ms"].unique())
    fig, axes = plt.subplots(1, len(taus), figsize=(7 * len(taus), 6), squeeze=False)

    for ax, tau_ms in zip(axes[0], taus):
        sub_tau = df[df["tau_ms"] == tau_ms]
        for ber in sorted(sub_tau["BER"].unique()):
            sub = sub_tau[sub_tau["BER"] == ber].sort_values("delta_tau")
            mean = (sub["throughput1"] + sub["throughput2"]) / 2
            ax.plot(sub["delta_tau"], mean / 1e6, marker="o", linewidth=2, label=f"BER={ber:g}")
        ax.set_xlabel("Timeout / propagation delay (Δ/τ)")
        ax.set_ylabel("Throughput (Mbit/s)")
        ax.set_title(f"ABP throughput, τ={tau_ms:g} ms")
        ax.grid(True, linestyle="--", alpha=0.7)
        ax.legend()

    fig.tight_layout()
    if out_path:
        fig.savefig(out_path, dpi=150, bbox_inches="tight")
    plt.close(fig)
    return fig


if __name__ == "__main__":
    import sys
    plot_throughput(sys.argv[1], sys.argv[2] if len(sys.argv) > 2 else "abp_throughput.png")
