import sys
import os
import argparse
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import seaborn as sns
from tqdm import tqdm

# Project root on the path so the package imports without installation
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from splendor_solver.card import CanonicalDeck, read_cards
from splendor_solver.config import load_config
from splendor_solver.deck import build_decks
from splendor_solver.errors import FatalInputError
from splendor_solver.report import format_progress, results_frame, setup_logging
from splendor_solver.trials import SolvabilityEstimate, estimate_solvability

plt.rcParams['font.family'] = 'sans-serif'


class Visualizer:
    def __init__(self, df, target_score, baseline, save_dir="results/plots"):
        self.df = df
        self.target_score = target_score
        self.baseline = baseline
        self.save_dir = save_dir
        os.makedirs(self.save_dir, exist_ok=True)
        sns.set_theme(style="whitegrid")

    def plot_all(self):
        if self.df.empty:
            print("No trials to plot.")
            return
        self.plot_running_likelihood()
        self.plot_score_distribution()
        print(f"Plots saved to '{self.save_dir}'")

    def plot_running_likelihood(self):
        plt.figure(figsize=(10, 6))
        plt.plot(self.df['trial'], self.df['running_likelihood'], color='blue', linewidth=2, label='Estimate')
        plt.axhline(self.baseline, color='gray', linestyle='--', label='Random board')
        plt.title('Running Solvability Likelihood')
        plt.xlabel('Trial')
        plt.ylabel('Trials reaching target (%)')
        plt.legend()
        plt.savefig(os.path.join(self.save_dir, 'running_likelihood.png'))
        plt.close()

    def plot_score_distribution(self):
        plt.figure(figsize=(10, 6))
        sns.histplot(self.df['best_points'], color='blue', kde=False, binwidth=1)
        plt.axvline(self.target_score, color='red', linestyle='--', label=f'Target ({self.target_score})')
        plt.title('Best Score per Trial')
        plt.xlabel('Points')
        plt.legend()
        plt.savefig(os.path.join(self.save_dir, 'best_points_dist.png'))
        plt.close()


def main(argv=None):
    parser = argparse.ArgumentParser(description="Batch solvability estimate with CSV export and plots")
    parser.add_argument("board", type=str, help="File with the known cards")
    parser.add_argument("--config", type=str, default=None, help="YAML config file")
    parser.add_argument("--trials", type=int, default=None, help="Number of randomized boards (Overrides config)")
    parser.add_argument("--steps", type=int, default=None, help="Cooling steps per anneal run (Overrides config)")
    parser.add_argument("--csv", type=str, default="results/trials.csv", help="Per-trial CSV output")
    parser.add_argument("--plot_dir", type=str, default="results/plots", help="Directory for plots")
    args = parser.parse_args(argv)

    setup_logging("WARNING")
    try:
        config = load_config(args.config).with_overrides(trials=args.trials, anneal_steps=args.steps)
        canonical = CanonicalDeck.default()
        with open(args.board, 'r', encoding='utf-8') as f:
            decks = build_decks(read_cards(f, canonical))
    except FatalInputError as e:
        print(e, file=sys.stderr)
        sys.exit(1)
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    estimate = SolvabilityEstimate(baseline=config.random_board_baseline)
    results = []
    for result in tqdm(estimate_solvability(decks, canonical, config, estimate=estimate), total=config.trials):
        results.append(result)

    df = results_frame(results)
    csv_dir = os.path.dirname(args.csv)
    if csv_dir:
        os.makedirs(csv_dir, exist_ok=True)
    df.to_csv(args.csv, index=False)

    print("\n" + "=" * 40)
    print("       FINAL RESULTS SUMMARY       ")
    print("=" * 40)
    print(format_progress(estimate))
    print(f"Avg best points: {df['best_points'].mean():.2f}")
    print(f"Avg turns of best line: {df['best_total_turns'].mean():.1f}")
    print(f"Trials written to {args.csv}")
    print("=" * 40)

    Visualizer(df, config.target_score, config.random_board_baseline, save_dir=args.plot_dir).plot_all()


if __name__ == "__main__":
    main()
