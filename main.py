"""
Snake Solver - Main Entry Point
Run this file to watch the solver play or to benchmark the solvers
"""

import sys
import os


def clear_screen():
    """Clear the terminal screen"""
    os.system('cls' if os.name == 'nt' else 'clear')


def print_banner():
    """Print the banner"""
    print("\n" + "="*60)
    print("  🐍  SNAKE SPANNING TREE SOLVER  🐍")
    print("="*60)


def print_menu():
    """Print the main menu"""
    print("\nChoose an option:")
    print("  1. 🤖 Watch the Spanning Tree Solver play")
    print("  2. 📊 Benchmark the solvers")
    print("  3. 🚪 Exit")
    print()


def ask_int(prompt, default):
    """Ask for an integer, falling back to the default on empty or invalid input"""
    answer = input(f"{prompt} [{default}]: ").strip()
    if not answer:
        return default
    try:
        return int(answer)
    except ValueError:
        print(f"Invalid input. Using default {default}.")
        return default


def get_config(mode_name, show_speed=True, show_jitter=True):
    """
    Get configuration from user for a specific mode

    Args:
        mode_name: Name of the mode (for display)
        show_speed: Whether to ask about speed
        show_jitter: Whether to ask about the jitter step count

    Returns:
        dict: Configuration dictionary with keys: grid_size, speed, jitter, seed
    """
    print("\n" + "="*60)
    print(f"Configuration for {mode_name}")
    print("="*60)
    print("Press Enter to use default values shown in [brackets]\n")

    config = {}

    grid_size = ask_int("Grid size (even)", 20)
    if grid_size < 2 or grid_size % 2:
        print("The solvers need an even grid size. Using default 20x20 grid.")
        grid_size = 20
    config['grid_size'] = grid_size

    config['speed'] = ask_int("Speed in cells/second", 30) if show_speed else 30
    config['jitter'] = ask_int("Re-plan every N steps (0 = never)", 10) if show_jitter else 10

    seed = input("Random seed [random]: ").strip()
    config['seed'] = int(seed) if seed.lstrip('-').isdigit() else None

    print("\n" + "="*60)
    print("Configuration Summary:")
    print("="*60)
    print(f"  Grid Size: {config['grid_size']}x{config['grid_size']}")
    if show_speed:
        print(f"  Speed: {config['speed']} cells/second")
    if show_jitter:
        print(f"  Jitter: {config['jitter'] or 'off'}")
    print(f"  Seed: {config['seed'] if config['seed'] is not None else 'random'}")
    print("="*60 + "\n")

    return config


def solver_demo():
    """Launch the visual solver demo"""
    print("\n" + "="*60)
    print("Starting Spanning Tree Solver Demo...")
    print("The snake re-plans a Hamiltonian cycle around itself as it grows")
    print("="*60 + "\n")

    config = get_config("Solver Demo")
    num_games = ask_int("\nNumber of games to watch", 1)
    show_overlays = input("Show solver overlays? [Y/n]: ").strip().lower() != 'n'

    try:
        from demos.auto_play_demo import run_demo
        run_demo(
            num_games=num_games,
            grid_size=config['grid_size'],
            speed_cells=config['speed'],
            jitter_steps=config['jitter'],
            show_overlays=show_overlays,
            seed=config['seed'],
        )
    except ImportError as e:
        print(f"❌ Error: Could not import the demo: {e}")
        print("Make sure pygame is installed.")

    input("\nPress Enter to return to menu...")


def benchmark():
    """Launch the headless benchmark"""
    print("\n" + "="*60)
    print("Starting Solver Benchmark...")
    print("="*60 + "\n")

    config = get_config("Benchmark", show_speed=False, show_jitter=False)
    runs = ask_int("\nGames per solver", 3)
    plot = input("Save a plot to [no plot]: ").strip()

    argv = ['--sizes', str(config['grid_size']), '--runs', str(max(1, runs))]
    if config['seed'] is not None:
        argv += ['--seed', str(config['seed'])]
    if plot:
        argv += ['--plot', plot]

    from benchmarks.benchmark import main as run_benchmark
    try:
        run_benchmark(argv)
    except RuntimeError as e:
        print(f"❌ Benchmark failed: {e}")

    input("\nPress Enter to return to menu...")


def main():
    """Main menu loop"""
    while True:
        clear_screen()
        print_banner()
        print_menu()

        choice = input("Enter your choice (1-3): ").strip()

        if choice == '1':
            solver_demo()
        elif choice == '2':
            benchmark()
        elif choice == '3':
            print("\n👋 Goodbye!\n")
            sys.exit(0)
        else:
            print("\n❌ Invalid choice. Please enter 1-3.")
            input("Press Enter to continue...")


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        print("\n\n👋 Interrupted by user. Goodbye!\n")
        sys.exit(0)
