"""
Watch the spanning tree solver play Snake
The overlay shows what the solver was thinking on its last planning call:
- red shading: the cost field, brighter means further from the food
- cyan lines: the walls of the Hamiltonian cycle
- yellow line: the moves still left in the current path
"""

import sys
import random

import pygame

from algorithms.snake_spanning_tree import JitterKind, SnakeSpanningTreeSolver
from game.auto_player import AutoPlayerState, AutoSnakePlayer
from game.coordinates import Coord, Direction
from game.environment import SnakeWorld


BLACK = pygame.Color(0, 0, 0)
GREEN = pygame.Color(0, 255, 0)
DARK_GREEN = pygame.Color(0, 128, 0)
RED = pygame.Color(255, 0, 0)
CYAN = pygame.Color(0, 255, 255)
YELLOW = pygame.Color(255, 255, 0)


def cell_center(coord, cell_size):
    """Get pixel center of a grid cell"""
    return (coord[0] * cell_size + cell_size // 2, coord[1] * cell_size + cell_size // 2)


def draw_cost_field(surface, cost_field, cell_size):
    """Shade every reached cell by its distance from the food"""
    # Cells still marked as queued never survive a finished fill, so the max is a real distance
    max_value = int(cost_field.max())
    if max_value == 0:
        return

    size = cost_field.shape[0]
    for y in range(size):
        for x in range(size):
            value = int(cost_field[y, x])
            if value:
                shade = int(255 * value / max_value)
                rect = pygame.Rect(x * cell_size, y * cell_size, cell_size, cell_size)
                pygame.draw.rect(surface, (shade // 2, 0, 0), rect)


def draw_wall_grid(surface, wall_grid, cell_size):
    """Draw the walls between real cells as thin lines along the cell borders"""
    for x in range(wall_grid.size()):
        for y in range(wall_grid.size()):
            coord = Coord(x, y)
            for direction in (Direction.RIGHT, Direction.DOWN):
                if not wall_grid.get_edge(coord, direction):
                    continue

                # The border shared with the neighbour to the right or below
                if direction == Direction.RIGHT:
                    start = ((x + 1) * cell_size, y * cell_size)
                    end = ((x + 1) * cell_size, (y + 1) * cell_size)
                else:
                    start = (x * cell_size, (y + 1) * cell_size)
                    end = ((x + 1) * cell_size, (y + 1) * cell_size)
                pygame.draw.line(surface, CYAN, start, end, 1)


def draw_path(surface, path, head, cell_size):
    """Draw the remaining planned moves as a line starting from the head"""
    points = [cell_center(head + offset, cell_size) for offset in path.iter_offsets()]
    if len(points) > 1:
        pygame.draw.lines(surface, YELLOW, False, points, 2)


def draw_world(surface, world, cell_size):
    """Draw the snake body (head darker) and the food"""
    padding = max(1, cell_size // 10)
    for coord in world.cells.iter_coords():
        cell = world.get_cell(coord)
        if cell.is_snake:
            rect = pygame.Rect(coord.x * cell_size + padding, coord.y * cell_size + padding,
                               cell_size - padding * 2, cell_size - padding * 2)
            color = DARK_GREEN if coord == world.snake_head_coord() else GREEN
            pygame.draw.rect(surface, color, rect)

    food = world.food_coord()
    if food is not None:
        pygame.draw.rect(surface, RED, pygame.Rect(food.x * cell_size, food.y * cell_size, cell_size, cell_size))


def run_demo(
    num_games=1,
    grid_size=20,
    cell_size=30,
    speed_cells=30,
    jitter_steps=10,
    show_overlays=True,
    seed=None,
    delay_between_games=2.0,
):
    """
    Auto-play Snake with the spanning tree solver in a pygame window

    Args:
        num_games: Number of games to play
        grid_size: Side length of the (even sized) world
        cell_size: Size of each cell in pixels
        speed_cells: Movement speed in cells per second
        jitter_steps: Re-plan after this many steps, 0 to follow whole paths
        show_overlays: If True, draw the solver's cost field, walls and path
        seed: Random seed for food and maze growth. If None, every game differs.
        delay_between_games: Seconds to wait between games
    """
    rng = random.Random(seed)
    jitter = JitterKind.jitter_when_indirect(jitter_steps) if jitter_steps else JitterKind.no_jitter()

    pygame.init()
    window = pygame.display.set_mode((grid_size * cell_size, grid_size * cell_size))
    pygame.display.set_caption('Snake Spanning Tree Solver')
    clock = pygame.time.Clock()
    score_font = pygame.font.SysFont('consolas', 20)

    print("\n" + "="*60)
    print("Spanning Tree Solver Demo")
    print("="*60)
    print(f"Grid: {grid_size}x{grid_size} | Speed: {speed_cells} cells/sec | Jitter: {jitter_steps or 'off'}")
    print("Press H to toggle overlays | Press ESC to exit")
    print("="*60 + "\n")

    scores = []
    for game in range(num_games):
        solver = SnakeSpanningTreeSolver(jitter=jitter, rng=rng)
        player = AutoSnakePlayer(SnakeWorld(grid_size, rng=rng), solver)

        print(f"Game {game + 1}/{num_games} starting...")

        while player.state == AutoPlayerState.PLAYING:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    pygame.quit()
                    sys.exit()
                if event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        pygame.quit()
                        sys.exit()
                    elif event.key == pygame.K_h:
                        show_overlays = not show_overlays

            player.step()

            window.fill(BLACK)
            overlays = solver.debug_overlays()
            if show_overlays and overlays.cost_field is not None:
                draw_cost_field(window, overlays.cost_field, cell_size)
            draw_world(window, player.world, cell_size)
            if show_overlays:
                if overlays.wall_grid is not None:
                    draw_wall_grid(window, overlays.wall_grid, cell_size)
                draw_path(window, player.current_path, player.world.snake_head_coord(), cell_size)

            score_text = score_font.render(f'Score: {player.world.score()}', True, RED)
            window.blit(score_text, (10, 10))
            pygame.display.update()
            clock.tick(speed_cells)

        scores.append(player.world.score())
        outcome = "FINISHED" if player.state == AutoPlayerState.FINISHED else "KILLED"
        print(f"Game {game + 1} {outcome} | Score: {player.world.score()} | Steps: {player.steps} "
              f"| Plans: {player.pathfinds}")

        pygame.time.wait(int(delay_between_games * 1000))

    print("\n" + "="*60)
    print("Demo Complete!")
    print(f"Average Score: {sum(scores)/len(scores):.1f}")
    print("="*60 + "\n")

    pygame.quit()


if __name__ == "__main__":
    run_demo(num_games=1, grid_size=20, speed_cells=30, show_overlays=True)
