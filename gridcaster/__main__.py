import sys
import logging

from .grid import load_grid
from .viewer import Viewer


def main():
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    # Optional first argument: path to a JSON world file
    map_path = sys.argv[1] if len(sys.argv) > 1 else None
    viewer = Viewer(grid=load_grid(map_path))
    viewer.run()


if __name__ == "__main__":
    main()
