"""
CLI Games — run.py
Main entry point for the CLI Games menu application.
"""

import sys
from pathlib import Path

# Ensure we can import project packages when run from a checkout
project_root = Path(__file__).parent.resolve()
sys.path.insert(0, str(project_root))

from games.data_loader import get_settings
from ui.renderer import Renderer
from ui.states import Engine
from ui.screens import MainMenuState

def main() -> int:
    try:
        settings = get_settings()
        renderer = Renderer(width=settings.app.width, height=settings.app.height, title=settings.app.title)
        engine = Engine(renderer=renderer, initial_state=MainMenuState(settings=settings), settings=settings)
        engine.run()
    except Exception as e:
        print(f"Error running program: {e}", file=sys.stderr)
        return 1
    return 0

if __name__ == "__main__":
    sys.exit(main())
