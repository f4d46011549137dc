"""
CLI Games — build_exe.py
PyInstaller build script to compile the menu into a standalone executable.
Run via python build_exe.py
"""

import os
from pathlib import Path
import PyInstaller.__main__

def build():
    project_root = Path(__file__).parent.resolve()

    # --add-data uses ';' on Windows and ':' everywhere else
    args = [
        str(project_root / "run.py"),
        "--name", "CLIGames",
        "--onefile",
        f"--add-data={project_root / 'data'}{os.pathsep}data",
        "--clean",
        "-y" # automatically overwrite dist/ without asking
    ]

    print(f"Running PyInstaller with args: {args}")
    PyInstaller.__main__.run(args)
    print("\nBuild complete. Check the `dist/` folder for the CLIGames executable")

if __name__ == "__main__":
    build()
