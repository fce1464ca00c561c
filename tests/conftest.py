import os
import sys
from pathlib import Path

# pygame needs a video/audio driver even for off-screen surfaces
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")


def pytest_configure():
    project_root = Path(__file__).resolve().parents[1]
    sys.path.insert(0, str(project_root))
