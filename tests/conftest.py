"""Shared test setup."""
import os

# Headless pygame for rendering and input tests
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")
