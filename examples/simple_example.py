#!/usr/bin/env python3
"""
Simplest possible example - render a Sierpinski triangle.
"""

from sierpinski import ChaosGame, RenderConfig
from sierpinski.utils import visualize_canvas

# Square 512x512 canvas, equilateral triangle filling its width
config = RenderConfig.square(512, iterations=500_000, seed=0)
game = ChaosGame.from_config(config)

print("Playing the chaos game...")
canvas = game.run(verbose=True)

visualize_canvas(canvas, title="Sierpinski Triangle")
